# setup.py
from setuptools import setup, find_packages

setup(
    name="timepassed",
    version="0.1.0",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "python-dateutil",
        "PySide6",
        "Babel",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-qt",
        ],
    },
    entry_points={
        "gui_scripts": [
            "timepassed=timepassed.main:main",
        ],
    },
)
