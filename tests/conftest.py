import os

# Run Qt headless when no display is available (e.g. CI).
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
