# src/timepassed/main.py

import logging

from .ui import main as run_ui


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
    logging.info("[TimePassed] Anwendung wird gestartet.")
    run_ui()

if __name__ == "__main__":
    main()
