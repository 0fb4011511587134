import faulthandler
import logging
import sys

faulthandler.enable()

from PySide6.QtWidgets import QApplication

from palm.constants import APP_NAME, DEFAULT_LOG_LEVEL
from palm.infra.config_store import Config
from palm_qt.window import PalmWindow


def configure_logging(level_name):
    level = getattr(logging, str(level_name or DEFAULT_LOG_LEVEL).upper(), logging.INFO)
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def main():
    config = Config()
    configure_logging(config.get("log_level"))
    app = QApplication(sys.argv)
    app.setApplicationName(APP_NAME)
    window = PalmWindow(config=config)
    window.show()
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
