import argparse
import logging
import sys

from PyQt6.QtWidgets import QApplication

from core.log import setup_logging, shutdown_logging
from core.settings import SettingsManager
from core.sound_manager import SoundManager
from games.tic_tac_toe.ui import TicTacToeGame

CURRENT_VERSION = "1.0"

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Two-player tic-tac-toe overlay.")
    parser.add_argument("--windowed", action="store_true",
                        help="Frameless window that is not kept on top of other windows.")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging verbosity (default: INFO).")
    parser.add_argument("--log-file", default=None,
                        help="Log file path (default: <config dir>/logs/app.log).")
    parser.add_argument("--version", action="version", version=f"%(prog)s {CURRENT_VERSION}")
    return parser.parse_args(argv)


def _log_uncaught(exc_type, exc_value, exc_traceback):
    if issubclass(exc_type, KeyboardInterrupt):
        sys.__excepthook__(exc_type, exc_value, exc_traceback)
        return
    logger.error("Unhandled exception", exc_info=(exc_type, exc_value, exc_traceback))


def main(argv=None):
    args = parse_args(argv)
    setup_logging(args.log_level, args.log_file)
    sys.excepthook = _log_uncaught
    logger.info("Starting tic-tac-toe %s", CURRENT_VERSION)

    app = QApplication(sys.argv[:1])

    sm = SettingsManager()
    snd = SoundManager()
    snd.set_volume(sm.get("volume"))
    snd.muted = bool(sm.get("mute"))

    on_top = bool(sm.get("always_on_top")) and not args.windowed
    window = TicTacToeGame(overlay_mode=on_top)
    window.show()

    code = app.exec()
    logger.info("Exiting with code %d", code)
    shutdown_logging()
    return code


if __name__ == "__main__":
    sys.exit(main())
