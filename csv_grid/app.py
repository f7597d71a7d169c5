import faulthandler
import logging
import os
import signal
import sys
import traceback

from PyQt6 import QtCore, QtWidgets

from csv_grid.windows.main_window import MainWindow

logger = logging.getLogger(__name__)


def _log_level() -> int:
    name = os.environ.get("CSV_GRID_LOG_LEVEL", "INFO").strip().upper()
    level = logging.getLevelName(name)
    if isinstance(level, int):
        return level
    return logging.INFO


def main() -> None:
    logging.basicConfig(
        level=_log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    def _log_unhandled(exc_type, exc_value, exc_traceback) -> None:
        logger.error("Unhandled exception", exc_info=(exc_type, exc_value, exc_traceback))
        traceback.print_exception(exc_type, exc_value, exc_traceback)

    sys.excepthook = _log_unhandled
    faulthandler.enable()

    def _log_sigterm(signum, frame) -> None:
        logger.warning("Received signal %s, dumping stack.", signum)
        faulthandler.dump_traceback(file=sys.stderr, all_threads=True)

    signal.signal(signal.SIGTERM, _log_sigterm)
    app = QtWidgets.QApplication(sys.argv)
    window = MainWindow()
    for path in sys.argv[1:]:
        if os.path.isfile(path):
            window.open_file(os.path.abspath(path))
    window.show()
    window.raise_()
    window.activateWindow()
    QtCore.QTimer.singleShot(0, window.activateWindow)
    app.exec()


if __name__ == "__main__":
    main()
