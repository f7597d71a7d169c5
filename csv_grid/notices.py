import logging
from typing import List, Optional, Tuple

from PyQt6 import QtCore

logger = logging.getLogger(__name__)

SAVE_NOTICE_TIMEOUT_MS = 1000
ERROR_NOTICE_TIMEOUT_MS = 5000
INFO_NOTICE_TIMEOUT_MS = 3000


class NoticeCenter(QtCore.QObject):
    """Fire-and-forget user messages; the main window shows them."""

    posted = QtCore.pyqtSignal(str, int)

    def __init__(self, parent: Optional[QtCore.QObject] = None, history_size: int = 50) -> None:
        super().__init__(parent)
        self._history: List[Tuple[str, int]] = []
        self._history_size = history_size

    def notify(self, message: str, timeout_ms: int = INFO_NOTICE_TIMEOUT_MS) -> None:
        logger.info("Notice: %s", message)
        self._history.append((message, timeout_ms))
        del self._history[: -self._history_size]
        self.posted.emit(message, timeout_ms)

    def history(self) -> List[Tuple[str, int]]:
        return list(self._history)
