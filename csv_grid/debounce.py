from typing import Callable, Optional

from PyQt6 import QtCore


class WindowDebouncer(QtCore.QObject):
    """Run ``callback`` once per quiet window.

    The first trigger of a burst opens the window; triggers that arrive
    while it is open are dropped. The callback runs once when the window
    closes, so it always sees the state left by the last trigger.
    """

    def __init__(
        self,
        callback: Callable[[], None],
        wait_ms: int = 50,
        parent: Optional[QtCore.QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._callback = callback
        self._window = QtCore.QTimer(self)
        self._window.setSingleShot(True)
        self._window.setInterval(wait_ms)
        self._window.timeout.connect(self._callback)

    def trigger(self) -> bool:
        if self._window.isActive():
            return False
        self._window.start()
        return True

    def is_active(self) -> bool:
        return self._window.isActive()

    def cancel(self) -> None:
        self._window.stop()
