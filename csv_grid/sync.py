import logging
from typing import Optional

from PyQt6 import QtCore

from csv_grid import codec
from csv_grid.config import AppConfig
from csv_grid.debounce import WindowDebouncer
from csv_grid.headers import HeaderStateManager
from csv_grid.load_errors import LoadErrorClassifier
from csv_grid.notices import SAVE_NOTICE_TIMEOUT_MS, NoticeCenter
from csv_grid.preferences import PreferenceStore
from csv_grid.store import TextFileStore
from csv_grid.widgets.grid import GridWidget

logger = logging.getLogger(__name__)


class DocumentSyncController(QtCore.QObject):
    """Keeps one grid and one text file in step.

    Only this object reads or writes the file and only it pushes whole
    tables into the grid. Loads are debounced: one decode runs per quiet window and it always
    reads the most recent text handed to :meth:`set_view_data`.
    """

    loading_changed = QtCore.pyqtSignal(bool)
    loaded = QtCore.pyqtSignal()
    header_mode_changed = QtCore.pyqtSignal(bool)
    save_requested = QtCore.pyqtSignal()
    saved = QtCore.pyqtSignal(str)
    dirty_changed = QtCore.pyqtSignal(bool)
    close_requested = QtCore.pyqtSignal()

    def __init__(
        self,
        grid: GridWidget,
        store: TextFileStore,
        preferences: PreferenceStore,
        notices: NoticeCenter,
        config: Optional[AppConfig] = None,
        parent: Optional[QtCore.QObject] = None,
    ) -> None:
        super().__init__(parent)
        config = config or AppConfig()
        self._grid: Optional[GridWidget] = grid
        self._store = store
        self._notices = notices
        self._format = codec.CsvFormat.for_path(store.path)
        self._headers = HeaderStateManager(grid, preferences)
        self._classifier = LoadErrorClassifier(notices, self.teardown)
        self._data = ""
        self._generation = 0
        self._loaded_generation = 0
        self._dirty = False
        self.auto_save = config.auto_save

        self._debouncer = WindowDebouncer(self._load_latest, config.load_debounce_ms, self)
        self._save_timer = QtCore.QTimer(self)
        self._save_timer.setSingleShot(True)
        self._save_timer.setInterval(config.save_delay_ms)
        self._save_timer.timeout.connect(self._on_save_timer)

        grid.mutated.connect(self._on_grid_mutated)

    @property
    def identity(self) -> str:
        return self._store.path

    @property
    def headers(self) -> HeaderStateManager:
        return self._headers

    @property
    def grid(self) -> Optional[GridWidget]:
        return self._grid

    def is_live(self) -> bool:
        return self._grid is not None and not self._grid.is_destroyed()

    def is_loading(self) -> bool:
        return self._loaded_generation != self._generation

    def is_dirty(self) -> bool:
        return self._dirty

    def _set_dirty(self, dirty: bool) -> None:
        if dirty != self._dirty:
            self._dirty = dirty
            self.dirty_changed.emit(dirty)

    # Load

    def open(self) -> None:
        self.set_view_data(self._store.read(), True)

    def set_view_data(self, data: str, clear: bool = False) -> None:
        if not self.is_live():
            logger.debug("Ignoring data for closed document %s", self.identity)
            return
        self._data = data
        self._generation += 1
        if clear:
            self.clear()
        self.loading_changed.emit(True)
        self._debouncer.trigger()

    def _load_latest(self) -> None:
        if not self.is_live():
            return
        if not self.is_loading():
            self.loading_changed.emit(False)
            return
        generation = self._generation
        try:
            self._load(self._data)
        except Exception as exc:
            self.loading_changed.emit(False)
            self._classifier.handle(exc, self.identity)
            return
        self._loaded_generation = generation
        self._set_dirty(False)
        logger.info("Loaded %s", self.identity)
        self.loading_changed.emit(False)
        self.loaded.emit()

    def _load(self, data: str) -> None:
        grid = self._grid
        self._headers.set_identity(self.identity)
        self._headers.reset()
        table = codec.parse(data, self._format)
        grid.load_data(table)
        grid.update_settings(self._headers.spec)
        has_headings = self._headers.load_preference()
        self.header_mode_changed.emit(has_headings)
        self._headers.toggle_headers(has_headings)

    def toggle_headers(self, use_headers: bool) -> None:
        if not self.is_live() or self.is_loading():
            return
        self._headers.toggle_headers(use_headers)

    # Save

    def get_view_data(self) -> str:
        if self.is_live() and not self.is_loading():
            # Filters and sorting never reach the file.
            table = self._headers.merge(self._grid.source_data())
            return codec.unparse(table, self._format)
        return self._data

    def save(self) -> None:
        self._save_timer.stop()
        text = self.get_view_data()
        try:
            self._store.write(text)
        except OSError:
            logger.exception("Failed to save %s", self.identity)
            self._notices.notify(f'"{self._store.name}" couldn\'t be saved.', SAVE_NOTICE_TIMEOUT_MS)
            raise
        self._data = text
        self._set_dirty(False)
        self._notices.notify(f'"{self._store.name}" was saved.', SAVE_NOTICE_TIMEOUT_MS)
        self.saved.emit(self.identity)

    def request_save(self) -> None:
        self.save_requested.emit()
        self._save_timer.start()

    def request_auto_save(self) -> None:
        if self.auto_save:
            self.request_save()

    def request_manual_save(self) -> None:
        if not self.auto_save:
            self.request_save()

    def flush(self) -> None:
        if self._save_timer.isActive():
            self._on_save_timer()

    def _on_save_timer(self) -> None:
        try:
            self.save()
        except OSError:
            # Already reported; stays dirty until a save succeeds.
            self._set_dirty(True)

    def _on_grid_mutated(self, event: str) -> None:
        logger.debug("Grid %s in %s", event, self.identity)
        self._set_dirty(True)
        self.request_auto_save()

    # Lifecycle

    def clear(self) -> None:
        if self.is_live():
            self._grid.clear()
            self._grid.clear_undo()

    def teardown(self) -> None:
        self._debouncer.cancel()
        self._save_timer.stop()
        grid, self._grid = self._grid, None
        if grid is not None:
            grid.mutated.disconnect(self._on_grid_mutated)
            grid.destroy()
        self.close_requested.emit()
