import os
from typing import Optional

from PyQt6 import QtCore, QtWidgets

from csv_grid.config import AppConfig
from csv_grid.notices import NoticeCenter
from csv_grid.preferences import PreferenceStore
from csv_grid.store import TextFileStore
from csv_grid.sync import DocumentSyncController
from csv_grid.widgets.grid import GridWidget


class CsvView(QtWidgets.QWidget):
    """One open CSV document: controls bar, loading bar and grid."""

    close_requested = QtCore.pyqtSignal(str)
    document_changed = QtCore.pyqtSignal(str)

    def __init__(
        self,
        path: str,
        preferences: PreferenceStore,
        notices: NoticeCenter,
        config: Optional[AppConfig] = None,
        parent: Optional[QtWidgets.QWidget] = None,
    ) -> None:
        super().__init__(parent)
        config = config or AppConfig()
        self._path = path

        self._header_toggle = QtWidgets.QCheckBox("File Includes Headers", self)
        self._auto_save_toggle = QtWidgets.QCheckBox("Auto Save", self)
        self._auto_save_toggle.setChecked(config.auto_save)
        self._save_button = QtWidgets.QPushButton("Save", self)
        self._save_button.setEnabled(not config.auto_save)

        controls = QtWidgets.QHBoxLayout()
        controls.setContentsMargins(0, 0, 0, 0)
        controls.addWidget(self._header_toggle)
        controls.addWidget(self._auto_save_toggle)
        controls.addWidget(self._save_button)
        controls.addStretch(1)

        self._loading_bar = QtWidgets.QProgressBar(self)
        self._loading_bar.setRange(0, 0)
        self._loading_bar.setFormat("Loading CSV...")
        self._loading_bar.setTextVisible(True)
        self._loading_bar.hide()

        grid = GridWidget(self)

        layout = QtWidgets.QVBoxLayout(self)
        layout.addLayout(controls)
        layout.addWidget(self._loading_bar)
        layout.addWidget(grid)

        self._controller = DocumentSyncController(
            grid, TextFileStore(path), preferences, notices, config, self
        )
        self._controller.loading_changed.connect(self._loading_bar.setVisible)
        self._controller.header_mode_changed.connect(self._reflect_header_mode)
        self._controller.dirty_changed.connect(lambda _: self.document_changed.emit(self._path))
        self._controller.saved.connect(self.document_changed.emit)
        self._controller.close_requested.connect(lambda: self.close_requested.emit(self._path))

        self._header_toggle.toggled.connect(self._controller.toggle_headers)
        self._auto_save_toggle.toggled.connect(self._on_auto_save_toggled)
        self._save_button.clicked.connect(self._controller.request_manual_save)

    @property
    def path(self) -> str:
        return self._path

    @property
    def controller(self) -> DocumentSyncController:
        return self._controller

    @property
    def grid(self) -> Optional[GridWidget]:
        return self._controller.grid

    def display_text(self) -> str:
        if self._path:
            return os.path.splitext(os.path.basename(self._path))[0]
        return "csv (no file)"

    def is_dirty(self) -> bool:
        return self._controller.is_dirty()

    # Host contract

    def set_view_data(self, data: str, clear: bool = False) -> None:
        self._controller.set_view_data(data, clear)

    def get_view_data(self) -> str:
        return self._controller.get_view_data()

    def clear(self) -> None:
        self._controller.clear()

    def save(self) -> None:
        self._controller.save()

    def _reflect_header_mode(self, has_headers: bool) -> None:
        self._header_toggle.blockSignals(True)
        self._header_toggle.setChecked(has_headers)
        self._header_toggle.blockSignals(False)

    def _on_auto_save_toggled(self, checked: bool) -> None:
        self._controller.auto_save = checked
        self._save_button.setEnabled(not checked)
        if checked and self._controller.is_dirty():
            self._controller.request_auto_save()
