import logging
import os
from typing import Optional

from PyQt6 import QtCore, QtGui, QtWidgets

from csv_grid import codec
from csv_grid.config import AppConfig, open_settings
from csv_grid.notices import NoticeCenter
from csv_grid.preferences import PreferenceStore
from csv_grid.store import TextFileStore, next_untitled_name
from csv_grid.widgets.csv_view import CsvView

logger = logging.getLogger(__name__)

CSV_EXTENSIONS = {".csv", ".tsv"}


class MainWindow(QtWidgets.QMainWindow):
    def __init__(self, settings: Optional[QtCore.QSettings] = None) -> None:
        super().__init__()
        self.setWindowTitle("CsvGrid")
        self.resize(1200, 720)
        self._settings = settings or open_settings()
        self._config = AppConfig.from_settings(self._settings)
        self._preferences = PreferenceStore(self._settings)
        self._notices = NoticeCenter(self)

        splitter = QtWidgets.QSplitter(self)
        splitter.setOrientation(QtCore.Qt.Orientation.Horizontal)

        left_panel = QtWidgets.QWidget(self)
        left_layout = QtWidgets.QVBoxLayout(left_panel)
        self._search_input = QtWidgets.QLineEdit(self)
        self._search_input.setPlaceholderText("Filter files...")
        self._file_list = QtWidgets.QListWidget(self)
        self._file_list.itemDoubleClicked.connect(self._open_from_list)
        self._search_input.textChanged.connect(self._filter_file_list)
        left_layout.addWidget(self._search_input)
        left_layout.addWidget(self._file_list)

        self._tabs = QtWidgets.QTabWidget(self)
        self._tabs.setTabsClosable(True)
        self._tabs.tabCloseRequested.connect(self.close_tab)
        self._tabs.currentChanged.connect(self._on_tab_changed)

        splitter.addWidget(left_panel)
        splitter.addWidget(self._tabs)
        splitter.setStretchFactor(1, 1)

        self.setCentralWidget(splitter)
        self._status_bar = self.statusBar()
        self._status_bar.showMessage("Ready")
        self._notices.posted.connect(self._status_bar.showMessage)

        self._open_documents: dict[str, CsvView] = {}
        self._root_path = self._settings.value("last_root_path", QtCore.QDir.currentPath(), type=str)
        self._build_actions()
        self.open_folder(self._root_path)
        self._restore_session_state()

    @property
    def notices(self) -> NoticeCenter:
        return self._notices

    def _open_from_list(self, item: QtWidgets.QListWidgetItem) -> None:
        path = item.data(QtCore.Qt.ItemDataRole.UserRole)
        if isinstance(path, str):
            self.open_file(path)

    def open_file(self, path: str) -> Optional[CsvView]:
        if path in self._open_documents:
            view = self._open_documents[path]
            self._tabs.setCurrentWidget(view)
            return view

        store = TextFileStore(path)
        try:
            text = store.read()
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Could not open %s: %s", path, exc)
            QtWidgets.QMessageBox.warning(self, "Open failed", str(exc))
            return None

        view = CsvView(path, self._preferences, self._notices, self._config, self)
        view.document_changed.connect(self._on_document_changed)
        view.close_requested.connect(self._on_view_close_requested)
        self._open_documents[path] = view
        index = self._tabs.addTab(view, view.display_text())
        self._tabs.setTabToolTip(index, path)
        self._tabs.setCurrentIndex(index)
        view.set_view_data(text, True)
        self._persist_session_state()
        return view

    def _build_actions(self) -> None:
        new_action = QtGui.QAction("New CSV File", self)
        new_action.setShortcut(QtGui.QKeySequence.StandardKey.New)
        new_action.triggered.connect(lambda: self.new_file())

        open_action = QtGui.QAction("Open File...", self)
        open_action.setShortcut(QtGui.QKeySequence.StandardKey.Open)
        open_action.triggered.connect(self.open_file_dialog)

        open_folder_action = QtGui.QAction("Open Folder...", self)
        open_folder_action.setShortcut(QtGui.QKeySequence("Ctrl+Shift+O"))
        open_folder_action.triggered.connect(self.open_folder_dialog)

        save_action = QtGui.QAction("Save", self)
        save_action.setShortcut(QtGui.QKeySequence.StandardKey.Save)
        save_action.triggered.connect(self.save_current)

        rename_action = QtGui.QAction("Rename File...", self)
        rename_action.setShortcut(QtGui.QKeySequence("F2"))
        rename_action.triggered.connect(self.rename_current)

        close_action = QtGui.QAction("Close File", self)
        close_action.setShortcut(QtGui.QKeySequence.StandardKey.Close)
        close_action.triggered.connect(self.close_current_tab)

        auto_save_action = QtGui.QAction("Auto Save New Documents", self)
        auto_save_action.setCheckable(True)
        auto_save_action.setChecked(self._config.auto_save)
        auto_save_action.toggled.connect(self._set_auto_save_default)

        undo_action = QtGui.QAction("Undo", self)
        undo_action.setShortcut(QtGui.QKeySequence.StandardKey.Undo)
        undo_action.triggered.connect(lambda: self._apply_to_current("undo"))

        redo_action = QtGui.QAction("Redo", self)
        redo_action.setShortcut(QtGui.QKeySequence.StandardKey.Redo)
        redo_action.triggered.connect(lambda: self._apply_to_current("redo"))

        grid_actions = [
            ("Insert Row Above", "insert_row_above"),
            ("Insert Row Below", "insert_row_below"),
            ("Delete Row(s)", "delete_rows"),
            None,
            ("Insert Column Left", "insert_col_left"),
            ("Insert Column Right", "insert_col_right"),
            ("Delete Column(s)", "delete_cols"),
        ]

        file_menu = self.menuBar().addMenu("File")
        file_menu.addAction(new_action)
        file_menu.addAction(open_action)
        file_menu.addAction(open_folder_action)
        file_menu.addSeparator()
        file_menu.addAction(save_action)
        file_menu.addAction(auto_save_action)
        file_menu.addSeparator()
        file_menu.addAction(rename_action)
        file_menu.addAction(close_action)

        edit_menu = self.menuBar().addMenu("Edit")
        edit_menu.addAction(undo_action)
        edit_menu.addAction(redo_action)
        edit_menu.addSeparator()
        for entry in grid_actions:
            if entry is None:
                edit_menu.addSeparator()
                continue
            label, method_name = entry
            action = edit_menu.addAction(label)
            action.triggered.connect(lambda _, name=method_name: self._apply_to_current(name))

    def _apply_to_current(self, method_name: str) -> None:
        view = self._current_view()
        grid = view.grid if view else None
        if grid is not None and hasattr(grid, method_name):
            getattr(grid, method_name)()

    def _current_view(self) -> Optional[CsvView]:
        widget = self._tabs.currentWidget()
        if isinstance(widget, CsvView):
            return widget
        return None

    def _set_auto_save_default(self, checked: bool) -> None:
        self._config.auto_save = checked
        self._config.save(self._settings)

    def new_file(self, folder: Optional[str] = None) -> Optional[str]:
        folder = folder or self._root_path
        try:
            names = os.listdir(folder)
        except OSError as exc:
            QtWidgets.QMessageBox.warning(self, "New file failed", str(exc))
            return None
        file_name = next_untitled_name(names)
        path = os.path.join(folder, f"{file_name}.csv")
        try:
            TextFileStore(path).write(
                codec.create_empty(self._config.new_file_rows, self._config.new_file_cols)
            )
        except OSError as exc:
            logger.exception("Could not create %s", path)
            QtWidgets.QMessageBox.warning(self, "New file failed", str(exc))
            return None
        self._notices.notify(f'The file "{file_name}" has been created in the folder "{folder}".')
        if os.path.abspath(folder) == os.path.abspath(self._root_path):
            self._populate_file_list(self._root_path)
        return path

    def open_file_dialog(self) -> None:
        path, _ = QtWidgets.QFileDialog.getOpenFileName(
            self,
            "Open CSV File",
            self._root_path,
            "CSV Files (*.csv *.tsv)",
        )
        if path:
            self.open_file(path)

    def open_folder_dialog(self) -> None:
        path = QtWidgets.QFileDialog.getExistingDirectory(self, "Open Folder", self._root_path)
        if path:
            self.open_folder(path)

    def open_folder(self, path: str) -> None:
        self._root_path = path
        self._settings.setValue("last_root_path", path)
        self._populate_file_list(path)

    def save_current(self) -> None:
        view = self._current_view()
        if not view:
            return
        try:
            view.save()
        except OSError as exc:
            QtWidgets.QMessageBox.warning(self, "Save failed", str(exc))

    def rename_current(self) -> None:
        view = self._current_view()
        if not view:
            return
        current_path = view.path
        directory = os.path.dirname(current_path)
        base = os.path.basename(current_path)
        new_name, ok = QtWidgets.QInputDialog.getText(
            self, "Rename File", "New file name:", text=base
        )
        if not ok or not new_name or new_name == base:
            return
        new_path = os.path.join(directory, new_name)
        if os.path.exists(new_path):
            QtWidgets.QMessageBox.warning(self, "Rename failed", "File already exists.")
            return
        view.controller.flush()
        try:
            os.rename(current_path, new_path)
        except OSError as exc:
            QtWidgets.QMessageBox.warning(self, "Rename failed", str(exc))
            return
        self._preferences.rename(current_path, new_path)
        # The document identity is fixed per session, so reopen under the new path.
        self._close_view(view)
        self.open_file(new_path)
        self._populate_file_list(self._root_path)
        self._notices.notify(f"Renamed to: {new_name}")

    def close_current_tab(self) -> None:
        index = self._tabs.currentIndex()
        if index >= 0:
            self.close_tab(index)

    def close_tab(self, index: int) -> None:
        widget = self._tabs.widget(index)
        if not isinstance(widget, CsvView):
            return
        if widget.controller.auto_save:
            widget.controller.flush()
        elif widget.is_dirty() and not self._confirm_discard(widget):
            return
        self._close_view(widget)

    def _close_view(self, view: CsvView) -> None:
        self._open_documents.pop(view.path, None)
        index = self._tabs.indexOf(view)
        if index >= 0:
            self._tabs.removeTab(index)
        view.deleteLater()
        if self._tabs.count() == 0:
            self.setWindowTitle("CsvGrid")
        self._persist_session_state()

    def _on_view_close_requested(self, path: str) -> None:
        view = self._open_documents.get(path)
        if view is not None:
            self._close_view(view)

    def _on_document_changed(self, path: str) -> None:
        view = self._open_documents.get(path)
        if view is None:
            return
        index = self._tabs.indexOf(view)
        label = view.display_text()
        if view.is_dirty():
            label = f"*{label}"
        if index >= 0:
            self._tabs.setTabText(index, label)
        if view is self._current_view():
            self.setWindowTitle(f"{label} - CsvGrid")

    def _on_tab_changed(self, index: int) -> None:
        widget = self._tabs.widget(index)
        if isinstance(widget, CsvView):
            self._on_document_changed(widget.path)
        else:
            self.setWindowTitle("CsvGrid")

    def _confirm_discard(self, view: CsvView) -> bool:
        result = QtWidgets.QMessageBox.question(
            self,
            "Unsaved Changes",
            f"Save changes to {os.path.basename(view.path)}?",
            QtWidgets.QMessageBox.StandardButton.Save
            | QtWidgets.QMessageBox.StandardButton.Discard
            | QtWidgets.QMessageBox.StandardButton.Cancel,
        )
        if result == QtWidgets.QMessageBox.StandardButton.Save:
            try:
                view.save()
            except OSError:
                return False
            return True
        return result == QtWidgets.QMessageBox.StandardButton.Discard

    def closeEvent(self, event: QtGui.QCloseEvent) -> None:
        for view in list(self._open_documents.values()):
            if view.controller.auto_save:
                view.controller.flush()
            elif view.is_dirty() and not self._confirm_discard(view):
                event.ignore()
                return
        self._persist_session_state()
        event.accept()

    def _populate_file_list(self, root_path: str) -> None:
        self._file_list.clear()
        entries: list[tuple[str, str]] = []
        for root, _, files in os.walk(root_path):
            for name in files:
                _, ext = os.path.splitext(name)
                if ext.lower() in CSV_EXTENSIONS:
                    entries.append((name, os.path.join(root, name)))
        for name, full_path in sorted(entries, key=lambda item: item[0].lower()):
            item = QtWidgets.QListWidgetItem(name)
            item.setData(QtCore.Qt.ItemDataRole.UserRole, full_path)
            item.setToolTip(full_path)
            self._file_list.addItem(item)
        self._filter_file_list(self._search_input.text())

    def _filter_file_list(self, text: str) -> None:
        text = text.strip().lower()
        for i in range(self._file_list.count()):
            item = self._file_list.item(i)
            item.setHidden(bool(text) and text not in item.text().lower())

    def _persist_session_state(self) -> None:
        self._settings.setValue("last_root_path", self._root_path)
        self._settings.setValue("last_open_files", list(self._open_documents.keys()))
        view = self._current_view()
        self._settings.setValue("last_current_file", view.path if view else "")

    def _restore_session_state(self) -> None:
        last_open = self._settings.value("last_open_files", [], type=list)
        last_current = self._settings.value("last_current_file", "", type=str)
        for path in last_open:
            if isinstance(path, str) and os.path.exists(path):
                self.open_file(path)
        if last_current and last_current in self._open_documents:
            self._tabs.setCurrentWidget(self._open_documents[last_current])
