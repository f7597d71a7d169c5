from typing import List, Optional

from PyQt6 import QtCore, QtGui, QtWidgets

from csv_grid.codec import Table
from csv_grid.headers import HasHeader, HeaderSpec, NO_HEADER
from csv_grid.models import GridModel


class _Snapshot:
    __slots__ = ("rows", "labels")

    def __init__(self, rows: Table, labels: Optional[List[str]]) -> None:
        self.rows = rows
        self.labels = labels


class GridWidget(QtWidgets.QWidget):
    """Editable grid over a :class:`GridModel`.

    Filtering and sorting only affect the view; ``source_data`` always
    returns the unfiltered rows in load order.
    """

    mutated = QtCore.pyqtSignal(str)

    def __init__(self, parent: Optional[QtWidgets.QWidget] = None) -> None:
        super().__init__(parent)
        self._destroyed = False
        self._history: List[_Snapshot] = []
        self._history_index = -1
        self._ignore_history = False

        self._model = GridModel(self)
        self._proxy = QtCore.QSortFilterProxyModel(self)
        self._proxy.setSourceModel(self._model)
        self._proxy.setFilterKeyColumn(-1)
        self._proxy.setFilterCaseSensitivity(QtCore.Qt.CaseSensitivity.CaseInsensitive)

        self._filter_input = QtWidgets.QLineEdit(self)
        self._filter_input.setPlaceholderText("Filter rows...")
        self._filter_input.setClearButtonEnabled(True)
        self._filter_input.textChanged.connect(self._proxy.setFilterFixedString)

        self._table_view = QtWidgets.QTableView(self)
        self._table_view.setModel(self._proxy)
        self._table_view.setAlternatingRowColors(True)
        self._table_view.setSortingEnabled(True)
        self._table_view.setSelectionBehavior(QtWidgets.QAbstractItemView.SelectionBehavior.SelectItems)
        self._table_view.setSelectionMode(QtWidgets.QAbstractItemView.SelectionMode.ExtendedSelection)
        self._table_view.horizontalHeader().setStretchLastSection(True)
        self._table_view.horizontalHeader().setSortIndicatorShown(True)
        self._table_view.verticalHeader().setVisible(True)
        self._table_view.installEventFilter(self)
        self._table_view.setContextMenuPolicy(QtCore.Qt.ContextMenuPolicy.CustomContextMenu)
        self._table_view.customContextMenuRequested.connect(self._show_context_menu)
        self._table_view.horizontalHeader().setContextMenuPolicy(
            QtCore.Qt.ContextMenuPolicy.CustomContextMenu
        )
        self._table_view.horizontalHeader().customContextMenuRequested.connect(
            self._show_col_header_menu
        )

        layout = QtWidgets.QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self._filter_input)
        layout.addWidget(self._table_view)

        self._model.mutated.connect(self._on_model_mutated)
        self._reset_history()

    @property
    def source_model(self) -> GridModel:
        return self._model

    @property
    def table_view(self) -> QtWidgets.QTableView:
        return self._table_view

    # Grid contract used by the sync controller and the header manager.

    def load_data(self, table: Table) -> None:
        self._model.load_data(table)
        self._reset_history()

    def source_data(self) -> Table:
        return self._model.source_data()

    def column_headers(self) -> List[str]:
        return self._model.column_headers()

    def update_settings(self, spec: HeaderSpec) -> None:
        self._model.update_settings(spec)
        self._reset_history()

    def clear(self) -> None:
        self._model.update_settings(NO_HEADER)
        self._model.load_data([])

    def clear_undo(self) -> None:
        self._reset_history()

    def is_destroyed(self) -> bool:
        return self._destroyed

    def destroy(self, destroyWindow: bool = True, destroySubWindows: bool = True) -> None:
        """Tear the grid down for good.

        Replaces ``QWidget.destroy`` for Python callers; the native window
        goes away with the widget once ``deleteLater`` runs.
        """
        if self._destroyed:
            return
        self._destroyed = True
        self._model.mutated.disconnect(self._on_model_mutated)
        self.setParent(None)
        self.deleteLater()

    def set_filter(self, text: str) -> None:
        self._filter_input.setText(text)

    # History

    def _snapshot(self) -> _Snapshot:
        labels = self._model.column_headers() if self._model.has_labels() else None
        return _Snapshot(self._model.source_data(), labels)

    def _reset_history(self) -> None:
        self._history = [self._snapshot()]
        self._history_index = 0

    def _push_history(self) -> None:
        snapshot = self._snapshot()
        current = self._history[self._history_index]
        if current.rows == snapshot.rows and current.labels == snapshot.labels:
            return
        del self._history[self._history_index + 1 :]
        self._history.append(snapshot)
        self._history_index = len(self._history) - 1

    def can_undo(self) -> bool:
        return self._history_index > 0

    def can_redo(self) -> bool:
        return self._history_index < len(self._history) - 1

    def undo(self) -> None:
        if not self.can_undo():
            return
        self._history_index -= 1
        self._restore_history(self._history[self._history_index], "undo")

    def redo(self) -> None:
        if not self.can_redo():
            return
        self._history_index += 1
        self._restore_history(self._history[self._history_index], "redo")

    def _restore_history(self, snapshot: _Snapshot, event: str) -> None:
        self._ignore_history = True
        spec = HasHeader(tuple(snapshot.labels)) if snapshot.labels is not None else NO_HEADER
        self._model.update_settings(spec)
        self._model.load_data([list(row) for row in snapshot.rows])
        self._ignore_history = False
        self.mutated.emit(event)

    def _on_model_mutated(self, event: str) -> None:
        if not self._ignore_history:
            self._push_history()
        self.mutated.emit(event)

    # Editing

    def _selected_source_indexes(self) -> List[QtCore.QModelIndex]:
        selection = self._table_view.selectionModel().selectedIndexes()
        return [self._proxy.mapToSource(index) for index in selection]

    def insert_row_above(self) -> None:
        rows = [index.row() for index in self._selected_source_indexes()]
        self._model.insertRows(min(rows, default=0), 1)

    def insert_row_below(self) -> None:
        rows = [index.row() for index in self._selected_source_indexes()]
        self._model.insertRows(max(rows, default=self._model.rowCount() - 1) + 1, 1)

    def delete_rows(self) -> None:
        rows = sorted({index.row() for index in self._selected_source_indexes()})
        for row in reversed(rows):
            self._model.removeRows(row, 1)

    def insert_col_left(self) -> None:
        cols = [index.column() for index in self._selected_source_indexes()]
        self._model.insertColumns(min(cols, default=0), 1)

    def insert_col_right(self) -> None:
        cols = [index.column() for index in self._selected_source_indexes()]
        self._model.insertColumns(max(cols, default=self._model.columnCount() - 1) + 1, 1)

    def delete_cols(self) -> None:
        cols = sorted({index.column() for index in self._selected_source_indexes()})
        for col in reversed(cols):
            self._model.removeColumns(col, 1)

    def _clear_selected_cells(self) -> None:
        targets = self._selected_source_indexes()
        if not targets:
            current = self._table_view.selectionModel().currentIndex()
            targets = [self._proxy.mapToSource(current)]
        for index in targets:
            if index.isValid() and self._model.data(index):
                self._model.setData(index, "")

    def _rename_column_at(self, col: int) -> None:
        if col < 0 or not self._model.has_labels():
            return
        current = self._model.headerData(col, QtCore.Qt.Orientation.Horizontal)
        new_name, ok = QtWidgets.QInputDialog.getText(
            self, "Rename Column", "Column name:", text=current or ""
        )
        if ok:
            self._model.setHeaderData(col, QtCore.Qt.Orientation.Horizontal, new_name)

    def _show_context_menu(self, position: QtCore.QPoint) -> None:
        menu = QtWidgets.QMenu(self)

        insert_row_above = menu.addAction("Insert Row Above")
        insert_row_below = menu.addAction("Insert Row Below")
        delete_rows = menu.addAction("Delete Row(s)")
        menu.addSeparator()
        insert_col_left = menu.addAction("Insert Column Left")
        insert_col_right = menu.addAction("Insert Column Right")
        delete_cols = menu.addAction("Delete Column(s)")
        menu.addSeparator()
        undo = menu.addAction("Undo")
        redo = menu.addAction("Redo")

        insert_row_above.triggered.connect(self.insert_row_above)
        insert_row_below.triggered.connect(self.insert_row_below)
        delete_rows.triggered.connect(self.delete_rows)
        insert_col_left.triggered.connect(self.insert_col_left)
        insert_col_right.triggered.connect(self.insert_col_right)
        delete_cols.triggered.connect(self.delete_cols)
        undo.triggered.connect(self.undo)
        redo.triggered.connect(self.redo)

        has_selection = bool(self._table_view.selectionModel().selectedIndexes())
        delete_rows.setEnabled(has_selection)
        delete_cols.setEnabled(has_selection)
        undo.setEnabled(self.can_undo())
        redo.setEnabled(self.can_redo())

        menu.exec(self._table_view.viewport().mapToGlobal(position))

    def _show_col_header_menu(self, position: QtCore.QPoint) -> None:
        col = self._table_view.horizontalHeader().logicalIndexAt(position)
        menu = QtWidgets.QMenu(self)
        insert_left = menu.addAction("Insert Column Left")
        insert_right = menu.addAction("Insert Column Right")
        rename_col = menu.addAction("Rename Column")
        delete_col = menu.addAction("Delete Column")
        insert_left.triggered.connect(lambda: self._model.insertColumns(max(col, 0), 1))
        insert_right.triggered.connect(lambda: self._model.insertColumns(col + 1, 1))
        rename_col.triggered.connect(lambda: self._rename_column_at(col))
        delete_col.triggered.connect(lambda: self._model.removeColumns(col, 1))
        rename_col.setEnabled(col >= 0 and self._model.has_labels())
        delete_col.setEnabled(col >= 0)
        menu.exec(self._table_view.horizontalHeader().mapToGlobal(position))

    def eventFilter(self, obj: QtCore.QObject, event: QtCore.QEvent) -> bool:
        if obj is self._table_view and event.type() == QtCore.QEvent.Type.KeyPress:
            if event.matches(QtGui.QKeySequence.StandardKey.Undo):
                self.undo()
                return True
            if event.matches(QtGui.QKeySequence.StandardKey.Redo):
                self.redo()
                return True
            if event.key() in (QtCore.Qt.Key.Key_Delete, QtCore.Qt.Key.Key_Backspace):
                self._clear_selected_cells()
                return True
        return super().eventFilter(obj, event)
