from typing import List, Optional

from PyQt6 import QtCore

from csv_grid.codec import Table
from csv_grid.headers import HasHeader, HeaderSpec, ordinal_label


class GridModel(QtCore.QAbstractTableModel):
    """Table model behind the grid.

    ``mutated`` fires for user edits only, never for ``load_data``, with the
    name of the edit as payload.
    """

    mutated = QtCore.pyqtSignal(str)

    def __init__(self, parent: Optional[QtCore.QObject] = None) -> None:
        super().__init__(parent)
        self._rows: Table = []
        self._labels: Optional[List[str]] = None

    def rowCount(self, parent: QtCore.QModelIndex = QtCore.QModelIndex()) -> int:
        if parent.isValid():
            return 0
        return len(self._rows)

    def columnCount(self, parent: QtCore.QModelIndex = QtCore.QModelIndex()) -> int:
        if parent.isValid():
            return 0
        if self._labels is not None:
            return len(self._labels)
        if self._rows:
            return len(self._rows[0])
        return 0

    def data(self, index: QtCore.QModelIndex, role: int = QtCore.Qt.ItemDataRole.DisplayRole):
        if not index.isValid():
            return None
        if role in (QtCore.Qt.ItemDataRole.DisplayRole, QtCore.Qt.ItemDataRole.EditRole):
            try:
                return self._rows[index.row()][index.column()]
            except IndexError:
                return ""
        return None

    def setData(self, index: QtCore.QModelIndex, value, role: int = QtCore.Qt.ItemDataRole.EditRole) -> bool:
        if not index.isValid() or role != QtCore.Qt.ItemDataRole.EditRole:
            return False
        row = self._rows[index.row()]
        while index.column() >= len(row):
            row.append("")
        row[index.column()] = "" if value is None else str(value)
        self.dataChanged.emit(index, index, [role])
        self.mutated.emit("cell")
        return True

    def flags(self, index: QtCore.QModelIndex) -> QtCore.Qt.ItemFlag:
        if not index.isValid():
            return QtCore.Qt.ItemFlag.NoItemFlags
        return (
            QtCore.Qt.ItemFlag.ItemIsSelectable
            | QtCore.Qt.ItemFlag.ItemIsEnabled
            | QtCore.Qt.ItemFlag.ItemIsEditable
        )

    def headerData(self, section: int, orientation: QtCore.Qt.Orientation, role: int = QtCore.Qt.ItemDataRole.DisplayRole):
        if role != QtCore.Qt.ItemDataRole.DisplayRole:
            return None
        if orientation == QtCore.Qt.Orientation.Horizontal:
            if self._labels is not None and section < len(self._labels):
                return self._labels[section]
            return ordinal_label(section)
        return str(section + 1)

    def setHeaderData(
        self,
        section: int,
        orientation: QtCore.Qt.Orientation,
        value,
        role: int = QtCore.Qt.ItemDataRole.EditRole,
    ) -> bool:
        # Ordinal labels are not editable.
        if self._labels is None:
            return False
        if orientation != QtCore.Qt.Orientation.Horizontal:
            return False
        if role != QtCore.Qt.ItemDataRole.EditRole:
            return False
        if section < 0 or section >= len(self._labels):
            return False
        self._labels[section] = str(value)
        self.headerDataChanged.emit(orientation, section, section)
        self.mutated.emit("rename_col")
        return True

    def has_labels(self) -> bool:
        return self._labels is not None

    def load_data(self, table: Table) -> None:
        self.beginResetModel()
        self._rows = [list(row) for row in table]
        self.endResetModel()

    def source_data(self) -> Table:
        return [list(row) for row in self._rows]

    def column_headers(self) -> List[str]:
        if self._labels is not None:
            return list(self._labels)
        return [ordinal_label(col) for col in range(self.columnCount())]

    def update_settings(self, spec: HeaderSpec) -> None:
        self.beginResetModel()
        self._labels = list(spec.labels) if isinstance(spec, HasHeader) else None
        self.endResetModel()

    def insertRows(
        self, row: int, count: int, parent: QtCore.QModelIndex = QtCore.QModelIndex()
    ) -> bool:
        if parent.isValid() or count <= 0:
            return False
        row = max(0, min(row, len(self._rows)))
        width = self.columnCount()
        if width == 0:
            # A zero-width row would be written as a blank line and lost.
            self.beginResetModel()
            if self._labels is not None:
                self._labels.append("")
            for existing in self._rows:
                existing.append("")
            for _ in range(count):
                self._rows.insert(row, [""])
            self.endResetModel()
            self.mutated.emit("create_row")
            return True
        self.beginInsertRows(parent, row, row + count - 1)
        for _ in range(count):
            self._rows.insert(row, [""] * width)
        self.endInsertRows()
        self.mutated.emit("create_row")
        return True

    def removeRows(
        self, row: int, count: int, parent: QtCore.QModelIndex = QtCore.QModelIndex()
    ) -> bool:
        if parent.isValid() or count <= 0:
            return False
        if row < 0 or row >= len(self._rows):
            return False
        end_row = min(row + count - 1, len(self._rows) - 1)
        self.beginRemoveRows(parent, row, end_row)
        del self._rows[row : end_row + 1]
        self.endRemoveRows()
        self.mutated.emit("remove_row")
        return True

    def insertColumns(
        self, column: int, count: int, parent: QtCore.QModelIndex = QtCore.QModelIndex()
    ) -> bool:
        if parent.isValid() or count <= 0:
            return False
        column = max(0, min(column, self.columnCount()))
        if self._labels is None and not self._rows:
            # Without labels the width comes from the rows, so seed one.
            self.beginResetModel()
            self._rows = [[""] * count]
            self.endResetModel()
            self.mutated.emit("create_col")
            return True
        self.beginInsertColumns(parent, column, column + count - 1)
        if self._labels is not None:
            for offset in range(count):
                self._labels.insert(column + offset, "")
        for row in self._rows:
            for offset in range(count):
                row.insert(column + offset, "")
        self.endInsertColumns()
        self.mutated.emit("create_col")
        return True

    def removeColumns(
        self, column: int, count: int, parent: QtCore.QModelIndex = QtCore.QModelIndex()
    ) -> bool:
        if parent.isValid() or count <= 0:
            return False
        if column < 0 or column >= self.columnCount():
            return False
        end_col = min(column + count - 1, self.columnCount() - 1)
        self.beginRemoveColumns(parent, column, end_col)
        if self._labels is not None:
            del self._labels[column : end_col + 1]
        for row in self._rows:
            del row[column : end_col + 1]
        self.endRemoveColumns()
        self.mutated.emit("remove_col")
        return True
