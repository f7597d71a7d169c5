import pytest
from PyQt6 import QtCore

from csv_grid.headers import HasHeader, NO_HEADER
from csv_grid.widgets.grid import GridWidget


@pytest.fixture
def grid(qapp):
    widget = GridWidget()
    widget.load_data([["b", "2"], ["a", "1"], ["c", "3"]])
    return widget


@pytest.fixture
def events(grid):
    received = []
    grid.mutated.connect(received.append)
    return received


def test_load_data_does_not_report_mutation(grid, events):
    grid.load_data([["x"]])
    grid.update_settings(HasHeader(("h",)))
    assert events == []


def test_cell_edit_reports_mutation(grid, events):
    model = grid.source_model
    assert model.setData(model.index(0, 0), "z")
    assert events == ["cell"]
    assert grid.source_data()[0] == ["z", "2"]


def test_row_and_column_edits_report_mutations(grid, events):
    model = grid.source_model
    model.insertRows(1, 1)
    model.removeRows(0, 1)
    model.insertColumns(0, 1)
    model.removeColumns(0, 1)
    assert events == ["create_row", "remove_row", "create_col", "remove_col"]
    assert grid.source_data() == [["", ""], ["a", "1"], ["c", "3"]]


def test_source_data_ignores_filter_and_sort(grid):
    grid.set_filter("a")
    grid.table_view.sortByColumn(0, QtCore.Qt.SortOrder.AscendingOrder)
    assert grid.table_view.model().rowCount() == 1
    assert grid.source_data() == [["b", "2"], ["a", "1"], ["c", "3"]]


def test_ordinal_headers_until_labels_are_set(grid):
    assert grid.column_headers() == ["A", "B"]
    grid.update_settings(HasHeader(("name", "value")))
    assert grid.column_headers() == ["name", "value"]
    grid.update_settings(NO_HEADER)
    assert grid.column_headers() == ["A", "B"]


def test_rename_only_with_labels(grid, events):
    model = grid.source_model
    assert not model.setHeaderData(0, QtCore.Qt.Orientation.Horizontal, "x")
    grid.update_settings(HasHeader(("name", "value")))
    assert model.setHeaderData(0, QtCore.Qt.Orientation.Horizontal, "title")
    assert grid.column_headers() == ["title", "value"]
    assert events == ["rename_col"]


def test_labels_define_width_without_rows(qapp):
    grid = GridWidget()
    grid.update_settings(HasHeader(("a", "b", "c")))
    assert grid.source_model.columnCount() == 3
    grid.source_model.insertRows(0, 1)
    assert grid.source_data() == [["", "", ""]]


def test_undo_and_redo(grid, events):
    model = grid.source_model
    model.setData(model.index(0, 0), "z")
    grid.undo()
    assert grid.source_data()[0] == ["b", "2"]
    grid.redo()
    assert grid.source_data()[0] == ["z", "2"]
    assert events == ["cell", "undo", "redo"]


def test_clear_empties_grid_and_history(grid):
    model = grid.source_model
    model.setData(model.index(0, 0), "z")
    grid.clear()
    grid.clear_undo()
    assert grid.source_data() == []
    assert not grid.can_undo()


def test_destroy_marks_grid_dead(grid, events):
    model = grid.source_model
    grid.destroy()
    assert grid.is_destroyed()
    model.setData(model.index(0, 0), "z")
    assert events == []


def test_destroy_accepts_qt_arguments_and_is_idempotent(grid):
    grid.destroy(True, True)
    grid.destroy()
    assert grid.is_destroyed()


def test_insert_column_on_empty_grid_seeds_a_row(qapp):
    widget = GridWidget()
    model = widget.source_model
    assert model.insertColumns(0, 2)
    assert model.columnCount() == 2
    assert widget.source_data() == [["", ""]]


def test_insert_row_on_empty_grid_has_one_column(qapp):
    widget = GridWidget()
    model = widget.source_model
    assert model.insertRows(0, 2)
    assert model.columnCount() == 1
    assert widget.source_data() == [[""], [""]]


def test_insert_row_after_all_columns_removed(grid):
    model = grid.source_model
    model.removeColumns(0, 2)
    model.insertRows(0, 1)
    assert grid.source_data() == [[""], [""], [""], [""]]
