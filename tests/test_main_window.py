import pytest
from PyQt6.QtTest import QTest

from csv_grid.codec import create_empty
from csv_grid.windows.main_window import MainWindow


@pytest.fixture
def window(qapp, settings, tmp_path):
    settings.setValue("last_root_path", str(tmp_path))
    win = MainWindow(settings)
    yield win
    win.close()
    win.deleteLater()


def test_new_file_picks_next_untitled_name(window, tmp_path):
    first = window.new_file()
    second = window.new_file()
    assert first == str(tmp_path / "Untitled.csv")
    assert second == str(tmp_path / "Untitled 1.csv")
    assert (tmp_path / "Untitled.csv").read_text(encoding="utf-8") == create_empty(4, 4)
    assert window.notices.history()[0][0] == f'The file "Untitled" has been created in the folder "{tmp_path}".'


def test_open_file_loads_grid(window, tmp_path):
    path = tmp_path / "people.csv"
    path.write_text('"name","age"\n"ann","3"\n', encoding="utf-8")
    view = window.open_file(str(path))
    QTest.qWait(200)
    assert view.grid.source_data() == [["name", "age"], ["ann", "3"]]
    assert window.open_file(str(path)) is view


def test_malformed_file_tab_is_closed(window, tmp_path):
    path = tmp_path / "broken.csv"
    path.write_text('"a"x,b\n', encoding="utf-8")
    window.open_file(str(path))
    QTest.qWait(200)
    assert window._tabs.count() == 0
    assert window.statusBar().currentMessage() == window.notices.history()[-1][0]
