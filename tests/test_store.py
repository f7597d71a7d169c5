import pytest

from csv_grid.store import TextFileStore, next_untitled_name


def test_read_keeps_bom_and_line_endings(tmp_path):
    path = tmp_path / "a.csv"
    path.write_bytes("\ufeffa,b\r\n1,2\r\n".encode("utf-8"))
    assert TextFileStore(str(path)).read() == "\ufeffa,b\r\n1,2\r\n"


def test_write_does_not_translate_newlines(tmp_path):
    path = tmp_path / "a.csv"
    store = TextFileStore(str(path))
    store.write('"a"\n"b"\n')
    assert path.read_bytes() == b'"a"\n"b"\n'
    assert store.name == "a.csv"


def test_read_missing_file_raises(tmp_path):
    with pytest.raises(OSError):
        TextFileStore(str(tmp_path / "missing.csv")).read()


@pytest.mark.parametrize(
    "names, expected",
    [
        ([], "Untitled"),
        (["notes.csv"], "Untitled"),
        (["Untitled.csv"], "Untitled 1"),
        (["Untitled.csv", "Untitled 1.csv"], "Untitled 2"),
        (["Untitled 4.csv"], "Untitled 5"),
        (["Untitled.txt"], "Untitled"),
        (["Untitled copy.csv"], "Untitled 1"),
    ],
)
def test_next_untitled_name(names, expected):
    assert next_untitled_name(names) == expected
