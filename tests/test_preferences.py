from csv_grid.preferences import PreferenceStore


def test_unknown_document_returns_default(preferences):
    assert preferences.load_value("/never/seen.csv", "hasHeadings", False) is False
    assert preferences.load_value("/never/seen.csv", "hasHeadings", True) is True


def test_values_are_keyed_by_identity(preferences):
    preferences.save_value("/a.csv", "hasHeadings", True)
    assert preferences.load_value("/a.csv", "hasHeadings", False) is True
    assert preferences.load_value("/b.csv", "hasHeadings", False) is False


def test_values_survive_a_new_settings_object(settings):
    PreferenceStore(settings).save_value("/data/x y.csv", "hasHeadings", True)
    reopened = type(settings)(settings.fileName(), settings.format())
    assert PreferenceStore(reopened).load_value("/data/x y.csv", "hasHeadings", False) is True


def test_path_separators_do_not_collide(preferences):
    preferences.save_value("a/b.csv", "hasHeadings", True)
    assert preferences.load_value("a_b.csv", "hasHeadings", False) is False
    assert preferences.load_value("a//b.csv", "hasHeadings", False) is False


def test_rename_moves_values(preferences):
    preferences.save_value("/old.csv", "hasHeadings", True)
    preferences.rename("/old.csv", "/new.csv")
    assert preferences.load_value("/new.csv", "hasHeadings", False) is True
    assert preferences.load_value("/old.csv", "hasHeadings", False) is False


def test_remove_forgets_document(preferences):
    preferences.save_value("/gone.csv", "hasHeadings", True)
    preferences.remove("/gone.csv")
    assert preferences.load_value("/gone.csv", "hasHeadings", False) is False
