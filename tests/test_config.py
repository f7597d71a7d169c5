from csv_grid.config import AppConfig


def test_defaults_without_stored_values(settings):
    config = AppConfig.from_settings(settings)
    assert config == AppConfig()
    assert config.auto_save is True
    assert config.load_debounce_ms == 50


def test_saved_values_are_read_back(settings):
    AppConfig(auto_save=False, save_delay_ms=500, new_file_rows=2, new_file_cols=3).save(settings)
    config = AppConfig.from_settings(settings)
    assert config.auto_save is False
    assert config.save_delay_ms == 500
    assert (config.new_file_rows, config.new_file_cols) == (2, 3)


def test_out_of_range_values_are_clamped(settings):
    settings.setValue("new_file_rows", 0)
    settings.setValue("save_delay_ms", -5)
    config = AppConfig.from_settings(settings)
    assert config.new_file_rows == 1
    assert config.save_delay_ms == 0
