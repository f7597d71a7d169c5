import logging

import pytest

from csv_grid.app import _log_level


def test_log_level_defaults_to_info(monkeypatch):
    monkeypatch.delenv("CSV_GRID_LOG_LEVEL", raising=False)
    assert _log_level() == logging.INFO


@pytest.mark.parametrize("value, expected", [("debug", logging.DEBUG), (" WARNING ", logging.WARNING)])
def test_log_level_from_environment(monkeypatch, value, expected):
    monkeypatch.setenv("CSV_GRID_LOG_LEVEL", value)
    assert _log_level() == expected


@pytest.mark.parametrize("value", ["verbose", ""])
def test_unknown_log_level_falls_back_to_info(monkeypatch, value):
    monkeypatch.setenv("CSV_GRID_LOG_LEVEL", value)
    assert _log_level() == logging.INFO
