"""Shared test configuration and fixtures."""

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PyQt6 import QtCore, QtWidgets

from csv_grid.notices import NoticeCenter
from csv_grid.preferences import PreferenceStore


@pytest.fixture(scope="session")
def qapp():
    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication([])
    yield app


@pytest.fixture
def settings(tmp_path):
    return QtCore.QSettings(str(tmp_path / "settings.ini"), QtCore.QSettings.Format.IniFormat)


@pytest.fixture
def preferences(settings):
    return PreferenceStore(settings)


@pytest.fixture
def notices(qapp):
    return NoticeCenter()
