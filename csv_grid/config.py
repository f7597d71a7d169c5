from dataclasses import dataclass
from typing import Optional

from PyQt6 import QtCore

ORGANIZATION = "CsvGrid"
APPLICATION = "CsvGrid"


def open_settings(path: Optional[str] = None) -> QtCore.QSettings:
    if path:
        return QtCore.QSettings(path, QtCore.QSettings.Format.IniFormat)
    return QtCore.QSettings(ORGANIZATION, APPLICATION)


@dataclass
class AppConfig:
    auto_save: bool = True
    load_debounce_ms: int = 50
    save_delay_ms: int = 2000
    new_file_rows: int = 4
    new_file_cols: int = 4

    @classmethod
    def from_settings(cls, settings: QtCore.QSettings) -> "AppConfig":
        defaults = cls()
        return cls(
            auto_save=settings.value("auto_save", defaults.auto_save, type=bool),
            load_debounce_ms=max(0, settings.value("load_debounce_ms", defaults.load_debounce_ms, type=int)),
            save_delay_ms=max(0, settings.value("save_delay_ms", defaults.save_delay_ms, type=int)),
            new_file_rows=max(1, settings.value("new_file_rows", defaults.new_file_rows, type=int)),
            new_file_cols=max(1, settings.value("new_file_cols", defaults.new_file_cols, type=int)),
        )

    def save(self, settings: QtCore.QSettings) -> None:
        settings.setValue("auto_save", self.auto_save)
        settings.setValue("load_debounce_ms", self.load_debounce_ms)
        settings.setValue("save_delay_ms", self.save_delay_ms)
        settings.setValue("new_file_rows", self.new_file_rows)
        settings.setValue("new_file_cols", self.new_file_cols)
