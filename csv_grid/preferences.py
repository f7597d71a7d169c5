from typing import TypeVar
from urllib.parse import quote

from PyQt6 import QtCore

T = TypeVar("T", bool, int, str)


class PreferenceStore:
    """Per-document preferences kept in a QSettings group.

    Keys are namespaced by the document identity, so a document that was
    never saved simply answers with the default.
    """

    def __init__(self, settings: QtCore.QSettings, namespace: str = "persistentState") -> None:
        self._settings = settings
        self._namespace = namespace

    def _key(self, identity: str, key: str) -> str:
        return f"{self._namespace}/{quote(identity, safe='')}/{key}"

    def load_value(self, identity: str, key: str, default: T) -> T:
        value = self._settings.value(self._key(identity, key), default, type=type(default))
        if value is None:
            return default
        return value

    def save_value(self, identity: str, key: str, value: T) -> None:
        self._settings.setValue(self._key(identity, key), value)
        self._settings.sync()

    def remove(self, identity: str) -> None:
        self._settings.remove(f"{self._namespace}/{quote(identity, safe='')}")

    def rename(self, old_identity: str, new_identity: str) -> None:
        old_group = f"{self._namespace}/{quote(old_identity, safe='')}"
        self._settings.beginGroup(old_group)
        values = {key: self._settings.value(key) for key in self._settings.childKeys()}
        self._settings.endGroup()
        if not values:
            return
        for key, value in values.items():
            self._settings.setValue(self._key(new_identity, key), value)
        self._settings.remove(old_group)
        self._settings.sync()
