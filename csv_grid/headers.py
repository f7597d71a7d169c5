import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Tuple, Union

from csv_grid.codec import Table
from csv_grid.preferences import PreferenceStore

if TYPE_CHECKING:
    from csv_grid.widgets.grid import GridWidget

logger = logging.getLogger(__name__)

HAS_HEADINGS_KEY = "hasHeadings"


@dataclass(frozen=True)
class NoHeader:
    """Columns are labelled A, B, C, ... and every row is data."""


@dataclass(frozen=True)
class HasHeader:
    labels: Tuple[str, ...]


HeaderSpec = Union[NoHeader, HasHeader]

NO_HEADER = NoHeader()


def ordinal_label(index: int) -> str:
    label = ""
    index += 1
    while index > 0:
        index, remainder = divmod(index - 1, 26)
        label = chr(ord("A") + remainder) + label
    return label


class HeaderStateManager:
    def __init__(self, grid: "GridWidget", preferences: PreferenceStore) -> None:
        self._grid = grid
        self._preferences = preferences
        self._spec: HeaderSpec = NO_HEADER
        self._identity: Optional[str] = None

    @property
    def spec(self) -> HeaderSpec:
        if isinstance(self._spec, HasHeader):
            # Column edits in the grid keep its labels current.
            return HasHeader(tuple(self._grid.column_headers()))
        return self._spec

    @property
    def has_headers(self) -> bool:
        return isinstance(self._spec, HasHeader)

    @property
    def identity(self) -> Optional[str]:
        return self._identity

    def set_identity(self, identity: str) -> None:
        self._identity = identity

    def reset(self) -> None:
        self._spec = NO_HEADER
        self._grid.update_settings(self._spec)

    def load_preference(self) -> bool:
        if self._identity is None:
            return False
        return self._preferences.load_value(self._identity, HAS_HEADINGS_KEY, False)

    def toggle_headers(self, use_headers: bool) -> None:
        use_headers = bool(use_headers)
        if use_headers and not self.has_headers:
            data = self._grid.source_data()
            if data:
                self._spec = HasHeader(tuple(data.pop(0)))
                self._grid.load_data(data)
                self._grid.update_settings(self._spec)
            else:
                logger.debug("No rows to take headers from in %s", self._identity)
        elif not use_headers and self.has_headers:
            data = self._grid.source_data()
            data.insert(0, list(self._grid.column_headers()))
            self._spec = NO_HEADER
            self._grid.load_data(data)
            self._grid.update_settings(self._spec)

        if self._identity is not None:
            self._preferences.save_value(self._identity, HAS_HEADINGS_KEY, use_headers)

    def merge(self, table: Table) -> Table:
        if self.has_headers:
            return [list(self._grid.column_headers())] + table
        return table
