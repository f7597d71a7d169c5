import os
from typing import Iterable


class TextFileStore:
    def __init__(self, path: str) -> None:
        self.path = path

    @property
    def name(self) -> str:
        return os.path.basename(self.path)

    def exists(self) -> bool:
        return os.path.exists(self.path)

    def read(self) -> str:
        with open(self.path, "r", encoding="utf-8", newline="") as handle:
            return handle.read()

    def write(self, text: str) -> None:
        with open(self.path, "w", encoding="utf-8", newline="") as handle:
            handle.write(text)



def next_untitled_name(names: Iterable[str]) -> str:
    """Pick "Untitled", "Untitled 1", ... given the csv file names in a folder."""
    index = 0
    for name in names:
        base, ext = os.path.splitext(name)
        if ext.lower() != ".csv" or "Untitled" not in base:
            continue
        parts = base.split(" ")
        if len(parts) > 1 and parts[1].isdigit():
            number = int(parts[1])
            if number >= index:
                index = number + 1
        else:
            index = max(index, 1)
    return f"Untitled {index}" if index > 0 else "Untitled"
