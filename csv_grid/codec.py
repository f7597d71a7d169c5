import csv
import io
import os
import sys
from dataclasses import dataclass
from typing import List, Optional

Table = List[List[str]]

BYTE_ORDER_MARK = "\ufeff"


def _raise_field_size_limit() -> None:
    # Cells have no size cap; sys.maxsize overflows a C long on some platforms.
    limit = sys.maxsize
    while True:
        try:
            csv.field_size_limit(limit)
            return
        except OverflowError:
            limit //= 2


_raise_field_size_limit()


@dataclass(frozen=True)
class CsvFormat:
    delimiter: str = ","
    quote_all: bool = True
    line_terminator: str = "\n"

    @classmethod
    def for_path(cls, path: str) -> "CsvFormat":
        _, ext = os.path.splitext(path)
        if ext.lower() == ".tsv":
            return cls(delimiter="\t")
        return cls()


@dataclass(frozen=True)
class ParseError:
    """One malformed record. ``row`` is the zero-based record index."""

    row: int
    column: Optional[int]
    code: str
    message: str


class CsvFormatError(ValueError):
    def __init__(self, errors: List[ParseError]) -> None:
        super().__init__("; ".join(error.message for error in errors))
        self.errors = list(errors)


def strip_bom(text: str) -> str:
    if text.startswith(BYTE_ORDER_MARK):
        return text[1:]
    return text


def _quote_error(exc: csv.Error, row: int, line: int) -> ParseError:
    detail = str(exc)
    if "unexpected end of data" in detail:
        return ParseError(
            row, None, "MissingQuotes", f"Line {line}: quoted field is not terminated."
        )
    return ParseError(row, None, "InvalidQuotes", f"Line {line}: {detail}.")


def parse(text: str, fmt: Optional[CsvFormat] = None) -> Table:
    fmt = fmt or CsvFormat()
    reader = csv.reader(
        io.StringIO(strip_bom(text), newline=""),
        delimiter=fmt.delimiter,
        strict=True,
    )
    rows: Table = []
    errors: List[ParseError] = []
    expected_cols: Optional[int] = None
    index = 0
    while True:
        try:
            record = next(reader)
        except StopIteration:
            break
        except csv.Error as exc:
            errors.append(_quote_error(exc, index, reader.line_num))
            index += 1
            continue
        if not record:
            continue
        if expected_cols is None:
            expected_cols = len(record)
        elif len(record) != expected_cols:
            code = "TooFewFields" if len(record) < expected_cols else "TooManyFields"
            errors.append(
                ParseError(
                    index,
                    min(len(record), expected_cols),
                    code,
                    f"Line {reader.line_num} has {len(record)} columns, expected {expected_cols}.",
                )
            )
        rows.append(record)
        index += 1
    if errors:
        raise CsvFormatError(errors)
    return rows


def unparse(table: Table, fmt: Optional[CsvFormat] = None) -> str:
    fmt = fmt or CsvFormat()
    buffer = io.StringIO()
    writer = csv.writer(
        buffer,
        delimiter=fmt.delimiter,
        quoting=csv.QUOTE_ALL if fmt.quote_all else csv.QUOTE_MINIMAL,
        lineterminator=fmt.line_terminator,
    )
    writer.writerows(table)
    return buffer.getvalue()


def create_empty(rows: int = 4, cols: int = 4) -> str:
    return unparse([[""] * cols for _ in range(rows)], CsvFormat())
