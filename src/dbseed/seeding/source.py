"""Reading delimited rows from the source file."""

import csv
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator


def is_empty_row(row: list[str]) -> bool:
    """True for a blank line; a line of bare delimiters is still a row."""
    return not row


@contextmanager
def open_csv(
    file_path: str | Path, delimiter: str = ";", encoding: str = "utf-8-sig"
) -> Iterator[Iterator[list[str]]]:
    """Open a CSV file and yield a reader over its rows.

    The file is closed when the block exits, including on error. With the
    default encoding a UTF-8 byte order mark before the header is dropped.

    Raises:
        OSError: if the file cannot be opened.
    """
    with open(file_path, newline="", encoding=encoding) as f:
        yield csv.reader(f, delimiter=delimiter)
