"""Seeder exception hierarchy."""


class SeederError(Exception):
    """Base class for all seeding failures."""


class ConfigurationError(SeederError):
    """The run cannot start: missing source, missing table or empty header."""


class RowShapeError(SeederError, ValueError):
    """A data row does not have one field per resolved column."""

    def __init__(self, expected: int, actual: int):
        super().__init__(f"Expected {expected} fields, got {actual}")
        self.expected = expected
        self.actual = actual


class ChunkInsertError(SeederError):
    """Inserting a chunk failed; the run was aborted.

    The driver exception is chained as ``__cause__``.
    """

    def __init__(self, table: str, chunk: int, rows_flushed: int, detail: str):
        super().__init__(f"Chunk {chunk} failed to insert into {table!r}: {detail}")
        self.table = table
        self.chunk = chunk
        self.rows_flushed = rows_flushed


class TruncateError(SeederError):
    """Emptying the table before loading failed; nothing was inserted.

    The driver exception is chained as ``__cause__``.
    """

    def __init__(self, table: str, detail: str):
        super().__init__(f"Table {table!r} could not be truncated: {detail}")
        self.table = table
