"""Chunked, fail-fast insertion of records into one table."""

import logging

from dbseed.seeding.errors import ChunkInsertError, TruncateError
from dbseed.service import DatabaseService
from dbseed.types import Record

logger = logging.getLogger(__name__)


class BatchLoader:
    """Buffers records and inserts them ``chunk_size`` at a time.

    Each chunk is its own transaction. Truncation is a separate transaction
    too, so a failure after begin_run() can leave the table empty or partly
    filled; re-running with truncate=True restores a consistent state.
    """

    def __init__(self, service: DatabaseService, table: str, chunk_size: int = 50):
        if chunk_size < 1:
            raise ValueError(f"chunk_size must be at least 1, got {chunk_size}")
        self._service = service
        self._table = table
        self._chunk_size = chunk_size
        self._buffer: list[Record] = []
        self.chunks = 0
        self.rows_flushed = 0

    @property
    def pending(self) -> int:
        return len(self._buffer)

    def begin_run(self, truncate: bool = True) -> None:
        """Empty the table once, before any record is appended.

        Raises:
            TruncateError: if the table cannot be emptied, e.g. rows of
                another table still reference it.
        """
        if truncate:
            try:
                self._service.truncate(self._table)
            except Exception as e:
                raise TruncateError(self._table, str(e)) from e
            logger.info("Truncated table %s", self._table)

    def append(self, record: Record) -> None:
        self._buffer.append(record)
        if len(self._buffer) >= self._chunk_size:
            self.flush()

    def flush(self) -> None:
        """Insert the buffered records as one chunk.

        Raises:
            ChunkInsertError: if the insert fails. The buffered records are
                discarded and the original exception is chained.
        """
        if not self._buffer:
            return
        chunk, self._buffer = self._buffer, []
        try:
            with self._service.transaction():
                self._service.insert_records(self._table, chunk)
        except Exception as e:
            raise ChunkInsertError(self._table, self.chunks + 1, self.rows_flushed, str(e)) from e

        self.chunks += 1
        self.rows_flushed += len(chunk)
        logger.info(
            "Chunk %d: inserted %d rows (total: %d)", self.chunks, len(chunk), self.rows_flushed
        )

    def end_run(self) -> None:
        self.flush()
