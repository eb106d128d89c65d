"""Seed one database table from one CSV file."""

import csv
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator

from dbseed.seeding.config import SeederConfig
from dbseed.seeding.errors import (
    ChunkInsertError,
    ConfigurationError,
    RowShapeError,
    TruncateError,
)
from dbseed.seeding.header import ColumnSpec, resolve_header
from dbseed.seeding.loader import BatchLoader
from dbseed.seeding.rows import RowTransformer
from dbseed.seeding.source import is_empty_row, open_csv
from dbseed.service import DatabaseService

logger = logging.getLogger(__name__)

SEEDED = "seeded"
FAILED = "failed"


@dataclass
class RunResult:
    """Outcome of one seeding run.

    ``total_rows`` counts every non-empty data row in the file, ``seen_rows``
    those left after the row offset, ``inserted_rows`` those that produced
    a record.
    """

    table: str | None
    total_rows: int = 0
    seen_rows: int = 0
    inserted_rows: int = 0
    chunks: int = 0
    status: str = SEEDED
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status == SEEDED


class CsvSeeder:
    """Truncates the table, then streams the CSV into it chunk by chunk."""

    def __init__(self, service: DatabaseService, config: SeederConfig):
        self._service = service
        self._config = config

    def run(self) -> RunResult:
        """Seed the table.

        Configuration problems are logged and returned as a failed RunResult.

        Raises:
            TruncateError: if the table cannot be emptied before loading.
            ChunkInsertError: if a chunk fails to insert. Rows of earlier
                chunks stay in the table and the file is closed.
        """
        config = self._config
        table = config.resolve_table_name()
        result = RunResult(table=table)

        try:
            path = self._validate(table)
        except ConfigurationError as e:
            return self._fail(result, e)

        loader = BatchLoader(self._service, table, config.chunk_size)
        try:
            loader.begin_run(config.truncate)
        except TruncateError as e:
            logger.error("%s", e)
            raise

        try:
            with open_csv(path, config.delimiter, config.encoding) as reader:
                header = self._read_header(reader)
                specs = resolve_header(header, config.aliases, config.skip_prefix)
                self._load_rows(reader, specs, loader, result)
                loader.end_run()
        except ConfigurationError as e:
            return self._fail(result, e)
        except (UnicodeDecodeError, csv.Error, OSError) as e:
            error = ConfigurationError(f'File "{config.source}" could not be read: {e}')
            return self._fail(result, error)
        except ChunkInsertError as e:
            logger.error('Rows of the file "%s" has failed to insert: %s', config.source, e)
            raise

        result.chunks = loader.chunks
        result.message = (
            f'{result.inserted_rows} of {result.total_rows} rows has been seeded in table "{table}"'
        )
        logger.info(result.message)
        return result

    def _validate(self, table: str | None) -> Path:
        path = self._config.source_path
        if path is None:
            raise ConfigurationError("No CSV file given")
        if not path.is_file() or not os.access(path, os.R_OK):
            raise ConfigurationError(
                f'File "{self._config.source}" could not be found or is not readable'
            )
        if not table or not self._service.table_exists(table):
            raise ConfigurationError(f'Table "{table}" could not be found in database')
        return path

    def _read_header(self, reader: Iterator[list[str]]) -> list[str]:
        header: list[str] = []
        if self._config.has_header:
            header = next(reader, [])
        if self._config.column_mapping:
            header = list(self._config.column_mapping)
        return header

    def _load_rows(
        self,
        reader: Iterator[list[str]],
        specs: list[ColumnSpec],
        loader: BatchLoader,
        result: RunResult,
    ) -> None:
        config = self._config
        transformer = RowTransformer(
            specs,
            defaults=config.defaults,
            timestamps=config.timestamps,
            hash_fields=config.hash_fields,
            null_values=config.null_values,
        )
        for row in reader:
            if is_empty_row(row):
                continue
            result.total_rows += 1
            if result.total_rows <= config.row_offset:
                continue
            result.seen_rows += 1

            try:
                record = transformer.transform(row)
            except RowShapeError as e:
                logger.warning("Skipping malformed data row %d: %s", result.total_rows, e)
                continue
            if record is None:
                continue
            result.inserted_rows += 1
            loader.append(record)

    @staticmethod
    def _fail(result: RunResult, error: ConfigurationError) -> RunResult:
        logger.error("%s", error)
        result.status = FAILED
        result.message = str(error)
        return result


def seed_csv(service: DatabaseService, source: str | Path, **options: Any) -> RunResult:
    """Seed a table from ``source``; ``options`` are SeederConfig fields."""
    return CsvSeeder(service, SeederConfig(source=source, **options)).run()
