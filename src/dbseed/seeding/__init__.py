"""CSV seeding: header resolution, row transformation and chunked loading."""

from dbseed.seeding.config import SeederConfig
from dbseed.seeding.errors import (
    ChunkInsertError,
    ConfigurationError,
    RowShapeError,
    SeederError,
    TruncateError,
)
from dbseed.seeding.header import ColumnSpec, resolve_header
from dbseed.seeding.loader import BatchLoader
from dbseed.seeding.rows import RowTransformer, hash_value
from dbseed.seeding.seeder import CsvSeeder, RunResult, seed_csv

__all__ = [
    "BatchLoader",
    "ChunkInsertError",
    "ColumnSpec",
    "ConfigurationError",
    "CsvSeeder",
    "RowShapeError",
    "RowTransformer",
    "RunResult",
    "SeederConfig",
    "SeederError",
    "TruncateError",
    "hash_value",
    "resolve_header",
    "seed_csv",
]
