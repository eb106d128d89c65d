"""Seeder run configuration."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Sequence

CREATED_AT = "created_at"
UPDATED_AT = "updated_at"


@dataclass(frozen=True)
class SeederConfig:
    """Options for seeding one CSV file into one table.

    Attributes:
        source: Path of the CSV file, relative to ``base_dir`` when one is set.
        table_name: Destination table; defaults to the file name without extension.
        truncate: Delete all rows of the table before inserting.
        has_header: The first line of the file holds column names.
        delimiter: Single character separating fields.
        column_mapping: Positional column names used instead of the file header.
            When the file has a header as well, that header line is discarded.
        aliases: Header name -> table column renames.
        hash_fields: Columns whose value is replaced by its SHA-256 hex digest.
        defaults: Column -> value added to every record lacking that column.
        skip_prefix: Header names starting with this prefix are not inserted.
        timestamps: True stamps created_at/updated_at with the current time,
            False sets them to NULL, a string is used as a fixed timestamp.
        row_offset: Number of leading data rows (after the header) to discard.
        chunk_size: Records per insert statement.
        base_dir: Directory that relative sources are resolved against.
        encoding: File encoding; the default strips a UTF-8 byte order mark.
        null_values: Field values stored as NULL, compared case-insensitively.
    """

    source: str | Path | None
    table_name: str | None = None
    truncate: bool = True
    has_header: bool = True
    delimiter: str = ";"
    column_mapping: Sequence[str] | None = None
    aliases: Mapping[str, str] = field(default_factory=dict)
    hash_fields: Sequence[str] = ("password",)
    defaults: Mapping[str, Any] = field(default_factory=dict)
    skip_prefix: str | None = "%"
    timestamps: bool | str = True
    row_offset: int = 0
    chunk_size: int = 50
    base_dir: str | Path | None = None
    encoding: str = "utf-8-sig"
    null_values: Sequence[str] = ("", "NULL")

    def __post_init__(self) -> None:
        if self.chunk_size < 1:
            raise ValueError(f"chunk_size must be at least 1, got {self.chunk_size}")
        if self.row_offset < 0:
            raise ValueError(f"row_offset must not be negative, got {self.row_offset}")
        if len(self.delimiter) != 1:
            raise ValueError(f"delimiter must be a single character, got {self.delimiter!r}")

    @property
    def source_path(self) -> Path | None:
        if not self.source:
            return None
        path = Path(self.source)
        if self.base_dir is not None and not path.is_absolute():
            path = Path(self.base_dir) / path
        return path

    def resolve_table_name(self) -> str | None:
        if self.table_name:
            return self.table_name
        path = self.source_path
        return path.stem if path is not None else None
