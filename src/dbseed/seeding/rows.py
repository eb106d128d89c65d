"""Turn raw CSV rows into column-value records."""

import hashlib
from datetime import datetime
from typing import Any, Callable, Iterable, Mapping, Sequence

from dbseed.seeding.config import CREATED_AT, UPDATED_AT
from dbseed.seeding.errors import RowShapeError
from dbseed.seeding.header import ColumnSpec
from dbseed.types import Record

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def hash_value(value: Any) -> str:
    """One-way, deterministic hash of a value's string form."""
    return hashlib.sha256(str(value).encode("utf-8")).hexdigest()


class RowTransformer:
    """Builds one record per row from the resolved header.

    Order of operations: row fields (NULL markers converted), then defaults
    for absent columns, then created_at/updated_at, then hashing.
    """

    def __init__(
        self,
        specs: Sequence[ColumnSpec],
        defaults: Mapping[str, Any] | None = None,
        timestamps: bool | str = True,
        hash_fields: Iterable[str] = ("password",),
        null_values: Iterable[str] = ("", "NULL"),
        clock: Callable[[], datetime] = datetime.now,
    ):
        self._specs = list(specs)
        self._defaults = dict(defaults or {})
        self._timestamps = timestamps
        self._hash_fields = set(hash_fields)
        self._null_values = {v.upper() for v in null_values}
        self._clock = clock

    def transform(self, row: Sequence[str]) -> Record | None:
        """Return the record for ``row``, or None if every column is skipped.

        Raises:
            RowShapeError: if the row length differs from the header length.
        """
        if len(row) != len(self._specs):
            raise RowShapeError(len(self._specs), len(row))

        record: Record = {}
        for spec in self._specs:
            if spec.skip:
                continue
            value = row[spec.source_index]
            record[spec.target_name] = None if value.upper() in self._null_values else value
        if not record:
            return None

        for column, value in self._defaults.items():
            record.setdefault(column, value)

        stamp = self._timestamp()
        record.setdefault(CREATED_AT, stamp)
        record.setdefault(UPDATED_AT, stamp)

        for column in self._hash_fields:
            if record.get(column) is not None:
                record[column] = hash_value(record[column])

        return record

    def _timestamp(self) -> str | None:
        if self._timestamps is True:
            return self._clock().strftime(TIMESTAMP_FORMAT)
        if self._timestamps is False:
            return None
        return self._timestamps
