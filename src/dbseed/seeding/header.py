"""Resolve a CSV header into target column specs."""

import logging
from dataclasses import dataclass
from typing import Mapping, Sequence

from dbseed.seeding.errors import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ColumnSpec:
    """Where the field at ``source_index`` goes; skipped columns have no target."""

    source_index: int
    target_name: str
    skip: bool = False


def resolve_header(
    raw_header: Sequence[str],
    aliases: Mapping[str, str] | None = None,
    skip_prefix: str | None = None,
) -> list[ColumnSpec]:
    """Map each header name to a ColumnSpec, in file order.

    A name starting with ``skip_prefix`` is skipped; otherwise it is renamed
    through ``aliases`` or kept verbatim. Blank names are skipped with a
    warning since they cannot name a column.

    Raises:
        ConfigurationError: if the header is empty.
    """
    if not raw_header:
        raise ConfigurationError("No CSV headers were parsed")

    aliases = aliases or {}
    if len(raw_header) == 1:
        logger.warning(
            "Found only one column in header, maybe a wrong delimiter was set for the CSV file"
        )

    specs = []
    for index, name in enumerate(raw_header):
        if skip_prefix and name.startswith(skip_prefix):
            specs.append(ColumnSpec(index, "", skip=True))
        elif not name.strip():
            logger.warning("Header column %d has no name and will be skipped", index + 1)
            specs.append(ColumnSpec(index, "", skip=True))
        else:
            specs.append(ColumnSpec(index, aliases.get(name, name)))
    return specs
