"""Shared types for the dbseed package."""

from typing import Any

Record = dict[str, Any]
Params = tuple | list | dict
ParamsList = list[tuple] | list[list]
