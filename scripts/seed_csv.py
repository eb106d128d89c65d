"""CLI entry point for CSV seeding.

Usage:
    python -m scripts.seed_csv --db-url sqlite:///data.db --file seeds/users.csv \
        [--table users] [--delimiter ,] [--alias login=username] [--default role=user] \
        [--hash password] [--no-truncate] [--offset 2] [--chunk-size 50]
"""

import argparse
import logging
import os
import sys

from dbseed import create_service
from dbseed.seeding import CsvSeeder, SeederConfig, SeederError

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def _pairs(values: list[str] | None, option: str) -> dict[str, str]:
    pairs = {}
    for value in values or []:
        key, sep, target = value.partition("=")
        if not sep or not key:
            raise SystemExit(f"{option} expects NAME=VALUE, got {value!r}")
        pairs[key] = target
    return pairs


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Seed a database table from a CSV file")
    parser.add_argument(
        "--db-url",
        default=os.environ.get("DATABASE_URL"),
        help="Database URL (sqlite:/// or postgresql://); defaults to $DATABASE_URL",
    )
    parser.add_argument("--file", required=True, help="Path to CSV file")
    parser.add_argument("--base-dir", help="Directory relative file paths are resolved against")
    parser.add_argument("--table", help="Target table (default: file name without extension)")
    parser.add_argument("--delimiter", default=";", help="Field delimiter")
    parser.add_argument("--no-header", action="store_true", help="The file has no header row")
    parser.add_argument("--mapping", help="Comma separated column names, replacing the header")
    parser.add_argument("--alias", action="append", help="Rename a column: CSV_NAME=COLUMN")
    parser.add_argument("--default", action="append", help="Default value: COLUMN=VALUE")
    parser.add_argument(
        "--hash", action="append", help="Column to hash (repeatable, default: password)"
    )
    parser.add_argument("--skip-prefix", default="%", help="Header prefix of skipped columns")
    timestamps = parser.add_mutually_exclusive_group()
    timestamps.add_argument(
        "--no-timestamps", action="store_true", help="Set created_at/updated_at to NULL"
    )
    timestamps.add_argument("--timestamp", help="Fixed value for created_at/updated_at")
    parser.add_argument("--no-truncate", action="store_true", help="Keep existing rows")
    parser.add_argument("--offset", type=int, default=0, help="Data rows to skip")
    parser.add_argument("--chunk-size", type=int, default=50, help="Rows per insert")
    return parser


def config_from_args(args: argparse.Namespace) -> SeederConfig:
    timestamps: bool | str = True
    if args.no_timestamps:
        timestamps = False
    elif args.timestamp:
        timestamps = args.timestamp

    return SeederConfig(
        source=args.file,
        table_name=args.table,
        truncate=not args.no_truncate,
        has_header=not args.no_header,
        delimiter=args.delimiter,
        column_mapping=args.mapping.split(",") if args.mapping else None,
        aliases=_pairs(args.alias, "--alias"),
        hash_fields=tuple(args.hash) if args.hash else ("password",),
        defaults=_pairs(args.default, "--default"),
        skip_prefix=args.skip_prefix,
        timestamps=timestamps,
        row_offset=args.offset,
        chunk_size=args.chunk_size,
        base_dir=args.base_dir,
    )


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    if not args.db_url:
        logger.error("No database URL given. Use --db-url or set DATABASE_URL.")
        return 1
    try:
        config = config_from_args(args)
    except ValueError as e:
        logger.error("Invalid option: %s", e)
        return 1

    service = create_service(args.db_url)
    service.connect()
    try:
        result = CsvSeeder(service, config).run()
    except SeederError:
        return 1
    finally:
        service.close()
    return 0 if result.ok else 1


if __name__ == "__main__":
    sys.exit(main())
