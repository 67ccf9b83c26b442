"""
Command line entry point.

    lhstore build DATA [--index PATH] [--bucket-capacity N]   build an index over a data file
    lhstore query INDEX DATA [--bucket-capacity N]           interactive key lookups
    lhstore stats INDEX [--bucket-capacity N]                index shape and load
"""
import argparse
import logging
import sys
from typing import Optional, Sequence, TextIO

from rich.console import Console
from rich.table import Table
from rich import box
from rich.markup import escape

from .config import IndexConfig, DEFAULT_CONFIG
from .core.exceptions import LhStoreError, MalformedKeyError
from .log import configure_logging
from .query import IndexQueryService, parse_key
from .storage.index import IndexBuilder, LinearHashIndex

logger = logging.getLogger(__name__)

console = Console(soft_wrap=True)
error_console = Console(stderr=True, soft_wrap=True)

END_OF_INPUT = "-1"
PROMPT = "Enter the EIA ID to search. To end the search, type:'-1': "


def print_success(message: str):
    console.print(f"[bold green]✓[/bold green] {escape(message)}", highlight=False)


def print_error(message: str):
    error_console.print(f"[bold red]✗[/bold red] {escape(message)}", highlight=False)


def build_command(args: argparse.Namespace, config: IndexConfig) -> int:
    index_path = args.index or config.index_file_name
    summary = IndexBuilder(config).build(args.data, index_path)
    print_success(
        f"Successfully wrote {summary.index_path} "
        f"({summary.num_records} records, level {summary.level}, "
        f"{summary.num_buckets} buckets)")
    return 0


def query_command(args: argparse.Namespace, config: IndexConfig,
                  stdin: Optional[TextIO] = None) -> int:
    stdin = stdin or sys.stdin
    with IndexQueryService(args.index, args.data, config) as service:
        console.print(f"{service.record_count} records found.", highlight=False)
        console.print(PROMPT, markup=False, highlight=False)

        for line in stdin:
            text = line.strip()
            if text == END_OF_INPUT:
                break
            if text:
                _answer(service, text)
            console.print(PROMPT, markup=False, highlight=False)
    return 0


def _answer(service: IndexQueryService, text: str) -> None:
    try:
        key = parse_key(text)
    except MalformedKeyError:
        console.print("Please enter the integer representing the EIA ID number.",
                      highlight=False)
        return

    result = service.query(key)
    if not result.found:
        console.print(f"The target value {key} was not found.", highlight=False)
        return

    record = result.record
    console.print(f"[{record.eia_id}] [{record.project_name}] [{record.capacity_ac}]",
                  markup=False, highlight=False)


def stats_command(args: argparse.Namespace, config: IndexConfig) -> int:
    with LinearHashIndex.open(args.index, config.bucket_capacity) as index:
        stats = index.get_statistics()

    table = Table(title=f"Index {args.index}", box=box.SIMPLE)
    table.add_column("Statistic", style="cyan")
    table.add_column("Value", justify="right")
    for name in ("num_entries", "num_buckets", "level", "bucket_capacity",
                 "max_bucket_load", "empty_buckets", "load_factor"):
        value = stats[name]
        table.add_row(name, f"{value:.3f}" if isinstance(value, float) else str(value))
    console.print(table)
    return 0


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lhstore",
        description="Linear-hashing index over fixed-length record files")
    parser.add_argument("--log-level", default="WARNING",
                        help="Logging level (default: WARNING)")

    index_options = argparse.ArgumentParser(add_help=False)
    index_options.add_argument("--bucket-capacity", type=int,
                               default=DEFAULT_CONFIG.bucket_capacity,
                               help="Slots per index bucket; must match between build and query "
                                    f"(default: {DEFAULT_CONFIG.bucket_capacity})")

    subparsers = parser.add_subparsers(dest="command", required=True)

    build = subparsers.add_parser("build", parents=[index_options],
                                  help="Build an index over a data file")
    build.add_argument("data", help="Fixed-length record data file")
    build.add_argument("--index", help=f"Index file to write (default: {DEFAULT_CONFIG.index_file_name})")
    build.set_defaults(handler=build_command)

    query = subparsers.add_parser("query", parents=[index_options],
                                  help="Look up keys read from stdin")
    query.add_argument("index", help="Index file written by 'build'")
    query.add_argument("data", help="Data file the index was built from")
    query.set_defaults(handler=query_command)

    stats = subparsers.add_parser("stats", parents=[index_options],
                                  help="Show index statistics")
    stats.add_argument("index", help="Index file written by 'build'")
    stats.set_defaults(handler=stats_command)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        configure_logging(args.log_level)
        config = IndexConfig(bucket_capacity=args.bucket_capacity)
    except ValueError as e:
        parser.error(str(e))

    try:
        return args.handler(args, config)
    except LhStoreError as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print_error(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
