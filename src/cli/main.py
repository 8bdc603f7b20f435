"""Course data CLI entry points.
This module exposes commands for fetching, importing, and clearing datasets.
It maps argparse commands onto SDK calls.
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any, Sequence

from core.config import CourseDataConfig
from core.errors import CourseDataError
from store.dataset_sdk import CourseDataClient


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="econ2024", description="Course dataset CLI")
    parser.add_argument("--cache-root", help="Override ECON2024_CACHE_ROOT for this command")
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_fetch_command(subparsers)
    _add_import_movielens_command(subparsers)
    _add_clear_cache_command(subparsers)
    _add_readme_command(subparsers)
    _add_list_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the course data CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        client = _build_client(args.cache_root)
        return _dispatch(client, args, parser)
    except CourseDataError as error:
        print(f"error: {error}", file=sys.stderr)
        return 1


def _dispatch(
    client: CourseDataClient,
    args: argparse.Namespace,
    parser: argparse.ArgumentParser,
) -> int:
    if args.command == "fetch":
        return _run_fetch_command(client, args)
    if args.command == "import-movielens":
        return _run_import_movielens_command(client)
    if args.command == "clear-cache":
        return _run_clear_cache_command(client)
    if args.command == "readme":
        return _run_readme_command(client, args)
    if args.command == "list":
        return _run_list_command(client)
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_client(cache_root: str | None) -> CourseDataClient:
    """Build SDK client with optional cache-root override.

    Args:
        cache_root: Optional override path.

    Returns:
        Configured SDK client.
    """
    config = CourseDataConfig.from_env()
    if cache_root:
        config = replace(config, cache_root=Path(cache_root).expanduser().resolve())
    return CourseDataClient(config)


def _run_fetch_command(client: CourseDataClient, args: argparse.Namespace) -> int:
    """Handle fetch command.

    Args:
        client: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    table = client.dataset(args.name)
    print(f"{args.name}: {table.num_rows} rows x {table.num_columns} columns")
    for field in table.schema:
        print(f"  {field.name}: {field.type}")
    return 0


def _run_import_movielens_command(client: CourseDataClient) -> int:
    for path in client.import_movielens():
        print(path)
    return 0


def _run_clear_cache_command(client: CourseDataClient) -> int:
    client.clear_cache()
    print(f"Cleared {client.cache.data_dir}")
    return 0


def _run_readme_command(client: CourseDataClient, args: argparse.Namespace) -> int:
    """Handle readme command.

    Prints the title and section headings, or one section body when
    ``--section`` is given.
    """
    document = client.movielens_readme()
    if args.section is None:
        print(document.title)
        for section in document.sections:
            if section.heading:
                print(f"{'  ' * (section.level - 1)}- {section.heading}")
        return 0
    section = document.section(args.section)
    if section is None:
        print(f"error: README has no section '{args.section}'", file=sys.stderr)
        return 1
    print(section.body)
    return 0


def _run_list_command(client: CourseDataClient) -> int:
    listing = client.list_datasets()
    print(f"bundled: {', '.join(listing.bundled)}")
    print(f"registered: {', '.join(listing.registered)}")
    print(f"cached: {', '.join(listing.cached)}")
    return 0


def _add_fetch_command(subparsers: Any) -> None:
    fetch_parser = subparsers.add_parser("fetch", help="Resolve a dataset, downloading if needed")
    fetch_parser.add_argument("name", help="Dataset name")


def _add_import_movielens_command(subparsers: Any) -> None:
    subparsers.add_parser(
        "import-movielens",
        help="Download MovieLens and cache the derived tables",
    )


def _add_clear_cache_command(subparsers: Any) -> None:
    subparsers.add_parser("clear-cache", help="Delete all cached datasets")


def _add_readme_command(subparsers: Any) -> None:
    readme_parser = subparsers.add_parser("readme", help="Show the MovieLens README outline")
    readme_parser.add_argument("--section", help="Print the body of one section")


def _add_list_command(subparsers: Any) -> None:
    subparsers.add_parser("list", help="List bundled, registered, and cached datasets")
