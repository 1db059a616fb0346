import argparse
from pathlib import Path
from typing import List, Optional

from . import __version__
from .env import Settings, check_log_level, get_settings, load_env
from .fetch import fetch_collection
from .logger import get_logger
from .schema import JobCollection, SchemaError
from .storage import SourceError, load_collection, save_collection


def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def resolve_collection(args: argparse.Namespace, settings: Settings) -> JobCollection:
    """Load the catalog named by --input, --url, or JOBCATALOG_SOURCE."""
    if args.input:
        source, remote = args.input, False
    elif args.url:
        source, remote = args.url, True
    elif settings.source:
        source, remote = settings.source, _is_url(settings.source)
    else:
        raise SystemExit("No catalog given. Pass --input or --url, or set JOBCATALOG_SOURCE.")

    try:
        if remote:
            return fetch_collection(
                source, timeout=settings.http_timeout, max_retries=settings.max_retries
            )
        return load_collection(source)
    except SourceError as e:
        raise SystemExit(str(e))


def cmd_validate(args: argparse.Namespace, settings: Settings) -> None:
    try:
        collection = resolve_collection(args, settings)
    except SchemaError as e:
        print(f"Invalid ({type(e).__name__}):")
        print(f" - {e}")
        raise SystemExit(2)
    print(f"Valid ({len(collection)} entries)")


def cmd_list(args: argparse.Namespace, settings: Settings) -> None:
    try:
        collection = resolve_collection(args, settings)
    except SchemaError as e:
        raise SystemExit(f"Invalid catalog ({type(e).__name__}): {e}")
    if not len(collection):
        print("No entries in catalog.")
        return
    print(f"Found {len(collection)} entries:\n")
    for entry in collection:
        print(f"Key: {entry.key}")
        print(f"  Name: {entry.name}")
        print(f"  Details: {entry.details}")
        print(f"  Tools: {entry.tools}")
        print(f"  Screen: {entry.screen}")
        print(f"  Link: {entry.link}")
        print()


def cmd_export(args: argparse.Namespace, settings: Settings) -> None:
    try:
        collection = resolve_collection(args, settings)
    except SchemaError as e:
        raise SystemExit(f"Invalid catalog ({type(e).__name__}): {e}")
    out = Path(args.output)
    try:
        save_collection(out, collection)
    except SourceError as e:
        raise SystemExit(str(e))
    print(f"Wrote {len(collection)} entries to {out}")


def _add_source_args(p: argparse.ArgumentParser) -> None:
    group = p.add_mutually_exclusive_group()
    group.add_argument("--input", help="Path to catalog JSON file")
    group.add_argument("--url", help="URL serving catalog JSON")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="jobcatalog", description="Load and check job catalog payloads")
    parser.add_argument("--version", action="store_true", help="Show version")
    parser.add_argument("--log-level", help="Override JOBCATALOG_LOG_LEVEL")

    subparsers = parser.add_subparsers(dest="command")

    val = subparsers.add_parser("validate", help="Decode a catalog and report schema errors")
    _add_source_args(val)
    val.set_defaults(func=cmd_validate)

    lst = subparsers.add_parser("list", help="Print every entry in a catalog")
    _add_source_args(lst)
    lst.set_defaults(func=cmd_list)

    exp = subparsers.add_parser("export", help="Decode a catalog and write it back out as JSON")
    _add_source_args(exp)
    exp.add_argument("--output", required=True, help="Destination JSON path")
    exp.set_defaults(func=cmd_export)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    load_env()
    args = build_parser().parse_args(argv)

    if args.version:
        print(__version__)
        return

    try:
        settings = get_settings()
        level = check_log_level(args.log_level, "--log-level") if args.log_level else settings.log_level
    except ValueError as e:
        raise SystemExit(str(e))

    get_logger(
        level=level,
        log_dir=settings.log_dir,
        enable_console=False,
    )

    if hasattr(args, "func"):
        args.func(args, settings)
        return

    build_parser().print_help()


if __name__ == "__main__":
    main()
