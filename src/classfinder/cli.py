"""Diagnostic command: print the classes a registry resolves to.

    python -m classfinder plugins --path build/classes
"""

from __future__ import annotations

import argparse
import sys

import structlog

from classfinder.config import Settings
from classfinder.errors import InvalidNameError, ResourceIOError
from classfinder.log_config import configure_logging
from classfinder.registry import RegistryTable, default_context

log = structlog.get_logger()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="classfinder",
        description="List the classes registered under one or more registry names.",
    )
    parser.add_argument("names", nargs="+", metavar="NAME", help="registry name")
    parser.add_argument(
        "--path",
        action="append",
        default=[],
        metavar="PATH",
        help="extra directory or archive to search (repeatable)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="override the configured log level",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    settings = Settings()
    if args.log_level:
        settings.logging.level = args.log_level
    if args.path:
        settings.search.extra_paths = [*settings.search.extra_paths, *args.path]
    configure_logging(settings)
    # Classes listed by --path index files must be importable as well.
    sys.path.extend(args.path)

    table = RegistryTable(lambda: default_context(settings))

    for name in args.names:
        try:
            finder = table.get_instance(name)
        except InvalidNameError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 2
        except ResourceIOError as exc:
            log.error("classfinder_load_failed", registry=name, exc_info=True)
            print(f"error: {exc}", file=sys.stderr)
            return 1
        for cls in finder.get_classes():
            print(f"{cls.__module__}.{cls.__qualname__}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
