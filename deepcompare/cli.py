"""Compare two JSON/YAML documents from the command line."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any, Optional

import yaml

from .config import load_options, resolve_options
from .engine import (
    compare_values_with_conflicts,
    compare_values_with_detailed_differences,
)
from .exceptions import DeepCompareError

logger = logging.getLogger(__name__)

EXIT_EQUAL = 0
EXIT_DIFFERENT = 1
EXIT_ERROR = 2


def load_document(path: str) -> Any:
    """Load a YAML or JSON document."""
    document_path = Path(path)
    if not document_path.exists():
        raise FileNotFoundError(f"File not found: {document_path}")

    with open(document_path, 'r') as f:
        content = f.read()

    # JSON is valid YAML
    try:
        return yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ValueError(f"Failed to parse {document_path}: {e}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="deepcompare",
        description="Deep-compare two JSON/YAML documents",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  deepcompare old.json new.json
  deepcompare old.yaml new.yaml --mode details --json
  deepcompare old.json new.json -o options.yaml --path response
        """
    )

    parser.add_argument("first", help="Path to the first document")
    parser.add_argument("second", help="Path to the second document")
    parser.add_argument("-o", "--options", help="Path to a YAML/JSON options file")
    parser.add_argument(
        "-m", "--mode",
        choices=["equal", "conflicts", "details"],
        default="conflicts",
        help="What to report (default: conflicts)"
    )
    parser.add_argument("-p", "--path", default="", help="Starting path prefixed to every result")
    parser.add_argument("--loose", action="store_true", help="Compare with type coercion")
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def _print_result(mode: str, result: Any, as_json: bool):
    if mode == "equal":
        if as_json:
            print(json.dumps({"equal": not result}))
        else:
            print("equal" if not result else "different")
        return

    if mode == "details":
        entries = [d.to_dict() for d in result]
        if as_json:
            print(json.dumps(entries, indent=2, default=str))
            return
        for entry in entries:
            print(f"{entry['kind']:>8}  {entry['path'] or '<root>'}: "
                  f"{entry['old_value']!r} -> {entry['new_value']!r}")
        return

    if as_json:
        print(json.dumps(result, indent=2))
        return
    for path in result:
        print(path or "<root>")


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        options = load_options(args.options) if args.options else resolve_options()
        if args.loose:
            options = replace(options, strict=False)
        logger.debug("Comparing with %s", options)

        first = load_document(args.first)
        second = load_document(args.second)

        if args.mode == "details":
            result = compare_values_with_detailed_differences(first, second, args.path, options)
        else:
            result = compare_values_with_conflicts(first, second, args.path, options)
    except (DeepCompareError, FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    if result is None:
        print("Error: both documents must be non-empty", file=sys.stderr)
        return EXIT_ERROR

    _print_result(args.mode, result, args.json)
    return EXIT_DIFFERENT if result else EXIT_EQUAL


if __name__ == "__main__":
    sys.exit(main())
