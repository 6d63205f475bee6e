from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .api import add_sheet, list_sheets


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Inspect and edit the sheet list of .xlsx workbooks")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    commands = parser.add_subparsers(dest="command", required=True)

    list_cmd = commands.add_parser("list", help="List worksheets in document order")
    list_cmd.add_argument("input", type=Path, help="Input .xlsx file")

    add_cmd = commands.add_parser("add-sheet", help="Append an empty worksheet")
    add_cmd.add_argument("input", type=Path, help="Input .xlsx file")
    add_cmd.add_argument("-o", "--output", type=Path, required=True, help="Output path")
    add_cmd.add_argument("--name", help="Sheet name (defaults to Sheet<id>)")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "list":
            for sheet in list_sheets(args.input):
                suffix = "" if sheet.visible else f" ({sheet.state})"
                print(f"{sheet.sheet_id}\t{sheet.name}\t{sheet.path}{suffix}")
        else:
            sheet = add_sheet(args.input, args.output, name=args.name)
            print(f"Added {sheet.name} (id {sheet.sheet_id}) -> {args.output}")
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
