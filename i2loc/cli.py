#!/usr/bin/env python3
"""
i2loc - CSV import/export for localization tables

Moves a localization table (languages + keyed terms) to and from a flat CSV
or TSV sheet so it can be edited in a spreadsheet, then merges the edited
sheet back. Importing can add new languages and new terms.

Commands:
    export  - Write a table as CSV/TSV
    import  - Merge a CSV/TSV sheet into a table
    info    - Show languages and term count of a table
    formats - List supported table formats

Example:
    1. i2loc export --table I2Languages.json --output strings.csv
       → Returns: output path + counts

    2. [Edit strings.csv: change values, add a "German [de]" column, add rows]

    3. i2loc import --table I2Languages.json --input strings.csv
       → Returns: terms updated / added, languages added
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from .csv_codec import CRLF, LF, csv_to_tsv, export_csv, parse_csv, tsv_to_csv
from .merge import merge_table
from .stores import StoreRegistry, TableStore

logger = logging.getLogger(__name__)

NEWLINES = {"crlf": CRLF, "lf": LF}


def _is_tsv(path: Path) -> bool:
    return path.suffix.lower() == ".tsv"


def _resolve_store(path: Path, store_name: str) -> TableStore:
    if store_name and store_name != "auto":
        return StoreRegistry.get_store(store_name)
    return StoreRegistry.detect_store(str(path))


def _missing_file(path: Path, what: str) -> dict:
    return {
        "status": "error",
        "error_type": "FILE_NOT_FOUND",
        "error": f"{what} not found: {path}",
    }


def cmd_export(args) -> dict:
    """Export a table to CSV or TSV."""
    table_path = Path(args.table)
    if not table_path.exists():
        return _missing_file(table_path, "Table file")

    store = _resolve_store(table_path, args.store)
    table = store.read(table_path)

    output_path = Path(args.output) if args.output else table_path.with_suffix(".csv")
    text = export_csv(table, line_terminator=NEWLINES[args.newline])
    if _is_tsv(output_path):
        text = csv_to_tsv(text)

    with open(output_path, "w", encoding="utf-8", newline="") as f:
        f.write(text)
    logger.info("Exported %d term(s) to %s", len(table.terms), output_path)

    return {
        "status": "ok",
        "output_file": str(output_path),
        "stats": {
            "languages": len(table.languages),
            "terms": len(table.terms),
        },
        "summary": f"Exported {len(table.terms)} term(s) in {len(table.languages)} language(s).",
    }


def cmd_import(args) -> dict:
    """Merge a CSV or TSV sheet into a table."""
    table_path = Path(args.table)
    input_path = Path(args.input)
    if not table_path.exists():
        return _missing_file(table_path, "Table file")
    if not input_path.exists():
        return _missing_file(input_path, "Input file")

    store = _resolve_store(table_path, args.store)
    table = store.read(table_path)

    # newline="" keeps CR/LF inside quoted cells as written
    with open(input_path, "r", encoding="utf-8-sig", newline="") as f:
        text = f.read()
    if _is_tsv(input_path):
        text = tsv_to_csv(text)

    parsed = parse_csv(text)
    if parsed.is_empty:
        logger.warning("%s has no usable header row", input_path)

    result = merge_table(table, parsed)

    output_path = Path(args.output) if args.output else table_path
    if not args.dry_run:
        out_store = _resolve_store(output_path, args.store)
        out_store.write(output_path, table)

    prefix = "[DRY-RUN] " if args.dry_run else ""
    return {
        "status": "ok",
        "output_file": None if args.dry_run else str(output_path),
        "dry_run": args.dry_run,
        "changes": result.to_dict(),
        "summary": f"{prefix}Import completed: {result}",
    }


def cmd_info(args) -> dict:
    """Describe a table."""
    table_path = Path(args.table)
    if not table_path.exists():
        return _missing_file(table_path, "Table file")

    table = _resolve_store(table_path, args.store).read(table_path)
    duplicates = len(table.terms) - len(table.term_index())

    return {
        "status": "ok",
        "name": table.name,
        "languages": [
            {"index": i, "name": lang.name, "code": lang.code, "header": table.language_header(i)}
            for i, lang in enumerate(table.languages)
        ],
        "terms": len(table.terms),
        "duplicate_keys": duplicates,
        "summary": f"{len(table.languages)} language(s), {len(table.terms)} term(s)",
    }


def cmd_formats(args) -> dict:
    """List supported table formats."""
    stores = StoreRegistry.list_stores()
    return {
        "status": "ok",
        "formats": stores,
        "summary": f"{len(stores)} table formats supported: {', '.join(s['name'] for s in stores)}",
    }


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="i2loc",
        description="i2loc - CSV import/export for localization tables",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
CSV Layout:
  Key,Type,English [en],French [fr]
  Menu/Start,Text,Start,Commencer

  Column 0 is the term key, column 1 the term type (Text, Font, Sprite, ...),
  every further column is one language: "Name" or "Name [code]".
  Line breaks inside values are written as \\n.

Examples:
  # Export to CSV (or TSV by extension)
  i2loc export --table I2Languages.json --output strings.csv
  i2loc export --table I2Languages.yaml --output strings.tsv --newline lf

  # Merge an edited sheet back, preview first
  i2loc import --table I2Languages.json --input strings.csv --dry-run
  i2loc import --table I2Languages.json --input strings.csv

  # Inspect
  i2loc info --table I2Languages.json
  i2loc formats
        """,
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log progress to stderr")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    store_choices = ["auto", "json", "yaml"]

    # export command
    export_parser = subparsers.add_parser("export", help="Write a table as CSV/TSV")
    export_parser.add_argument("--table", "-t", required=True, help="Table file")
    export_parser.add_argument("--output", "-o", help="Output .csv/.tsv (default: table name with .csv)")
    export_parser.add_argument("--newline", "-n", default="crlf", choices=sorted(NEWLINES),
                               help="Row terminator (default: crlf)")
    export_parser.add_argument("--store", "-s", default="auto", choices=store_choices,
                               help="Table format (default: by extension)")

    # import command
    import_parser = subparsers.add_parser("import", help="Merge a CSV/TSV sheet into a table")
    import_parser.add_argument("--table", "-t", required=True, help="Table file")
    import_parser.add_argument("--input", "-i", required=True, help="Input .csv/.tsv")
    import_parser.add_argument("--output", "-o", help="Write merged table here (default: overwrite --table)")
    import_parser.add_argument("--dry-run", action="store_true", help="Report changes without saving")
    import_parser.add_argument("--store", "-s", default="auto", choices=store_choices,
                               help="Table format (default: by extension)")

    # info command
    info_parser = subparsers.add_parser("info", help="Show languages and term count")
    info_parser.add_argument("--table", "-t", required=True, help="Table file")
    info_parser.add_argument("--store", "-s", default="auto", choices=store_choices,
                             help="Table format (default: by extension)")

    # formats command
    subparsers.add_parser("formats", help="List supported table formats")

    return parser


COMMANDS = {
    "export": cmd_export,
    "import": cmd_import,
    "info": cmd_info,
    "formats": cmd_formats,
}


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
            stream=sys.stderr,
        )

    try:
        result = COMMANDS[args.command](args)
    except Exception as e:
        print(json.dumps({
            "status": "error",
            "error": str(e),
            "error_type": type(e).__name__,
        }), file=sys.stderr)
        sys.exit(1)

    if result.get("status") == "error":
        print(json.dumps(result, indent=2), file=sys.stderr)
        sys.exit(1)

    print(json.dumps(result, indent=2))


if __name__ == "__main__":
    main()
