"""
i2loc - CSV/TSV import and export for localization tables

Converts a localization table (languages + keyed terms with one value per
language) to a flat CSV sheet and merges edited sheets back. Import is
additive: new language columns and new keys are appended to the table.

Quick start:
    from i2loc import LocalizationTable, export_csv, import_csv

    text = export_csv(table)
    # edit the sheet
    result = import_csv(table, text)
    print(result)  # "3 term(s) updated, 1 language(s) added"
"""

__version__ = "1.0.0"

from .csv_codec import ParsedCsvTable, csv_to_tsv, export_csv, parse_csv, tsv_to_csv
from .merge import ChangeSummary, import_csv, merge_table, parse_language_header
from .table import Language, LocalizationTable, Term, TermType

__all__ = [
    "LocalizationTable",
    "Language",
    "Term",
    "TermType",
    "ParsedCsvTable",
    "ChangeSummary",
    "export_csv",
    "parse_csv",
    "import_csv",
    "merge_table",
    "parse_language_header",
    "tsv_to_csv",
    "csv_to_tsv",
]
