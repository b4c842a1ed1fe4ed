#!/usr/bin/env python3
"""
CSV codec for localization tables.

Export layout:
    Key,Type,English [en],French [fr]
    Menu/Start,Text,Start,Commencer
    Menu/Quit,Text,"Quit, now",Quitter

Quoting follows RFC 4180: a cell containing a comma, a double quote or a line
break is wrapped in double quotes, and embedded quotes are doubled. Cells
with a tab are quoted too, so a TSV conversion cannot split them. Real line
breaks inside values are written as the two characters ``\\n`` so each term
stays on one physical line; import turns them back into line breaks.

Parsing never raises on malformed input. Unbalanced quotes simply keep the
parser in quoted state until the next quote, and sparse or empty input yields
an empty ParsedCsvTable.
"""

from dataclasses import dataclass, field
from typing import Optional

from .table import LocalizationTable, term_type_to_string

# Fixed leading columns
KEY_COLUMN = 0
TYPE_COLUMN = 1
FIRST_LANGUAGE_COLUMN = 2

KEY_HEADER = "Key"
TYPE_HEADER = "Type"

CRLF = "\r\n"
LF = "\n"

ESCAPED_NEWLINE = "\\n"


@dataclass
class ParsedCsvTable:
    """
    Raw result of parsing CSV text.

    Cells are kept as plain strings; mapping columns to languages is left to
    the merge step.
    """
    header: list[str] = field(default_factory=list)
    rows: list[list[str]] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.header

    @property
    def language_headers(self) -> list[str]:
        """Header cells that name languages (column 2 onwards)."""
        return self.header[FIRST_LANGUAGE_COLUMN:]


def csv_escape(value: Optional[str]) -> str:
    """
    Escape a single cell.

    Args:
        value: Cell text (None is written as an empty cell)

    Returns:
        The cell, quoted when it contains a comma, quote, tab or line break
    """
    if value is None:
        return ""

    need_quotes = any(c in value for c in (',', '"', '\r', '\n', '\t'))
    escaped = value.replace('"', '""')
    return f'"{escaped}"' if need_quotes else escaped


def encode_newlines(value: str) -> str:
    """Replace real line breaks (CRLF, CR or LF) with a literal ``\\n``."""
    return (
        value.replace("\r\n", "\n")
        .replace("\r", "\n")
        .replace("\n", ESCAPED_NEWLINE)
    )


def decode_newlines(value: str) -> str:
    """Turn literal ``\\n`` sequences back into line feeds."""
    return value.replace(ESCAPED_NEWLINE, "\n")


def split_csv_lines(text: str) -> list[str]:
    """
    Split CSV text into logical lines.

    CR, LF and CRLF all end a line, except inside a quoted region where the
    break is kept as part of the field. A doubled quote is copied through as
    two characters and does not change quote state. Empty lines are dropped.

    Args:
        text: Full CSV text

    Returns:
        Logical lines, quotes left in place for parse_csv_line
    """
    lines = []
    current: list[str] = []
    in_quotes = False
    i = 0
    length = len(text)

    while i < length:
        c = text[i]

        if c == '"':
            current.append(c)
            if i + 1 < length and text[i + 1] == '"':
                current.append('"')
                i += 1
            else:
                in_quotes = not in_quotes
        elif c in "\r\n" and not in_quotes:
            if current:
                lines.append("".join(current))
                current = []
            # CRLF counts as one terminator
            if c == "\r" and i + 1 < length and text[i + 1] == "\n":
                i += 1
        else:
            current.append(c)
        i += 1

    if current:
        lines.append("".join(current))

    return lines


def parse_csv_line(line: Optional[str]) -> list[str]:
    """
    Split one logical line into cells.

    Commas inside quotes are literal, ``""`` inside quotes is one quote
    character, and the surrounding quotes are removed.
    """
    cells: list[str] = []
    if line is None:
        return cells

    current: list[str] = []
    in_quotes = False
    i = 0
    length = len(line)

    while i < length:
        c = line[i]

        if c == '"':
            if in_quotes and i + 1 < length and line[i + 1] == '"':
                current.append('"')
                i += 1
            else:
                in_quotes = not in_quotes
        elif c == "," and not in_quotes:
            cells.append("".join(current))
            current = []
        else:
            current.append(c)
        i += 1

    cells.append("".join(current))
    return cells


def parse_csv(text: Optional[str]) -> ParsedCsvTable:
    """
    Parse CSV text into a header and rows.

    Args:
        text: CSV text (comma-delimited; convert TSV with tsv_to_csv first)

    Returns:
        ParsedCsvTable, empty when the text is blank or the header has fewer
        than the two required Key/Type columns
    """
    if text is None or not text.strip():
        return ParsedCsvTable()

    lines = split_csv_lines(text)
    if not lines:
        return ParsedCsvTable()

    header = parse_csv_line(lines[0])
    if len(header) < FIRST_LANGUAGE_COLUMN:
        return ParsedCsvTable()

    rows = [parse_csv_line(line) for line in lines[1:]]
    return ParsedCsvTable(header=header, rows=rows)


def _format_row(cells: list[str]) -> str:
    return ",".join(csv_escape(cell) for cell in cells)


def export_csv(table: LocalizationTable, line_terminator: str = CRLF) -> str:
    """
    Render a table as CSV text.

    Args:
        table: Table to export (not modified)
        line_terminator: Written after every row, header included

    Returns:
        CSV text with one header row and one row per term
    """
    language_count = len(table.languages)
    out = []

    header = [KEY_HEADER, TYPE_HEADER]
    header.extend(lang.header for lang in table.languages)
    out.append(_format_row(header) + line_terminator)

    for term in table.terms:
        cells = [term.key, term_type_to_string(term.term_type)]
        for index in range(language_count):
            cells.append(encode_newlines(term.value(index)))
        out.append(_format_row(cells) + line_terminator)

    return "".join(out)


def _swap_delimiter(text: str, old: str, new: str) -> str:
    out = []
    in_quotes = False
    for c in text:
        if c == '"':
            in_quotes = not in_quotes
            out.append(c)
        elif c == old and not in_quotes:
            out.append(new)
        else:
            out.append(c)
    return "".join(out)


def tsv_to_csv(text: str) -> str:
    """Turn tab delimiters into commas, leaving quoted regions alone."""
    return _swap_delimiter(text, "\t", ",")


def csv_to_tsv(text: str) -> str:
    """Turn comma delimiters into tabs, leaving quoted regions alone."""
    return _swap_delimiter(text, ",", "\t")
