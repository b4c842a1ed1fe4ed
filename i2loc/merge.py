#!/usr/bin/env python3
"""
Merge an imported CSV table into an existing localization table.

The merge is additive:
    - language columns that match no existing language become new languages
    - rows whose key matches an existing term update that term's values;
      the term counts as updated only if a value actually changed
    - rows with an unknown key become new terms
Nothing is ever removed. Column roles are positional: 0 = Key, 1 = Type,
2+ = one language each.

New languages and terms are cloned from the first existing entry of the same
kind, so a table with no languages (or no terms) cannot grow that list.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from .csv_codec import (
    FIRST_LANGUAGE_COLUMN,
    KEY_COLUMN,
    TYPE_COLUMN,
    ParsedCsvTable,
    decode_newlines,
    parse_csv,
)
from .table import (
    Language,
    LocalizationTable,
    TermType,
    clone_language,
    clone_term,
    term_type_from_string,
)

logger = logging.getLogger(__name__)


@dataclass
class LanguageHeader:
    """Name and code parsed from a language column header."""
    name: str
    code: str = ""


@dataclass
class ChangeSummary:
    """Counters describing what a merge did."""
    terms_updated: int = 0
    terms_added: int = 0
    languages_added: int = 0

    @property
    def is_empty(self) -> bool:
        return not (self.terms_updated or self.terms_added or self.languages_added)

    def to_dict(self) -> dict:
        return {
            "terms_updated": self.terms_updated,
            "terms_added": self.terms_added,
            "languages_added": self.languages_added,
        }

    def __str__(self) -> str:
        parts = []
        if self.terms_updated:
            parts.append(f"{self.terms_updated} term(s) updated")
        if self.terms_added:
            parts.append(f"{self.terms_added} term(s) added")
        if self.languages_added:
            parts.append(f"{self.languages_added} language(s) added")

        return ", ".join(parts) if parts else "No changes made"


@dataclass
class _PendingTerm:
    key: str
    term_type: int
    values: dict[int, str] = field(default_factory=dict)


def parse_language_header(header: Optional[str]) -> LanguageHeader:
    """
    Split a language column header into name and code.

    "French [fr]" -> ("French", "fr"). The last ``[...]`` pair is used, so
    "Chinese [Trad] [zh-TW]" -> ("Chinese [Trad]", "zh-TW"). Without a bracket
    pair the whole trimmed header is the name.
    """
    if not header:
        return LanguageHeader(name="", code="")

    open_idx = header.rfind("[")
    close_idx = header.rfind("]")

    if open_idx >= 0 and close_idx > open_idx:
        return LanguageHeader(
            name=header[:open_idx].strip(),
            code=header[open_idx + 1:close_idx].strip(),
        )

    return LanguageHeader(name=header.strip(), code="")


def match_language(header: LanguageHeader, languages: list[Language]) -> Optional[int]:
    """
    Find the existing language a header refers to.

    Languages are checked in table order. For each one a case-insensitive
    match on a non-empty code wins, then a case-insensitive match on a
    non-empty name.

    Returns:
        Index into ``languages`` or None
    """
    code = header.code.casefold()
    name = header.name.casefold()

    for index, lang in enumerate(languages):
        if code and code == lang.code.casefold():
            return index
        if name and name == lang.name.casefold():
            return index

    return None


def _map_language_columns(
    header: list[str],
    languages: list[Language],
) -> tuple[dict[int, int], list[LanguageHeader]]:
    """Map CSV column -> language index, queueing unmatched columns as new."""
    column_map: dict[int, int] = {}
    new_languages: list[LanguageHeader] = []

    for col in range(FIRST_LANGUAGE_COLUMN, len(header)):
        parsed = parse_language_header(header[col])
        found = match_language(parsed, languages)

        if found is not None:
            column_map[col] = found
        else:
            column_map[col] = len(languages) + len(new_languages)
            new_languages.append(parsed)
            logger.debug("Column %d (%r) is a new language", col, header[col])

    return column_map, new_languages


def _append_languages(
    table: LocalizationTable,
    new_languages: list[LanguageHeader],
    column_map: dict[int, int],
) -> None:
    """
    Append queued languages and fix up ``column_map``.

    Columns whose language could not be created are dropped from the map, and
    later columns are shifted down so indices always point at a real language.
    """
    if not new_languages:
        return

    first_new = len(table.languages)
    if not table.languages:
        logger.warning(
            "Table has no languages to use as a template, skipping %d new language(s)",
            len(new_languages),
        )
        created = [False] * len(new_languages)
    else:
        template = table.languages[0]
        created = []
        for parsed in new_languages:
            lang = clone_language(template, parsed.name, parsed.code)
            if lang is not None:
                table.languages.append(lang)
            created.append(lang is not None)

    actual_index = {}
    next_index = first_new
    for offset, ok in enumerate(created):
        if ok:
            actual_index[first_new + offset] = next_index
            next_index += 1

    for col, lang_index in list(column_map.items()):
        if lang_index < first_new:
            continue
        if lang_index in actual_index:
            column_map[col] = actual_index[lang_index]
        else:
            del column_map[col]


def _read_row_values(row: list[str], column_map: dict[int, int]) -> dict[int, str]:
    values = {}
    for col, lang_index in column_map.items():
        if col >= len(row):
            continue
        values[lang_index] = decode_newlines(row[col] or "")
    return values


def merge_table(table: LocalizationTable, parsed: ParsedCsvTable) -> ChangeSummary:
    """
    Merge parsed CSV rows into ``table`` in place.

    Args:
        table: Existing table; languages and terms may be appended and term
            values updated
        parsed: Output of parse_csv

    Returns:
        ChangeSummary with the number of updated terms, added terms and
        added languages
    """
    result = ChangeSummary()
    if parsed.is_empty:
        return result

    column_map, new_languages = _map_language_columns(parsed.header, table.languages)
    result.languages_added = len(new_languages)

    _append_languages(table, new_languages, column_map)
    total_languages = len(table.languages)

    # Every term gets a slot for every language, listed in the sheet or not
    for term in table.terms:
        term.ensure_size(total_languages)

    term_map = table.term_index()
    pending: list[_PendingTerm] = []

    for row in parsed.rows:
        if not row or KEY_COLUMN >= len(row):
            continue

        key = row[KEY_COLUMN]
        if not key:
            continue

        if TYPE_COLUMN < len(row):
            term_type = term_type_from_string(row[TYPE_COLUMN])
        else:
            term_type = int(TermType.TEXT)

        values = _read_row_values(row, column_map)

        term = term_map.get(key)
        if term is not None:
            # Type of an existing term is left as it is
            before = list(term.values)
            for lang_index, text in values.items():
                term.set_value(lang_index, text)
            if term.values != before:
                result.terms_updated += 1
        else:
            pending.append(_PendingTerm(key=key, term_type=term_type, values=values))

    if pending and not table.terms:
        logger.warning(
            "Table has no terms to use as a template, skipping %d new term(s)",
            len(pending),
        )
        return result

    template = table.terms[0] if table.terms else None
    for item in pending:
        # A key repeated within the import only creates one term
        existing = term_map.get(item.key)
        if existing is not None:
            for lang_index, text in item.values.items():
                existing.set_value(lang_index, text)
            continue

        term = clone_term(template, item.key, item.term_type, total_languages)
        if term is None:
            continue

        for lang_index, text in item.values.items():
            if 0 <= lang_index < len(term.values):
                term.values[lang_index] = text

        table.terms.append(term)
        term_map[term.key] = term
        result.terms_added += 1

    logger.debug("Merge finished: %s", result)
    return result


def import_csv(table: LocalizationTable, text: str) -> ChangeSummary:
    """Parse CSV text and merge it into ``table``."""
    return merge_table(table, parse_csv(text))
