#!/usr/bin/env python3
"""
Tests for the CSV codec.

Tests verify:
1. RFC 4180 escaping of commas, quotes and line breaks
2. Line splitting that respects quoted regions and CRLF
3. Cell splitting with doubled quotes
4. Export layout (header, type names, padding, newline encoding)
5. Empty / short input yields an empty result
6. Quote-aware TSV conversion
"""

from i2loc.csv_codec import (
    LF,
    csv_escape,
    csv_to_tsv,
    decode_newlines,
    encode_newlines,
    export_csv,
    parse_csv,
    parse_csv_line,
    split_csv_lines,
    tsv_to_csv,
)
from i2loc.table import Language, LocalizationTable, Term


# =============================================================================
# Escaping
# =============================================================================

def test_escape_plain_value_untouched():
    assert csv_escape("Hello") == "Hello"
    assert csv_escape("") == ""
    assert csv_escape(None) == ""


def test_escape_comma_wraps_in_quotes():
    assert csv_escape("red, blue") == '"red, blue"'


def test_escape_doubles_quotes():
    assert csv_escape('He said "hi"') == '"He said ""hi"""'


def test_escape_line_breaks():
    assert csv_escape("a\nb") == '"a\nb"'
    assert csv_escape("a\rb") == '"a\rb"'


def test_escape_tab_wraps_in_quotes():
    assert csv_escape("a\tb") == '"a\tb"'


def test_newline_encoding():
    """All three line break styles become a literal backslash-n."""
    assert encode_newlines("a\nb") == "a\\nb"
    assert encode_newlines("a\r\nb") == "a\\nb"
    assert encode_newlines("a\rb") == "a\\nb"
    assert decode_newlines("a\\nb") == "a\nb"


# =============================================================================
# Line splitting
# =============================================================================

def test_split_crlf_is_one_terminator():
    assert split_csv_lines("a,b\r\nc,d\r\n") == ["a,b", "c,d"]


def test_split_mixed_terminators():
    assert split_csv_lines("a\rb\nc\r\nd") == ["a", "b", "c", "d"]


def test_split_keeps_quoted_line_breaks():
    text = 'key,"line one\r\nline two"\r\nnext,row\r\n'
    assert split_csv_lines(text) == ['key,"line one\r\nline two"', "next,row"]


def test_split_doubled_quote_does_not_toggle():
    text = 'a,"say ""x""\nstill"\nb'
    assert split_csv_lines(text) == ['a,"say ""x""\nstill"', "b"]


def test_split_drops_blank_lines():
    assert split_csv_lines("a\n\n\nb\n\n") == ["a", "b"]


# =============================================================================
# Cell splitting
# =============================================================================

def test_parse_line_simple():
    assert parse_csv_line("a,b,c") == ["a", "b", "c"]


def test_parse_line_quoted_comma():
    assert parse_csv_line('k,"red, blue",x') == ["k", "red, blue", "x"]


def test_parse_line_doubled_quotes():
    assert parse_csv_line('k,"He said ""hi"""') == ["k", 'He said "hi"']


def test_parse_line_empty_cells():
    assert parse_csv_line('a,,""') == ["a", "", ""]
    assert parse_csv_line("") == [""]
    assert parse_csv_line(None) == []


# =============================================================================
# parse_csv
# =============================================================================

def test_parse_empty_input():
    assert parse_csv(None).is_empty
    assert parse_csv("").is_empty
    assert parse_csv("  \r\n\t ").is_empty


def test_parse_header_too_short():
    parsed = parse_csv("Key\r\ngreeting\r\n")
    assert parsed.is_empty
    assert parsed.rows == []


def test_parse_sample(sample_csv):
    parsed = parse_csv(sample_csv)
    assert parsed.header == ["Key", "Type", "English [en]", "French [fr]"]
    assert parsed.language_headers == ["English [en]", "French [fr]"]
    assert len(parsed.rows) == 3
    assert parsed.rows[2] == ["logo", "Sprite", "logo_en", "logo_fr"]


# =============================================================================
# Export
# =============================================================================

def test_export_sample(table, sample_csv):
    assert export_csv(table) == sample_csv


def test_export_lf_terminator(table):
    text = export_csv(table, line_terminator=LF)
    assert "\r" not in text
    assert text.splitlines()[0] == "Key,Type,English [en],French [fr]"


def test_export_header_without_code():
    table = LocalizationTable(
        languages=[Language(name="English"), Language(name="Klingon, Old", code="tlh")],
        terms=[],
    )
    assert export_csv(table, LF) == 'Key,Type,English,"Klingon, Old [tlh]"\n'


def test_export_unknown_type_and_short_values():
    table = LocalizationTable(
        languages=[Language(name="English", code="en"), Language(name="French", code="fr")],
        terms=[Term(key="odd", term_type=42, values=["only english"])],
    )
    lines = export_csv(table, LF).splitlines()
    assert lines[1] == "odd,42,only english,"


def test_export_quotes_and_newlines():
    table = LocalizationTable(
        languages=[Language(name="English", code="en")],
        terms=[
            Term(key="colors", values=["red, blue"]),
            Term(key="quote", values=['He said "hi"']),
            Term(key="multi", values=["a\nb"]),
        ],
    )
    lines = export_csv(table, LF).splitlines()
    assert lines[1] == 'colors,Text,"red, blue"'
    assert lines[2] == 'quote,Text,"He said ""hi"""'
    # Literal backslash-n, one physical line
    assert lines[3] == "multi,Text,a\\nb"
    assert len(lines) == 4


def test_export_does_not_mutate(table):
    before = table.to_dict()
    export_csv(table)
    assert table.to_dict() == before


def test_export_then_parse_preserves_cells():
    table = LocalizationTable(
        languages=[Language(name="English", code="en")],
        terms=[Term(key="tricky", values=['x, "y"\r\nz'])],
    )
    parsed = parse_csv(export_csv(table))
    assert parsed.rows == [["tricky", "Text", 'x, "y"\\nz']]


# =============================================================================
# TSV conversion
# =============================================================================

def test_tsv_to_csv_keeps_quoted_tabs():
    text = 'Key\tType\tEnglish\nk\tText\t"a\tb"\n'
    assert tsv_to_csv(text) == 'Key,Type,English\nk,Text,"a\tb"\n'


def test_csv_to_tsv_keeps_quoted_commas():
    text = 'k,Text,"red, blue"\r\n'
    assert csv_to_tsv(text) == 'k\tText\t"red, blue"\r\n'


def test_tsv_round_trip(table):
    table.terms[0].values[0] = "Hello, world"
    text = tsv_to_csv(csv_to_tsv(export_csv(table)))
    assert parse_csv(text).rows[0] == ["greeting", "Text", "Hello, world", "Bonjour"]


def test_tsv_round_trip_keeps_tabs_in_values():
    table = LocalizationTable(
        languages=[Language(name="English", code="en"), Language(name="French", code="fr")],
        terms=[Term(key="k", values=["a\tb", "fr"])],
    )
    tsv = csv_to_tsv(export_csv(table))
    assert tsv.splitlines()[1] == 'k\tText\t"a\tb"\tfr'
    assert parse_csv(tsv_to_csv(tsv)).rows == [["k", "Text", "a\tb", "fr"]]
