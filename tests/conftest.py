#!/usr/bin/env python3
"""Shared fixtures: a small two-language table."""

import pytest

from i2loc.table import Language, LocalizationTable, Term, TermType


def make_table() -> LocalizationTable:
    return LocalizationTable(
        name="I2Languages",
        languages=[
            Language(name="English", code="en"),
            Language(name="French", code="fr", flags=2),
        ],
        terms=[
            Term(key="greeting", term_type=TermType.TEXT, values=["Hello", "Bonjour"],
                 extra={"description": "Main menu greeting"}),
            Term(key="farewell", term_type=TermType.TEXT, values=["Bye", "Au revoir"]),
            Term(key="logo", term_type=TermType.SPRITE, values=["logo_en", "logo_fr"]),
        ],
    )


@pytest.fixture
def table():
    """Fixture with 2 languages and 3 terms."""
    return make_table()


@pytest.fixture
def sample_csv():
    """CSV text matching the table fixture, CRLF terminated."""
    return SAMPLE_CSV


SAMPLE_CSV = (
    "Key,Type,English [en],French [fr]\r\n"
    "greeting,Text,Hello,Bonjour\r\n"
    "farewell,Text,Bye,Au revoir\r\n"
    "logo,Sprite,logo_en,logo_fr\r\n"
)
