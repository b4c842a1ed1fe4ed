#!/usr/bin/env python3
"""
Localization table model.

A LocalizationTable is an ordered list of Languages and an ordered list of
Terms. Each Term holds one string value per Language, aligned by position:
``term.values[i]`` is the text for ``table.languages[i]``.

The host that owns a table usually stores extra per-record fields (flags,
descriptions, whatever its schema carries). Those are kept verbatim in
``extra`` so they survive a load/save cycle and can be used as the template
shape when new records are synthesized during a merge.
"""

import copy
import logging
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Optional

logger = logging.getLogger(__name__)


class TermType(IntEnum):
    """Kind of asset a term resolves to."""
    TEXT = 0
    FONT = 1
    TEXTURE = 2
    AUDIO_CLIP = 3
    GAME_OBJECT = 4
    SPRITE = 5
    MATERIAL = 6
    CHILD = 7
    MESH = 8
    CUSTOM = 9


TERM_TYPE_NAMES = {
    TermType.TEXT: "Text",
    TermType.FONT: "Font",
    TermType.TEXTURE: "Texture",
    TermType.AUDIO_CLIP: "AudioClip",
    TermType.GAME_OBJECT: "GameObject",
    TermType.SPRITE: "Sprite",
    TermType.MATERIAL: "Material",
    TermType.CHILD: "Child",
    TermType.MESH: "Mesh",
    TermType.CUSTOM: "Custom",
}

_TERM_TYPE_CODES = {name.lower(): int(code) for code, name in TERM_TYPE_NAMES.items()}


def term_type_to_string(term_type: int) -> str:
    """
    Render a term type code as its name.

    Codes outside the known range come back as their decimal string so they
    survive an export/import cycle unchanged.
    """
    try:
        return TERM_TYPE_NAMES[TermType(term_type)]
    except ValueError:
        return str(term_type)


def term_type_from_string(value: Optional[str]) -> int:
    """
    Resolve a term type name (case-insensitive) or numeric string to a code.

    Anything unrecognised resolves to Text (0).
    """
    if value is None:
        return int(TermType.TEXT)

    text = value.strip()
    code = _TERM_TYPE_CODES.get(text.lower())
    if code is not None:
        return code

    try:
        return int(text)
    except ValueError:
        return int(TermType.TEXT)


def _text(value: Any) -> str:
    """
    Scalar from a loaded document as text.

    YAML 1.1 reads bare yes/no (the Norwegian code "no") as booleans; they are
    turned back into "yes" / "no" instead of being dropped.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "yes" if value else "no"
    return str(value)


@dataclass
class Language:
    """
    A language column of the table.

    Attributes:
        name: Display label ("English")
        code: Locale code ("en"), may be empty
        flags: Host flag bits (disabled, load-on-demand, ...)
        extra: Any other host fields, carried verbatim
    """
    name: str
    code: str = ""
    flags: int = 0
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def header(self) -> str:
        """Column header used in CSV: ``Name`` or ``Name [code]``."""
        if not self.code:
            return self.name
        return f"{self.name} [{self.code}]"

    def to_dict(self) -> dict:
        data = {"name": self.name, "code": self.code, "flags": self.flags}
        if self.extra:
            data["extra"] = copy.deepcopy(self.extra)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Language":
        return cls(
            name=_text(data.get("name")),
            code=_text(data.get("code")),
            flags=int(data.get("flags") or 0),
            extra=dict(data.get("extra") or {}),
        )


@dataclass
class Term:
    """
    A single localization key with one value per language.

    Attributes:
        key: Unique identifier ("Menu/Start")
        term_type: TermType code; unknown codes are kept as-is
        values: One string per language, positionally aligned
        extra: Host fields such as description or flags, carried verbatim
    """
    key: str
    term_type: int = TermType.TEXT
    values: list[str] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Ensure the key is a string and values hold no None."""
        self.key = str(self.key)
        self.term_type = int(self.term_type)
        self.values = ["" if v is None else str(v) for v in self.values]

    def value(self, index: int) -> str:
        """Value for a language index, empty when the list is short."""
        if 0 <= index < len(self.values):
            return self.values[index]
        return ""

    def ensure_size(self, size: int) -> None:
        """Pad values with empty strings until there are at least ``size``."""
        while len(self.values) < size:
            self.values.append("")

    def set_value(self, index: int, text: str) -> None:
        """Write a value, padding the list first if it is too short."""
        if index < 0:
            raise IndexError(f"Invalid language index: {index}")
        self.ensure_size(index + 1)
        self.values[index] = text

    def to_dict(self) -> dict:
        data = {
            "key": self.key,
            "type": term_type_to_string(self.term_type),
            "values": list(self.values),
        }
        if self.extra:
            data["extra"] = copy.deepcopy(self.extra)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Term":
        raw_type = data.get("type", TermType.TEXT)
        if isinstance(raw_type, int):
            term_type = raw_type
        else:
            term_type = term_type_from_string(str(raw_type))

        return cls(
            key=_text(data.get("key")),
            term_type=term_type,
            values=[_text(v) for v in data.get("values") or []],
            extra=dict(data.get("extra") or {}),
        )


@dataclass
class LocalizationTable:
    """Ordered languages plus ordered terms."""
    languages: list[Language] = field(default_factory=list)
    terms: list[Term] = field(default_factory=list)
    name: str = ""

    def language_header(self, index: int) -> str:
        return self.languages[index].header

    def find_term(self, key: str) -> Optional[Term]:
        """First term with this key, or None."""
        for term in self.terms:
            if term.key == key:
                return term
        return None

    def term_index(self) -> dict[str, Term]:
        """
        Map of key -> term.

        When the table holds duplicate keys only the first occurrence is
        reachable, later ones are left untouched.
        """
        index: dict[str, Term] = {}
        for term in self.terms:
            if term.key not in index:
                index[term.key] = term
        return index

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "languages": [lang.to_dict() for lang in self.languages],
            "terms": [term.to_dict() for term in self.terms],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "LocalizationTable":
        return cls(
            name=_text(data.get("name")),
            languages=[Language.from_dict(d) for d in data.get("languages") or []],
            terms=[Term.from_dict(d) for d in data.get("terms") or []],
        )


def clone_language(template: Language, name: str, code: str) -> Optional[Language]:
    """
    Build a new Language shaped like ``template``.

    Host fields are copied from the template, name and code are replaced and
    flags are cleared. Returns None if the template cannot be copied.
    """
    try:
        extra = copy.deepcopy(template.extra)
    except Exception as e:
        logger.warning("Cannot clone language template %r: %s", template.name, e)
        return None

    return Language(name=name, code=code, flags=0, extra=extra)


def clone_term(
    template: Term,
    key: str,
    term_type: int,
    language_count: int,
) -> Optional[Term]:
    """
    Build a new Term shaped like ``template``.

    Every host field except the value list is copied from the template; key
    and type are replaced and the values start as ``language_count`` empty
    strings. Returns None if the template cannot be copied.
    """
    try:
        extra = copy.deepcopy(template.extra)
    except Exception as e:
        logger.warning("Cannot clone term template %r: %s", template.key, e)
        return None

    return Term(
        key=key,
        term_type=term_type,
        values=[""] * language_count,
        extra=extra,
    )
