#!/usr/bin/env python3
"""
JSON table store.

```json
{
  "name": "I2Languages",
  "languages": [
    {"name": "English", "code": "en", "flags": 0},
    {"name": "French", "code": "fr", "flags": 0}
  ],
  "terms": [
    {"key": "Menu/Start", "type": "Text", "values": ["Start", "Commencer"]}
  ]
}
```
"""

import json

from ..table import LocalizationTable
from .base import TableStore


class JsonTableStore(TableStore):
    """Tables stored as a single JSON document."""

    def __init__(self, indent: int = 2):
        self.indent = indent

    @property
    def name(self) -> str:
        return "json"

    @property
    def file_extensions(self) -> list[str]:
        return ["json"]

    def load(self, content: str) -> LocalizationTable:
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON: {e}")

        return LocalizationTable.from_dict(self.check_root(data))

    def dump(self, table: LocalizationTable) -> str:
        return json.dumps(table.to_dict(), ensure_ascii=False, indent=self.indent) + "\n"
