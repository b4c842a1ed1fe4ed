#!/usr/bin/env python3
"""
YAML table store.

Same structure as the JSON store, written as block YAML:

```yaml
name: I2Languages
languages:
- name: English
  code: en
  flags: 0
terms:
- key: Menu/Start
  type: Text
  values:
  - Start
```
"""

import yaml

from ..table import LocalizationTable
from .base import TableStore


class YamlTableStore(TableStore):
    """Tables stored as a YAML document."""

    @property
    def name(self) -> str:
        return "yaml"

    @property
    def file_extensions(self) -> list[str]:
        return ["yml", "yaml"]

    def load(self, content: str) -> LocalizationTable:
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML: {e}")

        if data is None:
            return LocalizationTable()

        return LocalizationTable.from_dict(self.check_root(data))

    def dump(self, table: LocalizationTable) -> str:
        return yaml.safe_dump(
            table.to_dict(),
            allow_unicode=True,
            default_flow_style=False,
            sort_keys=False,
        )
