#!/usr/bin/env python3
"""
Table stores: container formats a LocalizationTable is persisted in.

Supported formats:
- JSON: single JSON document
- YAML: same structure as block YAML
"""

from .base import StoreRegistry, TableStore
from .json_store import JsonTableStore
from .yaml_store import YamlTableStore

# Register stores (order matters for extension conflicts)
StoreRegistry.register(JsonTableStore)
StoreRegistry.register(YamlTableStore)

__all__ = [
    'TableStore',
    'StoreRegistry',
    'JsonTableStore',
    'YamlTableStore',
]
