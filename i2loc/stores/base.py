#!/usr/bin/env python3
"""
Base classes for table stores.

A TableStore reads and writes a LocalizationTable in some container format
(JSON, YAML). The CSV codec and merge engine only ever see the in-memory
table; stores are the layer that persists it between runs.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from ..table import LocalizationTable


class TableStore(ABC):
    """
    Abstract base class for table container formats.

    Subclasses convert between raw file content and LocalizationTable. Invalid
    content raises ValueError with a short description of the problem.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Short format name used on the command line."""
        pass

    @property
    @abstractmethod
    def file_extensions(self) -> list[str]:
        """List of file extensions this store supports (without dot)."""
        pass

    @abstractmethod
    def load(self, content: str) -> LocalizationTable:
        """
        Parse file content into a table.

        Args:
            content: Raw file content as string

        Returns:
            LocalizationTable
        """
        pass

    @abstractmethod
    def dump(self, table: LocalizationTable) -> str:
        """
        Serialize a table.

        Args:
            table: Table to write

        Returns:
            File content as string
        """
        pass

    def validate_content(self, content: str) -> list[str]:
        """
        Validate that content can be loaded by this store.

        Returns:
            List of validation error messages (empty if valid)
        """
        try:
            self.load(content)
        except ValueError as e:
            return [str(e)]
        return []

    def read(self, path: Path) -> LocalizationTable:
        return self.load(Path(path).read_text(encoding="utf-8"))

    def write(self, path: Path, table: LocalizationTable) -> None:
        Path(path).write_text(self.dump(table), encoding="utf-8")

    @staticmethod
    def check_root(data: Any) -> dict:
        """Shared structural checks for dict-shaped containers."""
        if not isinstance(data, dict):
            raise ValueError("Table root must be a mapping")
        for key in ("languages", "terms"):
            if key in data and data[key] is not None and not isinstance(data[key], list):
                raise ValueError(f"'{key}' must be a list")
        for lang in data.get("languages") or []:
            if not isinstance(lang, dict):
                raise ValueError("Each language must be a mapping")
        for term in data.get("terms") or []:
            if not isinstance(term, dict):
                raise ValueError("Each term must be a mapping")
        return data


class StoreRegistry:
    """Registry of available table stores."""

    _stores: dict[str, type[TableStore]] = {}
    _extension_map: dict[str, str] = {}  # extension -> store name

    @classmethod
    def register(cls, store_class: type[TableStore]) -> None:
        """Register a store class."""
        store = store_class()
        cls._stores[store.name.lower()] = store_class
        for ext in store.file_extensions:
            cls._extension_map[ext.lower()] = store.name.lower()

    @classmethod
    def get_store(cls, name: str) -> TableStore:
        """Get store instance by name."""
        name_lower = name.lower()
        if name_lower not in cls._stores:
            available = ', '.join(cls._stores.keys())
            raise ValueError(f"Unknown table format: {name}. Available: {available}")
        return cls._stores[name_lower]()

    @classmethod
    def get_store_for_extension(cls, extension: str) -> TableStore:
        """Get store instance by file extension."""
        ext = extension.lower().lstrip('.')
        if ext not in cls._extension_map:
            available = ', '.join(cls._extension_map.keys())
            raise ValueError(f"Unknown extension: .{ext}. Supported: {available}")
        return cls.get_store(cls._extension_map[ext])

    @classmethod
    def detect_store(cls, filepath: str) -> TableStore:
        """Pick a store from the file extension."""
        return cls.get_store_for_extension(Path(filepath).suffix)

    @classmethod
    def list_stores(cls) -> list[dict[str, Any]]:
        """List all registered stores with their extensions."""
        result = []
        for name, store_class in cls._stores.items():
            store = store_class()
            result.append({
                'name': store.name,
                'extensions': store.file_extensions,
            })
        return result
