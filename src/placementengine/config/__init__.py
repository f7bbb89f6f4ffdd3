"""Configuration and policy document loading."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

DOCUMENT_SUFFIXES = (".yaml", ".yml", ".json")


def load_document(path: str | Path) -> Any:
    """Parse a YAML or JSON document; an empty file yields ``None``."""
    path = Path(path)
    with path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle)


class ConfigManager:
    """Look up named YAML/JSON documents under a base directory."""

    def __init__(self, base_path: str | Path):
        self._base_path = Path(base_path)

    def path_for(self, name: str) -> Path:
        for suffix in DOCUMENT_SUFFIXES:
            candidate = self._base_path / f"{name}{suffix}"
            if candidate.exists():
                return candidate
        raise FileNotFoundError(
            f"No {'/'.join(DOCUMENT_SUFFIXES)} document named {name!r} in {self._base_path}"
        )

    def load(self, name: str) -> Any:
        """Load a document by name without file extension."""
        return load_document(self.path_for(name))


__all__ = ["ConfigManager", "DOCUMENT_SUFFIXES", "load_document"]
