"""Helpers to persist intermediate representations for debugging."""
from __future__ import annotations

import json
from dataclasses import fields, is_dataclass
from pathlib import Path
from typing import Any

from docx2md.model.elements import DocumentTree


class DebugDumper:
    """Writes intermediate artifacts onto disk for inspection."""

    def __init__(self, directory: Path) -> None:
        self.directory = directory

    def dump(self, tree: DocumentTree) -> Path:
        """Persist the document tree as JSON for offline analysis."""
        self.directory.mkdir(parents=True, exist_ok=True)
        target = self.directory / "document_tree.json"
        target.write_text(json.dumps(self._serialize(tree), indent=2), encoding="utf-8")
        return target

    def _serialize(self, value: Any) -> Any:
        # type tag keeps paragraphs, tables and bookmarks apart in the dump
        if is_dataclass(value):
            payload = {"type": type(value).__name__}
            payload.update({f.name: self._serialize(getattr(value, f.name)) for f in fields(value)})
            return payload
        if isinstance(value, dict):
            return {k: self._serialize(v) for k, v in value.items()}
        if isinstance(value, (list, tuple)):
            return [self._serialize(v) for v in value]
        return value
