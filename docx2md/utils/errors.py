"""Typed exceptions raised while reading and rendering DOCX packages."""
from __future__ import annotations

from typing import Optional


class Docx2mdError(Exception):
    """Base class for every error raised by the library."""


class PartNotFound(Docx2mdError, KeyError):
    """Raised when a requested package part is missing."""

    def __init__(self, part: str, message: Optional[str] = None) -> None:
        self.part = part
        super().__init__(message or f"Package part not found: {part}")

    def __str__(self) -> str:
        return str(self.args[0])


class HandleClosed(Docx2mdError, ValueError):
    """Raised when the package is used after it has been closed."""


class StyleUnresolved(Docx2mdError, LookupError):
    """Raised by strict style lookups when the style id is unknown."""

    def __init__(self, style_id: str) -> None:
        self.style_id = style_id
        super().__init__(f"Style not defined: {style_id}")


class RelationshipUnresolved(Docx2mdError, LookupError):
    """Raised by strict relationship lookups when the id is unknown."""

    def __init__(self, r_id: str) -> None:
        self.r_id = r_id
        super().__init__(f"Relationship not defined: {r_id}")
