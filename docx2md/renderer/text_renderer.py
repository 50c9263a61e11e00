"""Render the document model as plain text."""
from __future__ import annotations

from typing import Optional, Sequence, Tuple

from docx2md.model.elements import Run
from docx2md.renderer.base import BlockRenderer
from docx2md.renderer.utils import RenderContext


class TextRenderer(BlockRenderer):
    """Formatting is dropped; links keep their text, footnotes become ``[id]``."""

    block_separator = "\n"

    def _format_run(self, run: Run, context: RenderContext) -> str:
        return run.text

    def _paragraph(self, text: str, heading_level: Optional[int]) -> str:
        return text

    def _link(self, text: str, target: str) -> str:
        return text

    def _footnote_reference(self, footnote_id: str) -> str:
        return f"[{footnote_id}]"

    def _cell(self, parts: Sequence[str], context: RenderContext) -> str:
        return " ".join(part.replace("\n", " ") for part in parts)

    def _table(self, rows: Sequence[Sequence[str]]) -> str:
        return "\n".join("\t".join(cells) for cells in rows)

    def _footnote_section(self, notes: Sequence[Tuple[str, str]]) -> str:
        return "\n".join(f"[{note_id}] {text}".rstrip() for note_id, text in notes)
