"""Render the document model as Markdown."""
from __future__ import annotations

import re
from typing import Optional, Sequence, Tuple

from docx2md.model.elements import Run
from docx2md.renderer.base import BlockRenderer
from docx2md.renderer.utils import UNDERLINE_HTML, RenderContext, split_whitespace

TABLE_SEPARATOR_CELL = "---"

_INLINE_SYNTAX = re.compile(r"([\\`*_\[\]])")
# A body line that would otherwise parse as an ATX heading
_HEADING_LIKE = re.compile(r"^( {0,3})#", re.MULTILINE)


class MarkdownRenderer(BlockRenderer):
    """Markdown with footnote extensions (``[^id]``).

    Tables always treat their first row as the header row.
    """

    def _format_run(self, run: Run, context: RenderContext) -> str:
        leading, core, trailing = split_whitespace(run.text)
        if not core:
            return run.text
        core = _INLINE_SYNTAX.sub(r"\\\1", core)
        if run.underline and context.options.underline == UNDERLINE_HTML:
            core = f"<u>{core}</u>"
        if run.italic:
            core = f"*{core}*"
        if run.bold:
            core = f"**{core}**"
        return f"{leading}{core}{trailing}"

    def _paragraph(self, text: str, heading_level: Optional[int]) -> str:
        if heading_level is None:
            return _HEADING_LIKE.sub(r"\1\\#", text)
        single_line = text.replace("\n", " ")
        return f"{'#' * heading_level} {single_line}"

    def _link(self, text: str, target: str) -> str:
        return f"[{text}]({target})"

    def _footnote_reference(self, footnote_id: str) -> str:
        return f"[^{footnote_id}]"

    def _cell(self, parts: Sequence[str], context: RenderContext) -> str:
        text = context.options.cell_break.join(parts)
        return text.replace("|", "\\|").replace("\n", context.options.cell_break)

    def _table(self, rows: Sequence[Sequence[str]]) -> str:
        lines = [self._table_line(cells) for cells in rows]
        separator = self._table_line([TABLE_SEPARATOR_CELL] * len(rows[0]))
        lines.insert(1, separator)
        return "\n".join(lines)

    def _footnote_section(self, notes: Sequence[Tuple[str, str]]) -> str:
        return "\n".join(f"[^{note_id}]: {text}".rstrip() for note_id, text in notes)

    @staticmethod
    def _table_line(cells: Sequence[str]) -> str:
        return "| " + " | ".join(cells) + " |"
