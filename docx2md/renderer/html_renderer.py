"""Render the document model into an HTML fragment."""
from __future__ import annotations

from html import escape
from typing import List, Optional, Sequence, Tuple

from docx2md.model.elements import Run
from docx2md.renderer.base import BlockRenderer
from docx2md.renderer.utils import UNDERLINE_HTML, RenderContext


class HtmlRenderer(BlockRenderer):
    """Produce a semantic HTML fragment (no ``<html>``/``<body>`` wrapper)."""

    block_separator = "\n"

    def _format_run(self, run: Run, context: RenderContext) -> str:
        text = escape(run.text, quote=False).replace("\n", "<br>")
        if not text:
            return text
        if run.underline and context.options.underline == UNDERLINE_HTML:
            text = f"<u>{text}</u>"
        if run.italic:
            text = f"<em>{text}</em>"
        if run.bold:
            text = f"<strong>{text}</strong>"
        return text

    def _paragraph(self, text: str, heading_level: Optional[int]) -> str:
        tag = f"h{heading_level}" if heading_level else "p"
        return f"<{tag}>{text}</{tag}>"

    def _link(self, text: str, target: str) -> str:
        return f'<a href="{escape(target)}">{text}</a>'

    def _footnote_reference(self, footnote_id: str) -> str:
        note = escape(footnote_id)
        return f'<sup><a href="#fn-{note}" id="fnref-{note}">{note}</a></sup>'

    def _cell(self, parts: Sequence[str], context: RenderContext) -> str:
        return "".join(parts)

    def _table(self, rows: Sequence[Sequence[str]]) -> str:
        lines: List[str] = ["<table>", "<thead>", self._row(rows[0], "th"), "</thead>"]
        if len(rows) > 1:
            lines.append("<tbody>")
            lines.extend(self._row(cells, "td") for cells in rows[1:])
            lines.append("</tbody>")
        lines.append("</table>")
        return "\n".join(lines)

    def _footnote_section(self, notes: Sequence[Tuple[str, str]]) -> str:
        items = [
            f'<li id="fn-{escape(note_id)}">{escape(text, quote=False)} <a href="#fnref-{escape(note_id)}">&#8617;</a></li>'
            for note_id, text in notes
        ]
        return "\n".join(['<ol class="footnotes">', *items, "</ol>"])

    @staticmethod
    def _row(cells: Sequence[str], tag: str) -> str:
        return "<tr>" + "".join(f"<{tag}>{cell}</{tag}>" for cell in cells) + "</tr>"
