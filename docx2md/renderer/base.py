"""Shared block/run traversal for the text-producing renderers."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Sequence, Tuple

from docx2md.model.elements import BlockElement, Bookmark, Paragraph, Run, Table, TableCell
from docx2md.renderer.utils import FootnoteCollector, RenderContext, group_links
from docx2md.utils.errors import RelationshipUnresolved, StyleUnresolved
from docx2md.utils.logger import get_logger

LOGGER = get_logger(__name__)


class BlockRenderer(ABC):
    """Walks blocks in document order; subclasses decide how each leaf looks.

    Traversal, fallbacks and footnote bookkeeping live here so every output
    format orders blocks and resolves references the same way.
    """

    block_separator = "\n\n"

    def render(self, block: BlockElement, context: RenderContext) -> str:
        """Render a single block. Footnotes it references are not appended."""
        return self._render_block(block, context, FootnoteCollector())

    def render_document(self, blocks: Iterable[BlockElement], context: RenderContext) -> str:
        """Render all blocks followed by the definitions of referenced footnotes."""
        notes = FootnoteCollector()
        parts = [self._render_block(block, context, notes) for block in blocks if not self._is_empty(block)]
        if notes:
            parts.append(self._footnote_section([(note_id, self._footnote_text(note_id, context)) for note_id in notes]))
        return self.block_separator.join(parts)

    # ------------------------------------------------------------------
    # Traversal

    @staticmethod
    def _is_empty(block: BlockElement) -> bool:
        """Bookmarks and tables without cells take no slot between blocks."""
        return isinstance(block, Bookmark) or (isinstance(block, Table) and block.column_count == 0)

    def _render_block(self, block: BlockElement, context: RenderContext, notes: FootnoteCollector) -> str:
        if isinstance(block, Paragraph):
            return self._render_paragraph(block, context, notes)
        if isinstance(block, Table):
            return self._render_table(block, context, notes)
        if isinstance(block, Bookmark):
            return ""
        LOGGER.debug("No rendering for block type %s", type(block).__name__)
        return ""

    def _render_paragraph(self, paragraph: Paragraph, context: RenderContext, notes: FootnoteCollector) -> str:
        text = self._render_runs(paragraph.runs, context, notes)
        return self._paragraph(text, self._heading_level(paragraph, context))

    def _render_runs(self, runs: Sequence[Run], context: RenderContext, notes: FootnoteCollector) -> str:
        parts: List[str] = []
        for group in group_links(runs):
            text = "".join(self._render_run(run, context, notes) for run in group)
            if group[0].is_link:
                text = self._render_link(group[0], text, context)
            parts.append(text)
        return "".join(parts)

    def _render_run(self, run: Run, context: RenderContext, notes: FootnoteCollector) -> str:
        text = self._format_run(run, context)
        if run.footnote_id is not None:
            notes.register(run.footnote_id)
            text += self._footnote_reference(run.footnote_id)
        return text

    def _render_table(self, table: Table, context: RenderContext, notes: FootnoteCollector) -> str:
        columns = table.column_count
        if columns == 0:
            return ""
        rows: List[List[str]] = []
        for row in table.rows:
            cells = [self._render_cell(cell, context, notes) for cell in row.cells]
            cells.extend("" for _ in range(columns - len(cells)))
            rows.append(cells)
        return self._table(rows)

    def _render_cell(self, cell: TableCell, context: RenderContext, notes: FootnoteCollector) -> str:
        parts = [self._render_block(block, context, notes) for block in cell.content]
        return self._cell([part for part in parts if part], context)

    # ------------------------------------------------------------------
    # Fallbacks

    def _heading_level(self, paragraph: Paragraph, context: RenderContext) -> Optional[int]:
        if paragraph.style_id is None:
            return None
        try:
            return context.heading_level(paragraph.style_id)
        except StyleUnresolved:
            LOGGER.debug("Style %s not defined, rendering as body text", paragraph.style_id)
            return None

    def _render_link(self, run: Run, text: str, context: RenderContext) -> str:
        if not text:
            return text
        if run.hyperlink_id is None:
            return self._link(text, f"#{run.anchor}")
        try:
            target = context.hyperlink_target(run.hyperlink_id)
        except RelationshipUnresolved:
            LOGGER.debug("Hyperlink %s not resolvable, rendering plain text", run.hyperlink_id)
            return text
        if run.anchor:
            target = f"{target}#{run.anchor}"
        return self._link(text, target)

    def _footnote_text(self, footnote_id: str, context: RenderContext) -> str:
        text = context.footnotes.get(footnote_id)
        if text is None:
            LOGGER.debug("Footnote %s not defined, emitting empty definition", footnote_id)
            return ""
        return text

    # ------------------------------------------------------------------
    # Leaf mappings

    @abstractmethod
    def _format_run(self, run: Run, context: RenderContext) -> str:
        """Apply inline formatting to the run text."""

    @abstractmethod
    def _paragraph(self, text: str, heading_level: Optional[int]) -> str:
        """Wrap rendered runs as a body paragraph or a heading."""

    @abstractmethod
    def _link(self, text: str, target: str) -> str:
        ...

    @abstractmethod
    def _footnote_reference(self, footnote_id: str) -> str:
        ...

    @abstractmethod
    def _cell(self, parts: Sequence[str], context: RenderContext) -> str:
        ...

    @abstractmethod
    def _table(self, rows: Sequence[Sequence[str]]) -> str:
        """Rows arrive padded to the same number of cells."""

    @abstractmethod
    def _footnote_section(self, notes: Sequence[Tuple[str, str]]) -> str:
        """Render ``(footnote id, text)`` pairs in first-reference order."""
