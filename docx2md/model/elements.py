"""In-memory representation of parsed document content."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Union


@dataclass(slots=True)
class Run:
    """Represents a contiguous run of text with uniform inline formatting."""

    text: str
    bold: bool = False
    italic: bool = False
    underline: bool = False
    hyperlink_id: Optional[str] = None
    anchor: Optional[str] = None
    footnote_id: Optional[str] = None

    @property
    def is_link(self) -> bool:
        return self.hyperlink_id is not None or self.anchor is not None


@dataclass(slots=True)
class Paragraph:
    """Block element for paragraphs in the document body."""

    runs: List[Run] = field(default_factory=list)
    style_id: Optional[str] = None

    @property
    def text(self) -> str:
        return "".join(run.text for run in self.runs)


@dataclass(slots=True)
class TableCell:
    """Single table cell container."""

    content: List["BlockElement"] = field(default_factory=list)


@dataclass(slots=True)
class TableRow:
    """Row with a sequence of cells."""

    cells: List[TableCell] = field(default_factory=list)


@dataclass(slots=True)
class Table:
    """Tabular structure extracted from Word tables."""

    rows: List[TableRow] = field(default_factory=list)
    style_id: Optional[str] = None

    @property
    def column_count(self) -> int:
        return max((len(row.cells) for row in self.rows), default=0)


@dataclass(slots=True)
class Bookmark:
    """Named anchor point; ``block_index`` points at the enclosing top-level block."""

    name: str
    bookmark_id: Optional[str] = None
    block_index: Optional[int] = None


BlockElement = Union[Paragraph, Table, Bookmark]


@dataclass(slots=True)
class DocumentTree:
    """Ordered body blocks plus the bookmark index."""

    blocks: List[BlockElement] = field(default_factory=list)
    bookmarks: Dict[str, Bookmark] = field(default_factory=dict)

    @property
    def paragraphs(self) -> List[Paragraph]:
        return [block for block in self.blocks if isinstance(block, Paragraph)]

    @property
    def tables(self) -> List[Table]:
        """Every table in document order, including tables nested in cells."""
        return list(_iter_tables(self.blocks))


def _iter_tables(blocks: List[BlockElement]) -> Iterator[Table]:
    for block in blocks:
        if isinstance(block, Table):
            yield block
            for row in block.rows:
                for cell in row.cells:
                    yield from _iter_tables(cell.content)
