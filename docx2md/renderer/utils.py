"""Common helpers shared by renderer implementations."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Mapping, Optional, Sequence, Tuple

from docx2md.model.elements import Run
from docx2md.model.style_model import MAX_HEADING_LEVEL, StylesCatalog
from docx2md.utils.errors import RelationshipUnresolved

UNDERLINE_HTML = "html"
UNDERLINE_DROP = "drop"


@dataclass(frozen=True)
class RenderOptions:
    """Knobs for output conventions that have no single right answer."""

    underline: str = UNDERLINE_HTML
    max_heading_level: int = MAX_HEADING_LEVEL
    cell_break: str = "<br>"

    def __post_init__(self) -> None:
        if self.underline not in (UNDERLINE_HTML, UNDERLINE_DROP):
            raise ValueError(f"Unknown underline convention: {self.underline!r}")
        if not 1 <= self.max_heading_level <= MAX_HEADING_LEVEL:
            raise ValueError(f"max_heading_level must be between 1 and {MAX_HEADING_LEVEL}")


@dataclass(frozen=True)
class RenderContext:
    """Resolver maps a renderer needs to turn blocks into text."""

    styles: StylesCatalog = field(default_factory=StylesCatalog.empty)
    hyperlinks: Mapping[str, str] = field(default_factory=dict)
    footnotes: Mapping[str, str] = field(default_factory=dict)
    options: RenderOptions = field(default_factory=RenderOptions)

    def heading_level(self, style_id: str) -> Optional[int]:
        """Raises :class:`StyleUnresolved` when the style id is unknown."""
        self.styles.require(style_id)
        return self.styles.heading_level(style_id, self.options.max_heading_level)

    def hyperlink_target(self, r_id: str) -> str:
        target = self.hyperlinks.get(r_id)
        if target is None:
            raise RelationshipUnresolved(r_id)
        return target


class FootnoteCollector:
    """Footnote ids in order of first reference."""

    def __init__(self) -> None:
        self._ids: List[str] = []

    def register(self, footnote_id: str) -> None:
        if footnote_id not in self._ids:
            self._ids.append(footnote_id)

    def __iter__(self) -> Iterator[str]:
        return iter(self._ids)

    def __len__(self) -> int:
        return len(self._ids)


def group_links(runs: Sequence[Run]) -> Iterator[List[Run]]:
    """Group consecutive runs that point at the same hyperlink.

    Runs outside hyperlinks come out one per group.
    """
    group: List[Run] = []
    for run in runs:
        if group and run.is_link and _same_link(group[-1], run):
            group.append(run)
            continue
        if group:
            yield group
        group = [run]
    if group:
        yield group


def _same_link(left: Run, right: Run) -> bool:
    return left.is_link and (left.hyperlink_id, left.anchor) == (right.hyperlink_id, right.anchor)


def split_whitespace(text: str) -> Tuple[str, str, str]:
    """Split ``text`` into leading whitespace, core and trailing whitespace."""
    core = text.strip()
    if not core:
        return text, "", ""
    start = text.index(core)
    return text[:start], core, text[start + len(core) :]
