"""Style model captures Word style definitions in a normalized form."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Mapping, Optional

from docx2md.utils.errors import StyleUnresolved

HEADING_PATTERN = re.compile(r"heading\s*([1-9])$", re.IGNORECASE)
MAX_HEADING_LEVEL = 6


@dataclass(frozen=True)
class StyleDefinition:
    """Named style entry from styles.xml."""

    style_id: str
    name: str
    style_type: str = "paragraph"


class StylesCatalog:
    """Collection of styles keyed by identifier.

    Lookups never fail: unknown ids resolve to ``None`` and callers render the
    default formatting. :meth:`require` exists for callers that want the
    explicit :class:`StyleUnresolved` condition.
    """

    def __init__(self, styles: Mapping[str, StyleDefinition], font_size: Optional[float] = None):
        self._styles = dict(styles)
        self.font_size = font_size

    @classmethod
    def empty(cls) -> "StylesCatalog":
        return cls({})

    def get(self, style_id: Optional[str]) -> Optional[StyleDefinition]:
        """Return the style definition given its identifier."""
        if style_id is None:
            return None
        return self._styles.get(style_id)

    def require(self, style_id: str) -> StyleDefinition:
        style = self._styles.get(style_id)
        if style is None:
            raise StyleUnresolved(style_id)
        return style

    def name_for(self, style_id: Optional[str]) -> Optional[str]:
        style = self.get(style_id)
        return style.name if style else None

    def names(self) -> Dict[str, str]:
        """Return the style-id → style-name map."""
        return {style_id: style.name for style_id, style in self._styles.items()}

    def heading_level(self, style_id: Optional[str], max_level: int = MAX_HEADING_LEVEL) -> Optional[int]:
        """Heading depth for styles named ``heading N``; ``None`` otherwise."""
        name = self.name_for(style_id)
        if name is None:
            return None
        match = HEADING_PATTERN.match(name.strip())
        if not match:
            return None
        level = int(match.group(1))
        return level if level <= max_level else None

    def __len__(self) -> int:
        return len(self._styles)
