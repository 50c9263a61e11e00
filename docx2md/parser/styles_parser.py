"""Extract style names from styles.xml and produce a catalog."""
from __future__ import annotations

from typing import Dict, Optional
from xml.etree import ElementTree as ET

from docx2md.model.style_model import StyleDefinition, StylesCatalog
from docx2md.utils.logger import get_logger
from docx2md.utils.units import half_points_to_points
from docx2md.utils.xml_utils import Namespaces, local_name, word_attr

LOGGER = get_logger(__name__)

DEFAULT_FONT_SIZE_PATH = "w:docDefaults/w:rPrDefault/w:rPr/w:sz"


class StylesParser:
    """Parse Word style ids and names."""

    def __init__(self, styles_xml: ET.ElementTree) -> None:
        self._styles_xml = styles_xml

    def parse(self) -> StylesCatalog:
        """Parse the XML tree and return a catalog."""
        return StylesCatalog(self._collect_styles(), font_size=self._default_font_size())

    def _collect_styles(self) -> Dict[str, StyleDefinition]:
        styles: Dict[str, StyleDefinition] = {}
        for style_el in self._styles_xml.getroot().findall("w:style", Namespaces.WORD):
            style_id = word_attr(style_el, "w:styleId")
            if not style_id:
                continue
            # w:name comes first in schema order
            children = list(style_el)
            name = word_attr(children[0], "w:val") if children else None
            if name is None:
                LOGGER.debug("Style %s has no name, skipping", style_id)
                continue
            if local_name(children[0].tag) != "name":
                LOGGER.debug("Style %s takes its name from <%s>", style_id, local_name(children[0].tag))
            styles[style_id] = StyleDefinition(
                style_id=style_id,
                name=name,
                style_type=word_attr(style_el, "w:type") or "paragraph",
            )
        return styles

    def _default_font_size(self) -> Optional[float]:
        size_el = self._styles_xml.getroot().find(DEFAULT_FONT_SIZE_PATH, Namespaces.WORD)
        value = word_attr(size_el, "w:val")
        if value is None:
            return None
        try:
            return half_points_to_points(int(value))
        except ValueError:
            return None
