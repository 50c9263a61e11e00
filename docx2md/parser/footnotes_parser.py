"""Read footnote bodies from footnotes.xml."""
from __future__ import annotations

from typing import Dict
from xml.etree import ElementTree as ET

from docx2md.utils.xml_utils import Namespaces, find_text, word_attr


class FootnotesParser:
    """Map each footnote id to the text of its first text run."""

    def __init__(self, footnotes_xml: ET.ElementTree) -> None:
        self._footnotes_xml = footnotes_xml

    def parse(self) -> Dict[str, str]:
        footnotes: Dict[str, str] = {}
        for footnote_el in self._footnotes_xml.getroot().findall("w:footnote", Namespaces.WORD):
            footnote_id = word_attr(footnote_el, "w:id")
            if footnote_id is None:
                continue
            # separator and continuation notes carry no w:t
            footnotes[footnote_id] = find_text(footnote_el, ".//w:t") or ""
        return footnotes
