"""Parse document.xml into structured content blocks."""
from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Tuple
from xml.etree import ElementTree as ET

from docx2md.model.elements import (
    BlockElement,
    Bookmark,
    DocumentTree,
    Paragraph,
    Run,
    Table,
    TableCell,
    TableRow,
)
from docx2md.utils.logger import get_logger
from docx2md.utils.xml_utils import Namespaces, is_on, local_name, qualify, word_attr

LOGGER = get_logger(__name__)

GO_BACK_BOOKMARK = "_GoBack"
BOOKMARK_START = qualify("w:bookmarkStart")

# Wrappers whose runs belong to the surrounding paragraph
_TRANSPARENT_WRAPPERS = ("ins", "smartTag", "customXml", "sdt", "sdtContent", "fldSimple")


class DocumentParser:
    """Transforms Word body XML into model elements."""

    def __init__(self, document_xml: ET.ElementTree) -> None:
        self._document_xml = document_xml

    def parse(self) -> DocumentTree:
        """Parse the document body into block elements and collect bookmarks."""
        root = self._document_xml.getroot()
        body = root.find("w:body", Namespaces.WORD)
        if body is None:
            LOGGER.warning("document.xml missing body element")
            return DocumentTree()

        blocks = self._parse_blocks(body)
        bookmarks = self._collect_bookmarks(root, body)
        LOGGER.debug("Parsed %d blocks and %d bookmarks", len(blocks), len(bookmarks))
        return DocumentTree(blocks=blocks, bookmarks=bookmarks)

    def _parse_blocks(self, container: ET.Element) -> List[BlockElement]:
        blocks: List[BlockElement] = []
        for child in list(container):
            tag = local_name(child.tag)
            if tag == "p":
                blocks.append(self._parse_paragraph(child))
            elif tag == "tbl":
                blocks.append(self._parse_table(child))
            elif tag in ("sectPr", "tcPr"):
                continue
            else:
                LOGGER.debug("Skipping unsupported element: %s", tag)
        return blocks

    def _parse_paragraph(self, paragraph_el: ET.Element) -> Paragraph:
        return Paragraph(runs=self._parse_inline(paragraph_el), style_id=self._get_style_id(paragraph_el))

    def _parse_inline(self, parent: ET.Element) -> List[Run]:
        runs: List[Run] = []
        for child in list(parent):
            tag = local_name(child.tag)
            if tag == "r":
                runs.extend(self._parse_run(child))
            elif tag == "hyperlink":
                runs.extend(self._parse_hyperlink(child))
            elif tag in _TRANSPARENT_WRAPPERS:
                runs.extend(self._parse_inline(child))
            elif tag in ("pPr", "bookmarkStart", "bookmarkEnd", "proofErr", "sdtPr", "sdtEndPr"):
                continue
            else:
                LOGGER.debug("Skipping paragraph child element: %s", tag)
        return runs

    def _parse_table(self, table_el: ET.Element) -> Table:
        rows: List[TableRow] = []
        for row_el in table_el.findall("w:tr", Namespaces.WORD):
            cells = [TableCell(content=self._parse_blocks(cell_el)) for cell_el in row_el.findall("w:tc", Namespaces.WORD)]
            rows.append(TableRow(cells=cells))

        style_el = table_el.find("w:tblPr/w:tblStyle", Namespaces.WORD)
        return Table(rows=rows, style_id=word_attr(style_el, "w:val"))

    def _get_style_id(self, paragraph_el: ET.Element) -> Optional[str]:
        return word_attr(paragraph_el.find("w:pPr/w:pStyle", Namespaces.WORD), "w:val")

    # ------------------------------------------------------------------
    # Runs

    def _parse_run(self, run_el: ET.Element) -> List[Run]:
        """Parse a run element; a footnote reference becomes its own run."""
        runs: List[Run] = []
        bold, italic, underline = self._extract_run_flags(run_el)

        def make(text: str, footnote_id: Optional[str] = None) -> Run:
            return Run(text=text, bold=bold, italic=italic, underline=underline, footnote_id=footnote_id)

        current_text = ""
        for child in list(run_el):
            tag = local_name(child.tag)
            if tag == "t":
                current_text += child.text or ""
            elif tag == "tab":
                current_text += "\t"
            elif tag in ("br", "cr"):
                current_text += "\n"
            elif tag == "footnoteReference":
                if current_text:
                    runs.append(make(current_text))
                    current_text = ""
                runs.append(make("", footnote_id=word_attr(child, "w:id")))
            elif tag in ("rPr", "lastRenderedPageBreak", "softHyphen"):
                continue
            else:
                LOGGER.debug("Skipping run child element: %s", tag)

        if current_text or not runs:
            runs.append(make(current_text))
        return runs

    def _parse_hyperlink(self, hyperlink_el: ET.Element) -> List[Run]:
        """Runs inside a hyperlink carry its relationship id and anchor."""
        r_id = word_attr(hyperlink_el, "r:id")
        anchor = word_attr(hyperlink_el, "w:anchor")
        runs = self._parse_inline(hyperlink_el)
        for run in runs:
            run.hyperlink_id = r_id
            run.anchor = anchor
        return runs

    def _extract_run_flags(self, run_el: ET.Element) -> Tuple[bool, bool, bool]:
        rpr = run_el.find("w:rPr", Namespaces.WORD)
        if rpr is None:
            return False, False, False
        return (
            is_on(rpr.find("w:b", Namespaces.WORD)),
            is_on(rpr.find("w:i", Namespaces.WORD)),
            is_on(rpr.find("w:u", Namespaces.WORD)),
        )

    # ------------------------------------------------------------------
    # Bookmarks

    def _collect_bookmarks(self, root: ET.Element, body: ET.Element) -> Dict[str, Bookmark]:
        """Second pass over the whole tree; ``_GoBack`` is always dropped."""
        owners = dict(self._block_owners(body))
        bookmarks: Dict[str, Bookmark] = {}
        for node in root.iter(BOOKMARK_START):
            name = word_attr(node, "w:name")
            if not name or name == GO_BACK_BOOKMARK:
                continue
            bookmarks[name] = Bookmark(
                name=name,
                bookmark_id=word_attr(node, "w:id"),
                block_index=owners.get(id(node)),
            )
        return bookmarks

    def _block_owners(self, body: ET.Element) -> Iterator[Tuple[int, int]]:
        """Yield ``(id(bookmark node), block index)`` for bookmarks inside blocks."""
        index = 0
        for child in list(body):
            if local_name(child.tag) not in ("p", "tbl"):
                continue
            for node in child.iter(BOOKMARK_START):
                yield id(node), index
            index += 1
