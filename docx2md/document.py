"""Document facade: open a DOCX package once and convert it on demand.

    with Document.open("report.docx") as doc:
        print(doc.to_markdown())
"""
from __future__ import annotations

import io
import zipfile
from pathlib import Path
from typing import Callable, Dict, List, Mapping, Optional, Union
from xml.etree import ElementTree as ET

from docx2md.model.elements import Bookmark, DocumentTree, Paragraph, Table
from docx2md.model.style_model import StylesCatalog
from docx2md.parser.docx_loader import FOOTNOTES_XML_PATH, STYLES_XML_PATH, DocxPackage, PackageSource
from docx2md.parser.document_parser import DocumentParser
from docx2md.parser.footnotes_parser import FootnotesParser
from docx2md.parser.rels_parser import Relationships
from docx2md.parser.styles_parser import StylesParser
from docx2md.renderer.base import BlockRenderer
from docx2md.renderer.html_renderer import HtmlRenderer
from docx2md.renderer.markdown_renderer import MarkdownRenderer
from docx2md.renderer.text_renderer import TextRenderer
from docx2md.renderer.utils import RenderContext, RenderOptions
from docx2md.utils.errors import PartNotFound
from docx2md.utils.logger import get_logger
from docx2md.utils.xml_utils import declared_namespaces, parse_xml, serialize_xml

LOGGER = get_logger(__name__)


class Document:
    """Wraps one DOCX package and exposes its content as Markdown, HTML or text.

    The package handle is held from construction until :meth:`close`,
    :meth:`save` or :meth:`stream`. Resolver maps and the parsed body are
    built on first use and reused for the lifetime of the instance.
    """

    def __init__(self, source: PackageSource, options: Optional[RenderOptions] = None) -> None:
        self._package = DocxPackage.open(source)
        self.options = options or RenderOptions()
        self._styles: Optional[StylesCatalog] = None
        self._relationships: Optional[Relationships] = None
        self._footnotes: Optional[Dict[str, str]] = None
        self._tree: Optional[DocumentTree] = None
        self._replace: Dict[str, bytes] = {}
        LOGGER.debug("Main document part: %s", self._package.main_document_part)

    @classmethod
    def open(cls, source: PackageSource, options: Optional[RenderOptions] = None) -> "Document":
        return cls(source, options)

    def __enter__(self) -> "Document":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._package.closed

    def close(self) -> None:
        self._package.close()

    # ------------------------------------------------------------------
    # Resolvers

    def styles(self) -> StylesCatalog:
        """Style catalog; an empty one when the package has no styles part."""
        self._package.ensure_open()
        if self._styles is None:
            if self._package.has_part(STYLES_XML_PATH):
                self._styles = StylesParser(self._package.xml_part(STYLES_XML_PATH)).parse()
            else:
                LOGGER.warning("%s missing; using default formatting", STYLES_XML_PATH)
                self._styles = StylesCatalog.empty()
        return self._styles

    def relationships(self) -> Relationships:
        """Relationships of the main document part. Raises :class:`PartNotFound`."""
        self._package.ensure_open()
        if self._relationships is None:
            part = self._package.relationships_part
            self._relationships = Relationships.from_part(part, self._package.read(part))
        return self._relationships

    def hyperlinks(self) -> Dict[str, str]:
        """Hyperlink relationship id → target. Raises :class:`PartNotFound`."""
        return self.relationships().hyperlinks()

    def footnotes(self) -> Dict[str, str]:
        """Footnote id → text. Raises :class:`PartNotFound`."""
        self._package.ensure_open()
        if self._footnotes is None:
            self._footnotes = FootnotesParser(self._package.xml_part(FOOTNOTES_XML_PATH)).parse()
        return dict(self._footnotes)

    def font_size(self) -> Optional[float]:
        """Document default font size in points, if the styles part sets one."""
        return self.styles().font_size

    def document_properties(self) -> Dict[str, object]:
        return {
            "font_size": self.font_size(),
            "hyperlinks": self._tolerant(self.hyperlinks),
        }

    # ------------------------------------------------------------------
    # Content

    def tree(self) -> DocumentTree:
        self._package.ensure_open()
        if self._tree is None:
            document_xml = self._package.xml_part(self._package.main_document_part)
            self._tree = DocumentParser(document_xml).parse()
        return self._tree

    def paragraphs(self) -> List[Paragraph]:
        return self.tree().paragraphs

    def tables(self) -> List[Table]:
        return self.tree().tables

    def bookmarks(self) -> Dict[str, Bookmark]:
        return dict(self.tree().bookmarks)

    def to_xml(self) -> ET.ElementTree:
        """Fresh parse of the main document part."""
        return parse_xml(self._package.read(self._package.main_document_part))

    # ------------------------------------------------------------------
    # Rendering

    def render_context(self, options: Optional[RenderOptions] = None) -> RenderContext:
        return RenderContext(
            styles=self.styles(),
            hyperlinks=self._tolerant(self.hyperlinks),
            footnotes=self._tolerant(self.footnotes),
            options=options or self.options,
        )

    def to_markdown(self, options: Optional[RenderOptions] = None) -> str:
        return self._render(MarkdownRenderer(), options)

    def to_html(self, options: Optional[RenderOptions] = None) -> str:
        """Output the entire document as an HTML fragment."""
        return self._render(HtmlRenderer(), options)

    def to_text(self) -> str:
        return self._render(TextRenderer(), None)

    text = to_text

    def __str__(self) -> str:
        return self.to_text()

    def _render(self, renderer: BlockRenderer, options: Optional[RenderOptions]) -> str:
        tree = self.tree()
        return renderer.render_document(tree.blocks, self.render_context(options))

    # ------------------------------------------------------------------
    # Repackaging

    def replace_entry(self, entry_path: str, file_contents: bytes) -> None:
        """Substitute an entry's bytes when the package is saved or streamed."""
        self._package.ensure_open()
        self._replace[entry_path] = file_contents

    def save(self, path: Union[str, Path]) -> None:
        """Write the package to ``path`` and close this document."""
        try:
            buffer = self._repackage()
        finally:
            self.close()
        Path(path).write_bytes(buffer.getvalue())
        LOGGER.info("Saved package to %s", path)

    def stream(self) -> io.BytesIO:
        """Return the package as a rewound buffer and close this document."""
        try:
            buffer = self._repackage()
        finally:
            self.close()
        buffer.seek(0)
        return buffer

    def _repackage(self) -> io.BytesIO:
        main_part = self._package.main_document_part
        replacements: Mapping[str, bytes] = {main_part: self._serialize_document(), **self._replace}
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as out:
            for info in self._package.entries():
                data = replacements.get(info.filename)
                if data is None:
                    data = self._package.read(info.filename)
                out.writestr(self._copy_info(info), data)
        return buffer

    def _serialize_document(self) -> bytes:
        main_part = self._package.main_document_part
        namespaces = declared_namespaces(self._package.read(main_part))
        return serialize_xml(self._package.xml_part(main_part), namespaces)

    @staticmethod
    def _copy_info(info: zipfile.ZipInfo) -> zipfile.ZipInfo:
        copy = zipfile.ZipInfo(info.filename, date_time=info.date_time)
        copy.compress_type = info.compress_type
        copy.external_attr = info.external_attr
        return copy

    @staticmethod
    def _tolerant(accessor: Callable[[], Dict[str, str]]) -> Dict[str, str]:
        try:
            return accessor()
        except PartNotFound as exc:
            LOGGER.warning("%s missing; rendering without it", exc.part)
            return {}
