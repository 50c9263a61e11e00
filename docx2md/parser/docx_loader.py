"""DOCX package access: locate, read and cache the XML parts of an archive."""
from __future__ import annotations

import fnmatch
import io
import posixpath
import zipfile
from pathlib import Path
from typing import BinaryIO, Dict, List, Optional, Union
from xml.etree import ElementTree as ET

from docx2md.utils.errors import HandleClosed, PartNotFound
from docx2md.utils.logger import get_logger
from docx2md.utils.xml_utils import parse_xml

LOGGER = get_logger(__name__)

DOCUMENT_XML_GLOB = "word/document*.xml"
STYLES_XML_PATH = "word/styles.xml"
FOOTNOTES_XML_PATH = "word/footnotes.xml"
RELS_DIRECTORY = "_rels"

PackageSource = Union[str, Path, bytes, bytearray, BinaryIO]


class DocxPackage:
    """Open handle on a DOCX archive.

    The handle owns the underlying ``zipfile.ZipFile`` from construction until
    :meth:`close`. Every read after that raises :class:`HandleClosed`.
    """

    def __init__(self, archive: zipfile.ZipFile, main_document_part: str) -> None:
        self._zip: Optional[zipfile.ZipFile] = archive
        self._xml_cache: Dict[str, ET.ElementTree] = {}
        self.main_document_part = main_document_part

    @classmethod
    def open(cls, source: PackageSource) -> "DocxPackage":
        """Open a package from a path, a byte buffer or a binary file object."""
        if isinstance(source, (bytes, bytearray)):
            archive = zipfile.ZipFile(io.BytesIO(bytes(source)))
            label = "<buffer>"
        elif isinstance(source, (str, Path)):
            archive = zipfile.ZipFile(source)
            label = Path(source).name
        else:
            archive = zipfile.ZipFile(source)
            label = getattr(source, "name", "<stream>")

        try:
            matches = [name for name in archive.namelist() if fnmatch.fnmatchcase(name, DOCUMENT_XML_GLOB)]
            if not matches:
                raise PartNotFound(DOCUMENT_XML_GLOB, "Primary document part missing from package")
        except BaseException:
            archive.close()
            raise

        LOGGER.debug("Opened %s with %d entries", label, len(archive.namelist()))
        return cls(archive, matches[0])

    def __enter__(self) -> "DocxPackage":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Public helpers
    @property
    def closed(self) -> bool:
        return self._zip is None

    @property
    def relationships_part(self) -> str:
        """Name of the ``.rels`` part that belongs to the main document."""
        folder, base = posixpath.split(self.main_document_part)
        return posixpath.join(folder, RELS_DIRECTORY, f"{base}.rels")

    def close(self) -> None:
        if self._zip is None:
            return
        self._zip.close()
        self._zip = None
        self._xml_cache.clear()

    def ensure_open(self) -> None:
        """Raise :class:`HandleClosed` once the package has been closed."""
        self._require_open()

    def glob(self, pattern: str) -> List[str]:
        """Return entry names matching ``pattern`` in archive order."""
        return [name for name in self._require_open().namelist() if fnmatch.fnmatchcase(name, pattern)]

    def find(self, pattern: str) -> Optional[str]:
        matches = self.glob(pattern)
        return matches[0] if matches else None

    def has_part(self, name: str) -> bool:
        try:
            self._require_open().getinfo(name)
        except KeyError:
            return False
        return True

    def read(self, name: str) -> bytes:
        archive = self._require_open()
        try:
            return archive.read(name)
        except KeyError:
            raise PartNotFound(name) from None

    def xml_part(self, name: str) -> ET.ElementTree:
        """Parse a part once and serve later calls from the cache."""
        self._require_open()
        if name in self._xml_cache:
            return self._xml_cache[name]
        tree = parse_xml(self.read(name))
        self._xml_cache[name] = tree
        return tree

    def entries(self) -> List[zipfile.ZipInfo]:
        """File entries of the archive, directories excluded."""
        return [info for info in self._require_open().infolist() if not info.is_dir()]

    # ------------------------------------------------------------------
    # Internal
    def _require_open(self) -> zipfile.ZipFile:
        if self._zip is None:
            raise HandleClosed("DOCX package has been closed")
        return self._zip
