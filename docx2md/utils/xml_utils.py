"""Helper functions to work with WordprocessingML namespaces and parsing."""
from __future__ import annotations

import copy
import io
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple
from xml.etree import ElementTree as ET

WORD_NS = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"
PACKAGE_RELS_NS = "http://schemas.openxmlformats.org/package/2006/relationships"
OFFICE_RELS_NS = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"
XML_NS = "http://www.w3.org/XML/1998/namespace"

# w:val values that switch a toggle property off
_OFF_VALUES = frozenset({"0", "false", "off", "none"})


@dataclass(frozen=True)
class Namespaces:
    """Common OpenXML namespace prefixes used across parsers."""

    WORD: Dict[str, str] = None  # type: ignore[assignment]
    RELS: Dict[str, str] = None  # type: ignore[assignment]

    def __post_init__(self) -> None:  # pragma: no cover
        raise RuntimeError("Namespaces should not be instantiated")


Namespaces.WORD = {"w": WORD_NS}  # type: ignore[attr-defined]
Namespaces.RELS = {"rel": PACKAGE_RELS_NS}  # type: ignore[attr-defined]

_PREFIXES = {"w": WORD_NS, "r": OFFICE_RELS_NS, "rel": PACKAGE_RELS_NS}


def parse_xml(data: bytes) -> ET.ElementTree:
    """Parse XML from raw bytes with sane defaults."""
    return ET.ElementTree(ET.fromstring(data))


def qualify(name: str) -> str:
    """Turn ``w:val`` style names into Clark notation (``{uri}val``)."""
    prefix, local = name.split(":", 1)
    return f"{{{_PREFIXES[prefix]}}}{local}"


def local_name(tag: str) -> str:
    """Strip the namespace part from an element tag."""
    return tag.split("}", 1)[-1]


def word_attr(element: Optional[ET.Element], name: str) -> Optional[str]:
    """Return a prefixed attribute (``w:val``, ``r:id``) or ``None``."""
    if element is None:
        return None
    return element.attrib.get(qualify(name))


def is_on(element: Optional[ET.Element]) -> bool:
    """Evaluate a toggle property such as ``<w:b/>`` or ``<w:u w:val="single"/>``."""
    if element is None:
        return False
    value = word_attr(element, "w:val")
    return value is None or value.lower() not in _OFF_VALUES


def find_text(element: ET.Element, xpath: str, namespaces: Optional[Dict[str, str]] = None) -> Optional[str]:
    """Return the untrimmed text of the first element matching the xpath."""
    found = element.find(xpath, namespaces or Namespaces.WORD)
    if found is None or found.text is None:
        return None
    return found.text


def declared_namespaces(data: bytes) -> List[Tuple[str, str]]:
    """List the ``(prefix, uri)`` declarations of an XML payload in document order."""
    return [ns for _, ns in ET.iterparse(io.BytesIO(data), events=("start-ns",))]


def serialize_xml(tree: ET.ElementTree, namespaces: Iterable[Tuple[str, str]] = ()) -> bytes:
    """Serialize a tree, keeping the prefixes the source part declared.

    ElementTree only writes declarations for namespaces that are used, which
    would break ``mc:Ignorable`` lists in Word parts. Names are rewritten to
    their prefixed form on a copy of the tree and every declaration is written
    onto the root, so the global ``ElementTree`` prefix registry is untouched.
    """
    declarations: Dict[str, str] = {}
    prefixes: Dict[str, str] = {XML_NS: "xml"}
    for prefix, uri in namespaces:
        if not prefix or prefix in declarations:
            continue
        declarations[prefix] = uri
        prefixes.setdefault(uri, prefix)

    def prefixed(name: str) -> str:
        if not name.startswith("{"):
            return name
        uri, local = name[1:].split("}", 1)
        prefix = prefixes.get(uri)
        if prefix is None:
            index = len(prefixes)
            while f"ns{index}" in declarations:
                index += 1
            prefix = prefixes[uri] = f"ns{index}"
            declarations[prefix] = uri
        return f"{prefix}:{local}"

    root = copy.deepcopy(tree.getroot())
    for element in root.iter():
        if not isinstance(element.tag, str):
            continue
        element.tag = prefixed(element.tag)
        attributes = [(prefixed(key), value) for key, value in element.attrib.items()]
        element.attrib.clear()
        for key, value in attributes:
            element.set(key, value)

    attributes = list(root.attrib.items())
    root.attrib.clear()
    for prefix, uri in declarations.items():
        root.set(f"xmlns:{prefix}", uri)
    for key, value in attributes:
        root.set(key, value)
    return ET.tostring(root, encoding="UTF-8", xml_declaration=True)
