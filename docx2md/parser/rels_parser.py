"""Utilities for reading Open Packaging Convention relationship parts."""
from __future__ import annotations

import posixpath
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Dict, Iterable, Optional, Tuple
from xml.etree import ElementTree as ET

from docx2md.utils.xml_utils import Namespaces, parse_xml

HYPERLINK_MARKER = "hyperlink"


@dataclass(frozen=True)
class Relationship:
    """Represents a single OPC relationship."""

    r_id: str
    target: str
    rel_type: str
    is_external: bool = False
    resolved_target: Optional[str] = None

    @property
    def is_hyperlink(self) -> bool:
        return HYPERLINK_MARKER in self.rel_type


class Relationships:
    """Relationship records of one source part, keyed by id."""

    def __init__(self, source_part: str, relationships: Dict[str, Relationship]) -> None:
        self.source_part = source_part
        self._by_id = relationships

    @classmethod
    def from_part(cls, rels_part: str, payload: bytes) -> "Relationships":
        """Parse a ``.rels`` part; ``rels_part`` is its name inside the package."""
        source, base_dir = cls._source_and_base_from_rel_part(rels_part)
        return cls(source, cls._parse_relationship_part(base_dir, parse_xml(payload)))

    def find(self, r_id: str) -> Optional[Relationship]:
        return self._by_id.get(r_id)

    def iter_all(self) -> Iterable[Relationship]:
        yield from self._by_id.values()

    def hyperlinks(self) -> Dict[str, str]:
        """Map relationship id to target URI for hyperlink relationships only."""
        return {rel.r_id: rel.target for rel in self._by_id.values() if rel.is_hyperlink}

    @classmethod
    def _parse_relationship_part(cls, base_dir: PurePosixPath, tree: ET.ElementTree) -> Dict[str, Relationship]:
        result: Dict[str, Relationship] = {}
        for rel_el in tree.getroot().iter(f"{{{Namespaces.RELS['rel']}}}Relationship"):
            r_id = rel_el.attrib.get("Id")
            if not r_id:
                continue
            target = rel_el.attrib.get("Target", "")
            is_external = rel_el.attrib.get("TargetMode") == "External"
            result[r_id] = Relationship(
                r_id=r_id,
                target=target,
                rel_type=rel_el.attrib.get("Type", ""),
                is_external=is_external,
                resolved_target=cls._resolve_target_path(base_dir, target, is_external),
            )
        return result

    @staticmethod
    def _source_and_base_from_rel_part(rel_part: str) -> Tuple[str, PurePosixPath]:
        rel_path = PurePosixPath(rel_part)
        folder = rel_path.parent.parent
        base = rel_path.name[: -len(".rels")]
        if folder == PurePosixPath("."):
            return base, folder
        return (folder / base).as_posix(), folder

    @staticmethod
    def _resolve_target_path(base_dir: PurePosixPath, target: str, is_external: bool) -> Optional[str]:
        if not target:
            return None
        if is_external:
            return target
        if target.startswith("/"):
            return target.lstrip("/")
        return posixpath.normpath(base_dir.joinpath(target).as_posix())
