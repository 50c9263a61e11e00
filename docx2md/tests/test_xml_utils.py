"""Tests for XML helper functions."""
import unittest
from xml.etree import ElementTree as ET

from docx2md.utils.xml_utils import (
    WORD_NS,
    declared_namespaces,
    is_on,
    local_name,
    parse_xml,
    qualify,
    serialize_xml,
    word_attr,
)

SOURCE = (
    b'<?xml version="1.0" encoding="UTF-8"?>'
    b'<w:document xmlns:w="http://schemas.openxmlformats.org/wordprocessingml/2006/main" '
    b'xmlns:w15="http://schemas.microsoft.com/office/word/2012/wordml" '
    b'xmlns:mc="http://schemas.openxmlformats.org/markup-compatibility/2006" mc:Ignorable="w15">'
    b'<w:body><w:p><w:r><w:t>x</w:t></w:r></w:p></w:body></w:document>'
)


class XmlUtilsTest(unittest.TestCase):

    def test_qualify_and_local_name(self) -> None:
        self.assertEqual(qualify("w:val"), f"{{{WORD_NS}}}val")
        self.assertEqual(local_name(f"{{{WORD_NS}}}body"), "body")
        self.assertEqual(local_name("plain"), "plain")

    def test_toggle_values(self) -> None:
        element = ET.fromstring(f'<w:b xmlns:w="{WORD_NS}"/>')
        self.assertTrue(is_on(element))
        self.assertIsNone(word_attr(element, "w:val"))
        for value in ("0", "false", "off", "none"):
            self.assertFalse(is_on(ET.fromstring(f'<w:b xmlns:w="{WORD_NS}" w:val="{value}"/>')))
        self.assertTrue(is_on(ET.fromstring(f'<w:u xmlns:w="{WORD_NS}" w:val="double"/>')))
        self.assertFalse(is_on(None))

    def test_declared_namespaces(self) -> None:
        prefixes = [prefix for prefix, _ in declared_namespaces(SOURCE)]
        self.assertEqual(prefixes, ["w", "w15", "mc"])

    def test_serialize_keeps_unused_declarations(self) -> None:
        payload = serialize_xml(parse_xml(SOURCE), declared_namespaces(SOURCE))
        self.assertTrue(payload.startswith(b"<?xml"))
        self.assertIn(b"<w:document ", payload)
        self.assertIn(b'xmlns:w15="http://schemas.microsoft.com/office/word/2012/wordml"', payload)
        self.assertIn(b'mc:Ignorable="w15"', payload)
        self.assertEqual(payload.count(b"xmlns:w="), 1)
        self.assertEqual(parse_xml(payload).getroot().find(".//w:t", {"w": WORD_NS}).text, "x")

    def test_serialize_leaves_global_prefixes_alone(self) -> None:
        uri = "urn:docx2md:scratch"
        source = f'<s:root xmlns:s="{uri}"><s:item/></s:root>'.encode("utf-8")
        payload = serialize_xml(parse_xml(source), declared_namespaces(source))
        self.assertIn(b"<s:root ", payload)
        self.assertIn(b"<s:item />", payload)
        self.assertNotIn(b"<s:other", ET.tostring(ET.Element(f"{{{uri}}}other")))

    def test_serialize_keeps_xml_space_and_unknown_namespaces(self) -> None:
        tree = ET.ElementTree(ET.Element(qualify("w:t")))
        tree.getroot().set("{http://www.w3.org/XML/1998/namespace}space", "preserve")
        tree.getroot().append(ET.Element("{urn:docx2md:undeclared}extra"))
        payload = serialize_xml(tree, [("w", WORD_NS)])
        self.assertIn(b'xml:space="preserve"', payload)
        self.assertNotIn(b"xmlns:xml", payload)
        reparsed = parse_xml(payload).getroot()
        self.assertIsNotNone(reparsed.find("{urn:docx2md:undeclared}extra"))
        self.assertEqual(reparsed.get("{http://www.w3.org/XML/1998/namespace}space"), "preserve")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
