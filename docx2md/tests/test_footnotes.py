"""Tests for footnote text extraction."""
import unittest
from xml.etree import ElementTree as ET

from docx2md.parser.footnotes_parser import FootnotesParser

from docx_factory import FOOTNOTES_XML


class FootnotesParserTest(unittest.TestCase):

    def test_ids_map_to_first_text_run(self) -> None:
        tree = ET.ElementTree(ET.fromstring(FOOTNOTES_XML.encode("utf-8")))
        footnotes = FootnotesParser(tree).parse()
        self.assertEqual(footnotes["1"], "Note text")

    def test_separators_map_to_empty_text(self) -> None:
        tree = ET.ElementTree(ET.fromstring(FOOTNOTES_XML.encode("utf-8")))
        footnotes = FootnotesParser(tree).parse()
        self.assertEqual(footnotes["-1"], "")
        self.assertEqual(footnotes["0"], "")

    def test_only_first_text_run_is_used(self) -> None:
        xml = """
        <w:footnotes xmlns:w="http://schemas.openxmlformats.org/wordprocessingml/2006/main">
          <w:footnote w:id="2">
            <w:p><w:r><w:t>First</w:t></w:r><w:r><w:t> second</w:t></w:r></w:p>
          </w:footnote>
        </w:footnotes>
        """
        footnotes = FootnotesParser(ET.ElementTree(ET.fromstring(xml))).parse()
        self.assertEqual(footnotes, {"2": "First"})


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
