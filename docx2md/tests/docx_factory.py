"""Build small DOCX packages in memory for tests."""
from __future__ import annotations

import io
import zipfile
from typing import Dict, Optional

W_NS = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"
R_NS = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"
REL_TYPE = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"

CONTENT_TYPES_XML = """<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<Types xmlns="http://schemas.openxmlformats.org/package/2006/content-types">
  <Default Extension="rels" ContentType="application/vnd.openxmlformats-package.relationships+xml"/>
  <Default Extension="xml" ContentType="application/xml"/>
  <Override PartName="/word/document.xml" ContentType="application/vnd.openxmlformats-officedocument.wordprocessingml.document.main+xml"/>
</Types>
"""

PACKAGE_RELS_XML = """<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<Relationships xmlns="http://schemas.openxmlformats.org/package/2006/relationships">
  <Relationship Id="rId1" Type="http://schemas.openxmlformats.org/officeDocument/2006/relationships/officeDocument" Target="word/document.xml"/>
</Relationships>
"""

STYLES_XML = f"""<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<w:styles xmlns:w="{W_NS}">
  <w:docDefaults>
    <w:rPrDefault><w:rPr><w:sz w:val="24"/></w:rPr></w:rPrDefault>
  </w:docDefaults>
  <w:style w:type="paragraph" w:default="1" w:styleId="Normal"><w:name w:val="Normal"/></w:style>
  <w:style w:type="paragraph" w:styleId="Heading1"><w:name w:val="heading 1"/><w:basedOn w:val="Normal"/></w:style>
  <w:style w:type="paragraph" w:styleId="Heading2"><w:name w:val="heading 2"/><w:basedOn w:val="Normal"/></w:style>
</w:styles>
"""

DOCUMENT_RELS_XML = f"""<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<Relationships xmlns="http://schemas.openxmlformats.org/package/2006/relationships">
  <Relationship Id="rId1" Type="{REL_TYPE}/styles" Target="styles.xml"/>
  <Relationship Id="rId2" Type="{REL_TYPE}/footnotes" Target="footnotes.xml"/>
  <Relationship Id="rId5" Type="{REL_TYPE}/hyperlink" Target="https://example.com" TargetMode="External"/>
</Relationships>
"""

FOOTNOTES_XML = f"""<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<w:footnotes xmlns:w="{W_NS}">
  <w:footnote w:type="separator" w:id="-1"><w:p><w:r><w:separator/></w:r></w:p></w:footnote>
  <w:footnote w:type="continuationSeparator" w:id="0"><w:p><w:r><w:continuationSeparator/></w:r></w:p></w:footnote>
  <w:footnote w:id="1"><w:p><w:r><w:footnoteRef/></w:r><w:r><w:t>Note text</w:t></w:r></w:p></w:footnote>
</w:footnotes>
"""

SAMPLE_BODY = """
<w:p>
  <w:pPr><w:pStyle w:val="Heading1"/></w:pPr>
  <w:r><w:rPr><w:b/></w:rPr><w:t>Title</w:t></w:r>
</w:p>
<w:p>
  <w:bookmarkStart w:id="0" w:name="intro"/>
  <w:r><w:t xml:space="preserve">See </w:t></w:r>
  <w:hyperlink r:id="rId5"><w:r><w:t>link</w:t></w:r></w:hyperlink>
  <w:r><w:t>.</w:t></w:r>
  <w:r><w:footnoteReference w:id="1"/></w:r>
  <w:bookmarkEnd w:id="0"/>
</w:p>
<w:tbl>
  <w:tr>
    <w:tc><w:p><w:r><w:t>A</w:t></w:r></w:p></w:tc>
    <w:tc><w:p><w:r><w:t>B</w:t></w:r></w:p></w:tc>
  </w:tr>
  <w:tr>
    <w:tc><w:p><w:r><w:t>1</w:t></w:r></w:p></w:tc>
    <w:tc><w:p><w:r><w:t>2</w:t></w:r></w:p></w:tc>
  </w:tr>
</w:tbl>
<w:sectPr/>
"""


def document_xml(body: str) -> str:
    return (
        '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\n'
        f'<w:document xmlns:w="{W_NS}" xmlns:r="{R_NS}" '
        'xmlns:mc="http://schemas.openxmlformats.org/markup-compatibility/2006" '
        'xmlns:w14="http://schemas.microsoft.com/office/word/2010/wordml" mc:Ignorable="w14">'
        f"<w:body>{body}</w:body></w:document>"
    )


def build_docx(
    body: str = SAMPLE_BODY,
    *,
    styles: Optional[str] = STYLES_XML,
    rels: Optional[str] = DOCUMENT_RELS_XML,
    footnotes: Optional[str] = FOOTNOTES_XML,
    document_name: Optional[str] = "word/document.xml",
    extra: Optional[Dict[str, bytes]] = None,
) -> bytes:
    """Return the bytes of a DOCX package; pass ``None`` to leave a part out."""
    parts: Dict[str, bytes] = {
        "[Content_Types].xml": CONTENT_TYPES_XML.encode("utf-8"),
        "_rels/.rels": PACKAGE_RELS_XML.encode("utf-8"),
    }
    if document_name is not None:
        parts[document_name] = document_xml(body).encode("utf-8")
    if styles is not None:
        parts["word/styles.xml"] = styles.encode("utf-8")
    if rels is not None:
        parts["word/_rels/document.xml.rels"] = rels.encode("utf-8")
    if footnotes is not None:
        parts["word/footnotes.xml"] = footnotes.encode("utf-8")
    parts.update(extra or {})

    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as archive:
        for name, data in parts.items():
            archive.writestr(name, data)
    return buffer.getvalue()
