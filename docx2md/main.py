"""Command-line entry point: convert a DOCX file to Markdown."""
from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional, Sequence

from docx2md.document import Document
from docx2md.renderer.utils import UNDERLINE_DROP, UNDERLINE_HTML, RenderOptions
from docx2md.utils.debug import DebugDumper
from docx2md.utils.logger import get_logger

LOGGER = get_logger(__name__)


def convert(
    docx_path: Path,
    output_path: Optional[Path] = None,
    *,
    html: bool = False,
    text: bool = False,
    debug_dir: Optional[Path] = None,
    options: Optional[RenderOptions] = None,
) -> Path:
    """Write Markdown (and optionally HTML/text) next to ``docx_path``."""
    if not docx_path.exists():
        raise FileNotFoundError(f"DOCX file not found: {docx_path}")

    output_path = output_path or docx_path.with_suffix(".md")
    LOGGER.info("Converting %s", docx_path.name)
    with Document.open(docx_path, options) as document:
        output_path.write_text(document.to_markdown(), encoding="utf-8")
        if html:
            output_path.with_suffix(".html").write_text(document.to_html(), encoding="utf-8")
        if text:
            output_path.with_suffix(".txt").write_text(document.to_text(), encoding="utf-8")
        if debug_dir is not None:
            DebugDumper(debug_dir).dump(document.tree())

    LOGGER.info("Wrote %s", output_path)
    return output_path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Convert DOCX files into Markdown")
    parser.add_argument("docx_file", help="Path to the input .docx file")
    parser.add_argument("--output", help="Markdown file to write (defaults to the input name with .md)")
    parser.add_argument("--html", action="store_true", help="Also write an HTML fragment")
    parser.add_argument("--text", action="store_true", help="Also write plain text")
    parser.add_argument("--debug-dir", help="Directory for a JSON dump of the parsed document tree")
    parser.add_argument(
        "--underline",
        choices=(UNDERLINE_HTML, UNDERLINE_DROP),
        default=UNDERLINE_HTML,
        help="How underlined text appears in Markdown",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    convert(
        Path(args.docx_file).resolve(),
        Path(args.output).resolve() if args.output else None,
        html=args.html,
        text=args.text,
        debug_dir=Path(args.debug_dir) if args.debug_dir else None,
        options=RenderOptions(underline=args.underline),
    )
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
