# finish.py
"""
Orchestrates the two modes of the tool against one open PyMuPDF document:
showing what a PDF contains, and writing a finished copy with updated
metadata and a generated outline.
"""
import logging
from pathlib import Path
from typing import List

import fitz  # PyMuPDF

from .config import FinishConfig
from .errors import InputReadError, ProcessingError, WriteError
from .extractor import PDFTextExtractor
from .fragments import collect_fonts, font_usage
from .outline import build_outline, format_outline, outline_from_toc, outline_to_toc

logger = logging.getLogger(__name__)

SHOWN_METADATA = [
    ("Title", "title"),
    ("Author", "author"),
    ("Subject", "subject"),
    ("Keywords", "keywords"),
    ("Creator", "creator"),
    ("Producer", "producer"),
    ("Creation Date", "creationDate"),
    ("Modification Date", "modDate"),
]


# MuPDF errors derive from FzErrorBase, not RuntimeError
PDF_ERRORS = (RuntimeError, OSError, ValueError, fitz.mupdf.FzErrorBase)


def open_pdf(path) -> fitz.Document:
    try:
        doc = fitz.open(str(path), filetype="pdf")
    except PDF_ERRORS as exc:
        raise InputReadError(f"Error reading input PDF {path}: {exc}") from exc
    if not doc.is_pdf:
        doc.close()
        raise InputReadError(f"Error reading input PDF {path}: not a PDF document")
    return doc


class PDFFinish:
    """Update metadata and create a table of contents for PDF files."""

    def __init__(self, extractor: PDFTextExtractor = None):
        self.extractor = extractor or PDFTextExtractor()

    # ------------------------------------------------------------------
    #  SHOW
    # ------------------------------------------------------------------
    def show_info(self, input_path, usage: bool = False) -> None:
        with open_pdf(input_path) as doc:
            for line in self.describe(doc, usage=usage):
                print(line)

    def describe(self, doc: fitz.Document, usage: bool = False) -> List[str]:
        """Report lines: metadata, existing table of contents, fonts used."""
        lines = []
        metadata = doc.metadata or {}
        for label, key in SHOWN_METADATA:
            lines.append(f"{label}: {metadata.get(key) or ''}")

        try:
            toc = doc.get_toc()
            fragments = self.extractor.extract_document_fragments(doc)
        except PDF_ERRORS as exc:
            raise ProcessingError(f"Error reading document content: {exc}") from exc

        lines.append("Table of Contents")
        lines.extend(format_outline(outline_from_toc(toc)))

        lines.append("")
        lines.append("Fonts")
        lines.append("")
        lines.extend(collect_fonts(fragments))

        if usage:
            lines.append("")
            lines.append("Font Usage")
            lines.append("")
            table = font_usage(fragments)
            if not table.empty:
                lines.extend(table.to_string(index=False).splitlines())
        return lines

    # ------------------------------------------------------------------
    #  GENERATE
    # ------------------------------------------------------------------
    def generate_pdf(self, config: FinishConfig, input_path, output_path) -> None:
        with open_pdf(input_path) as doc:
            self.update_metadata(doc, config)
            if config.toc_enabled:
                title = self.outline_title(doc, config, input_path)
                self.update_toc(doc, config, title)

            try:
                doc.save(str(output_path), garbage=4, deflate=True)
            except PDF_ERRORS as exc:
                raise WriteError(f"Error writing PDF {output_path}: {exc}") from exc
        logger.info(f"Write complete: {output_path}")

    def update_metadata(self, doc: fitz.Document, config: FinishConfig) -> None:
        updates = config.metadata()
        if not updates:
            return
        metadata = dict(doc.metadata or {})
        metadata.update(updates)
        try:
            doc.set_metadata(metadata)
        except PDF_ERRORS as exc:
            raise ProcessingError(f"Error updating metadata: {exc}") from exc
        logger.debug(f"Updated metadata fields: {', '.join(sorted(updates))}")

    @staticmethod
    def outline_title(doc: fitz.Document, config: FinishConfig, input_path) -> str:
        """Config title, else the document's own title, else the file name."""
        if config.title:
            return config.title
        existing = (doc.metadata or {}).get("title")
        if existing:
            return existing
        return Path(input_path).stem

    def update_toc(self, doc: fitz.Document, config: FinishConfig, title: str) -> None:
        """Replace the outline with one built from headings matching the signatures."""
        headings = []
        # an empty toc array yields a title-only outline
        if config.signatures:
            try:
                headings = self.extractor.extract_headings(doc, config.signatures)
            except PDF_ERRORS as exc:
                raise ProcessingError(f"Error extracting text: {exc}") from exc

        root = build_outline(title, headings)
        try:
            doc.set_toc(outline_to_toc(root), collapse=1)
        except PDF_ERRORS as exc:
            raise ProcessingError(f"Error writing table of contents: {exc}") from exc
