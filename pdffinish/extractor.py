# extractor.py
import logging
from typing import List, Optional, Sequence

import fitz  # PyMuPDF

from .config import LINE_TOLERANCE
from .fragments import find_headings, segment
from .models import Character, FontSignature, Fragment

logger = logging.getLogger(__name__)


class PDFTextExtractor:
    """
    Reads the rendered character stream of a PyMuPDF document, page by page,
    and turns it into font-run fragments.
    """

    def __init__(self, line_tolerance: float = LINE_TOLERANCE):
        self.line_tolerance = line_tolerance

    def extract_document_fragments(self, doc: fitz.Document) -> List[Fragment]:
        fragments = []
        for page_num, page in enumerate(doc):
            page_fragments = segment(self.extract_page_characters(page, page_num))
            fragments.extend(page_fragments)
            logger.debug(f"Page {page_num + 1}: {len(page_fragments)} fragment(s)")
        return fragments

    def extract_headings(self, doc: fitz.Document,
                         signatures: Optional[Sequence[FontSignature]]) -> List[Fragment]:
        headings = find_headings(self.extract_document_fragments(doc), signatures)
        logger.info(f"Found {len(headings)} heading(s) in {doc.page_count} page(s)")
        return headings

    def extract_page_characters(self, page: fitz.Page, page_num: int) -> List[Character]:
        raw = []
        text_dict = page.get_text("rawdict")
        for block in text_dict["blocks"]:
            if block.get("type") != 0:  # text blocks only
                continue
            for line in block["lines"]:
                for span in line["spans"]:
                    for char in span["chars"]:
                        raw.append(Character(
                            glyph=char["c"],
                            font=span.get("font"),
                            size=span["size"],
                            page=page_num,
                            position=tuple(char["origin"]),
                        ))
        return self._sort_by_position(raw)

    def _sort_by_position(self, chars: List[Character]) -> List[Character]:
        """Top-to-bottom by baseline, then left-to-right within a line."""
        by_baseline = sorted(chars, key=lambda c: (c.position[1], c.position[0]))
        ordered = []
        group = []
        y_base = None

        for char in by_baseline:
            if group and abs(char.position[1] - y_base) > self.line_tolerance:
                group.sort(key=lambda c: c.position[0])
                ordered.extend(group)
                group = []
            if not group:
                y_base = char.position[1]
            group.append(char)

        group.sort(key=lambda c: c.position[0])
        ordered.extend(group)
        return ordered
