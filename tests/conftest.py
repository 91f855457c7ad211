import json

import fitz  # PyMuPDF
import pytest

from pdffinish.models import Character


def chars(text, font="Helvetica", size=12.0, page=0):
    """One Character per glyph of text, all in the same font."""
    return [Character(glyph=c, font=font, size=size, page=page, position=(float(i), 0.0))
            for i, c in enumerate(text)]


def make_pdf(path, pages, metadata=None, toc=None):
    """pages: list of [(text, fontname, fontsize), ...], one line per tuple."""
    doc = fitz.open()
    for lines in pages:
        page = doc.new_page()
        y = 72
        for text, fontname, fontsize in lines:
            y += fontsize * 2
            page.insert_text((72, y), text, fontname=fontname, fontsize=fontsize)
    if metadata:
        doc.set_metadata(metadata)
    if toc:
        doc.set_toc(toc)
    doc.save(str(path))
    doc.close()
    return path


def write_config(path, data):
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(data, f)
    return path


@pytest.fixture
def book_pdf(tmp_path):
    return make_pdf(tmp_path / "book.pdf", [
        [("Chapter One", "hebo", 20), ("Plain body text.", "helv", 11)],
        [("Section A", "hebo", 14), ("More body text.", "helv", 11)],
        [("Chapter Two", "hebo", 20), ("Closing words.", "helv", 11)],
    ])


@pytest.fixture
def broken_pdf(tmp_path):
    path = tmp_path / "broken.pdf"
    path.write_text("this is not a pdf file")
    return path
