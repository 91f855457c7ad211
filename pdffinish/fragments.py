# fragments.py
"""
Font-run segmentation and classification.

Characters arrive in reading order, one page at a time. They are grouped
into fragments (runs of one font name and size); fragments are then either
matched against heading signatures or reduced to a catalog of the fonts
used in the document.
"""
from dataclasses import replace
from typing import Iterable, List, Optional, Sequence

import pandas as pd

from .models import Character, FontSignature, Fragment


def strip_subset_prefix(font_name: Optional[str]) -> Optional[str]:
    """'ABCDEF+Helvetica-Bold' -> 'Helvetica-Bold'. Empty names resolve to None."""
    if not font_name:
        return None
    plus = font_name.find('+')
    if plus > -1:
        font_name = font_name[plus + 1:]
    return font_name


def segment(characters: Iterable[Character]) -> List[Fragment]:
    """
    Split an ordered character stream into fragments, starting a new one
    whenever the font name or font size changes.

    A character without a font name is kept in the current run and never
    ends it.
    """
    fragments = []
    buffer = []
    start = None
    current_font = None
    current_size = None

    def flush():
        fragments.append(Fragment(
            page=start.page,
            start_position=start.position,
            text="".join(buffer),
            font=current_font or "",
            font_size=current_size if current_size is not None else start.size,
        ))

    for char in characters:
        font = strip_subset_prefix(char.font)

        if font is not None:
            if buffer and (font != current_font or char.size != current_size):
                if current_font is not None:
                    flush()
                    buffer = []
                    start = None
            current_font = font
            current_size = char.size

        if start is None:
            start = char
        buffer.append(char.glyph)

    if buffer:
        flush()

    return fragments


def match(fragment: Fragment, signatures: Sequence[FontSignature]) -> List[int]:
    """Levels of every signature with exactly this fragment's font and size."""
    return [
        sig.level for sig in signatures
        if fragment.font == sig.name and fragment.font_size == sig.size
    ]


def find_headings(fragments: Iterable[Fragment],
                  signatures: Optional[Sequence[FontSignature]]) -> List[Fragment]:
    """
    Tag fragments with their heading level, dropping the ones that match no
    signature. A fragment matching several signatures is emitted once per
    match. Without signatures every fragment passes through untagged.
    """
    if not signatures:
        return list(fragments)

    headings = []
    for fragment in fragments:
        for level in match(fragment, signatures):
            headings.append(replace(fragment, tag=level))
    return headings


def format_size(size: float) -> str:
    # repr keeps every digit so the value can be pasted back into a config
    size = float(size)
    if size.is_integer():
        return str(int(size))
    return repr(size)


def collect_fonts(fragments: Iterable[Fragment]) -> List[str]:
    """Distinct 'font:size' strings, sorted."""
    return sorted({f"{fragment.font}:{format_size(fragment.font_size)}" for fragment in fragments})


def font_usage(fragments: Iterable[Fragment]) -> pd.DataFrame:
    """Per (font, size): fragment count, character count and first page (1-based)."""
    rows = [
        {
            "font": fragment.font,
            "size": format_size(fragment.font_size),
            "characters": len(fragment.text),
            "page": fragment.page + 1,
        }
        for fragment in fragments
    ]
    columns = ["font", "size", "fragments", "characters", "first_page"]
    if not rows:
        return pd.DataFrame(columns=columns)

    df = pd.DataFrame(rows)
    usage = (
        df.groupby(["font", "size"], sort=False)
        .agg(fragments=("characters", "count"),
             characters=("characters", "sum"),
             first_page=("page", "min"))
        .reset_index()
    )
    usage = usage.sort_values(["characters", "font"], ascending=[False, True])
    return usage[columns].reset_index(drop=True)
