# models.py
from dataclasses import dataclass, field
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class FontSignature:
    """A (font name, font size) pair that marks heading text at a given level."""
    name: str
    size: float
    level: int


@dataclass(frozen=True)
class Character:
    """One rendered glyph as reported by the PDF library, in reading order."""
    glyph: str
    font: Optional[str]
    size: float
    page: int
    position: Tuple[float, float] = (0.0, 0.0)


@dataclass(frozen=True)
class Fragment:
    """
    Maximal run of consecutive characters sharing one font name and size.
    A non-zero tag marks the fragment as a heading at that level.
    """
    page: int
    start_position: Tuple[float, float]
    text: str
    font: str
    font_size: float
    tag: int = 0


@dataclass
class OutlineNode:
    title: str
    destination: Optional[int] = None
    children: List["OutlineNode"] = field(default_factory=list)

    def append_child(self, node: "OutlineNode") -> "OutlineNode":
        self.children.append(node)
        return node
