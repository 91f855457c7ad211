# outline.py
import logging
from typing import Iterable, List, Optional

from .config import MAX_LEVEL
from .errors import MalformedHierarchyError
from .models import Fragment, OutlineNode

logger = logging.getLogger(__name__)


def build_outline(title: str, headings: Iterable[Fragment],
                  max_level: int = MAX_LEVEL) -> OutlineNode:
    """
    Build the bookmark tree in one forward pass.

    level[n] holds the most recently appended node at depth n, so a heading
    tagged L becomes the last child of level[L - 1]. Headings must therefore
    never skip a level on the way down.
    """
    root = OutlineNode(title=title, destination=0)
    level: List[Optional[OutlineNode]] = [root] + [None] * max_level

    for heading in headings:
        if not 1 <= heading.tag <= max_level:
            raise MalformedHierarchyError(heading, f"level must be between 1 and {max_level}")
        parent = level[heading.tag - 1]
        if parent is None:
            raise MalformedHierarchyError(heading, f"no level {heading.tag - 1} heading precedes it")

        node = parent.append_child(OutlineNode(title=heading.text.strip(), destination=heading.page))
        level[heading.tag] = node
        # a new node invalidates everything deeper than it
        for deeper in range(heading.tag + 1, max_level + 1):
            level[deeper] = None

    return root


def outline_to_toc(root: OutlineNode) -> List[list]:
    """Flatten to PyMuPDF's [level, title, page] rows, root at level 1, pages 1-based."""
    toc = []

    def visit(node, depth):
        page = node.destination + 1 if node.destination is not None else -1
        toc.append([depth, node.title, page])
        for child in node.children:
            visit(child, depth + 1)

    visit(root, 1)
    return toc


def outline_from_toc(toc: Iterable[list], title: str = "") -> OutlineNode:
    """Rebuild a tree from doc.get_toc() rows. Page numbers become 0-based."""
    root = OutlineNode(title=title)
    stack = [root]
    for row in toc:
        depth, text, page = row[0], row[1], row[2]
        # get_toc guarantees depth <= previous depth + 1
        del stack[depth:]
        node = stack[-1].append_child(OutlineNode(title=text, destination=page - 1 if page > 0 else None))
        stack.append(node)
    return root


def format_outline(root: OutlineNode, indent: str = "  ") -> List[str]:
    lines = []

    def show_entry(node, spaces):
        for child in node.children:
            lines.append(spaces + child.title)
            show_entry(child, spaces + indent)

    show_entry(root, "")
    return lines
