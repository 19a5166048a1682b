from __future__ import annotations

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PageElement, PreformattedString, Tag

DEFAULT_PARSER = "html5lib"


def parse_html(markup: str | bytes, *, parser: str = DEFAULT_PARSER) -> BeautifulSoup:
    return BeautifulSoup(markup, parser)


def _first_child(node: PageElement) -> PageElement | None:
    if not isinstance(node, Tag) or not node.contents:
        return None
    return node.contents[0]


def find_descendants(root: PageElement | None, tag: str) -> list[Tag]:
    """Return every element named ``tag`` below ``root``, pre-order.

    Only first-child / next-sibling links are followed, and a missing link
    ends that branch, so partial trees are walked as far as they go.
    """

    found: list[Tag] = []
    if root is None:
        return found

    # Where to resume once the current subtree is done.
    resume: list[PageElement | None] = []
    node = _first_child(root)
    while node is not None or resume:
        if node is None:
            node = resume.pop()
            continue
        if isinstance(node, Tag):
            if node.name == tag:
                found.append(node)
            resume.append(node.next_sibling)
            node = _first_child(node)
        else:
            node = node.next_sibling
    return found


def _visible_text(node: PageElement) -> str:
    # Comments, doctypes and CDATA carry no visible text.
    if isinstance(node, NavigableString) and not isinstance(node, PreformattedString):
        return str(node)
    return ""


def node_text(node: PageElement | None) -> str:
    if node is None:
        return ""
    if not isinstance(node, Tag):
        return _visible_text(node)

    parts: list[str] = []
    resume: list[PageElement | None] = []
    child = _first_child(node)
    while child is not None or resume:
        if child is None:
            child = resume.pop()
            continue
        if isinstance(child, Tag):
            resume.append(child.next_sibling)
            child = _first_child(child)
        else:
            parts.append(_visible_text(child))
            child = child.next_sibling
    return "".join(parts)
