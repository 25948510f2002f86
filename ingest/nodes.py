# Node model used by the converter.
# Element/Text are plain trees (tests, working copies); SoupNode wraps a parsed
# BeautifulSoup page so the converter never touches bs4 directly.

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

from bs4 import NavigableString, Tag
from bs4.element import CData, Comment, Declaration, Doctype, ProcessingInstruction

TEXT_TAG = "#text"
VERBATIM_TAG = "#verbatim"

# string subclasses that carry no visible text
SKIPPED_STRINGS = (Comment, CData, Declaration, Doctype, ProcessingInstruction)


@dataclass(eq=False)
class Element:
    tag: str
    attrs: Dict[str, str] = field(default_factory=dict)
    contents: List["Node"] = field(default_factory=list)

    def tag_name(self) -> str:
        return self.tag.lower()

    def text_content(self) -> str:
        return "".join(child.text_content() for child in self.contents)

    def attribute(self, name: str) -> Optional[str]:
        return self.attrs.get(name)

    def children(self) -> List["Node"]:
        return list(self.contents)

    def identity(self) -> int:
        return id(self)


@dataclass(eq=False)
class Text:
    value: str

    def tag_name(self) -> str:
        return TEXT_TAG

    def text_content(self) -> str:
        return self.value

    def attribute(self, name: str) -> Optional[str]:
        return None

    def children(self) -> List["Node"]:
        return []

    def identity(self) -> int:
        return id(self)


@dataclass(eq=False)
class Verbatim:
    """A code or math payload lifted out of the tree before rendering.

    kind is one of "code", "inline_math", "display_math"; info is the fence
    info string (code language) and is empty for math.
    """

    kind: str
    payload: str = ""
    info: str = ""

    def tag_name(self) -> str:
        return VERBATIM_TAG

    def text_content(self) -> str:
        return self.payload

    def attribute(self, name: str) -> Optional[str]:
        return None

    def children(self) -> List["Node"]:
        return []

    def identity(self) -> int:
        return id(self)


class SoupNode:
    """Read-only view over a bs4 Tag or NavigableString."""

    __slots__ = ("element",)

    def __init__(self, element: Union[Tag, NavigableString]):
        self.element = element

    def __repr__(self) -> str:
        return f"SoupNode({self.tag_name()!r})"

    def tag_name(self) -> str:
        if isinstance(self.element, Tag):
            return (self.element.name or "").lower()
        return TEXT_TAG

    def text_content(self) -> str:
        if isinstance(self.element, Tag):
            return self.element.get_text()
        return str(self.element)

    def attribute(self, name: str) -> Optional[str]:
        if not isinstance(self.element, Tag):
            return None
        value = self.element.get(name)
        if value is None:
            return None
        # bs4 returns multi-valued attributes (class, rel) as lists
        if isinstance(value, list):
            return " ".join(value)
        return str(value)

    def children(self) -> List["SoupNode"]:
        if not isinstance(self.element, Tag):
            return []
        return [
            SoupNode(child)
            for child in self.element.children
            if not isinstance(child, SKIPPED_STRINGS)
        ]

    def identity(self) -> int:
        return id(self.element)


Node = Union[Element, Text, Verbatim, SoupNode]


def is_text(node) -> bool:
    return node.tag_name() == TEXT_TAG


def has_class(node, name: str) -> bool:
    classes = node.attribute("class") or ""
    return name in classes.split()


def find_first(node, predicate):
    # depth-first, document order; the node itself is not tested
    for child in node.children():
        if predicate(child):
            return child
        found = find_first(child, predicate)
        if found is not None:
            return found
    return None
