# Recursive block converter: dispatches each node by tag to a rendering rule
# and concatenates the fragments. Lists, blockquotes and tables nest here.

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Set

from .inline import format_image, format_inline, format_inline_child, format_link
from .nodes import TEXT_TAG, VERBATIM_TAG
from .verbatim import code_block_from_pre, render_verbatim

LIST_TAGS = {"ul", "ol"}
TABLE_SECTIONS = {"thead", "tbody", "tfoot"}
CELL_TAGS = {"th", "td"}
HEADING_LEVELS = {f"h{n}": n for n in range(1, 7)}
INDENT = "  "


class BlockRenderer:
    """Render one answer tree to Markdown.

    The visited set lives as long as the renderer: a node reached a second
    time (same identity) renders as "" instead of being walked again. Use a
    fresh renderer per answer.
    """

    def __init__(self):
        self.visited: Set[int] = set()
        self.handlers: Dict[str, Callable[[object, int], str]] = {
            "p": self.render_paragraph,
            "strong": self.render_inline_leaf,
            "b": self.render_inline_leaf,
            "em": self.render_inline_leaf,
            "i": self.render_inline_leaf,
            "code": self.render_inline_leaf,
            "hr": lambda node, level: "\n---\n",
            "br": lambda node, level: "\n",
            "a": lambda node, level: format_link(node),
            "img": lambda node, level: format_image(node),
            "blockquote": self.render_blockquote,
            "ul": self.render_list,
            "ol": self.render_list,
            "pre": lambda node, level: render_verbatim(code_block_from_pre(node)),
            "table": self.render_table,
            TEXT_TAG: lambda node, level: node.text_content().strip(),
            VERBATIM_TAG: lambda node, level: render_verbatim(node),
        }
        for tag in HEADING_LEVELS:
            self.handlers[tag] = self.render_heading

    def enter(self, node) -> bool:
        key = node.identity()
        if key in self.visited:
            logging.debug(f"Skip repeated node <{node.tag_name()}>")
            return False
        self.visited.add(key)
        return True

    def render(self, node, level: int = 0) -> str:
        if not self.enter(node):
            return ""
        handler = self.handlers.get(node.tag_name(), self.render_children)
        return handler(node, level)

    # containers and unknown tags: children at the same level, nothing added
    def render_children(self, node, level: int) -> str:
        return "".join(self.render(child, level) for child in node.children())

    def render_inline_leaf(self, node, level: int) -> str:
        return format_inline_child(node)

    def render_paragraph(self, node, level: int) -> str:
        text = format_inline(node)
        return f"{text}\n" if text else ""

    def render_heading(self, node, level: int) -> str:
        hashes = "#" * HEADING_LEVELS[node.tag_name()]
        return f"{hashes} {format_inline(node)}\n"

    def render_blockquote(self, node, level: int) -> str:
        inner = self.render_children(node, level)
        lines = [line for line in inner.split("\n") if line.strip()]
        if not lines:
            return ""
        return "\n" + "\n".join(f"> {line}" for line in lines) + "\n"

    def render_list(self, node, level: int) -> str:
        ordered = node.tag_name() == "ol"
        start = list_start(node) if ordered else 1
        indent = INDENT * level
        out: List[str] = []

        items = [child for child in node.children() if child.tag_name() == "li"]
        for index, item in enumerate(items):
            if not self.enter(item):
                continue
            marker = f"{start + index}." if ordered else "-"

            # pass 1: the item's own content
            own = "".join(
                self.render(child, level)
                for child in item.children()
                if child.tag_name() not in LIST_TAGS
            ).strip()
            if own:
                out.append(item_line(indent, marker, own))

            # pass 2: nested lists, one level deeper
            for child in item.children():
                if child.tag_name() in LIST_TAGS:
                    out.append(self.render(child, level + 1))
        return "".join(out)

    def render_table(self, node, level: int) -> str:
        rows = table_rows(node)
        if not rows:
            return ""
        header = [cell_text(cell) for cell in row_cells(rows[0])]
        lines = ["", row_line(header), row_line(["---"] * len(header))]
        for row in rows[1:]:
            lines.append(row_line([cell_text(cell) for cell in row_cells(row)]))
        return "\n".join(lines) + "\n\n"


def list_start(node) -> int:
    try:
        return int(node.attribute("start") or 1)
    except ValueError:
        return 1


def item_line(indent: str, marker: str, content: str) -> str:
    # continuation lines sit under the item text, not under the marker
    pad = indent + " " * (len(marker) + 1)
    first, *rest = content.split("\n")
    lines = [f"{indent}{marker} {first}"]
    lines.extend(pad + line if line.strip() else "" for line in rest)
    return "\n".join(lines) + "\n"


def table_rows(table) -> list:
    rows = []
    for child in table.children():
        tag = child.tag_name()
        if tag == "tr":
            rows.append(child)
        elif tag in TABLE_SECTIONS:
            rows.extend(c for c in child.children() if c.tag_name() == "tr")
    return rows


def row_cells(row) -> list:
    return [c for c in row.children() if c.tag_name() in CELL_TAGS]


def cell_text(cell) -> str:
    text = format_inline(cell).replace("\n", " ").strip()
    return text.replace("|", "\\|")


def row_line(cells: List[str]) -> str:
    return "| " + " | ".join(cells) + " |"
