# Inline Markdown for a node's direct children: text, emphasis, code spans,
# links and images. Used wherever a block must stay on one line.

from __future__ import annotations

from .nodes import Verbatim, is_text
from .verbatim import render_verbatim

STRONG_TAGS = {"strong", "b"}
EM_TAGS = {"em", "i"}


def format_inline(node) -> str:
    return "".join(format_inline_child(child) for child in node.children())


def format_inline_child(child) -> str:
    if is_text(child):
        return child.text_content().strip()
    if isinstance(child, Verbatim):
        return render_verbatim(child)

    tag = child.tag_name()
    if tag in STRONG_TAGS:
        return f"**{flatten_text(child).strip()}**"
    if tag in EM_TAGS:
        return f"*{flatten_text(child).strip()}*"
    if tag == "code":
        return f"`{child.text_content()}`"
    if tag == "a":
        return format_link(child)
    if tag == "img":
        return format_image(child)
    if tag == "br":
        return "\n"
    return flatten_text(child)


def flatten_text(node) -> str:
    # plain text of a subtree; lifted math keeps its delimiters
    if isinstance(node, Verbatim):
        return render_verbatim(node)
    if is_text(node):
        return node.text_content()
    return "".join(flatten_text(child) for child in node.children())


def _with_title(target: str, title) -> str:
    if title:
        return f'{target} "{title}"'
    return target


def format_link(node) -> str:
    href = node.attribute("href") or ""
    content = format_inline(node)
    return f"[{content}]({_with_title(href, node.attribute('title'))})"


def format_image(node) -> str:
    alt = node.attribute("alt") or ""
    src = node.attribute("src") or ""
    return f"![{alt}]({_with_title(src, node.attribute('title'))})"
