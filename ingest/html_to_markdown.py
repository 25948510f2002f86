# Convert one assistant answer to Markdown.
# Code/math blocks are lifted out first (verbatim.py), then the block
# converter walks the working copy. Returns a trimmed Markdown string.

from bs4 import BeautifulSoup

from .blocks import BlockRenderer
from .nodes import SoupNode
from .verbatim import extract_verbatim

# Interactive/decorative chrome inside a rendered answer (copy buttons, icons)
REMOVALS = [
    "button", "svg", "script", "style",
    ".ds-flex", ".ds-icon", ".ds-icon-button", ".ds-button",
]


def strip_chrome(root, removals=REMOVALS):
    for sel in removals:
        for node in root.select(sel):
            node.decompose()
    return root


def node_to_markdown(root) -> str:
    working = extract_verbatim(root)
    return BlockRenderer().render(working).strip()


def clean_html_to_markdown(html: str, removals=REMOVALS) -> str:
    soup = BeautifulSoup(html, "lxml")
    strip_chrome(soup, removals)
    body = soup.body or soup
    return node_to_markdown(SoupNode(body))
