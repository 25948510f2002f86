"""Shared fixtures for the converter and export tests."""

from pathlib import Path

import pytest
from bs4 import BeautifulSoup

from ingest.nodes import SoupNode

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def html_node():
    """Parse an HTML fragment and return the <body> as a SoupNode."""

    def parse(fragment: str) -> SoupNode:
        soup = BeautifulSoup(fragment, "lxml")
        return SoupNode(soup.body)

    return parse


@pytest.fixture
def first_child(html_node):
    """Parse a fragment and return its first top-level element."""

    def parse(fragment: str) -> SoupNode:
        return html_node(fragment).children()[0]

    return parse


@pytest.fixture
def sample_page() -> str:
    return (FIXTURES / "deepseek_page.html").read_text(encoding="utf-8")
