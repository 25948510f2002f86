import logging

from bs4 import BeautifulSoup

from ingest.extract_turns import extract_conversation, prompt_text, thinking_text
from ingest.html_to_markdown import node_to_markdown
from ingest.turns import AssistantTurn, UserTurn


def test_page_is_split_into_ordered_turns(sample_page):
    convo = extract_conversation(sample_page)

    assert convo.title == "Sorting in Python"
    assert [type(t) for t in convo.turns] == [UserTurn, AssistantTurn, UserTurn, AssistantTurn]


def test_prompt_text_is_cleaned(sample_page):
    first, _, second, _ = extract_conversation(sample_page).turns

    assert first.text == "How do I sort a list?\nWithout changing it?"
    assert second.text == "Thanks & <bye>"


def test_answer_regions(sample_page):
    _, answer, _, last = extract_conversation(sample_page).turns

    assert answer.thinking == "The user wants a copy.\nUse sorted."
    assert node_to_markdown(answer.response) == (
        "### Answer\n"
        "Use`sorted()`\n"
        "\n```python\n"
        "nums = [3, 1, 2]\n"
        "print(sorted(nums))  # [1, 2, 3]\n"
        "```\n"
        "\n| Call | In place |\n"
        "| --- | --- |\n"
        "| `sorted(x)` | no |\n"
        "| `x.sort()` | yes |"
    )
    assert last.thinking is None
    assert node_to_markdown(last.response) == "You're welcome."


def test_missing_container_gives_no_turns(caplog):
    with caplog.at_level(logging.WARNING):
        convo = extract_conversation("<html><body><p>nothing</p></body></html>")

    assert convo.turns == []
    assert convo.title == ""
    assert "not found" in caplog.text


def test_answer_without_regions_is_tolerated():
    page = '<div class="dad65929"><div class="f9bf7997"><p>loading</p></div></div>'

    (turn,) = extract_conversation(page).turns

    assert turn == AssistantTurn(thinking=None, response=None)


def test_response_inside_thinking_is_not_the_answer():
    page = (
        '<div class="dad65929"><div class="f9bf7997">'
        '<div class="e1675d8b"><div class="ds-markdown"><p>draft</p></div></div>'
        '<div class="ds-markdown"><p>final</p></div>'
        "</div></div>"
    )

    (turn,) = extract_conversation(page).turns

    assert turn.thinking == "draft"
    assert node_to_markdown(turn.response) == "final"


def test_selectors_come_from_config():
    page = (
        '<h1 class="t">Custom</h1><main class="log">'
        '<div class="q">hello</div><div class="a"><div class="md"><p>hi</p></div></div>'
        "</main>"
    )
    cfg = {"selectors": {
        "message": "log", "user_prompt": "q", "ai_answer": "a",
        "ai_response": "md", "title": "t",
    }}

    convo = extract_conversation(page, cfg)

    assert convo.title == "Custom"
    assert convo.turns[0] == UserTurn(text="hello")
    assert node_to_markdown(convo.turns[1].response) == "hi"


def test_text_helpers():
    soup = BeautifulSoup("<div><p>a</p><p>b<br>c</p>\n\n<span>d</span></div>", "lxml")

    assert thinking_text(soup.div) == "a\nb\nc\nd"

    soup = BeautifulSoup("<div>  one\n\n\ntwo  </div>", "lxml")
    assert prompt_text(soup.div) == "one\ntwo"


def test_extraction_logs_turn_count(sample_page, caplog):
    with caplog.at_level(logging.INFO):
        extract_conversation(sample_page)

    assert "Extracted 4 turns (title='Sorting in Python')" in caplog.text
