# Read a saved DeepSeek chat page and split it into conversation turns.
# Class names are the site's generated ones and change between releases;
# override them under `selectors:` in sources.yaml.

import logging
import re

from bs4 import BeautifulSoup

from .html_to_markdown import REMOVALS, strip_chrome
from .nodes import SoupNode
from .turns import AssistantTurn, Conversation, UserTurn

SELECTORS = {
    "message": "dad65929",      # conversation container
    "user_prompt": "fa81",      # user prompt block
    "ai_answer": "f9bf7997",    # assistant answer block
    "ai_thinking": "e1675d8b",  # reasoning region inside an answer
    "ai_response": "ds-markdown",  # rendered answer markup
    "title": "d8ed659a",        # conversation title
}


def prompt_text(tag) -> str:
    return re.sub(r"\n{2,}", "\n", tag.get_text()).strip()


def thinking_text(tag) -> str:
    # paragraph ends and <br> become line breaks, all other markup is dropped
    for br in tag.find_all("br"):
        br.replace_with("\n")
    for p in tag.find_all("p"):
        p.append("\n")
    return re.sub(r"\n+", "\n", tag.get_text()).strip()


def find_response(block, sel):
    # the reasoning region may carry its own markdown root; skip those
    thinking_cls = sel["ai_thinking"]
    for candidate in block.select(f".{sel['ai_response']}"):
        inside_thinking = any(
            thinking_cls in (parent.get("class") or []) for parent in candidate.parents
        )
        if not inside_thinking:
            return candidate
    return None


def classify_block(block, sel):
    classes = block.get("class") or []
    if sel["user_prompt"] in classes:
        return UserTurn(text=prompt_text(block))

    if sel["ai_answer"] in classes:
        thinking = block.select_one(f".{sel['ai_thinking']}")
        response = find_response(block, sel)
        if thinking is None:
            logging.debug("Answer without thinking region")
        if response is None:
            logging.debug("Answer without response region")
        return AssistantTurn(
            thinking=thinking_text(thinking) if thinking is not None else None,
            response=SoupNode(response) if response is not None else None,
        )
    return None


def extract_conversation(html: str, cfg=None) -> Conversation:
    cfg = cfg or {}
    sel = {**SELECTORS, **(cfg.get("selectors") or {})}
    removals = cfg.get("removals") or REMOVALS

    soup = BeautifulSoup(html, "lxml")
    strip_chrome(soup, removals)

    title_el = soup.select_one(f".{sel['title']}")
    title = title_el.get_text().strip() if title_el is not None else ""

    container = soup.select_one(f".{sel['message']}")
    if container is None:
        logging.warning(f"Message container .{sel['message']} not found")
        return Conversation(title=title)

    turns = []
    for i, block in enumerate(container.find_all(recursive=False), start=1):
        try:
            turn = classify_block(block, sel)
        except Exception as e:
            logging.warning(f"[block {i}] could not parse — {e}")
            continue
        if turn is not None:
            turns.append(turn)

    logging.info(f"Extracted {len(turns)} turns (title={title!r})")
    return Conversation(title=title, turns=turns)
