# Assemble the final Markdown document from ordered conversation turns:
# title heading, separators between rounds, quoted prompts and thinking,
# converted answers.

import html
import logging
from typing import Dict, List, Optional

from ingest.html_to_markdown import node_to_markdown
from ingest.turns import AssistantTurn, UserTurn

LABELS = {
    "fallback_title": "DeepSeek Chat",
    "prompt": "Question",
    "thinking": "Thinking",
}


def quote_lines(text: str) -> str:
    # escape before quoting so prompt text never turns into live HTML
    escaped = html.escape(text, quote=False)
    return "\n".join(f"> {line}" if line else ">" for line in escaped.split("\n"))


def format_prompt(text: str, label: str) -> str:
    return f"\n> [!question] {label}\n{quote_lines(text)}\n\n"


def format_thinking(text: str, label: str) -> str:
    return f"> [!note] {label}\n{quote_lines(text)}\n\n"


def format_answer(turn: AssistantTurn, labels: Dict[str, str]) -> str:
    parts = []
    if turn.thinking:
        parts.append(format_thinking(turn.thinking, labels["thinking"]))
    if turn.response is not None:
        parts.append(f"\n{node_to_markdown(turn.response)}\n")
    return "".join(parts)


def assemble(title: Optional[str], turns: List, labels: Optional[Dict[str, str]] = None) -> str:
    labels = {**LABELS, **(labels or {})}
    title = (title or "").strip() or labels["fallback_title"]

    md = f"# {title}\n\n"
    for idx, turn in enumerate(turns):
        try:
            if isinstance(turn, UserTurn):
                fragment = format_prompt(turn.text, labels["prompt"])
                if idx > 0:
                    fragment = "\n---\n" + fragment
            elif isinstance(turn, AssistantTurn):
                fragment = format_answer(turn, labels)
            else:
                continue
        except Exception as e:
            logging.warning(f"[turn {idx + 1}] conversion failed, skipped — {e}")
            continue
        md += fragment
    return md
