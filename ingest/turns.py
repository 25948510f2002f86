"""
Conversation turns handed from the page reader to the assembler.

A conversation is an ordered list of turns; position is the only identifier.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Union


@dataclass
class UserTurn:
    text: str


@dataclass
class AssistantTurn:
    """
    thinking:
      - plain text of the reasoning region, None when the answer has none
    response:
      - root node of the answer markup (already stripped of buttons/icons),
        None when the response region is missing
    """

    thinking: Optional[str] = None
    response: Optional[object] = None


ConversationTurn = Union[UserTurn, AssistantTurn]


@dataclass
class Conversation:
    title: str
    turns: List[ConversationTurn] = field(default_factory=list)
