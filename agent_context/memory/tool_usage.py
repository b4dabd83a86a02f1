"""
Tool usage tracking across trims.

When a tool's only calls/results scroll out of the history, the agent should
stop treating it as active. These helpers compute which tool names vanished.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from agent_context.memory.types import ConversationTurn
from agent_context.messages.types import Message


def tools_in_messages(messages: Iterable[Message]) -> list[str]:
    """Tool names referenced by any tool-call or tool-result part, first-seen order."""
    seen: dict[str, None] = {}
    for msg in messages:
        for name in msg.tool_names():
            seen.setdefault(name, None)
    return list(seen)


def tools_in_turns(turns: Sequence[ConversationTurn]) -> list[str]:
    return tools_in_messages(
        msg for turn in turns for exchange in turn.exchanges for msg in exchange.messages()
    )


def removed_tools(before: Iterable[str], after: Iterable[str]) -> list[str]:
    after_set = set(after)
    return [name for name in before if name not in after_set]
