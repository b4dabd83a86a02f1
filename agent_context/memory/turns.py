"""
Turn parsing and flattening.

parse_conversation_turns() groups a flat history into turns;
flatten_turns() is its exact inverse for everything that was not orphaned.
"""

from __future__ import annotations

from typing import Sequence

from agent_context.memory.types import AssistantExchange, ConversationTurn, ParseResult
from agent_context.messages.types import Message


def parse_conversation_turns(messages: Sequence[Message]) -> ParseResult:
    """
    Parse a flat message list into conversation turns.

    A turn starts with a user message and includes every following
    assistant/tool message until the next user message. A tool message pairs
    with the assistant message right before it; anything that can't be placed
    is returned in `orphaned_messages`.
    """
    system_message: Message | None = None
    turns: list[ConversationTurn] = []
    orphaned: list[Message] = []

    current: ConversationTurn | None = None
    pending: Message | None = None

    for msg in messages:
        if msg.role == "system":
            system_message = msg

        elif msg.role == "user":
            if pending is not None and current is not None:
                current.add_exchange(AssistantExchange(pending))
                pending = None
            if current is not None:
                turns.append(current)
            current = ConversationTurn(user_message=msg, message_count=1)

        elif msg.role == "assistant":
            if current is None:
                # Preamble: assistant activity before any user message.
                current = ConversationTurn(user_message=None)
            if pending is not None:
                current.add_exchange(AssistantExchange(pending))
            pending = msg

        elif msg.role == "tool":
            if pending is not None and current is not None:
                current.add_exchange(AssistantExchange(pending, tool_message=msg))
                pending = None
            else:
                orphaned.append(msg)

        else:
            orphaned.append(msg)

    if pending is not None and current is not None:
        current.add_exchange(AssistantExchange(pending))
    if current is not None:
        turns.append(current)

    return ParseResult(
        system_message=system_message,
        turns=turns,
        orphaned_messages=orphaned,
    )


def flatten_turns(
    system_message: Message | None,
    turns: Sequence[ConversationTurn],
) -> list[Message]:
    out: list[Message] = []
    if system_message is not None:
        out.append(system_message)

    for turn in turns:
        if turn.user_message is not None:
            out.append(turn.user_message)
        for exchange in turn.exchanges:
            out.extend(exchange.messages())

    return out
