"""
Tool payload redaction.

Old tool outputs (page content, search results) are large and the model
rarely looks at them again. Before parsing, every message except the last
few keeps only the envelope of its tool parts: type, call id and tool name.
Ids stay intact so pairing validation still works on redacted history.
"""

from __future__ import annotations

from typing import Sequence

from typing_extensions import assert_never

from agent_context.messages.types import (
    Message,
    Part,
    TextPart,
    ToolCallPart,
    ToolResultPart,
)


def _strip_part(part: Part) -> Part | None:
    if isinstance(part, TextPart):
        return part if part.text else None
    if isinstance(part, ToolCallPart):
        return part if not part.args else part.model_copy(update={"args": {}})
    if isinstance(part, ToolResultPart):
        return part if part.result is None else part.model_copy(update={"result": None})
    assert_never(part)


def strip_tool_payloads(message: Message) -> Message:
    """Return `message` with tool payloads dropped. Plain-text messages are returned as is."""
    if isinstance(message.content, str):
        return message

    parts = [p for p in (_strip_part(part) for part in message.content) if p is not None]
    if parts == message.content:
        return message
    return message.model_copy(update={"content": parts})


def redact_tool_payloads(
    messages: Sequence[Message],
    *,
    keep_last: int = 2,
    remove_empty: bool = True,
) -> list[Message]:
    redacted, _positions = redact_with_positions(
        messages, keep_last=keep_last, remove_empty=remove_empty
    )
    return redacted


def redact_with_positions(
    messages: Sequence[Message],
    *,
    keep_last: int = 2,
    remove_empty: bool = True,
) -> tuple[list[Message], list[int]]:
    """Like redact_tool_payloads(), plus the input index of every kept message."""
    cutoff = max(0, len(messages) - keep_last)
    out: list[Message] = []
    positions: list[int] = []

    for i, msg in enumerate(messages):
        if i < cutoff:
            msg = strip_tool_payloads(msg)
        if remove_empty and msg.is_empty():
            continue
        out.append(msg)
        positions.append(i)

    return out, positions
