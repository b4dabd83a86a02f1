"""
Context usage statistics (diagnostics only).

The trimming budget is message-based. Token numbers here are an
approximation for dashboards and logs; we use tiktoken to approximate
OpenAI tokenization.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from functools import lru_cache
from typing import Callable, Sequence

import tiktoken
from typing_extensions import assert_never

from agent_context.memory.turns import parse_conversation_turns
from agent_context.messages.types import (
    Message,
    TextPart,
    ToolCallPart,
    ToolResultPart,
)


# Per-message overhead for role markers.
_MESSAGE_OVERHEAD_TOKENS = 4


@dataclass(frozen=True)
class ContextStats:
    message_count: int
    turn_count: int
    tool_call_count: int
    orphaned_count: int
    estimated_tokens: int
    has_system_message: bool

    def to_dict(self) -> dict:
        return asdict(self)


@lru_cache(maxsize=8)
def _encoding(name: str) -> tiktoken.Encoding:
    return tiktoken.get_encoding(name)


def tiktoken_counter(encoding_name: str = "cl100k_base") -> Callable[[str], int]:
    enc = _encoding(encoding_name)
    return lambda text: len(enc.encode(text, disallowed_special=()))


def message_text(message: Message) -> str:
    """Everything in the message the model will read, as one string."""
    chunks: list[str] = []
    for part in message.parts:
        if isinstance(part, TextPart):
            chunks.append(part.text)
        elif isinstance(part, ToolCallPart):
            chunks.append(part.tool_name)
            if part.args:
                chunks.append(json.dumps(part.args, ensure_ascii=False, default=str))
        elif isinstance(part, ToolResultPart):
            chunks.append(part.tool_name)
            if part.result is not None:
                chunks.append(
                    part.result
                    if isinstance(part.result, str)
                    else json.dumps(part.result, ensure_ascii=False, default=str)
                )
        else:
            assert_never(part)
    return "\n".join(chunks)


def context_stats(
    messages: Sequence[Message],
    *,
    encoding_name: str = "cl100k_base",
    token_counter: Callable[[str], int] | None = None,
) -> ContextStats:
    counter = token_counter or tiktoken_counter(encoding_name)
    parsed = parse_conversation_turns(messages)

    tokens = sum(
        _MESSAGE_OVERHEAD_TOKENS + counter(message_text(m)) for m in messages
    )

    return ContextStats(
        message_count=len(messages),
        turn_count=len(parsed.turns),
        tool_call_count=sum(len(m.tool_call_ids()) for m in messages),
        orphaned_count=len(parsed.orphaned_messages),
        estimated_tokens=tokens,
        has_system_message=parsed.system_message is not None,
    )
