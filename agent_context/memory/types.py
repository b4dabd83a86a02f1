"""
Context manager types and exceptions.

Key concepts:
- ConversationTurn: atomic unit = user message + every assistant/tool message
  until the next user message.
- AssistantExchange: one assistant message + the tool message right after it.
- tool_call_id: links a tool-call part to its tool-result part. The model API
  rejects the whole request if any call in an exchange has no matching result.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from agent_context.messages.types import Message


class ContextManagerError(Exception):
    """Base class for context manager errors."""


class InvalidArgumentError(ContextManagerError, ValueError):
    """Caller broke a precondition (missing message list, bad config values)."""


@dataclass(frozen=True)
class ContextManagerConfig:
    max_messages: int = 30
    min_turns_to_keep: int = 2
    # Messages at the end of history whose tool payloads are never redacted.
    keep_recent_tool_payloads: int = 2

    def __post_init__(self) -> None:
        if self.max_messages < 1:
            raise InvalidArgumentError("max_messages must be >= 1.")
        if self.min_turns_to_keep < 0:
            raise InvalidArgumentError("min_turns_to_keep must be >= 0.")
        if self.keep_recent_tool_payloads < 0:
            raise InvalidArgumentError("keep_recent_tool_payloads must be >= 0.")


# ---- Conversation structure ----


@dataclass
class AssistantExchange:
    """
    One assistant action and its tool results.

    The assistant message may hold text, tool calls, or both. If it holds tool
    calls, `tool_message` must carry a result for every call id and nothing else.
    """

    assistant_message: Message
    tool_message: Message | None = None
    is_valid: bool = True

    @property
    def tool_call_ids(self) -> set[str]:
        return self.assistant_message.tool_call_ids()

    @property
    def tool_result_ids(self) -> set[str]:
        if self.tool_message is None:
            return set()
        return self.tool_message.tool_result_ids()

    @property
    def message_count(self) -> int:
        return 2 if self.tool_message is not None else 1

    def messages(self) -> list[Message]:
        if self.tool_message is None:
            return [self.assistant_message]
        return [self.assistant_message, self.tool_message]


@dataclass
class ConversationTurn:
    """
    A user message plus all assistant activity that answered it.

    Example (one turn, two exchanges):
        [user]      "what pages do we have?"
        [assistant] tool-call listPages (id: call_1)
        [tool]      result for call_1
        [assistant] "You have three pages."

    `user_message` is None for a preamble turn: assistant activity seen before
    any user message.
    """

    user_message: Message | None
    exchanges: list[AssistantExchange] = field(default_factory=list)
    is_valid: bool = True
    message_count: int = 0

    def add_exchange(self, exchange: AssistantExchange) -> None:
        self.exchanges.append(exchange)
        self.message_count += exchange.message_count


@dataclass
class ParseResult:
    system_message: Message | None
    turns: list[ConversationTurn]
    orphaned_messages: list[Message]


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    issues: list[str]


# ---- Results ----


@dataclass(frozen=True)
class TrimResult:
    messages: list[Message]
    removed_tools: list[str]
    active_tools: list[str]
    messages_removed: int = 0
    turns_removed: int = 0
    invalid_turns_removed: int = 0
    orphaned_messages_removed: int = 0
    # True when the min-turns floor stopped pruning above max_messages.
    over_budget: bool = False
    # Input index of each output message, same length as `messages`.
    source_indices: list[int] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "message_count": len(self.messages),
            "removed_tools": list(self.removed_tools),
            "active_tools": list(self.active_tools),
            "messages_removed": self.messages_removed,
            "turns_removed": self.turns_removed,
            "invalid_turns_removed": self.invalid_turns_removed,
            "orphaned_messages_removed": self.orphaned_messages_removed,
            "over_budget": self.over_budget,
        }


@dataclass(frozen=True)
class MessageValidationReport:
    is_valid: bool
    issues: list[str]
    orphaned_messages: list[Message] = field(default_factory=list)
