"""
Context Manager.

Turn-based context trimming that keeps the message sequence valid for the
model API.

Hard constraint:
- A `tool` message MUST immediately follow the `assistant` message that
  requested the calls, and its result ids must equal the call ids.
  Breaking this makes the provider reject the whole request.

Strategy (trim_context):
1. Redact tool payloads in all but the most recent messages.
2. Parse messages into ConversationTurns.
3. Remove invalid turns entirely.
4. Drop oldest turns until the budget fits (keeping min_turns_to_keep).
5. Flatten back to messages and deactivate tools no longer in history.
"""

from __future__ import annotations

import logging
from typing import Sequence

from agent_context.config import Settings
from agent_context.memory.pruning import count_messages, prune_to_limit, remove_invalid_turns
from agent_context.memory.redaction import redact_with_positions
from agent_context.memory.tool_usage import removed_tools, tools_in_messages, tools_in_turns
from agent_context.memory.turns import flatten_turns, parse_conversation_turns
from agent_context.memory.types import (
    ContextManagerConfig,
    InvalidArgumentError,
    MessageValidationReport,
    TrimResult,
)
from agent_context.memory.validation import validate_turn
from agent_context.memory.working_context import ToolActivationStore
from agent_context.messages.types import Message


logger = logging.getLogger(__name__)


def _check_messages(messages: Sequence[Message] | None) -> list[Message]:
    if messages is None:
        raise InvalidArgumentError("messages must be a list of Message, got None.")
    if isinstance(messages, (str, bytes)):
        raise InvalidArgumentError("messages must be a list of Message, got a string.")

    out = list(messages)
    for i, msg in enumerate(out):
        if not isinstance(msg, Message):
            raise InvalidArgumentError(
                f"messages[{i}] is {type(msg).__name__}, expected Message."
            )
    return out


def _kept_positions(
    redacted: Sequence[Message],
    trimmed: Sequence[Message],
    system_message: Message | None,
) -> list[int]:
    """
    Index into `redacted` of every message in `trimmed`.

    Apart from the leading system message, `trimmed` is an order-preserving
    subsequence of `redacted` made of the same objects.
    """
    out: list[int] = []
    rest = list(trimmed)
    if system_message is not None:
        # Last system message wins; flatten_turns puts it first.
        out.append(max(i for i, m in enumerate(redacted) if m is system_message))
        rest = rest[1:]

    j = 0
    for msg in rest:
        while redacted[j] is not msg or redacted[j].role == "system":
            j += 1
        out.append(j)
        j += 1
    return out


class ContextManager:
    """
    Usage:
        manager = ContextManager(ContextManagerConfig(max_messages=20))
        result = manager.trim_context(messages, working_context)
    """

    def __init__(self, config: ContextManagerConfig | None = None) -> None:
        self._config = config or ContextManagerConfig()

    @classmethod
    def from_settings(cls, settings: Settings) -> "ContextManager":
        return cls(
            ContextManagerConfig(
                max_messages=settings.max_messages,
                min_turns_to_keep=settings.min_turns_to_keep,
                keep_recent_tool_payloads=settings.keep_recent_tool_payloads,
            )
        )

    @property
    def config(self) -> ContextManagerConfig:
        return self._config

    def trim_context(
        self,
        messages: Sequence[Message],
        working_context: ToolActivationStore,
    ) -> TrimResult:
        messages = _check_messages(messages)
        cfg = self._config

        # Fresh same-session history under the limit is trusted as valid.
        if len(messages) <= cfg.max_messages:
            logger.debug(
                "History within budget (%d <= %d); skipping trim",
                len(messages),
                cfg.max_messages,
            )
            return TrimResult(
                messages=messages,
                removed_tools=[],
                active_tools=working_context.get_discovered_tools(),
                source_indices=list(range(len(messages))),
            )

        tools_before = tools_in_messages(messages)

        redacted, positions = redact_with_positions(
            messages, keep_last=cfg.keep_recent_tool_payloads
        )
        parsed = parse_conversation_turns(redacted)

        if parsed.orphaned_messages:
            logger.warning(
                "Dropping %d orphaned message(s) (roles: %s)",
                len(parsed.orphaned_messages),
                ", ".join(m.role for m in parsed.orphaned_messages),
            )

        valid_turns, invalid_removed = remove_invalid_turns(parsed.turns)
        kept_turns, turns_removed = prune_to_limit(
            parsed.system_message,
            valid_turns,
            max_messages=cfg.max_messages,
            min_turns_to_keep=cfg.min_turns_to_keep,
        )

        over_budget = count_messages(parsed.system_message, kept_turns) > cfg.max_messages
        if over_budget:
            logger.warning(
                "History still over budget after keeping %d turn(s): %d > %d messages",
                len(kept_turns),
                count_messages(parsed.system_message, kept_turns),
                cfg.max_messages,
            )

        trimmed = flatten_turns(parsed.system_message, kept_turns)

        to_remove = removed_tools(tools_before, tools_in_turns(kept_turns))
        if to_remove:
            working_context.remove_tools(to_remove)

        result = TrimResult(
            messages=trimmed,
            removed_tools=to_remove,
            active_tools=working_context.get_discovered_tools(),
            messages_removed=len(messages) - len(trimmed),
            turns_removed=turns_removed,
            invalid_turns_removed=invalid_removed,
            orphaned_messages_removed=len(parsed.orphaned_messages),
            over_budget=over_budget,
            source_indices=[
                positions[i]
                for i in _kept_positions(redacted, trimmed, parsed.system_message)
            ],
        )
        logger.info(
            "Context trimmed: messages_removed=%d turns_removed=%d "
            "invalid_turns_removed=%d removed_tools=%s",
            result.messages_removed,
            result.turns_removed,
            result.invalid_turns_removed,
            result.removed_tools,
        )
        return result

    def validate_messages(self, messages: Sequence[Message]) -> MessageValidationReport:
        """Check a history (e.g. loaded from storage) without trimming it."""
        messages = _check_messages(messages)
        parsed = parse_conversation_turns(messages)
        issues: list[str] = []

        if parsed.orphaned_messages:
            issues.append(f"Found {len(parsed.orphaned_messages)} orphaned message(s)")

        for i, turn in enumerate(parsed.turns):
            validation = validate_turn(turn)
            turn.is_valid = validation.is_valid
            if not validation.is_valid:
                issues.append(f"Turn {i}: {'; '.join(validation.issues)}")

        return MessageValidationReport(
            is_valid=not issues,
            issues=issues,
            orphaned_messages=list(parsed.orphaned_messages),
        )
