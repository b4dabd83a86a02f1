"""
Turn pruning.

Two independent passes:
- remove_invalid_turns(): drop whole turns that fail validation (no partial repair).
- prune_to_limit(): drop oldest turns until the history fits max_messages,
  never going below min_turns_to_keep.
"""

from __future__ import annotations

import logging
from typing import Sequence

from agent_context.memory.types import ConversationTurn
from agent_context.memory.validation import validate_turn
from agent_context.messages.types import Message


logger = logging.getLogger(__name__)


def remove_invalid_turns(
    turns: Sequence[ConversationTurn],
) -> tuple[list[ConversationTurn], int]:
    valid_turns: list[ConversationTurn] = []
    removed = 0

    for turn in turns:
        validation = validate_turn(turn)
        turn.is_valid = validation.is_valid
        if validation.is_valid:
            valid_turns.append(turn)
            continue

        removed += 1
        logger.warning(
            "Removing invalid turn (%d messages): %s",
            turn.message_count,
            "; ".join(validation.issues),
        )

    return valid_turns, removed


def count_messages(
    system_message: Message | None,
    turns: Sequence[ConversationTurn],
) -> int:
    """System message counts as one; each turn by its message_count."""
    return (1 if system_message is not None else 0) + sum(
        t.message_count for t in turns
    )


def prune_to_limit(
    system_message: Message | None,
    turns: Sequence[ConversationTurn],
    *,
    max_messages: int,
    min_turns_to_keep: int,
) -> tuple[list[ConversationTurn], int]:
    total = count_messages(system_message, turns)
    if total <= max_messages:
        return list(turns), 0

    kept = list(turns)
    removed = 0
    while total > max_messages and len(kept) > min_turns_to_keep:
        oldest = kept.pop(0)
        total -= oldest.message_count
        removed += 1

    return kept, removed
