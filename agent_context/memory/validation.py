"""
Tool call / tool result pairing checks.

Rules for one exchange:
1. No tool calls -> a following tool message is tolerated only if it carries no results.
2. Tool calls -> a tool message MUST follow.
3. Every call id has a matching result id.
4. Every result id has a matching call id.
"""

from __future__ import annotations

from agent_context.memory.types import AssistantExchange, ConversationTurn, ValidationResult
from agent_context.messages.types import Message, ToolCallPart, ToolResultPart


def _ids_in_order(message: Message | None, kind: type) -> list[str]:
    if message is None:
        return []
    return list(dict.fromkeys(p.tool_call_id for p in message.parts if isinstance(p, kind)))


def validate_exchange(exchange: AssistantExchange) -> ValidationResult:
    call_ids = exchange.tool_call_ids
    result_ids = exchange.tool_result_ids
    issues: list[str] = []

    if not call_ids:
        if exchange.tool_message is not None and result_ids:
            issues.append("Tool results exist but assistant has no tool calls")
        return ValidationResult(is_valid=not issues, issues=issues)

    if exchange.tool_message is None:
        issues.append(
            f"Assistant has {len(call_ids)} tool call(s) but no tool message follows"
        )
        return ValidationResult(is_valid=False, issues=issues)

    # Report ids in the order the parts carry them.
    for call_id in _ids_in_order(exchange.assistant_message, ToolCallPart):
        if call_id in result_ids:
            continue
        issues.append(f"Missing tool result for call ID: {call_id}")
    for result_id in _ids_in_order(exchange.tool_message, ToolResultPart):
        if result_id in call_ids:
            continue
        issues.append(f"Orphaned tool result with ID: {result_id}")

    return ValidationResult(is_valid=not issues, issues=issues)


def validate_turn(turn: ConversationTurn) -> ValidationResult:
    """Validate every exchange; sets `exchange.is_valid` along the way."""
    issues: list[str] = []

    for i, exchange in enumerate(turn.exchanges):
        result = validate_exchange(exchange)
        exchange.is_valid = result.is_valid
        if not result.is_valid:
            issues.append(f"Exchange {i}: {', '.join(result.issues)}")

    return ValidationResult(is_valid=not issues, issues=issues)
