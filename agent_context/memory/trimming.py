"""
Context Window Management for LangChain histories.

Strategy:
- Keep SystemMessage (instructions).
- Drop whole turns, oldest first, until the history fits max_messages.
- Never cut a tool call sequence (AIMessage.tool_calls -> ToolMessage) in half,
  and drop turns whose call/result ids don't line up.

Messages that survive unchanged are returned as the caller's own objects,
so multimodal content, ToolMessage status/artifact and metadata are kept.
Only messages whose tool payloads were redacted are copied.
"""

from __future__ import annotations

from typing import Sequence

from langchain_core.messages import AIMessage, BaseMessage, ToolMessage

from agent_context.config import Settings
from agent_context.memory.manager import ContextManager
from agent_context.memory.types import TrimResult
from agent_context.memory.working_context import ToolActivationStore, WorkingContext
from agent_context.messages.convert import from_langchain_messages_with_sources


def _redact(message: BaseMessage) -> BaseMessage:
    """LangChain counterpart of strip_tool_payloads(): keep ids and names, drop payloads."""
    if isinstance(message, AIMessage) and message.tool_calls:
        calls = [{**call, "args": {}} for call in message.tool_calls]
        return message.model_copy(update={"tool_calls": calls})
    if isinstance(message, ToolMessage):
        return message.model_copy(update={"content": "", "artifact": None})
    return message


def _run(
    messages: Sequence[BaseMessage],
    settings: Settings,
    working_context: ToolActivationStore | None,
):
    converted, sources = from_langchain_messages_with_sources(messages)
    manager = ContextManager.from_settings(settings)
    store = working_context if working_context is not None else WorkingContext()
    return manager.trim_context(converted, store), converted, sources


def trim_conversation_history(
    messages: Sequence[BaseMessage],
    settings: Settings,
    working_context: ToolActivationStore | None = None,
) -> list[BaseMessage]:
    """
    Trim message history to fit within context window limits.

    We apply trimming *before* sending to the model; the caller's stored
    history is not modified. Pass the session's working context so tools
    whose calls were trimmed away get deactivated.
    """
    messages = list(messages)
    result, converted, sources = _run(messages, settings, working_context)

    out: list[BaseMessage] = []
    for kept, idx in zip(result.messages, result.source_indices):
        originals = [messages[i] for i in sources[idx]]
        if kept is converted[idx]:
            out.extend(originals)
        else:
            out.extend(_redact(m) for m in originals)
    return out


def trim_with_report(
    messages: Sequence[BaseMessage],
    settings: Settings,
    working_context: ToolActivationStore | None = None,
) -> TrimResult:
    result, _converted, _sources = _run(list(messages), settings, working_context)
    return result
