"""
LangChain message adapters.

The agent graph stores history as `langchain_core.messages`. The context
manager works on `Message` values where ONE tool message carries every
result for the preceding assistant message. The adapters do that grouping:

- consecutive ToolMessages  -> one `tool` Message with several result parts
- one `tool` Message        -> one ToolMessage per result part
"""

from __future__ import annotations

import json
from typing import Any, Sequence

from langchain_core.messages import (
    AIMessage,
    BaseMessage,
    ChatMessage,
    HumanMessage,
    SystemMessage,
    ToolMessage,
)

from agent_context.messages.types import (
    Message,
    Part,
    TextPart,
    ToolCallPart,
    ToolResultPart,
)


def _content_text(content: Any) -> str:
    """
    Flatten LangChain content (str or list of blocks) into text.
    Non-text blocks are ignored; the context manager only needs text and tool parts.
    """
    if isinstance(content, str):
        return content

    chunks: list[str] = []
    for block in content or []:
        if isinstance(block, str):
            chunks.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            chunks.append(str(block.get("text", "")))
    return "".join(chunks)


def _result_text(result: Any) -> str:
    if result is None:
        return ""
    if isinstance(result, str):
        return result
    return json.dumps(result, ensure_ascii=False, default=str)


def from_langchain_messages(messages: Sequence[BaseMessage]) -> list[Message]:
    converted, _sources = from_langchain_messages_with_sources(messages)
    return converted


def from_langchain_messages_with_sources(
    messages: Sequence[BaseMessage],
) -> tuple[list[Message], list[list[int]]]:
    """
    Convert, and also return for each Message the indices of the LangChain
    messages it was built from (several for a grouped run of ToolMessages).
    """
    out: list[Message] = []
    sources: list[list[int]] = []
    pending_results: list[ToolResultPart] = []
    pending_sources: list[int] = []
    call_names: dict[str, str] = {}

    def flush_results() -> None:
        if pending_results:
            out.append(Message(role="tool", content=list(pending_results)))
            sources.append(list(pending_sources))
            pending_results.clear()
            pending_sources.clear()

    for idx, msg in enumerate(messages):
        if isinstance(msg, ToolMessage):
            pending_sources.append(idx)
            name = msg.name or call_names.get(msg.tool_call_id, "unknown")
            pending_results.append(
                ToolResultPart(
                    tool_call_id=msg.tool_call_id,
                    tool_name=name,
                    result=msg.content,
                )
            )
            continue

        flush_results()
        sources.append([idx])

        if isinstance(msg, SystemMessage):
            out.append(Message(role="system", content=_content_text(msg.content)))
        elif isinstance(msg, HumanMessage):
            out.append(Message(role="user", content=_content_text(msg.content)))
        elif isinstance(msg, AIMessage):
            text = _content_text(msg.content)
            if not msg.tool_calls:
                out.append(Message(role="assistant", content=text))
                continue

            parts: list[Part] = []
            if text:
                parts.append(TextPart(text=text))
            for call in msg.tool_calls:
                call_id = call.get("id") or ""
                call_names[call_id] = call["name"]
                parts.append(
                    ToolCallPart(
                        tool_call_id=call_id,
                        tool_name=call["name"],
                        args=dict(call.get("args") or {}),
                    )
                )
            out.append(Message(role="assistant", content=parts))
        elif isinstance(msg, ChatMessage):
            out.append(Message(role=msg.role, content=_content_text(msg.content)))
        else:
            # FunctionMessage, RemoveMessage, etc. Keep the role so the parser orphans it.
            out.append(Message(role=msg.type, content=_content_text(msg.content)))

    flush_results()
    return out, sources


def to_langchain_messages(messages: Sequence[Message]) -> list[BaseMessage]:
    """
    Build LangChain messages from scratch (text and tool parts only).

    A `tool` Message becomes one ToolMessage per result part, so a tool
    Message with no results produces nothing and the output can be shorter
    than the input. To keep the original LangChain objects (images, status,
    artifacts), trim through `agent_context.memory.trimming` instead.
    """
    out: list[BaseMessage] = []

    for msg in messages:
        parts = msg.parts
        text = "".join(p.text for p in parts if isinstance(p, TextPart))

        if msg.role == "system":
            out.append(SystemMessage(content=text))
        elif msg.role == "user":
            out.append(HumanMessage(content=text))
        elif msg.role == "assistant":
            tool_calls = [
                {
                    "name": p.tool_name,
                    "args": dict(p.args),
                    "id": p.tool_call_id,
                    "type": "tool_call",
                }
                for p in parts
                if isinstance(p, ToolCallPart)
            ]
            out.append(AIMessage(content=text, tool_calls=tool_calls))
        elif msg.role == "tool":
            for p in parts:
                if isinstance(p, ToolResultPart):
                    out.append(
                        ToolMessage(
                            content=_result_text(p.result),
                            tool_call_id=p.tool_call_id,
                            name=p.tool_name,
                        )
                    )
        else:
            out.append(ChatMessage(role=msg.role, content=text))

    return out
