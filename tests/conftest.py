from __future__ import annotations

import pytest

from agent_context.memory.working_context import WorkingContext
from agent_context.messages.types import (
    Message,
    ToolCallPart,
    ToolResultPart,
    assistant_message,
    system_message,
    tool_message,
    user_message,
)


def call(call_id: str, name: str = "getPage", **args) -> ToolCallPart:
    return ToolCallPart(tool_call_id=call_id, tool_name=name, args=args)


def result(call_id: str, name: str = "getPage", value: object = "ok") -> ToolResultPart:
    return ToolResultPart(tool_call_id=call_id, tool_name=name, result=value)


def tool_turn(
    text: str,
    call_id: str,
    name: str = "getPage",
    *,
    answer: str = "done",
) -> list[Message]:
    """user -> assistant(call) -> tool(result) -> assistant(answer): 4 messages."""
    return [
        user_message(text),
        assistant_message(tool_calls=[call(call_id, name, q=text)]),
        tool_message([result(call_id, name, value=f"payload for {text}")]),
        assistant_message(answer),
    ]


def chat_turn(text: str, answer: str = "ok") -> list[Message]:
    return [user_message(text), assistant_message(answer)]


@pytest.fixture
def working_context() -> WorkingContext:
    return WorkingContext()


@pytest.fixture
def system() -> Message:
    return system_message("You are a CMS assistant.")
