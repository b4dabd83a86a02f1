"""Message model and LangChain adapters."""

from agent_context.messages.types import (
    Message,
    Part,
    Role,
    TextPart,
    ToolCallPart,
    ToolResultPart,
    assistant_message,
    system_message,
    tool_message,
    user_message,
)

__all__ = [
    "Message",
    "Part",
    "Role",
    "TextPart",
    "ToolCallPart",
    "ToolResultPart",
    "assistant_message",
    "system_message",
    "tool_message",
    "user_message",
]
