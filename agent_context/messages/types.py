"""
Message model.

This is the wire shape the context manager reasons about:
- A message has a role and either plain text or a list of parts.
- Parts are a tagged union on `type`: text, tool-call request, tool-call result.
- Tool calls and results are linked by `tool_call_id`.

Messages are immutable values. Trimming never edits a message in place; it
builds new ones (redaction) or drops them.
"""

from __future__ import annotations

from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field
from typing_extensions import Annotated, assert_never


Role = Literal["system", "user", "assistant", "tool"]


class TextPart(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["text"] = "text"
    text: str


class ToolCallPart(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["tool-call"] = "tool-call"
    tool_call_id: str
    tool_name: str
    args: dict[str, Any] = Field(default_factory=dict)


class ToolResultPart(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["tool-result"] = "tool-result"
    tool_call_id: str
    tool_name: str
    result: Any = None


Part = Annotated[
    Union[TextPart, ToolCallPart, ToolResultPart],
    Field(discriminator="type"),
]


class Message(BaseModel):
    """
    One chat message.

    `role` is a plain string on purpose: histories loaded from storage can
    contain roles we don't understand, and the parser reports those as
    orphaned instead of failing validation here.
    """

    model_config = ConfigDict(frozen=True)

    role: str
    content: Union[str, list[Part]] = ""

    @property
    def parts(self) -> list[Part]:
        if isinstance(self.content, str):
            return [TextPart(text=self.content)] if self.content else []
        return list(self.content)

    def tool_call_ids(self) -> set[str]:
        return {p.tool_call_id for p in self.parts if isinstance(p, ToolCallPart)}

    def tool_result_ids(self) -> set[str]:
        return {p.tool_call_id for p in self.parts if isinstance(p, ToolResultPart)}

    def tool_names(self) -> list[str]:
        names: list[str] = []
        for part in self.parts:
            if isinstance(part, (ToolCallPart, ToolResultPart)):
                names.append(part.tool_name)
            elif isinstance(part, TextPart):
                continue
            else:
                assert_never(part)
        return names

    def is_empty(self) -> bool:
        for part in self.parts:
            if isinstance(part, TextPart):
                if part.text:
                    return False
            elif isinstance(part, (ToolCallPart, ToolResultPart)):
                return False
            else:
                assert_never(part)
        return True


# ---- Convenience constructors ----


def system_message(text: str) -> Message:
    return Message(role="system", content=text)


def user_message(text: str) -> Message:
    return Message(role="user", content=text)


def assistant_message(
    text: str = "",
    *,
    tool_calls: list[ToolCallPart] | None = None,
) -> Message:
    if not tool_calls:
        return Message(role="assistant", content=text)

    parts: list[Part] = []
    if text:
        parts.append(TextPart(text=text))
    parts.extend(tool_calls)
    return Message(role="assistant", content=parts)


def tool_message(results: list[ToolResultPart]) -> Message:
    return Message(role="tool", content=list(results))
