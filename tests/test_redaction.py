from __future__ import annotations

from agent_context.memory.redaction import redact_tool_payloads, strip_tool_payloads
from agent_context.messages.types import Message, TextPart, assistant_message, tool_message, user_message
from tests.conftest import call, result, tool_turn


def test_old_payloads_are_stripped_recent_kept():
    messages = [*tool_turn("first", "1"), *tool_turn("second", "2")]
    out = redact_tool_payloads(messages, keep_last=2)

    assert len(out) == len(messages)
    old_call = out[1].content[0]
    old_result = out[2].content[0]
    assert old_call.args == {}
    assert old_call.tool_call_id == "1"
    assert old_call.tool_name == "getPage"
    assert old_result.result is None
    assert old_result.tool_call_id == "1"

    # last two messages untouched
    assert out[-2:] == messages[-2:]
    assert out[-2].content[0].result == "payload for second"


def test_input_is_not_mutated():
    messages = tool_turn("first", "1")
    redact_tool_payloads(messages, keep_last=0)
    assert messages[1].content[0].args == {"q": "first"}


def test_text_is_kept():
    msg = assistant_message("looking it up", tool_calls=[call("1", slug="home")])
    stripped = strip_tool_payloads(msg)
    assert stripped.content[0] == TextPart(text="looking it up")
    assert stripped.content[1].args == {}


def test_plain_text_message_returned_as_is():
    msg = user_message("Hi")
    assert strip_tool_payloads(msg) is msg


def test_empty_messages_are_removed():
    messages = [
        user_message("Hi"),
        Message(role="assistant", content=[TextPart(text="")]),
        Message(role="assistant", content=""),
        assistant_message("answer"),
    ]
    out = redact_tool_payloads(messages, keep_last=2)
    assert out == [messages[0], messages[3]]


def test_empty_messages_kept_when_disabled():
    messages = [user_message("Hi"), Message(role="assistant", content="")]
    assert redact_tool_payloads(messages, remove_empty=False) == messages


def test_stripping_twice_changes_nothing():
    messages = [*tool_turn("first", "1"), tool_message([result("2")])]
    once = redact_tool_payloads(messages, keep_last=1)
    assert redact_tool_payloads(once, keep_last=1) == once
