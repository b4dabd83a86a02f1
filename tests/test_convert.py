from __future__ import annotations

from langchain_core.messages import (
    AIMessage,
    ChatMessage,
    HumanMessage,
    SystemMessage,
    ToolMessage,
)

from agent_context.messages.convert import (
    from_langchain_messages,
    from_langchain_messages_with_sources,
    to_langchain_messages,
)
from agent_context.messages.types import Message, TextPart, ToolCallPart, ToolResultPart


def _lc_history():
    return [
        SystemMessage(content="You are helpful."),
        HumanMessage(content="Show me home and about"),
        AIMessage(
            content="Fetching both.",
            tool_calls=[
                {"name": "getPage", "args": {"slug": "home"}, "id": "call_1"},
                {"name": "getPage", "args": {"slug": "about"}, "id": "call_2"},
            ],
        ),
        ToolMessage(content="home page", tool_call_id="call_1"),
        ToolMessage(content="about page", tool_call_id="call_2", name="getPage"),
        AIMessage(content="Here they are."),
    ]


def test_consecutive_tool_messages_become_one_tool_message():
    messages = from_langchain_messages(_lc_history())

    assert [m.role for m in messages] == ["system", "user", "assistant", "tool", "assistant"]

    assistant = messages[2]
    assert assistant.content[0] == TextPart(text="Fetching both.")
    assert assistant.content[1] == ToolCallPart(tool_call_id="call_1", tool_name="getPage", args={"slug": "home"})
    assert assistant.tool_call_ids() == {"call_1", "call_2"}

    tool = messages[3]
    assert tool.tool_result_ids() == {"call_1", "call_2"}
    assert tool.content[0] == ToolResultPart(tool_call_id="call_1", tool_name="getPage", result="home page")


def test_tool_name_falls_back_to_unknown_without_call():
    [msg] = from_langchain_messages([ToolMessage(content="x", tool_call_id="zzz")])
    assert msg.role == "tool"
    assert msg.content[0].tool_name == "unknown"


def test_other_roles_are_kept():
    [msg] = from_langchain_messages([ChatMessage(role="critic", content="hmm")])
    assert msg.role == "critic"


def test_message_view_keeps_only_text_blocks():
    # The trimming entry returns the original objects, so images survive there.
    [msg] = from_langchain_messages(
        [HumanMessage(content=[{"type": "text", "text": "a"}, {"type": "image_url", "image_url": {"url": "x"}}, "b"])]
    )
    assert msg.content == "ab"


def test_round_trip_back_to_langchain():
    lc = to_langchain_messages(from_langchain_messages(_lc_history()))

    assert [type(m) for m in lc] == [
        SystemMessage,
        HumanMessage,
        AIMessage,
        ToolMessage,
        ToolMessage,
        AIMessage,
    ]
    assert lc[2].content == "Fetching both."
    assert [c["id"] for c in lc[2].tool_calls] == ["call_1", "call_2"]
    assert lc[2].tool_calls[1]["args"] == {"slug": "about"}
    assert [(m.tool_call_id, m.content, m.name) for m in lc[3:5]] == [
        ("call_1", "home page", "getPage"),
        ("call_2", "about page", "getPage"),
    ]


def test_structured_results_are_serialized():
    from agent_context.messages.types import tool_message

    [lc] = to_langchain_messages(
        [tool_message([ToolResultPart(tool_call_id="1", tool_name="getPage", result={"id": 7})])]
    )
    assert lc.content == '{"id": 7}'


def test_sources_list_the_langchain_messages_behind_each_message():
    messages, sources = from_langchain_messages_with_sources(_lc_history())

    assert len(sources) == len(messages)
    assert sources == [[0], [1], [2], [3, 4], [5]]


def test_tool_message_without_results_produces_no_langchain_message():
    out = to_langchain_messages(
        [Message(role="user", content="hi"), Message(role="tool", content=[])]
    )
    assert [type(m) for m in out] == [HumanMessage]
