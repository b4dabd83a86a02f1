from __future__ import annotations

import pytest
from pydantic import ValidationError

from agent_context.config import Settings
from agent_context.memory.manager import ContextManager


def test_defaults(monkeypatch):
    monkeypatch.delenv("AGENT_CONTEXT_MAX_MESSAGES", raising=False)
    s = Settings(_env_file=None)
    assert s.max_messages == 30
    assert s.min_turns_to_keep == 2
    assert s.keep_recent_tool_payloads == 2


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("AGENT_CONTEXT_MAX_MESSAGES", "12")
    monkeypatch.setenv("AGENT_CONTEXT_MIN_TURNS_TO_KEEP", "1")
    s = Settings(_env_file=None)

    cfg = ContextManager.from_settings(s).config
    assert cfg.max_messages == 12
    assert cfg.min_turns_to_keep == 1


def test_rejects_bad_values():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, max_messages=0)
