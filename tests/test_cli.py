from __future__ import annotations

import argparse
import importlib.util
from pathlib import Path

import pytest

from agent_context.config import Settings
from agent_context.memory.types import InvalidArgumentError


SCRIPT = Path(__file__).resolve().parents[1] / "scripts" / "trim_history.py"


@pytest.fixture(scope="module")
def trim_history():
    spec = importlib.util.spec_from_file_location("trim_history", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def _args(max_messages=None, min_turns=None) -> argparse.Namespace:
    return argparse.Namespace(max_messages=max_messages, min_turns=min_turns)


def test_flags_default_to_settings(trim_history):
    s = Settings(_env_file=None, max_messages=12, min_turns_to_keep=3)
    cfg = trim_history.build_config(_args(), s)
    assert cfg.max_messages == 12
    assert cfg.min_turns_to_keep == 3


def test_flags_override_settings(trim_history):
    cfg = trim_history.build_config(_args(5, 0), Settings(_env_file=None))
    assert cfg.max_messages == 5
    assert cfg.min_turns_to_keep == 0


def test_zero_max_messages_is_rejected_not_replaced(trim_history):
    with pytest.raises(InvalidArgumentError):
        trim_history.build_config(_args(max_messages=0), Settings(_env_file=None))
