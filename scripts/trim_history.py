"""
Trim or validate a stored message history.

Run:
  python scripts/trim_history.py history.json
  python scripts/trim_history.py history.json --validate-only
  python scripts/trim_history.py history.json --max-messages 12 --min-turns 1 --output trimmed.json

The input file is a JSON list of messages:
  [{"role": "user", "content": "Hi"},
   {"role": "assistant", "content": [{"type": "tool-call", "tool_call_id": "1", "tool_name": "getPage"}]},
   {"role": "tool", "content": [{"type": "tool-result", "tool_call_id": "1", "tool_name": "getPage"}]}]
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path

from pydantic import TypeAdapter

from agent_context.config import Settings, get_settings
from agent_context.memory.manager import ContextManager
from agent_context.memory.stats import context_stats
from agent_context.memory.types import ContextManagerConfig
from agent_context.memory.working_context import WorkingContext
from agent_context.messages.types import Message
from agent_context.utils.logging import setup_logging


def build_config(args: argparse.Namespace, s: Settings) -> ContextManagerConfig:
    """CLI flags override settings; an explicit 0 is passed through and rejected."""
    return ContextManagerConfig(
        max_messages=args.max_messages if args.max_messages is not None else s.max_messages,
        min_turns_to_keep=(
            args.min_turns if args.min_turns is not None else s.min_turns_to_keep
        ),
        keep_recent_tool_payloads=s.keep_recent_tool_payloads,
    )


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("path", type=Path)
    parser.add_argument("--validate-only", action="store_true")
    parser.add_argument("--max-messages", type=int, default=None)
    parser.add_argument("--min-turns", type=int, default=None)
    parser.add_argument("--output", type=Path, default=None)
    args = parser.parse_args()

    s = get_settings()
    setup_logging(s.log_level)

    raw = json.loads(args.path.read_text(encoding="utf-8"))
    messages = TypeAdapter(list[Message]).validate_python(raw)

    manager = ContextManager(build_config(args, s))

    print("\nBEFORE\n------")
    print(json.dumps(context_stats(messages, encoding_name=s.token_encoding).to_dict(), indent=2))

    report = manager.validate_messages(messages)
    print("\nVALIDATION\n----------")
    print(f"valid={report.is_valid}")
    for issue in report.issues:
        print("-", issue)

    if args.validate_only:
        return

    # Every tool referenced in the file counts as active for the dry run.
    wc = WorkingContext(max_discovered_tools=1000)
    wc.add_discovered_tools(n for m in messages for n in m.tool_names())

    result = manager.trim_context(messages, wc)

    print("\nTRIM\n----")
    print(json.dumps(result.to_dict(), indent=2))

    print("\nAFTER\n-----")
    print(json.dumps(context_stats(result.messages, encoding_name=s.token_encoding).to_dict(), indent=2))

    if args.output:
        args.output.write_text(
            json.dumps([m.model_dump(mode="json") for m in result.messages], indent=2),
            encoding="utf-8",
        )
        print(f"\nWrote {len(result.messages)} messages to {args.output}")


if __name__ == "__main__":
    main()
