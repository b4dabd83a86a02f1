"""
Working context: the tool-activation store.

The agent discovers tools at runtime (tool search) and keeps them active
across turns. The context manager only needs two operations from it, captured
by `ToolActivationStore`; `WorkingContext` is the in-memory implementation.

Persistence is the caller's job: use to_dict() / from_dict().
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from typing import Any, Iterable, Literal, Protocol


MAX_DISCOVERED_TOOLS = 20

ToolOutcome = Literal["success", "error"]


class ToolActivationStore(Protocol):
    def get_discovered_tools(self) -> list[str]: ...

    def remove_tools(self, names: Iterable[str]) -> None: ...


@dataclass
class ToolUsageRecord:
    name: str
    count: int
    last_used: str
    last_result: ToolOutcome


class WorkingContext:
    def __init__(self, *, max_discovered_tools: int = MAX_DISCOVERED_TOOLS) -> None:
        self._max_discovered = max_discovered_tools
        # dict keeps insertion order; values unused
        self._discovered: dict[str, None] = {}
        self._usage: dict[str, ToolUsageRecord] = {}

    # ---- Discovered tools ----

    def add_discovered_tools(self, names: Iterable[str]) -> None:
        for name in names:
            # Re-adding moves the tool to the most recent position.
            self._discovered.pop(name, None)
            self._discovered[name] = None

        overflow = len(self._discovered) - self._max_discovered
        for name in list(self._discovered)[: max(0, overflow)]:
            del self._discovered[name]

    def get_discovered_tools(self) -> list[str]:
        return list(self._discovered)

    def remove_tools(self, names: Iterable[str]) -> None:
        for name in names:
            self._discovered.pop(name, None)

    # ---- Usage ----

    def record_tool_usage(self, name: str, result: ToolOutcome) -> None:
        existing = self._usage.get(name)
        self._usage[name] = ToolUsageRecord(
            name=name,
            count=(existing.count if existing else 0) + 1,
            last_used=datetime.now(UTC).isoformat(),
            last_result=result,
        )

    def get_used_tools(self) -> list[ToolUsageRecord]:
        return list(self._usage.values())

    # ---- Prompt / persistence ----

    def to_context_string(self) -> str:
        if not self._discovered:
            return ""
        return "[DISCOVERED TOOLS]\n" + ", ".join(self._discovered)

    def to_dict(self) -> dict[str, Any]:
        return {
            "max_discovered_tools": self._max_discovered,
            "discovered_tools": self.get_discovered_tools(),
            "used_tools": [asdict(r) for r in self._usage.values()],
        }

    @classmethod
    def from_dict(
        cls,
        state: dict[str, Any],
        *,
        max_discovered_tools: int | None = None,
    ) -> "WorkingContext":
        """Restore from to_dict(). An explicit cap wins over the stored one."""
        if max_discovered_tools is None:
            max_discovered_tools = state.get("max_discovered_tools", MAX_DISCOVERED_TOOLS)
        ctx = cls(max_discovered_tools=max_discovered_tools)
        ctx.add_discovered_tools(state.get("discovered_tools") or [])
        for raw in state.get("used_tools") or []:
            record = ToolUsageRecord(**raw)
            ctx._usage[record.name] = record
        return ctx
