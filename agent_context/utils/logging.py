"""
Centralized logging setup.

Scripts call setup_logging() once. Library modules only do
`logging.getLogger(__name__)`; trim decisions are logged under
`agent_context.memory.*` (WARNING for dropped turns/orphans, INFO for trim
summaries, DEBUG for the fast path).
"""

import logging
from typing import Final, Iterable


_LOG_FORMAT: Final[str] = (
    "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
)

# tiktoken fetches encodings over HTTP on first use.
_NOISY_LOGGERS: Final[tuple[str, ...]] = ("urllib3", "requests")


def setup_logging(
    level: str,
    *,
    context_level: str | None = None,
    noisy_loggers: Iterable[str] = _NOISY_LOGGERS,
) -> None:
    """
    Configure root logging.

    Args:
        level: e.g. "DEBUG", "INFO", "WARNING"
        context_level: optional separate level for `agent_context` loggers,
            e.g. "DEBUG" to see every fast-path skip without library noise.
    """
    logging.basicConfig(
        level=_to_level(level),
        format=_LOG_FORMAT,
    )

    if context_level:
        logging.getLogger("agent_context").setLevel(_to_level(context_level))

    for name in noisy_loggers:
        logging.getLogger(name).setLevel(logging.WARNING)


def _to_level(level: str) -> int:
    return getattr(logging, level.upper(), logging.INFO)
