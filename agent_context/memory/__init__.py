"""
Conversation memory: turn parsing, validation and budget trimming.
"""

from agent_context.memory.manager import ContextManager
from agent_context.memory.types import (
    AssistantExchange,
    ContextManagerConfig,
    ContextManagerError,
    ConversationTurn,
    InvalidArgumentError,
    MessageValidationReport,
    ParseResult,
    TrimResult,
    ValidationResult,
)
from agent_context.memory.working_context import ToolActivationStore, WorkingContext

__all__ = [
    "AssistantExchange",
    "ContextManager",
    "ContextManagerConfig",
    "ContextManagerError",
    "ConversationTurn",
    "InvalidArgumentError",
    "MessageValidationReport",
    "ParseResult",
    "ToolActivationStore",
    "TrimResult",
    "ValidationResult",
    "WorkingContext",
]
