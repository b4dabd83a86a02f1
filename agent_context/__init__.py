"""
Agent context management.

Purpose:
- Keep the agent's message history under a message budget before each model call.
- Never send the model a history with unmatched tool calls or tool results.
"""
