from agent_context.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
