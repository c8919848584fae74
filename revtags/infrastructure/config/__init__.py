from .settings import GenerationSettings, ServerSettings, Settings, get_settings

__all__ = ["GenerationSettings", "ServerSettings", "Settings", "get_settings"]
