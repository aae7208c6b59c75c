"""Runtime configuration."""

from article_workflow.config.settings import ProviderConfig, Settings, get_settings

__all__ = ["ProviderConfig", "Settings", "get_settings"]
