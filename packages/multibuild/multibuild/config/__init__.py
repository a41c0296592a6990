from multibuild.config.groups import ObservabilityConfig, TaskNamingConfig
from multibuild.config.settings import MultiBuildSettings, get_settings

__all__ = [
    "MultiBuildSettings",
    "ObservabilityConfig",
    "TaskNamingConfig",
    "get_settings",
]
