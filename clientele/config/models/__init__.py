"""Configuration model exports."""

from clientele.config.models.identity import IdentityConfig
from clientele.config.models.observability import LoggingConfig, ObservabilityConfig
from clientele.config.models.storage import StorageConfig

__all__ = [
    "IdentityConfig",
    "LoggingConfig",
    "ObservabilityConfig",
    "StorageConfig",
]
