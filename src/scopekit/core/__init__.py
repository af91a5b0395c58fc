"""Core module for scopekit.

Exports the core components: exceptions, configuration and logging setup.
"""

from scopekit.core.exceptions import (
    ScopeKitError,
    ConfigurationError,
    InvalidPatternError,
    ContextNotFoundError,
)
from scopekit.core.config import (
    get_settings,
    reset_settings,
    create_settings,
    Settings,
    LoggingConfig,
    EnvironmentConfig,
    DiagnosticsConfig,
)
from scopekit.core.logging import configure_logging

__all__ = [
    # Exceptions
    "ScopeKitError",
    "ConfigurationError",
    "InvalidPatternError",
    "ContextNotFoundError",
    # Configuration
    "get_settings",
    "reset_settings",
    "create_settings",
    "Settings",
    "LoggingConfig",
    "EnvironmentConfig",
    "DiagnosticsConfig",
    # Logging
    "configure_logging",
]
