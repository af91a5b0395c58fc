"""scopekit Exception Hierarchy.

This module defines the structured exception hierarchy for scopekit.
All custom exceptions inherit from ScopeKitError, enabling consistent
error handling across the codebase.

Exception Categories:
- File/collaborator failures → Exceptions (raised)
- Configuration data shape/validation problems → Diagnostics
  (AutomationProgress), never exceptions

Usage:
    from scopekit.core.exceptions import ConfigurationError, InvalidPatternError

    raise ConfigurationError(
        config_path="plan.yaml",
        message="Invalid YAML in plan.yaml",
    )
"""

from typing import Any, Optional


class ScopeKitError(Exception):
    """Base exception for all scopekit errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: Optional[str] = None) -> None:
        """Initialize ScopeKitError.

        Args:
            message: Optional custom message. Defaults to a generic message.
        """
        self.message = message or "A scopekit error occurred."
        super().__init__(self.message)

    @property
    def context(self) -> dict[str, Any]:
        """Return context dictionary for structured logging.

        Returns:
            dict: Key-value pairs of exception context.
        """
        return {}

    def __repr__(self) -> str:
        """Return debug representation."""
        return f"{self.__class__.__name__}({self.message!r})"


class ConfigurationError(ScopeKitError):
    """Configuration or plan file is unreadable or invalid.

    Raised when a YAML file cannot be read or parsed, or when the
    settings layers fail validation.

    Attributes:
        config_path: Path to the configuration file.
        key: The configuration key that caused the error.
        expected_type: The expected type for the value.
    """

    def __init__(
        self,
        config_path: str,
        key: Optional[str] = None,
        expected_type: Optional[str] = None,
        message: Optional[str] = None,
    ) -> None:
        """Initialize ConfigurationError.

        Args:
            config_path: Path to the config file.
            key: Optional key that caused the error.
            expected_type: Optional expected type.
            message: Optional custom message.
        """
        self.config_path = config_path
        self.key = key
        self.expected_type = expected_type

        if message is None:
            key_info = f" key '{key}'" if key else ""
            type_info = f" (expected {expected_type})" if expected_type else ""
            message = f"Configuration error in '{config_path}'{key_info}{type_info}."

        super().__init__(message)

    @property
    def context(self) -> dict[str, Any]:
        """Return context for configuration error."""
        return {
            "config_path": self.config_path,
            "key": self.key,
            "expected_type": self.expected_type,
        }

    def __repr__(self) -> str:
        """Return debug representation with attributes."""
        return (
            f"ConfigurationError(config_path={self.config_path!r}, "
            f"key={self.key!r}, expected_type={self.expected_type!r})"
        )


class InvalidPatternError(ScopeKitError):
    """A regex pattern was rejected by a live context.

    Raised by Context.add_include_pattern / add_exclude_pattern when the
    pattern does not compile. The materializer turns it into a
    ``badregex`` diagnostic for that single pattern.

    Attributes:
        pattern: The rejected pattern, verbatim.
        reason: The regex engine's complaint.
    """

    def __init__(
        self,
        pattern: str,
        reason: str,
        message: Optional[str] = None,
    ) -> None:
        """Initialize InvalidPatternError.

        Args:
            pattern: The pattern that failed to compile.
            reason: Why it failed (REQUIRED).
            message: Optional custom message.
        """
        self.pattern = pattern
        self.reason = reason

        if message is None:
            message = f"Invalid regex pattern '{pattern}': {reason}"

        super().__init__(message)

    @property
    def context(self) -> dict[str, Any]:
        """Return context for invalid pattern."""
        return {"pattern": self.pattern, "reason": self.reason}

    def __repr__(self) -> str:
        """Return debug representation with attributes."""
        return (
            f"InvalidPatternError(pattern={self.pattern!r}, "
            f"reason={self.reason!r})"
        )


class ContextNotFoundError(ScopeKitError):
    """Context not found.

    Raised when an operation requires a named context that the session
    does not hold.

    Attributes:
        name: The context name that was not found.
    """

    def __init__(
        self,
        name: str,
        message: str | None = None,
    ) -> None:
        """Initialize ContextNotFoundError.

        Args:
            name: The context name that was not found.
            message: Optional custom message.
        """
        self.name = name

        if message is None:
            message = f"Context not found: {name}"

        super().__init__(message)

    @property
    def context(self) -> dict[str, Any]:
        """Return context for context not found."""
        return {"name": self.name}

    def __repr__(self) -> str:
        """Return debug representation with attributes."""
        return f"ContextNotFoundError(name={self.name!r})"
