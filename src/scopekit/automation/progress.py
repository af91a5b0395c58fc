"""Diagnostics sink for loading, validating and materializing contexts.

Nothing in the automation layer raises for bad configuration data. Every
problem is recorded here instead, and the caller inspects the progress
object after the call returns to decide whether the run succeeded.

Usage:
    progress = AutomationProgress()
    data = load_context(raw, progress)
    if progress.has_errors():
        for message in progress.errors:
            print(message)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import structlog

from scopekit.automation.messages import render

log = structlog.get_logger(__name__)

ERROR = "error"
WARNING = "warning"


@dataclass(frozen=True)
class Diagnostic:
    """One recorded problem.

    Attributes:
        severity: ``error`` or ``warning``.
        category: Taxonomy key, e.g. ``badurl`` or ``unknown-option``.
        message: Rendered operator-facing text.
        value: The offending literal (first message argument), if any.
    """

    severity: str
    category: str
    message: str
    value: Any = None

    def __str__(self) -> str:
        return self.message


class AutomationProgress:
    """Accumulating, non-aborting error/warning channel."""

    def __init__(self) -> None:
        self._diagnostics: list[Diagnostic] = []

    def _record(self, severity: str, category: str, args: tuple[Any, ...]) -> Diagnostic:
        diagnostic = Diagnostic(
            severity=severity,
            category=category,
            message=render(category, *args),
            value=args[0] if args else None,
        )
        self._diagnostics.append(diagnostic)
        return diagnostic

    def error(self, category: str, *args: Any) -> Diagnostic:
        """Record an error: the data is invalid but processing continues."""
        diagnostic = self._record(ERROR, category, args)
        log.error("automation_error", category=category, detail=diagnostic.message)
        return diagnostic

    def warn(self, category: str, *args: Any) -> Diagnostic:
        """Record a warning: deprecated usage, unknown keys and the like."""
        diagnostic = self._record(WARNING, category, args)
        log.warning("automation_warning", category=category, detail=diagnostic.message)
        return diagnostic

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return list(self._diagnostics)

    @property
    def errors(self) -> list[str]:
        return [d.message for d in self._diagnostics if d.severity == ERROR]

    @property
    def warnings(self) -> list[str]:
        return [d.message for d in self._diagnostics if d.severity == WARNING]

    def has_errors(self) -> bool:
        return any(d.severity == ERROR for d in self._diagnostics)

    def has_warnings(self) -> bool:
        return any(d.severity == WARNING for d in self._diagnostics)

    def categories(self, severity: Optional[str] = None) -> list[str]:
        """Return recorded categories in order, optionally for one severity."""
        return [
            d.category
            for d in self._diagnostics
            if severity is None or d.severity == severity
        ]

    def __repr__(self) -> str:
        return (
            f"AutomationProgress(errors={len(self.errors)}, "
            f"warnings={len(self.warnings)})"
        )
