"""
scopekit - Declarative scope contexts for security-testing sessions.

Load context blocks from automation plans, materialize them onto a live
session, and snapshot live contexts back into plan form.
"""

from scopekit.automation import (
    AutomationEnvironment,
    AutomationProgress,
    ContextData,
    ContextMaterializer,
    ContextSnapshotter,
    load_context,
)

__version__ = "1.0.0"
__author__ = "scopekit maintainers"

__all__ = [
    "AutomationEnvironment",
    "AutomationProgress",
    "ContextData",
    "ContextMaterializer",
    "ContextSnapshotter",
    "load_context",
]
