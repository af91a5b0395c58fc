"""Variable-resolver protocol for scopekit."""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class VariableResolverProtocol(Protocol):
    """Protocol for placeholder (``${...}``) substitution.

    Errors from unresolved required placeholders are the resolver's own
    concern; scopekit only consumes the substituted text.
    """

    def replace_vars(self, text: Optional[str]) -> Optional[str]:
        """Return ``text`` with every known placeholder substituted."""
        ...
