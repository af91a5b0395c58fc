"""User-management protocol for scopekit.

User management is an optional collaborator: it is injected into the
materializer and snapshotter (or left as None), never looked up globally.
"""

from __future__ import annotations

from typing import Any, List, Protocol, runtime_checkable


@runtime_checkable
class UserProtocol(Protocol):
    """Protocol for a test identity scoped to one context."""

    context_name: str
    name: str
    enabled: bool
    credentials: Any

    def set_credentials(self, credentials: Any) -> None:
        """Attach authentication credentials to the identity."""
        ...

    def set_enabled(self, enabled: bool) -> None:
        """Enable or disable the identity."""
        ...


@runtime_checkable
class UserManagementProtocol(Protocol):
    """Protocol for the registry of test identities."""

    def create_user(self, context_name: str, name: str) -> UserProtocol:
        """Create (but do not register) an identity for a context."""
        ...

    def add_user(self, user: UserProtocol) -> None:
        """Register an identity. Duplicates are the registry's concern."""
        ...

    def get_users(self, context_name: str) -> List[UserProtocol]:
        """Return the identities registered for a context."""
        ...

    def remove_context(self, context_name: str) -> None:
        """Drop every identity registered for a context."""
        ...
