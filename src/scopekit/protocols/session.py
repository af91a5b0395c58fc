"""Session and live-context protocols for scopekit.

This module defines the interfaces of the live objects the materializer
writes to and the snapshotter reads from. Uses `typing.Protocol` for
structural subtyping.

The session's table of named contexts is shared mutable state: the
materializer is its sole writer during one call, and callers that
materialize concurrently must serialize by context name.

Usage:
    from scopekit.protocols import SessionProtocol

    session = Session()
    assert isinstance(session, SessionProtocol)
"""

from __future__ import annotations

from typing import Any, List, Optional, Protocol, runtime_checkable


@runtime_checkable
class ContextProtocol(Protocol):
    """Protocol for a live, named scope context.

    Attributes:
        id: Session-unique numeric identifier.
        name: The context name (lookup key in the session).
        authentication: Opaque authentication state, or None.
        session_management: Opaque session-tracking state, or None.

    Note:
        Implementations do NOT need to inherit from this class.
    """

    id: int
    name: str
    authentication: Any
    session_management: Any

    @property
    def include_patterns(self) -> List[str]:
        """Return the include regexes in registration order."""
        ...

    @property
    def exclude_patterns(self) -> List[str]:
        """Return the exclude regexes in registration order."""
        ...

    def add_include_pattern(self, pattern: str) -> None:
        """Register an include regex.

        Raises:
            InvalidPatternError: If the pattern does not compile.
        """
        ...

    def add_exclude_pattern(self, pattern: str) -> None:
        """Register an exclude regex.

        Raises:
            InvalidPatternError: If the pattern does not compile.
        """
        ...


@runtime_checkable
class SessionProtocol(Protocol):
    """Protocol for the holder of named live contexts."""

    def get_context(self, name: str) -> Optional[ContextProtocol]:
        """Return the context with this name, or None if absent."""
        ...

    def delete_context(self, context: ContextProtocol) -> None:
        """Remove a context from the session."""
        ...

    def new_context(self, name: str) -> ContextProtocol:
        """Create, register and return an empty context bound to ``name``."""
        ...
