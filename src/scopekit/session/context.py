"""In-memory live scope contexts and the session that holds them.

A :class:`Context` is the live counterpart of a declarative
``ContextData``: it owns compiled include/exclude regexes plus the
authentication and session-tracking state installed by the
sub-configs. A :class:`Session` keeps contexts in creation order and hands
out session-unique ids.

There is no locking here. The materializer deletes and recreates a context
without rollback, so concurrent callers must serialize by context name.
"""

from __future__ import annotations

import re
from typing import Any, Iterator, Optional

import structlog

from scopekit.core.exceptions import ContextNotFoundError, InvalidPatternError

log = structlog.get_logger(__name__)


class Context:
    """A named set of include/exclude regexes with auth/session state.

    Attributes:
        id: Session-unique identifier.
        name: Context name.
        authentication: Installed authentication state (or None).
        session_management: Installed session-tracking state (or None).
    """

    def __init__(self, context_id: int, name: str) -> None:
        self.id = context_id
        self.name = name
        self.authentication: Any = None
        self.session_management: Any = None
        self._include: list[str] = []
        self._exclude: list[str] = []
        self._compiled_include: list[re.Pattern[str]] = []
        self._compiled_exclude: list[re.Pattern[str]] = []

    @property
    def include_patterns(self) -> list[str]:
        return list(self._include)

    @property
    def exclude_patterns(self) -> list[str]:
        return list(self._exclude)

    @staticmethod
    def _compile(pattern: str) -> re.Pattern[str]:
        try:
            return re.compile(pattern)
        except re.error as e:
            raise InvalidPatternError(pattern=pattern, reason=str(e)) from e

    def add_include_pattern(self, pattern: str) -> None:
        """Register an include regex.

        Raises:
            InvalidPatternError: If the pattern does not compile.
        """
        self._compiled_include.append(self._compile(pattern))
        self._include.append(pattern)

    def add_exclude_pattern(self, pattern: str) -> None:
        """Register an exclude regex.

        Raises:
            InvalidPatternError: If the pattern does not compile.
        """
        self._compiled_exclude.append(self._compile(pattern))
        self._exclude.append(pattern)

    def is_in_context(self, url: str) -> bool:
        """Return True if ``url`` fully matches an include and no exclude."""
        if not any(p.fullmatch(url) for p in self._compiled_include):
            return False
        return not any(p.fullmatch(url) for p in self._compiled_exclude)

    def __repr__(self) -> str:
        return f"Context(id={self.id!r}, name={self.name!r})"


class Session:
    """Ordered table of named contexts."""

    def __init__(self) -> None:
        self._contexts: list[Context] = []
        self._next_id = 1

    @property
    def contexts(self) -> list[Context]:
        return list(self._contexts)

    def __iter__(self) -> Iterator[Context]:
        return iter(self.contexts)

    def __len__(self) -> int:
        return len(self._contexts)

    def get_context(self, name: str) -> Optional[Context]:
        """Return the first context called ``name``, or None."""
        for context in self._contexts:
            if context.name == name:
                return context
        return None

    def require_context(self, name: str) -> Context:
        """Return the context called ``name``.

        Raises:
            ContextNotFoundError: If the session holds no such context.
        """
        context = self.get_context(name)
        if context is None:
            raise ContextNotFoundError(name)
        return context

    def delete_context(self, context: Context) -> None:
        """Remove ``context``. Deleting an unknown context is a no-op."""
        if context in self._contexts:
            self._contexts.remove(context)
            log.debug("context_deleted", name=context.name, context_id=context.id)

    def new_context(self, name: str) -> Context:
        """Create, register and return an empty context."""
        context = Context(self._next_id, name)
        self._next_id += 1
        self._contexts.append(context)
        log.debug("context_created", name=name, context_id=context.id)
        return context
