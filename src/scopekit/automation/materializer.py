"""Materialize a :class:`ContextData` onto a live session.

Materialization is destructive and best effort:

1. Resolve the context name.
2. Delete any existing context with that name (full replace, no merge).
3. Create a new empty context.
4. Register ``url + WILDCARD_SUFFIX`` for every start URL that still
   parses after substitution; a bad URL is reported and skipped.
5. Register explicit include regexes not already present.
6. Register every explicit exclude regex.
7. Install session management, if configured.
8. Install authentication, if configured.
9. Provision users, if configured and user management is available.

A failure in one item never stops the rest, and a context is always
returned. Delete-then-create is not atomic and nothing is rolled back:
callers that materialize concurrently must serialize by context name.
"""

from __future__ import annotations

from typing import Optional

import structlog

from scopekit.automation.model import WILDCARD_SUFFIX, ContextData
from scopekit.automation.progress import AutomationProgress
from scopekit.automation.users import UserProvisioner
from scopekit.automation.validators import is_valid_uri
from scopekit.core.exceptions import InvalidPatternError
from scopekit.protocols import (
    ContextProtocol,
    SessionProtocol,
    UserManagementProtocol,
    VariableResolverProtocol,
)

log = structlog.get_logger(__name__)


class ContextMaterializer:
    """Writes declarative contexts into a session.

    Attributes:
        user_management: Optional identity registry. When None, user
            provisioning is skipped without a diagnostic.
    """

    def __init__(self, user_management: Optional[UserManagementProtocol] = None) -> None:
        self.user_management = user_management

    def materialize(
        self,
        data: ContextData,
        session: SessionProtocol,
        env: VariableResolverProtocol,
        progress: AutomationProgress,
    ) -> ContextProtocol:
        """Create (or replace) the live context described by ``data``.

        ``data`` is only read, never modified.

        Returns:
            The new live context, possibly scope-empty if every entry failed.
        """
        name = env.replace_vars(data.name) or ""

        old = session.get_context(name)
        if old is not None:
            session.delete_context(old)
            if self.user_management is not None:
                self.user_management.remove_context(name)
            log.info("context_replaced", name=name)

        context = session.new_context(name)

        self._add_start_urls(context, data, env, progress)
        self._add_includes(context, data, env, progress)
        self._add_excludes(context, data, env, progress)

        if data.session_management is not None:
            data.session_management.init_context(context, progress, env)
        if data.authentication is not None:
            data.authentication.init_context(context, progress, env)
        if data.users is not None and self.user_management is not None:
            UserProvisioner(self.user_management).provision(
                context, data.users, env, progress
            )

        log.info(
            "context_materialized",
            name=name,
            includes=len(context.include_patterns),
            excludes=len(context.exclude_patterns),
        )
        return context

    @staticmethod
    def _add_start_urls(
        context: ContextProtocol,
        data: ContextData,
        env: VariableResolverProtocol,
        progress: AutomationProgress,
    ) -> None:
        for url in data.urls:
            try:
                resolved = env.replace_vars(url) or ""
                if not is_valid_uri(resolved):
                    progress.error("badurl", url)
                    continue
                context.add_include_pattern(resolved + WILDCARD_SUFFIX)
            except Exception as e:
                log.debug("start_url_rejected", url=url, error=str(e))
                progress.error("badurl", url)

    @staticmethod
    def _add_includes(
        context: ContextProtocol,
        data: ContextData,
        env: VariableResolverProtocol,
        progress: AutomationProgress,
    ) -> None:
        for path in data.include_paths or []:
            try:
                regex = env.replace_vars(path) or ""
                # A start URL may already have produced this exact pattern
                if regex in context.include_patterns:
                    continue
                context.add_include_pattern(regex)
            except InvalidPatternError as e:
                progress.error("badregex", e.pattern, e.reason)
            except Exception as e:
                log.debug("include_rejected", pattern=path, error=str(e))
                progress.error("badregex", path, str(e))

    @staticmethod
    def _add_excludes(
        context: ContextProtocol,
        data: ContextData,
        env: VariableResolverProtocol,
        progress: AutomationProgress,
    ) -> None:
        for path in data.exclude_paths or []:
            try:
                context.add_exclude_pattern(env.replace_vars(path) or "")
            except InvalidPatternError as e:
                progress.error("badregex", e.pattern, e.reason)
            except Exception as e:
                log.debug("exclude_rejected", pattern=path, error=str(e))
                progress.error("badregex", path, str(e))


def materialize_context(
    data: ContextData,
    session: SessionProtocol,
    env: VariableResolverProtocol,
    progress: AutomationProgress,
    user_management: Optional[UserManagementProtocol] = None,
) -> ContextProtocol:
    """Shorthand for ``ContextMaterializer(user_management).materialize(...)``."""
    return ContextMaterializer(user_management).materialize(data, session, env, progress)
