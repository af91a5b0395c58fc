"""Snapshot a live context back into a :class:`ContextData`.

Live contexts do not remember which include regexes were start URLs, so
start URLs are recovered heuristically: every include ending in
``WILDCARD_SUFFIX`` yields a start URL with the suffix stripped. This is
lossy in both directions (a hand-written ``something.*`` include is taken
for a start URL) and is kept that way so exported plans stay stable.
"""

from __future__ import annotations

from typing import Optional

import structlog

from scopekit.automation.authentication import AuthenticationData
from scopekit.automation.model import WILDCARD_SUFFIX, ContextData, UserData
from scopekit.automation.session_management import SessionManagementData
from scopekit.protocols import ContextProtocol, UserManagementProtocol
from scopekit.session.users import UsernamePasswordCredentials

log = structlog.get_logger(__name__)


class ContextSnapshotter:
    """Reads live contexts into the declarative model."""

    def __init__(self, user_management: Optional[UserManagementProtocol] = None) -> None:
        self.user_management = user_management

    def snapshot(self, context: ContextProtocol) -> ContextData:
        includes = context.include_patterns
        data = ContextData(
            name=context.name,
            include_paths=list(includes),
            exclude_paths=list(context.exclude_patterns),
        )
        for pattern in includes:
            if pattern.endswith(WILDCARD_SUFFIX):
                data.add_url(pattern[: -len(WILDCARD_SUFFIX)])

        data.session_management = SessionManagementData.from_context(context)
        data.authentication = AuthenticationData.from_context(context)

        if self.user_management is not None:
            users = self._snapshot_users(context)
            if users:
                data.users = users

        log.debug("context_snapshot", name=context.name, urls=len(data.urls))
        return data

    def _snapshot_users(self, context: ContextProtocol) -> list[UserData]:
        users: list[UserData] = []
        for user in self.user_management.get_users(context.name):
            credentials = user.credentials
            if isinstance(credentials, UsernamePasswordCredentials):
                users.append(
                    UserData(user.name, credentials.username, credentials.password)
                )
            else:
                log.debug(
                    "credentials_not_supported",
                    user=user.name,
                    kind=getattr(credentials, "kind", type(credentials).__name__),
                )
        return users


def snapshot_context(
    context: ContextProtocol,
    user_management: Optional[UserManagementProtocol] = None,
) -> ContextData:
    return ContextSnapshotter(user_management).snapshot(context)
