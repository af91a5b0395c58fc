"""In-memory test identities and their credentials.

Only username/password credentials are produced by the user provisioner;
:class:`ManualCredentials` exists because a live session can hold
identities of other kinds, which the snapshotter must skip.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import structlog

log = structlog.get_logger(__name__)


class Credentials:
    """Base class for identity credentials."""

    kind: str = "unknown"


@dataclass
class UsernamePasswordCredentials(Credentials):
    username: str = ""
    password: str = field(default="", repr=False)

    kind = "username-password"


@dataclass
class ManualCredentials(Credentials):
    """Credentials for an already-authenticated HTTP session."""

    http_session: str = ""

    kind = "manual"


class User:
    """A test identity scoped to one context."""

    def __init__(self, context_name: str, name: str) -> None:
        self.context_name = context_name
        self.name = name
        self.enabled = False
        self.credentials: Optional[Credentials] = None

    def set_credentials(self, credentials: Credentials) -> None:
        self.credentials = credentials

    def set_enabled(self, enabled: bool) -> None:
        self.enabled = enabled

    def __repr__(self) -> str:
        return (
            f"User(context_name={self.context_name!r}, name={self.name!r}, "
            f"enabled={self.enabled!r})"
        )


class UserManagement:
    """Registry of identities keyed by context name.

    No duplicate-name checks: adding two users with the same name keeps both.
    """

    def __init__(self) -> None:
        self._users: dict[str, list[User]] = {}

    def create_user(self, context_name: str, name: str) -> User:
        return User(context_name, name)

    def add_user(self, user: User) -> None:
        self._users.setdefault(user.context_name, []).append(user)
        log.debug("user_added", context=user.context_name, user=user.name)

    def get_users(self, context_name: str) -> list[User]:
        return list(self._users.get(context_name, []))

    def remove_context(self, context_name: str) -> None:
        self._users.pop(context_name, None)
