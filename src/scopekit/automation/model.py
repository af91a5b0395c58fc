"""Declarative context model.

``ContextData`` is what a plan's context block decodes into, and what a
snapshot of a live context produces. Invalid entries are kept verbatim:
validity findings live in the progress sink, never in the model.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from scopekit.automation.authentication import AuthenticationData
from scopekit.automation.session_management import SessionManagementData

# Appended to every start URL to form its include regex
WILDCARD_SUFFIX = ".*"


@dataclass
class UserData:
    name: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = field(default=None, repr=False)

    def to_mapping(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "username": self.username,
            "password": self.password,
        }


@dataclass
class ContextData:
    """A named scope definition.

    Attributes:
        name: Lookup key of the live context; may hold placeholders.
        urls: Start URLs in order. Each becomes ``url + WILDCARD_SUFFIX``.
        include_paths: Extra include regexes, or None when absent.
        exclude_paths: Exclude regexes, or None when absent.
        authentication: Optional authentication sub-config.
        session_management: Optional session-management sub-config.
        users: Optional test identities.
    """

    name: Optional[str] = None
    urls: list[str] = field(default_factory=list)
    include_paths: Optional[list[str]] = None
    exclude_paths: Optional[list[str]] = None
    authentication: Optional[AuthenticationData] = None
    session_management: Optional[SessionManagementData] = None
    users: Optional[list[UserData]] = None

    def add_url(self, url: str) -> None:
        self.urls.append(url)

    def to_mapping(self) -> dict[str, Any]:
        """Render the declarative (plan) shape, omitting absent fields."""
        out: dict[str, Any] = {}
        if self.name is not None:
            out["name"] = self.name
        out["urls"] = list(self.urls)
        if self.include_paths is not None:
            out["includePaths"] = list(self.include_paths)
        if self.exclude_paths is not None:
            out["excludePaths"] = list(self.exclude_paths)
        if self.authentication is not None:
            out["authentication"] = self.authentication.to_mapping()
        if self.session_management is not None:
            out["sessionManagement"] = self.session_management.to_mapping()
        if self.users is not None:
            out["users"] = [user.to_mapping() for user in self.users]
        return out
