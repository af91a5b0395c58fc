"""Provision test identities for a freshly materialized context."""

from __future__ import annotations

from typing import Optional

import structlog

from scopekit.automation.model import UserData
from scopekit.automation.progress import AutomationProgress
from scopekit.protocols import (
    ContextProtocol,
    UserManagementProtocol,
    UserProtocol,
    VariableResolverProtocol,
)
from scopekit.session.users import UsernamePasswordCredentials

log = structlog.get_logger(__name__)


class UserProvisioner:
    """Creates one enabled username/password identity per UserData.

    Username/password is the only credential kind provisioned. No
    duplicate-name checking is done: the same name twice yields two
    identities unless the user management itself refuses.
    """

    def __init__(self, user_management: UserManagementProtocol) -> None:
        self.user_management = user_management

    def provision(
        self,
        context: ContextProtocol,
        users: list[UserData],
        env: VariableResolverProtocol,
        progress: Optional[AutomationProgress] = None,
    ) -> list[UserProtocol]:
        """Register every user; a failing user is reported as ``baduser`` and skipped."""
        created: list[UserProtocol] = []
        for user_data in users:
            try:
                created.append(self._provision_one(context, user_data, env))
            except Exception as e:
                log.warning(
                    "user_provisioning_failed",
                    context=context.name,
                    user=user_data.name,
                    error=str(e),
                )
                if progress is not None:
                    progress.error("baduser", user_data.name)
        log.info("context_users_provisioned", context=context.name, count=len(created))
        return created

    def _provision_one(
        self,
        context: ContextProtocol,
        user_data: UserData,
        env: VariableResolverProtocol,
    ) -> UserProtocol:
        name = env.replace_vars(user_data.name) or ""
        credentials = UsernamePasswordCredentials(
            username=env.replace_vars(user_data.username) or "",
            password=env.replace_vars(user_data.password) or "",
        )
        user = self.user_management.create_user(context.name, name)
        user.set_credentials(credentials)
        user.set_enabled(True)
        self.user_management.add_user(user)
        return user
