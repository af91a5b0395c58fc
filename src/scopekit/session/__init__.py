"""In-memory live session objects.

Reference implementations of the session, context and user-management
collaborators so plans can be materialized and snapshotted end to end.
"""

from scopekit.session.context import Context, Session
from scopekit.session.users import (
    Credentials,
    ManualCredentials,
    User,
    UserManagement,
    UsernamePasswordCredentials,
)

__all__ = [
    "Context",
    "Session",
    "Credentials",
    "ManualCredentials",
    "User",
    "UserManagement",
    "UsernamePasswordCredentials",
]
