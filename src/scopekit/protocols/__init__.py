"""Protocol abstractions for scopekit.

Interfaces of the external collaborators used by the context materializer
and snapshotter. All protocols use `typing.Protocol` for structural
subtyping with `@runtime_checkable` for isinstance() support.

Protocols:
    ContextProtocol: A live, named scope context.
    SessionProtocol: Holder of named live contexts.
    UserProtocol: A test identity.
    UserManagementProtocol: Registry of test identities (optional).
    VariableResolverProtocol: Placeholder substitution.

Usage:
    from scopekit.protocols import SessionProtocol

    assert isinstance(my_session, SessionProtocol)
"""

from __future__ import annotations

from scopekit.protocols.environment import VariableResolverProtocol
from scopekit.protocols.session import ContextProtocol, SessionProtocol
from scopekit.protocols.users import UserManagementProtocol, UserProtocol

__all__ = [
    "ContextProtocol",
    "SessionProtocol",
    "UserProtocol",
    "UserManagementProtocol",
    "VariableResolverProtocol",
]
