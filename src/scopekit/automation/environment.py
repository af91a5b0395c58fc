"""Placeholder substitution for plan values.

``${NAME}`` tokens are replaced from the plan/settings variables first and
then from the process environment. Unknown tokens are left verbatim so a
later URL re-validation can still flag them.
"""

from __future__ import annotations

import os
import re
from typing import TYPE_CHECKING, Mapping, Optional

if TYPE_CHECKING:
    from scopekit.core.config import Settings

_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")


class AutomationEnvironment:
    """Default variable resolver.

    Attributes:
        vars: Explicit variables, taking precedence over the OS environment.
        use_os_env: Whether ``os.environ`` is consulted for unknown names.
    """

    def __init__(
        self,
        vars: Optional[Mapping[str, object]] = None,
        use_os_env: bool = True,
    ) -> None:
        self.vars: dict[str, str] = {
            str(k): "" if v is None else str(v) for k, v in (vars or {}).items()
        }
        self.use_os_env = use_os_env

    @classmethod
    def from_settings(cls, settings: "Settings") -> "AutomationEnvironment":
        return cls(
            vars=settings.environment.vars,
            use_os_env=settings.environment.use_os_env,
        )

    def with_vars(self, extra: Mapping[str, object]) -> "AutomationEnvironment":
        """Return a copy whose variables are overridden by ``extra``."""
        merged: dict[str, object] = dict(self.vars)
        merged.update(extra)
        return AutomationEnvironment(vars=merged, use_os_env=self.use_os_env)

    def lookup(self, name: str) -> Optional[str]:
        if name in self.vars:
            return self.vars[name]
        if self.use_os_env:
            return os.environ.get(name)
        return None

    def replace_vars(self, text: Optional[str]) -> Optional[str]:
        if text is None:
            return None

        def _sub(match: re.Match[str]) -> str:
            value = self.lookup(match.group(1))
            return match.group(0) if value is None else value

        return _VAR_PATTERN.sub(_sub, text)
