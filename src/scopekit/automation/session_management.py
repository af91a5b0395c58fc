"""Session-management sub-config of a context.

Decodes the declarative ``sessionManagement`` block and installs a
resolved :class:`SessionManagementMethod` on the live context. Tracking
sessions on the wire is someone else's job.

Declarative shape::

    sessionManagement:
      method: headers
      parameters:
        Authorization: Bearer ${TOKEN}
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

import structlog

from scopekit.automation.authentication import decode_parameters
from scopekit.automation.progress import AutomationProgress
from scopekit.protocols import ContextProtocol, VariableResolverProtocol

log = structlog.get_logger(__name__)

SESSION_METHODS = frozenset({"cookie", "http", "headers", "script", "autodetect"})


@dataclass
class SessionManagementMethod:
    """Resolved session-tracking state installed on a live context."""

    method: str
    parameters: dict[str, str] = field(default_factory=dict)


@dataclass
class SessionManagementData:
    """The declarative ``sessionManagement`` block."""

    method: Optional[str] = None
    parameters: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, raw: Any, progress: AutomationProgress) -> "SessionManagementData":
        data = cls()
        if not isinstance(raw, Mapping):
            progress.error("badsessionmgmt", raw)
            return data

        for key, value in raw.items():
            if value is None:
                continue
            key = str(key)
            if key == "method":
                data.method = str(value).lower()
                if data.method not in SESSION_METHODS:
                    progress.error("badsessionmethod", value)
            elif key == "parameters":
                data.parameters = decode_parameters(value, "badsessionparams", progress)
            else:
                progress.warn("unknown-option", key, "sessionManagement")
        return data

    @classmethod
    def from_context(cls, context: ContextProtocol) -> Optional["SessionManagementData"]:
        state = context.session_management
        if state is None:
            return None
        return cls(method=state.method, parameters=dict(state.parameters))

    def init_context(
        self,
        context: ContextProtocol,
        progress: AutomationProgress,
        env: Optional[VariableResolverProtocol] = None,
    ) -> None:
        method = self.method or "cookie"
        if method not in SESSION_METHODS:
            progress.error("badsessionmethod", method)
            return
        parameters = {
            k: (env.replace_vars(v) if env is not None else v) or ""
            for k, v in self.parameters.items()
        }
        context.session_management = SessionManagementMethod(method, parameters)
        log.debug("context_session_management_set", context=context.name, method=method)

    def to_mapping(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.method is not None:
            out["method"] = self.method
        if self.parameters:
            out["parameters"] = dict(self.parameters)
        return out
