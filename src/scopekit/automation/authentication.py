"""Authentication sub-config of a context.

scopekit does not perform any authentication handshake. This module only
decodes the declarative ``authentication`` block, checks its shape, and
installs a resolved :class:`AuthenticationMethod` on the live context for
whatever engine performs the login later.

Declarative shape::

    authentication:
      method: form
      parameters:
        loginPageUrl: https://example.com/login
        loginRequestUrl: https://example.com/login
        loginRequestBody: user={%username%}&pass={%password%}
      verification:
        method: response
        loggedInRegex: "\\bSign out\\b"
        loggedOutRegex: "\\bSign in\\b"
        pollFrequency: 60
        pollUnits: requests
        pollUrl: https://example.com/me
        pollPostData: ""
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Mapping, Optional

import structlog

from scopekit.automation.progress import AutomationProgress
from scopekit.automation.validators import validate_regex
from scopekit.protocols import ContextProtocol, VariableResolverProtocol

log = structlog.get_logger(__name__)

AUTH_METHODS = frozenset({
    "manual", "http", "form", "json", "script", "autodetect", "browser", "client",
})
VERIFICATION_METHODS = frozenset({"response", "request", "both", "poll", "autodetect"})
POLL_UNITS = frozenset({"requests", "seconds"})

SCALARS = (str, int, float, bool)


def decode_parameters(
    value: Any, category: str, progress: AutomationProgress
) -> dict[str, str]:
    """Decode a flat ``parameters`` mapping, stringifying scalar values.

    Shared by the authentication and session-management decoders.
    """
    if not isinstance(value, Mapping):
        progress.error(category, value)
        return {}
    params: dict[str, str] = {}
    for key, item in value.items():
        if item is None:
            continue
        if not isinstance(item, SCALARS):
            progress.error(category, {key: item})
            continue
        params[str(key)] = str(item).lower() if isinstance(item, bool) else str(item)
    return params


@dataclass
class VerificationData:
    """How a login is verified (declarative)."""

    method: Optional[str] = None
    logged_in_regex: Optional[str] = None
    logged_out_regex: Optional[str] = None
    poll_frequency: Optional[int] = None
    poll_units: Optional[str] = None
    poll_url: Optional[str] = None
    poll_post_data: Optional[str] = None

    KEYS = {
        "method": "method",
        "loggedInRegex": "logged_in_regex",
        "loggedOutRegex": "logged_out_regex",
        "pollFrequency": "poll_frequency",
        "pollUnits": "poll_units",
        "pollUrl": "poll_url",
        "pollPostData": "poll_post_data",
    }

    @classmethod
    def from_mapping(cls, raw: Any, progress: AutomationProgress) -> "VerificationData":
        data = cls()
        if not isinstance(raw, Mapping):
            progress.error("badverification", raw, "must be a mapping")
            return data

        for key, value in raw.items():
            if value is None:
                continue
            attr = cls.KEYS.get(str(key))
            if attr is None:
                progress.warn("unknown-option", str(key), "authentication.verification")
                continue
            if attr == "poll_frequency":
                try:
                    data.poll_frequency = int(value)
                except (TypeError, ValueError):
                    progress.error("badverification", value, "pollFrequency must be an integer")
                continue
            setattr(data, attr, str(value))

        if data.method is not None:
            data.method = data.method.lower()
            if data.method not in VERIFICATION_METHODS:
                progress.error("badverification", data.method, "unsupported method")
        if data.poll_units is not None:
            data.poll_units = data.poll_units.lower()
            if data.poll_units not in POLL_UNITS:
                progress.error("badverification", data.poll_units, "unsupported pollUnits")
        for regex in (data.logged_in_regex, data.logged_out_regex):
            if regex is not None:
                validate_regex(regex, progress)
        return data

    def to_mapping(self) -> dict[str, Any]:
        return {
            key: getattr(self, attr)
            for key, attr in self.KEYS.items()
            if getattr(self, attr) is not None
        }


@dataclass
class AuthenticationMethod:
    """Resolved authentication state installed on a live context."""

    method: str
    parameters: dict[str, str] = field(default_factory=dict)
    verification: Optional[VerificationData] = None


@dataclass
class AuthenticationData:
    """The declarative ``authentication`` block."""

    method: Optional[str] = None
    parameters: dict[str, str] = field(default_factory=dict)
    verification: Optional[VerificationData] = None

    @classmethod
    def from_mapping(cls, raw: Any, progress: AutomationProgress) -> "AuthenticationData":
        """Decode ``raw``; problems are reported, never raised."""
        data = cls()
        if not isinstance(raw, Mapping):
            progress.error("badauth", raw)
            return data

        for key, value in raw.items():
            if value is None:
                continue
            key = str(key)
            if key == "method":
                data.method = str(value).lower()
                if data.method not in AUTH_METHODS:
                    progress.error("badauthmethod", value)
            elif key == "parameters":
                data.parameters = decode_parameters(value, "badauthparams", progress)
            elif key == "verification":
                data.verification = VerificationData.from_mapping(value, progress)
            else:
                progress.warn("unknown-option", key, "authentication")
        return data

    @classmethod
    def from_context(cls, context: ContextProtocol) -> Optional["AuthenticationData"]:
        """Snapshot the context's authentication, or None if it has none."""
        state = context.authentication
        if state is None:
            return None
        return cls(
            method=state.method,
            parameters=dict(state.parameters),
            verification=(
                replace(state.verification) if state.verification is not None else None
            ),
        )

    def init_context(
        self,
        context: ContextProtocol,
        progress: AutomationProgress,
        env: Optional[VariableResolverProtocol] = None,
    ) -> None:
        """Install the resolved authentication state on ``context``."""
        method = self.method or "manual"
        if method not in AUTH_METHODS:
            progress.error("badauthmethod", method)
            return

        def resolve(text: Optional[str]) -> Optional[str]:
            return env.replace_vars(text) if env is not None else text

        verification = None
        if self.verification is not None:
            v = self.verification
            verification = VerificationData(
                method=v.method,
                logged_in_regex=resolve(v.logged_in_regex),
                logged_out_regex=resolve(v.logged_out_regex),
                poll_frequency=v.poll_frequency,
                poll_units=v.poll_units,
                poll_url=resolve(v.poll_url),
                poll_post_data=resolve(v.poll_post_data),
            )
        context.authentication = AuthenticationMethod(
            method=method,
            parameters={k: resolve(v) or "" for k, v in self.parameters.items()},
            verification=verification,
        )
        log.debug("context_authentication_set", context=context.name, method=method)

    def to_mapping(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.method is not None:
            out["method"] = self.method
        if self.parameters:
            out["parameters"] = dict(self.parameters)
        if self.verification is not None:
            out["verification"] = self.verification.to_mapping()
        return out
