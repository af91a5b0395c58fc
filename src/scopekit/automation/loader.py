"""Decode a raw context mapping into :class:`ContextData`.

Loading never raises for bad data. Every key is decoded in one pass over
a fixed key table; a key with the wrong shape is reported and left at its
default, and decoding carries on with the remaining keys. Callers must
inspect the progress sink to decide whether the context is usable.

Recognized keys::

    name                string, required
    urls                list of start URLs, required non-empty
    url                 legacy single start URL (deprecated)
    includePaths        list of include regexes
    excludePaths        list of exclude regexes
    authentication      mapping, see scopekit.automation.authentication
    sessionManagement   mapping, see scopekit.automation.session_management
    users               list of {name, username, password} mappings
"""

from __future__ import annotations

from typing import Any, Callable, Mapping

import structlog

from scopekit.automation.authentication import SCALARS, AuthenticationData
from scopekit.automation.model import ContextData, UserData
from scopekit.automation.progress import AutomationProgress
from scopekit.automation.session_management import SessionManagementData
from scopekit.automation.validators import validate_regex_list, validate_url

log = structlog.get_logger(__name__)

SECTION = "context"
USER_FIELDS = ("name", "username", "password")
LIST_TYPES = (list, tuple)


def decode_user(raw: Mapping[Any, Any]) -> tuple[UserData, list[tuple[str, str]]]:
    """Bind a user mapping field by field.

    Returns:
        The bound UserData and a list of (property, reason) pairs for
        unknown properties and non-scalar values. Binding continues past
        each problem.
    """
    user = UserData()
    problems: list[tuple[str, str]] = []
    for key, value in raw.items():
        key = str(key)
        if key not in USER_FIELDS:
            problems.append((key, "unknown property"))
            continue
        if value is None:
            continue
        if not isinstance(value, SCALARS):
            problems.append((key, f"expected a string, got {type(value).__name__}"))
            continue
        setattr(user, key, str(value))
    return user, problems


def _decode_name(data: ContextData, value: Any, progress: AutomationProgress) -> None:
    if not isinstance(value, SCALARS):
        progress.error("badname", value)
        return
    data.name = str(value)


def _decode_urls(data: ContextData, value: Any, progress: AutomationProgress) -> None:
    if not isinstance(value, LIST_TYPES):
        progress.error("badurlslist", value)
        return
    for item in value:
        url = str(item)
        data.add_url(url)
        validate_url(url, progress)


def _decode_legacy_url(data: ContextData, value: Any, progress: AutomationProgress) -> None:
    url = str(value)
    data.add_url(url)
    validate_url(url, progress)
    progress.warn("url-deprecated", url)


def _decode_regexes(value: Any, category: str, progress: AutomationProgress) -> list[str] | None:
    if not isinstance(value, LIST_TYPES):
        progress.error(category, value)
        return None
    return validate_regex_list([str(item) for item in value], progress)


def _decode_include(data: ContextData, value: Any, progress: AutomationProgress) -> None:
    data.include_paths = _decode_regexes(value, "badincludelist", progress)


def _decode_exclude(data: ContextData, value: Any, progress: AutomationProgress) -> None:
    data.exclude_paths = _decode_regexes(value, "badexcludelist", progress)


def _decode_authentication(data: ContextData, value: Any, progress: AutomationProgress) -> None:
    data.authentication = AuthenticationData.from_mapping(value, progress)


def _decode_session_management(
    data: ContextData, value: Any, progress: AutomationProgress
) -> None:
    data.session_management = SessionManagementData.from_mapping(value, progress)


def _decode_users(data: ContextData, value: Any, progress: AutomationProgress) -> None:
    if not isinstance(value, LIST_TYPES):
        progress.error("baduserslist", value)
        return
    users: list[UserData] = []
    for item in value:
        if not isinstance(item, Mapping):
            # Nothing well-formed to keep
            progress.error("baduser", item)
            continue
        user, problems = decode_user(item)
        for prop, reason in problems:
            progress.error("baduserproperty", prop, reason)
        users.append(user)
    data.users = users


CONTEXT_KEYS: dict[str, Callable[[ContextData, Any, AutomationProgress], None]] = {
    "name": _decode_name,
    "urls": _decode_urls,
    "url": _decode_legacy_url,
    "includePaths": _decode_include,
    "excludePaths": _decode_exclude,
    "authentication": _decode_authentication,
    "sessionManagement": _decode_session_management,
    "users": _decode_users,
}


def load_context(raw: Mapping[Any, Any], progress: AutomationProgress) -> ContextData:
    """Decode one context mapping.

    Args:
        raw: Loosely typed key/value mapping (typically parsed YAML).
        progress: Sink receiving every error and warning.

    Returns:
        The populated model, even when errors were reported.
    """
    data = ContextData()
    for key, value in raw.items():
        if value is None:
            continue
        decoder = CONTEXT_KEYS.get(str(key))
        if decoder is None:
            progress.warn("unknown-option", str(key), SECTION)
            continue
        decoder(data, value, progress)

    if not data.name:
        progress.error("noname", dict(raw))
    if not data.urls:
        progress.error("nourl", dict(raw))

    log.debug(
        "context_loaded",
        name=data.name,
        urls=len(data.urls),
        errors=len(progress.errors),
    )
    return data
