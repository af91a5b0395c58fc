"""Operator-facing message templates, keyed by diagnostic category.

Templates use ``str.format`` positional fields; the first argument is
always the offending literal.
"""

from __future__ import annotations

MESSAGES: dict[str, str] = {
    # Context
    "noname": "Context has no name: {0}",
    "badname": "Context 'name' must be a string: {0}",
    "nourl": "Context has no URLs: {0}",
    "badurl": "Invalid URL: {0}",
    "badurlslist": "Context 'urls' must be a list: {0}",
    "url-deprecated": "Context 'url' is deprecated, use 'urls' instead: {0}",
    "badincludelist": "Context 'includePaths' must be a list: {0}",
    "badexcludelist": "Context 'excludePaths' must be a list: {0}",
    "badregex": "Invalid regex: {0} : {1}",
    "baduserslist": "Context 'users' must be a list: {0}",
    "baduser": "Context user must be a mapping: {0}",
    "baduserproperty": "Invalid user property '{0}': {1}",
    "unknown-option": "Unknown option in {1}: {0}",
    # Authentication
    "badauth": "Context 'authentication' must be a mapping: {0}",
    "badauthmethod": "Unsupported authentication method: {0}",
    "badauthparams": "Authentication 'parameters' must be a mapping: {0}",
    "badverification": "Invalid authentication verification: {0} : {1}",
    # Session management
    "badsessionmgmt": "Context 'sessionManagement' must be a mapping: {0}",
    "badsessionmethod": "Unsupported session management method: {0}",
    "badsessionparams": "Session management 'parameters' must be a mapping: {0}",
    # Plan
    "badplan": "Plan must be a mapping: {0}",
    "badenv": "Plan 'env' must be a mapping: {0}",
    "badcontexts": "Plan 'contexts' must be a list: {0}",
    "badcontext": "Plan context must be a mapping: {0}",
    "badvars": "Plan 'vars' must be a mapping: {0}",
}

FALLBACK = "{category}: {args}"


def render(category: str, *args: object) -> str:
    """Render the message for ``category``.

    Unknown categories and argument mismatches fall back to a generic
    ``category: args`` line rather than raising.
    """
    template = MESSAGES.get(category)
    if template is not None:
        try:
            return template.format(*args)
        except (IndexError, KeyError):
            pass
    return FALLBACK.format(category=category, args=", ".join(map(str, args)))
