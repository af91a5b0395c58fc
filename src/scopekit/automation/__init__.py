"""scopekit Automation Package - Declarative Contexts.

This package turns declarative context blocks into live scope contexts
and back:
- load_context: raw mapping -> ContextData (tolerant, diagnostics only)
- ContextMaterializer: ContextData -> live context (destructive replace)
- ContextSnapshotter: live context -> ContextData (for export)
- AutomationProgress: the accumulating diagnostics sink
"""

from scopekit.automation.authentication import AuthenticationData, VerificationData
from scopekit.automation.environment import AutomationEnvironment
from scopekit.automation.loader import decode_user, load_context
from scopekit.automation.materializer import ContextMaterializer, materialize_context
from scopekit.automation.model import WILDCARD_SUFFIX, ContextData, UserData
from scopekit.automation.plan import PlanEnvironment, load_plan, load_plan_file
from scopekit.automation.progress import AutomationProgress, Diagnostic
from scopekit.automation.session_management import SessionManagementData
from scopekit.automation.snapshot import ContextSnapshotter, snapshot_context
from scopekit.automation.users import UserProvisioner
from scopekit.automation.validators import (
    has_placeholder,
    is_valid_uri,
    validate_regex,
    validate_regex_list,
    validate_url,
)

__all__ = [
    "AuthenticationData",
    "VerificationData",
    "AutomationEnvironment",
    "decode_user",
    "load_context",
    "ContextMaterializer",
    "materialize_context",
    "WILDCARD_SUFFIX",
    "ContextData",
    "UserData",
    "PlanEnvironment",
    "load_plan",
    "load_plan_file",
    "AutomationProgress",
    "Diagnostic",
    "SessionManagementData",
    "ContextSnapshotter",
    "snapshot_context",
    "UserProvisioner",
    "has_placeholder",
    "is_valid_uri",
    "validate_regex",
    "validate_regex_list",
    "validate_url",
]
