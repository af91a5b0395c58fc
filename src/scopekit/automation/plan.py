"""Plan environment: the ``env`` section holding contexts and variables.

Plan shape::

    env:
      vars:
        TARGET: https://example.com
      contexts:
        - name: example
          urls: ["${TARGET}"]
          includePaths: ["${TARGET}/api/.*"]

Unreadable files and broken YAML raise ConfigurationError. Everything
else is reported to the progress sink, like the context loader.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import structlog

from scopekit.automation.environment import AutomationEnvironment
from scopekit.automation.loader import LIST_TYPES, load_context
from scopekit.automation.materializer import ContextMaterializer
from scopekit.automation.model import ContextData
from scopekit.automation.progress import AutomationProgress
from scopekit.core.config import load_yaml_file
from scopekit.protocols import (
    ContextProtocol,
    SessionProtocol,
    UserManagementProtocol,
    VariableResolverProtocol,
)

log = structlog.get_logger(__name__)


@dataclass
class PlanEnvironment:
    contexts: list[ContextData] = field(default_factory=list)
    vars: dict[str, str] = field(default_factory=dict)

    def environment(self, base: Optional[AutomationEnvironment] = None) -> AutomationEnvironment:
        """Build the resolver for this plan; plan vars override ``base`` vars."""
        base = base or AutomationEnvironment()
        return base.with_vars(self.vars)

    def get_context(self, name: str) -> Optional[ContextData]:
        for context in self.contexts:
            if context.name == name:
                return context
        return None

    def create_contexts(
        self,
        session: SessionProtocol,
        env: VariableResolverProtocol,
        progress: AutomationProgress,
        user_management: Optional[UserManagementProtocol] = None,
    ) -> list[ContextProtocol]:
        """Materialize every context in plan order."""
        materializer = ContextMaterializer(user_management)
        return [
            materializer.materialize(context, session, env, progress)
            for context in self.contexts
        ]

    def to_mapping(self) -> dict[str, Any]:
        env: dict[str, Any] = {}
        if self.vars:
            env["vars"] = dict(self.vars)
        env["contexts"] = [context.to_mapping() for context in self.contexts]
        return {"env": env}


def load_plan(raw: Any, progress: AutomationProgress) -> PlanEnvironment:
    """Decode a parsed plan document."""
    plan = PlanEnvironment()
    if not isinstance(raw, Mapping):
        progress.error("badplan", raw)
        return plan

    env = raw.get("env")
    if not isinstance(env, Mapping):
        progress.error("badenv", env)
        return plan

    for key, value in env.items():
        key = str(key)
        if value is None:
            continue
        if key == "vars":
            if isinstance(value, Mapping):
                plan.vars = {
                    str(k): "" if v is None else str(v) for k, v in value.items()
                }
            else:
                progress.error("badvars", value)
        elif key == "contexts":
            if not isinstance(value, LIST_TYPES):
                progress.error("badcontexts", value)
                continue
            for item in value:
                if isinstance(item, Mapping):
                    plan.contexts.append(load_context(item, progress))
                else:
                    progress.error("badcontext", item)
        else:
            progress.warn("unknown-option", key, "env")

    log.info("plan_loaded", contexts=len(plan.contexts), errors=len(progress.errors))
    return plan


def load_plan_file(path: Union[str, Path], progress: AutomationProgress) -> PlanEnvironment:
    """Read and decode a YAML plan file.

    Raises:
        ConfigurationError: If the file is missing or is not valid YAML.
    """
    return load_plan(load_yaml_file(Path(path)), progress)
