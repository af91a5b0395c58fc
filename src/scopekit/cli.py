"""scopekit CLI Entry Point.

Validate automation plans and export the contexts they produce.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import structlog
import typer
import yaml

from scopekit.automation import (
    AutomationEnvironment,
    AutomationProgress,
    ContextSnapshotter,
    load_plan_file,
)
from scopekit.automation.plan import PlanEnvironment
from scopekit.core.config import ConfigurationError, get_settings
from scopekit.core.exceptions import ContextNotFoundError
from scopekit.core.logging import configure_logging
from scopekit.session import Session, UserManagement

log = structlog.get_logger()

app = typer.Typer(
    name="scopekit",
    help="scopekit - declarative scope contexts for security testing",
    no_args_is_help=True,
)


def load_config_callback(config: Optional[Path]) -> Optional[Path]:
    """Load configuration file if provided, then configure logging."""
    if config:
        if not config.exists():
            typer.echo(f"Error: Config file '{config}' not found", err=True)
            raise typer.Exit(code=1)
        try:
            get_settings(force_reload=True, system_config_path=config)
        except ConfigurationError as e:
            typer.echo(f"Error loading config: {e}", err=True)
            raise typer.Exit(code=1)

    cfg = get_settings().logging
    configure_logging(cfg.level, cfg.format)
    if config:
        log.info("config_loaded", path=str(config))
    return config


@app.callback()
def main(
    config: Optional[Path] = typer.Option(
        None, "--config", "-c",
        callback=load_config_callback,
        is_eager=True,
        help="Path to global configuration file",
    ),
) -> None:
    """scopekit CLI."""


def _read_plan(plan_path: Path, progress: AutomationProgress) -> PlanEnvironment:
    try:
        return load_plan_file(plan_path, progress)
    except ConfigurationError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)


def _report(progress: AutomationProgress) -> None:
    for diagnostic in progress.diagnostics:
        typer.echo(f"{diagnostic.severity.upper()}: {diagnostic.message}", err=True)


def _failed(progress: AutomationProgress) -> bool:
    if progress.has_errors():
        return True
    return get_settings().diagnostics.fail_on_warning and progress.has_warnings()


@app.command()
def validate(
    plan_path: Path = typer.Argument(..., help="Automation plan YAML file"),
) -> None:
    """Load a plan and report every problem in its contexts."""
    progress = AutomationProgress()
    plan = _read_plan(plan_path, progress)
    _report(progress)

    if _failed(progress):
        typer.echo(
            f"{len(progress.errors)} errors, {len(progress.warnings)} warnings",
            err=True,
        )
        raise typer.Exit(code=1)
    typer.echo(f"OK: {len(plan.contexts)} contexts, {len(progress.warnings)} warnings")


@app.command()
def export(
    plan_path: Path = typer.Argument(..., help="Automation plan YAML file"),
    context_name: Optional[str] = typer.Option(
        None, "--context", help="Export only the context with this (resolved) name"
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write YAML here instead of stdout"
    ),
) -> None:
    """Materialize a plan into a fresh session and export the result."""
    progress = AutomationProgress()
    plan = _read_plan(plan_path, progress)

    session = Session()
    user_management = UserManagement()
    env = plan.environment(AutomationEnvironment.from_settings(get_settings()))
    plan.create_contexts(session, env, progress, user_management)

    _report(progress)
    if _failed(progress):
        raise typer.Exit(code=1)

    contexts = list(session)
    if context_name is not None:
        try:
            contexts = [session.require_context(context_name)]
        except ContextNotFoundError as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(code=1)

    snapshotter = ContextSnapshotter(user_management)
    exported = PlanEnvironment(contexts=[snapshotter.snapshot(c) for c in contexts])
    text = yaml.safe_dump(exported.to_mapping(), sort_keys=False)

    if output is not None:
        output.write_text(text, encoding="utf-8")
        log.info("plan_exported", path=str(output), contexts=len(contexts))
    else:
        typer.echo(text, nl=False)


if __name__ == "__main__":
    app()
