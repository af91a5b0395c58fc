"""
scopekit Test Configuration

Shared pytest fixtures and configuration for all test types.
"""

import json
import logging
from pathlib import Path
from typing import Any, Generator

import pytest
import structlog
import yaml

from scopekit.automation import AutomationEnvironment, AutomationProgress
from scopekit.core.config import reset_settings
from scopekit.core.logging import HANDLER_NAME
from scopekit.session import Session, UserManagement

# Route structlog through stdlib logging for caplog compatibility
structlog.configure(
    processors=[
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


# Configure pytest collection
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests (several components together)")
    config.addinivalue_line("markers", "safety: Safety-critical tests (scope boundaries, full replace)")


@pytest.fixture(autouse=True)
def _isolate_settings_and_logging() -> Generator[None, None, None]:
    """Reset the settings singleton and drop CLI log handlers between tests."""
    reset_settings()
    yield
    reset_settings()
    root = logging.getLogger()
    for handler in list(root.handlers):
        if handler.get_name() == HANDLER_NAME:
            root.removeHandler(handler)


@pytest.fixture
def progress() -> AutomationProgress:
    """Provide a fresh diagnostics sink."""
    return AutomationProgress()


@pytest.fixture
def session() -> Session:
    """Provide an empty in-memory session."""
    return Session()


@pytest.fixture
def user_management() -> UserManagement:
    """Provide an empty user registry."""
    return UserManagement()


@pytest.fixture
def env() -> AutomationEnvironment:
    """Provide a resolver with known variables and no OS environment."""
    return AutomationEnvironment(
        vars={"HOST": "https://example.com", "USER": "alice", "PASS": "s3cret"},
        use_os_env=False,
    )


@pytest.fixture
def sample_context() -> dict:
    """Provide a valid raw context mapping."""
    return {
        "name": "example",
        "urls": ["https://example.com"],
        "includePaths": ["https://example.com/api/.*"],
        "excludePaths": [".*logout.*"],
        "users": [
            {"name": "alice", "username": "alice@example.com", "password": "pw1"},
        ],
    }


@pytest.fixture
def fixtures_dir() -> Path:
    """Return path to the fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def load_fixture_data(fixtures_dir):
    """
    Factory fixture to load data from a fixture file.

    Args:
        filename: Relative path to file within tests/fixtures/

    Returns:
        Parsed data (dict/list) from JSON or YAML file
    """
    def _load(filename: str) -> Any:
        file_path = fixtures_dir / filename
        if not file_path.exists():
            raise FileNotFoundError(f"Fixture file not found: {file_path}")

        if filename.endswith(".json"):
            with open(file_path, "r") as f:
                return json.load(f)
        elif filename.endswith((".yaml", ".yml")):
            with open(file_path, "r") as f:
                return yaml.safe_load(f)
        else:
            raise ValueError(f"Unsupported fixture format: {filename}")
    return _load


@pytest.fixture
def valid_plan_path(fixtures_dir) -> Path:
    """Path to a plan whose contexts load without errors."""
    return fixtures_dir / "plans" / "valid.yaml"


@pytest.fixture
def invalid_plan_path(fixtures_dir) -> Path:
    """Path to a plan with several context errors."""
    return fixtures_dir / "plans" / "invalid.yaml"
