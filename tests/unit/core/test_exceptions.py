"""Unit tests for scopekit.core.exceptions."""

import pytest

from scopekit.core.exceptions import (
    ConfigurationError,
    ContextNotFoundError,
    InvalidPatternError,
    ScopeKitError,
)


class TestScopeKitError:
    """Tests for the base exception."""

    def test_default_message(self):
        err = ScopeKitError()
        assert err.message == "A scopekit error occurred."
        assert err.context == {}

    def test_repr(self):
        assert repr(ScopeKitError("boom")) == "ScopeKitError('boom')"

    @pytest.mark.parametrize("exc", [
        ConfigurationError("c.yaml"),
        InvalidPatternError("(", "missing )"),
        ContextNotFoundError("a"),
    ])
    def test_hierarchy(self, exc):
        """Every scopekit exception derives from ScopeKitError."""
        assert isinstance(exc, ScopeKitError)


class TestConfigurationError:
    def test_generated_message(self):
        err = ConfigurationError("c.yaml", key="logging.level", expected_type="str")
        assert str(err) == "Configuration error in 'c.yaml' key 'logging.level' (expected str)."
        assert err.context == {
            "config_path": "c.yaml",
            "key": "logging.level",
            "expected_type": "str",
        }


class TestInvalidPatternError:
    def test_attributes(self):
        err = InvalidPatternError("(", "missing )")
        assert err.pattern == "("
        assert err.reason == "missing )"
        assert str(err) == "Invalid regex pattern '(': missing )"
        assert err.context == {"pattern": "(", "reason": "missing )"}


class TestContextNotFoundError:
    def test_message_and_repr(self):
        err = ContextNotFoundError("juice")
        assert str(err) == "Context not found: juice"
        assert repr(err) == "ContextNotFoundError(name='juice')"
