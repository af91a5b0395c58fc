"""Unit tests for scopekit.automation.validators.

Test Coverage:
- Strict URI checks (characters, escapes, ports, IPv6 brackets)
- Placeholder exemption for URLs and regexes
- Advisory behaviour: inputs are never dropped or rewritten
"""

import pytest

from scopekit.automation.progress import AutomationProgress
from scopekit.automation.validators import (
    has_placeholder,
    is_valid_uri,
    validate_regex,
    validate_regex_list,
    validate_url,
)


class TestIsValidUri:
    """Tests for the strict URI check."""

    @pytest.mark.parametrize("url", [
        "https://example.com",
        "http://example.com:8080/path?q=1#frag",
        "https://example.com/a%20b",
        "http://[::1]:8080/",
        "/relative/path",
    ])
    def test_accepts_well_formed_uris(self, url):
        """Well-formed absolute and relative references are accepted."""
        assert is_valid_uri(url) is True

    @pytest.mark.parametrize("url", [
        "",
        "not a url",
        "https://example.com/{id}",
        "https://example.com/%zz",
        "https://example.com/%4",
        "http://[::1/",
        "http://example.com:port/",
        "http://example.com:99999/",
        "https://example.com\\path",
    ])
    def test_rejects_malformed_uris(self, url):
        """Spaces, braces, bad escapes, bad ports and brackets are rejected."""
        assert is_valid_uri(url) is False


class TestPlaceholders:
    """Tests for placeholder detection."""

    def test_detects_placeholder(self):
        """A ${...} token marks the string as templated."""
        assert has_placeholder("${HOST}/api") is True

    def test_plain_dollar_is_not_placeholder(self):
        """A lone dollar sign is not a placeholder."""
        assert has_placeholder("https://example.com/$price") is False

    def test_none_is_not_placeholder(self):
        """None is tolerated."""
        assert has_placeholder(None) is False


class TestValidateUrl:
    """Tests for validate_url()."""

    def test_valid_url_reports_nothing(self, progress):
        """A valid URL produces no diagnostics."""
        validate_url("https://example.com", progress)
        assert progress.diagnostics == []

    def test_invalid_url_reports_one_badurl_error(self, progress):
        """An invalid URL produces exactly one error naming the literal."""
        validate_url("not a url", progress)
        assert progress.categories() == ["badurl"]
        assert progress.diagnostics[0].value == "not a url"
        assert "not a url" in progress.errors[0]

    def test_placeholder_url_is_skipped(self, progress):
        """Templated URLs are not validated, even if they look invalid."""
        validate_url("${HOST} with spaces", progress)
        assert progress.diagnostics == []


class TestValidateRegex:
    """Tests for validate_regex() and validate_regex_list()."""

    def test_valid_regex(self, progress):
        """A compilable regex is accepted."""
        assert validate_regex("https://example.com/.*", progress) is True
        assert not progress.has_errors()

    def test_invalid_regex_reports_literal_and_reason(self, progress):
        """A broken regex yields one badregex error with the engine complaint."""
        assert validate_regex("[unclosed", progress) is False
        assert progress.categories() == ["badregex"]
        diagnostic = progress.diagnostics[0]
        assert diagnostic.value == "[unclosed"
        assert "[unclosed" in diagnostic.message
        assert "unterminated" in diagnostic.message

    def test_placeholder_regex_is_skipped(self, progress):
        """Templated regexes are not compiled."""
        assert validate_regex("${HOST}(", progress) is True
        assert progress.diagnostics == []

    def test_list_is_returned_unchanged(self, progress):
        """Invalid entries stay in the returned list, in order."""
        patterns = ["a.*", "(b", "${X}("]
        result = validate_regex_list(patterns, progress)
        assert result is patterns
        assert result == ["a.*", "(b", "${X}("]
        assert progress.categories() == ["badregex"]
