"""Unit tests for scopekit.automation.authentication."""

from scopekit.automation.authentication import (
    AuthenticationData,
    AuthenticationMethod,
    VerificationData,
)
from scopekit.session import Context


class TestAuthenticationFromMapping:
    """Tests for decoding the authentication block."""

    def test_decodes_method_parameters_and_verification(self, progress):
        """A full block decodes without diagnostics."""
        data = AuthenticationData.from_mapping(
            {
                "method": "FORM",
                "parameters": {"loginPageUrl": "https://a.example/login", "port": 8080},
                "verification": {
                    "method": "poll",
                    "loggedInRegex": r"\bLogout\b",
                    "pollFrequency": "60",
                    "pollUnits": "Seconds",
                    "pollUrl": "https://a.example/me",
                },
            },
            progress,
        )
        assert data.method == "form"
        assert data.parameters == {"loginPageUrl": "https://a.example/login", "port": "8080"}
        assert data.verification.method == "poll"
        assert data.verification.poll_frequency == 60
        assert data.verification.poll_units == "seconds"
        assert progress.diagnostics == []

    def test_not_a_mapping(self, progress):
        """A scalar block is reported and yields an empty config."""
        data = AuthenticationData.from_mapping("form", progress)
        assert data == AuthenticationData()
        assert progress.categories() == ["badauth"]

    def test_unknown_method(self, progress):
        """Unsupported methods are reported but kept."""
        data = AuthenticationData.from_mapping({"method": "kerberos"}, progress)
        assert data.method == "kerberos"
        assert progress.categories() == ["badauthmethod"]

    def test_bad_parameters(self, progress):
        """Non-mapping parameters are reported."""
        data = AuthenticationData.from_mapping({"method": "http", "parameters": ["a"]}, progress)
        assert data.parameters == {}
        assert progress.categories() == ["badauthparams"]

    def test_unknown_key_warns(self, progress):
        """Unknown keys warn with the section name."""
        AuthenticationData.from_mapping({"method": "http", "realm": "x"}, progress)
        assert progress.categories() == ["unknown-option"]
        assert "authentication" in progress.warnings[0]

    def test_verification_regexes_are_validated(self, progress):
        """Broken verification regexes are reported and kept."""
        data = AuthenticationData.from_mapping(
            {"method": "form", "verification": {"loggedOutRegex": "(oops"}},
            progress,
        )
        assert data.verification.logged_out_regex == "(oops"
        assert progress.categories() == ["badregex"]

    def test_bad_verification_values(self, progress):
        """Bad method, units and frequency are each reported."""
        VerificationData.from_mapping(
            {"method": "psychic", "pollUnits": "weeks", "pollFrequency": "often"},
            progress,
        )
        assert progress.categories() == ["badverification"] * 3


class TestAuthenticationContext:
    """Tests for installing and snapshotting authentication."""

    def test_init_context_resolves_placeholders(self, progress, env):
        """init_context installs resolved state on the live context."""
        context = Context(1, "a")
        data = AuthenticationData(
            method="json",
            parameters={"loginRequestUrl": "${HOST}/login"},
            verification=VerificationData(method="response", poll_url="${HOST}/me"),
        )
        data.init_context(context, progress, env)
        assert isinstance(context.authentication, AuthenticationMethod)
        assert context.authentication.method == "json"
        assert context.authentication.parameters == {"loginRequestUrl": "https://example.com/login"}
        assert context.authentication.verification.poll_url == "https://example.com/me"
        assert data.parameters == {"loginRequestUrl": "${HOST}/login"}

    def test_init_context_defaults_to_manual(self, progress):
        """A block without a method installs manual authentication."""
        context = Context(1, "a")
        AuthenticationData().init_context(context, progress)
        assert context.authentication.method == "manual"

    def test_init_context_skips_unknown_method(self, progress):
        """An unsupported method is reported and nothing is installed."""
        context = Context(1, "a")
        AuthenticationData(method="kerberos").init_context(context, progress)
        assert context.authentication is None
        assert progress.categories() == ["badauthmethod"]

    def test_from_context(self, progress):
        """from_context mirrors installed state, or None when absent."""
        context = Context(1, "a")
        assert AuthenticationData.from_context(context) is None
        AuthenticationData(method="http", parameters={"realm": "r"}).init_context(context, progress)
        snap = AuthenticationData.from_context(context)
        assert snap.method == "http"
        assert snap.parameters == {"realm": "r"}

    def test_from_context_copies_verification(self, progress):
        """Editing a snapshot leaves the live authentication state alone."""
        context = Context(1, "a")
        AuthenticationData(
            method="form",
            parameters={"loginPageUrl": "https://a.example/login"},
            verification=VerificationData(method="response", logged_in_regex="in"),
        ).init_context(context, progress)

        snap = AuthenticationData.from_context(context)
        snap.verification.logged_in_regex = "changed"
        snap.parameters["loginPageUrl"] = "changed"

        assert snap.verification == VerificationData(method="response", logged_in_regex="changed")
        assert context.authentication.verification.logged_in_regex == "in"
        assert context.authentication.parameters["loginPageUrl"] == "https://a.example/login"

    def test_to_mapping_round_trips(self, progress):
        """to_mapping output decodes back to an equal config."""
        data = AuthenticationData(
            method="form",
            parameters={"loginPageUrl": "https://a.example/login"},
            verification=VerificationData(method="response", logged_in_regex="in"),
        )
        again = AuthenticationData.from_mapping(data.to_mapping(), progress)
        assert again == data
        assert progress.diagnostics == []
