"""Unit tests for scopekit.automation.model."""

from scopekit.automation.authentication import AuthenticationData
from scopekit.automation.loader import load_context
from scopekit.automation.model import WILDCARD_SUFFIX, ContextData, UserData
from scopekit.automation.session_management import SessionManagementData


class TestContextData:
    """Tests for the declarative model."""

    def test_defaults(self):
        """A new model has no name, no URLs and absent optional fields."""
        data = ContextData()
        assert data.name is None
        assert data.urls == []
        assert data.include_paths is None
        assert data.exclude_paths is None
        assert data.users is None

    def test_add_url_appends_in_order(self):
        """add_url builds the start URL list incrementally."""
        data = ContextData(name="a")
        data.add_url("https://one.example")
        data.add_url("https://two.example")
        assert data.urls == ["https://one.example", "https://two.example"]

    def test_wildcard_suffix(self):
        """Start URLs are widened with '.*'."""
        assert WILDCARD_SUFFIX == ".*"

    def test_password_hidden_from_repr(self):
        """Passwords do not appear in repr output."""
        assert "secret" not in repr(UserData("n", "u", "secret"))


class TestToMapping:
    """Tests for rendering the declarative shape."""

    def test_omits_absent_fields(self):
        """Absent optional fields are not rendered."""
        assert ContextData(name="a", urls=["https://a.example"]).to_mapping() == {
            "name": "a",
            "urls": ["https://a.example"],
        }

    def test_round_trips_through_loader(self, progress):
        """A rendered model loads back to an equal model."""
        data = ContextData(
            name="a",
            urls=["https://a.example"],
            include_paths=["https://a.example/api/.*"],
            exclude_paths=[],
            authentication=AuthenticationData(method="http", parameters={"realm": "r"}),
            session_management=SessionManagementData(method="cookie"),
            users=[UserData("n", "u", "p")],
        )
        assert load_context(data.to_mapping(), progress) == data
        assert progress.diagnostics == []
