"""
Unit tests for form tools.

Tests for list_forms and list_form_submissions including:
- Element ID filtering
- Schema-less submission payloads
- Error results
"""

from webflow_tools.tools.base import ToolContext
from webflow_tools.tools.forms import ListFormsTool, ListFormSubmissionsTool


class TestListFormsTool:
    """Tests for list_forms."""

    def test_lists_forms(self, context: ToolContext, fake_api) -> None:
        """Test listing forms with fields and element IDs."""
        fake_api.respond({
            "forms": [{
                "id": "form1",
                "displayName": "Contact",
                "pageId": "page1",
                "pageName": "Contact",
                "formElementId": "18259716-3e5a-646a-5f41-5dc4b9405aa0",
                "fields": {"email": {"displayName": "Email", "type": "Email"}},
                "createdOn": "2024-01-01T00:00:00Z",
            }],
            "pagination": {"limit": 25, "offset": 0, "total": 1},
        })

        result = ListFormsTool(context).run({"limit": 25}).to_dict()

        assert fake_api.path() == "/sites/test-site-id/forms"
        assert fake_api.requests[0].url.params["limit"] == "25"
        form = result["forms"][0]
        assert form["formElementId"] == "18259716-3e5a-646a-5f41-5dc4b9405aa0"
        assert form["fields"]["email"]["type"] == "Email"
        assert result["count"] == 1

    def test_upstream_error(self, context: ToolContext, fake_api) -> None:
        """Test that an upstream failure becomes an empty list with an error."""
        fake_api.respond_text("Forbidden", status=403)

        result = ListFormsTool(context).run({}).to_dict()

        assert result == {"forms": [], "count": 0, "error": "Webflow API error 403: Forbidden"}


class TestListFormSubmissionsTool:
    """Tests for list_form_submissions."""

    def test_lists_submissions(self, context: ToolContext, fake_api) -> None:
        """Test listing submissions with their payloads."""
        fake_api.respond({
            "formSubmissions": [{
                "id": "sub1",
                "displayName": "Contact",
                "dateSubmitted": "2024-03-01T12:00:00Z",
                "formResponse": {"Name": "Ada Lovelace", "Email": "ada@example.com"},
            }],
            "pagination": {"limit": 100, "offset": 0, "total": 1},
        })

        result = ListFormSubmissionsTool(context).run({"siteId": "site-1"}).to_dict()

        assert fake_api.path() == "/sites/site-1/form_submissions"
        assert result["count"] == 1
        assert result["formSubmissions"][0]["formResponse"] == {
            "Name": "Ada Lovelace",
            "Email": "ada@example.com",
        }

    def test_element_id_filter(self, context: ToolContext, fake_api) -> None:
        """Test that elementId is sent as a query parameter."""
        fake_api.respond({"formSubmissions": []})

        ListFormSubmissionsTool(context).run({"elementId": "el-1", "offset": 50})

        params = fake_api.requests[0].url.params
        assert params["elementId"] == "el-1"
        assert params["offset"] == "50"
        assert "limit" not in params

    def test_no_element_id_param_when_absent(self, context: ToolContext, fake_api) -> None:
        """Test that elementId is left out when not given."""
        fake_api.respond({"formSubmissions": []})

        result = ListFormSubmissionsTool(context).run({}).to_dict()

        assert "elementId" not in fake_api.requests[0].url.params
        assert result == {"formSubmissions": [], "count": 0}

    def test_limit_over_maximum_invalid(self, context: ToolContext, fake_api) -> None:
        """Test that a limit above the maximum is rejected."""
        errors = ListFormSubmissionsTool(context).validate_args({"limit": 500})
        assert errors
        assert fake_api.call_count == 0

    def test_invalid_json_body(self, context: ToolContext, fake_api) -> None:
        """Test that an unexpected response body becomes an error result."""
        fake_api.respond_text("not json", status=200)

        result = ListFormSubmissionsTool(context).run({}).to_dict()

        assert result["formSubmissions"] == []
        assert result["count"] == 0
        assert result["error"]
