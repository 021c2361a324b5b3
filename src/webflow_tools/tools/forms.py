"""
Form tools.

- list_forms: List the forms of a site with their field definitions
- list_form_submissions: List submitted form data, optionally for one form
  element across every page it appears on
"""

from pydantic import Field

from webflow_tools.normalize import (
    parse_form,
    parse_form_submission,
    parse_list,
    parse_pagination,
)
from webflow_tools.schema import ListFormsResult, ListFormSubmissionsResult
from webflow_tools.tools.base import PagedInput, Tool
from webflow_tools.tools.sites import EXAMPLE_SITE_ID


class ListFormSubmissionsInput(PagedInput):
    """Arguments of list_form_submissions."""

    element_id: str | None = Field(
        default=None,
        description=(
            "Filter submissions to a specific form by its element ID. Get this from the "
            "list_forms tool (formElementId field). Do NOT guess or fabricate element IDs."
        ),
    )


class ListFormsTool(Tool):
    """List the forms of a site."""

    summary = (
        "List all forms for a Webflow site. "
        "Use this tool to browse available forms, find form IDs and element IDs, "
        "or inspect form field definitions. "
        "The formElementId can be used to filter submissions across component instances. "
        "Supports pagination via limit and offset parameters."
    )
    input_model = PagedInput
    output_model = ListFormsResult
    site_scoped = True
    input_examples = [
        {"siteId": EXAMPLE_SITE_ID},
        {"siteId": EXAMPLE_SITE_ID, "limit": 10},
    ]
    default_error = "Failed to list forms"

    @property
    def name(self) -> str:
        return "list_forms"

    def perform(self, params: PagedInput) -> ListFormsResult:
        site_id = self.context.settings.resolve_site_id(params.site_id)

        response = self.context.client.call(
            f"/sites/{site_id}/forms",
            params={"limit": params.limit, "offset": params.offset},
        )

        forms = [parse_form(raw) for raw in parse_list(response, "forms")]
        return ListFormsResult.of(forms, pagination=parse_pagination(response.get("pagination")))


class ListFormSubmissionsTool(Tool):
    """List form submissions of a site."""

    summary = (
        "List form submissions for a Webflow site. "
        "Use this tool to retrieve submitted form data such as leads, contact requests, "
        "or signups. "
        "Optionally filter by elementId to get submissions for a specific form across all "
        "component instances. "
        "Get the elementId from the list_forms tool (returned as formElementId). "
        "Supports pagination via limit and offset parameters."
    )
    input_model = ListFormSubmissionsInput
    output_model = ListFormSubmissionsResult
    site_scoped = True
    input_examples = [
        {"siteId": EXAMPLE_SITE_ID},
        {
            "siteId": EXAMPLE_SITE_ID,
            "elementId": "18259716-3e5a-646a-5f41-5dc4b9405aa0",
            "limit": 25,
        },
    ]
    default_error = "Failed to list form submissions"

    @property
    def name(self) -> str:
        return "list_form_submissions"

    def perform(self, params: ListFormSubmissionsInput) -> ListFormSubmissionsResult:
        site_id = self.context.settings.resolve_site_id(params.site_id)

        response = self.context.client.call(
            f"/sites/{site_id}/form_submissions",
            params={
                "elementId": params.element_id,
                "limit": params.limit,
                "offset": params.offset,
            },
        )

        submissions = [
            parse_form_submission(raw) for raw in parse_list(response, "formSubmissions")
        ]
        return ListFormSubmissionsResult.of(
            submissions,
            pagination=parse_pagination(response.get("pagination")),
        )
