"""
Custom code tools.

- list_custom_code: List the script blocks applied to a site and its pages
- add_custom_code: Register an inline script and apply it to a site or page
  in one step (approval required)

add_custom_code protocol:
    1. Pre-conditions, before any request: a page target needs a pageId;
       the source must fit the inline script limit
    2. POST /sites/{site_id}/registered_scripts/inline -> script ID
    3. PUT /pages/{page_id}/custom_code or PUT /sites/{site_id}/custom_code

Step 3 is not retried and step 2 is not rolled back when step 3 fails: the
script then stays registered but unapplied, and the failure result still
reports its ID.
"""

from typing import Any

from pydantic import Field

from webflow_tools.console import get_logger
from webflow_tools.errors import PreconditionError, describe_error
from webflow_tools.normalize import parse_custom_code_block, parse_list, parse_pagination
from webflow_tools.schema import (
    AddCustomCodeResult,
    ListCustomCodeResult,
    ScriptLocation,
    ScriptTarget,
)
from webflow_tools.tools.base import PagedInput, SiteScopedInput, Tool
from webflow_tools.tools.pages import EXAMPLE_PAGE_ID
from webflow_tools.tools.sites import EXAMPLE_SITE_ID

logger = get_logger(__name__)

MAX_INLINE_SCRIPT_LENGTH = 2000


class AddCustomCodeInput(SiteScopedInput):
    """
    Arguments of add_custom_code.

    sourceCode length and the pageId/target pairing are checked by the tool
    itself so they surface as failure results rather than argument errors.
    """

    site_id: str | None = Field(
        default=None, description="The ID of the site to register the script on."
    )
    target: ScriptTarget = Field(
        ...,
        description=(
            'Where to apply the script. Use "site" for site-wide scripts or "page" '
            "for a specific page."
        ),
    )
    page_id: str | None = Field(
        default=None,
        description=(
            'The ID of the page to apply the script to. Required when target is "page". '
            "Use list_pages to find page IDs. Do NOT guess or fabricate page IDs."
        ),
    )
    source_code: str = Field(
        ...,
        description=(
            f"The JavaScript source code to add. Maximum {MAX_INLINE_SCRIPT_LENGTH} characters."
        ),
    )
    display_name: str = Field(
        ...,
        description=(
            "A user-facing name for the script. Must be between 1 and 50 alphanumeric "
            "characters (e.g. 'Google Analytics', 'Chat Widget')."
        ),
    )
    version: str = Field(
        ...,
        description='A Semantic Version string for the script (e.g. "1.0.0", "0.0.1").',
    )
    location: ScriptLocation = Field(
        ...,
        description=(
            'Where to place the script on the page. Use "header" for scripts that need to '
            'load early (e.g. analytics) or "footer" for scripts that can load after content.'
        ),
    )


class ListCustomCodeTool(Tool):
    """List custom code blocks of a site and its pages."""

    summary = (
        "List all custom code scripts applied to a Webflow site and its pages. "
        "Use this tool to audit what scripts are currently active, check script versions, "
        "or see where scripts are applied (site-level vs page-level). "
        "Supports pagination via limit and offset parameters."
    )
    input_model = PagedInput
    output_model = ListCustomCodeResult
    site_scoped = True
    input_examples = [
        {"siteId": EXAMPLE_SITE_ID},
        {"siteId": EXAMPLE_SITE_ID, "limit": 10},
    ]
    default_error = "Failed to list custom code"

    @property
    def name(self) -> str:
        return "list_custom_code"

    def perform(self, params: PagedInput) -> ListCustomCodeResult:
        site_id = self.context.settings.resolve_site_id(params.site_id)

        response = self.context.client.call(
            f"/sites/{site_id}/custom_code/blocks",
            params={"limit": params.limit, "offset": params.offset},
        )

        blocks = [parse_custom_code_block(raw) for raw in parse_list(response, "blocks")]
        return ListCustomCodeResult.of(
            blocks,
            pagination=parse_pagination(response.get("pagination")),
        )


class AddCustomCodeTool(Tool):
    """Register an inline script and apply it to a site or page."""

    summary = (
        "Register and apply an inline script to a Webflow site or a specific page. "
        "Use this tool when the user wants to add tracking scripts (e.g. Google Analytics, "
        "Meta Pixel), custom JavaScript, chat widgets, or any inline script. "
        "This tool handles both registering the script and applying it in a single step. "
        f"Inline scripts are limited to {MAX_INLINE_SCRIPT_LENGTH} characters. "
        "The site must be published after adding custom code for changes to take effect."
    )
    input_model = AddCustomCodeInput
    output_model = AddCustomCodeResult
    requires_approval = True
    site_scoped = True
    input_examples = [
        {
            "siteId": EXAMPLE_SITE_ID,
            "target": "site",
            "sourceCode": "console.log('Hello from Webflow!');",
            "displayName": "Hello Script",
            "version": "1.0.0",
            "location": "footer",
        },
        {
            "siteId": EXAMPLE_SITE_ID,
            "target": "page",
            "pageId": EXAMPLE_PAGE_ID,
            "sourceCode": (
                "!function(f,b,e,v,n,t,s){/* Meta Pixel */}(window,document,'script',"
                "'https://connect.facebook.net/en_US/fbevents.js');"
            ),
            "displayName": "Meta Pixel",
            "version": "1.0.0",
            "location": "header",
        },
    ]
    default_error = "Failed to add custom code"

    @property
    def name(self) -> str:
        return "add_custom_code"

    def check_preconditions(self, params: AddCustomCodeInput) -> None:
        """
        Reject calls that cannot succeed, before any request is made.

        Raises:
            PreconditionError: On a page target without pageId, or an
                oversized source
        """
        if params.target == "page" and not params.page_id:
            raise PreconditionError(
                check="page_id_required",
                message=(
                    'A pageId is required when target is "page". '
                    "Use list_pages to find page IDs."
                ),
            )

        length = len(params.source_code)
        if length > MAX_INLINE_SCRIPT_LENGTH:
            raise PreconditionError(
                check="source_code_length",
                message=(
                    f"Script exceeds the {MAX_INLINE_SCRIPT_LENGTH} character limit "
                    f"({length} characters). Consider hosting the script externally."
                ),
                context={"length": length, "max_length": MAX_INLINE_SCRIPT_LENGTH},
            )

    def register_script(self, site_id: str, params: AddCustomCodeInput) -> str:
        """Register the inline script and return its ID ("" if none came back)."""
        registered = self.context.client.call(
            f"/sites/{site_id}/registered_scripts/inline",
            method="POST",
            body={
                "sourceCode": params.source_code,
                "version": params.version,
                "displayName": params.display_name,
            },
        )
        script_id = registered.get("id")
        return "" if script_id is None else str(script_id)

    def apply_script(self, site_id: str, script_id: str, params: AddCustomCodeInput) -> str:
        """Attach a registered script; return the applied-to descriptor."""
        payload: dict[str, Any] = {
            "scripts": [
                {"id": script_id, "location": params.location, "version": params.version}
            ],
        }

        if params.target == "page":
            self.context.client.call(f"/pages/{params.page_id}/custom_code", method="PUT", body=payload)
            return f"page:{params.page_id}"

        self.context.client.call(f"/sites/{site_id}/custom_code", method="PUT", body=payload)
        return f"site:{site_id}"

    def perform(self, params: AddCustomCodeInput) -> AddCustomCodeResult:
        self.check_preconditions(params)
        site_id = self.context.settings.resolve_site_id(params.site_id)

        script_id = self.register_script(site_id, params)
        if not script_id:
            return AddCustomCodeResult(
                success=False,
                script_id="",
                error="Failed to register script: no script ID returned",
            )

        try:
            applied_to = self.apply_script(site_id, script_id, params)
        except Exception as exc:
            logger.warning(
                "Script %s was registered on site %s but could not be applied: %s",
                script_id,
                site_id,
                exc,
            )
            return AddCustomCodeResult(
                success=False,
                script_id=script_id,
                error=describe_error(exc, self.default_error),
            )

        return AddCustomCodeResult(success=True, script_id=script_id, applied_to=applied_to)
