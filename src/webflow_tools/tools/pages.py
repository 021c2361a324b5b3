"""
Page tools.

- list_pages: List the pages of a site, with pagination
- update_page: Partially update a page's title, slug, SEO and Open Graph
  metadata (approval required)
"""

from typing import Any

from pydantic import Field

from webflow_tools.normalize import parse_list, parse_page, parse_pagination
from webflow_tools.schema import ListPagesResult, UpdatePageResult
from webflow_tools.tools.base import PagedInput, Tool, ToolInput
from webflow_tools.tools.sites import EXAMPLE_SITE_ID

EXAMPLE_PAGE_ID = "63c720f9347c2139b248e552"


class TitleDescriptionInput(ToolInput):
    """SEO or Open Graph fields to change."""

    title: str | None = Field(default=None, description="Title to set.")
    description: str | None = Field(default=None, description="Description to set.")


class UpdatePageInput(ToolInput):
    """
    Arguments of update_page.

    Only fields the caller actually set are sent upstream.
    """

    page_id: str = Field(
        ...,
        min_length=1,
        description=(
            "The ID of the page to update. Use list_pages to find available page IDs. "
            "Do NOT guess or fabricate page IDs."
        ),
    )
    title: str | None = Field(default=None, description="New title for the page.")
    slug: str | None = Field(default=None, description="New URL slug for the page.")
    seo: TitleDescriptionInput | None = Field(
        default=None, description="SEO metadata to update (title, description)."
    )
    open_graph: TitleDescriptionInput | None = Field(
        default=None,
        description="Open Graph metadata for social sharing to update (title, description).",
    )

    def update_body(self) -> dict[str, Any]:
        """The PUT body: set fields only, never nulls, never the page ID."""
        return self.model_dump(
            by_alias=True,
            exclude_unset=True,
            exclude_none=True,
            exclude={"page_id"},
        )


class ListPagesTool(Tool):
    """List the pages of a site."""

    summary = (
        "List all pages for a Webflow site. "
        "Use this tool to browse site pages, find page IDs for custom code injection, "
        "or check page SEO metadata. "
        "Supports pagination via limit and offset parameters."
    )
    input_model = PagedInput
    output_model = ListPagesResult
    site_scoped = True
    input_examples = [
        {"siteId": EXAMPLE_SITE_ID},
        {"siteId": EXAMPLE_SITE_ID, "limit": 10, "offset": 0},
    ]
    default_error = "Failed to list pages"

    @property
    def name(self) -> str:
        return "list_pages"

    def perform(self, params: PagedInput) -> ListPagesResult:
        site_id = self.context.settings.resolve_site_id(params.site_id)

        response = self.context.client.call(
            f"/sites/{site_id}/pages",
            params={"limit": params.limit, "offset": params.offset},
        )

        pages = [parse_page(raw) for raw in parse_list(response, "pages")]
        return ListPagesResult.of(pages, pagination=parse_pagination(response.get("pagination")))


class UpdatePageTool(Tool):
    """Partially update a page's settings."""

    summary = (
        "Update the settings of a Webflow page, including its title, slug, SEO metadata, "
        "and Open Graph metadata. "
        "Use this tool when the user wants to change a page's title, URL slug, "
        "SEO title/description, or social sharing metadata. "
        "Only the fields you provide will be updated; omitted fields remain unchanged. "
        "You must retrieve the page ID from list_pages first. Do NOT guess or fabricate page IDs."
    )
    input_model = UpdatePageInput
    output_model = UpdatePageResult
    requires_approval = True
    input_examples = [
        {"pageId": EXAMPLE_PAGE_ID, "title": "About Us", "slug": "about-us"},
        {
            "pageId": EXAMPLE_PAGE_ID,
            "seo": {"title": "About Our Company", "description": "Learn more about us"},
            "openGraph": {"title": "About Us", "description": "Our story"},
        },
    ]
    default_error = "Failed to update page"

    @property
    def name(self) -> str:
        return "update_page"

    def perform(self, params: UpdatePageInput) -> UpdatePageResult:
        response = self.context.client.call(
            f"/pages/{params.page_id}",
            method="PUT",
            body=params.update_body(),
        )
        return UpdatePageResult(success=True, page=parse_page(response))
