"""
Site tools.

- list_sites: List every site the token can access
- publish_site: Publish a site to its Webflow subdomain and/or custom
  domains (approval required)
"""

from typing import Any

from pydantic import Field

from webflow_tools.normalize import parse_custom_domains, parse_list, parse_site
from webflow_tools.schema import ListSitesResult, PublishSiteResult
from webflow_tools.tools.base import NoInput, SiteScopedInput, Tool

EXAMPLE_SITE_ID = "580e63e98c9a982ac9b8b741"


class PublishSiteInput(SiteScopedInput):
    """Arguments of publish_site."""

    site_id: str | None = Field(default=None, description="The ID of the site to publish.")
    custom_domains: list[str] | None = Field(
        default=None,
        description=(
            "Array of custom domain IDs to publish to. Only provide this if you have "
            "retrieved actual domain IDs from the list_sites tool. Do NOT guess or "
            "fabricate domain IDs. Omit this field entirely if the site has no custom domains."
        ),
    )
    publish_to_webflow_subdomain: bool | None = Field(
        default=None,
        description=(
            "Whether to publish to the default Webflow subdomain (yoursite.webflow.io). "
            "Set to true if no custom domains are being used."
        ),
    )


class ListSitesTool(Tool):
    """List all sites the configured token can access."""

    summary = (
        "List all Webflow sites that the user currently has access to. "
        "Use this tool to discover available sites, find site IDs, check custom domains, "
        "or see when a site was last published."
    )
    input_model = NoInput
    output_model = ListSitesResult
    input_examples = [{}]
    default_error = "Failed to list sites"

    @property
    def name(self) -> str:
        return "list_sites"

    def perform(self, params: NoInput) -> ListSitesResult:
        response = self.context.client.call("/sites")
        sites = [parse_site(raw) for raw in parse_list(response, "sites")]
        return ListSitesResult.of(sites)


class PublishSiteTool(Tool):
    """
    Publish a site.

    The request body always carries publishToWebflowSubdomain (false when
    omitted) and carries customDomains only when the caller passed a
    non-empty list.
    """

    summary = (
        "Publish a Webflow site to one or more domains. "
        "Use this tool when the user wants to deploy or publish their site. "
        "You must set publishToWebflowSubdomain to true, pass specific custom domain IDs "
        "from list_sites, or both. "
        "Do NOT pass customDomains unless you have retrieved actual domain IDs from "
        "list_sites; not all sites have custom domains. "
        "Rate limited to 1 publish per minute."
    )
    input_model = PublishSiteInput
    output_model = PublishSiteResult
    requires_approval = True
    site_scoped = True
    input_examples = [
        {"siteId": EXAMPLE_SITE_ID, "publishToWebflowSubdomain": True},
        {"siteId": EXAMPLE_SITE_ID, "customDomains": ["660c6449dd97ebc7346ac629"]},
    ]
    default_error = "Failed to publish site"

    @property
    def name(self) -> str:
        return "publish_site"

    def perform(self, params: PublishSiteInput) -> PublishSiteResult:
        site_id = self.context.settings.resolve_site_id(params.site_id)

        body: dict[str, Any] = {
            "publishToWebflowSubdomain": bool(params.publish_to_webflow_subdomain),
        }
        if params.custom_domains:
            body["customDomains"] = list(params.custom_domains)

        response = self.context.client.call(f"/sites/{site_id}/publish", method="POST", body=body)

        return PublishSiteResult(
            success=True,
            published_domains=parse_custom_domains(response.get("customDomains")),
        )
