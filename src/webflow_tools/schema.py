"""
Schema definitions for webflow-tools.

This module defines the Pydantic models shared by every tool:
- Entities: Site, CustomDomain, Page, TitleDescription, Form, FormField,
  FormSubmission, CustomCodeBlock, Script, Pagination
- Results: one closed result shape per tool, each with an optional error

Design Decisions:
    - Models are immutable (frozen=True) and reject unknown fields
    - Python names are snake_case; serialized names are the upstream
      camelCase (model_dump(by_alias=True))
    - "Absent" is None and disappears on serialization, so an absent SEO
      block and an empty one ({}) stay distinguishable
    - List results always report count == len(items)
"""

from typing import Any, ClassVar, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Base for every model exchanged with the orchestrator."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_dict(self) -> dict[str, Any]:
        """Serialize with camelCase keys and without absent fields."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


# =============================================================================
# Entities
# =============================================================================


class CustomDomain(WireModel):
    """A custom domain attached to a site or published to."""

    id: str = Field(..., description="Domain ID")
    url: str = Field(..., description="Registered domain name")


class Site(WireModel):
    """
    Site metadata.

    designer_url and settings_url are derived from short_name by the
    normalizer, never taken from the caller.
    """

    id: str = Field(..., description="Unique identifier for the Site")
    display_name: str = Field(..., description="Name given to the Site")
    short_name: str = Field(..., description="Slugified version of the name")
    last_published: str | None = Field(
        default=None, description="ISO timestamp when the site was last published"
    )
    last_updated: str | None = Field(
        default=None, description="ISO timestamp when the site was last updated"
    )
    preview_url: str | None = Field(default=None, description="URL of the site preview image")
    time_zone: str | None = Field(default=None, description="Site timezone")
    designer_url: str = Field(..., description="Direct link to the Webflow Designer for this site")
    settings_url: str = Field(
        ..., description="Direct link to the site settings in the Webflow Dashboard"
    )
    custom_domains: list[CustomDomain] | None = Field(
        default=None, description="Custom domains attached to the site"
    )


class TitleDescription(WireModel):
    """Shared shape of SEO and Open Graph metadata."""

    title: str | None = Field(default=None, description="Title")
    description: str | None = Field(default=None, description="Description")


class Page(WireModel):
    """Page metadata."""

    id: str = Field(..., description="Unique identifier for the Page")
    title: str = Field(..., description="Title of the Page")
    slug: str = Field(..., description="URL slug of the Page")
    archived: bool | None = Field(default=None, description="Whether the Page is archived")
    draft: bool | None = Field(default=None, description="Whether the Page is a draft")
    created_on: str | None = Field(
        default=None, description="ISO timestamp when the page was created"
    )
    last_updated: str | None = Field(
        default=None, description="ISO timestamp when the page was last updated"
    )
    published_path: str | None = Field(
        default=None, description="Relative path of the published page URL"
    )
    seo: TitleDescription | None = Field(default=None, description="SEO metadata for the page")
    open_graph: TitleDescription | None = Field(
        default=None, description="Open Graph metadata for social sharing"
    )


class FormField(WireModel):
    """Descriptor of a single form field."""

    display_name: str | None = Field(default=None, description="Field display name")
    type: str | None = Field(default=None, description="Field type")


class Form(WireModel):
    """Form metadata."""

    id: str = Field(..., description="Unique ID for the Form")
    display_name: str = Field(..., description="Form name displayed on the site")
    page_id: str | None = Field(default=None, description="ID of the Page the form is on")
    page_name: str | None = Field(default=None, description="Name of the Page the form is on")
    form_element_id: str | None = Field(
        default=None,
        description=(
            "Unique element ID for the form, used to filter submissions "
            "across component instances"
        ),
    )
    fields: dict[str, FormField] | None = Field(
        default=None, description="Form field definitions"
    )
    created_on: str | None = Field(
        default=None, description="ISO timestamp when the form was created"
    )
    last_updated: str | None = Field(
        default=None, description="ISO timestamp when the form was last updated"
    )


class FormSubmission(WireModel):
    """A submitted form with its schema-less response payload."""

    id: str = Field(..., description="Unique ID of the form submission")
    display_name: str | None = Field(default=None, description="Form name")
    date_submitted: str | None = Field(
        default=None, description="ISO timestamp when the form was submitted"
    )
    form_response: dict[str, Any] = Field(
        default_factory=dict, description="Key/value pairs of submitted form data"
    )


class Script(WireModel):
    """A registered script as applied to a site or page."""

    id: str = Field(..., description="Script ID")
    location: str = Field(..., description="header or footer")
    version: str = Field(..., description="SemVer version string")


class CustomCodeBlock(WireModel):
    """Scripts applied at site or page level."""

    site_id: str = Field(..., description="Site ID where the code is applied")
    page_id: str | None = Field(default=None, description="Page ID if applied at page level")
    type: str | None = Field(default=None, description="Whether applied at site or page level")
    scripts: list[Script] = Field(
        default_factory=list, description="Scripts applied in this block"
    )
    created_on: str | None = Field(default=None, description="ISO timestamp when created")
    last_updated: str | None = Field(default=None, description="ISO timestamp when last updated")


class Pagination(WireModel):
    """Pagination envelope as reported by the upstream."""

    limit: int | float = Field(..., description="Limit used for pagination")
    offset: int | float = Field(..., description="Offset used for pagination")
    total: int | float = Field(..., description="Total number of records")


# =============================================================================
# Results
# =============================================================================


class ListResult(WireModel):
    """
    Base for list-returning tools.

    Subclasses name their list field in items_field. count must equal the
    length of that list.
    """

    items_field: ClassVar[str] = "items"

    count: int = Field(..., description="Number of items returned", ge=0)
    error: str | None = Field(default=None, description="Error message if failed")

    @model_validator(mode="after")
    def check_count(self) -> "ListResult":
        items = getattr(self, self.items_field)
        if self.count != len(items):
            msg = f"count is {self.count} but {len(items)} {self.items_field} were returned"
            raise ValueError(msg)
        if self.error is not None and not self.error:
            raise ValueError("error must be a non-empty message when present")
        return self

    @property
    def items(self) -> list[Any]:
        return getattr(self, self.items_field)

    @classmethod
    def of(cls, items: list[Any], **extra: Any) -> "ListResult":
        """Create a successful result; count is taken from the list."""
        return cls(**{cls.items_field: items, "count": len(items)}, **extra)

    @classmethod
    def failed(cls, error: str) -> "ListResult":
        """Create an empty result carrying an error."""
        return cls(**{cls.items_field: [], "count": 0, "error": error})


class ActionResult(WireModel):
    """
    Base for tools that report a success flag.

    success is True exactly when there is no error.
    """

    success: bool = Field(..., description="Whether the action took effect")
    error: str | None = Field(default=None, description="Error message if failed")

    @model_validator(mode="after")
    def check_error(self) -> "ActionResult":
        if self.success and self.error is not None:
            raise ValueError("a successful result cannot carry an error")
        if not self.success and not self.error:
            raise ValueError("a failed result must carry an error message")
        return self


class ListSitesResult(ListResult):
    items_field: ClassVar[str] = "sites"

    sites: list[Site] = Field(..., description="Array of site metadata")


class PublishSiteResult(ActionResult):
    published_domains: list[CustomDomain] | None = Field(
        default=None, description="Domains that were published to"
    )


class ListPagesResult(ListResult):
    items_field: ClassVar[str] = "pages"

    pages: list[Page] = Field(..., description="Array of page metadata")
    pagination: Pagination | None = Field(default=None, description="Pagination info")


class UpdatePageResult(ActionResult):
    page: Page | None = Field(default=None, description="Updated page data")


class ListFormsResult(ListResult):
    items_field: ClassVar[str] = "forms"

    forms: list[Form] = Field(..., description="Array of form metadata")
    pagination: Pagination | None = Field(default=None, description="Pagination info")


class ListFormSubmissionsResult(ListResult):
    items_field: ClassVar[str] = "form_submissions"

    form_submissions: list[FormSubmission] = Field(
        ..., description="Array of form submissions"
    )
    pagination: Pagination | None = Field(default=None, description="Pagination info")


class ListCustomCodeResult(ListResult):
    items_field: ClassVar[str] = "blocks"

    blocks: list[CustomCodeBlock] = Field(
        ..., description="Array of custom code blocks applied to the site and its pages"
    )
    pagination: Pagination | None = Field(default=None, description="Pagination info")


class AddCustomCodeResult(ActionResult):
    script_id: str = Field(default="", description="ID of the registered script")
    applied_to: str | None = Field(
        default=None, description='Where the script was applied ("site:<id>" or "page:<id>")'
    )


ScriptTarget = Literal["site", "page"]
ScriptLocation = Literal["header", "footer"]
