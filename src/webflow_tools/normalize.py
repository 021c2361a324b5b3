"""
Normalization of raw Webflow API objects.

The upstream is inconsistent: some timestamps come back snake_case, some
camelCase; nested objects are optional; list endpoints may or may not send
a pagination envelope. Every function here is pure and total, turning a
loosely-typed dict into the models from webflow_tools.schema.

Absence is preserved: a missing nested object yields None, never an empty
model.
"""

import math
from typing import Any

from webflow_tools.schema import (
    CustomCodeBlock,
    CustomDomain,
    Form,
    FormField,
    FormSubmission,
    Page,
    Pagination,
    Script,
    Site,
    TitleDescription,
)

DESIGNER_URL_TEMPLATE = "https://{short_name}.design.webflow.com"
SETTINGS_URL_TEMPLATE = "https://webflow.com/dashboard/sites/{short_name}/general"


# =============================================================================
# Field helpers
# =============================================================================


def get_string_field(obj: dict[str, Any], snake_case: str, camel_case: str) -> str | None:
    """
    Read a field the upstream may spell two ways.

    The snake_case key wins when both carry a value. Empty values count as
    missing.

    Args:
        obj: Raw upstream object
        snake_case: e.g. "last_published"
        camel_case: e.g. "lastPublished"

    Returns:
        The value as a string, or None
    """
    for key in (snake_case, camel_case):
        value = obj.get(key)
        if value:
            return str(value)
    return None


def optional_string(value: Any) -> str | None:
    """Stringify a truthy value, None otherwise."""
    return str(value) if value else None


def required_string(value: Any) -> str:
    """Stringify a value, using "" for None."""
    return "" if value is None else str(value)


def optional_bool(value: Any) -> bool | None:
    """Keep real booleans only."""
    return value if isinstance(value, bool) else None


def _as_dict(value: Any) -> dict[str, Any] | None:
    return value if isinstance(value, dict) else None


def _as_list(value: Any) -> list[dict[str, Any]]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def _to_number(value: Any) -> int | float:
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    if not math.isfinite(number):
        return 0
    return int(number) if number.is_integer() else number


def parse_title_description(raw: Any) -> TitleDescription | None:
    """
    Extract SEO or Open Graph metadata.

    Returns None when the source object is absent. A present source always
    yields an object, even if both members end up None.
    """
    source = _as_dict(raw)
    if source is None:
        return None
    return TitleDescription(
        title=optional_string(source.get("title")),
        description=optional_string(source.get("description")),
    )


def parse_form_fields(raw: Any) -> dict[str, FormField] | None:
    """Map raw field descriptors by key; None when there are no fields."""
    source = _as_dict(raw)
    if not source:
        return None
    fields: dict[str, FormField] = {}
    for key, value in source.items():
        descriptor = _as_dict(value) or {}
        fields[str(key)] = FormField(
            display_name=optional_string(descriptor.get("displayName")),
            type=optional_string(descriptor.get("type")),
        )
    return fields or None


def parse_pagination(raw: Any) -> Pagination | None:
    """Coerce a pagination envelope; missing numbers default to 0."""
    source = _as_dict(raw)
    if source is None:
        return None
    return Pagination(
        limit=_to_number(source.get("limit")),
        offset=_to_number(source.get("offset")),
        total=_to_number(source.get("total")),
    )


# =============================================================================
# Entities
# =============================================================================


def parse_custom_domains(raw: Any) -> list[CustomDomain] | None:
    """Parse a list of domains; None when the upstream sent no list."""
    if not isinstance(raw, list):
        return None
    return [
        CustomDomain(id=required_string(d.get("id")), url=required_string(d.get("url")))
        for d in _as_list(raw)
    ]


def parse_site(raw: dict[str, Any]) -> Site:
    short_name = required_string(raw.get("shortName"))
    return Site(
        id=required_string(raw.get("id")),
        display_name=required_string(raw.get("displayName")),
        short_name=short_name,
        last_published=get_string_field(raw, "last_published", "lastPublished"),
        last_updated=get_string_field(raw, "last_updated", "lastUpdated"),
        preview_url=optional_string(raw.get("previewUrl")),
        time_zone=optional_string(raw.get("timeZone")),
        designer_url=DESIGNER_URL_TEMPLATE.format(short_name=short_name),
        settings_url=SETTINGS_URL_TEMPLATE.format(short_name=short_name),
        custom_domains=parse_custom_domains(raw.get("customDomains")),
    )


def parse_page(raw: dict[str, Any]) -> Page:
    return Page(
        id=required_string(raw.get("id")),
        title=required_string(raw.get("title")),
        slug=required_string(raw.get("slug")),
        archived=optional_bool(raw.get("archived")),
        draft=optional_bool(raw.get("draft")),
        created_on=get_string_field(raw, "created_on", "createdOn"),
        last_updated=get_string_field(raw, "last_updated", "lastUpdated"),
        published_path=optional_string(raw.get("publishedPath")),
        seo=parse_title_description(raw.get("seo")),
        open_graph=parse_title_description(raw.get("openGraph")),
    )


def parse_form(raw: dict[str, Any]) -> Form:
    return Form(
        id=required_string(raw.get("id")),
        display_name=required_string(raw.get("displayName")),
        page_id=optional_string(raw.get("pageId")),
        page_name=optional_string(raw.get("pageName")),
        form_element_id=get_string_field(raw, "form_element_id", "formElementId"),
        fields=parse_form_fields(raw.get("fields")),
        created_on=get_string_field(raw, "created_on", "createdOn"),
        last_updated=get_string_field(raw, "last_updated", "lastUpdated"),
    )


def parse_form_submission(raw: dict[str, Any]) -> FormSubmission:
    return FormSubmission(
        id=required_string(raw.get("id")),
        display_name=optional_string(raw.get("displayName")),
        date_submitted=get_string_field(raw, "date_submitted", "dateSubmitted"),
        form_response=_as_dict(raw.get("formResponse")) or {},
    )


def parse_script(raw: dict[str, Any]) -> Script:
    return Script(
        id=required_string(raw.get("id")),
        location=required_string(raw.get("location")),
        version=required_string(raw.get("version")),
    )


def parse_custom_code_block(raw: dict[str, Any]) -> CustomCodeBlock:
    return CustomCodeBlock(
        site_id=required_string(raw.get("siteId")),
        page_id=optional_string(raw.get("pageId")),
        type=optional_string(raw.get("type")),
        scripts=[parse_script(s) for s in _as_list(raw.get("scripts"))],
        created_on=get_string_field(raw, "created_on", "createdOn"),
        last_updated=get_string_field(raw, "last_updated", "lastUpdated"),
    )


def parse_list(response: dict[str, Any], key: str) -> list[dict[str, Any]]:
    """Return the list under ``key`` in a list response, [] when missing."""
    return _as_list(response.get(key))
