"""
Tool presets.

A preset is a named group of tools handed to an orchestrator as one unit:

    webflow        every Webflow tool
    lead_response  the read-only tools a lead response agent needs to find
                   new form submissions (sites, forms, submissions)

A complete lead response agent also sends e-mail and creates contacts;
those tools come from a separate mail integration and are not part of this
package. LEAD_RESPONSE_INSTRUCTIONS only covers the Webflow side of that
workflow.
"""

from webflow_tools.tools.base import Tool, ToolContext
from webflow_tools.tools.custom_code import AddCustomCodeTool, ListCustomCodeTool
from webflow_tools.tools.forms import ListFormsTool, ListFormSubmissionsTool
from webflow_tools.tools.pages import ListPagesTool, UpdatePageTool
from webflow_tools.tools.registry import ToolRegistry
from webflow_tools.tools.sites import ListSitesTool, PublishSiteTool

DEFAULT_PRESET = "webflow"

PRESETS: dict[str, tuple[type[Tool], ...]] = {
    "webflow": (
        ListSitesTool,
        PublishSiteTool,
        ListPagesTool,
        UpdatePageTool,
        ListFormsTool,
        ListFormSubmissionsTool,
        ListCustomCodeTool,
        AddCustomCodeTool,
    ),
    "lead_response": (
        ListSitesTool,
        ListFormsTool,
        ListFormSubmissionsTool,
    ),
}

LEAD_RESPONSE_INSTRUCTIONS = """\
You are a lead response agent that automates responding to new form submissions from Webflow sites.

Your workflow:
1. Use list_sites to find available Webflow sites, then list_forms to discover forms on those sites.
2. Use list_form_submissions to retrieve recent form submissions and extract contact information \
(name, email, etc.) from the formResponse data.
3. Hand the extracted contact details to the messaging tools you were given to follow up with the lead.

The user prompt will specify which site to check and which form to pull submissions from."""


def list_presets() -> list[str]:
    return sorted(PRESETS)


def build_registry(context: ToolContext, preset: str = DEFAULT_PRESET) -> ToolRegistry:
    """
    Instantiate the tools of ``preset`` against ``context``.

    Returns:
        A frozen ToolRegistry

    Raises:
        KeyError: If the preset is unknown
    """
    if preset not in PRESETS:
        msg = f"Unknown preset: {preset} (available: {', '.join(list_presets())})"
        raise KeyError(msg)

    return ToolRegistry([tool_cls(context) for tool_cls in PRESETS[preset]]).freeze()
