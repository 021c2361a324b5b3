"""
Tools module for webflow-tools.

Each tool wraps one Webflow Data API operation (or, for add_custom_code,
a two-request workflow) behind a typed contract an orchestrator can
discover and call.

Tools:
    - list_sites, publish_site
    - list_pages, update_page
    - list_forms, list_form_submissions
    - list_custom_code, add_custom_code

publish_site, update_page and add_custom_code require approval.

Architecture:
    - Tool: Abstract base class defining the contract
    - ToolContext: Settings and client shared by the tools of a registry
    - ToolRegistry: Name -> tool lookup, frozen after startup
    - build_registry: Instantiate a preset's tools into a registry
"""

from webflow_tools.tools.base import Tool, ToolContext, ToolInput
from webflow_tools.tools.custom_code import AddCustomCodeTool, ListCustomCodeTool
from webflow_tools.tools.forms import ListFormsTool, ListFormSubmissionsTool
from webflow_tools.tools.pages import ListPagesTool, UpdatePageTool
from webflow_tools.tools.presets import (
    DEFAULT_PRESET,
    LEAD_RESPONSE_INSTRUCTIONS,
    PRESETS,
    build_registry,
    list_presets,
)
from webflow_tools.tools.registry import RegistryFrozenError, ToolRegistry
from webflow_tools.tools.sites import ListSitesTool, PublishSiteTool

__all__ = [
    "Tool",
    "ToolContext",
    "ToolInput",
    "ToolRegistry",
    "RegistryFrozenError",
    "build_registry",
    "list_presets",
    "DEFAULT_PRESET",
    "PRESETS",
    "LEAD_RESPONSE_INSTRUCTIONS",
    "ListSitesTool",
    "PublishSiteTool",
    "ListPagesTool",
    "UpdatePageTool",
    "ListFormsTool",
    "ListFormSubmissionsTool",
    "ListCustomCodeTool",
    "AddCustomCodeTool",
]
