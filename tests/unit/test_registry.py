"""
Unit tests for the tool registry and presets.

Tests cover:
- Registration, lookup and freezing
- Preset contents
- build_registry
"""

import pytest

from webflow_tools.errors import ToolNotFoundError
from webflow_tools.tools import (
    DEFAULT_PRESET,
    LEAD_RESPONSE_INSTRUCTIONS,
    ListFormsTool,
    ListSitesTool,
    PublishSiteTool,
    RegistryFrozenError,
    ToolContext,
    ToolRegistry,
    build_registry,
    list_presets,
)


class TestToolRegistry:
    """Tests for ToolRegistry."""

    def test_register_and_get(self, context: ToolContext) -> None:
        """Test registering and retrieving a tool."""
        registry = ToolRegistry()
        tool = ListSitesTool(context)

        registry.register(tool)

        assert registry.get("list_sites") is tool
        assert "list_sites" in registry
        assert registry.has("list_sites")
        assert len(registry) == 1

    def test_get_unknown_raises(self) -> None:
        """Test that an unknown name raises ToolNotFoundError."""
        with pytest.raises(ToolNotFoundError) as exc_info:
            ToolRegistry().get("delete_site")
        assert exc_info.value.context["tool"] == "delete_site"

    def test_get_optional(self) -> None:
        """Test that get_optional returns None for unknown names."""
        assert ToolRegistry().get_optional("delete_site") is None

    def test_register_none_rejected(self) -> None:
        """Test that None cannot be registered."""
        with pytest.raises(ValueError):
            ToolRegistry().register(None)  # type: ignore[arg-type]

    def test_same_name_replaces(self, context: ToolContext) -> None:
        """Test that a tool with the same name replaces the previous one."""
        first = ListSitesTool(context)
        second = ListSitesTool(context)
        registry = ToolRegistry([first, second])

        assert len(registry) == 1
        assert registry.get("list_sites") is second

    def test_frozen_rejects_registration(self, context: ToolContext) -> None:
        """Test that a frozen registry rejects registration."""
        registry = ToolRegistry([ListSitesTool(context)]).freeze()

        assert registry.frozen
        with pytest.raises(RegistryFrozenError):
            registry.register(ListFormsTool(context))

    def test_list_tools_sorted(self, context: ToolContext) -> None:
        """Test that tool names are listed in sorted order."""
        registry = ToolRegistry([PublishSiteTool(context), ListSitesTool(context)])
        assert registry.list_tools() == ["list_sites", "publish_site"]

    def test_approval_required(self, context: ToolContext) -> None:
        """Test listing the tools that need approval."""
        registry = ToolRegistry([PublishSiteTool(context), ListSitesTool(context)])
        assert registry.approval_required() == ["publish_site"]

    def test_definitions(self, context: ToolContext) -> None:
        """Test that definitions are sorted by name."""
        registry = ToolRegistry([PublishSiteTool(context), ListSitesTool(context)])
        names = [d["name"] for d in registry.definitions()]
        assert names == ["list_sites", "publish_site"]


class TestPresets:
    """Tests for presets and build_registry."""

    def test_available_presets(self) -> None:
        """Test the available preset names."""
        assert list_presets() == ["lead_response", "webflow"]
        assert DEFAULT_PRESET == "webflow"

    def test_webflow_preset(self, context: ToolContext) -> None:
        """Test that the webflow preset holds all eight tools."""
        registry = build_registry(context)

        assert registry.frozen
        assert registry.list_tools() == [
            "add_custom_code",
            "list_custom_code",
            "list_form_submissions",
            "list_forms",
            "list_pages",
            "list_sites",
            "publish_site",
            "update_page",
        ]
        assert registry.approval_required() == ["add_custom_code", "publish_site", "update_page"]

    def test_lead_response_preset_is_read_only(self, context: ToolContext) -> None:
        """Test that the lead_response preset has no gated tools."""
        registry = build_registry(context, "lead_response")

        assert registry.list_tools() == ["list_form_submissions", "list_forms", "list_sites"]
        assert registry.approval_required() == []

    def test_unknown_preset(self, context: ToolContext) -> None:
        """Test that an unknown preset raises KeyError."""
        with pytest.raises(KeyError):
            build_registry(context, "everything")

    def test_tools_share_context(self, context: ToolContext) -> None:
        """Test that every tool of a registry shares the context."""
        registry = build_registry(context)
        assert all(tool.context is context for tool in registry)

    def test_lead_response_instructions_name_tools(self) -> None:
        """Test that the instructions mention the preset's tools."""
        for name in ("list_sites", "list_forms", "list_form_submissions"):
            assert name in LEAD_RESPONSE_INSTRUCTIONS
