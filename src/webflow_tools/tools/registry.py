"""
Tool registry for webflow-tools.

The registry maps tool names to tool instances. It is filled once at
startup (usually by webflow_tools.tools.presets.build_registry) and then
frozen, after which it only serves lookups.

Usage:
    registry = ToolRegistry()
    registry.register(ListSitesTool(context))
    registry.freeze()

    tool = registry.get("list_sites")
"""

from typing import Any, Iterator

from webflow_tools.errors import ToolNotFoundError
from webflow_tools.tools.base import Tool


class RegistryFrozenError(RuntimeError):
    """Raised when registering into a frozen registry."""


class ToolRegistry:
    """
    Registry for looking up tools by name.

    Attributes:
        _tools: Internal mapping of tool names to tool instances
        _frozen: Whether registration is closed
    """

    def __init__(self, tools: list[Tool] | None = None) -> None:
        """Initialize the registry, optionally with initial tools."""
        self._tools: dict[str, Tool] = {}
        self._frozen = False
        for tool in tools or []:
            self.register(tool)

    def register(self, tool: Tool) -> None:
        """
        Register a tool in the registry.

        A tool with the same name replaces the previous one.

        Raises:
            ValueError: If tool is None or has an empty name
            RegistryFrozenError: If the registry has been frozen
        """
        if self._frozen:
            msg = "Cannot register tools into a frozen registry"
            raise RegistryFrozenError(msg)

        if tool is None:
            msg = "Cannot register None as a tool"
            raise ValueError(msg)

        name = tool.name
        if not name:
            msg = "Tool must have a non-empty name"
            raise ValueError(msg)

        self._tools[name] = tool

    def freeze(self) -> "ToolRegistry":
        """Close the registry for registration and return it."""
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def get(self, name: str) -> Tool:
        """
        Look up a tool by name.

        Raises:
            ToolNotFoundError: If no tool with that name is registered
        """
        tool = self._tools.get(name)
        if tool is None:
            raise ToolNotFoundError(tool=name)
        return tool

    def get_optional(self, name: str) -> Tool | None:
        """Look up a tool by name, returning None if not found."""
        return self._tools.get(name)

    def has(self, name: str) -> bool:
        return name in self._tools

    def list_tools(self) -> list[str]:
        """List all registered tool names in sorted order."""
        return sorted(self._tools.keys())

    def approval_required(self) -> list[str]:
        """Names of registered tools that need approval before execution."""
        return sorted(name for name, tool in self._tools.items() if tool.requires_approval)

    def definitions(self) -> list[dict[str, Any]]:
        """Discovery definitions of every tool, sorted by name."""
        return [self._tools[name].definition() for name in self.list_tools()]

    def __len__(self) -> int:
        return len(self._tools)

    def __iter__(self) -> Iterator[Tool]:
        return iter(self._tools.values())

    def __contains__(self, name: str) -> bool:
        return name in self._tools

    def __repr__(self) -> str:
        tools = ", ".join(self.list_tools())
        return f"<ToolRegistry: [{tools}]>"
