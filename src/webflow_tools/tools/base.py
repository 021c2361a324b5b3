"""
Base classes for the tool interface.

This module defines the core abstractions for webflow-tools:
- Tool: Abstract base class every capability implements
- ToolContext: Settings and API client handed to tools at construction
- ToolInput: Base for tool argument models

Design Principles:
    - Tools declare their contract up front: name, description, input and
      output models, approval flag and example inputs
    - Arguments are validated before the executor runs; invalid arguments
      raise InvalidArgumentsError and never reach perform()
    - execute() never raises: every failure becomes the tool's own failure
      result with a human-readable error
    - Approval is declared here but decided outside the tool (see
      webflow_tools.approval)
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from webflow_tools.client import WebflowClient
from webflow_tools.config import Settings
from webflow_tools.console import get_logger
from webflow_tools.errors import InvalidArgumentsError, describe_error
from webflow_tools.schema import ActionResult, ListResult, WireModel

logger = get_logger(__name__)

SITE_ID_FALLBACK_HINT = " Use list_sites to find available site IDs. Do NOT guess or fabricate site IDs."


class ToolInput(BaseModel):
    """Base for tool arguments; accepts camelCase or snake_case keys."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )


class NoInput(ToolInput):
    """Arguments of tools that take none."""


class SiteScopedInput(ToolInput):
    """Arguments of tools that act on one site."""

    site_id: str | None = Field(default=None, description="The ID of the site.")


class PagedInput(SiteScopedInput):
    """Site-scoped list arguments with limit/offset pagination."""

    limit: int | None = Field(
        default=None,
        ge=1,
        le=100,
        description="Maximum number of items to return. Default 100, max 100.",
    )
    offset: int | None = Field(
        default=None,
        ge=0,
        description="Offset for pagination if results exceed the limit.",
    )


@dataclass
class ToolContext:
    """
    Runtime context passed to tools at construction.

    Attributes:
        settings: Process-wide configuration (token, default site)
        client: Transport used for every API call
    """

    settings: Settings
    client: WebflowClient

    @classmethod
    def from_settings(cls, settings: Settings, **client_kwargs: Any) -> "ToolContext":
        """Create a context with a fresh client for ``settings``."""
        return cls(settings=settings, client=WebflowClient(settings, **client_kwargs))


class Tool(ABC):
    """
    Abstract base class for all webflow-tools capabilities.

    Subclasses must provide:
    - name property: the tool's unique identifier (e.g. "list_sites")
    - summary: description text shown to the orchestrator
    - input_model / output_model: pydantic models of arguments and result
    - default_error: message used when a failure has no better description
    - perform(): the actual work, free to raise

    Example:
        class PingTool(Tool):
            summary = "Check the token works."
            output_model = ListSitesResult
            default_error = "Failed to ping"

            @property
            def name(self) -> str:
                return "ping"

            def perform(self, params: NoInput) -> ListSitesResult:
                self.context.client.call("/sites")
                return ListSitesResult.of([])
    """

    summary: ClassVar[str] = ""
    input_model: ClassVar[type[ToolInput]] = NoInput
    output_model: ClassVar[type[WireModel]]
    requires_approval: ClassVar[bool] = False
    input_examples: ClassVar[list[dict[str, Any]]] = []
    default_error: ClassVar[str] = "Tool failed"
    site_scoped: ClassVar[bool] = False

    def __init__(self, context: ToolContext) -> None:
        self.context = context

    @property
    @abstractmethod
    def name(self) -> str:
        """The unique identifier for this tool."""
        ...

    @property
    def description(self) -> str:
        """
        Human-readable description used for capability selection.

        Site-scoped tools mention the configured default site, if any.
        """
        if self.site_scoped:
            return self.summary + self.site_id_hint()
        return self.summary

    def site_id_hint(self) -> str:
        """Sentence about the default site, or "" when none is configured."""
        default_site = self.context.settings.site_id
        if default_site:
            return f" If not provided, defaults to the configured site: {default_site}."
        return ""

    def site_id_field_hint(self) -> str:
        """Guidance for the siteId argument."""
        return self.site_id_hint() or SITE_ID_FALLBACK_HINT

    # =========================================================================
    # Validation
    # =========================================================================

    def validate_args(self, args: dict[str, Any]) -> list[str]:
        """
        Validate arguments against the input model.

        Returns:
            List of validation error messages (empty if valid)
        """
        try:
            self.input_model.model_validate(args)
        except ValidationError as exc:
            return _format_validation_errors(exc)
        return []

    def parse_args(self, args: dict[str, Any] | None) -> ToolInput:
        """
        Turn raw arguments into the tool's input model.

        Raises:
            InvalidArgumentsError: If the arguments do not conform
        """
        args = args or {}
        try:
            return self.input_model.model_validate(args)
        except ValidationError as exc:
            raise InvalidArgumentsError(
                tool=self.name,
                tool_args=args,
                errors=_format_validation_errors(exc),
            ) from exc

    # =========================================================================
    # Execution
    # =========================================================================

    def run(self, args: dict[str, Any] | None = None) -> WireModel:
        """
        Validate ``args`` and execute.

        Raises:
            InvalidArgumentsError: If the arguments do not conform
        """
        return self.execute(self.parse_args(args))

    def execute(self, params: ToolInput) -> WireModel:
        """
        Execute with already validated arguments.

        Never raises: errors raised by perform() are logged and converted
        into the tool's failure result.
        """
        try:
            return self.perform(params)
        except Exception as exc:
            logger.error("Error running %s: %s", self.name, exc)
            return self.failure(describe_error(exc, self.default_error))

    @abstractmethod
    def perform(self, params: Any) -> WireModel:
        """Do the work. May raise; execute() handles it."""
        ...

    def failure(self, error: str) -> WireModel:
        """Build this tool's failure result."""
        error = error or self.default_error
        if issubclass(self.output_model, ListResult):
            return self.output_model.failed(error)
        if issubclass(self.output_model, ActionResult):
            return self.output_model(success=False, error=error)
        msg = f"{type(self).__name__} has no failure shape for {self.output_model.__name__}"
        raise TypeError(msg)

    # =========================================================================
    # Discovery
    # =========================================================================

    def input_schema(self) -> dict[str, Any]:
        """JSON Schema of the arguments, with camelCase property names."""
        schema = self.input_model.model_json_schema(by_alias=True)
        site_id = schema.get("properties", {}).get("siteId")
        if self.site_scoped and site_id is not None:
            site_id["description"] = site_id.get("description", "") + self.site_id_field_hint()
        return schema

    def output_schema(self) -> dict[str, Any]:
        """JSON Schema of the result."""
        return self.output_model.model_json_schema(by_alias=True)

    def definition(self) -> dict[str, Any]:
        """Everything an orchestrator needs to offer this tool to a model."""
        return {
            "name": self.name,
            "description": self.description,
            "input_schema": self.input_schema(),
            "output_schema": self.output_schema(),
            "requires_approval": self.requires_approval,
            "input_examples": [dict(example) for example in self.input_examples],
        }

    def __repr__(self) -> str:
        return f"<Tool: {self.name}>"


def _format_validation_errors(exc: ValidationError) -> list[str]:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "arguments"
        messages.append(f"{location}: {error['msg']}")
    return messages
