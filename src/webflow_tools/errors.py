"""
Exception hierarchy for webflow-tools.

All webflow-tools exceptions inherit from WebflowToolsError, allowing callers
to catch every library-specific exception with a single except clause.

Exception Categories:
    - ConfigurationError: Missing credential or unresolved site ID
    - UpstreamError: Webflow answered with a non-success status
    - ToolError: Unknown tool or invalid tool arguments
    - PreconditionError: Workflow pre-condition failed before any request
    - ApprovalDeniedError: An approval-gated tool was not approved

Only InvalidArgumentsError is meant to reach the orchestrator. Tool
executors catch the rest and turn them into their own failure shape.
"""

from dataclasses import dataclass, field
from typing import Any


# =============================================================================
# Error Codes
# =============================================================================

# Configuration errors: 1xxx
ERROR_CONFIG_MISSING_API_KEY = 1001
ERROR_CONFIG_MISSING_SITE_ID = 1002

# Upstream errors: 2xxx
ERROR_UPSTREAM_RESPONSE = 2001

# Tool errors: 3xxx
ERROR_TOOL_NOT_FOUND = 3001
ERROR_TOOL_INVALID_ARGS = 3002

# Workflow errors: 4xxx
ERROR_PRECONDITION_FAILED = 4001

# Approval errors: 5xxx
ERROR_APPROVAL_DENIED = 5001


# =============================================================================
# Base Exception
# =============================================================================


@dataclass
class WebflowToolsError(Exception):
    """
    Base exception for all webflow-tools errors.

    Attributes:
        message: Human-readable error description
        code: Numeric error code for programmatic handling
        suggestion: Optional hint for how to resolve the error
        context: Optional dict with additional debugging info
    """

    message: str = ""
    code: int = 0
    suggestion: str | None = None
    context: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        """Format error for display."""
        parts = [f"[E{self.code}] {self.message}"]
        if self.suggestion:
            parts.append(f"\nSuggestion: {self.suggestion}")
        return "".join(parts)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"code={self.code}, "
            f"context={self.context!r})"
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "code": self.code,
            "suggestion": self.suggestion,
            "context": self.context,
        }


# =============================================================================
# Configuration Errors
# =============================================================================


@dataclass
class ConfigurationError(WebflowToolsError):
    """
    Raised when process-wide configuration cannot satisfy a call.

    Always raised before any network I/O.

    Attributes:
        setting: Name of the environment variable that is missing
    """

    setting: str = ""

    def __post_init__(self) -> None:
        if not self.message:
            self.message = f"{self.setting} is not configured"
        if self.code == 0:
            self.code = ERROR_CONFIG_MISSING_API_KEY
        self.context["setting"] = self.setting


@dataclass
class MissingApiKeyError(ConfigurationError):
    """Raised when no API token is configured."""

    def __post_init__(self) -> None:
        if not self.setting:
            self.setting = "WEBFLOW_API_KEY"
        if not self.message:
            self.message = f"{self.setting} environment variable is required"
        if self.code == 0:
            self.code = ERROR_CONFIG_MISSING_API_KEY
        super().__post_init__()


@dataclass
class MissingSiteIdError(ConfigurationError):
    """Raised when neither an explicit nor a default site ID is available."""

    def __post_init__(self) -> None:
        if not self.setting:
            self.setting = "WEBFLOW_SITE_ID"
        if not self.message:
            self.message = (
                "A site ID is required. Either pass a siteId or set the "
                f"{self.setting} environment variable."
            )
        if self.code == 0:
            self.code = ERROR_CONFIG_MISSING_SITE_ID
        super().__post_init__()


# =============================================================================
# Upstream Errors
# =============================================================================


@dataclass
class UpstreamError(WebflowToolsError):
    """
    Raised when the Webflow API answers with a non-success status.

    The body is kept verbatim so the upstream diagnostic reaches the caller.

    Attributes:
        status_code: HTTP status of the response
        body: Raw response text
        path: API path that was requested
    """

    status_code: int = 0
    body: str = ""
    path: str = ""

    def __post_init__(self) -> None:
        if not self.message:
            self.message = f"Webflow API error {self.status_code}: {self.body}"
        if self.code == 0:
            self.code = ERROR_UPSTREAM_RESPONSE
        if not self.suggestion and self.status_code == 429:
            self.suggestion = "Webflow rate limit reached; wait before calling again"
        self.context.update({
            "status_code": self.status_code,
            "body": self.body,
            "path": self.path,
        })


# =============================================================================
# Tool Errors
# =============================================================================


@dataclass
class ToolError(WebflowToolsError):
    """
    Base class for tool lookup and argument errors.

    Attributes:
        tool: Name of the tool involved
        tool_args: Arguments that were provided
    """

    tool: str = ""
    tool_args: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.context.update({
            "tool": self.tool,
            "tool_args": self.tool_args,
        })


@dataclass
class ToolNotFoundError(ToolError):
    """Raised when a tool is not registered."""

    def __post_init__(self) -> None:
        if not self.message:
            self.message = f"Tool not found: {self.tool}"
        if self.code == 0:
            self.code = ERROR_TOOL_NOT_FOUND
        if not self.suggestion:
            self.suggestion = "Check the tool name or the preset the registry was built from"
        super().__post_init__()


@dataclass
class InvalidArgumentsError(ToolError):
    """
    Raised when tool arguments do not match the tool's input shape.

    Raised by Tool.run before the executor body is reached.

    Attributes:
        errors: One message per failing field
    """

    errors: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.message:
            self.message = f"Invalid arguments for {self.tool}: {'; '.join(self.errors)}"
        if self.code == 0:
            self.code = ERROR_TOOL_INVALID_ARGS
        super().__post_init__()
        self.context["errors"] = self.errors


# =============================================================================
# Workflow Errors
# =============================================================================


@dataclass
class PreconditionError(WebflowToolsError):
    """
    Raised when a workflow pre-condition fails before any network call.

    Attributes:
        check: Short name of the failed check
    """

    check: str = ""

    def __post_init__(self) -> None:
        if not self.message:
            self.message = f"Precondition failed: {self.check}"
        if self.code == 0:
            self.code = ERROR_PRECONDITION_FAILED
        self.context["check"] = self.check


# =============================================================================
# Approval Errors
# =============================================================================


@dataclass
class ApprovalDeniedError(WebflowToolsError):
    """
    Raised when an approval-gated tool call was not approved.

    Attributes:
        tool: Name of the gated tool
        reason: Why approval was not granted
    """

    tool: str = ""
    reason: str = ""

    def __post_init__(self) -> None:
        if not self.message:
            self.message = f"Approval denied for {self.tool}: {self.reason}"
        if self.code == 0:
            self.code = ERROR_APPROVAL_DENIED
        self.context.update({
            "tool": self.tool,
            "reason": self.reason,
        })


def describe_error(error: BaseException, default: str) -> str:
    """
    Turn an exception into the user-visible message of a failure result.

    Library errors contribute their bare message (no code prefix), other
    exceptions their string form. Falls back to ``default`` when empty.
    """
    if isinstance(error, WebflowToolsError):
        return error.message or default
    return str(error) or default
