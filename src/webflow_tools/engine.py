"""
Invocation engine for webflow-tools.

The Engine is what an orchestrator (or the CLI) calls to run a tool by
name. It coordinates:
- Registry: Finds the tool
- Tool contract: Validates the arguments
- Approval gate: Decides whether a gated tool may run
- Tool executor: Performs the call and returns the result shape

Invocation Flow:
    1. Look up the tool by name
    2. Validate arguments (invalid -> INVALID, executor not reached)
    3. Evaluate the approval gate (denied -> DENIED, executor not reached)
    4. Execute and report SUCCESS or ERROR from the result's error field

invoke() never raises for unknown tools, bad arguments or denials; each is
reported through InvocationResult.
"""

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from webflow_tools.approval import ApprovalDecision, ApprovalGate
from webflow_tools.console import get_logger
from webflow_tools.errors import InvalidArgumentsError, ToolNotFoundError
from webflow_tools.tools.registry import ToolRegistry

logger = get_logger(__name__)


class InvocationStatus(str, Enum):
    """Outcome of one invocation."""

    SUCCESS = "success"
    ERROR = "error"
    DENIED = "denied"
    INVALID = "invalid"


@dataclass
class InvocationResult:
    """
    Result of invoking one tool.

    Attributes:
        tool_name: Name of the tool requested
        args: Arguments as supplied
        status: Outcome status
        output: The tool's serialized result (None if it never ran)
        error: Error message for every non-success status
        decision: Approval decision, if the gate was consulted
        duration_ms: Wall time of the invocation in milliseconds
        details: Structured error info (to_dict()) for INVALID and unknown tools
    """

    tool_name: str
    args: dict[str, Any]
    status: InvocationStatus
    output: dict[str, Any] | None = None
    error: str | None = None
    decision: ApprovalDecision | None = None
    duration_ms: float = 0.0
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return self.status == InvocationStatus.SUCCESS


class Engine:
    """
    Runs tools by name under an approval gate.

    Usage:
        engine = Engine(build_registry(context), ApprovalGate(approver=ask))
        result = engine.invoke("list_sites", {})

    Attributes:
        registry: Where tools are looked up
        gate: Approval gate for gated tools
    """

    def __init__(self, registry: ToolRegistry, gate: ApprovalGate | None = None) -> None:
        self.registry = registry
        self.gate = gate or ApprovalGate()

    def invoke(self, name: str, args: dict[str, Any] | None = None) -> InvocationResult:
        """Validate, gate and execute one tool call."""
        args = dict(args or {})
        started = time.perf_counter()

        def finish(status: InvocationStatus, **kwargs: Any) -> InvocationResult:
            duration_ms = (time.perf_counter() - started) * 1000
            return InvocationResult(
                tool_name=name,
                args=args,
                status=status,
                duration_ms=duration_ms,
                **kwargs,
            )

        try:
            tool = self.registry.get(name)
        except ToolNotFoundError as exc:
            return finish(InvocationStatus.ERROR, error=exc.message, details=exc.to_dict())

        try:
            params = tool.parse_args(args)
        except InvalidArgumentsError as exc:
            logger.info("Rejected arguments for %s: %s", name, exc.message)
            return finish(InvocationStatus.INVALID, error=exc.message, details=exc.to_dict())

        decision = self.gate.evaluate(tool, params)
        if not decision.allowed:
            logger.info("Denied %s: %s", name, decision.reason)
            return finish(InvocationStatus.DENIED, error=decision.reason, decision=decision)

        logger.debug("Executing %s", name)
        output = tool.execute(params).to_dict()
        error = output.get("error")
        status = InvocationStatus.ERROR if error else InvocationStatus.SUCCESS
        return finish(status, output=output, error=error, decision=decision)
