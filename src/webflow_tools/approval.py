"""
Approval gate for webflow-tools.

publish_site, update_page and add_custom_code change the live site and
declare requires_approval. The gate decides, per call, whether such a tool
may run.

Design Principles:
    - Deny-by-default: a gated call runs only if something approves it
    - Fail-closed: an approver that raises counts as a denial
    - Predictable: the static policy is consulted before the approver
    - Auditable: every decision carries a reason and the rule that matched

Evaluation order:
    1. Tools without requires_approval are always allowed
    2. Tools listed in policy.deny are denied
    3. Tools listed in policy.auto_approve are allowed
    4. Otherwise the approver callback decides; with no approver, deny

Policy file (YAML):
    auto_approve:
      - update_page
    deny:
      - add_custom_code
"""

from collections.abc import Callable
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field

from webflow_tools.console import get_logger
from webflow_tools.errors import ApprovalDeniedError
from webflow_tools.tools.base import Tool, ToolInput

logger = get_logger(__name__)

Approver = Callable[[Tool, ToolInput], bool]


class ApprovalPolicy(BaseModel):
    """
    Static approval rules.

    Attributes:
        auto_approve: Gated tools that run without asking
        deny: Gated tools that never run (takes precedence)
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    auto_approve: list[str] = Field(
        default_factory=list,
        description="Gated tools approved without asking",
    )
    deny: list[str] = Field(
        default_factory=list,
        description="Gated tools that are always denied (takes precedence)",
    )


class ApprovalDecision(BaseModel):
    """
    Result of evaluating a tool call at the gate.

    Attributes:
        allowed: Whether the call may execute
        reason: Human-readable explanation of the decision
        rule_matched: Which rule produced the decision
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    allowed: bool = Field(..., description="Whether the call may execute")
    reason: str = Field(..., description="Human-readable explanation of the decision")
    rule_matched: str | None = Field(default=None, description="Which rule produced this decision")

    @classmethod
    def allow(cls, reason: str, rule: str | None = None) -> "ApprovalDecision":
        return cls(allowed=True, reason=reason, rule_matched=rule)

    @classmethod
    def deny(cls, reason: str, rule: str | None = None) -> "ApprovalDecision":
        return cls(allowed=False, reason=reason, rule_matched=rule)


class ApprovalGate:
    """
    Decides whether approval-gated tool calls may run.

    Usage:
        gate = ApprovalGate(policy, approver=ask_user)
        decision = gate.evaluate(tool, params)
        if decision.allowed:
            result = tool.execute(params)

    Attributes:
        policy: Static approval rules
        approver: Callback asked when no static rule applies
    """

    def __init__(
        self,
        policy: ApprovalPolicy | None = None,
        approver: Approver | None = None,
    ) -> None:
        self.policy = policy or ApprovalPolicy()
        self.approver = approver

    def evaluate(self, tool: Tool, params: ToolInput) -> ApprovalDecision:
        """Evaluate one call; never raises."""
        if not tool.requires_approval:
            return ApprovalDecision.allow(f"{tool.name} does not require approval", rule="not_gated")

        if tool.name in self.policy.deny:
            return ApprovalDecision.deny(f"{tool.name} is denied by policy", rule="deny")

        if tool.name in self.policy.auto_approve:
            return ApprovalDecision.allow(f"{tool.name} is auto-approved by policy", rule="auto_approve")

        if self.approver is None:
            return ApprovalDecision.deny(
                f"{tool.name} requires approval and no approver is configured",
                rule="approval_required",
            )

        try:
            approved = bool(self.approver(tool, params))
        except Exception as exc:
            logger.error("Approver failed for %s: %s", tool.name, exc)
            return ApprovalDecision.deny(f"Approver failed: {exc}", rule="approver_error")

        if approved:
            return ApprovalDecision.allow(f"{tool.name} was approved", rule="approver")
        return ApprovalDecision.deny(f"{tool.name} was rejected by the approver", rule="approver")

    def require(self, tool: Tool, params: ToolInput) -> ApprovalDecision:
        """
        Evaluate and raise if the call is not allowed.

        Raises:
            ApprovalDeniedError: If the decision is a denial
        """
        decision = self.evaluate(tool, params)
        if not decision.allowed:
            raise ApprovalDeniedError(
                tool=tool.name,
                reason=decision.reason,
                context={"rule": decision.rule_matched},
            )
        return decision


def load_approval_policy(path: Path | str) -> ApprovalPolicy:
    """
    Load an approval policy from a YAML file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValidationError: If the YAML doesn't match the schema
    """
    path = Path(path)
    with path.open() as f:
        data = yaml.safe_load(f)

    return ApprovalPolicy.model_validate(data or {})


def load_approval_policy_from_string(content: str) -> ApprovalPolicy:
    """Load an approval policy from a YAML string."""
    data = yaml.safe_load(content)
    return ApprovalPolicy.model_validate(data or {})
