"""
Unit tests for the approval gate.

Tests cover:
- Ungated tools always allowed
- Deny-by-default for gated tools
- Policy deny/auto_approve precedence
- Approver callback outcomes, including failures
- Policy YAML loading
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from webflow_tools.approval import (
    ApprovalGate,
    ApprovalPolicy,
    load_approval_policy,
    load_approval_policy_from_string,
)
from webflow_tools.errors import ApprovalDeniedError
from webflow_tools.tools import ListSitesTool, PublishSiteTool, Tool, ToolContext, ToolInput


@pytest.fixture
def publish(context: ToolContext) -> PublishSiteTool:
    return PublishSiteTool(context)


@pytest.fixture
def publish_params(publish: PublishSiteTool) -> ToolInput:
    return publish.parse_args({"publishToWebflowSubdomain": True})


class TestApprovalGate:
    """Tests for ApprovalGate.evaluate."""

    def test_ungated_tool_allowed(self, context: ToolContext) -> None:
        """Test that tools without requires_approval pass even when denied by policy."""
        tool = ListSitesTool(context)
        gate = ApprovalGate(ApprovalPolicy(deny=["list_sites"]))

        decision = gate.evaluate(tool, tool.parse_args({}))

        assert decision.allowed
        assert decision.rule_matched == "not_gated"

    def test_gated_denied_without_approver(
        self, publish: PublishSiteTool, publish_params: ToolInput
    ) -> None:
        """Test that a gated tool is denied when no approver is configured."""
        decision = ApprovalGate().evaluate(publish, publish_params)

        assert not decision.allowed
        assert decision.rule_matched == "approval_required"

    def test_policy_deny(self, publish: PublishSiteTool, publish_params: ToolInput) -> None:
        """Test that the deny list wins over an approving callback."""
        gate = ApprovalGate(ApprovalPolicy(deny=["publish_site"]), approver=lambda t, p: True)

        decision = gate.evaluate(publish, publish_params)

        assert not decision.allowed
        assert decision.rule_matched == "deny"

    def test_deny_beats_auto_approve(
        self, publish: PublishSiteTool, publish_params: ToolInput
    ) -> None:
        """Test that deny takes precedence over auto_approve."""
        policy = ApprovalPolicy(auto_approve=["publish_site"], deny=["publish_site"])

        decision = ApprovalGate(policy).evaluate(publish, publish_params)

        assert not decision.allowed

    def test_auto_approve(self, publish: PublishSiteTool, publish_params: ToolInput) -> None:
        """Test that auto_approve allows a gated tool without asking."""
        gate = ApprovalGate(ApprovalPolicy(auto_approve=["publish_site"]))

        decision = gate.evaluate(publish, publish_params)

        assert decision.allowed
        assert decision.rule_matched == "auto_approve"

    def test_approver_accepts(self, publish: PublishSiteTool, publish_params: ToolInput) -> None:
        """Test that the approver sees the tool and parsed arguments."""
        seen: list[tuple[Tool, ToolInput]] = []

        def approver(tool: Tool, params: ToolInput) -> bool:
            seen.append((tool, params))
            return True

        decision = ApprovalGate(approver=approver).evaluate(publish, publish_params)

        assert decision.allowed
        assert decision.rule_matched == "approver"
        assert seen == [(publish, publish_params)]

    def test_approver_rejects(self, publish: PublishSiteTool, publish_params: ToolInput) -> None:
        """Test that a False answer from the approver denies the call."""
        decision = ApprovalGate(approver=lambda t, p: False).evaluate(publish, publish_params)

        assert not decision.allowed
        assert "rejected" in decision.reason

    def test_approver_error_denies(
        self, publish: PublishSiteTool, publish_params: ToolInput
    ) -> None:
        """Test that an approver that raises counts as a denial."""
        def approver(tool: Tool, params: ToolInput) -> bool:
            raise RuntimeError("terminal closed")

        decision = ApprovalGate(approver=approver).evaluate(publish, publish_params)

        assert not decision.allowed
        assert decision.rule_matched == "approver_error"
        assert "terminal closed" in decision.reason


class TestApprovalGateRequire:
    """Tests for ApprovalGate.require."""

    def test_raises_on_denial(self, publish: PublishSiteTool, publish_params: ToolInput) -> None:
        """Test that require raises ApprovalDeniedError with the matched rule."""
        with pytest.raises(ApprovalDeniedError) as exc_info:
            ApprovalGate().require(publish, publish_params)
        assert exc_info.value.context["tool"] == "publish_site"
        assert exc_info.value.context["rule"] == "approval_required"

    def test_returns_decision_when_allowed(
        self, publish: PublishSiteTool, publish_params: ToolInput
    ) -> None:
        """Test that require returns the decision when the call is allowed."""
        gate = ApprovalGate(ApprovalPolicy(auto_approve=["publish_site"]))
        assert gate.require(publish, publish_params).allowed


class TestPolicyLoading:
    """Tests for approval policy YAML loading."""

    def test_from_string(self) -> None:
        """Test loading a policy from a YAML string."""
        policy = load_approval_policy_from_string(
            "auto_approve:\n  - update_page\ndeny:\n  - add_custom_code\n"
        )
        assert policy.auto_approve == ["update_page"]
        assert policy.deny == ["add_custom_code"]

    def test_empty_document(self) -> None:
        """Test that an empty document yields the default policy."""
        assert load_approval_policy_from_string("") == ApprovalPolicy()

    def test_unknown_key_rejected(self) -> None:
        """Test that unknown policy keys are rejected."""
        with pytest.raises(ValidationError):
            load_approval_policy_from_string("allow_all: true\n")

    def test_from_file(self, tmp_path: Path) -> None:
        """Test loading a policy from a YAML file."""
        path = tmp_path / "approval.yaml"
        path.write_text("auto_approve: [publish_site]\n")

        assert load_approval_policy(path).auto_approve == ["publish_site"]

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test that a missing policy file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_approval_policy(tmp_path / "missing.yaml")
