"""
CLI entry point for webflow-tools.

A thin Typer front end over the registry and engine, useful for trying
tools by hand and for scripting.

Commands:
    tools       List the tools of a preset
    describe    Show a tool's full definition (schemas, approval, examples)
    invoke      Run a tool, asking for approval when the tool requires it

Configuration comes from WEBFLOW_API_KEY / WEBFLOW_SITE_ID (see
webflow_tools.config).
"""

import json
import types
from pathlib import Path
from typing import Annotated, Any, Optional, Union, get_args, get_origin

import typer
import yaml
from rich.table import Table

from webflow_tools import __version__
from webflow_tools.approval import ApprovalGate, ApprovalPolicy, load_approval_policy
from webflow_tools.config import get_settings
from webflow_tools.console import console, setup_logging
from webflow_tools.engine import Engine, InvocationResult, InvocationStatus
from webflow_tools.errors import ToolNotFoundError
from webflow_tools.tools import DEFAULT_PRESET, Tool, ToolContext, ToolInput, build_registry
from webflow_tools.tools.registry import ToolRegistry

app = typer.Typer(
    name="webflow-tools",
    help="Discover and run Webflow tools built for LLM agents.",
    add_completion=False,
    no_args_is_help=True,
)

PresetOption = Annotated[
    str,
    typer.Option("--preset", help="Tool preset to load."),
]


def build_context() -> ToolContext:
    """Create the tool context from environment settings."""
    return ToolContext.from_settings(get_settings())


def _load_registry(context: ToolContext, preset: str) -> ToolRegistry:
    try:
        return build_registry(context, preset)
    except KeyError as e:
        console.print(f"[red]{e.args[0]}[/red]")
        raise typer.Exit(code=2)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold]webflow-tools[/bold] version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Log requests and decisions to stderr."),
    ] = False,
) -> None:
    """
    webflow-tools - Webflow Data API tools for agents.
    """
    setup_logging(verbose=verbose)


@app.command("tools")
def list_tools(preset: PresetOption = DEFAULT_PRESET) -> None:
    """
    List the tools of a preset.

    Example:
        $ webflow-tools tools --preset lead_response
    """
    context = build_context()
    with context.client:
        registry = _load_registry(context, preset)

    table = Table(show_header=True, header_style="bold")
    table.add_column("Tool", style="cyan")
    table.add_column("Approval", width=8)
    table.add_column("Description")

    for name in registry.list_tools():
        tool = registry.get(name)
        approval = "[yellow]yes[/yellow]" if tool.requires_approval else "no"
        description = tool.description
        if len(description) > 80:
            description = description[:77] + "..."
        table.add_row(name, approval, description)

    console.print(table)


@app.command()
def describe(
    name: Annotated[str, typer.Argument(help="Tool name, e.g. list_pages.")],
    preset: PresetOption = DEFAULT_PRESET,
) -> None:
    """
    Show a tool's definition as JSON.

    Example:
        $ webflow-tools describe add_custom_code
    """
    context = build_context()
    with context.client:
        registry = _load_registry(context, preset)
        try:
            tool = registry.get(name)
        except ToolNotFoundError as e:
            console.print(f"[red]{e.message}[/red]")
            raise typer.Exit(code=1)

        print(json.dumps(tool.definition(), indent=2))


@app.command()
def invoke(
    name: Annotated[str, typer.Argument(help="Tool name, e.g. publish_site.")],
    args_file: Annotated[
        Optional[Path],
        typer.Option(
            "--args",
            "-a",
            help="YAML or JSON file with the tool arguments.",
            exists=True,
            readable=True,
            resolve_path=True,
        ),
    ] = None,
    arg: Annotated[
        Optional[list[str]],
        typer.Option(
            "--arg",
            help="Single argument as key=value (value parsed as YAML). Repeatable.",
        ),
    ] = None,
    policy_path: Annotated[
        Optional[Path],
        typer.Option(
            "--policy",
            "-p",
            help="Approval policy YAML file.",
            exists=True,
            readable=True,
            resolve_path=True,
        ),
    ] = None,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Approve gated tools without asking."),
    ] = False,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output the result in JSON format."),
    ] = False,
    preset: PresetOption = DEFAULT_PRESET,
) -> None:
    """
    Run a tool.

    Tools that require approval prompt for confirmation unless the policy
    auto-approves them or --yes is given.

    Example:
        $ webflow-tools invoke list_pages --arg limit=10
        $ webflow-tools invoke publish_site --arg publishToWebflowSubdomain=true
    """
    context = build_context()
    with context.client:
        registry = _load_registry(context, preset)
        tool = registry.get_optional(name)
        try:
            args = _collect_args(args_file, arg or [], tool.input_model if tool else None)
            policy = load_approval_policy(policy_path) if policy_path else ApprovalPolicy()
        except Exception as e:
            console.print(f"[red]Error loading arguments: {e}[/red]")
            raise typer.Exit(code=2)

        approver = _approve_all if yes else _confirm
        engine = Engine(registry, ApprovalGate(policy, approver=approver))
        result = engine.invoke(name, args)

    if json_output:
        _output_json_result(result)
    else:
        _display_invocation(result)

    if result.status in (InvocationStatus.INVALID, InvocationStatus.DENIED):
        raise typer.Exit(code=2)
    if not result.success:
        raise typer.Exit(code=1)


def _collect_args(
    args_file: Path | None,
    pairs: list[str],
    input_model: type[ToolInput] | None = None,
) -> dict[str, Any]:
    """
    Merge the arguments file and --arg pairs into one mapping.

    Pair values are parsed as YAML, except for arguments the tool declares
    as text: those keep the raw string, so version=1.0 stays "1.0".
    """
    text_fields = _text_fields(input_model) if input_model else set()
    args: dict[str, Any] = {}
    if args_file is not None:
        with args_file.open() as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            msg = f"{args_file} must contain a mapping of argument names to values"
            raise ValueError(msg)
        args.update(data)

    for pair in pairs:
        key, sep, raw = pair.partition("=")
        if not sep or not key:
            msg = f"Expected key=value, got {pair!r}"
            raise ValueError(msg)
        key = key.strip()
        args[key] = raw if key in text_fields else yaml.safe_load(raw)

    return args


def _text_fields(input_model: type[ToolInput]) -> set[str]:
    """Names and aliases of the string-typed arguments of a tool."""
    names: set[str] = set()
    for field_name, info in input_model.model_fields.items():
        if _is_text(info.annotation):
            names.add(field_name)
            if info.alias:
                names.add(info.alias)
    return names


def _is_text(annotation: Any) -> bool:
    if annotation is str:
        return True
    if get_origin(annotation) in (Union, types.UnionType):
        members = [a for a in get_args(annotation) if a is not type(None)]
        return members == [str]
    return False


def _approve_all(tool: Tool, params: ToolInput) -> bool:
    return True


def _confirm(tool: Tool, params: ToolInput) -> bool:
    console.print(f"[yellow]{tool.name} requires approval.[/yellow]")
    console.print_json(json.dumps(params.model_dump(by_alias=True, exclude_none=True)))
    return typer.confirm("Run it?", default=False)


def _display_invocation(result: InvocationResult) -> None:
    if result.status == InvocationStatus.SUCCESS:
        console.print(f"[green]✓[/green] [bold]{result.tool_name}[/bold] succeeded")
    elif result.status == InvocationStatus.DENIED:
        console.print(f"[yellow]✗[/yellow] [bold]{result.tool_name}[/bold] denied: {result.error}")
    else:
        console.print(f"[red]✗[/red] [bold]{result.tool_name}[/bold] {result.status.value}: {result.error}")

    if result.output is not None:
        console.print_json(json.dumps(result.output))
    console.print(f"[dim]Duration: {result.duration_ms:.1f}ms[/dim]")


def _output_json_result(result: InvocationResult) -> None:
    output = {
        "tool_name": result.tool_name,
        "status": result.status.value,
        "success": result.success,
        "output": result.output,
        "error": result.error,
        "approval": {
            "allowed": result.decision.allowed,
            "reason": result.decision.reason,
            "rule_matched": result.decision.rule_matched,
        } if result.decision else None,
        "duration_ms": result.duration_ms,
    }
    print(json.dumps(output, indent=2, default=str))


if __name__ == "__main__":
    app()
