"""Command-line interface for Agent Debugger."""

import asyncio
import json
import logging
import sys
from typing import Optional

import click
import yaml
from rich.console import Console
from rich.table import Table
from rich.tree import Tree

from . import __version__
from .analysis.normalizer import normalize
from .analysis.prompt_fixes import generate_prompt_fixes
from .analysis.report import format_report, health_band, status_counts
from .core.exceptions import AgentDebuggerError
from .core.hierarchy import AgentHierarchyStore
from .core.models import DiagnosticResponse, PromptFixMap
from .utils.config import config
from .utils.file_helpers import load_agents_file, load_structured_file

console = Console()

_STATUS_STYLES = {"Pass": "green", "Warning": "yellow", "Issue": "red"}
_BAND_STYLES = {"good": "green", "fair": "yellow", "poor": "red"}


def print_version(ctx, param, value):
    if value:
        python_version = f"{sys.version_info.major}.{sys.version_info.minor}"
        console.print(f"Agent Debugger v{__version__} (Python {python_version})")
        ctx.exit()


def _load_store(agents_path: str) -> AgentHierarchyStore:
    try:
        return load_agents_file(agents_path, require_parent_for_sub=config.require_parent_for_sub)
    except (AgentDebuggerError, ValueError) as e:
        console.print(f"[red]Could not load agents: {e}[/red]")
        sys.exit(1)


def _load_diagnostics(diagnostics_path: str) -> DiagnosticResponse:
    try:
        return normalize(load_structured_file(diagnostics_path))
    except (AgentDebuggerError, ValueError) as e:
        console.print(f"[red]Could not load diagnostics: {e}[/red]")
        sys.exit(1)


def _print_hierarchy(store: AgentHierarchyStore) -> None:
    hierarchy = store.list_hierarchy()
    tree = Tree("[bold]Agent system[/bold]")
    for group in hierarchy.groups:
        branch = tree.add(f"[cyan]{group.major.name}[/cyan] [dim]({group.major.id})[/dim]")
        for child in group.children:
            branch.add(f"{child.name} [dim]({child.id})[/dim]")
    for orphan in hierarchy.orphans:
        note = f"dangling parent {orphan.parent_id}" if orphan.parent_id else "no parent"
        tree.add(f"[yellow]{orphan.name}[/yellow] [dim]({orphan.id}, {note})[/dim]")
    console.print(tree)


def _print_diagnostics(response: DiagnosticResponse) -> None:
    band = health_band(response.overall_health_score)
    style = _BAND_STYLES[band]
    console.print(
        f"[bold]Health score:[/bold] [{style}]{response.overall_health_score}/100 ({band})[/{style}]"
    )

    table = Table(show_header=True, header_style="bold")
    table.add_column("Category")
    table.add_column("Status")
    table.add_column("Severity")
    table.add_column("Summary")
    for diagnostic in response.diagnostics:
        status_style = _STATUS_STYLES[diagnostic.status.value]
        table.add_row(
            diagnostic.category,
            f"[{status_style}]{diagnostic.status.value}[/{status_style}]",
            diagnostic.severity.value if diagnostic.severity else "-",
            diagnostic.summary,
        )
    console.print(table)

    counts = status_counts(response)
    console.print(
        f"[dim]{counts['Pass']} pass, {counts['Warning']} warning, {counts['Issue']} issue[/dim]"
    )

    if response.priority_actions:
        console.print("\n[bold]Priority actions:[/bold]")
        for i, action in enumerate(response.priority_actions, start=1):
            console.print(f"  {i}. {action}")


def _write_prompt_fixes(prompt_fixes: PromptFixMap, out: str, output_format: str) -> None:
    if output_format == "yaml":
        content = yaml.safe_dump(prompt_fixes, sort_keys=False, allow_unicode=True)
    else:
        content = json.dumps(prompt_fixes, indent=2)
    with open(out, "w") as f:
        f.write(content)


def _print_prompt_fixes(store: AgentHierarchyStore, prompt_fixes: PromptFixMap) -> None:
    if not prompt_fixes:
        console.print("[yellow]No prompt fixes: no warning or issue matched a known category[/yellow]")
        return
    for agent_id, prompt in prompt_fixes.items():
        agent = store.get(agent_id)
        console.rule(f"[bold]{agent.name}[/bold] [dim]({agent_id})[/dim]")
        console.print(prompt, markup=False, highlight=False)


@click.group()
@click.option("--debug/--no-debug", default=False, help="Enable debug mode")
@click.option(
    "--version",
    is_flag=True,
    callback=print_version,
    expose_value=False,
    is_eager=True,
    help="Show version and exit",
)
def main(debug: bool):
    """Agent Debugger - diagnose multi-agent systems and synthesize prompt fixes."""
    if debug:
        config.debug = True
        config.log_level = "DEBUG"
    logging.basicConfig(level=getattr(logging, config.log_level.upper(), logging.INFO))


@main.command()
@click.option(
    "--agents", "agents_path", required=True, type=click.Path(exists=True),
    help="Agent definitions (JSON or YAML)",
)
def hierarchy(agents_path: str):
    """Show the agent hierarchy, flagging orphaned sub-agents."""
    store = _load_store(agents_path)
    _print_hierarchy(store)


@main.command()
@click.option(
    "--agents", "agents_path", required=True, type=click.Path(exists=True),
    help="Agent definitions (JSON or YAML)",
)
@click.option("--expected-behavior", required=True, help="What the system should do")
@click.option("--actual-behavior", required=True, help="What the system actually does")
@click.option("--flow", "flow_description", default="", help="Optional description of the agent flow")
@click.option("--out", type=click.Path(), help="Write the normalized diagnostics to this JSON file")
@click.option("--fixes-out", type=click.Path(), help="Also synthesize prompt fixes into this file")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["yaml", "json"]),
    default="yaml",
    help="Prompt fix output format (default: yaml)",
)
@click.option("--mock", is_flag=True, help="Use canned diagnostics instead of the agent API")
def analyze(
    agents_path: str,
    expected_behavior: str,
    actual_behavior: str,
    flow_description: str,
    out: Optional[str],
    fixes_out: Optional[str],
    output_format: str,
    mock: bool,
):
    """Run the diagnostic agent over an agent system."""
    from .core.orchestrator import DiagnosticSession
    from .integrations.agent_api_client import create_agent_api_client
    from .integrations.mock_collaborator import StaticDiagnosticCollaborator

    store = _load_store(agents_path)

    try:
        if mock or config.mock_mode:
            collaborator = StaticDiagnosticCollaborator()
        else:
            collaborator = create_agent_api_client()
    except ValueError as e:
        console.print(f"[red]Configuration error: {e}[/red]")
        sys.exit(1)

    session = DiagnosticSession(collaborator, store=store)

    async def run_analysis():
        with console.status("[bold blue]Analyzing agent system...[/bold blue]", spinner="dots"):
            response = await session.analyze(expected_behavior, actual_behavior, flow_description)
        prompt_fixes = await session.generate_prompt_fixes() if fixes_out else None
        return response, prompt_fixes

    try:
        response, prompt_fixes = asyncio.run(run_analysis())
    except AgentDebuggerError as e:
        console.print(f"[red]Analysis failed: {e}[/red]")
        sys.exit(1)

    _print_diagnostics(response)

    if out:
        with open(out, "w") as f:
            json.dump(response.model_dump(mode="json"), f, indent=2)
        console.print(f"[green]✓ Diagnostics written to {out}[/green]")

    if fixes_out:
        _write_prompt_fixes(prompt_fixes, fixes_out, output_format)
        console.print(
            f"[green]✓ Prompt fixes for {len(prompt_fixes)} agent(s) written to {fixes_out}[/green]"
        )


@main.command()
@click.option(
    "--agents", "agents_path", required=True, type=click.Path(exists=True),
    help="Agent definitions (JSON or YAML)",
)
@click.option(
    "--diagnostics", "diagnostics_path", required=True, type=click.Path(exists=True),
    help="Diagnostic payload from a previous analysis (JSON or YAML)",
)
@click.option("--out", type=click.Path(), help="Write prompt fixes to this file")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["yaml", "json"]),
    default="yaml",
    help="Output format (default: yaml)",
)
def fix(agents_path: str, diagnostics_path: str, out: Optional[str], output_format: str):
    """Synthesize prompt fixes offline from saved diagnostics."""
    store = _load_store(agents_path)
    response = _load_diagnostics(diagnostics_path)

    prompt_fixes = generate_prompt_fixes(store.agents, response)

    if out:
        _write_prompt_fixes(prompt_fixes, out, output_format)
        console.print(
            f"[green]✓ Prompt fixes for {len(prompt_fixes)} agent(s) written to {out}[/green]"
        )
    else:
        _print_prompt_fixes(store, prompt_fixes)


@main.command()
@click.option(
    "--diagnostics", "diagnostics_path", required=True, type=click.Path(exists=True),
    help="Diagnostic payload (JSON or YAML)",
)
@click.option("--plain", is_flag=True, help="Print the copyable plain-text report")
def report(diagnostics_path: str, plain: bool):
    """Show a diagnostic report."""
    response = _load_diagnostics(diagnostics_path)
    if plain:
        click.echo(format_report(response))
    else:
        _print_diagnostics(response)


@main.command()
@click.option("--host", default="127.0.0.1", help="Bind address")
@click.option("--port", default=8000, type=int, help="Port (default: 8000)")
@click.option("--mock", is_flag=True, help="Serve canned diagnostics instead of calling the agent API")
def serve(host: str, port: int, mock: bool):
    """Launch the HTTP API server."""
    import uvicorn

    if mock:
        config.mock_mode = True

    console.print(f"[blue]Launching Agent Debugger server on http://{host}:{port}[/blue]")
    try:
        uvicorn.run("agent_debugger.ui.server:app", host=host, port=port)
    except KeyboardInterrupt:
        console.print("[yellow]Server stopped.[/yellow]")


@main.command("config-check")
def config_check():
    """Validate configuration from the environment."""
    try:
        config.validate()
    except ValueError as e:
        console.print(f"[red]Configuration error: {e}[/red]")
        sys.exit(1)

    console.print("[green]✓ Configuration is valid[/green]")
    console.print(f"  Agent API: {config.agent_api_url or '[dim]not set[/dim]'}")
    console.print(f"  Diagnostic agent: {config.diagnostic_agent_id}")
    console.print(f"  Mock mode: {config.mock_mode}")


if __name__ == "__main__":
    main()
