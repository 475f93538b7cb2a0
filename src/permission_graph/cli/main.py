"""CLI entry point for permission-graph.

Invoked as::

    permgraph [OPTIONS] COMMAND [ARGS]...

or during development::

    python -m permission_graph.cli.main

Commands
--------
- compile   Compile permission strings or a policy document into graphs
- parse     Show the parse tree and paths for one permission string
- version   Show version information
"""
from __future__ import annotations

import json
import sys
from pathlib import Path

import click
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

from permission_graph.config.loader import PolicyConfigError, PolicyLoader
from permission_graph.config.models import CompilerConfig
from permission_graph.graph.compiler import (
    CompilationDiagnostic,
    CompilationResult,
    PermissionCompilationError,
    PermissionGraphCompiler,
)
from permission_graph.graph.reducer import Graph, graph_to_jsonable
from permission_graph.paths.segments import Marker, format_path, format_segment

console = Console()
err_console = Console(stderr=True)

_ARGUMENTS_GROUP = "<arguments>"


# ---------------------------------------------------------------------------
# Rendering helpers
# ---------------------------------------------------------------------------


def _add_branches(tree: Tree, graph: Graph) -> None:
    if isinstance(graph, Marker):
        tree.add(f"[green]{graph.value}[/green]")
        return
    for segment, subgraph in graph.items():
        label = escape(format_segment(segment))
        if isinstance(subgraph, Marker):
            tree.add(f"{label} → [green]{subgraph.value}[/green]")
        else:
            _add_branches(tree.add(f"[cyan]{label}[/cyan]"), subgraph)


def _render_tree(name: str, graph: Graph) -> Tree:
    tree = Tree(f"[bold]{escape(name)}[/bold]")
    if graph == {}:
        tree.add("[dim](no permissions)[/dim]")
    else:
        _add_branches(tree, graph)
    return tree


def _print_diagnostics(name: str, diagnostics: list[CompilationDiagnostic]) -> None:
    table = Table(title=f"Dropped permissions: {escape(name)}", box=box.SIMPLE)
    table.add_column("Permission", style="cyan")
    table.add_column("Kind", style="magenta")
    table.add_column("Message")
    for diagnostic in diagnostics:
        table.add_row(
            escape(diagnostic.permission),
            diagnostic.kind,
            escape(diagnostic.message),
        )
    err_console.print(table)


# ---------------------------------------------------------------------------
# Root command group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="permission-graph")
def cli() -> None:
    """Permission graph CLI — compile and inspect permission strings."""


# ---------------------------------------------------------------------------
# version
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from permission_graph import __version__

    console.print(
        Panel(
            f"[bold]permission-graph[/bold]  v[cyan]{__version__}[/cyan]\n"
            "Compiles permission strings into permission graphs.",
            title="Version",
            border_style="blue",
        )
    )


# ---------------------------------------------------------------------------
# compile
# ---------------------------------------------------------------------------


@cli.command(name="compile")
@click.argument("permissions", nargs=-1)
@click.option(
    "--file",
    "-f",
    "policy_file",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Policy YAML document with permission groups.",
)
@click.option(
    "--group",
    "-g",
    "group_names",
    multiple=True,
    help="Only compile these groups from the policy document.",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["tree", "json"]),
    default="tree",
    show_default=True,
    help="Output format.",
)
@click.option("--strict", is_flag=True, help="Fail when any permission string is dropped.")
def compile_command(
    permissions: tuple[str, ...],
    policy_file: str | None,
    group_names: tuple[str, ...],
    output_format: str,
    strict: bool,
) -> None:
    """Compile PERMISSIONS (and/or a policy document) into permission graphs."""
    config = CompilerConfig()
    groups: dict[str, list[str]] = {}

    if policy_file is not None:
        try:
            document = PolicyLoader().load(Path(policy_file))
        except PolicyConfigError as exc:
            err_console.print(f"[red]Invalid policy document:[/red] {escape(str(exc))}")
            sys.exit(1)
        config = document.compiler
        groups.update(document.groups)

    if group_names:
        missing = [name for name in group_names if name not in groups]
        if missing:
            err_console.print(f"[red]Unknown group(s):[/red] {escape(', '.join(missing))}")
            sys.exit(1)
        groups = {name: groups[name] for name in group_names}

    if permissions:
        groups[_ARGUMENTS_GROUP] = list(permissions)

    if not groups:
        err_console.print("[red]No permissions given.[/red] Pass permission strings or --file.")
        sys.exit(1)

    if strict:
        config = config.model_copy(update={"on_error": "raise"})

    compiler = PermissionGraphCompiler(config)
    results: dict[str, CompilationResult] = {}
    failed = False
    for name, group_permissions in groups.items():
        try:
            result = compiler.compile(group_permissions)
        except PermissionCompilationError as exc:
            failed = True
            result = exc.result
        results[name] = result
        if result.diagnostics:
            _print_diagnostics(name, result.diagnostics)

    if output_format == "json":
        if list(results) == [_ARGUMENTS_GROUP]:
            payload = graph_to_jsonable(results[_ARGUMENTS_GROUP].graph)
        else:
            payload = {name: graph_to_jsonable(r.graph) for name, r in results.items()}
        click.echo(json.dumps(payload, indent=2, sort_keys=True))
    else:
        for name, result in results.items():
            console.print(_render_tree(name, result.graph))

    sys.exit(1 if failed else 0)


# ---------------------------------------------------------------------------
# parse
# ---------------------------------------------------------------------------


@cli.command(name="parse")
@click.argument("permission")
def parse_command(permission: str) -> None:
    """Show the parse tree and extracted paths for PERMISSION."""
    from permission_graph.grammar.parser import ParseFailure, PermissionParser
    from permission_graph.grammar.tree import describe_tree
    from permission_graph.paths.extractor import MalformedIdentifierError, extract_paths

    tree = PermissionParser().try_parse(permission)
    if isinstance(tree, ParseFailure):
        err_console.print(f"[red]Syntax error:[/red] {escape(tree.message)}")
        err_console.print(f"  {escape(permission)}\n  {' ' * tree.index}^")
        sys.exit(1)

    try:
        paths = extract_paths(tree)
    except MalformedIdentifierError as exc:
        err_console.print(f"[red]Malformed identifier:[/red] {escape(str(exc))}")
        sys.exit(1)

    console.print(Panel(escape(repr(describe_tree(tree))), title="Parse Tree", border_style="blue"))

    table = Table(title="Paths", box=box.SIMPLE)
    table.add_column("#", style="dim")
    table.add_column("Path", style="cyan")
    for index, path in enumerate(paths, start=1):
        table.add_row(str(index), escape(format_path(path)))
    console.print(table)


if __name__ == "__main__":
    cli()
