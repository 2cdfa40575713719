#!/usr/bin/env python3
"""
neogrove CLI - Helper commands for the editor plugin
"""

import json
import logging
import sys
from pathlib import Path
from typing import List, NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape

from neogrove.aliases import (
    AliasResolver,
    PathNormalizer,
    collect_notebook_roots,
    filesystem_is_case_insensitive,
)
from neogrove.config import NeogroveConfig, load_config
from neogrove.delegation import FlowRunner, passthrough_args
from neogrove.errors import ConfigError, DiscoveryError, NeogroveError, OutputError
from neogrove.gitstatus import get_extended_status
from neogrove.logging_setup import configure_logging, silent_logger
from neogrove.text import append_question, append_selection
from neogrove.workspace import DiscoveryService, WorkspaceProvider, load_discovery_file

logger = logging.getLogger("neogrove.cli")

PASSTHROUGH = {"allow_extra_args": True, "ignore_unknown_options": True}

app = typer.Typer(
    name="neogrove",
    help="Editor plugin helper for grove",
    add_completion=False,
)
plan_app = typer.Typer(
    help="Interact with grove-flow plans. A wrapper for 'flow plan' commands.",
    no_args_is_help=True,
)
models_app = typer.Typer(
    help="Interact with AI models. A wrapper for 'flow models' commands.",
    no_args_is_help=True,
)
text_app = typer.Typer(
    help="Interact with text selections from the editor.",
    no_args_is_help=True,
)
internal_app = typer.Typer(
    help="Internal commands for the editor plugin",
    no_args_is_help=True,
)
app.add_typer(plan_app, name="plan")
app.add_typer(models_app, name="models")
app.add_typer(text_app, name="text")
app.add_typer(internal_app, name="internal", hidden=True)

console = Console(stderr=False)
err_console = Console(stderr=True)


def _fail(error: Exception | str) -> NoReturn:
    if isinstance(error, NeogroveError):
        logger.debug("Command failed: %s", error.to_dict())
    err_console.print(f"[bold red]Error:[/bold red] {escape(str(error))}", style="red")
    raise typer.Exit(1)


def _options(ctx: typer.Context) -> dict:
    root = ctx.find_root()
    return root.obj if isinstance(root.obj, dict) else {}


def _load_config(ctx: typer.Context) -> NeogroveConfig:
    options = _options(ctx)
    cfg = load_config(options.get("config"))
    configure_logging(options.get("verbose", False), cfg.logging.level)
    return cfg


def _run_flow(ctx: typer.Context, *args: str) -> None:
    try:
        cfg = _load_config(ctx)
        FlowRunner(cfg.flow.command).run(*args)
    except NeogroveError as e:
        _fail(e)


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        help="Path to config file",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output",
    ),
):
    ctx.obj = {"config": config, "verbose": verbose}
    configure_logging(verbose)
    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


@app.command()
def version():
    """Show version information."""
    from neogrove import __version__
    console.print(f"[bold]neogrove[/bold] version [cyan]{__version__}[/cyan]")


@app.command()
def chat(
    ctx: typer.Context,
    file_path: str = typer.Argument(..., help="Note to run"),
):
    """
    Run 'flow run' on the specified file.

    Example:
        neogrove chat ~/notebooks/chats/refactor.md
    """
    logger.debug("Starting chat run for %s", file_path)
    _run_flow(ctx, "run", file_path)
    logger.debug("Chat run completed for %s", file_path)


@plan_app.command("init")
def plan_init(
    ctx: typer.Context,
    directory: Optional[str] = typer.Argument(None, help="Plan directory name"),
    extract_all_from: Optional[str] = typer.Option(
        None,
        "--extract-all-from",
        help="Path to a markdown file to extract all content from into an initial job",
    ),
):
    """Initialize a new plan directory using an interactive wizard."""
    args = ["plan", "init"]
    if directory:
        args.append(directory)
    if extract_all_from:
        args.extend(["--extract-all-from", extract_all_from])
    _run_flow(ctx, *args)


@plan_app.command("list", context_settings=PASSTHROUGH)
def plan_list(ctx: typer.Context):
    """List all available plans. Extra flags (like --json) go to 'flow plan list'."""
    _run_flow(ctx, "plan", "list", *passthrough_args(ctx.args))


@plan_app.command("status", context_settings=PASSTHROUGH)
def plan_status(
    ctx: typer.Context,
    plan: str = typer.Argument(..., help="Plan name or directory"),
):
    """Show the status of a plan."""
    _run_flow(ctx, "plan", "status", plan, *passthrough_args(ctx.args, flags_only=True))


@plan_app.command("add")
def plan_add(
    ctx: typer.Context,
    plan: str = typer.Argument(..., help="Plan name or directory"),
):
    """Add a new job to a plan using an interactive wizard."""
    _run_flow(ctx, "plan", "add", plan, "-i")


@plan_app.command("run")
def plan_run(
    ctx: typer.Context,
    plan: str = typer.Argument(..., help="Plan name or directory"),
):
    """Run a plan."""
    _run_flow(ctx, "plan", "run", plan)


@plan_app.command("template-list", context_settings=PASSTHROUGH)
def plan_template_list(ctx: typer.Context):
    """List available job templates."""
    _run_flow(ctx, "plan", "templates", "list", *passthrough_args(ctx.args))


@plan_app.command("config")
def plan_config(
    ctx: typer.Context,
    plan: str = typer.Argument(..., help="Plan name or directory"),
    get: Optional[str] = typer.Option(
        None,
        "--get",
        help="Get a specific configuration value (e.g., model)",
    ),
    set_: Optional[List[str]] = typer.Option(
        None,
        "--set",
        help="Set a configuration value (e.g., model=gemini-2.0-flash)",
    ),
):
    """View or edit plan configuration."""
    args = ["plan", "config", plan]
    if get:
        args.extend(["--get", get])
    for item in set_ or []:
        args.extend(["--set", item])
    _run_flow(ctx, *args)


@models_app.command("list", context_settings=PASSTHROUGH)
def models_list(ctx: typer.Context):
    """List available models."""
    _run_flow(ctx, "models", *passthrough_args(ctx.args))


@text_app.command("select")
def text_select(
    file: str = typer.Option(
        ...,
        "--file",
        "-f",
        help="Target markdown file to append to",
    ),
    lang: str = typer.Option(
        "",
        "--lang",
        "-l",
        help="Language of the code snippet (e.g., go, lua)",
    ),
):
    """Read a selection from stdin and append it as a code block to the target file."""
    try:
        code = sys.stdin.read()
    except OSError as e:
        _fail(f"failed to read from stdin: {e}")
    try:
        append_selection(file, code, lang)
    except NeogroveError as e:
        _fail(e)
    typer.echo(f"Appended selection to {file}", err=True)


@text_app.command("ask")
def text_ask(
    question: Optional[str] = typer.Argument(None, help="Question to append (read from stdin if omitted)"),
    file: str = typer.Option(
        ...,
        "--file",
        "-f",
        help="Target markdown file to append to",
    ),
):
    """Append a question to the target file."""
    if question is None:
        try:
            question = sys.stdin.read()
        except OSError as e:
            _fail(f"failed to read from stdin: {e}")
    try:
        append_question(file, question)
    except NeogroveError as e:
        _fail(e)
    typer.echo(f"Appended question to {file}", err=True)


@internal_app.command("resolve-aliases")
def resolve_aliases(
    ctx: typer.Context,
    discovery_file: Optional[Path] = typer.Option(
        None,
        "--discovery-file",
        help="Use a pre-built discovery result (JSON) instead of scanning groves",
    ),
    case_insensitive: Optional[bool] = typer.Option(
        None,
        "--case-insensitive/--case-sensitive",
        help="Override platform detection for path case folding",
    ),
):
    """
    Convert absolute file paths to workspace-relative aliases.

    Reads paths from stdin (one per line) and prints a JSON map of input
    paths to their aliases.
    """
    try:
        cfg = _load_config(ctx)
    except ConfigError as e:
        logger.warning("Could not load config for notebook aliases: %s", e)
        cfg = NeogroveConfig()

    try:
        if discovery_file:
            discovery = load_discovery_file(discovery_file)
        else:
            discovery = DiscoveryService(cfg, silent_logger("neogrove.discovery.quiet")).discover_all()
    except NeogroveError as e:
        _fail(DiscoveryError(f"failed to discover workspaces: {e}"))

    if case_insensitive is None:
        case_insensitive = cfg.paths.case_insensitive
    if case_insensitive is None:
        case_insensitive = filesystem_is_case_insensitive()

    provider = WorkspaceProvider(discovery)
    logger.debug("Indexed %d workspaces", len(provider))
    resolver = AliasResolver(
        provider,
        discovery,
        collect_notebook_roots(cfg.notebook_roots, logger),
        PathNormalizer(case_insensitive),
        logger,
    )
    try:
        results = resolver.resolve_stream(sys.stdin)
        output = json.dumps(results, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    except NeogroveError as e:
        _fail(e)
    except (TypeError, ValueError) as e:
        _fail(OutputError(f"failed to marshal results to JSON: {e}"))
    typer.echo(output)


@internal_app.command("git-status")
def git_status(
    path: Optional[str] = typer.Argument(None, help="Path inside a repository (defaults to cwd)"),
):
    """Get extended git status for a path."""
    try:
        target = path or str(Path.cwd())
        status = get_extended_status(target)
        output = json.dumps(status.to_dict(), separators=(",", ":"))
    except Exception as e:
        # Not a repository or unreadable: the plugin expects an empty object
        logger.debug("git status unavailable for %s: %s", path, e)
        output = "{}"
    typer.echo(output)


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
