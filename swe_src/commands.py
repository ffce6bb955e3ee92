#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
CLI commands for the Open SWE Docker workspace.
"""

from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Iterator, Optional

import click
import typer
from rich.table import Table
from typer.core import TyperGroup

from .docker import detect_compose_command, ensure_docker
from .envfiles import setup_env_files
from .errors import OperationInterrupted, WorkspaceError
from .log_config import configure_logging
from .manager import WorkspaceManager, resolve_project_root
from .models import Profile
from .output import (
    console,
    print_banner,
    print_error,
    print_status,
    print_success,
    print_warning,
)
from .schema_utils import generate_config_schema

PROG = "swe"

USAGE = f"""\
Usage: {PROG} [command]

Commands:
  setup       Setup environment files
  prod        Start production environment
  dev         Start development environment
  stop        Stop all services
  logs [svc]  Show logs (optionally for specific service)
  cleanup     Clean up Docker resources
  status      Show services and their URLs
  schema      Generate editor schema for swe.yaml
  help        Show this help message

Examples:
  {PROG} setup
  {PROG} dev
  {PROG} logs web
  {PROG} stop"""


class WorkspaceGroup(TyperGroup):
    """Command group that reports unknown commands with exit code 1"""

    def resolve_command(self, ctx: click.Context, args: list[str]):
        cmd_name = args[0] if args else ""
        if (
            cmd_name
            and not cmd_name.startswith("-")
            and self.get_command(ctx, cmd_name) is None
        ):
            print_error(f"Unknown command: {cmd_name}")
            print_status(f"Use '{PROG} help' for usage information")
            ctx.exit(1)
        return super().resolve_command(ctx, args)


app = typer.Typer(
    name=PROG,
    cls=WorkspaceGroup,
    help="Docker Compose helper for the Open SWE web app and agent",
    add_completion=False,
    context_settings={"help_option_names": []},
)

# Subcommands keep click's own help; the group prints USAGE for -h/--help
COMMAND_CONTEXT = {"help_option_names": ["-h", "--help"]}


@dataclass
class CliState:
    project_dir: Optional[Path] = None


@contextmanager
def handle_errors() -> Iterator[None]:
    """Print a WorkspaceError and exit with its code"""
    try:
        yield
    except OperationInterrupted as e:
        console.print(f"\n[yellow]{e}[/yellow]")
        raise typer.Exit(e.exit_code)
    except WorkspaceError as e:
        print_error(str(e))
        for hint in e.hints:
            print_status(hint)
        raise typer.Exit(e.exit_code)


def _state(ctx: typer.Context) -> CliState:
    state = ctx.find_object(CliState)
    return state if state is not None else CliState()


def prepare_workspace(ctx: typer.Context) -> WorkspaceManager:
    """Check prerequisites and the project layout, in that order"""
    ensure_docker()
    compose_cmd = detect_compose_command()
    print_success(
        "Docker and Docker Compose are installed "
        f"(using: {' '.join(compose_cmd)})"
    )

    print_status("Verifying project root directory...")
    project_root = resolve_project_root(_state(ctx).project_dir, Path.cwd())
    manager = WorkspaceManager(project_root, compose_cmd)
    manager.verify_project()
    return manager


# ============================================================================
# CLI Commands
# ============================================================================


def print_usage() -> None:
    console.print(USAGE, markup=False, highlight=False)


def _usage_callback(value: bool) -> None:
    if value:
        print_banner()
        print_usage()
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    project_dir: Annotated[
        Optional[Path],
        typer.Option(
            "-C",
            "--project-dir",
            envvar="SWE_PROJECT_DIR",
            help="Project root (defaults to the git work tree or cwd)",
        ),
    ] = None,
    verbose: Annotated[
        bool, typer.Option("-v", "--verbose", help="Enable debug logging")
    ] = False,
    show_help: Annotated[
        bool,
        typer.Option(
            "-h",
            "--help",
            is_eager=True,
            callback=_usage_callback,
            help="Show this help message",
        ),
    ] = False,
):
    """Docker Compose helper for the Open SWE web app and agent"""
    configure_logging(verbose)
    ctx.obj = CliState(project_dir=project_dir)

    print_banner()

    if ctx.invoked_subcommand is None:
        print_error("Unknown command: ")
        print_status(f"Use '{PROG} help' for usage information")
        raise typer.Exit(1)


@app.command(context_settings=COMMAND_CONTEXT)
def setup(ctx: typer.Context):
    """Setup environment files"""
    with handle_errors():
        manager = prepare_workspace(ctx)
        setup_env_files(manager.project_root, manager.config.apps)


def _start(ctx: typer.Context, profile: Profile, cache: bool) -> None:
    with handle_errors():
        manager = prepare_workspace(ctx)
        setup_env_files(manager.project_root, manager.config.apps)
        manager.start(profile, no_cache=False if cache else None)


@app.command("prod", context_settings=COMMAND_CONTEXT)
def prod(
    ctx: typer.Context,
    cache: Annotated[
        bool, typer.Option("--cache", help="Allow cached image layers")
    ] = False,
):
    """Start production environment"""
    _start(ctx, Profile.PRODUCTION, cache)


app.command("production", hidden=True, context_settings=COMMAND_CONTEXT)(prod)


@app.command("dev", context_settings=COMMAND_CONTEXT)
def dev(
    ctx: typer.Context,
    cache: Annotated[
        bool, typer.Option("--cache", help="Allow cached image layers")
    ] = False,
):
    """Start development environment"""
    _start(ctx, Profile.DEVELOPMENT, cache)


app.command(
    "development", hidden=True, context_settings=COMMAND_CONTEXT
)(dev)


@app.command(context_settings=COMMAND_CONTEXT)
def stop(ctx: typer.Context):
    """Stop all services"""
    with handle_errors():
        manager = prepare_workspace(ctx)
        manager.stop()


@app.command(context_settings=COMMAND_CONTEXT)
def logs(
    ctx: typer.Context,
    service: Annotated[
        Optional[str], typer.Argument(help="Service to show logs for")
    ] = None,
    follow: Annotated[
        bool, typer.Option("--follow/--no-follow", help="Follow log output")
    ] = True,
    tail: Annotated[
        Optional[int], typer.Option("--tail", help="Number of lines to show")
    ] = None,
    dev: Annotated[
        bool, typer.Option("--dev", help="Use the development compose file")
    ] = False,
):
    """Show logs (optionally for specific service)"""
    profile = Profile.DEVELOPMENT if dev else Profile.PRODUCTION
    with handle_errors():
        manager = prepare_workspace(ctx)
        manager.show_logs(service, follow=follow, tail=tail, profile=profile)


@app.command(context_settings=COMMAND_CONTEXT)
def cleanup(ctx: typer.Context):
    """Clean up Docker resources"""
    with handle_errors():
        manager = prepare_workspace(ctx)
        manager.cleanup()


@app.command(context_settings=COMMAND_CONTEXT)
def status(
    ctx: typer.Context,
    dev: Annotated[
        bool, typer.Option("--dev", help="Use the development compose file")
    ] = False,
):
    """Show services and their URLs"""
    profile = Profile.DEVELOPMENT if dev else Profile.PRODUCTION
    with handle_errors():
        manager = prepare_workspace(ctx)
        rows = manager.status_rows(profile)

        if not rows:
            print_warning("No services declared in the compose file")
            return

        title = (
            "Development Services"
            if profile is Profile.DEVELOPMENT
            else "Production Services"
        )
        table = Table(
            title=title,
            show_header=True,
            header_style="bold magenta",
        )
        table.add_column("Service", style="cyan", no_wrap=True)
        table.add_column("Status", style="magenta")
        table.add_column("URL", style="yellow")

        for name, is_running, url in rows:
            table.add_row(
                name,
                "[green]Running[/green]" if is_running else "[dim]Stopped[/dim]",
                url or "-",
            )

        console.print()
        console.print(table)
        console.print()
        running = sorted(name for name, is_running, _ in rows if is_running)
        console.print(
            f"[dim]Running services: {', '.join(running) or 'none'}[/dim]"
        )


@app.command(context_settings=COMMAND_CONTEXT)
def schema(
    ctx: typer.Context,
    output: Annotated[
        Optional[Path],
        typer.Option(
            "-o",
            "--output",
            help="Schema file (defaults to .vscode/swe.schema.json in the root)",
        ),
    ] = None,
):
    """Generate editor schema for swe.yaml"""
    project_root = resolve_project_root(_state(ctx).project_dir, Path.cwd())
    try:
        schema_path = generate_config_schema(project_root, output)
    except OSError as e:
        print_error(str(e))
        raise typer.Exit(1)
    console.print(f"[green]✓[/green] Generated {schema_path}", soft_wrap=True)


@app.command("help")
def help_command():
    """Show this help message"""
    print_usage()


def main():
    """Main entry point"""
    app()
