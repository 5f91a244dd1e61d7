"""
buildexport — CLI entrypoint.

Usage:
    python -m buildexport.main --help
    buildexport actions
    buildexport export gmake
    buildexport clean gmake
    buildexport config check
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from buildexport import __version__
from buildexport.core.observability.logging_config import setup_from_environment


@click.group()
@click.version_option(version=__version__, prog_name="buildexport")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to workspace.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """buildexport — generate build files from a workspace description."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    setup_from_environment(verbose=verbose, quiet=quiet, debug=debug)

    # Composition root: registered once per process, read-only afterwards
    if "registry" not in ctx.obj:
        from buildexport.actions import build_registry

        ctx.obj["registry"] = build_registry()


def _load(ctx: click.Context):
    from buildexport.core.config.loader import ConfigError, load_workspace

    try:
        return load_workspace(ctx.obj.get("config_path"))
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def actions(ctx: click.Context, as_json: bool) -> None:
    """List the available output backends."""
    registry = ctx.obj["registry"]

    if as_json:
        click.echo(json.dumps([a.to_dict() for a in registry.list_actions()], indent=2))
        return

    click.secho("\n🧰 Actions", fg="cyan", bold=True)
    for action in registry.list_actions():
        click.secho(f"   {action.trigger:<10}", fg="white", bold=True, nl=False)
        click.echo(f" {action.description}")
        if ctx.obj.get("verbose"):
            click.echo(f"              kinds: {', '.join(action.valid_kinds)}")
            click.echo(f"              languages: {', '.join(action.valid_languages)}")
            if action.os:
                click.echo(f"              os: {action.os}")
    click.echo()


@cli.command()
@click.argument("trigger")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def export(ctx: click.Context, trigger: str, as_json: bool) -> None:
    """Generate build files with the TRIGGER backend.

    Examples:

        buildexport export gmake

        buildexport -c path/to/workspace.yml export gmake --json
    """
    from buildexport.actions.registry import ActionError
    from buildexport.actions.vstudio import RendererUnavailableError
    from buildexport.core.export.toolchain import ToolchainUnavailableError
    from buildexport.core.use_cases.export import run_export

    workspace = _load(ctx)

    try:
        result = run_export(workspace, trigger, ctx.obj["registry"])
    except (ActionError, ToolchainUnavailableError, RendererUnavailableError, OSError) as e:
        if as_json:
            click.echo(json.dumps({"error": str(e)}, indent=2))
        else:
            click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    if not ctx.obj.get("quiet"):
        click.secho(f"\n⚙️  {trigger} — {workspace.name}", fg="cyan", bold=True)
        for outcome in result.outcomes:
            if outcome.changed:
                click.secho(f"   ✓ {outcome.name}", fg="green", nl=False)
                click.echo(" (generated)")
            else:
                click.secho(f"   · {outcome.name}", fg="white", nl=False)
                click.echo(" (up to date)")
        click.echo()

    click.secho(
        f"   {result.changed} generated, {result.unchanged} up to date",
        fg="green",
        bold=True,
    )
    click.echo()


@cli.command()
@click.argument("trigger")
@click.pass_context
def clean(ctx: click.Context, trigger: str) -> None:
    """Remove files generated by the TRIGGER backend and build output."""
    from buildexport.actions.registry import ActionError
    from buildexport.core.use_cases.export import run_clean

    workspace = _load(ctx)

    try:
        result = run_clean(workspace, trigger, ctx.obj["registry"])
    except (ActionError, OSError) as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    click.secho(f"🧹 {trigger}: removed output for {result.changed} item(s)", fg="cyan")


@cli.group()
def config() -> None:
    """Workspace configuration commands."""


@config.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_check(ctx: click.Context, as_json: bool) -> None:
    """Validate workspace.yml configuration."""
    from buildexport.core.use_cases.config_check import check_config

    result = check_config(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)

    if result.valid:
        assert result.workspace is not None  # guaranteed when valid
        click.secho("✅ Configuration is valid", fg="green", bold=True)
        click.echo(f"   Workspace: {result.workspace.name}")
        click.echo(f"   Projects: {len(result.workspace.projects)}")
        click.echo(f"   Configurations: {', '.join(result.workspace.configurations) or '-'}")
    else:
        click.secho("❌ Configuration errors:", fg="red", bold=True)
        for err in result.errors:
            click.echo(f"   • {err}")

    if result.warnings:
        click.echo()
        click.secho("⚠️  Warnings:", fg="yellow")
        for warn in result.warnings:
            click.echo(f"   • {warn}")

    if not result.valid:
        click.echo()
        sys.exit(1)

    click.echo()


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
