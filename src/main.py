"""
routedocs — CLI entrypoint.

Usage:
    python -m src.main --help
    python -m src.main generate --routes routes.yml
    python -m src.main status
    python -m src.main config check
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from src.core.observability.logging_config import resolve_level, setup_from_env

from src import __version__

_DECISION_STYLE = {
    "write": ("✏️ ", "green"),
    "skip": ("⏭️ ", "yellow"),
    "overwrite": ("⚠️ ", "red"),
}


@click.group()
@click.version_option(version=__version__, prog_name="routedocs")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to docs.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """routedocs — regenerate API docs without losing manual edits."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    # ── Logging setup (once, at process start) ──────────────────
    setup_from_env(resolve_level(debug=debug, verbose=verbose, quiet=quiet))


@cli.command()
@click.option("--routes", "routes_path", type=click.Path(exists=False), default=None,
              help="Routes file (default: routes.yml next to docs.yml).")
@click.option("--force", is_flag=True, help="Plan as if generate --force were used.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def status(ctx: click.Context, routes_path: str | None, force: bool, as_json: bool) -> None:
    """Show what generate would write or skip (no changes made)."""
    from src.core.use_cases.status import get_status

    result = get_status(
        config_path=ctx.obj.get("config_path"),
        routes_path=Path(routes_path) if routes_path else None,
        force=force,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(1 if result.error else 0)

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    config = result.config
    assert config is not None  # guaranteed after error check above

    if not ctx.obj.get("quiet", False):
        click.secho(f"\n📚 {config.title}", fg="cyan", bold=True)
        click.echo(f"   Sources: {config.output.source_dir}")
        click.echo()

    click.secho(f"   Group pages: {len(result.plan)}", fg="white", bold=True)
    for path, decision in result.plan:
        icon, colour = _DECISION_STYLE[decision.value]
        click.echo(f"     {icon}{path}  ", nl=False)
        click.secho(decision.value, fg=colour)

    modified = [t for t in result.tracked if t.modified]
    if modified:
        click.echo()
        click.secho("   Edited by hand since last generation:", fg="yellow", bold=True)
        for t in modified:
            click.echo(f"     • {t.path}")

    if result.conflicts and not force:
        click.echo()
        click.secho("   (use generate --force to discard manual changes)", fg="yellow")

    click.echo()


@cli.group()
def config() -> None:
    """Documentation configuration commands."""


@config.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_check(ctx: click.Context, as_json: bool) -> None:
    """Validate docs.yml configuration."""
    from src.core.use_cases.config_check import check_config

    result = check_config(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)
        return

    if result.valid:
        assert result.config is not None  # guaranteed when valid
        click.secho("✅ Configuration is valid", fg="green", bold=True)
        click.echo(f"   Title: {result.config.title}")
        click.echo(f"   Type: {result.config.type}")
        click.echo(f"   Languages: {', '.join(result.config.example_languages) or 'none'}")
        click.echo(f"   Postman: {'enabled' if result.config.postman.enabled else 'disabled'}")
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


# ── Sub-command groups ──────────────────────────────────────────

from src.ui.cli.docs import generate

cli.add_command(generate)


if __name__ == "__main__":
    cli()
