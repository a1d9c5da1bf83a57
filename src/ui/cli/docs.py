"""
CLI command for documentation generation.

Thin wrapper over ``src.core.use_cases.generate``.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

_STATE_STYLE = {
    "written": ("✅", "green"),
    "skipped": ("⏭️ ", "yellow"),
    "failed": ("❌", "red"),
}


def _echo_artifact(artifact: dict) -> None:
    icon, colour = _STATE_STYLE.get(artifact["state"], ("•", "white"))
    label = "overwritten (manual changes discarded)" if artifact.get("forced") else artifact["state"]
    click.echo(f"   {icon} {artifact['path']}  ", nl=False)
    click.secho(label, fg="red" if artifact.get("forced") else colour)
    if artifact.get("error"):
        click.echo(f"      Reason: {artifact['error']}")


@click.command("generate")
@click.option("--routes", "routes_path", type=click.Path(exists=False), default=None,
              help="Routes file (default: routes.yml next to docs.yml).")
@click.option("--force", is_flag=True, help="Overwrite pages even if they were edited by hand.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def generate(ctx: click.Context, routes_path: str | None, force: bool, as_json: bool) -> None:
    """Regenerate Markdown docs and the Postman collection."""
    from src.core.use_cases.generate import run_generate

    result = run_generate(
        config_path=ctx.obj.get("config_path"),
        routes_path=Path(routes_path) if routes_path else None,
        force=force,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.ok else 1)

    if result.error and result.report is None:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    report = result.report
    assert report is not None  # guaranteed after error check above
    data = report.to_dict()

    click.secho(
        f"📚 {result.route_count} route(s) in {result.group_count} group(s)",
        fg="cyan",
        bold=True,
    )
    click.echo()

    for key in ("index", "authentication"):
        if data[key]:
            _echo_artifact(data[key])
    for group in data["groups"]:
        _echo_artifact(group)
    if data["collection"]:
        _echo_artifact(data["collection"])

    click.echo()

    if report.error:
        click.secho(f"❌ {report.error}", fg="red", bold=True)
    if report.skipped:
        click.secho(
            f"⚠️  {len(report.skipped)} page(s) skipped because they were edited by hand "
            "(use --force to discard manual changes)",
            fg="yellow",
        )

    if report.failed:
        click.secho(f"❌ {len(report.failed)} file(s) could not be written", fg="red", bold=True)
    if not result.ok:
        sys.exit(1)

    click.secho(f"✅ Wrote source Markdown files to: {report.source_dir}", fg="green", bold=True)
    if report.collection:
        click.secho(f"✅ Wrote Postman collection to: {report.collection.path}", fg="green", bold=True)
