"""CLI entry-point for inspecting and repairing plan documents."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click

from packages.core.errors import PlanEditorError
from packages.core.settings import EditorSettings
from packages.editor.data_model import (
    create_default_plan,
    load_plan_file,
    migrate_plan,
    validate_plan,
)
from packages.editor.geometry import magnetic_snap, snap_point
from packages.editor.hit_testing import find_element_at

logger = logging.getLogger(__name__)


def _read_document(path: str) -> dict:
    try:
        return json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise click.ClickException(f"{path} is not valid JSON: {exc}") from exc


def _write_or_echo(document: dict, output_file: str | None) -> None:
    json_str = json.dumps(document, indent=2)
    if output_file:
        Path(output_file).write_text(json_str)
        logger.info("Wrote plan → %s", output_file)
    else:
        click.echo(json_str)


@click.group()
@click.option(
    "--config", "config_file", default=None, type=click.Path(dir_okay=False),
    help="YAML settings file (defaults to $PLAN_EDITOR_CONFIG).",
)
@click.pass_context
def main(ctx: click.Context, config_file: str | None):
    """Floor-plan editing engine: migrate, validate and query plan documents."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(levelname)s | %(name)s | %(message)s",
    )
    try:
        ctx.obj = EditorSettings.load(config_file)
    except PlanEditorError as exc:
        raise click.ClickException(exc.message) from exc


@main.command()
@click.argument("name", required=False)
@click.option("-o", "--output", "output_file", default=None, help="Output JSON path.")
def new(name: str | None, output_file: str | None):
    """Create an empty plan document."""
    _write_or_echo(create_default_plan(name), output_file)


@main.command()
@click.argument("input_file", type=click.Path(exists=True, dir_okay=False))
@click.option("-o", "--output", "output_file", default=None, help="Output JSON path.")
def migrate(input_file: str, output_file: str | None):
    """Upgrade a plan document to the current schema version."""
    document = _read_document(input_file)
    if not isinstance(document, dict):
        raise click.ClickException(f"{input_file} does not contain a plan object")
    _write_or_echo(migrate_plan(document), output_file)


@main.command()
@click.argument("input_file", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def validate(ctx: click.Context, input_file: str):
    """Report structural and wall-reference errors (exit code 1 if any)."""
    result = validate_plan(_read_document(input_file))
    if result.valid:
        click.echo("valid")
        return
    for error in result.errors:
        click.echo(error)
    ctx.exit(1)


@main.command()
@click.argument("input_file", type=click.Path(exists=True, dir_okay=False))
@click.argument("x", type=float)
@click.argument("y", type=float)
@click.option("--tolerance", type=float, default=None, help="Override every finder's tolerance.")
@click.pass_obj
def hit(settings: EditorSettings, input_file: str, x: float, y: float, tolerance: float | None):
    """Print the element at world point (X, Y)."""
    try:
        plan = load_plan_file(input_file)
    except PlanEditorError as exc:
        raise click.ClickException(exc.message) from exc

    result = find_element_at(
        {"x": x, "y": y},
        plan,
        tolerance if tolerance is not None else settings.hit_test.override,
        tolerances=settings.hit_test.per_kind(),
    )
    if result is None:
        click.echo("none")
        return
    click.echo(json.dumps({
        "type": result.type.value,
        "element": result.element.model_dump(mode="json", by_alias=True),
    }, indent=2))


@main.command()
@click.argument("x", type=float)
@click.argument("y", type=float)
@click.option("--plan", "plan_file", default=None, type=click.Path(exists=True, dir_okay=False),
              help="Snap magnetically to this plan's wall endpoints.")
@click.option("--grid", type=float, default=None, help="Grid size in metres.")
@click.pass_obj
def snap(settings: EditorSettings, x: float, y: float, plan_file: str | None, grid: float | None):
    """Snap world point (X, Y) to the grid or to nearby wall endpoints."""
    grid_size = grid or settings.snap.grid_size
    point = {"x": x, "y": y}
    if plan_file:
        try:
            plan = load_plan_file(plan_file)
        except PlanEditorError as exc:
            raise click.ClickException(exc.message) from exc
        snapped = magnetic_snap(point, plan.walls, settings.snap.magnetic_threshold, grid_size)
    else:
        snapped = snap_point(point, grid_size)
    click.echo(json.dumps(snapped.model_dump()))


if __name__ == "__main__":
    main()
