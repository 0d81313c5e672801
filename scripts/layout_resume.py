#!/usr/bin/env python3
"""
Resume Layout CLI

Computes layout plans for resume records using the layout context.

Commands:
    templates - List available template families
    plan      - Compute and print the layout plan of a resume record
    validate  - Compute a layout plan and check it for overlap and overflow

Examples:\n

    layout_resume.py templates                                  # List families

    layout_resume.py plan data/resume.json                      # Professional layout as JSON

    layout_resume.py plan data/resume.yaml -t modern -f yaml    # Modern layout as YAML

    layout_resume.py validate data/resume.json -t creative      # Check a creative layout
"""

import json
import os
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

import typer
from dotenv import load_dotenv
from omegaconf import OmegaConf
from typing_extensions import Annotated

from rework.contexts.layout import analyze_plan, render_layout
from rework.contexts.layout.logger import setup_layout_logger
from rework.contexts.templating import InvalidTemplateConfigError, TemplateRegistry

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))

OUTPUT_FORMATS = ("json", "yaml")


def load_record(input_path: Path) -> Any:
    """Load a raw resume record from a JSON or YAML file."""
    if input_path.suffix.lower() in (".yaml", ".yml"):
        return OmegaConf.to_container(OmegaConf.load(input_path), resolve=True)
    return json.loads(input_path.read_text(encoding="utf-8"))


def format_plan(plan_dict: Dict[str, Any], output_format: str) -> str:
    # JSON round trip turns tuples into lists for OmegaConf
    plain = json.loads(json.dumps(plan_dict))
    if output_format == "yaml":
        return OmegaConf.to_yaml(OmegaConf.create(plain)).rstrip()
    return json.dumps(plain, indent=2, ensure_ascii=False)


def start_session_log(verbose: bool, input_path: Path, template: str) -> Path:
    log_dir = LOGS_PATH / f"layout_{datetime.now().strftime('%Y%m%d_%H%M%S')}"
    return setup_layout_logger(
        log_dir,
        console_level="DEBUG" if verbose else "WARNING",
        extra_provenance={"Input": input_path, "Template": template},
    )


app = typer.Typer(
    help="Compute and validate dynamic resume layouts for each template family",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


InputArgument = Annotated[
    Path,
    typer.Argument(help="Resume record (JSON or YAML)", exists=True, dir_okay=False),
]
TemplateOption = Annotated[
    str,
    typer.Option("--template", "-t", help="Template family (unknown names fall back to professional)"),
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Show debug logging on the console"),
]


@app.command("templates")
def templates_command():
    """
    List available template families with their column layout and page target.

    Examples:\n

        $ layout_resume.py templates
    """
    registry = TemplateRegistry()
    try:
        names = registry.names()
        configs = [registry.get_config(name) for name in names]
    except (FileNotFoundError, InvalidTemplateConfigError) as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.secho(f"\n{len(configs)} template families:", fg=typer.colors.BLUE, bold=True)
    for config in configs:
        geometry = config.geometry
        typer.echo(
            f"  {config.name:<14} {geometry.column_layout:<11} "
            f"base {geometry.base_font_size}pt, max height {geometry.max_height}, "
            f"colors {config.colors.primary}/{config.colors.accent}"
        )
    typer.echo("")


@app.command("plan")
def plan_command(
    input_path: InputArgument,
    template: TemplateOption = "professional",
    primary: Annotated[
        Optional[str],
        typer.Option("--primary", help="Primary color override (e.g., '#1e40af')"),
    ] = None,
    accent: Annotated[
        Optional[str],
        typer.Option("--accent", help="Accent color override"),
    ] = None,
    title: Annotated[
        Optional[str],
        typer.Option("--title", help="Fallback display name when the record has none"),
    ] = None,
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help=f"Output format: {', '.join(OUTPUT_FORMATS)}"),
    ] = "json",
    output_path: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Write the plan to this file instead of stdout"),
    ] = None,
    verbose: VerboseOption = False,
):
    """
    Compute the layout plan of a resume record.

    Examples:\n

        $ layout_resume.py plan data/resume.json

        $ layout_resume.py plan data/resume.json -t minimal --primary '#111827'

        $ layout_resume.py plan data/resume.yaml -f yaml -o outs/plan.yaml
    """
    if output_format not in OUTPUT_FORMATS:
        typer.secho(
            f"Error: unknown format '{output_format}', expected one of {OUTPUT_FORMATS}\n",
            fg=typer.colors.RED,
            err=True,
        )
        raise typer.Exit(code=1)

    log_file = start_session_log(verbose, input_path, template)

    try:
        record = load_record(input_path)
        plan = render_layout(
            record, template=template, colors={"primary": primary, "accent": accent}, title=title
        )
    except (ValueError, InvalidTemplateConfigError) as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    rendered = format_plan(plan.to_dict(), output_format)
    if output_path is None:
        typer.echo(rendered)
        return

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(rendered + "\n", encoding="utf-8")
    typer.secho(f"✓ Plan written to {output_path}", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  Blocks: {len(plan.blocks)}, page height: {plan.page_height:.1f}")
    for adjustment in plan.adjustments:
        typer.echo(f"  Adjustment: {adjustment}")
    typer.echo(f"  Log: {log_file}")


@app.command("validate")
def validate_command(
    input_path: InputArgument,
    template: TemplateOption = "professional",
    verbose: VerboseOption = False,
):
    """
    Compute a layout plan and check it for overlap, bounds and overflow.

    Exits with code 1 when any issue is found.

    Examples:\n

        $ layout_resume.py validate data/resume.json

        $ layout_resume.py validate data/resume.json -t modern
    """
    typer.secho(f"\nValidating: {input_path} ({template})", fg=typer.colors.BLUE, bold=True)
    log_file = start_session_log(verbose, input_path, template)

    registry = TemplateRegistry()
    try:
        record = load_record(input_path)
        plan = render_layout(record, template=template, registry=registry)
        max_height = registry.get_config(plan.template).geometry.max_height
    except (ValueError, InvalidTemplateConfigError) as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    diagnostics = analyze_plan(plan, max_height=max_height)
    issues = diagnostics.get_inherited_issues()

    if diagnostics.is_valid:
        typer.secho("\n✓ Validation passed", fg=typer.colors.GREEN, bold=True)
    else:
        typer.secho("\n✗ Validation failed", fg=typer.colors.RED, bold=True)
        typer.echo(f"  Diagnostic issues: {len(issues)}")
        for issue in issues[:10]:
            typer.secho(f"  - {issue}", fg=typer.colors.RED)
        if len(issues) > 10:
            typer.echo(f"  ... and {len(issues) - 10} more")

    typer.echo(f"  Page height: {plan.page_height:.1f} (target {max_height:.1f})")
    for adjustment in plan.adjustments:
        typer.echo(f"  Adjustment: {adjustment}")
    typer.echo(f"  Log: {log_file}")
    typer.echo("")

    raise typer.Exit(code=0 if diagnostics.is_valid else 1)


if __name__ == "__main__":
    app()
