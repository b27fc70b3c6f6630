"""
CLI Main - Typer command-line interface.
========================================

Commands:
- parse: Parse a course package and show its modules
- show: Display a previously saved course document
- info: Show version and effective configuration
"""

import json
import random
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from coursemap.shared.logging import get_logger, setup_logging
from coursemap.shared.schemas import ComplianceStatus, CourseData

logger = get_logger(__name__)

app = typer.Typer(
    name="coursemap",
    help="""🗺️ CourseMap - Course package mapper with QM-style compliance scoring

Parses a Canvas / IMS Common Cartridge course export (.imscc) into a course
map: title, course code and modules with objective, activity and assessment
counts, each scored against a Quality Matters style heuristic.

COMMANDS OVERVIEW:

  parse    Parse a course package
           -o, --output   Save the course document as JSON
           --json         Print the course document instead of a table
           --seed         Make compliance scores reproducible

  show     Display a saved course document

  info     Show version and configuration

QUICK START:

  coursemap parse biology.imscc
  coursemap parse biology.imscc -o biology.json
  coursemap show biology.json
""",
    add_completion=False,
    rich_markup_mode="rich",
)

console = Console()

STATUS_STYLES = {
    ComplianceStatus.COMPLIANT.value: "green",
    ComplianceStatus.PARTIAL.value: "yellow",
    ComplianceStatus.NON_COMPLIANT.value: "red",
}


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level", "-l",
        help="Log level (DEBUG, INFO, WARNING, ERROR). Defaults to configuration.",
    ),
):
    """Configure logging before running a command."""
    from coursemap.shared.config import get_settings

    settings = get_settings()
    setup_logging(
        level=log_level or settings.get_effective_log_level(),
        use_rich=settings.logging.rich_console,
        log_file=settings.logging.file or None,
        log_format=settings.logging.format,
        force=True,
    )


# ─────────────────────────────────────────────────────────────────────────────
# Rendering
# ─────────────────────────────────────────────────────────────────────────────


def render_course(course: CourseData, strategy: Optional[str] = None) -> None:
    """Print a course summary panel and a module table."""
    overall = course.overall_score()
    overall_style = "green" if overall >= 85 else "yellow" if overall >= 70 else "red"

    lines = [
        f"[bold]{escape(course.title)}[/bold]",
        f"Code: {course.code}",
        f"Modules: {len(course.modules)}",
        f"Overall QM score: [{overall_style}]{overall}%[/{overall_style}]",
    ]
    if strategy:
        lines.append(f"Discovered via: {strategy}")
    console.print(Panel("\n".join(lines), title="🗺️ Course Map"))

    table = Table()
    table.add_column("ID")
    table.add_column("Name")
    table.add_column("Obj.", justify="right")
    table.add_column("Act.", justify="right")
    table.add_column("Assess.", justify="right")
    table.add_column("QM Compliance")

    for module in course.modules:
        compliance = module.qm_compliance
        style = STATUS_STYLES.get(compliance.status, "white")
        table.add_row(
            module.id,
            escape(module.name),
            str(module.objectives),
            str(module.activities),
            str(module.assessments),
            f"[{style}]{compliance.label()}[/{style}]",
        )

    console.print(table)


# ─────────────────────────────────────────────────────────────────────────────
# Parse Command
# ─────────────────────────────────────────────────────────────────────────────


@app.command()
def parse(
    package: Path = typer.Argument(
        ...,
        help="Course export package (.imscc or .zip).",
    ),
    output_file: Optional[Path] = typer.Option(
        None,
        "--output", "-o",
        help="Save the parsed course document to this JSON file.",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the course document as JSON instead of a table.",
    ),
    seed: Optional[int] = typer.Option(
        None,
        "--seed",
        help="Seed for compliance scores and course code digits.",
    ),
):
    """
    📦 Parse a course package into a course map.

    Reads the manifest and module descriptors of the package, counts
    objectives, activities and assessments per module and scores each module.

    Examples:
        coursemap parse biology.imscc
        coursemap parse biology.imscc --json
        coursemap parse biology.imscc -o data/biology.json --seed 7
    """
    from coursemap.extraction.pipeline import CoursePackageParser
    from coursemap.shared.errors import ArchiveError, UploadValidationError
    from coursemap.shared.utils import save_course_data

    rng = random.Random(seed) if seed is not None else None
    parser = CoursePackageParser(rng=rng)

    try:
        result = parser.parse_file_detailed(package)
    except UploadValidationError as e:
        console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(1)
    except ArchiveError as e:
        logger.debug(f"Archive error detail: {e.detail}")
        console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(1)

    if as_json:
        console.print_json(json.dumps(result.course.to_document(), ensure_ascii=False))
    else:
        render_course(result.course, strategy=result.strategy)

    if output_file:
        save_course_data(output_file, result.course)
        if not as_json:
            console.print(f"\n[green]✓ Course document saved to {output_file}[/green]")


# ─────────────────────────────────────────────────────────────────────────────
# Show Command
# ─────────────────────────────────────────────────────────────────────────────


@app.command()
def show(
    document: Path = typer.Argument(
        ...,
        help="Course document written by 'coursemap parse --output'.",
    ),
):
    """
    📄 Display a saved course document.

    Examples:
        coursemap show data/biology.json
    """
    from coursemap.shared.utils import load_course_data

    if not document.exists():
        console.print(f"[red]✗ File not found: {document}[/red]")
        raise typer.Exit(1)

    try:
        course = load_course_data(document)
    except (json.JSONDecodeError, ValidationError) as e:
        console.print(f"[red]✗ Not a valid course document: {document}[/red]")
        logger.debug(str(e))
        raise typer.Exit(1)

    render_course(course)


# ─────────────────────────────────────────────────────────────────────────────
# Info Command
# ─────────────────────────────────────────────────────────────────────────────


@app.command()
def info():
    """
    ℹ️ Show version and effective configuration.
    """
    from coursemap import __version__
    from coursemap.shared.config import DEFAULT_CONFIG_FILE, get_settings

    settings = get_settings()
    archive = settings.archive
    seed = settings.get_effective_seed()

    console.print(Panel(
        f"[bold]CourseMap[/bold]\n"
        f"Version: {__version__}\n"
        f"Config: {DEFAULT_CONFIG_FILE} [{'✓' if DEFAULT_CONFIG_FILE.exists() else '✗'}]",
        title="ℹ️ Info",
    ))

    table = Table(title="Settings")
    table.add_column("Setting")
    table.add_column("Value")
    table.add_row("Manifest entry", archive.manifest_name)
    table.add_row("Module marker", archive.module_marker)
    table.add_row("Descriptor extensions", ", ".join(archive.descriptor_extensions))
    table.add_row("Accepted uploads", ", ".join(archive.accepted_extensions))
    table.add_row("Max upload size", f"{archive.max_file_size_mb} MB")
    table.add_row("Read workers", str(archive.read_workers))
    table.add_row("Score seed", "random" if seed is None else str(seed))
    table.add_row("Log level", settings.get_effective_log_level())

    console.print(table)


# ─────────────────────────────────────────────────────────────────────────────
# Entry Point
# ─────────────────────────────────────────────────────────────────────────────


def cli():
    """CLI entry point."""
    app()


if __name__ == "__main__":
    cli()
