"""CLI interface for dsflint using Typer framework."""

import json as jsonlib
import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from slugify import slugify

from dsflint import __description__, __version__
from dsflint.authorization import AuthorizationCodeCache
from dsflint.config import LinterConfig, LogLevel, OutputFormat, load_config
from dsflint.diagnostics import Severity, UnitReport, ValidationStatus
from dsflint.discovery import UnitDiscovery
from dsflint.engine import ValidationReport, seed_code_cache, validate_units
from dsflint.errors import NoUnitsDiscoveredError, SetupError
from dsflint.introspection import ClassIndexIntrospector
from dsflint.models.unit import Unit
from dsflint.parser import DocumentParser
from dsflint.resources.catalog import build_catalog

app = typer.Typer(
    name="dsflint",
    help=__description__,
    add_completion=False,
    rich_markup_mode="rich"
)

console = Console()
err_console = Console(stderr=True)

EXIT_FINDINGS = 1
EXIT_SETUP_FAILURE = 2

_LOG_LEVELS = {
    LogLevel.ERROR.value: logging.ERROR,
    LogLevel.WARN.value: logging.WARNING,
    LogLevel.INFO.value: logging.INFO,
    LogLevel.DEBUG.value: logging.DEBUG,
}

_STATUS_STYLES = {
    ValidationStatus.PASS: "green",
    ValidationStatus.WARN: "yellow",
    ValidationStatus.FAIL: "red",
}

_SEVERITY_STYLES = {
    Severity.ERROR: "red",
    Severity.WARN: "yellow",
    Severity.INFO: "blue",
    Severity.SUCCESS: "green",
}


def version_callback(value: bool) -> None:
    """Show version information and exit."""
    if value:
        console.print(f"dsflint version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", callback=version_callback, help="Show version and exit")
    ] = False,
) -> None:
    """dsflint - Cross-document linter for DSF process plugins."""


def _configure_logging(config: LinterConfig, verbose: bool) -> None:
    level = logging.DEBUG if verbose else _LOG_LEVELS.get(config.logging.level, logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _load_config_or_exit(config_path: Path | None, project_path: Path) -> LinterConfig:
    try:
        if config_path is None and (project_path / ".dsflint.json").exists():
            config_path = project_path / ".dsflint.json"
        return load_config(config_path)
    except (FileNotFoundError, ValueError) as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(EXIT_SETUP_FAILURE)


def _resource_root(project_path: Path, config: LinterConfig) -> Path:
    """Configured resource sub-root when present, else the project itself."""
    candidate = project_path / config.scan.resource_root
    return candidate if candidate.is_dir() else project_path


def _build_introspector(project_path: Path, config: LinterConfig,
                        discovery: UnitDiscovery) -> ClassIndexIntrospector | None:
    index_files = []
    if config.introspection.class_index:
        index_path = Path(config.introspection.class_index)
        index_files.append(index_path if index_path.is_absolute() else project_path / index_path)
    index_files.extend(discovery.class_indexes.values())
    if not index_files:
        return None

    introspector = ClassIndexIntrospector()
    for index_file in index_files:
        introspector = introspector.merged(ClassIndexIntrospector.from_file(index_file))
    return introspector


def _discover(project_path: Path, config: LinterConfig) -> tuple[UnitDiscovery, list[Unit]]:
    discovery = UnitDiscovery(project_path, config.scan.exclude, config.scan.dependency_directory)
    units = discovery.discover()
    if not units:
        raise NoUnitsDiscoveredError(project_path)
    return discovery, units


@app.command()
def validate(
    path: Annotated[
        Path,
        typer.Argument(help="Project directory containing one or more dsf-plugin.json manifests")
    ] = Path("."),
    format: Annotated[
        OutputFormat | None,
        typer.Option("--format", "-f", help="Output format: table, json, markdown (default: from config)")
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Directory for per-unit JSON reports")
    ] = None,
    config: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Configuration file path (default: search for .dsflint.json)")
    ] = None,
    include_success: Annotated[
        bool,
        typer.Option("--include-success", help="Also list Success diagnostics")
    ] = False,
    fail_on_warn: Annotated[
        bool,
        typer.Option("--fail-on-warn", help="Exit with code 1 when warnings are found")
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Enable debug logging")
    ] = False,
) -> None:
    """Validate every plugin unit found below PATH."""
    path = path.resolve()
    linter_config = _load_config_or_exit(config, path)
    _configure_logging(linter_config, verbose)

    output_format = OutputFormat(format or linter_config.output.format)
    include_success = include_success or linter_config.validation.include_success
    fail_on_warn = fail_on_warn or linter_config.validation.fail_on_warn
    output_dir = output or (Path(linter_config.output.directory) if linter_config.output.directory else None)

    try:
        discovery, units = _discover(path, linter_config)
        introspector = _build_introspector(path, linter_config, discovery)
        report = validate_units(
            units,
            _resource_root(path, linter_config),
            project_root=path,
            introspector=introspector,
            config=linter_config,
        )
    except (SetupError, ValueError) as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(EXIT_SETUP_FAILURE)

    if output_format == OutputFormat.JSON:
        console.print_json(jsonlib.dumps(report.to_dict(include_success)))
    elif output_format == OutputFormat.MARKDOWN:
        _print_markdown(report, include_success)
    else:
        _print_tables(report, include_success)

    if output_dir is not None:
        _write_reports(report, output_dir, include_success)

    raise typer.Exit(report.exit_code(fail_on_warn))


def _print_tables(report: ValidationReport, include_success: bool) -> None:
    for unit_id, unit_report in report.per_unit.items():
        status_color = _STATUS_STYLES[unit_report.status]
        console.print(f"\n[bold]{unit_id}[/bold] [{status_color}]{unit_report.status.value.upper()}[/{status_color}]")

        diagnostics = unit_report.diagnostics if include_success else unit_report.problems()
        if not diagnostics:
            console.print("[green]No issues found![/green]")
            continue

        table = Table()
        table.add_column("Severity", style="white")
        table.add_column("Code", style="cyan")
        table.add_column("Subject", style="white")
        table.add_column("Message", style="white")
        table.add_column("Location", style="dim")
        for diagnostic in diagnostics:
            color = _SEVERITY_STYLES[diagnostic.severity]
            location = diagnostic.file or ""
            if diagnostic.process_id:
                location += f" ({diagnostic.process_id})"
            table.add_row(
                f"[{color}]{diagnostic.severity.value.upper()}[/{color}]",
                diagnostic.code.value,
                diagnostic.subject,
                diagnostic.message,
                location,
            )
        console.print(table)

    if report.leftovers.all_leftovers:
        console.print(f"\n[yellow]Unreferenced resources:[/yellow] {len(report.leftovers.all_leftovers)}")

    stats_table = Table(title="Diagnostics")
    stats_table.add_column("Kind", style="cyan")
    for severity in Severity:
        stats_table.add_column(severity.value.title(), justify="right")
    for kind, counts in report.stats.items():
        stats_table.add_row(kind, *(str(counts[severity.value]) for severity in Severity))
    console.print(stats_table)


def _print_markdown(report: ValidationReport, include_success: bool) -> None:
    console.print("# Validation Report")
    console.print(f"**Status:** {report.status.value}")
    console.print()
    for unit_id, unit_report in report.per_unit.items():
        console.print(f"## {unit_id} ({unit_report.status.value})")
        diagnostics = unit_report.diagnostics if include_success else unit_report.problems()
        for diagnostic in diagnostics:
            console.print(f"- **{diagnostic.severity.value.upper()}** {diagnostic.code.value} "
                          f"`{diagnostic.subject}`: {diagnostic.message}", markup=False)
        console.print()


def _write_reports(report: ValidationReport, output_dir: Path, include_success: bool) -> None:
    output_dir.mkdir(parents=True, exist_ok=True)
    for unit_id, unit_report in report.per_unit.items():
        _write_unit_report(unit_report, output_dir / f"{slugify(unit_id)}.json", include_success)

    summary_file = output_dir / "summary.json"
    with open(summary_file, "w", encoding="utf-8") as f:
        summary = report.to_dict(include_success)
        summary.pop("units")
        jsonlib.dump(summary, f, indent=2, ensure_ascii=False)

    if report.collaborator_errors is not None:
        report.collaborator_errors.flush_to_filesystem(output_dir)
    console.print(f"[green]Reports written to:[/green] {output_dir}")


def _write_unit_report(unit_report: UnitReport, report_file: Path, include_success: bool) -> None:
    with open(report_file, "w", encoding="utf-8") as f:
        jsonlib.dump(unit_report.to_dict(include_success), f, indent=2, ensure_ascii=False)


@app.command()
def catalog(
    path: Annotated[
        Path,
        typer.Argument(help="Project directory")
    ] = Path("."),
    config: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Configuration file path (default: search for .dsflint.json)")
    ] = None,
) -> None:
    """List the BPMN and FHIR documents below the resource root."""
    path = path.resolve()
    linter_config = _load_config_or_exit(config, path)
    _configure_logging(linter_config, False)

    try:
        resource_catalog = build_catalog(_resource_root(path, linter_config), project_root=path,
                                         exclude_patterns=linter_config.scan.exclude)
    except SetupError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(EXIT_SETUP_FAILURE)

    table = Table(title=f"Resources below {resource_catalog.resource_root}")
    table.add_column("Path", style="cyan")
    table.add_column("Kind", style="white")
    table.add_column("URL", style="dim")
    for document in resource_catalog.documents():
        kind = document.resource_kind.value if document.parsed else "[red]unparsable[/red]"
        table.add_row(document.path, kind, document.logical_url or "")
    console.print(table)

    outside = resource_catalog.outside_root_paths()
    if outside:
        console.print(f"[yellow]Outside the resource root:[/yellow] {', '.join(outside)}")


@app.command()
def codes(
    path: Annotated[
        Path,
        typer.Argument(help="Project directory")
    ] = Path("."),
    config: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Configuration file path (default: search for .dsflint.json)")
    ] = None,
) -> None:
    """Show the code systems and codes known to the authorization code cache."""
    path = path.resolve()
    linter_config = _load_config_or_exit(config, path)
    _configure_logging(linter_config, False)

    try:
        units = UnitDiscovery(path, linter_config.scan.exclude, linter_config.scan.dependency_directory).discover()
        cache: AuthorizationCodeCache = seed_code_cache(
            _resource_root(path, linter_config),
            units,
            parser=DocumentParser(),
            extra_codes=linter_config.codes.extra,
        )
    except (SetupError, ValueError) as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(EXIT_SETUP_FAILURE)

    table = Table(title="Known codes")
    table.add_column("System", style="cyan")
    table.add_column("Codes", style="white")
    for system, system_codes in cache.snapshot().items():
        table.add_row(system, ", ".join(system_codes))
    console.print(table)


if __name__ == "__main__":
    app()
