"""CLI interface for cwl-lint using Typer framework."""

import json as jsonlib
import logging
from pathlib import Path
from typing import Annotated, List, Optional

import typer
from rich.console import Console
from rich.markup import escape

from cwl_lint import __description__, __version__
from cwl_lint.config import CwlLintConfig, OutputFormat, load_config
from cwl_lint.discovery import CwlDiscovery, validate_single_file
from cwl_lint.sinks import FileReport, LintReport
from cwl_lint.validation import LintEngine

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="cwl-lint",
    help=__description__,
    add_completion=False,
    rich_markup_mode="rich"
)

console = Console()


def version_callback(value: bool) -> None:
    """Show version information and exit."""
    if value:
        console.print(f"cwl-lint version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", callback=version_callback, help="Show version and exit")
    ] = False,
) -> None:
    """cwl-lint - Style and structure linter for CWL documents."""


def _load_settings(config: Optional[Path], format: Optional[str]) -> tuple[CwlLintConfig, str]:
    """Load configuration, set up logging, and resolve the output format."""
    try:
        lint_config = load_config(config)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    logging.basicConfig(level=lint_config.logging.level.upper())

    output_format = format or lint_config.output.format
    valid_formats = [f.value for f in OutputFormat]
    if output_format not in valid_formats:
        console.print(f"[red]Error:[/red] Invalid format '{output_format}'. Must be one of: {', '.join(valid_formats)}")
        raise typer.Exit(1)

    return lint_config, output_format


def _lint_file(engine: LintEngine, file_path: Path, display_path: str) -> FileReport:
    """Read and lint one file; read failures surface as OSError."""
    try:
        content = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise OSError(f"Failed to read or lint file {display_path}: {e}") from e
    return FileReport(path=display_path, diagnostics=engine.lint(content))


def _print_file_report(report: FileReport) -> None:
    console.print(f"\nLinting {escape(report.path)}:", soft_wrap=True)
    for line in report.formatted():
        location, _, message = line.partition(" - Error: ")
        console.print(
            f"[yellow]{escape(location)}[/yellow] - [red]Error:[/red] {escape(message)}",
            soft_wrap=True
        )


@app.command()
def check(
    file: Annotated[
        Path,
        typer.Argument(help="CWL file to lint")
    ],
    format: Annotated[
        Optional[str],
        typer.Option("--format", "-f", help="Output format: text, json (default: text)")
    ] = None,
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Configuration file path (default: search for .cwllint.json)")
    ] = None,
) -> None:
    """Lint a single CWL file."""
    _, output_format = _load_settings(config, format)

    try:
        validate_single_file(file)
        report = LintReport()
        report.add(_lint_file(LintEngine.default(), file, str(file)))
    except (FileNotFoundError, ValueError, OSError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    if output_format == OutputFormat.JSON.value:
        console.print_json(jsonlib.dumps(report.to_dict()))
    elif report.total_errors > 0:
        _print_file_report(report.files[0])
    else:
        console.print("[green]No linting errors found.[/green]")

    raise typer.Exit(report.exit_code)


@app.command("check-all")
def check_all(
    root: Annotated[
        Path,
        typer.Argument(help="Directory to search for .cwl files")
    ] = Path("."),
    ignore: Annotated[
        Optional[str],
        typer.Option("--ignore", "-i", help="Files to ignore (comma-separated, relative to root)")
    ] = None,
    exclude: Annotated[
        Optional[List[str]],
        typer.Option("--exclude", "-e", help="Glob pattern to exclude (repeatable)")
    ] = None,
    format: Annotated[
        Optional[str],
        typer.Option("--format", "-f", help="Output format: text, json (default: text)")
    ] = None,
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Configuration file path (default: search for .cwllint.json)")
    ] = None,
) -> None:
    """Lint every CWL file under a directory."""
    lint_config, output_format = _load_settings(config, format)

    if not root.is_dir():
        console.print(f"[red]Error:[/red] Directory '{escape(str(root))}' does not exist.")
        raise typer.Exit(1)

    ignored = list(lint_config.scan.ignore)
    if ignore:
        ignored.extend(entry.strip() for entry in ignore.split(",") if entry.strip())
    patterns = list(lint_config.scan.exclude) + list(exclude or [])

    discovery = CwlDiscovery(root, exclude_patterns=patterns, ignore_files=ignored)
    engine = LintEngine.default()
    report = LintReport()

    try:
        for cwl_file in discovery.discover():
            report.add(_lint_file(engine, cwl_file, discovery.relative_path(cwl_file)))
    except OSError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    logger.info(f"Linted {len(report.files)} files, {report.total_errors} errors")

    if output_format == OutputFormat.JSON.value:
        console.print_json(jsonlib.dumps(report.to_dict()))
        raise typer.Exit(report.exit_code)

    for file_report in report.files:
        if file_report.error_count > 0:
            _print_file_report(file_report)

    total = report.total_errors
    if total == 0:
        console.print("\n[green]No linting errors found.[/green]")
    else:
        console.print(f"\n[red]Found {total} error{'' if total == 1 else 's'}.[/red]")

    raise typer.Exit(report.exit_code)


if __name__ == "__main__":
    app()
