"""Typer CLI entrypoint for the teacher record rules."""

from __future__ import annotations

from pathlib import Path
from typing import Any, NoReturn, Optional

import typer
from pydantic import ValidationError

from .config import ConfigManager
from .container import create_container
from .logging import configure_logging
from .pipeline import RecordLoadError, RecordsPipeline
from .schemas import load_config

app = typer.Typer(help="Teacher status, headmaster tenure and data quality reports.")

TeachersOption = typer.Option(
    ..., exists=True, readable=True, dir_okay=False, help="Teachers export (JSONL or JSON array)."
)
OutputOption = typer.Option(
    ..., dir_okay=False, resolve_path=True, help="Output JSON path."
)
AsOfOption = typer.Option(None, help="Reference date (YYYY-MM or ISO); defaults to now.")
ConfigOption = typer.Option(
    None, exists=True, readable=True, dir_okay=False, help="YAML config path."
)
LogLevelOption = typer.Option("INFO", help="Log level for structured logging.")


def _build_pipeline(command: str, config: Optional[Path], log_level: str) -> RecordsPipeline:
    settings: dict[str, Any] = {}
    if config:
        try:
            settings = load_config(ConfigManager.read(config)).to_settings()
        except (ValueError, ValidationError) as exc:
            raise typer.BadParameter(str(exc), param_name="config") from exc

    configure_logging(log_level, command=command)
    return create_container(settings=settings).pipeline()


def _report_load_error(exc: RecordLoadError) -> NoReturn:
    typer.echo(f"Could not load {exc.path}:", err=True)
    for message in exc.errors:
        typer.echo(f"  {message}", err=True)
    raise typer.Exit(code=1)


@app.command()
def classify(
    teachers: Path = TeachersOption,
    output: Path = OutputOption,
    as_of: Optional[str] = AsOfOption,
    config: Optional[Path] = ConfigOption,
    log_level: str = LogLevelOption,
) -> None:
    """Assign PNS/Tendik/GTY/GTT to every teacher."""
    pipeline = _build_pipeline("classify", config, log_level)
    try:
        results = pipeline.classify(teachers_path=teachers, output_path=output, as_of=as_of)
    except RecordLoadError as exc:
        _report_load_error(exc)
    typer.echo(f"Classified {len(results)} teachers. Results saved to {output}.")


@app.command()
def alerts(
    teachers: Path = TeachersOption,
    output: Path = OutputOption,
    as_of: Optional[str] = AsOfOption,
    config: Optional[Path] = ConfigOption,
    log_level: str = LogLevelOption,
) -> None:
    """List headmasters nearing or past their term limit."""
    pipeline = _build_pipeline("alerts", config, log_level)
    try:
        results = pipeline.alerts(teachers_path=teachers, output_path=output, as_of=as_of)
    except RecordLoadError as exc:
        _report_load_error(exc)
    typer.echo(f"Found {len(results)} tenure alerts. Results saved to {output}.")


@app.command()
def audit(
    teachers: Path = TeachersOption,
    output: Path = OutputOption,
    as_of: Optional[str] = AsOfOption,
    config: Optional[Path] = ConfigOption,
    log_level: str = LogLevelOption,
) -> None:
    """Run the data quality health check."""
    pipeline = _build_pipeline("audit", config, log_level)
    try:
        results = pipeline.audit(teachers_path=teachers, output_path=output, as_of=as_of)
    except RecordLoadError as exc:
        _report_load_error(exc)
    typer.echo(f"Found {len(results)} data issues. Results saved to {output}.")


@app.command()
def stats(
    teachers: Path = TeachersOption,
    output: Path = OutputOption,
    as_of: Optional[str] = AsOfOption,
    config: Optional[Path] = ConfigOption,
    log_level: str = LogLevelOption,
) -> None:
    """Aggregate dashboard counts."""
    pipeline = _build_pipeline("stats", config, log_level)
    try:
        result = pipeline.stats(teachers_path=teachers, output_path=output, as_of=as_of)
    except RecordLoadError as exc:
        _report_load_error(exc)
    typer.echo(f"Summarised {result['total']} teachers. Results saved to {output}.")


@app.command()
def link(
    teachers: Path = TeachersOption,
    schools: Path = typer.Option(
        ..., exists=True, readable=True, dir_okay=False, help="Schools export (JSONL or JSON array)."
    ),
    output: Path = OutputOption,
    config: Optional[Path] = ConfigOption,
    log_level: str = LogLevelOption,
) -> None:
    """Match teachers to school master data."""
    pipeline = _build_pipeline("link", config, log_level)
    try:
        results = pipeline.link(teachers_path=teachers, schools_path=schools, output_path=output)
    except RecordLoadError as exc:
        _report_load_error(exc)
    linked = sum(1 for item in results if item["school_id"])
    typer.echo(f"Linked {linked} of {len(results)} teachers. Results saved to {output}.")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
