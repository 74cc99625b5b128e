# ABOUTME: Provides the CLI for querying grade statistics from a record snapshot.
# ABOUTME: Validates identifiers at the boundary and renders results as tables or JSON.

import json
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

import typer
from rich.console import Console
from rich.table import Table

from .aggregation import (
    class_entry_average,
    class_summary,
    learner_averages,
    pass_rate_above,
    per_class_averages_for_learner,
)
from .config import AggregationConfig, load_config
from .reports import build_record_report, write_report
from .schemas import GradeRecord
from .store import (
    InvalidIdentifierError,
    filter_by_class,
    filter_by_learner,
    load_grade_records,
    normalize_class_id,
    parse_identifier,
)
from .weighting import WeightedAverageCalculator

console = Console()
app = typer.Typer(help="Weighted grade statistics over learner grade records.")

RECORDS_OPTION = typer.Option(..., "--records", exists=True, dir_okay=False, help="Grade records (.json, .jsonl, .parquet).")
CONFIG_OPTION = typer.Option(None, "--config", exists=True, dir_okay=False, help="Aggregation config YAML.")
JSON_OPTION = typer.Option(False, "--json", help="Print JSON instead of a table.")


def _load(records_path: Path, config_path: Optional[Path] = None) -> Tuple[List[GradeRecord], AggregationConfig]:
    try:
        config = load_config(config_path)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--config") from exc
    try:
        records = load_grade_records(records_path)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--records") from exc
    typer.echo(f"[grade-stats] Loaded {len(records)} records from {records_path}", err=True)
    return records, config


def _calculator(config: AggregationConfig) -> WeightedAverageCalculator:
    return WeightedAverageCalculator.from_config(config)


def _print_rows(title: str, rows: Sequence[Dict], as_json: bool) -> None:
    if as_json:
        typer.echo(json.dumps(list(rows), indent=2, default=str))
        return
    table = Table(title=title, show_header=True, header_style="bold magenta")
    if not rows:
        console.print(table)
        return
    for column in rows[0]:
        table.add_column(column)
    for row in rows:
        table.add_row(*(f"{value:.2f}" if isinstance(value, float) else str(value) for value in row.values()))
    console.print(table)


def _parse_or_bad_parameter(raw: str, name: str, param_hint: str) -> int:
    try:
        return parse_identifier(raw, name=name)
    except InvalidIdentifierError as exc:
        raise typer.BadParameter(str(exc), param_hint=param_hint) from exc


@app.command()
def stats(
    records_path: Path = RECORDS_OPTION,
    threshold: Optional[float] = typer.Option(None, "--threshold", help="Passing cutoff; defaults to the config value."),
    config_path: Optional[Path] = CONFIG_OPTION,
    as_json: bool = JSON_OPTION,
) -> None:
    """Count learners whose weighted average is above the threshold."""
    records, config = _load(records_path, config_path)
    cutoff = config.threshold if threshold is None else threshold
    result = pass_rate_above(records, threshold=cutoff, calculator=_calculator(config))
    _print_rows(f"Learners above {cutoff:g}", [result.to_dict()], as_json)


@app.command("learner-avg-class")
def learner_avg_class(
    learner_id: str = typer.Argument(..., help="Learner identifier."),
    records_path: Path = RECORDS_OPTION,
    config_path: Optional[Path] = CONFIG_OPTION,
    as_json: bool = JSON_OPTION,
) -> None:
    """Weighted average of one learner's grades, per class."""
    learner = _parse_or_bad_parameter(learner_id, "learner ID", "LEARNER_ID")
    records, config = _load(records_path, config_path)
    averages = per_class_averages_for_learner(filter_by_learner(records, learner), calculator=_calculator(config))
    if not averages:
        console.print(f"[yellow]Not found: no records for learner {learner}[/yellow]")
        raise typer.Exit(code=1)
    _print_rows(f"Learner {learner} class averages", [avg.to_dict() for avg in averages], as_json)


@app.command("class-stats")
def class_stats(
    class_id: str = typer.Argument(..., help="Numeric class identifier."),
    records_path: Path = RECORDS_OPTION,
    threshold: Optional[float] = typer.Option(None, "--threshold", help="Passing cutoff; defaults to the config value."),
    config_path: Optional[Path] = CONFIG_OPTION,
    as_json: bool = JSON_OPTION,
) -> None:
    """Learner count and share above the threshold for one class."""
    wanted = _parse_or_bad_parameter(class_id, "class ID", "CLASS_ID")
    records, config = _load(records_path, config_path)
    cutoff = config.threshold if threshold is None else threshold
    summary = class_summary(filter_by_class(records, wanted), threshold=cutoff)
    if summary is None:
        console.print(f"[yellow]No data found for this class ({wanted})[/yellow]")
        raise typer.Exit(code=1)
    _print_rows(f"Class {wanted} summary", [summary.to_dict()], as_json)


@app.command("class-average")
def class_average(
    class_id: str = typer.Argument(..., help="Class identifier (numeric or text)."),
    records_path: Path = RECORDS_OPTION,
    as_json: bool = JSON_OPTION,
) -> None:
    """Mean of every score entry recorded for one class."""
    if not class_id.strip():
        raise typer.BadParameter("Class ID is required", param_hint="CLASS_ID")
    wanted = normalize_class_id(class_id)
    records, _ = _load(records_path)
    result = class_entry_average(filter_by_class(records, wanted))
    if result is None:
        console.print(f"[yellow]No data found for the specified class ({wanted})[/yellow]")
        raise typer.Exit(code=1)
    _print_rows(f"Class {wanted} entry average", [result.to_dict()], as_json)


@app.command()
def learners(
    records_path: Path = RECORDS_OPTION,
    config_path: Optional[Path] = CONFIG_OPTION,
    as_json: bool = JSON_OPTION,
) -> None:
    """Overall weighted average per learner across all of their classes."""
    records, config = _load(records_path, config_path)
    averages = learner_averages(records, calculator=_calculator(config))
    _print_rows("Learner averages", [avg.to_dict() for avg in averages], as_json)


@app.command()
def export(
    records_path: Path = RECORDS_OPTION,
    output: Path = typer.Option(Path("reports/grade_stats.parquet"), "--output", help="Parquet or CSV destination."),
    config_path: Optional[Path] = CONFIG_OPTION,
) -> None:
    """Write one row of statistics per record."""
    records, config = _load(records_path, config_path)
    report = build_record_report(records, calculator=_calculator(config), threshold=config.threshold)
    written = write_report(report, output)
    typer.echo(f"[grade-stats] Wrote {len(report)} rows to {written}")


def main():
    app()


if __name__ == "__main__":
    main()
