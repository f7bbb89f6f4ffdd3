"""Typer CLI entrypoint for placement eligibility runs."""

from __future__ import annotations

from pathlib import Path
from typing import Any, List, Optional

import typer
import yaml
from pydantic import ValidationError

from .config import load_document
from .container import create_container
from .errors import PlacementEngineError
from .logging import configure_logging
from .pipeline import AuditLogger, StudentLoadError
from .schemas.config import load_config

app = typer.Typer(help="Placement offer eligibility CLI.")


@app.command()
def run(
    students: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Students JSON or JSONL path."),
    company: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Company JSON path."),
    output: Path = typer.Option(
        ...,
        exists=False,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
        help="Output JSON path.",
    ),
    policies: Optional[str] = typer.Option(None, help="Policy document path (YAML/JSON) or http(s) URL."),
    company_index: Optional[int] = typer.Option(None, min=0, help="Company position when the file holds a list."),
    accept: Optional[List[int]] = typer.Option(None, help="Student id accepting the offer; repeatable."),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
    log_level: str = typer.Option("INFO", help="Log level for structured logging."),
    audit_log: Optional[Path] = typer.Option(None, dir_okay=False, help="Audit log output (JSONL)."),
) -> None:
    """Evaluate every student against one company and write the summary report."""
    settings: dict[str, Any] = {}
    if config:
        try:
            app_config = load_config(load_document(config))
        except (ValidationError, yaml.YAMLError) as exc:
            raise typer.BadParameter(f"Invalid config file: {exc}", param_hint="'--config'") from exc
        settings = app_config.to_settings()

    if policies is None and "policies" not in settings:
        raise typer.BadParameter("Provide --policies or a 'policies' entry in --config", param_hint="'--policies'")

    configure_logging(log_level)

    container = create_container(settings=settings)
    pipeline = container.pipeline()
    audit_logger = AuditLogger(audit_log) if audit_log else None
    index = company_index if company_index is not None else container.config.report.company_index()

    try:
        report = pipeline.run(
            students_path=students,
            company_path=company,
            output_path=output,
            policies=policies,
            company_index=index,
            accept=accept or [],
            audit_logger=audit_logger,
        )
    except (PlacementEngineError, StudentLoadError, ValueError) as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    counts = report["counts"]
    typer.echo(
        f"Evaluated {counts['total_students']} students: "
        f"{counts['eligible_students']} eligible, {counts['ineligible_students']} ineligible. "
        f"Report saved to {output}."
    )


def main() -> None:
    app()


if __name__ == "__main__":
    main()
