#!/usr/bin/env python3
# Boom Deployment Planner - Report CLI
# SPDX-License-Identifier: Apache-2.0

"""
Command-line interface for the deployment report service.

Usage:
    boom-report prompt cascade_fast_current
    boom-report record payload.json --report-text "Draft"
    boom-report generate payload.json
    boom-report samples
    boom-report serve --port 8080
"""

import json
import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

console = Console()
logging.basicConfig(level=logging.INFO)


def load_payload(source: str) -> dict:
    """Read a request body from a JSON file or a bundled sample name."""
    from functions.sample_payloads import SAMPLE_PAYLOADS, get_sample

    if source in SAMPLE_PAYLOADS:
        return get_sample(source)

    path = Path(source)
    if not path.exists():
        raise click.BadParameter(f"No such file or sample payload: {source}", param_hint="PAYLOAD")
    try:
        data = json.loads(path.read_text())
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"{path} is not valid JSON: {e}", param_hint="PAYLOAD")
    if not isinstance(data, dict):
        raise click.BadParameter(f"{path} must contain a JSON object", param_hint="PAYLOAD")
    return data


def parse_request(source: str):
    from pydantic import ValidationError

    from boom_report.models import DeploymentReportRequest

    try:
        return DeploymentReportRequest.model_validate(load_payload(source))
    except ValidationError as e:
        raise click.BadParameter(str(e), param_hint="PAYLOAD")


@click.group()
@click.version_option(version="0.1.0", prog_name="boom-report")
def main():
    """
    Boom Deployment Planner - Report Service

    Draft oil-spill boom deployment reports with Gemini and file them in Airtable.
    """
    pass


@main.command()
@click.argument("payload")
def prompt(payload: str):
    """
    Print the prompt that would be sent for PAYLOAD (file or sample name).
    """
    from boom_report.config import ReportSettings
    from boom_report.prompt import SYSTEM_INSTRUCTION, build_prompt

    request = parse_request(payload)
    settings = ReportSettings.from_env()

    console.print(Panel.fit(SYSTEM_INSTRUCTION, title="System Instruction", border_style="blue"))
    console.print(build_prompt(request, settings.spill_type, settings.location), markup=False)


@main.command()
@click.argument("payload")
@click.option("--report-text", default="(report text)", help="Report text to place in the record")
def record(payload: str, report_text: str):
    """
    Print the database record that would be saved for PAYLOAD.
    """
    from boom_report.persister import build_payload

    request = parse_request(payload)
    click.echo(json.dumps(build_payload(request, report_text), indent=2))


@main.command()
@click.argument("payload")
def generate(payload: str):
    """
    Generate and save a report for PAYLOAD using credentials from the environment.
    """
    from boom_report.handler import ReportRequestHandler

    body = load_payload(payload)
    handler = ReportRequestHandler.from_env()

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        progress.add_task("Generating report...", total=None)
        response_data, status = handler.handle("POST", body)

    if status != 200:
        console.print(f"[red]Error ({status}): {response_data.get('message')}[/]")
        if response_data.get("error"):
            console.print(response_data["error"], style="dim", markup=False)
        sys.exit(1)

    console.print(Panel(response_data["reportText"], title="Deployment Report", border_style="green"))
    console.print(f"[dim]Record:[/] {response_data.get('recordId') or 'saved'}")


@main.command()
def samples():
    """
    List the bundled sample payloads.
    """
    from functions.sample_payloads import SAMPLE_PAYLOADS

    table = Table(title="Sample Payloads")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Description", style="green")
    table.add_column("Cascade", style="yellow")

    for name, sample in SAMPLE_PAYLOADS.items():
        table.add_row(name, sample["description"], "yes" if sample["request"].get("isCascade") else "no")

    console.print(table)


@main.command()
@click.option("--host", default="0.0.0.0", help="Bind address (default: 0.0.0.0)")
@click.option("--port", type=int, default=8080, help="Server port (default: 8080)")
def serve(host: str, port: int):
    """
    Run the report API locally with uvicorn.
    """
    import uvicorn

    uvicorn.run("functions.report_function:app", host=host, port=port)


if __name__ == "__main__":
    main()
