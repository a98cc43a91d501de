"""CLI for the vVote ballot generation audit verifier.

Commands:
    verify          Verify every printer's ballot generation audit
    verify-ballot   Verify the audit of one ballot serial number
    fiat-shamir     Verify the Fiat-Shamir values and audit selections

Exit codes:
    0   every check passed
    1   at least one check failed
    2   the data could not be loaded
"""

import asyncio
import json
from enum import Enum
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from vvote_verifier import __version__
from vvote_verifier.application.ports.ballot_gen_data_source import BallotGenData
from vvote_verifier.application.services.ballot_generation_verifier import (
    BallotGenerationVerifier,
)
from vvote_verifier.application.services.verifier_registry import (
    VerifierName,
    build_verifier,
)
from vvote_verifier.config.verifier_settings import VerifierSettings
from vvote_verifier.domain.errors.configuration import ConfigurationError
from vvote_verifier.domain.models.verification_report import VerificationReport
from vvote_verifier.infrastructure.adapters.json_lines_store import (
    BallotGenSpec,
    JsonLinesDataStore,
)
from vvote_verifier.infrastructure.observability import (
    configure_structlog,
    generate_run_id,
    set_run_id,
)

EXIT_LOAD_ERROR = 2


class OutputFormat(str, Enum):
    """Output format options."""

    text = "text"
    json = "json"


app = typer.Typer(
    name="vvote-verify",
    help="Independent verifier for the vVote ballot generation audit",
    add_completion=False,
)
console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"vvote-verify version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """vVote Ballot Generation Audit Verifier.

    Re-derives from the published commitments whether the printers generated
    their ballots honestly and audited a fairly chosen subset.
    """
    pass


def _start_run() -> VerifierSettings:
    load_dotenv()
    settings = VerifierSettings.from_environment()
    configure_structlog(environment=settings.log_format)
    set_run_id(generate_run_id())
    return settings


def _load(data_dir: Path, spec_file: Optional[Path]) -> BallotGenData:
    """Load the published data or exit with the load error code."""
    try:
        spec = BallotGenSpec()
        if spec_file is not None:
            with open(spec_file, encoding="utf-8") as f:
                spec = BallotGenSpec.from_json(json.load(f))
        return JsonLinesDataStore(data_dir, spec).load()
    except FileNotFoundError:
        console.print(f"[red]Error:[/red] File not found: {spec_file}", style="bold")
        raise typer.Exit(code=EXIT_LOAD_ERROR)
    except json.JSONDecodeError as e:
        console.print(
            f"[red]Error:[/red] Invalid JSON in {spec_file}: {e.msg}", style="bold"
        )
        raise typer.Exit(code=EXIT_LOAD_ERROR)
    except ConfigurationError as e:
        console.print(f"[red]Error:[/red] {e}", style="bold")
        raise typer.Exit(code=EXIT_LOAD_ERROR)


def _build(data: BallotGenData, settings: VerifierSettings) -> BallotGenerationVerifier:
    return build_verifier(VerifierName.BALLOT_GENERATION, data, settings)


def _data_option() -> Path:
    return typer.Option(
        ...,
        "--data",
        "-d",
        help="Directory holding the extracted commitment data",
        exists=True,
        file_okay=False,
        dir_okay=True,
    )


def _spec_option() -> Optional[Path]:
    return typer.Option(
        None,
        "--spec",
        "-s",
        help="JSON file overriding the data file names",
    )


def _format_option() -> OutputFormat:
    return typer.Option(
        OutputFormat.text,
        "--format",
        "-o",
        help="Output format: text or json",
    )


@app.command()
def verify(
    data_dir: Path = _data_option(),
    spec_file: Optional[Path] = _spec_option(),
    output_format: OutputFormat = _format_option(),
    concurrency: Optional[int] = typer.Option(
        None,
        "--concurrency",
        "-c",
        min=1,
        help="Verify ballots on this many worker threads",
    ),
) -> None:
    """Verify the ballot generation audit of every printer.

    Example:
        vvote-verify verify --data ./ballotgen
        vvote-verify verify --data ./ballotgen --format json --concurrency 8
    """
    settings = _start_run()
    data = _load(data_dir, spec_file)
    verifier = _build(data, settings)
    if concurrency is not None:
        asyncio.run(verifier.do_verification_async(max_concurrency=concurrency))
    else:
        verifier.do_verification()
    _output_report(verifier.report, output_format.value)


@app.command()
def verify_ballot(
    serial_no: str = typer.Argument(
        ...,
        help="Ballot serial number, e.g. Printer1:42",
    ),
    data_dir: Path = _data_option(),
    spec_file: Optional[Path] = _spec_option(),
    output_format: OutputFormat = _format_option(),
) -> None:
    """Verify the audit data of a single ballot.

    A ballot that no printer audited has nothing to check and passes.

    Example:
        vvote-verify verify-ballot Printer1:42 --data ./ballotgen
    """
    settings = _start_run()
    verifier = _build(_load(data_dir, spec_file), settings)
    if not verifier.is_audit_ballot(serial_no) and output_format == OutputFormat.text:
        console.print(f"[yellow]{serial_no} was not audited[/yellow]")
    verifier.do_verification_for(serial_no)
    _output_report(verifier.report, output_format.value)


@app.command()
def fiat_shamir(
    data_dir: Path = _data_option(),
    spec_file: Optional[Path] = _spec_option(),
    output_format: OutputFormat = _format_option(),
) -> None:
    """Verify the Fiat-Shamir values and the audit selection of every printer.

    Example:
        vvote-verify fiat-shamir --data ./ballotgen
    """
    settings = _start_run()
    verifier = _build(_load(data_dir, spec_file), settings)
    verifier.record_load_problems()
    verifier.verify_fiat_shamir_calculation()
    _output_report(verifier.report, output_format.value)


def _output_report(report: VerificationReport, output_format: str) -> None:
    """Output the report in the requested format and set the exit code."""
    if output_format == "json":
        console.print_json(json.dumps(report.to_dict()))
    elif report.verified:
        console.print(
            f"[green]VERIFIED[/green] - {report.checks_passed} checks passed"
        )
    else:
        console.print(
            f"[red]FAILED[/red] - {report.checks_failed} finding(s), "
            f"{report.checks_passed} checks passed"
        )
        table = Table(title="Findings")
        table.add_column("Check", style="cyan")
        table.add_column("Commitment")
        table.add_column("Serial")
        table.add_column("Expected")
        table.add_column("Actual")
        table.add_column("Detail")
        for finding in report.findings:
            table.add_row(
                finding.check.value,
                finding.identifier or "",
                finding.serial_no or "",
                finding.expected or "",
                finding.actual or "",
                finding.detail or "",
            )
        console.print(table)

    if not report.verified:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
