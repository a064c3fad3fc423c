"""CLI entry point for Campus Match."""

import json
import logging
from pathlib import Path
from typing import Annotated

from dotenv import load_dotenv

# Load environment variables from .env.local
# Path: main.py -> campus_match/ -> src/ -> project root
load_dotenv(Path(__file__).parent.parent.parent / ".env.local")

import typer  # noqa: E402
from pydantic import ValidationError  # noqa: E402
from rich.console import Console  # noqa: E402
from rich.panel import Panel  # noqa: E402
from rich.table import Table  # noqa: E402

from campus_match.config import get_settings  # noqa: E402
from campus_match.exceptions import CampusMatchError  # noqa: E402
from campus_match.models.request import MatchRequest  # noqa: E402
from campus_match.output.markdown import format_match_results, save_markdown  # noqa: E402
from campus_match.schemes import available_schemes  # noqa: E402
from campus_match.workflow import run_match  # noqa: E402

app = typer.Typer(
    name="campus-match",
    help="Campus Match - roommate and peer compatibility ranking",
    add_completion=False,
)
console = Console()


def read_request(path: Path) -> MatchRequest:
    """Read and validate a match request JSON file."""
    if not path.exists():
        console.print(f"[red]Error:[/red] File not found: {path}")
        raise typer.Exit(1)
    try:
        return MatchRequest.model_validate_json(path.read_text(encoding="utf-8"))
    except ValidationError as e:
        console.print(f"[red]Error:[/red] Invalid match request in {path}:\n{e}")
        raise typer.Exit(1) from e


@app.command()
def rank(
    request_file: Annotated[
        Path, typer.Argument(help="JSON file with self, candidates and priorities")
    ],
    scheme: Annotated[
        str | None,
        typer.Option("--scheme", "-s", help="Scheme name (overrides the file)"),
    ] = None,
    priority: Annotated[
        list[str] | None,
        typer.Option("--priority", "-p", help="Priority field, up to 3 (overrides the file)"),
    ] = None,
    limit: Annotated[
        int | None, typer.Option("--limit", "-n", min=0, help="Maximum results")
    ] = None,
    search: Annotated[
        str | None, typer.Option("--search", help="Free-text filter on candidates")
    ] = None,
    output: Annotated[
        Path | None, typer.Option("--output", "-o", help="Save a markdown report")
    ] = None,
    as_json: Annotated[bool, typer.Option("--json", help="Print results as JSON")] = False,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Show per-field breakdown")
    ] = False,
) -> None:
    """Rank candidates from a request file."""
    settings = get_settings()
    logging.basicConfig(level=settings.log_level)

    request = read_request(request_file)
    overrides: dict[str, object] = {}
    if scheme is not None:
        overrides["scheme"] = scheme
    if priority:
        overrides["priorities"] = priority
    if limit is not None:
        overrides["limit"] = limit
    if search is not None:
        overrides["search"] = search
    if overrides:
        request = request.model_copy(update=overrides)

    try:
        resolved, results = run_match(request, settings=settings)
    except CampusMatchError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e

    if as_json:
        records = [result.to_record(precision=4) for result in results]
        console.print_json(json.dumps({"scheme": resolved.name, "results": records}))
    else:
        console.print(
            Panel.fit(
                f"[bold blue]Campus Match[/bold blue] - {resolved.name} matches "
                f"for {request.profile.id}",
                border_style="blue",
            )
        )
        if not results:
            console.print("[yellow]No compatible candidates found.[/yellow]")
        else:
            table = Table(show_header=True, header_style="bold")
            table.add_column("#", justify="right")
            table.add_column("Candidate")
            table.add_column("Score", justify="right")
            table.add_column("Matched fields")
            for position, result in enumerate(results, start=1):
                score_color = "green" if result.score >= 10 else "yellow"
                table.add_row(
                    str(position),
                    result.candidate_id,
                    f"[{score_color}]{result.score:.2f}[/{score_color}]",
                    ", ".join(result.matched_fields) or "-",
                )
            console.print(table)

            if verbose:
                for result in results:
                    console.print(f"[dim]{result.candidate_id}:[/dim]")
                    for name, value in result.breakdown.items():
                        console.print(f"  {name:<14} {value:+.2f}")

    if output is not None:
        save_markdown(format_match_results(results, resolved, request.profile.id), output)
        console.print(f"\n[green]Report saved to:[/green] {output}")


@app.command()
def schemes() -> None:
    """List available scoring schemes and their fields."""
    try:
        registry = available_schemes(get_settings().schemes_file)
    except CampusMatchError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e

    for scheme in registry.values():
        table = Table(title=f"{scheme.name} - {scheme.description}", show_header=True)
        table.add_column("Field")
        table.add_column("Kind")
        table.add_column("Weight", justify="right")
        for definition in scheme.definitions:
            table.add_row(definition.name, definition.kind.value, f"{definition.weight:g}")
        console.print(table)


@app.command()
def serve(
    host: Annotated[str | None, typer.Option("--host", help="Bind address")] = None,
    port: Annotated[int | None, typer.Option("--port", help="Bind port")] = None,
) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "campus_match.api:app",
        host=host or settings.host,
        port=port or settings.port,
        log_level=settings.log_level.lower(),
    )


@app.command()
def version() -> None:
    """Show version information."""
    from campus_match import __version__

    console.print(f"Campus Match v{__version__}")


if __name__ == "__main__":
    app()
