"""Typer-powered command-line interface for shortest ancestral path queries."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from wordnet_sap import SAP, Outcast, WordNet, read_digraph

from .config import DEFAULT_CACHE_SIZE, DEFAULT_LOG_LEVEL, EngineOptions, configure_logging

LOGGER = logging.getLogger(__name__)

app = typer.Typer(help="Shortest ancestral paths in digraphs and the WordNet noun lexicon.")
console = Console()


def _options(cache_size: int, log_level: str) -> EngineOptions:
    try:
        options = EngineOptions(cache_size=cache_size, log_level=log_level)
    except ValueError as exc:
        console.print(f"[bold red]{exc}[/bold red]")
        raise typer.Exit(code=1) from exc
    configure_logging(options)
    LOGGER.debug("Engine options: %s", options.describe())
    return options


def _load_wordnet(synsets: Path, hypernyms: Path, options: EngineOptions) -> WordNet:
    try:
        return WordNet(synsets, hypernyms, cache_size=options.cache_size)
    except (ValueError, FileNotFoundError) as exc:
        console.print(f"[bold red]Could not load WordNet:[/bold red] {exc}")
        raise typer.Exit(code=1) from exc


@app.command("sap")
def sap_command(
    graph_path: Path = typer.Argument(..., help="Digraph text file: V, E, then E vertex pairs."),
    pairs: List[str] = typer.Option(
        ...,
        "--pair",
        help="Vertex pair 'v,w'. Either side may be a set written as 'a+b+c'.",
        rich_help_panel="Query parameters",
    ),
    cache_size: int = typer.Option(
        DEFAULT_CACHE_SIZE, "--cache-size", help="Results remembered per engine.", rich_help_panel="Advanced"
    ),
    log_level: str = typer.Option(DEFAULT_LOG_LEVEL, "--log-level", help="Python logging level.", rich_help_panel="Advanced"),
) -> None:
    """Report SAP length and ancestor for each requested vertex pair."""

    options = _options(cache_size, log_level)
    try:
        graph = read_digraph(graph_path)
    except (ValueError, FileNotFoundError) as exc:
        console.print(f"[bold red]Could not read digraph:[/bold red] {exc}")
        raise typer.Exit(code=1) from exc

    engine = SAP(graph, cache_size=options.cache_size)
    table = Table(title=f"Shortest ancestral paths ({graph.num_vertices} vertices)")
    table.add_column("v", justify="right")
    table.add_column("w", justify="right")
    table.add_column("Length", justify="right")
    table.add_column("Ancestor", justify="right")
    for pair in pairs:
        try:
            v, w = _parse_pair(pair)
            result = engine.query(v, w)
        except ValueError as exc:
            console.print(f"[bold red]Invalid pair {pair!r}:[/bold red] {exc}")
            raise typer.Exit(code=1) from exc
        table.add_row(_format_side(v), _format_side(w), str(result.length), str(result.ancestor))
    console.print(table)


@app.command("distance")
def distance_command(
    synsets: Path = typer.Argument(..., help="Synsets CSV file."),
    hypernyms: Path = typer.Argument(..., help="Hypernyms CSV file."),
    noun_a: str = typer.Argument(...),
    noun_b: str = typer.Argument(...),
    cache_size: int = typer.Option(DEFAULT_CACHE_SIZE, "--cache-size", rich_help_panel="Advanced"),
    log_level: str = typer.Option(DEFAULT_LOG_LEVEL, "--log-level", rich_help_panel="Advanced"),
) -> None:
    """Print the distance and shortest common ancestor of two nouns."""

    options = _options(cache_size, log_level)
    wordnet = _load_wordnet(synsets, hypernyms, options)
    try:
        distance = wordnet.distance(noun_a, noun_b)
        ancestor = wordnet.sap(noun_a, noun_b)
    except ValueError as exc:
        console.print(f"[bold red]{exc}[/bold red]")
        raise typer.Exit(code=1) from exc
    console.print(f"distance = {distance}, ancestor = {ancestor}")


@app.command("outcast")
def outcast_command(
    synsets: Path = typer.Argument(..., help="Synsets CSV file."),
    hypernyms: Path = typer.Argument(..., help="Hypernyms CSV file."),
    noun_files: List[Path] = typer.Argument(..., help="Files of whitespace separated nouns."),
    cache_size: int = typer.Option(DEFAULT_CACHE_SIZE, "--cache-size", rich_help_panel="Advanced"),
    log_level: str = typer.Option(DEFAULT_LOG_LEVEL, "--log-level", rich_help_panel="Advanced"),
) -> None:
    """Print the outcast noun of each input file."""

    options = _options(cache_size, log_level)
    outcast = Outcast(_load_wordnet(synsets, hypernyms, options))
    for path in noun_files:
        try:
            nouns = path.read_text(encoding="utf8").split()
            answer = outcast.outcast(nouns)
        except (ValueError, FileNotFoundError) as exc:
            console.print(f"[bold red]{path}:[/bold red] {exc}")
            raise typer.Exit(code=1) from exc
        console.print(f"{path}: {answer}")


def _parse_pair(text: str) -> tuple[int | list[int], int | list[int]]:
    parts = text.split(",")
    if len(parts) != 2:
        raise ValueError("expected two comma separated sides")
    return _parse_side(parts[0]), _parse_side(parts[1])


def _parse_side(text: str) -> int | list[int]:
    chunks = [chunk.strip() for chunk in text.split("+")]
    try:
        values = [int(chunk) for chunk in chunks if chunk]
    except ValueError as exc:
        raise ValueError(f"invalid vertex id in {text!r}") from exc
    if "+" not in text and len(values) == 1:
        return values[0]
    return values


def _format_side(side: int | list[int]) -> str:
    if isinstance(side, int):
        return str(side)
    return "{" + ", ".join(str(v) for v in side) + "}"


def main() -> None:
    """Entry point for ``python -m wordnet_sap_cli``."""

    app()


if __name__ == "__main__":
    main()
