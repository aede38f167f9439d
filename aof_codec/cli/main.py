"""
AOF codec CLI.

Commands:
- inspect: Decode a replay file and show its contents
- check: Exit non-zero when a file cannot be read
- upgrade: Re-encode an older revision as the current one
- config: Generate, validate or dump configuration
- version: Show version information
"""

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from .. import __version__
from ..config import AofConfig, load_config, generate_default_config
from ..core.errors import AofError, CorruptFormatError
from ..core.replay import ReplayData, ReplayMetadata, ReplayRecord
from ..formats.revisions import CURRENT_REVISION, REVISIONS
from ..storage import load, save


app = typer.Typer(
    name="aof-codec",
    help="Read, check and upgrade AOF replay files",
    add_completion=False,
)
console = Console()


class OutputFormat(str, Enum):
    json = "json"
    table = "table"


def _setup_logging(cfg: AofConfig, verbose: bool) -> None:
    level = logging.DEBUG if verbose else cfg.logging.level_value
    if cfg.logging.rich:
        handler: logging.Handler = RichHandler(console=console, show_path=False)
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))

    root = logging.getLogger("aof_codec")
    root.handlers[:] = [handler]
    root.setLevel(level)


def _print_replay(metadata: ReplayMetadata, data: ReplayData) -> None:
    """Print metadata, roster and fragment summary."""
    table = Table(title="Replay", show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")

    table.add_row("Revision", str(metadata.file_version))
    table.add_row("Region", str(metadata.region_id))
    table.add_row("Game ID", str(metadata.game_id))
    table.add_row("Riot version", metadata.riot_version)
    table.add_row("Key", metadata.key)
    table.add_row("Complete", "yes" if metadata.complete else "no")
    table.add_row("End of startup", str(metadata.end_startup_chunk_id))
    table.add_row("Start of game", str(metadata.start_game_chunk_id))
    table.add_row("End of game", str(metadata.end_game_chunk_id))
    console.print(table)

    if metadata.players:
        roster = Table(title="Players")
        for column in ("ID", "Name", "Team", "League", "Rank", "Champion", "Spells"):
            roster.add_column(column)
        for p in metadata.players:
            roster.add_row(
                str(p.id), p.name, str(p.team_nr), str(p.league_id),
                str(p.league_rank), str(p.champion_id), f"{p.spell1_id}, {p.spell2_id}",
            )
        console.print(roster)

    fragments = Table(title="Fragments")
    fragments.add_column("Kind")
    fragments.add_column("Count", justify="right")
    fragments.add_column("IDs")
    fragments.add_column("Bytes", justify="right")
    for kind, collection in (("keyframes", data.keyframes), ("chunks", data.chunks)):
        ids = collection.ids()
        fragments.add_row(kind, str(len(collection)), f"{ids[0]}..{ids[-1]}", f"{collection.total_bytes:,}")
    console.print(fragments)


# === INSPECT COMMAND ===

@app.command()
def inspect(
    replay_file: Path = typer.Argument(..., help="Replay file path", exists=True),
    format: OutputFormat = typer.Option(OutputFormat.table, "-f", "--format"),
    output: Optional[Path] = typer.Option(None, "-o", "--output", help="Output file (json only)"),
    config_path: Optional[Path] = typer.Option(None, "-c", "--config"),
    verbose: bool = typer.Option(False, "-v", "--verbose"),
):
    """Decode a replay file and show its contents."""
    _setup_logging(load_config(config_path), verbose)

    try:
        metadata, data = load(replay_file)
    except (AofError, OSError) as e:
        console.print(f"[red]Error:[/] {e}")
        raise typer.Exit(1)

    if format == OutputFormat.json:
        output_text = json.dumps(
            {'metadata': metadata.to_dict(), 'data': data.to_dict()},
            indent=2,
        )
        if output:
            output.write_text(output_text)
            console.print(f"[green]Written to:[/] {output}")
        else:
            typer.echo(output_text)
    else:
        _print_replay(metadata, data)


# === CHECK COMMAND ===

@app.command()
def check(
    replay_file: Path = typer.Argument(..., help="Replay file path"),
    quiet: bool = typer.Option(False, "-q", "--quiet"),
):
    """
    Check that a replay file can be read.

    Exit codes: 0=readable, 1=unreadable, 2=known-corrupt revision
    """
    try:
        metadata, data = load(replay_file)
    except CorruptFormatError as e:
        console.print(f"[red]Corrupt:[/] {e}")
        raise typer.Exit(2)
    except (AofError, OSError) as e:
        console.print(f"[red]Unreadable:[/] {e}")
        raise typer.Exit(1)

    if not quiet:
        console.print(
            f"[green]OK[/] {replay_file} "
            f"(revision {metadata.file_version}, game {metadata.game_id}, "
            f"{len(data.keyframes)} keyframes, {len(data.chunks)} chunks)"
        )


# === UPGRADE COMMAND ===

@app.command()
def upgrade(
    source: Path = typer.Argument(..., help="Replay file to read", exists=True),
    dest: Path = typer.Argument(..., help="Output path"),
    config_path: Optional[Path] = typer.Option(None, "-c", "--config"),
    verbose: bool = typer.Option(False, "-v", "--verbose"),
):
    """Re-encode a replay file with the current revision."""
    cfg = load_config(config_path)
    _setup_logging(cfg, verbose)

    try:
        metadata, data = load(source)
    except (AofError, OSError) as e:
        console.print(f"[red]Error reading {source}:[/] {e}")
        raise typer.Exit(1)

    target = dest.with_suffix('') if dest.suffix == cfg.storage.extension else dest

    try:
        result = save(ReplayRecord(metadata=metadata, data=data), target.resolve(), cfg)
    except (AofError, OSError) as e:
        console.print(f"[red]Error writing {dest}:[/] {e}")
        raise typer.Exit(1)

    for warning in result.warnings:
        console.print(f"[yellow]Warning:[/] {warning}")

    console.print(
        f"[green]Upgraded[/] revision {metadata.file_version} → {CURRENT_REVISION}: "
        f"{result.path} ({result.size:,} bytes)"
    )


# === CONFIG COMMAND ===

@app.command("config")
def config_cmd(
    action: str = typer.Argument(..., help="Action: init|validate|dump"),
    path: Optional[Path] = typer.Argument(None, help="Config file path"),
):
    """Configuration management."""
    if action == "init":
        typer.echo(generate_default_config())

    elif action == "validate":
        if not path:
            console.print("[red]Path required for validate[/]")
            raise typer.Exit(1)
        try:
            cfg = AofConfig.load(path)
        except (AofError, OSError, ValueError) as e:
            console.print(f"[red]Error:[/] {e}")
            raise typer.Exit(1)
        errors = cfg.validate()
        if errors:
            console.print("[red]Invalid configuration:[/]")
            for e in errors:
                console.print(f"  - {e}")
            raise typer.Exit(1)
        console.print(f"[green]Valid:[/] {path}")

    elif action == "dump":
        try:
            cfg = AofConfig.load(path) if path else load_config()
        except (AofError, OSError, ValueError) as e:
            console.print(f"[red]Error:[/] {e}")
            raise typer.Exit(1)
        typer.echo(cfg.redacted().to_yaml())

    else:
        console.print(f"[red]Unknown action:[/] {action}")
        console.print("Valid actions: init, validate, dump")
        raise typer.Exit(1)


# === VERSION COMMAND ===

@app.command()
def version(
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Show detailed info"),
):
    """Show version information."""
    console.print(f"[bold blue]aof-codec v{__version__}[/]")

    if verbose:
        table = Table(show_header=False, box=None)
        table.add_column("Feature", style="cyan")
        table.add_column("Status", style="green")
        table.add_row("Write revision", str(CURRENT_REVISION))
        table.add_row("Read revisions", ", ".join(str(r) for r in sorted(REVISIONS)))
        console.print()
        console.print(Panel.fit(table, title="Formats"))


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
