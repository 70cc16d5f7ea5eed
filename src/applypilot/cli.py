"""CLI interface using typer + rich."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from applypilot.config import AppConfig, load_config
from applypilot.errors import ApplyPilotError
from applypilot.export import AVAILABLE_FORMATS, format_filename, render_letter, segment_letter
from applypilot.layout.rhythm import Rhythm, build_layout
from applypilot.models.letter import DocumentMetadata

app = typer.Typer(
    name="applypilot",
    help="Render generated cover letters to PDF and DOCX",
    no_args_is_help=True,
)
console = Console()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _load_config_or_exit(config_path: Path | None) -> AppConfig:
    if config_path is not None and not config_path.exists():
        console.print(f"[red]Config file not found: {config_path}[/red]")
        raise typer.Exit(1)
    try:
        return load_config(config_path)
    except (ValueError, TypeError) as e:
        console.print(f"[red]Invalid config: {escape(str(e))}[/red]")
        raise typer.Exit(1)


def _read_letter_or_exit(letter: Path) -> str:
    if not letter.exists():
        console.print(f"[red]Letter file not found: {letter}[/red]")
        raise typer.Exit(1)
    try:
        return letter.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        console.print(f"[red]Letter file is not valid UTF-8: {letter}[/red]")
        raise typer.Exit(1)


def _load_metadata(
    metadata_path: Path | None,
    name: str | None,
    company: str | None,
    position: str | None,
) -> DocumentMetadata:
    if metadata_path is not None:
        if not metadata_path.exists():
            console.print(f"[red]Metadata file not found: {metadata_path}[/red]")
            raise typer.Exit(1)
        try:
            data = json.loads(metadata_path.read_text(encoding="utf-8"))
            metadata = DocumentMetadata.model_validate(data)
        except (json.JSONDecodeError, ValidationError) as e:
            console.print(f"[red]Invalid metadata file: {escape(str(e))}[/red]")
            raise typer.Exit(1)
    else:
        metadata = DocumentMetadata()

    overrides = {"candidate_name": name, "company": company, "position": position}
    return metadata.model_copy(update={k: v for k, v in overrides.items() if v is not None})


@app.command()
def render(
    letter: Path = typer.Argument(help="Generated cover letter text file"),
    fmt: str = typer.Option("both", "--format", "-f", help="pdf, docx or both"),
    metadata: Path = typer.Option(None, "--metadata", "-m", help="JSON with candidateName/company/position"),
    name: str = typer.Option(None, "--name", help="Candidate name"),
    company: str = typer.Option(None, "--company", help="Company name"),
    position: str = typer.Option(None, "--position", help="Position title"),
    output_dir: Path = typer.Option(Path("./output"), "--output-dir", "-o", help="Output directory"),
    config_path: Path = typer.Option(None, "--config", "-c", help="config.yaml path"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Render a cover letter to PDF and/or DOCX."""
    _setup_logging(verbose)
    fmt = fmt.lower()
    if fmt not in (*AVAILABLE_FORMATS, "both"):
        console.print(f"[red]Unknown format: {fmt} (use pdf, docx or both)[/red]")
        raise typer.Exit(1)

    config = _load_config_or_exit(config_path)
    text = _read_letter_or_exit(letter)
    meta = _load_metadata(metadata, name, company, position)

    formats = AVAILABLE_FORMATS if fmt == "both" else (fmt,)
    output_dir.mkdir(parents=True, exist_ok=True)
    for f in formats:
        try:
            doc = render_letter(text, meta, f, config)
        except ApplyPilotError as e:
            console.print(f"[red]{escape(str(e))}[/red]")
            raise typer.Exit(1)
        out = output_dir / doc.filename
        out.write_bytes(doc.content)
        console.print(f"[green]{f.upper()} saved: {out}[/green]")


@app.command()
def inspect(
    letter: Path = typer.Argument(help="Generated cover letter text file"),
    config_path: Path = typer.Option(None, "--config", "-c", help="config.yaml path"),
) -> None:
    """Show the layout plan (blocks and gaps) of a letter."""
    config = _load_config_or_exit(config_path)
    text = _read_letter_or_exit(letter)
    rhythm = Rhythm.from_config(config.layout)

    table = Table(title=f"Layout plan ({config.layout.spacing}-line rhythm)")
    table.add_column("#", justify="right", no_wrap=True)
    table.add_column("Block", no_wrap=True)
    table.add_column("Gap (pt)", justify="right", no_wrap=True)
    table.add_column("Gap (twips)", justify="right", no_wrap=True)
    table.add_column("Text", overflow="fold")
    for i, block in enumerate(build_layout(segment_letter(text, config)), 1):
        visible = "".join(
            f"[bold]{escape(run.text)}[/bold]" if run.bold else escape(run.text) for run in block.runs
        )
        table.add_row(
            str(i),
            block.kind.value,
            f"{rhythm.points(block.gap_after):.1f}",
            str(rhythm.twips(block.gap_after)),
            visible,
        )
    console.print(table)


@app.command()
def filename(
    name: str = typer.Option(None, "--name", help="Candidate name"),
    company: str = typer.Option(None, "--company", help="Company name"),
    position: str = typer.Option(None, "--position", help="Position title"),
    ext: str = typer.Option("pdf", "--ext", help="File extension"),
) -> None:
    """Print the download filename for the given metadata."""
    meta = DocumentMetadata(candidate_name=name, company=company, position=position)
    console.print(format_filename(meta, ext), markup=False, highlight=False, soft_wrap=True)


if __name__ == "__main__":
    app()
