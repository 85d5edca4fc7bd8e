"""Command-line interface for markstyle."""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import Progress, SpinnerColumn, TextColumn

from markstyle import __version__
from markstyle.core.parser import MarkdownParser
from markstyle.formatting.export import ExportFormat, export, to_json

app = typer.Typer(
    name="markstyle",
    help="Convert lightweight markdown into styled text.",
    add_completion=False,
)
console = Console()

SUPPORTED_EXTENSIONS = (".md", ".markdown", ".txt")
OUTPUT_SUFFIX = ".styled.json"


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"markstyle v{__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Route debug logging through rich when verbose output is requested."""
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def generate_output_path(input_path: Path, output_dir: Optional[Path] = None) -> Path:
    """Generate output path with the .styled.json suffix."""
    output_name = f"{input_path.stem}{OUTPUT_SUFFIX}"

    if output_dir:
        return output_dir / output_name
    return input_path.parent / output_name


def write_output(content, output_path: Path) -> None:
    """Write an export result, keeping rich styling as ANSI escapes."""
    if isinstance(content, str):
        output_path.write_text(content, encoding="utf-8")
        return
    with output_path.open("w", encoding="utf-8") as handle:
        Console(file=handle, force_terminal=True, color_system="truecolor").print(content)


def process_file(
    input_path: Path,
    output_path: Optional[Path],
    parser: MarkdownParser,
    output_format: ExportFormat,
    verbose: bool,
) -> bool:
    """Process a single file. Returns True on success."""
    if not input_path.exists():
        console.print(f"[red]Error:[/red] File not found: {input_path}")
        return False

    if verbose:
        console.print(f"[blue]Processing:[/blue] {input_path}")

    try:
        buffer = parser.parse(input_path.read_text(encoding="utf-8"))
        content = export(buffer, output_format)
        if output_path is None:
            if isinstance(content, str):
                typer.echo(content)
            else:
                console.print(content)
        else:
            write_output(content, output_path)
            console.print(f"[green]Success:[/green] {output_path}")
        return True
    except Exception as e:
        console.print(f"[red]Error processing {input_path.name}:[/red] {e}")
        if verbose:
            console.print_exception()
        return False


def process_folder(
    folder_path: Path,
    parser: MarkdownParser,
    verbose: bool,
    recursive: bool = True,
) -> tuple[int, int]:
    """Process all supported files in a folder. Returns (success_count, fail_count)."""
    if not folder_path.is_dir():
        console.print(f"[red]Error:[/red] Not a directory: {folder_path}")
        return 0, 0

    files: list[Path] = []
    for ext in SUPPORTED_EXTENSIONS:
        if recursive:
            files.extend(folder_path.rglob(f"*{ext}"))
        else:
            files.extend(folder_path.glob(f"*{ext}"))

    if not files:
        console.print(
            f"[yellow]No supported files found in {folder_path}[/yellow]\n"
            f"Supported formats: {', '.join(SUPPORTED_EXTENSIONS)}"
        )
        return 0, 0

    console.print(f"[blue]Found {len(files)} file(s) to process[/blue]")

    success_count = 0
    fail_count = 0

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        task = progress.add_task("Processing files...", total=len(files))

        for file_path in sorted(files):
            progress.update(task, description=f"Processing {file_path.name}...")
            output_path = generate_output_path(file_path)
            if verbose:
                console.print(f"[blue]Processing:[/blue] {file_path}")
            try:
                buffer = parser.parse(file_path.read_text(encoding="utf-8"))
                output_path.write_text(to_json(buffer), encoding="utf-8")
                success_count += 1
            except Exception as e:
                console.print(f"[red]Error processing {file_path.name}:[/red] {e}")
                fail_count += 1
            progress.advance(task)

    return success_count, fail_count


@app.command()
def main(
    path: Path = typer.Argument(
        ...,
        help="Markdown file or folder to process",
        exists=True,
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output path (for single file only; default: print to stdout)",
    ),
    output_format: ExportFormat = typer.Option(
        ExportFormat.JSON,
        "--format",
        "-f",
        help="Output format for a single file: json, text or rich",
    ),
    automatic_links: Optional[bool] = typer.Option(
        None,
        "--auto-links/--no-auto-links",
        help="Detect bare URLs as links (default: MARKSTYLE_AUTOMATIC_LINKS)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """
    Convert markdown into styled text (text plus attribute ranges).

    Examples:

        markstyle README.md

        markstyle README.md --format rich

        markstyle notes.md --no-auto-links -o notes.json

        markstyle /path/to/folder  # Writes <name>.styled.json next to each file
    """
    configure_logging(verbose)
    parser = MarkdownParser(automatic_link_detection_enabled=automatic_links)

    if path.is_file():
        success = process_file(path, output, parser, output_format, verbose)
        raise typer.Exit(0 if success else 1)

    if output is not None:
        console.print(
            "[yellow]Warning:[/yellow] --output is ignored in folder mode. "
            f"Files will be saved alongside originals with {OUTPUT_SUFFIX} suffix."
        )
    if output_format is not ExportFormat.JSON:
        console.print(
            f"[yellow]Warning:[/yellow] --format {output_format.value} is ignored "
            "in folder mode. Files are always written as JSON."
        )

    success, fail = process_folder(path, parser, verbose)
    console.print(f"\n[bold]Complete:[/bold] {success} succeeded, {fail} failed")
    raise typer.Exit(0 if fail == 0 else 1)


if __name__ == "__main__":
    app()
