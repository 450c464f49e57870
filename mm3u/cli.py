import logging
from pathlib import Path
from typing import Optional

import typer
from rich.logging import RichHandler
from rich.markup import escape

from .catalog import build_catalog
from .config import load_config
from .errors import Mm3uError
from .matching import err_console, resolve
from .playlist import read_requested_names, write_playlist

app = typer.Typer(
    help="Match a list of song titles against local files and print an M3U playlist.",
    add_completion=False,
)

logger = logging.getLogger("mm3u")


def setup_logging(level: str, verbose: int = 0) -> None:
    if verbose >= 2:
        level = "DEBUG"
    elif verbose == 1:
        level = "INFO"
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@app.command()
def main(
    list_path: Path = typer.Option(
        ..., "--list", "-l", help="Text file with one song title per line"
    ),
    directory: Path = typer.Option(
        ..., "--dir", "-d", help="Directory holding the local music files"
    ),
    parallel: Optional[bool] = typer.Option(
        None, "--parallel/--no-parallel", "-p/-P", help="Enable parallel mode"
    ),
    absolute: Optional[bool] = typer.Option(
        None, "--absolute/--no-absolute", "-a/-A", help="Output paths as absolute paths"
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Also write the playlist to this file"
    ),
    workers: int = typer.Option(
        0, "--workers", "-w", help="Worker threads in parallel mode (0 = one per CPU)"
    ),
    progress: bool = typer.Option(False, "--progress", help="Show a progress bar"),
    verbose: int = typer.Option(
        0, "--verbose", "-v", count=True, help="More logging (-vv for debug)"
    ),
):
    """
    Resolve every title in --list to the closest file name under --dir.

    The playlist goes to stdout; titles whose best match scores below 0.60
    are reported on stderr and left out.
    """
    cfg = load_config()
    setup_logging(cfg["LOG_LEVEL"], verbose)

    try:
        names = read_requested_names(list_path)
        catalog = build_catalog(directory)
        resolution = resolve(
            names,
            catalog,
            parallel=cfg["PARALLEL"] if parallel is None else parallel,
            absolute=cfg["ABSOLUTE_OUTPUT"] if absolute is None else absolute,
            workers=workers or cfg["WORKERS"] or None,
            progress=progress,
        )
        if output is not None:
            write_playlist(output, resolution.hits)
    except Mm3uError as e:
        logger.debug("Run aborted", exc_info=True)
        err_console.print(f"[bold red]Error:[/bold red] {escape(e.message)}")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
