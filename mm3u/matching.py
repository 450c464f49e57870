"""
Resolution drivers: turn a list of requested names into a playlist.

Both drivers apply the same rule per name (see ``resolver.classify``) and
return a ``Resolution``. They also echo as they go: the ``#EXTM3U`` marker and
hit lines on the primary console, miss records on the diagnostic console.

- ``resolve_sequential`` echoes each hit as soon as it is known.
- ``resolve_parallel`` splits the names into contiguous chunks, one per
  worker thread, and echoes all hits after every worker has finished.

Given the same catalog snapshot the two produce identical results.
"""

import logging
import math
import os
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, Tuple

from rich.console import Console
from rich.progress import BarColumn, Progress, TextColumn, TimeElapsedColumn

from .catalog import CatalogEntry
from .errors import EmptyCatalog
from .resolver import Hit, MatchResult, Miss, resolve_and_classify

logger = logging.getLogger(__name__)

M3U_HEADER = "#EXTM3U"

# Rich drives the progress bar and logging only; playlist lines and miss
# records are written raw to the console files so paths stay byte-exact.
console = Console(highlight=False, soft_wrap=True, emoji=False)
err_console = Console(stderr=True, highlight=False, soft_wrap=True, emoji=False)


@dataclass
class Resolution:
    """Outcome of one run.

    results: one Hit or Miss per requested name, in input order
    hits: playlist lines of the hits, in input order
    misses: diagnostic records of the misses, ascending index
    """

    results: List[MatchResult] = field(default_factory=list)
    hits: List[str] = field(default_factory=list)
    misses: List[str] = field(default_factory=list)


def default_worker_count() -> int:
    """CPUs this process may run on (affinity-aware), at least 1."""
    if hasattr(os, "process_cpu_count"):
        return os.process_cpu_count() or 1
    if hasattr(os, "sched_getaffinity"):
        return len(os.sched_getaffinity(0)) or 1
    return os.cpu_count() or 1


def chunk_bounds(count: int, workers: int) -> List[Tuple[int, int]]:
    """Split ``range(count)`` into at most ``workers`` contiguous, non-empty
    ``(start, stop)`` ranges of ``ceil(count / workers)`` items; the last one
    may be shorter."""
    if count <= 0:
        return []
    chunk_size = math.ceil(count / max(1, workers))
    return [
        (start, min(start + chunk_size, count))
        for start in range(0, count, chunk_size)
    ]


def _progress(err: Console, enabled: bool) -> Progress:
    return Progress(
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TextColumn("{task.completed}/{task.total}"),
        TimeElapsedColumn(),
        console=err,
        transient=True,
        disable=not enabled,
    )


def _check_catalog(names: Sequence[str], catalog: Sequence[CatalogEntry]) -> None:
    # Fail before anything is echoed so an empty catalog leaves no partial output.
    if names and not catalog:
        raise EmptyCatalog(names[0])


def _echo(con: Console, line: str) -> None:
    con.file.write(f"{line}\n")
    con.file.flush()


def _emit_misses(err: Console, misses: List[str]) -> None:
    for message in misses:
        _echo(err, message)


def resolve_sequential(
    names: Sequence[str],
    catalog: Sequence[CatalogEntry],
    absolute: bool = False,
    out: Optional[Console] = None,
    err: Optional[Console] = None,
    progress: bool = False,
) -> Resolution:
    """Resolve every name in input order on the calling thread.

    Raises:
        EmptyCatalog: If ``names`` is non-empty and ``catalog`` is empty.
    """
    out = out or console
    err = err or err_console
    _check_catalog(names, catalog)
    logger.info(
        "Resolving %d names against %d catalog entries", len(names), len(catalog)
    )

    resolution = Resolution()
    _echo(out, M3U_HEADER)
    with _progress(err, progress) as prog:
        task = prog.add_task("Matching", total=len(names))
        for index, requested in enumerate(names):
            result = resolve_and_classify(index, requested, catalog, absolute)
            resolution.results.append(result)
            if isinstance(result, Hit):
                _echo(out, result.text)
                resolution.hits.append(result.text)
            else:
                resolution.misses.append(result.message)
            prog.advance(task)

    _emit_misses(err, resolution.misses)
    logger.info(
        "%d hits, %d misses", len(resolution.hits), len(resolution.misses)
    )
    return resolution


def _resolve_chunk(
    start: int,
    names: Sequence[str],
    catalog: Sequence[CatalogEntry],
    absolute: bool,
    slots: List[Optional[MatchResult]],
    misses: List[Miss],
    misses_lock: threading.Lock,
    advance: Callable[[], None],
) -> None:
    # Only slots[start:start + len(names)] are touched; ranges never overlap.
    for offset, requested in enumerate(names):
        index = start + offset
        result = resolve_and_classify(index, requested, catalog, absolute)
        slots[index] = result
        if isinstance(result, Miss):
            with misses_lock:
                misses.append(result)
        advance()


def resolve_parallel(
    names: Sequence[str],
    catalog: Sequence[CatalogEntry],
    absolute: bool = False,
    workers: Optional[int] = None,
    out: Optional[Console] = None,
    err: Optional[Console] = None,
    progress: bool = False,
) -> Resolution:
    """Resolve names concurrently, one contiguous chunk per worker thread.

    Hits land in a pre-sized slot list indexed by input position, so workers
    never write to the same slot. Misses go to one shared list under a lock
    and are sorted by index once every worker has finished. The catalog is
    only read.

    Args:
        workers: Number of workers; defaults to the CPU count. Never more
            workers than chunks are started.

    Raises:
        EmptyCatalog: If ``names`` is non-empty and ``catalog`` is empty.
        Exception: Whatever a worker raised, after all workers have finished.
    """
    out = out or console
    err = err or err_console
    _check_catalog(names, catalog)

    worker_count = max(1, workers or default_worker_count())
    bounds = chunk_bounds(len(names), worker_count)
    logger.info(
        "Resolving %d names against %d catalog entries in %d chunks",
        len(names),
        len(catalog),
        len(bounds),
    )

    slots: List[Optional[MatchResult]] = [None] * len(names)
    shared_misses: List[Miss] = []
    misses_lock = threading.Lock()

    futures = []
    with _progress(err, progress) as prog:
        task = prog.add_task("Matching", total=len(names))

        def advance() -> None:
            prog.advance(task)

        if bounds:
            with ThreadPoolExecutor(
                max_workers=len(bounds), thread_name_prefix="mm3u"
            ) as executor:
                for start, stop in bounds:
                    futures.append(
                        executor.submit(
                            _resolve_chunk,
                            start,
                            names[start:stop],
                            catalog,
                            absolute,
                            slots,
                            shared_misses,
                            misses_lock,
                            advance,
                        )
                    )
    # The executor has joined every worker; surface the first failure.
    for future in futures:
        future.result()

    shared_misses.sort(key=lambda miss: miss.index)

    resolution = Resolution(results=list(slots))
    _echo(out, M3U_HEADER)
    for result in slots:
        if isinstance(result, Hit):
            _echo(out, result.text)
            resolution.hits.append(result.text)
    resolution.misses = [miss.message for miss in shared_misses]

    _emit_misses(err, resolution.misses)
    logger.info(
        "%d hits, %d misses", len(resolution.hits), len(resolution.misses)
    )
    return resolution


def resolve(
    names: Sequence[str],
    catalog: Sequence[CatalogEntry],
    parallel: bool = False,
    absolute: bool = False,
    workers: Optional[int] = None,
    out: Optional[Console] = None,
    err: Optional[Console] = None,
    progress: bool = False,
) -> Resolution:
    """Run the parallel or the sequential driver."""
    if parallel:
        return resolve_parallel(
            names, catalog, absolute, workers=workers, out=out, err=err, progress=progress
        )
    return resolve_sequential(
        names, catalog, absolute, out=out, err=err, progress=progress
    )
