"""First-entry scanning of playlist files.

Only the first track reference of each playlist is needed for root detection,
so every scan stops reading as soon as it finds one. Scans are independent and
run on a thread pool; results are joined in input order.
"""

from __future__ import annotations
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import List, Sequence
import logging

from ..errors import StreamIOError

logger = logging.getLogger(__name__)


def first_entry(path: Path) -> str:
    """Return the first line that is neither blank nor a ``#`` comment.

    Returns an empty string for playlists without any entry.
    """
    try:
        with open(path, 'r', encoding='utf-8-sig', errors='replace', newline=None) as fh:
            for raw in fh:
                line = raw.rstrip('\n')
                if not line.strip() or line.startswith('#'):
                    continue
                return line
    except OSError as e:
        raise StreamIOError(f"Could not read playlist {path}: {e}", path=str(path)) from e
    return ""


def collect_first_entries(folder: Path, playlist_files: Sequence[str], max_workers: int = 8) -> List[str]:
    """Scan every playlist concurrently and return first entries in input order.

    All scans complete before this returns; the first failure is re-raised
    once the pool has been joined.
    """
    if not playlist_files:
        return []
    workers = max(1, min(max_workers, len(playlist_files)))
    paths = [folder / name for name in playlist_files]
    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = [executor.submit(first_entry, p) for p in paths]
    entries = [f.result() for f in futures]
    logger.debug(f"Scanned {len(entries)} playlist(s) with {workers} worker(s)")
    return entries


__all__ = ["first_entry", "collect_first_entries"]
