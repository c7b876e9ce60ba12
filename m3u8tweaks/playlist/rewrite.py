from __future__ import annotations
from pathlib import Path
from typing import Set
import logging
import re

from ..errors import StreamIOError

logger = logging.getLogger(__name__)

HEADER = "#EXTM3U"

_BAD_CHARS = '<>:"/\\|?*!'
_CONTROL_RE = re.compile(r'[\x00-\x1f\x7f]')
_RESERVED_NAMES = {
    "CON", "PRN", "AUX", "NUL",
    *(f"COM{i}" for i in range(1, 10)),
    *(f"LPT{i}" for i in range(1, 10)),
}


def sanitize_filename(name: str, replacement: str = '') -> str:
    """Make a playlist title safe to use as a file name.

    Characters illegal on common filesystems are replaced (removed by
    default), whitespace runs collapse to one space and trailing dots/spaces
    are stripped. Windows device names get a trailing underscore.
    """
    for c in _BAD_CHARS:
        name = name.replace(c, replacement)
    name = _CONTROL_RE.sub(replacement, name)
    name = ' '.join(name.split()).rstrip('. ')
    if name.upper() in _RESERVED_NAMES:
        name += '_'
    return name


class OutputNamer:
    """Hands out unique output file names for one run.

    Names are compared case-insensitively so two outputs never clobber each
    other on case-insensitive filesystems. Colliding names get " 2", " 3", ...
    """

    def __init__(self, extension: str = ".m3u", fallback: str = "playlist"):
        self.extension = extension
        self.fallback = fallback
        self._used: Set[str] = set()

    def claim(self, title: str) -> str:
        base = sanitize_filename(title) or self.fallback
        candidate = base
        counter = 2
        while candidate.lower() in self._used:
            candidate = f"{base} {counter}"
            counter += 1
        self._used.add(candidate.lower())
        return candidate + self.extension


def rewrite_line(line: str, old_root: str, new_root: str, header: str = HEADER) -> str | None:
    """Transform a single playlist line (without its line terminator).

    Returns None when the line is the header marker and must be dropped.
    Lines under ``old_root`` get the root swapped and every backslash turned
    into a forward slash; all other lines are returned unchanged.
    """
    if header in line:
        return None
    if not line.startswith(old_root):
        return line
    return (new_root + line[len(old_root):]).replace('\\', '/')


def rewrite_playlist(source: Path, target: Path, old_root: str, new_root: str, header: str = HEADER) -> bool:
    """Stream ``source`` line by line into ``target`` with the root replaced.

    Args:
        source: Playlist to read (UTF-8 with or without BOM, any line-ending convention)
        target: Output file, overwritten if present
        old_root: Root prefix to replace
        new_root: Replacement root
        header: Format header marker to drop

    Returns:
        True once the whole file has been written.

    Raises:
        StreamIOError: on any read or write failure. The target is closed
            before the error propagates.
    """
    changed = 0
    try:
        with open(source, 'r', encoding='utf-8-sig', newline=None) as src, \
                open(target, 'w', encoding='utf-8', newline='\n') as dst:
            for raw in src:
                line = raw.rstrip('\n')
                out = rewrite_line(line, old_root, new_root, header)
                if out is None:
                    continue
                if out != line:
                    changed += 1
                dst.write(out + '\n')
    except (OSError, UnicodeDecodeError) as e:
        raise StreamIOError(f"Error while rewriting {source} -> {target}: {e}", path=str(source)) from e
    logger.debug(f"[rewritten] {source.name} -> {target.name} lines_changed={changed}")
    return True


__all__ = [
    "rewrite_playlist",
    "rewrite_line",
    "sanitize_filename",
    "OutputNamer",
    "HEADER",
]
