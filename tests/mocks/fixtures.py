"""Playlist folder builders shared by unit and integration tests."""
from __future__ import annotations
from pathlib import Path
from typing import Dict, List, Sequence, Tuple
from xml.sax.saxutils import quoteattr

import pytest


def write_catalog(folder: Path, entries: Sequence[Tuple[str, str]], encoding: str = "utf-16") -> Path:
    """Write a Winamp-style playlists.xml listing (filename, title) pairs in order."""
    lines = [f'<?xml version="1.0" encoding="{encoding.upper()}" standalone="yes"?>',
             f'<playlists playlists="{len(entries)}">']
    for i, (filename, title) in enumerate(entries):
        lines.append(
            f'<playlist filename={quoteattr(filename)} title={quoteattr(title)} '
            f'id="{{0000000{i}-AAAA-BBBB-CCCC-DDDDDDDDDDDD}}" songs="2" seconds="420"/>'
        )
    lines.append('</playlists>')
    path = folder / "playlists.xml"
    path.write_text("\n".join(lines), encoding=encoding)
    return path


def write_playlist(folder: Path, name: str, tracks: Sequence[str], header: bool = True,
                   newline: str = "\r\n") -> Path:
    """Write a playlist the way Winamp does (CRLF, #EXTM3U + #EXTINF lines)."""
    lines: List[str] = ["#EXTM3U"] if header else []
    for track in tracks:
        title = Path(track.replace("\\", "/")).stem
        lines.append(f"#EXTINF:210,{title}")
        lines.append(track)
    path = folder / name
    path.write_bytes((newline.join(lines) + newline).encode("utf-8"))
    return path


@pytest.fixture
def playlist_folder(tmp_path: Path):
    """Factory building a playlist folder.

    Usage: playlist_folder({"a.m3u8": ("Title A", [tracks...])}, unlisted={...})
    Catalog order follows the dict order of ``playlists``.
    """
    def build(playlists: Dict[str, Tuple[str, Sequence[str]]],
              unlisted: Dict[str, Sequence[str]] | None = None) -> Path:
        folder = tmp_path / "playlists"
        folder.mkdir(exist_ok=True)
        for name, (_title, tracks) in playlists.items():
            write_playlist(folder, name, tracks)
        for name, tracks in (unlisted or {}).items():
            write_playlist(folder, name, tracks)
        write_catalog(folder, [(name, title) for name, (title, _tracks) in playlists.items()])
        return folder

    return build
