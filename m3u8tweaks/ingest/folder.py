from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import List
import logging

from ..errors import InputInvalid, MetadataMissing, NoPlaylistsFound

logger = logging.getLogger(__name__)


@dataclass
class FolderListing:
    folder: Path
    playlist_files: List[str] = field(default_factory=list)
    metadata_path: Path | None = None


def list_playlist_folder(folder: Path, extension: str = ".m3u8", metadata_file: str = "playlists.xml") -> FolderListing:
    """List playlist files (sorted by name) and locate the metadata file.

    Raises:
        InputInvalid: folder missing or not a readable directory.
        NoPlaylistsFound: no file with the playlist extension.
        MetadataMissing: metadata file absent.
    """
    if not folder.exists():
        raise InputInvalid(f'Given path "{folder}" does not exist.')
    try:
        names = sorted(p.name for p in folder.iterdir())
    except OSError as e:
        logger.debug("Directory listing failed", exc_info=True)
        raise InputInvalid(f"Could not read directory {folder}, are you sure this is a directory?") from e

    ext = extension.lower()
    listing = FolderListing(folder=folder)
    for name in names:
        if name.lower().endswith(ext) and (folder / name).is_file():
            listing.playlist_files.append(name)
        if name == metadata_file:
            listing.metadata_path = folder / name

    if not listing.playlist_files:
        raise NoPlaylistsFound("No playlist files found.")
    if listing.metadata_path is None:
        raise MetadataMissing("Playlists XML file not found.")
    return listing


__all__ = ["FolderListing", "list_playlist_folder"]
