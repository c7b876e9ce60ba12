"""Input discovery: playlist folder listing and metadata loading."""

from .folder import FolderListing, list_playlist_folder
from .metadata import PlaylistMeta, PlaylistCatalog, parse_catalog, load_catalog

__all__ = [
    "FolderListing",
    "list_playlist_folder",
    "PlaylistMeta",
    "PlaylistCatalog",
    "parse_catalog",
    "load_catalog",
]
