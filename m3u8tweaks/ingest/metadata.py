"""Winamp ``playlists.xml`` loading.

The file lists every playlist known to the player::

    <playlists playlists="2">
      <playlist filename="plf1A2B.m3u8" title="Road Trip" id="{...}" songs="12" seconds="2710"/>
      ...
    </playlists>

Winamp writes it as UTF-16 with a byte order mark. The raw bytes are handed to
the XML parser, which honours the BOM and the XML declaration, so UTF-8 files
work too.
"""

from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Dict
import logging
import xml.etree.ElementTree as ET

from ..errors import MetadataMissing, MetadataUnparseable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlaylistMeta:
    """One ``<playlist>`` element."""
    filename: str
    title: str
    id: str = ""
    songs: int = 0
    seconds: int = 0


@dataclass
class PlaylistCatalog:
    """Parsed metadata file.

    ``entries`` is keyed by playlist filename and keeps the order of the
    metadata file; output iteration relies on that order.
    """
    entries: Dict[str, PlaylistMeta]
    declared_count: int | None = None

    def get(self, filename: str) -> PlaylistMeta | None:
        return self.entries.get(filename)

    def title_for(self, filename: str, default: str = "-") -> str:
        meta = self.entries.get(filename)
        return meta.title if meta else default

    def __contains__(self, filename: object) -> bool:
        return filename in self.entries

    def __len__(self) -> int:
        return len(self.entries)


def _int_attr(elem: ET.Element, name: str) -> int:
    raw = (elem.get(name) or "").strip()
    try:
        return int(raw)
    except ValueError:
        return 0


def parse_catalog(data: bytes) -> PlaylistCatalog:
    """Parse metadata XML bytes into a catalog.

    Raises:
        MetadataUnparseable: malformed XML, wrong root element or a playlist
            element without a filename.
    """
    try:
        root = ET.fromstring(data)
    except ET.ParseError as e:
        logger.debug("XML parse failure", exc_info=True)
        raise MetadataUnparseable(f"Could not parse playlists XML file: {e}") from e

    if root.tag != "playlists":
        raise MetadataUnparseable(f"Could not parse playlists XML file: unexpected root element <{root.tag}>")

    entries: Dict[str, PlaylistMeta] = {}
    for elem in root.iter("playlist"):
        filename = elem.get("filename")
        if not filename:
            raise MetadataUnparseable("Could not parse playlists XML file: playlist entry without filename")
        if filename in entries:
            logger.warning(f"Duplicate metadata entry for {filename}, keeping the first one")
            continue
        entries[filename] = PlaylistMeta(
            filename=filename,
            title=elem.get("title") or Path(filename).stem,
            id=elem.get("id") or "",
            songs=_int_attr(elem, "songs"),
            seconds=_int_attr(elem, "seconds"),
        )

    declared = root.get("playlists")
    declared_count = int(declared) if declared and declared.strip().isdigit() else None
    return PlaylistCatalog(entries=entries, declared_count=declared_count)


def load_catalog(path: Path) -> PlaylistCatalog:
    """Read and parse the metadata file at ``path``.

    Raises:
        MetadataMissing: file does not exist.
        MetadataUnparseable: file cannot be read or parsed.
    """
    if not path.is_file():
        raise MetadataMissing("Playlists XML file not found.")
    try:
        data = path.read_bytes()
    except OSError as e:
        raise MetadataUnparseable(f"Could not read playlists XML file: {e}") from e
    catalog = parse_catalog(data)
    logger.debug(f"Loaded {len(catalog)} metadata entries from {path}")
    return catalog


__all__ = ["PlaylistMeta", "PlaylistCatalog", "parse_catalog", "load_catalog"]
