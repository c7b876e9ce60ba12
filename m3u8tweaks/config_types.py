"""Typed configuration dataclasses for m3u8tweaks.

Provides strongly-typed configuration objects that can be used throughout
the application for better type safety and IDE support.
"""
from __future__ import annotations
from dataclasses import dataclass, field, fields, asdict
from typing import Dict, Any


def _known(cls, data: Dict[str, Any]) -> Dict[str, Any]:
    """Keys of data that cls declares as fields (unknown env keys are ignored)."""
    names = {f.name for f in fields(cls)}
    return {k: v for k, v in data.items() if k in names}


@dataclass
class PlaylistsConfig:
    """Where playlists come from and how outputs are named."""
    extension: str = ".m3u8"
    metadata_file: str = "playlists.xml"
    output_extension: str = ".m3u"
    header_marker: str = "#EXTM3U"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class RewriteConfig:
    """Root substitution and purge behaviour of a run."""
    old_root: str | None = None  # None = auto-detect
    new_root: str | None = ""  # None = ask (interactive only)
    target_folder: str = ""  # "" = <folder>/<default_target_name>
    default_target_name: str = "m3u8tweaked"
    interactive: bool = True
    purge_xml: bool = True
    purge_mismatch: bool = True
    rename: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ScanConfig:
    """First-entry scan settings."""
    max_workers: int = 8

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class AppConfig:
    """Root application configuration with all subsections."""
    log_level: str = "INFO"
    playlists: PlaylistsConfig = field(default_factory=PlaylistsConfig)
    rewrite: RewriteConfig = field(default_factory=RewriteConfig)
    scan: ScanConfig = field(default_factory=ScanConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to nested dictionary matching the config format."""
        return {
            "log_level": self.log_level,
            "playlists": self.playlists.to_dict(),
            "rewrite": self.rewrite.to_dict(),
            "scan": self.scan.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> AppConfig:
        """Create typed config from dictionary.

        Args:
            data: Dictionary config (from load_config)

        Returns:
            Typed AppConfig instance
        """
        return cls(
            log_level=data.get("log_level", "INFO"),
            playlists=PlaylistsConfig(**_known(PlaylistsConfig, data.get("playlists", {}))),
            rewrite=RewriteConfig(**_known(RewriteConfig, data.get("rewrite", {}))),
            scan=ScanConfig(**_known(ScanConfig, data.get("scan", {}))),
        )


__all__ = [
    "AppConfig",
    "PlaylistsConfig",
    "RewriteConfig",
    "ScanConfig",
]
