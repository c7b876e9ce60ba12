"""Core playlist operations: root detection, first-entry scans and rewriting."""

from .prefix import resolve_prefix, detect_root, exclusions_for_root, is_stream_entry, RootResolution
from .rewrite import rewrite_playlist, rewrite_line, sanitize_filename, OutputNamer
from .scan import first_entry, collect_first_entries

__all__ = [
    "resolve_prefix",
    "detect_root",
    "exclusions_for_root",
    "is_stream_entry",
    "RootResolution",
    "rewrite_playlist",
    "rewrite_line",
    "sanitize_filename",
    "OutputNamer",
    "first_entry",
    "collect_first_entries",
]
