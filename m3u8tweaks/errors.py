"""Fatal error types raised while tweaking a playlist folder.

Every error is unrecoverable for the current run. They derive from
``click.ClickException`` so the CLI prints ``Error: <message>`` and exits
with status 1 without any extra handling in the commands.
"""

from __future__ import annotations
import click


class TweakError(click.ClickException):
    """Base class for all run-terminating errors."""

    exit_code = 1


class InputMissing(TweakError):
    """No playlist folder given and no interactive fallback available."""


class InputInvalid(TweakError):
    """Given folder does not exist or cannot be listed."""


class MetadataMissing(TweakError):
    """Playlists XML file not present in the folder."""


class MetadataUnparseable(TweakError):
    """Playlists XML file present but structurally broken."""


class NoPlaylistsFound(TweakError):
    """Folder contains no playlist files (after purging)."""


class PrefixNotFound(TweakError):
    """No non-empty common root could be established."""


class StreamIOError(TweakError):
    """Read or write failure while rewriting a single playlist."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path


class UserAborted(TweakError):
    """Operator declined the proposed configuration."""


__all__ = [
    "TweakError",
    "InputMissing",
    "InputInvalid",
    "MetadataMissing",
    "MetadataUnparseable",
    "NoPlaylistsFound",
    "PrefixNotFound",
    "StreamIOError",
    "UserAborted",
]
