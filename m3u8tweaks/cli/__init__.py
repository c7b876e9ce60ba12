"""CLI package bootstrap.

Defines root group (`cli`) in helpers and imports submodules so their
decorators register commands. Keep this file minimal to avoid circular
imports and duplication.
"""
from m3u8tweaks.cli.helpers import cli  # root group
from m3u8tweaks.cli import tweak_cmds  # noqa: F401
from m3u8tweaks.cli import config_cmds  # noqa: F401

__all__ = ["cli"]
