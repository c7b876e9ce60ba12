from __future__ import annotations
import copy
import logging
from typing import Any, Dict

import click

from ..config import load_config, log_level_for, _configure_logging
from ..version import __version__

logger = logging.getLogger(__name__)


def is_silent(cfg: Dict[str, Any]) -> bool:
    return str(cfg.get('log_level', '')).upper() == 'SILENT'


def with_overrides(cfg: Dict[str, Any], section: str, **values: Any) -> Dict[str, Any]:
    """Copy of cfg with non-None values written into ``cfg[section]``."""
    result = copy.deepcopy(cfg)
    target = result.setdefault(section, {})
    for key, val in values.items():
        if val is not None:
            target[key] = val
    return result


@click.group()
@click.version_option(version=__version__, prog_name="m3u8tweaks")
@click.option('-v', '--verbose', is_flag=True, default=False, help='Show additional info and error logging.')
@click.option('-s', '--silent', is_flag=True, default=False,
              help='Do not log anything except fatal errors. Takes precedence over --verbose.')
@click.pass_context
def cli(ctx: click.Context, verbose: bool, silent: bool):
    """Convert Winamp playlists so they work with another music player.

    \b
    TYPICAL WORKFLOWS:

    \b
    Check what would happen:
      m3u8tweaks detect ~/winamp/playlists

    \b
    Interactive conversion:
      m3u8tweaks tweak ~/winamp/playlists

    \b
    Unattended conversion:
      m3u8tweaks tweak --not-interactive -n /var/lib/mpd/music ~/winamp/playlists

    \b
    Configuration can also come from a .env file or environment variables,
    e.g. M3U8TWEAKS__REWRITE__NEW_ROOT=/music.
    """
    if isinstance(ctx.obj, dict):
        cfg = ctx.obj
    else:
        cfg = load_config()
    cfg['log_level'] = log_level_for(verbose, silent, cfg.get('log_level', 'INFO'))
    _configure_logging(cfg['log_level'])
    ctx.obj = cfg


__all__ = ["cli", "is_silent", "with_overrides"]
