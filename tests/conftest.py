"""Pytest fixtures for test configuration.

Tests pass configuration dicts directly instead of relying on .env files or
M3U8TWEAKS__ environment variables.
"""
import copy
import pytest
from pathlib import Path
from typing import Dict, Any

from m3u8tweaks.config import _DEFAULTS

from mocks.fixtures import *  # noqa: F401,F403


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    """Drop M3U8TWEAKS__ variables from the developer's shell."""
    import os
    for key in list(os.environ):
        if key.startswith("M3U8TWEAKS__"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def test_config(tmp_path: Path) -> Dict[str, Any]:
    """Provide a non-interactive configuration dict.

    Output goes to tmp_path/out so tests never write next to their inputs
    unless they ask for it.
    """
    cfg = copy.deepcopy(_DEFAULTS)
    cfg['log_level'] = 'DEBUG'
    cfg['rewrite']['interactive'] = False
    cfg['rewrite']['target_folder'] = str(tmp_path / 'out')
    cfg['scan']['max_workers'] = 4
    return cfg


@pytest.fixture(autouse=True)
def _reset_logging_handlers():
    """CLI runs bind a StreamHandler to CliRunner's temporary stderr; drop it afterwards."""
    import logging
    yield
    root = logging.getLogger()
    for handler in root.handlers[:]:
        if type(handler) is logging.StreamHandler:
            root.removeHandler(handler)
