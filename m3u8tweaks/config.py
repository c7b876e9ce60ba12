from __future__ import annotations
import os
import json
import logging
from typing import Any, Dict
from pathlib import Path
import copy

logger = logging.getLogger(__name__)

ENV_PREFIX = "M3U8TWEAKS__"

_DEFAULTS: Dict[str, Any] = {
    "log_level": "INFO",
    "playlists": {
        "extension": ".m3u8",
        "metadata_file": "playlists.xml",
        "output_extension": ".m3u",
        "header_marker": "#EXTM3U",
    },
    "rewrite": {
        "old_root": None,
        "new_root": "",
        "target_folder": "",
        "default_target_name": "m3u8tweaked",
        "interactive": True,
        "purge_xml": True,
        "purge_mismatch": True,
        "rename": True,
    },
    "scan": {
        "max_workers": 8,
    },
}

# Above CRITICAL: silences every record, including errors.
SILENT_LEVEL = logging.CRITICAL + 10


def deep_merge(a: Dict[str, Any], b: Dict[str, Any]) -> Dict[str, Any]:
    """Merge dict b into a (shallow copies) returning new dict.
    Nested dicts are merged recursively; other values override.
    """
    result = dict(a)
    for k, v in b.items():
        if isinstance(v, dict) and isinstance(result.get(k), dict):
            result[k] = deep_merge(result[k], v)  # type: ignore[arg-type]
        else:
            result[k] = v
    return result


def _load_dotenv(path: Path) -> Dict[str, str]:
    values: Dict[str, str] = {}
    if not path.exists():
        return values
    for line in path.read_text(encoding='utf-8').splitlines():
        line = line.strip()
        if not line or line.startswith('#') or '=' not in line:
            continue
        key, val = line.split('=', 1)
        key = key.strip()
        val = val.strip()
        # Strip inline comments starting with # unless inside quotes
        if '#' in val:
            in_single = False
            in_double = False
            result_chars = []
            for ch in val:
                if ch == "'" and not in_double:
                    in_single = not in_single
                elif ch == '"' and not in_single:
                    in_double = not in_double
                if ch == '#' and not in_single and not in_double:
                    break
                result_chars.append(ch)
            val = ''.join(result_chars).rstrip()
        if (val.startswith('"') and val.endswith('"')) or (val.startswith("'") and val.endswith("'")):
            if len(val) >= 2:
                val = val[1:-1]
        if key:
            values[key] = val
    return values


def load_config(overrides: Dict[str, Any] | None = None) -> Dict[str, Any]:
    """Load configuration merging defaults <- .env <- environment <- overrides.

    During test runs (detected via PYTEST_CURRENT_TEST) .env loading is skipped
    unless M3U8TWEAKS_ENABLE_DOTENV=1 is set to allow deterministic defaults.

    Args:
        overrides: Dict of values to deep-merge last (CLI flags, tests).

    Returns:
        dict: Configuration dictionary (for typed access use AppConfig.from_dict()).
    """
    dotenv_values: Dict[str, str] = {}
    if os.environ.get('M3U8TWEAKS_ENABLE_DOTENV') or not os.environ.get('PYTEST_CURRENT_TEST'):
        dotenv_values = _load_dotenv(Path('.env'))
    cfg: Dict[str, Any] = copy.deepcopy(_DEFAULTS)

    # Real environment wins over .env
    combined = {**{k: v for k, v in dotenv_values.items() if k.startswith(ENV_PREFIX)},
                **{k: v for k, v in os.environ.items() if k.startswith(ENV_PREFIX)}}
    for raw_key, value in combined.items():
        path_parts = raw_key[len(ENV_PREFIX):].split("__")
        cursor: Dict[str, Any] = cfg
        for part in path_parts[:-1]:
            cursor = cursor.setdefault(part.lower(), {})  # type: ignore[assignment]
        cursor[path_parts[-1].lower()] = coerce_scalar(value)
    if overrides:
        cfg = deep_merge(cfg, overrides)

    _configure_logging(cfg.get('log_level', 'INFO'))

    return cfg


def _configure_logging(level_str: str) -> None:
    """Configure Python logging based on configured level.

    ``SILENT`` is accepted in addition to the standard level names and mutes
    every log record.
    """
    level_str = str(level_str).upper()
    level_map = {
        'DEBUG': logging.DEBUG,
        'INFO': logging.INFO,
        'WARNING': logging.WARNING,
        'ERROR': logging.ERROR,
        'CRITICAL': logging.CRITICAL,
        'SILENT': SILENT_LEVEL,
    }
    level = level_map.get(level_str, logging.INFO)

    logging.basicConfig(
        level=level,
        format='%(message)s',
        force=True
    )


def log_level_for(verbose: bool, silent: bool, configured: str = "INFO") -> str:
    """Pick the effective log level from CLI flags; silent takes precedence."""
    if silent:
        return "SILENT"
    if verbose:
        return "DEBUG"
    return configured


def coerce_scalar(value: str) -> Any:
    txt = value.strip()
    if (txt.startswith('[') and txt.endswith(']')) or (txt.startswith('{') and txt.endswith('}')):
        try:
            return json.loads(txt)
        except ValueError:
            pass  # fall through to scalar heuristics
    lower = txt.lower()
    if lower in {"true", "yes"}:
        return True
    if lower in {"false", "no"}:
        return False
    if lower in {"none", "null"}:
        return None
    if txt.isdigit() or (txt.startswith("-") and txt[1:].isdigit()):
        return int(txt)
    try:
        return float(txt)
    except ValueError:
        return txt

__all__ = ["load_config", "deep_merge", "coerce_scalar", "log_level_for"]
