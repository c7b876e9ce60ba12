"""Tweak service: plan and execute a playlist folder conversion.

A run happens in two phases:

1. ``prepare_run`` lists the folder, loads the metadata catalog, applies the
   XML purge, scans every playlist's first entry concurrently and establishes
   the acting root (auto-detected or operator supplied).
2. ``execute_plan`` rewrites each retained playlist sequentially into the
   target folder.

Interaction (prompts, confirmation, progress display) is left to the caller.
"""

from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Any, List
import logging
import time

from ..ingest.folder import list_playlist_folder
from ..ingest.metadata import PlaylistCatalog, PlaylistMeta, load_catalog
from ..playlist.prefix import RootResolution, detect_root, exclusions_for_root
from ..playlist.rewrite import OutputNamer, rewrite_playlist
from ..playlist.scan import collect_first_entries
from ..config_types import AppConfig, RewriteConfig
from ..errors import NoPlaylistsFound

logger = logging.getLogger(__name__)


@dataclass
class ExcludedPlaylist:
    title: str
    path: str


@dataclass
class TweakPlan:
    """Everything known about a run before any file is written."""
    folder: Path
    playlist_files: List[str]
    catalog: PlaylistCatalog
    candidates: List[str]
    resolution: RootResolution
    purged_unlisted: int = 0

    @property
    def root(self) -> str:
        return self.resolution.root

    @property
    def baseline(self) -> str:
        return self.candidates[0] if self.candidates else ""

    def excluded_files(self) -> List[str]:
        return [self.playlist_files[i] for i in sorted(self.resolution.excluded)]

    def excluded_playlists(self) -> List[ExcludedPlaylist]:
        """Excluded playlists with their display title, for reporting."""
        return [
            ExcludedPlaylist(
                title=self.catalog.title_for(name),
                path=str(self.folder / name),
            )
            for name in self.excluded_files()
        ]


@dataclass
class RewriteJob:
    source: Path
    output_name: str
    meta: PlaylistMeta | None = None


class TweakResult:
    """Results from executing a plan."""

    def __init__(self):
        self.target_dir: Path | None = None
        self.written_files: List[str] = []
        self.skipped_files: List[str] = []
        self.duration_seconds = 0.0


def prepare_run(folder: Path, cfg: Dict[str, Any]) -> TweakPlan:
    """Build a run plan for ``folder``.

    Args:
        folder: Folder holding the playlists and the metadata file
        cfg: Configuration dict (see config._DEFAULTS)

    Raises:
        InputInvalid, NoPlaylistsFound, MetadataMissing, MetadataUnparseable,
        PrefixNotFound, StreamIOError
    """
    typed = AppConfig.from_dict(cfg)
    pl_cfg = typed.playlists
    rw_cfg = typed.rewrite

    logger.debug(f"Checking {folder}")
    listing = list_playlist_folder(folder, pl_cfg.extension, pl_cfg.metadata_file)
    catalog = load_catalog(listing.metadata_path)  # type: ignore[arg-type]

    playlist_files = list(listing.playlist_files)
    purged = 0
    if rw_cfg.purge_xml:
        kept = [name for name in playlist_files if name in catalog]
        purged = len(playlist_files) - len(kept)
        playlist_files = kept
        logger.info(f"Ignoring {purged} playlist(s) that are not in the XML.")
        if not playlist_files:
            raise NoPlaylistsFound("No playlist files found that are referenced by the XML.")

    candidates = collect_first_entries(folder, playlist_files, typed.scan.max_workers)

    if rw_cfg.old_root:
        resolution = exclusions_for_root(candidates, rw_cfg.old_root)
    else:
        logger.debug(f"Using first entry of first playlist as baseline: {candidates[0]}")
        resolution = detect_root(candidates)

    return TweakPlan(
        folder=folder,
        playlist_files=playlist_files,
        catalog=catalog,
        candidates=candidates,
        resolution=resolution,
        purged_unlisted=purged,
    )


def apply_root(plan: TweakPlan, root: str) -> TweakPlan:
    """Return a plan using an operator-corrected root."""
    resolution = exclusions_for_root(plan.candidates, root)
    return TweakPlan(
        folder=plan.folder,
        playlist_files=plan.playlist_files,
        catalog=plan.catalog,
        candidates=plan.candidates,
        resolution=resolution,
        purged_unlisted=plan.purged_unlisted,
    )


def resolve_target_dir(folder: Path, rewrite_config: RewriteConfig) -> Path:
    """Target folder from config, defaulting to a sub-folder of ``folder``."""
    if rewrite_config.target_folder:
        return Path(rewrite_config.target_folder)
    return folder / rewrite_config.default_target_name


def build_jobs(plan: TweakPlan, rename: bool = True, purge_mismatch: bool = True,
               output_extension: str = ".m3u") -> List[RewriteJob]:
    """Order the retained playlists and assign output names.

    Playlists listed in the catalog come first, in catalog order. Playlists
    missing from the catalog (only present when the XML purge is off) follow
    in file name order.
    """
    skip = set(plan.excluded_files()) if purge_mismatch else set()
    retained = [name for name in plan.playlist_files if name not in skip]
    retained_set = set(retained)

    ordered: List[str] = [name for name in plan.catalog.entries if name in retained_set]
    listed = set(ordered)
    ordered.extend(name for name in retained if name not in listed)

    namer = OutputNamer(extension=output_extension)
    jobs: List[RewriteJob] = []
    for name in ordered:
        meta = plan.catalog.get(name)
        title = meta.title if (rename and meta) else Path(name).stem
        jobs.append(RewriteJob(source=plan.folder / name, output_name=namer.claim(title), meta=meta))
    return jobs


def execute_plan(
    plan: TweakPlan,
    jobs: List[RewriteJob],
    new_root: str,
    target_dir: Path,
    header: str = "#EXTM3U",
    on_progress: Callable[[RewriteJob], None] | None = None,
) -> TweakResult:
    """Rewrite the given jobs of ``plan`` into ``target_dir``.

    Processing is sequential and fail-fast: the first StreamIOError ends the run.

    Args:
        plan: Prepared plan (provides the acting root)
        jobs: Jobs from build_jobs, in processing order
        new_root: Replacement root
        target_dir: Output folder (created if absent)
        header: Header marker line to drop
        on_progress: Called after each written playlist

    Returns:
        TweakResult with written and skipped files
    """
    result = TweakResult()
    start = time.time()

    target_dir.mkdir(parents=True, exist_ok=True)
    result.target_dir = target_dir

    job_sources = {job.source.name for job in jobs}
    result.skipped_files = [name for name in plan.playlist_files if name not in job_sources]

    for job in jobs:
        target = target_dir / job.output_name
        rewrite_playlist(job.source, target, plan.root, new_root, header=header)
        result.written_files.append(str(target))
        if on_progress:
            on_progress(job)

    result.duration_seconds = time.time() - start
    logger.debug(f"Wrote {len(result.written_files)} playlist(s) in {result.duration_seconds:.2f}s")
    return result


def jobs_for(plan: TweakPlan, cfg: Dict[str, Any]) -> List[RewriteJob]:
    """build_jobs with the options of a configuration dict."""
    typed = AppConfig.from_dict(cfg)
    rw_cfg = typed.rewrite
    if not rw_cfg.purge_mismatch and plan.resolution.excluded:
        logger.warning(f"Keeping {len(plan.resolution.excluded)} playlist(s) whose first track is not under the root")
    return build_jobs(
        plan,
        rename=rw_cfg.rename,
        purge_mismatch=rw_cfg.purge_mismatch,
        output_extension=typed.playlists.output_extension,
    )


def run_tweak(folder: Path, cfg: Dict[str, Any]) -> TweakResult:
    """Non-interactive run: plan, then rewrite everything with configured options."""
    typed = AppConfig.from_dict(cfg)
    plan = prepare_run(folder, cfg)
    return execute_plan(
        plan,
        jobs_for(plan, cfg),
        typed.rewrite.new_root or '',
        resolve_target_dir(folder, typed.rewrite),
        header=typed.playlists.header_marker,
    )


__all__ = [
    "TweakPlan",
    "TweakResult",
    "RewriteJob",
    "ExcludedPlaylist",
    "prepare_run",
    "apply_root",
    "resolve_target_dir",
    "build_jobs",
    "jobs_for",
    "execute_plan",
    "run_tweak",
]
