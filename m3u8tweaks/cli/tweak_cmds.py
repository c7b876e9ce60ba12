"""Playlist conversion commands."""

from __future__ import annotations
import click
import logging
import sys
from pathlib import Path

from .helpers import cli, is_silent, with_overrides
from ..config_types import AppConfig
from ..errors import InputMissing, TweakError, UserAborted
from ..services.tweak_service import (
    TweakPlan,
    apply_root,
    execute_plan,
    jobs_for,
    prepare_run,
    resolve_target_dir,
)
from ..utils.output import count_badge, divider, plural, section_header, success, table, value, warning

logger = logging.getLogger(__name__)


def _resolve_folder(folder: str | None, interactive: bool) -> Path:
    if not folder and interactive:
        folder = click.prompt(
            click.style("Enter the path of the folder that contains your playlists", fg='blue'),
            default='', show_default=False,
        )
    if not folder:
        raise InputMissing("Missing `path` argument.")
    return Path(folder)


def _report_plan(plan: TweakPlan, purge_mismatch: bool = True) -> None:
    count = len(plan.playlist_files)
    declared = plan.catalog.declared_count
    referenced = declared if declared is not None else len(plan.catalog)
    logger.info(
        f"Found {count_badge(count, plural(count, 'playlist'), 'green')}, "
        f"XML references {count_badge(referenced, 'playlists', 'green')}."
    )
    if plan.resolution.detected:
        logger.info(f"Using first entry of first playlist as baseline for checking others: {value(plan.baseline)}")
    excluded = plan.excluded_playlists()
    if excluded and not purge_mismatch:
        logger.info(warning("Not all files have a common prefix, keeping them unchanged:"))
        logger.info(table(excluded, ["title", "path"]))
    elif excluded:
        logger.info(click.style("↓ Not all files have a common prefix, will skip these files ↓", fg='red'))
        logger.info(table(excluded, ["title", "path"]))
        logger.info(click.style("↑ Not all files have a common prefix, will skip these files ↑", fg='red'))


def _confirm_root(plan: TweakPlan, purge_mismatch: bool) -> TweakPlan:
    correct = click.confirm(
        click.style("Root appears to be ", fg='blue') + click.style(plan.root, fg='green')
        + click.style(", is this correct?", fg='blue'),
        default=True,
    )
    if correct:
        return plan
    root = click.prompt(click.style("Enter the correct root", fg='blue'))
    corrected = apply_root(plan, root)
    _report_plan(corrected, purge_mismatch)
    return corrected


def _report_configuration(plan: TweakPlan, new_root: str, skipped: int) -> None:
    logger.info("")
    logger.info(click.style("FINAL CONFIGURATION:", bold=True))
    logger.info(f"Folder: {value(plan.folder)} ({len(plan.playlist_files)} playlists, {skipped} skipped)")
    logger.info(f"Current root: {value(plan.root)}")
    logger.info(f"Replacement root: {value(new_root)}")
    logger.info("")


@cli.command()
@click.argument("folder", required=False)
@click.option("-o", "--old-root", default=None,
              help="The original root used for tracks in the playlists. Auto-detected when omitted.")
@click.option("-n", "--new-root", default=None, help="The new root that replaces the original root.")
@click.option("-t", "--target-folder", default=None,
              help="Where the converted playlists are stored. Defaults to 'm3u8tweaked' inside FOLDER.")
@click.option("--interactive/--not-interactive", default=None,
              help="Ask for missing values and confirmation. Disable for automated systems.")
@click.option("--purge-xml/--keep-unlisted", default=None, help="Skip playlists that are not in the XML.")
@click.option("--purge-mismatch/--keep-mismatch", default=None,
              help="Skip playlists whose first track is not under the root. http streams are always kept.")
@click.option("--rename/--no-rename", default=None, help="Name output files after the title found in the XML.")
@click.pass_context
def tweak(ctx: click.Context, folder: str | None, old_root: str | None, new_root: str | None,
          target_folder: str | None, interactive: bool | None, purge_xml: bool | None,
          purge_mismatch: bool | None, rename: bool | None):
    """Rewrite the playlists in FOLDER for a different library root.

    Reads every *.m3u8 playlist and playlists.xml in FOLDER, replaces the
    common root of all tracks with the new root and writes .m3u files to the
    target folder.
    """
    cfg = with_overrides(
        ctx.obj, 'rewrite',
        old_root=old_root, target_folder=target_folder, interactive=interactive,
        purge_xml=purge_xml, purge_mismatch=purge_mismatch, rename=rename,
    )
    typed = AppConfig.from_dict(cfg)
    rw_cfg = typed.rewrite
    interactive = rw_cfg.interactive

    try:
        path = _resolve_folder(folder, interactive)
        logger.info(section_header(f"Checking {path}"))

        plan = prepare_run(path, cfg)
        _report_plan(plan, rw_cfg.purge_mismatch)
        if interactive and plan.resolution.detected:
            plan = _confirm_root(plan, rw_cfg.purge_mismatch)

        if new_root is None:
            new_root = rw_cfg.new_root or ''
            if interactive:
                new_root = click.prompt(
                    click.style("Enter the new root that is used as a replacement", fg='blue'),
                    default=new_root, show_default=False,
                )

        jobs = jobs_for(plan, cfg)
        _report_configuration(plan, new_root, len(plan.playlist_files) - len(jobs))
        if interactive and not click.confirm("Are these settings correct & do you wish to proceed?"):
            raise UserAborted("Aborted -- incorrect configuration.")

        target_dir = resolve_target_dir(path, rw_cfg)
        header = typed.playlists.header_marker
        with click.progressbar(length=len(jobs), label="Rewriting playlists",
                               hidden=is_silent(cfg), file=sys.stderr) as bar:
            result = execute_plan(plan, jobs, new_root, target_dir, header=header,
                                  on_progress=lambda job: bar.update(1))
    except TweakError:
        logger.debug("Run failed", exc_info=True)
        raise

    if result.skipped_files:
        logger.info(warning(f"Skipped {len(result.skipped_files)} {plural(len(result.skipped_files), 'playlist')}"))
    logger.info(divider())
    logger.info(success(f"Wrote {len(result.written_files)} playlists to {value(target_dir)}"))
    logger.info(click.style("Successfully tweaked all playlists. Happy listening!", fg='green'))


@cli.command()
@click.argument("folder", type=click.Path(file_okay=False, path_type=Path))
@click.option("-o", "--old-root", default=None, help="Check a given root instead of detecting one.")
@click.option("--purge-xml/--keep-unlisted", default=None, help="Skip playlists that are not in the XML.")
@click.pass_context
def detect(ctx: click.Context, folder: Path, old_root: str | None, purge_xml: bool | None):
    """Show the detected root and excluded playlists without writing anything."""
    cfg = with_overrides(ctx.obj, 'rewrite', old_root=old_root, purge_xml=purge_xml)
    try:
        plan = prepare_run(folder, cfg)
    except TweakError:
        logger.debug("Detection failed", exc_info=True)
        raise
    _report_plan(plan)
    # Plain stdout so scripts can capture the root
    if not is_silent(cfg):
        click.echo(plan.root)


__all__ = ["tweak", "detect"]
