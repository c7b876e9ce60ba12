"""End-to-end tests of the tweak service against real playlist folders."""

from pathlib import Path

import pytest

from m3u8tweaks.config_types import RewriteConfig
from m3u8tweaks.errors import NoPlaylistsFound, PrefixNotFound
from m3u8tweaks.services.tweak_service import (
    build_jobs,
    execute_plan,
    prepare_run,
    resolve_target_dir,
    run_tweak,
)


def _read(path: Path) -> list:
    return path.read_text(encoding="utf-8").splitlines()


def test_two_playlists_share_root_and_prefix_is_stripped(playlist_folder, test_config, tmp_path):
    folder = playlist_folder({
        "a.m3u8": ("Alpha", ["C:\\Lib\\x.mp3", "C:\\Lib\\sub\\x2.mp3"]),
        "b.m3u8": ("Beta", ["C:\\Lib\\y.mp3"]),
    })

    plan = prepare_run(folder, test_config)
    assert plan.root == "C:\\Lib\\"
    assert plan.resolution.excluded == set()

    result = run_tweak(folder, test_config)

    out = tmp_path / "out"
    assert sorted(p.name for p in out.iterdir()) == ["Alpha.m3u", "Beta.m3u"]
    assert _read(out / "Alpha.m3u") == ["#EXTINF:210,x", "x.mp3", "#EXTINF:210,x2", "sub/x2.mp3"]
    assert _read(out / "Beta.m3u") == ["#EXTINF:210,y", "y.mp3"]
    assert result.skipped_files == []
    assert len(result.written_files) == 2


def test_new_root_and_mismatch_purge(playlist_folder, test_config, tmp_path):
    folder = playlist_folder({
        "a.m3u8": ("Alpha", ["C:\\Music\\A\\1.mp3"]),
        "b.m3u8": ("Beta", ["C:\\Music\\B\\2.mp3"]),
        "c.m3u8": ("Elsewhere", ["D:\\Other\\3.mp3"]),
        "d.m3u8": ("Radio", ["http://stream.example.com/radio"]),
    })
    test_config['rewrite']['new_root'] = "/srv/music/"

    plan = prepare_run(folder, test_config)
    assert plan.root == "C:\\Music\\"
    assert plan.excluded_files() == ["c.m3u8"]
    assert [e.title for e in plan.excluded_playlists()] == ["Elsewhere"]
    assert plan.excluded_playlists()[0].path == str(folder / "c.m3u8")

    result = run_tweak(folder, test_config)

    out = tmp_path / "out"
    assert sorted(p.name for p in out.iterdir()) == ["Alpha.m3u", "Beta.m3u", "Radio.m3u"]
    assert _read(out / "Alpha.m3u")[1] == "/srv/music/A/1.mp3"
    assert _read(out / "Radio.m3u")[1] == "http://stream.example.com/radio"
    assert result.skipped_files == ["c.m3u8"]


def test_keep_mismatch_writes_everything(playlist_folder, test_config, tmp_path):
    folder = playlist_folder({
        "a.m3u8": ("Alpha", ["C:\\Music\\1.mp3"]),
        "b.m3u8": ("Beta", ["C:\\Music\\2.mp3"]),
        "c.m3u8": ("Elsewhere", ["D:\\Other\\3.mp3"]),
    })
    test_config['rewrite']['purge_mismatch'] = False

    run_tweak(folder, test_config)

    out = tmp_path / "out"
    assert (out / "Elsewhere.m3u").exists()
    assert _read(out / "Elsewhere.m3u")[1] == "D:\\Other\\3.mp3"


def test_output_follows_metadata_order(playlist_folder, test_config):
    folder = playlist_folder({
        "z.m3u8": ("First In XML", ["C:\\Lib\\1.mp3"]),
        "a.m3u8": ("Second In XML", ["C:\\Lib\\2.mp3"]),
        "m.m3u8": ("Third In XML", ["C:\\Lib\\3.mp3"]),
    })

    plan = prepare_run(folder, test_config)
    # Discovery is alphabetical, output is catalog order
    assert plan.playlist_files == ["a.m3u8", "m.m3u8", "z.m3u8"]
    jobs = build_jobs(plan)
    assert [j.source.name for j in jobs] == ["z.m3u8", "a.m3u8", "m.m3u8"]
    assert [j.output_name for j in jobs] == ["First In XML.m3u", "Second In XML.m3u", "Third In XML.m3u"]


def test_colliding_titles_get_suffix(playlist_folder, test_config, tmp_path):
    folder = playlist_folder({
        "a.m3u8": ("My Mix!", ["C:\\Lib\\1.mp3"]),
        "b.m3u8": ("My Mix?", ["C:\\Lib\\2.mp3"]),
    })

    run_tweak(folder, test_config)

    out = tmp_path / "out"
    assert _read(out / "My Mix.m3u")[1] == "1.mp3"
    assert _read(out / "My Mix 2.m3u")[1] == "2.mp3"


def test_unlisted_playlists_purged_by_default(playlist_folder, test_config, tmp_path):
    folder = playlist_folder(
        {"a.m3u8": ("Alpha", ["C:\\Lib\\1.mp3"]), "b.m3u8": ("Beta", ["C:\\Lib\\2.mp3"])},
        unlisted={"stray.m3u8": ["C:\\Lib\\3.mp3"]},
    )

    plan = prepare_run(folder, test_config)
    assert plan.purged_unlisted == 1
    assert "stray.m3u8" not in plan.playlist_files


def test_unlisted_playlists_kept_after_listed_ones(playlist_folder, test_config, tmp_path):
    folder = playlist_folder(
        {"b.m3u8": ("Beta", ["C:\\Lib\\2.mp3"])},
        unlisted={"a_stray.m3u8": ["C:\\Lib\\3.mp3"]},
    )
    test_config['rewrite']['purge_xml'] = False

    plan = prepare_run(folder, test_config)
    jobs = build_jobs(plan)

    assert [j.output_name for j in jobs] == ["Beta.m3u", "a_stray.m3u"]
    assert jobs[1].meta is None


def test_no_rename_uses_file_stem(playlist_folder, test_config, tmp_path):
    folder = playlist_folder({"plf1234.m3u8": ("Pretty Title", ["C:\\Lib\\1.mp3"]),
                              "plf5678.m3u8": ("Other", ["C:\\Lib\\2.mp3"])})
    test_config['rewrite']['rename'] = False

    run_tweak(folder, test_config)

    assert sorted(p.name for p in (tmp_path / "out").iterdir()) == ["plf1234.m3u", "plf5678.m3u"]


def test_only_unlisted_playlists_is_fatal(playlist_folder, test_config):
    folder = playlist_folder({}, unlisted={"stray.m3u8": ["C:\\Lib\\3.mp3"]})
    with pytest.raises(NoPlaylistsFound):
        prepare_run(folder, test_config)


def test_declared_root_not_present_is_fatal(playlist_folder, test_config):
    folder = playlist_folder({"a.m3u8": ("Alpha", ["C:\\Lib\\1.mp3"])})
    test_config['rewrite']['old_root'] = "E:\\Nope"
    with pytest.raises(PrefixNotFound):
        prepare_run(folder, test_config)


def test_default_target_dir_inside_folder(playlist_folder, test_config):
    folder = playlist_folder({"a.m3u8": ("Alpha", ["C:\\Lib\\1.mp3"])})
    test_config['rewrite']['target_folder'] = ""
    test_config['rewrite']['old_root'] = "C:\\Lib\\"

    target = resolve_target_dir(folder, RewriteConfig(**test_config['rewrite']))
    assert target == folder / "m3u8tweaked"

    plan = prepare_run(folder, test_config)
    execute_plan(plan, build_jobs(plan), "/m/", target)
    assert (target / "Alpha.m3u").read_text(encoding="utf-8") == "#EXTINF:210,1\n/m/1.mp3\n"


def test_progress_callback_called_per_playlist(playlist_folder, test_config, tmp_path):
    folder = playlist_folder({
        "a.m3u8": ("Alpha", ["C:\\Lib\\1.mp3"]),
        "b.m3u8": ("Beta", ["C:\\Lib\\2.mp3"]),
    })
    seen = []
    plan = prepare_run(folder, test_config)
    execute_plan(plan, build_jobs(plan), "", tmp_path / "out", on_progress=lambda job: seen.append(job.output_name))
    assert seen == ["Alpha.m3u", "Beta.m3u"]


def test_headerless_playlists_with_bom_are_fully_rewritten(playlist_folder, test_config, tmp_path):
    folder = playlist_folder({
        "a.m3u8": ("A", ["C:\\Lib\\x.mp3"]),
        "b.m3u8": ("B", ["C:\\Lib\\y.mp3"]),
    })
    (folder / "a.m3u8").write_bytes(b"\xef\xbb\xbfC:\\Lib\\x.mp3\r\nC:\\Lib\\x2.mp3\r\n")
    (folder / "b.m3u8").write_bytes(b"\xef\xbb\xbfC:\\Lib\\y.mp3\r\n")

    run_tweak(folder, test_config)

    out = tmp_path / "out"
    assert (out / "A.m3u").read_bytes() == b"x.mp3\nx2.mp3\n"
    assert (out / "B.m3u").read_bytes() == b"y.mp3\n"
