import sys
import zipfile

import pytest

from giftbot.cli import build_parser, main


def _run_version(parser, capsys):
    args = parser.parse_args(["version"])
    args.handler(args, sys.stdout)
    return capsys.readouterr().out


def test_version_command_prints_build_info(capsys):
    parser = build_parser("1.2.3", "abc123", "2024-01-01")
    out = _run_version(parser, capsys)
    assert "1.2.3" in out
    assert "abc123" in out
    assert "2024-01-01" in out
    assert out.startswith("steamgifts-bot ")


def test_version_flag_exits_zero(capsys):
    parser = build_parser("1.2.3", "abc123", "2024-01-01")
    with pytest.raises(SystemExit) as excinfo:
        parser.parse_args(["--version"])
    assert excinfo.value.code == 0
    out = capsys.readouterr().out
    assert "1.2.3" in out and "abc123" in out


def test_main_version_returns_zero(capsys):
    assert main(["version"]) == 0
    assert capsys.readouterr().out.startswith("steamgifts-bot ")


def test_bare_command_prints_help(capsys):
    assert main([]) == 0
    out = capsys.readouterr().out
    assert "backup" in out and "version" in out


def test_unknown_command_is_usage_error():
    with pytest.raises(SystemExit) as excinfo:
        main(["no-such-command"])
    assert excinfo.value.code == 2


def _make_config_dir(tmp_path):
    config = tmp_path / "config.yml"
    config.write_text("accounts: []\n")
    (tmp_path / "state.json").write_text("{}")
    return config


def test_backup_create_archives_files(tmp_path, capsys):
    config = _make_config_dir(tmp_path)
    out_zip = tmp_path / "out.zip"
    assert main(["--config", str(config), "backup", "create", str(out_zip)]) == 0
    with zipfile.ZipFile(out_zip) as archive:
        assert sorted(archive.namelist()) == ["config.yml", "state.json"]
        assert archive.read("config.yml") == b"accounts: []\n"
    out = capsys.readouterr().out
    assert "  + config.yml" in out
    assert "backed up 2 files" in out


def test_backup_create_accepts_config_after_subcommand(tmp_path):
    config = _make_config_dir(tmp_path)
    out_zip = tmp_path / "later.zip"
    assert main(["backup", "create", "--config", str(config), str(out_zip)]) == 0
    assert out_zip.exists()


def test_backup_create_without_files_fails(tmp_path, capsys):
    out_zip = tmp_path / "empty.zip"
    code = main(["--config", str(tmp_path / "missing" / "config.yml"), "backup", "create", str(out_zip)])
    assert code == 1
    assert "error: no files found to back up" in capsys.readouterr().err
    assert not out_zip.exists()


def test_backup_restore_roundtrip(tmp_path, capsys):
    source = tmp_path / "source"
    source.mkdir()
    config = _make_config_dir(source)
    out_zip = tmp_path / "b.zip"
    assert main(["--config", str(config), "backup", "create", str(out_zip)]) == 0

    dest = tmp_path / "dest"
    dest.mkdir()
    capsys.readouterr()
    assert main(["--config", str(dest / "config.yml"), "backup", "restore", str(out_zip)]) == 0
    assert (dest / "config.yml").read_text() == "accounts: []\n"
    assert (dest / "state.json").read_text() == "{}"
    assert "restored 2 files" in capsys.readouterr().out


def test_backup_restore_skips_unknown(tmp_path, capsys):
    archive_path = tmp_path / "mixed.zip"
    with zipfile.ZipFile(archive_path, "w") as archive:
        archive.writestr("config.yml", "x")
        archive.writestr("notes.txt", "y")
    dest = tmp_path / "dest"
    dest.mkdir()
    assert main(["--config", str(dest / "config.yml"), "backup", "restore", str(archive_path)]) == 0
    out = capsys.readouterr().out
    assert "skipping unknown file: notes.txt" in out
    assert not (dest / "notes.txt").exists()
    assert (dest / "config.yml").read_text() == "x"


def test_backup_restore_rejects_traversal(tmp_path, capsys):
    archive_path = tmp_path / "evil.zip"
    with zipfile.ZipFile(archive_path, "w") as archive:
        archive.writestr("../../config.yml", "evil")
    dest = tmp_path / "dest"
    dest.mkdir()
    code = main(["--config", str(dest / "config.yml"), "backup", "restore", str(archive_path)])
    assert code == 1
    assert "suspicious" in capsys.readouterr().err
    assert not (dest / "config.yml").exists()


def test_backup_restore_missing_archive(tmp_path, capsys):
    code = main(["--config", str(tmp_path / "config.yml"), "backup", "restore", str(tmp_path / "nope.zip")])
    assert code == 1
    assert capsys.readouterr().err.startswith("error: restore: open")


def test_restore_requires_archive_argument():
    with pytest.raises(SystemExit) as excinfo:
        main(["backup", "restore"])
    assert excinfo.value.code == 2