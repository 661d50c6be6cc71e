import zipfile

import pytest

from giftbot.backup import (
    BackupError,
    add_to_zip,
    backup_candidates,
    create_backup,
    extract_from_zip,
    restore_backup,
)


def test_add_to_zip_and_extract(tmp_path):
    src = tmp_path / "source.txt"
    src.write_bytes(b"hello zip")
    zip_path = tmp_path / "test.zip"
    with zipfile.ZipFile(zip_path, "w") as archive:
        add_to_zip(archive, src, "source.txt")

    with zipfile.ZipFile(zip_path) as archive:
        infos = archive.infolist()
        assert len(infos) == 1
        dest = tmp_path / "extracted.txt"
        extract_from_zip(archive, infos[0], dest)

    assert dest.read_bytes() == b"hello zip"


def test_add_to_zip_nonexistent_file(tmp_path):
    with zipfile.ZipFile(tmp_path / "test.zip", "w") as archive:
        with pytest.raises(OSError):
            add_to_zip(archive, tmp_path / "nonexistent" / "file.txt", "file.txt")


def test_extract_from_zip_path_traversal(tmp_path):
    zip_path = tmp_path / "evil.zip"
    with zipfile.ZipFile(zip_path, "w") as archive:
        archive.writestr("../../../etc/passwd", "evil")

    with zipfile.ZipFile(zip_path) as archive:
        info = archive.infolist()[0]
        with pytest.raises(BackupError, match="suspicious"):
            extract_from_zip(archive, info, tmp_path / "passwd")
    assert not (tmp_path / "passwd").exists()


def test_backup_candidates(tmp_path):
    config = tmp_path / "config.yml"
    assert backup_candidates(config) == [
        config,
        tmp_path / "state.json",
        tmp_path / "steamgifts-bot.log",
    ]


def test_create_backup_includes_existing_files(tmp_path):
    config = tmp_path / "config.yml"
    config.write_text("accounts: []\n")
    (tmp_path / "state.json").write_text("{}")
    out = tmp_path / "out.zip"

    path, names = create_backup(config, out)

    assert path == out
    assert names == ["config.yml", "state.json"]
    with zipfile.ZipFile(out) as archive:
        assert sorted(archive.namelist()) == ["config.yml", "state.json"]
        assert archive.read("state.json") == b"{}"


def test_create_backup_without_files_fails_and_cleans_up(tmp_path):
    out = tmp_path / "out.zip"
    with pytest.raises(BackupError, match="no files found"):
        create_backup(tmp_path / "missing" / "config.yml", out)
    assert not out.exists()


def test_restore_backup_extracts_known_files(tmp_path):
    zip_path = tmp_path / "backup.zip"
    with zipfile.ZipFile(zip_path, "w") as archive:
        archive.writestr("config.yml", "accounts: []\n")
        archive.writestr("state.json", '{"a": 1}')
        archive.writestr("other.txt", "ignored")
    dest = tmp_path / "dest"
    dest.mkdir()

    restored, skipped = restore_backup(zip_path, dest)

    assert restored == ["config.yml", "state.json"]
    assert skipped == ["other.txt"]
    assert (dest / "config.yml").read_text() == "accounts: []\n"
    assert (dest / "state.json").read_text() == '{"a": 1}'
    assert not (dest / "other.txt").exists()


def test_restore_backup_round_trip(tmp_path):
    src_dir = tmp_path / "src"
    src_dir.mkdir()
    config = src_dir / "config.yml"
    config.write_text("defaults: {}\n")
    (src_dir / "steamgifts-bot.log").write_text("line\n")
    out, _ = create_backup(config, tmp_path / "b.zip")

    dest = tmp_path / "dest"
    dest.mkdir()
    restored, skipped = restore_backup(out, dest)

    assert sorted(restored) == ["config.yml", "steamgifts-bot.log"]
    assert skipped == []
    assert (dest / "steamgifts-bot.log").read_text() == "line\n"


def test_restore_backup_bad_archive(tmp_path):
    bogus = tmp_path / "bogus.zip"
    bogus.write_bytes(b"not a zip")
    with pytest.raises(BackupError, match="restore: open"):
        restore_backup(bogus, tmp_path)