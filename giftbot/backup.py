"""Zip backups of the config, state and log files, and their restoration."""

from __future__ import annotations

import os
import shutil
import zipfile
from datetime import datetime
from pathlib import Path, PurePosixPath

from giftbot.paths import CONFIG_FILE_NAME, LOG_FILE_NAME, STATE_FILE_NAME, find_config

RESTORABLE_NAMES = frozenset({CONFIG_FILE_NAME, STATE_FILE_NAME, LOG_FILE_NAME})


class BackupError(Exception):
    """A backup could not be created or restored."""


def backup_candidates(config_path: str | os.PathLike[str]) -> list[Path]:
    """Files that belong in a backup of the given config."""
    config = Path(config_path)
    folder = config.parent
    return [config, folder / STATE_FILE_NAME, folder / LOG_FILE_NAME]


def add_to_zip(archive: zipfile.ZipFile, src_path: str | os.PathLike[str], name: str) -> None:
    """Copy a file on disk into the archive under ``name``."""
    with open(src_path, "rb") as src, archive.open(name, "w") as dst:
        shutil.copyfileobj(src, dst)


def extract_from_zip(
    archive: zipfile.ZipFile,
    info: zipfile.ZipInfo | str,
    dest_path: str | os.PathLike[str],
) -> None:
    """Write one archive member to ``dest_path``, refusing traversal paths."""
    member_name = info.filename if isinstance(info, zipfile.ZipInfo) else info
    if ".." in member_name:
        raise BackupError(f"suspicious path: {member_name}")
    with archive.open(info) as src, open(dest_path, "wb") as dst:
        shutil.copyfileobj(src, dst)


def _default_backup_name() -> str:
    return f"steamgifts-bot-backup-{datetime.now():%Y-%m-%d-%H%M%S}.zip"


def create_backup(
    config_path: str | os.PathLike[str] | None = None,
    out_path: str | os.PathLike[str] | None = None,
) -> tuple[Path, list[str]]:
    """Archive the config and its neighbouring state and log files.

    Returns the archive path and the names of the files it holds.
    """
    config = Path(config_path) if config_path else find_config()
    if config is None:
        raise BackupError("no config found — nothing to back up")
    out = Path(out_path) if out_path else Path(_default_backup_name())

    backed: list[str] = []
    try:
        with zipfile.ZipFile(out, "w", zipfile.ZIP_DEFLATED) as archive:
            for path in backup_candidates(config):
                if not path.exists():
                    continue
                try:
                    add_to_zip(archive, path, path.name)
                except OSError as exc:
                    raise BackupError(f"backup: add {path}: {exc}") from exc
                backed.append(path.name)
    except OSError as exc:
        raise BackupError(f"backup: create {out}: {exc}") from exc

    if not backed:
        out.unlink(missing_ok=True)
        raise BackupError("no files found to back up")
    return out, backed


def restore_backup(
    zip_path: str | os.PathLike[str],
    dest_dir: str | os.PathLike[str] | None = None,
) -> tuple[list[str], list[str]]:
    """Extract known files from a backup into ``dest_dir``.

    Without ``dest_dir`` the directory of the discovered config is used, or
    the current directory. Returns the restored names and the skipped
    member names.
    """
    if dest_dir is None:
        found = find_config()
        dest = found.parent if found is not None else Path(".")
    else:
        dest = Path(dest_dir)

    restored: list[str] = []
    skipped: list[str] = []
    try:
        archive = zipfile.ZipFile(zip_path)
    except (OSError, zipfile.BadZipFile) as exc:
        raise BackupError(f"restore: open {zip_path}: {exc}") from exc

    with archive:
        for info in archive.infolist():
            name = PurePosixPath(info.filename.replace("\\", "/")).name
            if name not in RESTORABLE_NAMES:
                skipped.append(info.filename)
                continue
            target = dest / name
            try:
                extract_from_zip(archive, info, target)
            except (OSError, zipfile.BadZipFile, BackupError) as exc:
                raise BackupError(f"restore: extract {name}: {exc}") from exc
            if name == CONFIG_FILE_NAME:
                try:
                    os.chmod(target, 0o600)
                except OSError:
                    pass
            restored.append(name)
    return restored, skipped