"""Backup of existing APT source and pinning configuration."""

import logging
import shutil
from datetime import datetime
from pathlib import Path

from apt_integrator.config import BACKUP_TIMESTAMP_FORMAT

logger = logging.getLogger(__name__)


class ConfigBackup:
    """Copies APT source-list and pinning files into a timestamped directory."""

    def __init__(self, apt_dir: Path, backup_root: Path):
        """Initialize the backup.

        Args:
            apt_dir: APT configuration root (normally /etc/apt)
            backup_root: Directory receiving one subdirectory per run
        """
        self.apt_dir = Path(apt_dir)
        self.backup_root = Path(backup_root)

    def create_backup_dir(self, now: datetime | None = None) -> Path:
        """Create a fresh backup directory named after the current time.

        A numeric suffix is appended when a directory for the same second
        already exists, so an earlier backup is never written into.

        Args:
            now: Timestamp to use instead of the current time

        Returns:
            Path of the created directory
        """
        stamp = (now or datetime.now()).strftime(BACKUP_TIMESTAMP_FORMAT)
        self.backup_root.mkdir(parents=True, exist_ok=True)

        candidate = self.backup_root / stamp
        suffix = 0
        while True:
            try:
                candidate.mkdir()
                return candidate
            except FileExistsError:
                suffix += 1
                candidate = self.backup_root / f"{stamp}-{suffix}"

    def _list_files(self, directory: Path) -> list[Path]:
        """Files directly inside ``directory``; listing errors are warned."""
        try:
            return sorted(p for p in directory.iterdir() if p.is_file())
        except FileNotFoundError:
            return []
        except OSError as e:
            logger.warning(f"Could not list {directory}: {e}")
            return []

    def collect_files(self) -> list[Path]:
        """List the source-list and pinning files present right now.

        Covers ``sources.list*`` in the APT root (the main file and the
        ``sources.list.d`` snippets) and every file in ``preferences.d``.
        Unreadable directories are logged as warnings and skipped.
        """
        files = []
        try:
            entries = sorted(self.apt_dir.glob("sources.list*"))
        except OSError as e:
            logger.warning(f"Could not list {self.apt_dir}: {e}")
            entries = []

        for entry in entries:
            try:
                is_dir = entry.is_dir()
            except OSError as e:
                logger.warning(f"Could not inspect {entry}: {e}")
                continue
            if is_dir:
                files.extend(self._list_files(entry))
            else:
                files.append(entry)

        files.extend(self._list_files(self.apt_dir / "preferences.d"))
        return files

    @staticmethod
    def _unique_target(backup_dir: Path, source: Path) -> Path:
        target = backup_dir / source.name
        if not target.exists():
            return target
        stem = f"{source.parent.name}_{source.name}"
        target = backup_dir / stem
        suffix = 0
        while target.exists():
            suffix += 1
            target = backup_dir / f"{stem}-{suffix}"
        return target

    def backup(self, now: datetime | None = None) -> Path:
        """Copy every existing configuration file into a new backup directory.

        Files that vanish before they are copied are skipped silently. Any
        other listing or copy failure is logged as a warning and the backup
        goes on. Only failing to create the backup directory is fatal.

        Returns:
            Path of the backup directory
        """
        backup_dir = self.create_backup_dir(now)
        logger.info(f"Backing up existing APT configs to {backup_dir}")

        copied = 0
        for source in self.collect_files():
            target = self._unique_target(backup_dir, source)
            try:
                shutil.copy2(source, target)
                copied += 1
            except FileNotFoundError:
                logger.debug(f"Nothing to back up for {source}")
            except OSError as e:
                logger.warning(f"Could not back up {source}: {e}")

        logger.debug(f"Backed up {copied} file(s) to {backup_dir}")
        return backup_dir
