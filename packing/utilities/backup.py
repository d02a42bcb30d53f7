"""
Backup utility for the packing store file.
Creates timestamped copies and keeps only the most recent ones.
"""
import shutil
from datetime import datetime
from pathlib import Path
from typing import List, Optional
import logging

from packing.domain.errors import NotFoundError, PersistenceError
from packing.utilities.config import BACKUP_KEEP

logger = logging.getLogger(__name__)


class BackupManager:
    """Manages backups of the JSON store file."""

    def __init__(self, store_file: Path, backup_dir: Optional[Path] = None, keep: int = BACKUP_KEEP):
        self.store_file = Path(store_file)
        self.backup_dir = Path(backup_dir) if backup_dir else self.store_file.parent / 'backups'
        self.keep = keep

    def _pattern(self) -> str:
        return f"{self.store_file.stem}_*{self.store_file.suffix}"

    def create_backup(self) -> Optional[str]:
        """Create a timestamped backup of the store file; returns its name or None if nothing to back up."""
        if not self.store_file.exists():
            logger.warning(f"Store file not found for backup: {self.store_file}")
            return None
        try:
            self.backup_dir.mkdir(parents=True, exist_ok=True)
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
            backup_name = f"{self.store_file.stem}_{timestamp}{self.store_file.suffix}"
            shutil.copy2(self.store_file, self.backup_dir / backup_name)
        except OSError as e:
            logger.error(f"Backup failed for {self.store_file.name}: {e}")
            raise PersistenceError(f"Backup failed: {e}") from e
        logger.info(f"Backup created: {backup_name}")
        self._cleanup_old_backups()
        return backup_name

    def _cleanup_old_backups(self):
        """Remove old backups, keeping only the most recent ones."""
        backups = sorted(self.backup_dir.glob(self._pattern()), key=lambda p: p.name)
        for backup in backups[:-self.keep] if self.keep > 0 else []:
            try:
                backup.unlink()
                logger.info(f"Removed old backup: {backup.name}")
            except OSError as e:
                logger.error(f"Failed to remove old backup {backup.name}: {e}")

    def list_backups(self) -> List[dict]:
        """List backups of the store file, newest first."""
        if not self.backup_dir.exists():
            return []
        backups = sorted(self.backup_dir.glob(self._pattern()), key=lambda p: p.name, reverse=True)
        return [
            {
                'name': b.name,
                'size': b.stat().st_size,
                'created': datetime.fromtimestamp(b.stat().st_mtime).strftime('%Y-%m-%d %H:%M:%S')
            }
            for b in backups
        ]

    def restore_backup(self, backup_name: str) -> None:
        """Restore a backup over the store file (the current file is backed up first)."""
        backup_path = self.backup_dir / Path(backup_name).name
        if not backup_path.exists():
            raise NotFoundError(f"Backup not found: {backup_name}")
        try:
            # Read first: the safety backup below may rotate this one out
            content = backup_path.read_bytes()
            if self.store_file.exists():
                self.create_backup()
            self.store_file.write_bytes(content)
        except OSError as e:
            logger.error(f"Restore failed for {backup_name}: {e}")
            raise PersistenceError(f"Restore failed: {e}") from e
        logger.info(f"Restored backup: {backup_name}")
