"""
JSON key/value storage implementation.
"""
from datetime import datetime
import json
import logging
import shutil
import random
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..utils.errors import StorageError

logger = logging.getLogger(__name__)

USERS_KEY = "users"
SESSION_KEY = "user"
PERSONAL_DATA_PREFIX = "personalData_"
PROFESSIONAL_DATA_PREFIX = "professionalData_"
BUSINESS_CARDS_PREFIX = "businessCards_"

def personal_data_key(account_id: str) -> str:
    return f"{PERSONAL_DATA_PREFIX}{account_id}"

def professional_data_key(account_id: str) -> str:
    return f"{PROFESSIONAL_DATA_PREFIX}{account_id}"

def business_cards_key(account_id: str) -> str:
    return f"{BUSINESS_CARDS_PREFIX}{account_id}"

class KeyValueStore:
    """Local key/value origin persisted as a single JSON document.

    Every write is flushed to disk immediately, so reads in the same
    process always see the last write.
    """

    def __init__(self, storage_dir: str = "data/active"):
        """Initialize the store, creating the storage directory if needed."""
        self.storage_dir = Path(storage_dir)
        self.storage_dir.mkdir(parents=True, exist_ok=True)

        self.data_file = self.storage_dir / "local_storage.json"
        self.data_file.touch(exist_ok=True)

        self._load()

    def _load(self):
        """Load the document from disk; an empty file is an empty origin."""
        if self.data_file.stat().st_size == 0:
            self._data: Dict[str, Any] = {}
            return
        try:
            with open(self.data_file, 'r') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise StorageError(f"Corrupted storage file: {self.data_file}") from e
        if not isinstance(data, dict):
            raise StorageError(f"Corrupted storage file: {self.data_file}")
        self._data = data

    def _save(self):
        """Write the document to disk using a temp file and atomic rename."""
        temp_path = self.data_file.with_suffix(".json.tmp")
        try:
            temp_path.write_text(json.dumps(self._data, indent=2))
            temp_path.replace(self.data_file)
        except (OSError, TypeError, ValueError) as e:
            if temp_path.exists():
                temp_path.unlink()
            raise StorageError(f"Failed to save {self.data_file}: {e}") from e

    def get(self, key: str) -> Optional[Any]:
        """Get the value stored under key, or None."""
        return self._data.get(key)

    def set(self, key: str, value: Any):
        """Store a JSON-serializable value under key and persist."""
        previous = self._data.get(key)
        had_key = key in self._data
        self._data[key] = value
        try:
            self._save()
        except StorageError:
            if had_key:
                self._data[key] = previous
            else:
                del self._data[key]
            raise

    def remove(self, key: str):
        """Remove key if present; removing a missing key is a no-op."""
        if key not in self._data:
            return
        previous = self._data.pop(key)
        try:
            self._save()
        except StorageError:
            self._data[key] = previous
            raise

    def keys(self, prefix: Optional[str] = None) -> List[str]:
        """List stored keys, optionally only those starting with prefix."""
        return [k for k in self._data if prefix is None or k.startswith(prefix)]

    def clear(self):
        """Remove every key."""
        self._data = {}
        self._save()

    def backup(self, backup_dir: str = "data/backups", max_backups: int = 5) -> Path:
        """Create a backup of all data.

        Args:
            backup_dir: Directory to store backups
            max_backups: Maximum number of backups to keep

        Returns:
            Path of the new backup directory
        """
        backup_path = Path(backup_dir)
        backup_path.mkdir(parents=True, exist_ok=True)

        # Timestamped directory with random suffix
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        random_suffix = ''.join(random.choices('0123456789abcdef', k=4))
        target_dir = backup_path / f"backup_{timestamp}_{random_suffix}"
        target_dir.mkdir()

        shutil.copy2(self.data_file, target_dir / "local_storage.json")

        stats = self.get_storage_stats()
        backup_info = {
            "timestamp": timestamp,
            "random_suffix": random_suffix,
            **stats,
        }
        with open(target_dir / "backup_info.json", 'w') as f:
            json.dump(backup_info, f, indent=2)

        self._cleanup_old_backups(backup_path, max_backups)
        logger.info("Created backup %s", target_dir)

        return target_dir

    def _cleanup_old_backups(self, backup_dir: Path, max_backups: int):
        """Remove old backups if exceeding max_backups limit."""
        backup_dirs = sorted(
            [d for d in backup_dir.iterdir() if d.is_dir() and d.name.startswith("backup_")],
            key=lambda x: x.name.rsplit("_", 1)[0]  # Sort by timestamp only
        )

        while len(backup_dirs) > max_backups:
            oldest = backup_dirs.pop(0)
            shutil.rmtree(oldest)
            logger.debug("Removed old backup %s", oldest)

    def restore_from_backup(self, backup_dir: str):
        """Restore data from a backup.

        Args:
            backup_dir: Path to backup directory to restore from
        """
        backup_path = Path(backup_dir)
        if not backup_path.exists():
            raise ValueError(f"Backup directory not found: {backup_dir}")

        backup_file = backup_path / "local_storage.json"
        if not backup_file.is_file():
            raise ValueError(f"Backup file not found: {backup_file}")

        # Validate before touching the live document
        data: Any = {}
        if backup_file.stat().st_size > 0:
            try:
                with open(backup_file, 'r') as f:
                    data = json.load(f)
            except json.JSONDecodeError as e:
                raise StorageError(f"Corrupted backup file: {backup_file}") from e
        if not isinstance(data, dict):
            raise StorageError(f"Corrupted backup file: {backup_file}")

        previous = self._data
        self._data = data
        try:
            self._save()
        except StorageError:
            self._data = previous
            raise
        logger.info("Restored storage from %s", backup_path)

    def get_storage_stats(self) -> Dict[str, int]:
        """Get current storage statistics.

        Returns:
            Dictionary containing:
            - num_keys: Number of stored keys
            - num_accounts: Number of registered accounts
            - num_cards: Number of business cards across all accounts
        """
        num_cards = sum(
            len(self._data[key] or [])
            for key in self.keys(BUSINESS_CARDS_PREFIX)
        )
        return {
            "num_keys": len(self._data),
            "num_accounts": len(self._data.get(USERS_KEY) or []),
            "num_cards": num_cards,
        }
