"""
Profile store backed by a single JSON file.

Stands in for the remote profile API when editing profiles locally. The file
holds a mapping of user id to profile document.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

from ..domain.exceptions import ProfileStoreError

logger = logging.getLogger(__name__)


class JsonProfileStore:
    """
    Reads and writes whole profile documents.

    Writes go to a temporary sibling file first and then replace the target,
    so an interrupted save leaves the previous content intact.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def get_profile(self, user_id: str) -> Dict[str, Any]:
        """
        Load one profile.

        Raises:
            ProfileStoreError: If the file is unreadable or the user is unknown
        """
        profiles = self._read_all()
        if user_id not in profiles:
            raise ProfileStoreError(f"No profile for user '{user_id}' in {self.path}")
        return dict(profiles[user_id])

    def update_profile(self, user_id: str, profile: Dict[str, Any]) -> None:
        """Replace one profile document, creating the file if needed."""
        profiles = self._read_all() if self.path.exists() else {}
        profiles[user_id] = profile
        self._write_all(profiles)

    def list_user_ids(self) -> List[str]:
        if not self.path.exists():
            return []
        return sorted(self._read_all())

    def _read_all(self) -> Dict[str, Dict[str, Any]]:
        if not self.path.exists():
            raise ProfileStoreError(f"Profile file not found: {self.path}")

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise ProfileStoreError(f"Could not read profiles from {self.path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ProfileStoreError(f"{self.path} must contain a mapping of user id to profile.")

        logger.debug("Loaded %d profile(s) from %s", len(data), self.path)
        return data

    def _write_all(self, profiles: Dict[str, Dict[str, Any]]) -> None:
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(profiles, f, ensure_ascii=False, indent=2)
            tmp_path.replace(self.path)
        except OSError as exc:
            raise ProfileStoreError(f"Could not save profiles to {self.path}: {exc}") from exc

        logger.debug("Saved %d profile(s) to %s", len(profiles), self.path)
