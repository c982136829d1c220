"""Profile storage: saved bundles of run parameters and groups."""

import logging
from pathlib import Path
from typing import Protocol

from pydantic import ValidationError

from groupsim.config import SavedSettingsProfile
from groupsim.errors import ProfileNotFound

logger = logging.getLogger(__name__)


class ProfileStore(Protocol):
    def load_all(self) -> list[SavedSettingsProfile]: ...

    def save(self, profile: SavedSettingsProfile) -> None: ...

    def delete(self, profile_id: str) -> None: ...


class JsonProfileStore:
    """Stores each profile as ``<profile id>.json`` in one directory."""

    def __init__(self, directory: Path):
        self.directory = Path(directory)

    def _path(self, profile_id: str) -> Path:
        return self.directory / f"{profile_id}.json"

    def load_all(self) -> list[SavedSettingsProfile]:
        """Load every profile in the directory.

        Files that fail to parse are skipped with a warning.
        """
        if not self.directory.exists():
            return []

        profiles = []
        for path in sorted(self.directory.glob("*.json")):
            try:
                profiles.append(SavedSettingsProfile.model_validate_json(path.read_text(encoding="utf-8")))
            except (OSError, ValidationError) as e:
                logger.warning("Skipping unreadable profile %s: %s", path.name, e)
        return profiles

    def save(self, profile: SavedSettingsProfile) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        self._path(profile.id).write_text(profile.model_dump_json(indent=2), encoding="utf-8")
        logger.info("Saved profile '%s' to %s", profile.name, self.directory)

    def delete(self, profile_id: str) -> None:
        path = self._path(profile_id)
        if not path.exists():
            raise ProfileNotFound(profile_id)
        path.unlink()


class InMemoryProfileStore:
    def __init__(self, profiles=()):
        self._profiles: dict[str, SavedSettingsProfile] = {p.id: p for p in profiles}

    def load_all(self) -> list[SavedSettingsProfile]:
        return list(self._profiles.values())

    def save(self, profile: SavedSettingsProfile) -> None:
        self._profiles[profile.id] = profile

    def delete(self, profile_id: str) -> None:
        if profile_id not in self._profiles:
            raise ProfileNotFound(profile_id)
        del self._profiles[profile_id]
