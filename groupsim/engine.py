"""Holder for the current groups, run parameters and saved profiles.

Mutating calls notify subscribers with the engine so a front-end can
re-render. The projection itself lives in groupsim.model.
"""

import logging
from typing import Callable, Optional

from groupsim.config import (
    GroupSettings,
    SavedSettingsProfile,
    SimulationParameters,
    create_default_groups,
    load_settings,
    validate_group_set,
)
from groupsim.data import JsonProfileStore, ProfileStore
from groupsim.model import Snapshot, predict

logger = logging.getLogger(__name__)

DEFAULT_GROUP_COUNT = 3


class SimulationEngine:
    def __init__(self, store: Optional[ProfileStore] = None, groups: Optional[list[GroupSettings]] = None):
        self.store = store if store is not None else JsonProfileStore(load_settings().profile_dir)
        self.groups: list[GroupSettings] = []
        self.parameters = SimulationParameters()
        self.saved_profiles: list[SavedSettingsProfile] = []
        self.selected_profile_id: Optional[str] = None
        self._subscribers: list[Callable[["SimulationEngine"], None]] = []

        if groups is None:
            groups = create_default_groups(DEFAULT_GROUP_COUNT)
        self._set_state(self.parameters, groups)
        self.load_profiles()

    # ── Notifications ─────────────────────────────────────────────────

    def subscribe(self, callback: Callable[["SimulationEngine"], None]) -> None:
        if callback not in self._subscribers:
            self._subscribers.append(callback)

    def unsubscribe(self, callback: Callable[["SimulationEngine"], None]) -> None:
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    def _notify(self) -> None:
        for callback in list(self._subscribers):
            callback(self)

    # ── Settings ──────────────────────────────────────────────────────

    def _set_state(self, parameters: SimulationParameters, groups: list[GroupSettings]) -> None:
        groups = validate_group_set(groups)
        ids = {g.id for g in groups}
        target = parameters.target_group_id
        if target not in ids:
            target = groups[0].id if groups else None
        self.groups = groups
        self.parameters = parameters.model_copy(update={
            "number_of_groups": len(groups),
            "target_group_id": target,
        })

    def apply_settings(self, parameters: SimulationParameters, groups: list[GroupSettings]) -> None:
        """Replace parameters and groups, keeping the target group valid."""
        self._set_state(parameters, groups)
        logger.info("Settings applied (%d groups, start %s).", len(self.groups), self.parameters.start_date)
        self._notify()

    def set_groups(self, groups: list[GroupSettings]) -> None:
        self.apply_settings(self.parameters, groups)

    def update_group(self, group_id: str, **changes) -> GroupSettings:
        """Replace one group with a validated copy carrying ``changes``."""
        for i, group in enumerate(self.groups):
            if group.id == group_id:
                updated = GroupSettings.model_validate({**group.model_dump(), **changes})
                groups = list(self.groups)
                groups[i] = updated
                self.set_groups(groups)
                return updated
        raise KeyError(group_id)

    def set_start_date(self, start_date) -> None:
        parameters = SimulationParameters.model_validate({**self.parameters.model_dump(), "start_date": start_date})
        self.apply_settings(parameters, self.groups)

    def set_group_count(self, count: int) -> None:
        """Grow with default groups or drop groups from the end."""
        wanted = len(create_default_groups(count))
        groups = list(self.groups[:wanted])
        if len(groups) < wanted:
            extra = create_default_groups(wanted)[len(groups):]
            groups.extend(extra)
        self.set_groups(groups)

    # ── Profiles ──────────────────────────────────────────────────────

    def load_profiles(self) -> None:
        self.saved_profiles = sorted(self.store.load_all(), key=lambda p: p.date_saved, reverse=True)
        logger.info("Loaded %d profiles.", len(self.saved_profiles))
        self._notify()

    def load_selected_profile(self) -> Optional[SavedSettingsProfile]:
        profile = next((p for p in self.saved_profiles if p.id == self.selected_profile_id), None)
        if profile is None:
            logger.warning("No profile selected to load.")
            return None
        self.apply_settings(profile.parameters, list(profile.group_settings))
        logger.info("Settings profile '%s' loaded.", profile.name)
        return profile

    def save_profile(self, name: str) -> SavedSettingsProfile:
        profile = SavedSettingsProfile(
            name=name,
            parameters=self.parameters,
            group_settings=list(self.groups),
        )
        self.store.save(profile)
        self.load_profiles()
        return profile

    def delete_profile(self, profile_id: str) -> None:
        self.store.delete(profile_id)
        if self.selected_profile_id == profile_id:
            self.selected_profile_id = None
        self.load_profiles()

    # ── Prediction ────────────────────────────────────────────────────

    def predict(self, target_date) -> Snapshot:
        return predict(self.groups, self.parameters.start_date, target_date)
