"""Configuration models for groups, run parameters and saved profiles.

Values are validated when a model is built, so the projection code can
assume well-formed parameters. Models are frozen: edits produce new
instances via ``model_copy(update=...)``.
"""

import os
import uuid
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field

DATA_DIR = Path(__file__).resolve().parent.parent / "data"

MAX_GROUPS = 8

PREDEFINED_COLORS = [
    "#3498db",
    "#e74c3c",
    "#2ecc71",
    "#f39c12",
    "#9b59b6",
    "#1abc9c",
    "#e67e22",
    "#34495e",
]


def _new_id() -> str:
    return str(uuid.uuid4())


def _first_of_month() -> date:
    return date.today().replace(day=1)


class GroupSettings(BaseModel):
    """Demographic parameters of one named group."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    id: str = Field(default_factory=_new_id)
    name: str = "Group"
    avg_life_expectancy: float = Field(70.0, gt=0, description="Years")
    female_ratio: float = Field(0.5, ge=0.0, le=1.0)
    male_ratio: float = Field(0.5, ge=0.0, le=1.0)
    percent_not_married: float = Field(
        0.2, ge=0.0, le=1.0, description="Fraction of adults who never marry"
    )
    avg_children_per_woman: float = Field(2.1, ge=0.0, description="Lifetime TFR")
    max_wives: int = Field(1, ge=1)
    initial_population: int = Field(1000, ge=0)
    # Display only; the projection never reads it.
    color: Optional[str] = None


class SimulationParameters(BaseModel):
    model_config = ConfigDict(frozen=True)

    start_date: date = Field(default_factory=_first_of_month)
    number_of_groups: int = Field(0, ge=0)
    target_group_id: Optional[str] = None


class SavedSettingsProfile(BaseModel):
    """A named bundle of parameters and groups persisted by a profile store."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=_new_id)
    name: str
    date_saved: datetime = Field(default_factory=datetime.now)
    parameters: SimulationParameters
    group_settings: list[GroupSettings]


def create_default_groups(count: int) -> list[GroupSettings]:
    """Build ``count`` default groups (clamped to 1..MAX_GROUPS)."""
    n = max(1, min(count, MAX_GROUPS))
    return [
        GroupSettings(
            name=f"Group {i + 1}",
            color=PREDEFINED_COLORS[i % len(PREDEFINED_COLORS)],
        )
        for i in range(n)
    ]


def validate_group_set(groups: Iterable[GroupSettings]) -> list[GroupSettings]:
    """Return the groups as a list, rejecting duplicate identifiers."""
    groups = list(groups)
    seen = set()
    for group in groups:
        if group.id in seen:
            raise ValueError(f"Duplicate group id: {group.id}")
        seen.add(group.id)
    return groups


@dataclass
class Settings:
    profile_dir: Path
    log_level: str


def load_settings() -> Settings:
    """Read settings from the environment.

    GROUPSIM_PROFILE_DIR: where saved profiles live (default data/profiles)
    GROUPSIM_LOG_LEVEL:   logging level name (default INFO)
    """
    profile_dir = os.getenv("GROUPSIM_PROFILE_DIR")
    return Settings(
        profile_dir=Path(profile_dir) if profile_dir else DATA_DIR / "profiles",
        log_level=os.getenv("GROUPSIM_LOG_LEVEL", "INFO").upper(),
    )
