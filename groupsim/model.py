"""Group-based population projection engine.

Each group is a single population count. Each monthly timestep applies
deaths to every group first, then births computed from the post-death
population. Groups never exchange people.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Sequence

import numpy as np
import pandas as pd

from groupsim.config import GroupSettings, validate_group_set
from groupsim.demography import (
    married_women,
    monthly_birth_rate,
    monthly_death_rate,
    potential_fathers,
    potential_mothers,
)
from groupsim.errors import DateArithmeticFailure, InvalidDateRange, NoGroupsConfigured

logger = logging.getLogger(__name__)


@dataclass
class Snapshot:
    """Population of every group at one month."""
    month: pd.Period
    months_elapsed: int
    populations: dict[str, float]

    @property
    def total(self) -> float:
        return sum(self.populations.values())


@dataclass
class ProjectionResult:
    """Month-by-month output of project_series."""
    snapshots: list[Snapshot] = field(default_factory=list)

    @property
    def month_list(self) -> list[pd.Period]:
        return [s.month for s in self.snapshots]

    @property
    def total_series(self) -> list[float]:
        return [s.total for s in self.snapshots]

    def group_series(self, group_id: str) -> list[float]:
        return [s.populations[group_id] for s in self.snapshots]


@dataclass(frozen=True)
class GroupArrays:
    """Group parameters laid out as arrays, one element per group."""
    ids: tuple
    life_expectancy: np.ndarray
    female_ratio: np.ndarray
    male_ratio: np.ndarray
    percent_not_married: np.ndarray
    avg_children_per_woman: np.ndarray
    max_wives: np.ndarray
    initial_population: np.ndarray

    @classmethod
    def from_groups(cls, groups: Sequence[GroupSettings]) -> "GroupArrays":
        def col(attr, dtype=float):
            return np.array([getattr(g, attr) for g in groups], dtype=dtype)

        return cls(
            ids=tuple(g.id for g in groups),
            life_expectancy=col("avg_life_expectancy"),
            female_ratio=col("female_ratio"),
            male_ratio=col("male_ratio"),
            percent_not_married=col("percent_not_married"),
            avg_children_per_woman=col("avg_children_per_woman"),
            max_wives=col("max_wives", dtype=int),
            initial_population=col("initial_population"),
        )


def step(pop: np.ndarray, g: GroupArrays) -> np.ndarray:
    """Advance a population vector by one month.

    Groups at or below zero are left untouched by both phases.
    """
    # --- Deaths ---
    alive = pop > 0
    deaths = pop * monthly_death_rate(g.life_expectancy)
    pop = np.where(alive, pop - deaths, pop)

    # --- Births (from the post-death population) ---
    alive = pop > 0
    mothers = potential_mothers(pop, g.female_ratio, g.life_expectancy, g.percent_not_married)
    fathers = potential_fathers(pop, g.male_ratio, g.life_expectancy, g.percent_not_married)
    married = married_women(mothers, fathers, g.max_wives)
    births = np.maximum(0.0, married * monthly_birth_rate(g.avg_children_per_woman))
    pop = np.where(alive, pop + births, pop)

    return np.where(alive & (pop < 0), 0.0, pop)


def transition(current_state: dict[str, float], groups: Iterable[GroupSettings]) -> dict[str, float]:
    """Return next month's populations for ``current_state``.

    Pure: ``current_state`` is not modified. Callers are expected to pass a
    state keyed by exactly the configured group ids; configured groups
    missing from the state are skipped and extra keys are copied through
    unchanged, so a mismatch never raises here.
    """
    present = [g for g in groups if g.id in current_state]
    next_state = dict(current_state)
    if not present:
        return next_state
    arrays = GroupArrays.from_groups(present)
    pop = np.array([current_state[gid] for gid in arrays.ids], dtype=float)
    next_state.update(zip(arrays.ids, step(pop, arrays).tolist()))
    return next_state


def to_month(value) -> pd.Period:
    """Normalise a date-like value to a monthly period.

    Accepts date, datetime, pandas Timestamp/Period and ISO strings.
    """
    if isinstance(value, pd.Period):
        return value.asfreq("M")
    try:
        month = pd.Period(value, freq="M")
    except (TypeError, ValueError, OverflowError) as exc:
        logger.warning("Prediction Error: Could not calculate months between dates (%r).", value)
        raise DateArithmeticFailure(f"Cannot interpret {value!r} as a calendar month") from exc
    if pd.isna(month):
        logger.warning("Prediction Error: Could not calculate months between dates (%r).", value)
        raise DateArithmeticFailure(f"Cannot interpret {value!r} as a calendar month")
    return month


def months_between(start, target) -> int:
    """Whole calendar months from ``start`` to ``target`` (day of month ignored)."""
    return to_month(target).ordinal - to_month(start).ordinal


def month_zero(groups: Sequence[GroupSettings], start_date) -> Snapshot:
    """Snapshot holding every group's configured initial population."""
    return Snapshot(
        month=to_month(start_date),
        months_elapsed=0,
        populations={g.id: float(g.initial_population) for g in groups},
    )


def _checked_groups(groups: Iterable[GroupSettings]) -> list[GroupSettings]:
    groups = validate_group_set(groups)
    if not groups:
        logger.warning("Prediction Error: No groups configured.")
        raise NoGroupsConfigured()
    return groups


def predict(groups: Iterable[GroupSettings], start_date, target_date) -> Snapshot:
    """Project every group's population to the month of ``target_date``.

    Only the final state is kept. Any date inside the start month returns
    the initial populations.

    Raises:
        NoGroupsConfigured: ``groups`` is empty.
        InvalidDateRange: target month is before the start month.
        DateArithmeticFailure: a date could not be read as a calendar month.
    """
    groups = _checked_groups(groups)
    start = to_month(start_date)
    target = to_month(target_date)
    months = target.ordinal - start.ordinal
    if months < 0:
        logger.warning("Prediction Error: Future date must be on or after start date.")
        raise InvalidDateRange(start, target)

    if months == 0:
        return month_zero(groups, start)

    logger.info("Predicting population for %s (%d months from start)...", target, months)
    arrays = GroupArrays.from_groups(groups)
    pop = arrays.initial_population.copy()
    for _ in range(months):
        pop = step(pop, arrays)
    logger.info("Prediction complete.")

    return Snapshot(
        month=target,
        months_elapsed=months,
        populations=dict(zip(arrays.ids, pop.tolist())),
    )


def project_series(groups: Iterable[GroupSettings], start_date, months: int) -> ProjectionResult:
    """Run the projection for ``months`` months, keeping every monthly snapshot."""
    groups = _checked_groups(groups)
    start = to_month(start_date)
    if months < 0:
        logger.warning("Prediction Error: Cannot project a negative number of months.")
        raise InvalidDateRange(start, start + months)

    arrays = GroupArrays.from_groups(groups)
    result = ProjectionResult()
    result.snapshots.append(month_zero(groups, start))

    pop = arrays.initial_population.copy()
    for i in range(1, months + 1):
        pop = step(pop, arrays)
        result.snapshots.append(Snapshot(
            month=start + i,
            months_elapsed=i,
            populations=dict(zip(arrays.ids, pop.tolist())),
        ))

    return result
