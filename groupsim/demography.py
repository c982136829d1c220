"""Fertility, mortality and marriage helper functions.

Approximations used:
- Mortality: a flat monthly hazard of 1 / (life expectancy in months).
- Fertility: each married woman of childbearing age spreads her lifetime
  TFR evenly over a fixed 15-year childbearing span.
- Marriage: men and women are matched inside a group only, capped by the
  number of wives a husband may take. Surplus on either side is dropped.

This is a deliberately coarse model, not an age-structured projection.
All helpers accept scalars or numpy arrays (one element per group).
"""

import numpy as np

CHILDBEARING_SPAN = 15.0  # years
MARRIAGEABLE_SPAN = 15.0  # years
MONTHS_PER_YEAR = 12.0
MIN_LIFE_EXPECTANCY = 1.0  # years


def effective_life_expectancy(life_expectancy):
    """Floor life expectancy at one year so rates stay finite."""
    return np.maximum(life_expectancy, MIN_LIFE_EXPECTANCY)


def monthly_death_rate(life_expectancy):
    """Fraction of a group dying in one month."""
    return 1.0 / (effective_life_expectancy(life_expectancy) * MONTHS_PER_YEAR)


def proportion_in_span(span: float, life_expectancy, sex_ratio):
    """Share of one sex that falls inside an age span of ``span`` years.

    The sex is assumed to be spread evenly over ``life_expectancy * sex_ratio``
    years, so the share is capped at 1 for short-lived or small groups.
    """
    years = effective_life_expectancy(life_expectancy) * sex_ratio
    return np.minimum(1.0, span / np.maximum(span, years))


def potential_mothers(population, female_ratio, life_expectancy, percent_not_married):
    in_age = proportion_in_span(CHILDBEARING_SPAN, life_expectancy, female_ratio)
    return population * female_ratio * in_age * (1.0 - percent_not_married)


def potential_fathers(population, male_ratio, life_expectancy, percent_not_married):
    in_age = proportion_in_span(MARRIAGEABLE_SPAN, life_expectancy, male_ratio)
    return population * male_ratio * in_age * (1.0 - percent_not_married)


def married_women(mothers, fathers, max_wives):
    """Match women to husbands, limited by whichever side is scarcer.

    Each husband can take up to ``max_wives`` wives (never fewer than one).
    """
    slots = fathers * np.maximum(1, max_wives)
    return np.where(slots >= mothers, mothers, slots)


def monthly_birth_rate(avg_children_per_woman):
    """Births per married woman of childbearing age per month."""
    return avg_children_per_woman / (CHILDBEARING_SPAN * MONTHS_PER_YEAR)
