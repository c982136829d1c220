import numpy as np
import pytest

from groupsim.demography import (
    CHILDBEARING_SPAN,
    married_women,
    monthly_birth_rate,
    monthly_death_rate,
    potential_fathers,
    potential_mothers,
    proportion_in_span,
)


def test_monthly_death_rate():
    assert monthly_death_rate(70.0) == pytest.approx(1 / 840)


def test_life_expectancy_is_floored_at_one_year():
    assert monthly_death_rate(0.25) == pytest.approx(1 / 12)
    assert monthly_death_rate(np.array([0.5, 2.0])).tolist() == pytest.approx([1 / 12, 1 / 24])


def test_proportion_in_span_caps_at_one():
    # 20 years * 0.5 = 10 years of women, all inside a 15 year span
    assert proportion_in_span(CHILDBEARING_SPAN, 20.0, 0.5) == 1.0
    assert proportion_in_span(CHILDBEARING_SPAN, 70.0, 0.5) == pytest.approx(15 / 35)


def test_potential_parents():
    mothers = potential_mothers(1000.0, 0.5, 70.0, 0.3)
    fathers = potential_fathers(1000.0, 0.5, 70.0, 0.3)
    assert mothers == pytest.approx(1000 * 0.5 * (15 / 35) * 0.7)
    assert fathers == pytest.approx(mothers)


def test_ratios_are_used_independently():
    # ratios summing past 1 are not normalised
    assert potential_mothers(100.0, 0.9, 10.0, 0.0) == pytest.approx(90.0)
    assert potential_fathers(100.0, 0.9, 10.0, 0.0) == pytest.approx(90.0)


def test_marriage_limited_by_scarcer_side():
    assert float(married_women(100.0, 30.0, 1)) == pytest.approx(30.0)
    assert float(married_women(100.0, 30.0, 3)) == pytest.approx(90.0)
    assert float(married_women(100.0, 30.0, 4)) == pytest.approx(100.0)
    # max_wives below one is treated as one
    assert float(married_women(100.0, 30.0, 0)) == pytest.approx(30.0)


def test_monthly_birth_rate():
    assert monthly_birth_rate(2.0) == pytest.approx(2.0 / 180)
    assert monthly_birth_rate(0.0) == 0.0
