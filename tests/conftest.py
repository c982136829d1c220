import pytest

from groupsim.config import GroupSettings


@pytest.fixture
def example_group():
    return GroupSettings(
        id="g1",
        name="Example",
        avg_life_expectancy=70.0,
        female_ratio=0.5,
        male_ratio=0.5,
        percent_not_married=0.3,
        avg_children_per_woman=2.0,
        max_wives=1,
        initial_population=1200,
    )


@pytest.fixture
def two_groups():
    return [
        GroupSettings(id="a", name="A", avg_life_expectancy=55.0, avg_children_per_woman=5.0,
                      percent_not_married=0.1, initial_population=800),
        GroupSettings(id="b", name="B", avg_life_expectancy=80.0, female_ratio=0.6, male_ratio=0.4,
                      max_wives=2, avg_children_per_woman=1.5, initial_population=5000),
    ]
