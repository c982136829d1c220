from pathlib import Path

import pytest
from pydantic import ValidationError

from groupsim.config import (
    DATA_DIR,
    MAX_GROUPS,
    PREDEFINED_COLORS,
    GroupSettings,
    create_default_groups,
    load_settings,
    validate_group_set,
)


@pytest.mark.parametrize("field,value", [
    ("avg_life_expectancy", 0.0),
    ("avg_life_expectancy", -10.0),
    ("female_ratio", 1.5),
    ("male_ratio", -0.1),
    ("percent_not_married", 2.0),
    ("avg_children_per_woman", -1.0),
    ("max_wives", 0),
    ("initial_population", -1),
    ("avg_life_expectancy", float("inf")),
    ("avg_children_per_woman", float("inf")),
    ("female_ratio", float("nan")),
])
def test_invalid_group_parameters_are_rejected(field, value):
    with pytest.raises(ValidationError):
        GroupSettings(**{field: value})


def test_ratios_need_not_sum_to_one():
    group = GroupSettings(female_ratio=0.8, male_ratio=0.8)
    assert group.female_ratio + group.male_ratio == pytest.approx(1.6)


def test_groups_are_frozen():
    group = GroupSettings()
    with pytest.raises(ValidationError):
        group.initial_population = 5


def test_group_ids_are_unique_by_default():
    assert GroupSettings().id != GroupSettings().id


def test_create_default_groups():
    groups = create_default_groups(3)
    assert [g.name for g in groups] == ["Group 1", "Group 2", "Group 3"]
    assert [g.color for g in groups] == PREDEFINED_COLORS[:3]


def test_create_default_groups_is_clamped():
    assert len(create_default_groups(0)) == 1
    assert len(create_default_groups(100)) == MAX_GROUPS


def test_validate_group_set_rejects_duplicates():
    group = GroupSettings(id="same")
    with pytest.raises(ValueError, match="Duplicate group id"):
        validate_group_set([group, GroupSettings(id="same", name="Other")])
    assert validate_group_set(iter([group])) == [group]


def test_load_settings_defaults(monkeypatch):
    monkeypatch.delenv("GROUPSIM_PROFILE_DIR", raising=False)
    monkeypatch.delenv("GROUPSIM_LOG_LEVEL", raising=False)
    settings = load_settings()
    assert settings.profile_dir == DATA_DIR / "profiles"
    assert settings.log_level == "INFO"


def test_load_settings_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("GROUPSIM_PROFILE_DIR", str(tmp_path))
    monkeypatch.setenv("GROUPSIM_LOG_LEVEL", "debug")
    settings = load_settings()
    assert settings.profile_dir == Path(tmp_path)
    assert settings.log_level == "DEBUG"
