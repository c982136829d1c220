from datetime import date, datetime

import pytest

from groupsim.config import GroupSettings, SavedSettingsProfile, SimulationParameters
from groupsim.data import InMemoryProfileStore, JsonProfileStore
from groupsim.errors import ProfileNotFound


def make_profile(name="Test", saved=datetime(2024, 5, 1, 12, 0)):
    groups = [GroupSettings(name="A", initial_population=10), GroupSettings(name="B", max_wives=2)]
    params = SimulationParameters(start_date=date(2024, 1, 1), number_of_groups=2,
                                  target_group_id=groups[0].id)
    return SavedSettingsProfile(name=name, date_saved=saved, parameters=params, group_settings=groups)


def test_json_store_round_trip(tmp_path):
    store = JsonProfileStore(tmp_path / "profiles")
    profile = make_profile()
    store.save(profile)
    assert (tmp_path / "profiles" / f"{profile.id}.json").exists()
    assert store.load_all() == [profile]


def test_json_store_missing_directory(tmp_path):
    assert JsonProfileStore(tmp_path / "nope").load_all() == []


def test_json_store_skips_corrupt_files(tmp_path, caplog):
    store = JsonProfileStore(tmp_path)
    profile = make_profile()
    store.save(profile)
    (tmp_path / "broken.json").write_text("{not json", encoding="utf-8")
    assert store.load_all() == [profile]
    assert "broken.json" in caplog.text


def test_json_store_delete(tmp_path):
    store = JsonProfileStore(tmp_path)
    profile = make_profile()
    store.save(profile)
    store.delete(profile.id)
    assert store.load_all() == []
    with pytest.raises(ProfileNotFound):
        store.delete(profile.id)


def test_in_memory_store():
    first = make_profile("first")
    store = InMemoryProfileStore([first])
    second = make_profile("second")
    store.save(second)
    assert {p.name for p in store.load_all()} == {"first", "second"}
    store.delete(first.id)
    assert store.load_all() == [second]
    with pytest.raises(ProfileNotFound):
        store.delete("missing")
