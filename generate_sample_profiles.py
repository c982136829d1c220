"""One-time script to write a few example profiles into the profile directory.
The numbers are illustrative only, chosen to show contrasting group dynamics.
"""
import logging
from datetime import date

from groupsim.config import PREDEFINED_COLORS, GroupSettings, SavedSettingsProfile, SimulationParameters, load_settings
from groupsim.data import JsonProfileStore
from groupsim.logging_config import setup_logging
from groupsim.model import predict

logger = logging.getLogger(__name__)

SAMPLES = {
    "Two villages": [
        dict(name="Hill village", avg_life_expectancy=55.0, avg_children_per_woman=5.0,
             percent_not_married=0.1, initial_population=800),
        dict(name="River town", avg_life_expectancy=72.0, avg_children_per_woman=1.6,
             percent_not_married=0.3, initial_population=5000),
    ],
    "Polygynous clans": [
        dict(name="Clan A", female_ratio=0.6, male_ratio=0.4, max_wives=3,
             avg_children_per_woman=4.0, initial_population=1200),
        dict(name="Clan B", female_ratio=0.5, male_ratio=0.5, max_wives=1,
             avg_children_per_woman=4.0, initial_population=1200),
    ],
    "Ageing city": [
        dict(name="City", avg_life_expectancy=85.0, avg_children_per_woman=1.1,
             percent_not_married=0.45, initial_population=100000),
    ],
}


def build_profile(name, group_specs, start_date):
    groups = [
        GroupSettings(color=PREDEFINED_COLORS[i % len(PREDEFINED_COLORS)], **spec)
        for i, spec in enumerate(group_specs)
    ]
    parameters = SimulationParameters(
        start_date=start_date,
        number_of_groups=len(groups),
        target_group_id=groups[0].id,
    )
    return SavedSettingsProfile(name=name, parameters=parameters, group_settings=groups)


def main():
    settings = load_settings()
    setup_logging(settings.log_level)
    store = JsonProfileStore(settings.profile_dir)
    start = date.today().replace(day=1)

    for name, specs in SAMPLES.items():
        profile = build_profile(name, specs, start)
        store.save(profile)

        in_ten_years = predict(profile.group_settings, start, date(start.year + 10, start.month, 1))
        logger.info("%s: %s people now, %s in ten years", name,
                    f"{sum(g.initial_population for g in profile.group_settings):,}",
                    f"{in_ten_years.total:,.0f}")


if __name__ == "__main__":
    main()
