"""Exceptions raised by the projection and the profile store."""


class PredictionError(Exception):
    """Base class for failures of a population prediction."""


class NoGroupsConfigured(PredictionError):
    def __init__(self):
        super().__init__("No groups configured.")


class InvalidDateRange(PredictionError):
    """Target month lies before the start month."""

    def __init__(self, start, target):
        self.start = start
        self.target = target
        super().__init__(f"Target month {target} is before start month {start}.")


class DateArithmeticFailure(PredictionError):
    """A value could not be interpreted as a calendar month."""


class ProfileNotFound(KeyError):
    pass
