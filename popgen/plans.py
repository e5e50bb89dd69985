from dataclasses import dataclass, field
from datetime import timedelta

from popgen.constants import MINUTES_TO_WORK, HOURS_OF_WORK, MINUTES_OF_PAUSE, MINUTES_IN_HOUR
from popgen.constants import SEC_PER_UNIT, DEFAULT_LEG_MODE, ACTIVITY_TYPES
from popgen.distributions import HOME_LEAVE_TIME_DISTRIBUTION

SECONDS_PER_DAY = SEC_PER_UNIT['d']


@dataclass
class Activity:
    """
    Stay of a person at a network node.

    Attributes
    ----------
    type : str
        'home' or 'work'.
    node : Node
        Network node where the activity takes place.
    end_time : int or None
        Departure in seconds since midnight; None for the last activity of the day.
    """
    type: str
    node: object
    end_time: int = None

    def __post_init__(self):
        if self.type not in ACTIVITY_TYPES:
            raise ValueError(f"Unknown activity type '{self.type}', expected one of {ACTIVITY_TYPES}")

    @property
    def x(self):
        return self.node.x

    @property
    def y(self):
        return self.node.y


@dataclass
class Leg:
    mode: str = DEFAULT_LEG_MODE


@dataclass
class Plan:
    """
    One simulated day: activities joined by one leg between each consecutive pair.
    """
    activities: list = field(default_factory=list)
    legs: list = field(default_factory=list)

    def add_activity(self, activity):
        if len(self.activities) != len(self.legs):
            raise ValueError("An activity must follow a leg.")
        self.activities.append(activity)

    def add_leg(self, leg):
        if len(self.activities) != len(self.legs) + 1:
            raise ValueError("A leg must follow an activity.")
        self.legs.append(leg)

    def elements(self):
        """Activities and legs in travel order."""
        for i, activity in enumerate(self.activities):
            yield activity
            if i < len(self.legs):
                yield self.legs[i]

    @property
    def end_times(self):
        return [a.end_time for a in self.activities]

    def is_chronological(self):
        times = [t for t in self.end_times if t is not None]
        return all(a <= b for a, b in zip(times, times[1:]))


@dataclass
class Person:
    identifier: str
    plan: Plan
    home_district: str = None
    work_district: str = None


def randomize_in_next_hour(seconds, rng):
    """Adds a uniformly drawn whole minute (0-59) to `seconds`."""
    return seconds + int(rng.integers(MINUTES_IN_HOUR)) * SEC_PER_UNIT['min']


def sample_home_leave_time(rng, distribution=HOME_LEAVE_TIME_DISTRIBUTION):
    """
    Draws the home departure in seconds since midnight.

    The hour comes from the empirical hourly departure distribution and the minute
    is uniform within that hour.
    """
    hour = distribution.sample(rng)
    return randomize_in_next_hour(hour * SEC_PER_UNIT['h'], rng)


def work_leave_time(home_leave_time, rng):
    """
    Departure from work: travel, working hours and lunch pause after leaving home,
    plus a uniform minute within the following hour. May exceed one day.
    """
    nominal = timedelta(seconds=home_leave_time,
                        minutes=MINUTES_TO_WORK + MINUTES_OF_PAUSE,
                        hours=HOURS_OF_WORK)
    return randomize_in_next_hour(int(nominal.total_seconds()), rng)


def build_commute_plan(home_node, work_node, home_leave_time, work_leave_time, mode=DEFAULT_LEG_MODE):
    """
    Builds the home -> work -> home plan of a commuter.

    If the work departure falls on the next day, the work shift that started the
    previous day ends first: work -> home -> work. End times stay in
    non-decreasing order within the day in both cases.

    Parameters
    ----------
    home_node, work_node : Node
        Activity locations.
    home_leave_time : int
        Home departure in seconds since midnight.
    work_leave_time : int
        Work departure in seconds since home departure's midnight, may be >= one day.
    mode : str, optional
        Mode of both legs.
    """
    plan = Plan()
    if work_leave_time >= SECONDS_PER_DAY:
        plan.add_activity(Activity('work', work_node, work_leave_time - SECONDS_PER_DAY))
        plan.add_leg(Leg(mode))
        plan.add_activity(Activity('home', home_node, home_leave_time))
        plan.add_leg(Leg(mode))
        plan.add_activity(Activity('work', work_node))
        return plan

    plan.add_activity(Activity('home', home_node, home_leave_time))
    plan.add_leg(Leg(mode))
    plan.add_activity(Activity('work', work_node, work_leave_time))
    plan.add_leg(Leg(mode))
    plan.add_activity(Activity('home', home_node))
    return plan


def sample_commute_plan(home_node, work_node, rng, mode=DEFAULT_LEG_MODE):
    """Builds a commute plan with randomized departure times."""
    home_leave = sample_home_leave_time(rng)
    return build_commute_plan(home_node, work_node, home_leave, work_leave_time(home_leave, rng), mode=mode)
