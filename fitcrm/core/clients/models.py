"""
Domain models for client management.

These models represent the core business concepts: the coach's clients
and the workouts logged against them. They have no dependencies on
storage formats or HTTP. How a client is written to the key-value store
lives in the infrastructure layer.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from typing import Optional

from .formatting import parse_date, parse_timestamp


class Gender(Enum):
    """Options offered by the client form."""
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


class Goal(Enum):
    """
    Fitness goal categories.

    OTHER pairs with the free-text goal_text on the client. Goals
    without a dedicated fallback table get the general fitness one.
    """
    WEIGHT_LOSS = "Weight Loss"
    MUSCLE_GAIN = "Muscle Gain"
    GENERAL_FITNESS = "General Fitness"
    OTHER = "Other"


@dataclass
class ExerciseEntry:
    """
    A logged workout session for a client.

    Entries are append-only. The id only has to be unique within the
    owning client's history.
    """
    id: str
    date: date
    title: str
    notes: str = ""
    tags: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if isinstance(self.date, str):
            self.date = parse_date(self.date)
        self.tags = list(self.tags)


@dataclass
class Client:
    """
    A fitness-program member tracked by the coach.

    This is the aggregate root: the exercise history belongs to the
    client and is persisted with it. Enum and date fields accept their
    string forms so records coming from forms or storage can be passed
    straight in.
    """
    id: str
    full_name: str
    age: int
    gender: Gender
    email: str
    phone: str
    goal: Goal
    start_date: date
    created_at: datetime
    goal_text: str = ""
    updated_at: Optional[datetime] = None
    exercise_history: list[ExerciseEntry] = field(default_factory=list)

    def __post_init__(self) -> None:
        if isinstance(self.gender, str):
            self.gender = Gender(self.gender)
        if isinstance(self.goal, str):
            self.goal = Goal(self.goal)
        if isinstance(self.start_date, str):
            self.start_date = parse_date(self.start_date)
        if isinstance(self.created_at, str):
            self.created_at = parse_timestamp(self.created_at)
        if isinstance(self.updated_at, str):
            self.updated_at = parse_timestamp(self.updated_at)
        self.exercise_history = list(self.exercise_history)

    @property
    def goal_display(self) -> str:
        """The free-text goal when one was given, else the category label."""
        if self.goal_text:
            return self.goal_text
        return self.goal.value

    @property
    def entry_ids(self) -> set[str]:
        return {entry.id for entry in self.exercise_history}


def utc_now() -> datetime:
    """
    Default clock for record timestamps.

    Truncated to milliseconds, the precision timestamps are stored with,
    so a record compares equal to itself after a save and reload.
    """
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)
