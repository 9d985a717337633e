# taskboard/models.py
import math
from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Optional, Tuple

MANUAL = "manual"
AUTO = "auto"
MODES = (MANUAL, AUTO)

DAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday")
DAY_CAPACITIES = (9, 9, 9, 9, 8)  # working hours per weekday
WEEKS_PER_BOARD = 4


class Priority(IntEnum):
    LOW = 1
    MEDIUM = 2
    HIGH = 3

    @property
    def label(self) -> str:
        return self.name.capitalize()


# presentation order for the pending pool
PRIORITY_ORDER = (Priority.HIGH, Priority.MEDIUM, Priority.LOW)


@dataclass(frozen=True)
class TaskTemplate:
    title: str
    duration_hours: float


@dataclass(frozen=True)
class Task:
    id: str
    title: str
    duration_hours: float
    priority: Priority = Priority.LOW

    def __post_init__(self):
        if not math.isfinite(self.duration_hours) or self.duration_hours <= 0:
            raise ValueError(f"task {self.id!r} must have a positive duration")

    def to_dict(self) -> Dict:
        return {
            "id": self.id,
            "title": self.title,
            "duration_hours": self.duration_hours,
            "priority": self.priority.name,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "Task":
        return cls(
            id=str(data["id"]),
            title=str(data["title"]),
            duration_hours=float(data["duration_hours"]),
            priority=Priority[data.get("priority", "LOW")],
        )


@dataclass(frozen=True)
class Day:
    day_name: str
    capacity_hours: float
    tasks: Tuple[Task, ...] = ()

    @property
    def used_hours(self) -> float:
        return sum(t.duration_hours for t in self.tasks)

    @property
    def remaining_hours(self) -> float:
        return self.capacity_hours - self.used_hours

    @property
    def is_overloaded(self) -> bool:
        return self.used_hours > self.capacity_hours

    @property
    def percent_used(self) -> float:
        """Fill level for progress bars, capped at 100."""
        if self.capacity_hours <= 0:
            return 100.0
        return min(100.0, self.used_hours / self.capacity_hours * 100)

    def to_dict(self) -> Dict:
        return {
            "day_name": self.day_name,
            "capacity_hours": self.capacity_hours,
            "used_hours": self.used_hours,
            "tasks": [t.to_dict() for t in self.tasks],
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "Day":
        # used_hours is derived, the stored copy is ignored
        return cls(
            day_name=str(data["day_name"]),
            capacity_hours=float(data["capacity_hours"]),
            tasks=tuple(Task.from_dict(t) for t in data["tasks"]),
        )


@dataclass(frozen=True)
class Week:
    week_number: int
    days: Tuple[Day, ...]

    def to_dict(self) -> Dict:
        return {
            "week_number": self.week_number,
            "days": [d.to_dict() for d in self.days],
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "Week":
        return cls(
            week_number=int(data["week_number"]),
            days=tuple(Day.from_dict(d) for d in data["days"]),
        )


# A schedule is an ordered tuple of weeks
Schedule = Tuple[Week, ...]


def schedule_to_dict(schedule: Schedule) -> list:
    return [w.to_dict() for w in schedule]


def schedule_from_dict(data: list) -> Schedule:
    if not isinstance(data, list):
        raise TypeError("stored schedule must be a list of weeks")
    return tuple(Week.from_dict(w) for w in data)


def tasks_to_dict(tasks: Tuple[Task, ...]) -> list:
    return [t.to_dict() for t in tasks]


def tasks_from_dict(data: list) -> Tuple[Task, ...]:
    if not isinstance(data, list):
        raise TypeError("stored task pool must be a list")
    return tuple(Task.from_dict(t) for t in data)


@dataclass(frozen=True)
class Board:
    schedule: Schedule
    pending: Tuple[Task, ...] = ()
    mode: str = MANUAL
    board_id: str = ""  # identifies one generation, survives reloads


@dataclass
class BoardPrefs:
    task_count: int = 30
    mode: str = MANUAL
    day_names: Tuple[str, ...] = DAY_NAMES
    capacities: Tuple[float, ...] = DAY_CAPACITIES
    weeks: int = WEEKS_PER_BOARD
    seed: Optional[int] = None      # None = fresh entropy each board
    store_path: str = "taskboard_store.json"
    quiz_total_default: int = 7

    def __post_init__(self):
        if self.task_count <= 0:
            raise ValueError("task_count must be positive")
        if self.mode not in MODES:
            raise ValueError(f"mode must be one of {MODES}, got {self.mode!r}")
        if len(self.day_names) != len(self.capacities):
            raise ValueError("capacities must have one entry per day name")
        if self.weeks <= 0:
            raise ValueError("weeks must be positive")
