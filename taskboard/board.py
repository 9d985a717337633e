# taskboard/board.py
from dataclasses import replace
from typing import Iterator, Optional, Sequence, Tuple

from .models import (
    DAY_CAPACITIES,
    DAY_NAMES,
    WEEKS_PER_BOARD,
    Day,
    Schedule,
    Task,
    Week,
)


def create_empty_schedule(day_names: Sequence[str] = DAY_NAMES,
                          capacities: Sequence[float] = DAY_CAPACITIES,
                          weeks: int = WEEKS_PER_BOARD) -> Schedule:
    """Build the fixed weeks x weekdays grid with every day empty."""
    if len(day_names) != len(capacities):
        raise ValueError("capacities must have one entry per day name")
    return tuple(
        Week(
            week_number=n,
            days=tuple(Day(day_name=name, capacity_hours=cap)
                       for name, cap in zip(day_names, capacities)),
        )
        for n in range(1, weeks + 1)
    )


def get_day(schedule: Schedule, week_index: int, day_index: int) -> Day:
    if not 0 <= week_index < len(schedule):
        raise IndexError(f"week index {week_index} out of range")
    days = schedule[week_index].days
    if not 0 <= day_index < len(days):
        raise IndexError(f"day index {day_index} out of range")
    return days[day_index]


def _with_day(schedule: Schedule, week_index: int, day_index: int, day: Day) -> Schedule:
    # copy only the touched week and day, share the rest
    week = schedule[week_index]
    days = week.days[:day_index] + (day,) + week.days[day_index + 1:]
    return schedule[:week_index] + (replace(week, days=days),) + schedule[week_index + 1:]


def place_task(schedule: Schedule, week_index: int, day_index: int, task: Task) -> Schedule:
    """
    Append `task` to a day. Capacity is NOT checked here; callers
    validate first (see allocator.assign) or overflow on purpose.
    """
    day = get_day(schedule, week_index, day_index)
    return _with_day(schedule, week_index, day_index,
                     replace(day, tasks=day.tasks + (task,)))


def remove_task(schedule: Schedule, week_index: int, day_index: int, task_id: str) -> Schedule:
    """Drop the task with `task_id` from a day; unchanged if it is not there."""
    day = get_day(schedule, week_index, day_index)
    kept = tuple(t for t in day.tasks if t.id != task_id)
    if len(kept) == len(day.tasks):
        return schedule
    return _with_day(schedule, week_index, day_index, replace(day, tasks=kept))


def iter_days(schedule: Schedule) -> Iterator[Tuple[int, int, Week, Day]]:
    for w_idx, week in enumerate(schedule):
        for d_idx, day in enumerate(week.days):
            yield w_idx, d_idx, week, day


def iter_tasks(schedule: Schedule) -> Iterator[Task]:
    for _, _, _, day in iter_days(schedule):
        yield from day.tasks


def find_task(schedule: Schedule, task_id: str) -> Optional[Tuple[int, int, Task]]:
    for w_idx, d_idx, _, day in iter_days(schedule):
        for task in day.tasks:
            if task.id == task_id:
                return w_idx, d_idx, task
    return None


def total_capacity(schedule: Schedule) -> float:
    return sum(day.capacity_hours for _, _, _, day in iter_days(schedule))


def scheduled_hours(schedule: Schedule) -> float:
    return sum(day.used_hours for _, _, _, day in iter_days(schedule))
