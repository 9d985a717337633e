# taskboard/scoring.py
import math
from typing import Dict, Mapping

import numpy as np
import pandas as pd

from .board import iter_days, iter_tasks
from .models import Priority, Schedule

POINTS_PER_HOUR: Dict[Priority, int] = {
    Priority.HIGH: 3,
    Priority.MEDIUM: 2,
    Priority.LOW: 1,
}

# score == scheduled hours; used for auto-filled boards
UNIFORM_POINTS: Dict[Priority, int] = {p: 1 for p in Priority}

QUIZ_POINTS_PER_PERCENT = 5

TASK_COLUMNS = ["week", "day", "id", "title", "duration_hours", "priority"]
LOAD_COLUMNS = ["week", "day", "used_hours", "capacity_hours", "remaining_hours", "overloaded"]


def score(schedule: Schedule, points: Mapping[Priority, int] = POINTS_PER_HOUR) -> int:
    """Sum of duration x points-per-hour over every placed task."""
    tasks = list(iter_tasks(schedule))
    if not tasks:
        return 0
    hours = np.array([t.duration_hours for t in tasks], dtype=float)
    weights = np.array([points[t.priority] for t in tasks], dtype=float)
    return int(round(float(np.dot(hours, weights))))


def quiz_points(quiz_score: int, quiz_total: int) -> int:
    if quiz_total <= 0:
        return 0
    return math.floor(quiz_score / quiz_total * 100) * QUIZ_POINTS_PER_PERCENT


def progress_score(schedule: Schedule, quiz_score: int = 0, quiz_total: int = 0) -> int:
    """Task score plus the quiz bonus (100% correct = 500 points)."""
    return score(schedule) + quiz_points(quiz_score, quiz_total)


def schedule_frame(schedule: Schedule) -> pd.DataFrame:
    """One row per placed task."""
    rows = [{
        "week": week.week_number,
        "day": day.day_name,
        "id": t.id,
        "title": t.title,
        "duration_hours": t.duration_hours,
        "priority": t.priority.label,
    } for _, _, week, day in iter_days(schedule) for t in day.tasks]
    if not rows:
        return pd.DataFrame(columns=TASK_COLUMNS)
    return pd.DataFrame(rows, columns=TASK_COLUMNS)


def day_load_frame(schedule: Schedule) -> pd.DataFrame:
    """One row per day with its load against capacity."""
    df = pd.DataFrame([{
        "week": week.week_number,
        "day": day.day_name,
        "used_hours": day.used_hours,
        "capacity_hours": day.capacity_hours,
    } for _, _, week, day in iter_days(schedule)], columns=LOAD_COLUMNS[:4])
    df["remaining_hours"] = df["capacity_hours"] - df["used_hours"]
    df["overloaded"] = df["used_hours"] > df["capacity_hours"]
    return df
