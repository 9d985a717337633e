"""Shared fixtures for the task board tests."""
from __future__ import annotations

import pytest

from taskboard.board import create_empty_schedule, iter_tasks
from taskboard.factory import make_rng
from taskboard.models import Priority, Task
from taskboard.storage import MemoryStore


def make_task(task_id: str, hours: float, priority: Priority = Priority.LOW) -> Task:
    return Task(id=task_id, title=f"task {task_id}", duration_hours=hours, priority=priority)


def assert_conserved(schedule, pending, generated):
    placed = [t.id for t in iter_tasks(schedule)]
    pooled = [t.id for t in pending]
    assert not set(placed) & set(pooled)
    assert sorted(placed + pooled) == sorted(t.id for t in generated)


def assert_hours_consistent(schedule):
    for week in schedule:
        for day in week.days:
            assert day.used_hours == sum(t.duration_hours for t in day.tasks)


@pytest.fixture()
def schedule():
    return create_empty_schedule()


@pytest.fixture()
def rng():
    return make_rng(1234)


@pytest.fixture()
def store():
    return MemoryStore()
