from __future__ import annotations

import pytest

from taskboard.catalog import TASK_TEMPLATES
from taskboard.factory import make_rng, make_tasks, sort_by_priority
from taskboard.models import Priority

from conftest import make_task


def test_make_tasks_draws_from_pool(rng):
    tasks = make_tasks(30, TASK_TEMPLATES, rng)
    titles = {t.title for t in TASK_TEMPLATES}

    assert len(tasks) == 30
    assert len({t.id for t in tasks}) == 30
    assert all(t.title in titles for t in tasks)
    assert all(t.priority in Priority for t in tasks)
    for task in tasks:
        template = next(tp for tp in TASK_TEMPLATES if tp.title == task.title)
        assert task.duration_hours == template.duration_hours


def test_seed_reproduces_batch():
    first = make_tasks(20, TASK_TEMPLATES, make_rng(42))
    second = make_tasks(20, TASK_TEMPLATES, make_rng(42))
    assert first == second


def test_fixed_priority(rng):
    tasks = make_tasks(15, TASK_TEMPLATES, rng, priorities=(Priority.LOW,))
    assert {t.priority for t in tasks} == {Priority.LOW}


def test_empty_pool_is_rejected(rng):
    with pytest.raises(ValueError):
        make_tasks(5, (), rng)


def test_sort_by_priority_is_stable():
    tasks = [
        make_task("l1", 1, Priority.LOW),
        make_task("h1", 1, Priority.HIGH),
        make_task("m1", 1, Priority.MEDIUM),
        make_task("h2", 1, Priority.HIGH),
        make_task("l2", 1, Priority.LOW),
    ]
    assert [t.id for t in sort_by_priority(tasks)] == ["h1", "h2", "m1", "l1", "l2"]
