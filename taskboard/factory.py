# taskboard/factory.py
import uuid
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

from .models import PRIORITY_ORDER, Priority, Task, TaskTemplate


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    return np.random.default_rng(seed)


def make_tasks(count: int,
               templates: Sequence[TaskTemplate],
               rng: np.random.Generator,
               priorities: Sequence[Priority] = PRIORITY_ORDER) -> List[Task]:
    """
    Stamp out `count` task instances from the template pool.

    Templates are drawn uniformly with replacement and each task gets a
    priority drawn uniformly from `priorities`; pass a single priority to
    fix it. Ids come from `rng` too, so a seeded generator reproduces the
    whole batch.
    """
    if not templates:
        raise ValueError("template pool must not be empty")
    if not priorities:
        raise ValueError("at least one priority level is required")

    picks = rng.integers(len(templates), size=count)
    levels = rng.integers(len(priorities), size=count)

    tasks = []
    for pick, level in zip(picks, levels):
        template = templates[int(pick)]
        tasks.append(Task(
            id=str(uuid.UUID(bytes=rng.bytes(16), version=4)),
            title=template.title,
            duration_hours=float(template.duration_hours),
            priority=priorities[int(level)],
        ))
    return tasks


def sort_by_priority(tasks: Iterable[Task]) -> Tuple[Task, ...]:
    """High first, then Medium, then Low. Stable within a level."""
    rank = {p: i for i, p in enumerate(PRIORITY_ORDER)}
    return tuple(sorted(tasks, key=lambda t: rank[t.priority]))
