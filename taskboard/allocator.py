# taskboard/allocator.py
import logging
from typing import List, Sequence, Tuple

from .board import get_day, place_task, remove_task
from .factory import sort_by_priority
from .models import Schedule, Task

logger = logging.getLogger(__name__)


class AssignmentRejected(ValueError):
    """A manual placement failed validation; nothing was changed."""

    def __init__(self, task_id: str, reason: str):
        super().__init__(f"cannot assign task {task_id!r}: {reason}")
        self.task_id = task_id
        self.reason = reason


def list_eligible_tasks(schedule: Schedule,
                        week_index: int,
                        day_index: int,
                        pending: Sequence[Task]) -> List[Task]:
    """Pending tasks that still fit in the day's remaining hours, in pool order."""
    remaining = get_day(schedule, week_index, day_index).remaining_hours
    return [t for t in pending if t.duration_hours <= remaining]


def assign(schedule: Schedule,
           pending: Sequence[Task],
           week_index: int,
           day_index: int,
           task_id: str) -> Tuple[Schedule, Tuple[Task, ...]]:
    """
    Move a pending task onto a day.

    Both preconditions are checked again here because the candidate list
    the caller picked from may be stale.

    Raises:
        AssignmentRejected: the task is not pending or does not fit.
    """
    task = next((t for t in pending if t.id == task_id), None)
    if task is None:
        raise AssignmentRejected(task_id, "task is not in the pending pool")

    day = get_day(schedule, week_index, day_index)
    if task.duration_hours > day.remaining_hours:
        raise AssignmentRejected(
            task_id,
            f"needs {task.duration_hours:g}h but {day.day_name} has "
            f"{day.remaining_hours:g}h left",
        )

    logger.debug("assign %s (%gh) -> week %d %s",
                 task_id, task.duration_hours, week_index + 1, day.day_name)
    new_pending = tuple(t for t in pending if t.id != task_id)
    return place_task(schedule, week_index, day_index, task), new_pending


def unassign(schedule: Schedule,
             pending: Sequence[Task],
             week_index: int,
             day_index: int,
             task_id: str) -> Tuple[Schedule, Tuple[Task, ...]]:
    """Send a task back to the pool, which is re-sorted by priority."""
    day = get_day(schedule, week_index, day_index)
    task = next((t for t in day.tasks if t.id == task_id), None)
    if task is None:
        return schedule, tuple(pending)

    logger.debug("unassign %s <- week %d %s", task_id, week_index + 1, day.day_name)
    new_schedule = remove_task(schedule, week_index, day_index, task_id)
    return new_schedule, sort_by_priority(list(pending) + [task])
