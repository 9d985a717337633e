# taskboard/autofill.py
import logging
from typing import List, Sequence, Tuple

from .board import get_day, iter_days, place_task
from .models import Schedule, Task

logger = logging.getLogger(__name__)


def greedy_fill(schedule: Schedule, tasks: Sequence[Task]) -> Tuple[Schedule, List[Task]]:
    """
    Pack `tasks` into the schedule in generation order.

    Days are visited week by week, Monday to Friday. A day takes tasks
    from the cursor while they fit; the first task that does not fit
    carries over to the next day. Whatever is left once every day has been
    visited goes onto the last day regardless of capacity.

    Returns:
        (schedule, overflow) where overflow lists the tasks dumped on the
        last day past the normal packing.
    """
    cursor = 0
    for w_idx, d_idx, _, day in iter_days(schedule):
        used = day.used_hours
        while cursor < len(tasks):
            task = tasks[cursor]
            if used + task.duration_hours > day.capacity_hours:
                break
            schedule = place_task(schedule, w_idx, d_idx, task)
            used += task.duration_hours
            cursor += 1
        if cursor == len(tasks):
            break

    overflow = list(tasks[cursor:])
    if overflow:
        last_w = len(schedule) - 1
        last_d = len(schedule[last_w].days) - 1
        for task in overflow:
            schedule = place_task(schedule, last_w, last_d, task)
        last = get_day(schedule, last_w, last_d)
        logger.warning(
            "%d task(s) did not fit; %s of week %d holds %.1f/%.1fh",
            len(overflow), last.day_name, schedule[last_w].week_number,
            last.used_hours, last.capacity_hours,
        )
    return schedule, overflow
