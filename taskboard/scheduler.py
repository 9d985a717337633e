# taskboard/scheduler.py
import logging
import uuid
from dataclasses import replace
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from . import allocator
from .autofill import greedy_fill
from .board import create_empty_schedule, get_day, iter_tasks, scheduled_hours, total_capacity
from .catalog import TASK_TEMPLATES
from .factory import make_rng, make_tasks, sort_by_priority
from .models import (
    AUTO,
    MANUAL,
    MODES,
    Board,
    BoardPrefs,
    Priority,
    Task,
    TaskTemplate,
    schedule_from_dict,
    schedule_to_dict,
    tasks_from_dict,
    tasks_to_dict,
)
from .scoring import POINTS_PER_HOUR, UNIFORM_POINTS, progress_score, score
from .storage import (
    BOARD_ID_KEY,
    COMPLETED_KEY,
    MODE_KEY,
    PENDING_KEY,
    QUIZ_SCORE_KEY,
    QUIZ_TOTAL_KEY,
    SCHEDULE_KEY,
)

logger = logging.getLogger(__name__)


def generate_board(prefs: BoardPrefs,
                   rng: Optional[np.random.Generator] = None,
                   templates: Sequence[TaskTemplate] = TASK_TEMPLATES) -> Board:
    """
    Build a fresh board: a new task batch and an empty schedule.

    In manual mode the batch becomes the pending pool, sorted by
    priority. In auto mode tasks get a fixed Low priority and are
    greedily packed, leaving the pool empty.
    """
    if rng is None:
        rng = make_rng(prefs.seed)
    schedule = create_empty_schedule(prefs.day_names, prefs.capacities, prefs.weeks)
    # not drawn from rng: a reseeded board must still be a new board
    board_id = uuid.uuid4().hex

    if prefs.mode == AUTO:
        tasks = make_tasks(prefs.task_count, templates, rng, priorities=(Priority.LOW,))
        schedule, overflow = greedy_fill(schedule, tasks)
        logger.info("auto board: %d tasks packed, %d overflowed", len(tasks), len(overflow))
        return Board(schedule=schedule, pending=(), mode=AUTO, board_id=board_id)

    tasks = make_tasks(prefs.task_count, templates, rng)
    logger.info("manual board: %d tasks pending", len(tasks))
    return Board(schedule=schedule, pending=sort_by_priority(tasks), mode=MANUAL,
                 board_id=board_id)


def board_points(board: Board) -> Dict[Priority, int]:
    return UNIFORM_POINTS if board.mode == AUTO else POINTS_PER_HOUR


def board_score(board: Board) -> int:
    return score(board.schedule, board_points(board))


def summarize(board: Board) -> Dict[str, float]:
    return {
        "scheduled_hours": scheduled_hours(board.schedule),
        "capacity_hours": total_capacity(board.schedule),
        "pending_hours": sum(t.duration_hours for t in board.pending),
        "pending_tasks": len(board.pending),
        "placed_tasks": sum(1 for _ in iter_tasks(board.schedule)),
        "score": board_score(board),
    }


def load_board(store, prefs: Optional[BoardPrefs] = None) -> Board:
    """Read the board from `store`, or an empty one if absent or malformed."""
    prefs = prefs or BoardPrefs()
    empty = Board(schedule=create_empty_schedule(prefs.day_names, prefs.capacities, prefs.weeks),
                  mode=prefs.mode)

    raw_schedule = store.load(SCHEDULE_KEY, None)
    if raw_schedule is None:
        return empty
    try:
        schedule = schedule_from_dict(raw_schedule)
        pending = tasks_from_dict(store.load(PENDING_KEY, []))
        if len(schedule) != prefs.weeks or any(
                len(w.days) != len(prefs.day_names) for w in schedule):
            raise ValueError("stored schedule does not match the calendar shape")
        ids = [t.id for t in iter_tasks(schedule)] + [t.id for t in pending]
        if len(ids) != len(set(ids)):
            raise ValueError("a stored task is placed twice or is both placed and pending")
    except (KeyError, TypeError, ValueError):
        logger.warning("stored board is malformed, starting from an empty one", exc_info=True)
        return empty

    mode = store.load(MODE_KEY, MANUAL)
    if mode not in MODES:
        mode = MANUAL
    board_id = store.load(BOARD_ID_KEY, "")
    if not isinstance(board_id, str):
        board_id = ""
    return Board(schedule=schedule, pending=pending, mode=mode, board_id=board_id)


def save_board(store, board: Board) -> None:
    store.save(SCHEDULE_KEY, schedule_to_dict(board.schedule))
    store.save(PENDING_KEY, tasks_to_dict(board.pending))
    store.save(MODE_KEY, board.mode)
    store.save(BOARD_ID_KEY, board.board_id)


class BoardSession:
    """
    Holds the current board and writes it through to a store after every
    operation. The board itself is immutable; each call swaps in a new one.
    """

    def __init__(self, store, prefs: Optional[BoardPrefs] = None):
        self.store = store
        self.prefs = prefs or BoardPrefs()
        self.board = load_board(store, self.prefs)

    def _commit(self, board: Board) -> Board:
        self.board = board
        save_board(self.store, board)
        return board

    def regenerate(self, rng: Optional[np.random.Generator] = None) -> Board:
        return self._commit(generate_board(self.prefs, rng))

    def eligible(self, week_index: int, day_index: int) -> List[Task]:
        return allocator.list_eligible_tasks(
            self.board.schedule, week_index, day_index, self.board.pending)

    def assign(self, week_index: int, day_index: int, task_id: str) -> Board:
        """Raises allocator.AssignmentRejected and keeps the board if invalid."""
        try:
            schedule, pending = allocator.assign(
                self.board.schedule, self.board.pending, week_index, day_index, task_id)
        except allocator.AssignmentRejected as exc:
            logger.warning("%s", exc)
            raise
        return self._commit(replace(self.board, schedule=schedule, pending=pending))

    def unassign(self, week_index: int, day_index: int, task_id: str) -> Board:
        schedule, pending = allocator.unassign(
            self.board.schedule, self.board.pending, week_index, day_index, task_id)
        if schedule is self.board.schedule:
            return self.board
        return self._commit(replace(self.board, schedule=schedule, pending=pending))

    @property
    def score(self) -> int:
        return board_score(self.board)

    # completed-task records

    def completed(self) -> List[Dict]:
        records = self.store.load(COMPLETED_KEY, [])
        return records if isinstance(records, list) else []

    def completed_ids(self) -> set:
        """Ids of tasks completed on the current board."""
        return {r.get("id") for r in self.completed()
                if isinstance(r, dict) and r.get("board_id") == self.board.board_id}

    def complete_task(self, week_index: int, day_index: int, task_id: str) -> Optional[Dict]:
        """
        Record a placed task as done. Returns the new record, or None when
        the task is not on that day or was already recorded.
        """
        day = get_day(self.board.schedule, week_index, day_index)
        task = next((t for t in day.tasks if t.id == task_id), None)
        if task is None or task_id in self.completed_ids():
            return None
        record = {
            "board_id": self.board.board_id,
            "id": task.id,
            "title": task.title,
            "duration_hours": task.duration_hours,
            "week_number": self.board.schedule[week_index].week_number,
            "day_name": day.day_name,
            "completed_at": datetime.now(timezone.utc).isoformat(),
        }
        self.store.save(COMPLETED_KEY, self.completed() + [record])
        logger.info("completed %s (%s)", task.id, task.title)
        return record

    # quiz bonus

    def quiz_result(self) -> Tuple[int, int]:
        quiz_score = self.store.load(QUIZ_SCORE_KEY, 0)
        quiz_total = self.store.load(QUIZ_TOTAL_KEY, self.prefs.quiz_total_default)
        try:
            return int(quiz_score), int(quiz_total)
        except (TypeError, ValueError):
            return 0, self.prefs.quiz_total_default

    def progress_score(self) -> int:
        quiz_score, quiz_total = self.quiz_result()
        return progress_score(self.board.schedule, quiz_score, quiz_total)
