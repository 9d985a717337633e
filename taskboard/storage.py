# taskboard/storage.py
import copy
import json
import logging
import os
import tempfile
from typing import Any, Dict

logger = logging.getLogger(__name__)

SCHEDULE_KEY = "taskboard_schedule"
PENDING_KEY = "taskboard_pending"
COMPLETED_KEY = "taskboard_completed"
MODE_KEY = "taskboard_mode"
BOARD_ID_KEY = "taskboard_board_id"
QUIZ_SCORE_KEY = "taskboard_quiz_score"
QUIZ_TOTAL_KEY = "taskboard_quiz_total"


class MemoryStore:
    """Key-value slots kept in a dict. Values are copied in and out."""

    def __init__(self):
        self._slots: Dict[str, Any] = {}

    def load(self, key: str, default: Any) -> Any:
        if key not in self._slots:
            return default
        return copy.deepcopy(self._slots[key])

    def save(self, key: str, value: Any) -> None:
        self._slots[key] = copy.deepcopy(value)


class JsonFileStore:
    """
    Key-value slots persisted as one JSON document on disk.

    Reads never raise: a missing or corrupt file behaves as empty.
    Writes are best-effort; a failure is logged and the caller carries on
    with its in-memory state.
    """

    def __init__(self, path: str):
        self.path = path

    def _read_all(self) -> Dict[str, Any]:
        if not os.path.isfile(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError):
            logger.warning("could not read %s, treating it as empty", self.path, exc_info=True)
            return {}
        if not isinstance(data, dict):
            logger.warning("%s does not hold a JSON object, treating it as empty", self.path)
            return {}
        return data

    def load(self, key: str, default: Any) -> Any:
        return self._read_all().get(key, default)

    def save(self, key: str, value: Any) -> None:
        data = self._read_all()
        data[key] = value
        directory = os.path.dirname(os.path.abspath(self.path))
        try:
            fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".taskboard-", suffix=".json")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(data, f, ensure_ascii=False, indent=2)
                os.replace(tmp_path, self.path)
            except BaseException:
                os.unlink(tmp_path)
                raise
        except (OSError, TypeError, ValueError):
            logger.exception("failed to save %r to %s", key, self.path)
