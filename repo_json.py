# repo_json.py
import json
import logging
import os
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from models import (
    DEFAULT_CATEGORY,
    Habit,
    generate_id,
    habit_from_dict,
    habit_to_dict,
    new_habit,
    toggle_log,
    with_note,
)

logger = logging.getLogger(__name__)


class JSONRepo:
    """
    Owns the habit collection and persists all of it after every change.
    The collection is replaced, never edited in place.
    """

    def __init__(self, path):
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.habits: List[Habit] = self.load()

    # -------- Blob load / save --------
    def load(self) -> List[Habit]:
        if not self.path.exists():
            return []
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, ValueError):
            # ValueError covers both bad JSON and bytes that are not UTF-8
            logger.exception("Failed to load habits from %s", self.path)
            return []
        if not isinstance(raw, list):
            logger.error("Habit data in %s is not a list; starting empty", self.path)
            return []
        return [h for h in (habit_from_dict(r) for r in raw) if h is not None]

    def save(self, habits: List[Habit]):
        tmp = str(self.path) + ".tmp"
        try:
            with open(tmp, "w", encoding="utf-8") as f:
                json.dump([habit_to_dict(h) for h in habits], f, indent=2)
            os.replace(tmp, self.path)
        except (OSError, TypeError):
            logger.exception("Failed to save habits to %s", self.path)
            Path(tmp).unlink(missing_ok=True)

    def _commit(self, habits: List[Habit]):
        self.habits = habits
        self.save(habits)

    # -------- Habits --------
    def list_habits(self) -> List[Habit]:
        return list(self.habits)

    def get_habit(self, habit_id: str) -> Optional[Habit]:
        return next((h for h in self.habits if h.id == habit_id), None)

    def _unique_id(self) -> str:
        taken = {h.id for h in self.habits}
        hid = generate_id()
        while hid in taken:
            hid = generate_id()
        return hid

    def add_habit(self, name: str, description: Optional[str] = None,
                  category: str = DEFAULT_CATEGORY) -> Habit:
        habit = new_habit(name, description, category, habit_id=self._unique_id())
        self._commit(self.habits + [habit])
        return habit

    def update_habit(self, updated: Habit) -> Optional[Habit]:
        if self.get_habit(updated.id) is None:
            logger.warning("Ignoring update for unknown habit %s", updated.id)
            return None
        self._commit([updated if h.id == updated.id else h for h in self.habits])
        return updated

    def rename_habit(self, habit_id: str, name: str, description: Optional[str] = None):
        habit = self.get_habit(habit_id)
        name = name.strip()
        if habit is None or not name:
            return None
        return self.update_habit(
            replace(habit, name=name, description=(description or "").strip() or None)
        )

    def delete_habit(self, habit_id: str):
        # no tombstone: the record and its history are gone
        remaining = [h for h in self.habits if h.id != habit_id]
        if len(remaining) == len(self.habits):
            logger.warning("Ignoring delete for unknown habit %s", habit_id)
            return
        self._commit(remaining)

    # -------- Completions / Notes --------
    def toggle_completion(self, habit_id: str, key: str) -> Optional[Habit]:
        habit = self.get_habit(habit_id)
        if habit is None:
            logger.warning("Ignoring toggle for unknown habit %s", habit_id)
            return None
        return self.update_habit(toggle_log(habit, key))

    def set_note(self, habit_id: str, key: str, text: str) -> Optional[Habit]:
        habit = self.get_habit(habit_id)
        if habit is None:
            logger.warning("Ignoring note for unknown habit %s", habit_id)
            return None
        return self.update_habit(with_note(habit, key, text))
