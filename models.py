# models.py
import logging
import secrets
import string
from dataclasses import asdict, dataclass, field, replace
from datetime import datetime, timezone
from typing import Dict, Optional

logger = logging.getLogger(__name__)

CATEGORIES = ["health", "productivity", "learning", "mindfulness", "other"]
DEFAULT_CATEGORY = "productivity"

ID_ALPHABET = string.ascii_lowercase + string.digits
ID_LENGTH = 7


@dataclass(frozen=True)
class Habit:
    id: str
    name: str
    description: Optional[str] = None
    category: str = DEFAULT_CATEGORY
    created_at: str = ""
    logs: Dict[str, bool] = field(default_factory=dict)   # sparse: only completed days
    notes: Dict[str, str] = field(default_factory=dict)   # sparse: only days with text


def generate_id() -> str:
    """Short random alphanumeric token."""
    return "".join(secrets.choice(ID_ALPHABET) for _ in range(ID_LENGTH))


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds")


def new_habit(name: str, description: Optional[str] = None, category: str = DEFAULT_CATEGORY,
              habit_id: Optional[str] = None) -> Habit:
    name = name.strip()
    if not name:
        raise ValueError("Habit name must not be empty.")
    if category not in CATEGORIES:
        raise ValueError(f"Unknown category '{category}'.")
    return Habit(
        id=habit_id or generate_id(),
        name=name,
        description=(description or "").strip() or None,
        category=category,
        created_at=now_iso(),
    )


# -------- Per-day accessors --------
def is_completed(h: Habit, key: str) -> bool:
    return bool(h.logs.get(key))


def note_for(h: Habit, key: str) -> Optional[str]:
    return h.notes.get(key) or None


def toggle_log(h: Habit, key: str) -> Habit:
    """New record with the day flipped; un-completing removes the key."""
    logs = dict(h.logs)
    if logs.get(key):
        del logs[key]
    else:
        logs[key] = True
    return replace(h, logs=logs)


def with_note(h: Habit, key: str, text: str) -> Habit:
    """New record with the note for a day set, or removed when text is blank."""
    notes = dict(h.notes)
    text = (text or "").strip()
    if text:
        notes[key] = text
    else:
        notes.pop(key, None)
    return replace(h, notes=notes)


# -------- Serialization --------
def habit_to_dict(h: Habit) -> dict:
    return asdict(h)


def _mapping(raw: dict, field_name: str) -> dict:
    value = raw.get(field_name) or {}
    if not isinstance(value, dict):
        logger.warning("Habit %s has a non-mapping %s field; resetting it", raw.get("id"), field_name)
        return {}
    return value


def habit_from_dict(raw) -> Optional[Habit]:
    """
    Build a Habit from a stored record, filling defaults for optional fields.
    Records written before notes existed get an empty notes mapping.
    Returns None for records that cannot be used.
    """
    if not isinstance(raw, dict) or not raw.get("id") or not str(raw.get("name", "")).strip():
        logger.warning("Skipping malformed habit record: %r", raw)
        return None

    category = raw.get("category")
    if category not in CATEGORIES:
        category = "other"

    logs = _mapping(raw, "logs")
    notes = _mapping(raw, "notes")
    return Habit(
        id=str(raw["id"]),
        name=str(raw["name"]),
        description=raw.get("description") or None,
        category=category,
        created_at=raw.get("created_at") or "",
        logs={str(k): True for k, v in logs.items() if v},
        notes={str(k): str(v) for k, v in notes.items() if v},
    )
