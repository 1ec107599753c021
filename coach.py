# coach.py
"""Prompt construction for the habit coach and a one-at-a-time chat session."""

import json
import logging
import threading
from datetime import date
from typing import Callable, List, Optional, Sequence, Tuple

import config
from models import Habit
from stats import WeeklySummary, per_habit_weekly_summary

logger = logging.getLogger(__name__)

SYSTEM_INSTRUCTION = """
You are Habit Tracker AI, an intelligent, minimalist, and encouraging habit coach.
Your tone is professional, concise, and calm.

You are analyzing the user's habit data.
- Provide specific, actionable advice based on their consistency.
- If they are doing well, reinforce the behavior with subtle praise.
- If they are struggling, suggest small, atomic adjustments.
- Pay attention to any 'notes' the user has left. If they mention being sick or busy, offer empathy and recovery strategies.
- Keep responses brief (under 150 words) unless asked for a deep dive.
- Use bullet points for readability.
""".strip()

DEFAULT_REQUEST = (
    "Please analyze my current habit progress and give me a weekly summary "
    "and 2 tips for improvement."
)

MISSING_KEY_MESSAGE = "API Key is missing. Please check your configuration."
EMPTY_RESPONSE_MESSAGE = "I couldn't generate a response at this moment."
FALLBACK_MESSAGE = (
    "Sorry, I'm having trouble connecting to the AI coach right now. Please try again later."
)

# complete(system_instruction, prompt) -> (text, error)
Completion = Callable[[str, str], Tuple[Optional[str], Optional[str]]]


def build_prompt(summaries: Sequence[WeeklySummary], user_query: Optional[str] = None) -> str:
    data = json.dumps([s.as_payload() for s in summaries], separators=(",", ":"), ensure_ascii=False)
    if user_query:
        return f'User Question: "{user_query}"\n\nCurrent Habit Data: {data}'
    return f"{DEFAULT_REQUEST}\n\nCurrent Habit Data: {data}"


def _default_completion(system_instruction: str, prompt: str):
    from microservice_clients import coach_completion
    return coach_completion(system_instruction, prompt)


def get_habit_coaching(habits: Sequence[Habit], user_query: Optional[str] = None, *,
                       api_key: Optional[str] = None,
                       complete: Optional[Completion] = None,
                       reference: Optional[date] = None) -> str:
    """
    Build the weekly digest prompt and ask the coaching backend for advice.
    Never raises: a missing key or any backend failure becomes a fixed message.
    """
    key = config.OPENAI_API_KEY if api_key is None else api_key
    if not config.has_coach_credentials(key):
        return MISSING_KEY_MESSAGE

    complete = complete or _default_completion
    try:
        prompt = build_prompt(per_habit_weekly_summary(habits, reference), user_query)
        text, error = complete(SYSTEM_INSTRUCTION, prompt)
    except Exception:
        logger.exception("Coaching request failed")
        return FALLBACK_MESSAGE
    if error:
        logger.error("Coaching backend error: %s", error)
        return FALLBACK_MESSAGE
    return text or EMPTY_RESPONSE_MESSAGE


class CoachSession:
    """
    Chat history with the coach. Only one request may be in flight; a call
    made while another is running is refused without reaching the backend.
    """

    def __init__(self, habits_source: Callable[[], Sequence[Habit]], **coaching_kwargs):
        self.habits_source = habits_source
        self.coaching_kwargs = coaching_kwargs
        self.messages: List[Tuple[str, str]] = []
        self._lock = threading.Lock()

    @property
    def busy(self) -> bool:
        return self._lock.locked()

    @property
    def started(self) -> bool:
        return bool(self.messages)

    def ask(self, user_query: Optional[str] = None) -> Optional[str]:
        if not self._lock.acquire(blocking=False):
            logger.info("Coach request ignored; another request is in flight")
            return None
        try:
            return self._run(user_query)
        finally:
            self._lock.release()

    def ask_async(self, user_query: Optional[str] = None,
                  on_done: Optional[Callable[[str], None]] = None) -> bool:
        """Run ask() on a daemon thread; on_done receives the reply."""
        if not self._lock.acquire(blocking=False):
            logger.info("Coach request ignored; another request is in flight")
            return False

        def worker():
            try:
                reply = self._run(user_query)
            finally:
                self._lock.release()
            if on_done:
                on_done(reply)

        threading.Thread(target=worker, daemon=True).start()
        return True

    def _run(self, user_query: Optional[str]) -> str:
        query = (user_query or "").strip() or None
        if query:
            self.messages.append(("user", query))
        reply = get_habit_coaching(self.habits_source(), query, **self.coaching_kwargs)
        self.messages.append(("assistant", reply))
        return reply
