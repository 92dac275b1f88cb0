"""
Feedback Channel — short-lived, human-readable messages for the UI.

Only the latest message is kept. Each message carries a dismiss deadline;
the UI renders it until then, and a newer message replaces it outright.
"""

from datetime import datetime, timedelta
from typing import Optional

from manul_manor.models.reward import Feedback, FeedbackCategory


class FeedbackChannel:

    def __init__(self, display_seconds: float = 2.5):
        self.display_seconds = display_seconds
        self._latest: Optional[Feedback] = None

    @property
    def latest(self) -> Optional[Feedback]:
        return self._latest

    def show(self, message: str, category: FeedbackCategory, now: datetime) -> Feedback:
        """Replace the current message and restart the dismiss timer."""
        self._latest = Feedback(
            message=message,
            category=category,
            shown_at=now,
            dismiss_at=now + timedelta(seconds=self.display_seconds),
        )
        return self._latest

    def visible(self, now: datetime) -> Optional[Feedback]:
        """The latest message, or None once its deadline has passed."""
        if self._latest is None or now >= self._latest.dismiss_at:
            return None
        return self._latest

    def dismiss(self) -> None:
        self._latest = None
