import threading
import time
from typing import Callable, Dict, NamedTuple, Tuple

from poker.errors import ValidationFailure

# Stored for a participant who has looked at the room but not estimated yet
UNREVEALED = '?'


class RoomSnapshot(NamedTuple):
    description: str
    estimates: Dict[str, str]
    last_activity: float


class Room:
    """One estimation session: a topic plus everyone's current estimate.

    Every public method takes the room's own lock, so concurrent requests
    against the same room never lose an update while requests against
    different rooms never wait on each other.
    """

    def __init__(self, description: str, last_activity: float, clock: Callable[[], float] = time.time):
        self._description = description
        self._last_activity = last_activity
        self._estimates: Dict[str, str] = {}
        self._clock = clock
        self._lock = threading.Lock()

    @property
    def description(self) -> str:
        with self._lock:
            return self._description

    @property
    def last_activity(self) -> float:
        with self._lock:
            return self._last_activity

    def view(self, participant: str) -> Tuple[str, bool]:
        """Register ``participant`` as present and return ``(estimate, hidden)``.

        ``hidden`` is true while the participant has not submitted anything,
        which is when the caller must mask everyone else's estimates.
        """
        with self._lock:
            estimate = self._estimates.setdefault(participant, UNREVEALED)
        return estimate, estimate == UNREVEALED

    def set_estimate(self, participant: str, value: str) -> None:
        if not value:
            raise ValidationFailure('Estimation must not be empty')
        with self._lock:
            self._estimates[participant] = value
            self._touch()

    def set_description(self, text: str) -> None:
        # A new topic always starts a fresh round, even if the text is unchanged
        with self._lock:
            self._description = text
            self._estimates.clear()
            self._touch()

    def snapshot(self) -> RoomSnapshot:
        with self._lock:
            return RoomSnapshot(self._description, dict(self._estimates), self._last_activity)

    def _touch(self) -> None:
        self._last_activity = max(self._last_activity, self._clock())

    def __repr__(self):
        snap = self.snapshot()
        return f"<Room description={snap.description!r} estimates={snap.estimates!r} last_activity={snap.last_activity}>"
