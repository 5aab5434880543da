import functools
import logging
import threading
from typing import Callable, Dict, List, Optional

from poker.errors import CapacityExhausted, RoomCreationFailed
from poker.models import Room
from poker.routing import RouteBinder, room_path
from .identifiers import DEFAULT_ATTEMPTS, IdentifierGenerator

logger = logging.getLogger(__name__)

DEFAULT_DESCRIPTION = 'Change room description to what you are estimating'


class RoomRegistry:
    """Owns every live room and keeps each one's route bound while it exists.

    Reads (lookup, listing, purge scans) never lock. Only create and remove
    take the lifecycle lock, so a map change and its route change land
    together and never interleave with another create or remove. Work on a
    Room itself is guarded by that room's own lock.
    """

    def __init__(
        self,
        binder: RouteBinder,
        room_view: Callable[[str], object],
        generator: Optional[IdentifierGenerator] = None,
        default_description: str = DEFAULT_DESCRIPTION,
        attempts: int = DEFAULT_ATTEMPTS,
        on_remove: Optional[Callable[[str], None]] = None,
    ):
        self._rooms: Dict[str, Room] = {}
        self._lifecycle_lock = threading.Lock()
        self._binder = binder
        self._room_view = room_view
        self._generator = generator or IdentifierGenerator(attempts=attempts)
        self._default_description = default_description
        self._attempts = attempts
        self._on_remove = on_remove

    def create(self, now: float) -> str:
        """Create an empty room last active at ``now`` and return its identifier.

        The whole draw-and-insert cycle is retried up to ``attempts`` times,
        whether the generator ran out of free names or the insert found the
        name already taken.
        """
        failure = None
        for attempt in range(1, self._attempts + 1):
            room = Room(self._default_description, now)
            with self._lifecycle_lock:
                try:
                    room_id = self._generator.generate(self._rooms)
                except CapacityExhausted as exc:
                    logger.warning(f"[room-create] no free identifier after {self._generator.attempts} draws, attempt={attempt}")
                    failure = exc
                    continue
                # setdefault is the atomic insert-if-absent
                if self._rooms.setdefault(room_id, room) is not room:
                    logger.info(f"[room-create] identifier {room_id} taken, attempt={attempt}")
                    continue
                self._binder.bind(room_path(room_id), functools.partial(self._room_view, room_id))
            logger.info(f"[room-create] room={room_id} total={len(self._rooms)}")
            return room_id
        logger.error(f"[room-create] gave up after {self._attempts} attempts")
        raise RoomCreationFailed('Could not create free room name') from failure

    def lookup(self, room_id: str) -> Optional[Room]:
        if room_id is None:
            return None
        return self._rooms.get(room_id)

    def remove(self, room_id: str) -> bool:
        """Withdraw the room's route and forget it. Returns False if it was already gone."""
        return self._detach(room_id)

    def _detach(self, room_id: str, expected: Optional[Room] = None) -> bool:
        # With ``expected`` set, only that exact Room is removed, never a newer one under the same name
        with self._lifecycle_lock:
            current = self._rooms.get(room_id)
            if current is None or (expected is not None and current is not expected):
                return False
            self._binder.unbind(room_path(room_id))
            del self._rooms[room_id]
        logger.info(f"[room-remove] room={room_id} total={len(self._rooms)}")
        if self._on_remove is not None:
            try:
                self._on_remove(room_id)
            except Exception:
                logger.exception(f"[room-remove] listener failed for room={room_id}")
        return True

    def purge_idle(self, now: float, max_age: float) -> List[str]:
        """Remove rooms with no activity for more than ``max_age`` seconds before ``now``.

        Only rooms present when the sweep starts are considered. Anyone still
        holding a purged Room can finish with it, but lookups miss from here on.
        """
        removed = []
        for room_id in list(self._rooms):
            room = self._rooms.get(room_id)
            if room is None:
                continue
            if now - room.last_activity > max_age and self._detach(room_id, room):
                removed.append(room_id)
        return removed

    def list_identifiers(self) -> List[str]:
        # A room mid-create is in the map a moment before its route is bound
        return sorted(
            room_id for room_id in list(self._rooms)
            if self._binder.is_bound(room_path(room_id))
        )

    def __contains__(self, room_id) -> bool:
        return room_id in self._rooms

    def __len__(self) -> int:
        return len(self._rooms)
