"""Runtime route table for per-room pages.

Flask freezes its URL map once the first request is served and cannot drop
rules, so room pages are dispatched through one catch-all rule that asks the
binder which view, if any, currently owns the path.
"""
from typing import Callable, Dict, List, Optional

ROOM_PREFIX = '/room-'


def room_path(room_id: str) -> str:
    return f"{ROOM_PREFIX}{room_id}"


class RouteBinder:
    def __init__(self):
        self._views: Dict[str, Callable] = {}

    def bind(self, path: str, view: Callable) -> None:
        existing = self._views.setdefault(path, view)
        if existing is not view:
            raise ValueError(f"Path {path} is already bound")

    def unbind(self, path: str) -> None:
        self._views.pop(path, None)

    def resolve(self, path: str) -> Optional[Callable]:
        return self._views.get(path)

    def is_bound(self, path: str) -> bool:
        return path in self._views

    def paths(self) -> List[str]:
        return sorted(list(self._views))
