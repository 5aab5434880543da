"""Room domain services: naming, the registry and idle purging.

Pure(ish) room lifecycle logic imported by the HTTP views and socket
handlers, keeping transport concerns apart from registry bookkeeping.
"""
from .identifiers import IdentifierGenerator
from .registry import DEFAULT_DESCRIPTION, RoomRegistry
from .scheduler import PurgeScheduler

__all__ = ['DEFAULT_DESCRIPTION', 'IdentifierGenerator', 'PurgeScheduler', 'RoomRegistry']
