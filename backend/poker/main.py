import time
from urllib.parse import urlencode

from flask import Blueprint, abort, current_app, redirect, render_template, request

from poker.errors import RoomNotFound, ValidationFailure
from poker.models import UNREVEALED
from poker.routing import room_path
from poker.socketio_events import notify_room_update

main = Blueprint('main', __name__)

USERNAME = 'username'
ROOM_ID = 'roomId'
ESTIMATION = 'estimation'
DESCRIPTION = 'description'


def _registry():
    return current_app.extensions['room_registry']


def _display(value):
    # Values arrive form-encoded; any '+' that survived decoding is shown as a space
    return (value or '').replace('+', ' ')


def _require_username():
    username = request.args.get(USERNAME)
    if username is None:
        raise ValidationFailure('Please introduce yourself')
    if username == '':
        raise ValidationFailure('Empty name not allowed. Please introduce yourself')
    return username


def _require_room(room_id):
    room = _registry().lookup(room_id)
    if room is None:
        raise RoomNotFound(room_id)
    return room


def _redirect_to_room(room_id, **params):
    return redirect(f"{room_path(room_id)}?{urlencode(params)}", code=301)


@main.after_app_request
def disable_caches(response):
    response.headers['Cache-Control'] = 'no-cache, no-store, must-revalidate'
    response.headers['Pragma'] = 'no-cache'
    response.headers['Expires'] = '0'
    return response


@main.route('/')
def index():
    username = _require_username()
    rooms = [room_path(room_id) for room_id in _registry().list_identifiers()]
    return render_template(
        'authorized_index.html',
        username=_display(username),
        raw_username=username,
        rooms=rooms,
        prevent_cache=int(time.time() * 1000),
    )


@main.route('/api-add-room')
def api_add_room():
    username = _require_username()
    registry = _registry()
    room_id = registry.create(time.time())
    current_app.logger.info(f"[api-add-room] by={username} room={room_id} total={len(registry)}")
    return _redirect_to_room(room_id, username=username)


@main.route('/api-add-estimation')
def api_add_estimation():
    username = _require_username()
    room_id = request.args.get(ROOM_ID)
    estimation = request.args.get(ESTIMATION)
    room = _require_room(room_id)
    room.set_estimate(username, estimation)
    current_app.logger.info(f"[estimate] room={room_id} estimates={room.snapshot().estimates}")
    notify_room_update(room_id)
    return _redirect_to_room(room_id, username=username, estimation=estimation)


@main.route('/api-set-description')
def api_set_description():
    username = _require_username()
    room_id = request.args.get(ROOM_ID)
    description = request.args.get(DESCRIPTION, '')
    room = _require_room(room_id)
    room.set_description(description)
    current_app.logger.info(f"[description] room={room_id} by={username}")
    notify_room_update(room_id)
    return _redirect_to_room(room_id, username=username)


@main.route('/<path:path>')
def dispatch_bound_route(path):
    view = current_app.extensions['route_binder'].resolve(f"/{path}")
    if view is None:
        abort(404)
    return view()


def room_page(room_id):
    """Render one room for the requesting participant.

    Everyone's estimate is masked until the viewer has submitted their own.
    """
    username = _require_username()
    room = _require_room(room_id)
    my_estimation, hidden = room.view(username)
    snapshot = room.snapshot()
    estimations = [
        {
            'username': _display(participant),
            'estimation': _display(UNREVEALED if hidden else value),
        }
        for participant, value in sorted(snapshot.estimates.items())
    ]
    return render_template(
        'room.html',
        room_id=room_id,
        username=_display(username),
        raw_username=username,
        my_estimation=_display(my_estimation),
        description=_display(snapshot.description),
        estimations=estimations,
        hidden=hidden,
    )
