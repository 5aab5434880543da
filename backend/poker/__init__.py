import time

from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from config import Config

socketio = SocketIO(async_mode=None)


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    origins = flask_app.config.get('CORS_ORIGINS', [])
    CORS(flask_app, origins=origins)
    socketio.init_app(flask_app, cors_allowed_origins=origins)

    from poker.errors import register_error_handlers
    register_error_handlers(flask_app)

    # The registry is the single owner of room state; views reach it through app.extensions
    from poker.routing import RouteBinder
    from poker.services.rooms import IdentifierGenerator, PurgeScheduler, RoomRegistry
    from poker.main import main, room_page
    from poker.socketio_events import notify_room_closed, register_socketio_handlers

    attempts = int(flask_app.config.get('ROOM_ID_ATTEMPTS', 10))
    binder = RouteBinder()
    registry = RoomRegistry(
        binder,
        room_page,
        generator=IdentifierGenerator(attempts=attempts),
        default_description=flask_app.config['DEFAULT_ROOM_DESCRIPTION'],
        attempts=attempts,
        on_remove=notify_room_closed,
    )
    flask_app.extensions['route_binder'] = binder
    flask_app.extensions['room_registry'] = registry
    flask_app.extensions['purge_scheduler'] = PurgeScheduler(
        flask_app,
        registry,
        interval=flask_app.config['PURGE_INTERVAL_SEC'],
        max_age=flask_app.config['ROOM_MAX_AGE_SEC'],
    )
    # No-op under TESTING unless ENABLE_SCHEDULER_IN_TESTS; any server that builds the app gets the sweep
    flask_app.extensions['purge_scheduler'].start()

    flask_app.register_blueprint(main)
    register_socketio_handlers(testing=flask_app.config.get('TESTING', False))

    if flask_app.config.get('SEED_ROOM'):
        # Self check: naming and route binding work before the first request arrives
        seed_age = flask_app.config.get('SEED_ROOM_AGE_SEC', 0)
        room_id = registry.create(time.time() - seed_age)
        flask_app.logger.info(f"[seed-room] room={room_id}")

    return flask_app
