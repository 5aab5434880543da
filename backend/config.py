import os


def _flag(name, default):
    return os.environ.get(name, default).lower() in ('1', 'true', 'yes', 'on')


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    HOST = os.environ.get('HOST', '0.0.0.0')
    PORT = int(os.environ.get('PORT', '8080'))
    CORS_ORIGINS = [
        origin.strip()
        for origin in os.environ.get('CORS_ORIGINS', 'http://localhost:8080,http://127.0.0.1:8080').split(',')
        if origin.strip()
    ]
    # Idle room purge (seconds)
    PURGE_INTERVAL_SEC = int(os.environ.get('PURGE_INTERVAL_SEC', '300'))
    ROOM_MAX_AGE_SEC = int(os.environ.get('ROOM_MAX_AGE_SEC', str(24 * 60 * 60)))
    # Draws of a fresh room name before giving up
    ROOM_ID_ATTEMPTS = int(os.environ.get('ROOM_ID_ATTEMPTS', '10'))
    DEFAULT_ROOM_DESCRIPTION = os.environ.get(
        'DEFAULT_ROOM_DESCRIPTION', 'Change room description to what you are estimating'
    )
    # Create one room at startup; it starts out SEED_ROOM_AGE_SEC old
    SEED_ROOM = _flag('SEED_ROOM', 'true')
    SEED_ROOM_AGE_SEC = int(os.environ.get('SEED_ROOM_AGE_SEC', str(3 * 60 * 60)))
