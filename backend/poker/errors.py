from flask import render_template
from werkzeug.exceptions import HTTPException


class PrintableError(Exception):
    """An error whose message is safe to show to the participant."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationFailure(PrintableError):
    status_code = 200


class RoomNotFound(PrintableError):
    status_code = 404

    def __init__(self, room_id):
        super().__init__(f"Room {room_id} does not exist or has expired")
        self.room_id = room_id


class RoomCreationFailed(PrintableError):
    pass


class CapacityExhausted(RoomCreationFailed):
    pass


def register_error_handlers(flask_app) -> None:
    """Map failure kinds to what the participant sees."""

    @flask_app.errorhandler(ValidationFailure)
    def handle_validation_failure(exc):
        flask_app.logger.info(f"[validation] {exc.message}")
        return render_template('anonymous_index.html', error_message=exc.message), exc.status_code

    @flask_app.errorhandler(RoomNotFound)
    def handle_room_not_found(exc):
        flask_app.logger.warning(f"[room-missing] room={exc.room_id}")
        return render_template('error.html', error_message=exc.message), exc.status_code

    @flask_app.errorhandler(PrintableError)
    def handle_printable(exc):
        flask_app.logger.error(f"[error-page] {type(exc).__name__}: {exc.message}")
        return render_template('error.html', error_message=exc.message), exc.status_code

    @flask_app.errorhandler(Exception)
    def handle_unexpected(exc):
        if isinstance(exc, HTTPException):
            return exc
        flask_app.logger.exception(f"[unhandled] {exc!r}")
        return '', 500
