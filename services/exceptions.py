from flask import jsonify


def envelope(success, message, data=None):
    body = {"success": success, "message": message}
    if data is not None:
        body["data"] = data
    return body


class ApiError(Exception):
    """
    Base API error.
    Carries the client-facing message and the HTTP status code.
    """
    status_code = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_response(self):
        return jsonify(envelope(False, self.message)), self.status_code


class BadRequestError(ApiError):
    status_code = 400


class ForbiddenError(ApiError):
    status_code = 403


class NotFoundError(ApiError):
    status_code = 404


class ConflictError(ApiError):
    status_code = 409
