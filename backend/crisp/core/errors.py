class CrispError(Exception):
    """Base class for errors the HTTP layer maps to a status code."""

    status_code = 500

class NotFoundError(CrispError):
    status_code = 404

class BadRequestError(CrispError):
    status_code = 400
