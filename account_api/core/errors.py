"""Service-level error taxonomy. Each error maps to one HTTP status and a client-safe message."""


class ServiceError(Exception):
    """Base for errors rendered to clients as {"error": message}."""

    status_code = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class BadRequestError(ServiceError):
    """Malformed or missing input. Raised before any side effect."""

    status_code = 400


class UnauthorizedError(ServiceError):
    """Credential or bearer token failure."""

    status_code = 401


class NotFoundError(ServiceError):
    status_code = 404


class ConflictError(ServiceError):
    """Uniqueness violation (duplicate username)."""

    status_code = 409


class ConfigError(ServiceError):
    """Server misconfiguration, e.g. no signing secret. Never reported as a client auth failure."""

    status_code = 500


class InternalError(ServiceError):
    """Unexpected store or hashing failure; the cause is logged, not returned."""

    status_code = 500
