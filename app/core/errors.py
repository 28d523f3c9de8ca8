class ServiceError(Exception):
    """Base class for errors raised by the service layer."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ServiceError):
    """User-correctable input problem (missing field, duplicate SKU, bad price)."""

    status_code = 400

    def __init__(self, message: str, *, field: str | None = None):
        super().__init__(message)
        self.field = field


class NotFoundError(ServiceError):
    status_code = 404


class InternalError(ServiceError):
    """Data-store or unexpected failure. The message is safe to show to clients."""

    def __init__(self, message: str = "An internal error occurred"):
        super().__init__(message)


__all__ = ["InternalError", "NotFoundError", "ServiceError", "ValidationError"]
