"""Error taxonomy shared by the catalog, cart and user services."""


class ServiceError(Exception):
    """Base class for every error a service raises on purpose."""

    status_code = 500


class NotFoundError(ServiceError):
    """Raised when a category, dish, cart line or user does not exist."""

    status_code = 404


class ValidationError(ServiceError):
    """Raised for bad prices, empty required fields and cross-field violations."""

    status_code = 422


class PermissionDeniedError(ServiceError):
    """Raised when an operation needs a signed-in user or the admin role."""

    def __init__(self, message: str, status_code: int = 403) -> None:
        super().__init__(message)
        self.status_code = status_code


class RemoteStoreError(ServiceError):
    """Raised when the database or an upstream HTTP service fails."""

    status_code = 503


class DeserializationError(RemoteStoreError):
    """Raised when a stored document does not match its schema."""
