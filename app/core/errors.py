"""Domain errors shared by the lookup controller, RBAC seeding and scripts."""


class AppError(Exception):
    """Base class for domain errors; carries a stable error code for API responses."""

    code = "APP_ERROR"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class NotFoundError(AppError):
    """Raised when a registry key or natural-key lookup has no match."""

    code = "NOT_FOUND"


class ValidationError(AppError):
    """Raised when a request names unknown or restricted fields or bad filter values."""

    code = "VALIDATION_ERROR"


class ValidationConflictError(AppError):
    """Raised when a required related entity cannot be resolved before a dependent insert."""

    code = "VALIDATION_CONFLICT"


class ConstraintViolationError(AppError):
    """Raised when storage rejects a write on a uniqueness or foreign-key constraint."""

    code = "CONFLICT"
