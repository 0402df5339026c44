class AppError(Exception):
    """Base class for all application exceptions."""
    def __init__(self, message: str, status_code: int = 500, details: dict = None):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

class ValidationFailedError(AppError):
    """Raised when an input value is malformed or out of range."""
    def __init__(self, message: str, *, field: str | None = None, index: int | None = None):
        details = {}
        if field is not None:
            details["field"] = field
        if index is not None:
            details["index"] = index
        super().__init__(message, status_code=400, details=details)
        self.field = field
        self.index = index

class ResourceNotFoundError(AppError):
    """Raised when a requested resource is not found."""
    def __init__(self, resource_type: str, resource_id):
        super().__init__(f"{resource_type} with id {resource_id} not found", status_code=404)

class UnresolvedReferenceError(AppError):
    """Raised when a row refers to a room or class that does not exist."""
    def __init__(self, message: str, *, field: str, value=None, status_code: int = 404, details: dict = None):
        payload = {"field": field}
        if value is not None:
            payload["value"] = value
        payload.update(details or {})
        super().__init__(message, status_code=status_code, details=payload)
        self.field = field

class UnknownClassNamesError(UnresolvedReferenceError):
    """Raised once per class-name list, naming every class that could not be found."""
    def __init__(self, names: list[str]):
        super().__init__(
            f"Unknown class name(s): {', '.join(names)}",
            field="class_names",
            status_code=422,
            details={"names": list(names)},
        )
        self.names = list(names)

class ConflictError(AppError):
    """Raised when a keyed write collides with an existing record."""
    def __init__(self, message: str):
        super().__init__(message, status_code=409)

class InvariantViolationError(AppError):
    """Raised when the datastore rejects a write the store believed to be consistent."""
    def __init__(self, message: str, details: dict = None):
        super().__init__(message, status_code=500, details=details)

class ConfigurationError(AppError):
    """Raised when system configuration is invalid."""
    def __init__(self, message: str):
        super().__init__(message, status_code=500)
