class AppError(Exception):
    """Base class for all application exceptions."""

    def __init__(self, message: str, status_code: int = 500, details: dict = None):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class ScheduleConflictError(AppError):
    """Raised when an edit would double-book a teacher."""

    def __init__(self, conflict: dict):
        message = (
            f'Teacher "{conflict.get("teacherName")}" is already teaching class '
            f'"{conflict.get("conflictingClass")}" at {conflict.get("conflictingTime")}.'
        )
        super().__init__(message, status_code=409, details=conflict)


class InvalidScheduleError(AppError):
    """Raised when a replacement snapshot repeats entry ids or double-books a teacher."""

    def __init__(self, message: str, details: dict):
        super().__init__(message, status_code=409, details=details)


class DuplicateInitializationError(AppError):
    """Raised when a class already has entries for the requested day."""

    def __init__(self, day_of_week: int, class_name: str):
        super().__init__(
            f"Schedule entries already exist for {class_name} on day {day_of_week}",
            status_code=409,
            details={"dayOfWeek": day_of_week, "className": class_name},
        )


class PersistenceError(AppError):
    """Raised when the store rejects a snapshot write."""

    def __init__(self, collection: str):
        super().__init__(f"Unable to save {collection}", status_code=503, details={"collection": collection})


class InvalidPinError(AppError):
    def __init__(self):
        super().__init__("Invalid admin PIN", status_code=401)
