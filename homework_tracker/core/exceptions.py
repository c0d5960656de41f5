"""Custom exception classes for the homework tracker.

The storage backends raise these errors to their immediate caller; the HTTP
layer maps them to status codes in `homework_tracker.main`.
"""


class HomeworkTrackerError(Exception):
    """Base exception for all homework tracker errors."""

    pass


class NotInitializedError(HomeworkTrackerError):
    """Raised when the relational backend is used before `initialize()`."""

    def __init__(self, backend: str = "relational"):
        self.backend = backend
        super().__init__(f"The {backend} storage backend has not been initialized")


class NotFoundError(HomeworkTrackerError):
    """Raised when an operation references an entity that does not exist."""

    entity = "Entity"

    def __init__(self, entity_id: int):
        """Initialize the exception.

        Args:
            entity_id: The ID that could not be found.
        """
        self.entity_id = entity_id
        super().__init__(f"{self.entity} with ID {entity_id} not found")


class ClassNotFoundError(NotFoundError):
    """Raised when a class cannot be found."""

    entity = "Class"


class StudentNotFoundError(NotFoundError):
    """Raised when a student cannot be found."""

    entity = "Student"


class ValidationFailureError(HomeworkTrackerError):
    """Raised by the service layer when caller input fails validation."""

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(f"{field}: {message}")


class BackendUnavailableError(HomeworkTrackerError):
    """Raised when the relational backend cannot be initialized."""

    pass
