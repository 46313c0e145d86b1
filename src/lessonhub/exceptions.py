"""lessonhub exceptions.

Every request-level error carries the HTTP status it maps to and the
message shown to the client.
"""

from typing import Optional


class LessonHubError(Exception):
    """Base class for errors reported to API clients as ``{"message": ...}``."""

    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ClientInputError(LessonHubError):
    """Raised for missing or invalid request input."""

    status_code = 400


class LessonNotFoundError(LessonHubError):
    """Raised when an operation targets a lesson ID that does not exist."""

    status_code = 404

    def __init__(self, lesson_id: str) -> None:
        self.lesson_id = lesson_id
        super().__init__("Lesson not found")


class NoCapacityError(LessonHubError):
    """Raised when a lesson has no spaces left to book."""

    status_code = 400

    def __init__(self, lesson_id: str) -> None:
        self.lesson_id = lesson_id
        super().__init__("No spaces left for this lesson")


class DecrementFailedError(LessonHubError):
    """Raised when the space decrement did not modify the lesson."""

    status_code = 400

    def __init__(self, lesson_id: str) -> None:
        self.lesson_id = lesson_id
        super().__init__("Failed to update lesson space")


class OrderInsertError(LessonHubError):
    """Raised when an order could not be stored."""

    status_code = 400

    def __init__(self) -> None:
        super().__init__("Insert failed")


class StorageConnectionError(Exception):
    """Raised at startup when the document database cannot be reached."""
