"""lessonhub — storefront backend for bookable lessons and orders."""

__version__ = "0.1.0"

from lessonhub.exceptions import (
    ClientInputError,
    DecrementFailedError,
    LessonHubError,
    LessonNotFoundError,
    NoCapacityError,
    OrderInsertError,
    StorageConnectionError,
)

__all__ = [
    "__version__",
    "LessonHubError",
    "ClientInputError",
    "LessonNotFoundError",
    "NoCapacityError",
    "DecrementFailedError",
    "OrderInsertError",
    "StorageConnectionError",
]
