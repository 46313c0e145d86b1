"""lessonhub API server."""
