"""API middleware."""

from stockflow.api.middleware.error_handler import ErrorHandlerMiddleware
from stockflow.api.middleware.logging import LoggingMiddleware

__all__ = ["LoggingMiddleware", "ErrorHandlerMiddleware"]
