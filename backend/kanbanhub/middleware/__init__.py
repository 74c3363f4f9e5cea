"""Middleware package."""

from kanbanhub.middleware.logging import LoggingMiddleware, configure_logging
from kanbanhub.middleware.request_id import RequestIDMiddleware

__all__ = ["LoggingMiddleware", "RequestIDMiddleware", "configure_logging"]
