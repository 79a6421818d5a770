"""Middleware modules for QuizRank"""

from .cors import setup_cors
from .logging_middleware import LoggingMiddleware
from .rate_limit import add_rate_limiting
from .request_id import RequestIDMiddleware

__all__ = [
    "setup_cors",
    "add_rate_limiting",
    "RequestIDMiddleware",
    "LoggingMiddleware",
]
