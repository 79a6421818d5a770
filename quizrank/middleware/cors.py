"""
CORS configuration for QuizRank
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from quizrank.core.config import settings


def setup_cors(app: FastAPI) -> None:
    """
    Configure CORS middleware

    Args:
        app: FastAPI application instance
    """
    allow_origins = settings.get_cors_origins()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        # Browsers reject credentialed requests against a wildcard origin
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS and "*" not in allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
