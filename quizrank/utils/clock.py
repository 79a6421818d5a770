"""Time helpers"""

from datetime import datetime, timezone


def utcnow() -> datetime:
    """Naive UTC timestamp, the format every stored datetime uses"""
    return datetime.now(timezone.utc).replace(tzinfo=None)
