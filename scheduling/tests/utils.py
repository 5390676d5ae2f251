from datetime import datetime, timezone as dt_timezone


def at(*args) -> datetime:
    """UTC datetime shorthand: ``at(2025, 3, 10, 9, 30)``."""
    return datetime(*args, tzinfo=dt_timezone.utc)
