"""Time helpers.

All stored timestamps are timezone-aware UTC; never use datetime.utcnow().
"""

from __future__ import annotations

from datetime import datetime, timezone


def utcnow() -> datetime:
    """Return the current time as a timezone-aware datetime in UTC (+00:00)."""

    return datetime.now(timezone.utc)


def utcnow_sa_default() -> datetime:
    """SQLAlchemy ``default=`` callable for ``created_at`` columns."""

    return utcnow()
