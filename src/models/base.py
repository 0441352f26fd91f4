"""
Common base models and utilities.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict


class QuickstartBaseModel(BaseModel):
    """Base model for quickstart data."""

    model_config = ConfigDict(
        frozen=True,
    )


def utc_now() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(timezone.utc)
