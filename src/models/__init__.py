"""
Pydantic models for blob listings and run summaries.
"""

from src.models.base import QuickstartBaseModel, utc_now
from src.models.listing import BlobItem, BlobPage
from src.models.run import QuickstartResult

__all__ = [
    "QuickstartBaseModel",
    "utc_now",
    "BlobItem",
    "BlobPage",
    "QuickstartResult",
]
