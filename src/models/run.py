"""
Quickstart run summary model.
"""

from datetime import datetime
from pathlib import Path

from pydantic import Field

from src.models.base import QuickstartBaseModel, utc_now


class QuickstartResult(QuickstartBaseModel):
    """Outcome of a completed quickstart run."""

    container_name: str
    blob_name: str
    blob_url: str
    source_file: Path
    downloaded_file: Path
    listed_urls: list[str] = Field(default_factory=list)
    page_count: int = 0
    content_matches: bool = False
    container_deleted: bool = False
    started_at: datetime = Field(default_factory=utc_now)
    finished_at: datetime = Field(default_factory=utc_now)

    @property
    def duration_ms(self) -> int:
        """Wall-clock duration of the run in milliseconds."""
        return int((self.finished_at - self.started_at).total_seconds() * 1000)
