"""
Blob listing models.
"""

from pydantic import Field

from src.models.base import QuickstartBaseModel


class BlobItem(QuickstartBaseModel):
    """A blob returned by a listing call."""

    name: str
    url: str
    size: int | None = None
    content_type: str | None = None


class BlobPage(QuickstartBaseModel):
    """One segment of a paginated blob listing."""

    items: list[BlobItem] = Field(default_factory=list)
    continuation_token: str | None = Field(
        None, description="Cursor for the next page; None when the listing is complete"
    )

    @property
    def is_last(self) -> bool:
        """True when no further pages remain."""
        return self.continuation_token is None

    @property
    def urls(self) -> list[str]:
        """URLs of the blobs on this page, in listing order."""
        return [item.url for item in self.items]
