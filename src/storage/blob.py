"""
Azure Blob Storage client wrapper.
"""

import mimetypes
from pathlib import Path

import structlog
from azure.core.exceptions import ResourceNotFoundError
from azure.storage.blob import BlobServiceClient, ContentSettings, PublicAccess

from src.config import Settings, get_settings
from src.models import BlobItem, BlobPage
from src.storage.connection import parse_connection_string

logger = structlog.get_logger(__name__)

PUBLIC_ACCESS_LEVELS = {
    "blob": PublicAccess.BLOB,
    "container": PublicAccess.CONTAINER,
    "private": None,
}


class BlobStorageClient:
    """
    Client for Azure Blob Storage operations on a single container.

    Authenticates with a storage connection string.
    """

    def __init__(self, connection_string: str, container_name: str):
        self.container_name = container_name
        self.service_client = BlobServiceClient.from_connection_string(connection_string)
        self.container_client = self.service_client.get_container_client(container_name)

    def create_container(self) -> None:
        """Create the container; fails if it already exists."""
        self.container_client.create_container()
        logger.info("Container created", container=self.container_name)

    def container_exists(self) -> bool:
        """Check if the container exists."""
        return self.container_client.exists()

    def set_public_access(self, level: str) -> None:
        """
        Set the container's anonymous access level.

        Args:
            level: "blob" (blobs readable), "container" (blobs and listing
                readable) or "private" (no anonymous access)
        """
        if level not in PUBLIC_ACCESS_LEVELS:
            raise ValueError(f"Unknown public access level: {level}")

        self.container_client.set_container_access_policy(
            signed_identifiers={},
            public_access=PUBLIC_ACCESS_LEVELS[level],
        )
        logger.info("Container access set", container=self.container_name, public_access=level)

    def upload_file(
        self,
        path: Path,
        blob_name: str | None = None,
        overwrite: bool = False,
    ) -> str:
        """
        Upload a local file to a blob.

        Args:
            path: Local file to upload
            blob_name: Blob name within container (defaults to the file name)
            overwrite: Whether to overwrite an existing blob

        Returns:
            Full blob URL
        """
        blob_client = self.container_client.get_blob_client(blob_name or path.name)
        content_type, _ = mimetypes.guess_type(path.name)
        content_settings = ContentSettings(content_type=content_type or "application/octet-stream")

        with open(path, "rb") as data:
            blob_client.upload_blob(
                data,
                overwrite=overwrite,
                content_settings=content_settings,
            )

        logger.info("Blob uploaded", blob=blob_client.blob_name, url=blob_client.url)
        return blob_client.url

    def list_blobs_page(
        self,
        continuation_token: str | None = None,
        page_size: int | None = None,
        prefix: str | None = None,
    ) -> BlobPage:
        """
        List one page of blobs.

        Args:
            continuation_token: Token from the previous page, None for the first
            page_size: Maximum blobs per page (service default when None)
            prefix: Prefix to filter blobs

        Returns:
            BlobPage whose continuation_token is None on the last page
        """
        pages = self.container_client.list_blobs(
            name_starts_with=prefix,
            results_per_page=page_size,
        ).by_page(continuation_token=continuation_token)

        items = []
        for blob in next(pages, []):
            content_settings = getattr(blob, "content_settings", None)
            items.append(
                BlobItem(
                    name=blob.name,
                    url=self.get_blob_url(blob.name),
                    size=blob.size,
                    content_type=content_settings.content_type if content_settings else None,
                )
            )

        # The pager's token is only set once the page above has been fetched
        next_token = pages.continuation_token or None
        logger.debug("Listed blob page", count=len(items), has_more=next_token is not None)
        return BlobPage(items=items, continuation_token=next_token)

    def download_blob(self, name: str) -> bytes:
        """
        Download blob content as bytes.

        Args:
            name: Blob name within container

        Returns:
            Blob content as bytes
        """
        blob_client = self.container_client.get_blob_client(name)
        return blob_client.download_blob().readall()

    def download_blob_to_file(self, name: str, destination: Path) -> None:
        """Download a blob into a local file, replacing it if it exists."""
        blob_client = self.container_client.get_blob_client(name)
        with open(destination, "wb") as f:
            blob_client.download_blob().readinto(f)
        logger.info("Blob downloaded", blob=name, destination=str(destination))

    def blob_exists(self, name: str) -> bool:
        """Check if a blob exists."""
        blob_client = self.container_client.get_blob_client(name)
        return blob_client.exists()

    def get_blob_url(self, name: str) -> str:
        """Get the URL for a blob."""
        blob_client = self.container_client.get_blob_client(name)
        return blob_client.url

    def delete_container_if_exists(self) -> bool:
        """
        Delete the container and every blob in it.

        Returns:
            True if deleted, False if it didn't exist
        """
        try:
            self.container_client.delete_container()
        except ResourceNotFoundError:
            logger.info("Container already gone", container=self.container_name)
            return False

        logger.info("Container deleted", container=self.container_name)
        return True


def get_blob_client(container_name: str, settings: Settings | None = None) -> BlobStorageClient:
    """
    Build a blob storage client for a container from application settings.

    Raises:
        ConnectionStringError: If no valid connection string is configured
    """
    settings = settings or get_settings()
    account = parse_connection_string(settings.azure_connection_string_str)
    return BlobStorageClient(account.connection_string, container_name)
