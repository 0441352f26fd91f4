"""
Blob Storage quickstart routine.

Runs the fixed sequence of storage calls:
- Resolve the connection string
- Create a uniquely named container and set its public access
- Write a local file and upload it as a blob
- List the container's blobs page by page
- Download the blob next to the source file
- Delete the container and both local files
"""

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

import click
import structlog

from src.config import Settings, get_settings
from src.models import QuickstartResult, utc_now
from src.storage import BlobStorageClient, QuickstartPaths, try_parse_connection_string

logger = structlog.get_logger(__name__)

MISSING_CONNECTION_STRING_MESSAGE = (
    "A connection string has not been defined in the system environment variables. "
    "Add an environment variable named 'AZURE_STORAGE_CONNECTION_STRING' with your storage "
    "connection string as a value."
)
CLEANUP_PROMPT = (
    "Press the 'Enter' key to delete the example files, "
    "example container, and exit the application."
)

ClientFactory = Callable[[str, str], BlobStorageClient]


@dataclass
class QuickstartOptions:
    """Per-run options for the quickstart."""

    container_prefix: str = QuickstartPaths.DEFAULT_CONTAINER_PREFIX
    local_dir: Path | None = None
    file_content: str = "Hello, World!"
    public_access: str = "blob"
    page_size: int | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "QuickstartOptions":
        return cls(
            container_prefix=settings.quickstart_container_prefix,
            local_dir=settings.quickstart_local_dir,
            file_content=settings.quickstart_file_content,
            public_access=settings.quickstart_public_access,
            page_size=settings.quickstart_page_size,
        )


class QuickstartRunner:
    """
    Sequential Blob Storage walkthrough.

    Each step completes before the next begins. Only a missing or malformed
    connection string is handled; every other error propagates.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        options: QuickstartOptions | None = None,
        client_factory: ClientFactory | None = None,
        echo: Callable[[str], None] = click.echo,
        confirm_cleanup: Callable[[], None] | None = None,
    ):
        self.settings = settings or get_settings()
        self.options = options or QuickstartOptions.from_settings(self.settings)
        self.client_factory = client_factory or BlobStorageClient
        self.echo = echo
        self.confirm_cleanup = confirm_cleanup

    def run(self) -> QuickstartResult | None:
        """
        Run the quickstart.

        Returns:
            Run summary, or None if the connection string is missing or invalid
        """
        started_at = utc_now()

        # 1. Credential resolution
        account = try_parse_connection_string(self.settings.azure_connection_string_str)
        if account is None:
            logger.warning("Connection string missing or invalid")
            self.echo(MISSING_CONNECTION_STRING_MESSAGE)
            return None
        logger.info(
            "Connection string parsed",
            account=account.account_name,
            blob_endpoint=account.blob_endpoint,
        )

        # 2. Container creation
        container_name = QuickstartPaths.container_name(self.options.container_prefix)
        client = self.client_factory(account.connection_string, container_name)
        client.create_container()

        # 3. Permissions
        client.set_public_access(self.options.public_access)

        # 4. Local file
        local_dir = self.options.local_dir or QuickstartPaths.default_local_dir()
        blob_name = QuickstartPaths.local_file_name()
        source_file = local_dir / blob_name
        source_file.write_text(self.options.file_content, encoding="utf-8")

        self.echo(f"Temp file = {source_file}")
        self.echo(f"Uploading to Blob storage as blob '{blob_name}'")

        # 5. Upload
        blob_url = client.upload_file(source_file, blob_name)

        # 6. Paginated listing
        self.echo("List blobs in container.")
        listed_urls, page_count = self._list_all(client)

        # 7. Download
        downloaded_file = QuickstartPaths.downloaded_path(source_file)
        self.echo(f"Downloading blob to {downloaded_file}")
        client.download_blob_to_file(blob_name, downloaded_file)

        content_matches = downloaded_file.read_bytes() == source_file.read_bytes()
        if not content_matches:
            logger.warning("Downloaded content differs from source", blob=blob_name)

        # 8. Cleanup
        self.echo(CLEANUP_PROMPT)
        if self.confirm_cleanup is not None:
            self.confirm_cleanup()

        self.echo("Deleting the container")
        container_deleted = client.delete_container_if_exists()

        self.echo("Deleting the source, and downloaded files")
        source_file.unlink(missing_ok=True)
        downloaded_file.unlink(missing_ok=True)

        result = QuickstartResult(
            container_name=container_name,
            blob_name=blob_name,
            blob_url=blob_url,
            source_file=source_file,
            downloaded_file=downloaded_file,
            listed_urls=listed_urls,
            page_count=page_count,
            content_matches=content_matches,
            container_deleted=container_deleted,
            started_at=started_at,
            finished_at=utc_now(),
        )
        logger.info(
            "Quickstart complete",
            container=container_name,
            blobs=len(listed_urls),
            pages=page_count,
            duration_ms=result.duration_ms,
        )
        return result

    def _list_all(self, client: BlobStorageClient) -> tuple[list[str], int]:
        """Echo every blob URL, following continuation tokens until None."""
        urls: list[str] = []
        page_count = 0
        token = None

        while True:
            page = client.list_blobs_page(
                continuation_token=token,
                page_size=self.options.page_size,
            )
            page_count += 1
            token = page.continuation_token
            for url in page.urls:
                self.echo(url)
                urls.append(url)
            if token is None:
                break

        return urls, page_count
