"""
Shared fixtures: an in-memory stand-in for BlobStorageClient.
"""

import logging
from pathlib import Path

import pytest
import structlog

from src.config import Settings
from src.models import BlobItem, BlobPage

ACCOUNT_KEY = "a2V5"  # base64 for "key"
CONNECTION_STRING = (
    "DefaultEndpointsProtocol=https;AccountName=testaccount;"
    f"AccountKey={ACCOUNT_KEY};EndpointSuffix=core.windows.net"
)


class FakeStorageAccount:
    """Containers and blobs held in memory, plus a log of calls made."""

    def __init__(self, page_size: int = 2, extra_blobs: int = 0):
        self.containers: dict[str, dict[str, bytes]] = {}
        self.access: dict[str, str] = {}
        self.calls: list[str] = []
        self.page_size = page_size
        self.extra_blobs = extra_blobs

    def client(self, connection_string: str, container_name: str) -> "FakeBlobStorageClient":
        self.calls.append("connect")
        return FakeBlobStorageClient(self, container_name)


class FakeBlobStorageClient:
    def __init__(self, account: FakeStorageAccount, container_name: str):
        self.account = account
        self.container_name = container_name

    @property
    def blobs(self) -> dict[str, bytes]:
        return self.account.containers[self.container_name]

    def get_blob_url(self, name: str) -> str:
        return f"https://testaccount.blob.core.windows.net/{self.container_name}/{name}"

    def create_container(self) -> None:
        self.account.calls.append("create_container")
        if self.container_name in self.account.containers:
            raise RuntimeError("ContainerAlreadyExists")
        self.account.containers[self.container_name] = {}
        for i in range(self.account.extra_blobs):
            self.blobs[f"extra_{i}.txt"] = b"extra"

    def container_exists(self) -> bool:
        return self.container_name in self.account.containers

    def set_public_access(self, level: str) -> None:
        self.account.calls.append("set_public_access")
        self.account.access[self.container_name] = level

    def upload_file(self, path: Path, blob_name: str | None = None, overwrite: bool = False) -> str:
        self.account.calls.append("upload_file")
        name = blob_name or path.name
        self.blobs[name] = path.read_bytes()
        return self.get_blob_url(name)

    def list_blobs_page(
        self,
        continuation_token: str | None = None,
        page_size: int | None = None,
        prefix: str | None = None,
    ) -> BlobPage:
        self.account.calls.append("list_blobs_page")
        size = page_size or self.account.page_size
        names = sorted(self.blobs)
        start = int(continuation_token) if continuation_token else 0
        end = start + size
        items = [BlobItem(name=n, url=self.get_blob_url(n)) for n in names[start:end]]
        return BlobPage(items=items, continuation_token=str(end) if end < len(names) else None)

    def download_blob_to_file(self, name: str, destination: Path) -> None:
        self.account.calls.append("download_blob_to_file")
        destination.write_bytes(self.blobs[name])

    def delete_container_if_exists(self) -> bool:
        self.account.calls.append("delete_container_if_exists")
        return self.account.containers.pop(self.container_name, None) is not None


@pytest.fixture
def fake_account() -> FakeStorageAccount:
    return FakeStorageAccount()


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings isolated from the developer's environment and .env files."""
    return Settings(
        _env_file=None,
        azure_storage_connection_string=CONNECTION_STRING,
        quickstart_local_dir=tmp_path,
    )


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo configure_logging so later tests don't write to a closed capture stream."""
    root = logging.getLogger()
    level = root.level
    yield
    structlog.reset_defaults()
    root.setLevel(level)
