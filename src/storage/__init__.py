"""
Azure Blob Storage integration.
"""

from src.storage.blob import BlobStorageClient, get_blob_client
from src.storage.connection import (
    ConnectionStringError,
    StorageAccount,
    parse_connection_string,
    try_parse_connection_string,
)
from src.storage.paths import QuickstartPaths

__all__ = [
    "BlobStorageClient",
    "get_blob_client",
    "ConnectionStringError",
    "StorageAccount",
    "parse_connection_string",
    "try_parse_connection_string",
    "QuickstartPaths",
]
