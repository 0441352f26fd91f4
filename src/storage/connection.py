"""
Azure Storage connection string parsing.
"""

import base64
import binascii
from dataclasses import dataclass

# Well-known local emulator (Azurite) account
DEV_ACCOUNT_NAME = "devstoreaccount1"
DEV_ACCOUNT_KEY = (
    "Eby8vdM02xNOcqFlqUwJPLlmEtlCDXJ1OUzFT50uSRZ6IFsuFq2UVErCz4I6tq/K1SZFPTOtr/KBHBeksoGMGw=="
)
DEV_BLOB_PORT = 10000
DEV_PROXY_URI = "http://127.0.0.1"

DEFAULT_PROTOCOL = "https"
DEFAULT_ENDPOINT_SUFFIX = "core.windows.net"

# Canonical spelling keyed by lower-case name
KNOWN_KEYS = {
    key.lower(): key
    for key in (
        "DefaultEndpointsProtocol",
        "AccountName",
        "AccountKey",
        "EndpointSuffix",
        "BlobEndpoint",
        "BlobSecondaryEndpoint",
        "QueueEndpoint",
        "QueueSecondaryEndpoint",
        "TableEndpoint",
        "TableSecondaryEndpoint",
        "FileEndpoint",
        "FileSecondaryEndpoint",
        "SharedAccessSignature",
        "UseDevelopmentStorage",
        "DevelopmentStorageProxyUri",
    )
}


class ConnectionStringError(ValueError):
    """Raised when a storage connection string is blank or malformed."""


@dataclass(frozen=True)
class StorageAccount:
    """A parsed storage connection string."""

    account_name: str | None
    blob_endpoint: str
    connection_string: str
    uses_sas: bool = False
    is_development: bool = False


def _split_pairs(value: str) -> dict[str, str]:
    settings: dict[str, str] = {}
    for segment in value.split(";"):
        segment = segment.strip()
        if not segment:
            continue
        if "=" not in segment:
            raise ConnectionStringError(f"Missing '=' in connection string segment '{segment}'")

        key, val = segment.split("=", 1)
        key = key.strip()
        canonical = KNOWN_KEYS.get(key.lower())
        if canonical is None:
            raise ConnectionStringError(f"Unknown connection string setting '{key}'")
        if canonical in settings:
            raise ConnectionStringError(f"Duplicate connection string setting '{canonical}'")
        if not val.strip():
            raise ConnectionStringError(f"Empty value for connection string setting '{canonical}'")

        settings[canonical] = val.strip()
    return settings


def _build_connection_string(**settings: str | None) -> str:
    """Join canonical settings into the form BlobServiceClient.from_connection_string reads."""
    return ";".join(f"{key}={value}" for key, value in settings.items() if value is not None)


def _development_account(settings: dict[str, str]) -> StorageAccount:
    if settings["UseDevelopmentStorage"].lower() != "true":
        raise ConnectionStringError("UseDevelopmentStorage must be 'true' when present")

    extra = set(settings) - {"UseDevelopmentStorage", "DevelopmentStorageProxyUri"}
    if extra:
        raise ConnectionStringError(
            f"Settings not allowed with UseDevelopmentStorage: {', '.join(sorted(extra))}"
        )

    proxy = settings.get("DevelopmentStorageProxyUri", DEV_PROXY_URI).rstrip("/")
    protocol = proxy.split("://", 1)[0] if "://" in proxy else "http"
    blob_endpoint = f"{proxy}:{DEV_BLOB_PORT}/{DEV_ACCOUNT_NAME}"
    connection_string = _build_connection_string(
        DefaultEndpointsProtocol=protocol,
        AccountName=DEV_ACCOUNT_NAME,
        AccountKey=DEV_ACCOUNT_KEY,
        BlobEndpoint=blob_endpoint,
    )
    return StorageAccount(
        account_name=DEV_ACCOUNT_NAME,
        blob_endpoint=blob_endpoint,
        connection_string=connection_string,
        is_development=True,
    )


def _validate_account_key(key: str) -> None:
    try:
        base64.b64decode(key, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ConnectionStringError("AccountKey is not valid base64") from e


def parse_connection_string(value: str | None) -> StorageAccount:
    """
    Parse an Azure Storage connection string.

    Accepts the emulator shortcut (UseDevelopmentStorage=true), shared-key
    strings (AccountName + AccountKey) and SAS strings (SharedAccessSignature
    with BlobEndpoint or AccountName).

    Args:
        value: Raw connection string, typically from the environment

    Returns:
        Parsed StorageAccount

    Raises:
        ConnectionStringError: If the string is blank or malformed
    """
    if value is None or not value.strip():
        raise ConnectionStringError("Connection string is blank")

    settings = _split_pairs(value)
    if not settings:
        raise ConnectionStringError("Connection string is blank")

    if "UseDevelopmentStorage" in settings:
        return _development_account(settings)

    protocol = settings.get("DefaultEndpointsProtocol", DEFAULT_PROTOCOL).lower()
    if protocol not in ("http", "https"):
        raise ConnectionStringError(f"Unsupported DefaultEndpointsProtocol '{protocol}'")

    account_name = settings.get("AccountName")
    account_key = settings.get("AccountKey")
    sas = settings.get("SharedAccessSignature")

    if account_key and sas:
        raise ConnectionStringError("AccountKey and SharedAccessSignature are mutually exclusive")
    if account_key:
        if not account_name:
            raise ConnectionStringError("AccountKey requires AccountName")
        _validate_account_key(account_key)
    elif not sas:
        raise ConnectionStringError("Either AccountKey or SharedAccessSignature is required")

    blob_endpoint = settings.get("BlobEndpoint")
    if blob_endpoint is None:
        if not account_name:
            raise ConnectionStringError("BlobEndpoint or AccountName is required")
        suffix = settings.get("EndpointSuffix", DEFAULT_ENDPOINT_SUFFIX)
        blob_endpoint = f"{protocol}://{account_name}.blob.{suffix}"
    elif "://" not in blob_endpoint:
        raise ConnectionStringError(f"BlobEndpoint '{blob_endpoint}' is not an absolute URI")

    blob_endpoint = blob_endpoint.rstrip("/")
    # Always name the blob endpoint so the SDK cannot derive a different one
    connection_string = _build_connection_string(
        DefaultEndpointsProtocol=protocol,
        AccountName=account_name,
        AccountKey=account_key,
        SharedAccessSignature=sas,
        BlobEndpoint=blob_endpoint,
    )

    return StorageAccount(
        account_name=account_name,
        blob_endpoint=blob_endpoint,
        connection_string=connection_string,
        uses_sas=sas is not None,
    )


def try_parse_connection_string(value: str | None) -> StorageAccount | None:
    """Parse a connection string, returning None instead of raising."""
    try:
        return parse_connection_string(value)
    except ConnectionStringError:
        return None
