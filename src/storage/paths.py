"""
Container and local file naming for quickstart runs.
"""

import re
import tempfile
import uuid
from pathlib import Path

# 3-63 chars, lower-case letters, digits and single hyphens
CONTAINER_NAME_PATTERN = re.compile(r"^[a-z0-9](?!.*--)[a-z0-9-]{1,61}[a-z0-9]$")


class QuickstartPaths:
    """
    Standardized names for a quickstart run.

    Layout:
    - container:       {prefix}{uuid4}
    - local file:      {local_dir}/QuickStart_{uuid4}.txt
    - downloaded file: {local_dir}/QuickStart_{uuid4}_DOWNLOADED.txt
    """

    DEFAULT_CONTAINER_PREFIX = "quickstartblobs"
    LOCAL_FILE_PREFIX = "QuickStart_"
    LOCAL_FILE_EXTENSION = ".txt"
    DOWNLOADED_SUFFIX = "_DOWNLOADED"

    @staticmethod
    def is_valid_container_name(name: str) -> bool:
        """Check a name against the Azure container naming rules."""
        return bool(CONTAINER_NAME_PATTERN.match(name))

    @staticmethod
    def container_name(prefix: str = DEFAULT_CONTAINER_PREFIX) -> str:
        """
        Generate a unique container name.

        Args:
            prefix: Leading part of the name (e.g., "quickstartblobs")

        Returns:
            Prefix followed by a lower-case UUID4
        """
        name = f"{prefix}{uuid.uuid4()}".lower()
        if not QuickstartPaths.is_valid_container_name(name):
            raise ValueError(f"Invalid container name: {name}")
        return name

    @staticmethod
    def local_file_name() -> str:
        """Unique name for the local file, also used as the blob name."""
        prefix = QuickstartPaths.LOCAL_FILE_PREFIX
        return f"{prefix}{uuid.uuid4()}{QuickstartPaths.LOCAL_FILE_EXTENSION}"

    @staticmethod
    def downloaded_path(source: Path) -> Path:
        """
        Path for the downloaded copy of a source file.

        Args:
            source: Path like "/home/me/Desktop/QuickStart_abc.txt"

        Returns:
            Path like "/home/me/Desktop/QuickStart_abc_DOWNLOADED.txt"
        """
        return source.with_name(f"{source.stem}{QuickstartPaths.DOWNLOADED_SUFFIX}{source.suffix}")

    @staticmethod
    def default_local_dir() -> Path:
        """The user's Desktop folder, or the system temp directory if there is none."""
        desktop = Path.home() / "Desktop"
        if desktop.is_dir():
            return desktop
        return Path(tempfile.gettempdir())
