"""
Local Document Storage

Writes uploaded documents under the uploads directory and returns the URL
path they are served from. One file per (applicant, slot); uploading again
overwrites the previous file.
"""

import asyncio
import logging
from pathlib import Path, PurePosixPath

from jobportal.core.config import settings

logger = logging.getLogger(__name__)

# Sub-folders created for every applicant at signup
APPLICANT_SUBDIRS = ("qualifications", "experiences")


class StorageError(OSError):
    """A document could not be written."""


class LocalStorage:
    """Filesystem-backed blob storage."""

    def __init__(self, root: Path, url_prefix: str):
        self.root = root
        self.url_prefix = url_prefix.rstrip("/")

    def _resolve(self, ref: str) -> Path:
        relative = PurePosixPath(ref)
        if relative.is_absolute() or ".." in relative.parts:
            raise ValueError(f"Invalid storage reference: {ref}")
        return self.root.joinpath(*relative.parts)

    def locator(self, ref: str) -> str:
        """URL path a stored reference is served from."""
        return f"{self.url_prefix}/{PurePosixPath(ref)}"

    def _write(self, ref: str, data: bytes) -> None:
        path = self._resolve(ref)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)

    async def store(self, ref: str, data: bytes) -> str:
        """
        Write data at ref (a relative POSIX path) and return its locator.

        Raises:
            StorageError: The file could not be written
        """
        try:
            await asyncio.to_thread(self._write, ref, data)
        except OSError as e:
            logger.error(f"Failed to store {ref}: {e}")
            raise StorageError(str(e)) from e

        logger.info(f"Stored {ref} ({len(data)} bytes)")
        return self.locator(ref)

    async def ensure_applicant_folders(self, applicant_key: str) -> Path:
        """Create the per-applicant folder tree. Safe to call repeatedly."""
        base = self._resolve(applicant_key)

        def _mkdirs() -> None:
            for sub in APPLICANT_SUBDIRS:
                (base / sub).mkdir(parents=True, exist_ok=True)

        try:
            await asyncio.to_thread(_mkdirs)
        except OSError as e:
            raise StorageError(str(e)) from e
        return base


def get_storage() -> LocalStorage:
    """FastAPI dependency returning storage rooted at the configured directory."""
    return LocalStorage(settings.uploads_dir, settings.uploads_url_prefix)
