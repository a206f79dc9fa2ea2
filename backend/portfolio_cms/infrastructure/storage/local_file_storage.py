"""Local filesystem storage for uploaded images.

Storage layout:
    <upload_dir>/<folder>/<epoch_ms>-<random>.<ext>

Files are served read-only under ``public_url`` (mounted by the app), so the
URL handed back to callers is ``<public_url>/<folder>/<name>``.
"""

import logging
import re
import secrets
import time
from pathlib import Path

from portfolio_cms.application.interfaces import FileStorage

logger = logging.getLogger(__name__)


def _sanitise(name: str, max_len: int = 40) -> str:
    """Replace non-word characters with underscores and truncate."""
    return re.sub(r"[^\w\-]", "_", name)[:max_len].strip("_") or "uploads"


def _extension(filename: str) -> str:
    suffix = Path(filename).suffix.lstrip(".").lower()
    return re.sub(r"[^a-z0-9]", "", suffix)[:10] or "bin"


class LocalFileStorage(FileStorage):
    """Infrastructure adapter for local file storage."""

    def __init__(self, upload_dir: str, public_url: str = "/uploads"):
        self._upload_dir = Path(upload_dir).resolve()
        self._upload_dir.mkdir(parents=True, exist_ok=True)
        self._public_url = public_url.rstrip("/")

    @property
    def upload_dir(self) -> Path:
        return self._upload_dir

    async def upload(self, content: bytes, filename: str, folder: str) -> str:
        """Store ``content`` under ``<folder>/`` with a unique name; return its URL."""
        folder = _sanitise(folder)
        name = f"{int(time.time() * 1000)}-{secrets.token_hex(4)}.{_extension(filename)}"

        dest_dir = self._upload_dir / folder
        dest_dir.mkdir(parents=True, exist_ok=True)
        (dest_dir / name).write_bytes(content)

        logger.info("Stored upload: %s/%s (%d bytes)", folder, name, len(content))
        return f"{self._public_url}/{folder}/{name}"

    def path_for(self, url: str) -> Path | None:
        """Map a public URL back to a file under the upload dir, or None."""
        prefix = f"{self._public_url}/"
        if not url or not url.startswith(prefix):
            return None
        candidate = (self._upload_dir / url[len(prefix):]).resolve()
        if not candidate.is_relative_to(self._upload_dir):
            return None
        return candidate

    async def delete(self, url: str) -> bool:
        """Delete a stored file by URL.

        Returns False for URLs outside this storage or files already gone.
        """
        file_path = self.path_for(url)
        if file_path is None or not file_path.is_file():
            return False
        file_path.unlink(missing_ok=True)
        logger.info("Deleted upload: %s", url)
        return True
