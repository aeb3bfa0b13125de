"""
Directory sink - "downloads" files into a local folder.

Writes go to a hidden staging file in the target directory first and are
renamed into place, so a partially written file is never visible under the
final name. The staging file is removed if anything fails.
"""
import asyncio
import logging
import os
import tempfile
from pathlib import Path
from typing import Union

from trialsink.ports.storage import PersistenceSink

logger = logging.getLogger(__name__)


class DirectorySink(PersistenceSink):
    """Saves offered files into a directory."""

    def __init__(self, directory: Union[str, Path]):
        """
        Initialize sink.

        Args:
            directory: Target directory (created on first save)
        """
        self.directory = Path(directory)

    async def save(self, content: bytes, filename: str, mime_type: str) -> None:
        """Write content to directory/filename."""
        if not filename or Path(filename).name != filename:
            raise ValueError(f"Filename must not contain a directory component: {filename!r}")

        path = await asyncio.to_thread(self._write, content, filename)
        logger.info(f"Saved {len(content)} bytes ({mime_type}) to {path}")

    def _write(self, content: bytes, filename: str) -> Path:
        self.directory.mkdir(parents=True, exist_ok=True)
        target = self.directory / filename

        fd, staging = tempfile.mkstemp(dir=self.directory, prefix=f".{filename}.", suffix=".part")
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(content)
            os.replace(staging, target)
        except Exception:
            if os.path.exists(staging):
                os.unlink(staging)
            raise

        return target
