"""
In-memory sink - keeps offered files in a dict.
"""
from dataclasses import dataclass
from typing import Dict

from trialsink.ports.storage import PersistenceSink


@dataclass
class SavedFile:
    content: bytes
    mime_type: str


class MemorySink(PersistenceSink):
    """Collects offered files by filename (later saves replace earlier ones)."""

    def __init__(self):
        self.files: Dict[str, SavedFile] = {}

    async def save(self, content: bytes, filename: str, mime_type: str) -> None:
        self.files[filename] = SavedFile(content=content, mime_type=mime_type)
