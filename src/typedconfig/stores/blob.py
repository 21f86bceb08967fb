"""Blob storage configuration store.

Each option is one blob whose content is the option's text. The blob
backend is abstracted behind ``BlobStorage`` so object stores can be
plugged in; ``DirectoryBlobStorage`` keeps blobs as files on disk.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from ..interfaces import ConfigStore


class BlobStorage(ABC):
    """Minimal blob backend used by BlobConfigStore."""

    @abstractmethod
    def read_text(self, key: str) -> Optional[str]:
        """Return the blob content, or None if the blob does not exist."""
        pass

    @abstractmethod
    def write_text(self, key: str, text: str) -> None:
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """Delete the blob. Deleting a missing blob is not an error."""
        pass

    def close(self) -> None:
        pass


class DirectoryBlobStorage(BlobStorage):
    """Blobs stored as UTF-8 files under a root directory."""

    def __init__(self, root: str | Path):
        self.root = Path(root).expanduser().resolve()

    def read_text(self, key: str) -> Optional[str]:
        path = self._path_for(key)
        if not path.is_file():
            return None
        return path.read_text(encoding="utf-8")

    def write_text(self, key: str, text: str) -> None:
        path = self._path_for(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")

    def delete(self, key: str) -> None:
        self._path_for(key).unlink(missing_ok=True)

    def _path_for(self, key: str) -> Path:
        if not key:
            raise ValueError("Blob key cannot be empty")
        path = (self.root / key).resolve()
        if not path.is_relative_to(self.root) or path == self.root:
            raise ValueError(f"Blob key escapes storage root: {key!r}")
        return path


class BlobConfigStore(ConfigStore):
    """Reads and writes options as blobs."""

    def __init__(self, blobs: BlobStorage):
        if blobs is None:
            raise ValueError("blobs cannot be None")
        self._blobs = blobs

    @property
    def name(self) -> str:
        return "Blob Storage"

    @property
    def can_read(self) -> bool:
        return True

    @property
    def can_write(self) -> bool:
        return True

    def read(self, key: str) -> Optional[str]:
        return self._blobs.read_text(key)

    def write(self, key: str, value: Optional[str]) -> None:
        if value is None:
            self._blobs.delete(key)
        else:
            self._blobs.write_text(key, value)

    def close(self) -> None:
        self._blobs.close()
