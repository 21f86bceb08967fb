"""Configuration store implementations.

Every store implements ``ConfigStore``: text values addressed by
canonical option name, ``None`` meaning not found (on read) or delete
(on write).
"""

from .memory import InMemoryConfigStore
from .environment import EnvironmentConfigStore
from .file import FileConfigStore
from .blob import BlobConfigStore, BlobStorage, DirectoryBlobStorage
from .http import HttpConfigStore

__all__ = [
    "InMemoryConfigStore",
    "EnvironmentConfigStore",
    "FileConfigStore",
    "BlobConfigStore",
    "BlobStorage",
    "DirectoryBlobStorage",
    "HttpConfigStore",
]
