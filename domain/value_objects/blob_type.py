from enum import Enum


class BlobType(str, Enum):
    """Structural kind of a blob in the storage backend."""

    FILE = "file"
    DIR = "dir"
