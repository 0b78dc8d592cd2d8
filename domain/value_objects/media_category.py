from enum import Enum


class MediaCategory(str, Enum):
    """Coarse content classification of a blob, derived from its mime type."""

    FILE = "file"
    DIR = "dir"
    IMAGE = "image"
    MEDIA = "media"
    DOCUMENT = "document"
