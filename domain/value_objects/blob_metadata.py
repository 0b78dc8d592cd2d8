from typing import Any

from pydantic import BaseModel, model_validator

from domain.value_objects.blob_type import BlobType

DIR_MIME_TYPE = "dir"


class BlobMetadata(BaseModel):
    """Structural metadata of a single file or directory.

    Built once per resolution request, either from direct backend queries or
    from a pre-fetched listing entry. Directories never carry an extension,
    always have zero size and the ``dir`` pseudo mime type.
    """

    type: BlobType
    """Whether the blob is a file or a directory."""

    path: str
    """Normalized (sandboxed) path of the blob."""

    name: str
    """Base name without extension for files, full segment for directories."""

    dir: str
    """Normalized path of the containing directory (empty at top level)."""

    extension: str | None = None
    """Lower-cased file extension without the dot."""

    mime_type: str = DIR_MIME_TYPE
    size: int = 0
    last_modified: int = 0
    """Unix timestamp in seconds."""

    exists: bool = True

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_dir_invariant(self) -> "BlobMetadata":
        """Ensure directories have no extension, no size and the ``dir`` mime."""
        if self.type == BlobType.DIR and (
            self.extension is not None or self.size != 0 or self.mime_type != DIR_MIME_TYPE
        ):
            msg = "directory metadata must have no extension, zero size and mime 'dir'"
            raise ValueError(msg)
        if self.size < 0:
            msg = "size must be non-negative"
            raise ValueError(msg)
        return self

    @property
    def is_file(self) -> bool:
        return self.type == BlobType.FILE

    @property
    def is_dir(self) -> bool:
        return self.type == BlobType.DIR

    @property
    def is_image(self) -> bool:
        """Check if the blob is an existing file with an ``image/*`` mime."""
        return self.exists and self.is_file and self.mime_type.startswith("image/")

    @property
    def full_name(self) -> str:
        """Name including the extension for files, bare name for directories."""
        if self.is_file and self.extension:
            return f"{self.name}.{self.extension}"
        return self.name

    def debug_info(self) -> dict[str, Any]:
        """Return every field together with the derived flags, for diagnostics."""
        return {
            **self.model_dump(mode="json"),
            "is_file": self.is_file,
            "is_image": self.is_image,
            "full_name": self.full_name,
        }
