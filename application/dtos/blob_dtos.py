from pydantic import BaseModel, Field

from domain.value_objects.blob_type import BlobType
from domain.value_objects.media_category import MediaCategory


class BlobResponse(BaseModel):
    path: str = Field(..., description="Blob path with the sandbox root stripped")
    dir: str = Field("", description="Parent directory with the sandbox root stripped")
    type: BlobType
    name: str
    full_name: str
    extension: str | None = None
    mime_type: str
    media_type: MediaCategory
    size: int = 0
    last_modified: int = 0
    url: str | None = None
    thumb_url: str
    xs_thumb_url: str
    is_system: bool = Field(
        default=False,
        description="True for generated entries that are not real storage objects",
    )


class ListFolderContentRequest(BaseModel):
    path: str = ""
    media_type: MediaCategory | None = Field(
        None,
        description="Only return blobs of this media type (directories are always kept)",
    )
