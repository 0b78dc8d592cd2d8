from pydantic import BaseModel, Field, field_validator

OrderedTable = tuple[tuple[str, tuple[str, ...]], ...]


class ResolverConfig(BaseModel):
    """Read-only configuration consumed by blob resolution.

    Classification tables are ordered ``(key, values)`` pairs: the first
    matching key wins, so declaration order is part of the configuration.
    Loaded once per process and never mutated during resolution.
    """

    user_folder: str = ""
    """Sandbox root every resolved path is confined to. May be empty."""

    mime_types: OrderedTable = ()
    """Icon key -> regex patterns matched against a blob's mime type."""

    mime_media: OrderedTable = ()
    """Media category -> icon keys (or concrete mime strings) it covers."""

    mime_map: dict[str, str] = Field(default_factory=dict)
    """Lower-case file extension -> mime type, used to guess unknown mimes."""

    icons_url: str = ""
    icon_files: dict[str, str] = Field(default_factory=dict)
    """Icon key (mime key, ``dir`` or ``img``) -> icon file name."""

    public_storage: bool = False
    absolute_url: bool = False

    files_url: str = "/filesys/api/files"
    folders_url: str = "/filesys/api/folders"

    model_config = {"frozen": True}

    @field_validator("mime_types", "mime_media", mode="before")
    @classmethod
    def coerce_ordered_table(cls, v: object) -> object:
        """Accept a mapping and keep its insertion order as match priority."""
        if isinstance(v, dict):
            return tuple((key, tuple(values)) for key, values in v.items())
        return v

    def icon_url(self, key: str) -> str | None:
        """Return the full icon URL for ``key`` or None if it is not configured."""
        icon = self.icon_files.get(key)
        if icon is None:
            return None
        return f"{self.icons_url}{icon}"
