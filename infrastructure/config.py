from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from domain.value_objects.resolver_config import ResolverConfig
from domain.value_objects.thumb_variant import ThumbSize


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # make it absolute so reload/CWD doesn't break it
        env_file=Path(__file__).resolve().parents[1] / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="Filesys", validation_alias="APP_NAME")
    app_env: Literal["development", "staging", "production"] = Field(
        default="development",
        validation_alias="APP_ENV",
    )
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_dir: Path = Field(
        default=Path(__file__).resolve().parents[1] / "logs",
        validation_alias="LOG_DIR",
    )

    # Storage (fsspec)
    storage_base_url: str = Field(
        default="file://" + str(Path(__file__).resolve().parents[1] / "storage"),
        validation_alias="STORAGE_BASE_URL",
    )
    storage_options: dict = Field(default_factory=dict, validation_alias="STORAGE_OPTIONS")
    storage_public_base_url: str | None = Field(
        default=None,
        validation_alias="STORAGE_PUBLIC_BASE_URL",
        description="Base URL blobs are publicly served from. Only used with public storage.",
    )

    # Sandbox and URLs
    user_folder: str = Field(default="", validation_alias="USER_FOLDER")
    public_storage: bool = Field(default=False, validation_alias="PUBLIC_STORAGE")
    absolute_url: bool = Field(default=False, validation_alias="ABSOLUTE_URL")
    icons_url: str = Field(default="/static/filesys/icons/", validation_alias="ICONS_URL")
    files_url: str = Field(default="/filesys/api/files", validation_alias="FILES_URL")
    folders_url: str = Field(default="/filesys/api/folders", validation_alias="FOLDERS_URL")

    # Mime, icon and thumbnail tables
    filesys_config_file: Path = Field(
        default=Path(__file__).resolve().parent / "filesys.yaml",
        validation_alias="FILESYS_CONFIG_FILE",
    )


def load_tables(path: Path) -> dict[str, Any]:
    """Read the mime/icon/thumbnail tables from a YAML file.

    YAML mappings keep their declaration order, which is the match priority
    of the classification tables.
    """
    with path.open(encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_resolver_config(
    settings: Settings,
    tables: dict[str, Any] | None = None,
) -> ResolverConfig:
    """Build the immutable resolver configuration from settings and tables."""
    if tables is None:
        tables = load_tables(settings.filesys_config_file)

    mime = tables.get("mime", {})
    return ResolverConfig(
        user_folder=settings.user_folder,
        mime_types=mime.get("types", {}),
        mime_media=mime.get("media", {}),
        mime_map=mime.get("map", {}),
        icons_url=settings.icons_url,
        icon_files=tables.get("icons", {}),
        public_storage=settings.public_storage,
        absolute_url=settings.absolute_url,
        files_url=settings.files_url,
        folders_url=settings.folders_url,
    )


def load_thumb_sizes(
    settings: Settings,
    tables: dict[str, Any] | None = None,
) -> dict[str, ThumbSize]:
    """Return the configured thumbnail sizes in declaration order."""
    if tables is None:
        tables = load_tables(settings.filesys_config_file)

    return {
        key: ThumbSize(width=dimensions[0], height=dimensions[1])
        for key, dimensions in tables.get("thumbs", {}).items()
    }


# Global settings instance
settings = Settings()
