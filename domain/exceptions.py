"""Domain exceptions for blob resolution failures."""


class DomainError(Exception):
    """Base exception for domain layer."""


class BlobNotFoundError(DomainError):
    """Raised when a blob path does not exist in the storage backend."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Blob not found: {path!r}")


class ConfigurationError(DomainError):
    """Raised when an icon or mime lookup has no configured entry."""

    def __init__(self, key: str, table: str = "icon_files") -> None:
        self.key = key
        self.table = table
        super().__init__(f"Configuration is missing `{key}` file type in `{table}`")


class InfrastructureError(DomainError):
    """Raised when infrastructure operations fail (storage, network, etc.)."""


class UrlNotSupportedError(InfrastructureError):
    """Raised when a storage backend cannot produce a native URL for a path."""
