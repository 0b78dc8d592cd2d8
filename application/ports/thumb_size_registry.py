from typing import Protocol

from domain.value_objects.thumb_variant import ThumbSize


class ThumbSizeRegistry(Protocol):
    """Port exposing the configured thumbnail sizes.

    Iteration order of ``sizes()`` is stable and follows the configuration.
    """

    def sizes(self) -> dict[str, ThumbSize]:
        """Return the size key to declared dimensions mapping."""
        ...

    def keys(self) -> tuple[str, ...]:
        """Return the configured size keys in order."""
        ...
