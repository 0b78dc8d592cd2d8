from pydantic import BaseModel, field_validator


class ThumbSize(BaseModel):
    """Declared pixel dimensions of a thumbnail size key."""

    width: int
    height: int

    model_config = {"frozen": True}

    @field_validator("width", "height")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Ensure dimensions are positive."""
        if v <= 0:
            msg = "Thumbnail dimensions must be positive"
            raise ValueError(msg)
        return v


class ThumbVariant(BaseModel):
    """A named thumbnail size of an image blob and the URL it is served from.

    Width and height are declared by configuration, not measured from the
    generated image.
    """

    size_key: str
    width: int
    height: int
    url: str

    model_config = {"frozen": True}
