"""
Shared primitive data types for the arcade engine.

Pointer positions come from the input sources; colors are carried by every
render primitive.
"""

from typing import Tuple

from pydantic import BaseModel, ConfigDict, computed_field, field_validator


class Point2D(BaseModel):
    """Immutable screen position in pixels, origin top-left.

    Examples:
        >>> Point2D(x=120.0, y=48.0)
    """
    model_config = ConfigDict(frozen=True)

    x: float
    y: float

    def __str__(self) -> str:
        return f"({self.x:.1f}, {self.y:.1f})"


class Color(BaseModel):
    """Immutable RGBA color. Channels are 0-255 and alpha defaults to opaque.

    Examples:
        >>> Color(r=0, g=0, b=0, a=178).as_tuple
        (0, 0, 0, 178)
    """
    model_config = ConfigDict(frozen=True)

    r: int
    g: int
    b: int
    a: int = 255

    @field_validator('r', 'g', 'b', 'a')
    @classmethod
    def check_channel(cls, v: int) -> int:
        if v < 0 or v > 255:
            raise ValueError(f'color channel out of range 0-255: {v}')
        return v

    @classmethod
    def from_hex(cls, value: str, alpha: int = 255) -> 'Color':
        """Build a color from '#RRGGBB' (the '#' may be left off).

        Raises:
            ValueError: If the value is not six hex digits
        """
        digits = value.lstrip('#')
        if len(digits) != 6:
            raise ValueError(f'expected #RRGGBB, got {value!r}')
        r, g, b = (int(digits[i:i + 2], 16) for i in (0, 2, 4))
        return cls(r=r, g=g, b=b, a=alpha)

    def with_alpha(self, alpha: int) -> 'Color':
        """Copy of this color with another alpha."""
        return self.model_copy(update={'a': alpha})

    @computed_field
    @property
    def as_tuple(self) -> Tuple[int, int, int, int]:
        """RGBA tuple as pygame expects it."""
        return (self.r, self.g, self.b, self.a)

    @computed_field
    @property
    def as_rgb_tuple(self) -> Tuple[int, int, int]:
        return (self.r, self.g, self.b)


class Rectangle(BaseModel):
    """Immutable axis-aligned box, top-left origin.

    Has the ``x``/``y``/``width``/``height`` fields ``aabb_overlap`` reads.
    """
    model_config = ConfigDict(frozen=True)

    x: float
    y: float
    width: float
    height: float

    @field_validator('width', 'height')
    @classmethod
    def check_size(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f'rectangle size must be positive: {v}')
        return v
