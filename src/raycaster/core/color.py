"""Additive RGB color model.

Colors are unbounded while light contributions are being summed and are
clamped channel-wise to [0, 1] before display conversion. On the device a
color is a ``float32`` 3-vector (``color3``).

Example:
    >>> from raycaster.core.color import Color
    >>> (Color(0.4, 1.0, 0.4) * Color(1.0, 0.5, 0.0)).clamp()
    Color(red=0.4, green=0.5, blue=0.0)
"""


from dataclasses import dataclass

import taichi as ti
import taichi.math as tm

# Device-side color type (single precision)
color3 = ti.types.vector(3, ti.f32)


@dataclass(frozen=True)
class Color:
    """An RGB color with unbounded channels.

    Attributes:
        red: Red channel.
        green: Green channel.
        blue: Blue channel.
    """

    red: float
    green: float
    blue: float

    @staticmethod
    def black() -> "Color":
        return Color(0.0, 0.0, 0.0)

    def clamp(self) -> "Color":
        """Saturate every channel into [0, 1].

        Out-of-range values are truncated, not rescaled.
        """
        return Color(
            min(max(self.red, 0.0), 1.0),
            min(max(self.green, 0.0), 1.0),
            min(max(self.blue, 0.0), 1.0),
        )

    def to_tuple(self) -> tuple[float, float, float]:
        return (self.red, self.green, self.blue)

    def __add__(self, other: "Color") -> "Color":
        return Color(self.red + other.red, self.green + other.green, self.blue + other.blue)

    def __mul__(self, other: "Color | float") -> "Color":
        if isinstance(other, Color):
            return Color(self.red * other.red, self.green * other.green, self.blue * other.blue)
        return Color(self.red * other, self.green * other, self.blue * other)

    __rmul__ = __mul__


@ti.func
def clamp_color(color: color3) -> color3:
    """Clamp each channel of a device color into [0, 1].

    Args:
        color: The accumulated color.

    Returns:
        The saturated color.
    """
    return tm.clamp(color, 0.0, 1.0)
