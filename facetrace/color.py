"""
24-bit RGB colors.

Channels are integers in [0, 255]; scaling truncates and clamps, so
every color the renderer produces is ready for output.
"""

from __future__ import annotations
from dataclasses import dataclass


def _clamp(value: int) -> int:
    return max(0, min(255, value))


@dataclass(frozen=True)
class Color:
    red: int = 0
    green: int = 0
    blue: int = 0

    def __post_init__(self):
        for name in ('red', 'green', 'blue'):
            value = getattr(self, name)
            if not 0 <= value <= 255:
                raise ValueError(f"{name} channel out of range: {value}")

    def __mul__(self, factor: float) -> Color:
        return Color(
            _clamp(int(self.red * factor)),
            _clamp(int(self.green * factor)),
            _clamp(int(self.blue * factor)),
        )

    __rmul__ = __mul__

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.red, self.green, self.blue)


WHITE = Color(255, 255, 255)
BLACK = Color(0, 0, 0)
BLUE = Color(0, 0, 255)
