"""Bounded spatial domain for the cell growth simulation."""

from dataclasses import dataclass

# Minimum distance a cell centre may rest from an x/y boundary
CLAMP_MARGIN = 0.01


@dataclass(frozen=True)
class BoundedDomain:
    """
    Rectangular x/y region cells are kept within.

    z is unbounded here; z_min_init is only the plane founders are seeded on.
    """
    x_min: float
    x_max: float
    y_min: float
    y_max: float
    z_min_init: float = 0.0
    margin: float = CLAMP_MARGIN

    def __post_init__(self) -> None:
        if not self.x_min < self.x_max:
            raise ValueError(f"x_min must be below x_max; got {self.x_min} >= {self.x_max}")
        if not self.y_min < self.y_max:
            raise ValueError(f"y_min must be below y_max; got {self.y_min} >= {self.y_max}")
        if self.margin < 0:
            raise ValueError("margin must be non-negative")
        if 2 * self.margin >= min(self.width, self.height):
            raise ValueError(
                f"margin {self.margin} leaves no room between the x/y bounds "
                f"(width {self.width}, height {self.height})")

    @classmethod
    def from_ranges(cls, x_range: float, y_range: float,
                    cube_dim: float, margin: float = CLAMP_MARGIN) -> "BoundedDomain":
        """Build a domain centred on the origin, seeded at the cube floor."""
        return cls(
            x_min=-x_range / 2,
            x_max=x_range / 2,
            y_min=-y_range / 2,
            y_max=y_range / 2,
            z_min_init=-cube_dim / 2,
            margin=margin,
        )

    @property
    def width(self) -> float:
        return self.x_max - self.x_min

    @property
    def height(self) -> float:
        return self.y_max - self.y_min

    def contains(self, x: float, y: float) -> bool:
        """Check if (x, y) lies strictly inside the margin band."""
        return (self.x_min + self.margin < x < self.x_max - self.margin and
                self.y_min + self.margin < y < self.y_max - self.margin)
