"""Value types shared by the clipping core: points, clip rectangles and viewports."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Sequence, Tuple, Union


@dataclass(frozen=True)
class Point:
    """
    Immutable 2D point.

    The same type is used for pixel space and for normalized device
    coordinates; the space is implied by the caller.
    """
    x: float
    y: float

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    @classmethod
    def of(cls, value: Union[Point, Sequence[float]]) -> Point:
        """Coerce a Point or an (x, y) pair into a Point."""
        if isinstance(value, Point):
            return value
        x, y = value
        return cls(float(x), float(y))


# An ordered, cyclic sequence of points. The last point connects back to the first.
Polygon = Tuple[Point, ...]


@dataclass(frozen=True)
class ClipRectangle:
    """
    Axis-aligned clip window.

    Attributes:
        xmin: Left edge
        ymin: Bottom edge
        xmax: Right edge
        ymax: Top edge
    """
    xmin: float
    ymin: float
    xmax: float
    ymax: float

    def __post_init__(self) -> None:
        """Validate the rectangle orientation."""
        if self.xmin > self.xmax:
            raise ValueError(f"xmin must be <= xmax, got {self.xmin} > {self.xmax}.")
        if self.ymin > self.ymax:
            raise ValueError(f"ymin must be <= ymax, got {self.ymin} > {self.ymax}.")

    def __str__(self) -> str:
        return f"({self.xmin:g}, {self.ymin:g})-({self.xmax:g}, {self.ymax:g})"

    @property
    def width(self) -> float:
        return self.xmax - self.xmin

    @property
    def height(self) -> float:
        return self.ymax - self.ymin

    def contains(self, point: Point) -> bool:
        """Return True if the point lies inside or on the rectangle."""
        return self.xmin <= point.x <= self.xmax and self.ymin <= point.y <= self.ymax

    def corners(self) -> Polygon:
        """
        Return the four corners counter-clockwise, starting at (xmin, ymin).

        :return: Polygon of the rectangle outline
        """
        return (
            Point(self.xmin, self.ymin),
            Point(self.xmax, self.ymin),
            Point(self.xmax, self.ymax),
            Point(self.xmin, self.ymax),
        )

    @classmethod
    def from_sequence(cls, values: Union[ClipRectangle, Sequence[float]]) -> ClipRectangle:
        """
        Create a ClipRectangle from (xmin, ymin, xmax, ymax).

        :param values: A ClipRectangle or four scalars.
        :return: ClipRectangle instance
        """
        if isinstance(values, ClipRectangle):
            return values
        if len(values) != 4:
            raise ValueError(f"Clip rectangle needs 4 values, got {len(values)}.")
        xmin, ymin, xmax, ymax = (float(v) for v in values)
        return cls(xmin=xmin, ymin=ymin, xmax=xmax, ymax=ymax)


@dataclass(frozen=True)
class Viewport:
    """Viewport size in pixels. Both dimensions must be strictly positive."""
    width: float
    height: float

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Viewport size must be > 0, got {self.width}x{self.height}."
            )

    def __str__(self) -> str:
        return f"{self.width:g}x{self.height:g}"

    @classmethod
    def of(cls, value: Union[Viewport, Sequence[float]]) -> Viewport:
        """Coerce a Viewport or a (width, height) pair into a Viewport."""
        if isinstance(value, Viewport):
            return value
        width, height = value
        return cls(width=width, height=height)


def as_polygon(points: Iterable[Union[Point, Sequence[float]]]) -> Polygon:
    """Return the points as a Polygon tuple, converting pairs where needed."""
    return tuple(Point.of(p) for p in points)


def polygon_from_flat(values: Sequence[float]) -> Polygon:
    """
    Convert a flat coordinate array (x0, y0, x1, y1, ...) to a Polygon.

    :param values: Even-length sequence of scalars
    :return: Polygon
    """
    if len(values) % 2 != 0:
        raise ValueError(f"Flat polygon must have an even length, got {len(values)}.")
    return tuple(
        Point(float(values[i]), float(values[i + 1]))
        for i in range(0, len(values), 2)
    )


def polygon_to_flat(polygon: Iterable[Point]) -> list[float]:
    """Interleave the polygon's coordinates as (x0, y0, x1, y1, ...)."""
    flat: list[float] = []
    for p in polygon:
        flat.append(p.x)
        flat.append(p.y)
    return flat
