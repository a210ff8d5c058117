"""
Geometric Primitives for segment distance queries.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Union, TYPE_CHECKING
import numpy as np
import math

from segmentdistance.config import PARALLEL_TOLERANCE
from segmentdistance.exceptions import ParameterOutOfRangeError

if TYPE_CHECKING:
    import numpy.typing as npt


def sqr(x: float) -> float:
    return x * x


@dataclass(frozen=True)
class Vector:
    """
    A free displacement in 3D space with components (l, m, n).
    """
    l: float
    m: float
    n: float

    @classmethod
    def from_points(cls, p0: Point, p1: Point) -> Vector:
        """Vector pointing from `p0` to `p1`."""
        return cls(p1.x - p0.x, p1.y - p0.y, p1.z - p0.z)

    def __add__(self, other: Vector) -> Vector:
        return Vector(self.l + other.l, self.m + other.m, self.n + other.n)

    def __sub__(self, other: Vector) -> Vector:
        return Vector(self.l - other.l, self.m - other.m, self.n - other.n)

    def __mul__(self, scalar: float) -> Vector:
        return Vector(self.l * scalar, self.m * scalar, self.n * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Vector:
        if scalar == 0.0: raise ZeroDivisionError("Cannot divide a Vector by zero.")
        return Vector(self.l / scalar, self.m / scalar, self.n / scalar)

    def __neg__(self) -> Vector:
        return Vector(-self.l, -self.m, -self.n)

    def dot(self, other: Vector) -> float:
        return self.l * other.l + self.m * other.m + self.n * other.n

    def cross(self, other: Vector) -> Vector:
        return Vector(
            self.m * other.n - self.n * other.m,
            self.n * other.l - self.l * other.n,
            self.l * other.m - self.m * other.l
        )

    def sqrlen(self) -> float:
        return sqr(self.l) + sqr(self.m) + sqr(self.n)

    def norm(self) -> float:
        return math.sqrt(self.sqrlen())

    def unit(self) -> Vector:
        """Unit vector with the same direction. Raises ZeroDivisionError for a zero vector."""
        return self / self.norm()

    def to_array(self) -> npt.NDArray[np.float64]:
        return np.array([self.l, self.m, self.n], dtype=np.float64)


@dataclass(frozen=True)
class Point:
    """A point in 3D space. Immutable, no identity beyond its coordinates."""
    x: float
    y: float
    z: float = 0.0

    def __add__(self, other: Vector) -> Point:
        # Point + Vector = Point (Translation)
        if isinstance(other, Vector):
            return Point(self.x + other.l, self.y + other.m, self.z + other.n)
        return NotImplemented

    def __sub__(self, other: Union[Vector, Point]) -> Union[Vector, Point]:
        # a - b = Vector pointing from b to a
        if isinstance(other, Point):
            return Vector(self.x - other.x, self.y - other.y, self.z - other.z)
        # Point - Vector = Point (Inverse translation)
        if isinstance(other, Vector):
            return Point(self.x - other.l, self.y - other.m, self.z - other.n)
        return NotImplemented

    def distance_to(self, other: Point) -> float:
        return (self - other).norm()

    def to_array(self) -> npt.NDArray[np.float64]:
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    @classmethod
    def from_array(cls, values: npt.ArrayLike) -> Point:
        x, y, z = (float(v) for v in np.asarray(values, dtype=np.float64).reshape(3))
        return cls(x, y, z)


def dot(u: Vector, v: Vector) -> float:
    """Scalar product of two vectors."""
    return u.l * v.l + u.m * v.m + u.n * v.n


def cross(u: Vector, v: Vector) -> Vector:
    """Right-handed cross product."""
    return u.cross(v)


def norm(v: Vector) -> float:
    """Euclidean length of a vector."""
    return math.sqrt(dot(v, v))


@dataclass(frozen=True)
class Segment:
    """
    A directed segment from `begin` to `end`.

    The direction vector (end - begin) is computed once at construction and
    reused by every query. Points on the segment are parametrized as
    p(t) = begin + direction * t with 0 <= t <= 1.
    """
    begin: Point
    end: Point
    direction: Vector = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.begin, Point) or not isinstance(self.end, Point):
            raise TypeError("Segment endpoints must be Point instances.")
        object.__setattr__(self, "direction", self.end - self.begin)

    @classmethod
    def from_point_and_vector(cls, point: Point, vector: Vector) -> Segment:
        return cls(point, point + vector)

    @classmethod
    def from_coordinates(
        cls,
        x0: float, y0: float, z0: float,
        x1: float, y1: float, z1: float,
    ) -> Segment:
        return cls(Point(x0, y0, z0), Point(x1, y1, z1))

    @classmethod
    def from_array(cls, values: npt.ArrayLike) -> Segment:
        """Build a segment from a (2, 3) array of endpoints."""
        arr = np.asarray(values, dtype=np.float64)
        if arr.shape != (2, 3):
            raise ValueError(f"Segment array must have shape (2, 3), got {arr.shape}")
        return cls(Point.from_array(arr[0]), Point.from_array(arr[1]))

    @property
    def length(self) -> float:
        return self.direction.norm()

    @property
    def is_degenerate(self) -> bool:
        """True when both endpoints coincide."""
        return self.direction.sqrlen() == 0.0

    def point(self, t: float) -> Point:
        """
        Point on the segment at parameter `t`.

        Raises:
            ParameterOutOfRangeError: If `t` lies outside [0, 1].
        """
        if not 0.0 <= t <= 1.0:
            raise ParameterOutOfRangeError(t)
        return self.begin + self.direction * t

    def parallel(self, other: Segment, tolerance: float = PARALLEL_TOLERANCE) -> bool:
        """
        True if the cross product of both direction vectors is shorter than `tolerance`.

        The tolerance is linear, not angular: it scales with the lengths of
        the two direction vectors.
        """
        return norm(cross(self.direction, other.direction)) < tolerance

    def reversed(self) -> Segment:
        return Segment(begin=self.end, end=self.begin)

    def to_array(self) -> npt.NDArray[np.float64]:
        return np.array([self.begin.to_array(), self.end.to_array()])
