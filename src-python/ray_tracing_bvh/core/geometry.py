"""
Copyright 2026 ray-tracing-bvh authors and contributors

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

import math
from typing import Dict, Iterator

from shapely.geometry import Point as ShapelyPoint


class Point:
    """
    A point (or vector) in 2D space.

    The engine passes points around by value: every operation in `Geometry`
    returns a new Point and never mutates its arguments.
    Can be converted to/from Shapely Point objects.
    """
    def __init__(self, x: float, y: float):
        self.x = float(x)
        self.y = float(y)

    def to_shapely(self) -> ShapelyPoint:
        """Convert to Shapely Point."""
        return ShapelyPoint(self.x, self.y)

    @classmethod
    def from_shapely(cls, sp: ShapelyPoint) -> 'Point':
        """Create Point from Shapely Point."""
        return cls(sp.x, sp.y)

    def copy(self) -> 'Point':
        return Point(self.x, self.y)

    def to_dict(self) -> Dict[str, float]:
        """Convert to dictionary representation."""
        return {'x': self.x, 'y': self.y}

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def __eq__(self, other) -> bool:
        if not isinstance(other, Point):
            return NotImplemented
        return self.x == other.x and self.y == other.y

    __hash__ = None

    def __repr__(self) -> str:
        return f"Point(x={self.x}, y={self.y})"


class Geometry:
    """
    Basic vector operations on `Point` objects.

    All methods are static; the module-level `geometry` instance exists so
    call sites read as `geometry.dot(a, b)`.
    """

    @staticmethod
    def point(x: float, y: float) -> Point:
        """Create a point."""
        return Point(x, y)

    @staticmethod
    def dot(p1: Point, p2: Point) -> float:
        """
        Calculate the dot product, where the two points are treated as vectors.

        Args:
            p1: First point (as vector)
            p2: Second point (as vector)

        Returns:
            Dot product
        """
        return p1.x * p2.x + p1.y * p2.y

    @staticmethod
    def cross(p1: Point, p2: Point) -> float:
        """
        Calculate the cross product, where the two points are treated as vectors.

        Returns:
            Cross product (z-component in 2D)
        """
        return p1.x * p2.y - p1.y * p2.x

    @staticmethod
    def add(p1: Point, p2: Point) -> Point:
        return Point(p1.x + p2.x, p1.y + p2.y)

    @staticmethod
    def subtract(p1: Point, p2: Point) -> Point:
        return Point(p1.x - p2.x, p1.y - p2.y)

    @staticmethod
    def scale(p1: Point, factor: float) -> Point:
        return Point(p1.x * factor, p1.y * factor)

    @staticmethod
    def length(p1: Point) -> float:
        """Length of the vector p1."""
        return math.sqrt(p1.x * p1.x + p1.y * p1.y)

    @staticmethod
    def distance(p1: Point, p2: Point) -> float:
        """
        Calculate the distance between two points.

        Args:
            p1: First point
            p2: Second point

        Returns:
            Distance between points
        """
        return math.sqrt(Geometry.distance_squared(p1, p2))

    @staticmethod
    def distance_squared(p1: Point, p2: Point) -> float:
        """
        Calculate the squared distance between two points.

        Args:
            p1: First point
            p2: Second point

        Returns:
            Squared distance between points
        """
        dx = p1.x - p2.x
        dy = p1.y - p2.y
        return dx * dx + dy * dy

    @staticmethod
    def midpoint(p1: Point, p2: Point) -> Point:
        """
        Calculate the midpoint between two points.

        Args:
            p1: First point
            p2: Second point

        Returns:
            Midpoint
        """
        return Point((p1.x + p2.x) * 0.5, (p1.y + p2.y) * 0.5)

    @staticmethod
    def normalize_vec(p1: Point) -> Point:
        """
        Normalize the given point as if it were a vector.

        A zero-length vector normalizes to (0, 0) instead of raising, so a
        degenerate direction simply produces a ray that hits nothing.

        Args:
            p1: Point (as vector)

        Returns:
            Normalized vector
        """
        len_val = Geometry.length(p1)
        if len_val == 0:
            return Point(0.0, 0.0)
        return Point(p1.x / len_val, p1.y / len_val)

    @staticmethod
    def rotate_vec(p1: Point, angle: float) -> Point:
        """
        Rotate the given point as if it were a vector by the given angle in radians.

        Args:
            p1: Point (as vector)
            angle: Rotation angle in radians

        Returns:
            Rotated vector
        """
        cos_a = math.cos(angle)
        sin_a = math.sin(angle)
        return Point(
            p1.x * cos_a - p1.y * sin_a,
            p1.x * sin_a + p1.y * cos_a
        )

    @staticmethod
    def to_local(p1: Point, origin: Point, rotation: float) -> Point:
        """
        Express a world point in the frame of a shape at `origin` rotated by `rotation`.
        """
        return Geometry.rotate_vec(Geometry.subtract(p1, origin), -rotation)

    @staticmethod
    def to_world(p1: Point, origin: Point, rotation: float) -> Point:
        """
        Inverse of `to_local`.
        """
        return Geometry.add(origin, Geometry.rotate_vec(p1, rotation))

    @staticmethod
    def unit_from_angle(angle: float) -> Point:
        """Unit vector pointing at `angle` radians from the +x axis."""
        return Point(math.cos(angle), math.sin(angle))


# Create a singleton instance for convenience
geometry = Geometry()
