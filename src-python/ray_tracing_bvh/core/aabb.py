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
from typing import Dict, Iterable, Tuple, TYPE_CHECKING

from .geometry import Point

if TYPE_CHECKING:
    from .ray import Ray


class AABB:
    """
    Axis-aligned bounding box in world coordinates.

    Attributes:
        min_x, min_y: Lower-left corner
        max_x, max_y: Upper-right corner
    """

    __slots__ = ('min_x', 'min_y', 'max_x', 'max_y')

    def __init__(self, min_x: float, min_y: float, max_x: float, max_y: float):
        self.min_x = float(min_x)
        self.min_y = float(min_y)
        self.max_x = float(max_x)
        self.max_y = float(max_y)

    @classmethod
    def empty(cls) -> 'AABB':
        """A box that contains nothing; the identity for `union`."""
        return cls(math.inf, math.inf, -math.inf, -math.inf)

    @classmethod
    def from_points(cls, points: Iterable[Point]) -> 'AABB':
        box = cls.empty()
        for p in points:
            box.expand_to_point(p)
        return box

    @classmethod
    def from_center(cls, center: Point, half_width: float, half_height: float) -> 'AABB':
        return cls(center.x - half_width, center.y - half_height,
                   center.x + half_width, center.y + half_height)

    @classmethod
    def union_all(cls, boxes: Iterable['AABB']) -> 'AABB':
        box = cls.empty()
        for other in boxes:
            box.expand_to_box(other)
        return box

    def expand_to_point(self, p: Point) -> None:
        self.min_x = min(self.min_x, p.x)
        self.min_y = min(self.min_y, p.y)
        self.max_x = max(self.max_x, p.x)
        self.max_y = max(self.max_y, p.y)

    def expand_to_box(self, other: 'AABB') -> None:
        self.min_x = min(self.min_x, other.min_x)
        self.min_y = min(self.min_y, other.min_y)
        self.max_x = max(self.max_x, other.max_x)
        self.max_y = max(self.max_y, other.max_y)

    def union(self, other: 'AABB') -> 'AABB':
        """Return the smallest box containing both boxes."""
        return AABB(
            min(self.min_x, other.min_x),
            min(self.min_y, other.min_y),
            max(self.max_x, other.max_x),
            max(self.max_y, other.max_y)
        )

    @property
    def is_empty(self) -> bool:
        return self.min_x > self.max_x or self.min_y > self.max_y

    @property
    def width(self) -> float:
        return max(0.0, self.max_x - self.min_x)

    @property
    def height(self) -> float:
        return max(0.0, self.max_y - self.min_y)

    def surface_area(self) -> float:
        """
        Area of the box, the cost measure of the surface-area heuristic.

        In 2D the "surface area" is width * height. An empty box has area 0.
        """
        if self.is_empty:
            return 0.0
        return self.width * self.height

    def centroid(self) -> Point:
        return Point((self.min_x + self.max_x) * 0.5, (self.min_y + self.max_y) * 0.5)

    def contains_point(self, x: float, y: float, tolerance: float = 0.0) -> bool:
        return (self.min_x - tolerance <= x <= self.max_x + tolerance and
                self.min_y - tolerance <= y <= self.max_y + tolerance)

    def contains_box(self, other: 'AABB', tolerance: float = 0.0) -> bool:
        return (self.min_x - tolerance <= other.min_x and
                self.min_y - tolerance <= other.min_y and
                other.max_x <= self.max_x + tolerance and
                other.max_y <= self.max_y + tolerance)

    def intersects_ray(self, ray: 'Ray') -> bool:
        """
        Slab test.

        Intersects the ray's parameter interval with the slab of each
        axis. A ray with a zero direction component must start inside
        that axis's slab, otherwise it can never enter the box.

        Returns:
            True if some part of the ray at t >= 0 may lie in the box.
        """
        t_min = -math.inf
        t_max = math.inf

        for origin, direction, lo, hi in (
            (ray.origin.x, ray.direction.x, self.min_x, self.max_x),
            (ray.origin.y, ray.direction.y, self.min_y, self.max_y),
        ):
            if direction == 0:
                if origin < lo or origin > hi:
                    return False
                continue
            t1 = (lo - origin) / direction
            t2 = (hi - origin) / direction
            if t1 > t2:
                t1, t2 = t2, t1
            t_min = max(t_min, t1)
            t_max = min(t_max, t2)

        return t_max >= t_min and t_max >= 0

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return (self.min_x, self.min_y, self.max_x, self.max_y)

    def to_dict(self) -> Dict[str, float]:
        return {'min_x': self.min_x, 'min_y': self.min_y,
                'max_x': self.max_x, 'max_y': self.max_y}

    def __eq__(self, other) -> bool:
        if not isinstance(other, AABB):
            return NotImplemented
        return self.as_tuple() == other.as_tuple()

    __hash__ = None

    def __repr__(self) -> str:
        return (f"AABB(min=({self.min_x:.3f}, {self.min_y:.3f}), "
                f"max=({self.max_x:.3f}, {self.max_y:.3f}))")
