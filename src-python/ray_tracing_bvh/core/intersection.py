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
from dataclasses import dataclass
from typing import Iterable, Optional, TYPE_CHECKING

from .geometry import Point

if TYPE_CHECKING:
    from .scene_objs.base_shape import BaseShape


@dataclass(frozen=True)
class Intersection:
    """
    Result of any ray/shape test.

    A miss always has distance = +inf and no point, normal or shape, so
    that `closest()` can use the miss as its starting value.

    Attributes:
        hit: Whether the ray struck the shape
        distance: Distance from the ray origin to the hit point
        point: Hit point in world coordinates
        normal: Unit surface normal at the hit, facing the incoming ray
        shape: The shape that was hit
    """
    hit: bool
    distance: float = math.inf
    point: Optional[Point] = None
    normal: Optional[Point] = None
    shape: Optional['BaseShape'] = None

    @classmethod
    def make_hit(cls, distance: float, point: Point, normal: Point, shape: 'BaseShape') -> 'Intersection':
        return cls(hit=True, distance=distance, point=point, normal=normal, shape=shape)

    @property
    def is_target(self) -> bool:
        """True if the hit shape is a target."""
        return self.hit and self.shape is not None and self.shape.is_target

    def is_closer_than(self, other: 'Intersection') -> bool:
        """
        Strict ordering used by every reduction: a hit beats a miss, and
        among hits the smaller distance wins. Ties keep the earlier value.
        """
        if not self.hit:
            return False
        if not other.hit:
            return True
        return self.distance < other.distance

    def __repr__(self) -> str:
        if not self.hit:
            return "Intersection(miss)"
        shape_id = self.shape.id if self.shape is not None else None
        return (f"Intersection(distance={self.distance:.4f}, "
                f"point=({self.point.x:.3f}, {self.point.y:.3f}), shape={shape_id})")


NO_HIT = Intersection(hit=False)


def closer(a: Intersection, b: Intersection) -> Intersection:
    """Return the closer of two intersections, preferring `a` on ties."""
    return b if b.is_closer_than(a) else a


def closest(intersections: Iterable[Intersection]) -> Intersection:
    """
    Reduce any number of intersections to the closest hit.

    Returns NO_HIT for an empty iterable or when nothing hit.
    """
    best = NO_HIT
    for candidate in intersections:
        if candidate.is_closer_than(best):
            best = candidate
    return best
