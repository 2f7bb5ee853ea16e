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
from typing import List, Optional, Tuple

from ..constants import (
    DEFAULT_FOCAL_POINT_RADIUS,
    DEFAULT_RAY_COUNT,
    DEFAULT_RAY_LENGTH,
    FALLBACK_RAY_LENGTH,
    FOCAL_POINT_VERTEX_COUNT,
    MAX_RAY_COUNT,
    MIN_RAY_COUNT,
)
from ..geometry import Point, geometry
from .base_shape import BaseShape, ShapeKind


class FocalPoint(BaseShape):
    """
    Point light source emitting rays evenly around a full circle.

    Ray i leaves at angle i * 2*pi / ray_count + rotation. With
    emit_from_surface the rays start on the source's rim (position +
    radius * direction), otherwise they all start at the centre.

    Attributes:
        ray_count (int): Number of rays, clamped to [1, 360]
        ray_length (float): Total distance each ray may travel across all bounces
        emit_from_surface (bool): Whether rays start on the rim
        radius (float): Radius of the emitting disc
    """

    kind = ShapeKind.FOCAL_POINT
    is_light_source = True
    dimension_fields = ('ray_count', 'ray_length', 'emit_from_surface', 'radius')

    def __init__(
        self,
        x: float = 0.0,
        y: float = 0.0,
        ray_count: int = DEFAULT_RAY_COUNT,
        ray_length: float = DEFAULT_RAY_LENGTH,
        emit_from_surface: bool = False,
        radius: float = DEFAULT_FOCAL_POINT_RADIUS,
        rotation: float = 0.0,
        id: Optional[str] = None
    ):
        super().__init__(x, y, rotation, None, id)
        self.ray_count = ray_count
        self.ray_length = ray_length
        self.emit_from_surface = bool(emit_from_surface)
        self.radius = radius

    @property
    def ray_count(self) -> int:
        return self._ray_count

    @ray_count.setter
    def ray_count(self, value: int) -> None:
        count = int(math.floor(value))
        clamped = max(MIN_RAY_COUNT, min(MAX_RAY_COUNT, count))
        if clamped != value:
            self.warning = f"ray_count {value} clamped to {clamped}"
        self._ray_count = clamped

    @property
    def ray_length(self) -> float:
        return self._ray_length

    @ray_length.setter
    def ray_length(self, value: float) -> None:
        value = float(value)
        if value <= 0:
            self.warning = f"ray_length must be positive, got {value}; using {FALLBACK_RAY_LENGTH}"
            value = FALLBACK_RAY_LENGTH
        self._ray_length = value

    @property
    def radius(self) -> float:
        return self._radius

    @radius.setter
    def radius(self, value: float) -> None:
        self._radius = self._positive('radius', value)

    def get_ray_directions(self) -> List[Point]:
        step = 2 * math.pi / self._ray_count
        return [geometry.unit_from_angle(i * step + self.rotation)
                for i in range(self._ray_count)]

    def get_ray_origins_and_directions(self) -> List[Tuple[Point, Point]]:
        """One (origin, direction) pair per emitted ray."""
        pairs = []
        for direction in self.get_ray_directions():
            if self.emit_from_surface:
                origin = geometry.add(self.position, geometry.scale(direction, self._radius))
            else:
                origin = self.position.copy()
            pairs.append((origin, direction))
        return pairs

    def get_local_vertices(self) -> List[Point]:
        step = 2 * math.pi / FOCAL_POINT_VERTEX_COUNT
        return [Point(self._radius * math.cos(i * step), self._radius * math.sin(i * step))
                for i in range(FOCAL_POINT_VERTEX_COUNT)]

    def contains_local(self, local: Point) -> bool:
        return local.x * local.x + local.y * local.y <= self._radius * self._radius
