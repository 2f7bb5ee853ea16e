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
from typing import List, Optional

from ..aabb import AABB
from ..constants import ELLIPSE_VERTEX_COUNT
from ..geometry import Point
from .base_shape import BaseShape, ShapeKind
from .material import Material


class Ellipse(BaseShape):
    """
    Ellipse with semi-axes rx (local x) and ry (local y).

    Ray hits are solved analytically, so the bounding box is computed from
    the exact curve rather than from the polygon approximation.
    """

    kind = ShapeKind.ELLIPSE
    dimension_fields = ('rx', 'ry')

    def __init__(
        self,
        x: float = 0.0,
        y: float = 0.0,
        rx: float = 60.0,
        ry: float = 40.0,
        rotation: float = 0.0,
        material: Optional[Material] = None,
        id: Optional[str] = None,
        vertex_count: int = ELLIPSE_VERTEX_COUNT
    ):
        super().__init__(x, y, rotation, material, id)
        self.rx = rx
        self.ry = ry
        self.vertex_count = max(3, int(vertex_count))

    @property
    def rx(self) -> float:
        return self._rx

    @rx.setter
    def rx(self, value: float) -> None:
        self._rx = self._positive('rx', value)

    @property
    def ry(self) -> float:
        return self._ry

    @ry.setter
    def ry(self, value: float) -> None:
        self._ry = self._positive('ry', value)

    def get_local_vertices(self) -> List[Point]:
        step = 2 * math.pi / self.vertex_count
        return [Point(self._rx * math.cos(i * step), self._ry * math.sin(i * step))
                for i in range(self.vertex_count)]

    def get_bounding_box(self) -> AABB:
        c = math.cos(self.rotation)
        s = math.sin(self.rotation)
        half_w = math.sqrt((self._rx * c) ** 2 + (self._ry * s) ** 2)
        half_h = math.sqrt((self._rx * s) ** 2 + (self._ry * c) ** 2)
        return AABB.from_center(self.position, half_w, half_h)

    def contains_local(self, local: Point) -> bool:
        return (local.x / self._rx) ** 2 + (local.y / self._ry) ** 2 <= 1.0


class Circle(Ellipse):
    """Ellipse with equal semi-axes."""

    kind = ShapeKind.CIRCLE
    dimension_fields = ('radius',)

    def __init__(
        self,
        x: float = 0.0,
        y: float = 0.0,
        radius: float = 50.0,
        rotation: float = 0.0,
        material: Optional[Material] = None,
        id: Optional[str] = None,
        vertex_count: int = ELLIPSE_VERTEX_COUNT
    ):
        super().__init__(x, y, radius, radius, rotation, material, id, vertex_count)

    @property
    def radius(self) -> float:
        return self._rx

    @radius.setter
    def radius(self, value: float) -> None:
        radius = self._positive('radius', value)
        self._rx = radius
        self._ry = radius
