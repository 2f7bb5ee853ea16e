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

from typing import List, Optional

from ..geometry import Point
from .base_shape import BaseShape, ShapeKind


class Target(BaseShape):
    """
    Diamond-shaped detector.

    Rays stop at a target and the whole path that led to it is flagged.
    Its material is never consulted.
    """

    kind = ShapeKind.TARGET
    is_target = True
    dimension_fields = ('size',)

    def __init__(
        self,
        x: float = 0.0,
        y: float = 0.0,
        size: float = 20.0,
        rotation: float = 0.0,
        id: Optional[str] = None
    ):
        super().__init__(x, y, rotation, None, id)
        self.size = size

    @property
    def size(self) -> float:
        return self._size

    @size.setter
    def size(self, value: float) -> None:
        self._size = self._positive('size', value)

    def get_local_vertices(self) -> List[Point]:
        h = self._size / 2
        return [Point(0.0, -h), Point(h, 0.0), Point(0.0, h), Point(-h, 0.0)]

    def contains_local(self, local: Point) -> bool:
        return abs(local.x) + abs(local.y) <= self._size / 2
