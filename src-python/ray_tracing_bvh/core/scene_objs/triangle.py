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

from ..geometry import Point
from .base_shape import BaseShape, ShapeKind
from .material import Material


def is_valid_triangle(a: float, b: float, c: float) -> bool:
    """Strict triangle inequality."""
    return a + b > c and a + c > b and b + c > a


class Triangle(BaseShape):
    """
    Triangle given by its three side lengths.

    side1 runs from the first vertex to the second, side2 from the second to
    the third and side3 closes the triangle. The vertices are placed with the
    cosine law and shifted so the centroid sits on the shape's position.
    A triple that violates the triangle inequality falls back to the
    equilateral triangle of the mean side.
    """

    kind = ShapeKind.TRIANGLE
    dimension_fields = ('side1', 'side2', 'side3')

    def __init__(
        self,
        x: float = 0.0,
        y: float = 0.0,
        side1: float = 60.0,
        side2: float = 60.0,
        side3: float = 60.0,
        rotation: float = 0.0,
        material: Optional[Material] = None,
        id: Optional[str] = None
    ):
        super().__init__(x, y, rotation, material, id)
        self.set_sides(side1, side2, side3)

    def set_sides(self, side1: float, side2: float, side3: float) -> None:
        sides = (self._positive('side1', side1),
                 self._positive('side2', side2),
                 self._positive('side3', side3))
        if not is_valid_triangle(*sides):
            mean = sum(sides) / 3
            self.warning = (f"sides {sides} do not form a triangle; "
                            f"using equilateral sides of {mean:g}")
            sides = (mean, mean, mean)
        self._sides = sides

    @property
    def sides(self) -> Tuple[float, float, float]:
        return self._sides

    @property
    def side1(self) -> float:
        return self._sides[0]

    @side1.setter
    def side1(self, value: float) -> None:
        self.set_sides(value, self._sides[1], self._sides[2])

    @property
    def side2(self) -> float:
        return self._sides[1]

    @side2.setter
    def side2(self, value: float) -> None:
        self.set_sides(self._sides[0], value, self._sides[2])

    @property
    def side3(self) -> float:
        return self._sides[2]

    @side3.setter
    def side3(self, value: float) -> None:
        self.set_sides(self._sides[0], self._sides[1], value)

    def get_local_vertices(self) -> List[Point]:
        a, b, c = self._sides
        # First vertex at the origin, second along +x, third above (canvas y grows down)
        cx = (a * a + c * c - b * b) / (2 * a)
        cy = -math.sqrt(max(0.0, c * c - cx * cx))
        gx = (a + cx) / 3
        gy = cy / 3
        return [Point(-gx, -gy), Point(a - gx, -gy), Point(cx - gx, cy - gy)]


class EquilateralTriangle(Triangle):
    """Triangle with three equal sides."""

    kind = ShapeKind.EQUILATERAL_TRIANGLE
    dimension_fields = ('side_length',)

    def __init__(
        self,
        x: float = 0.0,
        y: float = 0.0,
        side_length: float = 60.0,
        rotation: float = 0.0,
        material: Optional[Material] = None,
        id: Optional[str] = None
    ):
        super().__init__(x, y, side_length, side_length, side_length, rotation, material, id)

    @property
    def side_length(self) -> float:
        return self._sides[0]

    @side_length.setter
    def side_length(self, value: float) -> None:
        side = self._positive('side_length', value)
        self._sides = (side, side, side)
