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
from .material import Material


class Rectangle(BaseShape):
    """
    Rectangle centred on its position.

    Vertices are listed top-left, top-right, bottom-right, bottom-left
    before rotation.
    """

    kind = ShapeKind.RECTANGLE
    dimension_fields = ('width', 'height')

    def __init__(
        self,
        x: float = 0.0,
        y: float = 0.0,
        width: float = 100.0,
        height: float = 60.0,
        rotation: float = 0.0,
        material: Optional[Material] = None,
        id: Optional[str] = None
    ):
        super().__init__(x, y, rotation, material, id)
        self.width = width
        self.height = height

    @property
    def width(self) -> float:
        return self._width

    @width.setter
    def width(self, value: float) -> None:
        self._width = self._positive('width', value)

    @property
    def height(self) -> float:
        return self._height

    @height.setter
    def height(self, value: float) -> None:
        self._height = self._positive('height', value)

    def get_local_vertices(self) -> List[Point]:
        hw = self._width / 2
        hh = self._height / 2
        return [Point(-hw, -hh), Point(hw, -hh), Point(hw, hh), Point(-hw, hh)]

    def contains_local(self, local: Point) -> bool:
        return abs(local.x) <= self._width / 2 and abs(local.y) <= self._height / 2


class Square(Rectangle):
    """A rectangle whose width and height always match."""

    kind = ShapeKind.SQUARE
    dimension_fields = ('side_length',)

    def __init__(
        self,
        x: float = 0.0,
        y: float = 0.0,
        side_length: float = 80.0,
        rotation: float = 0.0,
        material: Optional[Material] = None,
        id: Optional[str] = None
    ):
        super().__init__(x, y, side_length, side_length, rotation, material, id)

    @property
    def side_length(self) -> float:
        return self._width

    @side_length.setter
    def side_length(self, value: float) -> None:
        side = self._positive('side_length', value)
        self._width = side
        self._height = side
