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

import copy
import itertools
import math
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from ..aabb import AABB
from ..geometry import Point, geometry
from .material import Material


class ShapeKind(Enum):
    """The closed set of shape variants the engine knows how to intersect."""
    RECTANGLE = 'rectangle'
    SQUARE = 'square'
    ELLIPSE = 'ellipse'
    CIRCLE = 'circle'
    TRIANGLE = 'triangle'
    EQUILATERAL_TRIANGLE = 'equilateral_triangle'
    FOCAL_POINT = 'focal_point'
    TARGET = 'target'


# Process-wide counter used to build ids like "rectangle3"
_id_counter = itertools.count(1)


def next_shape_id(kind: ShapeKind) -> str:
    return f"{kind.value}{next(_id_counter)}"


def point_in_polygon(x: float, y: float, vertices: List[Point]) -> bool:
    """Even-odd rule point-in-polygon test."""
    inside = False
    count = len(vertices)
    j = count - 1
    for i in range(count):
        xi, yi = vertices[i].x, vertices[i].y
        xj, yj = vertices[j].x, vertices[j].y
        if (yi > y) != (yj > y):
            x_cross = (xj - xi) * (y - yi) / (yj - yi) + xi
            if x < x_cross:
                inside = not inside
        j = i
    return inside


class BaseShape:
    """
    Base class for every shape the tracer can see.

    A shape has an identity, a pose (position of its centre and rotation
    in radians) and a material. Subclasses describe themselves in their
    own local frame through `get_local_vertices()` and `contains_local()`;
    this class handles the transform to world space.

    Capabilities used by the engine:
        get_vertices(): polygon approximation in world space
        get_bounding_box(): AABB in world space, containing every vertex
        contains_point(x, y): point-in-shape test

    Non-positive dimensions are clamped to 1 and recorded in `warning`.
    """

    kind: ShapeKind = None
    """The variant of this shape."""

    is_light_source: bool = False
    """Whether the shape emits rays (and never blocks them)."""

    is_target: bool = False
    """Whether a ray hitting the shape ends there and lights up its path."""

    dimension_fields: Tuple[str, ...] = ()
    """Shape-specific parameters that `Scene.update_object` may change."""

    def __init__(
        self,
        x: float = 0.0,
        y: float = 0.0,
        rotation: float = 0.0,
        material: Optional[Material] = None,
        id: Optional[str] = None
    ):
        self.id = id if id is not None else next_shape_id(self.kind)
        self.position = Point(x, y)
        self.rotation = float(rotation)
        self.material = material.clone() if material is not None else Material()
        self.warning: Optional[str] = None

    # =========================================================================
    # Pose
    # =========================================================================

    @property
    def x(self) -> float:
        return self.position.x

    @property
    def y(self) -> float:
        return self.position.y

    @property
    def rotation_degrees(self) -> float:
        return math.degrees(self.rotation)

    @rotation_degrees.setter
    def rotation_degrees(self, value: float) -> None:
        self.rotation = math.radians(value)

    def set_position(self, x: float, y: float) -> None:
        self.position = Point(x, y)

    def move(self, dx: float, dy: float) -> None:
        self.position = Point(self.position.x + dx, self.position.y + dy)

    def set_rotation(self, angle: float) -> None:
        """Set the rotation in radians."""
        self.rotation = float(angle)

    def get_centroid(self) -> Point:
        return self.position.copy()

    def _positive(self, name: str, value: float) -> float:
        value = float(value)
        if value <= 0:
            self.warning = f"{name} must be positive, got {value}; using 1"
            return 1.0
        return value

    # =========================================================================
    # Geometry
    # =========================================================================

    def get_local_vertices(self) -> List[Point]:
        """Polygon approximation in the shape's own frame (centre at origin)."""
        raise NotImplementedError

    def get_vertices(self) -> List[Point]:
        """Polygon approximation in world coordinates."""
        return [geometry.to_world(p, self.position, self.rotation)
                for p in self.get_local_vertices()]

    def get_bounding_box(self) -> AABB:
        return AABB.from_points(self.get_vertices())

    def contains_local(self, local: Point) -> bool:
        return point_in_polygon(local.x, local.y, self.get_local_vertices())

    def contains_point(self, x: float, y: float) -> bool:
        local = geometry.to_local(Point(x, y), self.position, self.rotation)
        return self.contains_local(local)

    # =========================================================================
    # Copying and serialization
    # =========================================================================

    def clone(self) -> 'BaseShape':
        """Copy with a fresh id and its own material."""
        duplicate = copy.copy(self)
        duplicate.id = next_shape_id(self.kind)
        duplicate.position = self.position.copy()
        duplicate.material = self.material.clone()
        duplicate.warning = None
        return duplicate

    def get_dimensions(self) -> Dict[str, float]:
        return {name: getattr(self, name) for name in self.dimension_fields}

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'id': self.id,
            'type': self.kind.value,
            'x': self.position.x,
            'y': self.position.y,
            'rotation': self.rotation,
            'material': self.material.to_dict(),
        }
        data.update(self.get_dimensions())
        return data

    def __repr__(self) -> str:
        dims = ', '.join(f"{k}={v}" for k, v in self.get_dimensions().items())
        return (f"{self.__class__.__name__}(id={self.id!r}, "
                f"position=({self.position.x}, {self.position.y}), "
                f"rotation={self.rotation:.4f}{', ' + dims if dims else ''})")
