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

import uuid as uuid_module
from typing import Any, List, Optional, Union

from .scene_objs.base_shape import BaseShape, ShapeKind
from .scene_objs.material import Material


class Scene:
    """
    Container for the shapes a tracer works on.

    Shapes are routed on insert: light sources go to `light_sources`,
    targets to `targets`, everything else to `objects`. The order of
    `objects` matters: when a point lies inside several objects, the one
    added last is taken as the medium.

    Every mutation bumps `version`; the tracer compares it with the
    version its BVH was built from. Callers that change a shape in place
    must call `mark_changed()`.

    Attributes:
        objects (list): Obstacles (rectangles, ellipses, triangles, ...)
        light_sources (list): FocalPoint shapes
        targets (list): Target shapes
        error (str or None): Error message from the last operation
        warning (str or None): Warning message from the last operation
        name (str or None): Optional name for the scene
    """

    def __init__(self, name: Optional[str] = None):
        self.objects: List[BaseShape] = []
        self.light_sources: List[BaseShape] = []
        self.targets: List[BaseShape] = []
        self.error = None
        self.warning = None
        self.name = name
        self._version = 0
        self._uuid: str = str(uuid_module.uuid4())

    @property
    def uuid(self) -> str:
        return self._uuid

    @property
    def version(self) -> int:
        """Change counter, incremented by every mutation."""
        return self._version

    def mark_changed(self) -> None:
        """Signal that a shape was modified in place."""
        self._version += 1

    def get_display_name(self) -> str:
        if self.name:
            return self.name
        return f"Scene_{self._uuid[:8]}"

    # =========================================================================
    # Queries
    # =========================================================================

    @property
    def all_shapes(self) -> List[BaseShape]:
        return self.objects + self.light_sources + self.targets

    def get_intersectable_shapes(self) -> List[BaseShape]:
        """Shapes a ray can hit: obstacles followed by targets."""
        return self.objects + self.targets

    def get_object_by_id(self, shape_id: str) -> Optional[BaseShape]:
        for shape in self.all_shapes:
            if shape.id == shape_id:
                return shape
        return None

    def get_objects_by_kind(self, kind: Union[ShapeKind, str]) -> List[BaseShape]:
        if isinstance(kind, str):
            kind = ShapeKind(kind)
        return [shape for shape in self.all_shapes if shape.kind is kind]

    def _list_for(self, shape: BaseShape) -> List[BaseShape]:
        if shape.is_light_source:
            return self.light_sources
        if shape.is_target:
            return self.targets
        return self.objects

    # =========================================================================
    # Mutations
    # =========================================================================

    def add_object(self, shape: BaseShape) -> bool:
        """
        Add a shape to the scene.

        Returns:
            False (with `warning` set) if a shape with the same id exists.
        """
        if self.get_object_by_id(shape.id) is not None:
            self.warning = f"Shape id '{shape.id}' already in scene; not added"
            return False
        self._list_for(shape).append(shape)
        self._version += 1
        return True

    def add_objects(self, shapes: List[BaseShape]) -> int:
        """Add several shapes; returns how many were added."""
        return sum(1 for shape in shapes if self.add_object(shape))

    def remove_object(self, shape_or_id: Union[BaseShape, str]) -> bool:
        """
        Remove a shape given the shape itself or its id.

        Returns:
            False (with `warning` set) if no such shape is in the scene.
        """
        shape_id = shape_or_id.id if isinstance(shape_or_id, BaseShape) else shape_or_id
        shape = self.get_object_by_id(shape_id)
        if shape is None:
            self.warning = f"Shape id '{shape_id}' not found; nothing removed"
            return False
        self._list_for(shape).remove(shape)
        self._version += 1
        return True

    def update_object(self, shape_id: str, **changes: Any) -> bool:
        """
        Change the pose, material or dimensions of a shape.

        Accepted keys: x, y, rotation, material (a Material or a dict),
        reflectivity, refractive_index, absorptance, plus the shape's own
        dimension fields (e.g. width/height for a Rectangle).

        Returns:
            False (with `warning` set) if the shape is not in the scene.

        Raises:
            ValueError: If a key does not apply to this shape.
        """
        shape = self.get_object_by_id(shape_id)
        if shape is None:
            self.warning = f"Shape id '{shape_id}' not found; nothing updated"
            return False

        material_keys = ('reflectivity', 'refractive_index', 'absorptance')
        allowed = ('x', 'y', 'rotation', 'material') + material_keys + shape.dimension_fields
        unknown = [key for key in changes if key not in allowed]
        if unknown:
            raise ValueError(
                f"Cannot update {unknown} on {shape.kind.value} '{shape_id}'. "
                f"Valid options: {allowed}"
            )

        for key, value in changes.items():
            if key == 'x':
                shape.set_position(value, shape.y)
            elif key == 'y':
                shape.set_position(shape.x, value)
            elif key == 'rotation':
                shape.set_rotation(value)
            elif key == 'material':
                shape.material = value.clone() if isinstance(value, Material) else Material.from_dict(value)
            elif key in material_keys:
                setattr(shape.material, key, value)
            else:
                setattr(shape, key, value)

        self._version += 1
        return True

    def clear(self) -> None:
        """Remove all shapes from the scene."""
        self.objects.clear()
        self.light_sources.clear()
        self.targets.clear()
        self.error = None
        self.warning = None
        self._version += 1

    def __repr__(self) -> str:
        return (f"Scene({self.get_display_name()!r}, objects={len(self.objects)}, "
                f"light_sources={len(self.light_sources)}, targets={len(self.targets)}, "
                f"version={self._version})")
