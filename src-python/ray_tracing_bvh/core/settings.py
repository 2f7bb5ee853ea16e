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

from typing import Any, Dict

from .constants import (
    AIR_REFRACTIVE_INDEX,
    DEFAULT_CANVAS_HEIGHT,
    DEFAULT_CANVAS_WIDTH,
    DEFAULT_MAX_BOUNCES,
    DEFAULT_MAX_OBJECTS_PER_LEAF,
    DEFAULT_MIN_INTENSITY,
)


class TraceSettings:
    """
    Configuration of a trace.

    Bounce and intensity limits are clamped into range; canvas size and
    leaf capacity raise ValueError when invalid.

    Attributes:
        max_bounces (int): Maximum ray generation that may still spawn children, at least 0
        min_intensity (float): Rays below this intensity are dropped, in [0, 1]
        use_bvh (bool): Query through the BVH instead of testing every shape
        canvas_width (float): Width of the scene bounds
        canvas_height (float): Height of the scene bounds
        air_refractive_index (float): Refractive index outside all shapes
        max_objects_per_leaf (int): BVH leaf capacity

    Properties:
        index_version (int): Incremented whenever a setting that affects the
            spatial index (use_bvh, max_objects_per_leaf) changes
    """

    # camelCase keys accepted by from_dict, mapped to attribute names
    KEY_ALIASES = {
        'maxBounces': 'max_bounces',
        'minIntensity': 'min_intensity',
        'useBVH': 'use_bvh',
        'canvasWidth': 'canvas_width',
        'canvasHeight': 'canvas_height',
        'airRefractiveIndex': 'air_refractive_index',
        'maxObjectsPerLeaf': 'max_objects_per_leaf',
    }

    FIELDS = ('max_bounces', 'min_intensity', 'use_bvh', 'canvas_width',
              'canvas_height', 'air_refractive_index', 'max_objects_per_leaf')

    def __init__(
        self,
        max_bounces: int = DEFAULT_MAX_BOUNCES,
        min_intensity: float = DEFAULT_MIN_INTENSITY,
        use_bvh: bool = True,
        canvas_width: float = DEFAULT_CANVAS_WIDTH,
        canvas_height: float = DEFAULT_CANVAS_HEIGHT,
        air_refractive_index: float = AIR_REFRACTIVE_INDEX,
        max_objects_per_leaf: int = DEFAULT_MAX_OBJECTS_PER_LEAF
    ):
        self._index_version = 0
        self._use_bvh = True
        self._max_objects_per_leaf = DEFAULT_MAX_OBJECTS_PER_LEAF
        self.max_bounces = max_bounces
        self.min_intensity = min_intensity
        self.use_bvh = use_bvh
        self.canvas_width = canvas_width
        self.canvas_height = canvas_height
        self.air_refractive_index = air_refractive_index
        self.max_objects_per_leaf = max_objects_per_leaf

    @property
    def max_bounces(self) -> int:
        return self._max_bounces

    @max_bounces.setter
    def max_bounces(self, value: int) -> None:
        self._max_bounces = max(0, int(value))

    @property
    def min_intensity(self) -> float:
        return self._min_intensity

    @min_intensity.setter
    def min_intensity(self, value: float) -> None:
        self._min_intensity = max(0.0, min(1.0, float(value)))

    @property
    def use_bvh(self) -> bool:
        return self._use_bvh

    @use_bvh.setter
    def use_bvh(self, value: bool) -> None:
        value = bool(value)
        if value != self._use_bvh:
            self._use_bvh = value
            self._index_version += 1

    @property
    def canvas_width(self) -> float:
        return self._canvas_width

    @canvas_width.setter
    def canvas_width(self, value: float) -> None:
        if value <= 0:
            raise ValueError(f"canvas_width must be positive, got {value}")
        self._canvas_width = float(value)

    @property
    def canvas_height(self) -> float:
        return self._canvas_height

    @canvas_height.setter
    def canvas_height(self, value: float) -> None:
        if value <= 0:
            raise ValueError(f"canvas_height must be positive, got {value}")
        self._canvas_height = float(value)

    @property
    def air_refractive_index(self) -> float:
        return self._air_refractive_index

    @air_refractive_index.setter
    def air_refractive_index(self, value: float) -> None:
        if value <= 0:
            raise ValueError(f"air_refractive_index must be positive, got {value}")
        self._air_refractive_index = float(value)

    @property
    def max_objects_per_leaf(self) -> int:
        return self._max_objects_per_leaf

    @max_objects_per_leaf.setter
    def max_objects_per_leaf(self, value: int) -> None:
        if value < 1:
            raise ValueError(f"max_objects_per_leaf must be >= 1, got {value}")
        value = int(value)
        if value != self._max_objects_per_leaf:
            self._max_objects_per_leaf = value
            self._index_version += 1

    @property
    def index_version(self) -> int:
        return self._index_version

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TraceSettings':
        """
        Build settings from a dict with snake_case or camelCase keys.

        Raises:
            ValueError: If a key is not a known setting.
        """
        kwargs = {}
        for key, value in data.items():
            name = cls.KEY_ALIASES.get(key, key)
            if name not in cls.FIELDS:
                raise ValueError(f"Unknown setting '{key}'. Valid options: {cls.FIELDS}")
            kwargs[name] = value
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        return {name: getattr(self, name) for name in self.FIELDS}

    def copy(self) -> 'TraceSettings':
        return TraceSettings(**self.to_dict())

    def __repr__(self) -> str:
        fields = ', '.join(f"{k}={v!r}" for k, v in self.to_dict().items())
        return f"TraceSettings({fields})"
