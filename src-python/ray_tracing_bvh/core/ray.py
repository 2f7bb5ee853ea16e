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

from dataclasses import dataclass
from typing import Dict, Any

from .geometry import Point, geometry


@dataclass(frozen=True)
class Ray:
    """
    A half-line of light travelling through the scene.

    The direction is normalized on construction; a zero direction stays
    (0, 0) and such a ray never hits anything.

    Attributes:
        origin (Point): Starting point
        direction (Point): Unit direction
        intensity (float): Relative intensity, 1.0 for a freshly emitted ray
        generation (int): Number of bounces since emission
    """
    origin: Point
    direction: Point
    intensity: float = 1.0
    generation: int = 0

    def __post_init__(self):
        # Frozen dataclass: bypass __setattr__ to store normalized copies
        object.__setattr__(self, 'origin', Point(self.origin.x, self.origin.y))
        object.__setattr__(self, 'direction', geometry.normalize_vec(self.direction))
        object.__setattr__(self, 'intensity', float(self.intensity))
        object.__setattr__(self, 'generation', int(self.generation))

    def point_at(self, t: float) -> Point:
        """Point at distance t along the ray."""
        return Point(
            self.origin.x + self.direction.x * t,
            self.origin.y + self.direction.y * t
        )

    def spawn(self, new_origin: Point, new_direction: Point, intensity_multiplier: float) -> 'Ray':
        """
        Create a child ray one generation deeper.

        Args:
            new_origin: Where the child starts (usually the hit point)
            new_direction: Child direction (normalized by the constructor)
            intensity_multiplier: Fraction of this ray's intensity carried over

        Returns:
            New Ray with intensity = self.intensity * intensity_multiplier
        """
        return Ray(
            origin=new_origin,
            direction=new_direction,
            intensity=self.intensity * intensity_multiplier,
            generation=self.generation + 1
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'origin': self.origin.to_dict(),
            'direction': self.direction.to_dict(),
            'intensity': self.intensity,
            'generation': self.generation,
        }

    def __repr__(self) -> str:
        return (f"Ray(origin=({self.origin.x:.3f}, {self.origin.y:.3f}), "
                f"direction=({self.direction.x:.4f}, {self.direction.y:.4f}), "
                f"intensity={self.intensity:.4f}, generation={self.generation})")
