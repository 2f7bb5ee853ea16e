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

from typing import Any, Dict, Optional

from ..constants import (
    DEFAULT_ABSORPTANCE,
    DEFAULT_REFLECTIVITY,
    DEFAULT_REFRACTIVE_INDEX,
    MAX_ABSORPTANCE,
    MAX_REFLECTIVITY,
    MAX_REFRACTIVE_INDEX,
    MIN_ABSORPTANCE,
    MIN_REFLECTIVITY,
    MIN_REFRACTIVE_INDEX,
)


def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, float(value)))


class Material:
    """
    Optical properties of a shape.

    Out-of-range values are clamped rather than rejected; the last
    clamping is described in `warning` so callers can surface it.

    Attributes:
        reflectivity (float): Fraction of surviving energy that reflects, in [0, 1]
        refractive_index (float): Index of refraction, in [1.0, 2.5]
        absorptance (float): Fraction of energy absorbed at each surface hit, in [0, 1]
        warning (str or None): Description of the last clamped input
    """

    def __init__(
        self,
        reflectivity: float = DEFAULT_REFLECTIVITY,
        refractive_index: float = DEFAULT_REFRACTIVE_INDEX,
        absorptance: float = DEFAULT_ABSORPTANCE
    ):
        self.warning: Optional[str] = None
        self._reflectivity = DEFAULT_REFLECTIVITY
        self._refractive_index = DEFAULT_REFRACTIVE_INDEX
        self._absorptance = DEFAULT_ABSORPTANCE
        self.reflectivity = reflectivity
        self.refractive_index = refractive_index
        self.absorptance = absorptance

    def _clamped(self, name: str, value: float, lo: float, hi: float) -> float:
        clamped = _clamp(value, lo, hi)
        if clamped != value:
            self.warning = f"{name} {value} out of range [{lo}, {hi}], clamped to {clamped}"
        return clamped

    @property
    def reflectivity(self) -> float:
        return self._reflectivity

    @reflectivity.setter
    def reflectivity(self, value: float) -> None:
        self._reflectivity = self._clamped('reflectivity', value, MIN_REFLECTIVITY, MAX_REFLECTIVITY)

    @property
    def refractive_index(self) -> float:
        return self._refractive_index

    @refractive_index.setter
    def refractive_index(self, value: float) -> None:
        self._refractive_index = self._clamped(
            'refractive_index', value, MIN_REFRACTIVE_INDEX, MAX_REFRACTIVE_INDEX
        )

    @property
    def absorptance(self) -> float:
        return self._absorptance

    @absorptance.setter
    def absorptance(self, value: float) -> None:
        self._absorptance = self._clamped('absorptance', value, MIN_ABSORPTANCE, MAX_ABSORPTANCE)

    @property
    def surviving_fraction(self) -> float:
        """Fraction of the incident energy that leaves the surface."""
        return 1.0 - self._absorptance

    def clone(self) -> 'Material':
        return Material(self._reflectivity, self._refractive_index, self._absorptance)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'reflectivity': self._reflectivity,
            'refractive_index': self._refractive_index,
            'absorptance': self._absorptance,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Material':
        """Build a material from a dict, accepting `refractiveIndex` as an alias."""
        return cls(
            reflectivity=data.get('reflectivity', DEFAULT_REFLECTIVITY),
            refractive_index=data.get('refractive_index',
                                      data.get('refractiveIndex', DEFAULT_REFRACTIVE_INDEX)),
            absorptance=data.get('absorptance', DEFAULT_ABSORPTANCE),
        )

    def __repr__(self) -> str:
        return (f"Material(reflectivity={self._reflectivity}, "
                f"refractive_index={self._refractive_index}, absorptance={self._absorptance})")
