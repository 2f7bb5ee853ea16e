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

"""
Reflection and refraction of unit direction vectors.

All functions are pure. Directions and normals are expected to be unit
vectors; the normal is the one returned by the intersection routines,
i.e. it already opposes the incoming ray.
"""

import math
from typing import Optional

from .geometry import Point, geometry


def reflect(incident: Point, normal: Point) -> Point:
    """
    Mirror the incident direction about the surface normal.

    R = I - 2(I.N)N

    Args:
        incident: Incident direction (unit vector)
        normal: Surface normal (unit vector)

    Returns:
        Reflected direction
    """
    dot = geometry.dot(incident, normal)
    return Point(
        incident.x - 2 * dot * normal.x,
        incident.y - 2 * dot * normal.y
    )


def refract(incident: Point, normal: Point, n1: float, n2: float) -> Optional[Point]:
    """
    Bend the incident direction across an interface using Snell's law.

    Args:
        incident: Incident direction (unit vector)
        normal: Surface normal (unit vector, opposing the incident ray)
        n1: Refractive index of the medium the ray travels in
        n2: Refractive index of the medium the ray enters

    Returns:
        The refracted direction (unit length up to rounding), or None when
        the ray undergoes total internal reflection.
    """
    eta = n1 / n2
    cos_i = -geometry.dot(incident, normal)
    k = 1 - eta * eta * (1 - cos_i * cos_i)

    if k < 0:
        return None

    sqrt_k = math.sqrt(k)
    return Point(
        eta * incident.x + (eta * cos_i - sqrt_k) * normal.x,
        eta * incident.y + (eta * cos_i - sqrt_k) * normal.y
    )


def fresnel_reflectance(cos_theta: float, n1: float, n2: float) -> float:
    """
    Schlick's approximation of the Fresnel reflectance.

    Not used by the tracer, which splits energy by material reflectivity.

    Args:
        cos_theta: Cosine of the incidence angle (sign ignored)
        n1: Refractive index of the incident medium
        n2: Refractive index of the transmitting medium

    Returns:
        Reflectance in [0, 1]
    """
    r0 = ((n1 - n2) / (n1 + n2)) ** 2
    return r0 + (1 - r0) * (1 - abs(cos_theta)) ** 5


def critical_angle(n1: float, n2: float) -> Optional[float]:
    """
    Critical angle in radians for light going from n1 into n2.

    Returns None when n1 <= n2, since no total internal reflection is
    possible in that direction.
    """
    if n1 <= n2:
        return None
    return math.asin(n2 / n1)


def incidence_cosine(incident: Point, normal: Point) -> float:
    """Cosine of the angle between the reversed incident ray and the normal."""
    return -geometry.dot(incident, normal)
