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
Analytic ray/shape intersection routines.

Polygonal shapes are intersected edge by edge; circles and ellipses are
solved in closed form so that curved surfaces produce exact normals
rather than the facet normals of their polygon approximation.

Every "behind the ray" and "parallel" test uses the shared EPSILON.
"""

import math
from typing import List, Optional, Tuple, TYPE_CHECKING

from .constants import EPSILON
from .geometry import Point, geometry
from .intersection import Intersection, NO_HIT
from .ray import Ray
from .scene_objs.base_shape import ShapeKind

if TYPE_CHECKING:
    from .scene_objs.base_shape import BaseShape


def ray_line_segment_intersection(
    origin: Point,
    direction: Point,
    p1: Point,
    p2: Point
) -> Optional[Tuple[float, Point, Point]]:
    """
    Intersect a ray with the segment p1-p2.

    Solves origin + t*direction = p1 + u*(p2 - p1) by Cramer's rule.

    Args:
        origin: Ray origin
        direction: Ray direction (unit vector)
        p1: First endpoint of the segment
        p2: Second endpoint of the segment

    Returns:
        (t, point, normal) or None when the ray is parallel to the segment,
        the hit is behind the ray (t < EPSILON), or the hit falls outside
        the segment. The normal opposes the ray direction.
    """
    edge = geometry.subtract(p2, p1)
    det = geometry.cross(direction, edge)
    if abs(det) < EPSILON:
        return None

    w = geometry.subtract(p1, origin)
    t = geometry.cross(w, edge) / det
    u = geometry.cross(w, direction) / det

    if t < EPSILON or u < 0.0 or u > 1.0:
        return None

    edge_len = geometry.length(edge)
    normal = Point(-edge.y / edge_len, edge.x / edge_len)
    if geometry.dot(direction, normal) > 0:
        normal = Point(-normal.x, -normal.y)

    return t, ray_point(origin, direction, t), normal


def ray_polygon_intersection(
    origin: Point,
    direction: Point,
    vertices: List[Point],
    shape: 'BaseShape'
) -> Intersection:
    """
    Intersect a ray with a closed polygon, keeping the nearest edge hit.

    The polygon need not be convex; vertices are taken in order and the
    last vertex connects back to the first.
    """
    best_t = math.inf
    best_point = None
    best_normal = None

    count = len(vertices)
    for i in range(count):
        result = ray_line_segment_intersection(
            origin, direction, vertices[i], vertices[(i + 1) % count]
        )
        if result is None:
            continue
        t, point, normal = result
        if t < best_t:
            best_t, best_point, best_normal = t, point, normal

    if best_point is None:
        return NO_HIT
    return Intersection.make_hit(best_t, best_point, best_normal, shape)


def ray_ellipse_intersection(
    origin: Point,
    direction: Point,
    center: Point,
    rx: float,
    ry: float,
    rotation: float,
    shape: 'BaseShape'
) -> Intersection:
    """
    Intersect a ray with a rotated ellipse.

    The ray is moved into the ellipse's local frame and scaled so the
    ellipse becomes the unit circle, which turns the problem into a
    quadratic in t. The near root is used unless it lies behind the ray,
    in which case the ray starts inside and the far root is the exit
    point; the normal is then flipped to face back into the interior.

    Returns:
        Intersection with a world-space distance and unit normal, or NO_HIT.
    """
    local_origin = geometry.to_local(origin, center, rotation)
    local_dir = geometry.rotate_vec(direction, -rotation)

    ox = local_origin.x / rx
    oy = local_origin.y / ry
    dx = local_dir.x / rx
    dy = local_dir.y / ry

    a = dx * dx + dy * dy
    b = 2 * (ox * dx + oy * dy)
    c = ox * ox + oy * oy - 1

    if a < EPSILON * EPSILON:
        return NO_HIT

    discriminant = b * b - 4 * a * c
    if discriminant < 0:
        return NO_HIT

    sqrt_disc = math.sqrt(discriminant)
    t_near = (-b - sqrt_disc) / (2 * a)
    t_far = (-b + sqrt_disc) / (2 * a)

    if t_near >= EPSILON:
        t = t_near
        inside = False
    elif t_far >= EPSILON:
        t = t_far
        inside = True
    else:
        return NO_HIT

    # Hit point in the unscaled local frame
    hx = local_origin.x + local_dir.x * t
    hy = local_origin.y + local_dir.y * t

    local_normal = geometry.normalize_vec(Point(hx / (rx * rx), hy / (ry * ry)))
    if inside:
        local_normal = Point(-local_normal.x, -local_normal.y)

    point = geometry.to_world(Point(hx, hy), center, rotation)
    normal = geometry.rotate_vec(local_normal, rotation)
    distance = geometry.distance(origin, point)

    return Intersection.make_hit(distance, point, normal, shape)


def ray_object_intersection(ray: Ray, shape: 'BaseShape') -> Intersection:
    """
    Intersect a ray with any scene shape, dispatching on its kind.

    Light sources never block light. Circles and ellipses are solved
    analytically, everything else through its polygon.
    """
    kind = shape.kind
    if kind is ShapeKind.FOCAL_POINT:
        return NO_HIT
    if kind is ShapeKind.CIRCLE or kind is ShapeKind.ELLIPSE:
        return ray_ellipse_intersection(
            ray.origin, ray.direction, shape.position,
            shape.rx, shape.ry, shape.rotation, shape
        )
    return ray_polygon_intersection(ray.origin, ray.direction, shape.get_vertices(), shape)


def ray_point(origin: Point, direction: Point, t: float) -> Point:
    return Point(origin.x + direction.x * t, origin.y + direction.y * t)
