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

===============================================================================
Scene Geometry Query Tools
===============================================================================
Shapely-based queries relating shapes to each other and to traced
segments. They work on the polygon approximation of each shape
(`get_vertices()`), not on the analytic curves the tracer uses, so results
for circles and ellipses are accurate to that resolution.
===============================================================================
"""

from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple, Union, TYPE_CHECKING

from shapely.geometry import LineString, MultiLineString, Point, Polygon, box

from ..core.segment import Segment, iter_segments

if TYPE_CHECKING:
    from ..core.scene import Scene
    from ..core.scene_objs.base_shape import BaseShape


def shape_to_polygon(shape: 'BaseShape') -> Polygon:
    """
    Convert a shape to a Shapely Polygon using its world-space vertices.

    Raises:
        ValueError: If the shape has fewer than three vertices.
    """
    coords = [(p.x, p.y) for p in shape.get_vertices()]
    if len(coords) < 3:
        raise ValueError(f"Shape '{shape.id}' has {len(coords)} vertices; a polygon needs 3")
    return Polygon(coords)


def _as_shapes(shapes: Union['Scene', Sequence['BaseShape']]) -> List['BaseShape']:
    if hasattr(shapes, 'get_intersectable_shapes'):
        return shapes.get_intersectable_shapes()
    return list(shapes)


def find_overlapping_shapes(
    shapes: Union['Scene', Sequence['BaseShape']],
    min_area: float = 0.0
) -> List[Tuple['BaseShape', 'BaseShape', float]]:
    """
    Pairs of shapes whose interiors overlap.

    Bounding boxes are compared first; only pairs whose boxes intersect
    are tested polygon against polygon. Shapes that merely touch (zero
    overlap area) are not reported.

    Args:
        shapes: A Scene (obstacles and targets are checked) or a list of shapes.
        min_area: Only report overlaps with area strictly above this value.

    Returns:
        List of (shape_a, shape_b, overlap_area), in input order.
    """
    shapes = _as_shapes(shapes)
    boxes = [box(*s.get_bounding_box().as_tuple()) for s in shapes]
    polygons = [shape_to_polygon(s) for s in shapes]

    overlaps = []
    for i in range(len(shapes)):
        for j in range(i + 1, len(shapes)):
            if not boxes[i].intersects(boxes[j]):
                continue
            area = polygons[i].intersection(polygons[j]).area
            if area > min_area:
                overlaps.append((shapes[i], shapes[j], area))
    return overlaps


def segment_to_linestring(segment: Segment) -> LineString:
    return LineString([(segment.start.x, segment.start.y), (segment.end.x, segment.end.y)])


def segments_to_multilinestring(forest: Iterable[Segment]) -> MultiLineString:
    """All segments of a forest as one MultiLineString (depth-first order)."""
    return MultiLineString([
        [(s.start.x, s.start.y), (s.end.x, s.end.y)] for s in iter_segments(forest)
    ])


def find_segments_inside_shape(forest: Iterable[Segment], shape: 'BaseShape') -> List[Segment]:
    """
    Segments travelling inside a shape.

    A segment counts as inside when its midpoint lies in the shape's
    polygon, which is how refracted segments through a glass are found.
    """
    poly = shape_to_polygon(shape)
    inside = []
    for segment in iter_segments(forest):
        mid = Point((segment.start.x + segment.end.x) / 2,
                    (segment.start.y + segment.end.y) / 2)
        if poly.contains(mid):
            inside.append(segment)
    return inside


def find_segments_crossing_shape(forest: Iterable[Segment], shape: 'BaseShape') -> List[Segment]:
    """
    Segments that pass through a shape's interior and out again.

    Segments that only touch the boundary (for example a segment ending
    on the surface where it reflects) do not count.
    """
    poly = shape_to_polygon(shape)
    return [s for s in iter_segments(forest) if segment_to_linestring(s).crosses(poly)]


def check_bounding_boxes(
    shapes: Union['Scene', Sequence['BaseShape']],
    tolerance: float = 1e-9
) -> List['BaseShape']:
    """
    Shapes whose bounding box does not cover their polygon.

    An empty result means every shape satisfies the containment the BVH
    relies on.
    """
    bad = []
    for shape in _as_shapes(shapes):
        aabb = shape.get_bounding_box()
        min_x, min_y, max_x, max_y = shape_to_polygon(shape).bounds
        if (min_x < aabb.min_x - tolerance or min_y < aabb.min_y - tolerance or
                max_x > aabb.max_x + tolerance or max_y > aabb.max_y + tolerance):
            bad.append(shape)
    return bad
