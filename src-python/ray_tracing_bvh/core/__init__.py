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

from .geometry import geometry, Point, Geometry
from . import constants
from .optics import reflect, refract, fresnel_reflectance, critical_angle, incidence_cosine
from .ray import Ray
from .intersection import Intersection, NO_HIT, closer, closest
from .aabb import AABB
from .geometry_math import (
    ray_line_segment_intersection,
    ray_polygon_intersection,
    ray_ellipse_intersection,
    ray_object_intersection,
)
from .bvh import BVH, BVHNode, BVHState, SpatialIndex, closest_intersection_brute_force
from .segment import Segment, SegmentArena, iter_segments, count_segments, segment_depth
from .settings import TraceSettings
from .scene import Scene
from .tracer import RayTracer

__all__ = [
    'geometry', 'Point', 'Geometry',
    'constants',
    'reflect', 'refract', 'fresnel_reflectance', 'critical_angle', 'incidence_cosine',
    'Ray',
    'Intersection', 'NO_HIT', 'closer', 'closest',
    'AABB',
    'ray_line_segment_intersection', 'ray_polygon_intersection',
    'ray_ellipse_intersection', 'ray_object_intersection',
    'BVH', 'BVHNode', 'BVHState', 'SpatialIndex', 'closest_intersection_brute_force',
    'Segment', 'SegmentArena', 'iter_segments', 'count_segments', 'segment_depth',
    'TraceSettings',
    'Scene',
    'RayTracer',
]
