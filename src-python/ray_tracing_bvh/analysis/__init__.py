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

from .saving import (
    flatten_segments,
    filter_target_segments,
    get_segment_statistics,
    save_segments_csv,
)
from .scene_geometry import (
    shape_to_polygon,
    find_overlapping_shapes,
    segment_to_linestring,
    segments_to_multilinestring,
    find_segments_inside_shape,
    find_segments_crossing_shape,
    check_bounding_boxes,
)

__all__ = [
    'flatten_segments', 'filter_target_segments', 'get_segment_statistics', 'save_segments_csv',
    'shape_to_polygon', 'find_overlapping_shapes', 'segment_to_linestring',
    'segments_to_multilinestring', 'find_segments_inside_shape',
    'find_segments_crossing_shape', 'check_bounding_boxes',
]
