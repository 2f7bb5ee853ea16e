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
Constants used throughout the ray tracing engine.

They live in their own module so that the shape classes, the intersection
routines, the BVH and the tracer can share them without circular imports.
"""

# Shared tolerance for every "behind the ray" and "parallel" test.
# The polygon and ellipse paths must agree on it, otherwise a ray grazing
# a vertex behaves differently depending on the shape kind.
EPSILON = 1e-4

# Refractive index of the space between objects
AIR_REFRACTIVE_INDEX = 1.0

# Material ranges (values outside are clamped at construction)
MIN_REFLECTIVITY = 0.0
MAX_REFLECTIVITY = 1.0
MIN_REFRACTIVE_INDEX = 1.0
MAX_REFRACTIVE_INDEX = 2.5
MIN_ABSORPTANCE = 0.0
MAX_ABSORPTANCE = 1.0

DEFAULT_REFLECTIVITY = 0.5
DEFAULT_REFRACTIVE_INDEX = 1.5
DEFAULT_ABSORPTANCE = 0.0

# Tracer defaults
DEFAULT_MAX_BOUNCES = 5
DEFAULT_MIN_INTENSITY = 0.01
DEFAULT_CANVAS_WIDTH = 800.0
DEFAULT_CANVAS_HEIGHT = 600.0

# BVH
DEFAULT_MAX_OBJECTS_PER_LEAF = 4
SAH_MAX_SPLIT_CANDIDATES = 10  # evenly spaced partition points tried per axis

# Light sources
DEFAULT_RAY_COUNT = 32
MIN_RAY_COUNT = 1
MAX_RAY_COUNT = 360
DEFAULT_RAY_LENGTH = 10000.0
FALLBACK_RAY_LENGTH = 1000.0   # used when a non-positive length is given
DEFAULT_FOCAL_POINT_RADIUS = 8.0

# Polygon resolution used when approximating curved shapes
ELLIPSE_VERTEX_COUNT = 32
FOCAL_POINT_VERTEX_COUNT = 16
