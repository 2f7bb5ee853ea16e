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

Ray Tracing BVH
===============

A 2D ray tracing engine with a surface-area-heuristic bounding volume
hierarchy, using Shapely for post-trace geometry analysis.

Main modules:
- core: Tracing engine (Scene, RayTracer, BVH, shapes, optics math)
- analysis: Post-trace utilities (statistics, CSV export, shape queries)

Quick start:
    from ray_tracing_bvh.core.scene import Scene
    from ray_tracing_bvh.core.scene_objs import FocalPoint, Rectangle, Material
    from ray_tracing_bvh.core.tracer import RayTracer
"""

__version__ = "0.1.0"

# Convenience imports for common usage
from .core.scene import Scene
from .core.tracer import RayTracer
from .core.settings import TraceSettings
from .core.ray import Ray

__all__ = [
    'Scene',
    'RayTracer',
    'TraceSettings',
    'Ray',
    '__version__',
]
