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

from collections import deque
from typing import Any, Dict, List, NamedTuple, Optional, TYPE_CHECKING

from .bvh import SpatialIndex, closest_intersection_brute_force
from .geometry import Point
from .geometry_math import ray_object_intersection
from .intersection import Intersection, NO_HIT, closer
from .optics import reflect, refract
from .ray import Ray
from .segment import Segment, SegmentArena
from .settings import TraceSettings

if TYPE_CHECKING:
    from .scene import Scene
    from .scene_objs.base_shape import BaseShape
    from .scene_objs.focal_point import FocalPoint


class ChildRay(NamedTuple):
    """A ray spawned at a surface, with the medium it travels in."""
    ray: Ray
    medium: Optional['BaseShape']
    interaction_type: str


class _QueueEntry(NamedTuple):
    ray: Ray
    medium: Optional['BaseShape']
    remaining_distance: float
    start_point: Point
    parent_index: Optional[int]
    interaction_type: str


class RayTracer:
    """
    Traces rays from the scene's light sources into segment trees.

    Each primary ray is expanded breadth-first through a FIFO queue. At
    every step the nearest of (object or target hit, canvas boundary) ends
    the current segment:
        - canvas boundary: the segment is terminal
        - target: the segment and all its ancestors get hits_target=True
        - object: reflected and refracted children are queued, unless the
          ray is out of distance or bounces

    The tracer owns a SpatialIndex that is rebuilt lazily when the scene's
    version (or an index-related setting) changes.

    Attributes:
        scene (Scene): Scene to trace
        settings (TraceSettings): Trace configuration
        verbose (int): Verbosity level (default: 0)
            0 = silent
            1 = per-trace summary (BVH rebuilds, rays per source)
            2 = every queue entry with its termination
        spatial_index (SpatialIndex): BVH state machine
        last_arena (SegmentArena or None): Segments of the last trace_all
        last_trace_stats (dict): Counters of the last trace_all

    Usage:
        tracer = RayTracer(scene, TraceSettings(max_bounces=3))
        forest = tracer.trace_all()
    """

    def __init__(self, scene: 'Scene', settings: Optional[TraceSettings] = None, verbose: int = 0) -> None:
        self.scene = scene
        self.settings = settings if settings is not None else TraceSettings()
        self.verbose: int = verbose
        self.spatial_index = SpatialIndex(self.settings.max_objects_per_leaf, verbose=verbose)
        self.last_arena: Optional[SegmentArena] = None
        self.last_trace_stats: Dict[str, Any] = {}
        self._seen_scene_version: Optional[int] = None
        self._seen_index_version: Optional[int] = None
        self._stats: Dict[str, int] = self._new_stats()

    @staticmethod
    def _new_stats() -> Dict[str, int]:
        return {'primary_rays': 0, 'segments': 0, 'dropped_rays': 0, 'target_hits': 0}

    # =========================================================================
    # Spatial index
    # =========================================================================

    def _sync_index(self) -> None:
        """Mark the index dirty if the scene or an index setting changed."""
        if (self.scene.version != self._seen_scene_version or
                self.settings.index_version != self._seen_index_version):
            self.spatial_index.max_objects_per_leaf = self.settings.max_objects_per_leaf
            self.spatial_index.mark_dirty()
            self._seen_scene_version = self.scene.version
            self._seen_index_version = self.settings.index_version

    def rebuild_bvh(self) -> None:
        """Rebuild the BVH over obstacles and targets now."""
        self._sync_index()
        self.spatial_index.rebuild(self.scene.get_intersectable_shapes())

    def invalidate_bvh(self) -> None:
        """Force a rebuild on the next trace."""
        self.spatial_index.mark_dirty()

    # =========================================================================
    # Entry points
    # =========================================================================

    def trace_all(self) -> List[Segment]:
        """
        Trace every light source in the scene.

        Returns:
            The forest of root segments, one per primary ray that produced
            a segment, in emission order.
        """
        self._sync_index()
        rebuilt = False
        if self.settings.use_bvh:
            rebuilt = self.spatial_index.ensure_built(self.scene.get_intersectable_shapes())

        self._stats = self._new_stats()
        arena = SegmentArena()
        for source in self.scene.light_sources:
            self.trace_light_source(source, arena)

        self.last_arena = arena
        self.last_trace_stats = dict(self._stats)
        self.last_trace_stats['bvh_rebuilt'] = rebuilt
        self.last_trace_stats['light_sources'] = len(self.scene.light_sources)

        if self.verbose >= 1:
            print(f"[TRACER] traced {len(self.scene.light_sources)} light source(s): "
                  f"{self._stats['primary_rays']} primary rays, {len(arena)} segments, "
                  f"{self._stats['target_hits']} target hit(s), BVH rebuilt: {rebuilt}")

        return list(arena.roots)

    def trace_light_source(self, source: 'FocalPoint',
                           arena: Optional[SegmentArena] = None) -> List[Segment]:
        """Trace all rays of one light source; returns their root segments."""
        if arena is None:
            self._sync_index()
            arena = SegmentArena()

        roots: List[Segment] = []
        if source.emit_from_surface:
            for origin, direction in source.get_ray_origins_and_directions():
                medium = self.find_containing_object(origin)
                roots.extend(self.trace_ray(Ray(origin, direction), source.ray_length, medium, arena))
        else:
            medium = self.find_containing_object(source.position)
            for direction in source.get_ray_directions():
                ray = Ray(source.position, direction)
                roots.extend(self.trace_ray(ray, source.ray_length, medium, arena))

        if self.verbose >= 1:
            print(f"[TRACER] source {source.id}: {source.ray_count} rays, {len(roots)} root segments")
        return roots

    def trace_ray(
        self,
        ray: Ray,
        max_distance: float,
        current_medium: Optional['BaseShape'] = None,
        arena: Optional[SegmentArena] = None
    ) -> List[Segment]:
        """
        Expand one primary ray into its segment tree.

        Args:
            ray: The primary ray
            max_distance: Total path length shared by the ray and its descendants
            current_medium: Shape the ray starts inside, None for air
            arena: Arena to store segments in (a new one if omitted)

        Returns:
            The root segments created (empty if the ray produced nothing).
        """
        if arena is None:
            self._sync_index()
            arena = SegmentArena()
        first_root = len(arena.roots)
        self._stats['primary_rays'] += 1

        queue = deque([_QueueEntry(ray, current_medium, max_distance, ray.origin, None, 'source')])

        while queue:
            entry = queue.popleft()
            self._process_entry(entry, queue, arena)

        return arena.roots[first_root:]

    def _process_entry(self, entry: _QueueEntry, queue: deque, arena: SegmentArena) -> None:
        ray = entry.ray

        if ray.intensity < self.settings.min_intensity:
            self._stats['dropped_rays'] += 1
            if self.verbose >= 2:
                print(f"  drop gen={ray.generation} intensity={ray.intensity:.4f}")
            return

        intersection = self.find_closest_intersection(ray, entry.medium)
        canvas_distance = self.get_canvas_boundary_distance(ray)

        candidates = []
        if intersection.hit:
            candidates.append(('target' if intersection.is_target else 'object', intersection.distance))
        if canvas_distance is not None:
            candidates.append(('canvas', canvas_distance))
        if not candidates:
            if self.verbose >= 2:
                print(f"  {ray!r}: no termination found")
            return

        # Stable sort: an object hit wins a tie with the canvas edge
        candidates.sort(key=lambda c: c[1])
        kind, distance = candidates[0]

        if self.verbose >= 2:
            print(f"  {ray!r} medium={entry.medium.id if entry.medium else 'air'} "
                  f"-> {kind} at {distance:.4f}")

        if kind == 'canvas':
            self._emit(arena, entry, ray.point_at(distance))
            return

        if kind == 'target':
            segment = self._emit(arena, entry, intersection.point, hits_target=True)
            arena.mark_path_to_target(segment.index)
            self._stats['target_hits'] += 1
            return

        segment = self._emit(arena, entry, intersection.point)

        if intersection.distance >= entry.remaining_distance:
            return
        remaining = entry.remaining_distance - intersection.distance
        if remaining <= 0 or ray.generation >= self.settings.max_bounces:
            return

        for child in self.calculate_next_rays(ray, intersection, entry.medium):
            queue.append(_QueueEntry(child.ray, child.medium, remaining,
                                     intersection.point, segment.index, child.interaction_type))

    def _emit(self, arena: SegmentArena, entry: _QueueEntry, end: Point,
              hits_target: bool = False) -> Segment:
        self._stats['segments'] += 1
        return arena.add(
            entry.start_point, end, entry.ray.intensity,
            parent=entry.parent_index,
            generation=entry.ray.generation,
            interaction_type=entry.interaction_type,
            hits_target=hits_target
        )

    # =========================================================================
    # Queries
    # =========================================================================

    def find_containing_object(self, point: Point) -> Optional['BaseShape']:
        """
        Obstacle containing `point`, or None for air.

        When several contain it, the most recently added one wins.
        """
        for shape in reversed(self.scene.objects):
            if shape.contains_point(point.x, point.y):
                return shape
        return None

    def find_closest_intersection(self, ray: Ray, current_medium: Optional['BaseShape'] = None) -> Intersection:
        """
        Nearest hit among obstacles and targets.

        The current medium is skipped by the scene query and tested on its
        own for the exit point; the nearer of the two is returned.
        """
        exit_hit = NO_HIT
        if current_medium is not None:
            exit_hit = ray_object_intersection(ray, current_medium)

        if self.settings.use_bvh and not self.spatial_index.needs_rebuild:
            other_hit = self.spatial_index.traverse(ray, current_medium)
        else:
            other_hit = closest_intersection_brute_force(
                self.scene.get_intersectable_shapes(), ray, current_medium
            )

        return closer(other_hit, exit_hit)

    def get_canvas_boundary_distance(self, ray: Ray) -> Optional[float]:
        """
        Distance along the ray to the nearest canvas edge crossing.

        Only crossings with t > 0 that land on the edge (within the canvas
        extent) count. Returns None if there is none.
        """
        width = self.settings.canvas_width
        height = self.settings.canvas_height
        ox, oy = ray.origin.x, ray.origin.y
        dx, dy = ray.direction.x, ray.direction.y

        best = None
        if dx != 0:
            for edge_x in (0.0, width):
                t = (edge_x - ox) / dx
                if t > 0:
                    y = oy + t * dy
                    if 0 <= y <= height and (best is None or t < best):
                        best = t
        if dy != 0:
            for edge_y in (0.0, height):
                t = (edge_y - oy) / dy
                if t > 0:
                    x = ox + t * dx
                    if 0 <= x <= width and (best is None or t < best):
                        best = t
        return best

    def get_canvas_boundary_intersection(self, ray: Ray, max_distance: float) -> Point:
        """Canvas crossing point if closer than max_distance, else the point at max_distance."""
        distance = self.get_canvas_boundary_distance(ray)
        if distance is not None and distance < max_distance:
            return ray.point_at(distance)
        return ray.point_at(max_distance)

    # =========================================================================
    # Surface interaction
    # =========================================================================

    def calculate_next_rays(
        self,
        ray: Ray,
        intersection: Intersection,
        current_medium: Optional['BaseShape']
    ) -> List[ChildRay]:
        """
        Reflected and refracted children at a surface hit.

        A ray travelling in air enters the shape it hits. A ray inside a
        medium always refracts out into air, whichever boundary it hits,
        so the medium flips between None and the hit shape. The energy
        that survives absorption is split by the hit material's
        reflectivity. Under total internal reflection only the reflected
        child is spawned and it carries all of it.

        Returns:
            Reflected child first, then the refracted one if any.
        """
        shape = intersection.shape
        material = shape.material
        air_index = self.settings.air_refractive_index

        if current_medium is not None:
            n1 = current_medium.material.refractive_index
            n2 = air_index
            refracted_medium = None
        else:
            n1 = air_index
            n2 = material.refractive_index
            refracted_medium = shape

        surviving = material.surviving_fraction
        reflectivity = material.reflectivity

        reflected_dir = reflect(ray.direction, intersection.normal)
        refracted_dir = refract(ray.direction, intersection.normal, n1, n2)

        if refracted_dir is None:
            return [ChildRay(ray.spawn(intersection.point, reflected_dir, surviving),
                             current_medium, 'tir')]

        return [
            ChildRay(ray.spawn(intersection.point, reflected_dir, reflectivity * surviving),
                     current_medium, 'reflect'),
            ChildRay(ray.spawn(intersection.point, refracted_dir, (1 - reflectivity) * surviving),
                     refracted_medium, 'refract'),
        ]
