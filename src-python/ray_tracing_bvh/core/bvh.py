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
Bounding volume hierarchy over scene shapes.

The tree is built top-down with the surface-area heuristic and is never
updated in place: any scene change discards it and a new one is built
by `SpatialIndex` the next time a trace needs it.
"""

from enum import Enum
from typing import Dict, List, NamedTuple, Optional, Sequence, TYPE_CHECKING

from .aabb import AABB
from .constants import DEFAULT_MAX_OBJECTS_PER_LEAF, SAH_MAX_SPLIT_CANDIDATES
from .geometry_math import ray_object_intersection
from .intersection import Intersection, NO_HIT, closer
from .ray import Ray

if TYPE_CHECKING:
    from .scene_objs.base_shape import BaseShape


def closest_intersection_brute_force(
    shapes: Sequence['BaseShape'],
    ray: Ray,
    current_medium: Optional['BaseShape'] = None
) -> Intersection:
    """
    Test the ray against every shape and keep the closest hit.

    The shape the ray is currently travelling inside is skipped (by
    identity); its exit boundary is handled separately by the tracer.
    """
    best = NO_HIT
    for shape in shapes:
        if shape is current_medium:
            continue
        candidate = ray_object_intersection(ray, shape)
        if candidate.is_closer_than(best):
            best = candidate
    return best


class BVHNode:
    """
    A node of the hierarchy.

    Leaves hold up to `max_objects_per_leaf` shapes (more only when no
    split was possible); internal nodes hold exactly two children.
    """

    __slots__ = ('bounding_box', 'shapes', 'left', 'right')

    def __init__(
        self,
        bounding_box: AABB,
        shapes: Optional[List['BaseShape']] = None,
        left: Optional['BVHNode'] = None,
        right: Optional['BVHNode'] = None
    ):
        self.bounding_box = bounding_box
        self.shapes = shapes if shapes is not None else []
        self.left = left
        self.right = right

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def __repr__(self) -> str:
        if self.is_leaf:
            return f"BVHNode(leaf, shapes={len(self.shapes)}, box={self.bounding_box})"
        return f"BVHNode(internal, box={self.bounding_box})"


class BVHSplit(NamedTuple):
    """Best partition found by `BVH.find_best_split`."""
    left: List['BaseShape']
    right: List['BaseShape']
    axis: str
    cost: float


class BVH:
    """
    Surface-area-heuristic BVH.

    Args:
        shapes: Shapes to index (obstacles and targets)
        max_objects_per_leaf: Leaf capacity, at least 1

    Usage:
        bvh = BVH(scene.objects + scene.targets)
        hit = bvh.traverse(ray, current_medium)
    """

    def __init__(self, shapes: Sequence['BaseShape'],
                 max_objects_per_leaf: int = DEFAULT_MAX_OBJECTS_PER_LEAF):
        if max_objects_per_leaf < 1:
            raise ValueError(f"max_objects_per_leaf must be >= 1, got {max_objects_per_leaf}")
        self.max_objects_per_leaf = int(max_objects_per_leaf)
        self.root: Optional[BVHNode] = None
        if len(shapes) > 0:
            self.root = self.build(list(shapes))

    # =========================================================================
    # Construction
    # =========================================================================

    def build(self, shapes: List['BaseShape']) -> BVHNode:
        """Recursively build the subtree covering `shapes`."""
        boxes = [shape.get_bounding_box() for shape in shapes]
        node_box = AABB.union_all(boxes)

        if len(shapes) <= self.max_objects_per_leaf:
            return BVHNode(node_box, shapes=shapes)

        split = self.find_best_split(shapes, boxes)
        if split is None:
            # Degenerate partition: keep everything in one leaf
            return BVHNode(node_box, shapes=shapes)

        return BVHNode(node_box, left=self.build(split.left), right=self.build(split.right))

    @staticmethod
    def find_best_split(
        shapes: List['BaseShape'],
        boxes: Optional[List[AABB]] = None
    ) -> Optional[BVHSplit]:
        """
        Find the cheapest partition of `shapes` along x or y.

        Shapes are sorted by the centre of their bounding box along each
        axis and up to SAH_MAX_SPLIT_CANDIDATES evenly spaced partition
        points are scored with

            cost = area(left box) * len(left) + area(right box) * len(right)

        Returns:
            The lowest-cost split, or None if no candidate leaves both
            sides non-empty.
        """
        if boxes is None:
            boxes = [shape.get_bounding_box() for shape in shapes]

        count = len(shapes)
        num_splits = min(count - 1, SAH_MAX_SPLIT_CANDIDATES)
        best: Optional[BVHSplit] = None

        for axis in ('x', 'y'):
            if axis == 'x':
                keys = [(box.min_x + box.max_x) / 2 for box in boxes]
            else:
                keys = [(box.min_y + box.max_y) / 2 for box in boxes]
            order = sorted(range(count), key=lambda i: keys[i])

            for i in range(1, num_splits + 1):
                split_index = (count * i) // (num_splits + 1)
                left_ids = order[:split_index]
                right_ids = order[split_index:]
                if not left_ids or not right_ids:
                    continue

                left_box = AABB.union_all(boxes[j] for j in left_ids)
                right_box = AABB.union_all(boxes[j] for j in right_ids)
                cost = (left_box.surface_area() * len(left_ids) +
                        right_box.surface_area() * len(right_ids))

                if best is None or cost < best.cost:
                    best = BVHSplit(
                        left=[shapes[j] for j in left_ids],
                        right=[shapes[j] for j in right_ids],
                        axis=axis,
                        cost=cost
                    )

        return best

    # =========================================================================
    # Queries
    # =========================================================================

    def traverse(self, ray: Ray, current_medium: Optional['BaseShape'] = None) -> Intersection:
        """
        Closest intersection of the ray with the indexed shapes.

        Subtrees whose box the ray misses are skipped. Both children of an
        internal node are always visited and the closer result is kept.
        """
        if self.root is None:
            return NO_HIT
        return self._traverse_node(self.root, ray, current_medium)

    def _traverse_node(self, node: BVHNode, ray: Ray,
                       current_medium: Optional['BaseShape']) -> Intersection:
        if not node.bounding_box.intersects_ray(ray):
            return NO_HIT

        if node.is_leaf:
            return closest_intersection_brute_force(node.shapes, ray, current_medium)

        left_hit = self._traverse_node(node.left, ray, current_medium)
        right_hit = self._traverse_node(node.right, ray, current_medium)
        return closer(left_hit, right_hit)

    def stats(self) -> Dict[str, int]:
        """Depth, node, leaf and indexed-shape counts of the tree."""
        stats = {'depth': 0, 'node_count': 0, 'leaf_count': 0, 'object_count': 0}
        if self.root is None:
            return stats

        stack = [(self.root, 0)]
        while stack:
            node, depth = stack.pop()
            stats['node_count'] += 1
            stats['depth'] = max(stats['depth'], depth)
            if node.is_leaf:
                stats['leaf_count'] += 1
                stats['object_count'] += len(node.shapes)
            else:
                stack.append((node.right, depth + 1))
                stack.append((node.left, depth + 1))
        return stats


class BVHState(Enum):
    """Lifecycle of the tracer's spatial index."""
    EMPTY = 'empty'
    BUILT = 'built'
    DIRTY = 'dirty'
    REBUILDING = 'rebuilding'


class SpatialIndex:
    """
    Owns the current BVH and decides when it must be rebuilt.

    EMPTY -> BUILT -> (DIRTY) -> REBUILDING -> BUILT

    Building over an empty shape list leaves the index EMPTY with no tree,
    so the next query falls back to brute force and the next
    `ensure_built` tries again.

    Attributes:
        state (BVHState): Current lifecycle state
        bvh (BVH or None): The current tree
        rebuild_count (int): Number of rebuilds performed so far
    """

    def __init__(self, max_objects_per_leaf: int = DEFAULT_MAX_OBJECTS_PER_LEAF, verbose: int = 0):
        self.state = BVHState.EMPTY
        self.bvh: Optional[BVH] = None
        self.rebuild_count = 0
        self.verbose = verbose
        self._max_objects_per_leaf = DEFAULT_MAX_OBJECTS_PER_LEAF
        self.max_objects_per_leaf = max_objects_per_leaf

    @property
    def max_objects_per_leaf(self) -> int:
        return self._max_objects_per_leaf

    @max_objects_per_leaf.setter
    def max_objects_per_leaf(self, value: int) -> None:
        if value < 1:
            raise ValueError(f"max_objects_per_leaf must be >= 1, got {value}")
        if value != self._max_objects_per_leaf:
            self._max_objects_per_leaf = int(value)
            self.mark_dirty()

    def mark_dirty(self) -> None:
        """Schedule a rebuild for the next trace."""
        if self.state is BVHState.BUILT:
            self.state = BVHState.DIRTY

    @property
    def needs_rebuild(self) -> bool:
        return self.state is not BVHState.BUILT or self.bvh is None

    def rebuild(self, shapes: Sequence['BaseShape']) -> Optional[BVH]:
        """Discard the current tree and build a new one over `shapes`."""
        self.state = BVHState.REBUILDING
        self.bvh = None
        if len(shapes) > 0:
            self.bvh = BVH(shapes, self._max_objects_per_leaf)
        self.rebuild_count += 1
        self.state = BVHState.BUILT if self.bvh is not None else BVHState.EMPTY

        if self.verbose >= 1:
            print(f"[BVH] rebuild #{self.rebuild_count}: {self.stats()}")
        return self.bvh

    def ensure_built(self, shapes: Sequence['BaseShape']) -> bool:
        """
        Rebuild if needed.

        Returns:
            True if a rebuild happened.
        """
        if self.needs_rebuild:
            self.rebuild(shapes)
            return True
        return False

    def traverse(self, ray: Ray, current_medium: Optional['BaseShape'] = None) -> Intersection:
        if self.bvh is None:
            return NO_HIT
        return self.bvh.traverse(ray, current_medium)

    def stats(self) -> Dict[str, int]:
        if self.bvh is None:
            return {'depth': 0, 'node_count': 0, 'leaf_count': 0, 'object_count': 0}
        return self.bvh.stats()
