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
Segment trees produced by the tracer.

Each traced bounce is a Segment. Children are owned by their parent's
`children` list; the upward link is only the parent's index in the
SegmentArena of the trace, used to flag a whole path when a descendant
reaches a target.
"""

from typing import Any, Dict, Iterable, Iterator, List, Optional

from .geometry import Point, geometry


class Segment:
    """
    One straight piece of a traced light path.

    Attributes:
        index (int): Position in the arena of the trace that produced it
        start (Point): Start point
        end (Point): End point
        intensity (float): Intensity of the ray along this piece
        generation (int): Bounce count of the ray that drew it
        interaction_type (str): How the ray was created:
            'source' = emitted by a light source
            'reflect' = reflected at a surface
            'refract' = refracted through a surface
            'tir' = total internal reflection
        hits_target (bool): True if this piece or a descendant ends on a target
        parent (int or None): Arena index of the parent segment
        children (list): Child segments, reflected before refracted
    """

    __slots__ = ('index', 'start', 'end', 'intensity', 'generation',
                 'interaction_type', 'hits_target', 'parent', 'children')

    def __init__(
        self,
        index: int,
        start: Point,
        end: Point,
        intensity: float,
        generation: int = 0,
        interaction_type: str = 'source',
        hits_target: bool = False,
        parent: Optional[int] = None
    ):
        self.index = index
        self.start = start
        self.end = end
        self.intensity = intensity
        self.generation = generation
        self.interaction_type = interaction_type
        self.hits_target = hits_target
        self.parent = parent
        self.children: List['Segment'] = []

    @property
    def length(self) -> float:
        return geometry.distance(self.start, self.end)

    @property
    def is_terminal(self) -> bool:
        return not self.children

    def to_dict(self) -> Dict[str, Any]:
        """Nested dict of this segment and its subtree."""
        return {
            'index': self.index,
            'start': self.start.to_dict(),
            'end': self.end.to_dict(),
            'intensity': self.intensity,
            'generation': self.generation,
            'interaction_type': self.interaction_type,
            'hits_target': self.hits_target,
            'parent': self.parent,
            'children': [child.to_dict() for child in self.children],
        }

    def __repr__(self) -> str:
        return (f"Segment(#{self.index}, ({self.start.x:.2f}, {self.start.y:.2f}) -> "
                f"({self.end.x:.2f}, {self.end.y:.2f}), intensity={self.intensity:.4f}, "
                f"hits_target={self.hits_target}, children={len(self.children)})")


class SegmentArena:
    """
    Flat store of every segment created during one trace.

    Usage:
        arena = SegmentArena()
        root = arena.add(p0, p1, 1.0)
        child = arena.add(p1, p2, 0.5, parent=root.index)
        arena.mark_path_to_target(child.index)
    """

    def __init__(self) -> None:
        self._segments: List[Segment] = []
        self.roots: List[Segment] = []

    def add(
        self,
        start: Point,
        end: Point,
        intensity: float,
        parent: Optional[int] = None,
        generation: int = 0,
        interaction_type: str = 'source',
        hits_target: bool = False
    ) -> Segment:
        """Create a segment and attach it under `parent` (or as a root)."""
        segment = Segment(len(self._segments), start, end, intensity,
                          generation, interaction_type, hits_target, parent)
        self._segments.append(segment)
        if parent is None:
            self.roots.append(segment)
        else:
            self._segments[parent].children.append(segment)
        return segment

    def mark_path_to_target(self, index: int) -> int:
        """
        Set hits_target on a segment and all of its ancestors.

        Returns:
            Number of segments flagged (including the segment itself).
        """
        flagged = 0
        current: Optional[int] = index
        while current is not None:
            segment = self._segments[current]
            segment.hits_target = True
            flagged += 1
            current = segment.parent
        return flagged

    def get_ancestors(self, index: int) -> List[Segment]:
        """Ancestors of a segment, ordered root-first, excluding the segment."""
        result = []
        current = self._segments[index].parent
        while current is not None:
            result.append(self._segments[current])
            current = self._segments[current].parent
        result.reverse()
        return result

    def __len__(self) -> int:
        return len(self._segments)

    def __getitem__(self, index: int) -> Segment:
        return self._segments[index]

    def __iter__(self) -> Iterator[Segment]:
        return iter(self._segments)


def iter_segments(forest: Iterable[Segment]) -> Iterator[Segment]:
    """Depth-first pre-order walk over every segment of a forest."""
    stack = list(reversed(list(forest)))
    while stack:
        segment = stack.pop()
        yield segment
        stack.extend(reversed(segment.children))


def count_segments(forest: Iterable[Segment]) -> int:
    return sum(1 for _ in iter_segments(forest))


def segment_depth(segment: Segment) -> int:
    """Number of segments on the longest path from `segment` down to a leaf."""
    depth = 0
    level = [segment]
    while level:
        depth += 1
        level = [child for s in level for child in s.children]
    return depth
