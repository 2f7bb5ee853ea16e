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
Segment Forest Export Utilities
===============================================================================
Flattening, filtering, statistics and CSV export for the segment forests
returned by RayTracer.trace_all().
===============================================================================
"""

import csv
from pathlib import Path
from typing import Any, Dict, Iterable, List, Tuple, Union

import numpy as np

from ..core.segment import Segment, iter_segments


def flatten_segments(forest: Iterable[Segment]) -> List[Tuple[Segment, int]]:
    """
    Flatten a forest into (segment, depth) pairs in depth-first order.

    Depth is 0 for a root segment.
    """
    result = []
    stack = [(root, 0) for root in reversed(list(forest))]
    while stack:
        segment, depth = stack.pop()
        result.append((segment, depth))
        stack.extend((child, depth + 1) for child in reversed(segment.children))
    return result


def filter_target_segments(forest: Iterable[Segment], hits_target: bool = True) -> List[Segment]:
    """
    Segments whose hits_target flag matches.

    Args:
        forest: Root segments
        hits_target: If True, return segments on a path to a target;
            if False, all the others.

    Example:
        >>> lit = filter_target_segments(tracer.trace_all())
    """
    return [s for s in iter_segments(forest) if s.hits_target == hits_target]


def get_segment_statistics(forest: Iterable[Segment]) -> Dict[str, Any]:
    """
    Compute statistics about a segment forest.

    Returns:
        dict: Dictionary containing:
            - total_segments: Number of segments
            - root_segments: Number of trees
            - target_segments: Segments with hits_target set
            - interaction_counts: Segments per interaction type
            - max_generation: Deepest bounce reached
            - total_length: Sum of segment lengths
            - mean_length: Mean segment length
            - total_intensity: Sum of segment intensities
            - mean_intensity: Mean segment intensity
            - min_intensity / max_intensity: Intensity range

    Example:
        >>> stats = get_segment_statistics(forest)
        >>> print(f"Segments: {stats['total_segments']}")
    """
    forest = list(forest)
    segments = list(iter_segments(forest))
    if not segments:
        return {
            'total_segments': 0,
            'root_segments': 0,
            'target_segments': 0,
            'interaction_counts': {},
            'max_generation': 0,
            'total_length': 0.0,
            'mean_length': 0.0,
            'total_intensity': 0.0,
            'mean_intensity': 0.0,
            'min_intensity': 0.0,
            'max_intensity': 0.0,
        }

    starts = np.array([[s.start.x, s.start.y] for s in segments])
    ends = np.array([[s.end.x, s.end.y] for s in segments])
    lengths = np.linalg.norm(ends - starts, axis=1)
    intensities = np.array([s.intensity for s in segments])

    interaction_counts: Dict[str, int] = {}
    for s in segments:
        interaction_counts[s.interaction_type] = interaction_counts.get(s.interaction_type, 0) + 1

    return {
        'total_segments': len(segments),
        'root_segments': len(forest),
        'target_segments': sum(1 for s in segments if s.hits_target),
        'interaction_counts': interaction_counts,
        'max_generation': max(s.generation for s in segments),
        'total_length': float(lengths.sum()),
        'mean_length': float(lengths.mean()),
        'total_intensity': float(intensities.sum()),
        'mean_intensity': float(intensities.mean()),
        'min_intensity': float(intensities.min()),
        'max_intensity': float(intensities.max()),
    }


def save_segments_csv(
    forest: Iterable[Segment],
    output_path: Union[str, Path],
    filename: str = "segments.csv",
    precision_coords: int = 4,
    precision_intensity: int = 6,
) -> Path:
    """
    Export a segment forest to a CSV file, one row per segment.

    Args:
        forest: Root segments as returned by RayTracer.trace_all().
        output_path: Directory where the CSV file will be saved.
        filename: Name of the output CSV file (default: "segments.csv").
        precision_coords: Decimal places for coordinates and lengths (default: 4).
        precision_intensity: Decimal places for intensities (default: 6).

    Returns:
        Path: Full path to the created CSV file.

    Raises:
        ValueError: If a precision is negative.
        OSError: If the output directory cannot be created or file cannot be written.
    """
    if precision_coords < 0 or precision_intensity < 0:
        raise ValueError(
            f"Precision must be >= 0, got coords={precision_coords}, "
            f"intensity={precision_intensity}"
        )

    output_dir = Path(output_path)
    output_dir.mkdir(parents=True, exist_ok=True)

    csv_file = output_dir / filename

    coord_fmt = f"{{:.{precision_coords}f}}"
    intensity_fmt = f"{{:.{precision_intensity}f}}"

    with open(csv_file, 'w', newline='', encoding='utf-8') as f:
        writer = csv.writer(f)
        writer.writerow([
            'index',
            'parent',
            'depth',
            'generation',
            'interaction_type',
            'start_x',
            'start_y',
            'end_x',
            'end_y',
            'intensity',
            'length',
            'hits_target',
        ])

        for segment, depth in flatten_segments(forest):
            writer.writerow([
                segment.index,
                segment.parent if segment.parent is not None else '',
                depth,
                segment.generation,
                segment.interaction_type,
                coord_fmt.format(segment.start.x),
                coord_fmt.format(segment.start.y),
                coord_fmt.format(segment.end.x),
                coord_fmt.format(segment.end.y),
                intensity_fmt.format(segment.intensity),
                coord_fmt.format(segment.length),
                segment.hits_target,
            ])

    return csv_file
