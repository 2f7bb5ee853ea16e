"""
===============================================================================
BVH TESTS
===============================================================================

Tests for core/bvh.py:

1. CONSTRUCTION
   - Leaf capacity respected, every shape indexed exactly once
   - Node boxes contain their children
   - find_best_split() picks the obvious partition / returns None

2. EQUIVALENCE
   - BVH traversal agrees with brute force (hit flag and distance) on
     randomized scenes of 1 to 200 shapes, with and without a current medium

3. SPATIAL INDEX STATE MACHINE
   - EMPTY -> BUILT -> DIRTY -> BUILT, rebuild counting
   - Empty shape list leaves no tree

Random scenes use a seeded numpy Generator so failures are reproducible.

Run with:
    python developer_tests/test_bvh.py

Or with pytest:
    pytest developer_tests/test_bvh.py -v
===============================================================================
"""

import sys
import math
from pathlib import Path

import numpy as np

# Add the src-python directory to the path
src_path = Path(__file__).parent.parent.parent
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from ray_tracing_bvh.core.bvh import (
    BVH, BVHState, SpatialIndex, closest_intersection_brute_force
)
from ray_tracing_bvh.core.geometry import Point
from ray_tracing_bvh.core.ray import Ray
from ray_tracing_bvh.core.scene_objs import (
    Circle, Ellipse, EquilateralTriangle, Rectangle, Square, Target, Triangle
)


# =============================================================================
# TEST CONFIGURATION
# =============================================================================

TOLERANCE = 1e-9
SCENE_SIZES = (1, 2, 5, 17, 64, 200)
RAYS_PER_SCENE = 150


def assert_close(actual, expected, tol=TOLERANCE, msg=""):
    """Assert that two values are close within tolerance."""
    if abs(actual - expected) > tol:
        raise AssertionError(
            f"{msg}: expected {expected}, got {actual} (diff: {abs(actual - expected)})"
        )


def random_shape(rng):
    """One random shape somewhere on an 800 x 600 canvas."""
    x = rng.uniform(0, 800)
    y = rng.uniform(0, 600)
    rotation = rng.uniform(0, 2 * math.pi)
    kind = rng.integers(0, 7)
    if kind == 0:
        return Rectangle(x, y, width=rng.uniform(5, 80), height=rng.uniform(5, 80), rotation=rotation)
    if kind == 1:
        return Square(x, y, side_length=rng.uniform(5, 60), rotation=rotation)
    if kind == 2:
        return Ellipse(x, y, rx=rng.uniform(5, 60), ry=rng.uniform(5, 60), rotation=rotation)
    if kind == 3:
        return Circle(x, y, radius=rng.uniform(5, 50))
    if kind == 4:
        a, b = rng.uniform(20, 60, size=2)
        c = rng.uniform(abs(a - b) + 1, a + b - 1)
        return Triangle(x, y, a, b, c, rotation=rotation)
    if kind == 5:
        return EquilateralTriangle(x, y, side_length=rng.uniform(10, 60), rotation=rotation)
    return Target(x, y, size=rng.uniform(10, 30), rotation=rotation)


def random_scene(rng, count):
    return [random_shape(rng) for _ in range(count)]


def random_ray(rng):
    angle = rng.uniform(0, 2 * math.pi)
    origin = Point(rng.uniform(-100, 900), rng.uniform(-100, 700))
    return Ray(origin, Point(math.cos(angle), math.sin(angle)))


def collect_leaves(node, out):
    if node.is_leaf:
        out.append(node)
    else:
        collect_leaves(node.left, out)
        collect_leaves(node.right, out)
    return out


def check_boxes_nested(node):
    if node.is_leaf:
        for shape in node.shapes:
            assert node.bounding_box.contains_box(shape.get_bounding_box(), 1e-9)
        return
    for child in (node.left, node.right):
        assert node.bounding_box.contains_box(child.bounding_box, 1e-9)
        check_boxes_nested(child)


# =============================================================================
# CONSTRUCTION
# =============================================================================

def test_build_structure():
    rng = np.random.default_rng(7)
    for count in SCENE_SIZES:
        shapes = random_scene(rng, count)
        bvh = BVH(shapes, max_objects_per_leaf=4)
        leaves = collect_leaves(bvh.root, [])

        indexed = [s for leaf in leaves for s in leaf.shapes]
        assert len(indexed) == count
        assert {id(s) for s in indexed} == {id(s) for s in shapes}
        for leaf in leaves:
            assert 1 <= len(leaf.shapes) <= 4, f"leaf with {len(leaf.shapes)} shapes"

        check_boxes_nested(bvh.root)

        stats = bvh.stats()
        assert stats['object_count'] == count
        assert stats['leaf_count'] == len(leaves)
        assert stats['node_count'] == 2 * len(leaves) - 1
        if count <= 4:
            assert stats['depth'] == 0


def test_max_objects_per_leaf():
    rng = np.random.default_rng(11)
    shapes = random_scene(rng, 40)
    bvh = BVH(shapes, max_objects_per_leaf=1)
    assert all(len(leaf.shapes) == 1 for leaf in collect_leaves(bvh.root, []))
    assert bvh.stats()['leaf_count'] == 40

    try:
        BVH(shapes, max_objects_per_leaf=0)
    except ValueError:
        pass
    else:
        raise AssertionError("max_objects_per_leaf=0 should raise ValueError")


def test_find_best_split_separates_clusters():
    left_cluster = [Circle(50 + 10 * i, 300, radius=4) for i in range(3)]
    right_cluster = [Circle(700 + 10 * i, 300, radius=4) for i in range(3)]
    split = BVH.find_best_split(left_cluster + right_cluster)
    assert split is not None
    assert split.axis == 'x'
    assert {id(s) for s in split.left} == {id(s) for s in left_cluster}
    assert {id(s) for s in split.right} == {id(s) for s in right_cluster}


def test_find_best_split_single_shape():
    assert BVH.find_best_split([Circle(0, 0)]) is None


def test_empty_bvh():
    bvh = BVH([])
    assert bvh.root is None
    assert not bvh.traverse(Ray(Point(0, 0), Point(1, 0))).hit
    assert bvh.stats() == {'depth': 0, 'node_count': 0, 'leaf_count': 0, 'object_count': 0}


# =============================================================================
# EQUIVALENCE
# =============================================================================

def test_bvh_matches_brute_force():
    rng = np.random.default_rng(2024)
    for count in SCENE_SIZES:
        shapes = random_scene(rng, count)
        bvh = BVH(shapes)
        for _ in range(RAYS_PER_SCENE):
            ray = random_ray(rng)
            medium = None
            if rng.random() < 0.3:
                medium = shapes[int(rng.integers(0, count))]

            expected = closest_intersection_brute_force(shapes, ray, medium)
            actual = bvh.traverse(ray, medium)

            assert actual.hit == expected.hit, f"hit flags differ for {ray!r} in {count}-shape scene"
            if expected.hit:
                assert_close(actual.distance, expected.distance,
                             msg=f"distance for {ray!r} in {count}-shape scene")


def test_medium_is_skipped():
    outer = Rectangle(400, 300, width=200, height=200)
    inner = Circle(450, 300, radius=20)
    ray = Ray(Point(400, 300), Point(1, 0))

    with_medium = BVH([outer, inner]).traverse(ray, outer)
    assert with_medium.shape is inner
    assert_close(with_medium.distance, 30.0, msg="distance to the inner circle")

    ray_away = Ray(Point(400, 300), Point(-1, 0))
    assert not BVH([outer, inner]).traverse(ray_away, outer).hit
    assert not closest_intersection_brute_force([outer, inner], ray_away, outer).hit


# =============================================================================
# SPATIAL INDEX STATE MACHINE
# =============================================================================

def test_spatial_index_lifecycle():
    shapes = [Rectangle(100, 100), Circle(400, 300)]
    index = SpatialIndex()
    assert index.state is BVHState.EMPTY
    assert index.needs_rebuild

    assert index.ensure_built(shapes)
    assert index.state is BVHState.BUILT
    assert index.rebuild_count == 1
    assert not index.ensure_built(shapes)
    assert index.rebuild_count == 1

    index.mark_dirty()
    assert index.state is BVHState.DIRTY
    assert index.ensure_built(shapes)
    assert index.state is BVHState.BUILT
    assert index.rebuild_count == 2

    index.max_objects_per_leaf = 1
    assert index.state is BVHState.DIRTY


def test_spatial_index_empty_scene():
    index = SpatialIndex()
    index.rebuild([])
    assert index.bvh is None
    assert index.state is BVHState.EMPTY
    assert index.needs_rebuild
    assert not index.traverse(Ray(Point(0, 0), Point(1, 0))).hit
    assert index.stats()['node_count'] == 0


# =============================================================================
# MAIN
# =============================================================================

def run_all_tests():
    """Run all tests and report results."""
    print("\n" + "=" * 78)
    print("BVH TESTS")
    print("=" * 78)

    tests = [
        ("Build structure", test_build_structure),
        ("max_objects_per_leaf", test_max_objects_per_leaf),
        ("find_best_split() clusters", test_find_best_split_separates_clusters),
        ("find_best_split() single shape", test_find_best_split_single_shape),
        ("Empty BVH", test_empty_bvh),
        ("BVH vs brute force", test_bvh_matches_brute_force),
        ("Medium skipped", test_medium_is_skipped),
        ("SpatialIndex lifecycle", test_spatial_index_lifecycle),
        ("SpatialIndex empty scene", test_spatial_index_empty_scene),
    ]

    passed = 0
    errors = []

    for name, test_func in tests:
        try:
            test_func()
            passed += 1
            print(f"  ok: {name}")
        except Exception as e:
            errors.append((name, str(e)))
            print(f"\n  FAILED: {name}")
            print(f"    Error: {e}")

    print("\n" + "=" * 78)
    print(f"SUMMARY: {passed}/{len(tests)} tests passed")
    print("=" * 78)

    if errors:
        print("\nFailed tests:")
        for name, error in errors:
            print(f"  - {name}: {error}")
        return False

    print("\nAll tests passed!")
    return True


if __name__ == "__main__":
    success = run_all_tests()
    sys.exit(0 if success else 1)
