"""
===============================================================================
INTERSECTION TESTS
===============================================================================

Tests for the intersection record, the analytic ray/shape solvers and the
ray/AABB slab test:

1. INTERSECTION RECORD
   - Miss value has infinite distance and no payload
   - closest() / closer() reduction

2. RAY vs LINE SEGMENT / POLYGON
   - Hit distance, point and normal orientation
   - Parallel, behind-the-ray and off-segment misses

3. RAY vs ELLIPSE
   - Hits from outside, exits from inside (inverted normal)
   - Rotated ellipses, misses

4. DISPATCH AND SLAB TEST
   - Light sources never block, targets do
   - Axis-parallel rays inside and outside a slab

Run with:
    python developer_tests/test_geometry_math.py

Or with pytest:
    pytest developer_tests/test_geometry_math.py -v
===============================================================================
"""

import sys
import math
from pathlib import Path

# Add the src-python directory to the path
src_path = Path(__file__).parent.parent.parent
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from ray_tracing_bvh.core.aabb import AABB
from ray_tracing_bvh.core.constants import EPSILON
from ray_tracing_bvh.core.geometry import Point, geometry
from ray_tracing_bvh.core.geometry_math import (
    ray_line_segment_intersection,
    ray_polygon_intersection,
    ray_ellipse_intersection,
    ray_object_intersection,
)
from ray_tracing_bvh.core.intersection import Intersection, NO_HIT, closer, closest
from ray_tracing_bvh.core.ray import Ray
from ray_tracing_bvh.core.scene_objs import (
    Circle, Ellipse, FocalPoint, Rectangle, Target, EquilateralTriangle
)


# =============================================================================
# TEST CONFIGURATION
# =============================================================================

TOLERANCE = 1e-6


def assert_close(actual, expected, tol=TOLERANCE, msg=""):
    """Assert that two values are close within tolerance."""
    if abs(actual - expected) > tol:
        raise AssertionError(
            f"{msg}: expected {expected}, got {actual} (diff: {abs(actual - expected)})"
        )


def assert_point_close(actual, expected_x, expected_y, tol=TOLERANCE, msg=""):
    assert_close(actual.x, expected_x, tol, f"{msg} x")
    assert_close(actual.y, expected_y, tol, f"{msg} y")


# =============================================================================
# INTERSECTION RECORD
# =============================================================================

def test_no_hit_value():
    miss = NO_HIT
    assert not miss.hit
    assert miss.distance == math.inf
    assert miss.point is None and miss.normal is None and miss.shape is None
    assert not miss.is_target


def test_closest_reduction():
    rect = Rectangle(0, 0)
    near = Intersection.make_hit(2.0, Point(2, 0), Point(-1, 0), rect)
    far = Intersection.make_hit(5.0, Point(5, 0), Point(-1, 0), rect)

    assert closest([]) is NO_HIT
    assert closest([NO_HIT, NO_HIT]) is NO_HIT
    assert closest([far, NO_HIT, near]) is near
    assert closer(NO_HIT, far) is far
    assert closer(far, NO_HIT) is far
    assert closer(near, far) is near

    # Ties keep the first argument
    tie = Intersection.make_hit(2.0, Point(2, 0), Point(-1, 0), rect)
    assert closer(near, tie) is near


# =============================================================================
# RAY vs LINE SEGMENT / POLYGON
# =============================================================================

def test_line_segment_hit():
    result = ray_line_segment_intersection(
        Point(0, 0), Point(1, 0), Point(5, -1), Point(5, 1)
    )
    assert result is not None
    t, point, normal = result
    assert_close(t, 5.0, msg="t")
    assert_point_close(point, 5.0, 0.0, msg="point")
    # Normal opposes the incoming ray
    assert_point_close(normal, -1.0, 0.0, msg="normal")


def test_line_segment_normal_flips_with_winding():
    result = ray_line_segment_intersection(
        Point(0, 0), Point(1, 0), Point(5, 1), Point(5, -1)
    )
    _, _, normal = result
    assert_point_close(normal, -1.0, 0.0, msg="normal")


def test_line_segment_misses():
    origin, direction = Point(0, 0), Point(1, 0)
    # Parallel
    assert ray_line_segment_intersection(origin, direction, Point(0, 1), Point(10, 1)) is None
    # Behind the ray
    assert ray_line_segment_intersection(origin, direction, Point(-5, -1), Point(-5, 1)) is None
    # Beyond the segment's ends
    assert ray_line_segment_intersection(origin, direction, Point(5, 1), Point(5, 3)) is None
    # Origin on the segment (t < EPSILON)
    assert ray_line_segment_intersection(origin, direction, Point(EPSILON / 2, -1),
                                         Point(EPSILON / 2, 1)) is None


def test_line_segment_endpoint_counts():
    result = ray_line_segment_intersection(Point(0, 0), Point(1, 0), Point(5, 0), Point(5, 2))
    assert result is not None
    assert_close(result[0], 5.0, msg="t at endpoint")


def test_polygon_nearest_edge():
    rect = Rectangle(600, 300, width=100, height=60)
    hit = ray_polygon_intersection(Point(400, 300), Point(1, 0), rect.get_vertices(), rect)
    assert hit.hit
    assert hit.shape is rect
    assert_close(hit.distance, 150.0, msg="distance")
    assert_point_close(hit.point, 550.0, 300.0, msg="point")
    assert_point_close(hit.normal, -1.0, 0.0, msg="normal")


def test_polygon_exit_from_inside():
    rect = Rectangle(0, 0, width=100, height=60)
    hit = ray_polygon_intersection(Point(0, 0), Point(0, 1), rect.get_vertices(), rect)
    assert_close(hit.distance, 30.0, msg="distance")
    assert_point_close(hit.normal, 0.0, -1.0, msg="normal faces back inside")


def test_polygon_miss():
    rect = Rectangle(600, 300, width=100, height=60)
    assert not ray_polygon_intersection(Point(400, 300), Point(-1, 0), rect.get_vertices(), rect).hit
    assert not ray_polygon_intersection(Point(400, 100), Point(1, 0), rect.get_vertices(), rect).hit


def test_zero_direction_never_hits():
    ray = Ray(Point(0, 0), Point(0, 0))
    assert ray.direction.x == 0 and ray.direction.y == 0
    assert not ray_object_intersection(ray, Rectangle(0, 0)).hit
    assert not ray_object_intersection(ray, Circle(0, 0)).hit


# =============================================================================
# RAY vs ELLIPSE
# =============================================================================

def test_circle_from_outside():
    circle = Circle(0, 0, radius=50)
    hit = ray_ellipse_intersection(Point(-100, 0), Point(1, 0), circle.position,
                                   circle.rx, circle.ry, circle.rotation, circle)
    assert hit.hit
    assert_close(hit.distance, 50.0, msg="distance")
    assert_point_close(hit.point, -50.0, 0.0, msg="point")
    assert_point_close(hit.normal, -1.0, 0.0, msg="outward normal")


def test_circle_from_inside_uses_far_root():
    circle = Circle(0, 0, radius=50)
    hit = ray_ellipse_intersection(Point(0, 0), Point(1, 0), circle.position,
                                   circle.rx, circle.ry, circle.rotation, circle)
    assert hit.hit
    assert_close(hit.distance, 50.0, msg="distance")
    assert_point_close(hit.point, 50.0, 0.0, msg="point")
    # Inverted: points into the interior, against the ray
    assert_point_close(hit.normal, -1.0, 0.0, msg="inward normal")


def test_rotated_ellipse():
    ellipse = Ellipse(0, 0, rx=60, ry=40, rotation=math.pi / 2)
    ray = Ray(Point(-100, 0), Point(1, 0))
    hit = ray_object_intersection(ray, ellipse)
    assert hit.hit
    assert_close(hit.distance, 60.0, tol=1e-9, msg="distance to the short axis")
    assert_point_close(hit.point, -40.0, 0.0, tol=1e-9, msg="point")

    ray = Ray(Point(0, -100), Point(0, 1))
    hit = ray_object_intersection(ray, ellipse)
    assert_close(hit.distance, 40.0, tol=1e-9, msg="distance to the long axis")


def test_ellipse_normal_is_unit_and_faces_ray():
    ellipse = Ellipse(10, 20, rx=60, ry=25, rotation=0.3)
    for k in range(12):
        angle = 2 * math.pi * k / 12
        direction = Point(math.cos(angle), math.sin(angle))
        origin = geometry.add(ellipse.position, geometry.scale(direction, -200))
        hit = ray_object_intersection(Ray(origin, direction), ellipse)
        assert hit.hit, f"ray {k} should hit"
        assert_close(geometry.length(hit.normal), 1.0, msg=f"unit normal {k}")
        assert geometry.dot(hit.normal, direction) < 0
        assert ellipse.contains_point(hit.point.x * 0.999 + ellipse.x * 0.001,
                                      hit.point.y * 0.999 + ellipse.y * 0.001)


def test_ellipse_misses():
    circle = Circle(0, 0, radius=50)
    assert not ray_object_intersection(Ray(Point(-100, 100), Point(1, 0)), circle).hit
    assert not ray_object_intersection(Ray(Point(100, 0), Point(1, 0)), circle).hit


# =============================================================================
# DISPATCH AND SLAB TEST
# =============================================================================

def test_dispatch_by_kind():
    ray = Ray(Point(-100, 0), Point(1, 0))
    assert not ray_object_intersection(ray, FocalPoint(0, 0, radius=20)).hit

    # Diamond of half-size 10: at y=2 its left edge is at x=-8
    target_hit = ray_object_intersection(Ray(Point(-100, 2), Point(1, 0)), Target(0, 0, size=20))
    assert target_hit.hit and target_hit.is_target
    assert_close(target_hit.distance, 92.0, msg="target distance")

    tri = EquilateralTriangle(0, 0, side_length=60)
    tri_hit = ray_object_intersection(ray, tri)
    assert tri_hit.hit and not tri_hit.is_target


def test_slab_test_basic():
    box = AABB(0, 0, 10, 10)
    assert box.intersects_ray(Ray(Point(-5, 5), Point(1, 0)))
    assert box.intersects_ray(Ray(Point(-5, -5), Point(1, 1)))
    assert box.intersects_ray(Ray(Point(5, 5), Point(-1, 0.3)))   # origin inside
    assert not box.intersects_ray(Ray(Point(-5, 5), Point(-1, 0)))  # pointing away
    assert not box.intersects_ray(Ray(Point(-5, 20), Point(1, 0.1)))


def test_slab_test_axis_parallel():
    box = AABB(0, 0, 10, 10)
    # Zero y-component: origin's y must be inside [0, 10]
    assert box.intersects_ray(Ray(Point(-5, 10), Point(1, 0)))
    assert not box.intersects_ray(Ray(Point(-5, 10.5), Point(1, 0)))
    # Zero x-component
    assert box.intersects_ray(Ray(Point(3, 50), Point(0, -1)))
    assert not box.intersects_ray(Ray(Point(-1, 50), Point(0, -1)))


def test_aabb_helpers():
    a = AABB(0, 0, 10, 4)
    b = AABB(5, -2, 12, 3)
    u = a.union(b)
    assert u.as_tuple() == (0, -2, 12, 4)
    assert_close(a.surface_area(), 40.0, msg="area")
    assert_close(AABB.empty().surface_area(), 0.0, msg="empty area")
    assert_point_close(a.centroid(), 5.0, 2.0, msg="centroid")
    assert AABB.union_all([a, b]) == u
    assert AABB.from_points([Point(1, 2), Point(-1, 5)]).as_tuple() == (-1, 2, 1, 5)


# =============================================================================
# MAIN
# =============================================================================

def run_all_tests():
    """Run all tests and report results."""
    print("\n" + "=" * 78)
    print("INTERSECTION TESTS")
    print("=" * 78)

    tests = [
        ("NO_HIT value", test_no_hit_value),
        ("closest() reduction", test_closest_reduction),
        ("Segment hit", test_line_segment_hit),
        ("Segment normal vs winding", test_line_segment_normal_flips_with_winding),
        ("Segment misses", test_line_segment_misses),
        ("Segment endpoint", test_line_segment_endpoint_counts),
        ("Polygon nearest edge", test_polygon_nearest_edge),
        ("Polygon exit from inside", test_polygon_exit_from_inside),
        ("Polygon miss", test_polygon_miss),
        ("Zero direction", test_zero_direction_never_hits),
        ("Circle from outside", test_circle_from_outside),
        ("Circle from inside", test_circle_from_inside_uses_far_root),
        ("Rotated ellipse", test_rotated_ellipse),
        ("Ellipse normals", test_ellipse_normal_is_unit_and_faces_ray),
        ("Ellipse misses", test_ellipse_misses),
        ("Dispatch by kind", test_dispatch_by_kind),
        ("Slab test", test_slab_test_basic),
        ("Slab test, axis-parallel", test_slab_test_axis_parallel),
        ("AABB helpers", test_aabb_helpers),
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
