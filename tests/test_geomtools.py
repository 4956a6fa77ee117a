import math

import pytest

from j3dmath import Bounds3D, Matrix3D, Vector3D
from j3dmath import geomtools
## unit tests for j3dmath geomtools.py
## functions are reached through the module so pytest does not collect
## the geomtools.test_* intersection routines

I = Matrix3D.IDENTITY
ZERO = Vector3D.ZERO
UNIT = Bounds3D(Vector3D(0, 0, 0), Vector3D(1, 1, 1))
CENTERED = Bounds3D(Vector3D(-0.5, -0.5, -0.5), Vector3D(0.5, 0.5, 0.5))


class TestComparisons:
    """scalar comparison predicates"""

    def test_default_epsilon(self):
        assert geomtools.EPSILON == 0.00001

    def test_almost_equal(self):
        assert geomtools.almost_equal(1.0, 1.0)
        assert geomtools.almost_equal(1.0, 1.000001)
        assert geomtools.almost_equal(1.000001, 1.0)
        assert not geomtools.almost_equal(1.0, 1.0001)
        assert geomtools.almost_equal(1.0, 1.05, 0.1)

    @pytest.mark.parametrize("a,b", [(1.0, 1.000001), (1.000001, 1.0), (2.0, 2.0)])
    def test_band_of_indifference(self, a, b):
        assert geomtools.almost_equal(a, b)
        assert not geomtools.significantly_less_than(a, b)
        assert not geomtools.significantly_greater_than(a, b)
        assert geomtools.less_or_almost_equal(a, b)
        assert geomtools.greater_or_almost_equal(a, b)

    def test_clear_ordering(self):
        assert geomtools.significantly_less_than(1.0, 1.001)
        assert not geomtools.significantly_greater_than(1.0, 1.001)
        assert geomtools.significantly_greater_than(1.001, 1.0)
        assert geomtools.less_or_almost_equal(1.0, 1.001)
        assert not geomtools.greater_or_almost_equal(1.0, 1.001)
        assert geomtools.greater_or_almost_equal(1.001, 1.0)
        assert not geomtools.less_or_almost_equal(1.001, 1.0)

    def test_custom_epsilon(self):
        assert not geomtools.significantly_less_than(1.0, 1.001, 0.01)
        assert geomtools.significantly_less_than(1.0, 1.001, 0.0001)


class TestArcs:
    """arc height, radius and angle conversions"""

    def test_semicircle(self):
        assert geomtools.arc_height_to_radius(2.0, 1.0) == 1.0
        assert geomtools.arc_radius_to_height(2.0, 1.0) == 1.0
        assert geomtools.arc_height_to_angle(2.0, 1.0) == pytest.approx(math.pi)
        assert geomtools.arc_angle_to_height(2.0, math.pi) == pytest.approx(1.0)

    def test_shallow_arc(self):
        radius = geomtools.arc_height_to_radius(4.0, 0.5)
        assert radius == pytest.approx(4.25)
        assert geomtools.arc_radius_to_height(4.0, radius) == pytest.approx(0.5)
        angle = geomtools.arc_height_to_angle(4.0, 0.5)
        assert geomtools.arc_angle_to_height(4.0, angle) == pytest.approx(0.5)

    def test_radius_edge_cases(self):
        assert math.isnan(geomtools.arc_radius_to_height(2.0, 0.5))
        assert geomtools.arc_radius_to_height(0.0, 0.0) == 0.0
        assert geomtools.arc_radius_to_height(2.0, -1.0) == -1.0


class TestIntersections:
    """sphere, box and rectangle intersection tests"""

    def test_spheres(self):
        assert geomtools.test_sphere_intersection(
            ZERO, 1.0, I, Vector3D(1.5, 0, 0), 1.0)
        ## touching spheres do not intersect
        assert not geomtools.test_sphere_intersection(
            ZERO, 1.0, I, Vector3D(2, 0, 0), 1.0)
        shift = Matrix3D.get_translation_xyz(-1, 0, 0)
        assert geomtools.test_sphere_intersection(
            ZERO, 1.0, shift, Vector3D(2, 0, 0), 1.0)

    def test_sphere_delta(self):
        assert geomtools.test_sphere_intersection_delta(1.0, 1.0, 1.0, 1.0, 1.0)
        assert not geomtools.test_sphere_intersection_delta(0.5, 1.0, 1.0, 1.0, 0.5)

    def test_sphere_box(self):
        center = Vector3D(0.5, 0.5, 0.5)
        assert geomtools.test_sphere_box_intersection(center, 0.1, UNIT)
        side = Vector3D(2, 0.5, 0.5)
        assert not geomtools.test_sphere_box_intersection(side, 1.0, UNIT)
        assert geomtools.test_sphere_box_intersection(side, 1.5, UNIT)
        assert not geomtools.test_sphere_box_intersection(
            Vector3D(3, 0.5, 0.5), 1.0, UNIT)
        edge = Vector3D(1.5, 1.5, 0.5)
        assert not geomtools.test_sphere_box_intersection(edge, 0.7, UNIT)
        assert geomtools.test_sphere_box_intersection(edge, 0.75, UNIT)

    def test_rectangles(self):
        assert geomtools.test_rectangle_rectangle_intersection(0, 0, 1, 1, 1, 1, 2, 2)
        assert not geomtools.test_rectangle_rectangle_intersection(0, 0, 1, 1, 2, 2, 3, 3)
        assert geomtools.test_rectangle_rectangle_intersection(1, 1, 0, 0, 0.5, 0.5, 2, 2)
        assert not geomtools.test_rectangle_rectangle_intersection(0, 0, 1, 1, 0.5, 1.5, 2, 2)


class TestOrientedBoxes:
    """separating axis test for oriented bounding boxes"""

    def test_identical(self):
        assert geomtools.test_oriented_bounding_box_intersection(UNIT, I, UNIT)

    @pytest.mark.parametrize("offset,expected", [
        ((0.5, 0, 0), True),
        ((0, -0.9, 0.9), True),
        ((2, 0, 0), False),
        ((0, 0, -3), False),
        ## sharing a face is not an intersection
        ((1, 0, 0), False),
        ((0, 1, 0), False),
    ])
    def test_translated(self, offset, expected):
        m = Matrix3D.get_translation_xyz(*offset)
        assert geomtools.test_oriented_bounding_box_intersection(UNIT, m, UNIT) is expected

    @pytest.mark.parametrize("x,expected", [
        (1.1, True),
        (1.2, True),
        (1.3, False),
    ])
    def test_rotated(self, x, expected):
        ## the rotated cube reaches sqrt(2)/2 along x
        m = I.rotate_z(math.pi / 4).plus_xyz(x, 0, 0)
        assert geomtools.test_oriented_bounding_box_intersection(
            CENTERED, m, CENTERED) is expected

    @pytest.mark.parametrize("d,expected", [
        (0.95, True),
        (0.99, True),
        (1.01, False),
        (1.05, False),
        (1.1, False),
    ])
    def test_edge_axis_separates(self, d, expected):
        ## between d = 1 and about 1.12 only the edge x edge axes separate
        m = I.rotate_x(math.pi / 4).rotate_y(math.pi / 4).plus_xyz(d, d, 0)
        aabb = CENTERED.convert_obb_to_aabb(m)
        assert Bounds3D.intersects(CENTERED, aabb)
        assert geomtools.test_oriented_bounding_box_intersection(
            CENTERED, m, CENTERED) is expected

    def test_symmetric(self):
        m = I.rotate_z(math.pi / 4).plus_xyz(1.1, 0, 0)
        assert (geomtools.test_oriented_bounding_box_intersection(CENTERED, m, CENTERED) ==
                geomtools.test_oriented_bounding_box_intersection(CENTERED, m.inverse(), CENTERED))


class TestQueries:
    """ray casting, plane normals and other point queries"""

    def test_ray_hits_box(self):
        hit = geomtools.get_intersection_between_ray_and_box(
            UNIT, Vector3D(-1, 0.5, 0.5), Vector3D.POSITIVE_X_AXIS)
        assert hit == Vector3D(0, 0.5, 0.5)

    def test_ray_from_inside_exits(self):
        hit = geomtools.get_intersection_between_ray_and_box(
            UNIT, Vector3D(0.5, 0.5, 0.5), Vector3D.POSITIVE_X_AXIS)
        assert hit == Vector3D(1, 0.5, 0.5)

    def test_ray_misses(self):
        origin = Vector3D(-1, 0.5, 0.5)
        assert geomtools.get_intersection_between_ray_and_box(
            UNIT, origin, Vector3D.NEGATIVE_X_AXIS) is None
        assert geomtools.get_intersection_between_ray_and_box(
            UNIT, origin, Vector3D.POSITIVE_Y_AXIS) is None
        assert geomtools.get_intersection_between_ray_and_box(
            UNIT, origin, ZERO) is None

    def test_ray_zero_direction_inside(self):
        origin = Vector3D(0.5, 0.5, 0.5)
        assert geomtools.get_intersection_between_ray_and_box(
            UNIT, origin, ZERO) is origin

    def test_ray_unsorted_box(self):
        box = Bounds3D(Vector3D(1, 1, 1), Vector3D(0, 0, 0))
        hit = geomtools.get_intersection_between_ray_and_box(
            box, Vector3D(0.25, 0.5, 3), Vector3D.NEGATIVE_Z_AXIS)
        assert hit == Vector3D(0.25, 0.5, 1)

    def test_plane_normal(self):
        x = Vector3D.POSITIVE_X_AXIS
        y = Vector3D.POSITIVE_Y_AXIS
        assert geomtools.get_plane_normal(x, ZERO, y) == Vector3D.POSITIVE_Z_AXIS
        assert geomtools.get_plane_normal(y, ZERO, x) == Vector3D.NEGATIVE_Z_AXIS
        assert geomtools.get_plane_normal(
            Vector3D(2, 0, 0), ZERO, Vector3D(0, 3, 0)) == Vector3D.POSITIVE_Z_AXIS
        assert geomtools.get_plane_normal(x, ZERO, Vector3D(3, 0, 0)) is None

    def test_closest_point_on_line(self):
        p1 = ZERO
        p2 = Vector3D(2, 0, 0)
        closest = geomtools.get_closest_point_on_line(Vector3D(0.5, 1, 2), p1, p2)
        assert closest == Vector3D(0.5, 0, 0)
        beyond = Vector3D(3, 0, 0)
        assert geomtools.get_closest_point_on_line(beyond, p1, p2) == beyond
        assert geomtools.get_closest_point_on_line(beyond, p1, p2, True) is None
        assert geomtools.get_closest_point_on_line(
            Vector3D(2, 5, 0), p1, p2, True) == p2

    def test_closest_point_keeps_z(self):
        closest = geomtools.get_closest_point_on_line(
            Vector3D(1, 0, 2), Vector3D(0, 0, 1), Vector3D(0, 0, 3))
        assert closest == Vector3D(0, 0, 2)

    def test_triangle_area(self):
        assert geomtools.get_triangle_area(
            ZERO, Vector3D(4, 0, 0), Vector3D(0, 3, 0)) == 6.0
        assert geomtools.get_triangle_area(
            ZERO, Vector3D(1, 0, 0), Vector3D(2, 0, 0)) == 0.0

    def test_convert_obb_to_aabb(self):
        assert geomtools.convert_obb_to_aabb(I, UNIT) == UNIT
        m = Matrix3D.get_translation_xyz(1, 2, 3)
        assert geomtools.convert_obb_to_aabb(m, UNIT) == Bounds3D(
            Vector3D(1, 2, 3), Vector3D(2, 3, 4))
