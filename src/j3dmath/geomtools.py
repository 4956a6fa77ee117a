## tolerant scalar comparisons and intersection tests for j3dmath
## Copyright (c) 2024 j3dmath contributors
## All rights reserved

# Permission is hereby granted, free of charge, to any person
# obtaining a copy of this software and associated documentation files
# (the "Software"), to deal in the Software without restriction,
# including without limitation the rights to use, copy, modify, merge,
# publish, distribute, sublicense, and/or sell copies of the Software,
# and to permit persons to whom the Software is furnished to do so,
# subject to the following conditions:
# 
# The above copyright notice and this permission notice shall be
# included in all copies or substantial portions of the Software.
# 
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
# EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF
# MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND
# NONINFRINGEMENT. IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS
# BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER IN AN
# ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN
# CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

"""tolerant comparisons and intersection tests

The comparison predicates in this module deliberately leave an
``epsilon`` wide band of indifference around equality: two values that
are *almost equal* are neither *significantly less* nor *significantly
greater* than one another.  Code that cares about the sign of a
comparison (the separating-axis tests below, for instance) must use
the matching predicate rather than ``abs(a - b) < epsilon``.

The intersection tests operate on :class:`j3dmath.vector.Vector3D`,
:class:`j3dmath.xform.Matrix3D` and :class:`j3dmath.bounds.Bounds3D`
instances, which are imported where they are needed to avoid an import
cycle with the vector module.
"""

from math import atan2, copysign, inf, sqrt, tan

## default tolerance for floating-point comparisons
EPSILON = 0.00001


## operations on scalars
## -----------------------

def almost_equal(a, b, epsilon=EPSILON):
    """ are two scalars the same to within epsilon
    """
    delta = a - b
    return delta <= epsilon and delta >= -epsilon


def greater_or_almost_equal(a, b, epsilon=EPSILON):
    """ is ``a`` greater than ``b`` or within epsilon of it
    """
    return (b - a) <= epsilon


def less_or_almost_equal(a, b, epsilon=EPSILON):
    """ is ``a`` less than ``b`` or within epsilon of it
    """
    return (a - b) <= epsilon


def significantly_greater_than(a, b, epsilon=EPSILON):
    """ does ``a`` exceed ``b`` by more than epsilon
    """
    return (a - b) > epsilon


def significantly_less_than(a, b, epsilon=EPSILON):
    """ is ``a`` smaller than ``b`` by more than epsilon
    """
    return (b - a) > epsilon


## arc measurements, all relative to the chord between the end points

def arc_height_to_radius(chord_length, height):
    half = chord_length / 2.0
    return (half * half + height * height) / (2.0 * height)


def arc_radius_to_height(chord_length, radius):
    """Return the arc height for ``radius``, choosing the solution with
    an included angle of at most 180 degrees.  ``nan`` when the radius is
    too small to span the chord."""
    half = chord_length / 2.0
    disc = radius * radius - half * half
    if disc < 0:
        return float('nan')
    if radius == 0:
        return 0.0
    return copysign(abs(radius) - sqrt(disc), radius)


def arc_height_to_angle(chord_length, height):
    return 4.0 * atan2(height, chord_length / 2.0)


def arc_angle_to_height(chord_length, angle):
    return (chord_length / 2.0) * tan(angle / 4.0)


## intersection tests
## ------------------

def test_sphere_intersection(center1, radius1, from2to1, center2, radius2):
    """Test whether two spheres intersect.

    ``from2to1`` maps the coordinate frame of sphere #2 into that of
    sphere #1.  Touching spheres do not intersect.
    """
    dx = from2to1.transform_x(*center2) - center1.x
    dy = from2to1.transform_y(*center2) - center1.y
    dz = from2to1.transform_z(*center2) - center1.z
    return test_sphere_intersection_delta(radius1, dx, dy, dz, radius2)


def test_sphere_intersection_delta(radius1, dx, dy, dz, radius2):
    max_distance = radius1 + radius2
    return (dx * dx + dy * dy + dz * dz) < (max_distance * max_distance)


def test_oriented_bounding_box_intersection(box1, from2to1, box2):
    """Test whether two oriented bounding boxes intersect.

    Each box is given as a :class:`Bounds3D` in its own coordinate
    frame; ``from2to1`` maps the frame of ``box2`` into the frame of
    ``box1``.  The fifteen candidate separating axes of Gottschalk's
    *Collision Queries using Oriented Bounding Boxes* are tried in turn
    and ``False`` is returned as soon as one of them separates the
    boxes.

    The face axes (first six tests) use :func:`significantly_less_than`
    so that boxes which merely touch within ``EPSILON`` are reported as
    disjoint; the nine edge-edge axes compare with a plain ``<=``.
    """
    from j3dmath.vector import Vector3D

    dot6 = Vector3D.dot6
    m = from2to1

    ox1, oy1, oz1 = box1.v1
    dx1 = box1.v2.x - ox1
    dy1 = box1.v2.y - oy1
    dz1 = box1.v2.z - oz1
    ox2, oy2, oz2 = box2.v1
    dx2 = box2.v2.x - ox2
    dy2 = box2.v2.y - oy2
    dz2 = box2.v2.z - oz2

    e1x = 0.5 * dx1
    e1y = 0.5 * dy1
    e1z = 0.5 * dz1
    e2x = 0.5 * dx2
    e2y = 0.5 * dy2
    e2z = 0.5 * dz2

    cx2 = ox2 + 0.5 * dx2
    cy2 = oy2 + 0.5 * dy2
    cz2 = oz2 + 0.5 * dz2

    sx = m.transform_x(cx2, cy2, cz2) - (ox1 + 0.5 * dx1)
    sy = m.transform_y(cx2, cy2, cz2) - (oy1 + 0.5 * dy1)
    sz = m.transform_z(cx2, cy2, cz2) - (oz1 + 0.5 * dz1)

    axx = abs(m.xx)
    axy = abs(m.xy)
    axz = abs(m.xz)
    ayx = abs(m.yx)
    ayy = abs(m.yy)
    ayz = abs(m.yz)
    azx = abs(m.zx)
    azy = abs(m.zy)
    azz = abs(m.zz)

    lt = significantly_less_than

    return (
        # face normals of box #1
        lt(abs(sx), e1x + dot6(e2x, e2y, e2z, axx, axy, axz)) and
        lt(abs(sy), e1y + dot6(e2x, e2y, e2z, ayx, ayy, ayz)) and
        lt(abs(sz), e1z + dot6(e2x, e2y, e2z, azx, azy, azz)) and
        # face normals of box #2
        lt(abs(dot6(m.xx, m.yx, m.zx, sx, sy, sz)),
           dot6(e1x, e1y, e1z, axx, ayx, azx) + e2x) and
        lt(abs(dot6(m.xy, m.yy, m.zy, sx, sy, sz)),
           dot6(e1x, e1y, e1z, axy, ayy, azy) + e2y) and
        lt(abs(dot6(m.xz, m.yz, m.zz, sx, sy, sz)),
           dot6(e1x, e1y, e1z, axz, ayz, azz) + e2z) and
        # edge x edge
        abs(sz * m.yx - sy * m.zx) <= e1y * azx + e1z * ayx + e2y * axz + e2z * axy and
        abs(sz * m.yy - sy * m.zy) <= e1y * azy + e1z * ayy + e2x * axz + e2z * axx and
        abs(sz * m.yz - sy * m.zz) <= e1y * azz + e1z * ayz + e2x * axy + e2y * axx and
        abs(sx * m.zx - sz * m.xx) <= e1x * azx + e1z * axx + e2y * ayz + e2z * ayy and
        abs(sx * m.zy - sz * m.xy) <= e1x * azy + e1z * axy + e2x * ayz + e2z * ayx and
        abs(sx * m.zz - sz * m.xz) <= e1x * azz + e1z * axz + e2x * ayy + e2y * ayx and
        abs(sy * m.xx - sx * m.yx) <= e1x * ayx + e1y * axx + e2y * azz + e2z * azy and
        abs(sy * m.xy - sx * m.yy) <= e1x * ayy + e1y * axy + e2x * azz + e2z * azx and
        abs(sy * m.xz - sx * m.yz) <= e1x * ayz + e1y * axz + e2x * azy + e2y * azx
    )


def test_rectangle_rectangle_intersection(ax1, ay1, ax2, ay2,
                                          bx1, by1, bx2, by2):
    """Test whether two axis-aligned rectangles overlap.  The corners of
    each rectangle may be given in any order; touching edges count as
    an intersection."""
    return (min(ax1, ax2) <= max(bx1, bx2) and
            min(bx1, bx2) <= max(ax1, ax2) and
            min(ay1, ay2) <= max(by1, by2) and
            min(by1, by2) <= max(ay1, ay2))


def test_sphere_box_intersection(center, radius, box):
    """Test whether a sphere intersects the axis-aligned ``box``, whose
    ``v1`` is taken as the minimum and ``v2`` as the maximum corner."""
    distance = 0.0
    for c, lo, hi in zip(center, box.v1, box.v2):
        if c < lo:
            d = lo - c
        elif c > hi:
            d = c - hi
        else:
            continue
        if d > radius:
            return False
        distance += d * d
    return distance < radius * radius


def get_intersection_between_ray_and_box(box, origin, direction):
    """Return the point where the ray from ``origin`` along ``direction``
    first meets ``box``, or ``None`` if it misses.

    Uses the slab method.  A ray that starts inside the box reports the
    point where it leaves the box.
    """
    t_min = -inf
    t_max = inf

    for o, d, lo, hi in zip(origin, direction, box.min(), box.max()):
        if d == 0.0:
            if o < lo or o > hi:
                t_min = inf
                t_max = -inf
        else:
            t1 = (lo - o) / d
            t2 = (hi - o) / d
            t_min = max(t_min, min(t1, t2))
            t_max = min(t_max, max(t1, t2))

    if t_max < 0 or t_max < t_min:
        return None
    t = t_min if t_min >= 0 else t_max
    if t == inf:
        ## zero direction from inside the box
        return origin
    return origin.plus(direction.multiply(t))


def get_plane_normal(p1, p2, p3):
    """Return the unit normal of the plane through three points, pointing
    outwards for clockwise points, or ``None`` if they are collinear."""
    from j3dmath.vector import Vector3D

    u = p1.minus(p2)
    v = p3.minus(p2)
    cross = Vector3D.cross(u, v)
    length = cross.length()
    if length == 0.0:
        return None
    if length == 1.0:
        return cross
    return Vector3D(cross.x / length, cross.y / length, cross.z / length)


def get_closest_point_on_line(p, p1, p2, segment_only=False):
    """Return the point on the line through ``p1`` and ``p2`` that is
    closest to ``p``.  With ``segment_only`` set, ``None`` is returned
    when that point lies outside the segment (with ``EPSILON``
    tolerance)."""
    d = p2.minus(p1)
    u = p.minus(p1).dot(d) / d.dot(d)
    if segment_only and not (u >= -EPSILON and u <= 1.0 + EPSILON):
        return None
    return p1.plus(d.multiply(u))


def get_triangle_area(p1, p2, p3):
    """Area of a 2D triangle by Heron's formula."""
    a = p1.distance_to(p2)
    b = p2.distance_to(p3)
    c = p3.distance_to(p1)
    s = (a + b + c) / 2.0
    return sqrt(max(0.0, s * (s - a) * (s - b) * (s - c)))


def convert_obb_to_aabb(box2world, box):
    """Return the axis-aligned bounds, in world coordinates, of the
    oriented ``box`` placed by ``box2world``."""
    return box.convert_obb_to_aabb(box2world)
