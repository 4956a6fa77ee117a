## axis-aligned bounding boxes for j3dmath
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

"""axis-aligned bounding boxes

A :class:`Bounds3D` is a pair of corner points.  The corners are not
required to be sorted; most queries take the per-axis minimum and
maximum, and :meth:`Bounds3D.sorted` puts the minimum in ``v1``.

:class:`Bounds3DBuilder` accumulates points (optionally through a
transform) and yields their bounding box, extent midpoint and centroid.
"""

from __future__ import annotations

from dataclasses import dataclass
from math import inf
from typing import TYPE_CHECKING, ClassVar, Optional

from j3dmath.errors import InvalidArgumentError
from j3dmath.geomtools import significantly_less_than
from j3dmath.vector import Vector3D, parse_floats

if TYPE_CHECKING:
    from j3dmath.xform import Matrix3D

__all__ = ["Bounds3D", "Bounds3DBuilder"]


@dataclass(frozen=True)
class Bounds3D:
    """Immutable box spanned by the corner points ``v1`` and ``v2``."""

    v1: Vector3D = None
    v2: Vector3D = None

    EMPTY: ClassVar["Bounds3D"]

    def __post_init__(self) -> None:
        for name in ("v1", "v2"):
            value = getattr(self, name)
            if value is None:
                object.__setattr__(self, name, Vector3D.ZERO)
            elif not isinstance(value, Vector3D):
                raise InvalidArgumentError(
                    "bad bounds corner {}: {!r}".format(name, value), value)

    def __str__(self) -> str:
        return self.to_string()

    ## center and extent

    def center(self) -> Vector3D:
        return Vector3D(self.center_x(), self.center_y(), self.center_z())

    def center_x(self) -> float:
        return 0.5 * (self.v1.x + self.v2.x)

    def center_y(self) -> float:
        return 0.5 * (self.v1.y + self.v2.y)

    def center_z(self) -> float:
        return 0.5 * (self.v1.z + self.v2.z)

    def delta_x(self) -> float:
        return self.v2.x - self.v1.x

    def delta_y(self) -> float:
        return self.v2.y - self.v1.y

    def delta_z(self) -> float:
        return self.v2.z - self.v1.z

    def size(self) -> Vector3D:
        """Absolute extent along each axis."""
        return self.v2.set(self.size_x(), self.size_y(), self.size_z())

    def size_x(self) -> float:
        return abs(self.v2.x - self.v1.x)

    def size_y(self) -> float:
        return abs(self.v2.y - self.v1.y)

    def size_z(self) -> float:
        return abs(self.v2.z - self.v1.z)

    def volume(self) -> float:
        """Volume of the box, never negative even for unsorted corners."""
        return abs(self.delta_x() * self.delta_y() * self.delta_z())

    def min(self) -> Vector3D:
        return self.v1.set(self.min_x(), self.min_y(), self.min_z())

    def min_x(self) -> float:
        return min(self.v1.x, self.v2.x)

    def min_y(self) -> float:
        return min(self.v1.y, self.v2.y)

    def min_z(self) -> float:
        return min(self.v1.z, self.v2.z)

    def max(self) -> Vector3D:
        return self.v2.set(self.max_x(), self.max_y(), self.max_z())

    def max_x(self) -> float:
        return max(self.v1.x, self.v2.x)

    def max_y(self) -> float:
        return max(self.v1.y, self.v2.y)

    def max_z(self) -> float:
        return max(self.v1.z, self.v2.z)

    ## predicates

    def is_empty(self) -> bool:
        """``True`` if the box is flat along any axis."""
        v1 = self.v1
        v2 = self.v2
        return v1.x == v2.x or v1.y == v2.y or v1.z == v2.z

    def is_sorted(self) -> bool:
        v1 = self.v1
        v2 = self.v2
        return v1.x <= v2.x and v1.y <= v2.y and v1.z <= v2.z

    def contains(self, point: Vector3D) -> bool:
        """Inclusive point-in-box test."""
        return (self.min_x() <= point.x <= self.max_x() and
                self.min_y() <= point.y <= self.max_y() and
                self.min_z() <= point.z <= self.max_z())

    ## combination

    @staticmethod
    def intersect(bounds1: "Bounds3D", bounds2: "Bounds3D") -> "Bounds3D":
        """Overlapping part of two boxes.  Disjoint boxes give an
        unsorted result."""
        return Bounds3D.rebuild(
            bounds1, bounds2,
            bounds1.v1.set(max(bounds1.min_x(), bounds2.min_x()),
                           max(bounds1.min_y(), bounds2.min_y()),
                           max(bounds1.min_z(), bounds2.min_z())),
            bounds1.v2.set(min(bounds1.max_x(), bounds2.max_x()),
                           min(bounds1.max_y(), bounds2.max_y()),
                           min(bounds1.max_z(), bounds2.max_z())))

    @staticmethod
    def intersects(bounds1: "Bounds3D", bounds2: "Bounds3D",
                   epsilon: float = 0.0) -> bool:
        """Test whether two boxes overlap.

        Without ``epsilon`` the test is strict: boxes that only share a
        face do not intersect.  With ``epsilon`` the overlap on each axis
        must exceed it, so boxes that are within ``epsilon`` of touching
        are reported as disjoint as well.
        """
        pairs = ((bounds1.min_x(), bounds2.max_x()),
                 (bounds2.min_x(), bounds1.max_x()),
                 (bounds1.min_y(), bounds2.max_y()),
                 (bounds2.min_y(), bounds1.max_y()),
                 (bounds1.min_z(), bounds2.max_z()),
                 (bounds2.min_z(), bounds1.max_z()))
        if not epsilon:
            return all(lo < hi for lo, hi in pairs)
        return all(significantly_less_than(lo, hi, epsilon) for lo, hi in pairs)

    def join(self, other: "Bounds3D") -> "Bounds3D":
        """Smallest sorted box containing both boxes."""
        return Bounds3D.rebuild(
            self, other,
            self.v1.set(min(self.min_x(), other.min_x()),
                        min(self.min_y(), other.min_y()),
                        min(self.min_z(), other.min_z())),
            self.v2.set(max(self.max_x(), other.max_x()),
                        max(self.max_y(), other.max_y()),
                        max(self.max_z(), other.max_z())))

    def join_point(self, point: Vector3D) -> "Bounds3D":
        """Smallest sorted box containing this box and ``point``."""
        return self.set(
            point.set(min(point.x, self.min_x()),
                      min(point.y, self.min_y()),
                      min(point.z, self.min_z())),
            point.set(max(point.x, self.max_x()),
                      max(point.y, self.max_y()),
                      max(point.z, self.max_z())))

    @staticmethod
    def rebuild(box1: "Bounds3D", box2: "Bounds3D",
                v1: Vector3D, v2: Vector3D) -> "Bounds3D":
        """Return bounds ``(v1, v2)``, reusing ``box1``/``box2`` or their
        corner instances where they are equal to the requested values."""
        candidates = (box1.v1, box1.v2, box2.v1, box2.v2)
        v1 = next((c for c in candidates if c == v1), v1)
        v2 = next((c for c in candidates if c == v2), v1 if v1 == v2 else v2)

        if box1.v1 == v1 and box1.v2 == v2:
            return box1
        if box2.v1 == v1 and box2.v2 == v2:
            return box2
        return Bounds3D(v1, v2)

    ## derived boxes

    def set(self, v1: Optional[Vector3D] = None,
            v2: Optional[Vector3D] = None) -> "Bounds3D":
        """Replace one or both corners; ``self`` if nothing changes."""
        if (v1 is None or v1 == self.v1) and (v2 is None or v2 == self.v2):
            return self
        return Bounds3D(self.v1 if v1 is None else v1,
                        self.v2 if v2 is None else v2)

    def plus(self, vector: Vector3D) -> "Bounds3D":
        return self.set(self.v1.plus(vector), self.v2.plus(vector))

    def minus(self, vector: Vector3D) -> "Bounds3D":
        return self.set(self.v1.minus(vector), self.v2.minus(vector))

    def multiply(self, factor: float) -> "Bounds3D":
        return self.set(self.v1.multiply(factor), self.v2.multiply(factor))

    def sorted(self) -> "Bounds3D":
        return self.set(self.min(), self.max())

    def convert_obb_to_aabb(self, box2world: "Matrix3D") -> "Bounds3D":
        """Axis-aligned bounds of this box after transforming it by
        ``box2world``, found from all eight transformed corners."""
        x1, y1, z1 = self.v1
        x2, y2, z2 = self.v2
        corners = [box2world.transform_xyz(x, y, z)
                   for x in (x1, x2) for y in (y1, y2) for z in (z1, z2)]
        return Bounds3D(
            Vector3D(min(c.x for c in corners),
                     min(c.y for c in corners),
                     min(c.z for c in corners)),
            Vector3D(max(c.x for c in corners),
                     max(c.y for c in corners),
                     max(c.z for c in corners)))

    ## conversion

    def to_string(self) -> str:
        return "{};{}".format(self.v1.to_string(), self.v2.to_string())

    def to_friendly_string(self) -> str:
        return "[ {} - {} ]".format(self.v1.to_friendly_string(),
                                   self.v2.to_friendly_string())

    @classmethod
    def from_string(cls, value: str) -> "Bounds3D":
        """Parse the ``x1,y1,z1;x2,y2,z2`` form of :meth:`to_string`."""
        if not isinstance(value, str) or value.count(";") != 1:
            raise InvalidArgumentError(
                "bad bounds string: {!r}".format(value), value)
        first, second = value.split(";")
        return cls(Vector3D(*parse_floats(first, 3)),
                   Vector3D(*parse_floats(second, 3)))


Bounds3D.EMPTY = Bounds3D(Vector3D.ZERO, Vector3D.ZERO)


class Bounds3DBuilder:
    """Accumulate points and report their bounds, center and centroid.

    A builder is a plain mutable object and must not be shared between
    threads without external locking.
    """

    def __init__(self):
        self.count = 0
        self._min_x = inf
        self._min_y = inf
        self._min_z = inf
        self._max_x = -inf
        self._max_y = -inf
        self._max_z = -inf
        self._sum_x = 0.0
        self._sum_y = 0.0
        self._sum_z = 0.0
        self._average = Vector3D.ZERO
        self._bounds = Bounds3D.EMPTY

    def __repr__(self):
        return "Bounds3DBuilder(count={}, bounds={})".format(
            self.count, self.get_bounds())

    ## points

    def add_point(self, point: Vector3D) -> None:
        self.add_point_xyz(point.x, point.y, point.z)

    def add_point_xyz(self, x: float, y: float, z: float) -> None:
        self.count += 1

        if x < self._min_x:
            self._min_x = x
        if y < self._min_y:
            self._min_y = y
        if z < self._min_z:
            self._min_z = z

        if x > self._max_x:
            self._max_x = x
        if y > self._max_y:
            self._max_y = y
        if z > self._max_z:
            self._max_z = z

        self._sum_x += x
        self._sum_y += y
        self._sum_z += z

    def add_transformed_point(self, transform: "Matrix3D",
                              point: Vector3D) -> None:
        self.add_transformed_point_xyz(transform, point.x, point.y, point.z)

    def add_transformed_point_xyz(self, transform: "Matrix3D",
                                  x: float, y: float, z: float) -> None:
        self.add_point_xyz(transform.transform_x(x, y, z),
                           transform.transform_y(x, y, z),
                           transform.transform_z(x, y, z))

    ## boxes

    def add_bounds(self, bounds: Bounds3D) -> None:
        """Add both corners of an untransformed box."""
        self.add_point(bounds.v1)
        self.add_point(bounds.v2)

    def add_bounds_xyz(self, x1: float, y1: float, z1: float,
                       x2: float, y2: float, z2: float) -> None:
        self.add_point_xyz(x1, y1, z1)
        self.add_point_xyz(x2, y2, z2)

    def add_transformed_bounds(self, transform: "Matrix3D",
                               bounds: Bounds3D) -> None:
        """Add all eight corners of ``bounds`` after transforming them,
        since a rotated box's extent depends on every corner."""
        self.add_transformed_bounds_xyz(transform,
                                        bounds.v1.x, bounds.v1.y, bounds.v1.z,
                                        bounds.v2.x, bounds.v2.y, bounds.v2.z)

    def add_transformed_bounds_xyz(self, transform: "Matrix3D",
                                   x1: float, y1: float, z1: float,
                                   x2: float, y2: float, z2: float) -> None:
        for x in (x1, x2):
            for y in (y1, y2):
                for z in (z1, z2):
                    self.add_transformed_point_xyz(transform, x, y, z)

    ## results

    def get_average_point(self) -> Vector3D:
        """Centroid of all added points; ``Vector3D.ZERO`` when empty."""
        count = self.count
        if count > 0:
            result = self._average.set(self._sum_x / count,
                                       self._sum_y / count,
                                       self._sum_z / count)
        else:
            result = Vector3D.ZERO
        self._average = result
        return result

    def get_center_point(self) -> Vector3D:
        """Midpoint of the extents; ``Vector3D.ZERO`` when empty."""
        if self.count == 0:
            return Vector3D.ZERO
        return Vector3D(0.5 * (self._min_x + self._max_x),
                        0.5 * (self._min_y + self._max_y),
                        0.5 * (self._min_z + self._max_z))

    def get_bounds(self) -> Optional[Bounds3D]:
        """Sorted bounds of all added points; ``None`` when empty."""
        if self.count == 0:
            return None
        result = self._bounds
        result = result.set(
            result.v1.set(self._min_x, self._min_y, self._min_z),
            result.v2.set(self._max_x, self._max_y, self._max_z))
        self._bounds = result
        return result
