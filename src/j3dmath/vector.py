## immutable 2D and 3D vector value types for j3dmath
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

"""immutable vector value types

:class:`Vector3D` doubles as point and direction, there is no
type-level distinction between the two.  :class:`Vector2D` is the
planar counterpart used for texture and plane coordinates.

Both are frozen dataclasses of finite floats.  Every operation returns
a new instance; a few return ``self`` when the result would be equal
(normalizing a unit vector, for example), which callers may observe
through ``is`` but never through ``==``.
"""

from __future__ import annotations

import logging
import math
import numbers
from dataclasses import dataclass
from typing import ClassVar, Iterator, Mapping, Optional

import numpy as np

from j3dmath.errors import InvalidArgumentError
from j3dmath.geomtools import EPSILON, almost_equal

logger = logging.getLogger(__name__)

__all__ = ["Vector2D", "Vector3D", "checked_float", "parse_floats", "read_property"]


def checked_float(name: str, value) -> float:
    """Return ``value`` as a float, rejecting booleans, non-numbers and
    non-finite values with :class:`InvalidArgumentError`."""

    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidArgumentError(
            "bad {} component: {!r}".format(name, value), value)
    value = float(value)
    if not math.isfinite(value):
        raise InvalidArgumentError(
            "non-finite {} component: {!r}".format(name, value), value)
    return value


def parse_floats(text: str, count: int) -> list:
    """Split a comma separated string into exactly ``count`` floats."""

    if not isinstance(text, str):
        raise InvalidArgumentError("expected a string, got {!r}".format(text), text)
    tokens = text.split(",")
    if len(tokens) != count:
        raise InvalidArgumentError(
            "expected {} comma separated values, got {}: {!r}".format(
                count, len(tokens), text), text)
    try:
        return [float(token) for token in tokens]
    except ValueError as err:
        raise InvalidArgumentError(
            "bad numeric value in {!r}".format(text), text) from err


def read_property(cls, properties, name, default):
    """Parse the string stored under ``name`` in ``properties`` with
    ``cls.from_string``, falling back to ``default``."""
    value = properties.get(name) if properties is not None else None
    if value is None:
        return default
    try:
        return cls.from_string(value)
    except InvalidArgumentError:
        logger.debug("ignoring unparsable %s property %r: %r",
                     cls.__name__, name, value)
        return default


@dataclass(frozen=True)
class Vector3D:
    """Immutable ``(x, y, z)`` triple of finite floats."""

    x: float
    y: float
    z: float

    ZERO: ClassVar["Vector3D"]
    POSITIVE_X_AXIS: ClassVar["Vector3D"]
    NEGATIVE_X_AXIS: ClassVar["Vector3D"]
    POSITIVE_Y_AXIS: ClassVar["Vector3D"]
    NEGATIVE_Y_AXIS: ClassVar["Vector3D"]
    POSITIVE_Z_AXIS: ClassVar["Vector3D"]
    NEGATIVE_Z_AXIS: ClassVar["Vector3D"]

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", checked_float("x", self.x))
        object.__setattr__(self, "y", checked_float("y", self.y))
        object.__setattr__(self, "z", checked_float("z", self.z))

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __str__(self) -> str:
        return self.to_string()

    def __add__(self, other: "Vector3D") -> "Vector3D":
        if not isinstance(other, Vector3D):
            return NotImplemented
        return self.plus(other)

    def __sub__(self, other: "Vector3D") -> "Vector3D":
        if not isinstance(other, Vector3D):
            return NotImplemented
        return self.minus(other)

    def __mul__(self, factor) -> "Vector3D":
        if isinstance(factor, bool) or not isinstance(factor, numbers.Real):
            return NotImplemented
        return self.multiply(factor)

    __rmul__ = __mul__

    def __neg__(self) -> "Vector3D":
        return self.inverse()

    ## scalar helpers

    @staticmethod
    def length_xyz(x: float, y: float, z: float) -> float:
        return math.sqrt(x * x + y * y + z * z)

    @staticmethod
    def dot6(x1: float, y1: float, z1: float,
             x2: float, y2: float, z2: float) -> float:
        """Dot product of two vectors given by their components."""
        return x1 * x2 + y1 * y2 + z1 * z2

    @staticmethod
    def is_non_zero_xyz(x: float, y: float, z: float) -> bool:
        """``False`` for the zero vector and for anything containing NaN."""
        return (x != 0 or y != 0 or z != 0) and x == x and y == y and z == z

    ## vector algebra

    def length(self) -> float:
        return Vector3D.length_xyz(self.x, self.y, self.z)

    def normalize(self) -> "Vector3D":
        """Return the unit vector in the same direction.  Zero-length and
        unit-length vectors are returned unchanged."""
        length = self.length()
        if length == 0.0 or length == 1.0:
            return self
        return Vector3D(self.x / length, self.y / length, self.z / length)

    def dot(self, other: "Vector3D") -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: "Vector3D") -> "Vector3D":
        return Vector3D(self.y * other.z - self.z * other.y,
                        self.z * other.x - self.x * other.z,
                        self.x * other.y - self.y * other.x)

    def cross_z(self, other: "Vector3D") -> float:
        """Z component of the cross product."""
        return self.x * other.y - self.y * other.x

    def cos_angle(self, other: "Vector3D") -> float:
        """Cosine of the angle between two vectors, ``0.0`` if either has
        zero length."""
        lengths = self.length() * other.length()
        if lengths == 0.0:
            return 0.0
        return self.dot(other) / lengths

    def angle(self, other: "Vector3D") -> float:
        """Angle between two vectors in radians."""
        # rounding can push the cosine just outside [-1, 1]
        return math.acos(max(-1.0, min(1.0, self.cos_angle(other))))

    def are_parallel(self, other: "Vector3D") -> bool:
        return almost_equal(abs(self.cos_angle(other)) - 1.0, 0.0)

    def are_same_direction(self, other: "Vector3D") -> bool:
        return almost_equal(self.cos_angle(other) - 1.0, 0.0)

    def are_perpendicular(self, other: "Vector3D") -> bool:
        return almost_equal(self.dot(other), 0.0)

    def distance_to(self, other: "Vector3D") -> float:
        return Vector3D.length_xyz(other.x - self.x,
                                   other.y - self.y,
                                   other.z - self.z)

    @staticmethod
    def distance_between(p1: "Vector3D", p2: "Vector3D") -> float:
        return p1.distance_to(p2)

    @staticmethod
    def direction(start: "Vector3D", end: "Vector3D") -> "Vector3D":
        """Unit vector pointing from ``start`` to ``end``."""
        return end.minus(start).normalize()

    def direction_to(self, other: "Vector3D") -> "Vector3D":
        return Vector3D.direction(self, other)

    def average(self, other: "Vector3D") -> "Vector3D":
        """Midpoint between two points."""
        if self == other:
            return self
        return Vector3D(0.5 * (self.x + other.x),
                        0.5 * (self.y + other.y),
                        0.5 * (self.z + other.z))

    def inverse(self) -> "Vector3D":
        return Vector3D(-self.x, -self.y, -self.z)

    def is_non_zero(self) -> bool:
        return Vector3D.is_non_zero_xyz(self.x, self.y, self.z)

    def almost_equals(self, other: "Vector3D", epsilon: float = EPSILON) -> bool:
        if other is None:
            return False
        return (self is other or
                (almost_equal(self.x, other.x, epsilon) and
                 almost_equal(self.y, other.y, epsilon) and
                 almost_equal(self.z, other.z, epsilon)))

    ## arithmetic

    def plus(self, other: "Vector3D") -> "Vector3D":
        return self.plus_xyz(other.x, other.y, other.z)

    def plus_xyz(self, x: float, y: float, z: float) -> "Vector3D":
        if x == 0 and y == 0 and z == 0:
            return self
        return Vector3D(self.x + x, self.y + y, self.z + z)

    def minus(self, other: "Vector3D") -> "Vector3D":
        if other.x == 0 and other.y == 0 and other.z == 0:
            return self
        return Vector3D(self.x - other.x, self.y - other.y, self.z - other.z)

    def multiply(self, factor: float) -> "Vector3D":
        if factor == 1:
            return self
        return Vector3D(self.x * factor, self.y * factor, self.z * factor)

    def set(self, x: Optional[float] = None, y: Optional[float] = None,
            z: Optional[float] = None) -> "Vector3D":
        """Return a vector with the given components replaced; ``None``
        keeps the current value."""
        x = self.x if x is None else x
        y = self.y if y is None else y
        z = self.z if z is None else z
        if x == self.x and y == self.y and z == self.z:
            return self
        return Vector3D(x, y, z)

    ## polar coordinates

    @staticmethod
    def cartesian_to_polar_xyz(x: float, y: float, z: float) -> "Vector3D":
        """Convert cartesian coordinates to ``(radius, azimuth, zenith)``.

        The azimuth is measured in the XY plane from the positive X axis,
        the zenith from the positive Z axis.  The origin maps to
        ``Vector3D.ZERO``.
        """
        xx = x * x
        yy = y * y
        zz = z * z
        if xx == 0 and yy == 0 and zz == 0:
            return Vector3D.ZERO
        r = math.sqrt(xx + yy + zz)
        azimuth = math.atan2(y, x)
        zenith = math.atan2(math.sqrt(xx + yy), z)
        return Vector3D(r, azimuth, zenith)

    def cartesian_to_polar(self) -> "Vector3D":
        return Vector3D.cartesian_to_polar_xyz(self.x, self.y, self.z)

    @staticmethod
    def polar_to_cartesian_xyz(radius: float, azimuth: float,
                               zenith: float) -> "Vector3D":
        """Inverse of :meth:`cartesian_to_polar_xyz`."""
        if radius == 0:
            return Vector3D.ZERO
        rxy = radius * math.sin(zenith)
        return Vector3D(rxy * math.cos(azimuth),
                        rxy * math.sin(azimuth),
                        radius * math.cos(zenith))

    def polar_to_cartesian(self) -> "Vector3D":
        return Vector3D.polar_to_cartesian_xyz(self.x, self.y, self.z)

    ## conversion

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=float)

    def to_string(self) -> str:
        return "{!r},{!r},{!r}".format(self.x, self.y, self.z)

    def to_friendly_string(self) -> str:
        return "[ {!r}, {!r}, {!r} ]".format(self.x, self.y, self.z)

    @classmethod
    def from_string(cls, value: str) -> "Vector3D":
        """Parse the ``x,y,z`` form produced by :meth:`to_string`."""
        return cls(*parse_floats(value, 3))

    @classmethod
    def get_property(cls, properties: Optional[Mapping], name: str,
                     default: Optional["Vector3D"] = None) -> Optional["Vector3D"]:
        """Read a vector stored in string form under ``name``; returns
        ``default`` when it is absent or does not parse."""
        return read_property(cls, properties, name, default)


Vector3D.ZERO = Vector3D(0.0, 0.0, 0.0)
Vector3D.POSITIVE_X_AXIS = Vector3D(1.0, 0.0, 0.0)
Vector3D.NEGATIVE_X_AXIS = Vector3D(-1.0, 0.0, 0.0)
Vector3D.POSITIVE_Y_AXIS = Vector3D(0.0, 1.0, 0.0)
Vector3D.NEGATIVE_Y_AXIS = Vector3D(0.0, -1.0, 0.0)
Vector3D.POSITIVE_Z_AXIS = Vector3D(0.0, 0.0, 1.0)
Vector3D.NEGATIVE_Z_AXIS = Vector3D(0.0, 0.0, -1.0)


@dataclass(frozen=True)
class Vector2D:
    """Immutable ``(x, y)`` pair of finite floats."""

    x: float
    y: float

    ZERO: ClassVar["Vector2D"]
    POSITIVE_X_AXIS: ClassVar["Vector2D"]
    NEGATIVE_X_AXIS: ClassVar["Vector2D"]
    POSITIVE_Y_AXIS: ClassVar["Vector2D"]
    NEGATIVE_Y_AXIS: ClassVar["Vector2D"]

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", checked_float("x", self.x))
        object.__setattr__(self, "y", checked_float("y", self.y))

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def __str__(self) -> str:
        return self.to_string()

    @staticmethod
    def cross_z_xy(x1: float, y1: float, x2: float, y2: float) -> float:
        return x1 * y2 - y1 * x2

    def cross_z(self, other: "Vector2D") -> float:
        """Z component of the cross product of two planar vectors."""
        return Vector2D.cross_z_xy(self.x, self.y, other.x, other.y)

    @staticmethod
    def normalize_xy(x: float, y: float) -> "Vector2D":
        """Unit vector for ``(x, y)``; ``Vector2D.ZERO`` for a zero vector."""
        length = math.sqrt(x * x + y * y)
        if length == 0.0:
            return Vector2D.ZERO
        return Vector2D(x / length, y / length)

    @staticmethod
    def direction_xy(x1: float, y1: float, x2: float, y2: float) -> "Vector2D":
        return Vector2D.normalize_xy(x2 - x1, y2 - y1)

    @staticmethod
    def direction(start: "Vector2D", end: "Vector2D") -> "Vector2D":
        return Vector2D.direction_xy(start.x, start.y, end.x, end.y)

    def dot(self, other: "Vector2D") -> float:
        return self.x * other.x + self.y * other.y

    def length(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y)

    def normalize(self) -> "Vector2D":
        length = self.length()
        if length == 0.0 or length == 1.0:
            return self
        return Vector2D(self.x / length, self.y / length)

    def distance_to(self, other: "Vector2D") -> float:
        dx = other.x - self.x
        dy = other.y - self.y
        return math.sqrt(dx * dx + dy * dy)

    def plus(self, other: "Vector2D") -> "Vector2D":
        if other.x == 0 and other.y == 0:
            return self
        return Vector2D(self.x + other.x, self.y + other.y)

    def minus(self, other: "Vector2D") -> "Vector2D":
        if other.x == 0 and other.y == 0:
            return self
        return Vector2D(self.x - other.x, self.y - other.y)

    def multiply(self, factor: float) -> "Vector2D":
        if factor == 1:
            return self
        return Vector2D(self.x * factor, self.y * factor)

    def almost_equals(self, other: "Vector2D", epsilon: float = EPSILON) -> bool:
        if other is None:
            return False
        return (almost_equal(self.x, other.x, epsilon) and
                almost_equal(self.y, other.y, epsilon))

    def to_string(self) -> str:
        return "{!r},{!r}".format(self.x, self.y)

    def to_friendly_string(self) -> str:
        return "[ {!r}, {!r} ]".format(self.x, self.y)

    @classmethod
    def from_string(cls, value: str) -> "Vector2D":
        return cls(*parse_floats(value, 2))


Vector2D.ZERO = Vector2D(0.0, 0.0)
Vector2D.POSITIVE_X_AXIS = Vector2D(1.0, 0.0)
Vector2D.NEGATIVE_X_AXIS = Vector2D(-1.0, 0.0)
Vector2D.POSITIVE_Y_AXIS = Vector2D(0.0, 1.0)
Vector2D.NEGATIVE_Y_AXIS = Vector2D(0.0, -1.0)
