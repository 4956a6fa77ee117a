## affine 3x4 transformation matrices for j3dmath
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

"""affine transformation matrices

A :class:`Matrix3D` is the upper 3x4 part of a homogeneous 4x4 matrix::

    | xx xy xz xo |
    | yx yy yz yo |
    | zx zy zz zo |
    | 0  0  0  1  |

Points are column vectors, so transforming ``(x, y, z)`` yields
``x' = x*xx + y*xy + z*xz + xo`` and so on for ``y'`` and ``z'``.

Composition reads left to right in application order:
``a.multiply(b)`` is the transform that applies ``a`` first and ``b``
second, and ``m.rotate_x(t)`` rotates whatever ``m`` already does.

:meth:`Matrix3D.inverse` transposes the rotation part.  That is only
the true inverse for an orthonormal rotation part (possibly with a
translation); matrices with shear or non-uniform scale get a result
that is silently wrong, exactly as callers of this fast path expect.
"""

from __future__ import annotations

import dataclasses
import logging
import math
from dataclasses import dataclass
from typing import ClassVar, Mapping, Optional

import numpy as np

from j3dmath.bounds import Bounds3D
from j3dmath.errors import DegenerateGeometryError, InvalidArgumentError
from j3dmath.geomtools import EPSILON, almost_equal
from j3dmath.vector import Vector3D, read_property, checked_float, parse_floats

logger = logging.getLogger(__name__)

__all__ = ["Matrix3D"]

_COMPONENTS = ("xx", "xy", "xz", "xo",
               "yx", "yy", "yz", "yo",
               "zx", "zy", "zz", "zo")


def _multiply(xx1, xy1, xz1, xo1, yx1, yy1, yz1, yo1, zx1, zy1, zz1, zo1,
              xx2, xy2, xz2, xo2, yx2, yy2, yz2, yo2, zx2, zy2, zz2, zo2):
    ## product M2 . M1, i.e. apply the first matrix, then the second
    return Matrix3D(xx1 * xx2 + yx1 * xy2 + zx1 * xz2,
                    xy1 * xx2 + yy1 * xy2 + zy1 * xz2,
                    xz1 * xx2 + yz1 * xy2 + zz1 * xz2,
                    xo1 * xx2 + yo1 * xy2 + zo1 * xz2 + xo2,
                    xx1 * yx2 + yx1 * yy2 + zx1 * yz2,
                    xy1 * yx2 + yy1 * yy2 + zy1 * yz2,
                    xz1 * yx2 + yz1 * yy2 + zz1 * yz2,
                    xo1 * yx2 + yo1 * yy2 + zo1 * yz2 + yo2,
                    xx1 * zx2 + yx1 * zy2 + zx1 * zz2,
                    xy1 * zx2 + yy1 * zy2 + zy1 * zz2,
                    xz1 * zx2 + yz1 * zy2 + zz1 * zz2,
                    xo1 * zx2 + yo1 * zy2 + zo1 * zz2 + zo2)


def _flat(source):
    return np.asarray(source, dtype=float).reshape(-1)


def _result_buffer(dest, length):
    """Return ``dest`` as the output buffer, or a new array when ``dest``
    is ``None`` or too small.  A large enough ``dest`` that cannot be
    written in place is rejected."""
    if dest is None or np.size(dest) < length:
        return np.empty(length, dtype=float)
    if not (isinstance(dest, np.ndarray) and dest.dtype == np.float64 and
            dest.flags.c_contiguous and dest.flags.writeable):
        raise InvalidArgumentError(
            "dest must be a writable contiguous float64 array, got {}".format(
                type(dest).__name__), dest)
    return dest.reshape(-1)


@dataclass(frozen=True)
class Matrix3D:
    """Immutable 3x4 affine transform of twelve finite floats."""

    xx: float
    xy: float
    xz: float
    xo: float
    yx: float
    yy: float
    yz: float
    yo: float
    zx: float
    zy: float
    zz: float
    zo: float

    IDENTITY: ClassVar["Matrix3D"]

    def __post_init__(self) -> None:
        values = [getattr(self, name) for name in _COMPONENTS]
        try:
            checked = [checked_float(name, value)
                       for name, value in zip(_COMPONENTS, values)]
        except InvalidArgumentError as err:
            raise InvalidArgumentError(
                "bad matrix {}: {}".format(
                    values, err), err.value) from err
        for name, value in zip(_COMPONENTS, checked):
            object.__setattr__(self, name, value)

    def __str__(self) -> str:
        return self.to_string()

    def __iter__(self):
        for name in _COMPONENTS:
            yield getattr(self, name)

    ## factories
    ## ---------

    @staticmethod
    def get_transform(rx: float, ry: float, rz: float,
                      tx: float, ty: float, tz: float) -> "Matrix3D":
        """Build a transform from rotation angles in degrees and a
        translation.  Rotations are applied about Z, then X, then Y.

        Note that ``rx`` turns clockwise, unlike :meth:`rotate_x`.
        """
        # FIXME: rx should be counter-clockwise
        rad_x = math.radians(rx)
        rad_y = math.radians(ry)
        rad_z = math.radians(rz)

        ct_x = math.cos(rad_x)
        st_x = math.sin(rad_x)
        ct_y = math.cos(rad_y)
        st_y = math.sin(rad_y)
        ct_z = math.cos(rad_z)
        st_z = math.sin(rad_z)

        return Matrix3D(ct_z * ct_y - st_z * st_x * st_y,
                        -st_z * ct_y - ct_z * st_x * st_y,
                        ct_x * st_y,
                        tx,
                        st_z * ct_x,
                        ct_z * ct_x,
                        st_x,
                        ty,
                        -st_z * st_x * ct_y - ct_z * st_y,
                        -ct_z * st_x * ct_y + st_z * st_y,
                        ct_x * ct_y,
                        tz)

    @staticmethod
    def get_from_to_transform(from_: Vector3D, to: Vector3D,
                              up_primary: Vector3D,
                              up_secondary: Vector3D) -> "Matrix3D":
        """Return a viewing transform for an eye at ``from_`` looking at
        ``to``.

        The resulting Z axis points from the target back to the eye.
        ``up_primary`` defines the vertical direction unless it is (almost)
        parallel to the view direction, in which case ``up_secondary`` is
        used.  The eye ends up at the origin.

        Raises :class:`DegenerateGeometryError` when ``from_`` and ``to``
        are almost equal, or when neither up vector gives a usable
        horizontal axis.
        """
        for name, arg in (("from", from_), ("to", to),
                          ("up_primary", up_primary),
                          ("up_secondary", up_secondary)):
            if not isinstance(arg, Vector3D):
                raise InvalidArgumentError(
                    "bad {} vector: {!r}".format(name, arg), arg)

        if from_.almost_equals(to):
            raise DegenerateGeometryError(
                "from ~= to: {} / {}".format(from_, to))

        zx = from_.x - to.x
        zy = from_.y - to.y
        zz = from_.z - to.z
        normalize_z = 1.0 / math.sqrt(zx * zx + zy * zy + zz * zz)
        zx *= normalize_z
        zy *= normalize_z
        zz *= normalize_z

        up = up_primary
        cos = up.x * zx + up.y * zy + up.z * zz
        if cos < -0.999 or cos > 0.999:
            logger.debug("view direction parallel to %s, using %s as up",
                         up_primary, up_secondary)
            up = up_secondary

        ## x axis = up x z
        xx = up.y * zz - up.z * zy
        xy = up.z * zx - up.x * zz
        xz = up.x * zy - up.y * zx
        length_x = math.sqrt(xx * xx + xy * xy + xz * xz)
        if length_x == 0.0:
            raise DegenerateGeometryError(
                "up vector {} is zero or parallel to the view direction".format(up))
        normalize_x = 1.0 / length_x
        xx *= normalize_x
        xy *= normalize_x
        xz *= normalize_x

        ## y axis = z x x
        yx = zy * xz - zz * xy
        yy = zz * xx - zx * xz
        yz = zx * xy - zy * xx

        return Matrix3D(xx, xy, xz, -from_.x * xx - from_.y * xy - from_.z * xz,
                        yx, yy, yz, -from_.x * yx - from_.y * yy - from_.z * yz,
                        zx, zy, zz, -from_.x * zx - from_.y * zy - from_.z * zz)

    @staticmethod
    def get_plane_transform(origin: Vector3D, normal: Vector3D,
                            right_handed: bool) -> "Matrix3D":
        """Return the plane-to-world transform of the plane through
        ``origin`` with unit ``normal`` as its Z axis.

        The plane's X axis is kept in the world XY plane when the normal
        is not close to vertical and in the XZ plane otherwise.
        """
        nx, ny, nz = normal

        if -0.9 < nz < 0.9:
            hyp = math.hypot(nx, ny)
            if hyp == 0.0:
                raise InvalidArgumentError(
                    "bad plane normal: {}".format(normal), normal)
            ax = -ny / hyp if right_handed else ny / hyp
            ay = nx / hyp if right_handed else -nx / hyp
            az = 0.0
        else:
            hyp = math.hypot(nx, nz)
            ax = nz / hyp if right_handed else -nz / hyp
            ay = 0.0
            az = -nx / hyp if right_handed else nx / hyp

        bx = ny * az - nz * ay
        by = nz * ax - nx * az
        bz = nx * ay - ny * ax

        return Matrix3D(ax, bx, nx, origin.x,
                        ay, by, ny, origin.y,
                        az, bz, nz, origin.z)

    @staticmethod
    def get_rotation_transform(pivot: Vector3D, direction: Vector3D,
                               theta: float) -> "Matrix3D":
        """Rotation by ``theta`` radians about the axis through ``pivot``
        along the unit vector ``direction``."""
        px, py, pz = pivot
        dx, dy, dz = direction

        cos = math.cos(theta)
        sin = math.sin(theta)
        t = 1.0 - cos
        tx = t * dx
        ty = t * dy
        tz = t * dz

        xx = tx * dx + cos
        xy = tx * dy - sin * dz
        xz = tx * dz + sin * dy
        yx = ty * dx + sin * dz
        yy = ty * dy + cos
        yz = ty * dz - sin * dx
        zx = tz * dx - sin * dy
        zy = tz * dy + sin * dx
        zz = tz * dz + cos

        return Matrix3D(xx, xy, xz, px - xx * px - xy * py - xz * pz,
                        yx, yy, yz, py - yx * px - yy * py - yz * pz,
                        zx, zy, zz, pz - zx * px - zy * py - zz * pz)

    @staticmethod
    def get_scale_transform(x: float, y: Optional[float] = None,
                            z: Optional[float] = None) -> "Matrix3D":
        """Scale matrix; a single factor scales uniformly."""
        if y is None:
            y = x
        if z is None:
            z = x
        return Matrix3D(x, 0.0, 0.0, 0.0,
                        0.0, y, 0.0, 0.0,
                        0.0, 0.0, z, 0.0)

    @staticmethod
    def get_translation(v: Vector3D) -> "Matrix3D":
        return Matrix3D.get_translation_xyz(v.x, v.y, v.z)

    @staticmethod
    def get_translation_xyz(x: float, y: float, z: float) -> "Matrix3D":
        """Translation matrix; ``IDENTITY`` itself for a zero offset."""
        if x == 0.0 and y == 0.0 and z == 0.0:
            return Matrix3D.IDENTITY
        return Matrix3D(1.0, 0.0, 0.0, x,
                        0.0, 1.0, 0.0, y,
                        0.0, 0.0, 1.0, z)

    @classmethod
    def from_string(cls, value: str) -> "Matrix3D":
        """Parse the twelve comma separated values of :meth:`to_string`."""
        return cls(*parse_floats(value, 12))

    @classmethod
    def get_property(cls, properties: Optional[Mapping], name: str,
                     default: Optional["Matrix3D"] = None) -> Optional["Matrix3D"]:
        """Read a matrix stored in string form under ``name``; returns
        ``default`` when it is absent or does not parse."""
        return read_property(cls, properties, name, default)

    ## comparison
    ## ----------

    def almost_equals(self, other: "Matrix3D", epsilon: float = EPSILON) -> bool:
        if other is None:
            return False
        if self is other:
            return True
        return all(almost_equal(a, b, epsilon) for a, b in zip(self, other))

    ## composition
    ## -----------

    def multiply(self, other: "Matrix3D") -> "Matrix3D":
        """Transform that applies ``self`` first and ``other`` second."""
        if not isinstance(other, Matrix3D):
            raise InvalidArgumentError(
                "cannot multiply by {!r}".format(other), other)
        return _multiply(*self, *other)

    def multiply_inverse(self, other: "Matrix3D") -> "Matrix3D":
        """Same as ``self.multiply(other.inverse())`` without building the
        intermediate matrix."""
        if not isinstance(other, Matrix3D):
            raise InvalidArgumentError(
                "cannot multiply by {!r}".format(other), other)
        return _multiply(*self,
                         other.xx, other.yx, other.zx, other.inverse_xo(),
                         other.xy, other.yy, other.zy, other.inverse_yo(),
                         other.xz, other.yz, other.zz, other.inverse_zo())

    def inverse(self) -> "Matrix3D":
        return Matrix3D(self.xx, self.yx, self.zx, self.inverse_xo(),
                        self.xy, self.yy, self.zy, self.inverse_yo(),
                        self.xz, self.yz, self.zz, self.inverse_zo())

    def inverse_xo(self) -> float:
        return -self.xo * self.xx - self.yo * self.yx - self.zo * self.zx

    def inverse_yo(self) -> float:
        return -self.xo * self.xy - self.yo * self.yy - self.zo * self.zy

    def inverse_zo(self) -> float:
        return -self.xo * self.xz - self.yo * self.yz - self.zo * self.zz

    def get_rotation(self) -> "Matrix3D":
        """Drop translation and scale by normalizing each row."""
        lx = Vector3D.length_xyz(self.xx, self.xy, self.xz)
        ly = Vector3D.length_xyz(self.yx, self.yy, self.yz)
        lz = Vector3D.length_xyz(self.zx, self.zy, self.zz)
        if lx == 0.0 or ly == 0.0 or lz == 0.0:
            raise InvalidArgumentError(
                "cannot normalize zero-length row of {}".format(self.to_friendly_string()),
                self)
        return Matrix3D(self.xx / lx, self.xy / lx, self.xz / lx, 0.0,
                        self.yx / ly, self.yy / ly, self.yz / ly, 0.0,
                        self.zx / lz, self.zy / lz, self.zz / lz, 0.0)

    def rotate_x(self, theta: float) -> "Matrix3D":
        """Follow this transform by a counter-clockwise rotation of
        ``theta`` radians about the X axis."""
        if almost_equal(theta, 0.0):
            return self
        cos = math.cos(theta)
        sin = math.sin(theta)
        return Matrix3D(
            self.xx, self.xy, self.xz, self.xo,
            cos * self.yx - sin * self.zx, cos * self.yy - sin * self.zy,
            cos * self.yz - sin * self.zz, cos * self.yo - sin * self.zo,
            sin * self.yx + cos * self.zx, sin * self.yy + cos * self.zy,
            sin * self.yz + cos * self.zz, sin * self.yo + cos * self.zo)

    def rotate_y(self, theta: float) -> "Matrix3D":
        """Follow this transform by a counter-clockwise rotation of
        ``theta`` radians about the Y axis."""
        if almost_equal(theta, 0.0):
            return self
        cos = math.cos(theta)
        sin = math.sin(theta)
        return Matrix3D(
            cos * self.xx + sin * self.zx, cos * self.xy + sin * self.zy,
            cos * self.xz + sin * self.zz, cos * self.xo + sin * self.zo,
            self.yx, self.yy, self.yz, self.yo,
            -sin * self.xx + cos * self.zx, -sin * self.xy + cos * self.zy,
            -sin * self.xz + cos * self.zz, -sin * self.xo + cos * self.zo)

    def rotate_z(self, theta: float) -> "Matrix3D":
        """Follow this transform by a counter-clockwise rotation of
        ``theta`` radians about the Z axis."""
        if almost_equal(theta, 0.0):
            return self
        cos = math.cos(theta)
        sin = math.sin(theta)
        return Matrix3D(
            cos * self.xx - sin * self.yx, cos * self.xy - sin * self.yy,
            cos * self.xz - sin * self.yz, cos * self.xo - sin * self.yo,
            sin * self.xx + cos * self.yx, sin * self.xy + cos * self.yy,
            sin * self.xz + cos * self.yz, sin * self.xo + cos * self.yo,
            self.zx, self.zy, self.zz, self.zo)

    def scale(self, x: float, y: Optional[float] = None,
              z: Optional[float] = None) -> "Matrix3D":
        """Follow this transform by a scale; one factor scales uniformly."""
        if y is None:
            y = x
        if z is None:
            z = x
        return Matrix3D(x * self.xx, x * self.xy, x * self.xz, x * self.xo,
                        y * self.yx, y * self.yy, y * self.yz, y * self.yo,
                        z * self.zx, z * self.zy, z * self.zz, z * self.zo)

    def set(self, **components) -> "Matrix3D":
        """Return a matrix with the named components replaced.  ``None``
        or NaN keeps the current value; ``self`` is returned when nothing
        changes."""
        unknown = sorted(k for k in components if k not in _COMPONENTS)
        if unknown:
            raise InvalidArgumentError(
                "unknown matrix component(s): {}".format(", ".join(unknown)),
                unknown)
        changes = {}
        for name, value in components.items():
            if value is None or (isinstance(value, float) and math.isnan(value)):
                continue
            if value != getattr(self, name):
                changes[name] = value
        if not changes:
            return self
        return dataclasses.replace(self, **changes)

    ## translation
    ## -----------

    @property
    def translation(self) -> Vector3D:
        return Vector3D(self.xo, self.yo, self.zo)

    def set_translation(self, v: Vector3D) -> "Matrix3D":
        return self.set_translation_xyz(v.x, v.y, v.z)

    def set_translation_xyz(self, x: float, y: float, z: float) -> "Matrix3D":
        return Matrix3D(self.xx, self.xy, self.xz, x,
                        self.yx, self.yy, self.yz, y,
                        self.zx, self.zy, self.zz, z)

    def plus(self, v: Vector3D) -> "Matrix3D":
        return self.plus_xyz(v.x, v.y, v.z)

    def plus_xyz(self, x: float, y: float, z: float) -> "Matrix3D":
        """Add an offset to the translation; ``self`` for a zero offset."""
        if x == 0.0 and y == 0.0 and z == 0.0:
            return self
        return self.set_translation_xyz(self.xo + x, self.yo + y, self.zo + z)

    def minus(self, v: Vector3D) -> "Matrix3D":
        return self.minus_xyz(v.x, v.y, v.z)

    def minus_xyz(self, x: float, y: float, z: float) -> "Matrix3D":
        if x == 0.0 and y == 0.0 and z == 0.0:
            return self
        return self.set_translation_xyz(self.xo - x, self.yo - y, self.zo - z)

    ## point transforms
    ## ----------------

    def transform(self, v: Vector3D) -> Vector3D:
        return self.transform_xyz(v.x, v.y, v.z)

    def transform_xyz(self, x: float, y: float, z: float) -> Vector3D:
        return Vector3D(x * self.xx + y * self.xy + z * self.xz + self.xo,
                        x * self.yx + y * self.yy + z * self.yz + self.yo,
                        x * self.zx + y * self.zy + z * self.zz + self.zo)

    def transform_bounds(self, bounds: Bounds3D) -> Bounds3D:
        """Transform both corners of ``bounds``.  The result is only
        axis-aligned for rotations by multiples of 90 degrees; see
        :meth:`Bounds3D.convert_obb_to_aabb` for the general case."""
        return Bounds3D(self.transform(bounds.v1), self.transform(bounds.v2))

    def transform_x(self, x: float, y: float, z: float) -> float:
        return x * self.xx + y * self.xy + z * self.xz + self.xo

    def transform_y(self, x: float, y: float, z: float) -> float:
        return x * self.yx + y * self.yy + z * self.yz + self.yo

    def transform_z(self, x: float, y: float, z: float) -> float:
        return x * self.zx + y * self.zy + z * self.zz + self.zo

    def inverse_transform(self, v: Vector3D) -> Vector3D:
        return self.inverse_transform_xyz(v.x, v.y, v.z)

    def inverse_transform_xyz(self, x: float, y: float, z: float) -> Vector3D:
        tx = x - self.xo
        ty = y - self.yo
        tz = z - self.zo
        return Vector3D(tx * self.xx + ty * self.yx + tz * self.zx,
                        tx * self.xy + ty * self.yy + tz * self.zy,
                        tx * self.xz + ty * self.yz + tz * self.zz)

    def inverse_transform_x(self, x: float, y: float, z: float) -> float:
        return ((x - self.xo) * self.xx + (y - self.yo) * self.yx +
                (z - self.zo) * self.zx)

    def inverse_transform_y(self, x: float, y: float, z: float) -> float:
        return ((x - self.xo) * self.xy + (y - self.yo) * self.yy +
                (z - self.zo) * self.zy)

    def inverse_transform_z(self, x: float, y: float, z: float) -> float:
        return ((x - self.xo) * self.xz + (y - self.yo) * self.yz +
                (z - self.zo) * self.zz)

    ## vector transforms (no translation)
    ## ----------------------------------

    def rotate(self, v: Vector3D) -> Vector3D:
        return self.rotate_xyz(v.x, v.y, v.z)

    def rotate_xyz(self, x: float, y: float, z: float) -> Vector3D:
        return Vector3D(x * self.xx + y * self.xy + z * self.xz,
                        x * self.yx + y * self.yy + z * self.yz,
                        x * self.zx + y * self.zy + z * self.zz)

    def rotate_vector_x(self, x: float, y: float, z: float) -> float:
        return x * self.xx + y * self.xy + z * self.xz

    def rotate_vector_y(self, x: float, y: float, z: float) -> float:
        return x * self.yx + y * self.yy + z * self.yz

    def rotate_vector_z(self, x: float, y: float, z: float) -> float:
        return x * self.zx + y * self.zy + z * self.zz

    def inverse_rotate(self, v: Vector3D) -> Vector3D:
        return self.inverse_rotate_xyz(v.x, v.y, v.z)

    def inverse_rotate_xyz(self, x: float, y: float, z: float) -> Vector3D:
        return Vector3D(x * self.xx + y * self.yx + z * self.zx,
                        x * self.xy + y * self.yy + z * self.zy,
                        x * self.xz + y * self.yz + z * self.zz)

    def inverse_rotate_x(self, x: float, y: float, z: float) -> float:
        return x * self.xx + y * self.yx + z * self.zx

    def inverse_rotate_y(self, x: float, y: float, z: float) -> float:
        return x * self.xy + y * self.yy + z * self.zy

    def inverse_rotate_z(self, x: float, y: float, z: float) -> float:
        return x * self.xz + y * self.yz + z * self.zz

    ## batch transforms
    ## ----------------

    def _has_unit_rotation(self) -> bool:
        return (self.xx == 1.0 and self.xy == 0.0 and self.xz == 0.0 and
                self.yx == 0.0 and self.yy == 1.0 and self.yz == 0.0 and
                self.zx == 0.0 and self.zy == 0.0 and self.zz == 1.0)

    def transform_array(self, source, dest=None, point_count=None):
        """Transform a flat ``x, y, z, x, y, z, ...`` sequence of points.

        The result is written into ``dest`` when it is a large enough
        float64 ``numpy`` array (``dest`` may be ``source`` itself) and
        into a new array when ``dest`` is ``None`` or too small; the array
        written to is returned.  Any other large enough ``dest`` (a list,
        another dtype, a strided view) raises :class:`InvalidArgumentError`.
        For the identity with ``dest is source`` nothing is written and
        ``dest`` comes back as given.
        Pure translations and the identity skip the matrix product but
        give the same numbers as the general path.
        """
        if dest is source and self == Matrix3D.IDENTITY:
            return dest

        src = _flat(source)
        if point_count is None:
            point_count = src.size // 3
        length = point_count * 3
        result = _result_buffer(dest, length)

        if self._has_unit_rotation():
            if self.xo == 0.0 and self.yo == 0.0 and self.zo == 0.0:
                logger.debug("transform_array: identity, copying %d points",
                             point_count)
                result[:length] = src[:length]
            else:
                logger.debug("transform_array: translating %d points",
                             point_count)
                result[0:length:3] = src[0:length:3] + self.xo
                result[1:length:3] = src[1:length:3] + self.yo
                result[2:length:3] = src[2:length:3] + self.zo
        elif self.xo == 0.0 and self.yo == 0.0 and self.zo == 0.0:
            self.rotate_array(src, result, point_count)
        else:
            x = src[0:length:3].copy()
            y = src[1:length:3].copy()
            z = src[2:length:3].copy()
            result[0:length:3] = x * self.xx + y * self.xy + z * self.xz + self.xo
            result[1:length:3] = x * self.yx + y * self.yy + z * self.yz + self.yo
            result[2:length:3] = x * self.zx + y * self.zy + z * self.zz + self.zo

        return result

    def rotate_array(self, source, dest=None, vector_count=None):
        """Rotate a flat sequence of vectors, ignoring the translation.
        Buffer handling is the same as for :meth:`transform_array`."""
        if dest is source and self == Matrix3D.IDENTITY:
            return dest

        src = _flat(source)
        if vector_count is None:
            vector_count = src.size // 3
        length = vector_count * 3
        result = _result_buffer(dest, length)

        if self._has_unit_rotation():
            if result is not src:
                result[:length] = src[:length]
        else:
            x = src[0:length:3].copy()
            y = src[1:length:3].copy()
            z = src[2:length:3].copy()
            result[0:length:3] = x * self.xx + y * self.xy + z * self.xz
            result[1:length:3] = x * self.yx + y * self.yy + z * self.yz
            result[2:length:3] = x * self.zx + y * self.zy + z * self.zz

        return result

    ## properties
    ## ----------

    def is_righthanded(self) -> bool:
        """``True`` if the axes (the matrix columns) form a right-handed
        coordinate system."""
        ## x-axis cross y-axis should point along the z-axis
        cross_x = self.yx * self.zy - self.zx * self.yy
        cross_y = self.zx * self.xy - self.xx * self.zy
        cross_z = self.xx * self.yy - self.yx * self.xy
        return Vector3D.dot6(cross_x, cross_y, cross_z,
                             self.xz, self.yz, self.zz) > 0.0

    def determinant(self) -> float:
        """Determinant of the 3x3 rotation/scale part."""
        return (self.xx * self.yy * self.zz -
                self.xx * self.yz * self.zy -
                self.xy * self.yx * self.zz +
                self.xy * self.yz * self.zx +
                self.xz * self.yx * self.zy -
                self.xz * self.yy * self.zx)

    ## conversion
    ## ----------

    def to_array(self) -> list:
        """All 16 elements of the 4x4 matrix in row-major order."""
        return [self.xx, self.xy, self.xz, self.xo,
                self.yx, self.yy, self.yz, self.yo,
                self.zx, self.zy, self.zz, self.zo,
                0.0, 0.0, 0.0, 1.0]

    def to_column_major_array(self) -> list:
        """All 16 elements of the 4x4 matrix in column-major order, the
        layout OpenGL expects."""
        return [self.xx, self.yx, self.zx, 0.0,
                self.xy, self.yy, self.zy, 0.0,
                self.xz, self.yz, self.zz, 0.0,
                self.xo, self.yo, self.zo, 1.0]

    def to_numpy(self) -> np.ndarray:
        return np.array(self.to_array(), dtype=float).reshape(4, 4)

    def to_string(self) -> str:
        return ",".join(repr(value) for value in self)

    def to_friendly_string(self) -> str:
        values = self.to_array()
        return "".join(
            "\n\t\t\t[ {!r}, {!r}, {!r}, {!r} ]".format(*values[i:i + 4])
            for i in (0, 4, 8))


Matrix3D.IDENTITY = Matrix3D(1.0, 0.0, 0.0, 0.0,
                             0.0, 1.0, 0.0, 0.0,
                             0.0, 0.0, 1.0, 0.0)
