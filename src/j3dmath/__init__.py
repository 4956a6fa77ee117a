# -*- coding: utf-8 -*-
"""3D vectors, affine transforms and bounding boxes."""

from importlib.metadata import PackageNotFoundError, version

from j3dmath.errors import DegenerateGeometryError, GeometryError, InvalidArgumentError
from j3dmath.geomtools import EPSILON
from j3dmath.vector import Vector2D, Vector3D
from j3dmath.bounds import Bounds3D, Bounds3DBuilder
from j3dmath.xform import Matrix3D

try:
    __version__ = version("j3dmath")
except PackageNotFoundError:  # pragma: no cover - handled when package not installed
    __version__ = "unknown"

__all__ = [
    "Bounds3D",
    "Bounds3DBuilder",
    "DegenerateGeometryError",
    "EPSILON",
    "GeometryError",
    "InvalidArgumentError",
    "Matrix3D",
    "Vector2D",
    "Vector3D",
]
