"""
Exceptions raised by the j3dmath value types and factories.

Everything derives from :class:`GeometryError` so callers can catch the
whole family at once.  The concrete classes also inherit the matching
builtin so that plain ``except ValueError`` handlers keep working.
"""


class GeometryError(Exception):
    """Base class for j3dmath errors."""


class InvalidArgumentError(GeometryError, ValueError, TypeError):
    """A component or argument is not a finite number of the expected type."""

    def __init__(self, message, value=None):
        super().__init__(message)
        self.value = value


class DegenerateGeometryError(GeometryError, RuntimeError):
    """The input describes a configuration with no well defined result,
    e.g. a look-at transform whose eye and target coincide."""
