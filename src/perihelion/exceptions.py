"""
Exception types raised by the Perihelion package.

Structural absence (an unknown body id, a node missing from a graph) is
never raised; those lookups return None or an empty path instead.
"""


class PerihelionError(Exception):
    """Base class for all Perihelion errors."""


class InvalidElements(PerihelionError, ValueError):
    """
    Orbital elements that cannot be propagated.

    Raised for eccentricity outside [0, 1), non-positive orbital or
    rotation period, non-positive semi-major axis or radius, non-finite
    values and empty ids.
    """

    def __init__(self, message: str, body_id: str = ""):
        self.body_id = body_id
        super().__init__(message)


class GraphConstructionError(PerihelionError, ValueError):
    """A value declared a neighbour that is not part of the graph input."""
