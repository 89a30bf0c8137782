"""Two-body Keplerian propagation of celestial bodies.

Places a body on its heliocentric orbit at a given instant by solving
Kepler's equation, and reports the body's spin about its tilted axis.
Every function here is a pure function of its arguments and the active
configuration, safe to call from any thread.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from numbers import Real
from typing import NamedTuple, Union

import numpy as np

from .config import config
from .orbital_elements import OrbitalElements

logger = logging.getLogger(__name__)

# Reference epoch: 2000-01-01 12:00 UTC
J2000 = datetime(2000, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

SECONDS_PER_DAY = 86400.0

TimeLike = Union[datetime, float]


class KeplerSolution(NamedTuple):
    """Result of a Kepler equation solve."""

    eccentric_anomaly: float  # rad
    iterations: int
    converged: bool


class Rotation(NamedTuple):
    """Orientation of a body about its own axis."""

    tilt: float  # degrees, axial obliquity
    spin: float  # degrees, in [0, 360)


def days_since_epoch(time: TimeLike) -> float:
    """Days elapsed since J2000.

    A naive datetime is taken to be UTC. A real number is taken to
    already be days since J2000 and is returned as a float.
    """
    if isinstance(time, datetime):
        if time.tzinfo is None:
            time = time.replace(tzinfo=timezone.utc)
        return (time - J2000).total_seconds() / SECONDS_PER_DAY
    if isinstance(time, Real):
        return float(time)
    raise TypeError(
        f"time must be a datetime or days since J2000, got {type(time)}")


def wrap_value(value: float, limit: float) -> float:
    """Wrap value into [0, limit)."""
    wrapped = value % limit
    # -1e-18 % 360 rounds up to exactly 360.0
    return 0.0 if wrapped >= limit else wrapped


def mean_anomaly(elements: OrbitalElements, time: TimeLike) -> float:
    """Mean anomaly M = (2π / period) × days [rad], unwrapped."""
    return (2 * np.pi / elements.orbital_period) * days_since_epoch(time)


def solve_kepler(M: float, e: float, max_iterations: int | None = None,
                 tolerance: float | None = None) -> KeplerSolution:
    """
    Solve Kepler's equation E - e sin(E) = M by Newton-Raphson.

    Seeded with E0 = M. Stops as soon as the residual of the current
    iterate drops below tolerance (the step is still applied). Reaching
    the iteration cap is not an error: the last iterate is returned with
    converged=False.

    Parameters
    ----------
    M : float
        Mean anomaly [rad]
    e : float
        Eccentricity, 0 <= e < 1
    max_iterations : int, optional
        Defaults to config.KEPLER_MAX_ITERATIONS
    tolerance : float, optional
        Defaults to config.KEPLER_TOLERANCE

    Returns
    -------
    KeplerSolution
    """
    if max_iterations is None:
        max_iterations = config.KEPLER_MAX_ITERATIONS
    if tolerance is None:
        tolerance = config.KEPLER_TOLERANCE

    E = float(M)
    for iteration in range(1, max_iterations + 1):
        f = E - e * np.sin(E) - M
        df = 1.0 - e * np.cos(E)
        E -= f / df
        if abs(f) < tolerance:
            return KeplerSolution(float(E), iteration, True)

    logger.debug("Kepler solve did not converge after %d iterations "
                 "(M=%r, e=%r)", max_iterations, M, e)
    return KeplerSolution(float(E), max_iterations, False)


def true_anomaly(E: float, e: float) -> float:
    """True anomaly from eccentric anomaly [rad]."""
    sqrt_term = np.sqrt((1 + e) / (1 - e))
    return 2.0 * np.arctan2(sqrt_term * np.sin(E / 2.0), np.cos(E / 2.0))


def orbital_radius(a: float, e: float, nu: float) -> float:
    """Heliocentric distance r = a(1 - e²) / (1 + e cos ν)."""
    return a * (1 - e**2) / (1 + e * np.cos(nu))


def position(elements: OrbitalElements, time: TimeLike) -> np.ndarray:
    """
    Heliocentric Cartesian position of a body at the given time.

    Parameters
    ----------
    elements : OrbitalElements
        Body to place
    time : datetime or float
        Instant to evaluate, as a datetime or days since J2000

    Returns
    -------
    np.ndarray
        Read-only float64 array [x, y, z] in AU, ecliptic frame

    Raises
    ------
    InvalidElements
        If the elements cannot describe an elliptic orbit
    """
    elements.validate()
    a, e, i, omega, w, _ = elements.elements

    M = mean_anomaly(elements, time)
    E = solve_kepler(M, e).eccentric_anomaly
    nu = true_anomaly(E, e)
    r = orbital_radius(a, e, nu)

    # Some values need to be in radians
    i, omega, w = np.radians([i, omega, w])
    arg = w + nu

    x = r * (np.cos(omega) * np.cos(arg) - np.sin(omega) * np.sin(arg) * np.cos(i))
    y = r * (np.sin(omega) * np.cos(arg) + np.cos(omega) * np.sin(arg) * np.cos(i))
    z = r * np.sin(arg) * np.sin(i)

    result = np.array([x, y, z], dtype=float)
    result.flags.writeable = False
    return result


def positions(elements: OrbitalElements, times) -> np.ndarray:
    """
    Evaluate position() at several times.

    Returns
    -------
    np.ndarray
        Array of shape (n_times, 3) [AU]
    """
    if isinstance(times, (datetime, Real)):
        times = [times]
    if len(times) == 0:
        return np.empty((0, 3))
    return np.array([position(elements, t) for t in times])


def rotation(elements: OrbitalElements, time: TimeLike) -> Rotation:
    """
    Orientation of a body at the given time.

    Returns
    -------
    Rotation
        tilt is the static obliquity, spin is 360° × days / rotation
        period wrapped into [0, 360)

    Raises
    ------
    InvalidElements
        If the elements are invalid
    """
    elements.validate()
    fraction = days_since_epoch(time) / elements.rotation_period
    spin = wrap_value(360.0 * fraction, 360.0)
    return Rotation(elements.obliquity, float(spin))
