"""
Global Configuration for Perihelion Package
===========================================

This module provides package-wide configuration settings that users can modify
to control solver tolerances, search budgets, network generation odds and
default plotting options.

Examples
--------
View current configuration:

>>> import perihelion
>>> print(perihelion.config)

Modify settings:

>>> perihelion.config.KEPLER_TOLERANCE = 1e-12  # Stricter Kepler solve
>>> perihelion.config.DEFAULT_MAX_ITERATIONS = 50000  # Larger search budget

Reset to defaults:

>>> perihelion.config.reset()

Temporarily modify settings:

>>> with perihelion.temp_config(GATEWAY_ODDS=2):
...     # Gateways twice as likely for this block only
...     network = perihelion.generate(42, bodies, 100)

Notes
-----
These settings are read at call time. Modifying them will impact
all subsequent operations until changed again or reset.
"""

from dataclasses import dataclass
from contextlib import contextmanager


@dataclass
class PerihelionConfig:
    """
    Global configuration for Perihelion package.

    Attributes
    ----------
    KEPLER_MAX_ITERATIONS : int
        Newton-Raphson iteration cap when solving Kepler's equation.
        Default: 100
    KEPLER_TOLERANCE : float
        Residual |E - e sin E - M| below which the solver stops early.
        Default: 1e-10
    REFERENCE_RADIUS_KM : float
        Radius of the reference sphere used for great-circle distances.
        Every body reuses this value regardless of its own radius.
        Default: 6378.0
    CROSS_BODY_COST : float
        Cost assigned between network nodes on different bodies, where no
        surface metric is defined.
        Default: 1.0
    DEFAULT_MAX_ITERATIONS : int
        Node expansions allowed per path search before giving up.
        Default: 10000
    GATEWAY_ODDS : int
        A node that is not the first of its group becomes a gateway with
        probability 1/GATEWAY_ODDS, otherwise a terminal.
        Default: 5
    DEFAULT_PLOT_POINTS : int
        Default number of samples for orbit track plotting.
        Default: 500
    DEFAULT_TRACK_COLOR : str
        Default color for orbit track lines in plots.
        Default: 'orange'
    DEFAULT_BODY_COLOR : str
        Default color for the central star marker.
        Default: 'gold'
    DEFAULT_NODE_COLOR : str
        Default color for body position markers.
        Default: 'steelblue'
    """

    # Kepler solver
    KEPLER_MAX_ITERATIONS: int = 100
    KEPLER_TOLERANCE: float = 1e-10

    # Surface metric
    REFERENCE_RADIUS_KM: float = 6378.0
    CROSS_BODY_COST: float = 1.0

    # Pathfinding
    DEFAULT_MAX_ITERATIONS: int = 10000

    # Network generation
    GATEWAY_ODDS: int = 5

    # Plotting defaults
    DEFAULT_PLOT_POINTS: int = 500
    DEFAULT_TRACK_COLOR: str = 'orange'
    DEFAULT_BODY_COLOR: str = 'gold'
    DEFAULT_NODE_COLOR: str = 'steelblue'

    def reset(self):
        """
        Reset all configuration values to package defaults.

        Examples
        --------
        >>> import perihelion
        >>> perihelion.config.KEPLER_MAX_ITERATIONS = 10  # Modify
        >>> perihelion.config.reset()  # Back to defaults
        >>> perihelion.config.KEPLER_MAX_ITERATIONS
        100
        """
        defaults = PerihelionConfig()
        for key in self.__dataclass_fields__:
            setattr(self, key, getattr(defaults, key))

    def __repr__(self):
        """Return formatted string showing all configuration values."""
        lines = ["PerihelionConfig:"]
        lines.append("  Kepler Solver:")
        lines.append(f"    KEPLER_MAX_ITERATIONS = {self.KEPLER_MAX_ITERATIONS}")
        lines.append(f"    KEPLER_TOLERANCE = {self.KEPLER_TOLERANCE}")
        lines.append("  Surface Metric:")
        lines.append(f"    REFERENCE_RADIUS_KM = {self.REFERENCE_RADIUS_KM}")
        lines.append(f"    CROSS_BODY_COST = {self.CROSS_BODY_COST}")
        lines.append("  Pathfinding:")
        lines.append(f"    DEFAULT_MAX_ITERATIONS = {self.DEFAULT_MAX_ITERATIONS}")
        lines.append("  Network Generation:")
        lines.append(f"    GATEWAY_ODDS = {self.GATEWAY_ODDS}")
        lines.append("  Plotting:")
        lines.append(f"    DEFAULT_PLOT_POINTS = {self.DEFAULT_PLOT_POINTS}")
        lines.append(f"    DEFAULT_TRACK_COLOR = '{self.DEFAULT_TRACK_COLOR}'")
        lines.append(f"    DEFAULT_BODY_COLOR = '{self.DEFAULT_BODY_COLOR}'")
        lines.append(f"    DEFAULT_NODE_COLOR = '{self.DEFAULT_NODE_COLOR}'")
        return "\n".join(lines)


# Global configuration instance
config = PerihelionConfig()


@contextmanager
def temp_config(**kwargs):
    """
    Context manager for temporarily modifying configuration values.

    Configuration is automatically restored when the context exits,
    even if an exception occurs.

    Parameters
    ----------
    **kwargs
        Configuration attributes to temporarily modify.

    Examples
    --------
    >>> import perihelion
    >>> with perihelion.temp_config(KEPLER_MAX_ITERATIONS=5):
    ...     # Coarse Kepler solve for this block only
    ...     pos = perihelion.position(perihelion.defaults.MARS, 1000.0)
    >>> # Original config restored here
    >>> perihelion.config.KEPLER_MAX_ITERATIONS
    100

    Raises
    ------
    AttributeError
        If an invalid configuration attribute is specified.
    """
    for key in kwargs:
        if not hasattr(config, key):
            raise AttributeError(
                f"PerihelionConfig has no attribute '{key}'. "
                f"Valid attributes: {list(config.__dataclass_fields__.keys())}"
            )

    old_values = {}
    for key, value in kwargs.items():
        old_values[key] = getattr(config, key)
        setattr(config, key, value)

    try:
        yield config
    finally:
        for key, value in old_values.items():
            setattr(config, key, value)
