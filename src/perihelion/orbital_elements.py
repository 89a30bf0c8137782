'''Interplanetary network simulation package
OrbitalElements class definition'''

import numpy as np
from typing import Any, Iterable, Mapping

from .exceptions import InvalidElements

#define celestial body orbital element class
class OrbitalElements:
    """
    Represents a heliocentric Keplerian orbit together with the physical
    properties of the body travelling it.

    Angles are stored in degrees, distances in AU (orbit) and km (radius),
    periods in days. OrbitalElements is immutable, create a new instance
    to change a value.

    Identity is the case-folded id: two instances with ids "Mars" and
    "MARS" are the same body for equality, hashing and registry lookup,
    whatever their numeric fields.
    """
    # ========== CLASS CONSTANTS ==========
    # Names of the fields, in constructor order
    FIELDS = ('semi_major_axis', 'eccentricity', 'inclination',
              'ascending_node', 'argument_of_perihelion', 'orbital_period',
              'rotation_period', 'obliquity', 'radius')

    # Column aliases accepted by from_dataframe / from_records
    _ALIASES = {
        'a': 'semi_major_axis',
        'e': 'eccentricity',
        'i': 'inclination',
        'omega': 'ascending_node',
        'w': 'argument_of_perihelion',
        'period': 'orbital_period',
    }

    # ========== CONSTRUCTION ==========
    def __init__(self, id: str, semi_major_axis: float, eccentricity: float,
                 inclination: float, ascending_node: float,
                 argument_of_perihelion: float, orbital_period: float,
                 rotation_period: float = 1.0, obliquity: float = 0.0,
                 radius: float = 1.0, validate: bool = True):
        """
        Create orbital elements for a named body.

        Parameters
        ----------
        id : str
            Unique identifier or common name of the body
        semi_major_axis : float
            Mean orbital distance [AU]
        eccentricity : float
            Orbit eccentricity, 0 is circular [dimensionless, 0 <= e < 1]
        inclination : float
            Tilt of the orbit relative to the ecliptic [deg]
        ascending_node : float
            Longitude of the ascending node [deg]
        argument_of_perihelion : float
            Angle from the ascending node to perihelion [deg]
        orbital_period : float
            Time to complete one orbit [days]
        rotation_period : float, optional
            Time to complete one spin about the body axis [days]
        obliquity : float, optional
            Axial tilt relative to the orbital plane [deg]
        radius : float, optional
            Mean body radius [km]
        validate : bool, optional
            Whether to validate elements (default True)
        """
        self._id = str(id)
        self._key = self._id.casefold()
        self._elements = np.array([semi_major_axis, eccentricity, inclination,
                                   ascending_node, argument_of_perihelion,
                                   orbital_period], dtype=float)
        # Ensure immutability of elements array
        self._elements.flags.writeable = False
        self._rotation_period = float(rotation_period)
        self._obliquity = float(obliquity)
        self._radius = float(radius)
        # run validation checks on input parameters (if not flagged otherwise)
        if validate:
            self.validate()

    # ========== VALIDATION ==========
    def validate(self):
        """
        Check that the elements describe a propagatable elliptic orbit.

        Raises
        ------
        InvalidElements
            If any constraint is violated. Values are never clamped.
        """
        if not self._key.strip():
            raise InvalidElements("Body id must be a non-empty string")
        values = np.append(self._elements, [self._rotation_period,
                                            self._obliquity, self._radius])
        if not np.all(np.isfinite(values)):
            raise InvalidElements(
                f"Elements of '{self._id}' contain NaN or Inf", self._id)

        a, e, i, omega, w, period = self._elements
        if not 0 <= e < 1:
            raise InvalidElements(
                f"Eccentricity of '{self._id}' must be in [0, 1), got {e}",
                self._id)
        if a <= 0:
            raise InvalidElements(
                f"Semi-major axis of '{self._id}' must be positive, got {a}",
                self._id)
        if period <= 0:
            raise InvalidElements(
                f"Orbital period of '{self._id}' must be positive, got {period}",
                self._id)
        if self._rotation_period <= 0:
            raise InvalidElements(
                f"Rotation period of '{self._id}' must be positive, "
                f"got {self._rotation_period}", self._id)
        if self._radius <= 0:
            raise InvalidElements(
                f"Radius of '{self._id}' must be positive, got {self._radius}",
                self._id)

    # ========== FACTORY METHODS ==========
    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]],
                     validate: bool = True) -> list["OrbitalElements"]:
        """
        Create list of OrbitalElements from mappings.

        Each mapping needs an 'id' key plus the orbital fields, either by
        full name or by the short aliases (a, e, i, omega, w, period).

        Returns
        -------
        list of OrbitalElements
        """
        return [cls(validate=validate, **cls._normalise_keys(record))
                for record in records]

    @classmethod
    def from_dataframe(cls, df, validate: bool = True) -> list["OrbitalElements"]:
        """
        Create list of OrbitalElements from pandas DataFrame.

        Parameters
        ----------
        df : pd.DataFrame
            One body per row. Must contain an 'id' column (or use the index
            as ids) and one column per orbital field.
        validate : bool, optional, defaults to True

        Returns
        -------
        list of OrbitalElements
        """
        if 'id' not in df.columns:
            df = df.rename_axis('id').reset_index()
        return cls.from_records(df.to_dict(orient='records'), validate=validate)

    @classmethod
    def _normalise_keys(cls, record: Mapping[str, Any]) -> dict:
        """Map aliased column names onto constructor keywords."""
        kwargs = {}
        for key, value in record.items():
            name = cls._ALIASES.get(key, key)
            if name != 'id' and name not in cls.FIELDS:
                raise ValueError(f"Unknown orbital element field '{key}'. "
                                 f"Use: {['id', *cls.FIELDS]}")
            kwargs[name] = value
        if 'id' not in kwargs:
            raise ValueError("Orbital element record requires an 'id'")
        return kwargs

    # ========== PROPERTY ACCESS ==========
    @property
    def id(self) -> str:
        """Identifier as given at construction"""
        return self._id

    @property
    def key(self) -> str:
        """Case-folded identifier used for equality and lookup"""
        return self._key

    @property
    def elements(self) -> np.ndarray:
        """Orbital elements [a, e, i, Ω, ω, period] (read-only)"""
        return self._elements

    @property
    def semi_major_axis(self) -> float:
        """Semi-major axis [AU]"""
        return float(self._elements[0])

    @property
    def eccentricity(self) -> float:
        return float(self._elements[1])

    @property
    def inclination(self) -> float:
        """Inclination [deg]"""
        return float(self._elements[2])

    @property
    def ascending_node(self) -> float:
        """Longitude of the ascending node [deg]"""
        return float(self._elements[3])

    @property
    def argument_of_perihelion(self) -> float:
        """Argument of perihelion [deg]"""
        return float(self._elements[4])

    @property
    def orbital_period(self) -> float:
        """Orbital period [days]"""
        return float(self._elements[5])

    @property
    def rotation_period(self) -> float:
        """Sidereal rotation period [days]"""
        return self._rotation_period

    @property
    def obliquity(self) -> float:
        """Axial tilt [deg]"""
        return self._obliquity

    @property
    def radius(self) -> float:
        """Mean radius [km]"""
        return self._radius

    # ========== ORBITAL PROPERTIES ==========
    def mean_motion(self) -> float:
        """
        Calculate mean motion (n = 2π / period)

        Returns
        -------
        float
            Mean motion [rad/day]
        """
        return 2 * np.pi / self.orbital_period

    def perihelion_distance(self) -> float:
        """Closest approach to the Sun, a(1 - e) [AU]"""
        return self.semi_major_axis * (1 - self.eccentricity)

    def aphelion_distance(self) -> float:
        """Furthest distance from the Sun, a(1 + e) [AU]"""
        return self.semi_major_axis * (1 + self.eccentricity)

    def to_dict(self) -> dict:
        """Return the body as a flat mapping accepted by from_records()"""
        record = {'id': self._id}
        for name in self.FIELDS:
            record[name] = getattr(self, name)
        return record

    # ========== BATCH OPERATIONS ==========
    class Batch:
        """
        Batch operations on collections of OrbitalElements.
        """
        @staticmethod
        def orbital_period(bodies):
            """Get orbital periods for multiple bodies"""
            return np.array([b.orbital_period for b in bodies])

        @staticmethod
        def mean_motion(bodies):
            """Get mean motions for multiple bodies"""
            return np.array([b.mean_motion() for b in bodies])

        @staticmethod
        def to_numpy(bodies):
            """
            Convert list of OrbitalElements to NumPy array.

            Returns
            -------
            np.ndarray
                Array of shape (n_bodies, 6) containing orbital elements
            """
            return np.array([b.elements for b in bodies])

        @staticmethod
        def to_dataframe(bodies):
            """
            Convert list of OrbitalElements to pandas DataFrame.

            Parameters
            ----------
            bodies : list of OrbitalElements

            Returns
            -------
            pd.DataFrame
                DataFrame indexed by body id with one column per field
            """
            import pandas as pd
            # check for empty list input and return empty DataFrame
            if not bodies:
                return pd.DataFrame(columns=list(OrbitalElements.FIELDS))
            return pd.DataFrame([b.to_dict() for b in bodies]).set_index('id')

    # ========== SPECIAL METHODS ==========
    def __repr__(self):
        #Machine-readable representation
        return (f"OrbitalElements('{self._id}', a={self.semi_major_axis}, "
                f"e={self.eccentricity}, period={self.orbital_period})")

    def __str__(self):
        #Human-readable representation
        return (f"{self._id}:\n"
                f"  a      = {self.semi_major_axis:12.6f} AU\n"
                f"  e      = {self.eccentricity:12.6f}\n"
                f"  i      = {self.inclination:12.4f}°\n"
                f"  Ω      = {self.ascending_node:12.4f}°\n"
                f"  ω      = {self.argument_of_perihelion:12.4f}°\n"
                f"  period = {self.orbital_period:12.4f} d\n"
                f"  spin   = {self.rotation_period:12.4f} d\n"
                f"  tilt   = {self.obliquity:12.4f}°\n"
                f"  radius = {self.radius:12.1f} km")

    def __eq__(self, other):
        if not isinstance(other, OrbitalElements):
            return NotImplemented
        return self._key == other._key

    def __hash__(self):
        return hash(self._key)
