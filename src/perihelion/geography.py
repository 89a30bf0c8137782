'''Interplanetary network simulation package
Surface coordinates and the great-circle metric between them'''

import numpy as np
from dataclasses import dataclass, replace
from typing import Optional

from .config import config
from .orbital_elements import OrbitalElements


@dataclass(frozen=True)
class GeographicCoordinate:
    """
    Immutable position on the surface of a sphere.

    Attributes
    ----------
    latitude : float
        North-south position [deg]
    longitude : float
        East-west position [deg]
    """
    latitude: float
    longitude: float

    def __str__(self):
        return f"({self.latitude:.5f}, {self.longitude:.5f})"


@dataclass(frozen=True)
class Location:
    """
    A point on the surface of a celestial body.

    Locations are values: to move a node, build a new Location with
    with_body() or with_coordinates() and assign it wholesale.
    """
    body: OrbitalElements
    coordinates: GeographicCoordinate

    def with_body(self, body: OrbitalElements) -> "Location":
        """Copy of this location placed on another body"""
        return replace(self, body=body)

    def with_coordinates(self, coordinates: GeographicCoordinate) -> "Location":
        """Copy of this location moved to other coordinates"""
        return replace(self, coordinates=coordinates)

    def same_body(self, other: "Location") -> bool:
        return self.body == other.body

    def __str__(self):
        return f"{self.body.id} {self.coordinates}"


def haversine_distance(c0: GeographicCoordinate, c1: GeographicCoordinate,
                       radius: Optional[float] = None) -> float:
    """
    Great-circle distance between two coordinates.

    Parameters
    ----------
    c0, c1 : GeographicCoordinate
        Endpoints, assumed to be on the same sphere
    radius : float, optional
        Sphere radius [km]. Defaults to config.REFERENCE_RADIUS_KM, which
        every body shares regardless of its true size.

    Returns
    -------
    float
        Distance [km]
    """
    if radius is None:
        radius = config.REFERENCE_RADIUS_KM
    lat0, lon0, lat1, lon1 = np.radians(
        [c0.latitude, c0.longitude, c1.latitude, c1.longitude])
    dlat = lat1 - lat0
    dlon = lon1 - lon0
    h = np.sin(dlat / 2)**2 + np.cos(lat0) * np.cos(lat1) * np.sin(dlon / 2)**2
    # rounding can push h a hair past 1 for antipodal points
    h = min(max(h, 0.0), 1.0)
    return float(2 * radius * np.arcsin(np.sqrt(h)))


def surface_distance(loc0: Location, loc1: Location) -> Optional[float]:
    """
    Haversine distance between two locations on the same body.

    Returns None when the locations are on different bodies, for which
    no metric is defined.
    """
    if not loc0.same_body(loc1):
        return None
    return haversine_distance(loc0.coordinates, loc1.coordinates)


def geographic_to_cartesian(latitude: float, longitude: float,
                            radius: float = 1.0) -> np.ndarray:
    """
    Convert geographic coordinates to a point on a sphere.

    The y axis points through the north pole.

    Parameters
    ----------
    latitude, longitude : float
        Coordinates [deg]
    radius : float, optional
        Sphere radius (default 1, the unit sphere)

    Returns
    -------
    np.ndarray
        [x, y, z] in the units of radius
    """
    lat, lon = np.radians([latitude, longitude])
    return np.array([radius * np.cos(lat) * np.cos(lon),
                     radius * np.sin(lat),
                     radius * np.cos(lat) * np.sin(lon)])


def random_location(rng: np.random.Generator, body: OrbitalElements) -> Location:
    """Uniformly random latitude/longitude on the given body."""
    latitude = rng.random() * 180.0 - 90.0
    longitude = rng.random() * 360.0 - 180.0
    return Location(body, GeographicCoordinate(latitude, longitude))
