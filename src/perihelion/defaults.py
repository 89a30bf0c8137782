"""
Default Celestial Bodies
========================

Predefined OrbitalElements for the planets of the Solar System (plus Pluto)
and a factory for a registry holding all of them.

The Sun sits at the origin of the heliocentric frame and has no orbit of
its own, so it is not included.

Examples
--------
>>> from perihelion.defaults import MARS, solar_system
>>> registry = solar_system()
>>> registry.get('mars') is MARS
True
"""
from .orbital_elements import OrbitalElements
from .registry import BodyRegistry

"""
Orbital elements at epoch J2000, from Standish, Keplerian Elements for
Approximate Positions of the Major Planets (JPL), with the argument of
perihelion derived as longitude of perihelion minus ascending node.
Physical properties from the NASA planetary fact sheets.
Units: AU, degrees, days, km
"""

MERCURY = OrbitalElements(
    'Mercury',
    semi_major_axis=0.38709927,
    eccentricity=0.20563593,
    inclination=7.00497902,
    ascending_node=48.33076593,
    argument_of_perihelion=29.12703035,
    orbital_period=87.9691,
    rotation_period=58.6462,
    obliquity=0.034,
    radius=2439.7
)

VENUS = OrbitalElements(
    'Venus',
    semi_major_axis=0.72333566,
    eccentricity=0.00677672,
    inclination=3.39467605,
    ascending_node=76.67984255,
    argument_of_perihelion=54.92262463,
    orbital_period=224.701,
    rotation_period=243.025,
    obliquity=177.36,
    radius=6051.8
)

EARTH = OrbitalElements(
    'Earth',
    semi_major_axis=1.00000261,
    eccentricity=0.01671123,
    inclination=0.0,
    ascending_node=0.0,
    argument_of_perihelion=102.93768193,
    orbital_period=365.256363,
    rotation_period=0.99726968,
    obliquity=23.44,
    radius=6371.0
)

MARS = OrbitalElements(
    'Mars',
    semi_major_axis=1.52371034,
    eccentricity=0.09339410,
    inclination=1.84969142,
    ascending_node=49.55953891,
    argument_of_perihelion=286.4968315,
    orbital_period=686.980,
    rotation_period=1.02595676,
    obliquity=25.19,
    radius=3389.5
)

JUPITER = OrbitalElements(
    'Jupiter',
    semi_major_axis=5.20288700,
    eccentricity=0.04838624,
    inclination=1.30439695,
    ascending_node=100.47390909,
    argument_of_perihelion=274.25457074,
    orbital_period=4332.589,
    rotation_period=0.41354,
    obliquity=3.13,
    radius=69911.0
)

SATURN = OrbitalElements(
    'Saturn',
    semi_major_axis=9.53667594,
    eccentricity=0.05386179,
    inclination=2.48599187,
    ascending_node=113.66242448,
    argument_of_perihelion=338.93645383,
    orbital_period=10759.22,
    rotation_period=0.44401,
    obliquity=26.73,
    radius=58232.0
)

URANUS = OrbitalElements(
    'Uranus',
    semi_major_axis=19.18916464,
    eccentricity=0.04725744,
    inclination=0.77263783,
    ascending_node=74.01692503,
    argument_of_perihelion=96.93735127,
    orbital_period=30688.5,
    rotation_period=0.71833,
    obliquity=97.77,
    radius=25362.0
)

NEPTUNE = OrbitalElements(
    'Neptune',
    semi_major_axis=30.06992276,
    eccentricity=0.00859048,
    inclination=1.77004347,
    ascending_node=131.78422574,
    argument_of_perihelion=273.18053653,
    orbital_period=60195.0,
    rotation_period=0.67125,
    obliquity=28.32,
    radius=24622.0
)

PLUTO = OrbitalElements(
    'Pluto',
    semi_major_axis=39.48211675,
    eccentricity=0.24882730,
    inclination=17.14001206,
    ascending_node=110.30393684,
    argument_of_perihelion=113.76497945,
    orbital_period=90560.0,
    rotation_period=6.3872,
    obliquity=122.53,
    radius=1188.3
)

PLANETS = (MERCURY, VENUS, EARTH, MARS, JUPITER, SATURN, URANUS, NEPTUNE)


def solar_system(include_pluto: bool = True) -> BodyRegistry:
    """
    Registry of the predefined Solar System bodies.

    Parameters
    ----------
    include_pluto : bool, optional
        Whether to include Pluto (default True)

    Returns
    -------
    BodyRegistry
        A fresh registry, safe to extend
    """
    bodies = PLANETS + (PLUTO,) if include_pluto else PLANETS
    return BodyRegistry(bodies)
