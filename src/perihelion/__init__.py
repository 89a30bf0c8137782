"""
Perihelion: Interplanetary Network Simulation

A Python package for placing celestial bodies on their Keplerian orbits,
procedurally generating a computer network across them, and routing
between network nodes with A* search.
"""

# Core classes
from .orbital_elements import OrbitalElements, OrbitalElements as OE
from .geography import GeographicCoordinate, Location
from .network import Network, NetworkNode, NodeKind
from .graph import Graph, GraphNode, SearchResult
from .registry import BodyRegistry
from .orbit_track import OrbitTrack

# Operations
from .propagator import position, positions, rotation, Rotation, J2000
from .geography import haversine_distance, geographic_to_cartesian
from .network import generate
from .graph import find_path

# Errors
from .exceptions import PerihelionError, InvalidElements, GraphConstructionError

# Configuration
from .config import config, temp_config

# Predefined bodies
from . import defaults
from .defaults import solar_system

# Package metadata
__version__ = "0.1.0"
__author__ = "Perihelion Developers"

# Define what gets imported with "from perihelion import *"
__all__ = [
    # Classes
    "OrbitalElements",
    "GeographicCoordinate",
    "Location",
    "Network",
    "NetworkNode",
    "NodeKind",
    "Graph",
    "GraphNode",
    "SearchResult",
    "BodyRegistry",
    "OrbitTrack",
    "Rotation",
    # Abbreviations
    "OE",
    # Operations
    "position",
    "positions",
    "rotation",
    "haversine_distance",
    "geographic_to_cartesian",
    "generate",
    "find_path",
    "solar_system",
    # Errors
    "PerihelionError",
    "InvalidElements",
    "GraphConstructionError",
    # Constants and configuration
    "J2000",
    "config",
    "temp_config",
]
