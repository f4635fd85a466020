"""
Orrery: Interactive Solar System Kinematics

A Python package for animating a hierarchical model of the solar system
(the Sun, planets and their moons on circular orbits) and for steering a
smoothed camera onto whichever body the user selects.
"""

# Configuration
from .config import config, temp_config

# Core classes
from .bodies import BodyId, BodyRecord, BODY_TABLE
from .catalog import Catalog, CatalogError
from .transform import LiveTransform
from .propagator import OrbitalPropagator
from .selection import Pick, Deselect, SelectionState, EventQueue
from .camera import CameraPose, CameraController
from .simulation import Simulation

# Unit conversion
from .scale import (
    scaled_radius, scaled_distance, orbital_angular_velocity,
    ASTRO_UNIT_M, GRAV,
)

# Package metadata
__version__ = "0.1.0"

# Define what gets imported with "from orrery import *"
__all__ = [
    # Configuration
    "config",
    "temp_config",
    # Classes
    "BodyId",
    "BodyRecord",
    "Catalog",
    "CatalogError",
    "LiveTransform",
    "OrbitalPropagator",
    "Pick",
    "Deselect",
    "SelectionState",
    "EventQueue",
    "CameraPose",
    "CameraController",
    "Simulation",
    # Functions
    "scaled_radius",
    "scaled_distance",
    "orbital_angular_velocity",
    # Constants
    "BODY_TABLE",
    "ASTRO_UNIT_M",
    "GRAV",
]
