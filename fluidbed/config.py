"""
Configuration module for the fluidized bed reactor simulation.

This module contains global constants, default parameters, and configuration
settings used throughout the simulation, plus the SimulationConfig value that
carries the user-controlled parameters into the physics core.
"""

import math
import numbers
from dataclasses import dataclass, replace

# Reactor geometry (container-local pixel space, y = 0 at the container top)
REACTOR_HEIGHT = 400
CONTAINER_WIDTH = 200
CONTAINER_MARGIN = 10  # right-hand margin kept free of particles

# Bed envelope limits
MIN_BED_HEIGHT = REACTOR_HEIGHT / 8    # settled bed (no fluidization)
MAX_BED_HEIGHT = REACTOR_HEIGHT * 1.3  # fully fluidized bed

# Fluidization regime (m/h)
FLUIDIZATION_ONSET_VELOCITY = 10.0
FULL_FLUIDIZATION_VELOCITY = 40.0

# Particle motion parameters
MAX_MOVEMENT = 10.0  # px per tick for the smallest particle at fluidization factor 1
SEED_BAND = 3.0      # initial vertical band is SEED_BAND / bed_height px above the bottom

# Parameter domains: (min, max, step, default)
VELOCITY_RANGE = (0.0, 80.0, 1.0, 10.0)
DISTRIBUTION_RANGE = (0.01, 1.0, 0.01, 0.5)
PARTICLE_COUNT_RANGE = (1000, 10000, 100, 4500)
MIN_SIZE_RANGE = (0.01, 1.0, 0.01, 0.05)
MAX_SIZE_RANGE = (1.0, 10.0, 0.1, 5.0)

# Programmatic callers may go below the slider minimum for the particle count
MAX_PARTICLE_COUNT = PARTICLE_COUNT_RANGE[1]

# Animation parameters
ANIMATION_INTERVAL = 1  # milliseconds between ticks (as fast as the host allows)
ANIMATION_FRAMES = None  # run until the window closes

# Window title
WINDOW_TITLE = "Fluidized Bed Reactor Simulation"

# Reactor styling
CONTAINER_GRADIENT = ("#1e3c72", "#2a5298")  # bottom, top
CONTAINER_EDGE_COLOR = "black"
BED_MARKER_COLOR = "#ff6b6b"
BED_MARKER_SCALE = 0.6  # marker drawn at bed_height * 0.6 above the container bottom
PARTICLE_COLOR = "#ffab91"
DISTRIBUTOR_HEIGHT = 25
DISTRIBUTOR_HOLE_SPACING = 10
BACKGROUND_COLOR = "#F7F7F7"
TEXT_COLOR = "#333333"

# Output
DEFAULT_OUTPUT_DIR = "output"
DPI = 150  # For saved figures

# UI hotkeys
SNAPSHOT_HOTKEY = 'a'


class InvalidConfigurationError(ValueError):
    """Raised when a SimulationConfig lies outside the supported domain."""


@dataclass(frozen=True)
class SimulationConfig:
    """User-controlled simulation parameters."""

    velocity: float = VELOCITY_RANGE[3]
    size_distribution_exponent: float = DISTRIBUTION_RANGE[3]
    particle_count: int = PARTICLE_COUNT_RANGE[3]
    min_particle_size: float = MIN_SIZE_RANGE[3]
    max_particle_size: float = MAX_SIZE_RANGE[3]

    def updated(self, **changes):
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    def population_key(self):
        """Fields whose change requires a fresh particle population."""
        return (self.particle_count, self.size_distribution_exponent,
                self.min_particle_size, self.max_particle_size)


def default_config():
    """Return the configuration the interactive view starts with."""
    return SimulationConfig()


def validate_config(sim_config, settled_bed_height=None):
    """
    Check a SimulationConfig against the supported domain.

    Args:
        sim_config (SimulationConfig): Parameters to check
        settled_bed_height (float, optional): Bed height at rest for the reactor
            in use; defaults to MIN_BED_HEIGHT

    Returns:
        SimulationConfig: The same object, for chaining

    Raises:
        InvalidConfigurationError: If any parameter is out of range
    """
    for name in ('velocity', 'size_distribution_exponent',
                 'min_particle_size', 'max_particle_size'):
        value = getattr(sim_config, name)
        if isinstance(value, bool) or not isinstance(value, numbers.Real) or not math.isfinite(value):
            raise InvalidConfigurationError(f"{name} must be a finite number, got {value!r}")

    if not VELOCITY_RANGE[0] <= sim_config.velocity <= VELOCITY_RANGE[1]:
        raise InvalidConfigurationError(
            f"velocity must be within [{VELOCITY_RANGE[0]}, {VELOCITY_RANGE[1]}] m/h, "
            f"got {sim_config.velocity}")

    if not DISTRIBUTION_RANGE[0] <= sim_config.size_distribution_exponent <= DISTRIBUTION_RANGE[1]:
        raise InvalidConfigurationError(
            f"size_distribution_exponent must be within [{DISTRIBUTION_RANGE[0]}, "
            f"{DISTRIBUTION_RANGE[1]}], got {sim_config.size_distribution_exponent}")

    count = sim_config.particle_count
    if isinstance(count, bool) or not isinstance(count, numbers.Integral):
        raise InvalidConfigurationError(f"particle_count must be an integer, got {count!r}")
    if not 1 <= count <= MAX_PARTICLE_COUNT:
        raise InvalidConfigurationError(
            f"particle_count must be within [1, {MAX_PARTICLE_COUNT}], got {count}")

    if sim_config.min_particle_size <= 0:
        raise InvalidConfigurationError(
            f"min_particle_size must be positive, got {sim_config.min_particle_size}")
    if sim_config.min_particle_size > sim_config.max_particle_size:
        raise InvalidConfigurationError(
            f"min_particle_size ({sim_config.min_particle_size}) must not exceed "
            f"max_particle_size ({sim_config.max_particle_size})")
    # A particle larger than the settled bed has an empty vertical envelope
    if settled_bed_height is None:
        settled_bed_height = MIN_BED_HEIGHT
    if sim_config.max_particle_size > settled_bed_height:
        raise InvalidConfigurationError(
            f"max_particle_size must not exceed the settled bed height ({settled_bed_height:g}), "
            f"got {sim_config.max_particle_size}")

    return sim_config

