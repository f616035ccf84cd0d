"""
Particle system module for the fluidized bed reactor.

This module handles population generation with a skewed size distribution,
the per-tick heuristic particle motion, and conversion of the particle
system into value-like records for rendering.
"""

import logging
from typing import NamedTuple

import numpy as np
from .. import config
from .bed_height import fluidization_factor

logger = logging.getLogger(__name__)


class Particle(NamedTuple):
    """A single particle: stable id, position and fixed diameter."""
    id: int
    x: float
    y: float
    size: float


def compute_particle_sizes(particle_count, exponent, min_size, max_size):
    """
    Compute the size of every particle in generation order.

    Sizes decrease with index: particle 0 is the largest. The exponent controls
    how sharply the distribution skews toward large particles.

    Args:
        particle_count (int): Number of particles
        exponent (float): Size distribution exponent in (0, 1]
        min_size (float): Smallest particle diameter
        max_size (float): Largest particle diameter

    Returns:
        np.ndarray: Particle diameters, shape (N,)
    """
    if particle_count == 1:
        distribution_factor = np.zeros(1)
    else:
        distribution_factor = (np.arange(particle_count) / (particle_count - 1)) ** exponent
    return max_size - (max_size - min_size) * distribution_factor


def create_particles(sim_config, bed_height, reactor_height=None, rng=None):
    """
    Create a fresh particle population seeded at the bottom of the reactor.

    Vertical seeding is confined to a band of SEED_BAND / bed_height pixels
    above the bottom; the motion update spreads particles upward over time.

    Args:
        sim_config (SimulationConfig): Current simulation parameters
        bed_height (float): Current bed height
        reactor_height (float, optional): Reactor height; defaults to config.REACTOR_HEIGHT
        rng (np.random.Generator, optional): Random source

    Returns:
        dict: Particle system dictionary with ids, positions and sizes
    """
    if reactor_height is None:
        reactor_height = config.REACTOR_HEIGHT
    if rng is None:
        rng = np.random.default_rng()

    n = sim_config.particle_count
    sizes = compute_particle_sizes(n, sim_config.size_distribution_exponent,
                                   sim_config.min_particle_size, sim_config.max_particle_size)

    x_low = config.CONTAINER_MARGIN
    x_high = config.CONTAINER_WIDTH - config.CONTAINER_MARGIN
    particle_positions = np.empty((n, 2))
    particle_positions[:, 0] = rng.uniform(x_low, x_high, size=n)
    particle_positions[:, 1] = reactor_height - rng.uniform(0.0, config.SEED_BAND / bed_height, size=n)

    logger.debug("Created %d particles (bed height %.1f)", n, bed_height)

    return {
        'ids': np.arange(n),
        'particle_positions': particle_positions,
        'sizes': sizes,
    }


def get_distribution_scores(sizes, y, min_size, max_size, bed_height, reactor_height):
    """
    Distance between each particle's normalized height in the bed and the height its size implies.

    The largest particle maps to the top edge of the bed envelope and the
    smallest to the bottom edge (y grows downward).

    Returns:
        np.ndarray: Non-negative scores, shape (N,)
    """
    size_range = max_size - min_size
    if size_range > 0:
        normalized_size = (sizes - min_size) / size_range
    else:
        normalized_size = np.full_like(sizes, 0.5)
    normalized_position = (y - (reactor_height - bed_height)) / bed_height
    return np.abs(normalized_position - (1.0 - normalized_size))


def update_particles(system, sim_config, bed_height, reactor_height=None, rng=None):
    """
    Advance every particle by one simulation tick.

    Each particle receives a random vertical kick biased by its distance
    from the height its size implies, plus pure lateral jitter, both scaled
    by the fluidization factor and its size. Positions are then clamped to
    the current bed envelope. Below the onset velocity the bed is at rest:
    no random numbers are drawn and only the clamp applies, so positions
    settle after one tick and stay fixed.

    Args:
        system (dict): Particle system dictionary
        sim_config (SimulationConfig): Current simulation parameters
        bed_height (float): Current bed height
        reactor_height (float, optional): Reactor height; defaults to config.REACTOR_HEIGHT
        rng (np.random.Generator, optional): Random source

    Returns:
        dict: New particle system dictionary; the input arrays are not modified
    """
    ff = fluidization_factor(sim_config.velocity)
    if reactor_height is None:
        reactor_height = config.REACTOR_HEIGHT
    if rng is None:
        rng = np.random.default_rng()

    positions = system['particle_positions']
    sizes = system['sizes']
    n = len(sizes)
    min_size = sim_config.min_particle_size
    x, y = positions[:, 0], positions[:, 1]

    distribution = get_distribution_scores(sizes, y, min_size, sim_config.max_particle_size,
                                           bed_height, reactor_height)
    max_movement = config.MAX_MOVEMENT * ff * (min_size / sizes)

    if ff > 0:
        vertical = ff * (rng.random(n) - 0.5 + (0.5 - distribution)) * 2 * max_movement
        horizontal = ff * (rng.random(n) - 0.5) * max_movement
    else:
        vertical = horizontal = np.zeros(n)

    half = sizes / 2
    new_y = np.minimum(y - vertical, reactor_height - half)
    new_y = np.maximum(new_y, reactor_height - bed_height + half)

    x_limit = config.CONTAINER_WIDTH - config.CONTAINER_MARGIN
    new_x = np.minimum(x + horizontal, x_limit - half)
    new_x = np.maximum(new_x, half)

    new_system = dict(system)
    new_system['particle_positions'] = np.column_stack((new_x, new_y))
    return new_system


def iter_particles(system):
    """Yield Particle records in generation order."""
    positions = system['particle_positions']
    for pid, (x, y), size in zip(system['ids'], positions, system['sizes']):
        yield Particle(int(pid), float(x), float(y), float(size))
