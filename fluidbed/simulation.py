"""
Reactor simulation engine.

Owns the current parameters, the derived bed height and the particle
population, and exposes the two triggers the presentation layer drives:
parameter changes (which may regenerate the population) and timer ticks.
"""

import logging

import numpy as np
from . import config
from .physics import bed_height as bed_height_model
from .physics import particle_system

logger = logging.getLogger(__name__)


class ReactorSimulation:
    """Single-threaded fluidized bed simulation driven by an external clock."""

    def __init__(self, sim_config=None, reactor_height=None, rng=None, seed=None):
        """
        Initialize the simulation and generate the first population.

        Args:
            sim_config (SimulationConfig, optional): Initial parameters; defaults to config.default_config()
            reactor_height (float, optional): Reactor height; defaults to config.REACTOR_HEIGHT
            rng (np.random.Generator, optional): Random source shared by generation and motion
            seed (int, optional): Seed for a new generator when rng is not given

        Raises:
            InvalidConfigurationError: If sim_config is out of range
        """
        if sim_config is None:
            sim_config = config.default_config()
        self.reactor_height = config.REACTOR_HEIGHT if reactor_height is None else reactor_height
        self.rng = rng if rng is not None else np.random.default_rng(seed)

        self._config = config.validate_config(sim_config, self.settled_bed_height)
        self._bed_height = self._compute_bed_height(sim_config.velocity)
        self.tick_count = 0
        self.generation = 0
        self._regenerate()

    @property
    def settled_bed_height(self):
        return self.reactor_height / 8

    def _compute_bed_height(self, velocity):
        return bed_height_model.compute_bed_height(
            velocity, self.reactor_height,
            self.settled_bed_height, self.reactor_height * 1.3)

    def _regenerate(self):
        self._system = particle_system.create_particles(
            self._config, self._bed_height, self.reactor_height, self.rng)
        self.generation += 1
        logger.info("Generated %d particles (bed height %.1f, generation %d)",
                    self._config.particle_count, self._bed_height, self.generation)

    @property
    def config(self):
        return self._config

    @property
    def bed_height(self):
        return self._bed_height

    @property
    def system(self):
        return self._system

    @property
    def particles(self):
        """Current population as Particle records in generation order."""
        return list(particle_system.iter_particles(self._system))

    @property
    def fluidization_factor(self):
        return bed_height_model.fluidization_factor(self._config.velocity)

    def on_parameter_change(self, sim_config):
        """
        Apply new parameters, regenerating the population when required.

        The population is replaced when any size-distribution parameter, the
        particle count, or the derived bed height changes. Velocity changes
        that leave the bed height untouched only affect subsequent ticks.

        Args:
            sim_config (SimulationConfig): New parameters

        Returns:
            bool: True if the population was regenerated

        Raises:
            InvalidConfigurationError: If sim_config is out of range; the
                previous state is kept
        """
        config.validate_config(sim_config, self.settled_bed_height)
        new_bed_height = self._compute_bed_height(sim_config.velocity)
        regenerate = (sim_config.population_key() != self._config.population_key()
                      or new_bed_height != self._bed_height)

        self._config = sim_config
        self._bed_height = new_bed_height
        if regenerate:
            self._regenerate()
        return regenerate

    def on_tick(self):
        """Advance the population by one step and return the new particle system."""
        self._system = particle_system.update_particles(
            self._system, self._config, self._bed_height, self.reactor_height, self.rng)
        self.tick_count += 1
        if self.tick_count % 1000 == 0:
            logger.debug("Tick %d (velocity %.1f m/h)", self.tick_count, self._config.velocity)
        return self._system

    def run(self, n_ticks):
        """Advance the population by n_ticks steps without a display."""
        for _ in range(n_ticks):
            self.on_tick()
        return self._system
