"""
Bed height model for the fluidized bed reactor.

Maps the fluidization velocity onto the vertical extent of the particle bed
and onto the dimensionless fluidization factor that drives particle motion.
"""

from .. import config


def compute_bed_height(velocity, reactor_height=None, min_bed_height=None, max_bed_height=None):
    """
    Compute the bed height for a given fluidization velocity.

    The bed stays settled up to the onset velocity, expands linearly until
    full fluidization, and saturates above it.

    Args:
        velocity (float): Fluidization velocity in m/h
        reactor_height (float, optional): Reactor height; defaults to config.REACTOR_HEIGHT
        min_bed_height (float, optional): Settled bed height; defaults to reactor_height / 8
        max_bed_height (float, optional): Fully fluidized bed height; defaults to reactor_height * 1.3

    Returns:
        float: Bed height in container pixels
    """
    if reactor_height is None:
        reactor_height = config.REACTOR_HEIGHT
    if min_bed_height is None:
        min_bed_height = reactor_height / 8
    if max_bed_height is None:
        max_bed_height = reactor_height * 1.3

    onset = config.FLUIDIZATION_ONSET_VELOCITY
    full = config.FULL_FLUIDIZATION_VELOCITY
    if velocity <= onset:
        return min_bed_height
    if velocity >= full:
        return max_bed_height
    return min_bed_height + (velocity - onset) / (full - onset) * (max_bed_height - min_bed_height)


def fluidization_factor(velocity):
    """
    Motion intensity for a given velocity: 0 when settled, 1 at full fluidization.

    Unlike the bed height this keeps growing above full fluidization.
    """
    onset = config.FLUIDIZATION_ONSET_VELOCITY
    full = config.FULL_FLUIDIZATION_VELOCITY
    return max(0.0, (velocity - onset) / (full - onset))
