"""
fluidbed: An interactive particle simulation of a fluidized bed reactor.

This package provides a bed height model, a particle population generator and
a heuristic particle motion update, plus a matplotlib view with parameter
sliders for exploring how fluidization velocity and particle size
distribution shape the bed.
"""

__version__ = "0.1.0"

__all__ = ['config', 'simulation']
