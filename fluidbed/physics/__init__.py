"""
Physics modules for the fluidized bed reactor.

This module contains the bed height model, population generation and the
per-tick particle motion update.
"""

__all__ = ['bed_height', 'particle_system']
