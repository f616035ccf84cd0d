"""
User interface components for the fluidized bed reactor.

This module contains the parameter sliders and snapshot controls.
"""

__all__ = ['ui_controls']
