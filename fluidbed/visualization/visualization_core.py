"""
Visualization core module for the fluidized bed reactor.

This module handles figure setup, the reactor container, the bed height
marker, the distributor plate, and the particle artists.
"""

import os

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.collections import EllipseCollection
from matplotlib.colors import LinearSegmentedColormap
from matplotlib.patches import Rectangle
from .. import config


def setup_figure_layout():
    """
    Setup the main figure layout: reactor view on top, room for sliders below.

    Returns:
        tuple: (fig, ax) - Figure and reactor axes
    """
    fig = plt.figure(figsize=(6, 10))
    fig.patch.set_facecolor(config.BACKGROUND_COLOR)

    # Reactor takes the upper 60% of the figure; sliders live underneath
    ax = fig.add_axes([0.1, 0.38, 0.8, 0.56])
    ax.set_aspect('equal')

    return fig, ax


def apply_professional_styling(fig, ax):
    """
    Apply background, title and axis styling to the reactor view.

    Args:
        fig: matplotlib figure object
        ax: reactor axes
    """
    fig.patch.set_facecolor(config.BACKGROUND_COLOR)
    ax.set_facecolor(config.BACKGROUND_COLOR)
    ax.set_xticks([])
    ax.set_yticks([])
    for spine in ax.spines.values():
        spine.set_visible(False)
    ax.set_title(config.WINDOW_TITLE, fontsize=14, color=config.TEXT_COLOR, pad=14, weight='bold')


def prepare_reactor(ax, reactor_height=None):
    """
    Draw the static parts of the reactor: gradient column, border and distributor plate.

    The y axis is inverted so that y = 0 is the container top, matching the
    particle coordinates.

    Args:
        ax: reactor axes
        reactor_height (float, optional): Reactor height; defaults to config.REACTOR_HEIGHT
    """
    if reactor_height is None:
        reactor_height = config.REACTOR_HEIGHT
    width = config.CONTAINER_WIDTH

    # Vertical gradient, darker at the bottom
    cmap = LinearSegmentedColormap.from_list('reactor', list(config.CONTAINER_GRADIENT))
    gradient = np.linspace(1.0, 0.0, 256)[:, None]
    ax.imshow(gradient, cmap=cmap, aspect='auto', origin='upper',
              extent=(0, width, reactor_height, 0), zorder=0)

    ax.add_patch(Rectangle((0, 0), width, reactor_height, fill=False,
                           edgecolor=config.CONTAINER_EDGE_COLOR, linewidth=2, zorder=5))

    # Distributor plate: black strip with a staggered pattern of holes
    plate_top = reactor_height + 2
    plate_height = config.DISTRIBUTOR_HEIGHT
    ax.add_patch(Rectangle((0, plate_top), width, plate_height, facecolor='black',
                           edgecolor='black', linewidth=2, zorder=1))
    spacing = config.DISTRIBUTOR_HOLE_SPACING
    hx, hy = np.meshgrid(np.arange(0, width + 1, spacing),
                         np.arange(plate_top, plate_top + plate_height + 1, spacing))
    ox, oy = np.meshgrid(np.arange(spacing / 2, width, spacing),
                         np.arange(plate_top + spacing / 2, plate_top + plate_height, spacing))
    holes_x = np.concatenate([hx.ravel(), ox.ravel()])
    holes_y = np.concatenate([hy.ravel(), oy.ravel()])
    ax.scatter(holes_x, holes_y, s=2, c='white', linewidths=0, zorder=2)

    ax.set_xlim(-2, width + 2)
    ax.set_ylim(plate_top + plate_height + 2, -2)
    ax.set_aspect('equal')


def bed_marker_level(bed_height, reactor_height=None):
    """Vertical position of the dashed bed height marker."""
    if reactor_height is None:
        reactor_height = config.REACTOR_HEIGHT
    return reactor_height - bed_height * config.BED_MARKER_SCALE


def draw_bed_marker(ax, bed_height, reactor_height=None):
    """
    Draw the dashed bed height marker.

    Returns:
        Line2D: The marker line
    """
    level = bed_marker_level(bed_height, reactor_height)
    (line,) = ax.plot([0, config.CONTAINER_WIDTH], [level, level], linestyle='--',
                      color=config.BED_MARKER_COLOR, linewidth=2, zorder=4)
    return line


def update_bed_marker(line, bed_height, reactor_height=None):
    """Move the bed height marker to the current bed height."""
    level = bed_marker_level(bed_height, reactor_height)
    line.set_ydata([level, level])


def particle_centers(system):
    """Circle centers; particle x, y address the top-left of the bounding box."""
    half = system['sizes'][:, None] / 2
    return system['particle_positions'] + half


def draw_particles(ax, system):
    """
    Draw the particle population as circles sized in data units.

    Args:
        ax: reactor axes
        system (dict): Particle system dictionary

    Returns:
        EllipseCollection: The particle artist
    """
    sizes = system['sizes']
    collection = EllipseCollection(
        sizes, sizes, np.zeros_like(sizes), units='xy',
        offsets=particle_centers(system), offset_transform=ax.transData,
        facecolors=config.PARTICLE_COLOR, edgecolors='none', zorder=3)
    ax.add_collection(collection)
    return collection


def update_particle_artist(collection, system):
    """Move existing particle circles to the current positions."""
    collection.set_offsets(particle_centers(system))


def draw_status_text(ax):
    """Create the text artist that reports velocity and bed height."""
    return ax.text(0.5, -0.02, '', transform=ax.transAxes, ha='center', va='top',
                   fontsize=10, color=config.TEXT_COLOR)


def format_status(sim_config, bed_height):
    return (f"Velocity {sim_config.velocity:.0f} m/h | Bed height {bed_height:.1f} px | "
            f"{sim_config.particle_count} particles")


def save_final_figure(fig, output_dir, filename="fluidbed_figure.png"):
    """
    Save the figure as a PNG file.

    Args:
        fig: Matplotlib figure object
        output_dir (str): Output directory path
        filename (str): Filename for the saved figure

    Returns:
        str: Path of the written file
    """
    os.makedirs(output_dir, exist_ok=True)
    path = os.path.join(output_dir, filename)
    fig.savefig(path, dpi=config.DPI, facecolor=fig.get_facecolor())
    return path
