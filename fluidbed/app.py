#!/usr/bin/env python3
"""
Fluidized Bed Reactor Simulation

This is the main entry point for the interactive reactor view. It wires the
simulation engine, the reactor visualization and the parameter sliders, and
drives the simulation from a matplotlib animation timer.

Usage:
    python -m fluidbed.app
    python -m fluidbed.app --velocity 25 --particles 6000 --seed 7
    python -m fluidbed.app --headless --ticks 500 --velocity 40 --save-figure
"""

import argparse
import logging
import sys

from . import config
from .simulation import ReactorSimulation


def parse_arguments(argv=None):
    """Parse command-line arguments."""
    defaults = config.default_config()
    parser = argparse.ArgumentParser(
        description='Fluidized bed reactor - interactive particle simulation',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m fluidbed.app --velocity 25
  python -m fluidbed.app --distribution 0.2 --min-size 0.1 --max-size 8
  python -m fluidbed.app --headless --ticks 1000 --velocity 40 --save-figure
        """
    )

    parser.add_argument('--velocity', '-v', type=float, default=defaults.velocity,
                        help='Fluidization velocity in m/h (0-80)')
    parser.add_argument('--distribution', '-d', type=float, default=defaults.size_distribution_exponent,
                        help='Particle size distribution exponent (0.01-1)')
    parser.add_argument('--particles', '-n', type=int, default=defaults.particle_count,
                        help='Number of particles (1-10000)')
    parser.add_argument('--min-size', type=float, default=defaults.min_particle_size,
                        help='Minimum particle diameter in px')
    parser.add_argument('--max-size', type=float, default=defaults.max_particle_size,
                        help='Maximum particle diameter in px')
    parser.add_argument('--seed', type=int, default=None,
                        help='Random seed for reproducible runs')
    parser.add_argument('--interval', type=int, default=config.ANIMATION_INTERVAL,
                        help='Milliseconds between animation ticks')
    parser.add_argument('--headless', action='store_true',
                        help='Run without a window and print a summary')
    parser.add_argument('--ticks', type=int, default=1000,
                        help='Number of ticks to run in headless mode')
    parser.add_argument('--output-dir', '-o', type=str, default=config.DEFAULT_OUTPUT_DIR,
                        help='Directory for snapshots and saved figures')
    parser.add_argument('--save-figure', action='store_true',
                        help='Save the final reactor view as a PNG')
    parser.add_argument('--verbose', action='store_true',
                        help='Enable debug logging')

    return parser.parse_args(argv)


def build_config(args):
    """Build a SimulationConfig from parsed arguments."""
    return config.SimulationConfig(
        velocity=args.velocity,
        size_distribution_exponent=args.distribution,
        particle_count=args.particles,
        min_particle_size=args.min_size,
        max_particle_size=args.max_size,
    )


def summarize(simulation):
    """Print bed height and particle spread for the current population."""
    positions = simulation.system['particle_positions']
    sizes = simulation.system['sizes']
    top = simulation.reactor_height - positions[:, 1]
    print(f"\nVelocity: {simulation.config.velocity:g} m/h")
    print(f"Bed height: {simulation.bed_height:.1f} px")
    print(f"Fluidization factor: {simulation.fluidization_factor:.3f}")
    print(f"Particles: {len(sizes)} (size {sizes.min():.3f} - {sizes.max():.3f} px)")
    print(f"Ticks: {simulation.tick_count}")
    print(f"Height above bottom: mean {top.mean():.2f} px, max {top.max():.2f} px")


def build_figure(simulation, output_dir):
    """Create the reactor figure and its UI controller."""
    from .ui import ui_controls
    from .visualization import visualization_core

    fig, ax = visualization_core.setup_figure_layout()
    visualization_core.apply_professional_styling(fig, ax)
    visualization_core.prepare_reactor(ax, simulation.reactor_height)
    ui_controller = ui_controls.UIController(fig, ax, simulation, output_dir=output_dir)
    return fig, ui_controller


def main(argv=None):
    """Main function orchestrating the reactor simulation."""
    args = parse_arguments(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    if args.ticks < 0:
        print(f"Error: --ticks must be non-negative, got {args.ticks}.")
        return 2
    if args.interval < 1:
        print(f"Error: --interval must be at least 1 ms, got {args.interval}.")
        return 2

    try:
        simulation = ReactorSimulation(build_config(args), seed=args.seed)
    except config.InvalidConfigurationError as e:
        print(f"Error: {e}")
        return 2

    if args.headless:
        import matplotlib
        matplotlib.use('Agg')
        simulation.run(args.ticks)
        summarize(simulation)
        if args.save_figure:
            from .visualization import visualization_core
            fig, _ = build_figure(simulation, args.output_dir)
            path = visualization_core.save_final_figure(fig, args.output_dir)
            print(f"Saved figure to {path}")
        return 0

    import matplotlib.pyplot as plt

    fig, ui_controller = build_figure(simulation, args.output_dir)
    fig.canvas.manager.set_window_title(config.WINDOW_TITLE)
    ui_controller.start_animation(args.interval)

    plt.show()

    if args.save_figure:
        from .visualization import visualization_core
        visualization_core.save_final_figure(fig, args.output_dir)
    return 0


if __name__ == "__main__":
    sys.exit(main())
