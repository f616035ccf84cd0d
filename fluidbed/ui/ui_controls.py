"""
UI controls module for the fluidized bed reactor.

Provides the parameter sliders, a snapshot button, and the animation timer
that drives the simulation. Slider changes are forwarded to the simulation,
which decides whether the particle population must be regenerated.
"""

import logging
import os
from datetime import datetime

from matplotlib.animation import FuncAnimation
from matplotlib.widgets import Button, Slider
from .. import config
from ..visualization import visualization_core

logger = logging.getLogger(__name__)

# (config field, label, range, value formatter)
SLIDERS = [
    ('velocity', 'Fluidization Velocity (m/h)', config.VELOCITY_RANGE, '%.0f'),
    ('size_distribution_exponent', 'Particle Size Distribution Factor', config.DISTRIBUTION_RANGE, '%.2f'),
    ('particle_count', 'Number of Particles', config.PARTICLE_COUNT_RANGE, '%.0f'),
    ('min_particle_size', 'Minimum Particle Size (px)', config.MIN_SIZE_RANGE, '%.2f'),
    ('max_particle_size', 'Maximum Particle Size (px)', config.MAX_SIZE_RANGE, '%.1f'),
]


class UIController:
    """Main UI controller for managing interactive controls."""

    def __init__(self, fig, ax, simulation, output_dir=None):
        """
        Initialize UI controller.

        Args:
            fig: Matplotlib figure
            ax: Reactor axes
            simulation (ReactorSimulation): Simulation driven by the controls
            output_dir (str, optional): Directory for snapshots
        """
        self.fig = fig
        self.ax = ax
        self.simulation = simulation
        self.output_dir = output_dir or config.DEFAULT_OUTPUT_DIR
        self.sliders = {}
        self.anim = None
        self._reverting = False
        self._snapshot_count = 0

        # Dynamic artists
        self.particle_artist = visualization_core.draw_particles(ax, simulation.system)
        self.bed_marker = visualization_core.draw_bed_marker(ax, simulation.bed_height,
                                                             simulation.reactor_height)
        self.status_text = visualization_core.draw_status_text(ax)
        self._refresh_status()

        # Setup UI components
        self.setup_ui_controls()

    def setup_ui_controls(self):
        """Create one slider per simulation parameter plus the snapshot button."""
        sim_config = self.simulation.config
        bottom = 0.28
        for field, label, (vmin, vmax, step, _), fmt in SLIDERS:
            slider_ax = self.fig.add_axes([0.35, bottom, 0.5, 0.025])
            slider = Slider(slider_ax, label, vmin, vmax, valinit=getattr(sim_config, field),
                            valstep=step, valfmt=fmt)
            slider.label.set_fontsize(9)
            slider.on_changed(self._make_slider_callback(field))
            self.sliders[field] = slider
            bottom -= 0.045

        btn_ax = self.fig.add_axes([0.02, 0.02, 0.2, 0.045])
        self._snapshot_button = Button(btn_ax, 'Save Snapshot')
        self._snapshot_button.on_clicked(self._on_snapshot_clicked)

        self.fig.canvas.mpl_connect('key_press_event', self._on_key_press)

    def _make_slider_callback(self, field):
        def on_changed(value):
            self.handle_parameter_change(field, value)
        return on_changed

    def handle_parameter_change(self, field, value):
        """
        Forward a slider change to the simulation.

        Rejected combinations (e.g. minimum size dragged above maximum size)
        snap the slider back to the last accepted value.

        Returns:
            bool: True if the particle population was regenerated
        """
        if self._reverting:
            return False
        if field == 'particle_count':
            value = int(round(value))
        else:
            value = float(value)

        current = self.simulation.config
        try:
            regenerated = self.simulation.on_parameter_change(current.updated(**{field: value}))
        except config.InvalidConfigurationError as e:
            logger.warning("Rejected %s=%s: %s", field, value, e)
            self._reverting = True
            try:
                self.sliders[field].set_val(getattr(current, field))
            finally:
                self._reverting = False
            return False

        if regenerated:
            self._on_population_regenerated()
        visualization_core.update_bed_marker(self.bed_marker, self.simulation.bed_height,
                                             self.simulation.reactor_height)
        self._refresh_status()
        self.fig.canvas.draw_idle()
        return regenerated

    def _on_population_regenerated(self):
        # New sizes need a new artist; restart the timer so no stale tick runs
        if self.anim is not None:
            self.anim.event_source.stop()
        self.particle_artist.remove()
        self.particle_artist = visualization_core.draw_particles(self.ax, self.simulation.system)
        if self.anim is not None:
            self.anim.event_source.start()

    def _refresh_status(self):
        self.status_text.set_text(visualization_core.format_status(
            self.simulation.config, self.simulation.bed_height))

    def update_frame(self, frame):
        """Animation callback: advance the simulation one tick and move the particles."""
        system = self.simulation.on_tick()
        visualization_core.update_particle_artist(self.particle_artist, system)
        return (self.particle_artist,)

    def start_animation(self, interval=None):
        """
        Start the animation timer that drives the simulation.

        Returns:
            FuncAnimation: The running animation (keep a reference to it)
        """
        if interval is None:
            interval = config.ANIMATION_INTERVAL
        if self.anim is not None:
            self.anim.event_source.stop()
        self.anim = FuncAnimation(self.fig, self.update_frame, frames=config.ANIMATION_FRAMES,
                                  interval=interval, blit=False, cache_frame_data=False)
        return self.anim

    def stop_animation(self):
        if self.anim is not None:
            self.anim.event_source.stop()

    def save_snapshot(self):
        """
        Save the reactor view as a PNG in the output directory.

        Returns:
            str: Path of the written file
        """
        os.makedirs(self.output_dir, exist_ok=True)
        self.fig.canvas.draw()

        self._snapshot_count += 1
        ts = datetime.now().strftime('%Y%m%d_%H%M%S')
        fname = f'reactor_{ts}_{self._snapshot_count:03d}.png'
        path = os.path.join(self.output_dir, fname)

        renderer = self.fig.canvas.get_renderer()
        bbox = self.ax.get_tightbbox(renderer).transformed(self.fig.dpi_scale_trans.inverted())
        self.fig.savefig(path, dpi=config.DPI, bbox_inches=bbox, facecolor=self.fig.get_facecolor())
        logger.info("Saved snapshot to %s", path)
        return path

    def _on_snapshot_clicked(self, event):
        self.save_snapshot()

    def _on_key_press(self, event):
        if event.key == config.SNAPSHOT_HOTKEY:
            self.save_snapshot()
