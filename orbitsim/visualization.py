"""
Visualization Engine
====================
Plots for the demo runner:
  1. Atmosphere density profiles (both presets)
  2. Orbit decay (altitude vs revolution, several objects)
  3. Nodal regression / apsidal rotation
  4. Reentry dashboard (altitude, velocity, γ, trajectory)
  5. Euler vs RK45 reference comparison
  6. Launch azimuth vs latitude sweep
"""

import os
from typing import Dict, Iterable, Sequence

import numpy as np
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

from .atmosphere import ExponentialAtmosphere, ORBITAL_DECAY_ATMOSPHERE, REENTRY_ATMOSPHERE
from .azimuth import azimuth_sweep
from .history import OrbitHistory, ReentryHistory
from .validation import ReferenceComparison, ShallowAngleComparison


# ── Style Configuration ───────────────────────────────────────────────────
STYLE = {
    'bg_color': '#0a0a0a',
    'text_color': '#e0e0e0',
    'grid_color': '#333333',
    'accent_colors': ['#00d4ff', '#ff6b35', '#00e676', '#ffeb3b',
                      '#e040fb', '#ff5252'],
}

LEGEND = dict(facecolor='#1a1a1a', edgecolor='#444', labelcolor=STYLE['text_color'])


def _apply_dark_style(fig, axes):
    """Apply consistent dark theme to figure and axes."""
    fig.patch.set_facecolor(STYLE['bg_color'])
    if not isinstance(axes, np.ndarray):
        axes = [axes]
    else:
        axes = axes.flatten()

    for ax in axes:
        ax.set_facecolor(STYLE['bg_color'])
        ax.tick_params(colors=STYLE['text_color'])
        ax.xaxis.label.set_color(STYLE['text_color'])
        ax.yaxis.label.set_color(STYLE['text_color'])
        ax.title.set_color(STYLE['text_color'])
        ax.grid(True, color=STYLE['grid_color'], alpha=0.4, linewidth=0.5)
        for spine in ax.spines.values():
            spine.set_color(STYLE['grid_color'])


def _finish(fig, save_path):
    fig.tight_layout()
    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches='tight',
                    facecolor=STYLE['bg_color'])
    return fig


def ensure_output_dir(path: str = 'outputs'):
    os.makedirs(path, exist_ok=True)
    return path


# ══════════════════════════════════════════════════════════════════════════
#  1. Atmosphere
# ══════════════════════════════════════════════════════════════════════════

def plot_density_profile(models: Iterable[ExponentialAtmosphere] = (
                             ORBITAL_DECAY_ATMOSPHERE, REENTRY_ATMOSPHERE),
                         max_altitude: float = 200e3,
                         save_path: str = None) -> plt.Figure:
    """Log-scale density vs altitude for each model."""
    fig, ax = plt.subplots(figsize=(8, 6))
    _apply_dark_style(fig, ax)

    alts = np.linspace(0, max_altitude, 400)
    for model, color in zip(models, STYLE['accent_colors']):
        prof = model.profile(alts)
        ax.semilogx(prof['density'], prof['altitude'] / 1000, color=color,
                    linewidth=2, label=f'{model.name} (H={model.scale_height:.0f} m)')

    ax.set_xlabel('ρ (kg/m³)')
    ax.set_ylabel('Altitude (km)')
    ax.set_title('Exponential Atmosphere', fontweight='bold')
    ax.legend(**LEGEND)
    return _finish(fig, save_path)


# ══════════════════════════════════════════════════════════════════════════
#  2-3. Orbit propagation
# ══════════════════════════════════════════════════════════════════════════

def plot_orbit_decay(histories: Dict[str, OrbitHistory],
                     save_path: str = None) -> plt.Figure:
    """Altitude vs revolution for each propagated object."""
    fig, ax = plt.subplots(figsize=(12, 6))
    _apply_dark_style(fig, ax)

    for (name, hist), color in zip(histories.items(), STYLE['accent_colors']):
        ax.plot(hist.orbit, hist.altitude / 1000, color=color, linewidth=2, label=name)

    ax.set_xlabel('Revolution')
    ax.set_ylabel('Altitude (km)')
    ax.set_title('Orbital Decay from Atmospheric Drag', fontweight='bold')
    ax.legend(**LEGEND)
    return _finish(fig, save_path)


def plot_node_drift(histories: Dict[str, OrbitHistory],
                    save_path: str = None) -> plt.Figure:
    """RAAN and argument of perigee accumulators vs elapsed days."""
    fig, axes = plt.subplots(1, 2, figsize=(16, 6))
    _apply_dark_style(fig, axes)

    for (name, hist), color in zip(histories.items(), STYLE['accent_colors']):
        days = hist.elapsed_time / 86400
        axes[0].plot(days, hist.raan_deg, color=color, linewidth=2, label=name)
        axes[1].plot(days, hist.perigee_deg, color=color, linewidth=2, label=name)

    axes[0].set_title('RAAN (J2 nodal regression)', fontweight='bold')
    axes[0].set_ylabel('Ω (deg)')
    axes[1].set_title('Argument of Perigee (J2 apsidal rotation)', fontweight='bold')
    axes[1].set_ylabel('ω (deg)')
    for ax in axes:
        ax.set_xlabel('Elapsed (days)')
        ax.legend(**LEGEND)
    return _finish(fig, save_path)


# ══════════════════════════════════════════════════════════════════════════
#  4. Reentry
# ══════════════════════════════════════════════════════════════════════════

def plot_reentry(history: ReentryHistory, title: str = 'Reentry',
                 save_path: str = None) -> plt.Figure:
    """Four-panel view of one reentry run."""
    fig, axes = plt.subplots(2, 2, figsize=(16, 10))
    _apply_dark_style(fig, axes)

    t = history.time
    axes[0, 0].plot(t, history.altitude / 1000, color='#ffeb3b', linewidth=2)
    axes[0, 0].set_ylabel('Altitude (km)')
    axes[0, 0].set_title('ALTITUDE', fontweight='bold')

    axes[0, 1].plot(t, history.velocity, color='#ff6b35', linewidth=2)
    axes[0, 1].set_ylabel('Velocity (m/s)')
    axes[0, 1].set_title('VELOCITY', fontweight='bold')

    axes[1, 0].plot(t, np.degrees(history.gamma), color='#e040fb', linewidth=2)
    axes[1, 0].set_ylabel('γ (deg)')
    axes[1, 0].set_title('FLIGHT-PATH ANGLE', fontweight='bold')

    axes[1, 1].plot(history.velocity, history.altitude / 1000, color='#00d4ff', linewidth=2)
    axes[1, 1].set_xlabel('Velocity (m/s)')
    axes[1, 1].set_ylabel('Altitude (km)')
    axes[1, 1].set_title('ALTITUDE–VELOCITY MAP', fontweight='bold')

    for ax in (axes[0, 0], axes[0, 1], axes[1, 0]):
        ax.set_xlabel('Time (s)')

    fig.suptitle(title, fontsize=15, fontweight='bold', color='#00d4ff')
    return _finish(fig, save_path)


# ══════════════════════════════════════════════════════════════════════════
#  5. Integrator comparisons
# ══════════════════════════════════════════════════════════════════════════

def plot_euler_vs_reference(comparison: ReferenceComparison,
                            shallow: ShallowAngleComparison = None,
                            save_path: str = None) -> plt.Figure:
    """Euler vs RK45 state histories, plus the shallow-angle estimate if given."""
    fig, axes = plt.subplots(1, 3, figsize=(18, 5))
    _apply_dark_style(fig, axes)

    t = comparison.time
    pairs = [
        (np.degrees(comparison.euler.gamma), np.degrees(comparison.ref_gamma), 'γ (deg)'),
        (comparison.euler.velocity, comparison.ref_velocity, 'Velocity (m/s)'),
        (comparison.euler.altitude / 1000, comparison.ref_altitude / 1000, 'Altitude (km)'),
    ]
    for ax, (euler, ref, label) in zip(axes, pairs):
        ax.plot(t, ref, color='#00e676', linewidth=2, label='RK45 reference')
        ax.plot(t, euler, '--', color='#ff6b35', linewidth=1.5, label='Euler')
        ax.set_xlabel('Time (s)')
        ax.set_ylabel(label)

    if shallow is not None:
        axes[0].plot(shallow.time, np.degrees(shallow.approximate_gamma), ':',
                     color='#e040fb', linewidth=1.5, label='Shallow-angle approx.')

    for ax in axes:
        ax.legend(fontsize=9, **LEGEND)
    axes[1].set_title('EULER vs RK45', fontweight='bold')
    return _finish(fig, save_path)


# ══════════════════════════════════════════════════════════════════════════
#  6. Launch azimuth
# ══════════════════════════════════════════════════════════════════════════

def plot_azimuth_sweep(inclinations_deg: Sequence[float] = (28.5, 51.6, 63.4, 90.0, 98.0),
                       save_path: str = None) -> plt.Figure:
    """Launch azimuth vs site latitude; gaps mark unreachable inclinations."""
    fig, ax = plt.subplots(figsize=(10, 6))
    _apply_dark_style(fig, ax)

    latitudes = np.linspace(0, 89, 300)
    colors = STYLE['accent_colors']
    for k, inc in enumerate(inclinations_deg):
        ax.plot(latitudes, azimuth_sweep(inc, latitudes),
                color=colors[k % len(colors)], linewidth=2, label=f'i = {inc:g}°')

    ax.set_xlabel('Launch latitude φ (deg)')
    ax.set_ylabel('Azimuth ψ (deg from North)')
    ax.set_title('Launch Azimuth: cos ψ = cos i / cos φ', fontweight='bold')
    ax.legend(**LEGEND)
    return _finish(fig, save_path)
