#!/usr/bin/env python3
"""
═══════════════════════════════════════════════════════════════════════════════
  ANALYTICAL ORBIT & REENTRY SIMULATOR — Main Runner
═══════════════════════════════════════════════════════════════════════════════

  Runs the example simulations explicitly:
    1. Atmosphere presets
    2. Launch azimuth from Cape Canaveral and a sweep over latitude
    3. Echo I balloon vs its rocket casing (drag decay + J2 drift)
    4. Capsule reentry (fixed-step Euler)
    5. Euler vs RK45 reference and the shallow-angle approximation

  Figures are saved to the output directory.

  Usage:
    python main.py                   # Run everything
    python main.py --quick           # Fewer revolutions, no figures
    python main.py -v                # Log engine activity
═══════════════════════════════════════════════════════════════════════════════
"""

import argparse
import logging
import os
import sys
import time

import numpy as np

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from orbitsim.atmosphere import ORBITAL_DECAY_ATMOSPHERE, REENTRY_ATMOSPHERE
from orbitsim.azimuth import run_azimuth_simulation
from orbitsim.errors import SimulationError
from orbitsim.propagator import OrbitConfig, R_E, propagate_orbits
from orbitsim.reentry import ReentryConfig, ReentryState, VehicleParams, simulate_reentry
from orbitsim.validation import compare_shallow_approximation, compare_with_reference


def banner():
    print("""
╔═══════════════════════════════════════════════════════════════════════╗
║     ANALYTICAL ORBIT & REENTRY SIMULATOR                              ║
║     ─────────────────────────────────────────────────────             ║
║     Launch azimuth · Drag decay · J2 drift · Euler reentry            ║
╚═══════════════════════════════════════════════════════════════════════╝
""")


def section(title):
    print(f"\n{'─'*60}")
    print(f"  {title}")
    print(f"{'─'*60}")


def echo_i_configs(revolutions: int = 500) -> dict:
    """Echo I balloon and its rocket casing from the same ~1600 km orbit."""
    common = dict(
        semi_major_axis=R_E + 1600e3,
        inclination=np.radians(47.0),
        revolutions=revolutions,
    )
    return {
        'Echo I (A=400 m², m=75 kg)': OrbitConfig(area=400.0, mass=75.0, **common),
        'Rocket casing (A=1.5 m², m=200 kg)': OrbitConfig(area=1.5, mass=200.0, **common),
    }


def capsule_config(steps: int = 1200) -> ReentryConfig:
    return ReentryConfig(
        vehicle=VehicleParams(mass=1350.0, area=2.8, drag_coeff=1.5,
                              lift_coeff=0.0, bank_angle=0.0),
        initial_state=ReentryState(gamma=np.radians(-1.5), velocity=7500.0,
                                   altitude=120e3),
        dt=0.5,
        steps=steps,
    )


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[2].strip())
    parser.add_argument('--quick', action='store_true',
                        help='fewer revolutions and steps, skip figures')
    parser.add_argument('--output-dir', default='outputs')
    parser.add_argument('--revolutions', type=int, default=500)
    parser.add_argument('-v', '--verbose', action='store_true')
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s %(name)s %(levelname)s: %(message)s',
    )
    start_time = time.time()
    banner()

    figures = not args.quick
    if figures:
        import matplotlib.pyplot as plt
        from orbitsim.visualization import (
            ensure_output_dir, plot_density_profile, plot_orbit_decay,
            plot_node_drift, plot_reentry, plot_euler_vs_reference,
            plot_azimuth_sweep,
        )
        out = ensure_output_dir(args.output_dir)

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 1: Atmosphere
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 1: Exponential Atmosphere Presets")
    print(f"  {'Alt (km)':>9} {'ρ decay':>12} {'ρ reentry':>12}")
    for h in [0, 50e3, 100e3, 200e3, 400e3, 1600e3]:
        print(f"  {h/1000:>9.0f} {ORBITAL_DECAY_ATMOSPHERE.density(h):>12.4e} "
              f"{REENTRY_ATMOSPHERE.density(h):>12.4e}")
    if figures:
        plt.close(plot_density_profile(save_path=f'{out}/01_density_profile.png'))
        print(f"\n  ✓ Saved: {out}/01_density_profile.png")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 2: Launch Azimuth
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 2: Launch Azimuth (φ = 28.5°)")
    for inc in [28.5, 32.5, 51.6, 90.0, 20.0]:
        res = run_azimuth_simulation(28.5, inc, time_since_epoch_min=90.0)
        az = f"{res.azimuth_deg:>7.2f}°" if res.feasible else "  unreachable"
        print(f"  i = {inc:>5.1f}°  ψ = {az}  Δλ(90 min) = {res.longitude_shift_deg:.2f}°")
    if figures:
        plt.close(plot_azimuth_sweep(save_path=f'{out}/02_azimuth_sweep.png'))
        print(f"\n  ✓ Saved: {out}/02_azimuth_sweep.png")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 3: Echo I vs Rocket Casing
    # ══════════════════════════════════════════════════════════════════════
    revolutions = 50 if args.quick else args.revolutions
    section(f"PHASE 3: Echo I vs Rocket Casing ({revolutions} revolutions)")
    histories = propagate_orbits(echo_i_configs(revolutions))
    for name, hist in histories.items():
        print(f"  {name}")
        print(hist.summary())
    if figures:
        plt.close(plot_orbit_decay(histories, save_path=f'{out}/03_orbit_decay.png'))
        plt.close(plot_node_drift(histories, save_path=f'{out}/04_node_drift.png'))
        print(f"\n  ✓ Saved: {out}/03_orbit_decay.png, {out}/04_node_drift.png")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 4: Capsule Reentry
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 4: Ballistic Capsule Reentry")
    config = capsule_config(steps=200 if args.quick else 1200)
    print(f"  Ballistic coefficient: {config.vehicle.ballistic_coefficient:.1f} kg/m²  "
          f"L/D: {config.vehicle.lift_to_drag:.2f}")
    reentry = simulate_reentry(config)
    print(reentry.summary())
    if reentry[-1].altitude < 0:
        print("  (run continued below the surface: no collision guard)")
    if figures:
        plt.close(plot_reentry(reentry, title='Ballistic Capsule Reentry',
                               save_path=f'{out}/05_reentry.png'))
        print(f"\n  ✓ Saved: {out}/05_reentry.png")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 5: Integrator Comparisons
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 5: Euler vs RK45 Reference")
    short = capsule_config(steps=200)
    try:
        comparison = compare_with_reference(short)
    except SimulationError as exc:
        print(f"  ✗ Comparison failed: {exc}")
        return 1
    shallow = compare_shallow_approximation(short)
    for key, err in comparison.max_errors.items():
        print(f"  max |Δ{key:<8s}| = {err:.4e}")
    print(f"  Shallow-angle estimate at t={shallow.time[-1]:.0f} s: "
          f"Δγ = {np.degrees(shallow.difference[-1]):+.4f}°")
    if figures:
        plt.close(plot_euler_vs_reference(comparison, shallow,
                                          save_path=f'{out}/06_euler_vs_reference.png'))
        print(f"\n  ✓ Saved: {out}/06_euler_vs_reference.png")

    elapsed = time.time() - start_time
    section("COMPLETE")
    print(f"  Total runtime: {elapsed:.1f} seconds")
    return 0


if __name__ == "__main__":
    sys.exit(main())
