"""
Unit Tests for the Orbit & Reentry Models
=========================================
Tests the atmosphere, azimuth geometry, orbit propagator and reentry
integrator for correctness.
Run: python -m pytest tests/ -v
"""

import sys
import os
import numpy as np
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from orbitsim.atmosphere import (
    ExponentialAtmosphere, ORBITAL_DECAY_ATMOSPHERE, REENTRY_ATMOSPHERE,
    SEA_LEVEL_DENSITY,
)
from orbitsim.azimuth import (
    compute_launch_azimuth, is_inclination_reachable,
    compute_earth_rotation_longitude, run_azimuth_simulation,
    compute_semilatus_rectum, compute_orbital_radius,
    compute_circular_velocity, compute_time_from_perigee, EARTH_ROT_RATE,
)
from orbitsim.errors import DomainError
from orbitsim.propagator import (
    OrbitConfig, R_E, propagate_orbit, propagate_orbits,
    orbital_period, raan_drift_rate, perigee_drift_rate, semi_major_axis_decay_rate,
)
from orbitsim.reentry import (
    VehicleParams, ReentryState, ReentryConfig, MU, EARTH_RADIUS,
    reentry_step, simulate_reentry, approximate_flight_path_angle,
    ballistic_coefficient, deceleration, drag_force, lift_force, gravity,
)


class TestAtmosphere:
    """Exponential density law."""

    def test_sea_level_density_exact(self):
        assert ORBITAL_DECAY_ATMOSPHERE.density(0) == SEA_LEVEL_DENSITY
        assert REENTRY_ATMOSPHERE.density(0) == SEA_LEVEL_DENSITY

    def test_density_decreases_with_altitude(self):
        for model in (ORBITAL_DECAY_ATMOSPHERE, REENTRY_ATMOSPHERE):
            alts = [-5000, 0, 1000, 10000, 80000, 300000]
            rho = [model.density(h) for h in alts]
            assert all(a > b for a, b in zip(rho, rho[1:]))

    def test_presets_are_distinct(self):
        assert ORBITAL_DECAY_ATMOSPHERE.scale_height == 8500.0
        assert REENTRY_ATMOSPHERE.scale_height == 7200.0
        assert ORBITAL_DECAY_ATMOSPHERE.density(50e3) > REENTRY_ATMOSPHERE.density(50e3)

    def test_one_scale_height(self):
        model = ExponentialAtmosphere(rho0=2.0, scale_height=1000.0)
        assert model.density(1000.0) == pytest.approx(2.0 / np.e)

    def test_negative_altitude_keeps_growing(self):
        assert REENTRY_ATMOSPHERE.density(-10000) > SEA_LEVEL_DENSITY
        assert REENTRY_ATMOSPHERE.density(-1e7) == np.inf

    def test_array_input(self):
        prof = REENTRY_ATMOSPHERE.profile(np.array([0.0, 7200.0]))
        assert prof['density'].shape == (2,)
        assert prof['density'][1] == pytest.approx(SEA_LEVEL_DENSITY / np.e)

    def test_invalid_scale_height(self):
        with pytest.raises(DomainError):
            ExponentialAtmosphere(rho0=1.225, scale_height=0.0)


class TestAzimuth:
    """Launch azimuth geometry and helpers."""

    def test_polar_launch_from_equator(self):
        assert compute_launch_azimuth(0, 90) == pytest.approx(90.0)

    def test_minimum_inclination_is_due_east(self):
        assert compute_launch_azimuth(28.5, 28.5) == 0.0

    def test_unreachable_inclination_raises(self):
        with pytest.raises(DomainError):
            compute_launch_azimuth(30, 28)

    def test_domain_error_is_value_error(self):
        with pytest.raises(ValueError):
            compute_launch_azimuth(45, 10)

    def test_reachability_matches_azimuth_failure(self):
        grid = np.arange(-90.0, 90.1, 7.5)
        for lat in grid:
            for inc in grid:
                reachable = is_inclination_reachable(lat, inc)
                try:
                    compute_launch_azimuth(lat, inc)
                    raised = False
                except DomainError:
                    raised = True
                assert reachable != raised, (lat, inc)

    def test_iss_from_cape(self):
        expected = np.degrees(np.arccos(np.cos(np.radians(51.6)) / np.cos(np.radians(28.5))))
        assert compute_launch_azimuth(28.5, 51.6) == pytest.approx(expected)

    def test_retrograde_inclination(self):
        assert is_inclination_reachable(28.5, 98.0)
        assert compute_launch_azimuth(0, 120) == pytest.approx(120.0)
        assert not is_inclination_reachable(70, 150)

    def test_inclination_beyond_half_turn(self):
        assert is_inclination_reachable(10, 200)
        expected = np.degrees(np.arccos(np.cos(np.radians(200.0)) / np.cos(np.radians(10.0))))
        assert compute_launch_azimuth(10, 200) == pytest.approx(expected)
        assert compute_launch_azimuth(0, 390) == pytest.approx(30.0)
        assert not is_inclination_reachable(40, -200)

    def test_earth_rotation_longitude(self):
        assert compute_earth_rotation_longitude(0) == 0.0
        assert compute_earth_rotation_longitude(60) == pytest.approx(60 * EARTH_ROT_RATE)

    def test_simulation_reports_infeasible_as_data(self):
        res = run_azimuth_simulation(30, 28, time_since_epoch_min=10)
        assert res.feasible is False
        assert res.azimuth_deg is None
        assert res.longitude_shift_deg == pytest.approx(10 * EARTH_ROT_RATE)

    def test_simulation_feasible(self):
        res = run_azimuth_simulation(0, 90)
        assert res.feasible is True
        assert res.azimuth_deg == pytest.approx(90.0)
        assert res.longitude_shift_deg == 0.0

    def test_semilatus_rectum_and_radius(self):
        p = compute_semilatus_rectum(10000.0, 0.5)
        assert p == pytest.approx(7500.0)
        assert compute_orbital_radius(p, 0.0, 0.5) == pytest.approx(5000.0)
        assert compute_orbital_radius(p, 180.0, 0.5) == pytest.approx(15000.0)

    def test_semilatus_rectum_rejects_open_orbit(self):
        with pytest.raises(DomainError):
            compute_semilatus_rectum(10000.0, 1.0)

    def test_circular_velocity_is_unscaled(self):
        assert compute_circular_velocity(4.0) == pytest.approx(0.5)

    def test_time_from_perigee_is_linear(self):
        assert compute_time_from_perigee(90.0, 180.0) == pytest.approx(45.0)
        assert compute_time_from_perigee(90.0, 90.0) == pytest.approx(22.5)


class TestPropagator:
    """Per-revolution drag decay and J2 drift."""

    def _config(self, **kw):
        base = dict(semi_major_axis=R_E + 600e3, inclination=np.radians(47.0),
                    area=0.0, mass=100.0, revolutions=20)
        base.update(kw)
        return OrbitConfig(**base)

    def test_each_revolution_uses_its_starting_state(self):
        cfg = self._config(semi_major_axis=R_E + 250e3, area=400.0, mass=75.0,
                           revolutions=2)
        hist = propagate_orbit(cfg)
        a0 = cfg.semi_major_axis
        a1 = a0 + semi_major_axis_decay_rate(a0, 400.0, 75.0, 2.2) * orbital_period(a0)
        a2 = a1 + semi_major_axis_decay_rate(a1, 400.0, 75.0, 2.2) * orbital_period(a1)
        assert hist[0].semi_major_axis == a1
        assert hist[1].semi_major_axis == a2
        assert hist[1].period == orbital_period(a1)
        raan1 = raan_drift_rate(a0, 0.0, cfg.inclination) * orbital_period(a0)
        raan2 = raan1 + raan_drift_rate(a1, 0.0, cfg.inclination) * orbital_period(a1)
        assert hist[1].raan_deg == pytest.approx(np.degrees(raan2), rel=1e-12)

    def test_no_drag_keeps_semi_major_axis(self):
        cfg = self._config(area=0.0)
        hist = propagate_orbit(cfg)
        assert len(hist) == 20
        assert np.all(hist.semi_major_axis == cfg.semi_major_axis)
        assert hist[-1].raan_deg != 0.0
        assert hist[-1].perigee_deg != 0.0

    def test_j2_drift_matches_closed_form_without_drag(self):
        cfg = self._config(area=0.0, revolutions=10)
        hist = propagate_orbit(cfg)
        a, i = cfg.semi_major_axis, cfg.inclination
        T = orbital_period(a)
        expected_raan = np.degrees(10 * raan_drift_rate(a, 0.0, i) * T)
        expected_perigee = np.degrees(10 * perigee_drift_rate(a, 0.0, i) * T)
        assert hist[-1].raan_deg == pytest.approx(expected_raan)
        assert hist[-1].perigee_deg == pytest.approx(expected_perigee)

    def test_prograde_nodal_regression(self):
        hist = propagate_orbit(self._config(inclination=np.radians(51.6)))
        assert np.all(np.diff(hist.raan_deg) < 0)
        assert hist[0].raan_deg < 0

    def test_retrograde_nodal_advance(self):
        hist = propagate_orbit(self._config(inclination=np.radians(98.0)))
        assert np.all(np.diff(hist.raan_deg) > 0)

    def test_angles_are_not_wrapped(self):
        hist = propagate_orbit(self._config(semi_major_axis=R_E + 300e3,
                                            inclination=0.0, revolutions=3000))
        assert hist[-1].raan_deg < -360.0

    def test_drag_decays_semi_major_axis(self):
        hist = propagate_orbit(self._config(semi_major_axis=R_E + 250e3,
                                            area=1.5, mass=200.0, revolutions=10))
        assert np.all(np.diff(hist.semi_major_axis) < 0)
        assert hist[0].semi_major_axis < R_E + 250e3

    def test_altitude_is_a_minus_earth_radius(self):
        hist = propagate_orbit(self._config(area=2.0, revolutions=3))
        for snap in hist:
            assert snap.altitude == pytest.approx(snap.semi_major_axis - R_E)

    def test_higher_area_to_mass_decays_faster(self):
        runs = propagate_orbits({
            'balloon': self._config(semi_major_axis=R_E + 300e3, area=400.0,
                                    mass=75.0, revolutions=2),
            'casing': self._config(semi_major_axis=R_E + 300e3, area=1.5,
                                   mass=200.0, revolutions=2),
        })
        assert runs['balloon'].altitude_lost > runs['casing'].altitude_lost > 0

    def test_runs_past_the_surface(self):
        cfg = self._config(semi_major_axis=R_E + 200e3, area=400.0,
                           mass=75.0, revolutions=5)
        hist = propagate_orbit(cfg)
        assert len(hist) == 5
        assert hist[0].altitude < 0

    def test_zero_revolutions(self):
        assert len(propagate_orbit(self._config(revolutions=0))) == 0

    def test_deterministic(self):
        cfg = self._config(area=10.0, revolutions=50)
        assert propagate_orbit(cfg) == propagate_orbit(cfg)

    @pytest.mark.parametrize('kw', [
        dict(eccentricity=1.0),
        dict(eccentricity=-0.1),
        dict(mass=0.0),
        dict(area=-1.0),
        dict(semi_major_axis=R_E - 1.0),
        dict(revolutions=-1),
        dict(inclination=float('nan')),
    ])
    def test_invalid_config_raises(self, kw):
        with pytest.raises(DomainError):
            self._config(**kw)


class TestReentry:
    """Forces, rate equation and Euler stepping."""

    def test_forces(self):
        assert drag_force(1.0, 10.0, 2.0, 3.0) == pytest.approx(300.0)
        assert lift_force(1.0, 10.0, 0.5, 3.0) == pytest.approx(75.0)

    def test_gravity_at_surface(self):
        assert gravity(0.0) == pytest.approx(MU / EARTH_RADIUS ** 2)
        assert gravity(100e3) < gravity(0.0)

    def test_derived_quantities(self):
        assert ballistic_coefficient(1350.0, 1.5, 2.8) == pytest.approx(1350.0 / 4.2)
        assert deceleration(500.0, 250.0) == 2.0
        assert VehicleParams(mass=10.0, area=1.0, drag_coeff=0.0).ballistic_coefficient == np.inf
        assert VehicleParams(mass=10.0, area=1.0, drag_coeff=1.5, lift_coeff=0.3).lift_to_drag == pytest.approx(0.2)
        assert VehicleParams(mass=10.0, area=1.0, drag_coeff=0.0).lift_to_drag == np.inf

    def test_approximate_flight_path_angle(self):
        gamma = approximate_flight_path_angle(-0.1, drag=1000.0, mass=100.0,
                                              velocity=50.0, delta_time=2.0)
        assert gamma == pytest.approx(-0.1 - 0.4)

    def test_no_aero_forces_vertical_descent(self):
        vehicle = VehicleParams(mass=1000.0, area=1.0, drag_coeff=0.0, lift_coeff=0.0)
        state = ReentryState(gamma=-np.pi / 2, velocity=7000.0, altitude=100e3)
        dt = 0.5
        for _ in range(5):
            new = reentry_step(state, vehicle, dt)
            assert new.velocity == state.velocity
            assert new.gamma == pytest.approx(state.gamma, abs=1e-12)
            assert new.altitude == state.altitude + state.velocity * np.sin(state.gamma) * dt
            state = new

    def test_no_aero_forces_circular_speed(self):
        vehicle = VehicleParams(mass=1000.0, area=1.0, drag_coeff=0.0, lift_coeff=0.0)
        h = 200e3
        v_circ = np.sqrt(MU / (EARTH_RADIUS + h))
        state = ReentryState(gamma=0.0, velocity=v_circ, altitude=h)
        new = reentry_step(state, vehicle, 1.0)
        assert new.gamma == pytest.approx(0.0, abs=1e-12)
        assert new.velocity == state.velocity
        assert new.altitude == state.altitude

    def test_altitude_uses_pre_step_state(self):
        vehicle = VehicleParams(mass=500.0, area=3.0, drag_coeff=1.2, lift_coeff=0.3)
        state = ReentryState(gamma=np.radians(-5.0), velocity=7000.0, altitude=60e3)
        new = reentry_step(state, vehicle, 1.0)
        assert new.altitude == state.altitude + 7000.0 * np.sin(np.radians(-5.0))
        assert new.velocity < state.velocity

    def test_lift_raises_flight_path_angle(self):
        state = ReentryState(gamma=np.radians(-2.0), velocity=7000.0, altitude=60e3)
        ballistic = VehicleParams(mass=1000.0, area=3.0, drag_coeff=1.2, lift_coeff=0.0)
        lifting = VehicleParams(mass=1000.0, area=3.0, drag_coeff=1.2, lift_coeff=0.4)
        banked = VehicleParams(mass=1000.0, area=3.0, drag_coeff=1.2, lift_coeff=0.4,
                               bank_angle=np.radians(60.0))
        g_ballistic = reentry_step(state, ballistic, 1.0).gamma
        g_lifting = reentry_step(state, lifting, 1.0).gamma
        g_banked = reentry_step(state, banked, 1.0).gamma
        assert g_lifting > g_banked > g_ballistic

    def test_simulate_records_every_step(self):
        cfg = ReentryConfig(dt=0.25, steps=40)
        hist = simulate_reentry(cfg)
        assert len(hist) == 40
        assert hist[0].step == 1
        assert hist[-1].time == pytest.approx(10.0)
        assert np.all(np.diff(hist.velocity) < 0)

    def test_simulate_matches_manual_stepping(self):
        cfg = ReentryConfig(steps=5)
        state = cfg.initial_state
        for snap in simulate_reentry(cfg):
            state = reentry_step(state, cfg.vehicle, cfg.dt, cfg.atmosphere)
            assert (snap.gamma, snap.velocity, snap.altitude) == \
                (state.gamma, state.velocity, state.altitude)

    def test_runs_past_the_surface(self):
        cfg = ReentryConfig(
            vehicle=VehicleParams(mass=1e5, area=0.1, drag_coeff=0.1),
            initial_state=ReentryState(gamma=np.radians(-60.0), velocity=3000.0,
                                       altitude=5000.0),
            dt=1.0, steps=20,
        )
        hist = simulate_reentry(cfg)
        assert len(hist) == 20
        assert hist[-1].altitude < 0

    def test_deterministic(self):
        cfg = ReentryConfig(steps=300)
        assert simulate_reentry(cfg) == simulate_reentry(cfg)

    @pytest.mark.parametrize('kw', [
        dict(mass=0.0, area=1.0, drag_coeff=1.0),
        dict(mass=10.0, area=0.0, drag_coeff=1.0),
        dict(mass=10.0, area=1.0, drag_coeff=-1.0),
    ])
    def test_invalid_vehicle_raises(self, kw):
        with pytest.raises(DomainError):
            VehicleParams(**kw)

    def test_invalid_config_raises(self):
        with pytest.raises(DomainError):
            ReentryConfig(dt=0.0)
        with pytest.raises(DomainError):
            ReentryConfig(steps=-3)
        with pytest.raises(DomainError):
            ReentryConfig(initial_state=ReentryState(gamma=0.0, velocity=0.0, altitude=1e5))


if __name__ == "__main__":
    pytest.main([__file__, '-v'])
