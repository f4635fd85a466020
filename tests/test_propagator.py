"""
Test suite for the orbital propagator.

Tests cover:
- Initial placement
- Distance invariant after advancing
- Sun fixed point
- Additivity of incremental rotation
- One full Earth orbit in daily steps
- Validation of elapsed time
- Fallback when a satellite's parent was not updated
"""

import dataclasses
import math

import numpy as np
import pytest
from orrery import (
    BodyId, BODY_TABLE, Catalog, OrbitalPropagator, temp_config,
)
from orrery.scale import orbital_speed


@pytest.fixture
def prop():
    return OrbitalPropagator(Catalog())


class TestInitialState:
    """Test placement before the first frame."""

    def test_sun_at_origin(self, prop):
        assert np.array_equal(prop.position(BodyId.SUN), np.zeros(3))

    def test_planets_on_x_axis(self, prop):
        """Planets start on +X at their scaled distance."""
        pos = prop.position(BodyId.EARTH)
        assert np.allclose(pos, [prop.scaled_distance(BodyId.EARTH), 0, 0])

    def test_moons_offset_from_parent(self, prop):
        """Moons start on +X relative to their planet."""
        expected = (prop.position(BodyId.JUPITER) +
                    [prop.scaled_distance(BodyId.IO), 0, 0])
        assert np.allclose(prop.position(BodyId.IO), expected)

    def test_no_drift_initially(self, prop):
        assert prop.check_separations() == {}
        assert prop.elapsed == 0.0

    def test_position_is_a_copy(self, prop):
        """Mutating a returned position does not move the body."""
        pos = prop.position(BodyId.MARS)
        pos[:] = 0
        assert prop.position(BodyId.MARS)[0] > 0


class TestDistanceInvariant:
    """Every body stays at its scaled distance from its parent."""

    def test_after_many_frames(self, prop):
        for dt in (0.016, 0.5, 0.033, 2.0, 0.1) * 20:
            prop.advance(dt)
        assert prop.check_separations(rtol=1e-9) == {}

    def test_moons_follow_planets(self, prop):
        """A moon keeps its distance while its planet moves far away."""
        prop.advance(0.5)
        earth_shift = np.linalg.norm(prop.position(BodyId.EARTH) -
                                     [prop.scaled_distance(BodyId.EARTH), 0, 0])
        assert earth_shift > 10 * prop.scaled_distance(BodyId.EARTH_MOON)
        assert prop.separation(BodyId.EARTH_MOON) == pytest.approx(
            prop.scaled_distance(BodyId.EARTH_MOON), rel=1e-9)

    def test_orbits_stay_in_plane(self, prop):
        """Rotation about Y never changes heights."""
        prop.advance(3.7)
        for body in BodyId:
            assert prop.position(body)[1] == pytest.approx(0.0, abs=1e-9)


class TestSunFixedPoint:
    """The Sun never moves."""

    def test_sun_stays_at_origin(self, prop):
        for _ in range(50):
            prop.advance(0.25)
        assert np.array_equal(prop.position(BodyId.SUN), np.zeros(3))

    def test_sun_has_no_rate(self, prop):
        assert prop.angular_velocity(BodyId.SUN) == 0.0


class TestAdditivity:
    """advance(t1); advance(t2) equals advance(t1 + t2)."""

    @pytest.mark.parametrize("t1, t2", [(0.1, 0.2), (1.5, 0.25), (0.0, 3.0)])
    def test_split_equals_single(self, t1, t2):
        split = OrbitalPropagator(Catalog())
        split.advance(t1)
        split.advance(t2)
        single = OrbitalPropagator(Catalog())
        single.advance(t1 + t2)
        for body in BodyId:
            assert np.allclose(split.position(body), single.position(body),
                               rtol=1e-9, atol=1e-6), body

    def test_zero_elapsed_is_noop(self, prop):
        before = {body: prop.position(body) for body in BodyId}
        prop.advance(0.0)
        for body in BodyId:
            assert np.allclose(prop.position(body), before[body])


class TestFullOrbit:
    """Earth returns to its start after one simulated year."""

    def test_earth_rate_positive_and_finite(self, prop):
        omega = prop.angular_velocity(BodyId.EARTH)
        assert omega > 0 and math.isfinite(omega)

    def test_earth_year_in_daily_calls(self):
        """With the rate scaled to one day per unit, 360 advance(1.0) calls make a year."""
        catalog = Catalog()
        days_per_year = 360
        speed = orbital_speed(catalog.record(BodyId.EARTH), catalog)
        with temp_config(ORBITAL_SPEED_DIVISOR=speed * days_per_year / (2 * math.pi)):
            prop = OrbitalPropagator(catalog)
        assert prop.angular_velocity(BodyId.EARTH) == pytest.approx(
            2 * math.pi / days_per_year)

        start = prop.position(BodyId.EARTH)
        for i in range(days_per_year):
            prop.advance(1.0)
            if i == days_per_year // 2 - 1:
                # half a year: opposite side of the Sun
                assert np.allclose(prop.position(BodyId.EARTH), -start, atol=1e-3)
        assert np.allclose(prop.position(BodyId.EARTH), start, atol=1e-3)
        assert prop.elapsed == pytest.approx(days_per_year)

    def test_direction_of_travel(self, prop):
        """Positive rates carry +X bodies toward -Z first."""
        prop.advance(0.01)
        assert prop.position(BodyId.EARTH)[2] < 0


class TestElapsedValidation:
    """Test rejection of bad elapsed times."""

    @pytest.mark.parametrize("bad", [-0.1, math.nan, math.inf])
    def test_strict_raises(self, prop, bad):
        with pytest.raises(ValueError, match="Elapsed time"):
            prop.advance(bad)

    def test_lenient_skips_frame(self, prop):
        before = prop.position(BodyId.EARTH)
        with temp_config(STRICT_VALIDATION=False):
            with pytest.warns(UserWarning, match="Elapsed time"):
                prop.advance(-1.0)
        assert np.array_equal(prop.position(BodyId.EARTH), before)
        assert prop.elapsed == 0.0


class TestSatelliteFallback:
    """Satellites whose parent is not a primary are skipped, not fatal."""

    def test_moon_of_moon_is_skipped(self):
        records = dict(BODY_TABLE)
        records[BodyId.PHOBOS] = dataclasses.replace(
            records[BodyId.PHOBOS], parent=BodyId.EARTH_MOON)
        prop = OrbitalPropagator(Catalog(records, validate=False))

        phobos = prop.position(BodyId.PHOBOS)
        deimos = prop.position(BodyId.DEIMOS)
        prop.advance(1.0)
        assert np.array_equal(prop.position(BodyId.PHOBOS), phobos)
        assert not np.allclose(prop.position(BodyId.DEIMOS), deimos)

    def test_missing_parent_is_skipped(self):
        records = dict(BODY_TABLE)
        del records[BodyId.MARS]
        prop = OrbitalPropagator(Catalog(records, validate=False))

        phobos = prop.position(BodyId.PHOBOS)
        prop.advance(1.0)
        assert np.array_equal(prop.position(BodyId.PHOBOS), phobos)
        assert prop.check_separations() == {}


class TestAccessors:
    """Test read accessors and export."""

    def test_scaled_radius_by_name(self, prop):
        assert prop.scaled_radius('Sun') == 100.0

    def test_reset(self, prop):
        start = prop.position(BodyId.NEPTUNE)
        prop.advance(10.0)
        prop.reset()
        assert np.array_equal(prop.position(BodyId.NEPTUNE), start)
        assert prop.elapsed == 0.0

    def test_snapshot(self, prop):
        df = prop.snapshot()
        assert len(df) == 32
        assert list(df.columns) == ['x', 'y', 'z', 'parent', 'scaled_radius']
        assert df.loc['sun', 'x'] == 0.0
        assert df.loc['io', 'parent'] == 'jupiter'

    def test_config_read_at_construction(self):
        """Changing config later does not alter an existing propagator."""
        prop = OrbitalPropagator(Catalog())
        omega = prop.angular_velocity(BodyId.EARTH)
        with temp_config(ORBITAL_SPEED_DIVISOR=1.0):
            assert prop.angular_velocity(BodyId.EARTH) == omega
