"""
Test suite for the body catalog.

Tests cover:
- Table completeness and stable ordering
- Lookup by id, name and record
- Hierarchy helpers (primaries, satellites)
- Startup validation of inconsistent tables
- BodyRecord parameter validation
- DataFrame export
"""

import dataclasses

import pytest
from orrery import BodyId, BodyRecord, BODY_TABLE, Catalog, CatalogError


def _replace(body, **changes):
    """Copy of the default table with one record modified."""
    records = dict(BODY_TABLE)
    records[body] = dataclasses.replace(records[body], **changes)
    return records


class TestContents:
    """Test the built-in table."""

    def test_every_body_has_a_record(self):
        """All BodyId variants are cataloged."""
        catalog = Catalog()
        assert len(catalog) == len(BodyId) == 32
        for body in BodyId:
            assert body in catalog

    def test_stable_order(self):
        """ids() follows declaration order, Sun first."""
        catalog = Catalog()
        assert catalog.ids() == list(BodyId)
        assert catalog.ids()[0] == BodyId.SUN
        assert [r.body for r in catalog] == list(BodyId)

    def test_order_independent_of_input_order(self):
        """Records supplied out of order are still listed in order."""
        shuffled = dict(reversed(list(BODY_TABLE.items())))
        assert Catalog(shuffled).ids() == list(BodyId)

    def test_eight_primaries(self):
        """The eight planets orbit the Sun."""
        catalog = Catalog()
        primaries = catalog.primaries()
        assert len(primaries) == 8
        assert primaries[0] == BodyId.MERCURY
        assert primaries[-1] == BodyId.NEPTUNE
        assert BodyId.SUN not in primaries

    def test_at_most_five_moons_per_planet(self):
        """No planet has more than five cataloged moons."""
        catalog = Catalog()
        for planet in catalog.primaries():
            assert len(catalog.satellites_of(planet)) <= 5
        assert len(catalog.satellites()) == 23

    def test_sun_is_its_own_parent(self):
        """The Sun's parent is the Sun, with zero distance."""
        sun = Catalog().sun
        assert sun.parent == BodyId.SUN
        assert sun.distance_au == 0.0
        assert sun.is_sun

    def test_satellites_of_mars(self):
        """Mars has Phobos and Deimos, in order."""
        catalog = Catalog()
        assert catalog.satellites_of(BodyId.MARS) == [BodyId.PHOBOS, BodyId.DEIMOS]
        assert catalog.satellites_of('Mercury') == []


class TestLookup:
    """Test record access."""

    def test_record_by_id(self):
        """record() accepts a BodyId."""
        record = Catalog().record(BodyId.EARTH)
        assert record.name == 'Earth'
        assert record.radius_km == 6_371.0
        assert record.parent == BodyId.SUN

    def test_record_by_name(self):
        """record() accepts member names and display names."""
        catalog = Catalog()
        assert catalog.record('earth').body == BodyId.EARTH
        assert catalog.record('Moon').body == BodyId.EARTH_MOON
        assert catalog.record('EARTH_MOON').body == BodyId.EARTH_MOON
        assert catalog.record(' earth moon ').body == BodyId.EARTH_MOON

    def test_record_by_record(self):
        """resolve() accepts a BodyRecord."""
        catalog = Catalog()
        record = catalog.record(BodyId.TITAN)
        assert catalog.resolve(record) == BodyId.TITAN

    def test_unknown_name(self):
        """Unknown names raise KeyError."""
        with pytest.raises(KeyError, match="Unknown body"):
            Catalog().record('Pluto')

    def test_bad_reference_type(self):
        """Non-string references raise TypeError."""
        with pytest.raises(TypeError):
            Catalog().record(42)

    def test_contains_tolerates_junk(self):
        """Membership tests never raise."""
        catalog = Catalog()
        assert 'Pluto' not in catalog
        assert 42 not in catalog
        assert 'Io' in catalog

    def test_parent_of(self):
        """parent_of() follows the hierarchy one level."""
        catalog = Catalog()
        assert catalog.parent_of(BodyId.IO) == BodyId.JUPITER
        assert catalog.parent_of(BodyId.SUN) == BodyId.SUN


class TestValidation:
    """Test that inconsistent tables fail at construction."""

    def test_error_is_value_error(self):
        """CatalogError is a ValueError."""
        assert issubclass(CatalogError, ValueError)

    def test_missing_record(self):
        """A missing body is rejected."""
        records = dict(BODY_TABLE)
        del records[BodyId.MARS]
        with pytest.raises(CatalogError, match="missing"):
            Catalog(records)

    def test_self_parent(self):
        """Only the Sun may orbit itself."""
        with pytest.raises(CatalogError, match="cannot orbit itself"):
            Catalog(_replace(BodyId.MARS, parent=BodyId.MARS))

    def test_sun_with_parent(self):
        """The Sun must be its own parent."""
        with pytest.raises(CatalogError, match="own parent"):
            Catalog(_replace(BodyId.SUN, parent=BodyId.EARTH))

    def test_sun_with_distance(self):
        """The Sun must sit at zero distance."""
        with pytest.raises(CatalogError, match="zero orbital distance"):
            Catalog(_replace(BodyId.SUN, distance_au=1.0))

    def test_planet_without_distance(self):
        """Non-Sun bodies need a positive distance."""
        with pytest.raises(CatalogError, match="positive orbital distance"):
            Catalog(_replace(BodyId.MERCURY, distance_au=0.0))

    def test_depth_three_rejected(self):
        """A moon orbiting a moon exceeds the hierarchy depth."""
        with pytest.raises(CatalogError, match="depth"):
            Catalog(_replace(BodyId.PHOBOS, parent=BodyId.EARTH_MOON))

    def test_mis_keyed_record(self):
        """A record stored under another body's key is rejected."""
        records = dict(BODY_TABLE)
        records[BodyId.VENUS] = BODY_TABLE[BodyId.MERCURY]
        with pytest.raises(CatalogError, match="keyed"):
            Catalog(records)

    def test_validation_can_be_skipped(self):
        """validate=False accepts an inconsistent table."""
        catalog = Catalog(_replace(BodyId.PHOBOS, parent=BodyId.EARTH_MOON),
                          validate=False)
        assert catalog.parent_of(BodyId.PHOBOS) == BodyId.EARTH_MOON


class TestBodyRecord:
    """Test BodyRecord parameter validation."""

    def _make(self, **changes):
        params = dict(body=BodyId.EARTH, name='Earth', radius_km=6371.0,
                      distance_au=1.0, mass_kg=5.97e24, parent=BodyId.SUN)
        params.update(changes)
        return BodyRecord(**params)

    def test_valid_record(self):
        """Minimal record with defaults for display fields."""
        record = self._make()
        assert record.diameter_km == 12742.0
        assert record.fun_fact == ''
        assert record.rotation_period_days is None

    def test_non_positive_radius(self):
        with pytest.raises(ValueError, match="Radius must be positive"):
            self._make(radius_km=0.0)

    def test_non_positive_mass(self):
        with pytest.raises(ValueError, match="Mass must be positive"):
            self._make(mass_kg=-1.0)

    def test_negative_distance(self):
        with pytest.raises(ValueError, match="Distance must be non-negative"):
            self._make(distance_au=-0.1)

    def test_immutable(self):
        """Records are frozen."""
        record = self._make()
        with pytest.raises(dataclasses.FrozenInstanceError):
            record.radius_km = 1.0


class TestExport:
    """Test DataFrame export."""

    def test_to_dataframe(self):
        """One row per body with physical columns."""
        df = Catalog().to_dataframe()
        assert len(df) == 32
        assert list(df.index[:3]) == ['sun', 'mercury', 'venus']
        assert df.loc['earth', 'distance_au'] == 1.0
        assert df.loc['earth_moon', 'parent'] == 'earth'
        assert 'mass_kg' in df.columns

    def test_repr(self):
        assert repr(Catalog()) == "Catalog(8 planets, 23 moons)"
