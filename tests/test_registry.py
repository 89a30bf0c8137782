"""
Test suite for BodyRegistry and the predefined Solar System.

Tests cover:
- Case-insensitive lookup
- Not-found handling (None from get, KeyError from indexing)
- Duplicate registration warning
- DataFrame import/export
"""

import pytest
import pandas as pd

from perihelion import BodyRegistry, OrbitalElements, solar_system
from perihelion.defaults import EARTH, MARS, PLUTO, PLANETS


@pytest.fixture
def registry():
    return BodyRegistry([EARTH, MARS])


class TestLookup:
    """Test registry queries."""

    @pytest.mark.parametrize("name", ['mars', 'Mars', 'MARS', 'mArS'])
    def test_get_is_case_insensitive(self, registry, name):
        assert registry.get(name) is MARS

    def test_get_unknown_returns_none(self, registry):
        assert registry.get('vulcan') is None

    def test_getitem_unknown_raises(self, registry):
        with pytest.raises(KeyError, match="vulcan"):
            registry['vulcan']

    def test_getitem(self, registry):
        assert registry['EARTH'] is EARTH

    def test_contains(self, registry):
        assert 'earth' in registry
        assert MARS in registry
        assert 'pluto' not in registry
        assert PLUTO not in registry

    def test_select_skips_unknown(self, registry):
        assert registry.select('mars', 'vulcan', 'earth') == [MARS, EARTH]

    def test_len_iter_ids(self, registry):
        assert len(registry) == 2
        assert list(registry) == [EARTH, MARS]
        assert registry.ids() == ['Earth', 'Mars']


class TestRegistration:
    """Test adding bodies."""

    def test_register(self):
        registry = BodyRegistry()
        registry.register(PLUTO)
        assert registry.get('pluto') is PLUTO

    def test_duplicate_id_warns_and_replaces(self, registry):
        replacement = OrbitalElements('mars', 1.5, 0.1, 1.8, 49.6, 286.5, 687.0)
        with pytest.warns(UserWarning, match="replaces"):
            registry.register(replacement)
        assert registry.get('Mars') is replacement
        assert len(registry) == 2

    def test_register_wrong_type(self):
        with pytest.raises(TypeError):
            BodyRegistry().register('Mars')


class TestDataFrames:
    """Test DataFrame import/export."""

    def test_roundtrip(self, registry):
        df = registry.to_dataframe()
        assert isinstance(df, pd.DataFrame)
        rebuilt = BodyRegistry.from_dataframe(df)
        assert rebuilt.ids() == ['Earth', 'Mars']
        assert rebuilt['mars'].eccentricity == MARS.eccentricity

    def test_from_records(self):
        registry = BodyRegistry.from_records([
            {'id': 'Ceres', 'a': 2.77, 'e': 0.076, 'i': 10.6,
             'omega': 80.3, 'w': 73.6, 'period': 1680.0},
        ])
        assert 'ceres' in registry


class TestSolarSystem:
    """Test predefined bodies."""

    def test_all_bodies(self):
        registry = solar_system()
        assert len(registry) == 9
        assert registry.get('pluto') is PLUTO

    def test_without_pluto(self):
        registry = solar_system(include_pluto=False)
        assert len(registry) == len(PLANETS)
        assert registry.get('pluto') is None

    def test_fresh_registry_each_call(self):
        assert solar_system() is not solar_system()

    @pytest.mark.parametrize("body", PLANETS + (PLUTO,), ids=lambda b: b.id)
    def test_defaults_are_valid(self, body):
        body.validate()
        assert 0 <= body.eccentricity < 1
