"""
Test suite for OrbitalElements class.

Tests include:
1. Construction and property access
2. Validation of invalid elements
3. Identity (case-insensitive equality and hashing)
4. Factory methods and batch export
"""

import pytest
import numpy as np
import pandas as pd

from perihelion import OrbitalElements, InvalidElements, PerihelionError
from perihelion.defaults import EARTH, MARS


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def ceres_params():
    """Keyword arguments for a valid dwarf planet."""
    return dict(semi_major_axis=2.7675, eccentricity=0.0758,
                inclination=10.59, ascending_node=80.31,
                argument_of_perihelion=73.60, orbital_period=1680.0,
                rotation_period=0.378, obliquity=4.0, radius=473.0)


# =============================================================================
# Construction
# =============================================================================

class TestConstruction:
    """Test valid OrbitalElements construction."""

    def test_fields_stored(self, ceres_params):
        body = OrbitalElements('Ceres', **ceres_params)
        assert body.id == 'Ceres'
        assert body.key == 'ceres'
        assert body.semi_major_axis == 2.7675
        assert body.eccentricity == 0.0758
        assert body.inclination == 10.59
        assert body.ascending_node == 80.31
        assert body.argument_of_perihelion == 73.60
        assert body.orbital_period == 1680.0
        assert body.rotation_period == 0.378
        assert body.obliquity == 4.0
        assert body.radius == 473.0

    def test_elements_array(self, ceres_params):
        body = OrbitalElements('Ceres', **ceres_params)
        assert np.allclose(body.elements,
                           [2.7675, 0.0758, 10.59, 80.31, 73.60, 1680.0])

    def test_elements_array_is_read_only(self, ceres_params):
        body = OrbitalElements('Ceres', **ceres_params)
        with pytest.raises(ValueError):
            body.elements[0] = 10.0

    def test_properties_cannot_be_set(self, ceres_params):
        body = OrbitalElements('Ceres', **ceres_params)
        with pytest.raises(AttributeError):
            body.eccentricity = 0.5

    def test_physical_defaults(self):
        body = OrbitalElements('Rock', 1.0, 0.0, 0.0, 0.0, 0.0, 365.0)
        assert body.rotation_period == 1.0
        assert body.obliquity == 0.0
        assert body.radius == 1.0

    def test_circular_orbit_allowed(self, ceres_params):
        ceres_params['eccentricity'] = 0.0
        body = OrbitalElements('Ceres', **ceres_params)
        assert body.eccentricity == 0.0


# =============================================================================
# Validation
# =============================================================================

class TestValidation:
    """Invalid elements are rejected, never clamped."""

    @pytest.mark.parametrize("field, value", [
        ('eccentricity', 1.0),
        ('eccentricity', 1.5),
        ('eccentricity', -0.01),
        ('orbital_period', 0.0),
        ('orbital_period', -365.0),
        ('rotation_period', 0.0),
        ('rotation_period', -1.0),
        ('semi_major_axis', 0.0),
        ('semi_major_axis', -1.0),
        ('radius', 0.0),
        ('inclination', np.nan),
        ('ascending_node', np.inf),
    ])
    def test_invalid_field_raises(self, ceres_params, field, value):
        ceres_params[field] = value
        with pytest.raises(InvalidElements):
            OrbitalElements('Ceres', **ceres_params)

    def test_empty_id_raises(self, ceres_params):
        with pytest.raises(InvalidElements, match="non-empty"):
            OrbitalElements('   ', **ceres_params)

    def test_error_carries_body_id(self, ceres_params):
        ceres_params['eccentricity'] = 2.0
        with pytest.raises(InvalidElements) as excinfo:
            OrbitalElements('Ceres', **ceres_params)
        assert excinfo.value.body_id == 'Ceres'

    def test_invalid_elements_is_value_error(self):
        assert issubclass(InvalidElements, ValueError)
        assert issubclass(InvalidElements, PerihelionError)

    def test_validate_false_defers_check(self, ceres_params):
        ceres_params['eccentricity'] = 1.2
        body = OrbitalElements('Ceres', validate=False, **ceres_params)
        with pytest.raises(InvalidElements):
            body.validate()


# =============================================================================
# Identity
# =============================================================================

class TestIdentity:
    """Equality and hashing use the case-folded id only."""

    def test_case_insensitive_equality(self, ceres_params):
        a = OrbitalElements('Ceres', **ceres_params)
        b = OrbitalElements('CERES', **ceres_params)
        assert a == b
        assert hash(a) == hash(b)

    def test_equality_ignores_numeric_fields(self, ceres_params):
        a = OrbitalElements('Ceres', **ceres_params)
        ceres_params['semi_major_axis'] = 3.0
        b = OrbitalElements('ceres', **ceres_params)
        assert a == b

    def test_different_ids_not_equal(self, ceres_params):
        a = OrbitalElements('Ceres', **ceres_params)
        b = OrbitalElements('Vesta', **ceres_params)
        assert a != b

    def test_not_equal_to_string(self):
        assert MARS != 'Mars'

    def test_set_deduplicates(self, ceres_params):
        bodies = {OrbitalElements('Ceres', **ceres_params),
                  OrbitalElements('ceres', **ceres_params),
                  MARS}
        assert len(bodies) == 2


# =============================================================================
# Orbital properties
# =============================================================================

class TestOrbitalProperties:
    """Test derived orbital quantities."""

    def test_perihelion_distance(self):
        assert np.isclose(MARS.perihelion_distance(),
                          MARS.semi_major_axis * (1 - MARS.eccentricity))

    def test_aphelion_distance(self):
        assert np.isclose(MARS.aphelion_distance(),
                          MARS.semi_major_axis * (1 + MARS.eccentricity))

    def test_mean_motion(self):
        assert np.isclose(EARTH.mean_motion(), 2 * np.pi / EARTH.orbital_period)

    def test_str_contains_id(self):
        assert 'Mars' in str(MARS)
        assert 'Mars' in repr(MARS)


# =============================================================================
# Factory methods
# =============================================================================

class TestFactories:
    """Test from_records / from_dataframe and batch export."""

    def test_from_records_with_aliases(self):
        bodies = OrbitalElements.from_records([
            {'id': 'Ceres', 'a': 2.7675, 'e': 0.0758, 'i': 10.59,
             'omega': 80.31, 'w': 73.60, 'period': 1680.0},
        ])
        assert len(bodies) == 1
        assert bodies[0].semi_major_axis == 2.7675
        assert bodies[0].argument_of_perihelion == 73.60

    def test_from_records_unknown_field(self):
        with pytest.raises(ValueError, match="Unknown orbital element field"):
            OrbitalElements.from_records([{'id': 'X', 'mass': 1.0}])

    def test_from_records_missing_id(self, ceres_params):
        with pytest.raises(ValueError, match="requires an 'id'"):
            OrbitalElements.from_records([ceres_params])

    def test_from_dataframe_with_id_column(self, ceres_params):
        df = pd.DataFrame([{'id': 'Ceres', **ceres_params}])
        bodies = OrbitalElements.from_dataframe(df)
        assert bodies[0].id == 'Ceres'
        assert bodies[0].radius == 473.0

    def test_from_dataframe_uses_index_as_id(self, ceres_params):
        df = pd.DataFrame([ceres_params], index=['Ceres'])
        bodies = OrbitalElements.from_dataframe(df)
        assert bodies[0].id == 'Ceres'

    def test_from_dataframe_validates(self, ceres_params):
        ceres_params['orbital_period'] = 0.0
        df = pd.DataFrame([{'id': 'Ceres', **ceres_params}])
        with pytest.raises(InvalidElements):
            OrbitalElements.from_dataframe(df)

    def test_batch_to_dataframe_roundtrip(self):
        df = OrbitalElements.Batch.to_dataframe([EARTH, MARS])
        assert list(df.index) == ['Earth', 'Mars']
        assert df.loc['Mars', 'eccentricity'] == MARS.eccentricity
        rebuilt = OrbitalElements.from_dataframe(df)
        assert rebuilt == [EARTH, MARS]
        assert rebuilt[1].orbital_period == MARS.orbital_period

    def test_batch_to_dataframe_empty(self):
        df = OrbitalElements.Batch.to_dataframe([])
        assert df.empty
        assert list(df.columns) == list(OrbitalElements.FIELDS)

    def test_batch_to_numpy(self):
        array = OrbitalElements.Batch.to_numpy([EARTH, MARS])
        assert array.shape == (2, 6)
        assert np.array_equal(array[1], MARS.elements)
