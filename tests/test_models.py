from __future__ import annotations

import math

import pytest

from luxconvert.errors import SemanticError, ValidationError
from luxconvert.models.photometry import (
    UNKNOWN,
    ElectricalData,
    Geometry,
    Metadata,
    PhotometricMeasurements,
    validate_record,
)


def test_good_record_validates(good_record):
    good_record.validate()
    validate_record(good_record)


def test_metadata_defaulted_fills_unknown():
    m = Metadata(manufacturer="  ", catalog_number="").defaulted()
    assert m.manufacturer == UNKNOWN
    assert m.catalog_number == UNKNOWN


def test_metadata_requires_manufacturer(good_record):
    good_record.metadata.manufacturer = ""
    with pytest.raises(ValidationError) as ei:
        good_record.validate()
    assert ei.value.code == "RECORD_INVALID"
    assert ei.value.context == {"section": "metadata"}
    assert isinstance(ei.value.cause, SemanticError)


def test_geometry_rejects_negative_and_oversized_luminous():
    with pytest.raises(SemanticError) as ei:
        Geometry(length=-1.0).validate()
    assert ei.value.code == "NEGATIVE_DIMENSION"

    with pytest.raises(SemanticError) as ei:
        Geometry(length=0.5, luminous_length=0.6).validate()
    assert ei.value.code == "LUMINOUS_EXCEEDS_PHYSICAL"


def test_candela_shape_must_match_angles():
    p = PhotometricMeasurements(
        vertical_angles=[0.0, 90.0],
        horizontal_angles=[0.0],
        candela_values=[[1.0]],
    )
    with pytest.raises(SemanticError) as ei:
        p.validate()
    assert ei.value.code == "CANDELA_SHAPE_MISMATCH"


@pytest.mark.parametrize(
    "vertical, code",
    [
        ([], "ANGLES_EMPTY"),
        ([0.0, 0.0], "ANGLES_NOT_ASCENDING"),
        ([0.0, 200.0], "ANGLE_OUT_OF_RANGE"),
    ],
)
def test_vertical_angle_checks(vertical, code):
    p = PhotometricMeasurements(
        vertical_angles=vertical,
        horizontal_angles=[0.0],
        candela_values=[[1.0] for _ in vertical],
    )
    with pytest.raises(SemanticError) as ei:
        p.validate()
    assert ei.value.code == code


def test_candela_must_be_finite_and_non_negative(good_record):
    p = good_record.photometry
    p.candela_values[2][3] = math.nan
    with pytest.raises(SemanticError) as ei:
        p.validate()
    assert ei.value.code == "CANDELA_NOT_FINITE"

    p.candela_values[2][3] = -1.0
    with pytest.raises(SemanticError) as ei:
        p.validate()
    assert ei.value.code == "NEGATIVE_CANDELA"


def test_multiplier_must_be_positive(good_record):
    good_record.photometry.candela_multiplier = 0.0
    with pytest.raises(ValidationError):
        good_record.validate()


def test_electrical_consistency():
    ElectricalData(input_watts=100.0, input_voltage=230.0, input_current=0.5, power_factor=0.9).validate()
    with pytest.raises(SemanticError) as ei:
        ElectricalData(input_watts=200.0, input_voltage=230.0, input_current=0.5, power_factor=0.9).validate()
    assert ei.value.code == "ELECTRICAL_INCONSISTENT"

    with pytest.raises(SemanticError):
        ElectricalData(power_factor=1.2).validate()
    with pytest.raises(SemanticError):
        ElectricalData(ballast_factor=2.5).validate()


def test_absolute_candela_scales_relative_by_flux():
    p = PhotometricMeasurements(
        units_type="relative",
        luminous_flux=500.0,
        candela_multiplier=2.0,
        vertical_angles=[0.0, 90.0],
        horizontal_angles=[0.0],
        candela_values=[[0.2], [0.1]],
    )
    assert p.absolute_candela().tolist() == [[200.0], [100.0]]


def test_with_metadata_returns_copy(good_record):
    other = good_record.with_metadata(manufacturer="Other")
    assert other.metadata.manufacturer == "Other"
    assert good_record.metadata.manufacturer == "Acme"
    other.photometry.candela_values[0][0] = 0.0
    assert good_record.photometry.candela_values[0][0] > 0

    with pytest.raises(ValueError):
        good_record.with_metadata(colour="red")


def test_to_dict_is_plain(good_record):
    d = good_record.to_dict()
    assert d["metadata"]["manufacturer"] == "Acme"
    assert d["photometry"]["vertical_angles"][-1] == 90.0
