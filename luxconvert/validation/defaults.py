from __future__ import annotations

from luxconvert.validation.engine import Validator
from luxconvert.validation.rules.basic import (
    RuleAngleIncrements,
    RuleCandelaDistribution,
    RuleIntensityRange,
    RuleMetadataCompleteness,
)
from luxconvert.validation.rules.advanced import (
    RuleElectricalSanity,
    RuleFluxConsistency,
    RuleFormatCapacity,
    RuleGeometryPlausibility,
    RulePhotometryTypeGeometry,
    RuleSymmetry,
)


def default_validator() -> Validator:
    """Validator with every cross-format rule."""
    return Validator(
        rules=[
            RuleIntensityRange(),
            RuleCandelaDistribution(),
            RuleSymmetry(),
            RuleFluxConsistency(),
            RulePhotometryTypeGeometry(),
            RuleGeometryPlausibility(),
            RuleFormatCapacity(),
            RuleElectricalSanity(),
            RuleAngleIncrements(),
            RuleMetadataCompleteness(),
        ]
    )
