from luxconvert.errors import (
    ConversionError,
    ConverterSystemError,
    ErrorCategory,
    ErrorCollector,
    FormatSyntaxError,
    PhotometricError,
    SemanticError,
    ValidationError,
)
from luxconvert.models.photometry import (
    ElectricalData,
    Geometry,
    Metadata,
    PhotometricMeasurements,
    PhotometricRecord,
)

__version__ = "0.1.0"

__all__ = [
    "ConversionError",
    "ConverterSystemError",
    "ErrorCategory",
    "ErrorCollector",
    "FormatSyntaxError",
    "PhotometricError",
    "SemanticError",
    "ValidationError",
    "ElectricalData",
    "Geometry",
    "Metadata",
    "PhotometricMeasurements",
    "PhotometricRecord",
    "__version__",
]
