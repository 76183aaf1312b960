from luxconvert.converter.manager import ConversionManager
from luxconvert.converter.registry import FormatRegistry, build_default_registry

__all__ = ["ConversionManager", "FormatRegistry", "build_default_registry"]
