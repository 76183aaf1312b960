from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple


@dataclass(frozen=True)
class FormatAlternative:
    format: str
    confidence: float
    version: str


@dataclass(frozen=True)
class FormatDetectionResult:
    format: str
    confidence: float
    version: str
    alternatives: List[FormatAlternative] = field(default_factory=list)


@dataclass(frozen=True)
class ConversionResult:
    output: bytes
    warnings: List[str]
    metadata: Dict[str, Any]
    processing_time_ms: float


@dataclass(frozen=True)
class FormatCapabilities:
    photometry_types: Tuple[str, ...]
    supports_absolute: bool
    supports_relative: bool
    max_vertical_angles: int
    max_horizontal_angles: int
    supports_metadata: bool
    supports_geometry: bool
    supports_electrical: bool


@dataclass(frozen=True)
class FormatInfo:
    id: str
    name: str
    description: str
    supported_versions: Tuple[str, ...]
    extensions: Tuple[str, ...]
    mime_types: Tuple[str, ...]
    standards: Tuple[str, ...]
    capabilities: FormatCapabilities
