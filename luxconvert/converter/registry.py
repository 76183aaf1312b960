from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

from luxconvert.errors import ConverterSystemError
from luxconvert.formats.base import PhotometricCodec
from luxconvert.formats.cie import CIECodec
from luxconvert.formats.ies import IESCodec
from luxconvert.formats.ldt import LDTCodec
from luxconvert.models.conversion import FormatCapabilities, FormatInfo
from luxconvert.validation.formats import CIEValidator, FormatValidator, IESValidator, LDTValidator


@dataclass(frozen=True)
class FormatEntry:
    codec: PhotometricCodec
    validator: FormatValidator
    name: str
    description: str
    extensions: tuple
    mime_types: tuple
    standards: tuple
    capabilities: FormatCapabilities

    def info(self) -> FormatInfo:
        return FormatInfo(
            id=self.codec.format_id,
            name=self.name,
            description=self.description,
            supported_versions=tuple(self.codec.supported_versions()),
            extensions=self.extensions,
            mime_types=self.mime_types,
            standards=self.standards,
            capabilities=self.capabilities,
        )


@dataclass(frozen=True)
class FormatRegistry:
    """Immutable id -> codec/validator table shared by every conversion."""

    entries: Mapping[str, FormatEntry] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "entries", MappingProxyType(dict(self.entries)))

    def ids(self) -> list:
        return sorted(self.entries)

    def get(self, format_id: str) -> Optional[FormatEntry]:
        return self.entries.get(format_id.lower())

    def entry(self, format_id: str) -> FormatEntry:
        e = self.get(format_id)
        if e is None:
            raise ConverterSystemError(
                "UNSUPPORTED_FORMAT",
                f"unsupported format: {format_id}",
                context={"supported": ", ".join(self.ids())},
            )
        return e

    def codec(self, format_id: str) -> PhotometricCodec:
        return self.entry(format_id).codec

    def validator(self, format_id: str) -> FormatValidator:
        return self.entry(format_id).validator


def build_default_registry() -> FormatRegistry:
    return FormatRegistry(
        entries={
            "ies": FormatEntry(
                codec=IESCodec(),
                validator=IESValidator(),
                name="IES LM-63",
                description="IESNA standard file format for photometric data",
                extensions=(".ies",),
                mime_types=("application/x-ies", "text/plain"),
                standards=("IES LM-63-1995", "IES LM-63-2002"),
                capabilities=FormatCapabilities(
                    photometry_types=("A", "B", "C"),
                    supports_absolute=True,
                    supports_relative=True,
                    max_vertical_angles=181,
                    max_horizontal_angles=361,
                    supports_metadata=True,
                    supports_geometry=True,
                    supports_electrical=True,
                ),
            ),
            "ldt": FormatEntry(
                codec=LDTCodec(),
                validator=LDTValidator(),
                name="EULUMDAT",
                description="European standard photometric data format",
                extensions=(".ldt",),
                mime_types=("application/x-eulumdat", "text/plain"),
                standards=("EULUMDAT 1.0",),
                capabilities=FormatCapabilities(
                    photometry_types=("C",),
                    supports_absolute=True,
                    supports_relative=True,
                    max_vertical_angles=181,
                    max_horizontal_angles=361,
                    supports_metadata=True,
                    supports_geometry=True,
                    supports_electrical=True,
                ),
            ),
            "cie": FormatEntry(
                codec=CIECodec(),
                validator=CIEValidator(),
                name="CIE i-table",
                description="CIE 102 intensity table in cd/1000 lm on a fixed 19x16 grid",
                extensions=(".cie",),
                mime_types=("application/x-cie", "text/plain"),
                standards=("CIE 102-1993",),
                capabilities=FormatCapabilities(
                    photometry_types=("C",),
                    supports_absolute=False,
                    supports_relative=True,
                    max_vertical_angles=19,
                    max_horizontal_angles=16,
                    supports_metadata=False,
                    supports_geometry=False,
                    supports_electrical=False,
                ),
            ),
        }
    )
