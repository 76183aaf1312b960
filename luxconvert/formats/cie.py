from __future__ import annotations

import logging
from typing import Optional, Tuple

import numpy as np

from luxconvert.config import WriterOptions
from luxconvert.core.numbers import format_number
from luxconvert.errors import ConversionError
from luxconvert.formats.base import CodecBase
from luxconvert.models.photometry import (
    UNKNOWN,
    ElectricalData,
    Geometry,
    Metadata,
    PhotometricMeasurements,
    PhotometricRecord,
)
from luxconvert.parser.cie_parser import (
    CIEFile,
    CIEHeader,
    extract_catalog_number,
    extract_luminous_flux,
    extract_manufacturer,
    extract_wattage,
    parse_cie_bytes,
)
from luxconvert.parser.detect import detect_cie
from luxconvert.photometry.interp import resample, standard_c_plane_angles, standard_gamma_angles
from luxconvert.photometry.symmetry import cie_symmetry_type
from luxconvert.writer.cie_writer import write_cie_bytes

log = logging.getLogger(__name__)


PER_KLM = 1000.0
DEFAULT_DESCRIPTION = "LED Luminaire"


def build_description(record: PhotometricRecord) -> str:
    """Free-text header: manufacturer first, wattage and lumens appended unless already present."""
    m = record.metadata
    desc = " ".join(m.description.split()) or " ".join(m.catalog_number.split())
    if not desc or desc == UNKNOWN:
        desc = DEFAULT_DESCRIPTION
    if m.manufacturer and m.manufacturer != UNKNOWN and not desc.startswith(m.manufacturer):
        desc = f"{' '.join(m.manufacturer.split())} {desc}"

    watts = record.electrical.input_watts
    if watts > 0 and extract_wattage(desc) == 0:
        desc += f" {format_number(watts, 1).rstrip('0').rstrip('.')}W"
    flux = record.photometry.luminous_flux
    if flux > 0 and extract_luminous_flux(desc) == 0:
        desc += f" {format_number(flux, 1)} lm"
    return desc


class CIECodec(CodecBase):
    format_id = "cie"
    versions = ("CIE 102-1993", "CIE i-table")

    def read(self, data: bytes) -> CIEFile:
        return parse_cie_bytes(data)

    def detect(self, data: bytes) -> Tuple[float, str]:
        return detect_cie(data)

    def default_options(self) -> WriterOptions:
        return WriterOptions(precision=0, format_version="CIE i-table")

    def from_format(self, cie: CIEFile) -> PhotometricRecord:
        desc = cie.header.description
        return PhotometricRecord(
            metadata=Metadata(
                manufacturer=extract_manufacturer(desc),
                catalog_number=extract_catalog_number(desc),
                description=desc,
            ).defaulted(),
            geometry=Geometry(),
            photometry=PhotometricMeasurements(
                photometry_type="C",
                units_type="relative",
                luminous_flux=extract_luminous_flux(desc),
                candela_multiplier=1.0,
                vertical_angles=list(cie.gamma_angles),
                horizontal_angles=list(cie.c_angles),
                candela_values=[[v / PER_KLM for v in row] for row in cie.intensities],
            ),
            electrical=ElectricalData(input_watts=extract_wattage(desc)),
        )

    def to_format(self, record: PhotometricRecord, options: Optional[WriterOptions] = None) -> CIEFile:
        photo = record.photometry
        if photo.photometry_type != "C":
            raise ConversionError(
                "UNSUPPORTED_PHOTOMETRY_TYPE",
                f"CIE i-table stores Type C photometry only, got type {photo.photometry_type}",
                context={"target": self.format_id},
            )

        values = photo.candela_array() * photo.candela_multiplier
        if photo.units_type == "absolute":
            if photo.luminous_flux <= 0:
                raise ConversionError(
                    "MISSING_FLUX",
                    "absolute intensities need a luminous flux to convert to cd/1000 lm",
                    context={"target": self.format_id},
                )
            values = values / photo.luminous_flux
        values = values * PER_KLM

        gamma, c_planes = standard_gamma_angles(), standard_c_plane_angles()
        if photo.vertical_angles != gamma or photo.horizontal_angles != c_planes:
            log.debug(
                "resampling %dx%d grid onto the CIE standard grid",
                len(photo.vertical_angles),
                len(photo.horizontal_angles),
            )
        grid = resample(photo.vertical_angles, photo.horizontal_angles, values, gamma, c_planes)

        return CIEFile(
            header=CIEHeader(
                format_type=1,
                symmetry_type=cie_symmetry_type(photo.horizontal_angles),
                reserved=0,
                description=build_description(record),
            ),
            gamma_angles=gamma,
            c_angles=c_planes,
            intensities=grid,
        )

    def write(self, cie: CIEFile, options: Optional[WriterOptions] = None) -> bytes:
        if np.shape(cie.intensities) != (len(cie.gamma_angles), len(cie.c_angles)):
            raise ConversionError("CIE_GRID_SIZE", "intensity grid does not match the standard 19x16 grid")
        return write_cie_bytes(cie, self.resolve_options(options))
