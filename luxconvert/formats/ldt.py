from __future__ import annotations

from typing import List, Optional, Tuple

from luxconvert.config import WriterOptions
from luxconvert.core.units import from_meters, to_meters
from luxconvert.errors import ConversionError
from luxconvert.formats.base import CodecBase
from luxconvert.models.photometry import (
    ElectricalData,
    Geometry,
    Metadata,
    PhotometricMeasurements,
    PhotometricRecord,
)
from luxconvert.parser.detect import detect_ldt
from luxconvert.parser.ldt_parser import (
    TYPE_NAMES,
    LDTElectrical,
    LDTFile,
    LDTGeometry,
    LDTHeader,
    LDTLampSet,
    parse_ldt_bytes,
)
from luxconvert.writer.ldt_writer import write_ldt_bytes


MAX_C_PLANES = 361
MAX_G_ANGLES = 181

TYPE_INDICATORS = {v: k for k, v in TYPE_NAMES.items()}

DEFAULT_LAMP_TYPE = "LED"
DEFAULT_COLOR_TEMPERATURE = "3000K"
DEFAULT_COLOR_RENDERING = "80"


def _one_line(s: str) -> str:
    return " ".join(s.split())


def _split_date_user(value: str) -> Tuple[str, str]:
    """Split "date/lab" on the last slash; a slash-separated date alone stays whole."""
    date, sep, lab = value.rpartition("/")
    if not sep or not any(ch.isalpha() for ch in lab):
        return value.strip(), ""
    return date.strip(), lab.strip()


def _mean_step(angles: List[float]) -> float:
    if len(angles) < 2:
        return 0.0
    return (angles[-1] - angles[0]) / (len(angles) - 1)


class LDTCodec(CodecBase):
    format_id = "ldt"
    versions = ("1.0",)

    def read(self, data: bytes) -> LDTFile:
        return parse_ldt_bytes(data)

    def detect(self, data: bytes) -> Tuple[float, str]:
        return detect_ldt(data)

    def default_options(self) -> WriterOptions:
        return WriterOptions(use_comma_decimal=True, format_version="1.0")

    def from_format(self, ldt: LDTFile) -> PhotometricRecord:
        h = ldt.header
        g = ldt.geometry

        date, lab = _split_date_user(h.date_user)
        metadata = Metadata(
            manufacturer=h.company.split(";", 1)[0].strip(),
            catalog_number=h.luminaire_number,
            description=h.luminaire_name,
            luminaire_type=TYPE_NAMES.get(h.type_indicator, ""),
            test_lab=lab,
            test_date=date,
            test_number=h.filename,
        ).defaulted()

        geometry = Geometry(
            length=to_meters(g.length_mm, "mm"),
            width=to_meters(g.width_mm, "mm"),
            height=to_meters(g.height_mm, "mm"),
            luminous_length=to_meters(g.luminous_length_mm, "mm"),
            luminous_width=to_meters(g.luminous_width_mm, "mm"),
            luminous_height=to_meters(g.luminous_height_c0_mm, "mm"),
        )

        lamps = ldt.electrical.lamp_sets
        return PhotometricRecord(
            metadata=metadata,
            geometry=geometry,
            photometry=PhotometricMeasurements(
                photometry_type="C",
                units_type="absolute",
                luminous_flux=sum(lamp.total_flux for lamp in lamps),
                candela_multiplier=g.conversion_factor,
                vertical_angles=list(ldt.g_angles),
                horizontal_angles=list(ldt.c_angles),
                candela_values=[list(row) for row in ldt.intensities],
            ),
            electrical=ElectricalData(
                input_watts=sum(lamp.wattage for lamp in lamps),
                ballast_factor=1.0,
                ballast_lamp_factor=1.0,
            ),
        )

    def to_format(self, record: PhotometricRecord, options: Optional[WriterOptions] = None) -> LDTFile:
        photo = record.photometry
        if photo.photometry_type != "C":
            raise ConversionError(
                "UNSUPPORTED_PHOTOMETRY_TYPE",
                f"EULUMDAT stores C-plane photometry only, got type {photo.photometry_type}",
                context={"target": self.format_id},
            )
        nc, ng = len(photo.horizontal_angles), len(photo.vertical_angles)
        if nc > MAX_C_PLANES or ng > MAX_G_ANGLES:
            raise ConversionError(
                "GRID_TOO_LARGE",
                f"EULUMDAT allows at most {MAX_C_PLANES} C-planes and {MAX_G_ANGLES} gamma angles",
                context={"c_planes": nc, "gamma_angles": ng},
            )

        m = record.metadata
        multiplier = photo.candela_multiplier
        if photo.units_type == "relative" and photo.luminous_flux > 0:
            multiplier *= photo.luminous_flux

        date_user = m.test_date
        if m.test_lab:
            date_user = f"{date_user}/{m.test_lab}"

        geo = record.geometry
        header = LDTHeader(
            company=_one_line(m.manufacturer),
            type_indicator=TYPE_INDICATORS.get(m.luminaire_type, 1),
            symmetry=0,
            num_c_planes=nc,
            c_plane_spacing=_mean_step(photo.horizontal_angles),
            num_g_angles=ng,
            g_angle_spacing=_mean_step(photo.vertical_angles),
            report_number=_one_line(m.test_number),
            luminaire_name=_one_line(m.description),
            luminaire_number=_one_line(m.catalog_number),
            filename=_one_line(m.test_number),
            date_user=_one_line(date_user),
        )
        geometry = LDTGeometry(
            length_mm=from_meters(geo.length, "mm"),
            width_mm=from_meters(geo.width, "mm"),
            height_mm=from_meters(geo.height, "mm"),
            luminous_length_mm=from_meters(geo.luminous_length, "mm"),
            luminous_width_mm=from_meters(geo.luminous_width, "mm"),
            luminous_height_c0_mm=from_meters(geo.luminous_height, "mm"),
            luminous_height_c90_mm=from_meters(geo.luminous_height, "mm"),
            luminous_height_c180_mm=from_meters(geo.luminous_height, "mm"),
            luminous_height_c270_mm=from_meters(geo.luminous_height, "mm"),
            conversion_factor=multiplier,
        )
        lamp = LDTLampSet(
            num_lamps=1,
            lamp_type=DEFAULT_LAMP_TYPE,
            total_flux=photo.luminous_flux,
            color_temperature=DEFAULT_COLOR_TEMPERATURE,
            color_rendering=DEFAULT_COLOR_RENDERING,
            wattage=record.electrical.input_watts,
        )
        return LDTFile(
            header=header,
            geometry=geometry,
            electrical=LDTElectrical(lamp_sets=[lamp]),
            c_angles=list(photo.horizontal_angles),
            g_angles=list(photo.vertical_angles),
            intensities=[list(row) for row in photo.candela_values],
        )

    def write(self, ldt: LDTFile, options: Optional[WriterOptions] = None) -> bytes:
        return write_ldt_bytes(ldt, self.resolve_options(options))
