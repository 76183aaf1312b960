from __future__ import annotations

from typing import List, Optional, Tuple

from luxconvert.config import WriterOptions
from luxconvert.core.units import from_meters, to_meters
from luxconvert.models.photometry import (
    ElectricalData,
    Geometry,
    Metadata,
    PhotometricMeasurements,
    PhotometricRecord,
)
from luxconvert.formats.base import CodecBase
from luxconvert.parser.detect import detect_ies
from luxconvert.parser.ies_parser import IESFile, IESPhotometric, IESTilt, parse_ies_bytes
from luxconvert.writer.ies_writer import write_ies_bytes


TYPE_CODES = {1: "C", 2: "B", 3: "A"}
TYPE_NUMBERS = {v: k for k, v in TYPE_CODES.items()}

# keyword -> metadata field, in the order the writer emits them
KEYWORD_FIELDS: List[Tuple[str, str]] = [
    ("TEST", "test_number"),
    ("TESTLAB", "test_lab"),
    ("ISSUEDATE", "test_date"),
    ("MANUFAC", "manufacturer"),
    ("LUMCAT", "catalog_number"),
    ("LUMINAIRE", "description"),
    ("_LUMINAIRETYPE", "luminaire_type"),
]
FALLBACK_KEYWORDS = {"DATE": "test_date"}


class IESCodec(CodecBase):
    format_id = "ies"
    versions = ("LM-63-1995", "LM-63-2002")

    def read(self, data: bytes) -> IESFile:
        return parse_ies_bytes(data)

    def detect(self, data: bytes) -> Tuple[float, str]:
        return detect_ies(data)

    def default_options(self) -> WriterOptions:
        return WriterOptions(format_version="LM-63-2002")

    def from_format(self, ies: IESFile) -> PhotometricRecord:
        meta = {}
        for key, name in KEYWORD_FIELDS:
            value = ies.keyword(key)
            if value:
                meta[name] = value
        for key, name in FALLBACK_KEYWORDS.items():
            if name not in meta and ies.keyword(key):
                meta[name] = ies.keyword(key)

        p = ies.photometric
        unit = "ft" if p.units_type == 1 else "m"
        length, width, height = (to_meters(v, unit) for v in (p.length, p.width, p.height))

        # lumens/lamp of -1 marks absolute photometry without a rated lamp flux
        flux = p.num_lamps * p.lumens_per_lamp if p.lumens_per_lamp > 0 else 0.0

        return PhotometricRecord(
            metadata=Metadata(**meta).defaulted(),
            geometry=Geometry(
                length=length,
                width=width,
                height=height,
                luminous_length=length,
                luminous_width=width,
                luminous_height=height,
            ),
            photometry=PhotometricMeasurements(
                photometry_type=TYPE_CODES[p.photometric_type],  # type: ignore[arg-type]
                units_type="absolute",
                luminous_flux=flux,
                candela_multiplier=p.candela_multiplier,
                vertical_angles=list(ies.vertical_angles),
                horizontal_angles=list(ies.horizontal_angles),
                candela_values=[list(row) for row in ies.candela],
            ),
            electrical=ElectricalData(
                input_watts=p.input_watts,
                ballast_factor=p.ballast_factor,
                ballast_lamp_factor=p.ballast_lamp_factor,
            ),
        )

    def to_format(self, record: PhotometricRecord, options: Optional[WriterOptions] = None) -> IESFile:
        opts = options or self.default_options()
        m = record.metadata
        keywords: List[Tuple[str, str]] = []
        for key, name in KEYWORD_FIELDS:
            value = getattr(m, name)
            if value:
                keywords.append((key, value))

        photo = record.photometry
        multiplier = photo.candela_multiplier
        lumens = photo.luminous_flux if photo.luminous_flux > 0 else -1.0
        if photo.units_type == "relative" and photo.luminous_flux > 0:
            # cd/lm values become cd through the multiplier
            multiplier *= photo.luminous_flux

        g = record.geometry
        return IESFile(
            version=opts.format_version or "LM-63-2002",
            keywords=keywords,
            tilt=IESTilt(mode="NONE"),
            photometric=IESPhotometric(
                num_lamps=1,
                lumens_per_lamp=lumens,
                candela_multiplier=multiplier,
                num_vertical_angles=len(photo.vertical_angles),
                num_horizontal_angles=len(photo.horizontal_angles),
                photometric_type=TYPE_NUMBERS[photo.photometry_type],
                units_type=1,
                width=from_meters(g.width, "ft"),
                length=from_meters(g.length, "ft"),
                height=from_meters(g.height, "ft"),
                ballast_factor=record.electrical.ballast_factor,
                ballast_lamp_factor=record.electrical.ballast_lamp_factor,
                input_watts=record.electrical.input_watts,
            ),
            vertical_angles=list(photo.vertical_angles),
            horizontal_angles=list(photo.horizontal_angles),
            candela=[list(row) for row in photo.candela_values],
        )

    def write(self, ies: IESFile, options: Optional[WriterOptions] = None) -> bytes:
        return write_ies_bytes(ies, self.resolve_options(options))
