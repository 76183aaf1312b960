import pytest

from conftest import LDT_SAMPLE, ldt_sample_lines

from luxconvert.errors import ConversionError, FormatSyntaxError, SemanticError
from luxconvert.formats.ldt import LDTCodec
from luxconvert.parser.ldt_parser import parse_ldt_bytes, parse_ldt_text, transpose_c_major, transpose_g_major


def test_parse_sample_header():
    ldt = parse_ldt_text(LDT_SAMPLE)
    h = ldt.header
    assert h.company == "Acme;Lighting"
    assert (h.type_indicator, h.symmetry, h.num_c_planes, h.num_g_angles) == (1, 0, 4, 3)
    assert (h.c_plane_spacing, h.g_angle_spacing) == (90.0, 45.0)
    assert (h.luminaire_name, h.luminaire_number) == ("Downlight", "XZ-400")
    assert h.date_user == "15.01.2024/Acme Labs"


def test_parse_geometry_and_lamps_with_comma_decimals():
    ldt = parse_ldt_text(LDT_SAMPLE)
    g = ldt.geometry
    assert (g.length_mm, g.width_mm, g.height_mm) == (600.0, 600.0, 100.0)
    assert g.lorl_percent == 85.5
    assert ldt.electrical.dr_index == 0.85
    (lamp,) = ldt.electrical.lamp_sets
    assert (lamp.num_lamps, lamp.lamp_type, lamp.total_flux) == (1, "LED", 1000.0)
    assert (lamp.color_temperature, lamp.color_rendering, lamp.wattage) == ("3000K", "80", 10.5)


def test_intensities_are_transposed_to_gamma_major():
    ldt = parse_ldt_text(LDT_SAMPLE)
    assert ldt.c_angles == [0.0, 90.0, 180.0, 270.0]
    assert ldt.g_angles == [0.0, 45.0, 90.0]
    assert ldt.intensities == [
        [100.0, 110.0, 120.0, 130.0],
        [70.0, 77.0, 84.0, 91.0],
        [0.0, 1.0, 2.0, 3.0],
    ]


def test_transpose_helpers_are_inverse():
    by_c = [[1.0, 2.0], [3.0, 4.0], [5.0, 6.0]]
    by_g = transpose_c_major(by_c, num_c=3, num_g=2)
    assert by_g == [[1.0, 3.0, 5.0], [2.0, 4.0, 6.0]]
    assert transpose_g_major(by_g, num_c=3, num_g=2) == by_c


def test_transpose_rejects_mismatched_counts():
    with pytest.raises(SemanticError) as ei:
        transpose_c_major([[1.0, 2.0]], num_c=2, num_g=2)
    assert ei.value.code == "LDT_TRANSPOSE_SHAPE"


def test_non_numeric_count_reports_line():
    lines = ldt_sample_lines()
    lines[3] = "four"
    with pytest.raises(FormatSyntaxError) as ei:
        parse_ldt_text("\n".join(lines))
    assert ei.value.code == "LDT_NON_NUMERIC"
    assert ei.value.context["line"] == 4


def test_truncated_intensities():
    lines = ldt_sample_lines()[:-2]
    with pytest.raises(FormatSyntaxError) as ei:
        parse_ldt_text("\n".join(lines))
    assert ei.value.code == "LDT_UNEXPECTED_EOF"


def test_invalid_type_indicator():
    lines = ldt_sample_lines()
    lines[1] = "7"
    with pytest.raises(SemanticError) as ei:
        parse_ldt_text("\n".join(lines))
    assert ei.value.code == "LDT_INVALID_TYPE"


def test_empty_file():
    with pytest.raises(FormatSyntaxError):
        parse_ldt_bytes(b"\r\n\r\n")


def test_codec_maps_to_record(ldt_bytes):
    record = LDTCodec().parse(ldt_bytes)
    m = record.metadata
    assert m.manufacturer == "Acme"
    assert (m.catalog_number, m.description, m.luminaire_type) == ("XZ-400", "Downlight", "point")
    assert (m.test_date, m.test_lab, m.test_number) == ("15.01.2024", "Acme Labs", "dl.ldt")

    assert record.geometry.length == 0.6
    assert record.geometry.luminous_width == 0.5
    assert record.photometry.luminous_flux == 1000.0
    assert record.photometry.candela_values[1] == [70.0, 77.0, 84.0, 91.0]
    assert record.electrical.input_watts == 10.5


def test_writer_roundtrip(good_record):
    codec = LDTCodec()
    out = codec.write_record(good_record)
    text = out.decode("latin-1")
    assert "\r\n" in text
    lines = text.split("\r\n")
    assert lines[0] == "Acme"
    assert lines[2] == "0"  # 0..360 coverage: no symmetry
    assert lines[11] == "2024-01-15/Acme Labs"

    back = codec.parse(out)
    assert back.geometry.length == 0.6
    assert back.geometry.luminous_height == 0.05
    assert back.photometry.candela_values == good_record.photometry.candela_values
    assert back.photometry.luminous_flux == 1000.0
    assert back.electrical.input_watts == 10.0
    assert back.metadata.catalog_number == "XZ-400"


def test_writer_uses_comma_decimals_by_default(good_record):
    text = LDTCodec().write_record(good_record).decode("latin-1")
    assert "318,31" in text

    opts = LDTCodec().default_options().merged(use_comma_decimal=False)
    text = LDTCodec().write_record(good_record, opts).decode("latin-1")
    assert "318.31" in text and "318,31" not in text


def test_quadrant_grid_is_written_without_symmetry(good_record):
    p = good_record.photometry
    p.horizontal_angles = [0.0, 45.0, 90.0]
    p.candela_values = [row[:3] for row in p.candela_values]
    codec = LDTCodec()
    ldt = codec.to_format(good_record)
    assert ldt.header.symmetry == 0
    assert ldt.header.num_c_planes == len(ldt.c_angles) == 3

    back = parse_ldt_bytes(codec.write(ldt))
    assert back.header.symmetry == 0
    assert back.c_angles == [0.0, 45.0, 90.0]
    assert back.intensities == p.candela_values


def test_type_indicator_zero_is_accepted():
    lines = ldt_sample_lines()
    lines[1] = "0"
    ldt = parse_ldt_text("\n".join(lines))
    assert ldt.header.type_indicator == 0
    record = LDTCodec().parse("\n".join(lines).encode("ascii"))
    assert record.metadata.luminaire_type == "point-asymmetric"
    assert LDTCodec().to_format(record).header.type_indicator == 0


@pytest.mark.parametrize(
    "date_user, date, lab",
    [
        ("15.01.2024/Acme Labs", "15.01.2024", "Acme Labs"),
        ("05/14/2021", "05/14/2021", ""),
        ("05/14/2021/Acme Labs", "05/14/2021", "Acme Labs"),
        ("Acme Labs", "Acme Labs", ""),
    ],
)
def test_date_user_split(date_user, date, lab):
    lines = ldt_sample_lines()
    lines[11] = date_user
    m = LDTCodec().parse("\n".join(lines).encode("ascii")).metadata
    assert (m.test_date, m.test_lab) == (date, lab)


def test_writer_rejects_type_b(good_record):
    good_record.photometry.photometry_type = "B"
    with pytest.raises(ConversionError) as ei:
        LDTCodec().write_record(good_record)
    assert ei.value.code == "UNSUPPORTED_PHOTOMETRY_TYPE"


def test_writer_rejects_oversized_grid(good_record):
    p = good_record.photometry
    p.horizontal_angles = [i * 0.5 for i in range(362)]
    p.candela_values = [[1.0] * 362 for _ in p.vertical_angles]
    with pytest.raises(ConversionError) as ei:
        LDTCodec().to_format(good_record)
    assert ei.value.code == "GRID_TOO_LARGE"
