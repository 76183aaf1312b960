import pytest

from conftest import IES_SAMPLE

from luxconvert.parser.detect import detect_cie, detect_ies, detect_ldt, is_date_like, is_numeric_line


def test_ies_magic_line(ies_bytes):
    assert detect_ies(ies_bytes) == (0.95, "LM-63-2002")
    assert detect_ies(b"IESNA91\nTILT=NONE\n")[1] == "LM-63-1995"


def test_ies_without_version_line_scores_structure():
    body = IES_SAMPLE.split("\n", 1)[1]
    confidence, version = detect_ies(body.encode())
    assert confidence > 0.5
    assert version == "LM-63-2002"


def test_ldt_sample(ldt_bytes):
    confidence, version = detect_ldt(ldt_bytes)
    assert confidence == pytest.approx(1.0)
    assert version == "1.0"


def test_cie_sample(cie_bytes):
    confidence, version = detect_cie(cie_bytes)
    assert confidence > 0.9
    assert version == "CIE i-table"


def test_each_detector_prefers_its_own_format(ies_bytes, ldt_bytes, cie_bytes):
    samples = {"ies": ies_bytes, "ldt": ldt_bytes, "cie": cie_bytes}
    detectors = {"ies": detect_ies, "ldt": detect_ldt, "cie": detect_cie}
    for name, data in samples.items():
        scores = {fmt: fn(data)[0] for fmt, fn in detectors.items()}
        assert max(scores, key=scores.get) == name


@pytest.mark.parametrize("fn", [detect_ies, detect_ldt, detect_cie])
def test_empty_and_garbage_input(fn):
    assert fn(b"") == (0.0, "")
    assert fn(b"hello world\n") == (0.0, "")


def test_line_helpers():
    assert is_numeric_line("1 2,5 3", comma_decimal=True)
    assert not is_numeric_line("1 2,5 3")
    assert not is_numeric_line("   ")
    assert is_date_like("15.01.2024")
    assert is_date_like("user/lab")
    assert not is_date_like("Downlight")
