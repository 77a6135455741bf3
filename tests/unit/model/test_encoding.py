import pytest

from concavehull import config
from concavehull.model import encoding as enc


@pytest.mark.parametrize(
    "prefix, expected",
    [
        (b"\x00\x00\xfe\xff", "utf-32-be"),
        (b"\xff\xfe\x00\x00", "utf-32-le"),
        (b"\xef\xbb\xbf", "utf-8"),
        (b"\xfe\xff", "utf-16-be"),
        (b"\xff\xfe", "utf-16-le"),
    ],
)
def test_bom_detection(prefix, expected):
    assert enc.detect_encoding_from_bytes(prefix + b"x\x00;y\x00") == expected


def test_utf32le_bom_not_mistaken_for_utf16le():
    assert enc.encoding_from_bom(b"\xff\xfe\x00\x00abc") == "utf-32-le"


def test_no_bom():
    assert enc.encoding_from_bom(b"1;2\n") is None


def test_ascii_is_utf8():
    assert enc.detect_encoding_from_bytes(b"X;Y\n1;2\n") == "utf-8"


def test_multibyte_utf8():
    data = "Широта;Долгота\n1;2\n".encode("utf-8")
    assert enc.detect_encoding_from_bytes(data) == "utf-8"


def test_lone_high_byte_falls_back():
    assert enc.detect_encoding_from_bytes(b"\x80") == config.FALLBACK_ENCODING


def test_cp1251_text_falls_back():
    data = "Широта;Долгота\n".encode("cp1251")
    assert enc.detect_encoding_from_bytes(data) == "cp1251"


def test_custom_fallback():
    assert enc.detect_encoding_from_bytes(b"\xc0\x41", fallback="latin-1") == "latin-1"


def test_truncated_sequence_at_end_of_short_file():
    # the whole file was read, so a cut sequence is malformed
    assert enc.detect_encoding_from_bytes(b"abc\xd0") == config.FALLBACK_ENCODING


def test_truncated_sequence_at_window_boundary():
    """a sequence cut by the probe window is tolerated when the file goes on"""
    size = config.UTF8_PROBE_SIZE
    data = b"a" * (size - 1) + "Ж".encode("utf-8") + b"more"
    assert len(data) > size
    assert enc.detect_encoding_from_bytes(data) == "utf-8"


def test_invalid_byte_after_window_is_ignored():
    size = config.UTF8_PROBE_SIZE
    data = b"a" * size + b"\xff\xff"
    assert enc.detect_encoding_from_bytes(data) == "utf-8"


def test_bad_continuation():
    assert not enc.is_probably_utf8(b"\xe2\x28\xa1")


def test_detect_encoding_from_file(tmp_path):
    path = tmp_path / "a.csv"
    path.write_bytes(b"\xef\xbb\xbfX;Y\n")
    assert enc.detect_encoding(str(path)) == "utf-8"


def test_detect_encoding_missing_file_returns_fallback(tmp_path):
    assert enc.detect_encoding(str(tmp_path / "missing.csv")) == config.FALLBACK_ENCODING
