"""
Text Encoding Detection
=======================
Picks a codec for a delimited text file by looking at its leading bytes.

Order of checks (first match wins):
1. Byte-order mark (4-byte patterns before 2-byte ones, otherwise a UTF-32LE
   BOM would be taken for UTF-16LE).
2. UTF-8 validity of the first `UTF8_PROBE_SIZE` bytes.
3. A legacy 8-bit code page (cp1251 unless configured otherwise).

Detection never raises; when in doubt the fallback codec is returned.
"""
from __future__ import annotations

import logging
from typing import Optional

from concavehull import config

logger = logging.getLogger(__name__)

# Longest patterns first.
BOMS: tuple[tuple[bytes, str], ...] = (
    (b"\x00\x00\xfe\xff", "utf-32-be"),
    (b"\xff\xfe\x00\x00", "utf-32-le"),
    (b"\xef\xbb\xbf", "utf-8"),
    (b"\xfe\xff", "utf-16-be"),
    (b"\xff\xfe", "utf-16-le"),
)


def encoding_from_bom(data: bytes) -> Optional[str]:
    """Return the codec announced by a byte-order mark, or None."""
    head = data[:4]
    for bom, codec in BOMS:
        if head.startswith(bom):
            return codec
    return None


def _sequence_length(lead: int) -> int:
    """Number of bytes in the UTF-8 sequence started by `lead`, 0 if invalid."""
    if lead <= 0x7F:
        return 1
    if lead & 0xE0 == 0xC0:
        return 2
    if lead & 0xF0 == 0xE0:
        return 3
    if lead & 0xF8 == 0xF0:
        return 4
    return 0


def is_probably_utf8(data: bytes, window_full: bool = False) -> bool:
    """
    Validate `data` as UTF-8 with a lead/continuation byte state machine.

    Args:
        data: Bytes to scan.
        window_full: True when `data` was cut from a longer file. A sequence
            truncated by the end of such a window is tolerated, because its
            remaining bytes simply were not read.

    Returns:
        True if every complete sequence is well formed.
    """
    i = 0
    n = len(data)
    while i < n:
        length = _sequence_length(data[i])
        if length == 0:
            return False
        if i + length > n:
            # Truncated sequence; the bytes we do have must still be continuations.
            if not all(b & 0xC0 == 0x80 for b in data[i + 1:]):
                return False
            return window_full
        for b in data[i + 1:i + length]:
            if b & 0xC0 != 0x80:
                return False
        i += length
    return True


def detect_encoding_from_bytes(data: bytes, fallback: str = config.FALLBACK_ENCODING) -> str:
    """
    Detect the codec of an in-memory file prefix.

    Args:
        data: Leading bytes of the file (at least 4 for BOM detection, the
            UTF-8 probe looks at up to `UTF8_PROBE_SIZE` bytes).
        fallback: Codec to use when nothing points to a Unicode encoding.
    """
    codec = encoding_from_bom(data)
    if codec is not None:
        return codec

    window = data[:config.UTF8_PROBE_SIZE]
    window_full = len(data) > config.UTF8_PROBE_SIZE
    if is_probably_utf8(window, window_full=window_full):
        return "utf-8"
    return fallback


def detect_encoding(path: str, fallback: str = config.FALLBACK_ENCODING) -> str:
    """Detect the codec of the file at `path`; returns `fallback` on any read problem."""
    try:
        with open(path, "rb") as f:
            # One extra byte tells us whether the probe window was cut short.
            data = f.read(config.UTF8_PROBE_SIZE + 1)
    except OSError as e:
        logger.debug(f"Could not probe encoding of '{path}': {e}")
        return fallback

    codec = detect_encoding_from_bytes(data, fallback=fallback)
    logger.debug(f"Detected encoding '{codec}' for '{path}'.")
    return codec
