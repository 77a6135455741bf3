"""
Input/Output Manager (Delimited Text)
Reads point clouds from and writes hull boundaries to delimited text files.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np

from concavehull import config
from concavehull.model.encoding import detect_encoding
from concavehull.model.errors import FormatConfigError
from concavehull.model.geometry import as_points
from concavehull.model.numeric import parse_decimal, format_decimal

if TYPE_CHECKING:
    import numpy.typing as npt

# Get module logger
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileFormat:
    """
    Layout of a delimited coordinate file.

    `encoding` is only used for files without a header; files with a header
    get their encoding detected from the file content.
    """
    delimiter: str = config.DEFAULT_DELIMITER
    decimal_separator: str = config.DEFAULT_DECIMAL_SEPARATOR
    has_header: bool = False
    encoding: str = config.DEFAULT_INPUT_ENCODING

    def validate(self) -> None:
        if len(self.delimiter) != 1:
            raise FormatConfigError(f"Delimiter must be a single character, got {self.delimiter!r}.")
        if len(self.decimal_separator) != 1:
            raise FormatConfigError(
                f"Decimal separator must be a single character, got {self.decimal_separator!r}."
            )
        if self.delimiter == self.decimal_separator:
            raise FormatConfigError(
                f"Delimiter and decimal separator must differ (both are {self.delimiter!r})."
            )

    def split(self, line: str) -> list[str]:
        """Split on the delimiter, dropping empty fields produced by adjacent delimiters."""
        return [part for part in line.split(self.delimiter) if part]


@dataclass(frozen=True)
class SkippedLine:
    row: int  # 1-based line number in the file
    content: str


@dataclass
class LoadResult:
    """Coordinates read from a file together with the header labels."""
    points: npt.NDArray[np.float64]
    header_x: str = ""
    header_y: str = ""
    encoding: str = config.DEFAULT_INPUT_ENCODING
    skipped: list[SkippedLine] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.points)


def ensure_export_suffix(path: str) -> str:
    """Keep a .csv/.txt suffix, otherwise append .csv."""
    if path.lower().endswith(config.EXPORT_SUFFIXES):
        return path
    return path + config.EXPORT_SUFFIXES[0]


def default_export_name(source_path: str) -> str:
    """Suggested export file name (without suffix) for a given input file."""
    stem = os.path.splitext(os.path.basename(source_path))[0] if source_path else "points"
    return f"{stem}{config.EXPORT_NAME_SUFFIX}"


class IOManager:

    @staticmethod
    def read_lines(filepath: str, encoding: str) -> list[str]:
        """Read a text file into lines, dropping a leading byte-order mark."""
        with open(filepath, "r", encoding=encoding, errors="replace", newline=None) as f:
            text = f.read()
        if text.startswith("\ufeff"):
            text = text[1:]
        return text.splitlines()

    @staticmethod
    def load_points(filepath: str, file_format: FileFormat) -> LoadResult:
        """
        Parse a delimited text file into an (N, 2) array of coordinates.

        Lines whose first two fields are not numbers are skipped and reported
        in `LoadResult.skipped`. An empty result is not an error.

        Raises:
            FormatConfigError: If the format is inconsistent (checked before any I/O).
            FileNotFoundError: If `filepath` does not exist.
            OSError: On any other read failure.
        """
        file_format.validate()
        logger.info(f"Loading points from: {filepath}")

        if not os.path.exists(filepath):
            raise FileNotFoundError(f"File not found: {filepath}")

        if file_format.has_header:
            encoding = detect_encoding(filepath)
        else:
            encoding = file_format.encoding

        lines = IOManager.read_lines(filepath, encoding)

        header_x, header_y = "", ""
        start = 0
        if file_format.has_header and lines:
            start = 1
            parts = file_format.split(lines[0].strip())
            if parts:
                header_x = parts[0]
            if len(parts) > 1:
                header_y = parts[1]

        coords: list[tuple[float, float]] = []
        skipped: list[SkippedLine] = []
        for i in range(start, len(lines)):
            line = lines[i].strip()
            if not line:
                continue

            parts = file_format.split(line)
            if len(parts) < 2:
                continue

            try:
                x = parse_decimal(parts[0], file_format.decimal_separator)
                y = parse_decimal(parts[1], file_format.decimal_separator)
            except ValueError:
                skipped.append(SkippedLine(row=i + 1, content=lines[i]))
                logger.warning(f"Skipping row {i + 1}: {lines[i]!r}")
                continue

            coords.append((x, y))

        result = LoadResult(
            points=as_points(coords),
            header_x=header_x,
            header_y=header_y,
            encoding=encoding,
            skipped=skipped,
        )
        logger.info(f"Loaded {result.count} points ({len(skipped)} rows skipped, encoding '{encoding}').")
        return result

    @staticmethod
    def format_ring(
        ring: npt.NDArray[np.float64],
        file_format: FileFormat,
        header_x: str = "",
        header_y: str = "",
    ) -> list[str]:
        """Lines of an export file, header first if the format has one."""
        d = file_format.delimiter
        sep = file_format.decimal_separator

        lines = []
        if file_format.has_header:
            lines.append(f"{header_x}{d}{header_y}")
        for x, y in np.asarray(ring, dtype=np.float64).reshape(-1, 2):
            lines.append(f"{format_decimal(x, sep)}{d}{format_decimal(y, sep)}")
        return lines

    @staticmethod
    def save_ring(
        ring: npt.NDArray[np.float64],
        filepath: str,
        file_format: FileFormat,
        header_x: str = "",
        header_y: str = "",
    ) -> None:
        """
        Write every ring vertex (closing vertex included) as 'X<delimiter>Y'.

        The file is always UTF-8 with a byte-order mark.

        Raises:
            FormatConfigError: If the format is inconsistent.
            OSError: If the file cannot be written.
        """
        file_format.validate()
        lines = IOManager.format_ring(ring, file_format, header_x, header_y)

        try:
            with open(filepath, "w", encoding=config.OUTPUT_ENCODING) as f:
                f.writelines(f"{line}\n" for line in lines)
        except OSError:
            logger.exception(f"Failed to save hull to: {filepath}")
            raise

        logger.info(f"Hull with {len(ring)} vertices saved to: {filepath}")
