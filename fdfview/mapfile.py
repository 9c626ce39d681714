"""Reading and validating height-map files in the ``.fdf`` format.

A map file holds a block of whitespace-separated integer heights, followed
by colour lines of the form ``HIGH: r g b a`` and ``LOW: r g b a``.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

_WHITESPACE = frozenset("\t\n\v\f\r ")
_MASK32 = 0xFFFFFFFF

_ATOI = re.compile(r"[\t\n\v\f\r ]*([-+]?)([0-9]*)")
_MAP_LINE = re.compile(r"(?:[0-9\t\n\v\f\r ]|-(?=[0-9]))*")
_COLOR_WORD = re.compile(r"[0-9\t\n\v\f\r ]*")
_ROW_NUMBER_END = re.compile(r"[0-9](?=[ \n])")
_SKIP_NUMBER = re.compile(r"[0-9-]*[ ]*")


class MapError(ValueError):
    """Raised when a map file is missing, malformed or empty."""


@dataclass
class FdfMap:
    """A rectangular grid of heights with its two configured colours."""

    heights: list[list[int]]
    color_high: int = 0
    color_low: int = 0
    _width: int = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self._width = len(self.heights[0]) if self.heights else 0

    @property
    def width(self) -> int:
        """Number of columns in the grid."""
        return self._width

    @property
    def height(self) -> int:
        """Number of rows in the grid."""
        return len(self.heights)


def atoi(text: str) -> int:
    """Parse a leading integer the way C's ``atoi`` does; 0 if there is none."""
    match = _ATOI.match(text)
    sign, digits = match.group(1), match.group(2)
    if not digits:
        return 0
    value = int(digits)
    return -value if sign == "-" else value


def split_words(text: str, sep: str) -> list[str]:
    """Split ``text`` on ``sep``, dropping empty pieces."""
    return [word for word in text.split(sep) if word]


def is_map_line(line: str) -> bool:
    """True if the line holds only digits, whitespace and minus signs before digits."""
    return _MAP_LINE.fullmatch(line) is not None


def is_blank(line: str) -> bool:
    """True if the line is empty or holds only whitespace."""
    return all(ch in _WHITESPACE for ch in line)


def parse_color(line: str) -> int:
    """Parse a ``HIGH:``/``LOW:`` line into a packed 32-bit colour value."""
    words = split_words(line, " ")
    if len(words) != 5 or not all(_COLOR_WORD.fullmatch(w) for w in words[1:]):
        raise MapError(f"improper format for colour line: {line.rstrip()!r}")
    n1, n2, n3, n4 = (atoi(word) for word in words[1:])
    if max(n1, n2, n3, n4) > 256:
        raise MapError("colour value exceeding 256")
    return ((n1 << 24) + (n2 << 16) + (n3 << 8) + n4) & _MASK32


def _read_colors(lines: Iterable[str]) -> tuple[int, int]:
    high = low = 0
    high_count = low_count = 0
    for line in lines:
        if line.startswith("HIGH"):
            high = (high + parse_color(line)) & _MASK32
            high_count += 1
        elif line.startswith("LOW"):
            low = (low + parse_color(line)) & _MASK32
            low_count += 1
        elif not is_blank(line):
            raise MapError(f"invalid character found in line: {line.rstrip()!r}")
    if high_count != 1 and low_count != 1:
        raise MapError("incorrect amount of HIGH or LOW arguments")
    return high, low


def _row_width(line: str) -> int:
    return len(_ROW_NUMBER_END.findall(line))


def _parse_row(line: str, width: int) -> list[int]:
    values = []
    pos = 0
    for _ in range(width):
        if line[pos:pos + 1] == "\n":
            values.append(0)
            continue
        values.append(atoi(line[pos:]))
        pos = _SKIP_NUMBER.match(line, pos).end()
    return values


def parse_map(lines: Iterable[str]) -> FdfMap:
    """Build a map from file lines, each carrying its trailing newline."""
    lines = list(lines)

    first_other = next(
        (index for index, line in enumerate(lines) if not is_map_line(line)), None
    )
    if first_other is None:
        info_start = len(lines)
        map_end = 0
    else:
        info_start = map_end = first_other
        while map_end > 0 and is_blank(lines[map_end - 1]):
            map_end -= 1

    map_start = 0
    while map_start < len(lines) and is_blank(lines[map_start]):
        map_start += 1

    color_high, color_low = _read_colors(lines[info_start:])

    if map_end <= map_start:
        raise MapError("map is empty")
    rows = lines[map_start:map_end]
    width = max(_row_width(row) for row in rows)
    if width == 0:
        raise MapError("map is empty")

    heights = [_parse_row(row, width) for row in rows]
    return FdfMap(heights=heights, color_high=color_high, color_low=color_low)


def _split_lines(text: str) -> list[str]:
    parts = text.split("\n")
    lines = [part + "\n" for part in parts[:-1]]
    if parts[-1]:
        lines.append(parts[-1])
    return lines


def load_map(path: str | os.PathLike) -> FdfMap:
    """Read and parse a map file whose name ends in ``fdf``."""
    name = os.fsdecode(path)
    if not name.endswith("fdf"):
        raise MapError(f"incorrect file format: {name}")
    try:
        data = Path(name).read_bytes()
    except OSError as exc:
        raise MapError(f"failed to open {name}") from exc
    return parse_map(_split_lines(data.decode("utf-8", errors="replace")))