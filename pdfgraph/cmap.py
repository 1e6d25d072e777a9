"""ToUnicode CMaps: mapping two-byte character codes to UTF-16 units."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass, field
from typing import Iterable, Sequence, Union

from .cmap_parser import (
    BfCharSection,
    BfRangeSection,
    CMapSyntaxError,
    CsRangeSection,
    parse_cmap_stream,
)

__all__ = [
    "UnicodeCMapError",
    "CMapParseError",
    "UnsupportedCodeSpaceRangeError",
    "InvalidCodeRangeError",
    "HexString",
    "UTF16CodePoint",
    "ArrayOfHexStrings",
    "BfRangeTarget",
    "ToUnicodeCMap",
]

REPLACEMENT_CHARACTER = 0xFFFD
_U16 = 0xFFFF


class UnicodeCMapError(ValueError):
    """A ToUnicode CMap is malformed or unsupported."""


class CMapParseError(UnicodeCMapError):
    """The CMap stream could not be parsed."""

    def __init__(self, cause: CMapSyntaxError) -> None:
        self.cause = cause
        super().__init__(f"Could not parse ToUnicodeCMap: {cause}!")


class UnsupportedCodeSpaceRangeError(UnicodeCMapError):
    """The codespace range is not the single range <0000> <FFFF>."""

    def __init__(self) -> None:
        super().__init__("Unsupported codespace range given!")


class InvalidCodeRangeError(UnicodeCMapError):
    """A code range is empty, reversed or has no target."""

    def __init__(self) -> None:
        super().__init__("Invalid code range given!")


@dataclass(frozen=True)
class HexString:
    """A UTF-16BE target whose last unit grows with the source code."""

    units: tuple[int, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "units", tuple(self.units))


@dataclass(frozen=True)
class UTF16CodePoint:
    """A single-unit target stored as an offset from the source code.

    Storing the offset lets consecutive codes share one range.
    """

    offset: int


@dataclass(frozen=True)
class ArrayOfHexStrings:
    """One explicit target string per code of the range."""

    strings: tuple[tuple[int, ...], ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "strings", tuple(tuple(s) for s in self.strings))


BfRangeTarget = Union[HexString, UTF16CodePoint, ArrayOfHexStrings]


@dataclass
class ToUnicodeCMap:
    """Inclusive code ranges, each mapped to a target.

    Inserting a range overwrites whatever overlapped it, and merges with
    touching or overlapping ranges that carry an equal target.
    """

    _spans: list[tuple[int, int, BfRangeTarget]] = field(default_factory=list)

    @classmethod
    def parse(cls, data: bytes | str) -> "ToUnicodeCMap":
        """Parse a ToUnicode CMap stream."""
        try:
            sections = parse_cmap_stream(data)
        except CMapSyntaxError as exc:
            raise CMapParseError(exc) from exc
        return cls.from_sections(sections)

    @classmethod
    def from_sections(
        cls, sections: Iterable[CsRangeSection | BfCharSection | BfRangeSection]
    ) -> "ToUnicodeCMap":
        """Build a CMap from parsed sections."""
        cmap = cls()
        for section in sections:
            if isinstance(section, CsRangeSection):
                if list(section.ranges) != [(0x0000, 0xFFFF)]:
                    raise UnsupportedCodeSpaceRangeError()
            elif isinstance(section, BfCharSection):
                for code, dst in section.mappings:
                    cmap.put_char(code, dst)
            elif isinstance(section, BfRangeSection):
                for (start, end), targets in section.mappings:
                    if end < start or not targets:
                        raise InvalidCodeRangeError()
                    if len(targets) == 1 and len(targets[0]) == 1:
                        target: BfRangeTarget = UTF16CodePoint((targets[0][0] - start) & _U16)
                    elif len(targets) == 1:
                        target = HexString(targets[0])
                    else:
                        target = ArrayOfHexStrings(targets)
                    cmap.put(start, end, target)
        return cmap

    def _lookup(self, code: int) -> tuple[int, int, BfRangeTarget] | None:
        index = bisect_right(self._spans, code, key=lambda span: span[0]) - 1
        if index < 0:
            return None
        span = self._spans[index]
        return span if span[1] >= code else None

    def get(self, code: int) -> list[int] | None:
        """Return the UTF-16 units for ``code``, or None if it is unmapped."""
        span = self._lookup(code)
        if span is None:
            return None
        start, _, target = span
        if isinstance(target, HexString):
            units = list(target.units)
            units[-1] = (units[-1] + code - start) & _U16
            return units
        if isinstance(target, UTF16CodePoint):
            return [(code + target.offset) & _U16]
        return list(target.strings[code - start])

    def get_or_replacement_char(self, code: int) -> list[int]:
        """Return the units for ``code``, or U+FFFD if it is unmapped."""
        units = self.get(code)
        return [REPLACEMENT_CHARACTER] if units is None else units

    def put(self, low: int, high: int, target: BfRangeTarget) -> None:
        """Map the inclusive range ``low``..``high`` to ``target``."""
        if high < low:
            raise InvalidCodeRangeError()
        new_low, new_high = low, high
        kept: list[tuple[int, int, BfRangeTarget]] = []
        for start, end, value in self._spans:
            if end < low - 1 or start > high + 1:
                kept.append((start, end, value))
                continue
            if value == target:
                new_low = min(new_low, start)
                new_high = max(new_high, end)
                continue
            if end == low - 1 or start == high + 1:
                kept.append((start, end, value))
                continue
            if start < low:
                kept.append((start, low - 1, value))
            if end > high:
                kept.append((high + 1, end, value))
        kept.append((new_low, new_high, target))
        kept.sort(key=lambda span: span[0])
        self._spans = kept

    def put_char(self, code: int, dst: Sequence[int]) -> None:
        """Map a single code to the target units ``dst``."""
        if len(dst) == 1:
            target: BfRangeTarget = UTF16CodePoint((dst[0] - code) & _U16)
        else:
            target = HexString(tuple(dst))
        self.put(code, code, target)