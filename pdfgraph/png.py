"""PNG predictor filters used by the FlateDecode and LZWDecode filters."""

from __future__ import annotations

from enum import IntEnum

__all__ = ["FilterType", "paeth_predict", "decode_row", "decode_frame", "encode_row"]


class FilterType(IntEnum):
    """The per-row filter type byte of PNG prediction."""

    NONE = 0
    SUB = 1
    UP = 2
    AVG = 3
    PAETH = 4


def paeth_predict(left: int, above: int, upperleft: int) -> int:
    """Pick whichever neighbour is closest to ``left + above - upperleft``."""
    estimate = left + above - upperleft
    dist_left = abs(estimate - left)
    dist_above = abs(estimate - above)
    dist_upperleft = abs(estimate - upperleft)
    if dist_left <= dist_above and dist_left <= dist_upperleft:
        return left
    if dist_above <= dist_upperleft:
        return above
    return upperleft


def decode_row(filter_type: FilterType, bpp: int, previous: bytes, current: bytes) -> bytes:
    """Undo the filter of one row given the decoded previous row."""
    row = bytearray(current)
    length = len(row)
    bpp = min(bpp, length)
    if filter_type == FilterType.SUB:
        for i in range(bpp, length):
            row[i] = (row[i] + row[i - bpp]) & 0xFF
    elif filter_type == FilterType.UP:
        for i in range(length):
            row[i] = (row[i] + previous[i]) & 0xFF
    elif filter_type == FilterType.AVG:
        for i in range(bpp):
            row[i] = (row[i] + previous[i] // 2) & 0xFF
        for i in range(bpp, length):
            row[i] = (row[i] + ((row[i - bpp] + previous[i] // 2) & 0xFF)) & 0xFF
    elif filter_type == FilterType.PAETH:
        for i in range(bpp):
            row[i] = (row[i] + paeth_predict(0, previous[i], 0)) & 0xFF
        for i in range(bpp, length):
            predicted = paeth_predict(row[i - bpp], previous[i], previous[i - bpp])
            row[i] = (row[i] + predicted) & 0xFF
    return bytes(row)


def decode_frame(content: bytes, bytes_per_pixel: int, pixels_per_row: int) -> bytes:
    """Decode rows, each prefixed with a filter type byte."""
    bytes_per_row = bytes_per_pixel * pixels_per_row
    previous = bytes(bytes_per_row)
    decoded = bytearray()
    pos = 0
    while pos < len(content):
        try:
            filter_type = FilterType(content[pos])
        except ValueError:
            raise ValueError(f"invalid PNG filter type ({content[pos]})") from None
        pos += 1
        row = content[pos:pos + bytes_per_row]
        if len(row) < bytes_per_row:
            raise ValueError("failed to fill whole buffer")
        pos += bytes_per_row
        previous = decode_row(filter_type, bytes_per_pixel, previous, row)
        decoded += previous
    return bytes(decoded)


def encode_row(method: FilterType, bpp: int, previous: bytes, current: bytes) -> bytes:
    """Apply a filter to one row given the unfiltered previous row."""
    original = bytes(current)
    row = bytearray(original)
    length = len(row)
    bpp = min(bpp, length)
    if method == FilterType.SUB:
        for i in range(bpp, length):
            row[i] = (original[i] - original[i - bpp]) & 0xFF
    elif method == FilterType.UP:
        for i in range(length):
            row[i] = (original[i] - previous[i]) & 0xFF
    elif method == FilterType.AVG:
        for i in range(bpp, length):
            average = ((original[i - bpp] + previous[i]) & 0xFF) // 2
            row[i] = (original[i] - average) & 0xFF
        for i in range(bpp):
            row[i] = (original[i] - previous[i] // 2) & 0xFF
    elif method == FilterType.PAETH:
        for i in range(bpp, length):
            predicted = paeth_predict(original[i - bpp], previous[i], previous[i - bpp])
            row[i] = (original[i] - predicted) & 0xFF
        for i in range(bpp):
            row[i] = (original[i] - paeth_predict(0, previous[i], 0)) & 0xFF
    return bytes(row)