"""A simple page barcode drawn as filled rectangles."""

from __future__ import annotations

__all__ = ["convert_number_to_bits", "generate_barcode", "generate_operations", "MM_TO_PT"]

MM_TO_PT = 2.834

_ZERO = ord("0")
_ONE = ord("1")

Rect = tuple[float, float, float, float, int]


def convert_number_to_bits(num: int, size: int) -> bytes:
    """Return the binary digits of ``num`` as ASCII, least significant first."""
    if num < 0:
        raise ValueError("number must not be negative")
    binary = format(num, "b")
    if len(binary) > size:
        raise ValueError(f"{num} does not fit in {size} bits")
    return binary.rjust(size, "0").encode("ascii")[::-1]


def generate_barcode(page: int, code: int) -> list[Rect]:
    """Lay out the bars encoding a page number and a code.

    Each rectangle is ``(x, y, width, height, bit)`` with ``bit`` an ASCII
    ``0`` or ``1``.
    """
    if not 0 < page <= 255:
        raise ValueError("Page number should within range: 1-255")
    if not 0 <= code <= 511:
        raise ValueError("Bar code should within range: 0-511")
    page_bits = convert_number_to_bits(page, 8)
    code_bits = convert_number_to_bits(code, 9)
    width = 9.0
    flags: list[tuple[float, int]] = [(width, _ZERO)]
    flags += [(width, bit) for bit in page_bits]
    flags.append((width, code_bits[0]))
    flags.append((6.53, _ZERO))
    flags += [(width, bit) for bit in code_bits[1:5]]
    flags += [(width, _ONE), (width, _ZERO)]
    flags += [(width, bit) for bit in code_bits[5:9]]

    rects: list[Rect] = []
    x = 0.0
    for w, bit in flags:
        rects.append((x, 0.0, w, 10.0, bit))
        x += w
    return rects


def _number(value: float) -> str:
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def generate_operations(rects: list[Rect]) -> str:
    """Render rectangles as content-stream operations, switching fill colour as needed."""
    lines: list[str] = []
    current = 0
    for x, y, w, h, bit in rects:
        if bit != current:
            if bit == _ZERO:
                lines.append("1 1 1 rg\n")
            elif bit == _ONE:
                lines.append("0 0 0 rg\n")
            else:
                lines.append("\n")
            current = bit
        lines.append(f"{_number(x)} {_number(y)} {_number(w)} {_number(h)} re\nf\n")
    return "".join(lines)