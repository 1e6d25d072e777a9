"""Parser for ToUnicode CMap streams.

ToUnicode CMaps are a restricted kind of CMap, which keeps parsing simple:
the CMap type is always 2, source codes are always two bytes, only
``bfchar`` and ``bfrange`` sections map codes, and targets are UTF-16BE
hex strings.

Parsing starts at the beginning of the input and does not require the
whole input to be consumed.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, TypeVar, Union

__all__ = [
    "CMapSyntaxError",
    "CsRangeSection",
    "BfCharSection",
    "BfRangeSection",
    "source_code",
    "code_range_pair",
    "bf_range_line",
    "codespace_range_section",
    "bf_range_section",
    "bf_char_section",
    "cid_system_info",
    "cmap_name",
    "cmap_type",
    "parse_cmap_stream",
]

T = TypeVar("T")

CodeRange = tuple[int, int]
TargetString = list[int]
RangeMapping = tuple[CodeRange, list[TargetString]]
CharMapping = tuple[int, TargetString]

_SPACE = b" \t"
_WHITESPACE = b" \t\n\r\0\x0c"
_DIGITS = b"0123456789"
_HEX = b"0123456789abcdefABCDEF"
_NAME_STOP = b" \t\n\r\x0c()<>[]{}/%"
_MAX_TARGET_UNITS = 255

_NUMBER = re.compile(rb"[+-]?(?:\d+(?:\.\d*)?|\.\d+)")
_REFERENCE = re.compile(rb"(\d+)[ \t\r\n\x0c\0]+(\d+)[ \t\r\n\x0c\0]+R")
_ESCAPES = {
    ord("n"): 0x0A,
    ord("r"): 0x0D,
    ord("t"): 0x09,
    ord("b"): 0x08,
    ord("f"): 0x0C,
    ord("("): 0x28,
    ord(")"): 0x29,
    ord("\\"): 0x5C,
}


class CMapSyntaxError(ValueError):
    """The input does not follow the ToUnicode CMap grammar."""

    def __init__(self, expected: str, offset: int) -> None:
        self.expected = expected
        self.offset = offset
        super().__init__(f"expected {expected} at byte {offset}")


@dataclass
class CsRangeSection:
    """A ``begincodespacerange`` section."""

    ranges: list[CodeRange]


@dataclass
class BfCharSection:
    """A ``beginbfchar`` section: single codes mapped to target strings."""

    mappings: list[CharMapping]


@dataclass
class BfRangeSection:
    """A ``beginbfrange`` section: code ranges mapped to target strings."""

    mappings: list[RangeMapping]


CMapSection = Union[CsRangeSection, BfCharSection, BfRangeSection]


class _Reader:
    """A cursor over the input bytes with backtracking support."""

    def __init__(self, data: bytes) -> None:
        self.data = data
        self.pos = 0

    def error(self, expected: str) -> CMapSyntaxError:
        return CMapSyntaxError(expected, self.pos)

    def startswith(self, token: bytes) -> bool:
        return self.data.startswith(token, self.pos)

    def expect(self, token: bytes) -> None:
        if not self.startswith(token):
            raise self.error(repr(token.decode("latin-1")))
        self.pos += len(token)

    def span(self, chars: bytes, minimum: int = 0, what: str = "character") -> bytes:
        start = self.pos
        data = self.data
        while self.pos < len(data) and data[self.pos] in chars:
            self.pos += 1
        if self.pos - start < minimum:
            raise self.error(what)
        return data[start:self.pos]

    def attempt(self, rule: Callable[["_Reader"], T]) -> tuple[bool, T | None]:
        start = self.pos
        try:
            return True, rule(self)
        except CMapSyntaxError:
            self.pos = start
            return False, None


def _repeat(
    r: _Reader, rule: Callable[[_Reader], T], minimum: int, maximum: int | None = None
) -> list[T]:
    items: list[T] = []
    while maximum is None or len(items) < maximum:
        ok, value = r.attempt(rule)
        if not ok:
            break
        items.append(value)  # type: ignore[arg-type]
    if len(items) < minimum:
        raise r.error(f"at least {minimum} repetition(s)")
    return items


def _choice(r: _Reader, *rules: Callable[[_Reader], Any]) -> Any:
    for rule in rules:
        ok, value = r.attempt(rule)
        if ok:
            return value
    raise r.error("one of several alternatives")


def _as_bytes(data: bytes | bytearray | str) -> bytes:
    if isinstance(data, str):
        return data.encode("latin-1")
    return bytes(data)


def _run(rule: Callable[[_Reader], T], data: bytes | bytearray | str) -> T:
    return rule(_Reader(_as_bytes(data)))


# --- lexical pieces -------------------------------------------------------


def _space_no_crlf(r: _Reader) -> None:
    r.span(_SPACE)


def _eol(r: _Reader) -> None:
    for token in (b"\r\n", b"\n", b"\r"):
        if r.startswith(token):
            r.pos += len(token)
            return
    raise r.error("end of line")


def _ws_newline(r: _Reader) -> None:
    _space_no_crlf(r)
    _eol(r)


def _whitespace(r: _Reader) -> None:
    r.span(_WHITESPACE, 1, "whitespace")


def _digits(r: _Reader) -> None:
    r.span(_DIGITS, 1, "digit")


def _words(r: _Reader, *tokens: bytes) -> None:
    for token in tokens:
        _space_no_crlf(r)
        r.expect(token)


def _hex_byte(r: _Reader) -> int:
    digits = r.data[r.pos:r.pos + 2]
    if len(digits) != 2 or any(c not in _HEX for c in digits):
        raise r.error("two hex digits")
    r.pos += 2
    return int(digits, 16)


def _hex_u16(r: _Reader) -> int:
    high = _hex_byte(r)
    return high * 256 + _hex_byte(r)


# --- generic PDF values, as far as CIDSystemInfo needs them ----------------


def _pdf_space(r: _Reader) -> None:
    data = r.data
    while r.pos < len(data):
        c = data[r.pos]
        if c in _WHITESPACE:
            r.pos += 1
        elif c == ord("%"):
            while r.pos < len(data) and data[r.pos] not in b"\r\n":
                r.pos += 1
        else:
            break


def _name(r: _Reader) -> str:
    r.expect(b"/")
    out = bytearray()
    data = r.data
    while r.pos < len(data):
        c = data[r.pos]
        if c in _NAME_STOP:
            break
        if c == ord("#"):
            start = r.pos
            r.pos += 1
            ok, value = r.attempt(_hex_byte)
            if not ok:
                r.pos = start
                break
            out.append(value)  # type: ignore[arg-type]
            continue
        out.append(c)
        r.pos += 1
    return out.decode("latin-1")


def _literal_string(r: _Reader) -> bytes:
    r.expect(b"(")
    data = r.data
    out = bytearray()
    depth = 0
    while True:
        if r.pos >= len(data):
            raise r.error("')'")
        c = data[r.pos]
        r.pos += 1
        if c == 0x5C:
            if r.pos >= len(data):
                raise r.error("escape sequence")
            e = data[r.pos]
            r.pos += 1
            if e in _ESCAPES:
                out.append(_ESCAPES[e])
            elif 0x30 <= e <= 0x37:
                digits = bytes([e])
                while len(digits) < 3 and r.pos < len(data) and 0x30 <= data[r.pos] <= 0x37:
                    digits += data[r.pos:r.pos + 1]
                    r.pos += 1
                out.append(int(digits, 8) & 0xFF)
            elif e == 0x0D:
                if r.startswith(b"\n"):
                    r.pos += 1
            elif e != 0x0A:
                out.append(e)
        elif c == 0x28:
            depth += 1
            out.append(c)
        elif c == 0x29:
            if depth == 0:
                return bytes(out)
            depth -= 1
            out.append(c)
        else:
            out.append(c)


def _hex_string(r: _Reader) -> bytes:
    r.expect(b"<")
    data = r.data
    digits = bytearray()
    while True:
        if r.pos >= len(data):
            raise r.error("'>'")
        c = data[r.pos]
        r.pos += 1
        if c == ord(">"):
            break
        if c in _HEX:
            digits.append(c)
        elif c not in _WHITESPACE:
            r.pos -= 1
            raise r.error("hex digit")
    if len(digits) % 2:
        digits.append(ord("0"))
    return bytes.fromhex(digits.decode("ascii"))


def _array(r: _Reader) -> list[Any]:
    r.expect(b"[")
    items = []
    _pdf_space(r)
    while not r.startswith(b"]"):
        items.append(_value(r))
        _pdf_space(r)
    r.expect(b"]")
    return items


def _dictionary(r: _Reader) -> dict[str, Any]:
    r.expect(b"<<")
    result: dict[str, Any] = {}
    _pdf_space(r)
    while not r.startswith(b">>"):
        key = _name(r)
        _pdf_space(r)
        result[key] = _value(r)
        _pdf_space(r)
    r.expect(b">>")
    return result


def _value(r: _Reader) -> Any:
    """Read one direct value: names become str, strings become bytes."""
    if r.startswith(b"<<"):
        return _dictionary(r)
    head = r.data[r.pos:r.pos + 1]
    if head == b"<":
        return _hex_string(r)
    if head == b"[":
        return _array(r)
    if head == b"(":
        return _literal_string(r)
    if head == b"/":
        return _name(r)
    reference = _REFERENCE.match(r.data, r.pos)
    if reference:
        r.pos = reference.end()
        return int(reference.group(1)), int(reference.group(2))
    number = _NUMBER.match(r.data, r.pos)
    if number:
        r.pos = number.end()
        text = number.group()
        return float(text) if b"." in text else int(text)
    for keyword, value in ((b"true", True), (b"false", False), (b"null", None)):
        if r.startswith(keyword):
            r.pos += len(keyword)
            return value
    raise r.error("PDF object")


# --- grammar rules --------------------------------------------------------


def _source_code(r: _Reader) -> int:
    r.expect(b"<")
    code = _hex_u16(r)
    r.expect(b">")
    return code


def _code_range_pair(r: _Reader) -> CodeRange:
    _space_no_crlf(r)
    low = _source_code(r)
    _space_no_crlf(r)
    return low, _source_code(r)


def _target_string(r: _Reader) -> TargetString:
    r.expect(b"<")
    units = _repeat(r, _hex_u16, 1, _MAX_TARGET_UNITS)
    r.expect(b">")
    return units


def _range_target_array(r: _Reader) -> list[TargetString]:
    r.expect(b"[")
    _space_no_crlf(r)

    def target_then_space(rr: _Reader) -> TargetString:
        target = _target_string(rr)
        _space_no_crlf(rr)
        return target

    targets = _repeat(r, target_then_space, 1)
    r.expect(b"]")
    return targets


def _bf_range_line(r: _Reader) -> RangeMapping:
    pair = _code_range_pair(r)
    _space_no_crlf(r)
    targets = _choice(r, lambda rr: [_target_string(rr)], _range_target_array)
    _ws_newline(r)
    return pair, targets


def _bf_char_line(r: _Reader) -> CharMapping:
    _space_no_crlf(r)
    code = _source_code(r)
    _space_no_crlf(r)
    target = _target_string(r)
    _space_no_crlf(r)
    _eol(r)
    return code, target


def _code_range_line(r: _Reader) -> CodeRange:
    pair = _code_range_pair(r)
    _ws_newline(r)
    return pair


def _numbered_section(
    r: _Reader, begin: bytes, end: bytes, line: Callable[[_Reader], T]
) -> list[T]:
    _digits(r)
    _space_no_crlf(r)
    r.expect(begin)
    _ws_newline(r)
    items = _repeat(r, line, 1)
    r.expect(end)
    _ws_newline(r)
    return items


def _codespace_range_section(r: _Reader) -> list[CodeRange]:
    return _numbered_section(r, b"begincodespacerange", b"endcodespacerange", _code_range_line)


def _bf_range_section(r: _Reader) -> list[RangeMapping]:
    return _numbered_section(r, b"beginbfrange", b"endbfrange", _bf_range_line)


def _bf_char_section(r: _Reader) -> list[CharMapping]:
    return _numbered_section(r, b"beginbfchar", b"endbfchar", _bf_char_line)


def _cmap_type(r: _Reader) -> int:
    _words(r, b"/CMapType", b"2", b"def")
    _ws_newline(r)
    return 2


def _cmap_name(r: _Reader) -> str:
    _words(r, b"/CMapName")
    _space_no_crlf(r)
    name = _name(r)
    _words(r, b"def")
    _ws_newline(r)
    return name


def _cid_system_info(r: _Reader) -> dict[str, Any]:
    _words(r, b"/CIDSystemInfo")
    _space_no_crlf(r)
    info = _dictionary(r)
    _words(r, b"def")
    _ws_newline(r)
    return info


def _section(r: _Reader) -> CMapSection:
    return _choice(
        r,
        lambda rr: CsRangeSection(_codespace_range_section(rr)),
        lambda rr: BfCharSection(_bf_char_section(rr)),
        lambda rr: BfRangeSection(_bf_range_section(rr)),
    )


def _header_entry(r: _Reader) -> Any:
    return _choice(r, _cmap_type, _cmap_name, _cid_system_info)


def _cmap_stream(r: _Reader) -> list[CMapSection]:
    _words(r, b"/CIDInit", b"/ProcSet", b"findresource", b"begin")
    _ws_newline(r)
    _space_no_crlf(r)
    _digits(r)
    _words(r, b"dict", b"begin")
    _ws_newline(r)
    _words(r, b"begincmap")
    _ws_newline(r)
    _repeat(r, _header_entry, 1, 3)
    sections = _repeat(r, _section, 1)
    _words(r, b"endcmap")
    _ws_newline(r)
    _words(r, b"CMapName", b"currentdict", b"/CMap", b"defineresource", b"pop")
    _ws_newline(r)
    _words(r, b"end")
    _whitespace(r)
    r.expect(b"end")
    return sections


# --- public entry points --------------------------------------------------


def source_code(data: bytes | str) -> int:
    """Parse a two-byte source code such as ``<080F>``."""
    return _run(_source_code, data)


def code_range_pair(data: bytes | str) -> CodeRange:
    """Parse a pair of source codes giving an inclusive range."""
    return _run(_code_range_pair, data)


def bf_range_line(data: bytes | str) -> RangeMapping:
    """Parse one line of a ``bfrange`` section."""
    return _run(_bf_range_line, data)


def codespace_range_section(data: bytes | str) -> list[CodeRange]:
    """Parse a ``begincodespacerange`` ... ``endcodespacerange`` section."""
    return _run(_codespace_range_section, data)


def bf_range_section(data: bytes | str) -> list[RangeMapping]:
    """Parse a ``beginbfrange`` ... ``endbfrange`` section."""
    return _run(_bf_range_section, data)


def bf_char_section(data: bytes | str) -> list[CharMapping]:
    """Parse a ``beginbfchar`` ... ``endbfchar`` section."""
    return _run(_bf_char_section, data)


def cid_system_info(data: bytes | str) -> dict[str, Any]:
    """Parse a ``/CIDSystemInfo << ... >> def`` line and return the dictionary."""
    return _run(_cid_system_info, data)


def cmap_name(data: bytes | str) -> str:
    """Parse a ``/CMapName /Name def`` line and return the name."""
    return _run(_cmap_name, data)


def cmap_type(data: bytes | str) -> int:
    """Parse a ``/CMapType 2 def`` line; the type is always 2."""
    return _run(_cmap_type, data)


def parse_cmap_stream(data: bytes | str) -> list[CMapSection]:
    """Parse a whole ToUnicode CMap stream into its sections."""
    return _run(_cmap_stream, data)