"""The PDF object model.

PDF values map onto Python values as follows: null is ``None``, booleans,
integers and reals are ``bool``, ``int`` and ``float``, arrays are lists,
dictionaries are dicts keyed by ``str``, names are :class:`Name`, strings
are :class:`PdfString`, streams are :class:`Stream` and indirect
references are :class:`ObjectId`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, NamedTuple

__all__ = ["ObjectId", "Name", "PdfString", "Stream", "type_name", "string_literal"]


class ObjectId(NamedTuple):
    """An object number and generation; used as a reference value too."""

    number: int
    generation: int = 0

    def __str__(self) -> str:
        return f"{self.number} {self.generation} R"


class Name(str):
    """A PDF name such as ``/Type``, held without the leading slash."""

    __slots__ = ()

    def __repr__(self) -> str:
        return f"Name({str.__repr__(self)})"


@dataclass(frozen=True)
class PdfString:
    """A PDF string: raw bytes plus whether it is written in hexadecimal."""

    data: bytes
    hexadecimal: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", bytes(self.data))

    def __bytes__(self) -> bytes:
        return self.data


@dataclass
class Stream:
    """A stream: a dictionary plus content; ``Length`` tracks the content."""

    dictionary: dict[str, Any] = field(default_factory=dict)
    content: bytes = b""
    allows_compression: bool = True

    def __post_init__(self) -> None:
        self.content = bytes(self.content)
        self.dictionary["Length"] = len(self.content)


def type_name(obj: Any) -> str | None:
    """Return the ``Type`` name of a dictionary or stream, or None."""
    if isinstance(obj, Stream):
        obj = obj.dictionary
    if not isinstance(obj, dict):
        return None
    value = obj.get("Type")
    if isinstance(value, str):
        return str(value)
    return None


def string_literal(text: str | bytes | bytearray) -> PdfString:
    """Make a literal string; text is stored as UTF-8 bytes."""
    if isinstance(text, str):
        return PdfString(text.encode("utf-8"))
    return PdfString(bytes(text))