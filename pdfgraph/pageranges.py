"""Page lists such as ``3,5,7-9``."""

from __future__ import annotations

import re
from typing import Iterable

__all__ = ["compute_page_numbers", "complement_page_numbers"]

_UNSIGNED = re.compile(r"\+?[0-9]+")
_U32_MAX = 2**32 - 1


def _parse_u32(text: str) -> int:
    if not _UNSIGNED.fullmatch(text):
        raise ValueError(f"invalid page number: {text!r}")
    value = int(text)
    if value > _U32_MAX:
        raise ValueError(f"page number out of range: {text!r}")
    return value


def compute_page_numbers(pages: str) -> list[int]:
    """Expand a comma-separated list of pages and ``a-b`` ranges.

    Items with more than one dash are skipped.
    """
    numbers: list[int] = []
    for item in pages.split(","):
        bounds = [_parse_u32(part) for part in item.split("-")]
        if len(bounds) == 1:
            numbers.append(bounds[0])
        elif len(bounds) == 2:
            numbers.extend(range(bounds[0], bounds[1] + 1))
    return numbers


def complement_page_numbers(pages: Iterable[int], total: int) -> list[int]:
    """Return the pages from 1 to ``total`` that are not in ``pages``."""
    excluded = set(pages)
    return [page for page in range(1, total + 1) if page not in excluded]