# pdfgraph

Building blocks for working with PDF files, in pure Python with no
dependencies outside the standard library.

## Modules

- `pdfgraph.objects`: how PDF values are held in Python. `ObjectId` is an
  object number and generation, and also stands for an indirect reference.
  `Name` is a `str` subclass for PDF names. `PdfString` holds raw bytes and
  a hexadecimal flag. `Stream` holds a dictionary and content, and keeps
  `Length` in step with the content. `type_name(obj)` returns the `Type` of
  a dictionary or stream. `string_literal(text)` makes a `PdfString` from
  text encoded as UTF-8.
- `pdfgraph.cmap_parser`: a parser for ToUnicode CMap streams.
  `parse_cmap_stream(data)` returns a list of `CsRangeSection`,
  `BfCharSection` and `BfRangeSection`. The single grammar rules are
  available too: `source_code`, `code_range_pair`, `bf_range_line`,
  `codespace_range_section`, `bf_range_section`, `bf_char_section`,
  `cid_system_info`, `cmap_name` and `cmap_type`. Bad input raises
  `CMapSyntaxError`, a `ValueError` that carries the byte offset.
- `pdfgraph.cmap`: `ToUnicodeCMap` maps two-byte codes to UTF-16 units.
  It has `parse`, `from_sections`, `get`, `get_or_replacement_char`, `put`
  and `put_char`. Targets are `HexString`, `UTF16CodePoint` or
  `ArrayOfHexStrings`. Failures raise subclasses of `UnicodeCMapError`:
  `CMapParseError`, `UnsupportedCodeSpaceRangeError` and
  `InvalidCodeRangeError`.
- `pdfgraph.png`: PNG predictor filters. `FilterType`, `paeth_predict`,
  `decode_row`, `encode_row`, and `decode_frame` for whole frames of
  filter-prefixed rows.
- `pdfgraph.dates`: `format_pdf_date(moment)` writes
  `D:YYYYMMDDHHmmSS+HH'mm'` and treats naive datetimes as UTC.
  `parse_pdf_date(data)` reads that form back. It returns `None` when the
  input does not match.
- `pdfgraph.pageranges`: `compute_page_numbers("3,5,7-9")` and
  `complement_page_numbers(pages, total)`.
- `pdfgraph.barcode`: `convert_number_to_bits`, `generate_barcode(page, code)`
  and `generate_operations(rects)`. Together they draw a page number and a
  code as filled rectangles in content-stream syntax.

## Examples

```python
from datetime import datetime, timezone

from pdfgraph.cmap import ToUnicodeCMap
from pdfgraph.dates import format_pdf_date, parse_pdf_date
from pdfgraph.pageranges import compute_page_numbers, complement_page_numbers
from pdfgraph.png import decode_frame

cmap = ToUnicodeCMap()
cmap.put_char(0x41, [0x0042])
cmap.get(0x41)                       # [0x42]
cmap.get_or_replacement_char(0x99)   # [0xFFFD]

stamp = format_pdf_date(datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc))
# "D:20240102030405+00'00'"
parse_pdf_date(stamp)                # datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC)

compute_page_numbers("3,5,7-9")      # [3, 5, 7, 8, 9]
complement_page_numbers([2], 4)      # [1, 3, 4]

decode_frame(bytes([1, 1, 1, 1]), 1, 3)   # b"\x01\x02\x03" (Sub filter)
```

## What it does not do

The package has no document model. It cannot read or write PDF files, walk
a page tree, build outlines or bookmarks, or make incremental updates. It
also does not decode text through font encodings. Apart from a ToUnicode
CMap lookup, it provides no text decoding. It has no command-line tool.

## Running the tests

```
pip install -e .[test]
pytest
```