import pytest

from pdfgraph.cmap_parser import (
    BfCharSection,
    BfRangeSection,
    CMapSyntaxError,
    CsRangeSection,
    bf_char_section,
    bf_range_line,
    bf_range_section,
    cid_system_info,
    cmap_name,
    cmap_type,
    code_range_pair,
    codespace_range_section,
    parse_cmap_stream,
    source_code,
)

CMAP_PROLOGUE = "/CIDInit /ProcSet findresource begin\n12 dict begin\nbegincmap\n"
CMAP_EPILOGUE = "endcmap\nCMapName currentdict /CMap defineresource pop\n"


def _identity_block(count, first_high):
    lines = []
    for high in range(first_high, first_high + count):
        ending = "\r\n" if high == 0xFB else "\n"
        lines.append(f"<{high:02X}00> <{high:02X}FF> <{high:02X}00>{ending}")
    return f"{count} beginbfrange\n" + "".join(lines) + "endbfrange\n"


SECTION_1 = (
    CMAP_PROLOGUE
    + "/CIDSystemInfo <<\n/Registry (Adobe)\n/Ordering (UCS)\n/Supplement 0\n>> def\n"
    + "/CMapName /Adobe-Identity-UCS def\n"
    + "/CMapType 2 def\n"
    + "1 begincodespacerange\n<0000> <FFFF>\nendcodespacerange\n"
    + _identity_block(96, 0x00)
    + _identity_block(96, 0x60)
    + _identity_block(64, 0xC0)
    + CMAP_EPILOGUE
    + "end\nend"
)

SECTION_2_CODES = [
    0x20, 0x28, 0x29, *range(0x2B, 0x3B), 0x3D, *range(0x41, 0x51),
    *range(0x52, 0x59), 0x5A, 0x5C, *range(0x61, 0x71), *range(0x72, 0x7B),
    0x7C, 0xA3, 0xD6, 0xDF, 0xE4, 0xF6, 0xFC, 0x2019,
]

SECTION_2 = (
    CMAP_PROLOGUE
    + "/CMapType 2 def\n/CMapName/R27 def\n"
    + "1 begincodespacerange\n<0000><ffff>\nendcodespacerange\n"
    + "78 beginbfrange\n"
    + "".join(f"<{c:04x}><{c:04x}><{c:04x}>\n" for c in SECTION_2_CODES)
    + "endbfrange\n"
    + CMAP_EPILOGUE
    + "end end\n"
)


def test_parse_source_code():
    assert source_code("<080F>") == 0x080F


def test_parse_invalid_source_code():
    with pytest.raises(CMapSyntaxError) as info:
        source_code("<080f01>")
    assert info.value.offset == 5


def test_parse_code_range_pair():
    assert code_range_pair("<080F> <08FF> ") == (0x080F, 0x08FF)


def test_parse_bfrange_line():
    assert bf_range_line("<080f> <08ff> <09000110>\n") == (
        (0x080F, 0x08FF),
        [[0x0900, 0x0110]],
    )


def test_parse_bfrange_line_array():
    assert bf_range_line("<080f> <08ff> [ <09000110> <08fe> ] \n") == (
        (0x080F, 0x08FF),
        [[0x0900, 0x0110], [0x08FE]],
    )


def test_parse_invalid_bfrange_line():
    with pytest.raises(CMapSyntaxError):
        bf_range_line("<080f> <08ff> [ <09000110> <08FF> <09fe80> ]\n")


def test_parse_codespace_range_section():
    data = "1 begincodespacerange\n<0000> <FFFF> \nendcodespacerange\n"
    assert codespace_range_section(data) == [(0x0000, 0xFFFF)]


def test_parse_bf_range_section():
    data = (
        "3 beginbfrange \n"
        "<0000> <000f> <0000>\n"
        "<0010> <001f> <00000010> \n"
        "<0020>  <002f> [<0000> <00000010> ]\n"
        "endbfrange\n"
    )
    assert bf_range_section(data) == [
        ((0x0000, 0x000F), [[0x0000]]),
        ((0x0010, 0x001F), [[0x0000, 0x0010]]),
        ((0x0020, 0x002F), [[0x0000], [0x0000, 0x0010]]),
    ]


def test_parse_bf_char_section():
    data = "2 beginbfchar\n<0003> <0020>\n<0004> <00410042> \nendbfchar\n"
    assert bf_char_section(data) == [(0x0003, [0x0020]), (0x0004, [0x0041, 0x0042])]


def test_parse_cid_system_info():
    data = "/CIDSystemInfo <<\n/Registry (Adobe)\n/Ordering (UCS)\n/Supplement 0\n>> def\n"
    assert cid_system_info(data) == {
        "Registry": b"Adobe",
        "Ordering": b"UCS",
        "Supplement": 0,
    }


def test_parse_cmap_name():
    assert cmap_name("/CMapName /Adobe-Identity-UCS def\n") == "Adobe-Identity-UCS"


def test_parse_cmap_name_without_space():
    assert cmap_name("/CMapName/R27 def\n") == "R27"


def test_parse_cmap_type():
    assert cmap_type("/CMapType 2 def\n") == 2


def test_cmap_type_other_than_two_is_rejected():
    with pytest.raises(CMapSyntaxError):
        cmap_type("/CMapType 1 def\n")


def test_parse_cmap_section_1():
    sections = parse_cmap_stream(SECTION_1)
    assert sections[0] == CsRangeSection([(0x0000, 0xFFFF)])
    assert [len(s.mappings) for s in sections[1:]] == [96, 96, 64]
    assert all(isinstance(s, BfRangeSection) for s in sections[1:])
    assert sections[1].mappings[0] == ((0x0000, 0x00FF), [[0x0000]])
    assert sections[3].mappings[-1] == ((0xFF00, 0xFFFF), [[0xFF00]])


def test_parse_cmap_section_2():
    assert parse_cmap_stream(SECTION_2) == [
        CsRangeSection([(0x0000, 0xFFFF)]),
        BfRangeSection([((c, c), [[c]]) for c in SECTION_2_CODES]),
    ]


def test_cmap_stream_with_bfchar_section():
    data = (
        CMAP_PROLOGUE
        + "/CMapType 2 def\n"
        + "1 beginbfchar\n<0001> <0041>\nendbfchar\n"
        + CMAP_EPILOGUE
        + "end end"
    )
    assert parse_cmap_stream(data) == [BfCharSection([(0x0001, [0x0041])])]


def test_cmap_stream_rejects_more_than_three_header_lines():
    data = (
        CMAP_PROLOGUE
        + "/CMapType 2 def\n" * 4
        + "1 beginbfchar\n<0001> <0041>\nendbfchar\n"
        + CMAP_EPILOGUE
        + "end end"
    )
    with pytest.raises(CMapSyntaxError):
        parse_cmap_stream(data)


def test_cmap_stream_requires_a_section():
    data = CMAP_PROLOGUE + "/CMapType 2 def\n" + CMAP_EPILOGUE + "end end"
    with pytest.raises(CMapSyntaxError):
        parse_cmap_stream(data)


def test_target_string_allows_255_units():
    target = "0041" * 255
    pair, targets = bf_range_line(f"<0000> <0000> <{target}>\n")
    assert pair == (0, 0)
    assert len(targets[0]) == 255


def test_target_string_rejects_256_units():
    target = "0041" * 256
    with pytest.raises(CMapSyntaxError):
        bf_range_line(f"<0000> <0000> <{target}>\n")


def test_bytes_and_str_inputs_agree():
    data = "<080f> <08ff> [ <09000110> <08fe> ] \n"
    assert bf_range_line(data.encode("ascii")) == bf_range_line(data)


def test_error_message_mentions_offset():
    with pytest.raises(CMapSyntaxError) as info:
        source_code("080F")
    assert info.value.offset == 0
    assert "at byte 0" in str(info.value)