import pytest

from pdfgraph.barcode import convert_number_to_bits, generate_barcode, generate_operations


def test_bits_are_least_significant_first():
    bits = convert_number_to_bits(6, 8)
    assert len(bits) == 8
    assert int(bits[::-1].decode("ascii"), 2) == 6
    assert bits[0] == ord("0")


def test_bits_round_trip_for_all_codes():
    for code in range(512):
        bits = convert_number_to_bits(code, 9)
        assert int(bits[::-1].decode("ascii"), 2) == code


def test_bits_too_large_raise():
    with pytest.raises(ValueError):
        convert_number_to_bits(512, 9)


@pytest.mark.parametrize("page, code", [(0, 1), (256, 1), (1, 512)])
def test_out_of_range_inputs_raise(page, code):
    with pytest.raises(ValueError):
        generate_barcode(page, code)


def test_barcode_rects_are_contiguous():
    rects = generate_barcode(3, 300)
    assert len(rects) == 21
    x = 0.0
    for rx, ry, w, h, bit in rects:
        assert rx == pytest.approx(x)
        assert ry == 0.0
        assert h == 10.0
        assert bit in (ord("0"), ord("1"))
        x += w


def test_barcode_layout_carries_page_and_code_bits():
    page, code = 200, 333
    rects = generate_barcode(page, code)
    bits = bytes(r[4] for r in rects)
    assert bits[1:9] == convert_number_to_bits(page, 8)
    code_bits = convert_number_to_bits(code, 9)
    assert bits[9] == code_bits[0]
    assert bits[10] == ord("0")
    assert rects[10][2] == 6.53
    assert bits[11:15] == code_bits[1:5]
    assert bits[15:17] == b"10"
    assert bits[17:21] == code_bits[5:9]


def test_operations_single_white_rect():
    ops = generate_operations([(0.0, 0.0, 9.0, 10.0, ord("0"))])
    assert ops == "1 1 1 rg\n0 0 9 10 re\nf\n"


def test_operations_switch_colour_only_on_change():
    rects = [
        (0.0, 0.0, 9.0, 10.0, ord("1")),
        (9.0, 0.0, 9.0, 10.0, ord("1")),
        (18.0, 0.0, 6.53, 10.0, ord("0")),
    ]
    ops = generate_operations(rects)
    assert ops.count("0 0 0 rg\n") == 1
    assert ops.count("1 1 1 rg\n") == 1
    assert ops.count(" re\nf\n") == 3
    assert "18 0 6.53 10 re\n" in ops


def test_operations_for_full_barcode_have_one_fill_per_rect():
    rects = generate_barcode(1, 0)
    ops = generate_operations(rects)
    assert ops.count("re\nf\n") == len(rects)
    assert ops.startswith("1 1 1 rg\n")