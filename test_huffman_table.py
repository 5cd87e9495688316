import json

import pytest

from huffman_errors import ConfigurationError
from huffman_table import MAX_CODE_BITS, HuffmanTable, TerminalCode


@pytest.fixture
def table():
    return HuffmanTable.from_codes(
        {0x00: (0b00, 2), 0x01: (0b11111, 5), 0x40: (0b01010, 5)}
    )


def test_lookup(table):
    assert table.get_compressed_value(0x01) == 0b11111
    assert table.get_compressed_value_bit_count(0x01) == 5
    assert table.lookup(0x40) == (0b01010, 5)
    assert table.lookup(0x41) == (0, 0)


def test_lookup_is_stable(table):
    assert {table.lookup(0x40) for _ in range(10)} == {(0b01010, 5)}


def test_table_is_read_only(table):
    with pytest.raises(TypeError):
        table.values[0] = 1


def test_code_bits(table):
    assert table.code_bits(0x40).to01() == "01010"
    assert table.code_bits(0x00).to01() == "00"
    assert table.code_bits(0x41).to01() == ""


def test_assigned(table):
    assert list(table.assigned()) == [
        (0x00, 0b00, 2),
        (0x01, 0b11111, 5),
        (0x40, 0b01010, 5),
    ]


def test_wrong_size():
    with pytest.raises(ConfigurationError):
        HuffmanTable([0] * 255, [0] * 256)


def test_byte_out_of_range():
    with pytest.raises(ConfigurationError):
        HuffmanTable.from_codes({256: (1, 1)})


def test_from_bit_strings(table):
    assert HuffmanTable.from_bit_strings({0x00: "00", 0x01: "11111", 0x40: "01010"}) == table


def test_validate_accepts_prefix_free_table(table):
    table.validate()
    table.validate(TerminalCode(value=0b011, bit_count=3))


@pytest.mark.parametrize(
    "codes",
    [
        {0x01: "1", 0x02: "10"},
        {0x01: "0110", 0x02: "01"},
        {0x01: "01", 0x02: "01"},
    ],
)
def test_validate_rejects_overlapping_prefixes(codes):
    with pytest.raises(ConfigurationError):
        HuffmanTable.from_bit_strings(codes).validate()


def test_validate_rejects_wide_codes():
    table = HuffmanTable.from_codes({0x01: (1, MAX_CODE_BITS + 1)})
    with pytest.raises(ConfigurationError):
        table.validate()


@pytest.mark.parametrize(
    "terminal",
    [
        TerminalCode(value=0b001, bit_count=3),  # 00 is its prefix
        TerminalCode(value=0b0, bit_count=1),  # prefix of 00 and 01010
        TerminalCode(value=0b0, bit_count=0),
    ],
)
def test_validate_rejects_colliding_terminal(table, terminal):
    with pytest.raises(ConfigurationError):
        table.validate(terminal)


def test_json_round_trip(tmp_path, table):
    path = tmp_path / "table.json"
    terminal = TerminalCode(value=0b011, bit_count=3)
    table.save_json(str(path), terminal)

    loaded, loaded_terminal = HuffmanTable.load_json(str(path))
    assert loaded == table
    assert loaded_terminal == terminal


def test_json_without_terminal(tmp_path, table):
    path = tmp_path / "table.json"
    table.save_json(str(path))
    assert HuffmanTable.load_json(str(path)) == (table, None)


def test_from_dict_sparse_codes(table):
    data = json.loads(
        '{"codes": {"0x00": "00", "1": "11111", "0x40": "01010"},'
        ' "terminal_code": {"value": 3, "bit_count": 3}}'
    )
    loaded, terminal = HuffmanTable.from_dict(data)
    assert loaded == table
    assert terminal == TerminalCode(value=0b011, bit_count=3)


def test_from_dict_missing_field():
    with pytest.raises(ConfigurationError):
        HuffmanTable.from_dict({"values": [0] * 256})


@pytest.mark.parametrize("code", ["12", "", "1 0", "1_0", 101])
def test_from_bit_strings_rejects_bad_codes(code):
    with pytest.raises(ConfigurationError):
        HuffmanTable.from_bit_strings({0x01: code})


@pytest.mark.parametrize(
    "data",
    [
        {"codes": {"1": "12"}},
        {"codes": {"one": "1"}},
        {"codes": {"0x100": "1"}},
        {"codes": ["1"]},
        {"values": [0] * 256, "bit_counts": ["x"] * 256},
        {"codes": {"1": "1"}, "terminal_code": {"bit_count": 3}},
        {"codes": {"1": "1"}, "terminal_code": {"value": "abc", "bit_count": 3}},
        ["values", "bit_counts"],
    ],
)
def test_from_dict_malformed(data):
    with pytest.raises(ConfigurationError):
        HuffmanTable.from_dict(data)


def test_load_json_invalid_json(tmp_path):
    path = tmp_path / "table.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        HuffmanTable.load_json(str(path))
