"""
Fixed Huffman code table -
a read-only mapping from every byte value to
its compressed bit pattern and bit count
"""

import json
from dataclasses import dataclass
from typing import Dict, Iterator, Optional, Sequence, Tuple

from bitarray import bitarray
from bitarray.util import int2ba

from huffman_errors import ConfigurationError

TABLE_SIZE = 256
# width of the bit accumulator the codes were designed for
MAX_CODE_BITS = 32


def value_to_bits(value: int, bit_count: int) -> bitarray:
    """
    Returns the low bit_count bits of value as a bitarray,
    most significant bit first. Higher bits of value are ignored.
    """
    if bit_count <= 0:
        return bitarray(endian="big")
    return int2ba(value & ((1 << bit_count) - 1), length=bit_count, endian="big")


@dataclass(frozen=True)
class TerminalCode:
    """
    Bit pattern appended after the last compressed byte so that
    the decoder can tell real data from zero padding.
    """

    value: int
    bit_count: int

    def bits(self) -> bitarray:
        return value_to_bits(self.value, self.bit_count)

    def to_dict(self) -> dict:
        return {"value": self.value, "bit_count": self.bit_count}

    @classmethod
    def from_dict(cls, data: dict) -> "TerminalCode":
        return cls(value=int(data["value"]), bit_count=int(data["bit_count"]))


class HuffmanTable:
    """
    Class object for the code table used by the Huffman codec.
    The index in both arrays is the uncompressed byte, e.g.
    byte 0x01 -> values[1] = 0b11111, bit_counts[1] = 5.
    """

    def __init__(self, values: Sequence[int], bit_counts: Sequence[int]):
        """
        Function initializes the table from two parallel arrays.
        Only the size is checked here, prefixes are checked by validate().

        :param values: compressed values, right-aligned
        :param bit_counts: number of significant bits of each value
        """
        if len(values) != TABLE_SIZE or len(bit_counts) != TABLE_SIZE:
            raise ConfigurationError(
                f"Code table must have {TABLE_SIZE} entries, "
                f"got {len(values)} values and {len(bit_counts)} bit counts"
            )
        self._values = tuple(int(v) for v in values)
        self._bit_counts = tuple(int(c) for c in bit_counts)

    @property
    def values(self) -> Tuple[int, ...]:
        return self._values

    @property
    def bit_counts(self) -> Tuple[int, ...]:
        return self._bit_counts

    def get_compressed_value(self, uncompressed_byte: int) -> int:
        return self._values[uncompressed_byte]

    def get_compressed_value_bit_count(self, uncompressed_byte: int) -> int:
        return self._bit_counts[uncompressed_byte]

    def lookup(self, uncompressed_byte: int) -> Tuple[int, int]:
        return self._values[uncompressed_byte], self._bit_counts[uncompressed_byte]

    def code_bits(self, uncompressed_byte: int) -> bitarray:
        return value_to_bits(*self.lookup(uncompressed_byte))

    def assigned(self) -> Iterator[Tuple[int, int, int]]:
        """
        Yields (byte, value, bit_count) for every byte that has a code.
        """
        for byte, (value, bit_count) in enumerate(zip(self._values, self._bit_counts)):
            if bit_count > 0:
                yield byte, value, bit_count

    def __eq__(self, other) -> bool:
        if not isinstance(other, HuffmanTable):
            return NotImplemented
        return self._values == other._values and self._bit_counts == other._bit_counts

    def __hash__(self) -> int:
        return hash((self._values, self._bit_counts))

    def __repr__(self) -> str:
        return f"HuffmanTable({sum(1 for _ in self.assigned())} assigned codes)"

    @classmethod
    def from_codes(cls, codes: Dict[int, Tuple[int, int]]) -> "HuffmanTable":
        """
        Builds a table from a sparse {byte: (value, bit_count)} mapping.
        Bytes missing from the mapping get no code.
        """
        values = [0] * TABLE_SIZE
        bit_counts = [0] * TABLE_SIZE
        for byte, (value, bit_count) in codes.items():
            if not 0 <= byte < TABLE_SIZE:
                raise ConfigurationError(f"Byte value {byte} is out of range")
            values[byte] = value
            bit_counts[byte] = bit_count
        return cls(values, bit_counts)

    @classmethod
    def from_bit_strings(cls, codes: Dict[int, str]) -> "HuffmanTable":
        """
        Builds a table from a sparse {byte: "0101"} mapping.
        """
        for byte, code in codes.items():
            if not isinstance(code, str) or not code or set(code) - {"0", "1"}:
                raise ConfigurationError(
                    f"Code {code!r} of byte {byte} is not a string of 0s and 1s"
                )
        return cls.from_codes(
            {byte: (int(code, 2), len(code)) for byte, code in codes.items()}
        )

    def validate(self, terminal_code: Optional[TerminalCode] = None):
        """
        Checks that every bit count fits the accumulator, that no code
        is a prefix of another one and that the termination code
        collides with none of them.

        :raises ConfigurationError: on the first problem found
        """
        for byte, bit_count in enumerate(self._bit_counts):
            if not 0 <= bit_count <= MAX_CODE_BITS:
                raise ConfigurationError(
                    f"Byte 0x{byte:02X} has bit count {bit_count}, "
                    f"expected 0..{MAX_CODE_BITS}"
                )

        codes = sorted(
            (value_to_bits(value, bit_count).to01(), byte)
            for byte, value, bit_count in self.assigned()
        )
        # after sorting, a prefix always sits right before one of its extensions
        for (code, byte), (next_code, next_byte) in zip(codes, codes[1:]):
            if next_code.startswith(code):
                raise ConfigurationError(
                    f"Code {code} of byte 0x{byte:02X} is a prefix of "
                    f"code {next_code} of byte 0x{next_byte:02X}"
                )

        if terminal_code is None:
            return
        if not 0 < terminal_code.bit_count <= MAX_CODE_BITS:
            raise ConfigurationError(
                f"Termination code has bit count {terminal_code.bit_count}, "
                f"expected 1..{MAX_CODE_BITS}"
            )
        terminal = terminal_code.bits().to01()
        for code, byte in codes:
            if code.startswith(terminal) or terminal.startswith(code):
                raise ConfigurationError(
                    f"Termination code {terminal} collides with "
                    f"code {code} of byte 0x{byte:02X}"
                )

    def to_dict(self, terminal_code: Optional[TerminalCode] = None) -> dict:
        return {
            "values": list(self._values),
            "bit_counts": list(self._bit_counts),
            "terminal_code": terminal_code.to_dict() if terminal_code else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Tuple["HuffmanTable", Optional[TerminalCode]]:
        """
        Reads a table either from full "values"/"bit_counts" arrays
        or from a sparse "codes" dictionary of bit strings
        keyed by byte value (decimal or 0x-prefixed).
        """
        try:
            if "codes" in data:
                table = cls.from_bit_strings(
                    {int(byte, 0): code for byte, code in data["codes"].items()}
                )
            else:
                table = cls(data["values"], data["bit_counts"])

            terminal = data.get("terminal_code")
            terminal_code = TerminalCode.from_dict(terminal) if terminal else None
        except ConfigurationError:
            raise
        except KeyError as e:
            raise ConfigurationError(f"Table description is missing {e}") from e
        except (AttributeError, TypeError, ValueError) as e:
            raise ConfigurationError(f"Malformed table description: {e}") from e

        return table, terminal_code

    def save_json(self, path: str, terminal_code: Optional[TerminalCode] = None):
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(terminal_code), f)

    @classmethod
    def load_json(cls, path: str) -> Tuple["HuffmanTable", Optional[TerminalCode]]:
        with open(path, "r", encoding="utf-8") as f:
            try:
                data = json.load(f)
            except ValueError as e:
                raise ConfigurationError(f"Table file {path} is not valid JSON: {e}") from e
        return cls.from_dict(data)
