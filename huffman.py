"""
Fixed-table Huffman coding -
compression of bytes with a predefined code table
"""

from typing import Iterable, Optional

from bitarray import bitarray

from bit_reader import BitReader
from bit_writer import BitWriter
from compressor_ABC import Compressor
from decode_tree import DecodeTree, Walk
from huffman_errors import DecodingError, EncodingError, EncodingOverflow
from huffman_table import MAX_CODE_BITS, HuffmanTable, TerminalCode


class Huffman(Compressor):
    """
    Codec packing every byte into its table code, MSB first.
    The table and the decode tree are read-only after construction,
    every call works on its own writer or reader.
    """

    def __init__(
        self,
        table: HuffmanTable,
        terminal_code: Optional[TerminalCode] = None,
        validate: bool = False,
    ):
        """
        :param table: code for every byte value
        :param terminal_code: pattern written after the last code, if any
        :param validate: check the table for overlapping prefixes
                         and a colliding termination code
        """
        if validate:
            table.validate(terminal_code)
        self.table = table
        self.terminal_code = terminal_code
        self._codes = [
            table.code_bits(byte) if table.get_compressed_value_bit_count(byte) > 0 else None
            for byte in range(256)
        ]
        self._terminal_bits = (
            terminal_code.bits()
            if terminal_code is not None and terminal_code.bit_count > 0
            else None
        )
        self.tree = DecodeTree(table, terminal_code)

    def _code_for(self, byte: int) -> bitarray:
        """
        Returns the cached code of byte.

        :raises EncodingOverflow: if the code is wider than MAX_CODE_BITS
        :raises EncodingError: if the byte has no code
        """
        bit_count = self.table.get_compressed_value_bit_count(byte)
        if bit_count > MAX_CODE_BITS:
            raise EncodingOverflow(
                f"Code of byte 0x{byte:02X} has {bit_count} bits, "
                f"at most {MAX_CODE_BITS} are supported"
            )
        code = self._codes[byte]
        if code is None:
            raise EncodingError(f"Byte 0x{byte:02X} has no code in the table")
        return code

    def compress(self, src: Iterable[int], output: bytearray) -> None:
        """
        Compresses src and appends the packed bytes to output.
        Existing contents of output are left as they are, nothing
        is appended if a byte cannot be encoded.

        :param src: bytes to compress
        :param output: buffer the compressed bytes are appended to
        """
        if self._terminal_bits is not None and len(self._terminal_bits) > MAX_CODE_BITS:
            raise EncodingOverflow(
                f"Termination code has {len(self._terminal_bits)} bits, "
                f"at most {MAX_CODE_BITS} are supported"
            )

        writer = BitWriter()
        for byte in src:
            writer.write_bitarray(self._code_for(byte))

        if self._terminal_bits is not None:
            writer.write_bitarray(self._terminal_bits)

        writer.byte_align()
        output.extend(writer.tobytes())

    def compress_to_bytes(self, src: Iterable[int]) -> bytes:
        """
        Compresses src into a new bytes object.

        :param src: bytes to compress
        :return: compressed bytes
        """
        output = bytearray()
        self.compress(src, output)
        return bytes(output)

    def _at_terminal(self, reader: BitReader) -> bool:
        # the rest of the stream is the termination code plus byte padding
        return reader.peek_matches(self._terminal_bits) and reader.rest_is_padding(
            reader.pos + len(self._terminal_bits)
        )

    def decompress(self, data: bytes) -> bytes:
        """
        Decodes data symbol by symbol until the termination code,
        the end of the input or the trailing zero padding.

        :param data: bytes produced by compress()
        :return: decompressed bytes
        """
        reader = BitReader(data)
        result = bytearray()

        while True:
            start = reader.pos
            if self._terminal_bits is not None and self._at_terminal(reader):
                break

            outcome, byte = self.tree.walk(reader)
            if outcome is Walk.SYMBOL:
                result.append(byte)
                continue
            if outcome is Walk.INVALID and not reader.rest_is_padding(start):
                raise DecodingError(f"Invalid code starting at bit {start}")
            # terminal code, end of input or padding
            break

        return bytes(result)
