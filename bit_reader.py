from bitarray import bitarray


class BitReader:
    """
    Class for reading bits from a compressed buffer,
    most significant bit of every byte first.
    """

    def __init__(self, data: bytes = b""):
        """
        Initializes BitReader with the whole buffer as a bitarray.
        :param data: compressed bytes
        """
        self.bits = bitarray(endian="big")
        self.bits.frombytes(bytes(data))
        self.pos = 0  # current position in the bit stream

    def read_bit(self) -> int:
        """
        Reads one bit and returns it as 0 or 1.
        """
        if self.pos >= len(self.bits):
            raise EOFError("Bit stream length exceeded")
        val = self.bits[self.pos]
        self.pos += 1
        return val

    def peek_matches(self, pattern: bitarray) -> bool:
        """
        Checks whether the unread bits start with pattern,
        without moving the position.
        """
        end = self.pos + len(pattern)
        return end <= len(self.bits) and self.bits[self.pos:end] == pattern

    def rest_is_padding(self, start: int = None, max_bits: int = 7) -> bool:
        """
        Checks whether the bits from start (current position by default)
        to the end are zero byte padding, i.e. at most max_bits zeros.
        """
        if start is None:
            start = self.pos
        if len(self.bits) - start > max_bits:
            return False
        return not self.bits[start:].any()
