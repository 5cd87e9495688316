from bitarray import bitarray


class BitWriter:
    """
    Simple bit writer on top of bitarray with byte alignment.
    Bits are packed most significant bit first.
    """

    def __init__(self):
        self.bits = bitarray(endian="big")  # endian='big' matters for tobytes()

    def write_bitarray(self, bits: bitarray):
        """
        Appends already prepared bits, e.g. a cached table code.
        """
        self.bits.extend(bits)

    def byte_boundary_offset(self) -> int:
        """
        Number of bits written into the last, unfinished byte.
        """
        return len(self.bits) % 8

    def byte_align(self):
        """
        Pads the low-order bits of the last byte with zeros.
        """
        while self.byte_boundary_offset() != 0:
            self.bits.append(0)

    def tobytes(self) -> bytes:
        """
        Returns the written bits as bytes, zero-padded to a whole byte.
        """
        return self.bits.tobytes()
