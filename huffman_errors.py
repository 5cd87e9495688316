"""
Exceptions raised by the fixed-table Huffman codec.
"""


class HuffmanError(ValueError):
    """Base class for codec errors."""


class ConfigurationError(HuffmanError):
    """
    The code table or the termination code is malformed
    (wrong size, overlapping prefixes, colliding termination code).
    """


class EncodingError(HuffmanError):
    """A byte cannot be written with the current table."""


class EncodingOverflow(EncodingError):
    """A code is wider than the bit accumulator allows."""


class DecodingError(HuffmanError):
    """The compressed stream contains a bit sequence missing from the table."""
