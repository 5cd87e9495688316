"""
Prefix tree used to decode a fixed Huffman table
"""

from enum import Enum
from typing import Optional, Tuple

from bit_reader import BitReader
from huffman_table import HuffmanTable, TerminalCode


class Node:
    """
    Class object for Node in the decode tree
    """

    def __init__(self, value: Optional[int] = None):
        """
        Function initializes the structure of a node.

        :param value: byte held by a leaf, None for inner nodes
        """
        self.left = None
        self.right = None
        self.value = value
        self.is_terminal = False

    def is_leaf(self) -> bool:
        return self.value is not None or self.is_terminal

    def child(self, bit: int) -> Optional["Node"]:
        return self.right if bit else self.left


class Walk(Enum):
    """Outcome of a single descent from the root."""

    SYMBOL = "symbol"
    TERMINAL = "terminal"
    EXHAUSTED = "exhausted"
    INVALID = "invalid"


class DecodeTree:
    """
    Binary trie over the table codes. The path from the root to
    a leaf is the code of the leaf's byte read MSB first,
    0 goes to the left child and 1 to the right one.
    """

    def __init__(self, table: HuffmanTable, terminal_code: TerminalCode = None):
        self.root = Node()
        self.terminal_in_tree = False
        for byte, value, bit_count in table.assigned():
            self._insert(table.code_bits(byte), byte)
        if terminal_code is not None and terminal_code.bit_count > 0:
            self.terminal_in_tree = self._insert(terminal_code.bits(), None, terminal=True)

    def _insert(self, bits, byte: Optional[int], terminal: bool = False) -> bool:
        """
        Walks the code bits creating missing nodes and marks
        the last node as a leaf. A path running into an existing
        leaf is skipped, so the first inserted code wins.

        :return: True if the code was inserted
        """
        node = self.root
        for bit in bits:
            if node.is_leaf():
                return False
            if bit:
                if node.right is None:
                    node.right = Node()
                node = node.right
            else:
                if node.left is None:
                    node.left = Node()
                node = node.left

        if node.is_leaf() or node.left is not None or node.right is not None:
            return False
        if terminal:
            node.is_terminal = True
        else:
            node.value = byte
        return True

    def walk(self, reader: BitReader) -> Tuple[Walk, Optional[int]]:
        """
        Reads bits from reader until a leaf is reached.

        :return: (Walk.SYMBOL, byte) for a byte leaf, otherwise
                 the reason the walk stopped and None
        """
        node = self.root
        while not node.is_leaf():
            try:
                bit = reader.read_bit()
            except EOFError:
                return Walk.EXHAUSTED, None
            node = node.child(bit)
            if node is None:
                return Walk.INVALID, None

        if node.is_terminal:
            return Walk.TERMINAL, None
        return Walk.SYMBOL, node.value

    def depth(self, node: Node = None) -> int:
        if node is None:
            node = self.root
        children = [c for c in (node.left, node.right) if c is not None]
        if not children:
            return 0
        return 1 + max(self.depth(c) for c in children)

    def leaf_count(self, node: Node = None) -> int:
        if node is None:
            node = self.root
        if node.is_leaf():
            return 1
        return sum(self.leaf_count(c) for c in (node.left, node.right) if c is not None)
