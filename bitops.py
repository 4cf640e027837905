from typing import Sequence

SYMBOL_BITS = 5  #: Payload bits carried by one symbol
GROUP_BYTES = 5  #: Bytes in one 40-bit group
GROUP_SYMBOLS = 8  #: Symbols in one 40-bit group
GROUP_BITS = GROUP_BYTES * 8


class QuintetReader:
    """Reads consecutive 5-bit values from a byte sequence, MSB first.

    A value may straddle two bytes; bits past the end of ``data`` read
    as zero.

    :ivar data: Source bytes.
    :type data: bytes
    :ivar pos: Index of the byte holding the next unread bit.
    :type pos: int
    :ivar offset: Bit offset (0-7, from the MSB) inside ``data[pos]``.
    :type offset: int
    """

    def __init__(self, data: bytes):
        """Create a reader positioned at the first bit of ``data``.

        :param data: Source data to read from.
        :type data: bytes
        :returns: None
        :rtype: None
        """
        self.data = data
        self.pos = 0
        self.offset = 0

    @property
    def exhausted(self) -> bool:
        """``True`` once every source byte has been fully consumed."""
        return self.pos >= len(self.data)

    def _byte(self, index: int) -> int:
        if index < len(self.data):
            return self.data[index]
        return 0

    def read_quintet(self) -> int:
        """Read the next 5 bits and return them as an integer.

        :returns: Value in ``0..31``.
        :rtype: int
        """
        b0 = self._byte(self.pos)
        offset = self.offset
        if offset < 4:
            value = (b0 >> (3 - offset)) & 0x1F
        else:
            b1 = self._byte(self.pos + 1)
            value = ((b0 << (offset - 3)) & 0x1F) | (b1 >> (11 - offset))

        self.offset += SYMBOL_BITS
        if self.offset >= 8:
            self.offset -= 8
            self.pos += 1
        return value


def mask_tail(value: int, cursor: int, bits: int) -> int:
    """Zero the low bits of ``value`` that lie at or beyond bit ``bits``.

    :param value: 5-bit value read at bit position ``cursor``.
    :type value: int
    :param cursor: Bit position of the MSB of ``value``.
    :type cursor: int
    :param bits: Number of significant bits in the whole stream.
    :type bits: int
    :returns: ``value`` with the out-of-range bits cleared.
    :rtype: int
    """
    excess = cursor + SYMBOL_BITS - bits
    if excess <= 0:
        return value
    return value & (0xFF << excess) & 0x1F


def join_quintets(values: Sequence[int]) -> bytes:
    """Reassemble one 40-bit group from eight 5-bit values.

    This is the exact inverse of walking a :class:`QuintetReader` over
    five bytes. Missing trailing values must be passed as zero.

    :param values: Exactly eight values in ``0..31``.
    :type values: Sequence[int]
    :returns: The five bytes of the group.
    :rtype: bytes
    """
    v0, v1, v2, v3, v4, v5, v6, v7 = values
    return bytes((
        (v0 << 3 | v1 >> 2) & 0xFF,
        (v1 << 6 | v2 << 1 | v3 >> 4) & 0xFF,
        (v3 << 4 | v4 >> 1) & 0xFF,
        (v4 << 7 | v5 << 2 | v6 >> 3) & 0xFF,
        (v6 << 5 | v7) & 0xFF,
    ))
