from typing import Sequence

STD_SYMBOLS = "YBNDRFG8EJKMCPQX0T1VW2SZA345H769"  #: Standard (uppercase) alphabet
LWR_SYMBOLS = "ybndrfg8ejkmcpqx0t1vw2sza345h769"  #: Lowercase alphabet

INVALID = 0xFF  #: Decode table sentinel for bytes outside the alphabet
ALPHABET_SIZE = 32


class Alphabet:
    """A 32-symbol alphabet and its 256-entry decode table.

    The symbol at index ``i`` encodes the 5-bit value ``i``. The decode
    table is indexed by raw byte value and holds either that value or
    :data:`INVALID`. Both are built once here and never change afterwards.

    :ivar symbols: Symbols ordered by the 5-bit value they encode.
    :type symbols: str
    :ivar decode_map: Byte value -> 5-bit value (or ``INVALID``).
    :type decode_map: bytes
    """

    def __init__(self, symbols: Sequence[str]):
        """Build the decode table for ``symbols``.

        No validation is performed: duplicate symbols leave the last index
        in the table, and symbols outside the 8-bit range are never
        decodable. Use :meth:`is_valid` to check a custom alphabet.

        :param symbols: Ordered symbols, normally exactly 32 of them.
        :type symbols: Sequence[str]
        :returns: None
        :rtype: None
        """
        self.symbols = "".join(symbols)
        table = bytearray([INVALID] * 256)
        for index, symbol in enumerate(self.symbols):
            code = ord(symbol)
            if code < len(table) and index < INVALID:
                table[code] = index
        self.decode_map = bytes(table)

    def symbol(self, value: int) -> str:
        """Return the symbol encoding the 5-bit ``value``."""
        return self.symbols[value]

    def value(self, code: int) -> int:
        """Return the 5-bit value for the raw byte/code point ``code``.

        :param code: Byte value or character code point.
        :type code: int
        :returns: Value in ``0..31``, or ``INVALID``.
        :rtype: int
        """
        if 0 <= code < len(self.decode_map):
            return self.decode_map[code]
        return INVALID

    def is_valid(self) -> bool:
        """Check for exactly 32 distinct printable ASCII symbols."""
        return (
            len(self.symbols) == ALPHABET_SIZE
            and len(set(self.symbols)) == ALPHABET_SIZE
            and all(s.isascii() and s.isprintable() for s in self.symbols)
        )

    def __len__(self) -> int:
        return len(self.symbols)

    def __repr__(self) -> str:
        return f"Alphabet({self.symbols!r})"


STD_ALPHABET = Alphabet(STD_SYMBOLS)
LWR_ALPHABET = Alphabet(LWR_SYMBOLS)
