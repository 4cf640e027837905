from typing import List, Optional, Union

from alphabet import Alphabet, INVALID, LWR_ALPHABET, STD_ALPHABET
from bitops import (
    GROUP_BITS,
    GROUP_BYTES,
    GROUP_SYMBOLS,
    SYMBOL_BITS,
    QuintetReader,
    join_quintets,
    mask_tail,
)

BytesLike = Union[bytes, bytearray, memoryview]
EncodedText = Union[str, bytes, bytearray, memoryview]

#: Whole bytes recovered from a final group of ``n`` symbols (byte-aligned).
DECODED_BYTES = (0, 1, 1, 2, 2, 3, 4, 4, 5)


class CorruptInputError(ValueError):
    """Raised when a decode meets a symbol outside the alphabet.

    :ivar offset: 0-based index of the offending symbol in the input.
        :class:`streams.StreamDecoder` counts it from the start of the
        stream instead.
    :type offset: int
    :ivar decoded: Bytes produced from the groups before the failure.
    :type decoded: bytes
    """

    def __init__(self, offset: int, decoded: bytes = b""):
        super().__init__(f"illegal zrock32 data at input byte {offset}")
        self.offset = offset
        self.decoded = decoded


def encoded_len(n: int) -> int:
    """Return the symbol count needed to encode ``n`` bytes.

    Whole groups are counted, so this is an upper bound for lengths that
    are not a multiple of 5.
    """
    return (n + GROUP_BYTES - 1) // GROUP_BYTES * GROUP_SYMBOLS


def decoded_len(n: int) -> int:
    """Return the most bytes ``n`` symbols can decode to."""
    return (n + GROUP_SYMBOLS - 1) // GROUP_SYMBOLS * GROUP_BYTES


def _as_bytes(data: BytesLike) -> bytes:
    if isinstance(data, (bytes, bytearray)):
        return data
    return memoryview(data).tobytes()


def _symbol_codes(text: EncodedText):
    """Return the raw codes of ``text`` as an indexable int sequence."""
    if isinstance(text, str):
        if text.isascii():
            return text.encode("ascii")
        return [ord(ch) for ch in text]
    return _as_bytes(text)


class Encoding:
    """Encoding handle: an alphabet plus every codec operation.

    Handles hold no mutable state, so one instance may be shared freely.

    :ivar alphabet: Symbol table and decode table used by this handle.
    :type alphabet: Alphabet
    """

    def __init__(self, alphabet: Union[Alphabet, str]):
        """Create a handle for ``alphabet``.

        :param alphabet: An :class:`Alphabet` or its 32 symbols.
        :type alphabet: Union[Alphabet, str]
        :returns: None
        :rtype: None
        """
        if not isinstance(alphabet, Alphabet):
            alphabet = Alphabet(alphabet)
        self.alphabet = alphabet

    encoded_len = staticmethod(encoded_len)
    decoded_len = staticmethod(decoded_len)

    def encode(self, data: BytesLike) -> str:
        """Encode ``data`` into symbols, one per 5 bits.

        The final symbol is zero-padded when ``len(data) * 8`` is not a
        multiple of 5.

        :param data: Bytes to encode.
        :type data: BytesLike
        :returns: Encoded text.
        :rtype: str
        """
        return self._encode(_as_bytes(data), None)

    def encode_bits(self, data: BytesLike, bits: int) -> str:
        """Encode exactly the first ``bits`` bits of ``data``.

        Bits of the last symbol beyond ``bits`` are cleared, so whatever
        follows the field in ``data`` never leaks into the output. Bits
        past the end of ``data`` read as zero.

        :param data: Bytes holding the bit field, MSB first.
        :type data: BytesLike
        :param bits: Number of significant bits.
        :type bits: int
        :returns: Encoded text of ``ceil(bits / 5)`` symbols.
        :rtype: str
        :raises ValueError: If ``bits`` is negative.
        """
        if bits < 0:
            raise ValueError("cannot encode a negative bit count")
        return self._encode(_as_bytes(data), bits)

    def decode(self, text: EncodedText) -> bytes:
        """Decode ``text`` produced by :meth:`encode`.

        :param text: Encoded symbols.
        :type text: EncodedText
        :returns: Decoded bytes.
        :rtype: bytes
        :raises CorruptInputError: If a symbol is not in the alphabet.
        """
        return self._decode(_symbol_codes(text), None)

    def decode_bits(self, text: EncodedText, bits: int) -> bytes:
        """Decode a ``bits``-bit field produced by :meth:`encode_bits`.

        The symbol count of the last group is ignored; the output holds
        ``ceil(bits / 8)`` bytes as long as ``text`` covers ``bits``.

        :param text: Encoded symbols.
        :type text: EncodedText
        :param bits: Number of significant bits.
        :type bits: int
        :returns: Decoded bytes; unused low bits of the last byte are zero.
        :rtype: bytes
        :raises ValueError: If ``bits`` is negative.
        :raises CorruptInputError: If a symbol is not in the alphabet.
        """
        if bits < 0:
            raise ValueError("cannot decode a negative bit count")
        return self._decode(_symbol_codes(text), bits)

    def _encode(self, data: bytes, bits: Optional[int]) -> str:
        reader = QuintetReader(data)
        symbol = self.alphabet.symbol
        out: List[str] = []
        if bits is None:
            while not reader.exhausted:
                out.append(symbol(reader.read_quintet()))
        else:
            for cursor in range(0, bits, SYMBOL_BITS):
                value = mask_tail(reader.read_quintet(), cursor, bits)
                out.append(symbol(value))
        return "".join(out)

    def _decode(self, codes, bits: Optional[int]) -> bytes:
        lookup = self.alphabet.value
        out = bytearray()
        for start in range(0, len(codes), GROUP_SYMBOLS):
            group = codes[start:start + GROUP_SYMBOLS]
            values = [0] * GROUP_SYMBOLS
            for j, code in enumerate(group):
                value = lookup(code)
                if value == INVALID:
                    raise CorruptInputError(start + j, bytes(out))
                values[j] = value

            chunk = join_quintets(values)
            if bits is None:
                out += chunk[:DECODED_BYTES[len(group)]]
                continue
            block_bits = max(0, min(bits, GROUP_BITS))
            out += chunk[:(block_bits + 7) // 8]
            bits -= GROUP_BITS
        return bytes(out)

    def __repr__(self) -> str:
        return f"Encoding({self.alphabet.symbols!r})"


STD_ENCODING = Encoding(STD_ALPHABET)
LWR_ENCODING = Encoding(LWR_ALPHABET)
