from codec import STD_ENCODING


class EncodedBytes(bytes):
    """Byte string that renders as, and parses from, standard-case text.

    Meant for command-line options and config values holding binary data,
    e.g. ``parser.add_argument("--key", type=encoded_bytes)``.
    """

    def __str__(self) -> str:
        return STD_ENCODING.encode(self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}.parse({str(self)!r})"

    @classmethod
    def parse(cls, text: str) -> "EncodedBytes":
        """Decode ``text`` with the standard handle.

        :param text: Standard-case encoded text.
        :type text: str
        :returns: The decoded value.
        :rtype: EncodedBytes
        :raises CorruptInputError: If ``text`` holds an invalid symbol.
        """
        return cls(STD_ENCODING.decode(text))

    def get(self) -> bytes:
        """Return the value as plain ``bytes``."""
        return bytes(self)


def encoded_bytes(text: str) -> EncodedBytes:
    """``argparse`` type callable wrapping :meth:`EncodedBytes.parse`."""
    return EncodedBytes.parse(text)
