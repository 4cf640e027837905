from typing import BinaryIO, Optional

from bitops import GROUP_BYTES, GROUP_SYMBOLS
from codec import BytesLike, CorruptInputError, Encoding


class StreamEncoder:
    """Incremental encoder writing symbols to a binary sink.

    Input is encoded in whole 5-byte groups; a shorter remainder (the
    fringe) is held until more data arrives or the encoder is closed.
    The sink only ever receives whole groups, at most ``OUTPUT_SIZE``
    symbols per ``write`` call.

    Once a sink write fails the encoder is poisoned: that same exception
    is raised again by every later :meth:`write` or :meth:`close` and the
    sink is not touched again.

    :ivar OUTPUT_SIZE: Maximum symbols handed to the sink per write.
    :type OUTPUT_SIZE: int
    :ivar encoding: Encoding handle used for every group.
    :type encoding: Encoding
    :ivar sink: Destination with a ``write(bytes)`` method.
    :type sink: BinaryIO
    :ivar fringe: Pending bytes (fewer than 5) not yet encoded.
    :type fringe: bytearray
    :ivar error: First exception raised by the sink, if any.
    :type error: Optional[BaseException]
    """

    OUTPUT_SIZE = 1024

    def __init__(self, encoding: Encoding, sink: BinaryIO):
        """Create an encoder with an empty fringe.

        :param encoding: Encoding handle to encode with.
        :type encoding: Encoding
        :param sink: Binary writer receiving the encoded symbols.
        :type sink: BinaryIO
        :returns: None
        :rtype: None
        """
        self.encoding = encoding
        self.sink = sink
        self.fringe = bytearray()
        self.error: Optional[BaseException] = None
        self.closed = False

    def write(self, data: BytesLike) -> int:
        """Encode ``data`` and forward every complete group to the sink.

        :param data: Bytes to encode.
        :type data: BytesLike
        :returns: Number of bytes accepted (always ``len(data)``).
        :rtype: int
        :raises ValueError: If the encoder was already closed.
        """
        if self.error is not None:
            raise self.error
        if self.closed:
            raise ValueError("write to closed encoder")

        view = memoryview(data).cast("B")
        n = 0

        if self.fringe:
            take = min(GROUP_BYTES - len(self.fringe), len(view))
            self.fringe += view[:take]
            n += take
            view = view[take:]
            if len(self.fringe) < GROUP_BYTES:
                return n
            self._emit(self.encoding.encode(self.fringe))
            self.fringe.clear()

        chunk_size = self.OUTPUT_SIZE // GROUP_SYMBOLS * GROUP_BYTES
        while len(view) >= GROUP_BYTES:
            size = min(chunk_size, len(view) - len(view) % GROUP_BYTES)
            self._emit(self.encoding.encode(view[:size]))
            n += size
            view = view[size:]

        self.fringe += view
        n += len(view)
        return n

    def close(self) -> None:
        """Encode and flush the fringe, then mark the encoder closed.

        Calling it again is a no-op, apart from re-raising a stored sink
        error.
        """
        if self.error is None and self.fringe:
            bits = len(self.fringe) * 8
            self._emit(self.encoding.encode_bits(self.fringe, bits))
            self.fringe.clear()
        self.closed = True
        if self.error is not None:
            raise self.error

    def _emit(self, text: str) -> None:
        """Write ``text`` to the sink, remembering the first failure.

        :param text: Encoded symbols for one or more whole groups.
        :type text: str
        :returns: None
        :rtype: None
        """
        try:
            self.sink.write(text.encode("ascii"))
        except Exception as exc:
            self.error = exc
            raise

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


class StreamDecoder:
    """Incremental decoder reading symbols from a binary source.

    Symbols are pulled ``CHUNK_SIZE`` at a time and decoded into an
    internal buffer that :meth:`read` serves from. Symbols of a trailing
    partial group are kept back until the rest of the group arrives or
    the source is exhausted, so short reads from the source do not change
    the output.

    Corruption offsets are counted from the start of the stream. After
    any error the decoder stays failed and re-raises it.

    :ivar CHUNK_SIZE: Symbols requested from the source per pull.
    :type CHUNK_SIZE: int
    :ivar encoding: Encoding handle used for every chunk.
    :type encoding: Encoding
    :ivar source: Object with a ``read(size)`` method returning bytes,
        ``b""`` at end of stream, or ``None`` when no data is ready.
    :type source: BinaryIO
    :ivar buffer: Decoded bytes not yet returned to the caller.
    :type buffer: bytearray
    :ivar eof: Whether the source has reported end of stream.
    :type eof: bool
    """

    CHUNK_SIZE = 640

    def __init__(self, encoding: Encoding, source: BinaryIO):
        """Create a decoder that has not yet pulled from ``source``.

        :param encoding: Encoding handle to decode with.
        :type encoding: Encoding
        :param source: Binary reader supplying encoded symbols.
        :type source: BinaryIO
        :returns: None
        :rtype: None
        """
        self.encoding = encoding
        self.source = source
        self.buffer = bytearray()
        self.pending = b""
        self.consumed = 0
        self.eof = False
        self.error: Optional[BaseException] = None

    @property
    def exhausted(self) -> bool:
        """``True`` once the source is drained and nothing is buffered."""
        return self.eof and not self.buffer

    def read(self, size: Optional[int] = -1) -> Optional[bytes]:
        """Return up to ``size`` decoded bytes.

        :param size: Maximum bytes to return; negative or ``None`` reads
            until the end of the stream.
        :type size: Optional[int]
        :returns: Decoded bytes, ``b""`` at end of stream, or ``None`` if
            the source had no data ready.
        :rtype: Optional[bytes]
        :raises CorruptInputError: If the source holds an invalid symbol.
        """
        if size is None or size < 0:
            return self.readall()
        if size == 0:
            return b""
        if not self._fill():
            return None
        out = bytes(self.buffer[:size])
        del self.buffer[:size]
        return out

    def readall(self) -> Optional[bytes]:
        """Read and decode everything up to the end of the stream."""
        out = bytearray()
        while True:
            if not self._fill():
                return bytes(out) if out else None
            if not self.buffer:
                return bytes(out)
            out += self.buffer
            self.buffer.clear()

    def _fill(self) -> bool:
        """Pull from the source until something is buffered or it ends.

        :returns: ``False`` if the source had no data ready.
        :rtype: bool
        """
        if self.error is not None:
            raise self.error
        while not self.buffer and not self.eof:
            try:
                chunk = self.source.read(self.CHUNK_SIZE)
            except Exception as exc:
                self.error = exc
                raise
            if chunk is None:
                return False

            if chunk:
                text = self.pending + bytes(chunk)
                cut = len(text) - len(text) % GROUP_SYMBOLS
                text, self.pending = text[:cut], text[cut:]
            else:
                self.eof = True
                text, self.pending = self.pending, b""

            try:
                decoded = self.encoding.decode(text)
            except CorruptInputError as exc:
                self.error = CorruptInputError(
                    self.consumed + exc.offset, exc.decoded
                )
                raise self.error from None
            self.consumed += len(text)
            self.buffer += decoded
        return True

    def close(self) -> None:
        """Drop buffered state; the source itself is left open."""
        self.buffer.clear()
        self.pending = b""
        self.eof = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
