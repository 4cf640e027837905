import argparse
import contextlib
import shutil
import sys

from typing import BinaryIO, List, Optional
from codec import LWR_ENCODING, STD_ENCODING, Encoding
from streams import StreamDecoder, StreamEncoder

GENERAL_ERROR = 1  #: Exit status for any failure
COPY_SIZE = 64 * 1024  #: Bytes moved per copy step


def get_parser():
    """Create and configure the CLI argument parser.

    :returns: Configured argument parser.
    :rtype: argparse.ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog="zrock32",
        description="Encode or decode data as zrock32 base-32 text",
    )
    parser.add_argument(
        "-i",
        "--input",
        default="-",
        help="Input file to read from (default: stdin)",
    )
    parser.add_argument(
        "-o",
        "--output",
        default="-",
        help="Output file to write to (default: stdout)",
    )
    parser.add_argument(
        "-d",
        "--decode",
        action="store_true",
        help="Decode input instead of encoding",
    )
    parser.add_argument(
        "-l",
        "--lowercase",
        action="store_true",
        help="Use the lowercase alphabet instead of uppercase",
    )
    return parser


def _open_input(path: str):
    """Open ``path`` for binary reading; ``-`` or empty means stdin.

    :param path: Input file path.
    :type path: str
    :returns: Context manager yielding a binary reader.
    :raises OSError: If the file cannot be opened.
    """
    if not path or path == "-":
        return contextlib.nullcontext(sys.stdin.buffer)
    return open(path, "rb")


def _open_output(path: str):
    """Create or truncate ``path`` for binary writing; ``-`` means stdout.

    :param path: Output file path.
    :type path: str
    :returns: Context manager yielding a binary writer.
    :raises OSError: If the file cannot be opened.
    """
    if not path or path == "-":
        return contextlib.nullcontext(sys.stdout.buffer)
    return open(path, "wb")


def select_encoding(lowercase: bool) -> Encoding:
    """Return the lowercase or the standard encoding handle."""
    return LWR_ENCODING if lowercase else STD_ENCODING


def encode_stream(
    encoding: Encoding, source: BinaryIO, sink: BinaryIO
) -> None:
    """Encode everything read from ``source`` into ``sink``.

    :param encoding: Encoding handle to use.
    :type encoding: Encoding
    :param source: Binary reader with raw data.
    :type source: BinaryIO
    :param sink: Binary writer receiving encoded text.
    :type sink: BinaryIO
    :returns: None
    :rtype: None
    """
    with StreamEncoder(encoding, sink) as encoder:
        shutil.copyfileobj(source, encoder, COPY_SIZE)


def decode_stream(
    encoding: Encoding, source: BinaryIO, sink: BinaryIO
) -> None:
    """Decode everything read from ``source`` into ``sink``.

    :raises CorruptInputError: If the input holds an invalid symbol;
        output decoded before that point has already been written.
    """
    with StreamDecoder(encoding, source) as decoder:
        shutil.copyfileobj(decoder, sink, COPY_SIZE)


def run(args: argparse.Namespace) -> int:
    """Run one encode or decode job described by ``args``.

    :param args: Parsed command-line arguments.
    :type args: argparse.Namespace
    :returns: Process exit status.
    :rtype: int
    """
    encoding = select_encoding(args.lowercase)
    convert = decode_stream if args.decode else encode_stream

    try:
        input_fd = _open_input(args.input)
    except OSError as e:
        print(f"[!] Failed to open {args.input} for input: {e.strerror}",
              file=sys.stderr)
        return GENERAL_ERROR
    with input_fd as source:
        try:
            output_fd = _open_output(args.output)
        except OSError as e:
            print(f"[!] Failed to open {args.output} for output: "
                  f"{e.strerror}", file=sys.stderr)
            return GENERAL_ERROR
        with output_fd as sink:
            try:
                convert(encoding, source, sink)
                sink.flush()
            except (OSError, ValueError) as e:
                print(f"[!] {e}", file=sys.stderr)
                return GENERAL_ERROR
    return 0


def main(argv: Optional[List[str]] = None):
    """Entry point for the CLI tool.

    :param argv: Arguments to parse instead of ``sys.argv[1:]``.
    :type argv: Optional[List[str]]
    :returns: None
    :rtype: None
    """
    parser = get_parser()
    args = parser.parse_args(argv)
    status = run(args)
    if status:
        sys.exit(status)


if __name__ == "__main__":
    main()
