import io


def test_cli_parser_defaults(m):
    ns = m.get_parser().parse_args([])
    assert ns.input == "-" and ns.output == "-"
    assert not ns.decode and not ns.lowercase


def test_cli_parser_accepts_flags(m):
    ns = m.get_parser().parse_args(["-d", "-l", "-i", "in.txt", "-o", "out"])
    assert ns.decode and ns.lowercase
    assert (ns.input, ns.output) == ("in.txt", "out")


def test_select_encoding(m):
    assert m.select_encoding(False) is m.STD_ENCODING
    assert m.select_encoding(True) is m.LWR_ENCODING


def test_encode_and_decode_stream_helpers(m):
    data = b"hello, world\n"
    sink = io.BytesIO()
    m.encode_stream(m.STD_ENCODING, io.BytesIO(data), sink)
    assert sink.getvalue() == b"PB1SA5DXF008Q551PT1YW"

    out = io.BytesIO()
    m.decode_stream(m.STD_ENCODING, io.BytesIO(sink.getvalue()), out)
    assert out.getvalue() == data
