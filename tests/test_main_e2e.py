import pytest


def test_encode_then_decode_files(tmp_path, m):
    src = tmp_path / "in.bin"
    enc = tmp_path / "out.txt"
    dec = tmp_path / "back.bin"
    data = bytes(range(256)) * 3
    src.write_bytes(data)

    m.main(["-i", str(src), "-o", str(enc)])
    assert enc.read_bytes() == m.STD_ENCODING.encode(data).encode("ascii")

    m.main(["-d", "-i", str(enc), "-o", str(dec)])
    assert dec.read_bytes() == data


def test_lowercase_round_trip(tmp_path, m):
    src = tmp_path / "in.bin"
    enc = tmp_path / "out.txt"
    dec = tmp_path / "back.bin"
    src.write_bytes(b"\x34\x5a")

    m.main(["-l", "-i", str(src), "-o", str(enc)])
    assert enc.read_bytes() == b"gtpy"
    m.main(["-l", "-d", "-i", str(enc), "-o", str(dec)])
    assert dec.read_bytes() == b"\x34\x5a"


def test_existing_output_is_overwritten(tmp_path, m):
    src = tmp_path / "in.bin"
    out = tmp_path / "out.txt"
    src.write_bytes(b"\xff")
    out.write_bytes(b"stale contents that are longer")

    m.main(["-i", str(src), "-o", str(out)])
    assert out.read_bytes() == b"9H"


def test_corrupt_input_exits_nonzero(tmp_path, m, capsys):
    src = tmp_path / "bad.txt"
    out = tmp_path / "out.bin"
    src.write_bytes(b"99999999F00!BAR")

    with pytest.raises(SystemExit) as info:
        m.main(["-d", "-i", str(src), "-o", str(out)])
    assert info.value.code == 1
    assert "input byte 11" in capsys.readouterr().err


def test_missing_input_exits_nonzero(tmp_path, m, capsys):
    with pytest.raises(SystemExit) as info:
        m.main(["-i", str(tmp_path / "nope.bin"), "-o", str(tmp_path / "o")])
    assert info.value.code == 1
    assert "[!] Failed to open" in capsys.readouterr().err
