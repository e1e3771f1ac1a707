from huff import decode_main, encode_main


def test_encode_requires_exactly_one_argument(capsys):
    assert encode_main([]) == 2
    assert encode_main(["a", "b"]) == 2
    assert capsys.readouterr().out.count("Argument Error") == 2


def test_decode_requires_huff_suffix(capsys):
    assert decode_main(["archive.bin"]) == 2
    assert decode_main([".huff"]) == 2
    assert decode_main([]) == 2
    assert capsys.readouterr().out.count("Argument Error") == 3


def test_missing_file_reports_file_error(tmp_path, capsys):
    assert encode_main([str(tmp_path / "missing.txt")]) == 1
    assert decode_main([str(tmp_path / "missing.txt.huff")]) == 1
    assert capsys.readouterr().out.count("File Error") == 2


def test_malformed_file_reports_file_error(tmp_path, capsys):
    bad = tmp_path / "broken.txt.huff"
    bad.write_bytes(b"\x00" * 32)
    assert decode_main([str(bad)]) == 1
    assert "File Error" in capsys.readouterr().out
    assert not (tmp_path / "broken.txt").exists()


def test_encode_then_decode(tmp_path, capsys):
    source = tmp_path / "notes.txt"
    data = b"Huffman coding assigns short codes to frequent bytes.\n" * 40
    source.write_bytes(data)

    assert encode_main([str(source)]) == 0
    assert (tmp_path / "notes.txt.huff").exists()

    source.unlink()
    assert decode_main([str(tmp_path / "notes.txt.huff")]) == 0
    assert source.read_bytes() == data

    out = capsys.readouterr().out
    assert "notes.txt.huff" in out
    assert "Error" not in out
