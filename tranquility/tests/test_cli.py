"""Tests for the tranq command line."""
import tranq


def write(tmp_path, text, name="prog.tranq"):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_clean_file_exits_zero(tmp_path, capsys):
    path = write(tmp_path, "fun init() {\n    sprint(\"hi\")\n}\n")
    assert tranq.main(["tranq", path]) == 0
    assert capsys.readouterr().out == ""


def test_errors_are_printed_with_location(tmp_path, capsys):
    path = write(tmp_path, "fun init() {\n    launch()\n}\n")
    assert tranq.main(["tranq", path]) == 1
    out = capsys.readouterr().out.strip()
    assert out == f'{path}:2:5: ❌ Error: Function "launch" is undefined'


def test_warnings_do_not_fail(tmp_path, capsys):
    path = write(tmp_path, "fun init() {\n    var p\n    p: p + 1\n}\n")
    assert tranq.main(["tranq", path]) == 0
    assert "Warning: Unsafe pointer arithmetic" in capsys.readouterr().out


def test_crlf_file_is_read_as_is(tmp_path, capsys):
    path = tmp_path / "dos.t"
    path.write_bytes(b"fun init() {\r\n}\r\n")
    assert tranq.main(["tranq", str(path)]) == 1
    assert "Carriage returns" in capsys.readouterr().out


def test_missing_file(tmp_path, capsys):
    assert tranq.main(["tranq", str(tmp_path / "nope.tranq")]) == 1
    assert "FileNotFoundError" in capsys.readouterr().out


def test_tokens_option(tmp_path, capsys):
    path = write(tmp_path, "var x\n")
    assert tranq.main(["tranq", "--tokens", path]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines == ["1:1\tKEYWORD\t'var'", "1:5\tIDENTIFIER\t'x'", "1:6\tNEWLINE\t'\\n'"]


def test_debug_output(tmp_path, capsys, monkeypatch):
    monkeypatch.setenv("TRANQDEBUG", "1")
    path = write(tmp_path, "fun init() {\n}\n")
    tranq.main(["tranq", path])
    out = capsys.readouterr().out
    assert "Tokens:" in out
    assert "Program(" in out


def test_usage(capsys):
    assert tranq.main(["tranq", "--help"]) == 0
    assert "Usage:" in capsys.readouterr().out
    assert tranq.main(["tranq"]) == 1
    assert tranq.main(["tranq", "--bogus"]) == 1
