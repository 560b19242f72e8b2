import io

from slashlib.lineinput import read_line


def test_reads_lines_then_none():
    stdin = io.StringIO("first\nsecond")
    stdout = io.StringIO()
    assert read_line(">> ", stdin, stdout) == "first"
    assert read_line(">> ", stdin, stdout) == "second"
    assert read_line(">> ", stdin, stdout) is None
    assert stdout.getvalue() == ">> " * 3


def test_empty_line_is_not_eof():
    stdin = io.StringIO("\n")
    assert read_line("", stdin, io.StringIO()) == ""
    assert read_line("", stdin, io.StringIO()) is None


def test_empty_input_returns_none():
    stdout = io.StringIO()
    assert read_line("> ", io.StringIO(""), stdout) is None
    assert stdout.getvalue() == "> "


def test_long_line_round_trip():
    text = "x" * 1000
    assert read_line("", io.StringIO(text + "\nrest"), io.StringIO()) == text