import click
import pytest

from quill.config import color_enabled
from quill.diagnostics import format_error, report, undefined, wrong_arg_count, wrong_type
from quill.errors import QuillTypeError
from quill.reader.nodes import Location


def test_format_error_with_source_excerpt():
    error = QuillTypeError("bad", Location("prog.q", 2, 5))
    text = click.unstyle(format_error(error, "line one\nlet x = 1"))
    assert text == "prog.q:2:5: error: bad\n    let x = 1\n        ^"


def test_format_error_without_source():
    error = QuillTypeError("bad", Location("prog.q", 2, 5))
    assert click.unstyle(format_error(error)) == "prog.q:2:5: error: bad"


def test_format_error_without_location():
    assert click.unstyle(format_error(QuillTypeError("bad"), "x")) == "error: bad"


def test_format_error_row_past_end_of_source():
    error = QuillTypeError("bad", Location("prog.q", 9, 1))
    assert click.unstyle(format_error(error, "one line")) == "prog.q:9:1: error: bad"


def test_constructors():
    where = Location("p", 1, 1)
    assert wrong_type(where, 1.0, "assignment").message == "Unexpected type 'number' in assignment"
    assert undefined(where, "x").message == "Undefined identifier 'x'"
    assert wrong_arg_count(where, 2, 1).message == "Expected 1 argument, got 2"
    assert wrong_arg_count(where, 0, 3).message == "Expected 3 arguments, got 0"


def test_report_writes_to_stderr(capsys):
    report(QuillTypeError("bad", Location("p", 1, 1)), color=False)
    out, err = capsys.readouterr()
    assert out == ""
    assert err == "p:1:1: error: bad\n"


def test_report_keeps_color_when_forced(capsys):
    report(QuillTypeError("bad"), color=True)
    assert "\x1b[" in capsys.readouterr().err


@pytest.mark.parametrize(
    "value,expected",
    [(None, None), ("", None), ("1", True), ("always", True), ("0", False), ("Off", False), ("no", False)],
)
def test_color_setting(monkeypatch, value, expected):
    if value is None:
        monkeypatch.delenv("QUILL_COLOR", raising=False)
    else:
        monkeypatch.setenv("QUILL_COLOR", value)
    assert color_enabled() is expected
