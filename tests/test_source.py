import io

import pytest

from lexml.exceptions import LineTooLongError
from lexml.models import Line
from lexml.source import LineSource


def test_next_line_keeps_one_line_of_lookahead():
    source = LineSource(io.StringIO("<a>\n  text  \n</a>\n"))

    assert source.next_line() == (Line("<a>", 0), False)
    assert source.peek() == Line("text", 1)

    assert source.next_line() == (Line("text", 1), False)
    assert source.peek() == Line("</a>", 2)


def test_last_line_is_delivered_once_then_exhausted():
    source = LineSource(io.StringIO("first\nlast"))

    source.next_line()
    assert source.next_line() == (Line("last", 1), True)
    assert source.exhausted is False
    assert source.peek() is None

    assert source.next_line() == (None, True)
    assert source.exhausted is True
    assert source.next_line() == (None, True)


def test_trims_line_endings_and_whitespace():
    source = LineSource(io.StringIO("\t<a>\r\n   \r\n"))

    assert [line.text for line in source] == ["<a>", ""]


def test_empty_input_is_exhausted_immediately():
    source = LineSource(io.StringIO(""))

    assert source.peek() is None
    assert list(source) == []
    assert source.exhausted is True


def test_rejects_lines_over_the_limit():
    source = LineSource(io.StringIO("<a>\n<abcdefgh>\n"), max_line_length=5)

    with pytest.raises(LineTooLongError) as excinfo:
        source.next_line()

    assert excinfo.value.line_number == 2
    assert "exceeds maximum allowed length of 5" in str(excinfo.value)


def test_limit_ignores_surrounding_line_ending():
    source = LineSource(io.StringIO("<abc>\r\n"), max_line_length=5)

    assert source.next_line() == (Line("<abc>", 0), True)
