import pytest

from lexml.exceptions import MalformedInputError, MalformedTagError
from lexml.models import TagContext, Token, TokenKind, WorkingLine
from lexml.scanner import TagScanner, is_self_closing, text_between_tags


def _scan(text: str, strict: bool = True, warn=None) -> list[tuple[TokenKind, str]]:
    scanner = TagScanner(TagContext(), strict=strict, warn=warn)
    return [(token.kind, token.text) for token in scanner.scan(WorkingLine(text=text))]


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("<a>text</a>", "text"),
        ("<a>  padded text </a>", "padded text"),
        ("<a></a>", ""),
        ("</a>", ""),
        ("<a>", ""),
    ],
)
def test_text_between_tags(text, expected):
    assert text_between_tags(text) == expected


def test_text_between_tags_rejects_extra_brackets():
    with pytest.raises(MalformedInputError) as excinfo:
        text_between_tags("<a><b>x</b></a>", line_number=9)

    assert excinfo.value.line_number == 9


def test_text_between_tags_warns_on_extra_brackets_in_lenient_mode():
    warnings = []

    text = text_between_tags("<a><b>x</b></a>", strict=False, warn=warnings.append)

    assert text == "<b>x</b>"
    assert len(warnings) == 1


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("<a/>", True),
        ('<?xml version="1.0"?>', True),
        ("<a></a>", False),
        ("</a>", False),
    ],
)
def test_is_self_closing(text, expected):
    assert is_self_closing(text) is expected


def test_scan_start_text_and_end_tag():
    assert _scan("<a>text</a>") == [
        (TokenKind.START_TAG, "a"),
        (TokenKind.JUST_TEXT, "text"),
        (TokenKind.END_TAG, "a"),
    ]


def test_scan_self_closing_tag():
    assert _scan("<a/>") == [
        (TokenKind.START_TAG, "a"),
        (TokenKind.END_TAG, "a"),
    ]


def test_scan_attributes():
    assert _scan('<cmd name="TakeOff" id="1">') == [
        (TokenKind.START_TAG, "cmd"),
        (TokenKind.ARGUMENT_NAME, "name"),
        (TokenKind.ARGUMENT_VALUE, "TakeOff"),
        (TokenKind.ARGUMENT_NAME, "id"),
        (TokenKind.ARGUMENT_VALUE, "1"),
    ]


def test_scan_attribute_values_keep_spaces_and_brackets():
    assert _scan('<comment title="Take off" desc="a > b"/>') == [
        (TokenKind.START_TAG, "comment"),
        (TokenKind.ARGUMENT_NAME, "title"),
        (TokenKind.ARGUMENT_VALUE, "Take off"),
        (TokenKind.ARGUMENT_NAME, "desc"),
        (TokenKind.ARGUMENT_VALUE, "a > b"),
        (TokenKind.END_TAG, "comment"),
    ]


def test_scan_unquoted_attribute_value():
    assert _scan("<a x=1/>") == [
        (TokenKind.START_TAG, "a"),
        (TokenKind.ARGUMENT_NAME, "x"),
        (TokenKind.ARGUMENT_VALUE, "1"),
        (TokenKind.END_TAG, "a"),
    ]


def test_scan_attribute_suppresses_text_between_tags():
    assert _scan('<arg name="speed" type="u8">Speed value</arg>') == [
        (TokenKind.START_TAG, "arg"),
        (TokenKind.ARGUMENT_NAME, "name"),
        (TokenKind.ARGUMENT_VALUE, "speed"),
        (TokenKind.ARGUMENT_NAME, "type"),
        (TokenKind.ARGUMENT_VALUE, "u8"),
        (TokenKind.END_TAG, "arg"),
    ]


def test_scan_xml_declaration():
    assert _scan('<?xml version="1.0" encoding="UTF-8"?>') == [
        (TokenKind.START_TAG, "?xml"),
        (TokenKind.ARGUMENT_NAME, "version"),
        (TokenKind.ARGUMENT_VALUE, "1.0"),
        (TokenKind.ARGUMENT_NAME, "encoding"),
        (TokenKind.ARGUMENT_VALUE, "UTF-8"),
        (TokenKind.END_TAG, "?xml"),
    ]


def test_scan_equal_sign_outside_tag_is_text():
    assert _scan("<a>x=1</a>") == [
        (TokenKind.START_TAG, "a"),
        (TokenKind.JUST_TEXT, "x=1"),
        (TokenKind.END_TAG, "a"),
    ]


def test_scan_comment_drops_rest_of_line():
    assert _scan("<!-- <a>text</a> -->") == []
    assert _scan("<a/> <!-- note -->") == [
        (TokenKind.START_TAG, "a"),
        (TokenKind.END_TAG, "a"),
    ]


def test_scan_moves_cursor_to_end_and_resets_tag_context():
    tag = TagContext()
    working = WorkingLine(text='<a x="1">')

    tokens = list(TagScanner(tag).scan(working))

    assert tokens[0] == Token(TokenKind.START_TAG, "a")
    assert working.cursor == len(working.text)
    assert tag == TagContext()


def test_scan_rejects_bracket_at_end_of_line():
    with pytest.raises(MalformedTagError) as excinfo:
        _scan("text <")

    assert excinfo.value.column == 5


def test_scan_rejects_tag_name_running_off_the_line():
    with pytest.raises(MalformedTagError):
        _scan("<cmd")


def test_scan_rejects_unclosed_quote():
    with pytest.raises(MalformedTagError, match="no closing quote"):
        _scan('<a x="1>')


def test_scan_extra_brackets_in_lenient_mode():
    warnings = []

    tokens = _scan("<a><b>x</b></a>", strict=False, warn=warnings.append)

    assert tokens[0] == (TokenKind.START_TAG, "a")
    assert (TokenKind.END_TAG, "a") in tokens
    assert warnings
