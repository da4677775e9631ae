from lexml.models import (
    Line,
    LineAction,
    TagContext,
    TagDirection,
    Token,
    TokenKind,
    WorkingLine,
)


def test_token_kind_values_match_wire_names():
    assert [kind.value for kind in TokenKind] == [
        "tokenStartTag",
        "tokenEndTag",
        "tokenArgumentName",
        "tokenArgumentValue",
        "tokenDescription",
        "tokenJustText",
        "tokenEOF",
    ]
    assert str(TokenKind.START_TAG) == "tokenStartTag"


def test_token_create_trims_text():
    token = Token.create(TokenKind.JUST_TEXT, "  some text \t")

    assert token == Token(TokenKind.JUST_TEXT, "some text")


def test_line_action_members():
    assert list(LineAction) == [
        LineAction.SKIP,
        LineAction.SCAN,
        LineAction.OPEN_CONTINUATION,
        LineAction.CONTINUE,
        LineAction.CLOSE_CONTINUATION,
        LineAction.DESCRIPTION_CONTINUE,
        LineAction.DESCRIPTION_END,
        LineAction.UNCAUGHT,
    ]


def test_working_line_joins_lines_with_single_space():
    working = WorkingLine()

    working.append(Line("<a", 3))
    working.append(Line('b="1">', 4))

    assert working.text == '<a b="1">'
    assert working.first_line == 3
    assert working.line_number == 4


def test_working_line_replace_and_reset():
    working = WorkingLine(text="old", cursor=2, first_line=0)

    working.replace(Line("<a/>", 7))
    assert (working.text, working.cursor, working.first_line) == ("<a/>", 0, 7)

    working.reset()
    assert not working
    assert working.cursor == 0
    assert working.first_line is None


def test_tag_context_reset():
    tag = TagContext(name="cmd", direction=TagDirection.STOP, has_attribute=True, open_at=4)

    tag.reset()

    assert tag == TagContext()
