"""Character scanning of logical lines into tokens."""

from __future__ import annotations

from collections.abc import Callable, Iterator

from .constants import (
    ATTRIBUTE_ASSIGN,
    COMMENT_OPEN,
    SELF_CLOSING_MARKERS,
    STOP_MARKER,
    TAG_CLOSE,
    TAG_OPEN,
    VALUE_QUOTE,
)
from .exceptions import MalformedInputError, MalformedTagError
from .models import TagContext, TagDirection, Token, TokenKind, WorkingLine


def is_self_closing(text: str) -> bool:
    """Check whether a logical line closes the tag it opens.

    The whole line is searched, not the position of the marker, so
    ``<a x="1"/>`` and ``<?xml version="1.0"?>`` both qualify.
    """
    return any(marker in text for marker in SELF_CLOSING_MARKERS)


def _ends_tag_name(text: str, pos: int) -> bool:
    char = text[pos]
    if char.isspace() or char == TAG_CLOSE:
        return True
    # "/>" and "?>" end the name of a self-closing tag
    return char in "/?" and text.startswith(TAG_CLOSE, pos + 1)


def text_between_tags(
    text: str,
    line_number: int = 1,
    strict: bool = True,
    warn: Callable[[str], None] | None = None,
) -> str:
    """Pick out the text between a start and an end tag.

    Walks the whole line once, remembering the position after the first
    ``>`` and before the last ``<`` that are not the outer brackets of the
    line.

    Args:
        text: Logical line, such as ``<title>Some text</title>``.
        line_number: One-based line number used in error messages.
        strict: Raise when the line holds more brackets than one
            tag/text/tag pattern, instead of warning.
        warn: Optional callback for the lenient mode warning.

    Returns:
        str: The trimmed text, or an empty string when there is none.

    Raises:
        MalformedInputError: In strict mode, on extra angle brackets.

    Examples:
        text_between_tags("<a>text</a>")  # "text"
        text_between_tags("<a></a>")  # ""
    """
    last = len(text) - 1
    first_close: int | None = None
    last_open: int | None = None
    extra = 0

    for pos, char in enumerate(text):
        if char == TAG_OPEN and pos != 0:
            if last_open is not None:
                extra += 1
            last_open = pos
        elif char == TAG_CLOSE and pos != last:
            if first_close is None:
                first_close = pos
            else:
                extra += 1

    if extra:
        reason = "more angle brackets than a tag/text/tag line allows"
        if strict:
            raise MalformedInputError(line_number, reason)
        if warn is not None:
            warn(f"Line {line_number}: {reason}")

    if first_close is None or last_open is None or last_open <= first_close:
        return ""
    return text[first_close + 1 : last_open].strip()


class TagScanner:
    """Turn a logical line into tokens.

    The scanner walks the working line from its cursor and reacts to the
    markup characters:

    - ``</``: emits the text since the previous tag (when the line has no
      attributes) and the name of the closed tag.
    - ``<!--``: drops the rest of the line.
    - ``<``: emits the name of the opened tag.
    - ``>``: emits an end tag when the line is self-closing.
    - ``=`` inside a tag: emits the attribute name and value.

    Tag state lives in the given `TagContext` and is reset when the end of
    the line is reached.

    Args:
        tag: Tag state shared with the lexer.
        strict: Raise on malformed tag/text/tag lines instead of warning.
        warn: Optional callback for non-fatal warnings.
    """

    def __init__(
        self,
        tag: TagContext,
        strict: bool = True,
        warn: Callable[[str], None] | None = None,
    ):
        self.tag = tag
        self.strict = strict
        self.warn = warn

    def scan(self, working: WorkingLine) -> Iterator[Token]:
        """Yield the tokens found in a working line.

        Args:
            working: Logical line to scan; its cursor is advanced to the end.

        Yields:
            Token: Tokens in the order their markers appear in the line.

        Raises:
            MalformedTagError: If a tag ends before its name or value is complete.
            MalformedInputError: In strict mode, on lines with more angle
                brackets than one tag/text/tag pattern.
        """
        text = working.text
        tag = self.tag

        while working.cursor < len(text):
            char = text[working.cursor]

            if char == TAG_OPEN:
                if text.startswith(COMMENT_OPEN, working.cursor):
                    working.cursor = len(text)
                    break
                yield from self._scan_tag(working)
                continue

            if char == TAG_CLOSE:
                if is_self_closing(text):
                    yield Token.create(TokenKind.END_TAG, tag.name)
                tag.open_at = None
            elif char == ATTRIBUTE_ASSIGN and tag.open_at is not None:
                tag.has_attribute = True
                yield from self._scan_attribute(working)
                continue

            working.cursor += 1

        tag.reset()

    def _scan_tag(self, working: WorkingLine) -> Iterator[Token]:
        text = working.text
        tag = self.tag
        open_at = working.cursor

        if open_at + 1 >= len(text):
            raise MalformedTagError(working.line_number, open_at, "line ends right after '<'")

        tag.open_at = open_at
        if text[open_at + 1] == STOP_MARKER:
            tag.direction = TagDirection.STOP
            if not tag.has_attribute:
                between = text_between_tags(
                    text, working.line_number, strict=self.strict, warn=self.warn
                )
                if between:
                    yield Token.create(TokenKind.JUST_TEXT, between)
        else:
            tag.direction = TagDirection.START

        tag.name = self._read_tag_name(working)
        if tag.direction is TagDirection.START:
            yield Token.create(TokenKind.START_TAG, tag.name)
        else:
            yield Token.create(TokenKind.END_TAG, tag.name)

    def _read_tag_name(self, working: WorkingLine) -> str:
        """Read the name after ``<`` or ``</`` and leave the cursor on the
        character that ended it."""
        text = working.text
        pos = working.cursor + 1
        if text[pos] == STOP_MARKER:
            pos += 1

        start = pos
        while True:
            if pos >= len(text):
                raise MalformedTagError(
                    working.line_number, pos, "tag name runs past the end of the line"
                )
            if _ends_tag_name(text, pos):
                break
            pos += 1

        working.cursor = pos
        return text[start:pos]

    def _scan_attribute(self, working: WorkingLine) -> Iterator[Token]:
        text = working.text
        assign_at = working.cursor
        lower = self.tag.open_at + 1

        space = max(text.rfind(" ", lower, assign_at), lower - 1)
        name = text[space + 1 : assign_at].strip(VALUE_QUOTE)
        yield Token.create(TokenKind.ARGUMENT_NAME, name)

        value_start = assign_at + 1
        if value_start < len(text) and text[value_start] == VALUE_QUOTE:
            value_end = text.find(VALUE_QUOTE, value_start + 1)
            if value_end == -1:
                raise MalformedTagError(
                    working.line_number, value_start, "attribute value has no closing quote"
                )
            value = text[value_start + 1 : value_end]
            working.cursor = value_end + 1
        else:
            value_end = value_start
            while value_end < len(text) and not _ends_tag_name(text, value_end):
                value_end += 1
            value = text[value_start:value_end]
            working.cursor = value_end

        yield Token.create(TokenKind.ARGUMENT_VALUE, value)
