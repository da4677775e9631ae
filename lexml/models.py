"""Data models for lexml."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .sinks import TokenSink
    from .source import LineSource


class TokenKind(str, Enum):
    """Kinds of tokens produced by the lexer.

    The values are the names a downstream parser matches on.

    Attributes:
        START_TAG: Name of an opening tag, ``<tag>``.
        END_TAG: Name of a closing or self-closing tag, ``</tag>`` or ``<tag/>``.
        ARGUMENT_NAME: Attribute name, in front of ``=``.
        ARGUMENT_VALUE: Attribute value, after ``=`` with quotes removed.
        DESCRIPTION: Free text lines that belong to no tag.
        JUST_TEXT: Text between a start and an end tag on the same line.
        EOF: End of input, always the last token.
    """

    START_TAG = "tokenStartTag"
    END_TAG = "tokenEndTag"
    ARGUMENT_NAME = "tokenArgumentName"
    ARGUMENT_VALUE = "tokenArgumentValue"
    DESCRIPTION = "tokenDescription"
    JUST_TEXT = "tokenJustText"
    EOF = "tokenEOF"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Token:
    """A single lexed token.

    Attributes:
        kind: What the token stands for.
        text: Text found in the input, without surrounding whitespace.
    """

    kind: TokenKind
    text: str

    @classmethod
    def create(cls, kind: TokenKind, text: str) -> Token:
        return cls(kind=kind, text=text.strip())


@dataclass(frozen=True)
class Line:
    """A trimmed physical line and its zero-based ordinal."""

    text: str
    number: int


class TagDirection(Enum):
    START = auto()
    STOP = auto()


class LineAction(Enum):
    """What the classifier decided to do with a physical line.

    Attributes:
        SKIP: Blank line, nothing to do.
        SCAN: Complete tag line, hand it to the scanner.
        OPEN_CONTINUATION: First line of a tag spanning several lines.
        CONTINUE: Middle line of a multi-line tag.
        CLOSE_CONTINUATION: Last line of a multi-line tag, scan the result.
        DESCRIPTION_CONTINUE: Free text that goes on in the next line.
        DESCRIPTION_END: Last line of a free text block.
        UNCAUGHT: None of the above.
    """

    SKIP = auto()
    SCAN = auto()
    OPEN_CONTINUATION = auto()
    CONTINUE = auto()
    CLOSE_CONTINUATION = auto()
    DESCRIPTION_CONTINUE = auto()
    DESCRIPTION_END = auto()
    UNCAUGHT = auto()


@dataclass
class WorkingLine:
    """A logical line assembled from one or more physical lines.

    Attributes:
        text: Physical lines joined by a single space.
        cursor: Scan position inside `text`.
        first_line: Zero-based ordinal of the first physical line, or None
            while the working line is empty.
    """

    text: str = ""
    cursor: int = 0
    first_line: int | None = None

    def append(self, line: Line) -> None:
        if self.first_line is None:
            self.first_line = line.number
            self.text = line.text
        else:
            self.text = f"{self.text} {line.text}"

    def replace(self, line: Line) -> None:
        self.text = line.text
        self.cursor = 0
        self.first_line = line.number

    def reset(self) -> None:
        self.text = ""
        self.cursor = 0
        self.first_line = None

    @property
    def line_number(self) -> int:
        """One-based number of the first physical line, for messages."""
        return (self.first_line or 0) + 1

    def __bool__(self) -> bool:
        return bool(self.text)


@dataclass
class TagContext:
    """Per logical line state of the tag being scanned.

    Attributes:
        name: Name of the tag seen last.
        direction: Whether the last tag marker opened or closed a tag.
        has_attribute: True once an ``=`` was found inside a tag on this line.
        open_at: Position of the ``<`` of the tag being scanned, or None when
            the cursor is outside any tag.
    """

    name: str = ""
    direction: TagDirection = TagDirection.START
    has_attribute: bool = False
    open_at: int | None = None

    def reset(self) -> None:
        self.name = ""
        self.direction = TagDirection.START
        self.has_attribute = False
        self.open_at = None


@dataclass
class LexerState:
    """Everything one lexer run carries from line to line.

    Attributes:
        source: Line reader with one line of lookahead.
        sink: Destination of the emitted tokens.
        working: Logical line under construction.
        tag: State of the tag being scanned.
        continuation_open: True while a tag spanning several lines is assembled.
        in_description: True while free text lines are accumulated.
        finished: True once the EOF token was sent.
    """

    source: LineSource
    sink: TokenSink
    working: WorkingLine = field(default_factory=WorkingLine)
    tag: TagContext = field(default_factory=TagContext)
    continuation_open: bool = False
    in_description: bool = False
    finished: bool = False
