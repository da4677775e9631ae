"""The lexer engine: lines in, tokens out."""

from __future__ import annotations

import io
import threading
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import TextIO

from .classifier import SCAN_ACTIONS, LineClassifier
from .config import ConfigError, LexConfig, validate_config
from .constants import EOF_TEXT
from .exceptions import LexError, LexFileError
from .filesystem import safe_read
from .models import LexerState, LineAction, Token, TokenKind
from .scanner import TagScanner
from .sinks import ListSink, StreamSink, TokenChannel, TokenSink
from .source import LineSource


class Lexer:
    """Tokenize one input stream.

    A lexer owns the state of exactly one run. Tokens can be pulled lazily
    with `tokens`, or pushed into the sink with `run`, which closes the sink
    right after the EOF token.

    Args:
        stream: Text stream with the document to lex.
        sink: Destination for `run`; defaults to a new `ListSink`.
        config: Lexing configuration; defaults to a new `LexConfig`.
        warn: Optional callback for non-fatal warnings in lenient mode.

    Raises:
        ConfigError: If the configuration fails validation.

    Examples:
        lexer = Lexer(io.StringIO("<a>text</a>\\n"))
        tokens = lexer.run().tokens
    """

    def __init__(
        self,
        stream: TextIO,
        sink: TokenSink | None = None,
        config: LexConfig | None = None,
        warn: Callable[[str], None] | None = None,
    ):
        config = config or LexConfig()
        validate_config(config)
        self.config = config
        self.state = LexerState(
            source=LineSource(stream, config.max_line_length),
            sink=sink if sink is not None else ListSink(),
        )
        self.classifier = LineClassifier(self.state, strict=config.strict, warn=warn)
        self.scanner = TagScanner(self.state.tag, strict=config.strict, warn=warn)
        self._started = False

    def tokens(self) -> Iterator[Token]:
        """Yield the tokens of the input, ending with the EOF token.

        Raises:
            RuntimeError: If the lexer was already started.
            LexError: If the input is malformed (see `lexml.exceptions`).
        """
        if self._started:
            raise RuntimeError("A lexer run cannot be restarted; create a new Lexer")
        self._started = True

        state = self.state
        for line in state.source:
            action = self.classifier.feed(line, state.source.peek())
            yield from self._complete(action)

        yield from self._complete(self.classifier.finish())

        state.finished = True
        yield Token.create(TokenKind.EOF, EOF_TEXT)

    def _complete(self, action: LineAction | None) -> Iterator[Token]:
        state = self.state

        flushed = self.classifier.take_flushed()
        if flushed:
            yield Token.create(TokenKind.DESCRIPTION, flushed)

        if action is LineAction.DESCRIPTION_END:
            yield Token.create(TokenKind.DESCRIPTION, state.working.text)

        if action in SCAN_ACTIONS or action is LineAction.UNCAUGHT:
            yield from self.scanner.scan(state.working)
            state.working.reset()

    def run(self) -> TokenSink:
        """Send every token to the sink, then close it.

        Returns:
            TokenSink: The sink the tokens were sent to.
        """
        sink = self.state.sink
        for token in self.tokens():
            sink.send(token.kind, token.text)
        sink.close()
        return sink


def tokenize(
    stream: TextIO,
    config: LexConfig | None = None,
    warn: Callable[[str], None] | None = None,
) -> Iterator[Token]:
    """Lazily tokenize a text stream.

    Examples:
        for token in tokenize(io.StringIO("<a/>\\n")):
            print(token.kind, token.text)
    """
    yield from Lexer(stream, config=config, warn=warn).tokens()


def tokenize_text(
    text: str,
    config: LexConfig | None = None,
    warn: Callable[[str], None] | None = None,
) -> list[Token]:
    """Tokenize a document held in a string.

    Examples:
        tokenize_text("<a>text</a>")
    """
    return list(tokenize(io.StringIO(text), config=config, warn=warn))


def lex_start(
    stream: TextIO,
    config: LexConfig | None = None,
    warn: Callable[[str], None] | None = None,
) -> TokenChannel:
    """Run a lexer on its own thread and return the channel it sends to.

    The lexer blocks on every token until the caller has received it. An
    error raised while lexing closes the channel and is raised again in the
    caller once it reaches that point of the stream.

    Args:
        stream: Text stream with the document to lex.
        config: Lexing configuration; defaults to a new `LexConfig`.
        warn: Optional callback for non-fatal warnings in lenient mode.

    Returns:
        TokenChannel: Channel yielding the tokens, EOF last.

    Examples:
        with open("ardrone3.xml", encoding="utf-8") as handle:
            for token in lex_start(handle):
                print(token)
    """
    channel = TokenChannel()
    lexer = Lexer(stream, StreamSink(channel), config=config, warn=warn)

    def produce():
        try:
            lexer.run()
        except Exception as error:
            if channel.closed:
                raise
            channel.close(error)

    thread = threading.Thread(target=produce, name="lexml-lexer", daemon=True)
    thread.start()
    return channel


def tokenize_file(
    filepath: Path,
    config: LexConfig | None = None,
    warn: Callable[[str], None] | None = None,
) -> list[Token]:
    """Tokenize a file.

    Args:
        filepath: Path to the document.
        config: Lexing configuration; defaults to a new `LexConfig`.
        warn: Optional callback for non-fatal warnings in lenient mode.

    Returns:
        list[Token]: All tokens of the file, EOF last.

    Raises:
        LexFileError: If the configuration is invalid, the file cannot be read
            or decoded, or its content is malformed.

    Examples:
        tokens = tokenize_file(Path("ardrone3.xml"), LexConfig(strict=False))
    """
    config = config or LexConfig()
    try:
        validate_config(config)
    except ConfigError as error:
        raise LexFileError(str(error)) from error

    try:
        with safe_read(filepath) as stream:
            return list(tokenize(stream, config=config, warn=warn))
    except UnicodeDecodeError as error:
        error_message = f"Invalid UTF-8 sequence in {filepath}: {error}"
        raise LexFileError(error_message) from error
    except IOError as error:
        raise LexFileError(str(error)) from error
    except LexError as error:
        raise LexFileError(f"{filepath}: {error}") from error
