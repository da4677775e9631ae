"""Destinations for emitted tokens."""

from __future__ import annotations

import queue
import threading
from abc import ABC, abstractmethod
from collections.abc import Iterator

import click

from .config import OutputMode
from .exceptions import SinkClosedError
from .models import Token, TokenKind


class TokenSink(ABC):
    """Where the lexer sends its tokens.

    A sink is created once per run and injected into the lexer. `close` is
    called once, right after the EOF token was sent.
    """

    @abstractmethod
    def send(self, kind: TokenKind, text: str) -> None:
        pass

    def close(self) -> None:
        pass


class _Closed:
    """Marker put on the channel queue when the producer is done."""

    def __init__(self, error: BaseException | None = None):
        self.error = error


class TokenChannel:
    """Unbuffered hand-off of tokens between two threads.

    `send` blocks until the consumer has received the token, so the producer
    never runs ahead of the consumer by more than one token. Iterating the
    channel yields tokens until the producer closes it. When the producer
    closes the channel with an error, the error is raised in the consumer
    after the tokens sent before it.

    Examples:
        channel = lex_start(stream)
        for token in channel:
            print(token.kind, token.text)
    """

    def __init__(self):
        self._queue: queue.Queue = queue.Queue(maxsize=1)
        self._lock = threading.Lock()
        self._closed = False
        self._drained = False

    @property
    def closed(self) -> bool:
        return self._closed

    def send(self, token: Token) -> None:
        """Hand a token to the consumer and wait until it was received.

        Raises:
            SinkClosedError: If the channel was already closed.
        """
        with self._lock:
            if self._closed:
                raise SinkClosedError("Cannot send on a closed token channel")
        self._queue.put(token)
        self._queue.join()

    def close(self, error: BaseException | None = None) -> None:
        """Close the channel, optionally passing an error to the consumer.

        Raises:
            SinkClosedError: If the channel was already closed.
        """
        with self._lock:
            if self._closed:
                raise SinkClosedError("Token channel is already closed")
            self._closed = True
        self._queue.put(_Closed(error))

    def receive(self) -> Token | None:
        """Wait for the next token.

        Returns:
            Token | None: The next token, or None once the channel is closed.
        """
        if self._drained:
            return None
        item = self._queue.get()
        self._queue.task_done()
        if isinstance(item, _Closed):
            self._drained = True
            if item.error is not None:
                raise item.error
            return None
        return item

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.receive()
            if token is None:
                return
            yield token


class StreamSink(TokenSink):
    """Send tokens through a `TokenChannel` to a consumer thread."""

    def __init__(self, channel: TokenChannel | None = None):
        self.channel = channel or TokenChannel()

    def send(self, kind: TokenKind, text: str) -> None:
        self.channel.send(Token.create(kind, text))

    def close(self) -> None:
        self.channel.close()


class ConsoleSink(TokenSink):
    """Print tokens as they are found."""

    def send(self, kind: TokenKind, text: str) -> None:
        token = Token.create(kind, text)
        click.echo(f"* {token.kind.value}, tokenText = {token.text}")


class ListSink(TokenSink):
    """Collect tokens in memory."""

    def __init__(self):
        self.tokens: list[Token] = []
        self.closed = False

    def send(self, kind: TokenKind, text: str) -> None:
        if self.closed:
            raise SinkClosedError("Cannot send to a closed token list")
        self.tokens.append(Token.create(kind, text))

    def close(self) -> None:
        if self.closed:
            raise SinkClosedError("Token list is already closed")
        self.closed = True


def make_sink(mode: OutputMode, channel: TokenChannel | None = None) -> TokenSink:
    """Build the sink for an output mode.

    Args:
        mode: Selected output mode.
        channel: Channel to use for `OutputMode.STREAM`; a new one is created
            when omitted.

    Returns:
        TokenSink: A `ConsoleSink` or a `StreamSink`.
    """
    if mode is OutputMode.STREAM:
        return StreamSink(channel)
    return ConsoleSink()
