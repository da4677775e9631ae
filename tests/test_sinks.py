import threading

import pytest

from lexml.config import OutputMode
from lexml.exceptions import SinkClosedError
from lexml.models import Token, TokenKind
from lexml.sinks import ConsoleSink, ListSink, StreamSink, TokenChannel, make_sink


def test_list_sink_collects_trimmed_tokens():
    sink = ListSink()

    sink.send(TokenKind.START_TAG, " cmd ")
    sink.close()

    assert sink.tokens == [Token(TokenKind.START_TAG, "cmd")]
    with pytest.raises(SinkClosedError):
        sink.send(TokenKind.EOF, "EOF")
    with pytest.raises(SinkClosedError):
        sink.close()


def test_console_sink_prints_tokens(capsys):
    ConsoleSink().send(TokenKind.ARGUMENT_VALUE, "  TakeOff ")

    assert capsys.readouterr().out == "* tokenArgumentValue, tokenText = TakeOff\n"


def test_make_sink():
    assert isinstance(make_sink(OutputMode.CONSOLE), ConsoleSink)

    channel = TokenChannel()
    sink = make_sink(OutputMode.STREAM, channel)
    assert isinstance(sink, StreamSink)
    assert sink.channel is channel


def test_channel_send_waits_for_receiver():
    channel = TokenChannel()
    sent = threading.Event()

    def produce():
        channel.send(Token(TokenKind.START_TAG, "a"))
        sent.set()
        channel.close()

    thread = threading.Thread(target=produce)
    thread.start()

    assert sent.wait(0.2) is False
    assert channel.receive() == Token(TokenKind.START_TAG, "a")
    assert sent.wait(5) is True
    assert channel.receive() is None
    assert channel.receive() is None
    thread.join(5)


def test_stream_sink_closes_channel_after_last_token():
    sink = StreamSink()
    tokens = [
        (TokenKind.START_TAG, "a"),
        (TokenKind.END_TAG, "a"),
        (TokenKind.EOF, "EOF"),
    ]

    def produce():
        for kind, text in tokens:
            sink.send(kind, text)
        sink.close()

    thread = threading.Thread(target=produce)
    thread.start()
    received = list(sink.channel)
    thread.join(5)

    assert [(token.kind, token.text) for token in received] == tokens
    assert sink.channel.closed is True
    with pytest.raises(SinkClosedError):
        sink.send(TokenKind.EOF, "EOF")
    with pytest.raises(SinkClosedError):
        sink.close()


def test_channel_forwards_producer_error():
    channel = TokenChannel()
    channel.close(ValueError("boom"))

    with pytest.raises(ValueError, match="boom"):
        channel.receive()
    assert list(channel) == []
