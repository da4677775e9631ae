"""
lexml: tokenizer for line-oriented, XML-like protocol definition files.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    lexml --file-name ardrone3.xml --token-output 1

Library Usage:
    from pathlib import Path
    from lexml import tokenize_file

    for token in tokenize_file(Path("ardrone3.xml")):
        print(token.kind, token.text)
"""

from .config import ConfigError, LexConfig, OutputMode
from .exceptions import (
    LexError,
    LexFileError,
    LineTooLongError,
    MalformedInputError,
    MalformedTagError,
    SinkClosedError,
    UncaughtLineError,
    UnterminatedTagError,
)
from .lexer import Lexer, lex_start, tokenize, tokenize_file, tokenize_text
from .models import Token, TokenKind
from .sinks import ConsoleSink, ListSink, StreamSink, TokenChannel, TokenSink, make_sink

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "Lexer",
    "lex_start",
    "tokenize",
    "tokenize_file",
    "tokenize_text",
    # Data models
    "Token",
    "TokenKind",
    # Sinks
    "ConsoleSink",
    "ListSink",
    "StreamSink",
    "TokenChannel",
    "TokenSink",
    "make_sink",
    # Configuration
    "LexConfig",
    "OutputMode",
    # Exceptions
    "ConfigError",
    "LexError",
    "LexFileError",
    "LineTooLongError",
    "MalformedInputError",
    "MalformedTagError",
    "SinkClosedError",
    "UncaughtLineError",
    "UnterminatedTagError",
    # Version
    "__version__",
]
