"""Package-specific exception types."""

from __future__ import annotations


class LexError(ValueError):
    """Base class for lexing-related errors.

    Represents errors encountered while turning lines into tokens.
    """


class MalformedInputError(LexError):
    """Raised when a logical line does not fit the supported dialect.

    Args:
        line_number: One-based index of the first physical line involved.
        reason: Short description of what is wrong with the line.
    """

    def __init__(self, line_number: int, reason: str):
        self.line_number = line_number
        self.reason = reason
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        return f"Line {self.line_number}: malformed input, {self.reason}"


class UncaughtLineError(MalformedInputError):
    """Raised when a physical line matches none of the line classes.

    A line that ends with ``>`` but does not start with ``<`` while no tag
    continuation is open is the typical case.
    """

    def __init__(self, line_number: int, text: str):
        self.text = text
        super().__init__(line_number, f"unexpected tag close in {text!r}")


class UnterminatedTagError(MalformedInputError):
    """Raised when the input ends inside a multi-line tag."""

    def __init__(self, line_number: int, text: str):
        self.text = text
        super().__init__(line_number, f"input ended inside tag {text!r}")


class MalformedTagError(LexError):
    """Raised when a tag ends before its name, marker or value is complete.

    Args:
        line_number: One-based index of the first physical line of the tag.
        column: Zero-based position in the logical line where scanning failed.
        reason: Short description of what was expected.
    """

    def __init__(self, line_number: int, column: int, reason: str):
        self.line_number = line_number
        self.column = column
        self.reason = reason
        super().__init__(f"Line {line_number}, column {column}: malformed tag, {reason}")


class LineTooLongError(LexError):
    """Raised when a line exceeds the configured maximum length.

    Args:
        line_number: One-based index of the offending line.
        max_line_length: Maximum allowed line length in characters.
    """

    def __init__(self, line_number: int, max_line_length: int):
        self.line_number = line_number
        self.max_line_length = max_line_length
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        return (
            f"Line {self.line_number} exceeds maximum allowed length "
            f"of {self.max_line_length} characters"
        )


class SinkClosedError(RuntimeError):
    """Raised when a token is sent to a sink that was already closed."""


class LexFileError(Exception):
    """Raised when lexing a file fails."""
