"""Line classification and logical line assembly."""

from __future__ import annotations

from collections.abc import Callable

from .constants import TAG_CLOSE, TAG_OPEN
from .exceptions import UncaughtLineError, UnterminatedTagError
from .models import LexerState, Line, LineAction

# Actions after which the working line is complete and must be scanned
SCAN_ACTIONS = frozenset(
    {
        LineAction.SCAN,
        LineAction.CLOSE_CONTINUATION,
        LineAction.DESCRIPTION_END,
    }
)


def starts_with_tag_open(text: str) -> bool:
    return text.startswith(TAG_OPEN)


def ends_with_tag_close(text: str) -> bool:
    return text.endswith(TAG_CLOSE)


def classify_line(text: str, next_text: str | None, continuation_open: bool) -> LineAction:
    """Decide how a physical line relates to its neighbours.

    Args:
        text: Trimmed physical line.
        next_text: Trimmed line after it, or None at end of input.
        continuation_open: Whether a tag spanning several lines is being assembled.

    Returns:
        LineAction: What to do with the line.

    Examples:
        classify_line("<a>", None, False)  # LineAction.SCAN
        classify_line("<a", "b=\\"1\\">", False)  # LineAction.OPEN_CONTINUATION
        classify_line("free text", "<a>", False)  # LineAction.DESCRIPTION_END
    """
    if not text:
        return LineAction.SKIP

    start = starts_with_tag_open(text)
    end = ends_with_tag_close(text)
    next_start = next_text is not None and starts_with_tag_open(next_text)

    if start and end:
        return LineAction.SCAN
    if start and not end:
        return LineAction.OPEN_CONTINUATION
    if not start and not end and continuation_open:
        return LineAction.CONTINUE
    if not start and end and continuation_open:
        return LineAction.CLOSE_CONTINUATION
    if not start and not end and not continuation_open and not next_start:
        return LineAction.DESCRIPTION_CONTINUE
    if not start and not end and not continuation_open and next_start:
        return LineAction.DESCRIPTION_END

    return LineAction.UNCAUGHT


class LineClassifier:
    """Assemble logical lines out of physical ones.

    Works on the working line and the continuation and description flags of
    a `LexerState`. After each `feed`, a working line is ready for scanning
    when the returned action is in `SCAN_ACTIONS`.

    A description block that is still open when a tag line arrives (blank
    lines between the text and the tag hide the tag from the lookahead) is
    handed out through `take_flushed` before the tag line replaces it.

    Args:
        state: Lexer state to update.
        strict: Raise on lines that fit no class instead of scanning them.
        warn: Optional callback for non-fatal warnings in lenient mode.
    """

    def __init__(
        self,
        state: LexerState,
        strict: bool = True,
        warn: Callable[[str], None] | None = None,
    ):
        self.state = state
        self.strict = strict
        self.warn = warn
        self._flushed: str | None = None

    def feed(self, line: Line, next_line: Line | None) -> LineAction:
        """Classify one physical line and update the working line.

        Args:
            line: Current physical line.
            next_line: The line after it, or None at end of input.

        Returns:
            LineAction: Action taken for the line.

        Raises:
            UncaughtLineError: In strict mode, when the line fits no class.
        """
        state = self.state
        working = state.working
        action = classify_line(
            line.text,
            None if next_line is None else next_line.text,
            state.continuation_open,
        )

        if action is LineAction.SKIP:
            return action

        if action in (LineAction.SCAN, LineAction.OPEN_CONTINUATION) and state.in_description:
            self._flush_description()

        if action is LineAction.SCAN:
            state.continuation_open = False
            working.replace(line)
        elif action is LineAction.OPEN_CONTINUATION:
            state.continuation_open = True
            working.append(line)
        elif action is LineAction.CONTINUE:
            working.append(line)
        elif action is LineAction.CLOSE_CONTINUATION:
            working.append(line)
            state.continuation_open = False
        elif action is LineAction.DESCRIPTION_CONTINUE:
            state.in_description = True
            working.append(line)
        elif action is LineAction.DESCRIPTION_END:
            state.in_description = False
            working.append(line)
        else:
            if self.strict:
                raise UncaughtLineError(line.number + 1, line.text)
            self._warn(f"Line {line.number + 1}: uncaught line {line.text!r}, scanning it as is")
            working.append(line)
            state.continuation_open = False
            state.in_description = False

        return action

    def finish(self) -> LineAction | None:
        """Close whatever is still open at end of input.

        Returns:
            LineAction | None: `LineAction.DESCRIPTION_END` for a trailing
                description block, `LineAction.CLOSE_CONTINUATION` for an
                unterminated tag in lenient mode, or None when nothing is open.

        Raises:
            UnterminatedTagError: In strict mode, when the input ends inside a tag.
        """
        state = self.state
        if state.continuation_open:
            state.continuation_open = False
            if self.strict:
                raise UnterminatedTagError(state.working.line_number, state.working.text)
            self._warn(
                f"Line {state.working.line_number}: input ended inside a tag, scanning it as is"
            )
            return LineAction.CLOSE_CONTINUATION

        if state.in_description:
            state.in_description = False
            return LineAction.DESCRIPTION_END

        return None

    def take_flushed(self) -> str | None:
        """Return and forget the description block flushed by the last `feed`."""
        flushed, self._flushed = self._flushed, None
        return flushed

    def _flush_description(self) -> None:
        self._flushed = self.state.working.text
        self.state.in_description = False
        self.state.working.reset()

    def _warn(self, message: str) -> None:
        if self.warn is not None:
            self.warn(message)
