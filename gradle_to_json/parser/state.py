"""Per-pass scan state: the shared cursor and the quote/comment/evaluation trackers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto

from gradle_to_json.parser.lexemes import QUOTE_CHARS, is_single_line_comment

_BLANKS = (" ", "\t", "\r")


class Scanner:
    """Owns the character buffer and the single read position over it.

    Every recursive parse over the same buffer shares one Scanner, so nested
    blocks observe and advance the same position. Reading past the end yields
    an empty string instead of raising.
    """

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def peek(self, offset: int = 0) -> str:
        index = self.pos + offset
        if 0 <= index < len(self.text):
            return self.text[index]
        return ""

    def advance(self) -> str:
        if self.at_end():
            return ""
        ch = self.text[self.pos]
        self.pos += 1
        return ch

    def startswith(self, prefix: str) -> bool:
        return self.text.startswith(prefix, self.pos)

    def skip_blanks(self) -> None:
        """Skip spaces and tabs on the current line (newlines are kept)."""
        while self.peek() in _BLANKS:
            self.pos += 1

    def skip_whitespace(self) -> None:
        while self.peek() in (*_BLANKS, "\n"):
            self.pos += 1


@dataclass
class QuoteState:
    """Whether the cursor is inside a quoted literal, and which quote opened it."""

    open: bool = False
    char: str = ""

    def track(self, ch: str, previous: str) -> None:
        # a backslash escapes the quote that follows it
        if previous == "\\":
            return
        if self.open:
            if ch == self.char:
                self.open = False
        elif ch in QUOTE_CHARS:
            self.open = True
            self.char = ch

    def reset(self) -> None:
        self.open = False
        self.char = ""


class CommentMode(Enum):
    NONE = auto()
    SINGLE_LINE = auto()
    MULTI_LINE = auto()


@dataclass
class CommentState:
    mode: CommentMode = CommentMode.NONE
    buffer: str = ""

    @property
    def active(self) -> bool:
        return self.mode is not CommentMode.NONE

    def enter(self, opener: str) -> None:
        """Start a comment from its two-character opener (``//`` or ``/*``)."""
        if is_single_line_comment(opener):
            self.mode = CommentMode.SINGLE_LINE
        else:
            self.mode = CommentMode.MULTI_LINE
        self.buffer = ""

    def feed(self, ch: str) -> bool:
        """Consume one comment character; return True when the comment has ended.

        A multi-line comment ends the first time its text contains ``*/``.
        There is no escaping of the end marker and no nesting.
        """
        if self.mode is CommentMode.SINGLE_LINE:
            if ch == "\n":
                self.reset()
                return True
            return False
        self.buffer += ch
        if "*/" in self.buffer:
            self.reset()
            return True
        return False

    def reset(self) -> None:
        self.mode = CommentMode.NONE
        self.buffer = ""


@dataclass
class EvaluationState:
    """``$``-interpolation tracking.

    ``restrict_to_dependencies`` limits interpolation to the inside of
    ``dependencies`` blocks; ``dependencies_context`` says whether the
    cursor is currently inside one.
    """

    restrict_to_dependencies: bool = True
    dependencies_context: bool = False
    active: bool = False
    brace_delimited: bool = False
    name: str = ""

    @property
    def permitted(self) -> bool:
        return not self.restrict_to_dependencies or self.dependencies_context

    def start(self, brace_delimited: bool = False) -> None:
        self.active = True
        self.brace_delimited = brace_delimited
        self.name = ""

    def feed(self, ch: str) -> None:
        self.name += ch

    def source_text(self) -> str:
        """The interpolation exactly as written, used when the name is unknown."""
        if self.brace_delimited:
            return "${" + self.name + "}"
        return "$" + self.name

    def finish(self) -> None:
        self.active = False
        self.brace_delimited = False
        self.name = ""


@dataclass
class ScanState:
    """Everything one parse pass shares across its recursive block parses."""

    scanner: Scanner
    quote: QuoteState = field(default_factory=QuoteState)
    comment: CommentState = field(default_factory=CommentState)
    evaluation: EvaluationState = field(default_factory=EvaluationState)

    @classmethod
    def for_text(cls, text: str, restrict_to_dependencies: bool = True) -> ScanState:
        return cls(
            scanner=Scanner(text),
            evaluation=EvaluationState(restrict_to_dependencies=restrict_to_dependencies),
        )
