"""Character and lexeme classification for the build-script scanner."""

from __future__ import annotations

from enum import Enum, auto


class CharClass(Enum):
    """Lexical category of a single character."""

    WHITESPACE = auto()
    NEWLINE = auto()
    DELIMITER = auto()
    QUOTE = auto()
    BLOCK_START = auto()
    BLOCK_END = auto()
    ARRAY_START = auto()
    ARRAY_END = auto()
    PAREN_OPEN = auto()
    PAREN_CLOSE = auto()
    EVAL_START = auto()
    SLASH = auto()
    OTHER = auto()


_CHAR_CLASSES: dict[str, CharClass] = {
    " ": CharClass.WHITESPACE,
    "\t": CharClass.WHITESPACE,
    "\r": CharClass.WHITESPACE,
    "\n": CharClass.NEWLINE,
    "=": CharClass.DELIMITER,
    '"': CharClass.QUOTE,
    "'": CharClass.QUOTE,
    "{": CharClass.BLOCK_START,
    "}": CharClass.BLOCK_END,
    "[": CharClass.ARRAY_START,
    "]": CharClass.ARRAY_END,
    "(": CharClass.PAREN_OPEN,
    ")": CharClass.PAREN_CLOSE,
    "$": CharClass.EVAL_START,
    "/": CharClass.SLASH,
}

QUOTE_CHARS = frozenset({'"', "'"})

KEYWORD_DEF = "def"
KEYWORD_IF = "if"
KEYWORD_ELSE = "else"

TYPE_KEYWORDS = frozenset(
    {
        "String",
        "int",
        "long",
        "short",
        "byte",
        "char",
        "float",
        "double",
        "boolean",
        "Integer",
        "Long",
        "Float",
        "Double",
        "Boolean",
        "Object",
    }
)


def classify(ch: str) -> CharClass:
    """Return the lexical category of *ch* (``OTHER`` when not special)."""
    return _CHAR_CLASSES.get(ch, CharClass.OTHER)


def is_whitespace(ch: str) -> bool:
    return classify(ch) in (CharClass.WHITESPACE, CharClass.NEWLINE)


def is_delimiter(ch: str) -> bool:
    """Key/value separators: blanks and ``=``."""
    return ch in (" ", "\t", "=")


def is_comment_start(snippet: str) -> bool:
    return snippet in ("//", "/*")


def is_single_line_comment(snippet: str) -> bool:
    return snippet == "//"


def is_type_keyword(token: str) -> bool:
    return token in TYPE_KEYWORDS


def is_declaration_keyword(token: str) -> bool:
    """``def`` or a type name, both of which introduce a declaration."""
    return token == KEYWORD_DEF or is_type_keyword(token)


def is_keyword(token: str) -> bool:
    return token == KEYWORD_IF or is_declaration_keyword(token)


EVAL_TERMINATORS = frozenset({" ", "\t", "\r", "\n", "/", ":", ";", '"', "'"})


def is_eval_terminator(ch: str) -> bool:
    """Characters that end a bare ``$name``; end of buffer (``""``) does too."""
    return not ch or ch in EVAL_TERMINATORS
