"""Skip helpers for constructs that contribute nothing to the output.

Function calls, function definitions and ``if`` statements are consumed
without being parsed. Every loop here stops at end of buffer, so truncated
input cannot hang the parser.
"""

from __future__ import annotations

from gradle_to_json.parser.lexemes import (
    KEYWORD_ELSE,
    KEYWORD_IF,
    QUOTE_CHARS,
    is_comment_start,
)
from gradle_to_json.parser.state import CommentState, QuoteState, Scanner


def _is_name_char(ch: str) -> bool:
    return ch.isalnum() or ch == "_"


def _at_word(scanner: Scanner, word: str) -> bool:
    return scanner.startswith(word) and not _is_name_char(scanner.peek(len(word)))


def skip_comment(scanner: Scanner) -> bool:
    """Consume a comment starting at the cursor; return False if there is none."""
    opener = scanner.peek() + scanner.peek(1)
    if not is_comment_start(opener):
        return False
    scanner.advance()
    scanner.advance()
    comment = CommentState()
    comment.enter(opener)
    while not scanner.at_end():
        if comment.feed(scanner.advance()):
            break
    return True


def skip_balanced(scanner: Scanner, opener: str, closer: str) -> str:
    """Consume from *opener* through its matching *closer* and return the text.

    Leading whitespace is skipped first. If the next character is not
    *opener*, nothing is consumed. Delimiters inside quoted strings and
    comments are not counted. Stops at end of buffer when unbalanced.
    """
    scanner.skip_whitespace()
    if scanner.peek() != opener:
        return ""

    start = scanner.pos
    depth = 0
    quote = QuoteState()
    previous = ""
    while not scanner.at_end():
        if not quote.open and skip_comment(scanner):
            previous = ""
            continue
        ch = scanner.advance()
        if quote.open or ch in QUOTE_CHARS:
            quote.track(ch, previous)
        elif ch == opener:
            depth += 1
        elif ch == closer:
            depth -= 1
            if depth == 0:
                break
        previous = ch
    return scanner.text[start:scanner.pos]


def skip_parentheses(scanner: Scanner) -> str:
    return skip_balanced(scanner, "(", ")")


def skip_braces(scanner: Scanner) -> str:
    return skip_balanced(scanner, "{", "}")


def _skip_rest_of_line(scanner: Scanner) -> None:
    while not scanner.at_end() and scanner.peek() != "\n":
        scanner.advance()


def _skip_branch(scanner: Scanner) -> None:
    # braced body, or a single statement on the following text
    scanner.skip_whitespace()
    if scanner.peek() == "{":
        skip_braces(scanner)
    else:
        _skip_rest_of_line(scanner)


def skip_if_statement(scanner: Scanner) -> None:
    """Skip ``(cond) {...}`` after an ``if`` keyword, plus any else branches."""
    skip_parentheses(scanner)
    _skip_branch(scanner)
    while True:
        resume = scanner.pos
        scanner.skip_whitespace()
        if not _at_word(scanner, KEYWORD_ELSE):
            scanner.pos = resume
            return
        scanner.pos += len(KEYWORD_ELSE)
        scanner.skip_whitespace()
        if _at_word(scanner, KEYWORD_IF):
            scanner.pos += len(KEYWORD_IF)
            skip_parentheses(scanner)
            _skip_branch(scanner)
            continue
        _skip_branch(scanner)
        return


def resolve_declaration(scanner: Scanner) -> str:
    """Handle the text after ``def`` or a type name.

    For a variable declaration (``def name = ...``) the declared name is
    returned and the cursor is left on the ``=``. For a function definition
    (``def name(args) { ... }``) the parameter list and body are skipped and
    an empty name is returned. A declaration without ``=`` ends at the
    newline, which is left unconsumed.
    """
    start = scanner.pos
    while not scanner.at_end():
        ch = scanner.peek()
        if ch in ("=", "\n"):
            break
        if ch == "(":
            skip_parentheses(scanner)
            resume = scanner.pos
            scanner.skip_whitespace()
            if scanner.peek() == "{":
                skip_braces(scanner)
            else:
                scanner.pos = resume
            return ""
        scanner.advance()
    tokens = scanner.text[start:scanner.pos].split()
    return tokens[-1] if tokens else ""
