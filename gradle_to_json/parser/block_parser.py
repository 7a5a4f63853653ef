"""BlockParser: recursive character-level parser for build-script bodies.

One call to :meth:`BlockParser.parse_block` consumes a ``{ ... }`` body (or
the whole buffer at top level) and returns its key/value mapping, recursing
for nested blocks. Lexical contexts interact in a fixed priority order:

1. an active comment swallows everything until it ends;
2. an active ``$name`` / ``${name}`` interpolation captures the name;
3. newline ends the current statement;
4. ``//`` or ``/*`` outside quotes flushes the statement and opens a comment;
5. ``$`` starts interpolation (where permitted);
6. quoted text is literal;
7. ``(`` in key position is a call (discarded, or kept for repositories);
8. ``[`` as the first value character is an array literal;
9. ``{`` opens a nested block, ``}`` closes the current one;
10. a blank or ``=`` ends the key, handling ``def`` / type / ``if`` keywords.

The parser never rejects input: unsupported constructs degrade to string
values or are skipped.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import structlog

from gradle_to_json.parser.closures import CLOSURE_PARSERS, parse_array
from gradle_to_json.parser.lexemes import (
    KEYWORD_IF,
    CharClass,
    classify,
    is_comment_start,
    is_declaration_keyword,
    is_delimiter,
    is_eval_terminator,
    is_whitespace,
)
from gradle_to_json.parser.skip import resolve_declaration, skip_if_statement, skip_parentheses
from gradle_to_json.parser.state import ScanState
from gradle_to_json.parser.values import (
    add_value,
    coerce_scalar,
    deep_merge,
    merge_into,
    trim_wrapping_quotes,
)
from gradle_to_json.parser.variables import VariableTable

log = structlog.get_logger("gradle_to_json.parser")

DEPENDENCIES_KEY = "dependencies"

# Blocks whose entries become interpolation variables once parsed.
GLOBAL_VARIABLE_BLOCKS = frozenset({"buildscript", "configure", "ext", "project.ext"})


@dataclass
class _Statement:
    """Key/value accumulators for the statement being scanned."""

    key: str = ""
    buffer: str = ""
    parsing_key: bool = True

    def reset(self) -> None:
        self.key = ""
        self.buffer = ""
        self.parsing_key = True


class BlockParser:
    """Parse one buffer, sharing a :class:`ScanState` across nested blocks.

    The :class:`VariableTable` is passed in rather than owned, so earlier
    passes (root files, a first pass over the same file) can feed
    interpolation in this one.
    """

    def __init__(self, state: ScanState, variables: VariableTable) -> None:
        self.state = state
        self.scanner = state.scanner
        self.variables = variables

    def parse(self) -> dict[str, Any]:
        """Parse the whole buffer from the cursor as a top-level body."""
        return self.parse_block(top_level=True)

    def parse_block(
        self,
        keep_function_calls: bool = False,
        skip_empty_values: bool = True,
        *,
        top_level: bool = False,
    ) -> dict[str, Any]:
        """Parse a block body up to its closing ``}`` (or end of buffer).

        Args:
            keep_function_calls: Keep call statements such as ``jcenter()``
                as keys instead of discarding them.
            skip_empty_values: Omit keys whose value is empty.
            top_level: A stray ``}`` is ignored instead of ending the parse.
        """
        scanner = self.scanner
        quote = self.state.quote
        comment = self.state.comment
        evaluation = self.state.evaluation

        out: dict[str, Any] = {}
        stmt = _Statement()
        at_line_start = True
        previous = ""

        while not scanner.at_end():
            ch = scanner.peek()
            kind = classify(ch)

            if comment.active:
                scanner.advance()
                if comment.feed(ch):
                    at_line_start = True
                continue

            if evaluation.active:
                if evaluation.brace_delimited:
                    if kind is CharClass.BLOCK_END:
                        scanner.advance()
                        self._finish_interpolation(stmt)
                        previous = ch
                        continue
                    if kind is not CharClass.NEWLINE:
                        scanner.advance()
                        evaluation.feed(ch)
                        continue
                    self._abandon_interpolation(stmt)
                elif is_eval_terminator(ch):
                    # the terminator is then handled like any other character
                    self._finish_interpolation(stmt)
                else:
                    scanner.advance()
                    evaluation.feed(ch)
                    previous = ch
                    continue

            if kind is CharClass.NEWLINE:
                scanner.advance()
                self._end_statement(out, stmt, skip_empty_values)
                quote.reset()
                at_line_start = True
                previous = ch
                continue

            if at_line_start and is_whitespace(ch):
                scanner.advance()
                continue
            at_line_start = False

            opener = ch + scanner.peek(1)
            if not quote.open and is_comment_start(opener):
                self._end_statement(out, stmt, skip_empty_values)
                scanner.advance()
                scanner.advance()
                comment.enter(opener)
                continue

            if kind is CharClass.EVAL_START and evaluation.permitted and previous != "\\":
                scanner.advance()
                if scanner.peek() == "{":
                    scanner.advance()
                    evaluation.start(brace_delimited=True)
                else:
                    evaluation.start()
                continue

            if quote.open or kind is CharClass.QUOTE:
                scanner.advance()
                quote.track(ch, previous)
                stmt.buffer += ch
                previous = ch
                continue

            if stmt.parsing_key and kind is CharClass.PAREN_OPEN:
                if stmt.buffer == KEYWORD_IF:
                    skip_if_statement(scanner)
                    stmt.reset()
                elif keep_function_calls:
                    self._capture_call(out, stmt, skip_empty_values)
                else:
                    skip_parentheses(scanner)
                    stmt.reset()
                previous = ""
                continue

            if not stmt.parsing_key and not stmt.buffer and kind is CharClass.ARRAY_START:
                self._put(out, stmt.key, parse_array(scanner))
                stmt.key = ""
                previous = ""
                continue

            if kind is CharClass.BLOCK_START:
                scanner.advance()
                self._open_block(out, stmt, keep_function_calls, skip_empty_values)
                stmt.reset()
                at_line_start = True
                previous = ""
                continue

            if kind is CharClass.BLOCK_END:
                scanner.advance()
                self._end_statement(out, stmt, skip_empty_values)
                if top_level:
                    log.debug("parser.stray_block_end", pos=scanner.pos)
                    continue
                return out

            if stmt.parsing_key and is_delimiter(ch):
                scanner.advance()
                previous = ch
                if stmt.buffer:
                    self._end_key(stmt)
                continue

            scanner.advance()
            previous = ch
            if not stmt.buffer and (is_delimiter(ch) or ch == "\r"):
                continue
            stmt.buffer += ch

        if evaluation.active:
            if evaluation.brace_delimited:
                self._abandon_interpolation(stmt)
            else:
                self._finish_interpolation(stmt)
        self._end_statement(out, stmt, skip_empty_values)
        return out

    # ── statements ───────────────────────────────────────────────────────

    def _end_key(self, stmt: _Statement) -> None:
        """The key token is complete; dispatch keywords or switch to value mode."""
        token = stmt.buffer
        if is_declaration_keyword(token):
            name = resolve_declaration(self.scanner)
            stmt.reset()
            if name:
                stmt.key = name
                stmt.parsing_key = False
            return
        if token == KEYWORD_IF:
            skip_if_statement(self.scanner)
            stmt.reset()
            return
        stmt.key = token
        stmt.buffer = ""
        stmt.parsing_key = False

    def _end_statement(self, out: dict[str, Any], stmt: _Statement, skip_empty_values: bool) -> None:
        # a bare word on its own line becomes a key with an empty value
        if not stmt.key and stmt.buffer:
            stmt.key = stmt.buffer.strip()
            stmt.buffer = ""
        self._store(out, stmt.key, stmt.buffer, skip_empty_values)
        stmt.reset()

    def _store(self, out: dict[str, Any], key: str, raw: str, skip_empty_values: bool) -> None:
        text = raw.strip()
        if not key or (not text and skip_empty_values):
            return
        self._put(out, key, coerce_scalar(trim_wrapping_quotes(text)))

    def _put(self, out: dict[str, Any], key: str, value: Any) -> None:
        # values stored inside dependencies double as interpolation variables
        add_value(out, key, value)
        if self.state.evaluation.dependencies_context:
            self.variables.set(key, value)

    def _capture_call(self, out: dict[str, Any], stmt: _Statement, skip_empty_values: bool) -> None:
        """Keep ``name(args)`` as a key; it ends the statement unless a ``{`` follows."""
        stmt.key = stmt.buffer + skip_parentheses(self.scanner)
        stmt.buffer = ""
        stmt.parsing_key = False
        self.scanner.skip_blanks()
        if self.scanner.peek() != "{":
            self._store(out, stmt.key, "", skip_empty_values)
            stmt.reset()

    # ── blocks ───────────────────────────────────────────────────────────

    def _open_block(
        self,
        out: dict[str, Any],
        stmt: _Statement,
        keep_function_calls: bool,
        skip_empty_values: bool,
    ) -> None:
        """Parse the body after ``{`` and store it under the statement's key."""
        key = stmt.key or stmt.buffer.strip()

        closure = CLOSURE_PARSERS.get(key)
        if closure is not None:
            result = closure(self)
            existing = out.get(key)
            if isinstance(existing, list) and isinstance(result, list):
                existing.extend(result)
            else:
                out[key] = result
            return

        evaluation = self.state.evaluation
        outer_context = evaluation.dependencies_context
        if key == DEPENDENCIES_KEY:
            evaluation.dependencies_context = True
        nested = self.parse_block(keep_function_calls, skip_empty_values)
        evaluation.dependencies_context = outer_context

        if not key:
            # anonymous body, e.g. after a discarded configure(allprojects) call
            merge_into(out, nested)
            self.variables.update(nested, ext_only=True)
            return

        existing = out.get(key)
        if isinstance(existing, dict):
            out[key] = deep_merge(existing, nested)
        else:
            out[key] = nested

        if key in GLOBAL_VARIABLE_BLOCKS:
            self.variables.update(out[key])
            log.debug("parser.global_variables", block=key, count=len(out[key]))

    # ── interpolation ────────────────────────────────────────────────────

    def _finish_interpolation(self, stmt: _Statement) -> None:
        evaluation = self.state.evaluation
        stmt.buffer += self.variables.resolve(evaluation.name, evaluation.source_text())
        evaluation.finish()

    def _abandon_interpolation(self, stmt: _Statement) -> None:
        # ${name without its closing brace: keep the text as written
        evaluation = self.state.evaluation
        stmt.buffer += "${" + evaluation.name
        evaluation.finish()
