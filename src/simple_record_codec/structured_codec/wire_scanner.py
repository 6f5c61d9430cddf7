"""Tokenizer for the textual wire format."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from enum import Enum

from .codec_errors import ROOT_PATH, IncompleteInputError, MalformedInputError

_NUMBER_PATTERN = re.compile(r"-inf\b|-?\d+(?:\.\d+)?(?:[eE][+-]?\d+)?")
_WORD_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_.\-]*")
_JSON_DECODER = json.JSONDecoder()

_PUNCTUATION = {
    "{": "LBRACE",
    "}": "RBRACE",
    "[": "LBRACKET",
    "]": "RBRACKET",
    ":": "COLON",
    ",": "COMMA",
}


class TokenKind(str, Enum):
    """Lexical token kinds."""

    LBRACE = "'{'"
    RBRACE = "'}'"
    LBRACKET = "'['"
    RBRACKET = "']'"
    COLON = "':'"
    COMMA = "','"
    STRING = "string"
    NUMBER = "number"
    WORD = "word"
    END = "end of input"


@dataclass(frozen=True)
class Token:
    """One scanned token with its source position."""

    kind: TokenKind
    lexeme: str
    value: object
    line: int
    column: int


class WireScanner:
    """Pull-based scanner over wire-format text.

    Whitespace and ``#`` comments are skipped between tokens.
    """

    def __init__(self, text: str) -> None:
        self._text = text
        self._offset = 0
        self._line = 1
        self._line_start = 0
        self._lookahead: Token | None = None

    def peek(self) -> Token:
        if self._lookahead is None:
            self._lookahead = self._scan()
        return self._lookahead

    def next(self) -> Token:
        token = self.peek()
        self._lookahead = None
        return token

    def expect(self, kind: TokenKind, *, path: str = ROOT_PATH) -> Token:
        """Consume a token of `kind` or raise a positioned decode error."""
        token = self.next()
        if token.kind == kind:
            return token
        if token.kind == TokenKind.END:
            raise IncompleteInputError(
                kind.value, line=token.line, column=token.column, path=path
            )
        raise MalformedInputError(
            f"expected {kind.value} but found {token.lexeme!r}",
            line=token.line,
            column=token.column,
            path=path,
        )

    def skip_commas(self) -> None:
        while self.peek().kind == TokenKind.COMMA:
            self.next()

    def _scan(self) -> Token:
        self._skip_trivia()
        start = self._offset
        line, column = self._position(start)
        if start >= len(self._text):
            return Token(TokenKind.END, "", None, line, column)

        char = self._text[start]
        if char in _PUNCTUATION:
            self._offset += 1
            return Token(TokenKind[_PUNCTUATION[char]], char, None, line, column)
        if char == '"':
            return self._scan_string(start, line, column)

        number = _NUMBER_PATTERN.match(self._text, start)
        if number:
            self._offset = number.end()
            return Token(TokenKind.NUMBER, number.group(), number.group(), line, column)
        word = _WORD_PATTERN.match(self._text, start)
        if word:
            self._offset = word.end()
            return Token(TokenKind.WORD, word.group(), word.group(), line, column)
        raise MalformedInputError(f"unexpected character {char!r}", line=line, column=column)

    def _scan_string(self, start: int, line: int, column: int) -> Token:
        try:
            value, end = _JSON_DECODER.raw_decode(self._text, start)
        except json.JSONDecodeError as exc:
            if exc.msg.startswith("Unterminated string"):
                raise IncompleteInputError(
                    "closing '\"'", line=line, column=column
                ) from exc
            error_line, error_column = self._position(exc.pos)
            raise MalformedInputError(
                f"invalid string literal: {exc.msg}", line=error_line, column=error_column
            ) from exc
        self._offset = end
        return Token(TokenKind.STRING, self._text[start:end], value, line, column)

    def _skip_trivia(self) -> None:
        text = self._text
        while self._offset < len(text):
            char = text[self._offset]
            if char == "\n":
                self._offset += 1
                self._line += 1
                self._line_start = self._offset
            elif char.isspace():
                self._offset += 1
            elif char == "#":
                newline = text.find("\n", self._offset)
                self._offset = len(text) if newline == -1 else newline
            else:
                break

    def _position(self, offset: int) -> tuple[int, int]:
        # Tokens never span a newline, so the running line counters stay valid.
        return self._line, offset - self._line_start + 1
