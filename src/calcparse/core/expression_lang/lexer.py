"""
Lexer for calcparse arithmetic expressions.

Reads a character stream strictly forward and keeps exactly one token of
lookahead. Unlike a list-producing tokenizer, the lexer never materialises
the token sequence, so inputs of many megabytes are scanned in constant
memory.
"""

from __future__ import annotations

import codecs
import io
from enum import StrEnum, auto
from typing import IO

Source = str | IO[str] | IO[bytes]

_CHUNK_SIZE = 64 * 1024
_DIGITS = "0123456789"


class TokenKind(StrEnum):
    """Token types produced by the lexer."""

    EOF = auto()
    IDENT = auto()
    INT = auto()
    FLOAT = auto()
    # Any other single character: operators, parentheses, stray punctuation
    SYMBOL = auto()


class Token:
    """A single token from the lexer."""

    __slots__ = ("kind", "value", "pos")

    def __init__(self, kind: TokenKind, value: str, pos: int) -> None:
        self.kind = kind
        self.value = value
        self.pos = pos

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.value!r}, pos={self.pos})"


class _CharReader:
    """Forward-only character source over a str, text stream, or byte stream."""

    def __init__(self, source: Source) -> None:
        if isinstance(source, str):
            source = io.StringIO(source)
        self._stream = source
        self._decoder: codecs.IncrementalDecoder | None = None
        self._buf = ""
        self._idx = 0
        self._offset = 0  # absolute position of _buf[0]
        self._exhausted = False

    @property
    def pos(self) -> int:
        return self._offset + self._idx

    def peek(self) -> str:
        """Return the next character without consuming it ("" at end)."""
        if self._idx >= len(self._buf) and not self._fill():
            return ""
        return self._buf[self._idx]

    def take(self) -> str:
        ch = self.peek()
        if ch:
            self._idx += 1
        return ch

    def _fill(self) -> bool:
        while not self._exhausted:
            chunk = self._stream.read(_CHUNK_SIZE)
            if not chunk:
                self._exhausted = True
            if isinstance(chunk, (bytes, bytearray)):
                if self._decoder is None:
                    self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
                text = self._decoder.decode(chunk, final=not chunk)
            else:
                text = chunk
            if text:
                self._offset += len(self._buf)
                self._buf = text
                self._idx = 0
                return True
        return False


class Lexer:
    """
    One-token-lookahead lexer.

    ``advance()`` scans the next token and overwrites the current one; no
    history is kept. Whitespace is skipped. Malformed numbers such as ``1e``
    are still emitted as FLOAT tokens: the parser reports them when it
    converts the text.
    """

    def __init__(self, source: Source) -> None:
        self._reader = _CharReader(source)
        self.token = Token(TokenKind.EOF, "", 0)

    @property
    def text(self) -> str:
        """Literal text of the current token."""
        return self.token.value

    @property
    def kind(self) -> TokenKind:
        return self.token.kind

    def advance(self) -> Token:
        """Consume the next token from the stream and make it current."""
        reader = self._reader
        ch = reader.peek()
        while ch and ch.isspace():
            reader.take()
            ch = reader.peek()

        start = reader.pos
        if not ch:
            self.token = Token(TokenKind.EOF, "", start)
        elif ch in _DIGITS:
            self.token = self._scan_number(start)
        elif ch == ".":
            reader.take()
            nxt = reader.peek()
            if nxt and nxt in _DIGITS:
                self.token = self._scan_number(start, prefix=".")
            else:
                self.token = Token(TokenKind.SYMBOL, ".", start)
        elif ch.isalpha() or ch == "_":
            self.token = self._scan_ident(start)
        else:
            reader.take()
            self.token = Token(TokenKind.SYMBOL, ch, start)
        return self.token

    def describe(self) -> str:
        """Describe the current token for error messages."""
        tok = self.token
        if tok.kind == TokenKind.EOF:
            return "end of file"
        if tok.kind == TokenKind.IDENT:
            return f"identifier {tok.value}"
        if tok.kind in (TokenKind.INT, TokenKind.FLOAT):
            return f"number {tok.value}"
        return repr(tok.value)

    def __str__(self) -> str:
        return self.describe()

    # -- Scanners --

    def _read_digits(self, chars: list[str]) -> None:
        reader = self._reader
        while reader.peek() and reader.peek() in _DIGITS:
            chars.append(reader.take())

    def _scan_number(self, start: int, prefix: str = "") -> Token:
        """Scan ``123``, ``1.5``, ``.5``, ``1.``, ``1e9``, ``2.5E-3``."""
        reader = self._reader
        chars = [prefix] if prefix else []
        kind = TokenKind.FLOAT if prefix else TokenKind.INT

        self._read_digits(chars)
        if not prefix and reader.peek() == ".":
            chars.append(reader.take())
            kind = TokenKind.FLOAT
            self._read_digits(chars)

        if reader.peek() in ("e", "E"):
            chars.append(reader.take())
            kind = TokenKind.FLOAT
            if reader.peek() in ("+", "-"):
                chars.append(reader.take())
            self._read_digits(chars)

        return Token(kind, "".join(chars), start)

    def _scan_ident(self, start: int) -> Token:
        reader = self._reader
        chars: list[str] = []
        while reader.peek() and (reader.peek().isalnum() or reader.peek() == "_"):
            chars.append(reader.take())
        return Token(TokenKind.IDENT, "".join(chars), start)
