"""Lexical units of PunyPy. A Token is a kind tag plus an optional payload (int for Int, str for Name and Indent).

Two tokens are equal if their kinds and payloads are equal: the source position a token was scanned at is kept for
error messages only.
"""

from dataclasses import dataclass, field
from enum import Enum


class Kind(Enum):
    Def = "def"
    Name = "name"
    Int = "Int"
    LParen = "LParen"
    RParen = "RParen"
    Plus = "Plus"
    Minus = "Minus"
    Colon = "Colon"
    Comma = "Comma"
    Equals = "Equals"
    Indent = "Indent"
    Eof = "EOF"

    def __str__(self):
        return self.value


PUNCTUATION = {
    "(": Kind.LParen,
    ")": Kind.RParen,
    "+": Kind.Plus,
    "-": Kind.Minus,
    ":": Kind.Colon,
    ",": Kind.Comma,
    "=": Kind.Equals,
}

KEYWORDS = {"def": Kind.Def}


@dataclass(frozen=True)
class Token:
    kind: Kind
    payload: object = None
    line: int = field(default=0, compare=False)
    column: int = field(default=0, compare=False)

    @property
    def lexeme(self):
        """Source text of this token ('' for Eof)."""
        if self.kind is Kind.Eof:
            return ""
        elif self.kind is Kind.Def:
            return "def"
        elif self.payload is not None:
            return str(self.payload)
        return next(char for char, kind in PUNCTUATION.items() if kind is self.kind)

    @property
    def starts_line(self):
        """Whether this token is the first token of an unindented line, i.e. where a top-level statement can start."""
        return self.column == 0 and self.kind is not Kind.Indent

    def __str__(self):
        if self.kind in (Kind.Name, Kind.Int):
            return f"{{{self.kind}, {self.payload}}}"
        elif self.kind is Kind.Indent:
            return f"{{{self.kind}, {len(self.payload)}}}"
        elif self.kind is Kind.Eof:
            return f"{{{self.kind}, Eof}}"
        elif self.kind is Kind.Def:
            return f"{{{self.kind}, }}"
        return f"{{{self.kind}, {self.lexeme}}}"
