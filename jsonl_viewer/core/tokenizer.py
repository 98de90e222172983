"""
Single-pass lexer for serialized JSON, used for colorized display.

The tokenizer is total: every character of the input ends up in exactly one
token, so joining the token texts gives back the input unchanged. It
classifies text lexically and does not validate it.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

PUNCTUATION = frozenset("{}[],:")
NUMBER_START = frozenset("-0123456789")
NUMBER_CHARS = frozenset("-0123456789.eE+")

# Same class as the \s of ECMAScript regular expressions. str.isspace also
# accepts the \x1c-\x1f separators and \x85, which stay "other" here.
WHITESPACE_CHARS = frozenset(
    "\t\n\x0b\x0c\r \xa0\u1680\u2000\u2001\u2002\u2003\u2004\u2005\u2006"
    "\u2007\u2008\u2009\u200a\u2028\u2029\u202f\u205f\u3000\ufeff"
)

# Literal words and the kind each one produces
LITERALS: tuple[tuple[str, str], ...] = (
    ("true", "boolean"),
    ("false", "boolean"),
    ("null", "null"),
)


class TokenKind(Enum):
    WHITESPACE = "whitespace"
    KEY = "key"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"
    PUNCTUATION = "punctuation"
    OTHER = "other"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str


def _skip_whitespace(text: str, pos: int) -> int:
    end = len(text)
    while pos < end and text[pos] in WHITESPACE_CHARS:
        pos += 1
    return pos


def _scan_string(text: str, pos: int) -> int:
    """Return the index just past the string starting at ``pos``.

    A backslash always takes the following character with it, so an escaped
    quote never closes the string. An unterminated string runs to the end.
    """
    end = len(text)
    pos += 1
    while pos < end and text[pos] != '"':
        if text[pos] == "\\" and pos + 1 < end:
            pos += 1
        pos += 1
    if pos < end:
        pos += 1
    return pos


def tokenize(text: str) -> list[Token]:
    """Split serialized JSON into typed tokens.

    Rules, tried in order at each position: whitespace run, string (a key
    when the next non-whitespace character is ``:``), number run, the
    literals ``true``/``false``/``null``, single punctuation character, and
    finally a single ``other`` character.

    Args:
        text: Any string, usually the output of a JSON serializer.

    Returns:
        Tokens in source order.

    Examples:
        >>> [(t.kind.value, t.text) for t in tokenize('{"k":"v"}')]
        [('punctuation', '{'), ('key', '"k"'), ('punctuation', ':'), ('string', '"v"'), ('punctuation', '}')]
    """
    tokens: list[Token] = []
    pos = 0
    end = len(text)

    while pos < end:
        char = text[pos]

        if char in WHITESPACE_CHARS:
            stop = _skip_whitespace(text, pos)
            tokens.append(Token(TokenKind.WHITESPACE, text[pos:stop]))
            pos = stop
            continue

        if char == '"':
            stop = _scan_string(text, pos)
            after = _skip_whitespace(text, stop)
            is_key = after < end and text[after] == ":"
            kind = TokenKind.KEY if is_key else TokenKind.STRING
            tokens.append(Token(kind, text[pos:stop]))
            pos = stop
            continue

        if char in NUMBER_START:
            stop = pos
            while stop < end and text[stop] in NUMBER_CHARS:
                stop += 1
            tokens.append(Token(TokenKind.NUMBER, text[pos:stop]))
            pos = stop
            continue

        literal = _match_literal(text, pos)
        if literal is not None:
            word, kind = literal
            tokens.append(Token(TokenKind(kind), word))
            pos += len(word)
            continue

        if char in PUNCTUATION:
            tokens.append(Token(TokenKind.PUNCTUATION, char))
        else:
            tokens.append(Token(TokenKind.OTHER, char))
        pos += 1

    return tokens


def _match_literal(text: str, pos: int) -> tuple[str, str] | None:
    for word, kind in LITERALS:
        if text.startswith(word, pos):
            return word, kind
    return None
