"""
Colorized JSON display built on the tokenizer.
"""

from __future__ import annotations

from rich.text import Text
from textual.widgets import Static

from jsonl_viewer.core import TokenKind, tokenize

# Rich style per token kind
TOKEN_STYLES: dict[TokenKind, str] = {
    TokenKind.WHITESPACE: "",
    TokenKind.KEY: "bold #9cdcfe",
    TokenKind.STRING: "#ce9178",
    TokenKind.NUMBER: "#b5cea8",
    TokenKind.BOOLEAN: "#569cd6",
    TokenKind.NULL: "italic #569cd6",
    TokenKind.PUNCTUATION: "#808080",
    TokenKind.OTHER: "",
}


def highlight_json(text: str) -> Text:
    """Turn serialized JSON into a styled rich Text.

    The plain text of the result is exactly ``text``.
    """
    highlighted = Text(no_wrap=False)
    for token in tokenize(text):
        highlighted.append(token.text, style=TOKEN_STYLES[token.kind])
    return highlighted


class JsonSyntaxView(Static):
    """Static widget showing pretty JSON with token colors."""

    DEFAULT_CSS = """
    JsonSyntaxView {
        width: auto;
        padding: 0 1;
    }
    """

    def show_json(self, text: str) -> None:
        self.update(highlight_json(text))
