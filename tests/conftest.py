"""Shared fixtures for play script filter tests."""

import pytest

from mdplayscript.models import Token, BLOCK_START, BLOCK_END, SOFTBREAK, text, raw
from mdplayscript.session import Session


@pytest.fixture
def session():
    """A fresh filtering session with default options."""
    return Session()


@pytest.fixture
def dialogue_tokens():
    """Two speech paragraphs around a narrative paragraph."""
    return [
        Token(kind=BLOCK_START, tag="p"),
        text("A> Hello! (waving)"),
        Token(kind=BLOCK_END, tag="p"),
        Token(kind=BLOCK_START, tag="p"),
        text("The curtain falls."),
        Token(kind=BLOCK_END, tag="p"),
        Token(kind=BLOCK_START, tag="p"),
        text("B (running)> Wait!"),
        Token(kind=SOFTBREAK),
        text("Wait for me!"),
        Token(kind=BLOCK_END, tag="p"),
        raw("<!-- a note -->\n"),
    ]


@pytest.fixture
def play_file(tmp_path):
    """Write a small Markdown play script and return its path."""
    path = tmp_path / "figaro.md"
    path.write_text(
        "# Act I\n\n"
        "Figaro> Nineteen feet by twenty-six.\n\n"
        "Susanna> What are you measuring? (tying her hat)\n\n"
        "Figaro> The bed.\n",
        encoding="utf-8",
    )
    return str(path)
