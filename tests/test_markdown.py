"""Tests for the markdown-it-py tokenizer adapter."""

from mdplayscript.markdown import tokenize, split_custom_id
from mdplayscript.models import (
    Token,
    BLOCK_START,
    BLOCK_END,
    INLINE_START,
    INLINE_END,
    SOFTBREAK,
    TEXT,
    text,
    raw,
)

P_OPEN = Token(kind=BLOCK_START, tag="p")
P_CLOSE = Token(kind=BLOCK_END, tag="p")


def test_paragraph_text():
    assert list(tokenize("A> Hello!")) == [P_OPEN, text("A> Hello!"), P_CLOSE]


def test_softbreak_between_lines():
    assert list(tokenize("Monologue\n(direction)")) == [
        P_OPEN, text("Monologue"), Token(kind=SOFTBREAK), text("(direction)"), P_CLOSE,
    ]


def test_escapes_are_separate_runs():
    assert list(tokenize("A\\> b")) == [
        P_OPEN, text("A"), Token(kind=TEXT, content=">", escaped=True), text(" b"), P_CLOSE,
    ]


def test_entity_is_escaped_run():
    assert list(tokenize("a &amp; b")) == [
        P_OPEN, text("a "), Token(kind=TEXT, content="&", escaped=True), text(" b"), P_CLOSE,
    ]


def test_html_block_is_raw():
    tokens = list(tokenize("<!-- playscript-on -->\n\nA> Hi"))
    assert tokens[0] == raw("<!-- playscript-on -->\n")
    assert tokens[1:] == [P_OPEN, text("A> Hi"), P_CLOSE]


def test_inline_html_is_raw():
    tokens = list(tokenize("Hi <!-- playscript-off --> there"))
    assert raw("<!-- playscript-off -->") in tokens


def test_emphasis():
    assert list(tokenize("A> *Good!*")) == [
        P_OPEN,
        text("A> "),
        Token(kind=INLINE_START, tag="em"),
        text("Good!"),
        Token(kind=INLINE_END, tag="em"),
        P_CLOSE,
    ]


def test_code_span():
    tokens = list(tokenize("Call `f(x)` now"))
    assert tokens[2:5] == [
        Token(kind=INLINE_START, tag="code"),
        text("f(x)"),
        Token(kind=INLINE_END, tag="code"),
    ]


def test_fence_with_language():
    tokens = list(tokenize("```rust\nfn f() {}\n```\n"))
    assert tokens == [
        Token(kind=BLOCK_START, tag="pre"),
        Token(kind=INLINE_START, tag="code", attrs={"class": "language-rust"}),
        text("fn f() {}\n"),
        Token(kind=INLINE_END, tag="code"),
        Token(kind=BLOCK_END, tag="pre"),
    ]


def test_link_attrs():
    tokens = list(tokenize("[home](http://example.com)"))
    assert tokens[1] == Token(kind=INLINE_START, tag="a", attrs={"href": "http://example.com"})
    assert tokens[3] == Token(kind=INLINE_END, tag="a")


def test_image_is_void():
    tokens = list(tokenize("![a cat](cat.png)"))
    assert tokens[1] == Token(kind=INLINE_START, tag="img", attrs={"src": "cat.png", "alt": "a cat"})
    assert tokens[2] == P_CLOSE


def test_heading_custom_id():
    assert list(tokenize("## Heading B {#section_b}")) == [
        Token(kind=BLOCK_START, tag="h2", attrs={"id": "section_b"}),
        text("Heading B"),
        Token(kind=BLOCK_END, tag="h2"),
    ]


def test_heading_without_custom_id():
    assert list(tokenize("# Act I")) == [
        Token(kind=BLOCK_START, tag="h1"),
        text("Act I"),
        Token(kind=BLOCK_END, tag="h1"),
    ]


def test_tight_list_paragraphs_hidden():
    tokens = list(tokenize("- A> Hi\n- B"))
    paragraphs = [t for t in tokens if t.tag == "p"]
    assert paragraphs
    assert all(t.hidden for t in paragraphs)


def test_horizontal_rule():
    assert list(tokenize("***\n")) == [Token(kind=BLOCK_START, tag="hr")]


def test_split_custom_id():
    assert split_custom_id("Heading B {#section_b}") == ("Heading B", "section_b")
    assert split_custom_id("Heading") == ("Heading", None)
    assert split_custom_id("Broken {#id") == ("Broken {#id", None)
