"""CLI interface: convert play scripts to HTML and inspect token streams."""

import argparse
import json
import logging
import os
import sys
from dataclasses import asdict
from itertools import islice

from mdplayscript.config import load_options, sidecar_path
from mdplayscript.constants import VERSION
from mdplayscript.exporter import render_html, render_page, export
from mdplayscript.filter import filter_tokens
from mdplayscript.markdown import tokenize
from mdplayscript.models import Options
from mdplayscript.session import Session


def _read_input(file_path: str) -> str:
    """Read the play script, exiting on a missing or empty file."""
    if not os.path.exists(file_path):
        print(f"Error: File not found: {file_path}", file=sys.stderr)
        raise SystemExit(1)

    with open(file_path, encoding="utf-8") as f:
        text = f.read()

    if not text.strip():
        print(f"Error: File is empty: {file_path}", file=sys.stderr)
        raise SystemExit(1)
    return text


def _resolve_options(args) -> Options:
    """Options from --config, else from the sidecar file next to the input."""
    path = args.config or sidecar_path(args.file)
    if args.config and not os.path.exists(path):
        print(f"Error: Options file not found: {path}", file=sys.stderr)
        raise SystemExit(1)
    try:
        return load_options(path)
    except ValueError as e:
        print(f"Error: Invalid options file {path}: {e}", file=sys.stderr)
        raise SystemExit(1)


def cmd_convert(args):
    """Convert a Markdown play script to an HTML page."""
    text = _read_input(args.file)
    session = Session(options=_resolve_options(args))

    body = render_html(filter_tokens(tokenize(text), session))
    page = render_page(body, title=args.title, authors=args.authors, language=args.language)

    if not args.output:
        sys.stdout.write(page)
        return

    output_path = export(page, args.output)
    speeches = sum(session.anchors.count(name) for name in session.anchors.characters())
    print(f"Wrote {output_path}")
    print(f"Converted {speeches} speeches by {len(session.anchors.characters())} characters")


def cmd_tokens(args):
    """Dump the token stream, one JSON object per line."""
    text = _read_input(args.file)
    tokens = tokenize(text)
    if args.filtered:
        tokens = filter_tokens(tokens, Session(options=_resolve_options(args)))
    if args.limit:
        tokens = islice(tokens, args.limit)
    for token in tokens:
        print(json.dumps(asdict(token), ensure_ascii=False))


def main():
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="mdplayscript",
        description="Render Markdown play scripts as HTML",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log directives and speeches")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # convert
    convert_parser = subparsers.add_parser("convert", help="Convert a play script to HTML")
    convert_parser.add_argument("file", help="Path to the Markdown play script")
    convert_parser.add_argument("-l", "--language", default="", help="Language code; 'ja' selects the Japanese stylesheet")
    convert_parser.add_argument("-t", "--title", default="", help="Title of the play")
    convert_parser.add_argument("--authors", nargs="*", default=[], help="Authors of the play")
    convert_parser.add_argument("-o", "--output", help="Write the page here instead of stdout")
    convert_parser.add_argument("-c", "--config", help="JSON options file (default: <file>.playscript.json)")
    convert_parser.set_defaults(func=cmd_convert)

    # tokens
    tokens_parser = subparsers.add_parser("tokens", help="Dump the token stream as JSON lines")
    tokens_parser.add_argument("file", help="Path to the Markdown play script")
    tokens_parser.add_argument("--filtered", action="store_true", help="Dump the tokens after the play script filter")
    tokens_parser.add_argument("-n", "--limit", type=int, default=0, help="Stop after this many tokens")
    tokens_parser.add_argument("-c", "--config", help="JSON options file (default: <file>.playscript.json)")
    tokens_parser.set_defaults(func=cmd_tokens)

    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if not args.command:
        parser.print_help()
        return

    args.func(args)
