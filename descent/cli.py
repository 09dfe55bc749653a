"""
Command line entry point: analyze one expression and print the result as JSON.

Usage:
    descent "(3+5)*2"
    descent --indent 0 -v "a * (b - 1)"
    descent --grammar

Author: xwest
"""

import sys
import json
import logging
import argparse

from . import __version__
from .parser import GRAMMAR_RULES
from .pipeline import analyze


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="descent",
        description="Tokenize and parse an arithmetic expression, printing tokens, "
                    "parse steps, the parse tree and its layout as JSON.",
    )
    parser.add_argument("expression", nargs="?", help="Expression to analyze, e.g. \"2*(3+4)\"")
    parser.add_argument("--grammar", action="store_true",
                        help="Print the grammar productions instead of analyzing")
    parser.add_argument("--indent", type=int, default=2,
                        help="JSON indentation (0 for compact output)")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Log stage progress to stderr")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    indent = args.indent if args.indent > 0 else None

    if args.grammar:
        rules = [rule.to_dict() for rule in GRAMMAR_RULES]
        print(json.dumps(rules, indent=indent, ensure_ascii=False))
        return 0

    if args.expression is None:
        parser.error("an expression is required unless --grammar is given")

    result = analyze(args.expression)
    print(json.dumps(result.to_dict(), indent=indent, ensure_ascii=False))

    return 1 if result.has_errors() else 0


if __name__ == "__main__":
    sys.exit(main())
