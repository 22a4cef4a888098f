#!/usr/bin/env python3
"""
zeecc - Zee compiler CLI

Usage:
    python zeecc.py [input.zee] [-e SOURCE] [-o output.zasm]
                    [--target zee|bare] [--max-depth N] [--keep-blank-lines]
                    [--tokens] [--ast] [-v] [-q] [--log-file FILE]

With no input file and no -e, compiles the built-in demo program
"(print (add 2 (subtract 4 2)))".

Examples:
    python zeecc.py                               # demo program to stdout
    python zeecc.py -e "(add 2 3)" --target bare
    python zeecc.py prog.zee -o prog.zasm -v
    python zeecc.py -e "(add 2 3)" --tokens       # token dump (debug)
"""

import argparse
import logging
import sys
from pathlib import Path

from zee_compiler import __version__, compile_source
from zee_compiler.errors import CompileError
from zee_compiler.lexer import Lexer
from zee_compiler.parser import DEFAULT_MAX_DEPTH, Parser
from zee_compiler.codegen import DEFAULT_TARGET, TARGET_PROFILES
from zee_compiler.dump import format_ast, format_tokens

DEMO_SOURCE = "(print (add 2 (subtract 4 2)))"

logger = logging.getLogger("zeecc")


def setup_logging(verbose: int, quiet: bool, log_file: str = None):
    """Configure logging based on arguments."""
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
    handlers = [console]

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        ))
        handlers.append(file_handler)

    logging.basicConfig(
        level=logging.DEBUG if log_file else level,
        handlers=handlers,
        force=True
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="zeecc",
        description="Compile S-expressions to Zee VM assembly",
        epilog="Targets: " + ", ".join(TARGET_PROFILES.keys()),
    )
    parser.add_argument("input", nargs="?", help="Input source file")
    parser.add_argument("-e", "--expr", help="Compile this source string instead of a file")
    parser.add_argument("-o", "--output", help="Output file (default: stdout)")
    parser.add_argument("--target", default=DEFAULT_TARGET,
                        choices=list(TARGET_PROFILES.keys()),
                        help=f"Output profile (default: {DEFAULT_TARGET})")
    parser.add_argument("--max-depth", type=int, default=DEFAULT_MAX_DEPTH,
                        help=f"Maximum nesting depth (default: {DEFAULT_MAX_DEPTH})")
    parser.add_argument("--keep-blank-lines", action="store_true",
                        help="Emit a blank line for every empty emission")
    parser.add_argument("--tokens", action="store_true",
                        help="Dump token stream and exit (debug)")
    parser.add_argument("--ast", action="store_true",
                        help="Dump AST and exit (debug)")
    parser.add_argument("--verbose", "-v", action="count", default=0,
                        help="Log compilation details to stderr")
    parser.add_argument("--quiet", "-q", action="store_true",
                        help="Suppress all logging except errors")
    parser.add_argument("--log-file", help="Write a debug log to this file")
    parser.add_argument("--version", action="version",
                        version=f"zeecc {__version__}")
    return parser


def read_source(args) -> str:
    if args.expr is not None:
        return args.expr
    if args.input:
        with open(args.input, "r", encoding="utf-8") as f:
            return f.read()
    return DEMO_SOURCE


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose, args.quiet, args.log_file)

    try:
        source = read_source(args)
    except OSError as e:
        logger.error(f"Error reading {args.input}: {e}")
        return 1

    input_name = "<expr>" if args.expr is not None else (args.input or "<demo>")
    logger.info(f"Input:  {input_name}")
    logger.info(f"Target: {args.target} - {TARGET_PROFILES[args.target]['description']}")

    try:
        if args.tokens:
            print(format_tokens(Lexer(source).tokenize()))
            return 0

        if args.ast:
            tokens = Lexer(source).tokenize()
            print(format_ast(Parser(tokens, max_depth=args.max_depth).parse()))
            return 0

        result = compile_source(source, target=args.target,
                                preserve_blank_lines=args.keep_blank_lines,
                                max_depth=args.max_depth)
    except CompileError as e:
        logger.error(e.describe())
        return 1
    except Exception as e:
        logger.exception(f"Internal compiler error: {e}")
        return 2

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(result)
        logger.info(f"Output: {args.output}")
    else:
        print(f";; Input code: {source}")
        print(result, end="")

    line_count = result.count("\n")
    logger.info(f"Generated {line_count} lines")
    return 0


if __name__ == "__main__":
    sys.exit(main())
