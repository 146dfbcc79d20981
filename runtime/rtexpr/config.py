"""
Runtime and REPL settings
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence
import argparse
import logging


DEFAULT_PROMPT = "expr> "
LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


@dataclass
class RuntimeConfig:
    """Settings shared by Runtime and the interactive driver"""
    optimize: bool = True
    show_ast: bool = False
    prompt: str = DEFAULT_PROMPT
    log_level: str = 'WARNING'
    expressions: List[str] = field(default_factory=list)

    @classmethod
    def from_args(cls, argv: Optional[Sequence[str]] = None) -> "RuntimeConfig":
        args = build_arg_parser().parse_args(argv)
        return cls(
            optimize=not args.no_optimize,
            show_ast=args.show_ast,
            prompt=args.prompt,
            log_level=args.log_level,
            expressions=list(args.expressions),
        )


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rtexpr",
        description="Evaluate arithmetic/logical expressions over #id variables.",
    )
    parser.add_argument("-e", "--eval", dest="expressions", action="append", default=[],
                        metavar="EXPR", help="Evaluate EXPR and exit (repeatable).")
    parser.add_argument("--show-ast", action="store_true",
                        help="Print the AST before and after optimization.")
    parser.add_argument("--no-optimize", action="store_true",
                        help="Disable constant folding.")
    parser.add_argument("--prompt", default=DEFAULT_PROMPT,
                        help="Interactive prompt (default: %(default)r).")
    parser.add_argument("--log-level", default='WARNING', choices=LOG_LEVELS,
                        type=str.upper, help="Logging level (default: %(default)s).")
    return parser


def configure_logging(level: str):
    """Set up root logging for the command line driver"""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )


__all__ = ['RuntimeConfig', 'build_arg_parser', 'configure_logging', 'DEFAULT_PROMPT']
