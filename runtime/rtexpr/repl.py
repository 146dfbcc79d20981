"""
Interactive driver

Reads one expression per line, evaluates it against a session-wide
VariableStore and prints the result, or the error with a caret under the
offending column. An empty line or end of input ends the session.

Usage:
    rtexpr                      # interactive
    rtexpr --show-ast           # also print AST before/after folding
    rtexpr -e '#1 = 3' -e '#1 * 2'
"""

from typing import Optional, Sequence, TextIO
import logging
import sys

from .config import RuntimeConfig, configure_logging
from .nodes import format_tree
from .runtime import LineResult, Runtime


logger = logging.getLogger(__name__)


class Repl:
    """Line loop around a Runtime"""

    def __init__(self, runtime: Runtime, stdin: TextIO, stdout: TextIO, stderr: TextIO):
        self.runtime = runtime
        self.stdin = stdin
        self.stdout = stdout
        self.stderr = stderr

    def run(self) -> int:
        config = self.runtime.config
        while True:
            self.stdout.write(config.prompt)
            self.stdout.flush()
            line = self.stdin.readline()
            if not line or not line.strip('\r\n'):
                break
            self.run_line(line)
        self.stdout.write('\n')
        return 0

    def run_line(self, line: str) -> LineResult:
        result = self.runtime.evaluate_line(line)
        if result.ok:
            if self.runtime.config.show_ast:
                self._print_trees(result)
            print('Result: %g' % result.value, file=self.stdout)
        else:
            print(result.diagnostic, file=self.stderr)
            for text in result.diagnostic.render(line):
                print(text, file=self.stderr)
        return result

    def _print_trees(self, result: LineResult):
        print('AST:', file=self.stdout)
        print(format_tree(result.tree), file=self.stdout)
        print('Optimized AST:', file=self.stdout)
        print(format_tree(result.optimized), file=self.stdout)


def main(argv: Optional[Sequence[str]] = None,
         stdin: Optional[TextIO] = None,
         stdout: Optional[TextIO] = None,
         stderr: Optional[TextIO] = None) -> int:
    config = RuntimeConfig.from_args(argv)
    configure_logging(config.log_level)

    repl = Repl(
        Runtime(config),
        stdin=stdin or sys.stdin,
        stdout=stdout or sys.stdout,
        stderr=stderr or sys.stderr,
    )

    if config.expressions:
        failed = 0
        for expression in config.expressions:
            if not repl.run_line(expression).ok:
                failed += 1
        logger.info("evaluated %d expressions, %d failed", len(config.expressions), failed)
        return 1 if failed else 0

    return repl.run()


if __name__ == '__main__':
    sys.exit(main())
