from __future__ import annotations

import argparse
import logging
import sys

from redlisp.config import get_log_level, get_recursion_limit
from redlisp.interpreter import Interpreter
from redlisp.types.errors import LispError
from redlisp.types.expression import display

logger = logging.getLogger("redlisp")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="redlisp", description="Run a redlisp program.")
    parser.add_argument("file", help="path of the entry .lisp file")
    args = parser.parse_args(argv)

    logging.basicConfig(level=get_log_level(), format="%(levelname)s %(name)s: %(message)s")

    # evaluation recurses on the Python stack
    sys.setrecursionlimit(max(sys.getrecursionlimit(), get_recursion_limit()))

    try:
        result = Interpreter().run_file(args.file)
    except LispError as e:
        logger.error("Fatal error: %s", e)
        return 1
    print(display(result))
    return 0


if __name__ == "__main__":
    sys.exit(main())
