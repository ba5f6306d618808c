from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from lox.config import get_log_level
from lox.runtime import Lox

EX_NOINPUT = 66


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="lox", description="Run a Lox script, or start a REPL.")
    parser.add_argument("script", nargs="?", help="path to a .lox file")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=get_log_level(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    lox = Lox()
    if args.script is None:
        lox.run_prompt()
        return 0
    try:
        return lox.run_file(args.script)
    except OSError as e:
        print(f"lox: cannot read {args.script}: {e.strerror}", file=sys.stderr)
        return EX_NOINPUT


if __name__ == "__main__":
    sys.exit(main())
