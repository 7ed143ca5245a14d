"""Runs plox scripts, or the interactive shell when no script is given. Installed as the 'plox' console script.

Exit status follows sysexits.h: 64 for bad usage, 65 after a scan/parse error, 66 if the script can't be read, 70
after a runtime error and 73 if the log file can't be opened.
"""

import argparse
import sys

from plox.core.interpreter import Interpreter
from plox.lang.error import ErrorHandler
from plox.lang.log import LEVELS, get_logger, setup_logging
from plox.lang.session import Session
from plox.lang.shell import Shell


USAGE_EXIT = 64
NO_INPUT_EXIT = 66
CANT_CREATE_EXIT = 73

# a plox call is a dozen or so Python frames deep
FRAMES_PER_CALL = 16
# ceiling for the host recursion limit: past it the C stack itself may overflow
HOST_RECURSION_LIMIT = 10000

logger = get_logger(__name__)


def build_parser():
    parser = argparse.ArgumentParser(prog="plox", description="Tree-walking interpreter for the plox language.")
    parser.add_argument("script", nargs="*", help="script to run (if empty, goes to interactive mode)")

    dump = parser.add_mutually_exclusive_group()
    dump.add_argument("--tokens", action="store_true", help="print the script's tokens instead of running it")
    dump.add_argument("--ast", action="store_true", help="print the script's syntax tree instead of running it")

    parser.add_argument("--max-depth", type=int, default=Interpreter.MAX_DEPTH,
                        help="maximum depth of nested calls (default: %(default)s)")
    parser.add_argument("--log-level", default="WARNING", type=str.upper, choices=LEVELS,
                        help="logging level (default: %(default)s)")
    parser.add_argument("--log-file", default=None, help="write logs to this file instead of stderr")
    return parser


def run_file(path, args):
    """Runs (or dumps) a script. Returns the process exit status."""
    error_handler = ErrorHandler()
    try:
        sess, source = Session.from_file(path, error_handler=error_handler, max_depth=args.max_depth)
    except OSError as error:
        print(f"plox: can't open '{path}': {error.strerror}", file=sys.stderr)
        return NO_INPUT_EXIT
    except UnicodeDecodeError as error:
        print(f"plox: can't decode '{path}': {error.reason} at byte {error.start}", file=sys.stderr)
        return NO_INPUT_EXIT

    with error_handler:
        if args.tokens:
            print(sess.tokens(source))
        elif args.ast:
            listing = sess.ast(source)
            if listing is not None:
                print(listing)
        else:
            sess.run(source)

    return error_handler.exit_code


def main(argv=None):
    """Runs plox interpreter. Called from the plox console script."""
    args = build_parser().parse_args(argv)
    try:
        setup_logging(args.log_level, args.log_file)
    except OSError as error:
        print(f"plox: can't open log file '{args.log_file}': {error.strerror}", file=sys.stderr)
        return CANT_CREATE_EXIT

    if len(args.script) > 1:
        print("Usage: plox [script]")
        return USAGE_EXIT

    max_depth = min(args.max_depth, HOST_RECURSION_LIMIT // FRAMES_PER_CALL)
    if max_depth < args.max_depth:
        ErrorHandler().warn(f"--max-depth {args.max_depth} is too deep for the host stack, using {max_depth}")
        args.max_depth = max_depth

    # make room on the host stack for max_depth nested plox calls
    sys.setrecursionlimit(max(sys.getrecursionlimit(), max_depth * FRAMES_PER_CALL))
    logger.debug("recursion limit set to %d", sys.getrecursionlimit())

    if args.script:
        return run_file(args.script[0], args)

    Shell(Session(max_depth=args.max_depth)).cmdloop()
    return 0


if __name__ == "__main__":
    sys.exit(main())
