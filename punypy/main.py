"""Uses the PunyPy pipeline to interpret .py files written in PunyPy/run in command-line mode. Also uses the error
handling context manager. Called from the punypy console script.
"""

import argparse
import sys

from punypy.lang.error import ErrorHandler, GenericException
from punypy.lang.session import Session
from punypy.lang.shell import Shell
from punypy.syntax.scanner import Scanner


def dump_tokens(path):
    """Prints the token stream of the file at path, one token per line."""
    try:
        with open(path, "r") as file:
            for token in Scanner(file).tokens():
                print(token)
    except OSError:
        raise GenericException("'{}' could not be opened", path, diagnosis=False)


def main(argv=None):
    """Runs PunyPy interpreter. Called from punypy console script."""
    parser = argparse.ArgumentParser(prog="punypy")
    parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
    parser.add_argument("-q", "--quiet", action="store_true", help="do not display parsed statements")
    parser.add_argument("-v", "--verbose", action="store_true", help="trace analysis and interpretation steps")
    parser.add_argument("--tokens", action="store_true", help="only print the token stream of file")
    parser.add_argument("--parse-only", action="store_true", help="only parse file and display its statements")
    args = parser.parse_args(argv)

    with ErrorHandler(verbose=args.verbose) as error_handler:
        if args.file is None:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True, echo=False)).cmdloop()

        elif args.tokens:
            dump_tokens(args.file)

        else:
            sess = Session(error_handler, args.file, echo=not args.quiet)
            if args.parse_only:
                if sess.syntax_errors:
                    sys.exit(1)
            else:
                sess.run()


if __name__ == "__main__":
    main()
