"""Runs lambdalang programs from a file, a literal string or standard input, or starts command-line mode. Also uses the
error handling context manager. Installed as the `lambdalang` console script.
"""

import argparse
import os
import sys

from lambdalang.lang.error import ErrorHandler
from lambdalang.lang.session import Session
from lambdalang.lang.shell import Shell


def main(argv=None):
    """Runs lambdalang interpreter. Called from the lambdalang console script."""
    with ErrorHandler() as error_handler:
        parser = argparse.ArgumentParser(prog="lambdalang")
        parser.add_argument("file", help="file to interpret and run ('-' reads standard input, if empty and no "
                                         "command is given, goes to command-line mode)", nargs="?")
        parser.add_argument("-c", "--command", help="program passed in as a string")
        parser.add_argument("--no-color", action="store_true", help="disable colored error output")
        args = parser.parse_args(argv)

        if args.no_color:
            os.environ["NO_COLOR"] = "1"

        if args.command is not None or args.file == "-":
            source = args.command if args.command is not None else sys.stdin.read()
            path = "<string>" if args.command is not None else "<stdin>"

            Session(error_handler, path, source=source).run()

        elif args.file is not None:
            sess = Session(error_handler, args.file, cmd_line=False)
            sess.run()

        else:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True)).cmdloop()


if __name__ == "__main__":
    main()
