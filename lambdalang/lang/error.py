"""Error handling for lambdalang. Only LanguageErrors should be encountered while running a program: if another type of
error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.
"""

import sys

from termcolor import colored


class LanguageError(Exception):
    """Any error raised by the lambdalang pipeline. None of these are recovered from inside the interpreter; they
    unwind to whoever is running the program (usually an ErrorHandler).
    """

    def __init__(self, description, internal=False):
        super().__init__(description)
        self.description = description
        self.internal = internal

    @property
    def msg(self):
        return str(self)


class PositionedError(LanguageError):
    """Lexical or parse error, raised with the position of the character stream at the time of failure."""

    def __init__(self, description, line, column):
        super().__init__(description)
        self.line = line
        self.column = column

    def __str__(self):
        return f"{self.description} ({self.line}:{self.column})"


class LexicalError(PositionedError):
    """Unrecognized character in the source text."""


class ParseError(PositionedError):
    """Unexpected token, missing delimiter or invalid binder/assignment target."""


class EvaluationError(LanguageError):
    """Undefined variable, bad operand, division by zero, non-callable callee, etc."""


class ErrorHandler:
    """Context manager that will silently suppress Python errors and report lambdalang errors."""
    ERROR = "red"

    def __init__(self, fatal=True):
        self.fatal = fatal
        self.traceback = {}

    def register_file(self, path):
        """Registers path in traceback."""
        self.traceback[path] = (None, None)

    def register_line(self, path, line, line_num):
        """Registers source being run in traceback given path. Should be called prior to Session add/run."""
        self.traceback[path] = (line, line_num)

    def remove_line(self, path):
        """Removes line from traceback given path. Should be called after successful Session add/run."""
        self.traceback[path] = (None, None)

    @staticmethod
    def diagnose(source, error):
        """Returns the source line error points at, with a caret under the offending column. Returns None if the
        position is not inside source.
        """
        lines = source.split("\n")
        if not 0 < error.line <= len(lines):
            return None

        line = lines[error.line - 1]
        col = min(max(error.column - 1, 0), len(line))

        diagnosis = "  " + line + "\n"
        diagnosis += "  " + " " * col + colored("^", ErrorHandler.ERROR, attrs=["bold"])
        return diagnosis

    def throw(self, error):
        """Reports error using error and self.traceback. error must be a LanguageError, and self.traceback must be a
        dict of file: (source, line_num) representing origination of error.
        """
        error_msg = ""
        source = None
        lines = 0
        for file, (line, line_num) in self.traceback.items():  # assumes dict is insertion-ordered
            if line:
                error_msg += f"  File '{file}', line {line_num}:\n"
                if "\n" not in line.strip():  # whole files are shown through the diagnosis instead
                    error_msg += f"    {line.strip()}\n"
                source = line
                lines += 1

        if lines > 1:
            error_msg = "Traceback:\n" + error_msg

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        print(error_msg)

        if source is not None and isinstance(error, PositionedError):
            diagnosis = ErrorHandler.diagnose(source, error)
            if diagnosis:
                print(diagnosis)

        if self.fatal:
            sys.exit(1)
        self.traceback = {}  # if error occurred, reset traceback (no need if error is fatal)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(LanguageError("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(LanguageError("maximum recursion depth exceeded"))
        elif exc_type is not None and issubclass(exc_type, LanguageError):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(LanguageError(f"unknown error: '{exc_type.__name__}: {exc_val}'", internal=True))
            do_exit = True

        return not do_exit
