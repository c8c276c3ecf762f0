"""Host builtins injected into the global scope of every session, and the textual form of runtime values."""

import math
import sys

from lambdalang.runtime.evaluator import Closure, is_number


def display(value):
    """Returns value the way lambdalang prints it."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if is_number(value):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value == 0 and math.copysign(1, value) < 0:
            return "-0"
        if float(value).is_integer() and abs(value) < 1e21:
            return str(int(value))
        return repr(float(value))
    if isinstance(value, str):
        return value
    if callable(value) and not isinstance(value, Closure):
        return f"<builtin {getattr(value, '__name__', 'function')}>"
    return repr(value)


def make_print(stream=None):
    """Returns the print builtin. Writes to stream, or to whatever sys.stdout is at call time."""

    def print_(*args):
        out = stream if stream is not None else sys.stdout
        out.write(" ".join(display(arg) for arg in args) + "\n")
        return False

    print_.__name__ = "print"
    return print_


def install(env, stdout=None):
    """Defines the builtins in env (normally a session's root scope)."""
    env.define("print", make_print(stdout))
    return env
