"""Session control for lambdalang. Wires the parser and evaluator to a global scope with builtins, either in
command-line mode or file interpretation mode.
"""

from lambdalang.lang import builtins
from lambdalang.lang.error import LanguageError
from lambdalang.runtime.environment import Environment
from lambdalang.runtime.evaluator import evaluate
from lambdalang.syntax.parser import parse


class Session:
    """Governs a lambdalang session: one global scope shared by everything added to it."""
    SH_FILE = "<in>"  # command-line interpreter filename
    BRACKETS = {"(": ")", "{": "}", "[": "]"}

    def __init__(self, error_handler, path=SH_FILE, cmd_line=False, stdout=None, source=None):
        """If source is given, path only labels it in error messages; otherwise a path other than SH_FILE is read."""
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path            # used for error messages
        self.cmd_line = cmd_line    # whether or not in command-line mode

        self.global_env = builtins.install(Environment(), stdout)
        self.to_exec = []  # list of (source, line num, ast.Program) to evaluate
        self.results = []  # values of evaluated programs, most recent last

        if self.cmd_line:
            self.error_handler.fatal = False

        if source is not None:
            self.add(source)

        elif path != Session.SH_FILE:
            try:
                with open(path, "r", encoding="utf-8") as file:
                    source = file.read()
            except OSError:
                raise LanguageError(f"'{path}' could not be opened")

            self.add(source)

        elif not cmd_line:
            raise LanguageError("'<in>' is a reserved filename")

    @staticmethod
    def preprocess_line(line):
        """Returns line and whether or not it leaves a bracket or string open, i.e. whether the command-line should
        ask for a continuation line.
        """
        depth = 0
        in_string = in_comment = escaped = False
        for char in line:
            if in_comment:
                in_comment = char != "\n"
            elif in_string:
                if escaped:
                    escaped = False
                elif char == "\\":
                    escaped = True
                elif char == '"':
                    in_string = False
            elif char == '"':
                in_string = True
            elif char == "#":
                in_comment = True
            elif char in Session.BRACKETS:
                depth += 1
            elif char in Session.BRACKETS.values():
                depth -= 1
        return line, in_string or depth > 0

    def add(self, source, line_num=1):
        """Parses source and queues it. Evaluation is delayed until run is called."""
        self.error_handler.register_line(self.path, source, line_num)  # in case error is raised

        program = parse(source)
        self.to_exec.append((source, line_num, program))

        self.error_handler.remove_line(self.path)  # error was not raised

    def run(self):
        """Evaluates every queued program in the global scope. Will raise any errors that are encountered."""
        while self.to_exec:
            source, line_num, program = self.to_exec.pop(0)
            self.error_handler.register_line(self.path, source, line_num)

            self.results.append(evaluate(program, self.global_env))

            self.error_handler.remove_line(self.path)

    def pop(self):
        """Removes and returns the most recent result."""
        return self.results.pop()


def interpret(source, env=None, stdout=None):
    """Parses and evaluates source in env (a fresh global scope with builtins if None). Returns the program's value."""
    if env is None:
        env = builtins.install(Environment(), stdout)
    return evaluate(parse(source), env)
