"""Handles interactive/command-line mode for the lambdalang interpreter. Uses cmd as backend."""

import cmd

from lambdalang.lang.builtins import display


class Shell(cmd.Cmd):
    """lambdalang interpreter shell."""
    intro = "lambdalang interpreter :: Python backend\nType '?' or 'help' for more information."
    prompt = "> "
    secondary_prompt = ". "  # used for line continuations
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess

        self._tmp_line = ""
        self.line_num = 0

    def default(self, line):
        """Executes arbitrary lambdalang code."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            source = self._tmp_line + line + "\n"
            source, add_to_prev = self.sess.preprocess_line(source)

            if add_to_prev:
                self._tmp_line = source
                self.prompt = self.secondary_prompt
                return

            self._tmp_line = ""
            self.prompt = self._tmp_prompt

            self.sess.add(source, self.line_num - source.count("\n") + 1)
            self.sess.run()

            if self.sess.results:
                result = self.sess.pop()
                if result is not False:
                    self.stdout.write(display(result) + "\n")

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        if arg:
            return self.default(f"help {arg}")  # e.g. 'help = 1' is code, not a command

        self.stdout.write(
            "Welcome to the lambdalang interpreter!\n\n"
            "lambdalang is a small expression language: numbers, strings, booleans, \n"
            "variables, if/then/else, and closures. Expressions are separated by ';'.\n\n"
            "Try it out by typing 'sum = lambda(x, y) x + y'. This will bind a function\n"
            "to 'sum'. Next, try typing 'print(sum(2, 3))'. This will print '5'.\n")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        self.stdout.write("\n")
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        if arg:
            return self.default(f"exit {arg}")
        return True
