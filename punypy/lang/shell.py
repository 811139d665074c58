"""Handles interactive/command-line mode for the PunyPy interpreter. Uses cmd as backend."""

import cmd

from punypy.syntax.production import FunctionCall


class Shell(cmd.Cmd):
    """PunyPy interpreter shell."""
    intro = "PunyPy interpreter :: Python backend\nType '?' or 'help' for more information."
    prompt = "> "
    secondary_prompt = ". "  # used for function bodies
    _tmp_prompt = "> "       # also used for prompt swapping in function bodies

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess
        self._block = []  # lines of the function definition being typed

    def onecmd(self, line):
        """Feeds lines of a pending function definition to default, commands are only recognized outside of one."""
        if self._block and line != "EOF":
            return self.default(line)
        return super().onecmd(line)

    def default(self, line):
        """Executes arbitrary PunyPy statement. A line ending with ':' opens a function body, closed by an empty
        line.
        """
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            if self._block or line.rstrip().endswith(":"):
                if line.strip():
                    self._block.append(line)
                    self.prompt = self.secondary_prompt
                    return
                line = "\n".join(self._block)
                self._block = []
                self.prompt = self._tmp_prompt

            if not line.strip():
                return

            self.sess.add(line)
            self.sess.run()

            if self.sess.results:
                statement, value = self.sess.pop()
                if isinstance(statement, FunctionCall) and self.sess.world.get_builtin(statement.name) is None:
                    print(value)

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the PunyPy interpreter!\n\n"
              "PunyPy is a tiny subset of Python: integers, '+', variables and functions whose \n"
              "result is their last line.\n\n"
              "Try it out by typing 'x = 1 + 2', then 'print(x)'. Define a function with \n"
              "'def add(a, b):' followed by an indented body such as '    a + b' and an \n"
              "empty line, then call it with 'add(x, 4)'.")

    def emptyline(self):
        """Do not repeat previous command on empty line, but close a pending function definition."""
        if self._block:
            self.default("")
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
