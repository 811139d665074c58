"""Session control for PunyPy. Drives the pipeline (parse, display, analyze, interpret) over a program file or over
the chunks typed in the interactive shell, with one global World for the whole session.

Error policy:
- syntax errors are reported one by one while parsing, and the parser resynchronizes on the next statement. If any
  were reported, nothing is analyzed or interpreted.
- semantic errors are all collected by the Analyzer and reported. If any were found, nothing is interpreted.
"""

from punypy.lang.analyzer import Analyzer
from punypy.lang.error import GenericException, ParseError
from punypy.lang.interpreter import Interpreter
from punypy.lang.natives import register_natives
from punypy.lang.world import World
from punypy.syntax.parser import Parser
from punypy.syntax.production import Eof


class Session:
    """Governs a PunyPy session, with control over the global World."""
    SH_FILE = "<in>"  # command-line interpreter filename

    def __init__(self, error_handler, path, world=None, cmd_line=False, echo=True):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in command-line mode
        self.echo = echo          # whether or not to display parsed statements

        self.world = world if world is not None else register_natives(World())
        self.lines = []           # source lines added so far, used for error messages
        self.statements = []      # parsed statements waiting to be run
        self.results = []         # (statement, value) of every interpreted statement
        self.syntax_errors = 0

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            try:
                with open(path, "r") as file:
                    text = file.read()
            except OSError:
                raise GenericException("'{}' could not be opened", path, diagnosis=False)

            self.add(text)

        elif not cmd_line:
            raise GenericException("'<in>' is a reserved filename")

    def add(self, text):
        """Parses text and queues its statements. Parsing is eager, analysis and interpretation are delayed until run
        is called. Returns the statements parsed from text.
        """
        lines = text.split("\n")
        if text.endswith("\n"):
            lines.pop()

        parser = Parser(text, line=len(self.lines) + 1)
        self.lines.extend(lines)

        added = []
        while True:
            try:
                statement = parser.root()
            except ParseError as error:
                self.syntax_errors += 1
                self.report(error, error.line_num, error.column)
                parser.synchronize()
                continue

            if isinstance(statement, Eof):
                break

            if self.echo:
                print(statement.display())
            added.append(statement)

        self.statements.extend(added)
        return added

    def run(self):
        """Runs the queued statements: analysis first, then interpretation. Reports and raises if anything went
        wrong before interpretation.
        """
        statements, self.statements = self.statements, []

        if self.syntax_errors:
            count, self.syntax_errors = self.syntax_errors, 0
            raise GenericException(f"{count} syntax error{'s' if count != 1 else ''}, not running", diagnosis=False)

        errors = Analyzer(self.world, statements, self.error_handler).analyze()
        for error in errors:
            line_num = error.line_num if error.line_num is not None else error.production.line
            self.report(error, line_num, error.column)

        if errors:
            count = len(errors)
            raise GenericException(f"{count} semantic error{'s' if count != 1 else ''}, not running", diagnosis=False)

        interpreter = Interpreter(self.world, statements, self.error_handler)
        for statement in statements:
            self.error_handler.register_line(self.path, self.source_line(statement.line), statement.line)
            self.results.append((statement, interpreter.evaluate(statement, self.world)))
            self.error_handler.remove_line(self.path)

        return [value for __, value in self.results[len(self.results) - len(statements):]]

    def pop(self):
        """Removes and returns the latest (statement, value) result."""
        return self.results.pop()

    def source_line(self, line_num):
        """Returns the source text of line line_num, or None if there's no such line."""
        if line_num is not None and 0 < line_num <= len(self.lines):
            return self.lines[line_num - 1]

    def report(self, error, line_num, column=None):
        """Reports error (non-fatally) against source line line_num."""
        line = self.source_line(line_num)
        if line is not None:
            error.locate(line, line_num, column)
            self.error_handler.register_line(self.path, line, line_num)

        self.error_handler.report(error)
        self.error_handler.remove_line(self.path)
