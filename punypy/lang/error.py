"""Error handling for the PunyPy language. Only GenericExceptions should be encountered during running: if another type
of error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

Taxonomy:

```
GenericException
 |- BufferFull            ; internal: putback into an occupied scanner buffer
 |- ParseError            ; aborts the statement being parsed, parser resynchronizes
 |   |- InvalidToken      ; lexical: no scanner rule matches the next character
 |   |- BadToken          ; syntax: token violates the grammar at the current position
 |- SemanticError         ; collected per top-level statement by the Analyzer
     |- UndeclaredVariable
     |- UndeclaredFunction
     |- ArityMismatch
     |- DuplicateFunction
     |- InvalidParameter
```
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """Templates an error/warning message so that it can be used to throw a PunyPy error/warning."""

    def __init__(self, msg, exprs=None, start=0, end=-1, diagnosis=True, internal=False):
        if exprs is None:
            exprs = ""
        if isinstance(exprs, str):
            exprs = [exprs]
        exprs = [str(expr) for expr in exprs]

        self.msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in exprs))  # color expr snippets
        self.expr = exprs[0]  # exprs[0] should be the offending expr that caused the error
        self.end = end if end != -1 else len(self.expr)  # needed for error display

        self.start = start
        self.diagnosis = diagnosis
        self.internal = internal
        self.line_num = None
        self.column = None

        super().__init__(msg.format(*exprs))

    def at(self, line_num, column=None):
        """Records the source position of the offending expr. Returns self."""
        self.line_num = line_num
        self.column = column
        return self

    def locate(self, source_line, line_num=None, column=None):
        """Re-anchors the diagnosis of this error on the full source_line it was raised for. If column is None, the
        first occurrence of the offending expr is highlighted. Disables diagnosis if the expr can't be found.
        """
        if line_num is not None:
            self.line_num = line_num

        snippet = self.expr[self.start:self.end]
        if column is None:
            column = source_line.find(snippet) if snippet else -1

        if column < 0 or not source_line.strip():
            self.diagnosis = False
            return self

        self.expr = source_line
        self.start = column
        self.end = column + max(len(snippet), 1)
        return self


class BufferFull(GenericException):
    """Raised by Scanner.putback when the lookahead buffer already holds a token."""

    def __init__(self, token):
        super().__init__("cannot put back '{}': token buffer is full", token.lexeme, internal=True)
        self.token = token


class ParseError(GenericException):
    """Superclass for errors that abort parsing of the current top-level statement."""

    def __init__(self, msg, exprs=None, line=None, column=None, **kwargs):
        super().__init__(msg, exprs, **kwargs)
        self.at(line, column)


class InvalidToken(ParseError):
    """No lexical rule matches char."""

    def __init__(self, char, line=None, column=None):
        super().__init__("invalid character '{}'", repr(char)[1:-1], line=line, column=column)
        self.char = char


class BadToken(ParseError):
    """token is not allowed by the grammar where it was found. expected describes what the parser wanted instead."""

    def __init__(self, token, expected):
        if token.lexeme:
            super().__init__(expected + ", got '{}'", token.lexeme, line=token.line, column=token.column)
        else:
            super().__init__(f"{expected}, got {token.kind}", line=token.line, column=token.column, diagnosis=False)
        self.token = token
        self.expected = expected


class SemanticError(GenericException):
    """Superclass for errors found by the Analyzer."""


class UndeclaredVariable(SemanticError):

    def __init__(self, name):
        super().__init__("variable '{}' has not been declared", name)
        self.name = name


class UndeclaredFunction(SemanticError):

    def __init__(self, name):
        super().__init__("function '{}' has not been declared", name)
        self.name = name


class ArityMismatch(SemanticError):

    def __init__(self, name, expected, got):
        plural = "s" if expected != 1 else ""
        verb = "were" if got != 1 else "was"
        super().__init__("'{}' takes " + f"{expected} argument{plural} but {got} {verb} given", name)
        self.name = name
        self.expected = expected
        self.got = got


class DuplicateFunction(SemanticError):

    def __init__(self, name, builtin=False):
        super().__init__(f"redefinition of {'builtin ' if builtin else ''}function " + "'{}'", name)
        self.name = name
        self.builtin = builtin


class InvalidParameter(SemanticError):
    """Function definition parameters must be distinct plain names."""

    def __init__(self, name, param, reason):
        super().__init__("parameter '{}' of '{}' " + reason, (param, name))
        self.name = name
        self.param = param


class ErrorHandler:
    """Context manager that will silently suppress Python errors and raise custom PunyPy errors/warnings."""
    ERROR = "red"
    WARNING = "magenta"
    STEP = "cyan"

    def __init__(self, fatal=True, verbose=False):
        self.fatal = fatal
        self.verbose = verbose
        self.traceback = {}

    def register_file(self, path):
        """Registers path in traceback."""
        self.traceback[path] = (None, None)

    def register_line(self, path, line, line_num):
        """Registers line in traceback given path. Should be called prior to Session add/run."""
        self.traceback[path] = (line, line_num)

    def remove_line(self, path):
        """Removes line from traceback given path. Should be called after successful Session add/run."""
        self.traceback[path] = (None, None)

    def register_step(self, kind, text):
        """Prints a trace of one analysis/interpretation step. Silent unless verbose."""
        if self.verbose:
            print(colored(f"[{kind}] ", ErrorHandler.STEP, attrs=["bold"]) + text)

    @staticmethod
    def diagnose(error, warning=False):
        """Returns offending part of error.expr highlighted and bolded."""
        color = ErrorHandler.WARNING if warning else ErrorHandler.ERROR

        diagnosis = "  " + error.expr[:error.start]

        end = max(error.end, error.start + 1)
        diagnosis += colored(error.expr[error.start:end], color, attrs=["bold"])
        diagnosis += error.expr[end:] + "\n"

        diagnosis += "  " + " " * error.start
        diagnosis += colored("^" + "~" * (end - error.start - 1), color, attrs=["bold"])

        return diagnosis

    def warn(self, *args, **kwargs):
        """Generates and prints runtime warning message based on args."""
        error = GenericException(*args, **kwargs)

        location = ""
        for file, (line, line_num) in self.traceback.items():
            if line:
                location = colored(f"{file}:{line_num}: ", attrs=["bold"])

        print(location + colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + error.msg)

        if not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error, warning=True))

    def report(self, error):
        """Prints error using error and self.traceback without exiting. error must be a GenericException, and
        self.traceback must be a dict of file: (line, line_num) representing origination of error.
        """
        registered = [(file, line, line_num) for file, (line, line_num) in self.traceback.items() if line]

        error_msg = ""
        if len(registered) > 1:  # assumes dict is insertion-ordered
            error_msg = "Traceback:\n"
            for file, line, line_num in registered:
                error_msg += f"  File '{file}', line {line_num}:\n"
                error_msg += f"    {line}\n"
        elif registered:
            file, __, line_num = registered[0]
            error_msg = colored(f"{file}:{line_num}: ", attrs=["bold"])

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        print(error_msg)

        if not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error))

    def throw(self, error):
        """Reports error, then exits if this handler is fatal."""
        self.report(error)

        if self.fatal:
            sys.exit(1)
        self.traceback = {}  # if error occurred, reset traceback (no need if error is fatal)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(GenericException("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(GenericException("maximum recursion depth exceeded", diagnosis=False))
        elif exc_type is not None and issubclass(exc_type, GenericException):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(GenericException(f"unknown error: '{exc_type.__name__}: {exc_val}'", internal=True))
            do_exit = True

        return not do_exit
