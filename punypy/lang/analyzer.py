"""Static analysis of PunyPy programs. Walks every top-level statement once, before anything is interpreted, checking
that variables and functions exist and that user function calls pass the right number of arguments.

Analysis has two deliberate side effects on the World it is given, so that later statements see earlier ones:
declarations bind their name (to a placeholder 0 if it isn't bound yet) and function definitions register themselves.

The first error in a top-level statement aborts the analysis of that statement only. Analysis then resumes with the
next statement, so that every error in a program is reported at once.
"""

from punypy.lang.error import (ArityMismatch, DuplicateFunction, GenericException, InvalidParameter, SemanticError,
                               UndeclaredFunction, UndeclaredVariable)
from punypy.syntax.production import (Declaration, Eof, FunctionBody, FunctionCall, FunctionDef, IntLiteral,
                                      Parameters, Plus, Variable)


class Analyzer:

    def __init__(self, world, productions, error_handler=None):
        self.world = world
        self.productions = productions
        self.error_handler = error_handler
        self.errors = []  # SemanticErrors, in statement order

    def analyze(self):
        """Analyzes all productions and returns the list of SemanticErrors found (empty if the program is sound)."""
        self.errors = []
        for production in self.productions:
            if isinstance(production, Eof):
                break

            self._step("analyze", production.expr)
            try:
                self.visit(production, self.world)
            except SemanticError as error:
                error.production = production
                self.errors.append(error)

        return self.errors

    @property
    def ok(self):
        return not self.errors

    def visit(self, node, world):
        """Checks node against world. Raises a SemanticError on the first problem."""
        if isinstance(node, IntLiteral):
            return

        elif isinstance(node, Variable):
            if world.get_var(node.name) is None:
                raise UndeclaredVariable(node.name).at(*node.position)

        elif isinstance(node, Plus):
            for operand in node.operands():
                self.visit(operand, world)

        elif isinstance(node, Parameters):
            for item in node:
                self.visit(item, world)

        elif isinstance(node, Declaration):
            self.visit(node.value, world)
            if world.get_var(node.name) is None:
                world.set_var(node.name, 0)
                self._step("declare", node.name)

        elif isinstance(node, FunctionDef):
            names = self.parameter_names(node)
            self.visit(node.body, world.derive(dict.fromkeys(names, 0)))
            try:
                world.set_func(node.name, node)
            except DuplicateFunction as error:
                raise error.at(*node.position)
            self._step("define", node.expr)

            if world.get_builtin(node.name) is not None and self.error_handler is not None:
                self.error_handler.warn("function '{}' is shadowed by the builtin of the same name", node.name,
                                        diagnosis=False)

        elif isinstance(node, FunctionBody):
            for statement in node.statements:
                self.visit(statement, world)

        elif isinstance(node, FunctionCall):
            self.visit(node.args, world)
            if world.get_builtin(node.name) is not None:
                return

            function = world.get_func(node.name)
            if function is None:
                raise UndeclaredFunction(node.name).at(*node.position)
            elif len(node.args) != len(function.params):
                raise ArityMismatch(node.name, len(function.params), len(node.args)).at(*node.position)

        elif isinstance(node, Eof):
            return

        else:
            raise GenericException("cannot analyze '{}'", type(node).__name__, internal=True)

    @staticmethod
    def parameter_names(function):
        """Returns the parameter names of FunctionDef function. Raises InvalidParameter unless every parameter is a
        plain name, and no name is repeated.
        """
        names = []
        for param in function.params:
            if not isinstance(param, Variable):
                raise InvalidParameter(function.name, param.expr, "is not a name").at(*param.position)
            elif param.name in names:
                raise InvalidParameter(function.name, param.name, "is repeated").at(*param.position)
            names.append(param.name)
        return names

    def _step(self, kind, text):
        if self.error_handler is not None:
            self.error_handler.register_step(kind, text)
