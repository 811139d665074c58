"""Evaluation of PunyPy programs. Only run on statement lists the Analyzer accepted: interpretation itself has no error
category of its own, and anything going wrong here is reported as an internal error.
"""

from punypy.lang.error import GenericException
from punypy.syntax.production import (Declaration, Eof, FunctionBody, FunctionCall, FunctionDef, IntLiteral, Plus,
                                      Variable)


class Interpreter:

    def __init__(self, world, productions, error_handler=None):
        self.world = world
        self.productions = productions
        self.error_handler = error_handler
        self.results = []
        self.result = 0

    def interpret(self):
        """Evaluates the productions in order, up to Eof. Returns the list of their results."""
        self.results = []
        for production in self.productions:
            if isinstance(production, Eof):
                break
            self.result = self.evaluate(production, self.world)
            self.results.append(self.result)
        return self.results

    def evaluate(self, node, world):
        """Returns the integer value of node in world."""
        if isinstance(node, IntLiteral):
            return node.value

        elif isinstance(node, Variable):
            value = world.get_var(node.name)
            if value is None:
                raise GenericException("variable '{}' used before analysis", node.name, internal=True)
            return value

        elif isinstance(node, Plus):
            return sum(self.evaluate(operand, world) for operand in node.operands())

        elif isinstance(node, Declaration):
            value = self.evaluate(node.value, world)
            world.set_var(node.name, value)
            self._step("bind", f"{node.name} = {value}")
            return value

        elif isinstance(node, FunctionDef):
            return 0  # registered during analysis

        elif isinstance(node, FunctionBody):
            result = 0
            for statement in node.statements:
                result = self.evaluate(statement, world)
            return result

        elif isinstance(node, FunctionCall):
            return self.call(node, world)

        elif isinstance(node, Eof):
            return 0

        raise GenericException("cannot evaluate '{}'", type(node).__name__, internal=True)

    def arguments(self, params, world):
        """Evaluates Parameters params into a list of ints."""
        return [self.evaluate(item, world) for item in params]

    def call(self, node, world):
        """Dispatches FunctionCall node: builtins first, then user functions in a call-local World."""
        args = self.arguments(node.args, world)

        builtin = world.get_builtin(node.name)
        if builtin is not None:
            self._step("builtin", f"{node.name}({', '.join(map(str, args))})")
            return builtin(args)

        function = world.get_func(node.name)
        if function is None:
            raise GenericException("function '{}' called before analysis", node.name, internal=True)

        self._step("call", f"{node.name}({', '.join(map(str, args))})")
        local = world.derive({param.name: arg for param, arg in zip(function.params, args)})
        return self.evaluate(function.body, local)

    def _step(self, kind, text):
        if self.error_handler is not None:
            self.error_handler.register_step(kind, text)
