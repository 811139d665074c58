"""The PunyPy environment: global variables, user functions and host builtins.

There is exactly one global World per run. A function call gets a call-local World derived from the global one: a copy
of the global variable table with the call's parameters bound on top, sharing the function and builtin tables. There
is no parent-chain lookup, so a function never sees the locals of its caller.
"""

from copy import deepcopy

from punypy.lang.error import DuplicateFunction


class World:

    def __init__(self, variables=None, builtins=None):
        self.variables = dict(variables) if variables else {}  # name: int
        self.functions = {}                                    # name: FunctionDef
        self.builtins = {}                                     # name: callable(list of int) -> int
        self.globals = self

        for name, builtin in (builtins or {}).items():
            self.set_builtin(name, builtin)

    def get_var(self, name):
        """Returns the value bound to name, or None."""
        return self.variables.get(name)

    def set_var(self, name, value):
        """Binds name to value, overwriting any previous binding."""
        self.variables[name] = value

    def get_func(self, name):
        """Returns the user FunctionDef registered as name, or None."""
        return self.functions.get(name)

    def set_func(self, name, function):
        """Registers a copy of FunctionDef function as name. Functions can't be redefined."""
        if name in self.functions:
            raise DuplicateFunction(name)
        self.functions[name] = deepcopy(function)

    def get_builtin(self, name):
        """Returns the native callable registered as name, or None."""
        return self.builtins.get(name)

    def set_builtin(self, name, builtin):
        """Registers native callable builtin as name. Builtins can't be redefined."""
        if name in self.builtins:
            raise DuplicateFunction(name, builtin=True)
        self.builtins[name] = builtin

    def derive(self, bindings):
        """Returns a call-local World: the global variables with bindings (name: int) bound on top."""
        local = World.__new__(World)
        local.variables = dict(self.globals.variables)
        local.functions = self.functions
        local.builtins = self.builtins
        local.globals = self.globals

        for name, value in bindings.items():
            local.set_var(name, value)
        return local

    def __repr__(self):
        return f"World(variables={self.variables}, functions={list(self.functions)}, builtins={list(self.builtins)})"
