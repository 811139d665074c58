import unittest

from punypy.lang.error import DuplicateFunction
from punypy.lang.natives import NATIVES, native_print, register_natives
from punypy.lang.world import World
from punypy.syntax.production import FunctionBody, FunctionDef, Parameters, Variable


def function(name="f"):
    return FunctionDef(name, Parameters([Variable("a")]), FunctionBody("    ", [Variable("a")]))


class WorldTestCase(unittest.TestCase):

    def test_variables(self):
        world = World()
        self.assertIsNone(world.get_var("x"))
        world.set_var("x", 1)
        self.assertEqual(1, world.get_var("x"))
        world.set_var("x", 2)
        self.assertEqual(2, world.get_var("x"))

        variables = {"x": 3}
        world = World(variables=variables)
        world.set_var("y", 4)
        self.assertEqual(3, world.get_var("x"))
        self.assertEqual({"x": 3}, variables)

    def test_functions(self):
        world = World()
        self.assertIsNone(world.get_func("f"))

        definition = function()
        world.set_func("f", definition)
        self.assertEqual(definition, world.get_func("f"))
        self.assertIsNot(definition, world.get_func("f"))  # stored as a copy

        self.assertRaises(DuplicateFunction, world.set_func, "f", function())

    def test_builtins(self):
        world = World(builtins={"print": native_print})
        self.assertIs(native_print, world.get_builtin("print"))
        self.assertIsNone(world.get_builtin("nope"))
        self.assertIsNone(world.get_func("print"))

        with self.assertRaises(DuplicateFunction) as ctx:
            world.set_builtin("print", native_print)
        self.assertTrue(ctx.exception.builtin)

    def test_register_natives(self):
        world = register_natives(World())
        for name, native in NATIVES.items():
            self.assertIs(native, world.get_builtin(name))
        self.assertRaises(DuplicateFunction, register_natives, world)

        world = register_natives(World(), {"answer": lambda args: 42})
        self.assertEqual(42, world.get_builtin("answer")([]))
        self.assertIsNone(world.get_builtin("print"))

    def test_derive(self):
        world = World(variables={"x": 1})
        world.set_func("f", function())

        local = world.derive({"a": 5})
        self.assertEqual(5, local.get_var("a"))
        self.assertEqual(1, local.get_var("x"))
        self.assertIs(world.get_func("f"), local.get_func("f"))
        self.assertIs(world, local.globals)

        local.set_var("x", 9)
        self.assertIsNone(world.get_var("a"))
        self.assertEqual(1, world.get_var("x"))

        local.set_func("g", function("g"))  # function table is shared
        self.assertIsNotNone(world.get_func("g"))

    def test_derive_shadows_globals(self):
        world = World(variables={"a": 100})
        self.assertEqual(1, world.derive({"a": 1}).get_var("a"))
        self.assertEqual(100, world.get_var("a"))

    def test_derive_from_local(self):
        world = World(variables={"x": 1})
        inner = world.derive({"a": 5}).derive({"b": 6})
        self.assertIsNone(inner.get_var("a"))  # never sees the caller's locals
        self.assertEqual(1, inner.get_var("x"))
        self.assertEqual(6, inner.get_var("b"))
        self.assertIs(world, inner.globals)


if __name__ == '__main__':
    unittest.main()
