"""Builtin functions supplied by the host. A builtin takes the list of evaluated arguments of a call and returns an int.
Builtins are not arity-checked and take priority over user functions of the same name.
"""


def native_print(args):
    """Prints args separated by spaces. Returns 0."""
    print(" ".join(str(arg) for arg in args))
    return 0


NATIVES = {
    "print": native_print,
}


def register_natives(world, natives=None):
    """Registers natives (name: callable, defaults to NATIVES) in world. Must be called before analysis."""
    for name, native in (NATIVES if natives is None else natives).items():
        world.set_builtin(name, native)
    return world
