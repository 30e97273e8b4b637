"""
Host functions callable by name from Monkey programs.

Builtins are resolved after user bindings, so `let len = ...` shadows `len`.
Bad arguments never raise; they produce an `Error` value.
"""

from types import MappingProxyType
from typing import Mapping

from monkey.monkey_object import Builtin, Error, Integer, Object, String


def _len(*args: Object) -> Object:
    if len(args) != 1:
        return Error(f"wrong number of arguments. got={len(args)}, want=1")

    arg = args[0]
    if isinstance(arg, String):
        return Integer(len(arg.value))
    return Error(f"argument to `len` not supported, got {arg.type()}")


builtins: Mapping[str, Builtin] = MappingProxyType(
    {
        "len": Builtin("len", _len),
    }
)


__all__ = ["builtins"]
