"""
Runtime values and variable scopes for the Monkey evaluator.

Classes:
    Integer, Boolean, String, Null: Plain values.
    ReturnValue: Wraps a value travelling up out of a `return` statement.
    Error: A runtime error value; evaluation stops at the first one.
    Function: A function literal closed over the environment it was created in.
    Builtin: A named host function (see `monkey_builtins`).
    Environment: A chain of name -> value scopes.

Every value exposes `type()` (an upper-case type name used in error messages)
and `inspect()` (the text the REPL prints).
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Union

from monkey.monkey_ast import BlockStatement, Identifier

INTEGER_OBJ = "INTEGER"
BOOLEAN_OBJ = "BOOLEAN"
STRING_OBJ = "STRING"
NULL_OBJ = "NULL"
RETURN_VALUE_OBJ = "RETURN_VALUE"
ERROR_OBJ = "ERROR"
FUNCTION_OBJ = "FUNCTION"
BUILTIN_OBJ = "BUILTIN"


@dataclass(frozen=True)
class Integer:
    value: int

    def type(self) -> str:
        return INTEGER_OBJ

    def inspect(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Boolean:
    value: bool

    def type(self) -> str:
        return BOOLEAN_OBJ

    def inspect(self) -> str:
        return "true" if self.value else "false"


@dataclass(frozen=True)
class String:
    value: str

    def type(self) -> str:
        return STRING_OBJ

    def inspect(self) -> str:
        return self.value


@dataclass(frozen=True)
class Null:
    def type(self) -> str:
        return NULL_OBJ

    def inspect(self) -> str:
        return "null"


@dataclass(frozen=True)
class ReturnValue:
    value: Object

    def type(self) -> str:
        return RETURN_VALUE_OBJ

    def inspect(self) -> str:
        return self.value.inspect()


@dataclass(frozen=True)
class Error:
    message: str

    def type(self) -> str:
        return ERROR_OBJ

    def inspect(self) -> str:
        return f"ERROR: {self.message}"


@dataclass(frozen=True, eq=False)
class Function:
    parameters: tuple[Identifier, ...]
    body: BlockStatement
    env: Environment = field(repr=False)

    def type(self) -> str:
        return FUNCTION_OBJ

    def inspect(self) -> str:
        params = ", ".join(str(p) for p in self.parameters)
        return f"fn({params}) {self.body}"


@dataclass(frozen=True)
class Builtin:
    name: str
    fn: Callable[..., "Object"] = field(compare=False, repr=False)

    def type(self) -> str:
        return BUILTIN_OBJ

    def inspect(self) -> str:
        return f"builtin function {self.name}"


Object = Union[Integer, Boolean, String, Null, ReturnValue, Error, Function, Builtin]

TRUE = Boolean(True)
FALSE = Boolean(False)
NULL = Null()


def native_bool(value: bool) -> Boolean:
    return TRUE if value else FALSE


class Environment:
    """
    A scope mapping names to values, optionally nested inside an outer scope.

    Lookups fall through to the outer scope; assignments always land in this one.
    """

    def __init__(self, outer: Environment | None = None) -> None:
        self.store: dict[str, Object] = {}
        self.outer = outer

    def get(self, name: str) -> Object | None:
        if name in self.store:
            return self.store[name]
        if self.outer is not None:
            return self.outer.get(name)
        return None

    def set(self, name: str, value: Object) -> Object:
        self.store[name] = value
        return value

    def extend(self) -> Environment:
        """Returns a new child scope enclosed by this one."""
        return Environment(outer=self)

    def __repr__(self) -> str:
        return f"Environment({sorted(self.store)}, outer={self.outer is not None})"


__all__ = [
    "BOOLEAN_OBJ",
    "BUILTIN_OBJ",
    "ERROR_OBJ",
    "FALSE",
    "FUNCTION_OBJ",
    "INTEGER_OBJ",
    "NULL",
    "NULL_OBJ",
    "RETURN_VALUE_OBJ",
    "STRING_OBJ",
    "TRUE",
    "Boolean",
    "Builtin",
    "Environment",
    "Error",
    "Function",
    "Integer",
    "Null",
    "Object",
    "ReturnValue",
    "String",
    "native_bool",
]
