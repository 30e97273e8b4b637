"""
Tree-walking evaluator for Monkey ASTs.

This module defines the `Evaluator` class, which walks a `Program` produced by the
parser and computes its value. Nodes are dispatched by their `kind` to the matching
`eval_<kind>` method.

Semantics:
    - Integers are signed 64-bit; arithmetic wraps on overflow and `/` truncates toward zero.
    - `false` and `null` are falsy, every other value is truthy.
    - Strings support `+` (concatenation), `==` and `!=`.
    - `==` / `!=` across different types compare unequal rather than failing.
    - Calls bind arguments to parameters in declaration order in a scope enclosed by
      the function's defining environment (closures).
    - Identifiers resolve in the environment chain first, then in `monkey_builtins`.

Errors:
    Runtime problems produce `Error` values which stop evaluation of the enclosing
    program and are returned as its result. Python exceptions are reserved for
    programming faults: an AST kind without an evaluator method raises
    `NotImplementedError`.
"""

from monkey.monkey_ast import (
    BlockStatement,
    BooleanLiteral,
    CallExpression,
    ExpressionStatement,
    FunctionLiteral,
    Identifier,
    IfExpression,
    InfixExpression,
    IntegerLiteral,
    LetStatement,
    Node,
    PrefixExpression,
    Program,
    ReturnStatement,
    StringLiteral,
)
from monkey.monkey_builtins import builtins
from monkey.monkey_object import (
    FALSE,
    NULL,
    Builtin,
    Environment,
    Error,
    Function,
    Integer,
    Object,
    ReturnValue,
    String,
    native_bool,
)


def _wrap_int64(value: int) -> int:
    return (value + 2**63) % 2**64 - 2**63


def _is_error(obj: Object | None) -> bool:
    return isinstance(obj, Error)


def is_truthy(obj: Object) -> bool:
    return obj != NULL and obj != FALSE


class Evaluator:
    """Evaluates Monkey AST nodes.

    Methods:
        evaluate(node, env): Dispatches to the `eval_*` method for `node.kind`.
        apply_function(fn, args): Calls a user function or builtin.
    """

    def evaluate(self, node: Node, env: Environment) -> Object:
        method = getattr(self, f"eval_{node.kind}", None)
        if method is None:
            raise NotImplementedError(f"No evaluator for AST kind: {node.kind}")
        return method(node, env)  # type: ignore[no-any-return]

    # Statements

    def eval_program(self, node: Program, env: Environment) -> Object:
        result: Object = NULL
        for stmt in node.statements:
            result = self.evaluate(stmt, env)
            if isinstance(result, ReturnValue):
                return result.value
            if isinstance(result, Error):
                return result
        return result

    def eval_block(self, node: BlockStatement, env: Environment) -> Object:
        # Return values stay wrapped so enclosing blocks stop too
        result: Object = NULL
        for stmt in node.statements:
            result = self.evaluate(stmt, env)
            if isinstance(result, (ReturnValue, Error)):
                return result
        return result

    def eval_expression_statement(
        self, node: ExpressionStatement, env: Environment
    ) -> Object:
        return self.evaluate(node.expression, env)

    def eval_let(self, node: LetStatement, env: Environment) -> Object:
        value = self.evaluate(node.value, env)
        if _is_error(value):
            return value
        env.set(node.name.value, value)
        return NULL

    def eval_return(self, node: ReturnStatement, env: Environment) -> Object:
        value = self.evaluate(node.return_value, env)
        if _is_error(value):
            return value
        return ReturnValue(value)

    # Literals and names

    def eval_integer(self, node: IntegerLiteral, env: Environment) -> Object:
        return Integer(node.value)

    def eval_boolean(self, node: BooleanLiteral, env: Environment) -> Object:
        return native_bool(node.value)

    def eval_string(self, node: StringLiteral, env: Environment) -> Object:
        return String(node.value)

    def eval_identifier(self, node: Identifier, env: Environment) -> Object:
        value = env.get(node.value)
        if value is not None:
            return value
        if node.value in builtins:
            return builtins[node.value]
        return Error(f"identifier not found: {node.value}")

    def eval_function(self, node: FunctionLiteral, env: Environment) -> Object:
        return Function(node.parameters, node.body, env)

    # Operators

    def eval_prefix(self, node: PrefixExpression, env: Environment) -> Object:
        right = self.evaluate(node.right, env)
        if _is_error(right):
            return right

        if node.operator == "!":
            return native_bool(not is_truthy(right))
        if node.operator == "-":
            if not isinstance(right, Integer):
                return Error(f"unknown operator: -{right.type()}")
            return Integer(_wrap_int64(-right.value))
        return Error(f"unknown operator: {node.operator}{right.type()}")

    def eval_infix(self, node: InfixExpression, env: Environment) -> Object:
        left = self.evaluate(node.left, env)
        if _is_error(left):
            return left
        right = self.evaluate(node.right, env)
        if _is_error(right):
            return right

        op = node.operator
        if isinstance(left, Integer) and isinstance(right, Integer):
            return self._integer_infix(op, left.value, right.value)
        if isinstance(left, String) and isinstance(right, String):
            return self._string_infix(op, left, right)
        if op == "==":
            return native_bool(left == right)
        if op == "!=":
            return native_bool(left != right)
        if left.type() != right.type():
            return Error(f"type mismatch: {left.type()} {op} {right.type()}")
        return Error(f"unknown operator: {left.type()} {op} {right.type()}")

    def _integer_infix(self, op: str, left: int, right: int) -> Object:
        if op == "+":
            return Integer(_wrap_int64(left + right))
        if op == "-":
            return Integer(_wrap_int64(left - right))
        if op == "*":
            return Integer(_wrap_int64(left * right))
        if op == "/":
            if right == 0:
                return Error("division by zero")
            quotient = abs(left) // abs(right)
            if (left < 0) != (right < 0):
                quotient = -quotient
            return Integer(_wrap_int64(quotient))
        if op == "<":
            return native_bool(left < right)
        if op == ">":
            return native_bool(left > right)
        if op == "==":
            return native_bool(left == right)
        if op == "!=":
            return native_bool(left != right)
        return Error(f"unknown operator: INTEGER {op} INTEGER")

    def _string_infix(self, op: str, left: String, right: String) -> Object:
        if op == "+":
            return String(left.value + right.value)
        if op == "==":
            return native_bool(left.value == right.value)
        if op == "!=":
            return native_bool(left.value != right.value)
        return Error(f"unknown operator: STRING {op} STRING")

    # Control flow and calls

    def eval_if(self, node: IfExpression, env: Environment) -> Object:
        condition = self.evaluate(node.condition, env)
        if _is_error(condition):
            return condition

        if is_truthy(condition):
            return self.evaluate(node.consequence, env)
        if node.alternative is not None:
            return self.evaluate(node.alternative, env)
        return NULL

    def eval_call(self, node: CallExpression, env: Environment) -> Object:
        function = self.evaluate(node.function, env)
        if _is_error(function):
            return function

        args: list[Object] = []
        for arg_node in node.arguments:
            arg = self.evaluate(arg_node, env)
            if _is_error(arg):
                return arg
            args.append(arg)

        return self.apply_function(function, args)

    def apply_function(self, fn: Object, args: list[Object]) -> Object:
        if isinstance(fn, Function):
            if len(args) != len(fn.parameters):
                return Error(
                    f"wrong number of arguments. got={len(args)}, want={len(fn.parameters)}"
                )
            scope = fn.env.extend()
            for param, arg in zip(fn.parameters, args):
                scope.set(param.value, arg)
            result = self.evaluate(fn.body, scope)
            if isinstance(result, ReturnValue):
                return result.value
            return result

        if isinstance(fn, Builtin):
            return fn.fn(*args)

        return Error(f"not a function: {fn.type()}")


def evaluate(program: Program, env: Environment | None = None) -> Object:
    """Evaluate `program` in `env` (a fresh global scope when omitted)."""
    return Evaluator().evaluate(program, env if env is not None else Environment())


__all__ = ["Evaluator", "evaluate", "is_truthy"]
