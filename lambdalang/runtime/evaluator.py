"""AST-walking evaluator for lambdalang.

Runtime values are floats (host ints are accepted as numbers too), strings, booleans, Closures and host callables.
There is no null: False doubles as the "nothing" result, and it is the only falsy value.
"""

import math
from dataclasses import dataclass
from typing import Tuple

from lambdalang.lang.error import EvaluationError
from lambdalang.runtime.environment import Environment
from lambdalang.syntax import ast


@dataclass(eq=False)
class Closure:
    """A lambda paired with the scope it was created in. Compared by identity."""
    params: Tuple[str, ...]
    body: ast.Node
    env: Environment

    def __call__(self, *args):
        scope = self.env.extend()
        for idx, param in enumerate(self.params):
            scope.define(param, args[idx] if idx < len(args) else False)
        return evaluate(self.body, scope)

    def __repr__(self):
        return f"<lambda({', '.join(self.params)})>"


def is_number(value):
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_truthy(value):
    return value is not False


def strict_equals(left, right):
    """Equality without coercion: values of different kinds are never equal."""
    if is_number(left) and is_number(right):
        return left == right
    if is_number(left) or is_number(right) or type(left) is not type(right):
        return False
    if isinstance(left, (str, bool)):
        return left == right
    return left is right


def to_number(value):
    if not is_number(value):
        raise EvaluationError(f"Expected number but got {value!r}")
    return value


def divisor(value):
    num = to_number(value)
    if num == 0:
        raise EvaluationError("Divide by zero")
    return num


def remainder(left, right):
    """Remainder with the sign of the dividend. An infinite dividend has no remainder: NaN."""
    num = to_number(left)
    den = divisor(right)
    if math.isinf(num):
        return math.nan
    return math.fmod(num, den)


OPERATORS = {
    "+": lambda left, right: to_number(left) + to_number(right),
    "-": lambda left, right: to_number(left) - to_number(right),
    "*": lambda left, right: to_number(left) * to_number(right),
    "/": lambda left, right: to_number(left) / divisor(right),
    "%": remainder,
    "&&": lambda left, right: right if is_truthy(left) else False,
    "||": lambda left, right: left if is_truthy(left) else right,
    "<": lambda left, right: to_number(left) < to_number(right),
    ">": lambda left, right: to_number(left) > to_number(right),
    "<=": lambda left, right: to_number(left) <= to_number(right),
    ">=": lambda left, right: to_number(left) >= to_number(right),
    "==": strict_equals,
    "!=": lambda left, right: not strict_equals(left, right),
}


def apply_operator(operator, left, right):
    func = OPERATORS.get(operator)
    if func is None:
        raise EvaluationError(f"Can't apply operator {operator} to {left!r} and {right!r}")
    return func(left, right)


def evaluate(node, env):
    """Evaluates node in env and returns its value. Errors unwind as EvaluationErrors."""
    evaluator = _EVALUATORS.get(type(node))
    if evaluator is None:
        raise EvaluationError(f"I don't know how to evaluate {node!r}", internal=True)
    return evaluator(node, env)


def _literal(node, env):
    return node.value


def _var(node, env):
    return env.get(node.name)


def _assign(node, env):
    if not isinstance(node.target, ast.Var):
        raise EvaluationError(f"Cannot assign to {node.target!r}")
    return env.set(node.target.name, evaluate(node.value, env))


def _binary(node, env):
    left = evaluate(node.left, env)
    right = evaluate(node.right, env)
    return apply_operator(node.operator, left, right)


def _if(node, env):
    if is_truthy(evaluate(node.condition, env)):
        return evaluate(node.then, env)
    if node.otherwise is not None:
        return evaluate(node.otherwise, env)
    return False


def _lambda(node, env):
    return Closure(node.params, node.body, env)


def _call(node, env):
    func = evaluate(node.func, env)
    args = [evaluate(arg, env) for arg in node.args]
    if not callable(func):
        raise EvaluationError(f"Cannot call {func!r}")
    return func(*args)


def _program(node, env):
    value = False
    for expression in node.body:
        value = evaluate(expression, env)
    return value


_EVALUATORS = {
    ast.Number: _literal,
    ast.String: _literal,
    ast.Bool: _literal,
    ast.Var: _var,
    ast.Assign: _assign,
    ast.Binary: _binary,
    ast.If: _if,
    ast.Lambda: _lambda,
    ast.Call: _call,
    ast.Program: _program,
}
