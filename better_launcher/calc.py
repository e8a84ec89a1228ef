from __future__ import annotations

import ast
import math
import re
from decimal import Decimal


_INT_TOKEN = re.compile(r"[+-]?\d+")

Number = int | float


def _force_float_division(expr: str) -> str:
    # "7/2" -> "7.0/2.0" so that division is never integer division
    tokens = expr.replace("/", " / ").split()
    out = [t + ".0" if _INT_TOKEN.fullmatch(t) else t for t in tokens]
    return " ".join(out).replace(" / ", "/")


def _trunc_div(a: int, b: int) -> int:
    # rounds toward zero, unlike //
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


def _binop(op: ast.operator, a: Number, b: Number) -> Number:
    if isinstance(op, ast.Add):
        return a + b
    if isinstance(op, ast.Sub):
        return a - b
    if isinstance(op, ast.Mult):
        return a * b
    if isinstance(op, ast.Div):
        if isinstance(a, int) and isinstance(b, int):
            return _trunc_div(a, b)
        return a / b
    if isinstance(op, ast.Mod):
        if isinstance(a, int) and isinstance(b, int):
            return a - b * _trunc_div(a, b)
        return math.fmod(a, b)
    if isinstance(op, (ast.Pow, ast.BitXor)):
        return float(a) ** float(b)
    raise ValueError("unsupported operator")


def _eval(root: ast.AST) -> Number:
    # explicit stack: "1+1+...+1" nests as deep as it is long
    stack: list[tuple[ast.AST, bool]] = [(root, False)]
    values: list[Number] = []
    while stack:
        n, operands_done = stack.pop()
        if isinstance(n, ast.Expression):
            stack.append((n.body, False))
        elif isinstance(n, ast.Constant) and type(n.value) in (int, float):
            values.append(n.value)
        elif isinstance(n, ast.UnaryOp) and isinstance(n.op, (ast.UAdd, ast.USub)):
            if not operands_done:
                stack.append((n, True))
                stack.append((n.operand, False))
            elif isinstance(n.op, ast.USub):
                values.append(-values.pop())
        elif isinstance(n, ast.BinOp):
            if not operands_done:
                stack.append((n, True))
                stack.append((n.right, False))
                stack.append((n.left, False))
            else:
                b = values.pop()
                a = values.pop()
                values.append(_binop(n.op, a, b))
        else:
            raise ValueError("unsupported expression")
    return values[0]


def _format(v: Number) -> str:
    if isinstance(v, int):
        return str(v)
    if v == int(v):
        return str(int(v))
    # shortest round-trip digits, never in exponent form: 1e-06 -> 0.000001
    return format(Decimal(repr(v)), "f")


def evaluate_expression(query: str) -> str | None:
    """Evaluate a search query as arithmetic.

    Supports + - * / % and ^ (power) with parentheses. Returns the formatted
    result, or None when the text is not a usable expression.
    """
    expr = query.strip()
    if not expr:
        return None
    if "/" in expr:
        expr = _force_float_division(expr)

    try:
        v = _eval(ast.parse(expr, mode="eval"))
        if isinstance(v, complex) or (isinstance(v, float) and not math.isfinite(v)):
            return None
        # str() of a huge int hits the interpreter's digit limit
        return _format(v)
    except (SyntaxError, ValueError, ArithmeticError, TypeError, RecursionError, MemoryError):
        return None
