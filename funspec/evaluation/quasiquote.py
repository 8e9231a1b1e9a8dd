"""Quasiquotation over call specs.

Specs may carry `(unquote x)` / `(unquote-splicing xs)` markers (read from
`,x` and `,@xs`). Interpolation replaces them with values computed in the
spec's environment at capture time, so the stored call holds the values
themselves and never re-evaluates `x` when it is invoked later.
"""

from __future__ import annotations

from collections.abc import Sequence

from funspec import SExpression
from funspec.calls import quote_if_needed
from funspec.errors import FunspecTypeError, FunspecError
from funspec.evaluation.evaluator import evaluate
from funspec.types.environment import Environment
from funspec.types.symbol import Symbol, QUOTE

QUASIQUOTE = Symbol("quasiquote")
UNQUOTE = Symbol("unquote")
UNQUOTE_SPLICING = Symbol("unquote-splicing")


def interpolate(expr: SExpression, env: Environment, depth: int = 1) -> SExpression:
    """Return `expr` with depth-1 unquotes replaced by their values in `env`."""
    if not isinstance(expr, list) or not expr:
        return expr

    head = expr[0]
    if QUOTE == head:
        return expr
    if UNQUOTE == head and depth == 1:
        if len(expr) != 2:
            raise FunspecError("Unquote expects exactly 1 argument")
        return quote_if_needed(evaluate(expr[1], env))
    if UNQUOTE_SPLICING == head and depth == 1:
        raise FunspecError("Unquote-splicing not valid outside of a call")

    if QUASIQUOTE == head:
        return [QUASIQUOTE] + [interpolate(x, env, depth + 1) for x in expr[1:]]

    result = []
    for item in expr:
        if isinstance(item, list) and item and UNQUOTE_SPLICING == item[0] and depth == 1:
            # Gracefully handle malformed ',@' without an argument by splicing nothing
            if len(item) < 2:
                continue
            spliced = evaluate(item[1], env)
            if isinstance(spliced, str) or not isinstance(spliced, Sequence):
                raise FunspecTypeError("Unquote-splicing must produce a sequence")
            result.extend(quote_if_needed(v) for v in spliced)
            continue
        result.append(interpolate(item, env, depth))
    return result
