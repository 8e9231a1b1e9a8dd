"""Helpers for building and rewriting call expressions.

A call is a Python list whose first element is the head (a symbol, a
namespace accessor, a nested call, or a function value), followed by
positional arguments and then `:keyword value` pairs.
"""

from __future__ import annotations

from typing import Iterable, Mapping

from funspec import SExpression, LispValue
from funspec.types.symbol import (
    Symbol,
    QUOTE,
    keyword,
    is_keyword,
    keyword_name,
)


def is_call(expr: SExpression, names: str | Iterable[str] | None = None) -> bool:
    """True if `expr` is a call, optionally to a symbol named in `names`."""
    if not isinstance(expr, list) or not expr:
        return False
    if names is None:
        return True
    if isinstance(names, str):
        names = (names,)
    head = expr[0]
    return isinstance(head, Symbol) and head.id in names


def is_accessor(expr: SExpression) -> bool:
    return is_call(expr, ("::", ":::"))


def call_head(expr: SExpression) -> SExpression:
    return expr[0]


def call_args(expr: SExpression) -> tuple[list[SExpression], dict[str, SExpression]]:
    from funspec.evaluation.evaluator import split_arguments

    return split_arguments(list(expr[1:]))


def quote_if_needed(value: LispValue) -> SExpression:
    """Inline a value into a call so that evaluating the argument yields it.

    Lists would be read back as calls, so they go inside `(quote ...)`.
    """
    if isinstance(value, list):
        return [QUOTE, value]
    return value


def copy_tree(expr: SExpression) -> SExpression:
    """Copy the list structure of an expression, sharing its atoms."""
    if isinstance(expr, list):
        return [copy_tree(x) for x in expr]
    return expr


def _keyword_positions(call: list) -> dict[str, list[int]]:
    """Value positions of every `:keyword value` pair, by keyword name."""
    positions: dict[str, list[int]] = {}
    i = 1
    while i < len(call):
        if is_keyword(call[i]) and i + 1 < len(call):
            positions.setdefault(keyword_name(call[i]), []).append(i + 1)
            i += 2
        else:
            i += 1
    return positions


def call2(head: SExpression, *args: SExpression, **kwargs: LispValue) -> list:
    """Build the call `(head args... :k v ...)`.

    Positional arguments are code; keyword values are inlined as values.
    """
    expr = [head, *args]
    for name, value in kwargs.items():
        expr.extend([keyword(name), quote_if_needed(value)])
    return expr


def call_modify(call: list, args: Mapping[str, LispValue] | None = None) -> list:
    """Return a copy of `call` with `args` merged into its keyword arguments.

    An argument whose name is already present replaces the existing value in
    place, at every position where the call repeats it; any other argument
    is appended in mapping order.
    """
    new = copy_tree(call)
    if not args:
        return new
    positions = _keyword_positions(new)
    for name, value in args.items():
        value = quote_if_needed(value)
        if name in positions:
            for pos in positions[name]:
                new[pos] = value
        else:
            new.extend([keyword(name), value])
            positions[name] = [len(new) - 1]
    return new
