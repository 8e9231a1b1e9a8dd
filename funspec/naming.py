"""Default display names for deferred calls."""

from __future__ import annotations

from typing import Sequence

from funspec import SExpression
from funspec.types.symbol import Symbol
from funspec.types.lambda_fn import Lambda
from funspec.printer import deparse


def label(expr: SExpression) -> str:
    """A readable label for `expr`.

    Symbols give their name, strings their content, function values their
    `__name__`; anything else (accessors, nested calls) is deparsed.
    """
    if isinstance(expr, Symbol):
        return expr.id
    if isinstance(expr, str):
        return expr
    if callable(expr) and not isinstance(expr, Lambda):
        name = getattr(expr, "__name__", None)
        if isinstance(name, str) and name:
            return name
    return deparse(expr)


def auto_name(exprs: Sequence[SExpression], names: Sequence[str] | None = None) -> list[str]:
    """Fill every empty name with the label of the matching expression."""
    if names is None:
        names = [""] * len(exprs)
    if len(names) != len(exprs):
        raise ValueError("auto_name() needs one name per expression")
    return [name if name else label(expr) for expr, name in zip(exprs, names)]
