"""Evaluator for deferred calls.

Evaluates call expressions against an Environment: symbols are looked up,
keywords and atoms evaluate to themselves, `quote` returns its operand,
namespace accessors resolve through packages or importable modules, and any
other list is a call whose arguments are evaluated left to right.
"""

from __future__ import annotations

from funspec import SExpression, LispValue
from funspec.errors import FunspecTypeError, FunspecSyntaxError
from funspec.types.environment import Environment
from funspec.types.symbol import (
    Symbol,
    QUOTE,
    ACCESSOR,
    PRIVATE_ACCESSOR,
    is_keyword,
    keyword_name,
)
from funspec.evaluation.py_module_util import resolve_accessor


def split_arguments(
    tail: list[SExpression],
) -> tuple[list[SExpression], dict[str, SExpression]]:
    """Split call arguments into positional expressions and `:keyword value` pairs."""
    positional: list[SExpression] = []
    named: dict[str, SExpression] = {}
    i = 0
    while i < len(tail):
        item = tail[i]
        if is_keyword(item):
            if i + 1 >= len(tail):
                raise FunspecSyntaxError(f"Keyword argument {item} has no value")
            named[keyword_name(item)] = tail[i + 1]
            i += 2
            continue
        positional.append(item)
        i += 1
    return positional, named


def evaluate(expr: SExpression, env: Environment) -> LispValue:
    """Evaluate `expr` in `env` and return its value."""
    match expr:
        case [head, *tail_args] if isinstance(expr, list):
            if QUOTE == head:
                if len(tail_args) != 1:
                    raise FunspecSyntaxError("Quote expects exactly 1 argument")
                return tail_args[0]
            if head in (ACCESSOR, PRIVATE_ACCESSOR):
                if len(tail_args) != 2 or not all(isinstance(s, Symbol) for s in tail_args):
                    raise FunspecSyntaxError(f"Malformed namespace accessor {expr}")
                pkg, name = tail_args
                return resolve_accessor(env, pkg, name, private=head == PRIVATE_ACCESSOR)

            # Symbols and nested calls in head position are evaluated, a
            # string names a function; a function value is applied as-is.
            if isinstance(head, (Symbol, list)):
                fn = evaluate(head, env)
            elif isinstance(head, str):
                fn = env.lookup(Symbol(head))
            else:
                fn = head
            if not callable(fn):
                raise FunspecTypeError(f"Cannot apply non-function {fn!r}")

            positional, named = split_arguments(tail_args)
            args = [evaluate(arg, env) for arg in positional]
            kwargs = {k: evaluate(v, env) for k, v in named.items()}
            return fn(*args, **kwargs)

        case Symbol():
            # Keywords (symbols starting with ':') are self-evaluating.
            if is_keyword(expr):
                return expr
            return env.lookup(expr)

    # --- Atoms (including the empty list) return as-is ---
    return expr
