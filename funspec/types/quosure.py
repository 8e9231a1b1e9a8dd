"""Quoted expressions paired with the environment they were written in."""

from __future__ import annotations

from funspec import SExpression
from funspec.types.environment import Environment
from funspec.types.symbol import DOT, DOT_X, TILDE


class Quosure:
    """An unevaluated expression and its defining environment.

    `env` is None when the expression carries no lexical context of its own,
    as for specs read from text; callers substitute their own environment.
    """

    __slots__ = ("expr", "env")

    def __init__(self, expr: SExpression, env: Environment | None = None):
        self.expr: SExpression = expr
        self.env: Environment | None = env

    def with_env(self, env: Environment | None) -> Quosure:
        return Quosure(self.expr, env)

    def with_expr(self, expr: SExpression) -> Quosure:
        return Quosure(expr, self.env)

    @property
    def text(self) -> str:
        from funspec.printer import deparse

        return deparse(self.expr)

    def __eq__(self, other) -> bool:
        return (
            isinstance(other, Quosure)
            and self.env is other.env
            and self.expr == other.expr
        )

    def __hash__(self) -> int:
        return hash((self.text, id(self.env)))

    def __repr__(self) -> str:
        return f"<quosure {self.text}>"


class Formula:
    """The `~body` shorthand: a one-subject anonymous function in waiting."""

    __slots__ = ("body", "env")

    def __init__(self, body: SExpression, env: Environment | None = None):
        self.body: SExpression = body
        self.env: Environment | None = env

    @classmethod
    def read(cls, source: str, env: Environment | None = None) -> Formula:
        """Read `~body` (or just `body`) from text."""
        from funspec.reader.parser import read

        expr = read(source)
        if isinstance(expr, list) and len(expr) == 2 and TILDE == expr[0]:
            expr = expr[1]
        return cls(expr, env)

    @property
    def expr(self) -> SExpression:
        """The formula as a call to `~`."""
        return [TILDE, self.body]

    def as_function(self, env: Environment | None = None):
        """Interpolate unquotes in the body, then close over the environment.

        The formula's own environment wins; `env` is used when it has none,
        and the global environment when neither is given.
        The resulting function takes the subject as `.` with `.x` as an alias.
        """
        from funspec.builtins import global_env
        from funspec.evaluation.quasiquote import interpolate
        from funspec.types.lambda_fn import Lambda

        target = self.env if self.env is not None else env
        if target is None:
            target = global_env()
        body = interpolate(self.body, target)
        return Lambda([DOT, DOT_X], body, target, defaults={DOT_X: DOT})

    def __repr__(self) -> str:
        from funspec.printer import deparse

        return deparse(self.expr)
