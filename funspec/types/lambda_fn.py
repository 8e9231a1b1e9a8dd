"""Lambda function representation and argument binding for funspec."""

from __future__ import annotations

from io import StringIO

from funspec import SExpression, LispValue
from funspec.types.environment import Environment
from funspec.types.symbol import Symbol
from funspec.errors import FunspecArityError


class Lambda:
    """A first-class lambda with formal parameters, body, and closure env.

    Lambdas are ordinary Python callables: positional arguments bind to the
    formals in order and keyword arguments bind by name. A formal listed in
    `defaults` may be omitted; its default expression is evaluated in the call
    frame, so it may refer to formals bound before it.
    """

    __slots__ = ("formals", "body", "env", "defaults")

    def __init__(
        self,
        formals: list[Symbol],
        body: SExpression,
        env: Environment | None = None,
        defaults: dict[Symbol, SExpression] | None = None,
    ):
        self.formals: list[Symbol] = list(formals)
        self.body: SExpression = body
        # Avoid shared default Environment across instances
        self.env: Environment = env if env is not None else Environment()
        self.defaults: dict[Symbol, SExpression] = dict(defaults or {})

    def __str__(self) -> str:
        from funspec.printer import deparse

        with StringIO() as buffer:
            buffer.write("(lambda (")
            params = []
            for f in self.formals:
                if f in self.defaults:
                    params.append(f"({f} {deparse(self.defaults[f])})")
                else:
                    params.append(str(f))
            buffer.write(" ".join(params))
            buffer.write(") ")
            buffer.write(deparse(self.body))
            buffer.write(")")
            return buffer.getvalue()

    def __repr__(self) -> str:
        return str(self)

    def __call__(self, *args: LispValue, **kwargs: LispValue) -> LispValue:
        from funspec.evaluation.evaluator import evaluate

        return evaluate(self.body, self.extend_env(list(args), kwargs))

    def extend_env(
        self, args: list[LispValue], kwargs: dict[str, LispValue] | None = None
    ) -> Environment:
        """Bind arguments to the formals and return the frame for the body."""
        from funspec.evaluation.evaluator import evaluate

        if len(args) > len(self.formals):
            extra = list(args[len(self.formals):])
            raise FunspecArityError(f"Too many arguments: {extra}")

        local_env = Environment(outer=self.env)
        for formal, value in zip(self.formals, args):
            local_env.define(formal, value)

        for name, value in (kwargs or {}).items():
            sym = Symbol(name)
            if sym not in self.formals:
                raise FunspecArityError(f"Unknown keyword argument :{name}")
            if sym in local_env.vars:
                raise FunspecArityError(f"Multiple values for argument {name}")
            local_env.define(sym, value)

        missing = []
        for formal in self.formals:
            if formal in local_env.vars:
                continue
            if formal in self.defaults:
                local_env.define(formal, evaluate(self.defaults[formal], local_env))
            else:
                missing.append(str(formal))
        if missing:
            raise FunspecArityError(
                f"Too few arguments; missing {len(missing)} parameter(s): {missing}"
            )
        return local_env
