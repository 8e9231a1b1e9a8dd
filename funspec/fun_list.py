"""Deferred calls and the named collections that hold them."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from io import StringIO
from typing import Iterator

from funspec import SExpression, LispValue
from funspec.calls import call_modify, copy_tree, is_call
from funspec.config import get_print_width
from funspec.evaluation.evaluator import evaluate
from funspec.naming import auto_name
from funspec.printer import deparse, deparse_trunc
from funspec.types.environment import Environment
from funspec.types.lambda_fn import Lambda
from funspec.types.quosure import Quosure
from funspec.types.symbol import DOT, DOT_X

logger = logging.getLogger(__name__)


class DeferredCall:
    """A call expression with one open placeholder, bound to its environment.

    Calling it with a subject evaluates the expression in a child of the
    defining environment where `.` (and its alias `.x`) is the subject.
    The expression is copied on the way in and on the way out, so a
    DeferredCall never changes after construction.
    """

    __slots__ = ("_expr", "_env")

    def __init__(self, expr: SExpression, env: Environment):
        self._expr = copy_tree(expr)
        self._env = env

    @property
    def expr(self) -> SExpression:
        return copy_tree(self._expr)

    @property
    def env(self) -> Environment:
        return self._env

    @property
    def head(self) -> SExpression:
        return copy_tree(self._expr[0]) if is_call(self._expr) else self._expr

    @property
    def text(self) -> str:
        return deparse(self._expr)

    def as_quosure(self) -> Quosure:
        return Quosure(self.expr, self._env)

    def as_function(self) -> Lambda:
        """The call as a function of the subject `.`."""
        return Lambda([DOT], self.expr, self._env)

    def with_args(self, **args: LispValue) -> DeferredCall:
        """A new DeferredCall with `args` merged into the call's keyword arguments."""
        return DeferredCall(call_modify(self._expr, args), self._env)

    def __call__(self, subject: LispValue) -> LispValue:
        frame = Environment(outer=self._env)
        frame.define(DOT, subject)
        frame.define(DOT_X, subject)
        return evaluate(self._expr, frame)

    def __eq__(self, other) -> bool:
        return (
            isinstance(other, DeferredCall)
            and self._env is other._env
            and self._expr == other._expr
        )

    def __hash__(self) -> int:
        return hash((self.text, id(self._env)))

    def __repr__(self) -> str:
        return f"<DeferredCall {self.text}>"


class FunList(Sequence):
    """An ordered, named sequence of DeferredCalls.

    `have_name` records whether the caller named any entry explicitly; it is
    carried over to every FunList derived from this one by slicing.
    """

    __slots__ = ("_calls", "_names", "have_name")

    def __init__(self, calls: list[DeferredCall], names: list[str], have_name: bool):
        if len(calls) != len(names):
            raise ValueError("FunList needs one name per call")
        self._calls: list[DeferredCall] = list(calls)
        self._names: list[str] = list(names)
        self.have_name: bool = have_name

    @property
    def names(self) -> list[str]:
        return list(self._names)

    def __len__(self) -> int:
        return len(self._calls)

    def __iter__(self) -> Iterator[DeferredCall]:
        return iter(self._calls)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return FunList(self._calls[index], self._names[index], self.have_name)
        if isinstance(index, str):
            try:
                return self._calls[self._names.index(index)]
            except ValueError:
                raise KeyError(index) from None
        if isinstance(index, (list, tuple)):
            picked = [self._resolve(i) for i in index]
            return FunList(
                [self._calls[i] for i in picked],
                [self._names[i] for i in picked],
                self.have_name,
            )
        return self._calls[index]

    def _resolve(self, index) -> int:
        if isinstance(index, str):
            try:
                return self._names.index(index)
            except ValueError:
                raise KeyError(index) from None
        return range(len(self._calls))[index]

    def items(self) -> list[tuple[str, DeferredCall]]:
        return list(zip(self._names, self._calls))

    def with_args(self, **args: LispValue) -> FunList:
        """A new FunList with `args` merged into every call."""
        return FunList([c.with_args(**args) for c in self._calls], self._names, self.have_name)

    def __eq__(self, other) -> bool:
        if not isinstance(other, FunList):
            return NotImplemented
        return (
            self._names == other._names
            and self._calls == other._calls
            and self.have_name == other.have_name
        )

    __hash__ = None

    def format(self, width: int | None = None) -> str:
        """Render `<fun_calls>` and one `$ name: code` line per entry."""
        if width is None:
            width = get_print_width()
        pad = max((len(n) for n in self._names), default=0)
        code_width = width - 2 - pad
        with StringIO() as buffer:
            buffer.write("<fun_calls>\n")
            lines = [
                f"$ {name.ljust(pad)}: {deparse_trunc(call._expr, code_width)}"
                for name, call in zip(self._names, self._calls)
            ]
            buffer.write("\n".join(lines))
            return buffer.getvalue()

    def __repr__(self) -> str:
        return self.format()


def new_funs(calls: list[DeferredCall], names: list[str] | None = None) -> FunList:
    """Build a FunList, naming unnamed entries after their call heads."""
    if names is None:
        names = [""] * len(calls)
    have_name = any(n != "" for n in names)
    names = auto_name([c.head for c in calls], names)
    logger.debug("new_funs: %d calls, have_name=%s", len(calls), have_name)
    return FunList(calls, names, have_name)
