"""Build named lists of deferred function calls.

`funs()` gives a flexible way to describe the summaries a scoped verb should
apply to each column. A function may be given by:

- its name, `"mean"`
- the function itself, `statistics.mean`
- a call with `.` as a stand-in for the column, `"(round . :ndigits 2)"`

Text specs support unquoting: `"(round . :ndigits ,digits)"` inlines the value
of `digits` from the capture environment. Anonymous functions are not
supported, neither as `(lambda (x) ...)` nor as the formula shorthand `~(f .)`,
nor as a Python `lambda` value.

Both `funs()` and `funs_()` are soft-deprecated: pass a plain list of
functions to the scoped verbs instead.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Iterable

from funspec import SExpression, LispValue
from funspec.builtins import as_environment
from funspec.calls import call2, call_modify, is_accessor, is_call
from funspec.errors import FunspecError, InvalidInput, ResolutionFailure, UnsupportedConstruct
from funspec.evaluation.evaluator import evaluate
from funspec.evaluation.quasiquote import interpolate
from funspec.fun_list import DeferredCall, FunList, new_funs
from funspec.lifecycle import paste_line, signal_soft_deprecated
from funspec.printer import deparse
from funspec.reader.parser import read
from funspec.types.environment import Environment
from funspec.types.lambda_fn import Lambda
from funspec.types.quosure import Formula, Quosure
from funspec.types.symbol import DOT, DOT_X, LAMBDA, TILDE, Symbol

logger = logging.getLogger(__name__)

# Heads of anonymous-function notations, which cannot be turned into a call
_UNSUPPORTED_HEADS = (LAMBDA.id, TILDE.id)


def funs(
    *specs: Any,
    _args: Mapping[str, LispValue] | None = None,
    _env: Any = None,
    **named_specs: Any,
) -> FunList:
    """Create a FunList of deferred calls.

    Positional specs come first, in order; a positional dict splices its
    items as named specs at its position. Keyword specs follow in order.
    `_args` is merged into every call as keyword arguments, overriding any
    argument of the same name. `_env` is the environment in which names
    resolve for specs that carry none of their own (default `global_env()`).

    >>> fs = funs("min", "max", m="(round . :ndigits 1)")
    >>> fs.names
    ['min', 'max', 'm']
    """
    signal_soft_deprecated(
        paste_line(
            "funs() is soft deprecated as of funspec 0.8.0",
            "please use a list of functions instead",
            "",
            "# Before:",
            'funs(name="(f .)")',
            "",
            "# After: ",
            "{\"name\": Formula.read(\"~(f .)\")}",
        ),
        id="funs",
    )
    default_env = as_environment(_env)
    args = dict(_args or {})

    dots = collect_dots(specs, named_specs)
    calls = [as_fun(spec, default_env, args) for _, spec in dots]
    return new_funs(calls, [name for name, _ in dots])


def collect_dots(specs: Iterable[Any], named_specs: Mapping[str, Any]) -> list[tuple[str, Any]]:
    """Flatten variadic specs into ordered `(name, spec)` pairs ('' when unnamed).

    A positional dict or FunList splices its named entries in place.
    """
    dots: list[tuple[str, Any]] = []
    for spec in specs:
        if isinstance(spec, FunList):
            dots.extend(spec.items())
        elif isinstance(spec, Mapping):
            dots.extend((str(k), v) for k, v in spec.items())
        else:
            dots.append(("", spec))
    dots.extend(named_specs.items())
    return dots


def is_anonymous_function(value: Any) -> bool:
    return callable(value) and getattr(value, "__name__", None) == "<lambda>"


def as_quosure(spec: Any, env: Environment) -> Quosure:
    """Capture `spec` as an expression with its own environment, if it has one.

    Text and bare expressions carry no environment; unquotes in them are
    interpolated in `env` at capture time.
    """
    if isinstance(spec, Quosure):
        quo = spec
    elif isinstance(spec, DeferredCall):
        return spec.as_quosure()
    elif isinstance(spec, Formula):
        return Quosure(spec.expr, spec.env)
    elif isinstance(spec, str):
        quo = Quosure(read(spec))
    else:
        quo = Quosure(spec)
    return quo.with_expr(interpolate(quo.expr, fun_env(quo, env)))


def fun_env(quo: Quosure, default_env: Environment) -> Environment:
    """The quosure's own environment, or `default_env` when it has none."""
    if quo.env is None:
        return default_env
    return quo.env


def as_fun(spec: Any, env: Environment, args: Mapping[str, LispValue]) -> DeferredCall:
    """Normalize one call spec into a DeferredCall."""
    quo = as_quosure(spec, env)

    # Text specs carry no environment and resolve in the caller's one.
    quo = quo.with_env(fun_env(quo, env))

    expr = quo.expr

    if is_call(expr, _UNSUPPORTED_HEADS):
        raise UnsupportedConstruct(deparse(expr), expr[0].id)
    if is_anonymous_function(expr):
        raise UnsupportedConstruct(deparse(expr), "lambda")

    if is_call(expr) and not is_accessor(expr):
        expr = call_modify(expr, args)
    else:
        expr = call2(expr, DOT, **args)

    logger.debug("as_fun: %s -> %s", spec, deparse(expr))
    return DeferredCall(expr, quo.env)


def funs_(dots: Any, args: Mapping[str, LispValue] | None = None, env: Any = None) -> FunList:
    """Create a FunList from specs collected into one value.

    `dots` is a single spec, a list or tuple of specs, or a dict of named
    specs. A Formula entry stands for its body, evaluated in the formula's
    environment. Names resolve in `env` (default `global_env()`).

    >>> funs_(["min", "max"]).names
    ['min', 'max']
    """
    signal_soft_deprecated(
        paste_line("funs_() is deprecated. ", "Please use a list of functions instead"),
        id="funs_",
    )
    env = as_environment(env)
    specs = [{name: spec} if name else spec for name, spec in compat_lazy_dots(dots, env)]
    return funs(*specs, _args=args, _env=env)


def compat_lazy_dots(dots: Any, env: Environment) -> list[tuple[str, Any]]:
    """Convert legacy specs to `(name, spec)` pairs, formulas to quosures."""
    if isinstance(dots, FunList):
        return dots.items()
    if isinstance(dots, Mapping):
        return [(str(k), _compat_lazy(v, env)) for k, v in dots.items()]
    if not isinstance(dots, (list, tuple)):
        dots = [dots]
    return [("", _compat_lazy(d, env)) for d in dots]


def _compat_lazy(spec: Any, env: Environment) -> Any:
    if isinstance(spec, Formula):
        return Quosure(spec.body, spec.env if spec.env is not None else env)
    return spec


class FunctionList(list):
    """A list of plain callables, as produced by `as_fun_list()`.

    `names` holds one name per entry ('' when unnamed); `have_name` is
    True when any entry was named.
    """

    def __init__(
        self,
        fns: Iterable[Any] = (),
        names: Iterable[str] | None = None,
        have_name: bool | None = None,
    ):
        super().__init__(fns)
        self.names: list[str] = list(names) if names is not None else [""] * len(self)
        if have_name is None:
            have_name = any(n != "" for n in self.names)
        self.have_name: bool = have_name

    def __getitem__(self, index):
        if isinstance(index, slice):
            return FunctionList(super().__getitem__(index), self.names[index], self.have_name)
        if isinstance(index, str):
            return super().__getitem__(self._resolve(index))
        if isinstance(index, (list, tuple)):
            picked = [self._resolve(i) for i in index]
            return FunctionList(
                [super(FunctionList, self).__getitem__(i) for i in picked],
                [self.names[i] for i in picked],
                self.have_name,
            )
        return super().__getitem__(index)

    def _resolve(self, index) -> int:
        if isinstance(index, str):
            try:
                return self.names.index(index)
            except ValueError:
                raise KeyError(index) from None
        return range(len(self))[index]


def as_fun_list(funs: Any, env: Any = None, **args: LispValue) -> FunList | FunctionList:
    """Coerce legacy function specs to callables.

    A FunList passes through, with `args` merged into every call when given.
    Otherwise each entry must be a Formula (turned into a function of `.`),
    a string naming a callable in `env`, or a callable. With `args`, each
    plain function is wrapped so that it takes only the subject, as `.` or
    `.x`, and receives `args` as keyword arguments.
    """
    if isinstance(funs, FunList):
        if args:
            return funs.with_args(**args)
        return funs

    env = as_environment(env)

    if isinstance(funs, Mapping):
        names, specs = [str(k) for k in funs.keys()], list(funs.values())
    elif isinstance(funs, (list, tuple)):
        names, specs = [""] * len(funs), list(funs)
    else:
        names, specs = [""], [funs]

    fns = [_as_legacy_function(spec, env, args) for spec in specs]
    return FunctionList(fns, names)


def _as_legacy_function(spec: Any, env: Environment, args: Mapping[str, LispValue]) -> Any:
    if isinstance(spec, Formula):
        return spec.as_function(env)

    if isinstance(spec, str):
        fn = lookup_function(spec, env)
    elif callable(spec):
        fn = spec
    else:
        raise InvalidInput(
            f"Expected a function name, a function or a formula, not {type(spec).__name__}"
        )

    if args:
        # Close over the extra arguments so the result takes only `.`,
        # or `.x` as a synonym.
        fn = Lambda(
            [DOT, DOT_X],
            call2(fn, DOT, **args),
            env,
            defaults={DOT_X: DOT},
        )
    return fn


def lookup_function(name: str, env: Environment) -> Any:
    """Resolve `name` (or `pkg::name`) in `env`, requiring a callable."""
    expr: SExpression = read(name) if "::" in name else Symbol(name)
    try:
        value = evaluate(expr, env)
    except FunspecError as exc:
        logger.debug("lookup_function(%r) failed: %s", name, exc)
        raise ResolutionFailure(name) from exc
    if not callable(value):
        raise ResolutionFailure(name)
    return value
