"""Default environments for resolving function names.

`base_env()` binds the Python builtins and the `statistics` summaries;
`global_env()` is the process-wide environment used when a caller does not
supply one, with a fresh base environment as its parent.
"""
from __future__ import annotations

import builtins as py_builtins
import statistics
from types import ModuleType
from typing import Optional

from funspec.errors import FunspecTypeError
from funspec.types.environment import Environment
from funspec.types.symbol import Symbol

STATISTICS = (
    "mean",
    "fmean",
    "geometric_mean",
    "harmonic_mean",
    "median",
    "median_low",
    "median_high",
    "mode",
    "multimode",
    "quantiles",
    "stdev",
    "pstdev",
    "variance",
    "pvariance",
)


def register(env: Environment) -> None:
    """Bind the builtins and the statistics summaries into `env`."""
    for name in dir(py_builtins):
        if not name.startswith("_"):
            env.define(Symbol(name), getattr(py_builtins, name))
    for name in STATISTICS:
        fn = getattr(statistics, name, None)
        if fn is not None:
            env.define(Symbol(name), fn)


def base_env() -> Environment:
    env = Environment()
    register(env)
    return env


_global_env: Optional[Environment] = None


def global_env() -> Environment:
    global _global_env
    if _global_env is None:
        _global_env = Environment(outer=base_env())
    return _global_env


def reset_global_env() -> None:
    global _global_env
    _global_env = None


def as_environment(obj) -> Environment:
    """Coerce `obj` to an Environment.

    None gives the global environment; a mapping (e.g. `globals()`) or a
    module is wrapped as a frame whose parent is the global environment.
    """
    if obj is None:
        return global_env()
    if isinstance(obj, Environment):
        return obj
    if isinstance(obj, ModuleType):
        obj = vars(obj)
    if hasattr(obj, "items"):
        return Environment.from_mapping(obj, outer=global_env())
    raise FunspecTypeError(f"Cannot use {type(obj).__name__} as an environment")
