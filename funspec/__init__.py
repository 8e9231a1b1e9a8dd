# Core type aliases for funspec's data model.
# Call specs are plain Python data: Symbols, atoms, and Python lists for calls
# (head first, then positional arguments, then `:keyword value` pairs).
#
# Naming guidance:
# - SExpression: Use in reader/call-rewriting code to denote quoted forms (code-as-data).
# - LispValue:  Use in evaluator/runtime code to denote evaluated values.
# Both aliases resolve to `Any`; they document intent only.

from typing import Any

# Runtime value alias
LispValue = Any
SExpression = LispValue


from funspec.types.symbol import Symbol, DOT, DOT_X, keyword  # noqa: E402
from funspec.types.environment import Environment  # noqa: E402
from funspec.types.quosure import Quosure, Formula  # noqa: E402
from funspec.builtins import base_env, global_env  # noqa: E402
from funspec.reader.parser import read  # noqa: E402
from funspec.fun_list import DeferredCall, FunList  # noqa: E402
from funspec.funs import funs, funs_, as_fun_list, FunctionList  # noqa: E402

__all__ = [
    "Symbol",
    "DOT",
    "DOT_X",
    "keyword",
    "Environment",
    "Quosure",
    "Formula",
    "base_env",
    "global_env",
    "read",
    "DeferredCall",
    "FunList",
    "FunctionList",
    "funs",
    "funs_",
    "as_fun_list",
]
