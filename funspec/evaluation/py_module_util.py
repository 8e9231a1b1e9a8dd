"""Resolve namespace accessors like `statistics::mean` to Python objects.

Packages registered on the root Environment win; otherwise the package part
is imported as a Python module and the name is read as an attribute.
"""
from __future__ import annotations

import importlib
import logging
from typing import Any

from funspec.errors import FunspecUnboundSymbol
from funspec.types.environment import Environment
from funspec.types.symbol import Symbol

logger = logging.getLogger(__name__)


def _is_exported(module: Any, name: str) -> bool:
    exported = getattr(module, "__all__", None)
    if exported is not None:
        return name in exported
    return not name.startswith("_")


def resolve_accessor(
    env: Environment, pkg: Symbol, name: Symbol, private: bool = False
) -> Any:
    """Resolve `pkg::name` (or `pkg:::name` when `private`) from `env`.

    `::` only sees exported names: those in a module's `__all__` or, without
    one, names not starting with an underscore. `:::` sees every attribute.
    """
    pkg_env = env.find_package(pkg.id)
    if pkg_env is not None:
        return pkg_env.lookup(name)

    try:
        module = importlib.import_module(pkg.id)
    except ImportError as exc:
        raise FunspecUnboundSymbol(f"Package '{pkg.id}' not found") from exc

    if not private and not _is_exported(module, name.id):
        raise FunspecUnboundSymbol(
            f"'{name.id}' is not an exported object from '{pkg.id}'"
        )
    try:
        obj = getattr(module, name.id)
    except AttributeError as exc:
        raise FunspecUnboundSymbol(
            f"Cannot lookup unbound symbol {pkg.id}::{name.id}"
        ) from exc
    logger.debug("resolved %s::%s from module %s", pkg.id, name.id, module.__name__)
    return obj
