"""Lexical environments for funspec.

An Environment stores bindings of Symbols to Python values and supports nested
scopes via an `outer` link. The root of a chain also carries named package
environments so that accessor forms like `(:: stats mean)` can resolve against
a registered package before falling back to an importable Python module.
"""

from __future__ import annotations

from io import StringIO
from collections.abc import Mapping, MutableMapping
from typing import Iterator, Optional

from funspec import LispValue
from funspec.errors import FunspecInvalidSymbol, FunspecUnboundSymbol
from funspec.types.symbol import Symbol


class NamespaceVars(MutableMapping):
    """Symbol-keyed view over a live Python namespace such as `globals()`.

    Reads and writes go straight to the underlying mapping, so names bound
    there later are visible to every frame built on it.
    """

    __slots__ = ("namespace",)

    def __init__(self, namespace: Mapping[str, LispValue]):
        self.namespace = namespace

    def __getitem__(self, key: Symbol) -> LispValue:
        if not isinstance(key, Symbol):
            raise KeyError(key)
        return self.namespace[key.id]

    def __setitem__(self, key: Symbol, value: LispValue) -> None:
        self.namespace[key.id] = value

    def __delitem__(self, key: Symbol) -> None:
        del self.namespace[key.id]

    def __contains__(self, key) -> bool:
        return isinstance(key, Symbol) and key.id in self.namespace

    def __iter__(self) -> Iterator[Symbol]:
        return (Symbol(k) for k in list(self.namespace) if isinstance(k, str))

    def __len__(self) -> int:
        return sum(1 for k in self.namespace if isinstance(k, str))


class Environment:
    """Hierarchical mapping from Symbols to values with package support."""

    __slots__ = ("vars", "outer", "packages", "package_aliases")

    def __init__(self, outer: Optional[Environment] = None):
        self.vars: MutableMapping[Symbol, LispValue] = {}
        self.outer: Environment | None = outer
        self.packages: dict[str, Environment] = {}
        self.package_aliases: dict[str, str] = {}

    @classmethod
    def from_mapping(
        cls, mapping: Mapping[str, LispValue], outer: Optional[Environment] = None
    ) -> Environment:
        """Use a Python namespace (e.g. `vars(module)` or `globals()`) as a frame.

        The frame reads the mapping live rather than copying it.
        """
        env = cls(outer)
        env.vars = NamespaceVars(mapping)
        return env

    def root(self) -> Environment:
        env = self
        while env.outer is not None:
            env = env.outer
        return env

    def define(self, name: Symbol, value: LispValue) -> None:
        """Bind `name` to `value` in this frame.

        Raises FunspecInvalidSymbol if `name` is not a Symbol.
        """
        if not isinstance(name, Symbol):
            raise FunspecInvalidSymbol(f"Cannot define {name} as a symbol")
        self.vars[name] = value

    def find(self, symbol: Symbol) -> Optional[Environment]:
        """The innermost frame binding `symbol`, or None."""
        env: Optional[Environment] = self
        while env is not None:
            if symbol in env.vars:
                return env
            env = env.outer
        return None

    def set(self, name: Symbol, value: LispValue) -> None:
        """Rebind `name` in the innermost frame that already binds it.

        Raises FunspecUnboundSymbol if the symbol is not found.
        """
        env = self.find(name)
        if env is None:
            raise FunspecUnboundSymbol(f"Cannot set unbound symbol {name}")
        env.vars[name] = value

    def lookup(self, name: Symbol) -> LispValue:
        """Look up the value bound to `name` along the lexical chain.

        Raises FunspecUnboundSymbol if not found.
        """
        env = self.find(name)
        if env is None:
            raise FunspecUnboundSymbol(f"Cannot lookup unbound symbol {name}")
        return env.vars[name]

    def __contains__(self, name: Symbol) -> bool:
        return self.find(name) is not None

    def define_package(self, pkg_name: str) -> Environment:
        """Create or return a top-level package environment by name."""
        root = self.root()
        if pkg_name not in root.packages:
            root.packages[pkg_name] = Environment()
        return root.packages[pkg_name]

    def find_package(self, pkg_name: str) -> Optional[Environment]:
        root = self.root()
        pkg_name = root.package_aliases.get(pkg_name, pkg_name)
        return root.packages.get(pkg_name)

    def get_package_symbol(self, pkg_name: str, sym: Symbol) -> LispValue:
        """Value of `sym` in a registered package (aliases allowed)."""
        pkg_env = self.find_package(pkg_name)
        if pkg_env is None:
            raise FunspecUnboundSymbol(f"Package '{pkg_name}' not found")
        return pkg_env.lookup(sym)

    def register_package_alias(self, alias: str, pkg_name: str) -> None:
        """Let `alias::name` resolve against package `pkg_name`."""
        self.root().package_aliases[alias] = pkg_name

    def update(self, mapping: dict[Symbol, LispValue]) -> None:
        """Define every Symbol -> value pair of `mapping` in this frame."""
        for k, v in mapping.items():
            if not isinstance(k, Symbol):
                raise FunspecInvalidSymbol(f"Cannot define {k} as a symbol")
            self.vars[k] = v

    def _write_vars(self, buffer: StringIO) -> None:
        """Render this frame's bindings as `{name: value, ...}`."""
        buffer.write("{")
        first = True
        for k, v in self.vars.items():
            if not first:
                buffer.write(", ")
            buffer.write(f"{k}: {v!r}")
            first = False
        buffer.write("}")

    def __str__(self) -> str:
        """This frame's bindings, with ` -> ...` when it has a parent."""
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self.outer is not None:
                buffer.write(" -> ...")
            return buffer.getvalue()

    def __repr__(self) -> str:
        return f"<Environment {len(self.vars)} bindings{' -> ...' if self.outer else ''}>"
