from __future__ import annotations
import sys


class Symbol:
    __slots__ = ("id",)

    def __init__(self, name: str):
        # Intern to ensure fast equality/hash and reduce memory
        self.id = sys.intern(name)

    def __eq__(self, other: Symbol) -> bool:
        return isinstance(other, Symbol) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self):
        return f"Symbol({self.id!r})"

    def __str__(self):
        return self.id


# The subject placeholder and its alias inside synthesized functions
DOT = Symbol(".")
DOT_X = Symbol(".x")

QUOTE = Symbol("quote")
TILDE = Symbol("~")
LAMBDA = Symbol("lambda")

# Namespace accessors: (:: pkg name) and (::: pkg name)
ACCESSOR = Symbol("::")
PRIVATE_ACCESSOR = Symbol(":::")


def keyword(name: str) -> Symbol:
    """Return the keyword symbol `:name` used to mark a named argument."""
    return Symbol(name if name.startswith(":") else ":" + name)


def is_keyword(obj) -> bool:
    return (
        isinstance(obj, Symbol)
        and len(obj.id) > 1
        and obj.id[0] == ":"
        and obj.id[1] != ":"
    )


def keyword_name(sym: Symbol) -> str:
    return sym.id[1:]
