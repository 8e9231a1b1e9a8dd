"""
  Reader for textual call specs

- Streaming lexer, recursive parser
- Emits Python primitives:

    - None / nil -> None, True / #t -> True, False / #f -> False
    - calls -> Python list, head first
    - symbols -> Symbol, `.` is the placeholder
    - keywords -> Symbol(":name")
    - strings -> str
    - numbers -> int/float
    - pkg::name / pkg:::name -> [Symbol("::"), Symbol(pkg), Symbol(name)]
    - quote forms -> [Symbol("quote"), expr], etc.
    - formula shorthand ~expr -> [Symbol("~"), expr]
"""

from __future__ import annotations

import ast
import re
from typing import Iterator, Optional

from funspec import SExpression
from funspec.errors import FunspecSyntaxError
from funspec.types.symbol import Symbol, ACCESSOR, PRIVATE_ACCESSOR, TILDE


TOKEN_RE = re.compile(
    r"\s*("
    r"(?P<comment>;[^\n]*)"  # single-line comment
    r"|(?P<quote>[\'`])"  # ' and `
    r"|(?P<unquote>,@|,)"  # , and ,@
    r"|(?P<tilde>~)"  # formula shorthand
    r"|(?P<lparen>\()"  # (
    r"|(?P<rparen>\))"  # )
    r'|(?P<string>"(?:\\.|[^\\"])*")'  # double-quoted strings
    r'|(?P<symbol>[^\s()\'`",;~]+)'  # fallback: symbols
    r")",
    re.DOTALL,
)

QUOTE_FORMS: dict[str, Symbol] = {
    "'": Symbol("quote"),
    "`": Symbol("quasiquote"),
    ",": Symbol("unquote"),
    ",@": Symbol("unquote-splicing"),
}

FLOAT_RE = re.compile(r"[-+]?(\d+\.\d*|\.\d+|\d+)([eE][-+]?\d+)?")

CONSTANTS: dict[str, object] = {
    "nil": None,
    "None": None,
    "True": True,
    "#t": True,
    "False": False,
    "#f": False,
}


def lex(source: str) -> Iterator[tuple[str, str]]:
    """Yield `(token_type, text)` pairs for a call spec, skipping whitespace."""
    pos = 0
    n = len(source)
    while pos < n:
        if source[pos].isspace():
            pos += 1
            continue
        m = TOKEN_RE.match(source, pos)
        if not m:
            raise FunspecSyntaxError(f"Unexpected char at {pos}: {source[pos]!r}")
        pos = m.end()
        if m.group("comment"):
            continue
        for nm in TOKEN_RE.groupindex:
            if nm != "comment" and m.group(nm):
                yield nm, m.group(nm)
                break


def read_atom(token: str) -> SExpression:
    if token in CONSTANTS:
        return CONSTANTS[token]
    if token.isdigit() or (token.startswith("-") and token[1:].isdigit()):
        return int(token)
    if FLOAT_RE.fullmatch(token):
        return float(token)
    if not token.startswith(":") and "::" in token:
        accessor, sep = (
            (PRIVATE_ACCESSOR, ":::") if ":::" in token else (ACCESSOR, "::")
        )
        pkg, _, name = token.partition(sep)
        if not pkg or not name or ":" in name:
            raise FunspecSyntaxError(f"Malformed namespace accessor {token!r}")
        return [accessor, Symbol(pkg), Symbol(name)]
    return Symbol(token)


class TokenStream:
    def __init__(self, token_iter: Iterator[tuple[str, str]]):
        self.tokens = iter(token_iter)
        self.buffer: list[tuple[str, str]] = []

    def peek(self) -> tuple[Optional[str], Optional[str]]:
        if not self.buffer:
            try:
                self.buffer.append(next(self.tokens))
            except StopIteration:
                return None, None
        return self.buffer[0]

    def advance(self) -> tuple[Optional[str], Optional[str]]:
        if self.buffer:
            return self.buffer.pop(0)
        return next(self.tokens, (None, None))

    def parse_expr(self) -> SExpression:
        tok_type, tok_val = self.peek()
        if tok_type is None:
            raise FunspecSyntaxError("Unexpected end of input")

        if tok_type == "symbol":
            self.advance()
            return read_atom(tok_val)

        # Quote forms
        if tok_type in ("quote", "unquote"):
            self.advance()
            expr = self.parse_expr()
            return [QUOTE_FORMS[tok_val], expr]

        if tok_type == "tilde":
            self.advance()
            return [TILDE, self.parse_expr()]

        if tok_type == "lparen":
            self.advance()
            items = []
            while True:
                nxt = self.peek()[0]
                if nxt == "rparen":
                    self.advance()
                    break
                if nxt is None:
                    raise FunspecSyntaxError("Unmatched '('")
                items.append(self.parse_expr())
            return items

        if tok_type == "rparen":
            raise FunspecSyntaxError("Unexpected ')'")

        if tok_type == "string":
            self.advance()
            return ast.literal_eval(tok_val)

        raise FunspecSyntaxError(f"Unknown token: {tok_type} {tok_val}")

    def parse_all(self) -> Iterator[SExpression]:
        while True:
            tok_type, _ = self.peek()
            if tok_type is None:
                break
            yield self.parse_expr()


def read(source: str) -> SExpression:
    """Read exactly one expression from `source`."""
    stream = TokenStream(lex(source))
    if stream.peek()[0] is None:
        raise FunspecSyntaxError("Cannot read an empty call spec")
    expr = stream.parse_expr()
    if stream.peek()[0] is not None:
        raise FunspecSyntaxError(f"Unexpected input after expression in {source!r}")
    return expr
