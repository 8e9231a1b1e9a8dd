"""Single-line printing of call expressions."""

import json

from funspec import SExpression
from funspec.types.symbol import Symbol, TILDE, ACCESSOR, PRIVATE_ACCESSOR
from funspec.types.lambda_fn import Lambda

PREFIX_FORMS = {
    "quote": "'",
    "quasiquote": "`",
    "unquote": ",",
    "unquote-splicing": ",@",
    TILDE.id: "~",
}


def deparse(expr: SExpression) -> str:
    """Render an expression as text the reader would read back."""
    if isinstance(expr, Symbol):
        return expr.id
    if isinstance(expr, str):
        return json.dumps(expr)
    if isinstance(expr, list):
        if not expr:
            return "()"
        head = expr[0]
        if isinstance(head, Symbol):
            if head.id in PREFIX_FORMS and len(expr) == 2:
                return PREFIX_FORMS[head.id] + deparse(expr[1])
            if head in (ACCESSOR, PRIVATE_ACCESSOR) and len(expr) == 3:
                return f"{deparse(expr[1])}{head.id}{deparse(expr[2])}"
        return "(" + " ".join(deparse(e) for e in expr) + ")"
    if isinstance(expr, Lambda):
        return str(expr)
    if callable(expr) and getattr(expr, "__name__", None):
        return f"#<function {expr.__name__}>"
    return repr(expr)


def deparse_trunc(expr: SExpression, width: int) -> str:
    text = deparse(expr)
    if len(text) <= width:
        return text
    return text[: max(width - 3, 0)] + "..."
