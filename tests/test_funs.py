import statistics

import pytest
from hypothesis import given, strategies as st

from funspec import funs, FunList, DeferredCall, Quosure, Formula, Environment
from funspec.builtins import base_env, global_env
from funspec.errors import FunspecUnboundSymbol, UnsupportedConstruct
from funspec.reader.parser import read
from funspec.types.symbol import Symbol, DOT, ACCESSOR


def test_bare_names_are_named_after_the_function():
    fs = funs("min", "max")
    assert isinstance(fs, FunList)
    assert fs.names == ["min", "max"]
    assert not fs.have_name
    assert [c.expr for c in fs] == [read("(min .)"), read("(max .)")]


def test_name_function_value_and_call_mix():
    fs = funs("mean", statistics.mean, "(mean . :data ())")
    assert fs.names == ["mean", "mean", "mean"]
    assert fs[1].expr == [statistics.mean, DOT]


def test_partial_call_reproduces_the_direct_call():
    fs = funs("(round . :ndigits 1)")
    assert fs[0](2.345) == round(2.345, ndigits=1)


def test_function_values_are_called_on_the_subject():
    fs = funs(statistics.median)
    assert fs.names == ["median"]
    assert fs[0]([3, 1, 2]) == 2


def test_extra_arguments_are_appended_to_bare_names():
    fs = funs("round", _args={"ndigits": 2})
    assert fs[0].expr == [Symbol("round"), DOT, Symbol(":ndigits"), 2]
    assert fs[0](2.345) == round(2.345, ndigits=2)


def test_extra_arguments_merge_idempotently():
    once = funs("(round . :ndigits 1)")
    again = funs("(round . :ndigits 1)", _args={"ndigits": 1})
    assert once[0].expr == again[0].expr


def test_extra_arguments_take_precedence():
    fs = funs("(round . :ndigits 1)", _args={"ndigits": 0})
    assert fs[0].expr == read("(round . :ndigits 0)")
    assert fs[0](2.345) == round(2.345, ndigits=0)


def test_list_extra_arguments_are_inlined_as_data():
    fs = funs("sorted", _args={"key": None})
    assert fs[0]([3, 1, 2]) == [1, 2, 3]
    fs = funs("(max .)", _args={"default": [0]})
    assert fs[0]([]) == [0]


def test_explicit_names_are_kept():
    fs = funs({"m1": statistics.mean}, "max")
    assert fs.names == ["m1", "max"]
    assert fs.have_name


def test_keyword_specs_follow_positional_ones():
    fs = funs("min", m1="mean", m2="(round . :ndigits 1)")
    assert fs.names == ["min", "m1", "m2"]
    assert fs.have_name


def test_order_is_preserved():
    fs = funs("max", "min", "sum", "len")
    assert fs.names == ["max", "min", "sum", "len"]
    assert [f([1, 2, 3]) for f in fs] == [3, 1, 6, 3]


def test_namespace_accessors_are_wrapped_not_rewritten():
    fs = funs("statistics::median")
    assert fs[0].expr == [[ACCESSOR, Symbol("statistics"), Symbol("median")], DOT]
    assert fs.names == ["statistics::median"]
    assert fs[0]([5, 1, 3]) == 3


def test_calls_with_accessor_heads_are_rewritten():
    fs = funs("(statistics::median .)", _args={"extra": 1})
    assert fs[0].expr == read("(statistics::median . :extra 1)")
    assert fs.names == ["statistics::median"]


def test_strings_resolve_in_the_caller_environment():
    env = Environment.from_mapping({"double": lambda x: x * 2}, outer=base_env())
    fs = funs("double", "(double .)", _env=env)
    assert all(c.env is env for c in fs)
    assert [c(4) for c in fs] == [8, 8]


def test_mapping_as_caller_environment():
    fs = funs("triple", _env={"triple": lambda x: x * 3})
    assert fs[0](2) == 6


def test_default_environment_is_global():
    fs = funs("min")
    assert fs[0].env is global_env()
    global_env().define(Symbol("span"), lambda xs: max(xs) - min(xs))
    assert funs("span")[0]([1, 5, 2]) == 4


def test_quosures_keep_their_own_environment():
    own = Environment.from_mapping({"scale": lambda x: x * 10}, outer=base_env())
    caller = Environment.from_mapping({"scale": lambda x: x * 100}, outer=base_env())
    fs = funs(Quosure(read("(scale .)"), own), "scale", _env=caller)
    assert fs[0].env is own
    assert fs[1].env is caller
    assert fs[0](1) == 10
    assert fs[1](1) == 100


def test_quosure_without_environment_gets_the_caller_one():
    caller = Environment(outer=base_env())
    fs = funs(Quosure(Symbol("max")), _env=caller)
    assert fs[0].env is caller


def test_unquote_captures_values_at_normalization():
    env = Environment(outer=base_env())
    env.define(Symbol("digits"), 2)
    fs = funs("(round . :ndigits ,digits)", _env=env)
    env.set(Symbol("digits"), 0)
    assert fs[0].expr == read("(round . :ndigits 2)")
    assert fs[0](2.345) == round(2.345, ndigits=2)


def test_deferred_calls_can_be_normalized_again():
    first = funs("(round . :ndigits 1)")[0]
    fs = funs(first, _args={"ndigits": 2})
    assert fs[0].expr == read("(round . :ndigits 2)")
    assert fs[0].env is first.env


def test_s_expression_specs():
    fs = funs([Symbol("round"), DOT, Symbol(":ndigits"), 1])
    assert fs.names == ["round"]
    assert fs[0](1.26) == round(1.26, ndigits=1)


def test_unresolved_names_fail_only_when_invoked():
    fs = funs("no_such_function")
    assert fs.names == ["no_such_function"]
    with pytest.raises(FunspecUnboundSymbol):
        fs[0](1)


def test_no_specs_give_an_empty_list():
    fs = funs()
    assert len(fs) == 0
    assert fs.names == []
    assert not fs.have_name


# --- Unsupported constructs ---

def test_lambda_expression_is_rejected():
    with pytest.raises(UnsupportedConstruct) as exc:
        funs("(lambda (x) (mean x))")
    assert exc.value.label == "lambda"
    assert exc.value.text == "(lambda (x) (mean x))"
    assert "`(lambda (x) (mean x))` must be a function name" in str(exc.value)
    assert "not `lambda`" in str(exc.value)


def test_formula_shorthand_is_rejected():
    with pytest.raises(UnsupportedConstruct) as exc:
        funs("~(mean .)")
    assert exc.value.label == "~"
    with pytest.raises(UnsupportedConstruct) as exc:
        funs(Formula.read("~(mean .)"))
    assert exc.value.label == "~"


def test_python_lambda_is_rejected():
    with pytest.raises(UnsupportedConstruct) as exc:
        funs(lambda x: x)
    assert exc.value.label == "lambda"


def test_one_bad_spec_fails_the_whole_batch():
    with pytest.raises(UnsupportedConstruct):
        funs("min", "max", "~(mean .)")


body_parts = st.lists(
    st.sampled_from(["x", ".", "1", "(mean x)", "\"s\"", ":k"]), max_size=4
)


@given(body_parts)
def test_anonymous_functions_are_always_rejected(parts):
    body = " ".join(parts)
    with pytest.raises(UnsupportedConstruct):
        funs(f"(lambda (x) {body})")
    with pytest.raises(UnsupportedConstruct):
        funs(f"~({body})")


@given(st.lists(st.sampled_from(["min", "max", "sum", "len", "mean", "median"]), max_size=6))
def test_bare_names_give_one_call_per_spec(names):
    fs = funs(*names)
    assert fs.names == names
    assert all(isinstance(c, DeferredCall) for c in fs)


def test_quoted_string_names_are_looked_up():
    fs = funs('"max"')
    assert fs.names == ["max"]
    assert fs[0]([1, 4, 2]) == 4


def test_extra_arguments_win_over_repeated_keywords():
    fs = funs("(max . :default 1 :default 2)", _args={"default": 3})
    assert fs[0].expr == read("(max . :default 3 :default 3)")
    assert fs[0]([]) == 3


def test_caller_namespace_is_read_when_the_call_runs():
    ns = {}
    fs = funs("(later .)", _env=ns)
    ns["later"] = len
    assert fs[0]([1, 2]) == 2
    ns["later"] = sum
    assert fs[0]([1, 2]) == 3


def test_positional_fun_list_is_spliced():
    fs = funs(funs("min", "max"), "sum")
    assert fs.names == ["min", "max", "sum"]
    assert [c([1, 2, 3]) for c in fs] == [1, 3, 6]
