import warnings

import pytest

from funspec import funs, funs_
from funspec.config import get_lifecycle_verbosity, get_print_width
from funspec.lifecycle import reset_warning_registry, signal_soft_deprecated


def _deprecations(fn, *args, **kwargs):
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        fn(*args, **kwargs)
    return [str(w.message) for w in caught if issubclass(w.category, DeprecationWarning)]


def test_funs_signals_once_per_session(monkeypatch):
    monkeypatch.setenv("FUNSPEC_LIFECYCLE_VERBOSITY", "default")
    first = _deprecations(funs, "min")
    second = _deprecations(funs, "max")
    assert len(first) == 1
    assert first[0].startswith("funs() is soft deprecated")
    assert second == []


def test_funs_underscore_signals_both_notices(monkeypatch):
    monkeypatch.setenv("FUNSPEC_LIFECYCLE_VERBOSITY", "default")
    messages = _deprecations(funs_, ["min"])
    assert len(messages) == 2
    assert messages[0].startswith("funs_() is deprecated")
    assert messages[1].startswith("funs() is soft deprecated")


def test_warning_verbosity_signals_every_time(monkeypatch):
    monkeypatch.setenv("FUNSPEC_LIFECYCLE_VERBOSITY", "warning")
    assert len(_deprecations(funs, "min")) == 1
    assert len(_deprecations(funs, "min")) == 1


def test_quiet_verbosity_signals_nothing():
    assert _deprecations(funs, "min") == []


def test_reset_warning_registry(monkeypatch):
    monkeypatch.setenv("FUNSPEC_LIFECYCLE_VERBOSITY", "default")
    assert _deprecations(signal_soft_deprecated, "old api", id="old") == ["old api"]
    assert _deprecations(signal_soft_deprecated, "old api", id="old") == []
    reset_warning_registry()
    assert _deprecations(signal_soft_deprecated, "old api", id="old") == ["old api"]


def test_notice_does_not_change_the_result(monkeypatch):
    monkeypatch.setenv("FUNSPEC_LIFECYCLE_VERBOSITY", "default")
    with pytest.warns(DeprecationWarning):
        fs = funs("min")
    assert fs.names == ["min"]


@pytest.mark.parametrize(
    "raw,expected",
    [("quiet", "quiet"), ("WARNING", "warning"), (" default ", "default"), ("bogus", "default"), ("", "default")],
)
def test_lifecycle_verbosity(monkeypatch, raw, expected):
    monkeypatch.setenv("FUNSPEC_LIFECYCLE_VERBOSITY", raw)
    assert get_lifecycle_verbosity() == expected


def test_print_width(monkeypatch):
    monkeypatch.setenv("FUNSPEC_WIDTH", "120")
    assert get_print_width() == 120
    monkeypatch.setenv("FUNSPEC_WIDTH", "wide")
    assert get_print_width() > 0
    monkeypatch.delenv("FUNSPEC_WIDTH")
    assert get_print_width() > 0
