import pytest

from funspec.builtins import reset_global_env
from funspec.lifecycle import reset_warning_registry


# Every test starts with a fresh global environment and no remembered
# deprecation notices. Notices are silenced unless a test opts back in by
# setting FUNSPEC_LIFECYCLE_VERBOSITY itself.
@pytest.fixture(autouse=True)
def _isolated_session(monkeypatch):
    monkeypatch.setenv("FUNSPEC_LIFECYCLE_VERBOSITY", "quiet")
    reset_warning_registry()
    reset_global_env()
    yield
    reset_warning_registry()
    reset_global_env()
