from __future__ import annotations
import os
import shutil


_LIFECYCLE_LEVELS = ("quiet", "default", "warning")

# Defaults
_DEFAULT_LIFECYCLE_VERBOSITY = "default"
_DEFAULT_WIDTH = 80


def get_lifecycle_verbosity() -> str:
    """How deprecation notices are signalled: quiet, default (once) or warning (always)."""
    raw = os.environ.get('FUNSPEC_LIFECYCLE_VERBOSITY', '').strip().lower()
    if raw in _LIFECYCLE_LEVELS:
        return raw
    return _DEFAULT_LIFECYCLE_VERBOSITY


def get_print_width() -> int:
    raw = os.environ.get('FUNSPEC_WIDTH')
    if raw and raw.strip().isdigit():
        return int(raw.strip())
    return shutil.get_terminal_size((_DEFAULT_WIDTH, 24)).columns
