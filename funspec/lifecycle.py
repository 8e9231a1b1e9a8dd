"""Deprecation notices for the soft-deprecated entry points.

Notices go through `warnings.warn` as DeprecationWarning. With the default
verbosity each notice is signalled once per process, keyed by an id.
"""

from __future__ import annotations

import logging
import warnings

from funspec.config import get_lifecycle_verbosity

logger = logging.getLogger(__name__)

_signalled: set[str] = set()


def paste_line(*lines: str) -> str:
    return "\n".join(lines)


def signal_soft_deprecated(message: str, id: str | None = None, stacklevel: int = 3) -> bool:
    """Signal `message` unless it was already signalled under `id`.

    Returns True when a warning was emitted.
    """
    verbosity = get_lifecycle_verbosity()
    if verbosity == "quiet":
        return False
    key = id if id is not None else message
    if verbosity == "default" and key in _signalled:
        return False
    _signalled.add(key)
    logger.debug("deprecation notice %r (verbosity=%s)", key, verbosity)
    warnings.warn(message, DeprecationWarning, stacklevel=stacklevel)
    return True


def reset_warning_registry() -> None:
    """Forget which notices were already signalled in this process."""
    _signalled.clear()
