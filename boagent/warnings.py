"""Module for warnings functionality."""

from __future__ import annotations

import warnings

__all__ = [
    "warn",
    "BoagentWarning",
    "BoagentIOWarning",
    "BoagentCaughtExceptionWarning",
    "BoagentUnusedValueWarning",
]


class BoagentWarning(UserWarning):
    """BoagentWarning implementation."""

    ...


def warn(message, category=BoagentWarning, stacklevel=2, source=None):
    """Issues a warning to the user. Defaults to `BoagentWarning` and stacklevel of 2."""
    return warnings.warn(message, category, stacklevel, source)


class BoagentIOWarning(BoagentWarning):
    """BoagentIOWarning implementation."""

    ...


class BoagentCaughtExceptionWarning(BoagentWarning):
    """An exception was caught and the computation continued without the failing part."""

    ...


class BoagentUnusedValueWarning(BoagentWarning):
    """A given value (e.g. an unknown parameter) was ignored."""

    ...
