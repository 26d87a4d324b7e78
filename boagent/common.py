"""
Common data-structures and errors shared by all boagent modules
"""
from __future__ import annotations

from enum import IntEnum

__all__ = [
    "ResponseType",
    "ConfigurationError",
    "EvaluationLookupError",
    "DegenerateInputError",
]


class ResponseType(IntEnum):
    """Possible responses to offers during negotiation."""

    ACCEPT_OFFER = 0
    REJECT_OFFER = 1


class ConfigurationError(ValueError):
    """A required parameter is missing or a parameter is out of its valid range.

    Raised while constructing components so that a misconfigured engine never
    enters a negotiation session.
    """


class EvaluationLookupError(KeyError):
    """An outcome refers to an issue or a value unknown to a learned model."""


class DegenerateInputError(ValueError):
    """A component received an input it cannot work with (e.g. no candidate outcomes)."""
