"""
Preferences of the agent and the outcome catalog sorted by them
"""
from __future__ import annotations

from .protocols import *
from .linear import *
from .inv_ufun import *

__all__ = protocols.__all__ + linear.__all__ + inv_ufun.__all__
