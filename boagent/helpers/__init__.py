"""
Helper modules
"""
from __future__ import annotations

from .logging import *

__all__ = logging.__all__
