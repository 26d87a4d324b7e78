# -*- coding: utf-8 -*-
"""A BOA (Bidding strategy, Opponent model, Acceptance strategy) negotiation agent for bilateral multi-issue negotiations."""
from __future__ import annotations

__version__ = "0.1.0"


from .config import *
from .common import *
from .warnings import *
from .helpers import *
from .outcomes import *
from .preferences import *
from .components import *
from .negotiator import *
from .mechanism import *


__all__ = (
    config.__all__
    + common.__all__
    + warnings.__all__
    + helpers.__all__
    + outcomes.__all__
    + preferences.__all__
    + components.__all__
    + negotiator.__all__
    + mechanism.__all__
)
