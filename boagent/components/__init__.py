"""
BOA (Bidding strategy, Opponent model, Acceptance strategy) components.

The components are built bottom up and receive their collaborators explicitly:

- `ConcessionCurve` maps relative time to a target utility.
- `WindowedFrequencyModel` learns the opponent's preferences from its offers.
- `OpponentAwareBidSelector` uses the model to choose among equally good bids.
- `TimeDependentOfferingPolicy` combines the curve, the sorted outcomes and the selector.
- `TimeDependentAcceptancePolicy` compares incoming offers with the offering policy.
"""
from __future__ import annotations

from .base import *
from .concession import *
from .models import *
from .selectors import *
from .offering import *
from .acceptance import *

__all__ = (
    base.__all__
    + concession.__all__
    + models.__all__
    + selectors.__all__
    + offering.__all__
    + acceptance.__all__
)
