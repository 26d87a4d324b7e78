from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Mapping

from attrs import define, field

from boagent import warnings
from boagent.common import ConfigurationError, DegenerateInputError

from .base import OfferingPolicy
from .concession import ConcessionCurve

if TYPE_CHECKING:
    from boagent.outcomes import Outcome
    from boagent.preferences.protocols import SortedOutcomes

    from .selectors import OpponentAwareBidSelector

__all__ = ["TimeDependentOfferingPolicy"]

logger = logging.getLogger(__name__)


@define
class TimeDependentOfferingPolicy(OfferingPolicy):
    """
    Offers bids around a time-dependent target utility.

    Without a bid selector the bid with own utility nearest to the target is
    offered (ties go to the higher utility). With a selector, all bids within a
    band of half-width `delta` around the target are collected and the selector
    picks one of them using the opponent model. An empty band is widened by
    `delta` on both sides up to `max_widening` times.

    Args:
        outcome_space: All outcomes sorted by our own utility.
        curve: The concession curve giving the target utility over time.
        selector: Optional opponent-aware bid selector.
        delta: Half-width of the utility band used to collect equally good bids.
        max_widening: Maximum number of times an empty band is widened.
    """

    outcome_space: SortedOutcomes
    curve: ConcessionCurve = field(factory=ConcessionCurve)
    selector: OpponentAwareBidSelector | None = None
    delta: float = 0.01
    max_widening: int = 100

    @classmethod
    def from_params(
        cls,
        outcome_space: SortedOutcomes,
        params: Mapping[str, float],
        selector: OpponentAwareBidSelector | None = None,
    ) -> TimeDependentOfferingPolicy:
        """
        Creates the offering policy from BOA parameters.

        Remarks:
            - ``e`` and the turning point ``alpha`` (also accepted as ``a``) are required.
            - ``k`` defaults to 0.2. ``min`` and ``max`` default to the minimum and
              maximum utilities of the outcome space.
        """
        alpha = params.get("alpha", params.get("a", None))
        if params.get("e", None) is None or alpha is None:
            raise ConfigurationError(
                'Constant "e" for the concession speed and constant "alpha" for '
                "the turning point of f(t) should be set."
            )
        mn, mx = outcome_space.minmax()
        curve = ConcessionCurve(
            k=float(params.get("k", 0.2)),
            e=float(params["e"]),
            alpha=float(alpha),
            pmin=float(params.get("min", mn)),
            pmax=float(params.get("max", mx)),
        )
        return cls(outcome_space, curve, selector)

    def candidates(self, target: float) -> list[Outcome]:
        """Bids with own utility within the (widened if empty) band around the target"""
        for i in range(self.max_widening + 1):
            width = self.delta * (i + 1)
            bids = self.outcome_space.within(target - width, target + width)
            if bids:
                return bids
        return []

    def __call__(self, t: float) -> Outcome:
        target = self.curve.target(t)
        if self.selector is None:
            return self.outcome_space.nearest(target)
        try:
            return self.selector.select(self.candidates(target), t)
        except DegenerateInputError as e:
            logger.warning(f"No bids around target {target:0.4f} at t={t:0.4f}: {e}")
            warnings.warn(
                f"{self.__class__.__name__}: no bids found around {target}. Offering the nearest bid",
                warnings.BoagentCaughtExceptionWarning,
            )
            return self.outcome_space.nearest(target)
