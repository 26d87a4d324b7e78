from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Mapping

from attrs import define

from boagent.common import ResponseType

from .base import AcceptancePolicy
from .offering import TimeDependentOfferingPolicy

if TYPE_CHECKING:
    from boagent.outcomes import Outcome

__all__ = ["TimeDependentAcceptancePolicy"]

logger = logging.getLogger(__name__)


@define
class TimeDependentAcceptancePolicy(AcceptancePolicy):
    """
    Accepts offers that are at least as good as our next bid or our current target.

    The rules are checked in order and the first matching one decides:

    1. Accept anything after the surrender time ``T``.
    2. Accept if ``a * u(offer) + b >= u(my_next_bid)``.
    3. Accept if ``u(offer)`` reaches the current target utility of the
       offering policy's concession curve.
    4. Reject otherwise.

    Args:
        offering: The offering policy used to generate our bids. Its concession
                  curve defines the target utility used in the third rule.
        a: Scaling factor for the utility of the offer (default 1.0).
        b: Offset added to the scaled utility of the offer (default 0.0).
        surrender_time: The relative time ``T`` after which any offer is accepted.
                        The default (1.0) never triggers before the deadline.

    Remarks:
        - A missing offer (None) is always rejected.
        - Utilities are always our own utilities.
    """

    offering: TimeDependentOfferingPolicy
    a: float = 1.0
    b: float = 0.0
    surrender_time: float = 1.0

    @classmethod
    def from_params(
        cls, offering: TimeDependentOfferingPolicy, params: Mapping[str, float]
    ) -> TimeDependentAcceptancePolicy:
        """Creates the acceptance policy from BOA parameters (``a``, ``b``, ``T``)"""
        return cls(
            offering,
            a=float(params.get("a", 1.0)),
            b=float(params.get("b", 0.0)),
            surrender_time=float(params.get("T", 1.0)),
        )

    def threshold(self, t: float) -> float:
        """The minimum utility acceptable at relative time `t` regardless of our next bid"""
        return self.offering.curve.target(t)

    def __call__(self, offer: Outcome | None, t: float) -> ResponseType:
        if offer is None:
            return ResponseType.REJECT_OFFER
        # time is running out. Accept anyway.
        if t > self.surrender_time:
            logger.debug(f"Accepting {offer} at t={t:0.4f} (surrender)")
            return ResponseType.ACCEPT_OFFER

        utility_of = self.offering.outcome_space.utility_of
        my_next = utility_of(self.offering.next_bid(t))
        theirs = utility_of(offer)
        if my_next - (self.a * theirs + self.b) <= 0:
            logger.debug(
                f"Accepting {offer} at t={t:0.4f}: {theirs:0.4f} vs next bid {my_next:0.4f}"
            )
            return ResponseType.ACCEPT_OFFER
        if theirs >= self.threshold(t):
            logger.debug(f"Accepting {offer} at t={t:0.4f}: above target")
            return ResponseType.ACCEPT_OFFER
        return ResponseType.REJECT_OFFER
