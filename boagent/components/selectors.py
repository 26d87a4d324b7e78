from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Iterable, Mapping

from attrs import define

from boagent.common import ConfigurationError, DegenerateInputError

from .base import Component

if TYPE_CHECKING:
    from boagent.outcomes import Outcome
    from boagent.preferences.protocols import OpponentUFunModel

__all__ = ["OpponentAwareBidSelector"]


@define
class OpponentAwareBidSelector(Component):
    """
    Picks the bid most acceptable to the opponent among bids that are equally good for us.

    Every candidate is scored as ``w * u_self + (1 - w) * u_opponent`` where
    ``u_opponent`` is the estimate of the opponent model. Only candidates whose
    estimated opponent utility exceeds a reservation value ``r(t)`` are
    considered. When no candidate exceeds it, the opponent model is ignored and
    the candidate with the highest own utility is returned.

    Args:
        model: The opponent model (read only).
        ufun: Our own utility function.
        weight_agent_utility: Weight ``w`` of our own utility in the score.
        opponent_reservation_value: Reservation value ``r0`` for the estimated opponent utility.
        update_threshold: The opponent model may be updated only before this relative time.
        time_adjusted_reservation: If True, ``r(t) = r0 + t * (1 - r0)`` so that the
            opponent model matters less as the deadline approaches. Otherwise ``r(t) = r0``.

    Remarks:
        - Ties are broken in favor of the first candidate in iteration order.
    """

    model: OpponentUFunModel
    ufun: Callable[[Outcome], float]
    weight_agent_utility: float = 0.5
    opponent_reservation_value: float = 0.1
    update_threshold: float = 1.1
    time_adjusted_reservation: bool = True

    def __attrs_post_init__(self):
        if not 0.0 <= self.weight_agent_utility <= 1.0:
            raise ConfigurationError(
                f"w must be in [0, 1] (got {self.weight_agent_utility})"
            )
        if not 0.0 <= self.opponent_reservation_value <= 1.0:
            raise ConfigurationError(
                f"r must be in [0, 1] (got {self.opponent_reservation_value})"
            )

    @classmethod
    def from_params(
        cls,
        model: OpponentUFunModel,
        ufun: Callable[[Outcome], float],
        params: Mapping[str, float],
    ) -> OpponentAwareBidSelector:
        """Creates the selector from BOA parameters (``w``, ``r``, ``t``)"""
        return cls(
            model,
            ufun,
            weight_agent_utility=float(params.get("w", 0.5)),
            opponent_reservation_value=float(params.get("r", 0.1)),
            update_threshold=float(params.get("t", 1.1)),
        )

    def reservation(self, t: float) -> float:
        r = self.opponent_reservation_value
        if not self.time_adjusted_reservation:
            return r
        return r + t * (1.0 - r)

    def can_update(self, t: float) -> bool:
        """Whether the opponent model may still be updated at relative time `t`"""
        return t < self.update_threshold

    def select(self, candidates: Iterable[Outcome], t: float) -> Outcome:
        candidates = list(candidates)
        if not candidates:
            raise DegenerateInputError("Cannot select a bid from an empty set")
        if len(candidates) == 1:
            return candidates[0]

        r = self.reservation(t)
        w = self.weight_agent_utility
        all_below = True
        best, best_score = candidates[0], float("-inf")
        for bid in candidates:
            opponent = self.model.evaluate(bid)
            if opponent <= r:
                continue
            all_below = False
            score = w * self.ufun(bid) + (1 - w) * opponent
            if score > best_score:
                best, best_score = bid, score

        if not all_below:
            return best

        # the model gives no information. Maximize our own utility
        best, best_util = candidates[0], float("-inf")
        for bid in candidates:
            u = self.ufun(bid)
            if u > best_util:
                best, best_util = bid, u
        return best

    def __call__(self, candidates: Iterable[Outcome], t: float) -> Outcome:
        return self.select(candidates, t)
