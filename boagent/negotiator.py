from __future__ import annotations

import logging
from itertools import count
from typing import TYPE_CHECKING, Callable, Mapping

from boagent import warnings
from boagent.common import ConfigurationError, ResponseType
from boagent.components import (
    OpponentAwareBidSelector,
    TimeDependentAcceptancePolicy,
    TimeDependentOfferingPolicy,
    WindowedFrequencyModel,
)
from boagent.config import default_params
from boagent.outcomes import DiscreteCartesianOutcomeSpace
from boagent.preferences import PresortingOutcomeSpace

if TYPE_CHECKING:
    from boagent.components import OpponentModel
    from boagent.outcomes import Outcome
    from boagent.preferences import SortedOutcomes

__all__ = ["BOANegotiator", "make_boa"]

logger = logging.getLogger(__name__)

_negotiator_ids = count()


class BOANegotiator:
    """
    A negotiator that is constructed from the BOA components:

    1. An opponent model learning the ufun of the partner (optional)
    2. A bid selector using the model to choose among equally good bids (optional)
    3. An offering policy that is used for generating offers.
    4. An acceptance policy that is used for responding to offers.

    Args:
        offering: The offering policy.
        acceptance: The acceptance policy. Must be built around `offering`.
        model: The opponent model (if any).
        selector: The bid selector. It decides when the model may be updated.
        name: The negotiator name.
        history: The list in which offers received from the opponent are recorded
                 (shared with the opponent model when the model reads it).

    Remarks:
        - Every negotiator owns its components. Use `from_params` to build a
          fresh set of components for every negotiation session.
        - `respond` decides first and then records the offer and updates the
          opponent model so that the bid planned for this round does not change.
    """

    def __init__(
        self,
        offering: TimeDependentOfferingPolicy,
        acceptance: TimeDependentAcceptancePolicy,
        model: OpponentModel | None = None,
        selector: OpponentAwareBidSelector | None = None,
        name: str | None = None,
        history: list[Outcome] | None = None,
    ):
        if acceptance.offering is not offering:
            raise ConfigurationError(
                "The acceptance policy must use the same offering policy as the negotiator"
            )
        self.offering = offering
        self.acceptance = acceptance
        self.model = model
        self.selector = selector
        self.name = name if name else f"boa{next(_negotiator_ids)}"
        self._opponent_offers: list[Outcome] = history if history is not None else []

    @classmethod
    def from_params(
        cls,
        ufun: Callable[[Outcome], float],
        outcome_space: DiscreteCartesianOutcomeSpace | SortedOutcomes,
        params: Mapping[str, float] | None = None,
        profile: str | None = None,
        use_model: bool = True,
        name: str | None = None,
    ) -> BOANegotiator:
        """
        Builds a negotiator with fresh components from BOA parameters.

        Args:
            ufun: Our own utility function.
            outcome_space: The outcome space (it will be sorted using `ufun`) or an already sorted outcome catalog.
            params: Parameter values overriding the profile defaults (see `boagent.config.PROFILES`).
            profile: The name of the parameter profile used for defaults.
            use_model: If False, no opponent model is used and bids nearest to the target are offered.
            name: Negotiator name.
        """
        merged = default_params(profile)
        if params:
            unknown = set(params.keys()) - set(merged.keys()) - {"min", "max"}
            if unknown:
                warnings.warn(
                    f"Ignoring unknown parameters {sorted(unknown)}",
                    warnings.BoagentUnusedValueWarning,
                )
            merged.update(params)
        if isinstance(outcome_space, DiscreteCartesianOutcomeSpace):
            sorted_outcomes: SortedOutcomes = PresortingOutcomeSpace(ufun, outcome_space)
        else:
            sorted_outcomes = outcome_space
        history: list[Outcome] = []
        model, selector = None, None
        if use_model:
            model = WindowedFrequencyModel.from_params(
                sorted_outcomes.issues, merged, history=history
            )
            selector = OpponentAwareBidSelector.from_params(
                model, sorted_outcomes.utility_of, merged
            )
        offering = TimeDependentOfferingPolicy.from_params(
            sorted_outcomes, merged, selector
        )
        acceptance = TimeDependentAcceptancePolicy.from_params(offering, merged)
        return cls(offering, acceptance, model, selector, name, history=history)

    @property
    def opponent_history(self) -> tuple[Outcome, ...]:
        """All offers received from the opponent so far"""
        return tuple(self._opponent_offers)

    def opening_bid(self) -> Outcome:
        return self.offering.opening_bid()

    def propose(self, t: float) -> Outcome:
        """The bid to offer at relative time `t`"""
        return self.offering.next_bid(t)

    def respond(self, offer: Outcome, t: float) -> ResponseType:
        """Responds to an offer from the opponent received at relative time `t`"""
        response = self.acceptance.decide(offer, t)
        self._opponent_offers.append(offer)
        if self.model is not None and (
            self.selector is None or self.selector.can_update(t)
        ):
            self.model.update(offer, t)
        logger.debug(f"{self.name} {response.name} {offer} at t={t:0.4f}")
        return response

    def on_negotiation_start(self) -> None:
        for c in (self.model, self.selector, self.offering, self.acceptance):
            if c is not None:
                c.on_negotiation_start()

    def on_negotiation_end(self, agreement: Outcome | None) -> None:
        for c in (self.model, self.selector, self.offering, self.acceptance):
            if c is not None:
                c.on_negotiation_end(agreement)

    def __str__(self):
        return self.name


def make_boa(
    ufun: Callable[[Outcome], float],
    outcome_space: DiscreteCartesianOutcomeSpace | SortedOutcomes,
    **params,
) -> BOANegotiator:
    """
    A shortcut for `BOANegotiator.from_params` passing BOA parameters as keyword arguments.

    Examples:

        >>> from boagent.outcomes import make_issue, make_os
        >>> from boagent.preferences import LinearAdditiveUtilityFunction
        >>> os = make_os([make_issue(5, "x"), make_issue(["a", "b"], "y")])
        >>> ufun = LinearAdditiveUtilityFunction.random(os, seed=1)
        >>> neg = make_boa(ufun, os, e=0.5)
        >>> neg.opening_bid() in os
        True
    """
    return BOANegotiator.from_params(ufun, outcome_space, params)
