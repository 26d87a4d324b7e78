from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING

from attrs import define, field

if TYPE_CHECKING:
    from boagent.common import ResponseType
    from boagent.outcomes import Outcome

__all__ = [
    "Component",
    "AcceptancePolicy",
    "OfferingPolicy",
    "OpponentModel",
]


@define
class Component:
    """
    Base of all BOA components.

    Components receive their collaborators explicitly at construction time.
    """

    def on_negotiation_start(self) -> None:
        """
        A call back called at each negotiation start
        """

    def on_negotiation_end(self, agreement: Outcome | None) -> None:
        """
        A call back called at each negotiation end
        """


@define
class OpponentModel(Component):
    """A model of the opponent's utility function learned from its offers"""

    @abstractmethod
    def update(self, offer: Outcome, t: float) -> None:
        """Updates the model given the last offer received from the opponent at relative time `t`"""

    @abstractmethod
    def evaluate(self, offer: Outcome) -> float:
        """Estimated utility of the offer for the opponent"""

    def __call__(self, offer: Outcome) -> float:
        return self.evaluate(offer)


@define
class OfferingPolicy(Component):
    _current_offer: tuple[float | None, Outcome | None] = field(
        init=False, default=(None, None)
    )

    def next_bid(self, t: float) -> Outcome:
        """The bid to offer at relative time `t`.

        Remarks:
            - Caches the result for the last time queried. Calling it several times for the
              same `t` (e.g. once by the acceptance policy and once to propose) does the
              computations only once and always returns the same bid.
        """
        if self._current_offer[0] != t or self._current_offer[1] is None:
            self._current_offer = (t, self(t))
        return self._current_offer[1]  # type: ignore

    def opening_bid(self) -> Outcome:
        return self.next_bid(0.0)

    @abstractmethod
    def __call__(self, t: float) -> Outcome:
        ...


@define
class AcceptancePolicy(Component):
    def decide(self, offer: Outcome | None, t: float) -> ResponseType:
        """Called to respond to an offer received at relative time `t`"""
        return self(offer, t)

    @abstractmethod
    def __call__(self, offer: Outcome | None, t: float) -> ResponseType:
        ...
