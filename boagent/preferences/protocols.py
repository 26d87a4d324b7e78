"""
Minimal contracts that the negotiation components need from their collaborators.

Any object implementing these protocols can be used in place of the reference
implementations shipped in `boagent.preferences`.
"""
from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Protocol, Sequence, runtime_checkable

if TYPE_CHECKING:
    from boagent.outcomes import DiscreteIssue, Outcome

__all__ = ["UFun", "SortedOutcomes", "OpponentUFunModel"]


@runtime_checkable
class UFun(Protocol):
    """Maps an outcome to a utility value (the agent's own, fixed preferences)"""

    @abstractmethod
    def __call__(self, offer: Outcome) -> float:
        ...


@runtime_checkable
class SortedOutcomes(Protocol):
    """
    A catalog of all outcomes sorted by the agent's own utility.

    Remarks:
        - `outcomes` are sorted ascendingly by utility.
        - `within` returns outcomes in descending order of utility and the order must be stable
          between calls because bid selection breaks ties by iteration order.
    """

    @property
    @abstractmethod
    def issues(self) -> Sequence[DiscreteIssue]:
        ...

    @property
    @abstractmethod
    def outcomes(self) -> Sequence[Outcome]:
        ...

    @abstractmethod
    def utility_of(self, offer: Outcome) -> float:
        ...

    @abstractmethod
    def nearest(self, u: float) -> Outcome:
        """The outcome with utility nearest to `u` (ties go to the higher utility)"""

    @abstractmethod
    def within(self, lo: float, hi: float) -> list[Outcome]:
        """All outcomes with utilities in the closed range [lo, hi]"""

    @abstractmethod
    def minmax(self) -> tuple[float, float]:
        ...

    @abstractmethod
    def best(self) -> Outcome:
        ...

    @abstractmethod
    def worst(self) -> Outcome:
        ...


@runtime_checkable
class OpponentUFunModel(Protocol):
    """A learned estimate of the opponent's utility function"""

    @abstractmethod
    def update(self, offer: Outcome, t: float) -> None:
        ...

    @abstractmethod
    def evaluate(self, offer: Outcome) -> float:
        ...
