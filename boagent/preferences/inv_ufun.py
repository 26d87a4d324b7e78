from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Sequence

import numpy as np
from numpy.typing import NDArray

from boagent.common import DegenerateInputError

if TYPE_CHECKING:
    from boagent.outcomes import DiscreteCartesianOutcomeSpace, DiscreteIssue, Outcome

__all__ = ["PresortingOutcomeSpace"]

EPS = 1e-12


class PresortingOutcomeSpace:
    """
    An outcome catalog sorted by the agent's own utility.

    All outcomes of the outcome space are enumerated and evaluated once during
    construction and kept in a list sorted ascendingly by utility. Queries by
    utility use bisection on the sorted utilities.

    Args:
        ufun: The agent's own utility function
        outcome_space: The (discrete) outcome space to enumerate

    Remarks:
        - Sorting is stable: outcomes with equal utility keep their enumeration order.
        - `within` returns outcomes in descending order of utility (best first).

    Examples:

        >>> from boagent.outcomes import make_issue, make_os
        >>> from boagent.preferences import LinearAdditiveUtilityFunction
        >>> os = make_os([make_issue(5, "x")])
        >>> ufun = LinearAdditiveUtilityFunction([{i: i / 4 for i in range(5)}], issues=os.issues)
        >>> space = PresortingOutcomeSpace(ufun, os)
        >>> space.minmax()
        (0.0, 1.0)
        >>> space.nearest(0.6)
        (2,)
        >>> space.within(0.4, 1.0)
        [(4,), (3,), (2,)]
    """

    def __init__(
        self,
        ufun: Callable[[Outcome], float],
        outcome_space: DiscreteCartesianOutcomeSpace,
    ):
        self._ufun = ufun
        self._outcome_space = outcome_space
        outcomes = list(outcome_space.enumerate())
        if not outcomes:
            raise DegenerateInputError("Cannot sort an empty outcome space")
        utils = np.asarray([float(ufun(_)) for _ in outcomes], dtype=float)
        indices = np.argsort(utils, kind="stable")
        self._outcomes: list[Outcome] = [outcomes[_] for _ in indices]
        self._utils: NDArray[np.floating[Any]] = utils[indices]
        self._util_map = {o: float(u) for o, u in zip(self._outcomes, self._utils)}

    @property
    def ufun(self):
        return self._ufun

    @property
    def outcome_space(self) -> DiscreteCartesianOutcomeSpace:
        return self._outcome_space

    @property
    def issues(self) -> Sequence[DiscreteIssue]:
        return self._outcome_space.issues

    @property
    def outcomes(self) -> list[Outcome]:
        """All outcomes sorted ascendingly by utility"""
        return self._outcomes

    def utility_of(self, offer: Outcome) -> float:
        """Own utility of an outcome (cached for outcomes of the space)"""
        u = self._util_map.get(offer, None)
        if u is None:
            return float(self._ufun(offer))
        return u

    def outcome_at(self, indx: int) -> Outcome | None:
        """The outcome at the given index with zero being the worst outcome"""
        if indx < 0 or indx >= len(self._outcomes):
            return None
        return self._outcomes[indx]

    def utility_at(self, indx: int) -> float:
        if indx < 0 or indx >= len(self._outcomes):
            return float("-inf")
        return float(self._utils[indx])

    def nearest(self, u: float) -> Outcome:
        n = len(self._outcomes)
        above = int(np.searchsorted(self._utils, u, side="left"))
        if above >= n:
            return self._outcomes[-1]
        if above == 0:
            return self._outcomes[0]
        below = above - 1
        if self._utils[above] - u <= u - self._utils[below] + EPS:
            return self._outcomes[above]
        return self._outcomes[below]

    def within(self, lo: float, hi: float) -> list[Outcome]:
        if lo > hi:
            return []
        first = int(np.searchsorted(self._utils, lo - EPS, side="left"))
        last = int(np.searchsorted(self._utils, hi + EPS, side="right"))
        return self._outcomes[first:last][::-1]

    def minmax(self) -> tuple[float, float]:
        return float(self._utils[0]), float(self._utils[-1])

    def best(self) -> Outcome:
        return self._outcomes[-1]

    def worst(self) -> Outcome:
        return self._outcomes[0]

    def __len__(self) -> int:
        return len(self._outcomes)
