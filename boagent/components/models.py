"""Opponent models learned from the offers of the opponent."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Mapping, Sequence

from attrs import define, field

from boagent import warnings
from boagent.common import ConfigurationError, EvaluationLookupError

from .base import OpponentModel

if TYPE_CHECKING:
    from boagent.outcomes import DiscreteIssue, Outcome

__all__ = ["WindowedFrequencyModel", "ModelSnapshot"]

logger = logging.getLogger(__name__)


@define(frozen=True)
class ModelSnapshot:
    """An immutable copy of the state of a `WindowedFrequencyModel`"""

    weights: tuple[float, ...]
    scores: tuple[tuple[tuple[Any, int], ...], ...]


@define
class WindowedFrequencyModel(OpponentModel):
    """
    A frequency based opponent model looking at a window of recent opponent offers.

    This is an extension of the Hard-Headed frequency model. Issues whose value the
    opponent keeps fixed while conceding elsewhere are assumed to be important to
    it and gain weight. Values the opponent offers often are assumed to be
    preferred and gain score.

    Args:
        issues: The issues of the domain.
        learning_coef: Total weight added per update (split over the issues as the golden value).
        round_to_update: Minimum number of opponent offers before the model starts learning.
        n_rounds: Size of the window of recent opponent offers used in every update.
        learn_value_addition: Score added to a value every time it appears in the window.
        history: A read-only view of the opponent's offers (owned by whoever runs the negotiation).
                 If not given, the model records the offers passed to `update` itself.

    Remarks:
        - The model starts flat: equal issue weights and a score of one for every value.
        - Every update compares the most recent offer with each of the ``n_rounds - 1``
          offers before it (never looking at the very first offer) and rewards the
          issues that did not change by the golden value ``learning_coef / n_issues``.
        - Issue weights always sum to one. Value scores are integers that never
          decrease and are normalized by the best score of their issue only when
          evaluating.
        - With ``round_to_update=3`` and ``n_rounds=2`` this is the single-pair
          Hard-Headed frequency model.
        - Unknown issues or values are skipped (with a warning) instead of failing.

    Examples:

        >>> from boagent.outcomes import make_issue
        >>> model = WindowedFrequencyModel([make_issue(["a", "b"], "x"), make_issue(3, "y")])
        >>> model.issue_weights
        {'x': 0.5, 'y': 0.5}
        >>> model.evaluate(("a", 2))
        1.0
    """

    issues: Sequence[DiscreteIssue] = field(converter=tuple)
    learning_coef: float = 0.2
    round_to_update: int = 4
    n_rounds: int = 3
    learn_value_addition: int = 1
    history: Sequence[Outcome] | None = field(default=None, repr=False)
    _weights: list[float] = field(init=False, factory=list)
    _scores: list[dict[Any, int]] = field(init=False, factory=list)
    _received: list[Outcome] = field(init=False, factory=list, repr=False)

    def __attrs_post_init__(self):
        if not self.issues:
            raise ConfigurationError("Cannot model an opponent without issues")
        if self.learning_coef < 0:
            raise ConfigurationError(
                f"The learning coefficient must be non-negative (got {self.learning_coef})"
            )
        if self.round_to_update < 1:
            raise ConfigurationError(
                f"roundToUpdate must be at least 1 (got {self.round_to_update})"
            )
        if self.n_rounds < 2:
            raise ConfigurationError(
                f"numberOfRounds must be at least 2 (got {self.n_rounds})"
            )
        if self.learn_value_addition < 0:
            raise ConfigurationError(
                f"learnValueAddition must be non-negative (got {self.learn_value_addition})"
            )
        self._initialize()

    @classmethod
    def from_params(
        cls,
        issues: Sequence[DiscreteIssue],
        params: Mapping[str, float],
        history: Sequence[Outcome] | None = None,
    ) -> WindowedFrequencyModel:
        """Creates the model from BOA parameters (``l``, ``roundToUpdate``, ``numberOfRounds``)"""
        return cls(
            issues,
            learning_coef=float(params.get("l", 0.2)),
            round_to_update=int(params.get("roundToUpdate", 4)),
            n_rounds=int(params.get("numberOfRounds", 3)),
            history=history,
        )

    def _initialize(self) -> None:
        """Init to flat weight and flat evaluation distribution"""
        n = len(self.issues)
        self._weights = [1.0 / n] * n
        self._scores = [{v: 1 for v in issue.values} for issue in self.issues]

    @property
    def golden_value(self) -> float:
        """The weight added to unchanged issues before normalization"""
        return self.learning_coef / len(self.issues)

    @property
    def opponent_history(self) -> Sequence[Outcome]:
        return self.history if self.history is not None else self._received

    @property
    def issue_weights(self) -> dict[str, float]:
        return {issue.name: w for issue, w in zip(self.issues, self._weights)}

    @property
    def value_scores(self) -> dict[str, dict[Any, int]]:
        return {issue.name: dict(s) for issue, s in zip(self.issues, self._scores)}

    def snapshot(self) -> ModelSnapshot:
        return ModelSnapshot(
            weights=tuple(self._weights),
            scores=tuple(tuple(s.items()) for s in self._scores),
        )

    def _value(self, offer: Outcome, i: int):
        try:
            v = offer[i]
        except (IndexError, TypeError):
            raise EvaluationLookupError(
                f"Offer {offer} has no value for issue {self.issues[i].name}"
            )
        try:
            known = v in self._scores[i]
        except TypeError:
            known = False
        if not known:
            raise EvaluationLookupError(
                f"Value {v!r} is unknown for issue {self.issues[i].name}"
            )
        return v

    def _skip(self, e: EvaluationLookupError) -> None:
        logger.warning(f"Skipping an opponent model lookup: {e}")
        warnings.warn(
            f"{self.__class__.__name__}: {e}. Skipping it",
            warnings.BoagentCaughtExceptionWarning,
        )

    def _difference(self, first: Outcome, second: Outcome) -> list[tuple[int, int]]:
        """For each issue, 1 if the value changed between the two offers and 0 otherwise"""
        diff = []
        for i in range(len(self.issues)):
            try:
                changed = int(self._value(first, i) != self._value(second, i))
            except EvaluationLookupError as e:
                self._skip(e)
                continue
            diff.append((i, changed))
        return diff

    def _normalize_weights(self) -> None:
        total = sum(self._weights)
        if total <= 0:
            n = len(self._weights)
            self._weights = [1.0 / n] * n
            return
        self._weights = [_ / total for _ in self._weights]

    def update(self, offer: Outcome, t: float) -> None:
        if self.history is None:
            self._received.append(offer)
        history = self.opponent_history
        n = len(history)
        if n < self.round_to_update:
            return

        diffs = []
        for i in range(1, self.n_rounds):
            earlier = n - 1 - i
            # the first offer of the opponent is never compared
            if earlier <= 0:
                break
            diffs.append(self._difference(history[earlier], history[n - 1]))

        n_unchanged = sum(1 for diff in diffs for _, changed in diff if changed == 0)
        golden = self.golden_value
        total = 1.0 + golden * n_unchanged
        for diff in diffs:
            for i, changed in diff:
                self._weights[i] = (self._weights[i] + golden * (1 - changed)) / total
                self._normalize_weights()

        for past in history[max(0, n - (self.n_rounds - 1)) :]:
            for i in range(len(self.issues)):
                try:
                    v = self._value(past, i)
                except EvaluationLookupError as e:
                    self._skip(e)
                    continue
                self._scores[i][v] += self.learn_value_addition

    def evaluate(self, offer: Outcome) -> float:
        u = 0.0
        for i, w in enumerate(self._weights):
            try:
                v = self._value(offer, i)
            except EvaluationLookupError as e:
                self._skip(e)
                continue
            best = max(self._scores[i].values())
            if best > 0:
                u += w * self._scores[i][v] / best
        return u
