from __future__ import annotations

import random
from typing import TYPE_CHECKING, Any, Mapping, Sequence

if TYPE_CHECKING:
    from boagent.outcomes import DiscreteIssue, DiscreteCartesianOutcomeSpace, Outcome

__all__ = ["LinearAdditiveUtilityFunction"]


class LinearAdditiveUtilityFunction:
    r"""A linear aggregation utility function for multi-issue negotiations over discrete issues.

    Args:
         values: One mapping from issue value to utility per issue (either a list in issue order
                 or a dict keyed by issue name)
         weights: weights for combining `values` (list in issue order or dict keyed by issue name).
                  Defaults to equal weights.
         issues: The issues of the domain
         reserved_value: The utility of disagreement

    Notes:

        The utility value is calculated as:

        .. math::

            u = \sum_{i=0}^{n_{issues}-1} {w_i * u_i(\omega_i)}

    Examples:

        >>> from boagent.outcomes import make_issue
        >>> issues = [make_issue(["a", "b"], "x"), make_issue(3, "y")]
        >>> f = LinearAdditiveUtilityFunction(
        ...     {"x": {"a": 1.0, "b": 0.0}, "y": {0: 0.0, 1: 0.5, 2: 1.0}},
        ...     weights={"x": 0.25, "y": 0.75},
        ...     issues=issues,
        ... )
        >>> f(("a", 1))
        0.625
    """

    def __init__(
        self,
        values: Mapping[str, Mapping[Any, float]] | Sequence[Mapping[Any, float]],
        weights: Mapping[str, float] | Sequence[float] | None = None,
        issues: Sequence[DiscreteIssue] | None = None,
        reserved_value: float = 0.0,
    ) -> None:
        self.issues = list(issues) if issues is not None else None
        self.reserved_value = reserved_value
        if isinstance(values, Mapping):
            if self.issues is None:
                raise ValueError("Must specify issues when passing `values` as a dict")
            values = [values[_.name] for _ in self.issues]
        self.values: list[dict[Any, float]] = [dict(_) for _ in values]
        if weights is None:
            weights = [1.0 / len(self.values)] * len(self.values)
        elif isinstance(weights, Mapping):
            if self.issues is None:
                raise ValueError("Must specify issues when passing `weights` as a dict")
            weights = [weights.get(_.name, 0.0) for _ in self.issues]
        self._weights = [float(_) for _ in weights]
        if len(self._weights) != len(self.values):
            raise ValueError(
                f"Got {len(self._weights)} weights for {len(self.values)} issues"
            )

    @property
    def weights(self) -> list[float]:
        return self._weights

    def eval(self, offer: Outcome | None) -> float:
        if offer is None:
            return self.reserved_value
        if len(offer) != len(self.values):
            raise ValueError(
                f"Outcome {offer} has {len(offer)} values but the ufun has {len(self.values)} issues"
            )
        u = 0.0
        for v, w, iu in zip(offer, self._weights, self.values):
            u += w * iu[v]
        return u

    def __call__(self, offer: Outcome | None) -> float:
        return self.eval(offer)

    @classmethod
    def random(
        cls,
        outcome_space: DiscreteCartesianOutcomeSpace | None = None,
        issues: Sequence[DiscreteIssue] | None = None,
        reserved_value: float = 0.0,
        seed: int | None = None,
    ) -> LinearAdditiveUtilityFunction:
        """Generates a random normalized ufun (weights sum to one and every issue has a value with utility one)"""
        if not issues and outcome_space:
            issues = outcome_space.issues
        if not issues:
            raise ValueError("Cannot generate a random ufun without knowing the issues")
        rng = random.Random(seed)
        weights = [rng.random() for _ in issues]
        m = sum(weights)
        weights = [_ / m for _ in weights] if m else [1.0 / len(issues)] * len(issues)
        values = []
        for issue in issues:
            mapping = {v: rng.random() for v in issue.values}
            mx = max(mapping.values())
            values.append({k: v / mx if mx else 1.0 for k, v in mapping.items()})
        return cls(values, weights, issues=issues, reserved_value=reserved_value)

    def __str__(self):
        return f"w: {self._weights}, v: {self.values}"
