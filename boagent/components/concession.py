from __future__ import annotations

import math

from attrs import define, field

from boagent.common import ConfigurationError

__all__ = ["ConcessionCurve"]


@define(frozen=True)
class ConcessionCurve:
    """
    A two-stage time-dependent concession curve.

    The first stage is the classic time-dependent curve of Fatima, Wooldridge and
    Jennings (Optimal Negotiation Strategies for Agents with Incomplete Information):

        f(t) = k + (1 - k) * t^(1/e)

    Once f(t) reaches the switch-over level ``1 - alpha`` the curve turns into a
    straight line that reaches f(1) = 1 exactly at the deadline:

        f(t) = alpha / (1 - t_a) * t - alpha / (1 - t_a) + 1

    where ``t_a`` is the turning point (the time at which the first stage reaches
    ``1 - alpha``). The turning point is computed once from the parameters and
    does not move with the current time.

    The target utility is ``pmin + (pmax - pmin) * (1 - f(t))``: near ``pmax`` at
    the start and ``pmin`` at the deadline.

    Args:
        k: Offset in [0, 1]. The curve starts at f(0) = k.
        e: Concession exponent (>= 0). e < 1 concedes slowly (boulware), e > 1 concedes
           fast (conceder) and e = 0 never concedes (hardliner, f(t) = k).
        alpha: Switch-over ratio in [0, 1]. Zero disables the linear stage.
        pmin: Minimum target utility.
        pmax: Maximum target utility.

    Remarks:
        - When ``k >= 1 - alpha`` the curve is a single line from (0, k) to (1, 1).
        - Times outside [0, 1] are clamped.

    Examples:

        >>> curve = ConcessionCurve(k=0.2, e=0.2, alpha=0.3)
        >>> round(curve.target(0.0), 6), curve.target(1.0)
        (0.8, 0.0)
        >>> curve.shape(0.5) < curve.shape(0.99) < curve.shape(1.0)
        True
    """

    k: float = 0.2
    e: float = 0.2
    alpha: float = 0.3
    pmin: float = 0.0
    pmax: float = 1.0
    turning_point: float = field(init=False, default=1.0)
    _turning_level: float = field(init=False, default=1.0, repr=False)

    def __attrs_post_init__(self):
        for name in ("k", "e", "alpha", "pmin", "pmax"):
            v = getattr(self, name)
            if v is None or not math.isfinite(v):
                raise ConfigurationError(f"Invalid value {v} for {name}")
        if not 0.0 <= self.k <= 1.0:
            raise ConfigurationError(f"k must be in [0, 1] (got {self.k})")
        if not 0.0 <= self.alpha <= 1.0:
            raise ConfigurationError(f"alpha must be in [0, 1] (got {self.alpha})")
        if self.e < 0:
            raise ConfigurationError(f"e must be non-negative (got {self.e})")
        if self.pmin > self.pmax:
            raise ConfigurationError(
                f"Minimum utility {self.pmin} is larger than the maximum {self.pmax}"
            )
        level = 1.0 - self.alpha
        if self.k >= level:
            ta, fa = 0.0, self.k
        elif self.e == 0 or self.alpha == 0:
            ta, fa = 1.0, 1.0
        else:
            ta, fa = ((level - self.k) / (1.0 - self.k)) ** self.e, level
        object.__setattr__(self, "turning_point", ta)
        object.__setattr__(self, "_turning_level", fa)

    def shape(self, t: float) -> float:
        """The concession f(t) in [0, 1] (zero is no concession)"""
        if self.e == 0:
            return self.k
        t = min(1.0, max(0.0, t))
        ta = self.turning_point
        if ta >= 1.0 or t < ta:
            return self.k + (1.0 - self.k) * pow(t, 1.0 / self.e)
        return 1.0 - (1.0 - self._turning_level) * (1.0 - t) / (1.0 - ta)

    def target(self, t: float) -> float:
        """The target utility at relative time `t`"""
        return self.pmin + (self.pmax - self.pmin) * (1.0 - self.shape(t))

    def utility_at(self, t: float) -> float:
        return self.target(t)

    def __call__(self, t: float) -> float:
        return self.target(t)
