from __future__ import annotations

import itertools
import random
from functools import reduce
from operator import mul
from typing import Iterable, Sequence

from .issues import DiscreteIssue, Outcome

__all__ = ["DiscreteCartesianOutcomeSpace", "make_os", "outcome_is_valid"]


def outcome_is_valid(outcome: Outcome, issues: Sequence[DiscreteIssue]) -> bool:
    """Checks that the outcome has exactly one valid value per issue"""
    if outcome is None or len(outcome) != len(issues):
        return False
    return all(v in issue for v, issue in zip(outcome, issues))


class DiscreteCartesianOutcomeSpace:
    """
    The cartesian product of a set of discrete issues.

    Outcomes are enumerated in lexicographic order of the issue values (the last
    issue changes fastest) which makes enumeration deterministic.
    """

    def __init__(self, issues: Iterable[DiscreteIssue], name: str | None = None):
        self.issues: tuple[DiscreteIssue, ...] = tuple(issues)
        if not self.issues:
            raise ValueError("An outcome space needs at least one issue")
        names = self.issue_names
        if len(set(names)) != len(names):
            raise ValueError(f"Issue names must be unique. Given {names}")
        self.name = name if name else "os"

    @property
    def issue_names(self) -> list[str]:
        """Returns an ordered list of issue names"""
        return [_.name for _ in self.issues]

    @property
    def cardinality(self) -> int:
        """The space cardinality = the number of outcomes"""
        return reduce(mul, [_.cardinality for _ in self.issues], 1)

    def enumerate(self) -> Iterable[Outcome]:
        return itertools.product(*(_.values for _ in self.issues))

    def random_outcome(self) -> Outcome:
        return tuple(_.rand() for _ in self.issues)

    def is_valid(self, outcome: Outcome) -> bool:
        return outcome_is_valid(outcome, self.issues)

    def __contains__(self, outcome) -> bool:
        return self.is_valid(outcome)

    def __len__(self) -> int:
        return self.cardinality

    def __str__(self):
        return f"{self.name}: " + ", ".join(str(_) for _ in self.issues)


def make_os(
    issues: Iterable[DiscreteIssue], name: str | None = None
) -> DiscreteCartesianOutcomeSpace:
    return DiscreteCartesianOutcomeSpace(issues, name=name)
