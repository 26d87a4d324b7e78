from __future__ import annotations

import random
from itertools import count
from typing import Any, Generator, Iterable

__all__ = ["Outcome", "DiscreteIssue", "make_issue"]

Outcome = tuple
"""An outcome is a tuple of issue values (one value per issue, in issue order)."""

_issue_ids = count()


class DiscreteIssue:
    """
    An issue with a finite, ordered set of values.

    Args:
        values: The possible values of the issue. Duplicates are not allowed.
        name: Name of the issue. If not given, a unique name is generated.

    Examples:

        >>> issue = DiscreteIssue(["low", "mid", "high"], "quality")
        >>> issue.cardinality
        3
        >>> "mid" in issue
        True
        >>> print(issue)
        quality: ['low', 'mid', 'high']
    """

    def __init__(self, values: Iterable[Any], name: str | None = None) -> None:
        values = list(values)
        if not values:
            raise ValueError("A discrete issue must have at least one value")
        if len(set(values)) != len(values):
            raise ValueError(f"Issue values must be unique. Given {values}")
        self.name = name if name else f"issue{next(_issue_ids)}"
        self._values = tuple(values)
        self._index = {v: i for i, v in enumerate(self._values)}

    @property
    def values(self) -> tuple:
        return self._values

    @property
    def cardinality(self) -> int:
        """The number of possible values for the issue."""
        return len(self._values)

    @property
    def all(self) -> Generator[Any, None, None]:
        """A generator of all values in their defined order"""
        yield from self._values

    def value_at(self, index: int):
        if index < 0 or index > self.cardinality - 1:
            raise IndexError(index)
        return self._values[index]

    def index_of(self, v) -> int:
        """Returns the index of a value. Raises `KeyError` for unknown values"""
        return self._index[v]

    def rand(self):
        """Picks a random valid value."""
        return random.choice(self._values)

    def is_valid(self, v) -> bool:
        return v in self._index

    def __contains__(self, item) -> bool:
        try:
            return self.is_valid(item)
        except TypeError:
            # unhashable values can never be issue values
            return False

    def __iter__(self):
        return iter(self._values)

    def __len__(self):
        return self.cardinality

    def __eq__(self, other):
        if not isinstance(other, DiscreteIssue):
            return NotImplemented
        return self._values == other._values and self.name == other.name

    def __hash__(self):
        return hash((self.name, self._values))

    def __repr__(self):
        return f"DiscreteIssue({list(self._values)}, {self.name!r})"

    def __str__(self):
        return f"{self.name}: {list(self._values)}"


def make_issue(values: int | Iterable[Any], name: str | None = None) -> DiscreteIssue:
    """
    A factory for creating discrete issues

    Args:
        values: Possible values for the issue. An integer ``n`` creates an
                issue with values ``0 .. n-1``
        name: Name of the issue. If not given, a unique name will be generated

    Examples:

        >>> list(make_issue(3, "count"))
        [0, 1, 2]
        >>> make_issue(["a", "b"], "letters").values
        ('a', 'b')
    """
    if isinstance(values, int):
        if values < 1:
            raise ValueError(f"Cannot create an issue with {values} values")
        values = range(values)
    return DiscreteIssue(values, name)
