import hypothesis.strategies as st
import pytest
from hypothesis import given

from boagent.common import DegenerateInputError
from boagent.outcomes import DiscreteIssue, make_issue, make_os
from boagent.preferences import (
    LinearAdditiveUtilityFunction,
    OpponentUFunModel,
    PresortingOutcomeSpace,
    SortedOutcomes,
    UFun,
)
from boagent.components import WindowedFrequencyModel


def test_make_issue():
    issue = make_issue(4, "n")
    assert issue.values == (0, 1, 2, 3)
    assert issue.cardinality == len(issue) == 4
    assert issue.value_at(2) == 2
    assert issue.index_of(3) == 3
    assert 2 in issue and 7 not in issue and [1] not in issue
    assert issue.rand() in issue
    assert str(issue) == "n: [0, 1, 2, 3]"
    assert make_issue(["a", "b"], "l") == DiscreteIssue(["a", "b"], "l")


@pytest.mark.parametrize("values", [[], ["a", "a"], 0])
def test_invalid_issues(values):
    with pytest.raises(ValueError):
        make_issue(values)


def test_issue_names_are_generated():
    a, b = make_issue(2), make_issue(2)
    assert a.name != b.name


def test_outcome_space():
    os = make_os([make_issue(["a", "b"], "x"), make_issue(3, "y")])
    assert os.cardinality == len(os) == 6
    assert os.issue_names == ["x", "y"]
    assert list(os.enumerate()) == [
        ("a", 0), ("a", 1), ("a", 2), ("b", 0), ("b", 1), ("b", 2)
    ]
    assert ("b", 2) in os
    assert ("c", 2) not in os
    assert ("a",) not in os
    assert None not in os
    assert os.random_outcome() in os
    with pytest.raises(ValueError):
        make_os([make_issue(2, "x"), make_issue(3, "x")])


def test_linear_ufun_with_lists():
    f = LinearAdditiveUtilityFunction(
        [{"a": 1.0, "b": 0.0}, {0: 0.0, 1: 1.0}], weights=[0.3, 0.7], reserved_value=0.1
    )
    assert f(("a", 1)) == pytest.approx(1.0)
    assert f(("b", 1)) == pytest.approx(0.7)
    assert f(None) == 0.1
    with pytest.raises(ValueError):
        f(("a",))
    with pytest.raises(ValueError):
        LinearAdditiveUtilityFunction([{"a": 1.0}], weights=[0.5, 0.5])


@given(seed=st.integers(0, 1000))
def test_random_linear_ufun_is_normalized(seed):
    os = make_os([make_issue(3, "x"), make_issue(["a", "b"], "y")])
    f = LinearAdditiveUtilityFunction.random(os, seed=seed)
    assert sum(f.weights) == pytest.approx(1.0)
    utils = [f(_) for _ in os.enumerate()]
    assert all(-1e-9 <= u <= 1.0 + 1e-9 for u in utils)
    assert max(utils) == pytest.approx(1.0)
    assert LinearAdditiveUtilityFunction.random(os, seed=seed).weights == f.weights


def make_sorted(values):
    os = make_os([make_issue(len(values), "x")])
    ufun = LinearAdditiveUtilityFunction([dict(enumerate(values))], issues=os.issues)
    return PresortingOutcomeSpace(ufun, os)


def test_sorted_outcomes_are_ascending():
    space = make_sorted([0.5, 0.1, 0.9, 0.1])
    assert space.outcomes == [(1,), (3,), (0,), (2,)]
    assert space.minmax() == pytest.approx((0.1, 0.9))
    assert space.best() == (2,)
    assert space.worst() == (1,)
    assert space.outcome_at(0) == (1,)
    assert space.outcome_at(10) is None
    assert space.utility_at(3) == pytest.approx(0.9)
    assert space.utility_of((0,)) == pytest.approx(0.5)
    assert len(space) == 4


def test_nearest_prefers_the_higher_utility_on_ties():
    space = make_sorted([0.0, 0.5, 1.0])
    assert space.nearest(0.25) == (1,)
    assert space.nearest(0.2) == (0,)
    assert space.nearest(0.8) == (2,)
    assert space.nearest(-3.0) == (0,)
    assert space.nearest(3.0) == (2,)


def test_within_returns_best_first():
    space = make_sorted([0.0, 0.25, 0.5, 0.75, 1.0])
    assert space.within(0.2, 0.8) == [(3,), (2,), (1,)]
    assert space.within(0.5, 0.5) == [(2,)]
    assert space.within(0.8, 0.9) == []
    assert space.within(0.9, 0.1) == []


@given(u=st.floats(-0.5, 1.5))
def test_nearest_is_nearest(u):
    space = make_sorted([0.0, 0.1, 0.35, 0.6, 0.95])
    found = space.utility_of(space.nearest(u))
    assert all(abs(found - u) <= abs(v - u) + 1e-9 for v in (0.0, 0.1, 0.35, 0.6, 0.95))


def test_empty_spaces_are_rejected():
    class Empty:
        issues = ()

        def enumerate(self):
            return iter(())

    with pytest.raises(DegenerateInputError):
        PresortingOutcomeSpace(lambda _: 0.0, Empty())


def test_protocols():
    space = make_sorted([0.0, 1.0])
    assert isinstance(space, SortedOutcomes)
    assert isinstance(space.ufun, UFun)
    assert isinstance(WindowedFrequencyModel(space.issues), OpponentUFunModel)
