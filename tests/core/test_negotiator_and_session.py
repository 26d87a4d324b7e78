import hypothesis.strategies as st
import pytest
from hypothesis import given, settings

from boagent import (
    BOANegotiator,
    ConfigurationError,
    ConcessionCurve,
    LinearAdditiveUtilityFunction,
    PresortingOutcomeSpace,
    ResponseType,
    SAOSession,
    TimeDependentAcceptancePolicy,
    TimeDependentOfferingPolicy,
    make_boa,
    make_issue,
    make_os,
)
from boagent.warnings import BoagentUnusedValueWarning


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    from boagent import config

    monkeypatch.setattr(
        config,
        "BOAGENT_CONFIG",
        {config.CONFIG_KEY_PROFILE: "default", config.CONFIG_KEY_LOG_LEVEL: "WARNING"},
    )
    for key in list(config.PROFILES["default"].keys()) + ["PROFILE", "LOG_LEVEL"]:
        monkeypatch.delenv(f"BOAGENT_{key}", raising=False)


def make_domain(seed=0):
    os = make_os(
        [
            make_issue(5, "price"),
            make_issue(["red", "green", "blue"], "color"),
            make_issue(4, "delivery"),
        ]
    )
    return (
        os,
        LinearAdditiveUtilityFunction.random(os, seed=seed),
        LinearAdditiveUtilityFunction.random(os, seed=seed + 1),
    )


def test_from_params_needs_no_parameters():
    os, ufun, _ = make_domain()
    neg = BOANegotiator.from_params(ufun, os)
    assert neg.model is not None and neg.selector is not None
    assert neg.acceptance.offering is neg.offering
    assert neg.offering.selector is neg.selector
    assert neg.model.round_to_update == 4
    assert neg.selector.opponent_reservation_value == 0.1
    assert neg.opening_bid() in os
    assert ufun(neg.opening_bid()) == pytest.approx(neg.offering.curve.target(0.0), abs=0.2)


def test_params_override_the_profile():
    os, ufun, _ = make_domain()
    neg = BOANegotiator.from_params(
        ufun, os, {"e": 1.5, "w": 0.8, "numberOfRounds": 5}, profile="no-reservation"
    )
    assert neg.offering.curve.e == 1.5
    assert neg.selector.weight_agent_utility == 0.8
    assert neg.selector.opponent_reservation_value == 0.0
    assert neg.model.n_rounds == 5


def test_unknown_parameters_warn():
    os, ufun, _ = make_domain()
    with pytest.warns(BoagentUnusedValueWarning):
        BOANegotiator.from_params(ufun, os, {"speed": 3})


def test_invalid_parameters_are_rejected():
    os, ufun, _ = make_domain()
    with pytest.raises(ConfigurationError):
        BOANegotiator.from_params(ufun, os, {"w": 2.0})
    with pytest.raises(ConfigurationError):
        BOANegotiator.from_params(ufun, os, {"e": -1.0})
    with pytest.raises(ConfigurationError):
        BOANegotiator.from_params(ufun, os, profile="unknown")


def test_acceptance_must_use_the_offering_policy():
    os, ufun, _ = make_domain()
    space = PresortingOutcomeSpace(ufun, os)
    offering = TimeDependentOfferingPolicy(space, ConcessionCurve())
    other = TimeDependentOfferingPolicy(space, ConcessionCurve())
    with pytest.raises(ConfigurationError):
        BOANegotiator(offering, TimeDependentAcceptancePolicy(other))
    neg = BOANegotiator(offering, TimeDependentAcceptancePolicy(offering), name="hard")
    assert str(neg) == "hard"
    assert neg.model is None


def test_respond_records_offers_and_updates_the_model():
    os, ufun, _ = make_domain()
    neg = BOANegotiator.from_params(ufun, os, {"roundToUpdate": 2})
    offers = [(0, "red", 0), (1, "red", 1), (2, "red", 2)]
    initial = neg.model.snapshot()
    for i, offer in enumerate(offers):
        response = neg.respond(offer, (i + 1) / 10)
        assert isinstance(response, ResponseType)
    assert neg.opponent_history == tuple(offers)
    assert neg.model.opponent_history == offers
    assert neg.model.snapshot() != initial
    assert neg.model.issue_weights["color"] > neg.model.issue_weights["price"]


def test_model_is_not_updated_after_the_update_threshold():
    os, ufun, _ = make_domain()
    neg = BOANegotiator.from_params(ufun, os, {"roundToUpdate": 1, "t": 0.5})
    neg.respond((0, "red", 0), 0.6)
    neg.respond((1, "red", 1), 0.7)
    assert len(neg.opponent_history) == 2
    assert all(
        s == 1 for scores in neg.model.value_scores.values() for s in scores.values()
    )


def test_engine_without_model_offers_the_nearest_bid():
    os, ufun, _ = make_domain()
    neg = BOANegotiator.from_params(ufun, os, use_model=False)
    assert neg.model is None and neg.selector is None
    space = neg.offering.outcome_space
    for t in (0.0, 0.5, 0.99):
        assert neg.propose(t) == space.nearest(neg.offering.curve.target(t))
    neg.respond((0, "red", 0), 0.5)
    assert len(neg.opponent_history) == 1


def test_engines_do_not_share_state():
    os, ufun, _ = make_domain()
    first = BOANegotiator.from_params(ufun, os, {"roundToUpdate": 1})
    second = BOANegotiator.from_params(ufun, os, {"roundToUpdate": 1})
    assert first.name != second.name
    assert first.model is not second.model
    assert first.offering.curve is not second.offering.curve
    first.respond((0, "red", 0), 0.1)
    assert second.opponent_history == ()
    assert second.model.snapshot() != first.model.snapshot()


def test_make_boa():
    os, ufun, _ = make_domain()
    neg = make_boa(ufun, os, e=0.7, r=0.0)
    assert neg.offering.curve.e == 0.7
    assert neg.selector.opponent_reservation_value == 0.0


@settings(deadline=None, max_examples=20)
@given(
    seed=st.integers(0, 100),
    n_steps=st.integers(1, 60),
    e1=st.sampled_from([0.0, 0.2, 1.0, 3.0]),
    e2=st.sampled_from([0.0, 0.2, 1.0, 3.0]),
)
def test_self_play_ends_in_agreement_or_timeout(seed, n_steps, e1, e2):
    os, u1, u2 = make_domain(seed)
    a, b = make_boa(u1, os, e=e1), make_boa(u2, os, e=e2)
    session = SAOSession([a, b], n_steps=n_steps)
    result = session.run()
    assert result.timedout == (result.agreement is None)
    assert 0 <= result.step <= n_steps
    if result.agreement is not None:
        assert result.agreement in os
        assert result.trace[-1].response == ResponseType.ACCEPT_OFFER
        assert result.trace[-1].offer == result.agreement
    assert all(0.0 < _.relative_time < 1.0 for _ in result.trace)
    assert len(b.opponent_history) >= 1 or n_steps == 1


def test_conceders_reach_agreement():
    os, u1, u2 = make_domain(3)
    a, b = make_boa(u1, os, e=3.0), make_boa(u2, os, e=3.0)
    result = SAOSession([a, b], n_steps=100, name="conceders").run()
    assert not result.timedout
    assert result.agreement is not None
    assert result.step < 100


def test_identical_preferences_agree_immediately():
    os, ufun, _ = make_domain()
    a = BOANegotiator.from_params(ufun, os, use_model=False)
    b = BOANegotiator.from_params(ufun, os, use_model=False)
    result = SAOSession([a, b], n_steps=10).run()
    assert result.agreement == a.opening_bid()
    assert result.step == 1
    assert [_.negotiator for _ in result.trace] == [str(a)]


def test_session_relative_time():
    os, u1, u2 = make_domain()
    session = SAOSession([make_boa(u1, os), make_boa(u2, os)], n_steps=9)
    assert session.relative_time(0) == pytest.approx(0.1)
    assert session.relative_time(8) == pytest.approx(0.9)


def test_session_needs_two_negotiators():
    os, ufun, _ = make_domain()
    with pytest.raises(ConfigurationError):
        SAOSession([make_boa(ufun, os)])
    with pytest.raises(ConfigurationError):
        SAOSession([make_boa(ufun, os), make_boa(ufun, os)], n_steps=0)


def test_session_errors_propagate():
    os, u1, u2 = make_domain()
    a, b = make_boa(u1, os), make_boa(u2, os)

    def broken(offer, t):
        raise RuntimeError("broken negotiator")

    b.respond = broken
    with pytest.raises(RuntimeError):
        SAOSession([a, b], n_steps=10).run()


def test_session_log_file(tmp_path):
    os, u1, u2 = make_domain()
    path = tmp_path / "session.log"
    session = SAOSession(
        [make_boa(u1, os), make_boa(u2, os)], n_steps=5, name="logged", log_file=path
    )
    session.run()
    # the log file is closed and detached once the run ends
    assert session.logger.handlers == []
    assert "logged: started" in path.read_text()
    session.run()
    assert session.logger.handlers == []
    assert path.read_text().count("logged: started") == 2


def test_session_logger_is_closed_after_errors(tmp_path):
    os, u1, u2 = make_domain()
    a, b = make_boa(u1, os), make_boa(u2, os)

    def broken(offer, t):
        raise RuntimeError("broken negotiator")

    b.respond = broken
    path = tmp_path / "failed.log"
    session = SAOSession([a, b], n_steps=10, name="failing", log_file=path)
    with pytest.raises(RuntimeError):
        session.run()
    assert session.logger.handlers == []
    assert "failed at step 1" in path.read_text()
