"""
A minimal bilateral Stacked Alternating Offers (SAO) session used to run BOA
negotiators against each other.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Sequence

from attrs import define, field

from boagent.common import ConfigurationError, ResponseType
from boagent.config import CONFIG_KEY_LOG_LEVEL, boagent_config
from boagent.helpers.logging import create_loggers

if TYPE_CHECKING:
    from boagent.negotiator import BOANegotiator
    from boagent.outcomes import Outcome

__all__ = ["SAOSession", "SessionResult", "TraceEntry"]


@define(frozen=True)
class TraceEntry:
    """One offer made during a session and the response it received (None if unanswered)"""

    step: int
    relative_time: float
    negotiator: str
    offer: Outcome
    response: ResponseType | None = None


@define(frozen=True)
class SessionResult:
    agreement: Outcome | None
    step: int
    timedout: bool
    trace: tuple[TraceEntry, ...] = ()


@define
class SAOSession:
    """
    Runs a bilateral negotiation between two negotiators taking turns.

    At step zero the first negotiator opens with its opening bid. At every later
    step the negotiator whose turn it is responds to the last offer. Accepting
    ends the session with an agreement. Otherwise the responder proposes a new
    offer. The session times out after `n_steps` steps.

    Args:
        negotiators: Exactly two negotiators. The first one opens.
        n_steps: Maximum number of steps.
        name: Session name used for logging.
        log_file: If given, the session log is also written to this file (empty
                  string for a time-stamped file).
        log_level: Screen log level of the session logger. If not given, the
                   configured `log_level` is used.

    Remarks:
        - Relative time at step ``s`` is ``(s + 1) / (n_steps + 1)`` so it stays
          strictly below one during the session.
    """

    negotiators: Sequence[BOANegotiator] = field(converter=tuple)
    n_steps: int = 100
    name: str | None = None
    log_file: str | Path | None = None
    log_level: int | str | None = None
    _step: int = field(init=False, default=0)
    _trace: list[TraceEntry] = field(init=False, factory=list)
    logger: logging.Logger = field(init=False, default=None, repr=False)

    def __attrs_post_init__(self):
        if len(self.negotiators) != 2:
            raise ConfigurationError(
                f"A session needs exactly two negotiators (got {len(self.negotiators)})"
            )
        if self.n_steps < 1:
            raise ConfigurationError(f"n_steps must be positive (got {self.n_steps})")
        if self.name is None:
            self.name = "-".join(str(_) for _ in self.negotiators)

    def _open_logger(self) -> logging.Logger:
        return create_loggers(
            file_name=self.log_file,
            module_name=f"boagent.session.{self.name}",
            screen_level=self.log_level
            if self.log_level is not None
            else boagent_config(CONFIG_KEY_LOG_LEVEL, "WARNING"),
        )

    def _close_logger(self) -> None:
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()

    @property
    def current_step(self) -> int:
        return self._step

    @property
    def trace(self) -> tuple[TraceEntry, ...]:
        return tuple(self._trace)

    def relative_time(self, step: int | None = None) -> float:
        if step is None:
            step = self._step
        return (step + 1) / (self.n_steps + 1)

    def run(self) -> SessionResult:
        """
        Runs the session to completion.

        Remarks:
            - Exceptions raised by negotiators are logged and propagated. The
              negotiators are informed that the session ended without agreement.
            - The session logger is created when the run starts and its handlers
              (including the log file) are closed when it ends.
        """
        self._step, self._trace = 0, []
        self.logger = self._open_logger()
        try:
            return self._run_logged()
        finally:
            self._close_logger()

    def _run_logged(self) -> SessionResult:
        for negotiator in self.negotiators:
            negotiator.on_negotiation_start()
        self.logger.info(f"{self.name}: started ({self.n_steps} steps)")
        try:
            agreement = self._run()
        except Exception as e:
            self.logger.error(f"{self.name}: failed at step {self._step}: {e}")
            for negotiator in self.negotiators:
                negotiator.on_negotiation_end(None)
            raise
        for negotiator in self.negotiators:
            negotiator.on_negotiation_end(agreement)
        result = SessionResult(
            agreement=agreement,
            step=self._step,
            timedout=agreement is None,
            trace=self.trace,
        )
        if agreement is None:
            self.logger.info(f"{self.name}: timed out after {self.n_steps} steps")
        else:
            self.logger.info(
                f"{self.name}: agreement {agreement} at step {self._step} "
                f"(t={self.relative_time():0.4f})"
            )
        return result

    def _run(self) -> Outcome | None:
        first = self.negotiators[0]
        offer = first.opening_bid()
        self._trace.append(TraceEntry(0, self.relative_time(0), str(first), offer))
        self.logger.debug(f"{self.name}: {first} opened with {offer}")
        for step in range(1, self.n_steps):
            self._step = step
            t = self.relative_time(step)
            responder = self.negotiators[step % 2]
            response = responder.respond(offer, t)
            last = self._trace[-1]
            self._trace[-1] = TraceEntry(
                last.step, last.relative_time, last.negotiator, last.offer, response
            )
            if response == ResponseType.ACCEPT_OFFER:
                self.logger.debug(f"{self.name}: {responder} accepted {offer} at t={t:0.4f}")
                return offer
            offer = responder.propose(t)
            self._trace.append(TraceEntry(step, t, str(responder), offer))
            self.logger.debug(f"{self.name}: {responder} offered {offer} at t={t:0.4f}")
        self._step = self.n_steps
        return None
