"""The single "current analysis" slot: idle -> in_flight -> succeeded | failed."""

import datetime
import logging
import threading

from veoscope.exceptions import AnalysisInProgressError
from veoscope.models.analysis import (
    AnalysisFailure,
    AnalysisSuccess,
    FailedState,
    IdleState,
    InFlightState,
    SucceededState,
)
from veoscope.services.parser import parse_analysis

logger = logging.getLogger(__name__)


class AnalysisSession:
    def __init__(self):
        self._lock = threading.Lock()
        self._state: IdleState | InFlightState | SucceededState | FailedState = IdleState()

    @property
    def current(self) -> IdleState | InFlightState | SucceededState | FailedState:
        return self._state

    def begin(self, filename: str) -> InFlightState:
        """Mark a new analysis as running. Only one may run at a time."""
        with self._lock:
            if isinstance(self._state, InFlightState):
                raise AnalysisInProgressError(
                    f"Already analyzing {self._state.filename}. Wait for it to finish."
                )
            self._state = InFlightState(
                filename=filename,
                started_at=datetime.datetime.now(datetime.timezone.utc),
            )
            logger.info("Analysis started for %s", filename)
            return self._state

    def finish(self, result: AnalysisSuccess | AnalysisFailure) -> SucceededState | FailedState:
        with self._lock:
            filename = self._state.filename if isinstance(self._state, InFlightState) else ""
            if isinstance(result, AnalysisSuccess):
                self._state = SucceededState(
                    filename=filename, result=result, parsed=parse_analysis(result.text)
                )
            else:
                self._state = FailedState(filename=filename, error=result)
            logger.info("Analysis %s for %s", self._state.status, filename)
            return self._state

    def reset(self) -> IdleState:
        with self._lock:
            if isinstance(self._state, InFlightState):
                raise AnalysisInProgressError("Cannot reset while an analysis is running.")
            self._state = IdleState()
            return self._state


_session: AnalysisSession | None = None


def get_session() -> AnalysisSession:
    global _session
    if _session is None:
        _session = AnalysisSession()
    return _session
