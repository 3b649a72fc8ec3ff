from __future__ import annotations

import asyncio
import dataclasses
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Awaitable, Callable, Protocol

from career_insights.schemas.resume_checker import (
    AnalysisSource,
    NormalizedAnalysis,
    Notice,
    NoticeLevel,
    PhaseProgress,
    ResumeDocument,
)
from career_insights.services.ats_dispatcher import AnalysisDispatcher
from career_insights.services.ats_intake import IntakeValidationError, check_document_type, validate_intake
from career_insights.services.ats_normalizer import MalformedAnalysisResult, normalize_analysis

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]

SUCCESS_MESSAGE = "Your resume has been analyzed successfully"
FALLBACK_MESSAGE = "Using mock analysis (ATS server not available)"


class CheckerPhase(str, Enum):
    IDLE = "idle"
    UPLOADING = "uploading"
    ANALYZING = "analyzing"
    DONE = "done"
    FAILED = "failed"

    @property
    def in_flight(self) -> bool:
        return self in (CheckerPhase.UPLOADING, CheckerPhase.ANALYZING)

    @property
    def progress(self) -> PhaseProgress | None:
        if self is CheckerPhase.UPLOADING:
            return PhaseProgress(label="Uploading...", step=1, percent=40)
        if self is CheckerPhase.ANALYZING:
            return PhaseProgress(label="Analyzing resume...", step=2, percent=80)
        return None


class SubmissionInProgress(RuntimeError):
    pass


class Notifier(Protocol):
    def notify(self, level: NoticeLevel, message: str) -> None:
        ...


class NoticeLog:
    def __init__(self) -> None:
        self.notices: list[Notice] = []

    def notify(self, level: NoticeLevel, message: str) -> None:
        self.notices.append(Notice(level=level, message=message))


@dataclass(frozen=True)
class CheckerState:
    phase: CheckerPhase = CheckerPhase.IDLE
    document: ResumeDocument | None = None
    job_description: str = ""
    result: NormalizedAnalysis | None = None
    source: AnalysisSource | None = None

    @property
    def in_flight(self) -> bool:
        return self.phase.in_flight

    @property
    def can_submit(self) -> bool:
        return self.document is not None and bool(self.job_description.strip()) and not self.in_flight

    def evolve(self, **changes) -> "CheckerState":
        return dataclasses.replace(self, **changes)


@dataclass
class ResumeChecker:
    """Shared collaborators for every session: dispatcher, timer and upload delay."""

    dispatcher: AnalysisDispatcher
    upload_delay_s: float = 1.5
    sleep: Sleep = field(default=asyncio.sleep)

    def open_session(self, notifier: Notifier | None = None) -> "ResumeCheckerSession":
        return ResumeCheckerSession(self, notifier=notifier)


class ResumeCheckerSession:
    """State for one interactive resume check.

    Each step produces a new CheckerState. Continuations of an analysis
    that finish after close() are dropped instead of written.
    """

    def __init__(self, checker: ResumeChecker, notifier: Notifier | None = None) -> None:
        self.checker = checker
        self.notifier = notifier or NoticeLog()
        self._state = CheckerState()
        self._closed = False
        self.phase_history: list[CheckerPhase] = []
        self.last_error: IntakeValidationError | MalformedAnalysisResult | None = None

    @property
    def state(self) -> CheckerState:
        return self._state

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        self._closed = True

    def _commit(self, state: CheckerState) -> bool:
        if self._closed:
            logger.debug("resume_checker_write_dropped phase=%s", state.phase.value)
            return False
        if state.phase is not self._state.phase:
            self.phase_history.append(state.phase)
        self._state = state
        return True

    def _notify(self, level: NoticeLevel, message: str) -> None:
        if self._closed:
            return
        self.notifier.notify(level, message)

    def select_file(self, document: ResumeDocument) -> CheckerState:
        # A rejected file leaves the previous selection in place.
        try:
            check_document_type(document)
        except IntakeValidationError as exc:
            self._notify("error", str(exc))
            return self._state
        self._commit(self._state.evolve(document=document))
        return self._state

    def clear_file(self) -> CheckerState:
        self._commit(self._state.evolve(document=None))
        return self._state

    def set_job_description(self, text: str) -> CheckerState:
        self._commit(self._state.evolve(job_description=text or ""))
        return self._state

    def prepare(self, document: ResumeDocument | None, job_description: str) -> CheckerState:
        """Load a whole form at once; the media type is checked on submit."""
        self._commit(self._state.evolve(document=document, job_description=job_description or ""))
        return self._state

    def reset(self) -> CheckerState:
        if self._state.in_flight:
            raise SubmissionInProgress("Cannot start a new analysis while one is in progress.")
        self._commit(CheckerState())
        return self._state

    async def submit(self) -> CheckerState:
        start = self._state
        if start.in_flight:
            raise SubmissionInProgress("An analysis is already in progress.")

        self.last_error = None
        try:
            request = validate_intake(start.document, start.job_description)
        except IntakeValidationError as exc:
            logger.info("resume_checker_intake_rejected code=%s", exc.code)
            self.last_error = exc
            self._notify("error", str(exc))
            return self._state

        if not self._commit(start.evolve(phase=CheckerPhase.UPLOADING)):
            return self._state
        await self.checker.sleep(self.checker.upload_delay_s)

        if not self._commit(self._state.evolve(phase=CheckerPhase.ANALYZING)):
            return self._state
        outcome = await self.checker.dispatcher.dispatch(request)
        if self._closed:
            logger.debug("resume_checker_session_closed_before_result source=%s", outcome.source)
            return self._state

        try:
            analysis = normalize_analysis(outcome.raw)
        except MalformedAnalysisResult as exc:
            logger.warning("resume_checker_malformed_result source=%s error=%s", outcome.source, exc)
            self.last_error = exc
            self._notify("error", f"Failed to analyze resume: {exc}")
            self._commit(self._state.evolve(phase=CheckerPhase.FAILED))
            return self._state

        if outcome.used_fallback:
            self._notify("info", FALLBACK_MESSAGE)
        else:
            self._notify("success", SUCCESS_MESSAGE)
        self._commit(self._state.evolve(phase=CheckerPhase.DONE, result=analysis, source=outcome.source))
        logger.info("resume_checker_done source=%s score=%s", outcome.source, analysis.score)
        return self._state
