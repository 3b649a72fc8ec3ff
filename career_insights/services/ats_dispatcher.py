from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Any

import httpx

from career_insights.schemas.resume_checker import AnalysisRequest, AnalysisSource
from career_insights.services.ats_client import AtsTransportError, request_remote_analysis
from career_insights.services.ats_mock import MockScorer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DispatchOutcome:
    raw: dict[str, Any]
    source: AnalysisSource
    error: str | None = None

    @property
    def used_fallback(self) -> bool:
        return self.source == "mock"


class AnalysisDispatcher:
    """One remote attempt, then the local mock scorer. Never raises on transport failure."""

    def __init__(
        self,
        *,
        base_url: str,
        timeout: float,
        rng: random.Random | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        mock_scorer: MockScorer | None = None,
    ) -> None:
        self.base_url = base_url
        self.timeout = timeout
        self.rng = rng or random.Random()
        self.transport = transport
        self.mock_scorer = mock_scorer or MockScorer()

    async def dispatch(self, request: AnalysisRequest) -> DispatchOutcome:
        try:
            raw = await request_remote_analysis(
                request,
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self.transport,
            )
        except AtsTransportError as exc:
            logger.warning("ats_remote_unavailable falling_back_to_mock error=%s", exc)
            raw = self.mock_scorer.generate(request.job_description, self.rng)
            return DispatchOutcome(raw=raw, source="mock", error=str(exc))
        return DispatchOutcome(raw=raw, source="remote")
