from __future__ import annotations

from functools import lru_cache

from fastapi import Header

from career_insights.core.config import settings
from career_insights.services.ats_dispatcher import AnalysisDispatcher
from career_insights.services.onboarding import InMemoryProfileService, ProfileService
from career_insights.services.resume_checker import ResumeChecker
from career_insights.taxonomy import IndustryTaxonomy, get_default_taxonomy


@lru_cache(maxsize=1)
def get_resume_checker() -> ResumeChecker:
    dispatcher = AnalysisDispatcher(
        base_url=settings.ats_server_url,
        timeout=settings.ats_request_timeout_s,
    )
    return ResumeChecker(dispatcher=dispatcher, upload_delay_s=settings.ats_upload_delay_s)


@lru_cache(maxsize=1)
def get_profile_service() -> ProfileService:
    return InMemoryProfileService()


def get_taxonomy() -> IndustryTaxonomy:
    return get_default_taxonomy()


def current_user_id(x_user_id: str | None = Header(default=None, alias="X-User-Id")) -> str:
    value = (x_user_id or "").strip()
    return value[:200] if value else "anonymous"
