from __future__ import annotations

import logging
import threading
from typing import Protocol

from career_insights.core.config import settings
from career_insights.schemas.onboarding import (
    OnboardingStatus,
    ProfileFormPrefill,
    ProfileRecord,
    ProfileUpdateRequest,
    ProfileUpdateResponse,
)
from career_insights.taxonomy import IndustryTaxonomy

logger = logging.getLogger(__name__)

DASHBOARD_PATH = "/dashboard"
UPDATE_FAILED_MESSAGE = "Failed to update profile. Please try again."
LOAD_FAILED_MESSAGE = "Failed to load your profile data"


class ProfileValidationError(ValueError):
    pass


class ProfileServiceError(RuntimeError):
    pass


class ProfileService(Protocol):
    """User-profile collaborator. Storage lives outside this service."""

    def get_onboarding_status(self, user_id: str) -> bool:
        ...

    def get_profile_for_edit(self, user_id: str) -> ProfileRecord | None:
        ...

    def update_profile(self, user_id: str, record: ProfileRecord, return_to: str) -> str | None:
        """Persist the record and optionally return a redirect target."""
        ...


class InMemoryProfileService:
    def __init__(self) -> None:
        self._profiles: dict[str, ProfileRecord] = {}
        self._lock = threading.Lock()

    def get_onboarding_status(self, user_id: str) -> bool:
        with self._lock:
            record = self._profiles.get(user_id)
        return bool(record and record.industry)

    def get_profile_for_edit(self, user_id: str) -> ProfileRecord | None:
        with self._lock:
            record = self._profiles.get(user_id)
        return record.model_copy(deep=True) if record else None

    def update_profile(self, user_id: str, record: ProfileRecord, return_to: str) -> str | None:
        with self._lock:
            self._profiles[user_id] = record.model_copy(deep=True)
        return return_to

    def clear(self) -> None:
        with self._lock:
            self._profiles.clear()


def format_industry_slug(industry: str, specialization: str) -> str:
    return f"{industry}-{specialization.lower().replace(' ', '-')}"


def split_industry_slug(slug: str, taxonomy: IndustryTaxonomy) -> tuple[str, str]:
    """Map a stored "tech-software-development" slug back to (industry id, specialization name)."""
    for industry in taxonomy.all():
        prefix = f"{industry.id}-"
        if not slug.startswith(prefix):
            continue
        for sub in industry.sub_industries:
            if format_industry_slug(industry.id, sub) == slug:
                return industry.id, sub
    return slug, ""


def resolve_return_to(value: str | None) -> str:
    candidate = (value or "").strip()
    # Only site-relative paths; "//host" would leave the site.
    if not candidate.startswith("/") or candidate.startswith("//") or "\\" in candidate:
        return settings.onboarding_default_return_to
    return candidate


def resolve_onboarding_redirect(
    service: ProfileService,
    user_id: str,
    *,
    edit_mode: bool,
) -> OnboardingStatus:
    if edit_mode:
        return OnboardingStatus(is_onboarded=False, redirect_to=None)
    try:
        is_onboarded = service.get_onboarding_status(user_id)
    except Exception as exc:
        logger.error("onboarding_status_check_failed user=%s error=%s", user_id, exc)
        return OnboardingStatus(is_onboarded=False, redirect_to=None)
    return OnboardingStatus(is_onboarded=is_onboarded, redirect_to=DASHBOARD_PATH if is_onboarded else None)


def build_form_prefill(record: ProfileRecord, taxonomy: IndustryTaxonomy) -> ProfileFormPrefill:
    industry_id, specialization = split_industry_slug(record.industry, taxonomy)
    if not specialization:
        industry_id, specialization = record.industry, record.specialization
    return ProfileFormPrefill(
        industry=industry_id,
        sub_industry=specialization,
        experience=record.years_experience,
        skills=list(record.skills),
        bio=record.bio,
        specializations=taxonomy.specializations(industry_id),
    )


def load_profile_prefill(
    service: ProfileService,
    taxonomy: IndustryTaxonomy,
    user_id: str,
) -> ProfileFormPrefill | None:
    try:
        record = service.get_profile_for_edit(user_id)
    except Exception as exc:
        logger.error("onboarding_profile_load_failed user=%s error=%s", user_id, exc)
        raise ProfileServiceError(LOAD_FAILED_MESSAGE) from exc
    if record is None:
        return None
    return build_form_prefill(record, taxonomy)


def validate_profile_update(payload: ProfileUpdateRequest, taxonomy: IndustryTaxonomy) -> ProfileRecord:
    if not payload.industry or not payload.sub_industry:
        raise ProfileValidationError("Please select both industry and specialization")
    industry = taxonomy.find(payload.industry)
    if industry is None:
        raise ProfileValidationError(f"Unknown industry '{payload.industry}'.")
    if payload.sub_industry not in industry.sub_industries:
        raise ProfileValidationError(
            f"'{payload.sub_industry}' is not a specialization of {industry.name}."
        )
    return ProfileRecord(
        industry=format_industry_slug(industry.id, payload.sub_industry),
        specialization=payload.sub_industry,
        years_experience=payload.experience,
        skills=list(payload.skills),
        bio=payload.bio,
    )


def save_profile(
    service: ProfileService,
    taxonomy: IndustryTaxonomy,
    user_id: str,
    payload: ProfileUpdateRequest,
    *,
    return_to: str | None,
    edit_mode: bool,
) -> ProfileUpdateResponse:
    record = validate_profile_update(payload, taxonomy)
    target = resolve_return_to(return_to)
    try:
        redirect_to = service.update_profile(user_id, record, target)
    except Exception as exc:
        logger.error("onboarding_profile_update_failed user=%s error=%s", user_id, exc)
        raise ProfileServiceError(UPDATE_FAILED_MESSAGE) from exc

    message = "Profile updated successfully!" if edit_mode else "Profile completed successfully!"
    logger.info("onboarding_profile_saved user=%s industry=%s", user_id, record.industry)
    return ProfileUpdateResponse(
        message=message,
        redirect_to=resolve_return_to(redirect_to) if redirect_to else target,
        industry=record.industry,
    )
