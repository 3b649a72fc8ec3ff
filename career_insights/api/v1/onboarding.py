from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from career_insights.api.deps import current_user_id, get_profile_service, get_taxonomy
from career_insights.core.rate_limit import rate_limit
from career_insights.schemas.onboarding import (
    Industry,
    OnboardingStatus,
    ProfileFormPrefill,
    ProfileUpdateRequest,
    ProfileUpdateResponse,
)
from career_insights.services.onboarding import (
    ProfileService,
    ProfileServiceError,
    ProfileValidationError,
    load_profile_prefill,
    resolve_onboarding_redirect,
    save_profile,
)
from career_insights.taxonomy import IndustryTaxonomy

router = APIRouter()


def _is_edit_mode(mode: str | None) -> bool:
    return (mode or "").strip().lower() == "edit"


@router.get("/industries", response_model=list[Industry])
async def list_industries(taxonomy: IndustryTaxonomy = Depends(get_taxonomy)):
    return taxonomy.all()


@router.get("/onboarding/status", response_model=OnboardingStatus)
async def onboarding_status(
    mode: str | None = Query(default=None),
    user_id: str = Depends(current_user_id),
    service: ProfileService = Depends(get_profile_service),
):
    return resolve_onboarding_redirect(service, user_id, edit_mode=_is_edit_mode(mode))


@router.get("/onboarding/profile", response_model=ProfileFormPrefill)
async def onboarding_profile(
    user_id: str = Depends(current_user_id),
    service: ProfileService = Depends(get_profile_service),
    taxonomy: IndustryTaxonomy = Depends(get_taxonomy),
):
    try:
        prefill = load_profile_prefill(service, taxonomy, user_id)
    except ProfileServiceError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    if prefill is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No profile found for this user.")
    return prefill


@router.put("/onboarding/profile", response_model=ProfileUpdateResponse)
@rate_limit("30/minute")
async def onboarding_update_profile(
    request: Request,
    payload: ProfileUpdateRequest,
    mode: str | None = Query(default=None),
    return_to: str | None = Query(default=None, alias="returnTo"),
    user_id: str = Depends(current_user_id),
    service: ProfileService = Depends(get_profile_service),
    taxonomy: IndustryTaxonomy = Depends(get_taxonomy),
):
    _ = request
    try:
        return save_profile(
            service,
            taxonomy,
            user_id,
            payload,
            return_to=return_to,
            edit_mode=_is_edit_mode(mode),
        )
    except ProfileValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except ProfileServiceError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
