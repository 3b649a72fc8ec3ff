from typing import Any

from fastapi import APIRouter, Body

from career_insights.schemas.insights import DashboardView
from career_insights.services.dashboard_insights import build_dashboard_view

router = APIRouter()


@router.post("/dashboard/insights", response_model=DashboardView)
async def dashboard_insights(insights: Any = Body(default=None)):
    return build_dashboard_view(insights)
