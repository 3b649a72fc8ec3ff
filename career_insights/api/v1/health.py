from fastapi import APIRouter

from career_insights.core.config import settings

router = APIRouter()

@router.get("/health", summary="Health Check", description="Check the health status of the application.")
async def health_check():
    return {"status": "healthy", "ats_server_url": settings.ats_server_url}
