import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi import _rate_limit_exceeded_handler
import sentry_sdk

from career_insights.api.v1.health import router as health_router
from career_insights.api.v1.resume_checker import router as resume_checker_router
from career_insights.api.v1.onboarding import router as onboarding_router
from career_insights.api.v1.dashboard import router as dashboard_router
from career_insights.core.cors import cors_allow_origin_regex, cors_allowed_origins
from career_insights.core.rate_limit import limiter
from career_insights.core.config import settings
from career_insights.core.lifespan import lifespan

logging.basicConfig(level=settings.log_level, format="%(message)s")
if settings.sentry_dsn:
    sentry_sdk.init(dsn=settings.sentry_dsn)

app = FastAPI(title="Career Insights API", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_allowed_origins(),
    allow_origin_regex=cors_allow_origin_regex(),
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)

app.include_router(health_router, prefix="/v1", tags=["Health"])
app.include_router(resume_checker_router, prefix="/v1", tags=["Resume Checker"])
app.include_router(onboarding_router, prefix="/v1", tags=["Onboarding"])
app.include_router(dashboard_router, prefix="/v1", tags=["Dashboard"])
