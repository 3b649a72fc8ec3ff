from contextlib import asynccontextmanager
import logging

from career_insights.core.config import settings
from career_insights.core.scoring_config import get_scoring_config
from career_insights.taxonomy import get_default_taxonomy

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app):
    get_scoring_config()
    industries = get_default_taxonomy().all()
    logger.info(
        "startup ats_server_url=%s upload_delay_s=%s industries=%d",
        settings.ats_server_url,
        settings.ats_upload_delay_s,
        len(industries),
    )
    yield
    logger.info("shutdown")
