from __future__ import annotations

import logging
from typing import Any

import httpx

from career_insights.core.scoring_config import get_scoring_value
from career_insights.schemas.resume_checker import AnalysisRequest

logger = logging.getLogger(__name__)


class AtsTransportError(RuntimeError):
    def __init__(self, message: str, *, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


def upload_url(base_url: str) -> str:
    path = str(get_scoring_value("remote.upload_path", "/upload") or "/upload")
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


async def request_remote_analysis(
    request: AnalysisRequest,
    *,
    base_url: str,
    timeout: float,
    transport: httpx.AsyncBaseTransport | None = None,
) -> dict[str, Any]:
    """Send one multipart analyze call to the ATS service and return its JSON body.

    Every failure mode (bad URL, connection, timeout, non-success status,
    unparsable or non-object body) is raised as AtsTransportError.
    """
    resume_field = str(get_scoring_value("remote.resume_field", "resume"))
    jd_field = str(get_scoring_value("remote.job_description_field", "jobDescription"))
    document = request.document
    files = {resume_field: (document.filename or "resume.pdf", document.content, "application/pdf")}
    data = {jd_field: request.job_description}
    url = upload_url(base_url)

    try:
        async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
            response = await client.post(url, files=files, data=data)
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        raise AtsTransportError(f"ATS server request failed: {exc}") from exc

    if not response.is_success:
        raise AtsTransportError(
            f"ATS server responded with status {response.status_code}",
            status_code=response.status_code,
        )

    try:
        body = response.json()
    except ValueError as exc:
        raise AtsTransportError("ATS server returned a non-JSON body", status_code=response.status_code) from exc

    if not isinstance(body, dict):
        raise AtsTransportError("ATS server returned an unexpected JSON shape", status_code=response.status_code)

    logger.debug("ats_remote_ok url=%s status=%s", url, response.status_code)
    return body
