from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile, status

from career_insights.api.deps import get_resume_checker
from career_insights.core.config import settings
from career_insights.core.rate_limit import rate_limit
from career_insights.schemas.resume_checker import AnalysisResponse, ResumeDocument
from career_insights.services.ats_intake import IntakeValidationError
from career_insights.services.ats_normalizer import MalformedAnalysisResult
from career_insights.services.resume_checker import NoticeLog, ResumeChecker

router = APIRouter()

MAX_FILENAME_CHARS = 255
MAX_CONTENT_TYPE_CHARS = 120


def _clip_filename(filename: str) -> str:
    if len(filename) <= MAX_FILENAME_CHARS:
        return filename
    stem, dot, suffix = filename.rpartition(".")
    if not dot or len(suffix) >= MAX_FILENAME_CHARS - 1:
        return filename[:MAX_FILENAME_CHARS]
    return stem[: MAX_FILENAME_CHARS - len(suffix) - 1] + "." + suffix


async def _read_upload(file: UploadFile) -> bytes:
    max_bytes = settings.ats_max_upload_bytes
    chunks: list[bytes] = []
    total = 0
    while True:
        chunk = await file.read(1024 * 64)
        if not chunk:
            break
        total += len(chunk)
        if total > max_bytes:
            raise HTTPException(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                detail=f"File too large. Maximum allowed size is {max_bytes // (1024 * 1024)} MB.",
            )
        chunks.append(chunk)
    return b"".join(chunks)


@router.post("/resume-checker/analyze", response_model=AnalysisResponse)
@rate_limit("20/minute")
async def analyze_resume(
    request: Request,
    resume: UploadFile | None = File(default=None),
    job_description: str = Form(default="", alias="jobDescription"),
    checker: ResumeChecker = Depends(get_resume_checker),
):
    _ = request
    document = None
    if resume is not None and resume.filename:
        document = ResumeDocument(
            filename=_clip_filename(resume.filename),
            content_type=(resume.content_type or "")[:MAX_CONTENT_TYPE_CHARS],
            content=await _read_upload(resume),
        )

    notices = NoticeLog()
    session = checker.open_session(notifier=notices)
    session.prepare(document, job_description)
    try:
        state = await session.submit()
    finally:
        session.close()

    error = session.last_error
    if isinstance(error, IntakeValidationError):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"code": error.code, "message": str(error)},
        )
    if isinstance(error, MalformedAnalysisResult):
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={"code": "MalformedAnalysisResult", "message": f"Failed to analyze resume: {error}"},
        )

    return AnalysisResponse(
        analysis=state.result,
        source=state.source,
        phase=state.phase.value,
        notices=notices.notices,
    )
