from __future__ import annotations

from career_insights.schemas.resume_checker import AnalysisRequest, IntakeErrorCode, ResumeDocument

PDF_CONTENT_TYPE = "application/pdf"

INTAKE_ERROR_MESSAGES: dict[str, str] = {
    "NoFileSelected": "Please select a PDF resume to upload",
    "InvalidFileType": "Please upload a PDF file",
    "EmptyJobDescription": "Please enter a job description",
}


class IntakeValidationError(ValueError):
    def __init__(self, code: IntakeErrorCode):
        super().__init__(INTAKE_ERROR_MESSAGES[code])
        self.code = code


def _media_type(content_type: str | None) -> str:
    return (content_type or "").split(";")[0].strip().lower()


def is_pdf_document(document: ResumeDocument) -> bool:
    return _media_type(document.content_type) == PDF_CONTENT_TYPE


def check_document_type(document: ResumeDocument) -> ResumeDocument:
    if not is_pdf_document(document):
        raise IntakeValidationError("InvalidFileType")
    return document


def validate_intake(document: ResumeDocument | None, job_description: str | None) -> AnalysisRequest:
    """Reject malformed submissions before anything touches the network.

    Checks run in a fixed order: file presence, declared media type, then
    the trimmed job description. The description is forwarded untrimmed.
    """
    if document is None:
        raise IntakeValidationError("NoFileSelected")
    check_document_type(document)
    if not (job_description or "").strip():
        raise IntakeValidationError("EmptyJobDescription")
    return AnalysisRequest(document=document, document_format="PDF", job_description=job_description)
