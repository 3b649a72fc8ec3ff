from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

DocumentFormat = Literal["PDF"]
AnalysisSource = Literal["remote", "mock"]
NoticeLevel = Literal["success", "info", "error"]
PhaseName = Literal["idle", "uploading", "analyzing", "done", "failed"]
IntakeErrorCode = Literal["NoFileSelected", "InvalidFileType", "EmptyJobDescription"]


class ResumeDocument(BaseModel):
    model_config = ConfigDict(frozen=True)

    filename: str = Field(default="resume.pdf", max_length=255)
    content_type: str = Field(default="", max_length=120)
    content: bytes = b""

    @property
    def size_bytes(self) -> int:
        return len(self.content)

    @property
    def size_label(self) -> str:
        return f"{self.size_bytes / 1024 / 1024:.2f} MB"


class AnalysisRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    document: ResumeDocument
    document_format: DocumentFormat = "PDF"
    job_description: str = Field(min_length=1)


class NormalizedAnalysis(BaseModel):
    model_config = ConfigDict(frozen=True)

    score: int
    feedback: list[str]
    keyword_matches: list[str] = Field(default_factory=list)
    missing_keywords: list[str] = Field(default_factory=list)
    improvement_suggestions: list[str]
    summary_text: str


class Notice(BaseModel):
    model_config = ConfigDict(frozen=True)

    level: NoticeLevel
    message: str


class PhaseProgress(BaseModel):
    label: str
    step: int = Field(ge=0, le=2)
    total_steps: int = 2
    percent: int = Field(ge=0, le=100)


class AnalysisResponse(BaseModel):
    analysis: NormalizedAnalysis | None
    source: AnalysisSource | None
    phase: PhaseName
    notices: list[Notice]


class AnalysisErrorDetail(BaseModel):
    code: str
    message: str
