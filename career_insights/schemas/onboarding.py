from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Industry(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(min_length=1, max_length=60)
    name: str = Field(min_length=1, max_length=120)
    sub_industries: tuple[str, ...] = Field(default=(), alias="subIndustries")


class ProfileRecord(BaseModel):
    industry: str = ""
    specialization: str = ""
    years_experience: int | None = Field(default=None, ge=0, le=50)
    skills: list[str] = Field(default_factory=list)
    bio: str = ""


class OnboardingStatus(BaseModel):
    is_onboarded: bool
    redirect_to: str | None = None


class ProfileUpdateRequest(BaseModel):
    industry: str = Field(default="", max_length=60)
    sub_industry: str = Field(default="", max_length=120, alias="subIndustry")
    experience: int = Field(ge=0, le=50)
    skills: list[str] = Field(default_factory=list)
    bio: str = Field(default="", max_length=500)

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("skills", mode="before")
    @classmethod
    def _split_skills(cls, value):
        if value is None:
            return []
        if isinstance(value, str):
            value = value.split(",")
        if isinstance(value, (list, tuple)):
            return [str(item).strip() for item in value if str(item).strip()]
        return value

    @field_validator("industry", "sub_industry", "bio", mode="before")
    @classmethod
    def _strip_text(cls, value):
        if value is None:
            return ""
        return value.strip() if isinstance(value, str) else value


class ProfileUpdateResponse(BaseModel):
    message: str
    redirect_to: str
    industry: str


class ProfileFormPrefill(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    industry: str
    sub_industry: str = Field(alias="subIndustry")
    experience: int | None
    skills: list[str]
    bio: str
    specializations: list[str]
