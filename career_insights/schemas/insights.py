from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

Tone = Literal["green", "yellow", "red", "gray"]
OutlookIcon = Literal["trending-up", "line-chart", "trending-down"]


class SalaryChartRow(BaseModel):
    name: str
    min: float = 0
    max: float = 0
    median: float = 0


class OutlookBadge(BaseModel):
    icon: OutlookIcon
    tone: Tone


class DashboardView(BaseModel):
    available: bool = True
    message: str | None = None
    salary_chart: list[SalaryChartRow] = Field(default_factory=list)
    growth_rate: float = 0
    growth_rate_label: str = "0.0%"
    demand_level: str = "Unknown"
    demand_tone: Tone = "gray"
    market_outlook: str = "Unknown"
    outlook: OutlookBadge = Field(default_factory=lambda: OutlookBadge(icon="line-chart", tone="gray"))
    top_skills: list[str] = Field(default_factory=list)
    key_trends: list[str] = Field(default_factory=list)
    recommended_skills: list[str] = Field(default_factory=list)
    last_updated: str = "Unknown"
    next_update: str = "Unknown"
