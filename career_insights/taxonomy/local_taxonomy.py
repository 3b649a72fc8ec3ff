from __future__ import annotations

import json
from pathlib import Path

from career_insights.schemas.onboarding import Industry

from .provider import IndustryTaxonomy


class LocalIndustryTaxonomy(IndustryTaxonomy):
    def __init__(self, industries_path: str | Path | None = None) -> None:
        path = Path(industries_path) if industries_path else Path(__file__).with_name("industries.json")
        self._industries = self._load_industries(path)
        self._by_id = {industry.id: industry for industry in self._industries}

    @staticmethod
    def _load_industries(path: Path) -> list[Industry]:
        with path.open("r", encoding="utf-8") as handle:
            raw = json.load(handle)
        if not isinstance(raw, list):
            raise RuntimeError(f"Invalid industry taxonomy '{path}': expected a list.")
        return [Industry.model_validate(item) for item in raw]

    def all(self) -> list[Industry]:
        return list(self._industries)

    def find(self, industry_id: str) -> Industry | None:
        return self._by_id.get((industry_id or "").strip())

    def specializations(self, industry_id: str) -> list[str]:
        industry = self.find(industry_id)
        return list(industry.sub_industries) if industry else []
