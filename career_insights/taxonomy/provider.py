from __future__ import annotations

from typing import Protocol

from career_insights.schemas.onboarding import Industry


class IndustryTaxonomy(Protocol):
    def all(self) -> list[Industry]:
        """Return every industry in display order."""

    def find(self, industry_id: str) -> Industry | None:
        """Return the industry with this ID, if any."""

    def specializations(self, industry_id: str) -> list[str]:
        """Return the ordered specialization names of an industry."""
