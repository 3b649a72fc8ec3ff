from __future__ import annotations

import random
from typing import Any, Sequence

from career_insights.core.scoring_config import get_scoring_value

DEFAULT_VOCABULARY: tuple[str, ...] = (
    "React", "JavaScript", "TypeScript", "Node.js", "Express", "Next.js",
    "API", "frontend", "backend", "full-stack", "responsive", "UI/UX",
    "database", "SQL", "NoSQL", "MongoDB", "testing", "Git", "Agile",
)
DEFAULT_SCORE_RANGE = (65, 85)
DEFAULT_MISSING_COUNT_RANGE = (3, 7)
DEFAULT_SUMMARY_KEYWORD_COUNT = 3

SUMMARY_TEMPLATE = (
    "Based on your resume, you appear to have experience with several key skills mentioned in the job "
    "description. However, to increase your chances of getting past the ATS, consider adding more specific "
    "details about {keywords} and other technical skills mentioned in the job posting. Quantify your "
    "achievements with metrics where possible, and tailor your resume to highlight the most relevant "
    "experience for this specific position."
)


def _range_setting(path: str, default: tuple[int, int]) -> tuple[int, int]:
    value = get_scoring_value(path, None)
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        return default
    low, high = int(value[0]), int(value[1])
    if high <= low:
        raise RuntimeError(f"Invalid scoring config '{path}': expected [low, high) with high > low.")
    return low, high


class MockScorer:
    """Fabricates a plausible analysis when the remote ATS service is unavailable.

    Output uses the remote wire keys so both producers feed the same
    normalizer. All randomness flows through ``rng``; a seeded
    ``random.Random`` makes the result reproducible.
    """

    def __init__(
        self,
        vocabulary: Sequence[str] | None = None,
        score_range: tuple[int, int] | None = None,
        missing_count_range: tuple[int, int] | None = None,
        summary_keyword_count: int | None = None,
    ) -> None:
        self.vocabulary = tuple(vocabulary or get_scoring_value("mock_scorer.vocabulary", None) or DEFAULT_VOCABULARY)
        self.score_range = score_range or _range_setting("mock_scorer.score_range", DEFAULT_SCORE_RANGE)
        self.missing_count_range = missing_count_range or _range_setting(
            "mock_scorer.missing_keyword_count_range", DEFAULT_MISSING_COUNT_RANGE
        )
        self.summary_keyword_count = int(
            summary_keyword_count
            or get_scoring_value("mock_scorer.summary_keyword_count", DEFAULT_SUMMARY_KEYWORD_COUNT)
        )
        if self.missing_count_range[1] - 1 > len(self.vocabulary):
            raise RuntimeError("Mock scorer vocabulary is smaller than the largest missing-keyword count.")

    def generate(self, job_description: str, rng: random.Random) -> dict[str, Any]:
        base_score = rng.randrange(*self.score_range)
        missing_count = rng.randrange(*self.missing_count_range)
        missing_keywords = rng.sample(self.vocabulary, missing_count)
        summary = SUMMARY_TEMPLATE.format(keywords=", ".join(missing_keywords[: self.summary_keyword_count]))
        return {
            "JD Match": f"{base_score}%",
            "MissingKeywords": missing_keywords,
            "Profile Summary": summary,
        }


def generate_mock_analysis(job_description: str, rng: random.Random | None = None) -> dict[str, Any]:
    return MockScorer().generate(job_description, rng or random.Random())
