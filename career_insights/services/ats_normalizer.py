from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from career_insights.schemas.resume_checker import NormalizedAnalysis

MATCH_KEY = "JD Match"
MISSING_KEYWORDS_KEY = "MissingKeywords"
SUMMARY_KEY = "Profile Summary"

COMPLETION_MESSAGE = "Analysis completed successfully"

_LEADING_INT_RE = re.compile(r"^[+-]?\d+")


class MalformedAnalysisResult(ValueError):
    pass


def coerce_match_score(value: Any) -> int:
    """Coerce the match field into an integer score.

    "73%" and "73" parse to 73, "73.9%" to 73. Numbers pass through
    (floats truncated). Out-of-range values are not clamped.
    """
    if isinstance(value, bool) or value is None:
        raise MalformedAnalysisResult(f"'{MATCH_KEY}' is missing or not a score")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value != value or value in (float("inf"), float("-inf")):
            raise MalformedAnalysisResult(f"'{MATCH_KEY}' is not a finite number")
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("%"):
            text = text[:-1].strip()
        match = _LEADING_INT_RE.match(text)
        if not match:
            raise MalformedAnalysisResult(f"'{MATCH_KEY}' value {value!r} is not a percentage")
        return int(match.group(0))
    raise MalformedAnalysisResult(f"'{MATCH_KEY}' has unsupported type {type(value).__name__}")


def _missing_keywords(raw: Mapping[str, Any]) -> list[str]:
    value = raw.get(MISSING_KEYWORDS_KEY)
    if value is None:
        return []
    if not isinstance(value, list):
        raise MalformedAnalysisResult(f"'{MISSING_KEYWORDS_KEY}' must be a list")
    return [item if isinstance(item, str) else str(item) for item in value]


def _summary(raw: Mapping[str, Any]) -> str:
    value = raw.get(SUMMARY_KEY)
    if not isinstance(value, str):
        raise MalformedAnalysisResult(f"'{SUMMARY_KEY}' is missing or not text")
    return value


def normalize_analysis(raw: Any) -> NormalizedAnalysis:
    if not isinstance(raw, Mapping):
        raise MalformedAnalysisResult("analysis result is not an object")

    score = coerce_match_score(raw.get(MATCH_KEY))
    summary = _summary(raw)

    # The raw result only names missing keywords, so matches stay empty.
    return NormalizedAnalysis(
        score=score,
        feedback=[
            f"Your resume is a {score}% match with the job description",
            COMPLETION_MESSAGE,
        ],
        keyword_matches=[],
        missing_keywords=_missing_keywords(raw),
        improvement_suggestions=[summary],
        summary_text=summary,
    )
