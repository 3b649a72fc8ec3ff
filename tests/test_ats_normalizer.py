import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from career_insights.services.ats_normalizer import (  # noqa: E402
    MalformedAnalysisResult,
    coerce_match_score,
    normalize_analysis,
)


class MatchScoreCoercionTests(unittest.TestCase):
    def test_percentage_string_is_stripped(self):
        self.assertEqual(coerce_match_score("73%"), 73)
        self.assertEqual(coerce_match_score(" 88 % "), 88)
        self.assertEqual(coerce_match_score("73.9%"), 73)

    def test_plain_numeric_string(self):
        self.assertEqual(coerce_match_score("64"), 64)

    def test_numbers_pass_through(self):
        self.assertEqual(coerce_match_score(42), 42)
        self.assertEqual(coerce_match_score(42.8), 42)

    def test_out_of_range_values_are_not_clamped(self):
        self.assertEqual(coerce_match_score("140%"), 140)
        self.assertEqual(coerce_match_score(-5), -5)

    def test_uncoercible_values_raise(self):
        for value in (None, True, "n/a", "%", [], {"value": 3}, float("nan")):
            with self.subTest(value=value):
                with self.assertRaises(MalformedAnalysisResult):
                    coerce_match_score(value)


class NormalizeAnalysisTests(unittest.TestCase):
    def test_remote_shape(self):
        analysis = normalize_analysis(
            {"JD Match": "88%", "MissingKeywords": ["Kubernetes"], "Profile Summary": "Strong match."}
        )
        self.assertEqual(analysis.score, 88)
        self.assertEqual(analysis.missing_keywords, ["Kubernetes"])
        self.assertEqual(analysis.summary_text, "Strong match.")
        self.assertEqual(analysis.improvement_suggestions, ["Strong match."])
        self.assertEqual(analysis.keyword_matches, [])
        self.assertEqual(
            analysis.feedback,
            [
                "Your resume is a 88% match with the job description",
                "Analysis completed successfully",
            ],
        )

    def test_numeric_score(self):
        analysis = normalize_analysis({"JD Match": 42, "MissingKeywords": [], "Profile Summary": "ok"})
        self.assertEqual(analysis.score, 42)

    def test_improvement_suggestions_mirror_summary(self):
        summary = "Add Terraform and quantify migration outcomes."
        analysis = normalize_analysis({"JD Match": "51%", "Profile Summary": summary})
        self.assertEqual(analysis.improvement_suggestions, [analysis.summary_text])
        self.assertEqual(analysis.summary_text, summary)

    def test_missing_keywords_default_to_empty(self):
        analysis = normalize_analysis({"JD Match": "70%", "Profile Summary": "fine"})
        self.assertEqual(analysis.missing_keywords, [])
        analysis = normalize_analysis({"JD Match": "70%", "MissingKeywords": None, "Profile Summary": "fine"})
        self.assertEqual(analysis.missing_keywords, [])

    def test_missing_keywords_keep_order_and_duplicates(self):
        analysis = normalize_analysis(
            {"JD Match": "70%", "MissingKeywords": ["SQL", "Git", "SQL"], "Profile Summary": "fine"}
        )
        self.assertEqual(analysis.missing_keywords, ["SQL", "Git", "SQL"])

    def test_malformed_results(self):
        cases = [
            None,
            ["JD Match", "70%"],
            {"MissingKeywords": [], "Profile Summary": "no score"},
            {"JD Match": "70%", "MissingKeywords": []},
            {"JD Match": "70%", "Profile Summary": 12},
            {"JD Match": "70%", "MissingKeywords": "SQL, Git", "Profile Summary": "x"},
        ]
        for raw in cases:
            with self.subTest(raw=raw):
                with self.assertRaises(MalformedAnalysisResult):
                    normalize_analysis(raw)


if __name__ == "__main__":
    unittest.main()
