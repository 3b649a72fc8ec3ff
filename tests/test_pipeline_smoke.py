import sys
import unittest
from pathlib import Path

from fastapi.testclient import TestClient

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import career_insights.main  # noqa: E402
from career_insights.core.scoring_config import get_scoring_value  # noqa: E402


class PipelineSmokeTests(unittest.TestCase):
    def test_safe_imports_and_scoring_config_lookup(self):
        self.assertEqual(get_scoring_value("mock_scorer.summary_keyword_count"), 3)

    def test_health_with_lifespan(self):
        with TestClient(career_insights.main.app) as client:
            response = client.get("/v1/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "healthy")


if __name__ == "__main__":
    unittest.main()
