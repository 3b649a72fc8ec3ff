import random
import sys
import unittest
from pathlib import Path

import httpx

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from career_insights.schemas.resume_checker import AnalysisRequest, ResumeDocument  # noqa: E402
from career_insights.services.ats_client import AtsTransportError, request_remote_analysis  # noqa: E402
from career_insights.services.ats_dispatcher import AnalysisDispatcher  # noqa: E402
from career_insights.services.ats_mock import DEFAULT_VOCABULARY  # noqa: E402

REMOTE_BODY = {"JD Match": "88%", "MissingKeywords": ["Kubernetes"], "Profile Summary": "Strong match."}


def _request() -> AnalysisRequest:
    return AnalysisRequest(
        document=ResumeDocument(filename="cv.pdf", content_type="application/pdf", content=b"%PDF-1.7 test"),
        job_description="Platform engineer with Kubernetes",
    )


def _transport(responder):
    calls: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return responder(request)

    return httpx.MockTransport(handler), calls


def _connection_refused(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("connection refused", request=request)


class RemoteClientTests(unittest.IsolatedAsyncioTestCase):
    async def test_posts_multipart_to_upload_endpoint(self):
        transport, calls = _transport(lambda request: httpx.Response(200, json=REMOTE_BODY))
        body = await request_remote_analysis(
            _request(), base_url="http://ats.test/", timeout=5, transport=transport
        )

        self.assertEqual(body, REMOTE_BODY)
        self.assertEqual(len(calls), 1)
        sent = calls[0]
        self.assertEqual(sent.method, "POST")
        self.assertEqual(str(sent.url), "http://ats.test/upload")
        self.assertTrue(sent.headers["content-type"].startswith("multipart/form-data"))
        self.assertIn(b'name="resume"; filename="cv.pdf"', sent.content)
        self.assertIn(b'name="jobDescription"', sent.content)
        self.assertIn(b"Platform engineer with Kubernetes", sent.content)
        self.assertIn(b"%PDF-1.7 test", sent.content)

    async def test_failures_raise_transport_error(self):
        responders = {
            "status": lambda request: httpx.Response(503, text="down"),
            "network": _connection_refused,
            "not_json": lambda request: httpx.Response(200, text="<html>oops</html>"),
            "not_object": lambda request: httpx.Response(200, json=["88%"]),
        }
        for name, responder in responders.items():
            with self.subTest(case=name):
                transport, calls = _transport(responder)
                with self.assertRaises(AtsTransportError):
                    await request_remote_analysis(_request(), base_url="http://ats.test", timeout=5, transport=transport)
                self.assertEqual(len(calls), 1)


class AnalysisDispatcherTests(unittest.IsolatedAsyncioTestCase):
    async def test_remote_success(self):
        transport, calls = _transport(lambda request: httpx.Response(200, json=REMOTE_BODY))
        dispatcher = AnalysisDispatcher(base_url="http://ats.test", timeout=5, transport=transport)

        outcome = await dispatcher.dispatch(_request())

        self.assertEqual(outcome.source, "remote")
        self.assertFalse(outcome.used_fallback)
        self.assertEqual(outcome.raw, REMOTE_BODY)
        self.assertIsNone(outcome.error)
        self.assertEqual(len(calls), 1)

    async def test_unreachable_remote_falls_back_once(self):
        transport, calls = _transport(_connection_refused)
        dispatcher = AnalysisDispatcher(
            base_url="http://ats.test", timeout=5, rng=random.Random(7), transport=transport
        )

        with self.assertLogs("career_insights.services.ats_dispatcher", level="WARNING"):
            outcome = await dispatcher.dispatch(_request())

        self.assertEqual(len(calls), 1)
        self.assertEqual(outcome.source, "mock")
        self.assertTrue(outcome.used_fallback)
        self.assertIn("connection refused", outcome.error)
        score = int(outcome.raw["JD Match"].rstrip("%"))
        self.assertTrue(65 <= score <= 84)
        self.assertTrue(3 <= len(outcome.raw["MissingKeywords"]) <= 6)
        self.assertTrue(set(outcome.raw["MissingKeywords"]).issubset(DEFAULT_VOCABULARY))

    async def test_invalid_server_url_falls_back(self):
        transport, calls = _transport(lambda request: httpx.Response(200, json=REMOTE_BODY))
        dispatcher = AnalysisDispatcher(
            base_url="http://ats.test:notaport", timeout=5, rng=random.Random(7), transport=transport
        )

        with self.assertLogs("career_insights.services.ats_dispatcher", level="WARNING"):
            outcome = await dispatcher.dispatch(_request())

        self.assertEqual(calls, [])
        self.assertEqual(outcome.source, "mock")
        self.assertTrue(outcome.used_fallback)

    async def test_error_status_falls_back(self):
        transport, calls = _transport(lambda request: httpx.Response(500, json={"error": "boom"}))
        dispatcher = AnalysisDispatcher(base_url="http://ats.test", timeout=5, transport=transport)

        outcome = await dispatcher.dispatch(_request())

        self.assertEqual(outcome.source, "mock")
        self.assertEqual(len(calls), 1)

    async def test_seeded_fallback_is_reproducible(self):
        outcomes = []
        for _ in range(2):
            transport, _calls = _transport(_connection_refused)
            dispatcher = AnalysisDispatcher(
                base_url="http://ats.test", timeout=5, rng=random.Random(2024), transport=transport
            )
            outcomes.append(await dispatcher.dispatch(_request()))
        self.assertEqual(outcomes[0].raw, outcomes[1].raw)


if __name__ == "__main__":
    unittest.main()
