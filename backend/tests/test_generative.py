"""
Unit tests for the generative recommender, with the OpenAI endpoint
stubbed by an httpx MockTransport.
"""

import asyncio
import json
import unittest

import httpx

from movie_recommender.config import Settings
from movie_recommender.recommender.errors import (
    ConfigError,
    ErrorKind,
    GenerationTimeoutError,
    UpstreamError,
)
from movie_recommender.recommender.generative import GenerativeRecommender

MOVIES = "Heat, Ronin, Collateral, Drive, Sicario"


def make_settings(api_key="sk-test-1234567890", timeout=15.0):
    settings = Settings()
    settings.openai_api_key = api_key
    settings.openai_base_url = "https://api.openai.test/v1"
    settings.openai_model = "gpt-3.5-turbo"
    settings.openai_temperature = 0.7
    settings.openai_timeout_seconds = timeout
    settings.expected_title_count = 5
    return settings


def completion(content):
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


class RecordingHandler:
    """MockTransport handler that records requests and replies with a fixed response."""

    def __init__(self, response=None, exc=None):
        self.response = response
        self.exc = exc
        self.requests = []

    def __call__(self, request):
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        return self.response


class TestGenerativeFetch(unittest.IsolatedAsyncioTestCase):

    def make(self, handler, **settings_kwargs):
        return GenerativeRecommender(
            make_settings(**settings_kwargs),
            transport=httpx.MockTransport(handler)
        )

    async def test_success_returns_trimmed_text(self):
        handler = RecordingHandler(httpx.Response(200, json=completion(f"  {MOVIES}\n")))
        outcome = await self.make(handler).fetch("gritty crime")

        self.assertTrue(outcome.ok)
        self.assertEqual(outcome.text, MOVIES)
        self.assertIsNone(outcome.error)

    async def test_request_shape(self):
        handler = RecordingHandler(httpx.Response(200, json=completion(MOVIES)))
        await self.make(handler).fetch("gritty crime")

        self.assertEqual(len(handler.requests), 1)
        request = handler.requests[0]
        self.assertEqual(request.method, "POST")
        self.assertEqual(str(request.url), "https://api.openai.test/v1/chat/completions")
        self.assertEqual(request.headers["Authorization"], "Bearer sk-test-1234567890")

        body = json.loads(request.content)
        self.assertEqual(body["model"], "gpt-3.5-turbo")
        self.assertEqual(body["temperature"], 0.7)
        self.assertEqual(len(body["messages"]), 1)
        prompt = body["messages"][0]["content"]
        self.assertIn("gritty crime", prompt)
        self.assertIn("exactly 5 movies", prompt)
        self.assertIn("comma-separated", prompt)

    async def test_missing_key_is_config_error_without_request(self):
        handler = RecordingHandler(httpx.Response(200, json=completion(MOVIES)))
        outcome = await self.make(handler, api_key=None).fetch("anything")

        self.assertFalse(outcome.ok)
        self.assertIsInstance(outcome.error, ConfigError)
        self.assertEqual(outcome.error.kind, ErrorKind.CONFIG)
        self.assertEqual(handler.requests, [])

    async def test_embedded_error_on_success_status(self):
        handler = RecordingHandler(httpx.Response(200, json={"error": {"message": "quota exceeded"}}))
        outcome = await self.make(handler).fetch("anything")

        self.assertIsInstance(outcome.error, UpstreamError)
        self.assertIn("quota exceeded", outcome.error.message)
        self.assertEqual(outcome.error.status_code, 200)

    async def test_empty_content_is_upstream_error(self):
        for payload in (completion(""), completion("   "), {"choices": []}, {"id": "x"}):
            handler = RecordingHandler(httpx.Response(200, json=payload))
            outcome = await self.make(handler).fetch("anything")
            self.assertIsInstance(outcome.error, UpstreamError, payload)

    async def test_error_status_is_upstream_error(self):
        handler = RecordingHandler(
            httpx.Response(401, json={"error": {"message": "Incorrect API key provided"}})
        )
        outcome = await self.make(handler).fetch("anything")

        self.assertIsInstance(outcome.error, UpstreamError)
        self.assertEqual(outcome.error.status_code, 401)
        self.assertIn("Incorrect API key", outcome.error.message)

    async def test_non_json_body_is_upstream_error(self):
        handler = RecordingHandler(httpx.Response(200, text="<html>gateway</html>"))
        outcome = await self.make(handler).fetch("anything")

        self.assertIsInstance(outcome.error, UpstreamError)

    async def test_transport_timeout_is_timeout_error(self):
        handler = RecordingHandler(exc=httpx.ReadTimeout("timed out"))
        outcome = await self.make(handler).fetch("anything")

        self.assertIsInstance(outcome.error, GenerationTimeoutError)
        self.assertEqual(outcome.error.kind, ErrorKind.TIMEOUT)

    async def test_slow_upstream_is_cut_off(self):
        async def slow_handler(request):
            await asyncio.sleep(1)
            return httpx.Response(200, json=completion(MOVIES))

        recommender = GenerativeRecommender(
            make_settings(timeout=0.05),
            transport=httpx.MockTransport(slow_handler)
        )
        outcome = await recommender.fetch("anything")

        self.assertIsInstance(outcome.error, GenerationTimeoutError)

    async def test_connection_error_is_upstream_error(self):
        handler = RecordingHandler(exc=httpx.ConnectError("connection refused"))
        outcome = await self.make(handler).fetch("anything")

        self.assertIsInstance(outcome.error, UpstreamError)

    async def test_single_attempt(self):
        handler = RecordingHandler(httpx.Response(503, json={"error": {"message": "overloaded"}}))
        await self.make(handler).fetch("anything")

        self.assertEqual(len(handler.requests), 1)


class TestGenerativeDiagnose(unittest.IsolatedAsyncioTestCase):

    def make(self, handler, **settings_kwargs):
        return GenerativeRecommender(
            make_settings(**settings_kwargs),
            transport=httpx.MockTransport(handler)
        )

    async def test_success(self):
        handler = RecordingHandler(httpx.Response(200, json=completion("Jaws, Alien, Up")))
        report = await self.make(handler).diagnose()

        self.assertEqual(report.status_code, 200)
        self.assertEqual(report.body["status"], "SUCCESS")
        self.assertEqual(report.body["result"], "Jaws, Alien, Up")
        self.assertTrue(report.body["apiKeyValid"])
        prompt = json.loads(handler.requests[0].content)["messages"][0]["content"]
        self.assertEqual(prompt, "Name 3 famous movies. Return only names separated by commas.")

    async def test_embedded_error(self):
        error = {"message": "model not found", "type": "invalid_request_error"}
        handler = RecordingHandler(httpx.Response(200, json={"error": error}))
        report = await self.make(handler).diagnose()

        self.assertEqual(report.status_code, 400)
        self.assertEqual(report.body["message"], "model not found")
        self.assertEqual(report.body["details"], error)

    async def test_no_content(self):
        handler = RecordingHandler(httpx.Response(200, json={"choices": []}))
        report = await self.make(handler).diagnose()

        self.assertEqual(report.status_code, 400)
        self.assertEqual(report.body["message"], "No content in response")
        self.assertEqual(report.body["response"], {"choices": []})

    async def test_upstream_status_reported(self):
        error_body = {"error": {"message": "Incorrect API key provided"}}
        handler = RecordingHandler(httpx.Response(401, json=error_body))
        report = await self.make(handler).diagnose()

        self.assertEqual(report.status_code, 500)
        self.assertEqual(report.body["status"], "ERROR")
        self.assertEqual(report.body["statusCode"], 401)
        self.assertEqual(report.body["errorData"], error_body)
        self.assertIn("platform.openai.com", report.body["helpText"])

    async def test_missing_key(self):
        handler = RecordingHandler(httpx.Response(200, json=completion(MOVIES)))
        report = await self.make(handler, api_key=None).diagnose()

        self.assertEqual(report.status_code, 500)
        self.assertEqual(report.body["message"], "OPENAI_API_KEY not configured")
        self.assertIsNone(report.body["statusCode"])
        self.assertEqual(handler.requests, [])


if __name__ == '__main__':
    unittest.main()
