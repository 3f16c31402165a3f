"""Shared fixtures for the test suite."""

import pytest

from career_gateway.config import Settings
from career_gateway.serving.gemini import AttemptResult


MODELS = ("model-a", "model-b", "model-c")


class FakeTransport:
    """
    Scripted stand-in for GeminiClient.

    respond(model, call_index) returns the AttemptResult for the n-th call
    made for that model. Every call is recorded.
    """

    def __init__(self, respond):
        self.respond = respond
        self.calls: list[tuple[str, str]] = []

    async def try_model(self, model: str, prompt: str) -> AttemptResult:
        n = sum(1 for m, _ in self.calls if m == model)
        self.calls.append((model, prompt))
        return self.respond(model, n)

    def models_called(self) -> list[str]:
        return [m for m, _ in self.calls]


def ok_result(model: str, text: str = "1. Data Scientist - you like numbers.") -> AttemptResult:
    return AttemptResult(
        ok=True,
        status=200,
        body={"candidates": [{"content": {"parts": [{"text": text}]}}]},
        url=f"https://example.test/v1/models/{model}:generateContent",
    )


def error_result(model: str, status: int) -> AttemptResult:
    return AttemptResult(
        ok=False,
        status=status,
        body={"error": {"code": status, "message": "nope"}},
        url=f"https://example.test/v1/models/{model}:generateContent",
    )


class SleepRecorder:
    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, seconds: float):
        self.delays.append(seconds)


@pytest.fixture
def sleeper():
    return SleepRecorder()


@pytest.fixture
def settings():
    return Settings(
        api_key="test-key",
        model_candidates=MODELS,
        api_base="https://example.test",
        api_versions=("v1", "v1beta"),
        static_dir="does-not-exist",
    )
