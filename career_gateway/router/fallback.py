"""
Model-fallback orchestration.

Walks the model candidates in priority order, retrying each according to the
per-status policy, and turns the first successful response into text.
Upstream failures never raise out of here; callers branch on
OrchestrationResult.ok.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import Protocol

from ..serving.extract import extract_text
from ..serving.gemini import AttemptResult
from .policy import Action, decide

logger = logging.getLogger(__name__)

MAX_RETRIES = 3
EXHAUSTED_REASON = "All model attempts failed"


class Transport(Protocol):
    async def try_model(self, model: str, prompt: str) -> AttemptResult: ...


@dataclass(frozen=True)
class OrchestrationResult:
    ok: bool
    model_used: str | None = None
    endpoint_used: str | None = None
    text: str | None = None
    raw_body: dict | None = None
    reason: str | None = None
    attempts: int = 0

    @classmethod
    def success(cls, model: str, url: str | None, text: str, body: dict, attempts: int):
        return cls(
            ok=True,
            model_used=model,
            endpoint_used=url,
            text=text,
            raw_body=body,
            attempts=attempts,
        )

    @classmethod
    def failure(cls, reason: str, attempts: int):
        return cls(ok=False, reason=reason, attempts=attempts)


class ModelFallbackOrchestrator:
    """
    Sequential model x retry state machine.

    Holds no per-request state: every generate() call starts from the first
    candidate with fresh counters, so concurrent requests are independent.
    """

    def __init__(
        self,
        transport: Transport,
        model_candidates: Sequence[str],
        max_retries: int = MAX_RETRIES,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.transport = transport
        self.model_candidates = tuple(model_candidates)
        self.max_retries = max_retries
        self._sleep = sleep

    async def generate(self, prompt: str) -> OrchestrationResult:
        calls = 0

        for model in self.model_candidates:
            for attempt in range(self.max_retries):
                result = await self.transport.try_model(model, prompt)
                calls += 1

                if result.ok:
                    text = extract_text(result.body)
                    return OrchestrationResult.success(model, result.url, text, result.body, calls)

                logger.warning(
                    "Attempt %d for model %s -> status %d url %s",
                    attempt + 1, model, result.status, result.url,
                )

                decision = decide(result.status, attempt, self.max_retries)
                if decision.retry:
                    await self._sleep(decision.delay_s)
                    continue

                if decision.policy.escalate:
                    logger.error(
                        "Giving up on model %s (%s): %s",
                        model, decision.policy.kind.value, result.body,
                    )
                elif decision.policy.action is Action.ADVANCE:
                    logger.warning(
                        "Model %s not found for this API version. Trying next model.", model,
                    )
                break

        logger.error("%s (%d calls across %d models)", EXHAUSTED_REASON, calls, len(self.model_candidates))
        return OrchestrationResult.failure(EXHAUSTED_REASON, calls)
