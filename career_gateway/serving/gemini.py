"""
Gemini REST transport.

Sends one generateContent request per endpoint variant for a model and
reports the outcome as an AttemptResult instead of raising, so the
orchestrator can apply its retry policy.
"""

import logging
from dataclasses import dataclass, field

import httpx

logger = logging.getLogger(__name__)

DEFAULT_API_BASE = "https://generativelanguage.googleapis.com"
DEFAULT_API_VERSIONS = ("v1", "v1beta")


@dataclass
class AttemptResult:
    ok: bool
    status: int              # 0 when the request never got an HTTP response
    body: dict = field(default_factory=dict)
    url: str | None = None   # never includes the API key


class GeminiClient:
    """
    Calls a model under each API version namespace in order.

    Variants are tried stable-first. An HTTP response of any status ends the
    call right there, even a 404 from v1 that v1beta might have served; only
    transport-level failures (DNS, refused connection, timeout) move on to
    the next variant.
    """

    def __init__(
        self,
        api_key: str,
        api_base: str = DEFAULT_API_BASE,
        api_versions: tuple[str, ...] = DEFAULT_API_VERSIONS,
        timeout: float = 60.0,
        client: httpx.AsyncClient | None = None,
    ):
        self.api_key = api_key
        self.api_base = api_base.rstrip("/")
        self.api_versions = tuple(api_versions)
        self._client = client or httpx.AsyncClient(timeout=timeout)

    def endpoint_variants(self, model: str) -> list[str]:
        return [
            f"{self.api_base}/{version}/models/{model}:generateContent"
            for version in self.api_versions
        ]

    async def try_model(self, model: str, prompt: str) -> AttemptResult:
        payload = {"contents": [{"parts": [{"text": prompt}]}]}
        result = AttemptResult(
            ok=False,
            status=404,
            body={"message": "no endpoint succeeded for model"},
        )

        for url in self.endpoint_variants(model):
            try:
                resp = await self._client.post(
                    url,
                    params={"key": self.api_key},
                    json=payload,
                    headers={"Content-Type": "application/json"},
                )
            except httpx.RequestError as e:
                logger.warning("Transport error calling %s: %s", url, e)
                result = AttemptResult(ok=False, status=0, body={"message": str(e)}, url=url)
                continue

            try:
                data = resp.json()
            except ValueError:
                data = {}
            if not isinstance(data, dict):
                data = {"data": data}

            return AttemptResult(
                ok=resp.is_success,
                status=resp.status_code,
                body=data,
                url=url,
            )

        return result

    async def close(self):
        await self._client.aclose()
